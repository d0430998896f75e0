"""Keyboard state: layout mode, shift, subscribers and the undo buffer."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from vkeyboard.core.colors import Color, ColorLike, KeyboardColors, parse_color, validate_key_color
from vkeyboard.core.errors import KeyboardConfigurationError, KeyboardStateError
from vkeyboard.core.events import ChangeTextEvent, EventHook
from vkeyboard.core.layout import (
    ADDITIONAL_KEY_COUNT,
    DEFAULT_KEY_SIZE,
    DEFAULT_USER_ADDITIONAL_KEYS,
    MIN_KEY_SIZE,
    SHIFT_KEYS,
    STANDARD_ADDITIONAL_KEYS,
    SYMBOL_KEY_NAMES,
    KeyboardLayout,
    KeyDescriptor,
    KeyRole,
    Language,
    LayoutEngine,
)
from vkeyboard.core.targets import TextTarget

if TYPE_CHECKING:
    from vkeyboard.core.settings import KeyboardSettings

logger = logging.getLogger(__name__)


class VirtualKeyboard:
    """Toolkit-independent on-screen keyboard.

    Holds everything a renderer needs: the current key descriptors
    (:attr:`keys`), the panel size and the colours. Mutations notify the
    renderer through :attr:`layout_rebuilt` (the key set changed) and
    :attr:`keys_updated` (captions or toggle states changed on the same key
    set). Typed text is appended to every subscribed :class:`TextTarget`.

    Notifications for host code:

    * ``text_added(ChangeTextEvent)`` after every write.
    * ``text_undone(ChangeTextEvent)`` after every undo.
    * ``layout_changed(Language)`` whenever the language is assigned.
    """

    def __init__(self, additional_keys: Optional[str] = None, separate_numeric_block: bool = False) -> None:
        self._language = Language.ENGLISH
        self._letters_block = True
        self._separate_numeric_block = bool(separate_numeric_block)
        self._user_additional_block = False
        self._additional_keys = DEFAULT_USER_ADDITIONAL_KEYS
        self._key_width = DEFAULT_KEY_SIZE
        self._key_height = DEFAULT_KEY_SIZE
        self._key_color = KeyboardColors.KEY
        self._key_text_color = KeyboardColors.KEY_TEXT
        self._background_color = KeyboardColors.BACKGROUND
        self._subscribers: List[TextTarget] = []
        self._last_written = ""
        self._shift = dict.fromkeys(SHIFT_KEYS, False)
        self._layout = KeyboardLayout(keys=(), width=0, height=0)

        self.text_added = EventHook("text_added")
        self.text_undone = EventHook("text_undone")
        self.layout_changed = EventHook("layout_changed")
        self.layout_rebuilt = EventHook("layout_rebuilt")
        self.keys_updated = EventHook("keys_updated")
        self.style_changed = EventHook("style_changed")

        if additional_keys is not None:
            self.additional_keys = additional_keys
        self._rebuild()

    @classmethod
    def from_settings(cls, settings: "KeyboardSettings") -> "VirtualKeyboard":
        keyboard = cls()
        keyboard.apply_settings(settings)
        return keyboard

    def apply_settings(self, settings: "KeyboardSettings") -> None:
        """Take over every value of *settings* with a single rebuild.

        Everything is validated before the first value is stored, so a
        rejected *settings* leaves the keyboard untouched.
        """
        key_color = validate_key_color(parse_color(settings.key_color))
        key_text_color = parse_color(settings.key_text_color)
        background_color = parse_color(settings.background_color)
        additional_keys = self._additional_keys
        if settings.additional_keys is not None:
            additional_keys = self._merge_additional_keys(settings.additional_keys)
        language = Language(settings.language)

        previous_language = self._language
        self._key_color = key_color
        self._key_text_color = key_text_color
        self._background_color = background_color
        self._additional_keys = additional_keys
        self._language = language
        self._separate_numeric_block = settings.separate_numeric_block
        self._key_width = max(MIN_KEY_SIZE, int(settings.key_width))
        self._key_height = max(MIN_KEY_SIZE, int(settings.key_height))
        self._rebuild()
        self.style_changed.emit()
        if self._language is not previous_language:
            self.layout_changed.emit(self._language)

    # -- layout properties --------------------------------------------------

    @property
    def current_language(self) -> Language:
        return self._language

    @current_language.setter
    def current_language(self, value: Language) -> None:
        self._language = Language(value)
        self._rebuild()
        self.layout_changed.emit(self._language)

    def toggle_language(self) -> None:
        self.current_language = self._language.toggled()

    @property
    def separate_numeric_block(self) -> bool:
        """True puts the digits in their own row above the letters."""
        return self._separate_numeric_block

    @separate_numeric_block.setter
    def separate_numeric_block(self, value: bool) -> None:
        self._separate_numeric_block = bool(value)
        self._rebuild()

    @property
    def letters_block(self) -> bool:
        """True shows the letter rows, False the symbol and numeric block."""
        return self._letters_block

    @letters_block.setter
    def letters_block(self, value: bool) -> None:
        self._letters_block = bool(value)
        self._rebuild()

    @property
    def is_user_additional_block(self) -> bool:
        """True shows :attr:`additional_keys` on the symbol keys instead of the standard set."""
        return self._user_additional_block

    @is_user_additional_block.setter
    def is_user_additional_block(self, value: bool) -> None:
        self._user_additional_block = bool(value)
        self.keys_updated.emit()

    @property
    def additional_keys(self) -> str:
        """User symbol set, always exactly 21 characters."""
        return self._additional_keys

    @additional_keys.setter
    def additional_keys(self, value: str) -> None:
        self._additional_keys = self._merge_additional_keys(value)
        if self._user_additional_block:
            self.keys_updated.emit()

    def _merge_additional_keys(self, value: str) -> str:
        if not value or not value.strip():
            raise KeyboardConfigurationError("Additional keys must not be empty or whitespace")
        if len(value) >= ADDITIONAL_KEY_COUNT:
            return value[:ADDITIONAL_KEY_COUNT]
        # Positions the new value does not reach keep their previous symbol.
        return value + self._additional_keys[len(value):]

    @property
    def active_additional_keys(self) -> str:
        return self._additional_keys if self._user_additional_block else STANDARD_ADDITIONAL_KEYS

    # -- size ---------------------------------------------------------------

    @property
    def key_width(self) -> int:
        return self._key_width

    @key_width.setter
    def key_width(self, value: int) -> None:
        self._key_width = max(MIN_KEY_SIZE, int(value))
        self._rebuild()

    @property
    def key_height(self) -> int:
        return self._key_height

    @key_height.setter
    def key_height(self, value: int) -> None:
        self._key_height = max(MIN_KEY_SIZE, int(value))
        self._rebuild()

    @property
    def width(self) -> int:
        return self._layout.width

    @property
    def height(self) -> int:
        return self._layout.height

    # -- colours ------------------------------------------------------------

    @property
    def key_color(self) -> Color:
        return self._key_color

    @key_color.setter
    def key_color(self, value: ColorLike) -> None:
        self._key_color = validate_key_color(parse_color(value))
        self.style_changed.emit()

    @property
    def key_text_color(self) -> Color:
        return self._key_text_color

    @key_text_color.setter
    def key_text_color(self, value: ColorLike) -> None:
        self._key_text_color = parse_color(value)
        self.style_changed.emit()

    @property
    def background_color(self) -> Color:
        return self._background_color

    @background_color.setter
    def background_color(self, value: ColorLike) -> None:
        self._background_color = parse_color(value)
        self.style_changed.emit()

    @property
    def hover_color(self) -> Color:
        """Background of a key under the pointer."""
        return self._key_color.lighten()

    @property
    def checked_color(self) -> Color:
        return self._key_color.lighten()

    # -- keys ---------------------------------------------------------------

    @property
    def keys(self) -> Tuple[KeyDescriptor, ...]:
        """Current keys with shift case, toggle states and the active symbol set applied."""
        return tuple(self._present(key) for key in self._layout.keys)

    def key(self, name: str) -> KeyDescriptor:
        base = self._layout.get(name)
        if base is None:
            raise KeyboardStateError(f"No key named {name!r} in the current layout")
        return self._present(base)

    def _present(self, key: KeyDescriptor) -> KeyDescriptor:
        if key.role is KeyRole.SHIFT:
            return replace(key, checked=self._shift[key.name])
        if key.role is KeyRole.SWITCHER:
            user = self._user_additional_block
            return replace(key, checked=user, caption="←" if user else "→")
        if key.role is KeyRole.SYMBOL:
            symbol = self.active_additional_keys[SYMBOL_KEY_NAMES.index(key.name)]
            return replace(key, caption=symbol, text=symbol)
        if key.is_letter and self.is_upper:
            return replace(key, caption=key.caption.upper(), text=key.text.upper())
        return key

    def press(self, name: str) -> None:
        """Handle a click on the rendered key called *name*."""
        key = self.key(name)
        if key.types_text:
            self.write(key.text)
            self._release_shifts()
        elif key.role is KeyRole.BACKSPACE:
            self.undo()
        elif key.role is KeyRole.ENTER:
            self.write(key.text)
        elif key.role is KeyRole.LANGUAGE:
            self.toggle_language()
        elif key.role is KeyRole.MODE:
            self.letters_block = not self._letters_block
        elif key.role is KeyRole.SHIFT:
            self.toggle_shift(name)
        elif key.role is KeyRole.SWITCHER:
            self.is_user_additional_block = not self._user_additional_block

    # -- shift --------------------------------------------------------------

    @property
    def is_upper(self) -> bool:
        return any(self._shift.values())

    def is_shift_active(self, name: str) -> bool:
        self._require_shift(name)
        return self._shift[name]

    def set_shift(self, name: str, active: bool) -> None:
        """Press or release one shift key; either held means upper case."""
        self._require_shift(name)
        was_upper = self.is_upper
        self._shift[name] = bool(active)
        if was_upper != self.is_upper:
            logger.debug("Switched to %s case", "upper" if self.is_upper else "lower")
        self.keys_updated.emit()

    def toggle_shift(self, name: str) -> None:
        self._require_shift(name)
        self.set_shift(name, not self._shift[name])

    def _require_shift(self, name: str) -> None:
        if name not in SHIFT_KEYS:
            raise KeyboardStateError(f"{name!r} is not a shift key")
        if name not in self._layout:
            raise KeyboardStateError(f"{name} is not part of the current layout")

    def _release_shifts(self) -> None:
        if self._letters_block and self.is_upper:
            self._shift = dict.fromkeys(SHIFT_KEYS, False)
            self.keys_updated.emit()

    # -- subscribers --------------------------------------------------------

    @property
    def subscribers(self) -> List[TextTarget]:
        return self._subscribers

    @subscribers.setter
    def subscribers(self, value: Iterable[TextTarget]) -> None:
        self._subscribers = list(value)

    def add_subscriber(self, target: TextTarget) -> None:
        self._subscribers.append(target)

    def remove_subscriber(self, name: str) -> None:
        """Drop the first subscriber called *name*; unknown names are ignored."""
        if not name or not name.strip():
            raise ValueError("Subscriber name must not be empty or whitespace")
        for index, target in enumerate(self._subscribers):
            if target.name == name:
                del self._subscribers[index]
                break

    # -- text routing -------------------------------------------------------

    @property
    def last_written(self) -> str:
        return self._last_written

    def write(self, text: str) -> None:
        """Append *text* to every subscriber and remember it for :meth:`undo`."""
        if not text:
            raise ValueError("Text to write must not be empty or None")
        for target in self._subscribers:
            target.set_text(target.get_text() + text)
        self._last_written = text
        logger.debug("Wrote %r to %d subscriber(s)", text, len(self._subscribers))
        self.text_added.emit(ChangeTextEvent(text))

    def undo(self, text: Optional[str] = None) -> None:
        """Strip *text* (default: the last write) from the end of every subscriber."""
        if text is None:
            if not self._last_written:
                logger.warning("Nothing to undo")
                return
            text = self._last_written
        elif not text:
            raise ValueError("Text to undo must not be empty")

        for target in self._subscribers:
            current = target.get_text()
            if current.endswith(text):
                target.set_text(current[: len(current) - len(text)])
        logger.debug("Undid %r on %d subscriber(s)", text, len(self._subscribers))
        self.text_undone.emit(ChangeTextEvent(text))
        self._last_written = ""

    def contains(self, value: str) -> List[str]:
        """Names of keys, then subscribers, whose text contains *value*."""
        if not value:
            raise ValueError("Search text must not be empty or None")
        names = [key.name for key in self.keys if value in key.caption]
        names.extend(target.name for target in self._subscribers if value in target.get_text())
        return names

    # -- internals ----------------------------------------------------------

    def _rebuild(self) -> None:
        engine = LayoutEngine(self._key_width, self._key_height)
        self._layout = engine.build(
            self._language,
            letters_block=self._letters_block,
            separate_numeric_block=self._separate_numeric_block,
        )
        self._shift = dict.fromkeys(SHIFT_KEYS, False)
        self.layout_rebuilt.emit()
