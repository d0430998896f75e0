"""Qt rendering of a :class:`VirtualKeyboard`: one flat button per key descriptor."""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from PySide6.QtCore import QSize, Qt, Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QPushButton, QWidget

from vkeyboard.core.colors import Color, KeyboardColors
from vkeyboard.core.events import ChangeTextEvent
from vkeyboard.core.keyboard import VirtualKeyboard
from vkeyboard.core.layout import KeyDescriptor, Language
from vkeyboard.core.targets import TextTarget
from vkeyboard.ui.targets import adapt

KEY_FONT_FAMILY = "Tahoma"


def escape_mnemonic(text: str) -> str:
    """Double ampersands so Qt shows them instead of underlining a shortcut."""
    return text.replace("&", "&&")


class KeyButton(QPushButton):
    """A key of the panel. Brightens while hovered or, for toggles, while checked."""

    def __init__(self, key: KeyDescriptor, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._key = key
        self._hovered = False
        self._base_color = KeyboardColors.KEY
        self._highlight_color = KeyboardColors.KEY.lighten()
        self._text_color = KeyboardColors.KEY_TEXT

        self.setObjectName(key.name)
        self.setFlat(True)
        self.setFocusPolicy(Qt.NoFocus)
        self.setAttribute(Qt.WidgetAttribute.WA_Hover, True)
        self.setCursor(Qt.PointingHandCursor)
        self.setCheckable(key.checkable)
        self.setGeometry(key.x, key.y, key.width, key.height)

        font = QFont(KEY_FONT_FAMILY)
        font.setPointSize(key.font_size)
        self.setFont(font)

        self.update_key(key)

    @property
    def key(self) -> KeyDescriptor:
        return self._key

    @property
    def hovered(self) -> bool:
        return self._hovered

    def update_key(self, key: KeyDescriptor) -> None:
        """Show the caption and toggle state of *key*; geometry stays as built."""
        self._key = key
        self.setText(escape_mnemonic(key.caption))
        if key.checkable:
            was_blocked = self.blockSignals(True)
            self.setChecked(key.checked)
            self.blockSignals(was_blocked)
        self._apply_style()

    def set_colors(self, base: Color, highlight: Color, text: Color) -> None:
        self._base_color = base
        self._highlight_color = highlight
        self._text_color = text
        self._apply_style()

    def set_hovered(self, hovered: bool) -> None:
        self._hovered = hovered
        self._apply_style()

    def background_color(self) -> Color:
        if self._hovered or self._key.checked:
            return self._highlight_color
        return self._base_color

    def _apply_style(self) -> None:
        self.setStyleSheet(
            f"""
            QPushButton {{
                background: {self.background_color().to_css()};
                color: {self._text_color.to_css()};
                border: none;
                border-radius: 0px;
                padding: 0px;
            }}
            """
        )

    def enterEvent(self, event) -> None:
        self.set_hovered(True)
        super().enterEvent(event)

    def leaveEvent(self, event) -> None:
        self.set_hovered(False)
        super().leaveEvent(event)


class VirtualKeyboardWidget(QWidget):
    """Panel that renders a keyboard and types into subscribed Qt widgets.

    The widget keeps no state of its own: the key set, captions, size and
    colours all come from :attr:`keyboard`, and clicks are handed back to it.
    Core notifications are re-emitted as Qt signals.
    """

    text_added = Signal(str)
    text_undone = Signal(str)
    layout_changed = Signal()

    def __init__(self, keyboard: Optional[VirtualKeyboard] = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._keyboard = keyboard if keyboard is not None else VirtualKeyboard()
        self._buttons: Dict[str, KeyButton] = {}

        self.setObjectName("virtualKeyboard")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

        self._keyboard.layout_rebuilt.connect(self._rebuild_keys)
        self._keyboard.keys_updated.connect(self._refresh_keys)
        self._keyboard.style_changed.connect(self._apply_style)
        self._keyboard.text_added.connect(self._on_text_added)
        self._keyboard.text_undone.connect(self._on_text_undone)
        self._keyboard.layout_changed.connect(self._on_layout_changed)

        self._rebuild_keys()
        self._apply_style()

    @property
    def keyboard(self) -> VirtualKeyboard:
        return self._keyboard

    def button(self, name: str) -> Optional[KeyButton]:
        return self._buttons.get(name)

    def buttons(self) -> List[KeyButton]:
        return list(self._buttons.values())

    def subscribe(self, widget: Union[QWidget, TextTarget]) -> TextTarget:
        """Start typing into *widget*; returns the adapter that was registered."""
        target = adapt(widget)
        self._keyboard.add_subscriber(target)
        return target

    def unsubscribe(self, name: str) -> None:
        self._keyboard.remove_subscriber(name)

    def detach(self) -> None:
        """Stop listening to the keyboard, e.g. before the widget is destroyed."""
        self._keyboard.layout_rebuilt.disconnect(self._rebuild_keys)
        self._keyboard.keys_updated.disconnect(self._refresh_keys)
        self._keyboard.style_changed.disconnect(self._apply_style)
        self._keyboard.text_added.disconnect(self._on_text_added)
        self._keyboard.text_undone.disconnect(self._on_text_undone)
        self._keyboard.layout_changed.disconnect(self._on_layout_changed)

    def sizeHint(self) -> QSize:
        return QSize(self._keyboard.width, self._keyboard.height)

    def _rebuild_keys(self) -> None:
        for button in self._buttons.values():
            button.hide()
            button.deleteLater()
        self._buttons = {}

        keyboard = self._keyboard
        for key in keyboard.keys:
            button = KeyButton(key, self)
            button.set_colors(keyboard.key_color, keyboard.hover_color, keyboard.key_text_color)
            button.clicked.connect(lambda _checked=False, name=key.name: self._keyboard.press(name))
            button.show()
            self._buttons[key.name] = button

        self.setFixedSize(keyboard.width, keyboard.height)

    def _refresh_keys(self) -> None:
        for key in self._keyboard.keys:
            button = self._buttons.get(key.name)
            if button is not None:
                button.update_key(key)

    def _apply_style(self) -> None:
        keyboard = self._keyboard
        self.setStyleSheet(f"QWidget#virtualKeyboard {{ background: {keyboard.background_color.to_css()}; }}")
        for button in self._buttons.values():
            button.set_colors(keyboard.key_color, keyboard.hover_color, keyboard.key_text_color)

    def _on_text_added(self, event: ChangeTextEvent) -> None:
        self.text_added.emit(event.text)

    def _on_text_undone(self, event: ChangeTextEvent) -> None:
        self.text_undone.emit(event.text)

    def _on_layout_changed(self, _language: Language) -> None:
        self.layout_changed.emit()
