"""Key geometry: turns keyboard parameters into positioned key descriptors."""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

KEY_GAP = 4
DEFAULT_KEY_SIZE = 54
MIN_KEY_SIZE = 38

ADDITIONAL_KEY_COUNT = 21
STANDARD_ADDITIONAL_ROWS = ('"!@#$%&', "'()-_=+", "\\;:~*/|")
STANDARD_ADDITIONAL_KEYS = "".join(STANDARD_ADDITIONAL_ROWS)
DEFAULT_USER_ADDITIONAL_KEYS = "`~!@#$%^&*()-_=+/?><."
# Symbol keys are named by position so the same key can show either set.
SYMBOL_KEY_NAMES = string.ascii_lowercase[:ADDITIONAL_KEY_COUNT]

LEFT_SHIFT = "LShift"
RIGHT_SHIFT = "RShift"
SHIFT_KEYS = (LEFT_SHIFT, RIGHT_SHIFT)
BACKSPACE_KEY = "backspace"
ENTER_KEY = "enter"
SPACE_KEY = "space"
LANGUAGE_KEY = "languageKey"
MODE_KEY = "additional"
SWITCHER_KEY = "switcherCheckBox"

KEY_FONT_SIZE = 14


class Language(Enum):
    ENGLISH = "english"
    RUSSIAN = "russian"

    @property
    def indicator(self) -> str:
        """Caption of the language key."""
        return "ENG" if self is Language.ENGLISH else "РУС"

    def toggled(self) -> "Language":
        return Language.RUSSIAN if self is Language.ENGLISH else Language.ENGLISH


class KeyRole(Enum):
    CHARACTER = "character"
    SYMBOL = "symbol"
    BACKSPACE = "backspace"
    ENTER = "enter"
    SHIFT = "shift"
    LANGUAGE = "language"
    MODE = "mode"
    SWITCHER = "switcher"


LETTER_ROWS: Dict[Language, Tuple[str, str, str]] = {
    Language.ENGLISH: ("qwertyuiop", "asdfghjkl", "zxcvbnm"),
    Language.RUSSIAN: ("йцукенгшщзхъ", "фывапролджэ", "ячсмитьбюё"),
}

TOP_NUMBER_ROWS: Dict[Language, str] = {
    Language.ENGLISH: "1234567890",
    Language.RUSSIAN: "1234567890-_",
}

RIGHT_SHIFT_CAPTIONS: Dict[Language, str] = {
    Language.ENGLISH: "Shift",
    Language.RUSSIAN: "↑",
}


@dataclass(frozen=True)
class KeyDescriptor:
    """One key of the rendered panel.

    ``text`` is what the key types (empty for control keys); ``caption`` is
    what the key shows.
    """

    name: str
    caption: str
    x: int
    y: int
    width: int
    height: int
    role: KeyRole = KeyRole.CHARACTER
    text: str = ""
    font_size: int = KEY_FONT_SIZE
    checked: bool = False

    @property
    def checkable(self) -> bool:
        return self.role in (KeyRole.SHIFT, KeyRole.SWITCHER)

    @property
    def types_text(self) -> bool:
        return self.role in (KeyRole.CHARACTER, KeyRole.SYMBOL)

    @property
    def is_letter(self) -> bool:
        """Single alphabetic character key, the ones shift changes."""
        return self.types_text and len(self.caption) == 1 and self.caption.isalpha()


@dataclass(frozen=True)
class KeyboardLayout:
    """Keys of one rebuild plus the panel size they were laid out for."""

    keys: Tuple[KeyDescriptor, ...]
    width: int
    height: int

    def get(self, name: str) -> Optional[KeyDescriptor]:
        for key in self.keys:
            if key.name == name:
                return key
        return None

    def names(self) -> List[str]:
        return [key.name for key in self.keys]

    def __contains__(self, name: object) -> bool:
        return any(key.name == name for key in self.keys)

    def __iter__(self) -> Iterator[KeyDescriptor]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)


class LayoutEngine:
    """Computes key positions for a given key size.

    Letter rows are laid out left to right from the top-left corner; keys that
    close a row (enter, right shift, language) stretch to the right edge. The
    additional block places the numeric pad against the right edge and the
    symbol keys against the left one.
    """

    def __init__(self, key_width: int = DEFAULT_KEY_SIZE, key_height: int = DEFAULT_KEY_SIZE, gap: int = KEY_GAP) -> None:
        self.key_width = key_width
        self.key_height = key_height
        self.gap = gap

    @property
    def step_x(self) -> int:
        return self.key_width + self.gap

    @property
    def step_y(self) -> int:
        return self.key_height + self.gap

    def panel_size(self, language: Language, separate_numeric_block: bool) -> Tuple[int, int]:
        """Panel size in pixels; the widest letter row plus backspace sets the width."""
        columns = len(LETTER_ROWS[language][0]) + 2
        rows = 5 if separate_numeric_block else 4
        width = columns * self.key_width + (columns + 1) * self.gap
        height = rows * self.key_height + (rows + 1) * self.gap
        return width, height

    def build(
        self,
        language: Language,
        letters_block: bool = True,
        separate_numeric_block: bool = False,
    ) -> KeyboardLayout:
        width, height = self.panel_size(language, separate_numeric_block)
        keys: List[KeyDescriptor] = []
        if letters_block:
            self._letters_block(keys, language, separate_numeric_block, width)
        else:
            self._additional_block(keys, separate_numeric_block, width)
        logger.debug(
            "Laid out %d keys (%s, %s) in %dx%d",
            len(keys),
            language.value,
            "letters" if letters_block else "additional",
            width,
            height,
        )
        return KeyboardLayout(keys=tuple(keys), width=width, height=height)

    # -- letters ------------------------------------------------------------

    def _letters_block(self, keys: List[KeyDescriptor], language: Language, separate_numeric_block: bool, width: int) -> None:
        first, second, third = LETTER_ROWS[language]
        x = y = self.gap

        if separate_numeric_block:
            self._char_row(keys, TOP_NUMBER_ROWS[language], x, y)
            y += self.step_y

        x = self._char_row(keys, first, x, y)
        keys.append(self._control(BACKSPACE_KEY, "BackSpace", KeyRole.BACKSPACE, x, y, 2 * self.key_width + self.gap, font_size=11))

        y += self.step_y
        x = self._char_row(keys, second, self.gap + self.key_width // 2, y)
        keys.append(self._control(ENTER_KEY, "Enter", KeyRole.ENTER, x, y, width - x - self.gap, text="\n"))

        y += self.step_y
        x = self.gap
        keys.append(self._control(LEFT_SHIFT, "↑", KeyRole.SHIFT, x, y, self.key_width))
        x = self._char_row(keys, third + ",.", x + self.step_x, y)
        keys.append(self._control(RIGHT_SHIFT, RIGHT_SHIFT_CAPTIONS[language], KeyRole.SHIFT, x, y, width - x - self.gap, font_size=13))

        y += self.step_y
        x = self.gap
        keys.append(self._control(MODE_KEY, "&123", KeyRole.MODE, x, y, self.key_width, font_size=10))
        x = self._char_row(keys, "?!", x + self.step_x, y)
        # Space takes whatever the four keys on its right leave over.
        space_width = width - (self.step_x * 4 + self.gap) - x
        keys.append(self._char(SPACE_KEY, " ", x, y, space_width))
        x = self._char_row(keys, "()", x + space_width + self.gap, y)
        keys.append(self._control(LANGUAGE_KEY, language.indicator, KeyRole.LANGUAGE, x, y, width - x - self.gap, font_size=12))

    # -- additional ---------------------------------------------------------

    def _additional_block(self, keys: List[KeyDescriptor], separate_numeric_block: bool, width: int) -> None:
        top = self.gap
        if separate_numeric_block:
            top += self.step_y

        self._numeric_pad(keys, top, width)

        names = iter(SYMBOL_KEY_NAMES)
        for row_index, row in enumerate(STANDARD_ADDITIONAL_ROWS):
            x = self.gap
            y = top + row_index * self.step_y
            if row_index == len(STANDARD_ADDITIONAL_ROWS) - 1:
                keys.append(self._control(SWITCHER_KEY, "→", KeyRole.SWITCHER, x, y, self.key_width))
                x += self.step_x
            for symbol in row:
                keys.append(self._char(next(names), symbol, x, y, role=KeyRole.SYMBOL))
                x += self.step_x

        y = top + 3 * self.step_y
        keys.append(self._control(MODE_KEY, "ABC", KeyRole.MODE, self.gap, y, self.key_width, font_size=10))
        keys.append(self._char(SPACE_KEY, " ", self.gap + self.step_x, y, self.step_x * 6 - self.gap))

    def _numeric_pad(self, keys: List[KeyDescriptor], top: int, width: int) -> None:
        right_x = width - self.gap - self.key_width
        left_x = right_x - 2 * self.step_x
        for row_index, digits in enumerate(("789", "456", "123")):
            y = top + row_index * self.step_y
            for column, digit in enumerate(digits):
                keys.append(self._char(digit, digit, left_x + column * self.step_x, y))
        zero_width = 3 * self.key_width + 2 * self.gap
        keys.append(self._char("0", "0", left_x, top + 3 * self.step_y, zero_width))

    # -- helpers ------------------------------------------------------------

    def _char_row(self, keys: List[KeyDescriptor], chars: str, x: int, y: int) -> int:
        """Append one key per character; returns the x after the last key."""
        for ch in chars:
            keys.append(self._char(ch, ch, x, y))
            x += self.step_x
        return x

    def _char(
        self,
        name: str,
        text: str,
        x: int,
        y: int,
        width: Optional[int] = None,
        role: KeyRole = KeyRole.CHARACTER,
    ) -> KeyDescriptor:
        return KeyDescriptor(
            name=name,
            caption=text,
            text=text,
            x=x,
            y=y,
            width=self.key_width if width is None else width,
            height=self.key_height,
            role=role,
        )

    def _control(
        self,
        name: str,
        caption: str,
        role: KeyRole,
        x: int,
        y: int,
        width: int,
        text: str = "",
        font_size: int = KEY_FONT_SIZE,
    ) -> KeyDescriptor:
        return KeyDescriptor(
            name=name,
            caption=caption,
            text=text,
            x=x,
            y=y,
            width=width,
            height=self.key_height,
            role=role,
            font_size=font_size,
        )
