"""Shared fixtures: a headless QApplication and a keyboard with two buffers."""

from __future__ import annotations

import os

# Qt must not need a display server in CI.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from vkeyboard.core.keyboard import VirtualKeyboard
from vkeyboard.core.targets import TextBuffer


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture()
def keyboard() -> VirtualKeyboard:
    return VirtualKeyboard()


@pytest.fixture()
def buffers(keyboard: VirtualKeyboard) -> tuple[TextBuffer, TextBuffer]:
    """Two subscribers already registered on ``keyboard``."""
    first = TextBuffer("first")
    second = TextBuffer("second", "x")
    keyboard.add_subscriber(first)
    keyboard.add_subscriber(second)
    return first, second
