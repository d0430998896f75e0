"""Tests for text targets – the in-memory buffer and the Qt widget adapters."""

from __future__ import annotations

import pytest
from PySide6.QtWidgets import QLabel, QLineEdit, QPlainTextEdit, QPushButton, QTextEdit

from vkeyboard.core.targets import TextBuffer, TextTarget
from vkeyboard.ui.targets import LabelTarget, LineEditTarget, TextEditTarget, adapt


def _named(widget, name: str):
    widget.setObjectName(name)
    return widget


# ---------------------------------------------------------------------------
# TextBuffer
# ---------------------------------------------------------------------------

class TestTextBuffer:
    def test_initial_text(self):
        assert TextBuffer("b", "hi").get_text() == "hi"

    def test_set_text(self):
        buf = TextBuffer("b")
        buf.set_text("x")
        assert buf.get_text() == "x"

    def test_name(self):
        assert TextBuffer("notes").name == "notes"

    def test_satisfies_protocol(self):
        assert isinstance(TextBuffer("b"), TextTarget)


# ---------------------------------------------------------------------------
# Qt adapters
# ---------------------------------------------------------------------------

class TestAdapters:
    def test_line_edit(self, qapp):
        edit = _named(QLineEdit(), "edit")
        target = adapt(edit)
        assert isinstance(target, LineEditTarget)
        target.set_text("abc")
        assert edit.text() == "abc"
        assert edit.cursorPosition() == 3
        assert target.get_text() == "abc"
        assert target.name == "edit"

    def test_label(self, qapp):
        label = _named(QLabel("x"), "label")
        target = adapt(label)
        assert isinstance(target, LabelTarget)
        assert target.get_text() == "x"
        target.set_text("xy")
        assert label.text() == "xy"

    def test_text_edit(self, qapp):
        edit = _named(QTextEdit(), "rich")
        target = adapt(edit)
        assert isinstance(target, TextEditTarget)
        target.set_text("line\nnext")
        assert edit.toPlainText() == "line\nnext"
        assert target.get_text() == "line\nnext"

    def test_plain_text_edit(self, qapp):
        edit = QPlainTextEdit()
        target = adapt(edit)
        assert isinstance(target, TextEditTarget)
        target.set_text("a")
        assert edit.toPlainText() == "a"

    def test_adapter_exposes_widget(self, qapp):
        edit = QLineEdit()
        assert adapt(edit).widget is edit

    def test_text_target_passes_through(self):
        buf = TextBuffer("b")
        assert adapt(buf) is buf

    def test_unsupported_widget(self, qapp):
        with pytest.raises(TypeError):
            adapt(QPushButton("no"))

    def test_unsupported_object(self):
        with pytest.raises(TypeError):
            adapt(object())
