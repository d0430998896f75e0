"""Text adapters for the Qt widgets a keyboard can type into."""

from __future__ import annotations

from typing import Callable, Dict, Type, Union

from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import QLabel, QLineEdit, QPlainTextEdit, QTextEdit, QWidget

from vkeyboard.core.targets import TextTarget


class _WidgetTarget:
    def __init__(self, widget: QWidget) -> None:
        self._widget = widget

    @property
    def widget(self) -> QWidget:
        return self._widget

    @property
    def name(self) -> str:
        return self._widget.objectName()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class LineEditTarget(_WidgetTarget):
    """Appends at the end of a ``QLineEdit`` and keeps the cursor there."""

    def get_text(self) -> str:
        return self._widget.text()

    def set_text(self, value: str) -> None:
        self._widget.setText(value)
        self._widget.setCursorPosition(len(value))


class LabelTarget(_WidgetTarget):
    def get_text(self) -> str:
        return self._widget.text()

    def set_text(self, value: str) -> None:
        self._widget.setText(value)


class TextEditTarget(_WidgetTarget):
    """Plain-text view of a ``QTextEdit`` or ``QPlainTextEdit``."""

    def get_text(self) -> str:
        return self._widget.toPlainText()

    def set_text(self, value: str) -> None:
        self._widget.setPlainText(value)
        self._widget.moveCursor(QTextCursor.MoveOperation.End)


_ADAPTERS: Dict[Type[QWidget], Callable[[QWidget], TextTarget]] = {
    QLineEdit: LineEditTarget,
    QLabel: LabelTarget,
    QTextEdit: TextEditTarget,
    QPlainTextEdit: TextEditTarget,
}


def adapt(widget: Union[QWidget, TextTarget]) -> TextTarget:
    """Wrap *widget* in the adapter for its kind; TextTargets pass through."""
    if not isinstance(widget, QWidget) and isinstance(widget, TextTarget):
        return widget
    for widget_type, factory in _ADAPTERS.items():
        if isinstance(widget, widget_type):
            return factory(widget)
    raise TypeError(f"Cannot type into {type(widget).__name__}; expected QLineEdit, QLabel or a text edit")
