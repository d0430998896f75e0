"""The text capability subscribers must offer, and an in-memory implementation."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TextTarget(Protocol):
    """Something with a name and a gettable/settable text."""

    @property
    def name(self) -> str: ...

    def get_text(self) -> str: ...

    def set_text(self, value: str) -> None: ...


class TextBuffer:
    """Plain string holder; handy for headless use and tests."""

    def __init__(self, name: str, text: str = "") -> None:
        self._name = name
        self._text = text

    @property
    def name(self) -> str:
        return self._name

    def get_text(self) -> str:
        return self._text

    def set_text(self, value: str) -> None:
        self._text = value

    def __repr__(self) -> str:
        return f"TextBuffer(name={self._name!r}, text={self._text!r})"
