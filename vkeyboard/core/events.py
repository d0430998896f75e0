"""Synchronous observer lists and their payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List


@dataclass(frozen=True)
class ChangeTextEvent:
    """Payload of the text-added and text-undone notifications."""

    text: str


class EventHook:
    """Ordered list of handlers called in the caller's thread.

    Mirrors the ``connect``/``disconnect``/``emit`` surface of a Qt signal so
    the widget adapter can bridge one to the other directly. Exceptions raised
    by a handler propagate to whoever emitted the event.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._handlers: List[Callable[..., Any]] = []

    @property
    def name(self) -> str:
        return self._name

    def connect(self, handler: Callable[..., Any]) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def disconnect(self, handler: Callable[..., Any]) -> None:
        """Remove *handler*; unknown handlers are ignored."""
        if handler in self._handlers:
            self._handlers.remove(handler)

    def emit(self, *args: Any) -> None:
        for handler in list(self._handlers):
            handler(*args)

    def __len__(self) -> int:
        return len(self._handlers)
