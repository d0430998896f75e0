"""Tests for vkeyboard.core.events – observer lists."""

from __future__ import annotations

import pytest

from vkeyboard.core.events import ChangeTextEvent, EventHook


class TestChangeTextEvent:
    def test_carries_text(self):
        assert ChangeTextEvent("abc").text == "abc"

    def test_equality(self):
        assert ChangeTextEvent("a") == ChangeTextEvent("a")

    def test_frozen(self):
        event = ChangeTextEvent("a")
        with pytest.raises(AttributeError):
            event.text = "b"


class TestEventHook:
    def test_name(self):
        assert EventHook("text_added").name == "text_added"

    def test_emit_calls_handlers_in_order(self):
        hook = EventHook("h")
        calls = []
        hook.connect(lambda v: calls.append(("first", v)))
        hook.connect(lambda v: calls.append(("second", v)))
        hook.emit(1)
        assert calls == [("first", 1), ("second", 1)]

    def test_connect_twice_registers_once(self):
        hook = EventHook("h")
        calls = []

        def handler():
            calls.append(1)

        hook.connect(handler)
        hook.connect(handler)
        hook.emit()
        assert calls == [1]
        assert len(hook) == 1

    def test_disconnect(self):
        hook = EventHook("h")
        calls = []

        def handler():
            calls.append(1)

        hook.connect(handler)
        hook.disconnect(handler)
        hook.emit()
        assert calls == []

    def test_disconnect_unknown_is_ignored(self):
        hook = EventHook("h")
        hook.disconnect(lambda: None)
        assert len(hook) == 0

    def test_handler_may_disconnect_itself(self):
        hook = EventHook("h")
        calls = []

        def once():
            calls.append("once")
            hook.disconnect(once)

        hook.connect(once)
        hook.connect(lambda: calls.append("always"))
        hook.emit()
        hook.emit()
        assert calls == ["once", "always", "always"]

    def test_handler_exception_propagates(self):
        hook = EventHook("h")

        def boom():
            raise RuntimeError("boom")

        hook.connect(boom)
        with pytest.raises(RuntimeError):
            hook.emit()
