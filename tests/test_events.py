from __future__ import annotations

from typing import List

import pytest

from undo_history.history import EventSource, HistoryEvent, HistoryEventObject


def make_event(kind: HistoryEvent = HistoryEvent.CLEAR) -> HistoryEventObject:
    return HistoryEventObject(kind)


def test_emit_dispatches_in_registration_order() -> None:
    source = EventSource()
    calls: List[str] = []
    source.subscribe(lambda event: calls.append("first"))
    source.subscribe(lambda event: calls.append("second"))

    source.emit(make_event())

    assert calls == ["first", "second"]


def test_kind_filter_limits_delivery() -> None:
    source = EventSource()
    seen: List[HistoryEvent] = []
    source.subscribe(lambda event: seen.append(event.kind), HistoryEvent.UNDO)

    source.emit(make_event(HistoryEvent.ADD))
    source.emit(make_event(HistoryEvent.UNDO))

    assert seen == [HistoryEvent.UNDO]
    assert source.listener_count(HistoryEvent.UNDO) == 1
    assert source.listener_count(HistoryEvent.ADD) == 0


def test_unsubscribe_during_dispatch() -> None:
    source = EventSource()
    calls: List[str] = []

    def once(event: HistoryEventObject) -> None:
        calls.append("once")
        source.unsubscribe(once)

    source.subscribe(once)
    source.subscribe(lambda event: calls.append("always"))

    source.emit(make_event())
    source.emit(make_event())

    assert calls == ["once", "always", "always"]


def test_unsubscribe_single_kind() -> None:
    source = EventSource()
    seen: List[HistoryEvent] = []

    def listener(event: HistoryEventObject) -> None:
        seen.append(event.kind)

    source.subscribe(listener, HistoryEvent.UNDO)
    source.subscribe(listener, HistoryEvent.REDO)

    assert source.unsubscribe(listener, HistoryEvent.UNDO) is True
    source.emit(make_event(HistoryEvent.UNDO))
    source.emit(make_event(HistoryEvent.REDO))

    assert seen == [HistoryEvent.REDO]
    assert source.unsubscribe(lambda event: None) is False


def test_disabled_source_drops_events() -> None:
    source = EventSource()
    calls: List[HistoryEventObject] = []
    source.subscribe(calls.append)

    source.set_events_enabled(False)
    source.emit(make_event())

    assert calls == []
    assert not source.is_events_enabled()


def test_subscribe_rejects_non_callables() -> None:
    with pytest.raises(TypeError):
        EventSource().subscribe("nope")  # type: ignore[arg-type]


def test_unsubscribe_bound_method() -> None:
    class Panel:
        def __init__(self) -> None:
            self.seen: List[HistoryEvent] = []

        def on_event(self, event: HistoryEventObject) -> None:
            self.seen.append(event.kind)

    source = EventSource()
    panel = Panel()
    source.subscribe(panel.on_event)

    assert source.unsubscribe(panel.on_event) is True
    source.emit(make_event())

    assert panel.seen == []
    assert source.listener_count() == 0
