"""Publish/subscribe channel used by the history manager."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .edit import Edit


class HistoryEvent(Enum):
    CLEAR = "clear"
    ADD = "add"
    UNDO = "undo"
    REDO = "redo"


@dataclass(frozen=True, slots=True)
class HistoryEventObject:
    """Payload delivered to subscribers."""

    kind: HistoryEvent
    edit: Optional["Edit"] = None
    affected: tuple[object, ...] = ()


Listener = Callable[[HistoryEventObject], None]


class EventSource:
    """Explicit observer list with synchronous, in-order dispatch.

    Callbacks registered with ``kind=None`` receive every event. Dispatch walks
    a snapshot of the subscriber list, so a callback may unsubscribe itself.
    """

    def __init__(self) -> None:
        self._subscribers: List[tuple[Optional[HistoryEvent], Listener]] = []
        self._enabled = True

    def subscribe(
        self, callback: Listener, kind: Optional[HistoryEvent] = None
    ) -> Listener:
        if not callable(callback):
            raise TypeError("callback must be callable")
        self._subscribers.append((kind, callback))
        return callback

    def unsubscribe(
        self, callback: Listener, kind: Optional[HistoryEvent] = None
    ) -> bool:
        """Remove ``callback`` (for ``kind`` only, when given)."""

        before = len(self._subscribers)
        self._subscribers = [
            (registered_kind, registered)
            for registered_kind, registered in self._subscribers
            if registered != callback
            or (kind is not None and registered_kind is not kind)
        ]
        return len(self._subscribers) != before

    def set_events_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def is_events_enabled(self) -> bool:
        return self._enabled

    def listener_count(self, kind: Optional[HistoryEvent] = None) -> int:
        if kind is None:
            return len(self._subscribers)
        return sum(
            1
            for registered_kind, _ in self._subscribers
            if registered_kind is None or registered_kind is kind
        )

    def emit(self, event: HistoryEventObject) -> None:
        if not self._enabled:
            return
        for kind, callback in list(self._subscribers):
            if kind is None or kind is event.kind:
                callback(event)


__all__ = [
    "EventSource",
    "HistoryEvent",
    "HistoryEventObject",
    "Listener",
]
