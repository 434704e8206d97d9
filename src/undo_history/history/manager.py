"""Bounded linear undo/redo history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

from undo_history.runtime import config, telemetry

from .changes import ChangeKind
from .edit import Edit
from .events import EventSource, HistoryEvent, HistoryEventObject, Listener


@dataclass(slots=True)
class HistoryStats:
    """Lightweight snapshot describing history state."""

    size: int
    length: int
    index_of_next_add: int
    unmodified_position: int
    has_irreversible_edit: bool
    enabled: bool


class HistoryReentrancyError(RuntimeError):
    """Raised when a listener tries to mutate the history it is observing."""

    def __init__(self, operation: str, event: HistoryEvent) -> None:
        super().__init__(
            f"'{operation}' called while dispatching '{event.value}'; "
            "history listeners must not mutate the history"
        )
        self.operation = operation
        self.event = event


class HistoryManager:
    """Owns the list of recorded edits and the cursor splitting it.

    Edits below ``index_of_next_add`` are applied, edits at or above it have
    been undone and can be redone. Insignificant edits are folded into the
    next significant edit in the walk direction, so one ``undo``/``redo`` call
    is one user-visible step.

    Recording after an undo discards the redo tail and disposes those edits.
    Evicting the oldest edit to stay within ``size`` does not dispose it.
    ``clear`` forgets edits without disposing them unless asked to.
    """

    def __init__(
        self,
        size: int = config.DEFAULT_CAPACITY,
        *,
        events: Optional[EventSource] = None,
        logger_name: str | None = None,
    ) -> None:
        if size < 0:
            raise ValueError(f"size must be >= 0, got {size}")
        self._size = size
        self._history: List[Edit] = []
        self._index_of_next_add = 0
        self._unmodified_position = 0
        self._has_irreversible_edit = False
        self._enabled = True
        self._dispatching: Optional[HistoryEvent] = None
        self._logger_name = logger_name
        self.events = events or EventSource()
        self.clear()
        self.reset_unmodified_state()

    @classmethod
    def from_env(
        cls,
        *,
        events: Optional[EventSource] = None,
        logger_name: str | None = None,
    ) -> "HistoryManager":
        """Build a manager sized by ``UNDO_HISTORY_CAPACITY``."""

        return cls(config.history_capacity(), events=events, logger_name=logger_name)

    # -- queries ---------------------------------------------------------

    @property
    def size(self) -> int:
        return self._size

    @property
    def index_of_next_add(self) -> int:
        return self._index_of_next_add

    @property
    def unmodified_position(self) -> int:
        return self._unmodified_position

    @property
    def has_irreversible_edit(self) -> bool:
        return self._has_irreversible_edit

    @property
    def edits(self) -> tuple[Edit, ...]:
        return tuple(self._history)

    def __len__(self) -> int:
        return len(self._history)

    def __iter__(self) -> Iterator[Edit]:
        return iter(tuple(self._history))

    def is_empty(self) -> bool:
        return not self._history

    def is_enabled(self) -> bool:
        return self._enabled

    def can_undo(self) -> bool:
        return self._index_of_next_add > 0

    def can_redo(self) -> bool:
        return self._index_of_next_add < len(self._history)

    def is_unmodified_state(self) -> bool:
        return (
            not self._has_irreversible_edit
            and self._index_of_next_add == self._unmodified_position
        )

    def peek_undo(self) -> Optional[Edit]:
        """Edit the next ``undo`` would stop on, if it reports one."""

        for index in range(self._index_of_next_add - 1, -1, -1):
            if self._history[index].is_significant():
                return self._history[index]
        return None

    def peek_redo(self) -> Optional[Edit]:
        for index in range(self._index_of_next_add, len(self._history)):
            if self._history[index].is_significant():
                return self._history[index]
        return None

    def undo_label(self) -> Optional[str]:
        edit = self.peek_undo()
        return edit.name if edit else None

    def redo_label(self) -> Optional[str]:
        edit = self.peek_redo()
        return edit.name if edit else None

    def stats(self) -> HistoryStats:
        return HistoryStats(
            size=self._size,
            length=len(self._history),
            index_of_next_add=self._index_of_next_add,
            unmodified_position=self._unmodified_position,
            has_irreversible_edit=self._has_irreversible_edit,
            enabled=self._enabled,
        )

    # -- subscriptions ---------------------------------------------------

    def subscribe(
        self, callback: Listener, kind: Optional[HistoryEvent] = None
    ) -> Listener:
        return self.events.subscribe(callback, kind)

    def unsubscribe(
        self, callback: Listener, kind: Optional[HistoryEvent] = None
    ) -> bool:
        return self.events.unsubscribe(callback, kind)

    # -- mutations -------------------------------------------------------

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def clear(self, *, dispose: bool = False) -> None:
        """Forget every edit and emit ``CLEAR``.

        Dropped edits are not disposed unless ``dispose`` is set; the baseline
        and the irreversible flag are left untouched.
        """

        self._guard("clear")
        dropped = self._history
        self._history = []
        self._index_of_next_add = 0
        if dispose:
            for edit in dropped:
                edit.die()
        if dropped:
            telemetry.record_event(
                "history.clear",
                level="debug",
                data={"dropped": len(dropped), "disposed": dispose},
                logger_name=self._logger_name,
            )
        self._emit(HistoryEventObject(HistoryEvent.CLEAR))

    def record_edit(self, edit: Edit) -> None:
        """Add ``edit`` to the history, discarding any redo tail."""

        self._guard("record_edit")
        if not self._enabled or edit.is_transparent():
            return
        if not edit.is_undoable():
            self.mark_irreversible(reason=edit.name)
            return

        with telemetry.span(
            "history::record_edit",
            logger_name=self._logger_name,
            component="history",
            metadata={"edit": edit.name, "cursor": self._index_of_next_add},
        ):
            edit.close()
            self._trim()

            if self._size > 0 and len(self._history) == self._size:
                evicted = self._history.pop(0)
                self._unmodified_position -= 1
                telemetry.record_event(
                    "history.evict",
                    level="debug",
                    data={"edit": evicted.name, "size": self._size},
                    logger_name=self._logger_name,
                )

            self._history.append(edit)
            self._index_of_next_add = len(self._history)
            self._emit(HistoryEventObject(HistoryEvent.ADD, edit))

    def mark_irreversible(self, *, reason: str = "external") -> None:
        """Record that the document changed in a way history cannot undo."""

        self._has_irreversible_edit = True
        telemetry.record_event(
            "history.irreversible",
            data={"reason": reason},
            logger_name=self._logger_name,
        )

    def undo(self) -> List[object]:
        """Undo back to and including the nearest significant edit.

        Returns the entities touched by child-relation changes along the way,
        each reported once.
        """

        self._guard("undo")
        affected: dict[int, object] = {}
        if not self.can_undo():
            return []

        with telemetry.span(
            "history::undo",
            logger_name=self._logger_name,
            component="history",
            metadata={"cursor": self._index_of_next_add},
        ) as handle:
            while self._index_of_next_add > 0:
                self._index_of_next_add -= 1
                edit = self._history[self._index_of_next_add]
                edit.undo()
                _collect_affected(edit, affected)

                if edit.is_significant():
                    handle.add_metadata("edit", edit.name)
                    self._emit(
                        HistoryEventObject(
                            HistoryEvent.UNDO, edit, tuple(affected.values())
                        )
                    )
                    break
        return list(affected.values())

    def redo(self) -> List[object]:
        """Redo forward to and including the nearest significant edit."""

        self._guard("redo")
        affected: dict[int, object] = {}
        if not self.can_redo():
            return []

        with telemetry.span(
            "history::redo",
            logger_name=self._logger_name,
            component="history",
            metadata={"cursor": self._index_of_next_add},
        ) as handle:
            while self._index_of_next_add < len(self._history):
                edit = self._history[self._index_of_next_add]
                self._index_of_next_add += 1
                edit.redo()
                _collect_affected(edit, affected)

                if edit.is_significant():
                    handle.add_metadata("edit", edit.name)
                    self._emit(
                        HistoryEventObject(
                            HistoryEvent.REDO, edit, tuple(affected.values())
                        )
                    )
                    break
        return list(affected.values())

    def reset_unmodified_state(self) -> None:
        self._unmodified_position = self._index_of_next_add
        self._has_irreversible_edit = False

    # -- internals -------------------------------------------------------

    def _trim(self) -> None:
        if len(self._history) <= self._index_of_next_add:
            return
        stale = self._history[self._index_of_next_add :]
        del self._history[self._index_of_next_add :]
        for edit in stale:
            edit.die()
        telemetry.record_event(
            "history.trim",
            level="debug",
            data={"disposed": len(stale), "cursor": self._index_of_next_add},
            logger_name=self._logger_name,
        )

    def _emit(self, event: HistoryEventObject) -> None:
        self._dispatching = event.kind
        try:
            self.events.emit(event)
        finally:
            self._dispatching = None

    def _guard(self, operation: str) -> None:
        if self._dispatching is not None:
            raise HistoryReentrancyError(operation, self._dispatching)


def _collect_affected(edit: Edit, affected: dict[int, object]) -> None:
    for change in edit.changes:
        if change.kind is not ChangeKind.CHILD:
            continue
        entity = change.affected_entity
        if entity is not None:
            affected.setdefault(id(entity), entity)


__all__ = ["HistoryManager", "HistoryReentrancyError", "HistoryStats"]
