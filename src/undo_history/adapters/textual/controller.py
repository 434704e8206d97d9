"""Adapter that wires HistoryManager events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

from undo_history.history import HistoryEvent, HistoryEventObject, HistoryManager


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class HistoryUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_actions: Callable[[bool, bool], None]
    update_dirty: Callable[[bool], None] = _noop
    update_status: Callable[[str], None] = _noop
    # Entities touched by the last undo/redo, for hosts that re-select them
    select: Callable[[Sequence[object]], None] = _noop
    log: Callable[[str], None] = _noop


class TextualHistoryAdapter:
    """Keeps undo/redo actions and the dirty marker in sync with a history."""

    UNDO_KEYS = frozenset({"ctrl+z"})
    REDO_KEYS = frozenset({"ctrl+y", "ctrl+shift+z"})

    def __init__(self, manager: HistoryManager, hooks: HistoryUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self.manager.subscribe(self._handle_event)
        self.refresh()

    def close(self) -> None:
        self.manager.unsubscribe(self._handle_event)

    def handle_key(self, key: str) -> bool:
        """Run undo/redo for a Textual key name; False when the key is not ours."""

        normalized = key.lower()
        if normalized in self.UNDO_KEYS:
            self.undo()
            return True
        if normalized in self.REDO_KEYS:
            self.redo()
            return True
        return False

    def undo(self) -> List[object]:
        if not self.manager.can_undo():
            self.hooks.update_status("nothing to undo")
            return []
        affected = self.manager.undo()
        self._after_step(affected)
        return affected

    def redo(self) -> List[object]:
        if not self.manager.can_redo():
            self.hooks.update_status("nothing to redo")
            return []
        affected = self.manager.redo()
        self._after_step(affected)
        return affected

    def mark_saved(self) -> None:
        self.manager.reset_unmodified_state()
        self.hooks.update_status("saved")
        self.refresh()

    def refresh(self) -> None:
        self.hooks.update_actions(self.manager.can_undo(), self.manager.can_redo())
        self.hooks.update_dirty(not self.manager.is_unmodified_state())

    def _after_step(self, affected: List[object]) -> None:
        if affected:
            self.hooks.select(affected)
        # No event fires when the walk ran out on insignificant edits.
        self.refresh()

    def _handle_event(self, event: HistoryEventObject) -> None:
        self._log_state("event ->", event=event.kind.value, edit=_edit_name(event))
        if event.kind is HistoryEvent.CLEAR:
            self.hooks.update_status("history cleared")
        else:
            self.hooks.update_status(f"{event.kind.value}::{_edit_name(event)}")
        self.refresh()

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        stats = self.manager.stats()
        return {
            "cursor": stats.index_of_next_add,
            "length": stats.length,
            "unmodified": self.manager.is_unmodified_state(),
        }


def _edit_name(event: HistoryEventObject) -> str | None:
    return event.edit.name if event.edit is not None else None


__all__ = ["TextualHistoryAdapter", "HistoryUIHooks"]
