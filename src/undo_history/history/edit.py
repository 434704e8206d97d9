"""Edits: named, ordered batches of changes with undo/redo semantics."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Iterable, List, Optional

from .changes import Change, ChangeKind


class EditState(Enum):
    OPEN = "open"
    CLOSED = "closed"
    UNDONE = "undone"
    REDONE = "redone"
    DISPOSED = "disposed"


class EditStateError(RuntimeError):
    """Raised when an edit is driven through an invalid lifecycle transition."""

    def __init__(self, edit: "Edit", action: str) -> None:
        super().__init__(
            f"Cannot {action} edit '{edit.name}' in state '{edit.state.value}'"
        )
        self.edit = edit
        self.state = edit.state
        self.action = action


class Edit:
    """Ordered batch of changes recorded as one history entry.

    An edit starts ``OPEN`` so collaborators can append changes while a
    mutation is in progress. Once closed, its change list is frozen and only
    the owner (the history manager) toggles it between undone and redone.
    ``die`` is the one-way exit used when the edit is discarded for good.
    """

    def __init__(
        self,
        name: str = "edit",
        changes: Iterable[Change] = (),
        *,
        source: Optional[object] = None,
        significant: bool = True,
        undoable: bool = True,
        transparent: bool = False,
    ) -> None:
        self.name = name
        self.source = source
        self._changes: List[Change] = list(changes)
        self._significant = significant
        self._undoable = undoable
        self._transparent = transparent
        self._on_dispose: List[Callable[["Edit"], None]] = []
        self.state = EditState.OPEN

    def __repr__(self) -> str:
        return (
            f"Edit(name={self.name!r}, changes={len(self._changes)}, "
            f"state={self.state.value})"
        )

    @property
    def changes(self) -> tuple[Change, ...]:
        return tuple(self._changes)

    def add(self, change: Change) -> Change:
        if self.state is not EditState.OPEN:
            raise EditStateError(self, "add a change to")
        self._changes.append(change)
        return change

    def close(self) -> "Edit":
        if self.state is EditState.OPEN:
            self.state = EditState.CLOSED
        elif self.state is EditState.DISPOSED:
            raise EditStateError(self, "close")
        return self

    def is_empty(self) -> bool:
        return not self._changes

    def is_significant(self) -> bool:
        return self._significant

    def is_undoable(self) -> bool:
        return self._undoable

    def is_transparent(self) -> bool:
        return self._transparent

    def affected_entities(self) -> list[object]:
        entities: list[object] = []
        for change in self._changes:
            if change.kind is not ChangeKind.CHILD:
                continue
            entity = change.affected_entity
            if entity is not None:
                entities.append(entity)
        return entities

    def on_dispose(self, callback: Callable[["Edit"], None]) -> None:
        """Register a resource-release hook run once by ``die``."""

        if self.state is EditState.DISPOSED:
            raise EditStateError(self, "register a dispose hook on")
        self._on_dispose.append(callback)

    def undo(self) -> None:
        if self.state is EditState.OPEN:
            self.close()
        if self.state not in (EditState.CLOSED, EditState.REDONE):
            raise EditStateError(self, "undo")
        for change in reversed(self._changes):
            change.undo()
        self.state = EditState.UNDONE

    def redo(self) -> None:
        if self.state is not EditState.UNDONE:
            raise EditStateError(self, "redo")
        for change in self._changes:
            change.redo()
        self.state = EditState.REDONE

    def die(self) -> None:
        if self.state is EditState.DISPOSED:
            raise EditStateError(self, "dispose")
        hooks = list(self._on_dispose)
        self._on_dispose.clear()
        self._changes.clear()
        self.state = EditState.DISPOSED
        for hook in hooks:
            hook(self)


__all__ = ["Edit", "EditState", "EditStateError"]
