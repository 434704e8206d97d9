"""Change variants: the atomic reversible mutations an Edit is made of."""

from __future__ import annotations

from enum import Enum
from typing import Callable, ClassVar, Optional


class ChangeKind(Enum):
    GENERIC = "generic"
    CHILD = "child"


class Change:
    """Base class every reversible mutation inherits from.

    The history manager only distinguishes ``ChangeKind.CHILD`` changes, whose
    ``affected_entity`` is reported back from ``undo``/``redo``.
    """

    kind: ClassVar[ChangeKind] = ChangeKind.GENERIC

    @property
    def affected_entity(self) -> Optional[object]:
        return None

    def undo(self) -> None:  # pragma: no cover - abstract override
        raise NotImplementedError

    def redo(self) -> None:  # pragma: no cover - abstract override
        raise NotImplementedError


class ChildRelationChange(Change):
    """Change to a parent/child relationship, carrying the child it touched."""

    kind: ClassVar[ChangeKind] = ChangeKind.CHILD

    def __init__(self, child: Optional[object]) -> None:
        self.child = child

    @property
    def affected_entity(self) -> Optional[object]:
        return self.child


class CallbackChange(Change):
    """Generic change backed by a pair of callables."""

    def __init__(
        self,
        undo_fn: Callable[[], None],
        redo_fn: Callable[[], None],
        *,
        description: str = "",
    ) -> None:
        if not callable(undo_fn) or not callable(redo_fn):
            raise TypeError("undo_fn and redo_fn must be callable")
        self.undo_fn = undo_fn
        self.redo_fn = redo_fn
        self.description = description

    def undo(self) -> None:
        self.undo_fn()

    def redo(self) -> None:
        self.redo_fn()

    def __repr__(self) -> str:
        return f"CallbackChange({self.description!r})"


__all__ = [
    "ChangeKind",
    "Change",
    "ChildRelationChange",
    "CallbackChange",
]
