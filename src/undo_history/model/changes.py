"""Concrete changes produced by ``NodeTree`` mutations.

Both changes store the state they replaced and swap it back in on every
execution, so ``undo`` and ``redo`` are the same toggle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from undo_history.history import Change, ChildRelationChange

from .node import Node

if TYPE_CHECKING:
    from .tree import NodeTree


class ChildChange(ChildRelationChange):
    """Moves ``child`` under ``parent`` at ``index``; ``parent=None`` detaches."""

    child: Node

    def __init__(
        self,
        tree: "NodeTree",
        child: Node,
        parent: Optional[Node],
        index: Optional[int] = None,
    ) -> None:
        super().__init__(child)
        self.tree = tree
        self.parent = parent
        self.index = index
        self.previous = parent
        self.previous_index = index

    def execute(self) -> None:
        current = self.child.parent
        current_index = self.child.index_in_parent()
        self.tree._relocate(self.child, self.previous, self.previous_index)
        self.parent, self.index = self.previous, self.previous_index
        self.previous, self.previous_index = current, current_index

    def undo(self) -> None:
        self.execute()

    def redo(self) -> None:
        self.execute()

    def __repr__(self) -> str:
        parent_id = self.parent.id if self.parent else None
        return f"ChildChange(child={self.child.id!r}, parent={parent_id!r})"


class ValueChange(Change):
    """Replaces the value held by ``node``."""

    def __init__(self, tree: "NodeTree", node: Node, value: object) -> None:
        self.tree = tree
        self.node = node
        self.value = value
        self.previous = value

    def execute(self) -> None:
        current = self.node.value
        self.node.value = self.previous
        self.value = self.previous
        self.previous = current

    def undo(self) -> None:
        self.execute()

    def redo(self) -> None:
        self.execute()

    def __repr__(self) -> str:
        return f"ValueChange(node={self.node.id!r}, value={self.value!r})"
