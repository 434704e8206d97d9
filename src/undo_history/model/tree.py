"""Node tree document whose mutations are recorded as history edits."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Iterator, Optional

from undo_history.history import Change, Edit, HistoryManager
from undo_history.runtime import telemetry

from .changes import ChildChange, ValueChange
from .node import Node


class NodeTree:
    """Document owning a root node and, optionally, the history it feeds.

    Every mutation is executed as a change. Mutations made inside
    ``update(...)`` are batched into one edit; mutations made outside it get
    an edit of their own.
    """

    def __init__(
        self,
        *,
        history: Optional[HistoryManager] = None,
        root: Optional[Node] = None,
        name: str = "tree",
    ) -> None:
        self.name = name
        self.root = root or Node("root")
        self.history = history
        self._active: Optional[TreeTransaction] = None

    def update(
        self,
        name: str,
        *,
        significant: bool = True,
        undoable: bool = True,
        transparent: bool = False,
    ) -> "TreeTransaction":
        return TreeTransaction(
            self,
            name,
            significant=significant,
            undoable=undoable,
            transparent=transparent,
        )

    def add(
        self, child: Node, parent: Optional[Node] = None, index: Optional[int] = None
    ) -> Node:
        target = parent or self.root
        if child is self.root or child.is_ancestor_of(target):
            raise ValueError(f"Cannot add '{child.id}' below '{target.id}'")
        self._execute(ChildChange(self, child, target, index), "add")
        return child

    def move(self, node: Node, parent: Node, index: Optional[int] = None) -> Node:
        return self.add(node, parent, index)

    def remove(self, node: Node) -> Node:
        if node is self.root:
            raise ValueError("The root node cannot be removed")
        if node.parent is None:
            return node
        self._execute(ChildChange(self, node, None), "remove")
        return node

    def set_value(self, node: Node, value: object) -> Node:
        self._execute(ValueChange(self, node, value), "set_value")
        return node

    def find(self, node_id: str) -> Optional[Node]:
        for node in self.walk():
            if node.id == node_id:
                return node
        return None

    def walk(self) -> Iterator[Node]:
        return self.root.walk()

    def _execute(self, change: ChildChange | ValueChange, label: str) -> None:
        if self._active is not None:
            self._active.apply(change)
            return
        with self.update(label) as tx:
            tx.apply(change)

    def _relocate(
        self, child: Node, parent: Optional[Node], index: Optional[int]
    ) -> None:
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = parent
        if parent is None:
            return
        if index is None or index > len(parent.children):
            index = len(parent.children)
        parent.children.insert(index, child)


class TreeTransaction(AbstractContextManager["TreeTransaction"]):
    """Collects the changes of one logical update into a single edit.

    Transactions nest: only the outermost one owns the edit and hands it to
    the history on exit. If the block raises, or the history refuses the
    edit, every collected change is rolled back and nothing is recorded.
    """

    def __init__(
        self,
        tree: NodeTree,
        name: str,
        *,
        significant: bool = True,
        undoable: bool = True,
        transparent: bool = False,
    ) -> None:
        self.tree = tree
        self.name = name
        self.edit: Optional[Edit] = None
        self._flags = {
            "significant": significant,
            "undoable": undoable,
            "transparent": transparent,
        }
        self._owner = False
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "TreeTransaction":
        outer = self.tree._active
        if outer is not None:
            self.edit = outer.edit
            return self

        self._owner = True
        self.edit = Edit(self.name, source=self.tree, **self._flags)
        self.tree._active = self
        self._span_cm = telemetry.span(
            name=f"tree::{self.name}",
            component=True,
            metadata={"tree": self.tree.name},
        )
        self._span_cm.__enter__()
        return self

    def apply(self, change: ChildChange | ValueChange) -> Change:
        if self.edit is None:
            raise RuntimeError("Transaction used outside of a with-block")
        change.execute()
        return self.edit.add(change)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if not self._owner:
            return False
        self.tree._active = None
        edit = self.edit
        try:
            if edit is None:
                return False
            if exc_type is not None:
                self._rollback(edit)
            elif not edit.is_empty():
                edit.close()
                if self.tree.history is not None:
                    self._record(self.tree.history, edit)
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False

    def _record(self, history: HistoryManager, edit: Edit) -> None:
        try:
            history.record_edit(edit)
        except Exception:
            # Once stored, the edit belongs to the history and stays applied.
            if not any(recorded is edit for recorded in history.edits):
                self._rollback(edit)
            raise

    def _rollback(self, edit: Edit) -> None:
        if not edit.is_empty():
            edit.undo()
        edit.die()


__all__ = ["NodeTree", "TreeTransaction"]
