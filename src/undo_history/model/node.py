"""Entities of the reference document model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional


@dataclass(eq=False, slots=True)
class Node:
    """Tree entity compared and hashed by identity."""

    id: str
    value: object = None
    parent: Optional["Node"] = field(default=None, repr=False)
    children: List["Node"] = field(default_factory=list, repr=False)

    def index_in_parent(self) -> Optional[int]:
        if self.parent is None:
            return None
        return self.parent.children.index(self)

    def is_ancestor_of(self, other: Optional["Node"]) -> bool:
        while other is not None:
            if other is self:
                return True
            other = other.parent
        return False

    def walk(self) -> Iterator["Node"]:
        """Pre-order traversal of this node and its descendants."""

        yield self
        for child in self.children:
            yield from child.walk()
