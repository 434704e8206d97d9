"""Reference document model recording its mutations into a history."""

from .changes import ChildChange, ValueChange
from .node import Node
from .tree import NodeTree, TreeTransaction

__all__ = [
    "ChildChange",
    "ValueChange",
    "Node",
    "NodeTree",
    "TreeTransaction",
]
