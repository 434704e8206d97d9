"""Edits, change variants, event channel and the history manager."""

from .changes import CallbackChange, Change, ChangeKind, ChildRelationChange
from .edit import Edit, EditState, EditStateError
from .events import EventSource, HistoryEvent, HistoryEventObject, Listener
from .manager import HistoryManager, HistoryReentrancyError, HistoryStats

__all__ = [
    "CallbackChange",
    "Change",
    "ChangeKind",
    "ChildRelationChange",
    "Edit",
    "EditState",
    "EditStateError",
    "EventSource",
    "HistoryEvent",
    "HistoryEventObject",
    "Listener",
    "HistoryManager",
    "HistoryReentrancyError",
    "HistoryStats",
]
