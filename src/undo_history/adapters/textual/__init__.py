"""Textual adapter for the undo history."""

from .controller import HistoryUIHooks, TextualHistoryAdapter

__all__ = ["HistoryUIHooks", "TextualHistoryAdapter"]
