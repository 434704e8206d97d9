"""Bounded, observable linear undo/redo history for interactive editors."""

__all__ = [
    "adapters",
    "history",
    "model",
    "runtime",
]

__version__ = "0.1.0"
