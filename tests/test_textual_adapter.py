from __future__ import annotations

from typing import List, Sequence

from undo_history.adapters.textual import HistoryUIHooks, TextualHistoryAdapter
from undo_history.history import HistoryManager
from undo_history.model import Node, NodeTree


class RecordingHooks:
    def __init__(self) -> None:
        self.actions: List[tuple[bool, bool]] = []
        self.dirty: List[bool] = []
        self.statuses: List[str] = []
        self.selections: List[Sequence[object]] = []
        self.logs: List[str] = []

    def build(self) -> HistoryUIHooks:
        return HistoryUIHooks(
            update_actions=lambda undo, redo: self.actions.append((undo, redo)),
            update_dirty=self.dirty.append,
            update_status=self.statuses.append,
            select=self.selections.append,
            log=self.logs.append,
        )


def make_adapter() -> tuple[TextualHistoryAdapter, NodeTree, RecordingHooks]:
    history = HistoryManager()
    tree = NodeTree(history=history)
    recorder = RecordingHooks()
    adapter = TextualHistoryAdapter(history, recorder.build())
    return adapter, tree, recorder


def test_adapter_publishes_initial_state() -> None:
    _, _, recorder = make_adapter()

    assert recorder.actions == [(False, False)]
    assert recorder.dirty == [False]


def test_adapter_tracks_recorded_edits() -> None:
    _, tree, recorder = make_adapter()

    tree.add(Node("a"))

    assert recorder.actions[-1] == (True, False)
    assert recorder.dirty[-1] is True
    assert recorder.statuses[-1] == "add::add"


def test_undo_key_selects_affected_nodes() -> None:
    adapter, tree, recorder = make_adapter()
    node = tree.add(Node("a"))

    assert adapter.handle_key("ctrl+z") is True

    assert recorder.selections == [[node]]
    assert recorder.actions[-1] == (False, True)
    assert recorder.dirty[-1] is False
    assert recorder.statuses[-1] == "undo::add"

    assert adapter.handle_key("ctrl+shift+z") is True
    assert recorder.actions[-1] == (True, False)


def test_unknown_keys_are_not_consumed() -> None:
    adapter, _, _ = make_adapter()

    assert adapter.handle_key("ctrl+s") is False


def test_undo_with_empty_history_reports_status() -> None:
    adapter, _, recorder = make_adapter()

    assert adapter.undo() == []
    assert adapter.redo() == []

    assert recorder.statuses[-2:] == ["nothing to undo", "nothing to redo"]


def test_refresh_after_insignificant_only_step() -> None:
    adapter, tree, recorder = make_adapter()
    with tree.update("caret", significant=False):
        tree.set_value(tree.root, "moved")
    statuses_before = list(recorder.statuses)

    adapter.undo()

    assert recorder.statuses == statuses_before
    assert recorder.actions[-1] == (False, True)


def test_mark_saved_clears_dirty_marker() -> None:
    adapter, tree, recorder = make_adapter()
    tree.add(Node("a"))

    adapter.mark_saved()

    assert recorder.dirty[-1] is False
    assert recorder.statuses[-1] == "saved"


def test_adapter_emits_log_lines() -> None:
    _, tree, recorder = make_adapter()

    tree.add(Node("a"))

    assert any(line.startswith("event ->") for line in recorder.logs)
    assert "cursor=1" in recorder.logs[-1]


def test_close_unsubscribes() -> None:
    adapter, tree, recorder = make_adapter()

    adapter.close()
    tree.add(Node("a"))

    assert recorder.actions == [(False, False)]
