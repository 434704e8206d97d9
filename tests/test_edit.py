from __future__ import annotations

from typing import List

import pytest

from undo_history.history import (
    CallbackChange,
    ChangeKind,
    ChildRelationChange,
    Edit,
    EditState,
    EditStateError,
)


def make_callback_change(log: List[str], label: str) -> CallbackChange:
    return CallbackChange(
        lambda: log.append(f"undo:{label}"),
        lambda: log.append(f"redo:{label}"),
        description=label,
    )


def make_edit(log: List[str], *labels: str) -> Edit:
    edit = Edit("batch")
    for label in labels:
        edit.add(make_callback_change(log, label))
    return edit.close()


def test_undo_reverses_changes_and_redo_replays_them() -> None:
    log: List[str] = []
    edit = make_edit(log, "a", "b", "c")

    edit.undo()
    edit.redo()

    assert log == ["undo:c", "undo:b", "undo:a", "redo:a", "redo:b", "redo:c"]
    assert edit.state is EditState.REDONE


def test_undo_closes_open_edit() -> None:
    edit = Edit("open")

    edit.undo()

    assert edit.state is EditState.UNDONE
    with pytest.raises(EditStateError):
        edit.add(make_callback_change([], "late"))


def test_changes_cannot_be_added_after_close() -> None:
    edit = make_edit([], "a")

    with pytest.raises(EditStateError) as info:
        edit.add(make_callback_change([], "b"))

    assert info.value.state is EditState.CLOSED
    assert len(edit.changes) == 1


def test_redo_requires_prior_undo() -> None:
    edit = make_edit([], "a")

    with pytest.raises(EditStateError):
        edit.redo()

    edit.undo()
    with pytest.raises(EditStateError):
        edit.undo()


def test_die_releases_changes_and_runs_hooks_once() -> None:
    released: List[str] = []
    edit = make_edit([], "a", "b")
    edit.on_dispose(lambda e: released.append(e.name))

    edit.die()

    assert released == ["batch"]
    assert edit.is_empty()
    assert edit.state is EditState.DISPOSED
    with pytest.raises(EditStateError):
        edit.die()
    with pytest.raises(EditStateError):
        edit.undo()


def test_flags_are_fixed_at_creation() -> None:
    edit = Edit("caret", significant=False, undoable=False, transparent=True)

    assert edit.is_significant() is False
    assert edit.is_undoable() is False
    assert edit.is_transparent() is True
    assert Edit().is_significant() is True


def test_affected_entities_only_come_from_child_changes() -> None:
    child = object()
    edit = Edit(
        "mixed",
        [
            ChildRelationChange(child),
            ChildRelationChange(None),
            make_callback_change([], "generic"),
        ],
    )

    assert edit.affected_entities() == [child]
    assert [change.kind for change in edit.changes] == [
        ChangeKind.CHILD,
        ChangeKind.CHILD,
        ChangeKind.GENERIC,
    ]


def test_callback_change_requires_callables() -> None:
    with pytest.raises(TypeError):
        CallbackChange("undo", lambda: None)  # type: ignore[arg-type]
