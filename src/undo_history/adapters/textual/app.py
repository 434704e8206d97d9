"""Executable Textual outline editor backed by a HistoryManager."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use undo_history.adapters.textual.app"
    ) from exc

from undo_history.history import HistoryManager
from undo_history.model import Node, NodeTree
from undo_history.runtime import config, telemetry

from .controller import HistoryUIHooks, TextualHistoryAdapter


@dataclass
class UIState:
    outline_text: str = ""
    status_text: str = ""
    can_undo: bool = False
    can_redo: bool = False
    dirty: bool = False


def render_outline(tree: NodeTree, selected: Optional[Node] = None) -> str:
    lines = []

    def visit(node: Node, depth: int) -> None:
        marker = ">" if node is selected else " "
        label = node.id if node.value is None else f"{node.id}: {node.value}"
        lines.append(f"{marker} {'  ' * depth}{label}")
        for child in node.children:
            visit(child, depth + 1)

    visit(tree.root, 0)
    return "\n".join(lines)


class HistoryDemoApp(App[None]):
    """Minimal Textual UI editing a node outline with undo/redo."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#outline-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("a", "add_child", "Add child"),
        ("x", "remove_node", "Remove"),
        ("r", "rename", "Rename"),
        ("s", "save", "Save"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, capacity: int | None = None) -> None:
        super().__init__()
        self._state = UIState()
        size = config.history_capacity() if capacity is None else capacity
        self.manager = HistoryManager(size, logger_name="undo_history.demo")
        self.outline = NodeTree(history=self.manager, name="outline")
        self.adapter: TextualHistoryAdapter | None = None
        self._current_node: Node = self.outline.root
        self._counter = 0
        self._outline_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="outline-area"):
            self._outline_widget = Static("", id="outline-view")
            yield self._outline_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = HistoryUIHooks(
            update_actions=self._update_actions,
            update_dirty=self._update_dirty,
            update_status=self._update_status,
            select=self._select,
        )
        self.adapter = TextualHistoryAdapter(self.manager, hooks)
        self._refresh_outline()

    def on_key(self, event: events.Key) -> None:
        if self.adapter and self.adapter.handle_key(event.key):
            self._refresh_outline()
            event.stop()

    def action_add_child(self) -> None:
        self._counter += 1
        node = Node(f"n{self._counter}")
        self.outline.add(node, self._current_node)
        self._current_node = node
        self._refresh_outline()

    def action_remove_node(self) -> None:
        node = self._current_node
        if node is self.outline.root:
            return
        parent = node.parent or self.outline.root
        self.outline.remove(node)
        self._current_node = parent
        self._refresh_outline()

    def action_rename(self) -> None:
        node = self._current_node
        self.outline.set_value(node, f"renamed {self._counter}")
        self._refresh_outline()

    def action_save(self) -> None:
        if self.adapter:
            self.adapter.mark_saved()
        self._refresh_outline()

    def _select(self, entities: Sequence[object]) -> None:
        for entity in entities:
            if isinstance(entity, Node) and entity.parent is not None:
                self._current_node = entity
                return

    def _update_actions(self, can_undo: bool, can_redo: bool) -> None:
        self._state.can_undo = can_undo
        self._state.can_redo = can_redo

    def _update_dirty(self, dirty: bool) -> None:
        self._state.dirty = dirty
        self.title = f"outline{' *' if dirty else ''}"

    def _update_status(self, status: str) -> None:
        self._state.status_text = status

    def _refresh_outline(self) -> None:
        if self._current_node is not self.outline.root and self._current_node.parent is None:
            self._current_node = self.outline.root
        self._state.outline_text = render_outline(self.outline, self._current_node)
        if self._outline_widget:
            self._outline_widget.update(self._state.outline_text)
        if self._status_widget:
            flags = (
                f"undo={'on' if self._state.can_undo else 'off'} "
                f"redo={'on' if self._state.can_redo else 'off'}"
            )
            self._status_widget.update(f"{self._state.status_text}  [{flags}]")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the undo history Textual demo.")
    parser.add_argument(
        "--capacity",
        type=int,
        default=None,
        help="History capacity, 0 for unbounded (default: UNDO_HISTORY_CAPACITY or 100)",
    )
    parser.add_argument(
        "--log-preset",
        choices=sorted(telemetry.PRESETS),
        default=None,
        help="Logging preset (default: UNDO_HISTORY_LOG_* settings)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    app = HistoryDemoApp(capacity=args.capacity)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
