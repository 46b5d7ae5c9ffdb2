"""Textual host application for favorite-files."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.suggester import SuggestFromList
from textual.widgets import Footer, Header, Input, RichLog, Tree

from .app_base import FavoritesAppBase
from .commands import (
    BookmarkCommandsMixin,
    FavoritesCommandsMixin,
    TransferCommandsMixin,
)
from .constants import APP_NAME, SLASH_COMMANDS
from .log import logger
from .nodes import (
    BookmarkFileNode,
    BookmarkNode,
    FileNode,
    GroupNode,
    TreeNode,
    build_tree,
)
from .preferences import Preferences
from .widgets import ConfirmScreen, FavoritesTree


class FavoritesApp(
    FavoritesCommandsMixin,
    BookmarkCommandsMixin,
    TransferCommandsMixin,
    FavoritesAppBase,
    App,
):
    """Favorites groups and bookmarks for a workspace."""

    TITLE = APP_NAME

    CSS = """
    #main-container {
        height: 1fr;
    }
    #messages {
        height: 1fr;
        padding: 0 1;
    }
    #command-input {
        dock: bottom;
    }
    """

    BINDINGS = [
        Binding("ctrl+r", "refresh", "Refresh", show=True),
        Binding("delete", "remove_selected", "Remove", show=True),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        workspace_root: Path | None = None,
        prefs: Preferences | None = None,
        prefs_path: Path | None = None,
        state_path: Path | None = None,
        active_file: str | None = None,
    ) -> None:
        super().__init__(workspace_root=workspace_root, prefs=prefs, prefs_path=prefs_path)
        self._state_path = state_path
        self._initial_active_file = active_file

    # ── Layout ──────────────────────────────────────────────────

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-container"):
            yield FavoritesTree(id="favorites-tree")
            with Vertical():
                yield RichLog(id="messages", wrap=True, markup=False)
                yield Input(
                    placeholder="/help for commands",
                    suggester=SuggestFromList(SLASH_COMMANDS, case_sensitive=False),
                    id="command-input",
                )
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = str(self._workspace_root)
        self.open_workspace(self._state_path)
        if self._initial_active_file:
            self._cmd_open(self._initial_active_file)
        self._refresh_tree()
        self.query_one("#command-input", Input).focus()

    # ── Display contract ────────────────────────────────────────

    def _add_system_message(self, text: str) -> None:
        self.query_one("#messages", RichLog).write(Text(text))

    def _show_error(self, text: str) -> None:
        logger.debug("command error: %s", text)
        self.query_one("#messages", RichLog).write(Text(text, style="bold red"))

    def _refresh_tree(self) -> None:
        entries = build_tree(
            self._favorites.load(),
            self._bookmarks.load(),
            workspace_root=(
                self._workspace_root if self._prefs.display.show_relative_paths else None
            ),
            aliases=self._aliases.load(),
            show_bookmark_lines=self._prefs.display.show_bookmark_lines,
        )
        self.query_one("#favorites-tree", FavoritesTree).populate(entries)

    def _confirm(self, message: str, callback: Callable[[bool], None]) -> None:
        self.push_screen(ConfirmScreen(message), lambda result: callback(result is True))

    def _exit_app(self) -> None:
        self.exit()

    # ── Events ──────────────────────────────────────────────────

    def on_input_submitted(self, event: Input.Submitted) -> None:
        text = event.value.strip()
        event.input.clear()
        if not text:
            return
        self._add_system_message(f"> {text}")
        if not text.startswith("/"):
            self._add_system_message("Commands start with '/'. Type /help.")
            return
        self._handle_command(text)

    def on_tree_node_selected(self, event: Tree.NodeSelected[TreeNode]) -> None:
        node = event.node.data
        if isinstance(node, (FileNode, BookmarkFileNode)):
            self._active_file = node.path
            self._add_system_message(f"Active file: {node.path}")
        elif isinstance(node, BookmarkNode):
            self._active_file = node.ref.file_path
            self._add_system_message(f"{node.ref.file_path}:{node.line}")

    # ── Actions ─────────────────────────────────────────────────

    def action_refresh(self) -> None:
        self._cmd_refresh()

    def action_remove_selected(self) -> None:
        """Remove the highlighted file, bookmark, or group."""
        tree = self.query_one("#favorites-tree", FavoritesTree)
        if tree.cursor_node is None:
            return
        node = tree.cursor_node.data
        if isinstance(node, FileNode):
            self._fav_remove(node.path, node.group)
        elif isinstance(node, BookmarkNode):
            self._bookmark_remove(node.ref)
        elif isinstance(node, GroupNode):
            self._group_delete(node.name)


# ── Entry Point ─────────────────────────────────────────────────────


def run_app(
    workspace_root: Path | None = None,
    prefs: Preferences | None = None,
    prefs_path: Path | None = None,
    state_path: Path | None = None,
    active_file: str | None = None,
) -> None:
    """Run the favorite-files application."""
    app = FavoritesApp(
        workspace_root=workspace_root,
        prefs=prefs,
        prefs_path=prefs_path,
        state_path=state_path,
        active_file=active_file,
    )
    app.run()
