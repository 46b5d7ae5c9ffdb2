"""Shared application base class for the Textual app and headless hosts."""

from __future__ import annotations

import os
import shlex
from collections.abc import Callable
from pathlib import Path

from .constants import HELP_TEXT
from .features.transfer import TransferEngine
from .log import logger
from .persistence import (
    AliasStore,
    BookmarkStore,
    FavoritesStore,
    WorkspaceState,
    migrate_state,
)
from .preferences import Preferences, load_preferences


class FavoritesAppBase:
    """Base class owning the workspace stores and the command dispatcher.

    Command mixins are mixed in alongside this class.  Subclasses implement
    the abstract display methods; the core never talks to a UI directly.
    """

    def __init__(
        self,
        workspace_root: Path | None = None,
        prefs: Preferences | None = None,
        prefs_path: Path | None = None,
        **kwargs,  # type: ignore[no-untyped-def]
    ) -> None:
        # Cooperative MRO: propagate to next base (e.g. Textual App)
        super().__init__(**kwargs)
        self._prefs_path = prefs_path
        self._prefs = prefs or load_preferences(prefs_path)
        self._workspace_root: Path = (workspace_root or Path.cwd()).expanduser().resolve()
        self._active_file: str | None = None

        self._workspace_state: WorkspaceState | None = None
        self._favorites: FavoritesStore | None = None
        self._bookmarks: BookmarkStore | None = None
        self._aliases: AliasStore | None = None
        self._transfer: TransferEngine | None = None

    # --- Startup ---

    def open_workspace(self, state_path: Path | None = None) -> None:
        """Load, migrate, and wire up the stores for the current workspace.

        Order matters: the raw state is migrated before any store reads it.
        """
        if state_path is not None:
            state = WorkspaceState(state_path)
        else:
            state = WorkspaceState.for_workspace(
                self._prefs.storage.resolved_state_dir(), self._workspace_root
            )
        migrate_state(state)
        self._workspace_state = state
        self._favorites = FavoritesStore(state)
        self._bookmarks = BookmarkStore(state)
        self._aliases = AliasStore(state)
        self._transfer = TransferEngine(
            self._favorites,
            self._bookmarks,
            workspace_roots=[self._workspace_root],
            backup_dir=self._prefs.storage.resolved_backup_dir(),
            indent=self._prefs.export.indent,
        )
        logger.debug("opened workspace %s (state %s)", self._workspace_root, state.path)

    # --- Abstract display methods (subclasses MUST implement) ---

    def _add_system_message(self, text: str) -> None:
        raise NotImplementedError

    def _show_error(self, text: str) -> None:
        raise NotImplementedError

    def _refresh_tree(self) -> None:
        raise NotImplementedError

    def _confirm(self, message: str, callback: Callable[[bool], None]) -> None:
        """Ask a yes/no question and call *callback* with the answer."""
        raise NotImplementedError

    def _exit_app(self) -> None:
        raise NotImplementedError

    # --- Helpers shared by command mixins ---

    def _split_args(self, text: str) -> list[str] | None:
        """Split *text* shell-style; report and return None on bad quoting."""
        try:
            return shlex.split(text)
        except ValueError as exc:
            self._show_error(f"Could not parse arguments: {exc}")
            return None

    def _resolve_path(self, path: str) -> str:
        """Absolute form of *path*, relative paths taken from the workspace root."""
        expanded = os.path.expanduser(path)
        if not os.path.isabs(expanded):
            expanded = os.path.join(self._workspace_root, expanded)
        return os.path.normpath(expanded)

    def _require_active_file(self) -> str | None:
        if not self._active_file:
            self._add_system_message("No active file. Use /open <path> first.")
            return None
        return self._active_file

    # --- Command dispatch ---

    def _handle_command(self, text: str) -> None:
        """Route a slash command to the appropriate handler."""
        parts = text.strip().split(None, 1)
        if not parts:
            return
        cmd = parts[0].lower()
        arg = parts[1] if len(parts) > 1 else ""

        handlers: dict[str, Callable[[str], None]] = {
            "/help": lambda _arg: self._add_system_message(HELP_TEXT),
            "/open": self._cmd_open,
            "/refresh": lambda _arg: self._cmd_refresh(),
            "/fav": self._cmd_fav,
            "/group": self._cmd_group,
            "/bookmark": self._cmd_bookmark,
            "/bm": self._cmd_bookmark,
            "/alias": self._cmd_alias,
            "/export": self._cmd_export,
            "/import": self._cmd_import,
            "/backup-dir": self._cmd_backup_dir,
            "/stats": lambda _arg: self._cmd_stats(),
            "/quit": lambda _arg: self._exit_app(),
        }

        handler = handlers.get(cmd)
        if handler:
            handler(arg)
        else:
            self._add_system_message(
                f"Unknown command: {cmd}\nType /help for available commands."
            )

    def _cmd_refresh(self) -> None:
        """Re-read the workspace state from disk and redraw the tree."""
        self._workspace_state.reload()
        self._refresh_tree()

    def _cmd_open(self, text: str) -> None:
        """Set the active file (stands in for the editor's focused document)."""
        args = self._split_args(text)
        if args is None:
            return
        if len(args) != 1:
            self._add_system_message("Usage: /open <path>")
            return
        path = self._resolve_path(args[0])
        if not os.path.isfile(path):
            self._add_system_message(f"Warning: {path} does not exist (opened anyway)")
        self._active_file = path
        self._add_system_message(f"Active file: {path}")
