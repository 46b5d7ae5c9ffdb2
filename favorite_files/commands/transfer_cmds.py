"""Export, import, backup location, statistics, and alias commands."""

from __future__ import annotations

from pathlib import Path

from ..errors import FavoritesError
from ..features.transfer import PendingImport, backup_directory, format_statistics
from ..preferences import save_backup_dir


class TransferCommandsMixin:
    """/export, /import, /backup-dir, /stats, and /alias."""

    def _cmd_export(self, text: str) -> None:
        args = self._split_args(text)
        if args is None:
            return
        if len(args) > 1:
            self._add_system_message("Usage: /export [path]")
            return
        path = Path(self._resolve_path(args[0])) if args else self._transfer.default_export_path()
        try:
            stats = self._transfer.export_to(path)
        except FavoritesError as exc:
            self._show_error(f"Export failed: {exc}")
            return
        self._add_system_message(f"Exported to {path}\n{format_statistics(stats)}")

    def _cmd_import(self, text: str) -> None:
        args = self._split_args(text)
        if args is None:
            return
        if len(args) != 1:
            self._add_system_message("Usage: /import <path>")
            return
        path = Path(self._resolve_path(args[0]))
        try:
            pending = self._transfer.prepare_import(path)
        except FavoritesError as exc:
            self._show_error(f"Import failed: {exc}")
            return
        if pending.backup_path is not None:
            self._add_system_message(f"Backed up current data to {pending.backup_path}")

        if not self._prefs.import_.confirm:
            self._apply_import(pending)
            return

        def on_answer(confirmed: bool) -> None:
            if confirmed:
                self._apply_import(pending)
            else:
                self._add_system_message("Import cancelled")

        self._confirm(
            "Replace all favorites and bookmarks with "
            f"{format_statistics(pending.statistics)} from {path.name}?",
            on_answer,
        )

    def _apply_import(self, pending: PendingImport) -> None:
        try:
            stats = self._transfer.apply_import(pending)
        except OSError as exc:
            self._show_error(f"Import failed: {exc}")
            return
        self._add_system_message(f"Imported {format_statistics(stats)}")
        self._refresh_tree()

    def _cmd_backup_dir(self, text: str) -> None:
        """Show or set where import backups are written."""
        args = self._split_args(text)
        if args is None:
            return
        if not args:
            current = backup_directory(self._transfer.workspace_roots, self._transfer.backup_dir)
            self._add_system_message(f"Backups go to {current}")
            return
        if len(args) != 1:
            self._add_system_message("Usage: /backup-dir [path|default]")
            return
        if args[0] == "default":
            value = ""
            self._transfer.backup_dir = None
        else:
            value = self._resolve_path(args[0])
            self._transfer.backup_dir = Path(value)
        self._prefs.storage.backup_dir = value
        save_backup_dir(value, self._prefs_path)
        current = backup_directory(self._transfer.workspace_roots, self._transfer.backup_dir)
        self._add_system_message(f"Backups go to {current}")

    def _cmd_stats(self) -> None:
        stats = self._transfer.statistics()
        self._add_system_message(
            "Statistics\n"
            f"  Groups:            {stats['groups']}\n"
            f"  Files:             {stats['files']}\n"
            f"  Group bookmarks:   {stats['groupBookmarks']}\n"
            f"  Global bookmarks:  {stats['globalBookmarks']}\n"
            f"  Total bookmarks:   {stats['totalBookmarks']}"
        )

    # ── Aliases ──────────────────────────────────────────────────

    def _cmd_alias(self, text: str) -> None:
        """List, set, or remove file display aliases."""
        args = self._split_args(text)
        if args is None:
            return

        if not args:
            aliases = self._aliases.load()
            if not aliases:
                self._add_system_message(
                    "No aliases defined.\nUsage: /alias <path> <alias>"
                )
                return
            lines = ["Aliases:"]
            for path, alias in sorted(aliases.items()):
                lines.append(f"  {alias} → {path}")
            self._add_system_message("\n".join(lines))
            return

        if args[0] == "remove":
            if len(args) != 2:
                self._add_system_message("Usage: /alias remove <path>")
                return
            path = self._resolve_path(args[1])
            alias = self._aliases.alias_for(path)
            if alias is not None and self._aliases.remove_alias(path):
                self._add_system_message(f"Alias '{alias}' for {path} removed")
                self._refresh_tree()
            else:
                self._add_system_message(f"No alias for {path}")
            return

        if len(args) != 2:
            self._add_system_message("Usage: /alias <path> <alias>")
            return
        path = self._resolve_path(args[0])
        self._aliases.set_alias(path, args[1])
        self._add_system_message(f"{path} shown as '{args[1].strip()}'")
        self._refresh_tree()
