"""Entry point for the favorite-files CLI."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .constants import APP_NAME, APP_VERSION
from .errors import FavoritesError
from .features.transfer import PendingImport, TransferEngine, format_statistics
from .log import logger
from .persistence import BookmarkStore, FavoritesStore, WorkspaceState, migrate_state
from .preferences import Preferences, load_preferences


def _open_engine(workspace: Path, prefs: Preferences, state_path: Path | None) -> TransferEngine:
    """Headless startup: load, migrate, construct stores."""
    if state_path is not None:
        state = WorkspaceState(state_path)
    else:
        state = WorkspaceState.for_workspace(prefs.storage.resolved_state_dir(), workspace)
    migrate_state(state)
    return TransferEngine(
        FavoritesStore(state),
        BookmarkStore(state),
        workspace_roots=[workspace],
        backup_dir=prefs.storage.resolved_backup_dir(),
        indent=prefs.export.indent,
    )


def _stats_table(stats: dict[str, int], title: str) -> Table:
    table = Table(title=title, show_header=False)
    table.add_column("What")
    table.add_column("Count", justify="right")
    table.add_row("Groups", str(stats["groups"]))
    table.add_row("Files", str(stats["files"]))
    table.add_row("Group bookmarks", str(stats["groupBookmarks"]))
    table.add_row("Global bookmarks", str(stats["globalBookmarks"]))
    table.add_row("Total bookmarks", str(stats["totalBookmarks"]), style="bold")
    return table


def _setup_logging(log_file: str | None, verbose: bool) -> None:
    if not log_file:
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME, description="Favorite files and bookmarks for a workspace"
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"{APP_NAME} {APP_VERSION}",
    )
    parser.add_argument(
        "--workspace",
        "-w",
        type=Path,
        default=None,
        help="Workspace root (default: current directory)",
    )
    parser.add_argument(
        "--prefs",
        type=Path,
        default=None,
        help="Preferences file (default: ~/.favorite-files/preferences.yaml)",
    )
    parser.add_argument(
        "--state",
        type=Path,
        default=None,
        help="Use this workspace state file instead of the per-workspace default",
    )
    parser.add_argument(
        "--export",
        metavar="PATH",
        type=Path,
        help="Export favorites and bookmarks to PATH and exit",
    )
    parser.add_argument(
        "--import",
        dest="import_path",
        metavar="PATH",
        type=Path,
        help="Replace favorites and bookmarks with the content of PATH and exit",
    )
    parser.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Do not ask for confirmation on --import",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print statistics and exit",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write log messages to PATH",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug messages (with --log-file)",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="File to make active when the app starts",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run favorite-files."""
    args = build_parser().parse_args(argv)
    _setup_logging(args.log_file, args.verbose)

    workspace = (args.workspace or Path.cwd()).expanduser().resolve()
    prefs = load_preferences(args.prefs)
    console = Console()

    if args.export or args.import_path or args.stats:
        engine = _open_engine(workspace, prefs, args.state)
        try:
            if args.export:
                stats = engine.export_to(args.export)
                console.print(f"Exported to {args.export}")
                console.print(_stats_table(stats, "Exported"))
            if args.import_path:
                def confirm(pending: PendingImport) -> bool:
                    if args.yes or not prefs.import_.confirm:
                        return True
                    answer = console.input(
                        "Replace all favorites and bookmarks with "
                        f"{format_statistics(pending.statistics)}? {escape('[y/N]')} "
                    )
                    return answer.strip().lower() in ("y", "yes")

                result = engine.import_file(args.import_path, confirm)
                if result.backup_path is not None:
                    console.print(f"Backed up current data to {result.backup_path}")
                if not result.applied:
                    console.print("Import cancelled")
                    return 1
                console.print(_stats_table(result.statistics, "Imported"))
            if args.stats:
                console.print(_stats_table(engine.statistics(), "Statistics"))
        except FavoritesError as exc:
            console.print(f"[bold red]Error:[/] {escape(str(exc))}", highlight=False)
            return 1
        return 0

    try:
        from .app import run_app

        run_app(
            workspace_root=workspace,
            prefs=prefs,
            prefs_path=args.prefs,
            state_path=args.state,
            active_file=args.file,
        )
    except KeyboardInterrupt:
        pass
    except Exception:
        logger.debug("Fatal error in favorite-files", exc_info=True)
        import traceback

        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
