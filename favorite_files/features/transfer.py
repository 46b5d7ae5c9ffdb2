"""Export, import, and backup of favorites and bookmarks.

Document format (UTF-8 JSON, pretty-printed)::

    {
      "favorites": {group: {"files": [...], "bookmarks": [...]}},
      "bookmarks": {file_path: [bookmark, ...]},
      "exportDate": "2024-05-01T12:00:00.000Z",   # "backupDate" for backups
      "version": "1.0",
      "statistics": {"groups": 1, "files": 2, ...}
    }

The builders and :func:`normalize_import_data` are pure; the functions that
touch the disk raise :class:`~favorite_files.errors.TransferError`.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..errors import ImportFormatError, TransferError
from ..log import logger
from ..models import BookmarksDict, FavoritesDict

FORMAT_VERSION = "1.0"
IMPORTED_GROUP = "Imported Group"


def iso_now() -> str:
    """UTC timestamp in the ``2024-05-01T12:00:00.000Z`` form."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


# -- statistics ---------------------------------------------------------------


def compute_statistics(favorites: FavoritesDict, bookmarks: BookmarksDict) -> dict[str, int]:
    """Counts of groups, files, and bookmarks across both stores."""
    files = sum(len(g.get("files", [])) for g in favorites.values())
    group_bookmarks = sum(len(g.get("bookmarks", [])) for g in favorites.values())
    global_bookmarks = sum(len(bms) for bms in bookmarks.values())
    return {
        "groups": len(favorites),
        "files": files,
        "groupBookmarks": group_bookmarks,
        "globalBookmarks": global_bookmarks,
        "totalBookmarks": group_bookmarks + global_bookmarks,
    }


def format_statistics(stats: dict[str, int]) -> str:
    """One-line human summary of *stats*."""
    return (
        f"{stats['groups']} group(s), {stats['files']} file(s), "
        f"{stats['totalBookmarks']} bookmark(s) "
        f"({stats['groupBookmarks']} in groups, {stats['globalBookmarks']} global)"
    )


# -- documents ----------------------------------------------------------------


def build_export_document(
    favorites: FavoritesDict,
    bookmarks: BookmarksDict,
    *,
    date_key: str = "exportDate",
) -> dict[str, Any]:
    """Assemble an export (or, with ``date_key="backupDate"``, backup) document."""
    return {
        "favorites": favorites,
        "bookmarks": bookmarks,
        date_key: iso_now(),
        "version": FORMAT_VERSION,
        "statistics": compute_statistics(favorites, bookmarks),
    }


def build_backup_document(favorites: FavoritesDict, bookmarks: BookmarksDict) -> dict[str, Any]:
    return build_export_document(favorites, bookmarks, date_key="backupDate")


def write_document(document: dict[str, Any], path: Path, *, indent: int = 2) -> Path:
    """Write *document* to *path* as indented JSON.

    Raises:
        TransferError: If the file cannot be written.  Not retried.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(document, indent=indent, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    except OSError as exc:
        raise TransferError(f"Could not write {path}: {exc}", path) from exc
    return path


def default_export_name(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"favorites-export-{now.strftime('%Y-%m-%d')}.json"


def backup_name(now: datetime | None = None) -> str:
    now = now or datetime.now()
    stamp = now.strftime("%Y-%m-%dT%H-%M-%S") + f"-{now.microsecond // 1000:03d}"
    return f"favorites-backup-{stamp}.json"


def unique_path(path: Path) -> Path:
    """*path*, or ``<stem>-<n><suffix>`` for the first *n* not yet taken."""
    candidate, n = path, 1
    while candidate.exists():
        candidate = path.with_name(f"{path.stem}-{n}{path.suffix}")
        n += 1
    return candidate


def backup_directory(
    workspace_roots: list[Path] | None = None, override: Path | None = None
) -> Path:
    """Directory that receives automatic backups.

    An explicit *override* wins; then the first workspace root; then home.
    """
    if override is not None:
        return override
    if workspace_roots:
        return workspace_roots[0]
    return Path.home()


# -- import -------------------------------------------------------------------


def parse_import_text(text: str) -> dict[str, Any]:
    """Parse the text of an import file.

    Raises:
        ImportFormatError: If the text is not JSON, not an object, or has no
            ``favorites`` key.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ImportFormatError(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ImportFormatError("Import file must contain a JSON object")
    if "favorites" not in data:
        raise ImportFormatError("Invalid format: missing 'favorites'")
    return data


def normalize_import_data(data: dict[str, Any]) -> tuple[FavoritesDict, BookmarksDict]:
    """Bring any supported import shape to the current store shapes.

    Accepted ``favorites`` values:

    * a list of paths: one group named ``Imported Group``;
    * ``{group: [paths]}``: files-only groups;
    * ``{group: {"files": [...], "bookmarks": [...]}}``: taken as-is, with
      missing or null keys defaulting to empty lists.

    ``bookmarks`` must be ``{file_path: [bookmark, ...]}`` (or absent).
    Only the shape is checked; bookmark fields are taken as they are.

    Raises:
        ImportFormatError: For any other ``favorites`` or ``bookmarks`` shape.
    """
    if "favorites" not in data:
        raise ImportFormatError("Invalid format: missing 'favorites'")
    raw = data["favorites"]
    favorites: FavoritesDict = {}
    if isinstance(raw, list):
        favorites[IMPORTED_GROUP] = {"files": list(raw), "bookmarks": []}
    elif isinstance(raw, dict):
        for name, value in raw.items():
            if isinstance(value, list):
                favorites[name] = {"files": list(value), "bookmarks": []}
            elif isinstance(value, dict):
                where = f"group '{name}'"
                favorites[name] = {
                    "files": _list_field(value, "files", where),
                    "bookmarks": _bookmark_list(value.get("bookmarks"), where),
                }
            else:
                raise ImportFormatError(
                    f"Invalid format: group '{name}' must be a list or an object"
                )
    else:
        raise ImportFormatError("Invalid format: 'favorites' must be a list or an object")

    raw_bookmarks = data.get("bookmarks")
    if raw_bookmarks is None:
        raw_bookmarks = {}
    if not isinstance(raw_bookmarks, dict):
        raise ImportFormatError("Invalid format: 'bookmarks' must be an object")
    bookmarks: BookmarksDict = {
        path: _bookmark_list(bms, f"bookmarks of '{path}'")
        for path, bms in raw_bookmarks.items()
    }
    return favorites, bookmarks


def _list_field(value: dict[str, Any], key: str, where: str) -> list:
    items = value.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        raise ImportFormatError(f"Invalid format: '{key}' of {where} must be a list")
    return list(items)


def _bookmark_list(items: Any, where: str) -> list:
    if items is None:
        return []
    if not isinstance(items, list) or not all(isinstance(bm, dict) for bm in items):
        raise ImportFormatError(f"Invalid format: {where} must be a list of objects")
    return list(items)


def read_import_file(path: Path) -> tuple[FavoritesDict, BookmarksDict]:
    """Read, parse, and normalize the import file at *path*.

    Raises:
        TransferError: If the file cannot be read.
        ImportFormatError: If the content is not a valid document.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TransferError(f"Could not read {path}: {exc}", path) from exc
    return normalize_import_data(parse_import_text(text))


@dataclass
class PendingImport:
    """An import that has been read, normalized, and backed up."""

    source: Path
    favorites: FavoritesDict
    bookmarks: BookmarksDict
    statistics: dict[str, int]
    backup_path: Path | None = None


@dataclass
class ImportResult:
    """Outcome of :meth:`TransferEngine.import_file`."""

    applied: bool
    statistics: dict[str, int]
    backup_path: Path | None = None


class TransferEngine:
    """Export and import both stores of a workspace.

    *favorites* and *bookmarks* are the workspace's
    :class:`~favorite_files.persistence.FavoritesStore` and
    :class:`~favorite_files.persistence.BookmarkStore`.
    """

    def __init__(
        self,
        favorites,
        bookmarks,
        *,
        workspace_roots: list[Path] | None = None,
        backup_dir: Path | None = None,
        indent: int = 2,
    ) -> None:
        self.favorites = favorites
        self.bookmarks = bookmarks
        self.workspace_roots = list(workspace_roots or [])
        self.backup_dir = backup_dir
        self.indent = indent

    def statistics(self) -> dict[str, int]:
        return compute_statistics(self.favorites.load(), self.bookmarks.load())

    def has_data(self) -> bool:
        return not (self.favorites.is_empty() and self.bookmarks.is_empty())

    def default_export_path(self) -> Path:
        return backup_directory(self.workspace_roots) / default_export_name()

    def export_document(self) -> dict[str, Any]:
        return build_export_document(self.favorites.load(), self.bookmarks.load())

    def export_to(self, path: Path) -> dict[str, int]:
        """Write an export document to *path* and return its statistics."""
        document = self.export_document()
        write_document(document, path, indent=self.indent)
        logger.info("exported favorites to %s", path)
        return document["statistics"]

    def write_backup(self) -> Path:
        """Write a backup of the current stores and return its path."""
        directory = backup_directory(self.workspace_roots, self.backup_dir)
        path = unique_path(directory / backup_name())
        document = build_backup_document(self.favorites.load(), self.bookmarks.load())
        write_document(document, path, indent=self.indent)
        logger.info("wrote favorites backup to %s", path)
        return path

    # -- import ---------------------------------------------------------------

    def prepare_import(self, path: Path) -> PendingImport:
        """Read and normalize *path*, then back up the current data.

        Nothing in the stores changes here.  The backup is skipped when both
        stores are empty.

        Raises:
            TransferError: If reading the file or writing the backup fails.
            ImportFormatError: If the file is not a valid document.
        """
        favorites, bookmarks = read_import_file(path)
        backup_path = self.write_backup() if self.has_data() else None
        return PendingImport(
            source=path,
            favorites=favorites,
            bookmarks=bookmarks,
            statistics=compute_statistics(favorites, bookmarks),
            backup_path=backup_path,
        )

    def apply_import(self, pending: PendingImport) -> dict[str, int]:
        """Replace both stores with *pending* and return the new statistics."""
        self.replace(pending.favorites, pending.bookmarks)
        logger.info("imported favorites from %s", pending.source)
        return self.statistics()

    def import_file(
        self,
        path: Path,
        confirm: Callable[[PendingImport], bool] | None = None,
    ) -> ImportResult:
        """Prepare, confirm, and apply an import in one call.

        *confirm* receives the pending import and must return ``True`` for the
        stores to be replaced; ``None`` means confirmed.
        """
        pending = self.prepare_import(path)
        if confirm is not None and confirm(pending) is not True:
            logger.info("import of %s cancelled", path)
            return ImportResult(
                applied=False, statistics=pending.statistics, backup_path=pending.backup_path
            )
        stats = self.apply_import(pending)
        return ImportResult(applied=True, statistics=stats, backup_path=pending.backup_path)

    def replace(self, favorites: FavoritesDict, bookmarks: BookmarksDict) -> None:
        """Swap in new contents for both stores in a single state write.

        Both stores must share one workspace state.  Either both keys
        change or, when the write fails, neither does.
        """
        with self.favorites.lock, self.bookmarks.lock:
            self.favorites.state.update_many(
                {self.favorites.key: favorites, self.bookmarks.key: bookmarks}
            )
