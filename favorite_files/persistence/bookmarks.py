"""Global (ungrouped) bookmark persistence store."""

from __future__ import annotations

from ..log import logger
from ..lookup import find_index
from ..models import Bookmark, BookmarksDict
from .state import BOOKMARKS_KEY, StateKeyStore


class BookmarkStore(StateKeyStore):
    """Global bookmarks (``{file_path: [bookmark_dict, ...]}``).

    A file's key exists only while it has at least one bookmark.
    """

    key = BOOKMARKS_KEY

    def load(self) -> BookmarksDict:
        """Return a copy of the full bookmarks mapping."""
        return self.load_raw()

    def save(self, bookmarks: BookmarksDict) -> None:
        """Replace the whole mapping (used by import)."""
        with self.lock:
            self.save_raw(bookmarks)

    def for_file(self, file_path: str | None) -> list[Bookmark]:
        """Return bookmarks for a single file (empty list if none)."""
        if not file_path:
            return []
        return [Bookmark.from_dict(bm) for bm in self.load().get(file_path, [])]

    def files(self) -> list[str]:
        return list(self.load())

    def count(self) -> int:
        return sum(len(bms) for bms in self.load().values())

    def is_empty(self) -> bool:
        return not self.load()

    # -- mutations ------------------------------------------------------------

    def add_bookmark(
        self, file_path: str, line: int, description: str | None = None
    ) -> Bookmark:
        """Append a new bookmark for *file_path* and persist it."""
        bookmark = Bookmark(file_path=file_path, line=line, description=description or None)
        with self.lock:
            data = self.load()
            data.setdefault(file_path, []).append(bookmark.to_dict())
            self.save_raw(data)
        logger.debug("bookmarked %s:%d", file_path, line)
        return bookmark

    def remove_bookmark(self, file_path: str, label: str) -> Bookmark | None:
        """Remove the first bookmark of *file_path* whose label is *label*."""
        with self.lock:
            data = self.load()
            bookmarks = data.get(file_path, [])
            idx = find_index(bookmarks, file_path, label)
            if idx is None:
                return None
            removed = bookmarks.pop(idx)
            if not bookmarks:
                del data[file_path]
            self.save_raw(data)
        return Bookmark.from_dict(removed)

    def rename_bookmark(
        self, file_path: str, label: str, new_description: str | None
    ) -> Bookmark | None:
        """Replace the description of the first bookmark matching *label*."""
        with self.lock:
            data = self.load()
            bookmarks = data.get(file_path, [])
            idx = find_index(bookmarks, file_path, label)
            if idx is None:
                return None
            if new_description:
                bookmarks[idx]["description"] = new_description
            else:
                bookmarks[idx].pop("description", None)
            self.save_raw(data)
            return Bookmark.from_dict(bookmarks[idx])

    def clear_file(self, file_path: str) -> int:
        """Drop every bookmark of *file_path*. Return how many were removed."""
        with self.lock:
            data = self.load()
            removed = data.pop(file_path, [])
            if removed:
                self.save_raw(data)
        return len(removed)

    def clear_all(self) -> int:
        """Drop every global bookmark. Return how many were removed."""
        with self.lock:
            count = self.count()
            self.save_raw({})
        return count
