"""Data model for favorites groups and bookmarks.

The persisted JSON uses camelCase keys (``filePath``) so that documents
exported by older versions of the tool import unchanged.  The dataclasses
here are the in-memory view; ``to_dict``/``from_dict`` convert between the two.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

# Persisted shapes, as stored in the workspace state file.
BookmarkDict = dict[str, Any]
GroupDict = dict[str, list]
FavoritesDict = dict[str, GroupDict]
BookmarksDict = dict[str, list[BookmarkDict]]


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def effective_label(bookmark: Bookmark | BookmarkDict) -> str:
    """Return the display label used to identify *bookmark*.

    The description when it is non-empty, otherwise ``Line <n>``.  Every
    bookmark lookup goes through this function.
    """
    if isinstance(bookmark, Bookmark):
        description, line = bookmark.description, bookmark.line
    else:
        description, line = bookmark.get("description"), bookmark.get("line")
    if description:
        return description
    return f"Line {line}"


@dataclass
class Bookmark:
    """A marked line in a file."""

    file_path: str
    line: int
    description: str | None = None
    timestamp: int = field(default_factory=now_ms)

    def __post_init__(self) -> None:
        if isinstance(self.line, bool) or not isinstance(self.line, int):
            raise ValueError(f"Bookmark line must be an int, got {self.line!r}")
        if self.line < 1:
            raise ValueError(f"Bookmark line must be positive, got {self.line}")

    @property
    def label(self) -> str:
        return effective_label(self)

    def to_dict(self) -> BookmarkDict:
        data: BookmarkDict = {"filePath": self.file_path, "line": self.line}
        if self.description:
            data["description"] = self.description
        data["timestamp"] = self.timestamp
        return data

    @classmethod
    def from_dict(cls, data: BookmarkDict) -> Bookmark:
        return cls(
            file_path=str(data.get("filePath", "")),
            line=int(data.get("line", 1)),
            description=data.get("description") or None,
            timestamp=int(data.get("timestamp", 0)),
        )


@dataclass
class Group:
    """A named, ordered collection of files plus its own bookmarks."""

    name: str
    files: list[str] = field(default_factory=list)
    bookmarks: list[Bookmark] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.files and not self.bookmarks

    def to_dict(self) -> GroupDict:
        return {
            "files": list(self.files),
            "bookmarks": [bm.to_dict() for bm in self.bookmarks],
        }

    @classmethod
    def from_dict(cls, name: str, data: GroupDict) -> Group:
        return cls(
            name=name,
            files=list(data.get("files", [])),
            bookmarks=[Bookmark.from_dict(bm) for bm in data.get("bookmarks", [])],
        )


def empty_group() -> GroupDict:
    """Persisted shape of a newly created group."""
    return {"files": [], "bookmarks": []}
