"""Resolve bookmark references back to stored records.

Bookmarks carry no persisted identifier.  A reference is the derived key
``(scope, file_path, label)`` where *scope* is the owning group name for
group bookmarks and ``None`` for global ones, and *label* is the
:func:`~favorite_files.models.effective_label`.  Two bookmarks sharing a
key cannot be told apart; every lookup resolves to the first match.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import BookmarkDict, effective_label


@dataclass(frozen=True)
class BookmarkRef:
    """Reference to a bookmark by scope, file, and effective label."""

    file_path: str
    label: str
    group: str | None = None

    @property
    def is_global(self) -> bool:
        return self.group is None


def matches(bookmark: BookmarkDict, file_path: str, label: str) -> bool:
    """Return True if *bookmark* is identified by (*file_path*, *label*)."""
    return bookmark.get("filePath") == file_path and effective_label(bookmark) == label


def find_index(
    bookmarks: list[BookmarkDict], file_path: str, label: str
) -> int | None:
    """Index of the first bookmark matching *file_path* and *label*, or None."""
    for i, bm in enumerate(bookmarks):
        if matches(bm, file_path, label):
            return i
    return None


def find_all(
    bookmarks: list[BookmarkDict], file_path: str, label: str
) -> list[int]:
    """Indexes of every bookmark sharing the key, for ambiguity checks."""
    return [i for i, bm in enumerate(bookmarks) if matches(bm, file_path, label)]


def is_ambiguous(bookmarks: list[BookmarkDict], file_path: str, label: str) -> bool:
    """True when more than one bookmark shares (*file_path*, *label*)."""
    return len(find_all(bookmarks, file_path, label)) > 1
