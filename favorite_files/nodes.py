"""Tree node model for the favorites panel.

Each kind of row is its own frozen dataclass carrying only the fields it
needs; ``TreeNode`` is the union of them.  :func:`build_tree` turns store
snapshots into nodes and knows nothing about how they are drawn.

Layout::

    <group>                  GroupNode
      <file>                 FileNode
      Bookmarks              GroupBookmarksNode
        <label>              BookmarkNode (group set)
    Bookmarks                BookmarksRootNode
      <file>                 BookmarkFileNode
        <label>              BookmarkNode (group None)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from .lookup import BookmarkRef
from .models import BookmarksDict, FavoritesDict, effective_label

BOOKMARKS_ROOT_LABEL = "Bookmarks"


@dataclass(frozen=True)
class GroupNode:
    name: str
    file_count: int
    bookmark_count: int
    kind: str = field(default="group", init=False)

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class FileNode:
    group: str
    path: str
    display: str
    kind: str = field(default="file", init=False)

    @property
    def label(self) -> str:
        return self.display


@dataclass(frozen=True)
class GroupBookmarksNode:
    group: str
    count: int
    kind: str = field(default="group-bookmarks", init=False)

    @property
    def label(self) -> str:
        return f"{BOOKMARKS_ROOT_LABEL} ({self.count})"


@dataclass(frozen=True)
class BookmarksRootNode:
    count: int
    kind: str = field(default="bookmarks-group", init=False)

    @property
    def label(self) -> str:
        return f"{BOOKMARKS_ROOT_LABEL} ({self.count})"


@dataclass(frozen=True)
class BookmarkFileNode:
    path: str
    display: str
    count: int
    kind: str = field(default="bookmark-file", init=False)

    @property
    def label(self) -> str:
        return f"{self.display} ({self.count})"


@dataclass(frozen=True)
class BookmarkNode:
    ref: BookmarkRef
    line: int
    display: str
    kind: str = field(default="bookmark", init=False)

    @property
    def label(self) -> str:
        return self.display


TreeNode = Union[
    GroupNode,
    FileNode,
    GroupBookmarksNode,
    BookmarksRootNode,
    BookmarkFileNode,
    BookmarkNode,
]


@dataclass
class TreeEntry:
    """A node with its children, in display order."""

    node: TreeNode
    children: list[TreeEntry]


def display_path(
    path: str,
    workspace_root: Path | None = None,
    aliases: dict[str, str] | None = None,
) -> str:
    """Label for *path*: its alias, else relative to the workspace, else as-is."""
    if aliases and aliases.get(path):
        return aliases[path]
    if workspace_root is not None:
        try:
            rel = os.path.relpath(path, workspace_root)
        except ValueError:
            # different drive on Windows
            return path
        if rel != os.pardir and not rel.startswith(os.pardir + os.sep):
            return rel
    return path


def bookmark_display(bookmark: dict, show_line: bool = True) -> str:
    label = effective_label(bookmark)
    if show_line and bookmark.get("description"):
        return f"{bookmark.get('line')}: {label}"
    return label


def _bookmark_node(bookmark: dict, group: str | None, show_line: bool) -> BookmarkNode:
    # imported bookmarks are not validated, so read the raw dict
    ref = BookmarkRef(
        file_path=str(bookmark.get("filePath", "")),
        label=effective_label(bookmark),
        group=group,
    )
    return BookmarkNode(
        ref=ref,
        line=int(bookmark.get("line") or 0),
        display=bookmark_display(bookmark, show_line),
    )


def build_tree(
    favorites: FavoritesDict,
    bookmarks: BookmarksDict,
    *,
    workspace_root: Path | None = None,
    aliases: dict[str, str] | None = None,
    show_bookmark_lines: bool = True,
) -> list[TreeEntry]:
    """Build the full favorites tree from store snapshots."""
    root = workspace_root
    entries: list[TreeEntry] = []
    for name, group in favorites.items():
        files = group.get("files", [])
        group_bms = group.get("bookmarks", [])
        children = [
            TreeEntry(FileNode(name, path, display_path(path, root, aliases)), [])
            for path in files
        ]
        if group_bms:
            children.append(
                TreeEntry(
                    GroupBookmarksNode(name, len(group_bms)),
                    [
                        TreeEntry(_bookmark_node(bm, name, show_bookmark_lines), [])
                        for bm in group_bms
                    ],
                )
            )
        entries.append(TreeEntry(GroupNode(name, len(files), len(group_bms)), children))

    if bookmarks:
        file_entries = []
        for path, bms in bookmarks.items():
            if not bms:
                continue
            file_entries.append(
                TreeEntry(
                    BookmarkFileNode(path, display_path(path, root, aliases), len(bms)),
                    [TreeEntry(_bookmark_node(bm, None, show_bookmark_lines), []) for bm in bms],
                )
            )
        total = sum(len(e.children) for e in file_entries)
        if file_entries:
            entries.append(TreeEntry(BookmarksRootNode(total), file_entries))
    return entries
