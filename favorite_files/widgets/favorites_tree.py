"""Favorites tree panel."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Tree
from textual.widgets.tree import TreeNode as TextualTreeNode

from ..nodes import (
    BookmarkFileNode,
    BookmarkNode,
    BookmarksRootNode,
    FileNode,
    GroupBookmarksNode,
    GroupNode,
    TreeEntry,
    TreeNode,
)

_STYLES: dict[type, str] = {
    GroupNode: "bold",
    FileNode: "",
    GroupBookmarksNode: "italic",
    BookmarksRootNode: "bold italic",
    BookmarkFileNode: "",
    BookmarkNode: "dim",
}


def _expand_key(node: TreeNode) -> str:
    """Stable key for remembering which top-level rows were open."""
    if isinstance(node, GroupNode):
        return f"group:{node.name}"
    return node.kind


class FavoritesTree(Tree[TreeNode]):
    """Tree of groups, files, and bookmarks built from ``nodes.build_tree``."""

    DEFAULT_CSS = """
    FavoritesTree {
        width: 40;
        border-right: solid $surface-lighten-2;
    }
    """

    def __init__(self, **kwargs: object) -> None:
        super().__init__("Favorites", **kwargs)
        self.show_root = False
        self.guide_depth = 3

    def populate(self, entries: list[TreeEntry]) -> None:
        """Replace the tree contents, keeping expanded top-level rows open."""
        expanded = {
            _expand_key(node.data)
            for node in self.root.children
            if node.is_expanded and node.data is not None
        }
        self.clear()
        for entry in entries:
            self._add_entry(self.root, entry, expanded)
        self.root.expand()

    def _add_entry(
        self, parent: TextualTreeNode[TreeNode], entry: TreeEntry, expanded: set[str]
    ) -> None:
        label = Text(entry.node.label, style=_STYLES.get(type(entry.node), ""))
        if not entry.children and not isinstance(entry.node, GroupNode):
            parent.add_leaf(label, data=entry.node)
            return
        branch = parent.add(
            label, data=entry.node, expand=_expand_key(entry.node) in expanded
        )
        for child in entry.children:
            self._add_entry(branch, child, expanded)
