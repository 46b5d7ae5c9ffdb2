"""Persistence layer: the workspace state file and the stores keyed into it."""

from ._base import JsonStore
from .aliases import AliasStore
from .bookmarks import BookmarkStore
from .favorites import FavoritesStore
from .migration import migrate, migrate_state
from .state import WorkspaceState, workspace_state_path

__all__ = [
    "AliasStore",
    "BookmarkStore",
    "FavoritesStore",
    "JsonStore",
    "WorkspaceState",
    "migrate",
    "migrate_state",
    "workspace_state_path",
]
