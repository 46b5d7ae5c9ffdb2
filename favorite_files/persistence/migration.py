"""Upgrade older persisted favorites shapes to the current one.

Shape V0 stored each group as a bare list of file paths::

    {"Work": ["/a.py", "/b.py"]}

The current shape wraps the list and adds group bookmarks::

    {"Work": {"files": ["/a.py", "/b.py"], "bookmarks": []}}
"""

from __future__ import annotations

from typing import Any

from ..log import logger
from ..models import FavoritesDict
from .state import FAVORITES_KEY, WorkspaceState


def is_legacy_shape(data: Any) -> bool:
    """Return True if *data* is a non-empty V0 favorites mapping.

    Only the first group is inspected, mirroring how V0 data was written:
    every group had the same shape.
    """
    if not isinstance(data, dict) or not data:
        return False
    first = next(iter(data.values()))
    return isinstance(first, list)


def migrate(data: Any) -> FavoritesDict:
    """Return *data* in the current shape.

    Already-current data is returned as the very same object, which lets
    callers detect whether anything changed with an identity check.
    """
    if data is None:
        return {}
    if not is_legacy_shape(data):
        return data
    migrated: FavoritesDict = {}
    for name, value in data.items():
        if isinstance(value, list):
            migrated[name] = {"files": list(value), "bookmarks": []}
        else:
            migrated[name] = value
    return migrated


def migrate_state(state: WorkspaceState) -> bool:
    """Migrate the favorites stored in *state* and write them back.

    Return True if a migration was applied.  Safe to call on every start.
    """
    raw = state.get(FAVORITES_KEY, {})
    migrated = migrate(raw)
    if migrated is raw:
        return False
    logger.info("migrated %d legacy favorites group(s)", len(migrated))
    state.update(FAVORITES_KEY, migrated)
    return True
