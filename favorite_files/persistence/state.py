"""Per-workspace persisted key/value state."""

from __future__ import annotations

import copy
import hashlib
import re
import threading
from pathlib import Path
from typing import Any

from ._base import JsonStore
from ..log import logger

FAVORITES_KEY = "favorites"
BOOKMARKS_KEY = "bookmarks"
ALIASES_KEY = "favoriteAliases"


def workspace_state_path(state_dir: Path, workspace_root: Path) -> Path:
    """Return the state file for *workspace_root* under *state_dir*.

    The name combines a readable slug of the folder name with a short hash
    of the resolved path so two folders with the same name never collide.
    """
    resolved = workspace_root.expanduser().resolve()
    digest = hashlib.sha1(str(resolved).encode("utf-8")).hexdigest()[:12]
    slug = re.sub(r"[^A-Za-z0-9_.-]+", "-", resolved.name).strip("-") or "root"
    return state_dir / "workspaces" / f"{slug}-{digest}.json"


class WorkspaceState(JsonStore):
    """Workspace-scoped state (``{key: value}``), cached in memory.

    Values handed out by :meth:`get` are deep copies; the only way to change
    persisted state is :meth:`update`, which writes through to disk.
    """

    def __init__(self, path: Path) -> None:
        super().__init__(path)
        self._lock = threading.RLock()
        self._data: dict[str, Any] | None = None

    @classmethod
    def for_workspace(cls, state_dir: Path, workspace_root: Path) -> WorkspaceState:
        return cls(workspace_state_path(state_dir, workspace_root))

    def _cache(self) -> dict[str, Any]:
        if self._data is None:
            raw = self.load_raw()
            if not isinstance(raw, dict):
                logger.warning("ignoring non-object workspace state in %s", self.path)
                raw = {}
            self._data = raw
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Return a copy of the value stored under *key*."""
        with self._lock:
            data = self._cache()
            if key not in data:
                return copy.deepcopy(default)
            return copy.deepcopy(data[key])

    def update(self, key: str, value: Any) -> None:
        """Store *value* under *key* and persist the whole state.

        ``None`` removes the key.
        """
        self.update_many({key: value})

    def update_many(self, values: dict[str, Any]) -> None:
        """Store several keys with one write; ``None`` values remove keys.

        If the write fails the cached state is left as it was.
        """
        with self._lock:
            data = dict(self._cache())
            for key, value in values.items():
                if value is None:
                    data.pop(key, None)
                else:
                    data[key] = copy.deepcopy(value)
            self.save_raw(data)
            self._data = data

    def reload(self) -> None:
        """Drop the in-memory cache so the next read hits the disk."""
        with self._lock:
            self._data = None


class StateKeyStore:
    """A store bound to one key of a :class:`WorkspaceState`.

    Read-modify-write sequences run under ``self.lock`` so a store can be
    driven from worker threads without losing updates.
    """

    key: str = ""

    def __init__(self, state: WorkspaceState) -> None:
        self.state = state
        self.lock = threading.RLock()

    def load_raw(self) -> dict:
        """Return a copy of the persisted mapping (``{}`` if unset or invalid)."""
        raw = self.state.get(self.key, {})
        if not isinstance(raw, dict):
            logger.warning("ignoring invalid %r value in %s", self.key, self.state.path)
            return {}
        return raw

    def save_raw(self, data: dict) -> None:
        self.state.update(self.key, data)
