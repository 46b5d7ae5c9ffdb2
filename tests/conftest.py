"""Shared test fixtures for the favorite-files test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from favorite_files.persistence import (
    AliasStore,
    BookmarkStore,
    FavoritesStore,
    WorkspaceState,
)


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    return tmp_path / "state" / "workspace.json"


@pytest.fixture
def state(state_path: Path) -> WorkspaceState:
    """A workspace state backed by a file under tmp_path."""
    return WorkspaceState(state_path)


@pytest.fixture
def favorites(state: WorkspaceState) -> FavoritesStore:
    return FavoritesStore(state)


@pytest.fixture
def bookmarks(state: WorkspaceState) -> BookmarkStore:
    return BookmarkStore(state)


@pytest.fixture
def aliases(state: WorkspaceState) -> AliasStore:
    return AliasStore(state)


# -- Sample data --------------------------------------------------------------


@pytest.fixture
def sample_favorites():
    """Two groups in the current shape, one with a group bookmark."""
    return {
        "Work": {
            "files": ["/ws/a.py", "/ws/b.py"],
            "bookmarks": [
                {"filePath": "/ws/a.py", "line": 10, "description": "entry", "timestamp": 1},
            ],
        },
        "Docs": {"files": ["/ws/README.md"], "bookmarks": []},
    }


@pytest.fixture
def sample_bookmarks():
    """Global bookmarks for two files."""
    return {
        "/ws/a.py": [
            {"filePath": "/ws/a.py", "line": 3, "timestamp": 2},
            {"filePath": "/ws/a.py", "line": 42, "description": "todo", "timestamp": 3},
        ],
        "/ws/c.py": [{"filePath": "/ws/c.py", "line": 7, "timestamp": 4}],
    }
