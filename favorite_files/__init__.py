"""favorite-files: favorites groups and line bookmarks for a workspace."""

from .constants import APP_VERSION as __version__

__all__ = ["__version__"]
