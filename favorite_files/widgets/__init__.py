"""Widgets for the favorite-files app."""

from .favorites_tree import FavoritesTree
from .screens import ConfirmScreen

__all__ = [
    "ConfirmScreen",
    "FavoritesTree",
]
