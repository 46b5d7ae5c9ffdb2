"""Command handler mixins for FavoritesApp."""

from .bookmark_cmds import BookmarkCommandsMixin  # noqa: F401
from .favorites_cmds import FavoritesCommandsMixin  # noqa: F401
from .transfer_cmds import TransferCommandsMixin  # noqa: F401

__all__ = [
    "BookmarkCommandsMixin",
    "FavoritesCommandsMixin",
    "TransferCommandsMixin",
]
