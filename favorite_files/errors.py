"""Exception types raised by the favorites core."""

from __future__ import annotations


class FavoritesError(Exception):
    """Base class for all favorites/bookmark errors."""


class GroupNotFoundError(FavoritesError, KeyError):
    """Raised when an operation names a group that does not exist."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Group '{name}' not found")
        self.name = name

    def __str__(self) -> str:
        # KeyError would repr() the message
        return self.args[0]


class GroupExistsError(FavoritesError, ValueError):
    """Raised when a group name is already taken."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Group '{name}' already exists")
        self.name = name


class ImportFormatError(FavoritesError, ValueError):
    """Raised when an import document cannot be parsed or normalized."""


class TransferError(FavoritesError, OSError):
    """Raised when writing or reading an export/backup file fails."""

    def __init__(self, message: str, path: object = None) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        return self.args[0]
