"""Favorites groups persistence store."""

from __future__ import annotations

from ..errors import GroupExistsError, GroupNotFoundError
from ..log import logger
from ..lookup import find_index
from ..models import Bookmark, FavoritesDict, Group, empty_group
from .state import FAVORITES_KEY, StateKeyStore


def _check_name(name: str) -> None:
    if not name or not name.strip():
        raise ValueError("Group name cannot be empty")


class FavoritesStore(StateKeyStore):
    """Favorites groups (``{group: {files: [...], bookmarks: [...]}}``).

    Every mutation reads the whole mapping, changes it, and writes it back.
    Not-found conditions are reported through return values (``False`` or
    ``None``) rather than exceptions; callers decide whether to warn.
    """

    key = FAVORITES_KEY

    def load(self) -> FavoritesDict:
        """Return a copy of the full favorites mapping."""
        return self.load_raw()

    def save(self, favorites: FavoritesDict) -> None:
        """Replace the whole mapping (used by import)."""
        with self.lock:
            self.save_raw(favorites)

    # -- queries --------------------------------------------------------------

    def group_names(self) -> list[str]:
        return list(self.load())

    def __contains__(self, name: object) -> bool:
        return name in self.load()

    def get_group(self, name: str) -> Group | None:
        data = self.load().get(name)
        if data is None:
            return None
        return Group.from_dict(name, data)

    def groups(self) -> list[Group]:
        return [Group.from_dict(name, data) for name, data in self.load().items()]

    def group_for_file(self, path: str) -> str | None:
        """Name of the first group whose files contain *path*."""
        for name, data in self.load().items():
            if path in data.get("files", []):
                return name
        return None

    def is_empty(self) -> bool:
        return not self.load()

    # -- groups ---------------------------------------------------------------

    def create_group(self, name: str) -> None:
        """Create an empty group.

        Raises:
            ValueError: If *name* is blank.
            GroupExistsError: If the group already exists.
        """
        _check_name(name)
        with self.lock:
            data = self.load()
            if name in data:
                raise GroupExistsError(name)
            data[name] = empty_group()
            self.save_raw(data)
        logger.debug("created group %r", name)

    def rename_group(self, old_name: str, new_name: str, *, overwrite: bool = False) -> None:
        """Move the contents of *old_name* to *new_name*.

        The group keeps its position.  If *new_name* is already taken the
        rename is refused unless *overwrite* is set, in which case the
        existing contents of *new_name* are discarded.

        Raises:
            ValueError: If *new_name* is blank.
            GroupNotFoundError: If *old_name* does not exist.
            GroupExistsError: If *new_name* exists and *overwrite* is False.
        """
        _check_name(new_name)
        with self.lock:
            data = self.load()
            if old_name not in data:
                raise GroupNotFoundError(old_name)
            if old_name == new_name:
                return
            if new_name in data and not overwrite:
                raise GroupExistsError(new_name)
            renamed: FavoritesDict = {}
            for name, value in data.items():
                if name == new_name:
                    continue
                renamed[new_name if name == old_name else name] = value
            self.save_raw(renamed)
        logger.debug("renamed group %r -> %r", old_name, new_name)

    def delete_group(self, name: str) -> bool:
        """Remove *name*. Return ``False`` if it did not exist."""
        with self.lock:
            data = self.load()
            if name not in data:
                return False
            del data[name]
            self.save_raw(data)
        logger.debug("deleted group %r", name)
        return True

    # -- files ----------------------------------------------------------------

    def add_file(self, group: str, path: str) -> bool:
        """Append *path* to *group*. Return ``False`` if already present.

        Raises:
            GroupNotFoundError: If *group* does not exist.
        """
        with self.lock:
            data = self.load()
            if group not in data:
                raise GroupNotFoundError(group)
            files = data[group].setdefault("files", [])
            if path in files:
                return False
            files.append(path)
            self.save_raw(data)
        return True

    def remove_file(self, path: str, group: str | None = None) -> str | None:
        """Remove *path* from the first group containing it.

        With *group* given, only that group is searched.  Return the name of
        the group it was removed from, or ``None`` if nothing matched.
        """
        with self.lock:
            data = self.load()
            names = [group] if group is not None else list(data)
            for name in names:
                files = data.get(name, {}).get("files", [])
                if path in files:
                    files.remove(path)
                    self.save_raw(data)
                    return name
        return None

    def reorder_file(self, group: str, from_path: str, to_path: str) -> bool:
        """Move *from_path* to the index *to_path* currently occupies.

        ``[A, B, C, D]`` with ``reorder_file(g, B, D)`` gives
        ``[A, C, D, B]``.  Return ``False`` (no change) if the paths are
        equal, either is missing from *group*, or *group* does not exist.
        """
        if from_path == to_path:
            return False
        with self.lock:
            data = self.load()
            files = data.get(group, {}).get("files")
            if not files or from_path not in files or to_path not in files:
                return False
            target = files.index(to_path)
            files.remove(from_path)
            files.insert(target, from_path)
            self.save_raw(data)
        return True

    # -- group bookmarks ------------------------------------------------------

    def add_group_bookmark(self, group: str, bookmark: Bookmark) -> None:
        """Append *bookmark* to *group*, creating the group if needed.

        Raises:
            ValueError: If *group* has to be created and its name is blank.
        """
        with self.lock:
            data = self.load()
            if group not in data:
                _check_name(group)
            entry = data.setdefault(group, empty_group())
            entry.setdefault("bookmarks", []).append(bookmark.to_dict())
            self.save_raw(data)

    def group_bookmarks(self, group: str) -> list[Bookmark]:
        data = self.load().get(group, {})
        return [Bookmark.from_dict(bm) for bm in data.get("bookmarks", [])]

    def remove_group_bookmark(
        self, group: str, file_path: str, label: str
    ) -> Bookmark | None:
        """Remove the first bookmark in *group* matching (*file_path*, *label*)."""
        with self.lock:
            data = self.load()
            bookmarks = data.get(group, {}).get("bookmarks", [])
            idx = find_index(bookmarks, file_path, label)
            if idx is None:
                return None
            removed = bookmarks.pop(idx)
            self.save_raw(data)
        return Bookmark.from_dict(removed)

    def rename_group_bookmark(
        self, group: str, file_path: str, label: str, new_description: str | None
    ) -> Bookmark | None:
        """Replace the description of the first matching bookmark in *group*."""
        with self.lock:
            data = self.load()
            bookmarks = data.get(group, {}).get("bookmarks", [])
            idx = find_index(bookmarks, file_path, label)
            if idx is None:
                return None
            if new_description:
                bookmarks[idx]["description"] = new_description
            else:
                bookmarks[idx].pop("description", None)
            self.save_raw(data)
            return Bookmark.from_dict(bookmarks[idx])

    def clear_group_bookmarks(self, group: str) -> int:
        """Empty the bookmarks of *group*. Return how many were removed.

        Raises:
            GroupNotFoundError: If *group* does not exist.
        """
        with self.lock:
            data = self.load()
            if group not in data:
                raise GroupNotFoundError(group)
            count = len(data[group].get("bookmarks", []))
            data[group]["bookmarks"] = []
            self.save_raw(data)
        return count
