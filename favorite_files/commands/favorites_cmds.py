"""Group and favorite-file commands."""

from __future__ import annotations

from ..errors import FavoritesError, GroupExistsError, GroupNotFoundError
from ..models import Bookmark


class FavoritesCommandsMixin:
    """/fav and /group commands."""

    # ── /fav ─────────────────────────────────────────────────────

    def _cmd_fav(self, text: str) -> None:
        args = self._split_args(text)
        if args is None:
            return
        if not args:
            self._list_groups()
            return

        sub, rest = args[0].lower(), args[1:]
        if sub == "add":
            self._fav_add(rest[0] if rest else None)
        elif sub == "remove":
            if not rest or len(rest) > 2:
                self._add_system_message("Usage: /fav remove <path> [group]")
                return
            self._fav_remove(rest[0], rest[1] if len(rest) > 1 else None)
        elif sub == "move":
            if len(rest) != 3:
                self._add_system_message("Usage: /fav move <group> <from> <to>")
                return
            self._fav_move(*rest)
        else:
            self._add_system_message(f"Unknown /fav subcommand: {sub}")

    def _list_groups(self) -> None:
        groups = self._favorites.groups()
        if not groups:
            self._add_system_message(
                "No favorites groups.\nCreate one: /group create <name>"
            )
            return
        lines = ["Favorites groups:"]
        for group in groups:
            if group.is_empty:
                lines.append(f"  {group.name}  (empty)")
                continue
            lines.append(
                f"  {group.name}  ({len(group.files)} file(s), "
                f"{len(group.bookmarks)} bookmark(s))"
            )
        self._add_system_message("\n".join(lines))

    def _fav_add(self, group: str | None) -> None:
        """Add the active file to *group*, creating the group if needed."""
        path = self._require_active_file()
        if path is None:
            return
        if group is None:
            names = self._favorites.group_names()
            if len(names) != 1:
                self._add_system_message(
                    "Usage: /fav add <group>  (groups: "
                    + (", ".join(names) or "none")
                    + ")"
                )
                return
            group = names[0]
        if group not in self._favorites:
            try:
                self._favorites.create_group(group)
            except ValueError as exc:
                self._show_error(str(exc))
                return
            self._add_system_message(f"Created group '{group}'")
        if self._favorites.add_file(group, path):
            self._add_system_message(f"Added {path} to '{group}'")
        else:
            self._add_system_message(f"{path} is already in '{group}'")
        self._refresh_tree()

    def _fav_remove(self, path: str, group: str | None) -> None:
        path = self._resolve_path(path)
        removed_from = self._favorites.remove_file(path, group)
        if removed_from is None:
            where = f"'{group}'" if group else "any group"
            self._add_system_message(f"Warning: {path} is not in {where}")
            return
        self._add_system_message(f"Removed {path} from '{removed_from}'")
        self._refresh_tree()

    def _fav_move(self, group: str, from_path: str, to_path: str) -> None:
        from_path = self._resolve_path(from_path)
        to_path = self._resolve_path(to_path)
        if self._favorites.reorder_file(group, from_path, to_path):
            self._refresh_tree()
            return
        self._add_system_message(
            "Warning: nothing moved (both files must be different members of "
            f"'{group}')"
        )

    # ── /group ───────────────────────────────────────────────────

    def _cmd_group(self, text: str) -> None:
        args = self._split_args(text)
        if args is None:
            return
        if not args:
            self._list_groups()
            return

        sub, rest = args[0].lower(), args[1:]
        usage = {
            "create": ("/group create <name>", 1),
            "rename": ("/group rename <old> <new>", 2),
            "delete": ("/group delete <name>", 1),
            "add": ("/group add <name>", 1),
            "clear-bookmarks": ("/group clear-bookmarks <name>", 1),
        }
        if sub == "bookmark":
            self._group_bookmark(rest)
            return
        if sub not in usage:
            self._add_system_message(f"Unknown /group subcommand: {sub}")
            return
        hint, arity = usage[sub]
        if len(rest) != arity:
            self._add_system_message(f"Usage: {hint}")
            return

        if sub == "create":
            self._group_create(rest[0])
        elif sub == "rename":
            self._group_rename(rest[0], rest[1])
        elif sub == "delete":
            self._group_delete(rest[0])
        elif sub == "add":
            self._group_add_active(rest[0])
        else:
            self._group_clear_bookmarks(rest[0])

    def _group_create(self, name: str) -> None:
        try:
            self._favorites.create_group(name)
        except GroupExistsError:
            self._add_system_message(f'Warning: Group "{name}" already exists.')
            return
        except ValueError as exc:
            self._show_error(str(exc))
            return
        self._add_system_message(f"Created group '{name}'")
        self._refresh_tree()

    def _group_rename(self, old: str, new: str) -> None:
        try:
            self._favorites.rename_group(old, new)
        except GroupExistsError:

            def on_answer(confirmed: bool) -> None:
                if not confirmed:
                    self._add_system_message("Rename cancelled")
                    return
                try:
                    self._favorites.rename_group(old, new, overwrite=True)
                except FavoritesError as exc:
                    self._show_error(str(exc))
                    return
                self._add_system_message(f"Renamed '{old}' to '{new}' (replaced)")
                self._refresh_tree()

            self._confirm(
                f"Group '{new}' already exists. Replace its contents with '{old}'?",
                on_answer,
            )
            return
        except (GroupNotFoundError, ValueError) as exc:
            self._show_error(str(exc))
            return
        self._add_system_message(f"Renamed '{old}' to '{new}'")
        self._refresh_tree()

    def _group_delete(self, name: str) -> None:
        if name not in self._favorites:
            self._add_system_message(f"Warning: Group '{name}' not found")
            return

        def on_answer(confirmed: bool) -> None:
            if not confirmed:
                return
            self._favorites.delete_group(name)
            self._add_system_message(f"Deleted group '{name}'")
            self._refresh_tree()

        self._confirm(f"Delete group '{name}'?", on_answer)

    def _group_add_active(self, name: str) -> None:
        path = self._require_active_file()
        if path is None:
            return
        try:
            added = self._favorites.add_file(name, path)
        except GroupNotFoundError as exc:
            self._show_error(str(exc))
            return
        if added:
            self._add_system_message(f"Added {path} to '{name}'")
            self._refresh_tree()
        else:
            self._add_system_message(f"{path} is already in '{name}'")

    def _group_bookmark(self, rest: list[str]) -> None:
        """/group bookmark <name> <line> [description]"""
        if len(rest) < 2:
            self._add_system_message("Usage: /group bookmark <name> <line> [description]")
            return
        path = self._require_active_file()
        if path is None:
            return
        name, line_text = rest[0], rest[1]
        description = " ".join(rest[2:]) or None
        try:
            bookmark = Bookmark(file_path=path, line=int(line_text), description=description)
        except ValueError:
            self._show_error(f"Invalid line number: {line_text}")
            return
        try:
            self._favorites.add_group_bookmark(name, bookmark)
        except ValueError as exc:
            self._show_error(str(exc))
            return
        self._add_system_message(f"Bookmarked {bookmark.label} in '{name}'")
        self._refresh_tree()

    def _group_clear_bookmarks(self, name: str) -> None:
        try:
            count = self._favorites.clear_group_bookmarks(name)
        except GroupNotFoundError as exc:
            self._show_error(str(exc))
            return
        self._add_system_message(f"Cleared {count} bookmark(s) from '{name}'")
        self._refresh_tree()
