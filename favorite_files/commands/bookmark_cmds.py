"""Bookmark commands (global and group-scoped)."""

from __future__ import annotations

from ..lookup import BookmarkRef, is_ambiguous
from ..models import effective_label


def _pop_option(args: list[str], name: str) -> str | None:
    """Remove ``--name value`` from *args* and return the value."""
    if name in args:
        idx = args.index(name)
        if idx + 1 < len(args):
            value = args[idx + 1]
            del args[idx : idx + 2]
            return value
        del args[idx]
    return None


class BookmarkCommandsMixin:
    """/bookmark commands."""

    def _cmd_bookmark(self, text: str) -> None:
        args = self._split_args(text)
        if args is None:
            return
        if not args:
            self._list_bookmarks()
            return

        sub, rest = args[0].lower(), args[1:]
        if sub == "add":
            self._bookmark_add(rest)
        elif sub in ("remove", "rename"):
            file_opt = _pop_option(rest, "--file")
            group = _pop_option(rest, "--group")
            file_path = self._resolve_path(file_opt) if file_opt else self._active_file
            if not file_path:
                self._add_system_message("No active file. Use --file <path> or /open.")
                return
            if sub == "remove":
                if len(rest) != 1:
                    self._add_system_message(
                        "Usage: /bookmark remove <label> [--file F] [--group G]"
                    )
                    return
                self._bookmark_remove(BookmarkRef(file_path, rest[0], group))
            else:
                if len(rest) != 2:
                    self._add_system_message(
                        "Usage: /bookmark rename <label> <text> [--file F] [--group G]"
                    )
                    return
                self._bookmark_rename(BookmarkRef(file_path, rest[0], group), rest[1])
        elif sub == "clear":
            path = self._resolve_path(rest[0]) if rest else self._require_active_file()
            if path:
                self._bookmark_clear_file(path)
        elif sub == "clear-all":
            self._bookmark_clear_all()
        elif sub == "list":
            self._list_bookmarks()
        else:
            self._add_system_message(f"Unknown /bookmark subcommand: {sub}")

    def _list_bookmarks(self) -> None:
        data = self._bookmarks.load()
        if not data:
            self._add_system_message(
                "No bookmarks.\nAdd: /bookmark add <line> [description]"
            )
            return
        lines = ["Bookmarks:"]
        for path, bookmarks in data.items():
            lines.append(f"  {path}")
            for bm in bookmarks:
                label = effective_label(bm)
                lines.append(f"    {bm.get('line')}: {label}")
        self._add_system_message("\n".join(lines))

    def _bookmark_add(self, rest: list[str]) -> None:
        if not rest:
            self._add_system_message("Usage: /bookmark add <line> [description]")
            return
        path = self._require_active_file()
        if path is None:
            return
        description = " ".join(rest[1:]) or None
        try:
            bookmark = self._bookmarks.add_bookmark(path, int(rest[0]), description)
        except ValueError:
            self._show_error(f"Invalid line number: {rest[0]}")
            return
        self._add_system_message(f"Bookmarked {path}: {bookmark.label}")
        self._refresh_tree()

    def _warn_if_ambiguous(self, ref: BookmarkRef) -> None:
        if ref.is_global:
            candidates = self._bookmarks.load().get(ref.file_path, [])
        else:
            candidates = self._favorites.load().get(ref.group, {}).get("bookmarks", [])
        if is_ambiguous(candidates, ref.file_path, ref.label):
            self._add_system_message(
                f"Warning: several bookmarks are labelled '{ref.label}'; "
                "using the first one"
            )

    def _bookmark_remove(self, ref: BookmarkRef) -> None:
        self._warn_if_ambiguous(ref)
        if ref.is_global:
            removed = self._bookmarks.remove_bookmark(ref.file_path, ref.label)
        else:
            removed = self._favorites.remove_group_bookmark(
                ref.group, ref.file_path, ref.label
            )
        if removed is None:
            self._add_system_message(f"Warning: no bookmark '{ref.label}' found")
            return
        self._add_system_message(f"Removed bookmark '{ref.label}'")
        self._refresh_tree()

    def _bookmark_rename(self, ref: BookmarkRef, description: str) -> None:
        self._warn_if_ambiguous(ref)
        if ref.is_global:
            renamed = self._bookmarks.rename_bookmark(ref.file_path, ref.label, description)
        else:
            renamed = self._favorites.rename_group_bookmark(
                ref.group, ref.file_path, ref.label, description
            )
        if renamed is None:
            self._add_system_message(f"Warning: no bookmark '{ref.label}' found")
            return
        self._add_system_message(f"Renamed bookmark '{ref.label}' to '{renamed.label}'")
        self._refresh_tree()

    def _bookmark_clear_file(self, path: str) -> None:
        count = self._bookmarks.clear_file(path)
        self._add_system_message(f"Cleared {count} bookmark(s) from {path}")
        if count:
            self._refresh_tree()

    def _bookmark_clear_all(self) -> None:
        total = self._bookmarks.count()
        if not total:
            self._add_system_message("No bookmarks to clear")
            return

        def on_answer(confirmed: bool) -> None:
            if not confirmed:
                return
            count = self._bookmarks.clear_all()
            self._add_system_message(f"Cleared {count} bookmark(s)")
            self._refresh_tree()

        self._confirm(f"Clear all {total} bookmark(s)?", on_answer)
