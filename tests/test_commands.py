"""Behavioral tests for the command mixins.

Uses a MockApp that wires the real stores to a tmp_path state file and
records everything the mixins send to the display contract.  Confirmation
prompts are answered immediately from ``confirm_answer``.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from favorite_files.app_base import FavoritesAppBase
from favorite_files.commands import (
    BookmarkCommandsMixin,
    FavoritesCommandsMixin,
    TransferCommandsMixin,
)
from favorite_files.preferences import Preferences, load_preferences


# ── Mock infrastructure ─────────────────────────────────────────────


class MockApp(
    FavoritesCommandsMixin,
    BookmarkCommandsMixin,
    TransferCommandsMixin,
    FavoritesAppBase,
):
    """Headless host satisfying the display contract of FavoritesAppBase."""

    def __init__(self, workspace: Path, state_path: Path, prefs_path: Path) -> None:
        super().__init__(workspace_root=workspace, prefs=Preferences(), prefs_path=prefs_path)
        self.messages: list[str] = []
        self.errors: list[str] = []
        self.questions: list[str] = []
        self.refreshes = 0
        self.confirm_answer = True
        self.exited = False
        self.open_workspace(state_path)

    # ── display contract ──
    def _add_system_message(self, text: str) -> None:
        self.messages.append(text)

    def _show_error(self, text: str) -> None:
        self.errors.append(text)

    def _refresh_tree(self) -> None:
        self.refreshes += 1

    def _confirm(self, message, callback) -> None:
        self.questions.append(message)
        callback(self.confirm_answer)

    def _exit_app(self) -> None:
        self.exited = True

    # ── helpers ──
    def run(self, command: str) -> None:
        self._handle_command(command)

    @property
    def last(self) -> str:
        return self.messages[-1]

    def path(self, name: str) -> str:
        return str(self._workspace_root / name)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    ws = tmp_path / "ws"
    ws.mkdir()
    for name in ("a.py", "b.py", "c.py"):
        (ws / name).write_text("print('hi')\n")
    return ws


@pytest.fixture
def app(workspace: Path, tmp_path: Path) -> MockApp:
    return MockApp(workspace, tmp_path / "state.json", tmp_path / "preferences.yaml")


# =====================================================================
# Dispatch
# =====================================================================


class TestDispatch:
    def test_help(self, app):
        app.run("/help")
        assert "/group create <name>" in app.last

    def test_unknown_command(self, app):
        app.run("/nope")
        assert app.last.startswith("Unknown command: /nope")

    def test_quit(self, app):
        app.run("/quit")
        assert app.exited

    def test_refresh(self, app):
        app.run("/refresh")
        assert app.refreshes == 1

    def test_refresh_rereads_state(self, app, tmp_path):
        app.run("/group create Work")
        state_path = tmp_path / "state.json"
        data = json.loads(state_path.read_text())
        data["favorites"]["Docs"] = {"files": [], "bookmarks": []}
        state_path.write_text(json.dumps(data))
        assert app._favorites.group_names() == ["Work"]
        app.run("/refresh")
        assert app._favorites.group_names() == ["Work", "Docs"]

    def test_bad_quoting(self, app):
        app.run('/group create "unterminated')
        assert app.errors and "Could not parse arguments" in app.errors[0]

    def test_bookmark_alias_command(self, app):
        app.run("/bm")
        assert app.last.startswith("No bookmarks.")


class TestOpen:
    def test_sets_active_file(self, app):
        app.run("/open a.py")
        assert app._active_file == app.path("a.py")

    def test_missing_file_warns(self, app):
        app.run("/open missing.py")
        assert any("does not exist" in m for m in app.messages)
        assert app._active_file == app.path("missing.py")

    def test_usage(self, app):
        app.run("/open")
        assert app.last == "Usage: /open <path>"


# =====================================================================
# /group and /fav
# =====================================================================


class TestGroupCommands:
    def test_create(self, app):
        app.run("/group create Work")
        assert app._favorites.group_names() == ["Work"]
        assert app.refreshes == 1

    def test_create_quoted_name(self, app):
        app.run('/group create "Side project"')
        assert app._favorites.group_names() == ["Side project"]

    def test_create_duplicate_warns(self, app):
        app.run("/group create Work")
        app.run("/group create Work")
        assert app.last == 'Warning: Group "Work" already exists.'

    def test_list(self, app):
        app.run("/group create Work")
        app.run("/group")
        assert "Work  (empty)" in app.last

    def test_list_counts(self, app):
        app.run("/open a.py")
        app.run("/fav add Work")
        app.run("/group")
        assert "Work  (1 file(s), 0 bookmark(s))" in app.last

    def test_rename(self, app):
        app.run("/group create Work")
        app.run("/group rename Work Job")
        assert app._favorites.group_names() == ["Job"]
        assert app.questions == []

    def test_rename_unknown(self, app):
        app.run("/group rename Nope Job")
        assert app.errors == ["Group 'Nope' not found"]

    def test_rename_collision_confirmed(self, app):
        app.run("/open a.py")
        app.run("/fav add Work")
        app.run("/group create Docs")
        app.run("/group rename Work Docs")
        assert len(app.questions) == 1
        assert app._favorites.load() == {
            "Docs": {"files": [app.path("a.py")], "bookmarks": []}
        }

    def test_rename_collision_declined(self, app):
        app.run("/group create Work")
        app.run("/group create Docs")
        app.confirm_answer = False
        app.run("/group rename Work Docs")
        assert app.last == "Rename cancelled"
        assert app._favorites.group_names() == ["Work", "Docs"]

    def test_delete_confirmed(self, app):
        app.run("/group create Work")
        app.run("/group delete Work")
        assert app.questions == ["Delete group 'Work'?"]
        assert app._favorites.is_empty()

    def test_delete_declined(self, app):
        app.run("/group create Work")
        app.confirm_answer = False
        app.run("/group delete Work")
        assert app._favorites.group_names() == ["Work"]

    def test_delete_unknown(self, app):
        app.run("/group delete Nope")
        assert app.questions == []
        assert app.last == "Warning: Group 'Nope' not found"

    def test_add_active_to_unknown_group(self, app):
        app.run("/open a.py")
        app.run("/group add Nope")
        assert app.errors == ["Group 'Nope' not found"]

    def test_add_without_active_file(self, app):
        app.run("/group create Work")
        app.run("/group add Work")
        assert app.last.startswith("No active file")

    def test_group_bookmark(self, app):
        app.run("/open a.py")
        app.run("/group bookmark Work 5 setup code")
        bms = app._favorites.group_bookmarks("Work")
        assert [(bm.line, bm.description) for bm in bms] == [(5, "setup code")]

    def test_group_bookmark_blank_group(self, app):
        app.run("/open a.py")
        app.run('/group bookmark "" 5')
        assert app.errors == ["Group name cannot be empty"]
        assert app._favorites.is_empty()

    def test_group_bookmark_bad_line(self, app):
        app.run("/open a.py")
        app.run("/group bookmark Work zero")
        assert app.errors == ["Invalid line number: zero"]
        assert app._favorites.is_empty()

    def test_clear_bookmarks(self, app):
        app.run("/open a.py")
        app.run("/group bookmark Work 5")
        app.run("/group bookmark Work 6")
        app.run("/group clear-bookmarks Work")
        assert app.last == "Cleared 2 bookmark(s) from 'Work'"

    def test_usage(self, app):
        app.run("/group rename OnlyOne")
        assert app.last == "Usage: /group rename <old> <new>"


class TestFavCommands:
    def test_add_creates_group(self, app):
        app.run("/open a.py")
        app.run("/fav add Work")
        assert app._favorites.load()["Work"]["files"] == [app.path("a.py")]

    def test_add_blank_group(self, app):
        app.run("/open a.py")
        app.run('/fav add ""')
        assert app.errors == ["Group name cannot be empty"]
        assert app._favorites.is_empty()

    def test_add_twice(self, app):
        app.run("/open a.py")
        app.run("/fav add Work")
        app.run("/fav add Work")
        assert "already in 'Work'" in app.last
        assert app._favorites.load()["Work"]["files"] == [app.path("a.py")]

    def test_add_to_only_group(self, app):
        app.run("/group create Work")
        app.run("/open b.py")
        app.run("/fav add")
        assert app._favorites.load()["Work"]["files"] == [app.path("b.py")]

    def test_add_needs_group_when_ambiguous(self, app):
        app.run("/group create Work")
        app.run("/group create Docs")
        app.run("/open b.py")
        app.run("/fav add")
        assert app.last.startswith("Usage: /fav add <group>")

    def test_remove(self, app):
        app.run("/open a.py")
        app.run("/fav add Work")
        app.run("/fav remove a.py")
        assert app._favorites.load()["Work"]["files"] == []

    def test_remove_missing_warns(self, app):
        app.run("/fav remove a.py")
        assert app.last.startswith("Warning:")

    def test_move(self, app):
        for name in ("a.py", "b.py", "c.py"):
            app.run(f"/open {name}")
            app.run("/fav add Work")
        app.run("/fav move Work a.py c.py")
        assert app._favorites.load()["Work"]["files"] == [
            app.path("b.py"),
            app.path("c.py"),
            app.path("a.py"),
        ]

    def test_move_noop_warns(self, app):
        app.run("/open a.py")
        app.run("/fav add Work")
        app.run("/fav move Work a.py a.py")
        assert app.last.startswith("Warning: nothing moved")

    def test_list_empty(self, app):
        app.run("/fav")
        assert app.last.startswith("No favorites groups.")


# =====================================================================
# /bookmark
# =====================================================================


class TestBookmarkCommands:
    def test_add(self, app):
        app.run("/open a.py")
        app.run("/bookmark add 12 main loop")
        bms = app._bookmarks.for_file(app.path("a.py"))
        assert [(bm.line, bm.label) for bm in bms] == [(12, "main loop")]

    def test_add_without_active_file(self, app):
        app.run("/bookmark add 12")
        assert app.last.startswith("No active file")

    def test_add_bad_line(self, app):
        app.run("/open a.py")
        app.run("/bookmark add -4")
        assert app.errors == ["Invalid line number: -4"]

    def test_list(self, app):
        app.run("/open a.py")
        app.run("/bookmark add 3")
        app.run("/bookmark list")
        assert "3: Line 3" in app.last

    def test_remove_by_label(self, app):
        app.run("/open a.py")
        app.run("/bookmark add 3")
        app.run('/bookmark remove "Line 3"')
        assert app._bookmarks.is_empty()

    def test_remove_other_file(self, app):
        app.run("/open a.py")
        app.run("/bookmark add 3")
        app.run("/open b.py")
        app.run('/bookmark remove "Line 3" --file a.py')
        assert app._bookmarks.is_empty()

    def test_remove_group_bookmark(self, app):
        app.run("/open a.py")
        app.run("/group bookmark Work 8 init")
        app.run("/bookmark remove init --group Work")
        assert app._favorites.group_bookmarks("Work") == []

    def test_remove_missing_warns(self, app):
        app.run("/open a.py")
        app.run("/bookmark remove nope")
        assert app.last == "Warning: no bookmark 'nope' found"

    def test_ambiguous_label_warns(self, app):
        app.run("/open a.py")
        app.run("/bookmark add 3 dup")
        app.run("/bookmark add 9 dup")
        app.run("/bookmark remove dup")
        assert any("several bookmarks" in m for m in app.messages)
        assert [bm.line for bm in app._bookmarks.for_file(app.path("a.py"))] == [9]

    def test_rename(self, app):
        app.run("/open a.py")
        app.run("/bookmark add 3")
        app.run('/bookmark rename "Line 3" "parser entry"')
        assert app._bookmarks.for_file(app.path("a.py"))[0].label == "parser entry"
        assert app.last == "Renamed bookmark 'Line 3' to 'parser entry'"

    def test_clear_file(self, app):
        app.run("/open a.py")
        app.run("/bookmark add 3")
        app.run("/bookmark add 4")
        app.run("/bookmark clear")
        assert app.last == f"Cleared 2 bookmark(s) from {app.path('a.py')}"

    def test_clear_all(self, app):
        app.run("/open a.py")
        app.run("/bookmark add 3")
        app.run("/open b.py")
        app.run("/bookmark add 4")
        app.run("/bookmark clear-all")
        assert app.questions == ["Clear all 2 bookmark(s)?"]
        assert app._bookmarks.is_empty()

    def test_clear_all_declined(self, app):
        app.run("/open a.py")
        app.run("/bookmark add 3")
        app.confirm_answer = False
        app.run("/bookmark clear-all")
        assert app._bookmarks.count() == 1


# =====================================================================
# /export, /import, /stats, /alias, /backup-dir
# =====================================================================


class TestTransferCommands:
    def _seed(self, app):
        app.run("/open a.py")
        app.run("/fav add Work")
        app.run("/bookmark add 3")

    def test_export(self, app, workspace):
        self._seed(app)
        app.run("/export out.json")
        doc = json.loads((workspace / "out.json").read_text())
        assert list(doc["favorites"]) == ["Work"]
        assert doc["statistics"]["globalBookmarks"] == 1

    def test_export_default_name(self, app, workspace):
        app.run("/export")
        assert [p.name.startswith("favorites-export-") for p in workspace.glob("*.json")] == [True]

    def test_import_confirmed(self, app, workspace):
        self._seed(app)
        (workspace / "in.json").write_text(json.dumps({"favorites": ["/x"]}))
        app.run("/import in.json")
        assert app._favorites.group_names() == ["Imported Group"]
        assert app._bookmarks.is_empty()
        assert any(m.startswith("Backed up current data to") for m in app.messages)
        assert len(list(workspace.glob("favorites-backup-*.json"))) == 1

    def test_import_declined(self, app, workspace):
        self._seed(app)
        (workspace / "in.json").write_text(json.dumps({"favorites": ["/x"]}))
        app.confirm_answer = False
        app.run("/import in.json")
        assert app.last == "Import cancelled"
        assert app._favorites.group_names() == ["Work"]

    def test_import_without_confirm_pref(self, app, workspace):
        app._prefs.import_.confirm = False
        (workspace / "in.json").write_text(json.dumps({"favorites": {"G": []}}))
        app.run("/import in.json")
        assert app.questions == []
        assert app._favorites.group_names() == ["G"]

    def test_import_bad_file(self, app, workspace):
        (workspace / "in.json").write_text("{}")
        app.run("/import in.json")
        assert app.errors == ["Import failed: Invalid format: missing 'favorites'"]

    def test_stats(self, app):
        self._seed(app)
        app.run("/stats")
        assert "Groups:            1" in app.last
        assert "Total bookmarks:   1" in app.last

    def test_alias(self, app):
        app.run("/alias a.py Entry")
        assert app._aliases.alias_for(app.path("a.py")) == "Entry"
        app.run("/alias")
        assert "Entry → " in app.last
        app.run("/alias remove a.py")
        assert app.last == f"Alias 'Entry' for {app.path('a.py')} removed"
        assert app._aliases.load() == {}
        app.run("/alias remove a.py")
        assert app.last == f"No alias for {app.path('a.py')}"

    def test_backup_dir(self, app, tmp_path):
        app.run("/backup-dir backups")
        expected = app.path("backups")
        assert app._transfer.backup_dir == Path(expected)
        assert load_preferences(tmp_path / "preferences.yaml").storage.backup_dir == expected
        app.run("/backup-dir default")
        assert app._transfer.backup_dir is None
        assert app.last == f"Backups go to {app._workspace_root}"
