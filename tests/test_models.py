"""Tests for favorite_files.models."""

from __future__ import annotations

import pytest

from favorite_files.models import Bookmark, Group, effective_label, empty_group


class TestEffectiveLabel:
    def test_description_wins(self):
        assert effective_label({"line": 5, "description": "setup"}) == "setup"

    def test_missing_description(self):
        assert effective_label({"line": 5}) == "Line 5"

    def test_empty_description(self):
        assert effective_label({"line": 5, "description": ""}) == "Line 5"

    def test_accepts_dataclass(self):
        assert effective_label(Bookmark("/a.py", 9)) == "Line 9"
        assert effective_label(Bookmark("/a.py", 9, "x")) == "x"


class TestBookmark:
    def test_label_property(self):
        assert Bookmark("/a.py", 12, "main loop").label == "main loop"

    def test_timestamp_defaults_to_now(self):
        bm = Bookmark("/a.py", 1)
        assert bm.timestamp > 0

    @pytest.mark.parametrize("line", [0, -3])
    def test_rejects_non_positive_line(self, line):
        with pytest.raises(ValueError):
            Bookmark("/a.py", line)

    def test_rejects_non_int_line(self):
        with pytest.raises(ValueError):
            Bookmark("/a.py", "12")  # type: ignore[arg-type]

    def test_rejects_bool_line(self):
        with pytest.raises(ValueError):
            Bookmark("/a.py", True)  # type: ignore[arg-type]

    def test_to_dict_uses_camel_case(self):
        data = Bookmark("/a.py", 4, "desc", timestamp=123).to_dict()
        assert data == {"filePath": "/a.py", "line": 4, "description": "desc", "timestamp": 123}

    def test_to_dict_omits_empty_description(self):
        data = Bookmark("/a.py", 4, timestamp=5).to_dict()
        assert "description" not in data

    def test_from_dict(self):
        bm = Bookmark.from_dict({"filePath": "/a.py", "line": 8, "timestamp": 77})
        assert bm.file_path == "/a.py"
        assert bm.line == 8
        assert bm.description is None
        assert bm.timestamp == 77


class TestGroup:
    def test_empty(self):
        assert Group("g").is_empty
        assert not Group("g", files=["/a"]).is_empty

    def test_from_dict_defaults(self):
        group = Group.from_dict("g", {})
        assert group.files == []
        assert group.bookmarks == []

    def test_to_dict(self):
        group = Group("g", files=["/a"], bookmarks=[Bookmark("/a", 2, timestamp=1)])
        assert group.to_dict() == {
            "files": ["/a"],
            "bookmarks": [{"filePath": "/a", "line": 2, "timestamp": 1}],
        }

    def test_empty_group_shape(self):
        assert empty_group() == {"files": [], "bookmarks": []}
