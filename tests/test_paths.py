"""Tests for path sanitizing helpers."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from docvault.utils.paths import ensure_dir, normalize_path, resolve_under, write_text_atomic


class TestNormalizePath:
    """Test normalize_path function."""

    def test_plain_relative_path_unchanged(self) -> None:
        assert normalize_path("yt/video-123.json") == "yt/video-123.json"

    def test_collapses_dot_segments(self) -> None:
        assert normalize_path("yt/./drafts/../video.json") == "yt/video.json"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("../../etc/passwd", "etc/passwd"),
            ("..\\..\\etc\\passwd", "etc/passwd"),
            ("yt/../../../secret.json", "secret.json"),
            ("/etc/passwd", "etc/passwd"),
            ("//server/share", "server/share"),
            ("/../../root", "root"),
            ("..", ""),
            ("../..", ""),
        ],
    )
    def test_strips_parent_segments(self, raw: str, expected: str) -> None:
        """Should never leave a leading parent segment or root separator."""
        assert normalize_path(raw) == expected

    def test_dotted_names_are_not_parent_segments(self) -> None:
        assert normalize_path("..hidden/file.json") == "..hidden/file.json"

    @pytest.mark.parametrize("raw", ["", ".", "./"])
    def test_empty_results(self, raw: str) -> None:
        assert normalize_path(raw) == ""

    def test_idempotent(self) -> None:
        once = normalize_path("a/../../b/./c.json")
        assert normalize_path(once) == once


class TestResolveUnder:
    """Test resolve_under function."""

    @pytest.mark.parametrize(
        "raw",
        ["../../etc/passwd", "/etc/passwd", "a/../../../../x", "..\\..\\windows\\win.ini"],
    )
    def test_stays_within_root(self, tmp_path: Path, raw: str) -> None:
        root = tmp_path / "documents"
        resolved = resolve_under(root, raw).resolve()
        assert resolved.is_relative_to(root.resolve())

    def test_empty_path_is_root(self, tmp_path: Path) -> None:
        assert resolve_under(tmp_path, "..") == tmp_path


class TestEnsureDir:
    """Test ensure_dir function."""

    def test_creates_nested_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b"
        assert ensure_dir(target) == target
        assert target.is_dir()

    def test_existing_directory_is_fine(self, tmp_path: Path) -> None:
        ensure_dir(tmp_path)
        ensure_dir(tmp_path)
        assert tmp_path.is_dir()


class TestWriteTextAtomic:
    """Test write_text_atomic function."""

    def test_writes_new_file(self, tmp_path: Path) -> None:
        target = tmp_path / "doc.json"
        assert write_text_atomic(target, '{"a": 1}') == target
        assert target.read_text(encoding="utf-8") == '{"a": 1}'

    def test_replaces_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "doc.json"
        target.write_text("old", encoding="utf-8")

        write_text_atomic(target, "new")

        assert target.read_text(encoding="utf-8") == "new"
        assert [p.name for p in tmp_path.iterdir()] == ["doc.json"]

    def test_failed_replace_keeps_previous_file(self, tmp_path: Path) -> None:
        target = tmp_path / "doc.json"
        target.write_text("old", encoding="utf-8")

        with patch("docvault.utils.paths.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                write_text_atomic(target, "new")

        assert target.read_text(encoding="utf-8") == "old"
        assert [p.name for p in tmp_path.iterdir()] == ["doc.json"]
