"""Tests for chapter discovery, stylesheet lookup and atomic writes."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from project import (
    atomic_write,
    create_backup,
    list_html_files,
    read_css,
    read_text,
    sibling_path,
)


def _write(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_list_html_files_filters_and_sorts(tmp_path):
    _write(tmp_path / "sub" / "b.HTM")
    _write(tmp_path / "sub" / "c.txt")
    _write(tmp_path / "a.html")

    chapters = list_html_files(tmp_path)

    assert [ch.relative_path for ch in chapters] == ["a.html", os.path.join("sub", "b.HTM")]
    assert [ch.filename for ch in chapters] == ["a.html", "b.HTM"]
    assert chapters[1].path == str((tmp_path / "sub" / "b.HTM").absolute())


def test_list_html_files_recurses_into_nested_folders(tmp_path):
    _write(tmp_path / "part2" / "ch03.html")
    _write(tmp_path / "part1" / "deep" / "ch02.htm")
    _write(tmp_path / "part1" / "ch01.html")
    _write(tmp_path / "notes.md")
    _write(tmp_path / "ch00.html.bak")

    chapters = list_html_files(tmp_path)

    assert [ch.relative_path for ch in chapters] == [
        os.path.join("part1", "ch01.html"),
        os.path.join("part1", "deep", "ch02.htm"),
        os.path.join("part2", "ch03.html"),
    ]


def test_list_html_files_skips_directories_named_like_chapters(tmp_path):
    (tmp_path / "folder.html").mkdir()
    _write(tmp_path / "folder.html" / "inner.html")

    chapters = list_html_files(tmp_path)

    assert [ch.filename for ch in chapters] == ["inner.html"]


def test_list_html_files_empty_directory(tmp_path):
    assert list_html_files(tmp_path) == []


def test_list_html_files_propagates_unreadable_directory(tmp_path):
    _write(tmp_path / "a.html")
    with patch.object(Path, "iterdir", side_effect=PermissionError("denied")):
        with pytest.raises(PermissionError):
            list_html_files(tmp_path)


def test_read_css_finds_nested_candidate(tmp_path):
    _write(tmp_path / "styles" / "book.css", "body { margin: 0; }\n")

    assert read_css(tmp_path) == "body { margin: 0; }\n"


def test_read_css_prefers_earlier_candidates(tmp_path):
    _write(tmp_path / "css" / "book.css", "nested")
    _write(tmp_path / "style.css", "top-level")

    assert read_css(tmp_path) == "top-level"


def test_read_css_returns_empty_when_absent(tmp_path):
    _write(tmp_path / "other.css", "ignored")

    assert read_css(tmp_path) == ""


def test_read_css_missing_project_dir(tmp_path):
    assert read_css(tmp_path / "does-not-exist") == ""


def test_read_text_keeps_line_endings(tmp_path):
    path = tmp_path / "crlf.html"
    path.write_bytes(b"<p>one</p>\r\n<p>two</p>\r\n")

    assert read_text(path) == "<p>one</p>\r\n<p>two</p>\r\n"


def test_sibling_path_replaces_extension():
    assert sibling_path(Path("book/ch1.htm"), ".html.bak") == Path("book/ch1.html.bak")
    assert sibling_path(Path("book/ch1.html"), ".html.tmp") == Path("book/ch1.html.tmp")
    assert sibling_path(Path("book/v1.2.html"), ".html.bak") == Path("book/v1.2.html.bak")


def test_atomic_write_replaces_content(tmp_path):
    target = _write(tmp_path / "ch1.html", "old")

    atomic_write(target, "new\r\ncontent")

    assert target.read_bytes() == b"new\r\ncontent"
    assert not (tmp_path / "ch1.html.tmp").exists()


def test_atomic_write_creates_missing_file(tmp_path):
    target = tmp_path / "new.html"

    atomic_write(target, "<p>hi</p>")

    assert target.read_text(encoding="utf-8") == "<p>hi</p>"


def test_atomic_write_leaves_original_when_rename_fails(tmp_path):
    target = _write(tmp_path / "ch1.html", "original")

    with patch("project.os.replace", side_effect=OSError("boom")):
        with pytest.raises(OSError, match="could not rename ch1.html.tmp over target: boom"):
            atomic_write(target, "replacement")

    assert target.read_text(encoding="utf-8") == "original"
    assert not (tmp_path / "ch1.html.tmp").exists()


def test_atomic_write_removes_partial_temp_file(tmp_path):
    target = _write(tmp_path / "ch1.html", "original")

    # A lone surrogate cannot be encoded as UTF-8, so the temp write fails midway
    with pytest.raises(UnicodeEncodeError):
        atomic_write(target, "<p>ok</p>\ud800")

    assert target.read_text(encoding="utf-8") == "original"
    assert not (tmp_path / "ch1.html.tmp").exists()


def test_create_backup_copies_to_bak_sibling(tmp_path):
    source = _write(tmp_path / "ch1.htm", "<p>v1</p>")

    backup_path = create_backup(source)

    assert backup_path == tmp_path / "ch1.html.bak"
    assert backup_path.read_text(encoding="utf-8") == "<p>v1</p>"
