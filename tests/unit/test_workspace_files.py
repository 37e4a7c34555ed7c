"""Tests for single-file open/save and directory listing."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from workspace import WorkspaceIOError, file_stat, open_file, read_dir, save_file
from workspace import files as workspace_files
from workspace.files import detect_encoding


def test_open_file_utf8(tmp_path: Path) -> None:
    """Ensure UTF-8 files are decoded without detection."""
    path = tmp_path / "hello.txt"
    path.write_bytes("héllo\n".encode())
    result = open_file(path)
    assert result.content == "héllo\n"
    assert result.encoding == "utf-8"
    assert result.stat.size == len("héllo\n".encode())
    assert result.path == str(path)


def test_open_file_strips_bom(tmp_path: Path) -> None:
    """Ensure a UTF-8 byte order mark is not part of the content."""
    path = tmp_path / "bom.txt"
    path.write_bytes(b"\xef\xbb\xbfdata")
    result = open_file(path)
    assert result.encoding == "utf-8-sig"
    assert result.content == "data"


def test_open_file_uses_detected_encoding(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure non-UTF-8 bytes are decoded with the detected codec."""
    monkeypatch.setattr(
        workspace_files.chardet,
        "detect",
        lambda _data: {"encoding": "latin-1", "confidence": 0.9},
    )
    path = tmp_path / "legacy.txt"
    path.write_bytes("café".encode("latin-1"))
    result = open_file(path)
    assert result.encoding == "latin-1"
    assert result.content == "café"


def test_detect_encoding_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure unknown or missing guesses fall back to UTF-8."""
    monkeypatch.setattr(workspace_files.chardet, "detect", lambda _data: {"encoding": None})
    assert detect_encoding(b"\xff\xfe\xfa") == "utf-8"
    monkeypatch.setattr(workspace_files.chardet, "detect", lambda _data: {"encoding": "no-such-codec"})
    assert detect_encoding(b"\xff\xfe\xfa") == "utf-8"


def test_open_missing_file_raises(tmp_path: Path) -> None:
    """Ensure read failures surface as workspace I/O errors."""
    with pytest.raises(WorkspaceIOError) as excinfo:
        open_file(tmp_path / "missing.txt")
    assert excinfo.value.path == tmp_path / "missing.txt"


def test_save_file_writes_utf8_verbatim(tmp_path: Path) -> None:
    """Ensure saved text is written as UTF-8 without newline translation."""
    path = tmp_path / "out.txt"
    stat = save_file(path, "ünï\r\ncode\n")
    assert path.read_bytes() == "ünï\r\ncode\n".encode()
    assert stat.size == len("ünï\r\ncode\n".encode())


def test_save_file_into_missing_directory_raises(tmp_path: Path) -> None:
    """Ensure write failures surface as workspace I/O errors."""
    with pytest.raises(WorkspaceIOError):
        save_file(tmp_path / "nope" / "out.txt", "x")


def test_file_stat_reports_milliseconds(tmp_path: Path) -> None:
    """Ensure modification time is reported in epoch milliseconds."""
    path = tmp_path / "f.txt"
    path.write_text("abc", encoding="utf-8")
    os.utime(path, (1_700_000_000, 1_700_000_000))
    stat = file_stat(path)
    assert stat.last_modified == 1_700_000_000_000
    assert stat.size == 3


def test_read_dir_lists_directories_first(tmp_path: Path) -> None:
    """Ensure listings put directories first and sort names case-insensitively."""
    root = tmp_path / "listing"
    root.mkdir()
    (root / "b_dir").mkdir()
    (root / "A_dir").mkdir()
    (root / "c.txt").write_text("", encoding="utf-8")
    (root / "B.txt").write_text("", encoding="utf-8")
    entries = read_dir(root)
    assert [(entry.name, entry.is_dir) for entry in entries] == [
        ("A_dir", True),
        ("b_dir", True),
        ("B.txt", False),
        ("c.txt", False),
    ]
    assert entries[0].path == str(root / "A_dir")


def test_read_dir_missing_raises(tmp_path: Path) -> None:
    """Ensure listing a missing directory raises a workspace I/O error."""
    with pytest.raises(WorkspaceIOError):
        read_dir(tmp_path / "missing")
