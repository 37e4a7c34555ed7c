"""Shared fixtures for search and workspace tests."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

type TreeWriter = Callable[[Mapping[str, str | bytes]], Path]


def write_tree(root: Path, files: Mapping[str, str | bytes]) -> Path:
    """Create ``files`` (relative path -> content) under ``root``.

    Returns
    -------
    Path
        The root directory.
    """
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
    return root


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeWriter:
    """Return a helper that writes a file tree under a fresh project root."""
    root = tmp_path / "project"
    root.mkdir()

    def _make(files: Mapping[str, str | bytes]) -> Path:
        return write_tree(root, files)

    return _make


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run each test from an empty directory so no stray config is picked up."""
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.delenv("WORKSPACE_SEARCH_LOG_LEVEL", raising=False)
