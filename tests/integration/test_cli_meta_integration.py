"""Integration tests for the CLI meta launcher."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

from cli.app import SessionOptions, meta_launcher
from cli.exit_codes import ExitCode

if TYPE_CHECKING:
    import pytest

    from tests.conftest import TreeWriter


def test_meta_launcher_loads_config_from_cwd(
    make_tree: TreeWriter,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure meta launcher forwards config file defaults to commands."""
    Path("workspace-search.toml").write_text(
        """
[search]
case-sensitive = true
excludes = ["*.md"]
""".lstrip(),
        encoding="utf-8",
    )
    root = make_tree({"a.txt": "Hello\nhello\n", "notes.md": "Hello\n"})

    exit_code = meta_launcher("search", "Hello", str(root), "--json")

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert [(Path(row["file_path"]).name, row["line_number"]) for row in payload] == [("a.txt", 1)]


def test_cli_flags_override_config(
    make_tree: TreeWriter,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure explicit flags win over configured defaults."""
    Path("workspace-search.toml").write_text("[search]\nexcludes = [\"*.md\"]\n", encoding="utf-8")
    root = make_tree({"notes.md": "needle\n", "a.txt": "needle\n"})

    exit_code = meta_launcher("search", "needle", str(root), "--exclude", "*.txt", "--json")

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert [Path(row["file_path"]).name for row in payload] == ["notes.md"]


def test_meta_launcher_explicit_config_missing(capsys: pytest.CaptureFixture[str]) -> None:
    """Ensure a missing --config file exits with the config error code."""
    exit_code = meta_launcher("version", session=SessionOptions(config_file="absent.toml"))

    assert exit_code == ExitCode.CONFIG_ERROR
    assert "absent.toml" in capsys.readouterr().err


def test_meta_launcher_invalid_config(capsys: pytest.CaptureFixture[str]) -> None:
    """Ensure an invalid discovered config exits with the config error code."""
    Path("workspace-search.toml").write_text("[search]\nbogus = 1\n", encoding="utf-8")

    exit_code = meta_launcher("version")

    assert exit_code == ExitCode.CONFIG_ERROR
    assert "Invalid config" in capsys.readouterr().err


def test_meta_launcher_version(capsys: pytest.CaptureFixture[str]) -> None:
    """Ensure the version command reports dependency versions as JSON."""
    exit_code = meta_launcher("version")

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert set(payload["dependencies"]) == {"chardet", "cyclopts", "msgspec", "pathspec", "watchdog"}
    assert "workspace-search" in payload
