"""Errors raised by the single-file collaborators."""

from __future__ import annotations

from pathlib import Path


class WorkspaceIOError(RuntimeError):
    """Reading, writing, or listing a path failed."""

    exit_code: int = 6

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


__all__ = ["WorkspaceIOError"]
