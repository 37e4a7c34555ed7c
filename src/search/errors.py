"""Error taxonomy for search and replace invocations.

Only two conditions ever leave the engine as exceptions: a query that does
not compile, and a failed write while committing a replace. Every other
per-file or per-line problem is absorbed where it is detected.
"""

from __future__ import annotations

from pathlib import Path


class SearchError(RuntimeError):
    """Base error for fatal search/replace failures."""

    exit_code: int = 1


class PatternCompileError(SearchError, ValueError):
    """The query could not be compiled into a matcher."""

    exit_code: int = 3

    def __init__(self, query: str, reason: str) -> None:
        self.query = query
        self.reason = reason
        super().__init__(f"Invalid search pattern {query!r}: {reason}")


class ReplaceWriteError(SearchError):
    """Writing replaced content back to a file failed."""

    exit_code: int = 5

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write {path}: {reason}")


__all__ = ["PatternCompileError", "ReplaceWriteError", "SearchError"]
