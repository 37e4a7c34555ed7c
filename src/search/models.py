"""Request and result contracts for search and replace."""

from __future__ import annotations

from core_types import ByteCount
from serde_msgspec import StructBaseResult, StructBaseWire

DEFAULT_MAX_FILE_SIZE = 1024 * 1024
RESULT_LIMIT = 500
MAX_LINE_CHARS = 10_000
SNIPPET_CHARS = 100
TRUNCATION_MARKER = "..."


class SearchRequest(StructBaseWire, frozen=True):
    """Inputs for one search invocation.

    An empty ``root_path`` disables the directory walk; ``extra_paths`` are
    still processed.
    """

    query: str
    root_path: str = ""
    excludes: tuple[str, ...] = ()
    includes: tuple[str, ...] = ()
    max_file_size: ByteCount = DEFAULT_MAX_FILE_SIZE
    case_sensitive: bool = False
    whole_word: bool = False
    is_regex: bool = False
    extra_paths: tuple[str, ...] = ()


class ReplaceRequest(SearchRequest, frozen=True):
    """Inputs for one replace invocation (preview when ``dry_run``)."""

    replacement: str = ""
    dry_run: bool = True


class SearchHit(StructBaseResult, frozen=True):
    """One matching line."""

    file_path: str
    line_number: int
    line_content: str


class MatchPreview(StructBaseResult, frozen=True):
    """Before/after view of one line in a dry-run replace."""

    line: int
    original: str
    replacement: str


class ReplaceOutcome(StructBaseResult, frozen=True):
    """Per-file replace result.

    ``replaced_count`` is the number of previewed lines for a dry run and ``1``
    for a committed write, where per-line counts are not tracked.
    """

    file_path: str
    matches: tuple[MatchPreview, ...] = ()
    replaced_count: int = 0


def display_snippet(line: str) -> str:
    """Return the trimmed, length-capped form of a line for display.

    Returns
    -------
    str
        Snippet of at most ``SNIPPET_CHARS`` characters plus a marker when cut.
    """
    text = line.strip()
    if len(text) > SNIPPET_CHARS:
        return text[:SNIPPET_CHARS] + TRUNCATION_MARKER
    return text


__all__ = [
    "DEFAULT_MAX_FILE_SIZE",
    "MAX_LINE_CHARS",
    "RESULT_LIMIT",
    "SNIPPET_CHARS",
    "TRUNCATION_MARKER",
    "MatchPreview",
    "ReplaceOutcome",
    "ReplaceRequest",
    "SearchHit",
    "SearchRequest",
    "display_snippet",
]
