"""Stream one file's lines against a compiled matcher."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import BinaryIO

from core_types import PathLike, ensure_path
from search.budget import ResultBudget
from search.models import MAX_LINE_CHARS, SearchHit, display_snippet
from search.pattern import CompiledPattern

logger = logging.getLogger(__name__)

# Upper bound on the UTF-8 size of a line that can still be within the
# character guard (4 bytes per character plus a CRLF terminator).
_MAX_LINE_BYTES = MAX_LINE_CHARS * 4 + 2
_NUL = b"\x00"


class BinaryContentError(Exception):
    """Raised internally when a NUL byte is seen while streaming."""


def scan_file(
    path: PathLike,
    pattern: CompiledPattern,
    budget: ResultBudget,
    *,
    max_file_size: int | None = None,
) -> list[SearchHit]:
    """Return the matching lines of one file.

    Scanning stops at the first NUL byte (binary file), at the first decode or
    read error, or as soon as ``budget`` is exhausted; hits collected before
    that point are kept. Lines longer than ``MAX_LINE_CHARS`` are skipped.

    Parameters
    ----------
    path
        File to scan.
    pattern
        Compiled matcher for this invocation.
    budget
        Shared result budget, consumed once per hit.
    max_file_size
        Skip the file without opening it when its size exceeds this value.

    Returns
    -------
    list[SearchHit]
        Hits in line order.
    """
    file_path = ensure_path(path)
    hits: list[SearchHit] = []
    if budget.exhausted:
        return hits
    if max_file_size is not None and _exceeds_size(file_path, max_file_size):
        return hits
    try:
        with file_path.open("rb") as handle:
            for line_number, raw in enumerate(iter_raw_lines(handle), start=1):
                if raw is None:
                    continue
                line = strip_terminator(raw.decode("utf-8"))
                if len(line) > MAX_LINE_CHARS or not pattern.matches(line):
                    continue
                if not budget.take():
                    break
                hits.append(
                    SearchHit(
                        file_path=str(file_path),
                        line_number=line_number,
                        line_content=display_snippet(line),
                    )
                )
                if budget.exhausted:
                    break
    except BinaryContentError:
        logger.debug("Stopped scanning binary file %s", file_path)
    except UnicodeDecodeError as exc:
        logger.debug("Stopped scanning %s on undecodable line: %s", file_path, exc)
    except OSError as exc:
        logger.debug("Stopped scanning %s: %s", file_path, exc)
    return hits


def iter_raw_lines(handle: BinaryIO) -> Iterator[bytes | None]:
    """Yield each physical line's bytes, or ``None`` for an overlong line.

    Memory stays bounded by ``_MAX_LINE_BYTES`` regardless of line length;
    the tail of an overlong line is drained in chunks.

    Yields
    ------
    bytes | None
        Raw line including its terminator, or ``None`` when it is too long.

    Raises
    ------
    BinaryContentError
        Raised on the first NUL byte.
    """
    while True:
        chunk = handle.readline(_MAX_LINE_BYTES)
        if not chunk:
            return
        if _NUL in chunk:
            raise BinaryContentError
        if chunk.endswith(b"\n") or len(chunk) < _MAX_LINE_BYTES:
            yield chunk
            continue
        while not chunk.endswith(b"\n"):
            chunk = handle.readline(_MAX_LINE_BYTES)
            if not chunk:
                break
            if _NUL in chunk:
                raise BinaryContentError
        yield None


def strip_terminator(line: str) -> str:
    """Drop a trailing ``\\n`` or ``\\r\\n``.

    Returns
    -------
    str
        Line text without its terminator.
    """
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def _exceeds_size(path: PathLike, max_file_size: int) -> bool:
    try:
        size = ensure_path(path).stat().st_size
    except OSError as exc:
        logger.debug("Skipping %s: %s", path, exc)
        return True
    if size > max_file_size:
        logger.debug("Skipping %s: %d bytes exceeds %d", path, size, max_file_size)
        return True
    return False


__all__ = ["BinaryContentError", "iter_raw_lines", "scan_file", "strip_terminator"]
