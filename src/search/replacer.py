"""Preview or apply a replacement across one file."""

from __future__ import annotations

import logging
from collections.abc import Callable

from core_types import PathLike, ensure_path
from search.budget import ResultBudget
from search.errors import ReplaceWriteError
from search.models import MAX_LINE_CHARS, MatchPreview, ReplaceOutcome
from search.pattern import CompiledPattern

logger = logging.getLogger(__name__)


def process_file(
    path: PathLike,
    pattern: CompiledPattern,
    replacement: str,
    budget: ResultBudget,
    *,
    dry_run: bool,
) -> ReplaceOutcome | None:
    """Preview or commit the replacement for one file.

    Both modes rewrite the same lines the same way: every line (terminator
    excluded) that matches and is within ``MAX_LINE_CHARS`` gets a replace-all,
    so a commit produces exactly what the preview showed.

    Matching is per line, so a regex that only matches across a line break
    (``foo\\nbar``) passes the whole-content check but changes nothing.

    Parameters
    ----------
    path
        File to process.
    pattern
        Compiled matcher for this invocation.
    replacement
        Replacement text; group references expand only for regex queries.
    budget
        Shared result budget. A dry run consumes one unit per previewed line,
        a commit one unit per written file.
    dry_run
        Report previews instead of writing.

    Returns
    -------
    ReplaceOutcome | None
        Outcome for the file, or ``None`` when nothing matched or changed.

    Raises
    ------
    ReplaceWriteError
        Raised when writing the new content fails.
    """
    file_path = ensure_path(path)
    if budget.exhausted:
        return None
    content = _read_text(file_path)
    if content is None or pattern.search(content) is None:
        return None
    replace_line = pattern.replacer(replacement)
    if dry_run:
        previews = preview_lines(content, pattern, replace_line, budget)
        if not previews:
            return None
        return ReplaceOutcome(
            file_path=str(file_path),
            matches=tuple(previews),
            replaced_count=len(previews),
        )
    new_content = rewrite_content(content, pattern, replace_line)
    if new_content == content:
        return None
    if not budget.take():
        return None
    try:
        with file_path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(new_content)
    except OSError as exc:
        raise ReplaceWriteError(file_path, str(exc)) from exc
    logger.debug("Rewrote %s", file_path)
    return ReplaceOutcome(file_path=str(file_path), matches=(), replaced_count=1)


def preview_lines(
    content: str,
    pattern: CompiledPattern,
    replace_line: Callable[[str], str],
    budget: ResultBudget,
) -> list[MatchPreview]:
    """Return a preview for each matching line, within the budget.

    Returns
    -------
    list[MatchPreview]
        Previews in line order.
    """
    previews: list[MatchPreview] = []
    segments = content.split("\n")
    for line_number, segment in enumerate(segments[: _line_count(content, segments)], start=1):
        body, _ = _split_cr(segment)
        if len(body) > MAX_LINE_CHARS or not pattern.matches(body):
            continue
        if not budget.take():
            break
        previews.append(
            MatchPreview(
                line=line_number,
                original=body.strip(),
                replacement=replace_line(body).strip(),
            )
        )
    return previews


def rewrite_content(
    content: str,
    pattern: CompiledPattern,
    replace_line: Callable[[str], str],
) -> str:
    """Return ``content`` with every eligible matching line replaced.

    Line terminators, including ``\\r\\n``, are preserved.

    Returns
    -------
    str
        Rewritten content (identical to ``content`` when nothing changes).
    """
    segments = content.split("\n")
    for index in range(_line_count(content, segments)):
        body, cr = _split_cr(segments[index])
        if len(body) > MAX_LINE_CHARS or not pattern.matches(body):
            continue
        segments[index] = replace_line(body) + cr
    return "\n".join(segments)


def _line_count(content: str, segments: list[str]) -> int:
    # The empty piece after a final newline is not a line.
    if content.endswith("\n") or not content:
        return len(segments) - 1
    return len(segments)


def _split_cr(segment: str) -> tuple[str, str]:
    if segment.endswith("\r"):
        return segment[:-1], "\r"
    return segment, ""


def _read_text(path: PathLike) -> str | None:
    file_path = ensure_path(path)
    try:
        with file_path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Skipping %s: %s", file_path, exc)
        return None


__all__ = ["preview_lines", "process_file", "rewrite_content"]
