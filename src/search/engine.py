"""Drive one search or replace invocation across the tree and extra paths."""

from __future__ import annotations

import logging
import os
import stat
import time
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path

from search.budget import ResultBudget
from search.filters import build_filter_set
from search.models import ReplaceOutcome, ReplaceRequest, SearchHit, SearchRequest
from search.paths import path_key
from search.pattern import CompiledPattern, compile_pattern
from search.replacer import process_file
from search.scanner import scan_file
from search.walker import iter_search_files
from serde_msgspec import convert, to_builtins

logger = logging.getLogger(__name__)


def search(request: SearchRequest) -> list[SearchHit]:
    """Return every matching line under the root and in the extra paths.

    Parameters
    ----------
    request
        Search inputs.

    Returns
    -------
    list[SearchHit]
        Hits in discovery order (walk order, then extra-path order), capped at
        the result limit.

    Raises
    ------
    PatternCompileError
        Raised before any filesystem access when the query does not compile.
    """
    pattern = _compile(request)
    budget = ResultBudget()
    hits: list[SearchHit] = []
    started = time.perf_counter()
    visited = _drive(request, budget, lambda path: hits.extend(scan_file(path, pattern, budget)))
    logger.info(
        "Search for %r visited %d files, %d hits in %.2fs%s",
        request.query,
        visited,
        len(hits),
        time.perf_counter() - started,
        " (result limit reached)" if budget.exhausted else "",
    )
    return hits


def replace(request: ReplaceRequest) -> list[ReplaceOutcome]:
    """Preview or apply a replacement under the root and in the extra paths.

    Parameters
    ----------
    request
        Replace inputs; ``dry_run`` selects preview mode.

    Returns
    -------
    list[ReplaceOutcome]
        Per-file outcomes in discovery order.

    Raises
    ------
    PatternCompileError
        Raised before any filesystem access when the query does not compile.
    ReplaceWriteError
        Raised when a committed write fails; processing stops at that file.
    """
    pattern = _compile(request)
    budget = ResultBudget()
    outcomes: list[ReplaceOutcome] = []

    def _handle(path: Path) -> None:
        outcome = process_file(
            path,
            pattern,
            request.replacement,
            budget,
            dry_run=request.dry_run,
        )
        if outcome is not None:
            outcomes.append(outcome)

    visited = _drive(request, budget, _handle)
    logger.info(
        "%s %r -> %r visited %d files, %d files affected%s",
        "Previewed" if request.dry_run else "Replaced",
        request.query,
        request.replacement,
        visited,
        len(outcomes),
        " (result limit reached)" if budget.exhausted else "",
    )
    return outcomes


def search_payload(payload: Mapping[str, object]) -> list[object]:
    """Run a search from an editor IPC payload.

    Returns
    -------
    list[object]
        JSON-ready hit mappings.
    """
    request = convert(payload, target_type=SearchRequest)
    return [to_builtins(hit) for hit in search(request)]


def replace_payload(payload: Mapping[str, object]) -> list[object]:
    """Run a replace from an editor IPC payload.

    Returns
    -------
    list[object]
        JSON-ready outcome mappings.
    """
    request = convert(payload, target_type=ReplaceRequest)
    return [to_builtins(outcome) for outcome in replace(request)]


def iter_candidate_files(request: SearchRequest, seen: set[str]) -> Iterator[Path]:
    """Yield each file to process: the walk first, then unseen extra paths.

    Walked files obey the include/exclude and ignore rules; extra paths bypass
    them. Both obey the size limit. ``seen`` collects normalized identities so
    no file is yielded twice.

    Yields
    ------
    Path
        Files in discovery order.
    """
    if request.root_path:
        filters = build_filter_set(excludes=request.excludes, includes=request.includes)
        for entry in iter_search_files(request.root_path, filters):
            key = path_key(entry.path)
            if key in seen:
                continue
            seen.add(key)
            if entry.size > request.max_file_size:
                logger.debug("Skipping %s: %d bytes over limit", entry.path, entry.size)
                continue
            yield entry.path
    for raw in request.extra_paths:
        if not raw:
            continue
        key = path_key(raw)
        if key in seen:
            continue
        path = Path(os.path.abspath(raw))
        try:
            info = path.stat()
        except OSError as exc:
            logger.debug("Skipping extra path %s: %s", raw, exc)
            continue
        if not stat.S_ISREG(info.st_mode):
            continue
        seen.add(key)
        if info.st_size > request.max_file_size:
            logger.debug("Skipping %s: %d bytes over limit", path, info.st_size)
            continue
        yield path


def _compile(request: SearchRequest) -> CompiledPattern:
    return compile_pattern(
        request.query,
        is_regex=request.is_regex,
        case_sensitive=request.case_sensitive,
        whole_word=request.whole_word,
    )


def _drive(
    request: SearchRequest,
    budget: ResultBudget,
    handle: Callable[[Path], None],
) -> int:
    seen: set[str] = set()
    visited = 0
    for path in iter_candidate_files(request, seen):
        if budget.exhausted:
            break
        handle(path)
        visited += 1
        if budget.exhausted:
            break
    return visited


__all__ = [
    "iter_candidate_files",
    "replace",
    "replace_payload",
    "search",
    "search_payload",
]
