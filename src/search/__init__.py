"""Project-wide search and replace.

One invocation compiles a single pattern, walks the project root under the
include/exclude and ignore-file rules, streams every candidate file, and
returns line hits (search) or per-file outcomes (replace). Nothing is cached
between invocations.

Module Organization:
- pattern  - query + toggles -> compiled matcher
- filters  - built-in and caller include/exclude rules
- walker   - ignore-aware directory traversal
- scanner  - streaming line matcher with binary/size guards
- replacer - dry-run preview and commit rewrite for one file
- engine   - drives the walk and extra paths under the global result budget
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from search.engine import replace, replace_payload, search, search_payload
    from search.errors import PatternCompileError, ReplaceWriteError, SearchError
    from search.models import (
        MatchPreview,
        ReplaceOutcome,
        ReplaceRequest,
        SearchHit,
        SearchRequest,
    )

# Map of export names to (module_path, attribute_name) for lazy loading
_EXPORTS: dict[str, tuple[str, str]] = {
    "MatchPreview": ("search.models", "MatchPreview"),
    "PatternCompileError": ("search.errors", "PatternCompileError"),
    "ReplaceOutcome": ("search.models", "ReplaceOutcome"),
    "ReplaceRequest": ("search.models", "ReplaceRequest"),
    "ReplaceWriteError": ("search.errors", "ReplaceWriteError"),
    "SearchError": ("search.errors", "SearchError"),
    "SearchHit": ("search.models", "SearchHit"),
    "SearchRequest": ("search.models", "SearchRequest"),
    "replace": ("search.engine", "replace"),
    "replace_payload": ("search.engine", "replace_payload"),
    "search": ("search.engine", "search"),
    "search_payload": ("search.engine", "search_payload"),
}


def __getattr__(name: str) -> object:
    target = _EXPORTS.get(name)
    if target is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    module_name, attr = target
    module = importlib.import_module(module_name)
    return getattr(module, attr)


def __dir__() -> list[str]:
    return sorted(list(globals()) + list(_EXPORTS))


__all__ = (
    "MatchPreview",
    "PatternCompileError",
    "ReplaceOutcome",
    "ReplaceRequest",
    "ReplaceWriteError",
    "SearchError",
    "SearchHit",
    "SearchRequest",
    "replace",
    "replace_payload",
    "search",
    "search_payload",
)
