"""Pathspec-backed include/exclude rules for project searches."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from pathspec import PathSpec

logger = logging.getLogger(__name__)

BUILTIN_EXCLUDE_DIRS: tuple[str, ...] = (
    "node_modules",
    ".git",
    ".svn",
    ".hg",
    "dist",
    "build",
    "target",
    ".idea",
    ".vscode",
)


@dataclass(frozen=True)
class FilterSet:
    """Compiled include/exclude rules, evaluated on root-relative POSIX paths."""

    include_spec: PathSpec | None
    exclude_spec: PathSpec | None
    include_lines: tuple[str, ...]
    exclude_lines: tuple[str, ...]
    builtin_dirs: frozenset[str]

    def allows_dir(self, rel_path: str) -> bool:
        """Return True when the walk should descend into ``rel_path``.

        Include rules only ever narrow the set of files, never directories.

        Returns
        -------
        bool
            ``True`` when the directory is not excluded.
        """
        name = rel_path.rsplit("/", 1)[-1]
        if name in self.builtin_dirs:
            return False
        return self.exclude_spec is None or not self.exclude_spec.match_file(f"{rel_path}/")

    def allows_file(self, rel_path: str) -> bool:
        """Return True when ``rel_path`` passes every rule.

        Built-in names only exclude directories; a file may be named ``build``.

        Returns
        -------
        bool
            ``True`` when the file should be searched.
        """
        if any(part in self.builtin_dirs for part in rel_path.split("/")[:-1]):
            return False
        if self.exclude_spec is not None and self.exclude_spec.match_file(rel_path):
            return False
        return self.include_spec is None or self.include_spec.match_file(rel_path)

    def rule_lines(self) -> dict[str, tuple[str, ...]]:
        """Return the compiled rule text, for diagnostics.

        Returns
        -------
        dict[str, tuple[str, ...]]
            Built-in, exclude and include rule lines.
        """
        return {
            "builtin": tuple(sorted(self.builtin_dirs)),
            "exclude": self.exclude_lines,
            "include": self.include_lines,
        }


def build_filter_set(
    *,
    excludes: Iterable[str] = (),
    includes: Iterable[str] = (),
) -> FilterSet:
    """Compile caller fragments and the built-in exclusions into a FilterSet.

    Blank fragments are ignored and fragments that do not compile are dropped,
    so one bad entry never fails the whole search.

    Returns
    -------
    FilterSet
        Immutable rule set for one invocation.
    """
    exclude_lines: list[str] = []
    for fragment in _clean_fragments(excludes):
        exclude_lines.extend(_valid_lines((f"**/{fragment}", f"**/{fragment}/**")))
    include_lines: list[str] = []
    for fragment in _clean_fragments(includes):
        include_lines.extend(_valid_lines((f"**/{fragment}",)))
    return FilterSet(
        include_spec=PathSpec.from_lines("gitwildmatch", include_lines) if include_lines else None,
        exclude_spec=PathSpec.from_lines("gitwildmatch", exclude_lines) if exclude_lines else None,
        include_lines=tuple(include_lines),
        exclude_lines=tuple(exclude_lines),
        builtin_dirs=frozenset(BUILTIN_EXCLUDE_DIRS),
    )


def _clean_fragments(fragments: Iterable[str]) -> list[str]:
    cleaned: list[str] = []
    for raw in fragments:
        fragment = str(raw).strip().lstrip("/")
        if fragment and fragment not in cleaned:
            cleaned.append(fragment)
    return cleaned


def _valid_lines(lines: Iterable[str]) -> list[str]:
    valid: list[str] = []
    for line in lines:
        try:
            PathSpec.from_lines("gitwildmatch", [line])
        except (ValueError, TypeError, re.error) as exc:
            logger.debug("Dropping malformed glob rule %r: %s", line, exc)
            return []
        valid.append(line)
    return valid


__all__ = ["BUILTIN_EXCLUDE_DIRS", "FilterSet", "build_filter_set"]
