"""Ignore-aware traversal of a project tree."""

from __future__ import annotations

import logging
import os
import re
import stat
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from pathspec import GitIgnoreSpec

from core_types import PathLike
from search.filters import FilterSet

logger = logging.getLogger(__name__)

IGNORE_FILE_NAMES: tuple[str, ...] = (".gitignore", ".ignore")


@dataclass(frozen=True)
class FileEntry:
    """Regular file discovered by the walk."""

    path: Path
    rel_path: str
    size: int


@dataclass(frozen=True)
class IgnoreScope:
    """Ignore rules read from one directory, applied to paths beneath it."""

    base: str
    spec: GitIgnoreSpec

    def decision(self, rel_path: str, *, is_dir: bool) -> bool | None:
        """Return True (ignored), False (re-included) or None (no rule matched).

        Returns
        -------
        bool | None
            Match decision for ``rel_path``.
        """
        if self.base:
            prefix = f"{self.base}/"
            if not rel_path.startswith(prefix):
                return None
            local = rel_path[len(prefix) :]
        else:
            local = rel_path
        if is_dir:
            local = f"{local}/"
        return self.spec.check_file(local).include


def is_ignored(scopes: Iterable[IgnoreScope], rel_path: str, *, is_dir: bool) -> bool:
    """Return True when the deepest matching ignore rule excludes ``rel_path``.

    ``scopes`` are ordered shallowest first; deeper files override shallower ones.

    Returns
    -------
    bool
        ``True`` when the path is ignored.
    """
    for scope in reversed(tuple(scopes)):
        decision = scope.decision(rel_path, is_dir=is_dir)
        if decision is not None:
            return decision
    return False


def iter_search_files(root: PathLike, filters: FilterSet) -> Iterator[FileEntry]:
    """Yield regular files under ``root`` that pass ignore files and ``filters``.

    Directories and files are visited in sorted name order. Directory symlinks
    are not followed and file symlinks are not reported. Unreadable entries are
    skipped.

    Parameters
    ----------
    root
        Project root. An empty value yields nothing.
    filters
        Include/exclude rules for this invocation.

    Yields
    ------
    FileEntry
        Discovered files in walk order.
    """
    if not str(root):
        return
    root_path = Path(os.path.abspath(root))
    if not root_path.is_dir():
        logger.debug("Search root %s is not a directory", root_path)
        return
    scopes_by_dir: dict[str, tuple[IgnoreScope, ...]] = {
        "": tuple(_root_scopes(root_path)),
    }
    for current, dirs, files in os.walk(root_path, onerror=_log_walk_error):
        current_path = Path(current)
        rel_dir = current_path.relative_to(root_path).as_posix()
        rel_dir = "" if rel_dir == "." else rel_dir
        scopes = scopes_by_dir.pop(rel_dir, ())
        kept: list[str] = []
        for name in sorted(dirs):
            if os.path.islink(current_path / name):
                continue
            rel = _join(rel_dir, name)
            if filters.allows_dir(rel) and not is_ignored(scopes, rel, is_dir=True):
                kept.append(name)
                scopes_by_dir[rel] = scopes + tuple(_dir_scopes(current_path / name, rel))
        dirs[:] = kept
        for name in sorted(files):
            rel = _join(rel_dir, name)
            if not filters.allows_file(rel) or is_ignored(scopes, rel, is_dir=False):
                continue
            entry = _file_entry(current_path / name, rel)
            if entry is not None:
                yield entry


def _join(rel_dir: str, name: str) -> str:
    return f"{rel_dir}/{name}" if rel_dir else name


def _file_entry(path: Path, rel: str) -> FileEntry | None:
    try:
        info = path.lstat()
    except OSError as exc:
        logger.debug("Skipping %s: %s", path, exc)
        return None
    if not stat.S_ISREG(info.st_mode):
        return None
    return FileEntry(path=path, rel_path=rel, size=info.st_size)


def _log_walk_error(exc: OSError) -> None:
    logger.debug("Skipping unreadable directory %s: %s", exc.filename, exc)


def _root_scopes(root: Path) -> list[IgnoreScope]:
    scopes: list[IgnoreScope] = []
    git_dir = _resolve_git_dir(root)
    if git_dir is not None:
        spec = _compile_ignore(_read_lines(git_dir / "info" / "exclude"))
        if spec is not None:
            scopes.append(IgnoreScope(base="", spec=spec))
    scopes.extend(_dir_scopes(root, ""))
    return scopes


def _dir_scopes(directory: Path, rel: str) -> list[IgnoreScope]:
    scopes: list[IgnoreScope] = []
    for name in IGNORE_FILE_NAMES:
        candidate = directory / name
        if not candidate.is_file():
            continue
        spec = _compile_ignore(_read_lines(candidate))
        if spec is not None:
            scopes.append(IgnoreScope(base=rel, spec=spec))
    return scopes


def _compile_ignore(lines: list[str]) -> GitIgnoreSpec | None:
    if not lines:
        return None
    try:
        return GitIgnoreSpec.from_lines(lines)
    except (ValueError, TypeError, re.error):
        pass
    valid: list[str] = []
    for line in lines:
        try:
            GitIgnoreSpec.from_lines([line])
        except (ValueError, TypeError, re.error) as exc:
            logger.debug("Dropping malformed ignore rule %r: %s", line, exc)
            continue
        valid.append(line)
    return GitIgnoreSpec.from_lines(valid) if valid else None


def _resolve_git_dir(root: Path) -> Path | None:
    git_entry = root / ".git"
    if git_entry.is_dir():
        return git_entry
    if not git_entry.is_file():
        return None
    for raw_line in _read_lines(git_entry):
        stripped = raw_line.strip()
        if stripped.startswith("gitdir:"):
            git_dir = Path(stripped[len("gitdir:") :].strip())
            if not git_dir.is_absolute():
                git_dir = (root / git_dir).resolve()
            return git_dir
    return None


def _read_lines(path: Path) -> list[str]:
    try:
        return path.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError:
        return []


__all__ = ["IGNORE_FILE_NAMES", "FileEntry", "IgnoreScope", "is_ignored", "iter_search_files"]
