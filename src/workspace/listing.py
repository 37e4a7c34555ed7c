"""List one directory level for the file tree."""

from __future__ import annotations

import logging
import os

from core_types import PathLike, ensure_path
from serde_msgspec import StructBaseResult
from workspace.errors import WorkspaceIOError

logger = logging.getLogger(__name__)


class DirectoryEntry(StructBaseResult, frozen=True):
    """Immediate child of a listed directory."""

    name: str
    path: str
    is_dir: bool


def read_dir(path: PathLike) -> list[DirectoryEntry]:
    """Return the children of ``path``, directories first, then by name.

    Names compare case-insensitively. Entries whose type cannot be read are
    left out.

    Returns
    -------
    list[DirectoryEntry]
        Sorted children.

    Raises
    ------
    WorkspaceIOError
        Raised when the directory itself cannot be read.
    """
    dir_path = ensure_path(path)
    entries: list[DirectoryEntry] = []
    try:
        with os.scandir(dir_path) as iterator:
            for item in iterator:
                try:
                    is_dir = item.is_dir()
                except OSError as exc:
                    logger.debug("Skipping %s: %s", item.path, exc)
                    continue
                entries.append(DirectoryEntry(name=item.name, path=item.path, is_dir=is_dir))
    except OSError as exc:
        raise WorkspaceIOError(dir_path, str(exc)) from exc
    entries.sort(key=lambda entry: (not entry.is_dir, entry.name.lower()))
    return entries


__all__ = ["DirectoryEntry", "read_dir"]
