"""Path identity used to process each file once per invocation."""

from __future__ import annotations

import os

from core_types import PathLike


def path_key(path: PathLike) -> str:
    """Return the canonical identity of ``path`` on this platform.

    The key is absolute, collapses redundant separators and ``..`` segments,
    and is case/separator folded where the platform folds them (Windows),
    so ``C:/a/b`` and ``c:\\a\\b`` compare equal there. Symlinks are not
    resolved.

    Returns
    -------
    str
        Normalized path string.
    """
    return os.path.normcase(os.path.abspath(os.fspath(path)))


__all__ = ["path_key"]
