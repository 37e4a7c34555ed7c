"""Shared type aliases and small typing helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from msgspec import Meta

type PathLike = str | Path

ByteCount = Annotated[
    int,
    Meta(
        ge=0,
        title="Byte count",
        description="Size in bytes as reported by filesystem metadata.",
    ),
]


def ensure_path(p: PathLike) -> Path:
    """Return a normalized ``Path`` for the provided value.

    Parameters
    ----------
    p:
        String or ``Path`` input to normalize.

    Returns:
    -------
    pathlib.Path
        Normalized path instance.
    """
    return p if isinstance(p, Path) else Path(p)


__all__ = ["ByteCount", "PathLike", "ensure_path"]
