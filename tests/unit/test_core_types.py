"""Tests for shared core type helpers."""

from __future__ import annotations

from pathlib import Path

import msgspec
import pytest

from core_types import ByteCount, ensure_path


def test_ensure_path_passes_paths_through() -> None:
    """Ensure Path inputs are returned unchanged."""
    value = Path("a/b")
    assert ensure_path(value) is value


def test_ensure_path_wraps_strings() -> None:
    """Ensure string inputs become Path instances."""
    assert ensure_path("a/b") == Path("a/b")


def test_byte_count_rejects_negative_values() -> None:
    """Ensure byte counts are validated as non-negative."""
    assert msgspec.convert(0, type=ByteCount) == 0
    with pytest.raises(msgspec.ValidationError):
        msgspec.convert(-1, type=ByteCount)
