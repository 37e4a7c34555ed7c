"""Typed configuration models for workspace-search."""

from __future__ import annotations

import msgspec

from core_types import ByteCount
from search.models import DEFAULT_MAX_FILE_SIZE
from serde_msgspec import StructBaseStrict


class SearchDefaults(StructBaseStrict, frozen=True, rename="kebab"):
    """Default search settings, overridden by explicit CLI options."""

    excludes: tuple[str, ...] = ()
    includes: tuple[str, ...] = ()
    max_file_size: ByteCount = DEFAULT_MAX_FILE_SIZE
    case_sensitive: bool = False
    whole_word: bool = False
    is_regex: bool = False


class RootConfigSpec(StructBaseStrict, frozen=True, rename="kebab"):
    """Root configuration document."""

    search: SearchDefaults = msgspec.field(default_factory=SearchDefaults)
    log_level: str | None = None


__all__ = ["RootConfigSpec", "SearchDefaults"]
