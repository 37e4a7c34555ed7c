"""Render command results for humans or as JSON."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape

from search.models import ReplaceOutcome, SearchHit
from serde_msgspec import dumps_json
from workspace.files import FileContent
from workspace.listing import DirectoryEntry


def write_json(payload: object) -> None:
    """Write ``payload`` as indented JSON to stdout."""
    sys.stdout.write(dumps_json(payload, pretty=True).decode("utf-8"))
    sys.stdout.write("\n")


def render_hits(hits: Sequence[SearchHit]) -> None:
    """Print one ``path:line: snippet`` row per hit and a total."""
    console = Console(highlight=False, soft_wrap=True)
    for hit in hits:
        console.print(
            f"[magenta]{escape(hit.file_path)}[/magenta]:[green]{hit.line_number}[/green]: "
            f"{escape(hit.line_content)}"
        )
    console.print(f"{len(hits)} result(s)")


def render_outcomes(outcomes: Sequence[ReplaceOutcome], *, dry_run: bool) -> None:
    """Print replace previews, or the list of rewritten files."""
    console = Console(highlight=False, soft_wrap=True)
    for outcome in outcomes:
        console.print(f"[magenta]{escape(outcome.file_path)}[/magenta]")
        for preview in outcome.matches:
            console.print(f"  {preview.line}: [red]- {escape(preview.original)}[/red]")
            console.print(f"  {preview.line}: [green]+ {escape(preview.replacement)}[/green]")
    verb = "would change" if dry_run else "changed"
    console.print(f"{len(outcomes)} file(s) {verb}")


def render_file(content: FileContent) -> None:
    """Print a file's encoding and metadata."""
    console = Console(highlight=False, soft_wrap=True)
    console.print(f"[magenta]{escape(content.path)}[/magenta]")
    console.print(f"  encoding: {content.encoding}")
    console.print(f"  size: {content.stat.size} bytes")
    console.print(f"  last modified: {content.stat.last_modified} ms")


def render_entries(entries: Sequence[DirectoryEntry]) -> None:
    """Print directory children, directories marked with a trailing slash."""
    console = Console(highlight=False, soft_wrap=True)
    for entry in entries:
        if entry.is_dir:
            console.print(f"[blue]{escape(entry.name)}/[/blue]")
        else:
            console.print(escape(entry.name))


__all__ = ["render_entries", "render_file", "render_hits", "render_outcomes", "write_json"]
