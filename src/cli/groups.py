"""Shared help-panel groups for the workspace-search CLI."""

from __future__ import annotations

from cyclopts import Group

session_group = Group(
    "Session",
    help="Logging and configuration file options.",
    sort_key=0,
)

match_group = Group(
    "Matching",
    help="How the query is interpreted.",
    sort_key=1,
)

filter_group = Group(
    "Files",
    help="Which files are searched.",
    sort_key=2,
)

output_group = Group(
    "Output",
    help="Result rendering.",
    sort_key=3,
)

__all__ = ["filter_group", "match_group", "output_group", "session_group"]
