"""Single-file commands: inspect a file and list a directory."""

from __future__ import annotations

from typing import Annotated

from cyclopts import Parameter

from cli.exit_codes import ExitCode
from cli.groups import output_group
from cli.output import render_entries, render_file, write_json
from workspace.files import open_file
from workspace.listing import read_dir


def open_command(
    path: str,
    *,
    json: Annotated[
        bool,
        Parameter(name="--json", help="Print the result as JSON.", group=output_group),
    ] = False,
    content: Annotated[
        bool,
        Parameter(name="--content", help="Include decoded content in JSON output."),
    ] = False,
) -> int:
    """Show the detected encoding and metadata of PATH.

    Returns
    -------
    int
        Exit status code.
    """
    result = open_file(path)
    if not json:
        render_file(result)
        return ExitCode.SUCCESS
    payload: dict[str, object] = {
        "path": result.path,
        "encoding": result.encoding,
        "stat": result.stat,
    }
    if content:
        payload["content"] = result.content
    write_json(payload)
    return ExitCode.SUCCESS


def ls_command(
    path: str = ".",
    *,
    json: Annotated[
        bool,
        Parameter(name="--json", help="Print the listing as JSON.", group=output_group),
    ] = False,
) -> int:
    """List PATH, directories first.

    Returns
    -------
    int
        Exit status code.
    """
    entries = read_dir(path)
    if json:
        write_json(entries)
    else:
        render_entries(entries)
    return ExitCode.SUCCESS


__all__ = ["ls_command", "open_command"]
