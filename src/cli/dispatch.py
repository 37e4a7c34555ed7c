"""Command dispatch with run-context injection and error mapping."""

from __future__ import annotations

import logging
import time

from cyclopts import App
from cyclopts.exceptions import CycloptsError
from rich.console import Console
from rich.markup import escape

from cli.context import RunContext
from cli.exit_codes import ExitCode
from search.errors import SearchError
from workspace.errors import WorkspaceIOError

_LOGGER = logging.getLogger(__name__)


def invoke(app: App, tokens: list[str], *, run_context: RunContext) -> int:
    """Parse ``tokens``, run the selected command, and return an exit code.

    Commands that declare a ``run_context`` parameter receive ``run_context``.
    Fatal engine errors are printed to stderr and mapped to exit codes.

    Returns
    -------
    int
        Process exit status.
    """
    try:
        command, bound, ignored = app.parse_args(tokens, exit_on_error=False, print_error=True)
    except CycloptsError as exc:
        return ExitCode.from_exception(exc)
    for name, hint in ignored.items():
        if hint is RunContext or name == "run_context":
            bound.arguments[name] = run_context
    started = time.perf_counter()
    try:
        result = command(*bound.args, **bound.kwargs)
    except (SearchError, WorkspaceIOError) as exc:
        Console(stderr=True, soft_wrap=True).print(f"[red]error:[/red] {escape(str(exc))}")
        return ExitCode.from_exception(exc)
    _LOGGER.debug(
        "Command %s finished in %.1fms",
        getattr(command, "__qualname__", repr(command)),
        (time.perf_counter() - started) * 1000.0,
    )
    if isinstance(result, int):
        return result
    return ExitCode.SUCCESS


__all__ = ["invoke"]
