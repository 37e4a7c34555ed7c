"""Main application setup for the workspace-search CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated, Literal

from cyclopts import App, Parameter
from rich.console import Console
from rich.markup import escape

from cli.commands.version import get_version
from cli.config_loader import ConfigError, load_root_config
from cli.context import RunContext
from cli.dispatch import invoke
from cli.exit_codes import ExitCode
from cli.groups import session_group

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
DEFAULT_LOG_LEVEL = "INFO"

_HELP_EPILOGUE = """
Examples:
  workspace-search search TODO .                      Find TODO under the current directory
  workspace-search search -e "def (\\w+)" src         Regex search
  workspace-search replace foo bar .                  Preview replacing foo with bar
  workspace-search replace foo bar . --apply          Apply the replacement

Environment Variables:
  WORKSPACE_SEARCH_LOG_LEVEL   Default log level (DEBUG, INFO, WARNING, ERROR)

Configuration:
  Defaults are read from workspace-search.toml or [tool.workspace-search]
  in pyproject.toml, searching parent directories.
"""

app = App(
    name="workspace-search",
    help="Project-wide search and replace with ignore-file support.",
    help_format="rich",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
    default_parameter=Parameter(
        show_default=True,
        show_env_var=True,
    ),
    exit_on_error=True,
    print_error=True,
    help_on_error=False,
)

app.meta.group_parameters = session_group


@dataclass(frozen=True)
class SessionOptions:
    """Session-level configuration parameters."""

    config_file: Annotated[
        str | None,
        Parameter(
            name="--config",
            help="Path to configuration file (overrides default search).",
            group=session_group,
        ),
    ] = None
    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None,
        Parameter(
            name="--log-level",
            help="Logging verbosity level.",
            env_var="WORKSPACE_SEARCH_LOG_LEVEL",
            group=session_group,
        ),
    ] = None


_DEFAULT_SESSION_OPTIONS = SessionOptions()


@app.meta.default
def meta_launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    session: Annotated[SessionOptions, Parameter(name="*")] = _DEFAULT_SESSION_OPTIONS,
) -> int:
    """Meta launcher for config selection and context injection.

    Returns
    -------
    int
        Exit status code from command execution.
    """
    try:
        config, location = load_root_config(session.config_file)
    except ConfigError as exc:
        logging.basicConfig(level=session.log_level or DEFAULT_LOG_LEVEL)
        Console(stderr=True, soft_wrap=True).print(f"[red]error:[/red] {escape(str(exc))}")
        return ExitCode.CONFIG_ERROR

    log_level = (session.log_level or config.log_level or DEFAULT_LOG_LEVEL).upper()
    if log_level not in LOG_LEVELS:
        Console(stderr=True, soft_wrap=True).print(
            f"[red]error:[/red] Unsupported log level {log_level!r}."
        )
        return ExitCode.CONFIG_ERROR
    logging.basicConfig(level=log_level)

    run_context = RunContext(
        log_level=log_level,
        config=config,
        config_location=location,
    )
    return invoke(app, list(tokens), run_context=run_context)


# Lazy-loaded commands with aliases
app.command("cli.commands.search:search_command", name="search", alias="s")
app.command("cli.commands.search:replace_command", name="replace", alias="r")
app.command("cli.commands.files:open_command", name="open")
app.command("cli.commands.files:ls_command", name="ls")
app.command("cli.commands.version:version_command", name="version", alias="v")


def main() -> None:
    """Run the workspace-search CLI."""
    app.meta()


__all__ = ["app", "main", "meta_launcher"]
