"""Version reporting for the workspace-search CLI."""

from __future__ import annotations

import platform
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

from cli.output import write_json


def get_version() -> str:
    """Get the workspace-search package version string.

    Returns:
    -------
    str
        Version string, or "0.0.0-dev" if not installed.
    """
    return _package_version("workspace-search") or "0.0.0-dev"


def get_version_info() -> dict[str, object]:
    """Get detailed version information.

    Returns:
    -------
    dict[str, object]
        Structured version payload.
    """
    return {
        "workspace-search": get_version(),
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "dependencies": {
            "chardet": _package_version("chardet"),
            "cyclopts": _package_version("cyclopts"),
            "msgspec": _package_version("msgspec"),
            "pathspec": _package_version("pathspec"),
            "watchdog": _package_version("watchdog"),
        },
    }


def version_command() -> int:
    """Show version and dependency information.

    Returns:
    -------
    int
        Exit status code.
    """
    write_json(get_version_info())
    return 0


def _package_version(name: str) -> str | None:
    try:
        return pkg_version(name)
    except PackageNotFoundError:
        return None


__all__ = ["get_version", "get_version_info", "version_command"]
