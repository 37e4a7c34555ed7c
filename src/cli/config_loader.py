"""Config loading for the CLI."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import msgspec

from cli.config_models import RootConfigSpec
from serde_msgspec import convert, loads_toml, validation_error_payload

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "workspace-search.toml"
PYPROJECT_TOOL_KEY = "workspace-search"


class ConfigError(ValueError):
    """Configuration file is unreadable or invalid."""


def load_root_config(
    config_file: str | None,
    *,
    start: Path | None = None,
) -> tuple[RootConfigSpec, str | None]:
    """Load configuration from an explicit file or the nearest config file.

    Lookup order without ``config_file``: ``workspace-search.toml`` in the
    start directory or a parent, then ``[tool.workspace-search]`` in the
    nearest ``pyproject.toml``.

    Parameters
    ----------
    config_file
        Optional explicit config file path.
    start
        Directory to search from (defaults to the working directory).

    Returns
    -------
    tuple[RootConfigSpec, str | None]
        Decoded config and the location it came from (``None`` for defaults).

    Raises
    ------
    ConfigError
        Raised when an explicit file is missing or any file is invalid.
    """
    if config_file:
        path = Path(config_file)
        if not path.is_file():
            msg = f"Config file not found: {config_file!r}."
            raise ConfigError(msg)
        raw = _read_toml(path)
        if path.name == "pyproject.toml":
            nested = _extract_tool_config(raw)
            location = f"{path}:tool.{PYPROJECT_TOOL_KEY}"
            return _decode_root_config(nested or {}, location=location), location
        return _decode_root_config(raw, location=str(path)), str(path)

    config_path = _find_in_parents(CONFIG_FILENAME, start)
    if config_path is not None:
        raw = _read_toml(config_path)
        return _decode_root_config(raw, location=str(config_path)), str(config_path)

    pyproject_path = _find_in_parents("pyproject.toml", start)
    if pyproject_path is not None:
        nested = _extract_tool_config(_read_toml(pyproject_path))
        if nested is not None:
            location = f"{pyproject_path}:tool.{PYPROJECT_TOOL_KEY}"
            return _decode_root_config(nested, location=location), location

    return RootConfigSpec(), None


def _find_in_parents(filename: str, start: Path | None) -> Path | None:
    path = (start or Path.cwd()).resolve()
    while True:
        candidate = path / filename
        if candidate.is_file():
            return candidate
        if path.parent == path:
            return None
        path = path.parent


def _read_toml(path: Path) -> Mapping[str, object]:
    try:
        return loads_toml(path.read_bytes())
    except OSError as exc:
        msg = f"Unable to read config file {path}: {exc}"
        raise ConfigError(msg) from exc
    except (msgspec.DecodeError, TypeError) as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc


def _extract_tool_config(raw: Mapping[str, object]) -> Mapping[str, object] | None:
    tool = raw.get("tool")
    if not isinstance(tool, Mapping):
        return None
    nested = tool.get(PYPROJECT_TOOL_KEY)
    if not isinstance(nested, Mapping):
        return None
    return nested


def _decode_root_config(raw: Mapping[str, object], *, location: str) -> RootConfigSpec:
    try:
        config = convert(dict(raw), target_type=RootConfigSpec)
    except msgspec.ValidationError as exc:
        details = validation_error_payload(exc)
        where = f" at {details['path']}" if "path" in details else ""
        msg = f"Invalid config in {location}{where}: {details.get('summary', str(exc))}"
        raise ConfigError(msg) from exc
    logger.debug("Loaded config from %s", location)
    return config


__all__ = ["CONFIG_FILENAME", "ConfigError", "load_root_config"]
