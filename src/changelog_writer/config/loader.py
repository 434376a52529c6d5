"""Loading changelog-writer configuration from pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from changelog_writer.config.models import WriterConfig
from changelog_writer.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

TOOL_NAME = "changelog-writer"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or one of its parents.

    Args:
        start: Directory to search from (defaults to the current directory)

    Returns:
        Path to the pyproject.toml file

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
    """
    directory = (start or Path.cwd()).resolve()
    for candidate in (directory, *directory.parents):
        path = candidate / "pyproject.toml"
        if path.is_file():
            return path

    raise ConfigNotFoundError(f"No pyproject.toml found in {directory} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_writer_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.changelog-writer]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_NAME, {})


def load_config(path: Path | None = None) -> WriterConfig:
    """Load and validate the project configuration.

    Args:
        path: pyproject.toml or a directory to search from

    Returns:
        Validated configuration (defaults when the table is missing)

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
        ConfigValidationError: If the configuration is invalid
    """
    if path is not None and path.is_file():
        pyproject_path = path
    else:
        pyproject_path = find_pyproject_toml(path)

    raw = extract_writer_config(load_pyproject_toml(pyproject_path))
    logger.debug("Loaded [tool.%s] from %s: %s", TOOL_NAME, pyproject_path, sorted(raw))

    try:
        return WriterConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_NAME}] configuration: {e}") from e
