"""Project metadata from pyproject.toml.

The release version and the repository URL feed the changelog header
and its links when they are not given explicitly.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from changelog_writer.config.loader import find_pyproject_toml, load_pyproject_toml
from changelog_writer.exceptions import VersionNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

REPOSITORY_URL_KEYS = ("repository", "source", "homepage")

_URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


def _resolve(path: Path | None) -> Path:
    if path is None:
        return find_pyproject_toml()
    if path.is_dir():
        return find_pyproject_toml(path)
    return path


def _load(path: Path | None) -> tuple[Path, dict[str, Any]]:
    pyproject_path = _resolve(path)
    return pyproject_path, load_pyproject_toml(pyproject_path)


def get_project_version(path: Path | None = None) -> str:
    """Get the version from pyproject.toml.

    Args:
        path: Path to pyproject.toml or directory to search from

    Returns:
        Version string

    Raises:
        VersionNotFoundError: If version cannot be found
    """
    pyproject_path, data = _load(path)

    # PEP 621 first, then Poetry
    version = data.get("project", {}).get("version")
    if version is None:
        version = data.get("tool", {}).get("poetry", {}).get("version")

    if not version:
        raise VersionNotFoundError(
            f"Could not find version in {pyproject_path}. "
            "Expected [project].version or [tool.poetry].version."
        )
    return str(version)


def normalize_repository_url(url: str) -> str:
    """Strip a trailing slash and ``.git`` suffix from a repository URL."""
    url = url.strip().rstrip("/")
    if url.endswith(".git"):
        url = url[: -len(".git")]
    return url


def get_repository_url(path: Path | None = None) -> str | None:
    """Get the repository URL from ``[project.urls]``.

    Looks for the ``Repository``, ``Source`` and ``Homepage`` keys in that
    order, ignoring case.

    Args:
        path: Path to pyproject.toml or directory to search from

    Returns:
        The repository URL, or None if none is declared
    """
    _, data = _load(path)
    urls = data.get("project", {}).get("urls", {})
    by_key = {str(key).lower(): value for key, value in urls.items()}

    for key in REPOSITORY_URL_KEYS:
        value = by_key.get(key)
        if isinstance(value, str) and _URL_PATTERN.match(value):
            return normalize_repository_url(value)
    return None
