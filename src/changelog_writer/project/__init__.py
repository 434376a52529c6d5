"""Project file helpers for changelog-writer."""

from __future__ import annotations

from changelog_writer.project.changelog import prepend_release
from changelog_writer.project.pyproject import get_project_version, get_repository_url

__all__ = [
    "get_project_version",
    "get_repository_url",
    "prepend_release",
]
