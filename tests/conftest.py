"""Shared fixtures for changelog-writer tests."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import pytest

from changelog_writer.core.commits import CommitRecord

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def fixed_clock():
    """Clock returning 2024-03-05 09:07:03."""
    return lambda: datetime(2024, 3, 5, 9, 7, 3)


@pytest.fixture
def sample_commits() -> list[CommitRecord]:
    """A mix of sections, components and breaking changes."""
    return [
        CommitRecord(
            type="feat",
            component="core",
            subject="add plugin hooks",
            hash="1111111111111111",
        ),
        CommitRecord(
            type="fix",
            component="parser",
            subject="handle empty input",
            hash="abcdef1234567890",
            closes=(42,),
        ),
        CommitRecord(
            type="feat",
            component="core",
            subject="expose hook registry",
            hash="2222222222222222",
            breaks=("hooks must now be registered explicitly",),
        ),
        CommitRecord(
            type="chore",
            subject="bump dependencies",
            hash="3333333333333333",
            breaks=("drop support for the old config file",),
        ),
        CommitRecord(
            type="feat",
            subject="faster startup",
            hash="4444444444444444",
        ),
        CommitRecord(
            type="feat",
            component="cli",
            subject="add --quiet flag",
            hash="5555555555555555",
            closes=(7, 8),
        ),
    ]


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project directory with a configured pyproject.toml."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.4.0"

[project.urls]
Homepage = "https://example.com"
Repository = "https://github.com/example/test-project.git"

[tool.changelog-writer]
subtitle = "Codename"

[tool.changelog-writer.subjects]
feat = "Features"
fix = "Bug Fixes"
"""
    )
    return tmp_path
