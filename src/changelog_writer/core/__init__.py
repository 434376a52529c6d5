"""Core changelog logic for changelog-writer.

This module contains the fundamental building blocks:
- Commit records and JSON input
- Grouping of commits by section and component
- Link and title generation
- Streaming the release text
"""

from __future__ import annotations

from changelog_writer.core.aggregate import AggregationResult, aggregate
from changelog_writer.core.commits import (
    ChangelogEntry,
    CommitRecord,
    load_commits,
    parse_commits,
)
from changelog_writer.core.formatters import Formatters
from changelog_writer.core.writer import (
    BREAKING_CHANGES_TITLE,
    ChangelogWriter,
    render_changelog,
    write_log,
)

__all__ = [
    "BREAKING_CHANGES_TITLE",
    # Aggregation
    "AggregationResult",
    # Commits
    "ChangelogEntry",
    # Rendering
    "ChangelogWriter",
    "CommitRecord",
    "Formatters",
    "aggregate",
    "load_commits",
    "parse_commits",
    "render_changelog",
    "write_log",
]
