"""changelog-writer: render conventional commit records into a release changelog."""

from __future__ import annotations

from changelog_writer.config.models import ChangelogOptions, WriterConfig
from changelog_writer.core import (
    AggregationResult,
    ChangelogEntry,
    ChangelogWriter,
    CommitRecord,
    Formatters,
    aggregate,
    load_commits,
    render_changelog,
    write_log,
)

__version__ = "0.1.0"

__all__ = [
    "AggregationResult",
    "ChangelogEntry",
    "ChangelogOptions",
    "ChangelogWriter",
    "CommitRecord",
    "Formatters",
    "WriterConfig",
    "__version__",
    "aggregate",
    "load_commits",
    "render_changelog",
    "write_log",
]
