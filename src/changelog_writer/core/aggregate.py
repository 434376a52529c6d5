"""Grouping of commits into changelog sections.

Commits are partitioned by type into the configured sections and, within a
section, by component. Breaking-change notes are collected separately into
a single flat group regardless of the commit type.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from changelog_writer.core.commits import ChangelogEntry, CommitRecord

logger = logging.getLogger(__name__)

# Components keyed by name; None holds entries without a component.
ComponentGroups = dict[str | None, list[ChangelogEntry]]


@dataclass
class AggregationResult:
    """Commits grouped for a single render.

    Attributes:
        sections: Section key to component groups, in section-key order
        breaks: Breaking-change entries under the no-component key
    """

    sections: dict[str, ComponentGroups] = field(default_factory=dict)
    breaks: ComponentGroups = field(default_factory=dict)


def aggregate(commits: Iterable[CommitRecord], section_keys: Iterable[str]) -> AggregationResult:
    """Group commits by section and component.

    Every key in ``section_keys`` gets a (possibly empty) group so callers
    decide at render time which sections to skip. Commits whose type is not
    a section key are left out of ``sections`` but their breaking-change
    notes are still collected.

    Args:
        commits: Commit records in changelog order
        section_keys: Commit types that have a section

    Returns:
        The grouped commits
    """
    result = AggregationResult(sections={key: {} for key in section_keys})
    dropped: set[str] = set()
    count = 0

    for commit in commits:
        count += 1
        section = result.sections.get(commit.type)
        if section is not None:
            section.setdefault(commit.component, []).append(commit)
        else:
            dropped.add(commit.type)

        for entry in commit.break_entries():
            result.breaks.setdefault(None, []).append(entry)

    logger.debug(
        "Aggregated %d commit(s) into %d section(s), %d breaking change(s)",
        count,
        len(result.sections),
        len(result.breaks.get(None, [])),
    )
    if dropped:
        logger.debug("Commit types without a section: %s", ", ".join(sorted(dropped)))

    return result
