"""Commit records consumed by the changelog writer.

Commits arrive already parsed: each one carries its type, an optional
component, the subject line, the hash, the issues it closes and any
breaking-change notes. Upstream parsers usually hand these over as plain
mappings (for example a JSON array), so :meth:`CommitRecord.from_mapping`
and :func:`load_commits` convert that shape into records.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any

from changelog_writer.exceptions import CommitFormatError

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("type", "subject", "hash")


def _as_tuple(data: Mapping[str, Any], name: str) -> tuple[Any, ...]:
    """Read a list field; a single string or number counts as one item."""
    value = data.get(name)
    if value is None:
        return ()
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        return (value,) if value != "" else ()
    if isinstance(value, (list, tuple)):
        return tuple(value)
    raise CommitFormatError(f"Commit field {name!r} must be a list, got {type(value).__name__}")


@dataclass(frozen=True)
class ChangelogEntry:
    """A single bullet in a rendered section."""

    subject: str
    hash: str
    closes: tuple[str | int, ...] = ()


@dataclass(frozen=True)
class CommitRecord(ChangelogEntry):
    """A parsed commit.

    Attributes:
        type: Commit category key, e.g. ``feat`` or ``fix``
        component: Code area the commit touches, ``None`` when absent
        breaks: Breaking-change notes attached to the commit
    """

    type: str = ""
    component: str | None = None
    breaks: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Empty components group with commits that have none.
        if not self.component:
            object.__setattr__(self, "component", None)
        object.__setattr__(self, "closes", tuple(self.closes))
        object.__setattr__(self, "breaks", tuple(self.breaks))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CommitRecord:
        """Build a record from a parsed-commit mapping.

        ``scope`` is accepted as an alias for ``component``.

        Raises:
            CommitFormatError: If a required field is missing
        """
        if not isinstance(data, Mapping):
            raise CommitFormatError(f"Commit must be a mapping, got {type(data).__name__}")

        missing = [name for name in _REQUIRED_FIELDS if data.get(name) is None]
        if missing:
            raise CommitFormatError(f"Commit is missing required field(s): {', '.join(missing)}")

        component = data.get("component", data.get("scope"))
        return cls(
            type=str(data["type"]),
            component=str(component) if component else None,
            subject=str(data["subject"]),
            hash=str(data["hash"]),
            closes=_as_tuple(data, "closes"),
            breaks=tuple(str(note) for note in _as_tuple(data, "breaks")),
        )

    def break_entries(self) -> list[ChangelogEntry]:
        """One entry per breaking-change note, attributed to this commit."""
        return [ChangelogEntry(subject=note, hash=self.hash) for note in self.breaks]


def parse_commits(items: Iterable[Mapping[str, Any]]) -> list[CommitRecord]:
    """Convert parsed-commit mappings into records, preserving order."""
    return [CommitRecord.from_mapping(item) for item in items]


def load_commits(source: str | Path | IO[str]) -> list[CommitRecord]:
    """Load commit records from a JSON array.

    Args:
        source: Path to a JSON file, or an open text stream

    Returns:
        Commit records in document order

    Raises:
        CommitFormatError: If the document is not a JSON array of commits
    """
    try:
        if isinstance(source, (str, Path)):
            data = json.loads(Path(source).read_text(encoding="utf-8"))
        else:
            data = json.load(source)
    except json.JSONDecodeError as e:
        raise CommitFormatError(f"Invalid commit JSON: {e}") from e

    if not isinstance(data, list):
        raise CommitFormatError("Commit JSON must be an array of commit objects")

    commits = parse_commits(data)
    logger.debug("Loaded %d commit(s)", len(commits))
    return commits
