"""Rendering of grouped commits into changelog text.

:class:`ChangelogWriter` streams one release to a text sink in three
steps: ``header``, one ``section`` per group, then ``end``.
:func:`render_changelog` drives the whole sequence and returns the text.

The output has a fixed shape::

    <a name="1.2.0"></a>
    ## 1.2.0 (2024-03-05 9:7:3)

    #### Features

    * **parser:**
      * first subject (abcdef12)
      * second subject (12345678, closes (#42))
    * **cli:** lone subject (deadbeef)
    * subject without component (cafebabe)

    #### Breaking Changes

    * break note (abcdef12)
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from changelog_writer.core.aggregate import aggregate
from changelog_writer.core.formatters import Formatters
from changelog_writer.exceptions import WriterClosedError

if TYPE_CHECKING:
    from changelog_writer.config.models import ChangelogOptions
    from changelog_writer.core.commits import ChangelogEntry, CommitRecord

logger = logging.getLogger(__name__)

BREAKING_CHANGES_TITLE = "Breaking Changes"
NO_COMPONENT_SORT_NAME = "$$"

Clock = Callable[[], datetime]


class TextSink(Protocol):
    def write(self, text: str, /) -> object: ...


def format_timestamp(now: datetime) -> str:
    """Format a release timestamp; only month and day are zero padded."""
    return f"{now.year}-{now.month:02d}-{now.day:02d} {now.hour}:{now.minute}:{now.second}"


def is_patch_version(version: str) -> bool:
    """Whether ``version`` is a patch release (third component is not ``0``)."""
    parts = version.split(".")
    if len(parts) < 3:
        logger.warning("Version %r has fewer than three components; treating as patch", version)
        return True
    return parts[2] != "0"


def _component_sort_key(name: str | None) -> tuple[str, bool]:
    # Entries without a component sort as "$$", ahead of a component with that name.
    return (NO_COMPONENT_SORT_NAME if name is None else name, name is not None)


class ChangelogWriter:
    """Streams a single release changelog to a text sink.

    Args:
        options: Render options for the release
        stream: Sink to write to; an in-memory buffer when omitted
        formatters: Text generators (defaults to ``options.formatters()``)
        clock: Source of the release timestamp
    """

    def __init__(
        self,
        options: ChangelogOptions,
        stream: TextSink | None = None,
        *,
        formatters: Formatters | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.options = options
        self.formatters = formatters or options.formatters()
        self._buffer = io.StringIO() if stream is None else None
        self._stream: TextSink = self._buffer if self._buffer is not None else stream
        self._clock = clock or datetime.now
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _write(self, text: str) -> None:
        if self._closed:
            raise WriterClosedError("Cannot write to a changelog writer after end()")
        self._stream.write(text)

    def header(self, version: str) -> None:
        """Write the release anchor and title."""
        subtitle = f" {self.options.subtitle}" if self.options.subtitle else ""
        if is_patch_version(version):
            title = self.formatters.patch_version_text(version, subtitle)
        else:
            title = self.formatters.version_text(version, subtitle)

        timestamp = format_timestamp(self._clock())
        self._write(f'<a name="{version}"></a>\n{title} ({timestamp})\n\n')

    def section(self, title: str, groups: Mapping[str | None, Sequence[ChangelogEntry]]) -> None:
        """Write one section; nothing is written when ``groups`` is empty."""
        components = sorted(groups, key=_component_sort_key)
        if not components:
            logger.debug("Skipping empty section %r", title)
            return

        self._write(f"#### {title}\n\n")

        for name in components:
            entries = groups[name]
            prefix = "*"
            if name is not None:
                if len(entries) > 1:
                    self._write(f"* **{name}:**\n")
                    prefix = "  *"
                else:
                    prefix = f"* **{name}:**"

            for entry in entries:
                self._write(self._format_entry(prefix, entry))

        self._write("\n")

    def _format_entry(self, prefix: str, entry: ChangelogEntry) -> str:
        line = f"{prefix} {entry.subject} ({self.formatters.commit_link(entry.hash)}"
        if entry.closes:
            links = ", ".join(self.formatters.issue_link(issue) for issue in entry.closes)
            line += f", closes {links}"
        return line + ")\n"

    def end(self) -> str | None:
        """Finish writing.

        Returns:
            The assembled text when writing to the internal buffer, else None
        """
        self._closed = True
        flush = getattr(self._stream, "flush", None)
        if flush is not None:
            flush()
        if self._buffer is not None:
            return self._buffer.getvalue()
        return None


def render_changelog(
    commits: Iterable[CommitRecord],
    options: ChangelogOptions,
    *,
    formatters: Formatters | None = None,
    clock: Clock | None = None,
) -> str:
    """Render the changelog for one release.

    Sections follow the order of ``options.subjects`` and are followed by
    the breaking changes; empty sections are omitted.

    Args:
        commits: Commit records in changelog order
        options: Render options
        formatters: Override the text generators derived from ``options``
        clock: Source of the release timestamp

    Returns:
        The changelog text
    """
    grouped = aggregate(commits, options.subjects)
    writer = ChangelogWriter(options, formatters=formatters, clock=clock)

    writer.header(options.version)
    for key, groups in grouped.sections.items():
        writer.section(options.subjects[key], groups)
    writer.section(BREAKING_CHANGES_TITLE, grouped.breaks)

    text = writer.end()
    logger.debug("Rendered changelog for %s (%d characters)", options.version, len(text or ""))
    return text or ""


def write_log(
    commits: Iterable[CommitRecord],
    options: ChangelogOptions,
    done: Callable[[Exception | None, str], None] | None = None,
    *,
    formatters: Formatters | None = None,
    clock: Clock | None = None,
) -> str:
    """Render a release and hand the text to ``done`` as ``(None, text)``.

    Rendering well-formed records cannot fail, so the callback only ever
    receives a result.
    """
    text = render_changelog(commits, options, formatters=formatters, clock=clock)
    if done is not None:
        done(None, text)
    return text
