"""Tests for changelog rendering."""

from __future__ import annotations

import io
import re
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from changelog_writer.config.models import ChangelogOptions
from changelog_writer.core.commits import ChangelogEntry, CommitRecord
from changelog_writer.core.formatters import Formatters
from changelog_writer.core.writer import (
    ChangelogWriter,
    format_timestamp,
    is_patch_version,
    render_changelog,
    write_log,
)
from changelog_writer.exceptions import WriterClosedError

SUBJECTS = {"feat": "Features", "fix": "Bug Fixes"}
REPO = "https://example.com/repo"

PARSER_FIX = CommitRecord(
    type="fix",
    component="parser",
    subject="handle empty input",
    hash="abcdef1234567890",
    closes=(42,),
)


def _options(**kwargs) -> ChangelogOptions:
    kwargs.setdefault("version", "1.4.0")
    kwargs.setdefault("subjects", SUBJECTS)
    return ChangelogOptions(**kwargs)


class TestTimestamp:
    """Tests for format_timestamp()."""

    def test_month_and_day_padded(self):
        """Month and day are zero padded, time fields are not."""
        assert format_timestamp(datetime(2024, 3, 5, 9, 7, 3)) == "2024-03-05 9:7:3"

    def test_two_digit_fields(self):
        """Two-digit fields are written as is."""
        assert format_timestamp(datetime(2023, 12, 31, 23, 59, 58)) == "2023-12-31 23:59:58"


class TestHeader:
    """Tests for ChangelogWriter.header()."""

    @pytest.mark.parametrize(
        ("version", "expected"),
        [("1.4.0", False), ("2.0.0", False), ("1.4.3", True), ("1.4", True), ("1.4.0-rc.1", True)],
    )
    def test_is_patch_version(self, version: str, expected: bool):
        """Only a third component of "0" marks a minor or major release."""
        assert is_patch_version(version) is expected

    def test_minor_header(self, fixed_clock):
        """Minor releases use the ## title."""
        writer = ChangelogWriter(_options(), clock=fixed_clock)
        writer.header("1.4.0")

        assert writer.end() == '<a name="1.4.0"></a>\n## 1.4.0 (2024-03-05 9:7:3)\n\n'

    def test_patch_header(self, fixed_clock):
        """Patch releases use the ### title."""
        writer = ChangelogWriter(_options(version="1.4.3"), clock=fixed_clock)
        writer.header("1.4.3")

        assert writer.end() == '<a name="1.4.3"></a>\n### 1.4.3 (2024-03-05 9:7:3)\n\n'

    def test_subtitle(self, fixed_clock):
        """The subtitle follows the version after a space."""
        writer = ChangelogWriter(_options(subtitle="Codename"), clock=fixed_clock)
        writer.header("1.4.0")

        assert "## 1.4.0 Codename (2024-03-05 9:7:3)\n" in writer.end()

    def test_custom_version_text(self, fixed_clock):
        """A version_text override is used for minor releases."""
        options = _options(version_text=lambda version, subtitle: f"# v{version}{subtitle}")
        writer = ChangelogWriter(options, clock=fixed_clock)
        writer.header("1.4.0")

        assert "\n# v1.4.0 (2024-03-05 9:7:3)\n" in writer.end()


class TestSection:
    """Tests for ChangelogWriter.section()."""

    def _render(self, groups, **kwargs) -> str:
        writer = ChangelogWriter(_options(**kwargs))
        writer.section("Bug Fixes", groups)
        return writer.end()

    def test_empty_section_writes_nothing(self):
        """An empty section produces no header."""
        assert self._render({}) == ""

    def test_single_component_inline(self):
        """A component with one commit is labelled inline."""
        assert self._render({"parser": [PARSER_FIX]}) == (
            "#### Bug Fixes\n\n"
            "* **parser:** handle empty input (abcdef12, closes (#42))\n"
            "\n"
        )

    def test_links_with_repository(self):
        """Links point at the repository when one is configured."""
        output = self._render({"parser": [PARSER_FIX]}, repository=REPO)

        assert output.splitlines()[2] == (
            "* **parser:** handle empty input "
            "([abcdef12](https://example.com/repo/commit/abcdef1234567890), "
            "closes [#42](https://example.com/repo/issues/42))"
        )

    def test_nested_component(self):
        """A component with several commits becomes a nested list in input order."""
        first = CommitRecord(type="fix", component="core", subject="first", hash="1" * 16)
        second = CommitRecord(type="fix", component="core", subject="second", hash="2" * 16)

        assert self._render({"core": [first, second]}) == (
            "#### Bug Fixes\n\n"
            "* **core:**\n"
            "  * first (11111111)\n"
            "  * second (22222222)\n"
            "\n"
        )

    def test_no_component_is_flat(self):
        """Commits without a component are plain bullets whatever their count."""
        entries = [
            ChangelogEntry(subject="one", hash="aaaaaaaaaa"),
            ChangelogEntry(subject="two", hash="bbbbbbbbbb"),
        ]

        assert self._render({None: entries}) == (
            "#### Bug Fixes\n\n* one (aaaaaaaa)\n* two (bbbbbbbb)\n\n"
        )

    def test_components_sorted(self):
        """Components are written in sorted order; "alpha" sorts after unlabelled entries."""
        groups = {
            "zeta": [ChangelogEntry(subject="z", hash="z" * 8)],
            "alpha": [ChangelogEntry(subject="a", hash="a" * 8)],
            None: [ChangelogEntry(subject="n", hash="n" * 8)],
        }

        lines = self._render(groups).splitlines()

        assert lines[2:5] == ["* n (nnnnnnnn)", "* **alpha:** a (aaaaaaaa)", "* **zeta:** z (zzzzzzzz)"]

    def test_unlabelled_entries_sort_as_marker(self):
        """Unlabelled entries sort as "$$", after names below it and before a real "$$"."""
        groups = {
            "$$": [ChangelogEntry(subject="d", hash="d" * 8)],
            None: [ChangelogEntry(subject="n", hash="n" * 8)],
            "#ui": [ChangelogEntry(subject="u", hash="u" * 8)],
        }

        lines = self._render(groups).splitlines()

        assert lines[2:5] == ["* **#ui:** u (uuuuuuuu)", "* n (nnnnnnnn)", "* **$$:** d (dddddddd)"]

    def test_several_issues(self):
        """Closed issues are joined with commas."""
        commit = CommitRecord(type="fix", subject="s", hash="c" * 8, closes=(7, "8"))

        assert "* s (cccccccc, closes (#7), (#8))\n" in self._render({None: [commit]})

    def test_legacy_links(self):
        """Legacy links wrap plain hashes in their own parentheses."""
        output = self._render({"parser": [PARSER_FIX]}, legacy_links=True)

        assert "* **parser:** handle empty input ((abcdef12), closes (#42))\n" in output

    def test_explicit_formatters(self):
        """Formatters passed to the writer take precedence over the options."""
        formatters = Formatters(commit_link=lambda commit_hash: f"<{commit_hash[:4]}>")
        writer = ChangelogWriter(_options(), formatters=formatters)
        writer.section("Fixes", {None: [ChangelogEntry(subject="s", hash="abcdef")]})

        assert "* s (<abcd>)\n" in writer.end()


class TestWriterStream:
    """Tests for writing to an external sink."""

    def test_writes_to_stream(self, fixed_clock):
        """Output goes to the given stream and end() returns None."""
        stream = io.StringIO()
        writer = ChangelogWriter(_options(), stream, clock=fixed_clock)
        writer.header("1.4.0")

        assert writer.end() is None
        assert stream.getvalue().startswith('<a name="1.4.0"></a>')

    def test_end_flushes_stream(self):
        """end() flushes a sink that supports it."""
        stream = MagicMock()
        writer = ChangelogWriter(_options(), stream)
        writer.section("Fixes", {None: [ChangelogEntry(subject="s", hash="abcdef12")]})

        writer.end()

        stream.flush.assert_called_once_with()

    def test_end_without_flush(self):
        """A sink with only write() is accepted."""

        class ListSink:
            def __init__(self):
                self.parts = []

            def write(self, text):
                self.parts.append(text)

        sink = ListSink()
        writer = ChangelogWriter(_options(), sink)
        writer.section("Fixes", {None: [ChangelogEntry(subject="s", hash="abcdef12")]})

        assert writer.end() is None
        assert "".join(sink.parts) == "#### Fixes\n\n* s (abcdef12)\n\n"

    def test_write_after_end_raises(self):
        """Writing after end() raises WriterClosedError."""
        writer = ChangelogWriter(_options())
        writer.end()

        assert writer.closed
        with pytest.raises(WriterClosedError):
            writer.header("1.4.0")


class TestRenderChangelog:
    """Tests for render_changelog() and write_log()."""

    def test_full_document(self, sample_commits: list[CommitRecord], fixed_clock):
        """Render a complete release."""
        output = render_changelog(sample_commits, _options(), clock=fixed_clock)

        assert output == (
            '<a name="1.4.0"></a>\n'
            "## 1.4.0 (2024-03-05 9:7:3)\n"
            "\n"
            "#### Features\n"
            "\n"
            "* faster startup (44444444)\n"
            "* **cli:** add --quiet flag (55555555, closes (#7), (#8))\n"
            "* **core:**\n"
            "  * add plugin hooks (11111111)\n"
            "  * expose hook registry (22222222)\n"
            "\n"
            "#### Bug Fixes\n"
            "\n"
            "* **parser:** handle empty input (abcdef12, closes (#42))\n"
            "\n"
            "#### Breaking Changes\n"
            "\n"
            "* hooks must now be registered explicitly (22222222)\n"
            "* drop support for the old config file (33333333)\n"
            "\n"
        )

    def test_section_order_follows_subjects(self, sample_commits: list[CommitRecord]):
        """Sections follow the order of the subjects mapping."""
        options = _options(subjects={"fix": "Bug Fixes", "feat": "Features"})
        output = render_changelog(sample_commits, options)

        assert output.index("#### Bug Fixes") < output.index("#### Features")
        assert output.index("#### Features") < output.index("#### Breaking Changes")

    def test_every_matching_commit_once(self, sample_commits: list[CommitRecord]):
        """Each commit with a configured type appears exactly once."""
        output = render_changelog(sample_commits, _options())

        for commit in sample_commits:
            expected = 0 if commit.type == "chore" else 1
            assert output.count(f" {commit.subject} (") == expected

    def test_empty_section_skipped(self, sample_commits: list[CommitRecord]):
        """Configured sections without commits have no header."""
        options = _options(subjects={"feat": "Features", "docs": "Documentation"})
        output = render_changelog(sample_commits, options)

        assert "Documentation" not in output
        assert len(re.findall(r"^#### ", output, re.MULTILINE)) == 2

    def test_empty_commits(self, fixed_clock):
        """No commits renders only the header."""
        output = render_changelog([], _options(), clock=fixed_clock)

        assert output == '<a name="1.4.0"></a>\n## 1.4.0 (2024-03-05 9:7:3)\n\n'

    def test_empty_subjects(self, sample_commits: list[CommitRecord]):
        """Without subjects only the breaking changes are listed."""
        output = render_changelog(sample_commits, _options(subjects={}))

        assert re.findall(r"^#### .*$", output, re.MULTILINE) == ["#### Breaking Changes"]

    def test_write_log_callback(self, sample_commits: list[CommitRecord], fixed_clock):
        """write_log hands the text to the callback without an error."""
        calls = []

        text = write_log(
            sample_commits,
            _options(),
            lambda error, result: calls.append((error, result)),
            clock=fixed_clock,
        )

        assert calls == [(None, text)]
        assert text.startswith('<a name="1.4.0"></a>')
