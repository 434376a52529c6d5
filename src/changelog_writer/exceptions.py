"""Exception hierarchy for changelog-writer.

All errors raised by the package derive from :class:`ChangelogWriterError`
so callers can catch a single type at the boundary (the CLI does).
"""

from __future__ import annotations


class ChangelogWriterError(Exception):
    """Base class for all changelog-writer errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigError(ChangelogWriterError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml was found."""


class ConfigValidationError(ConfigError):
    """Configuration values are invalid."""


class ProjectError(ChangelogWriterError):
    """Project metadata could not be read or written."""


class VersionNotFoundError(ProjectError):
    """The project version could not be determined."""


class CommitFormatError(ChangelogWriterError):
    """A commit record is missing required fields or is not well formed."""


class WriterClosedError(ChangelogWriterError):
    """A write was attempted after the writer was ended."""
