"""Pydantic models for changelog-writer configuration.

``ChangelogOptions`` holds everything one render needs. ``WriterConfig`` is
the project-level ``[tool.changelog-writer]`` table; it lacks the version,
which is supplied per release.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from changelog_writer.core.formatters import Formatters


def _default_subjects() -> dict[str, str]:
    return {
        "feat": "Features",
        "fix": "Bug Fixes",
        "perf": "Performance Improvements",
    }


def _normalize_repository(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip().rstrip("/")
    return value or None


class ChangelogOptions(BaseModel):
    """Options for rendering a single release."""

    model_config = ConfigDict(frozen=True)

    version: str = Field(min_length=1, description="Version being released, e.g. 1.2.0")
    subtitle: str = Field(default="", description="Text appended to the release title")
    repository: str | None = Field(default=None, description="Base URL for commit and issue links")
    subjects: dict[str, str] = Field(
        default_factory=_default_subjects,
        description="Commit type to section title, in rendering order",
    )
    version_text: Callable[[str, str], str] | None = None
    patch_version_text: Callable[[str, str], str] | None = None
    issue_link: Callable[[str | int], str] | None = None
    commit_link: Callable[[str], str] | None = None
    legacy_links: bool = Field(
        default=False,
        description="Wrap plain commit hashes in their own parentheses",
    )

    @field_validator("version")
    @classmethod
    def _strip_version(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("version must not be blank")
        return value

    @field_validator("repository")
    @classmethod
    def _strip_repository(cls, value: str | None) -> str | None:
        return _normalize_repository(value)

    def formatters(self) -> Formatters:
        """The effective text generators, overrides applied."""
        return Formatters.for_repository(
            self.repository,
            version_text=self.version_text,
            patch_version_text=self.patch_version_text,
            issue_link=self.issue_link,
            commit_link=self.commit_link,
            legacy=self.legacy_links,
        )


class WriterConfig(BaseModel):
    """Project configuration from ``[tool.changelog-writer]``."""

    model_config = ConfigDict(extra="forbid")

    subtitle: str = ""
    repository: str | None = None
    subjects: dict[str, str] = Field(default_factory=_default_subjects)
    changelog_path: Path = Path("CHANGELOG.md")
    legacy_links: bool = False

    @field_validator("repository")
    @classmethod
    def _strip_repository(cls, value: str | None) -> str | None:
        return _normalize_repository(value)

    def options_for(
        self,
        version: str,
        *,
        repository: str | None = None,
        subtitle: str | None = None,
    ) -> ChangelogOptions:
        """Render options for ``version``, explicit arguments taking precedence."""
        return ChangelogOptions(
            version=version,
            subtitle=self.subtitle if subtitle is None else subtitle,
            repository=repository or self.repository,
            subjects=dict(self.subjects),
            legacy_links=self.legacy_links,
        )
