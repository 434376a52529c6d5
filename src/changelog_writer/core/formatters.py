"""Text generators for version headers and links.

The four generators can be replaced individually through
:class:`Formatters`; the module-level functions are the defaults.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

SHORT_HASH_LENGTH = 8

VersionText = Callable[[str, str], str]
IssueLink = Callable[[str | int], str]
CommitLink = Callable[[str], str]


def get_version(version: str, subtitle: str) -> str:
    """Title for a major or minor release."""
    return f"## {version}{subtitle}"


def get_patch_version(version: str, subtitle: str) -> str:
    """Title for a patch release."""
    return f"### {version}{subtitle}"


def get_issue_link(repository: str | None, issue: str | int) -> str:
    if repository:
        return f"[#{issue}]({repository}/issues/{issue})"
    return f"(#{issue})"


def get_commit_link(repository: str | None, commit_hash: str) -> str:
    short_hash = commit_hash[:SHORT_HASH_LENGTH]
    if repository:
        return f"[{short_hash}]({repository}/commit/{commit_hash})"
    return short_hash


def get_legacy_commit_link(repository: str | None, commit_hash: str) -> str:
    """Commit link that wraps a plain hash in its own parentheses.

    Older changelogs were written this way, giving ``((abcdef12)`` inside
    the bullet's parentheses.
    """
    if repository:
        return get_commit_link(repository, commit_hash)
    return f"({commit_hash[:SHORT_HASH_LENGTH]})"


@dataclass(frozen=True)
class Formatters:
    """The text generators used by the writer."""

    version_text: VersionText = get_version
    patch_version_text: VersionText = get_patch_version
    issue_link: IssueLink = partial(get_issue_link, None)
    commit_link: CommitLink = partial(get_commit_link, None)

    @classmethod
    def for_repository(
        cls,
        repository: str | None,
        *,
        version_text: VersionText | None = None,
        patch_version_text: VersionText | None = None,
        issue_link: IssueLink | None = None,
        commit_link: CommitLink | None = None,
        legacy: bool = False,
    ) -> Formatters:
        """Build formatters whose default links point at ``repository``.

        Args:
            repository: Base URL of the repository, or None for plain text links
            version_text: Override for the major/minor title
            patch_version_text: Override for the patch title
            issue_link: Override for issue references
            commit_link: Override for commit references
            legacy: Use the parenthesised plain-text commit link
        """
        default_commit_link = get_legacy_commit_link if legacy else get_commit_link
        return cls(
            version_text=version_text or get_version,
            patch_version_text=patch_version_text or get_patch_version,
            issue_link=issue_link or partial(get_issue_link, repository),
            commit_link=commit_link or partial(default_commit_link, repository),
        )

    @classmethod
    def legacy(cls, repository: str | None = None) -> Formatters:
        """Formatters reproducing the historical output byte for byte."""
        return cls.for_repository(repository, legacy=True)
