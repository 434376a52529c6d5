"""Implementation of the 'generate' command.

The generate command renders a release from parsed commits and either
previews it or writes it into the changelog file.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rich.panel import Panel

from changelog_writer.config import WriterConfig, load_config
from changelog_writer.core import load_commits, render_changelog
from changelog_writer.exceptions import ChangelogWriterError, ConfigNotFoundError
from changelog_writer.project import get_project_version, get_repository_url, prepend_release

if TYPE_CHECKING:
    from rich.console import Console

logger = logging.getLogger(__name__)


def run_generate(
    commits_file: str,
    path: str | None,
    execute: bool,
    version_override: str | None,
    repository: str | None,
    subtitle: str | None,
    output: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the generate command.

    Args:
        commits_file: JSON file with parsed commits, or "-" for stdin
        path: Optional path to project directory
        execute: Whether to write the changelog file
        version_override: Version to release instead of the project version
        repository: Repository URL overriding the configured one
        subtitle: Subtitle overriding the configured one
        output: Changelog file overriding the configured path
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    # Load configuration; a pyproject.toml is optional when the version is given
    try:
        config = load_config(project_path)
        has_project = True
    except ConfigNotFoundError as e:
        if not version_override:
            err_console.print(f"[red]Error loading config:[/] {e}")
            raise SystemExit(1) from e
        logger.debug("No pyproject.toml found, using default configuration")
        config = WriterConfig()
        has_project = False
    except ChangelogWriterError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    try:
        version = version_override or get_project_version(project_path)
        if repository is None and config.repository is None and has_project:
            repository = get_repository_url(project_path)
    except ChangelogWriterError as e:
        err_console.print(f"[red]Error getting project info:[/] {e}")
        raise SystemExit(1) from e

    try:
        if commits_file == "-":
            commits = load_commits(sys.stdin)
        else:
            commits = load_commits(Path(commits_file))
    except (ChangelogWriterError, OSError) as e:
        err_console.print(f"[red]Error reading commits:[/] {e}")
        raise SystemExit(1) from e

    options = config.options_for(version, repository=repository, subtitle=subtitle)
    content = render_changelog(commits, options)

    changelog_path = Path(output) if output else project_path / config.changelog_path

    if not execute:
        # Plain write keeps markup in subjects from being interpreted
        console.out(content, end="", highlight=False)
        err_console.print(
            f"\n[yellow]DRY-RUN[/] - Run with [cyan]--execute[/] to write "
            f"[cyan]{changelog_path}[/]."
        )
        return

    try:
        prepend_release(changelog_path, content)
    except ChangelogWriterError as e:
        err_console.print(f"[red]Error writing changelog:[/] {e}")
        raise SystemExit(1) from e

    console.print(
        Panel(
            f"[green]Wrote changelog for version {version}![/]\n\n"
            f"  • {len(commits)} commit(s) processed\n"
            f"  • Updated [cyan]{changelog_path}[/]",
            title="[green]Changelog Updated[/]",
            border_style="green",
        )
    )
