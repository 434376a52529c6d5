"""Command line interface for changelog-writer."""

from __future__ import annotations

import logging

import click
from rich.console import Console

from changelog_writer import __version__
from changelog_writer.cli.commands.generate import run_generate

console = Console()
err_console = Console(stderr=True)


@click.group()
@click.version_option(__version__, prog_name="changelog-writer")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Render release changelogs from parsed commits."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


@main.command()
@click.argument("commits_file", type=click.Path(allow_dash=True))
@click.option("--path", "path", type=click.Path(file_okay=False), help="Project directory.")
@click.option("--version", "version_override", help="Version to release.")
@click.option("--repository", help="Repository URL used for commit and issue links.")
@click.option("--subtitle", help="Text appended to the release title.")
@click.option("--output", type=click.Path(dir_okay=False), help="Changelog file to update.")
@click.option("--execute", is_flag=True, help="Write the changelog instead of printing it.")
def generate(
    commits_file: str,
    path: str | None,
    version_override: str | None,
    repository: str | None,
    subtitle: str | None,
    output: str | None,
    execute: bool,
) -> None:
    """Render the changelog for COMMITS_FILE (a JSON array, or - for stdin)."""
    run_generate(
        commits_file=commits_file,
        path=path,
        execute=execute,
        version_override=version_override,
        repository=repository,
        subtitle=subtitle,
        output=output,
        console=console,
        err_console=err_console,
    )
