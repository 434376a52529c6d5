"""Writing rendered releases into the changelog file."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from changelog_writer.exceptions import ProjectError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def prepend_release(path: Path, content: str) -> Path:
    """Insert a rendered release above the existing changelog content.

    Args:
        path: Changelog file; created if it does not exist
        content: Rendered release text

    Returns:
        Path to the changelog file

    Raises:
        ProjectError: If the file cannot be read or written
    """
    try:
        if path.exists():
            existing = path.read_text(encoding="utf-8")
            new_content = content + "\n" + existing if existing else content
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            new_content = content
        path.write_text(new_content, encoding="utf-8")
    except OSError as e:
        raise ProjectError(f"Could not update changelog {path}: {e}") from e

    logger.debug("Wrote %d characters to %s", len(content), path)
    return path
