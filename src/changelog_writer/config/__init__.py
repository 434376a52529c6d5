"""Configuration management for changelog-writer."""

from __future__ import annotations

from changelog_writer.config.loader import load_config
from changelog_writer.config.models import ChangelogOptions, WriterConfig

__all__ = [
    "ChangelogOptions",
    "WriterConfig",
    "load_config",
]
