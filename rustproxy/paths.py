"""
Path utilities for rustproxy.

Single source of truth for where the Cargo configuration lives.
"""

from __future__ import annotations

import os
from pathlib import Path

# Cargo home layout
CARGO_DIR = ".cargo"
CONFIG_FILE = "config.toml"
BACKUP_SUFFIX = ".backup"


def cargo_home() -> Path:
    """$CARGO_HOME when set, otherwise ~/.cargo."""
    env = os.environ.get("CARGO_HOME", "").strip()
    if env:
        return Path(env).expanduser()
    return Path.home() / CARGO_DIR


def config_path() -> Path:
    """Absolute path to the user-level config.toml."""
    return cargo_home() / CONFIG_FILE


def backup_path(path: Path) -> Path:
    """Backup sibling: config.toml -> config.backup; a file already named *.backup gets a second suffix."""
    if path.suffix == BACKUP_SUFFIX:
        return path.with_name(path.name + BACKUP_SUFFIX)
    return path.with_suffix(BACKUP_SUFFIX)


__all__ = ["cargo_home", "config_path", "backup_path", "CONFIG_FILE", "BACKUP_SUFFIX"]
