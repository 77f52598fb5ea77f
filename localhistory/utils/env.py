"""Environment utilities for LocalHistory."""

from __future__ import annotations

import os
from pathlib import Path


def is_debug_mode() -> bool:
    """Check if debug mode is enabled.

    Returns:
        True if LOCALHISTORY_DEBUG is set to a truthy value
    """
    val = os.environ.get("LOCALHISTORY_DEBUG", "").lower()
    return val in ("1", "true", "yes", "on")


def get_home_dir() -> Path:
    """Get user home directory.

    Returns:
        Path to home directory
    """
    return Path.home()


def get_global_config_dir() -> Path:
    """Get global LocalHistory directory (~/.localhistory).

    Returns:
        Path to the per-user configuration directory
    """
    return get_home_dir() / ".localhistory"


def get_env_option(name: str) -> str | None:
    """Read a LOCALHISTORY_* environment override.

    Returns:
        The stripped value, or None when unset
    """
    val = os.environ.get(name)
    if val is None:
        return None
    return val.strip()
