"""File system utilities for LocalHistory.

Provides directory creation, byte copies and safe file operations.
"""

from __future__ import annotations

import json
import os
import shutil
from pathlib import Path
from typing import Any


def ensure_dir(dir_path: Path | str) -> Path:
    """Ensure directory exists, creating it if necessary.

    Args:
        dir_path: Directory path to create

    Returns:
        Path object for the directory
    """
    path = Path(dir_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def make_parents(file_path: Path | str) -> list[Path]:
    """Create the missing parent directories of a file.

    Args:
        file_path: File whose parent directory must exist

    Returns:
        The directories that were created, outermost first
    """
    missing: list[Path] = []
    parent = Path(file_path).parent
    while not parent.exists():
        missing.append(parent)
        if parent.parent == parent:
            break
        parent = parent.parent

    Path(file_path).parent.mkdir(parents=True, exist_ok=True)
    return list(reversed(missing))


def copy_bytes(src: Path | str, dst: Path | str) -> Path:
    """Copy file contents only, following symlinks at the source.

    The destination is always a regular file. An existing symlink at the
    destination is replaced rather than written through.

    Raises:
        FileNotFoundError: If the source does not exist
    """
    dst_path = Path(dst)
    if dst_path.is_symlink():
        dst_path.unlink()
    shutil.copyfile(src, dst_path)
    return dst_path


def safe_json_load(file_path: Path | str, default: Any = None) -> Any:
    """Safely load JSON file with fallback.

    Args:
        file_path: Path to JSON file
        default: Default value if file doesn't exist or is invalid

    Returns:
        Parsed JSON or default value
    """
    try:
        with open(file_path) as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError):
        return default if default is not None else {}


def safe_stat(file_path: Path | str) -> os.stat_result | None:
    """Get file stats safely.

    Args:
        file_path: Path to stat

    Returns:
        stat_result or None if file doesn't exist
    """
    try:
        return Path(file_path).stat()
    except OSError:
        return None
