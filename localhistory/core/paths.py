"""Path normalization for LocalHistory.

Versioned paths are absolute, with `~`, `.` and `..` resolved, but symlinks
are never followed: a symlink keeps its own identity in the repository.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath

# Remote schemes that editors (netrw) hand to their write hooks.
UNSUPPORTED_SCHEMES = (
    "scp://",
    "sftp://",
    "ftp://",
    "rcp://",
    "rsync://",
    "dav://",
    "davs://",
    "http://",
    "https://",
)


def normalize(raw_path: str | os.PathLike[str], cwd: str | os.PathLike[str] | None = None) -> str:
    """Normalize a user-supplied path into its canonical absolute form.

    Pure path arithmetic: the path does not need to exist.

    Args:
        raw_path: Relative or absolute path, possibly with `.`/`..` segments
        cwd: Base for relative paths (defaults to the current directory)

    Returns:
        Absolute, normalized path string
    """
    path = os.path.expanduser(os.fspath(raw_path))
    if not os.path.isabs(path):
        path = os.path.join(os.fspath(cwd) if cwd is not None else os.getcwd(), path)
    return os.path.normpath(path)


def storage_key(normalized_path: str) -> str:
    """Repository-relative POSIX key for a normalized path.

    `/a/b/c` becomes `a/b/c`. On Windows the drive is folded into the first
    segment so keys stay unique per drive.
    """
    drive, rest = os.path.splitdrive(normalized_path)
    parts = [p for p in Path(rest).parts if p not in (os.sep, "/", "\\")]
    if drive:
        parts.insert(0, drive.rstrip(":\\/").replace(":", ""))
    return str(PurePosixPath(*parts))


def storage_path(location: str | os.PathLike[str], normalized_path: str) -> Path:
    """Location of a versioned path inside the repository's mirrored tree."""
    return Path(location).joinpath(*storage_key(normalized_path).split("/"))


def is_unsupported_scheme(raw_path: str) -> bool:
    """Check if a path names a remote file (e.g. scp://host/path)."""
    return raw_path.startswith(UNSUPPORTED_SCHEMES)
