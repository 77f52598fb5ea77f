"""Ownership and permission normalization for snapshot files.

When an editor runs with elevated privileges (e.g. `sudo vim`), copies made
into the repository would otherwise be owned by root and could not be
cleaned up by the regular user. Snapshots therefore take the owner of the
repository root. This is best effort: platforms without POSIX ownership
use NullOwnership.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Iterable

from ..utils.fs import safe_stat
from ..utils.log import HistoryLog

SNAPSHOT_MODE = stat.S_IRUSR | stat.S_IWUSR


class OwnershipPolicy:
    """Capability used by the version store to fix up copied files."""

    def apply(self, reference: Path, created_dirs: Iterable[Path], snapshot: Path) -> None:
        raise NotImplementedError


class NullOwnership(OwnershipPolicy):
    """No-op policy for platforms lacking POSIX ownership."""

    def apply(self, reference: Path, created_dirs: Iterable[Path], snapshot: Path) -> None:
        return None


class PosixOwnership(OwnershipPolicy):
    """Match owner/group to the repository root and restrict snapshot mode."""

    def __init__(self, log: HistoryLog | None = None):
        self.log = log or HistoryLog()

    def apply(self, reference: Path, created_dirs: Iterable[Path], snapshot: Path) -> None:
        ref_stat = safe_stat(reference)
        if ref_stat is not None:
            for path in [*created_dirs, snapshot]:
                self._match_owner(path, ref_stat.st_uid, ref_stat.st_gid)

        try:
            os.chmod(snapshot, SNAPSHOT_MODE)
        except OSError as e:
            self.log.warning(f"Could not restrict permissions of {snapshot}: {e}")

    def _match_owner(self, path: Path, uid: int, gid: int) -> None:
        current = safe_stat(path)
        if current is None or (current.st_uid, current.st_gid) == (uid, gid):
            return
        try:
            os.chown(path, uid, gid)
        except OSError as e:
            # Unprivileged processes cannot give files away; they already own them.
            self.log.debug(f"Could not change owner of {path}: {e}")


def default_ownership(log: HistoryLog | None = None) -> OwnershipPolicy:
    """Pick the ownership policy for the running platform."""
    if hasattr(os, "chown"):
        return PosixOwnership(log)
    return NullOwnership()
