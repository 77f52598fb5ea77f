"""Version store for LocalHistory.

Owns the repository location: a git work tree that mirrors the absolute
paths of versioned files (`/a/b/c` is stored at `<location>/a/b/c`).
The location is resolved again on every call so configuration changes take
effect without rebuilding the store.
"""

from __future__ import annotations

import errno
import os
import shutil
from pathlib import Path
from typing import Callable, Sequence

from ..config.types import HistoryConfig
from ..errors import CannotInitializeRepositoryError
from ..utils.fs import copy_bytes, make_parents
from ..utils.log import HistoryLog
from .backend import GIT_DIR_NAME, GitBackend
from .ownership import OwnershipPolicy, default_ownership
from .paths import storage_key, storage_path

TOOL_NAME = "LocalHistory"
INITIAL_COMMIT_MESSAGE = f"Initial commit from {TOOL_NAME}"
COMMIT_MESSAGE = f"Commit from {TOOL_NAME}"

BackendFactory = Callable[[Path, HistoryLog], GitBackend]


class VersionStore:
    """Snapshot storage backed by a git repository."""

    def __init__(
        self,
        config: HistoryConfig,
        log: HistoryLog | None = None,
        ownership: OwnershipPolicy | None = None,
        backend_factory: BackendFactory | None = None,
    ):
        """Initialize version store.

        Args:
            config: Engine configuration (location is re-resolved per call)
            log: Log sink
            ownership: Ownership fix-up for copied snapshots
            backend_factory: Builds the backend for a location
        """
        self.config = config
        self.log = log or HistoryLog()
        self.ownership = ownership or default_ownership(self.log)
        self._backend_factory = backend_factory or (lambda location, log: GitBackend(location, log))

    @property
    def location(self) -> str:
        """Current repository location ("" when disabled)."""
        return self.config.resolve_location()

    def backend(self) -> GitBackend:
        return self._backend_factory(Path(self.location), self.log)

    def is_enabled(self) -> bool:
        """Check the location is set, is a directory and is writable."""
        loc = self.location
        return bool(loc) and os.path.isdir(loc) and os.access(loc, os.W_OK)

    def is_initialized(self) -> bool:
        return self.is_enabled() and (Path(self.location) / GIT_DIR_NAME).exists()

    def ensure_initialized(self) -> None:
        """Create the repository on first use.

        Raises:
            CannotInitializeRepositoryError: If the location is unusable
        """
        if not self.is_enabled():
            raise CannotInitializeRepositoryError(
                f"{self.location or '(no location)'} does not exist or is not writable"
            )

        if self.is_initialized():
            self.backend().pin_attributes()
            return

        self.log.info(f"Initializing repository at {self.location}")
        self.backend().init(INITIAL_COMMIT_MESSAGE)

    def stage_and_commit(self, message: str = COMMIT_MESSAGE, allow_empty: bool = False) -> bool:
        """Stage everything under the location and commit once.

        Returns:
            True if a commit was created (failures are logged, not raised)
        """
        committed = self.backend().stage_and_commit_all(message, allow_empty=allow_empty)
        if committed:
            self.log.debug(f"Committed: {message}")
        return committed

    def copy_snapshot(self, normalized_path: str) -> Path:
        """Copy a source file's current bytes into the mirrored tree.

        Symlinks are copied as regular files holding their target's bytes.

        Returns:
            Path of the snapshot inside the repository

        Raises:
            FileNotFoundError: If the source does not exist
        """
        location = Path(self.location)
        target = storage_path(location, normalized_path)

        # Fail before creating directories for a file that isn't there.
        if not os.path.exists(normalized_path):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), normalized_path)

        created = make_parents(target)
        copy_bytes(normalized_path, target)
        self.ownership.apply(location, created, target)

        self.log.debug(f"Copied {normalized_path} -> {target}")
        return target

    def list_revisions(self, normalized_path: str) -> list[str]:
        """Newest-first commit ids that touched the path's storage key."""
        if not self.is_initialized():
            return []
        if not self.snapshot_path(normalized_path).exists():
            return []
        return self.backend().list_revisions(storage_key(normalized_path))

    def revision_fields(
        self,
        normalized_path: str,
        fields: Sequence[str],
        limit: int | None = None,
    ) -> list[dict[str, str]]:
        """Newest-first records (`commit` plus requested fields) for the path."""
        if not self.is_initialized():
            return []
        if not self.snapshot_path(normalized_path).exists():
            return []
        return self.backend().log_records(storage_key(normalized_path), fields, max_count=limit)

    def show_at_revision(self, revision_id: str, normalized_path: str) -> bytes:
        """File content of the path at a revision."""
        return self.backend().show(revision_id, storage_key(normalized_path))

    def checkout_to_working_tree(self, revision_id: str, normalized_path: str, message: str) -> bool:
        """Restore the repository copy to a revision and commit the restoration.

        The source file itself is not touched. The restored copy gets the
        same ownership fix-up as a fresh snapshot.

        Returns:
            True if the restoration commit was created
        """
        backend = self.backend()
        backend.pin_attributes()
        backend.checkout_path(revision_id, storage_key(normalized_path))
        self.ownership.apply(Path(self.location), [], self.snapshot_path(normalized_path))
        return self.stage_and_commit(message, allow_empty=True)

    def snapshot_path(self, normalized_path: str) -> Path:
        return storage_path(self.location, normalized_path)

    def restore_source(self, normalized_path: str) -> None:
        """Copy the repository copy back onto the source file.

        Writes through a symlinked source to its target.
        """
        shutil.copyfile(self.snapshot_path(normalized_path), normalized_path)
        self.log.debug(f"Restored {normalized_path} from repository copy")

    def head(self) -> str | None:
        """Current head commit, or None when uninitialized."""
        if not self.is_initialized():
            return None
        return self.backend().head()
