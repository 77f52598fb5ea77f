"""Versioning engine - main facade.

Coordinates the exclusion filter, path normalizer and version store for
commit, revision query, checkout and revert.
"""

from __future__ import annotations

import errno
import os
import tempfile
from typing import Any, Mapping, Sequence

from ..config.types import HistoryConfig
from ..errors import InvalidRevisionError, UnimplementedFeatureError
from ..utils.log import HistoryLog
from ..utils.text import ordinalize
from .exclusion import ExclusionFilter
from .ownership import OwnershipPolicy
from .paths import is_unsupported_scheme, normalize
from .revisions import MAX_REVISIONS, Revision, RevisionIndex
from .version_store import COMMIT_MESSAGE, BackendFactory, VersionStore


def revert_message(revision: int) -> str:
    return f"Reverted to {ordinalize(revision)} prior commit"


def _require_source(normalized: str) -> None:
    if not os.path.exists(normalized):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), normalized)


class VersioningEngine:
    """Per-save local history for individual files."""

    def __init__(
        self,
        options: Mapping[str, Any] | HistoryConfig | None = None,
        *,
        ownership: OwnershipPolicy | None = None,
        backend_factory: BackendFactory | None = None,
    ):
        """Initialize engine.

        Args:
            options: HistoryConfig, or a mapping with any of `location`,
                `exclude_paths`, `exclude_files` (values or zero-argument
                resolvers) and `log` (directory)
            ownership: Ownership fix-up for snapshots (platform default)
            backend_factory: Backend constructor, for alternative backends

        Raises:
            InvalidConfigurationError: On unknown options or bad value types
        """
        if isinstance(options, HistoryConfig):
            self.config = options
        else:
            self.config = HistoryConfig.from_dict(options)

        self.log = HistoryLog(self.config.resolve_log_dir() or None)
        self.exclusions = ExclusionFilter(self.config, self.log)
        self.store = VersionStore(
            self.config,
            self.log,
            ownership=ownership,
            backend_factory=backend_factory,
        )

    def __enter__(self) -> VersioningEngine:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the log sink."""
        self.log.close()

    @property
    def location(self) -> str:
        return self.store.location

    def is_enabled(self) -> bool:
        return self.store.is_enabled()

    def commit_file(self, path: str | os.PathLike[str]) -> bool:
        """Snapshot a file into the repository.

        Args:
            path: File that was just written

        Returns:
            True if a new snapshot was committed; False if the path is
            excluded or its content is unchanged

        Raises:
            UnimplementedFeatureError: For remote (scp://...) paths
            CannotInitializeRepositoryError: If the location is unusable
            PatternCompilationError: If a user exclusion pattern is invalid
            FileNotFoundError: If the file does not exist
        """
        raw_path = os.fspath(path)
        self.log.info(f"Commit requested for {raw_path}")

        if self.exclusions.is_excluded(raw_path):
            return False

        if is_unsupported_scheme(raw_path):
            raise UnimplementedFeatureError(f"Remote paths are not supported: {raw_path}")

        normalized = normalize(raw_path)
        self.store.ensure_initialized()
        self.store.copy_snapshot(normalized)
        return self.store.stage_and_commit(COMMIT_MESSAGE)

    def revision_information(
        self,
        path: str | os.PathLike[str] | None,
        fields: Sequence[str] = (),
    ) -> list[Revision]:
        """Recent revisions of a file, newest first.

        Args:
            path: Versioned file
            fields: git format placeholders to include (e.g. ["ad", "s"])

        Returns:
            Up to MAX_REVISIONS revisions; each record has `commit` first,
            then the requested fields in order. Empty when the path is None
            or has no history.
        """
        if path is None:
            return []

        normalized = normalize(path)
        records = self.store.revision_fields(normalized, fields, limit=MAX_REVISIONS)
        if not records:
            self.log.debug(f"No history for {normalized}")
        return RevisionIndex.from_records(records)

    def checkout_file(self, path: str | os.PathLike[str] | None, revision: int) -> str | None:
        """Write a past revision of a file to a new temporary file.

        The caller owns the returned file and is responsible for deleting
        it; the engine never cleans it up.

        Args:
            path: Versioned file
            revision: Ordinal (0 = current, 1 = previous, ...)

        Returns:
            Path of the temporary file, or None if the path is None, has no
            history, or the revision is out of range
        """
        if path is None or revision < 0:
            return None

        normalized = normalize(path)
        index = self._index(normalized)
        if not index.contains(revision):
            return None

        _require_source(normalized)

        content = self.store.show_at_revision(index.identifier(revision), normalized)

        fd, tmp_path = tempfile.mkstemp(
            prefix=f"localhistory-{revision}-",
            suffix=f"-{os.path.basename(normalized)}",
        )
        with os.fdopen(fd, "wb") as f:
            f.write(content)

        self.log.info(f"Checked out revision {revision} of {normalized} to {tmp_path}")
        return tmp_path

    def revert_file(self, path: str | os.PathLike[str] | None, revision: int) -> bool:
        """Restore a file to a past revision.

        The restoration is committed as a new snapshot and then copied back
        onto the source file.

        Returns:
            True if the file was reverted; False for a None path, revision 0,
            or a path without history

        Raises:
            InvalidRevisionError: If the revision is negative or too old
        """
        if path is None or revision == 0:
            return False

        normalized = normalize(path)
        index = self._index(normalized)
        if not index:
            self.log.debug(f"No history for {normalized}; nothing to revert")
            return False

        if not index.contains(revision):
            raise InvalidRevisionError(
                f"Revision {revision} is out of range for {normalized} (0..{index.oldest_ordinal})"
            )

        _require_source(normalized)
        self.log.info(f"Reverting {normalized} to revision {revision}")
        self.store.checkout_to_working_tree(
            index.identifier(revision),
            normalized,
            revert_message(revision),
        )
        self.store.restore_source(normalized)
        return True

    def _index(self, normalized: str) -> RevisionIndex:
        return RevisionIndex(self.store.list_revisions(normalized))

