"""Error types for LocalHistory.

Every error raised by the versioning core derives from LocalHistoryError so
that adapters can catch the whole family at their boundary. File-not-found
errors from the operating system are never wrapped.
"""

from __future__ import annotations


class LocalHistoryError(Exception):
    """Base class for LocalHistory errors."""


class CannotInitializeRepositoryError(LocalHistoryError):
    """The repository location does not exist or is not writable."""


class UnimplementedFeatureError(LocalHistoryError):
    """An unsupported feature was requested (e.g. versioning an scp:// path)."""


class PatternCompilationError(LocalHistoryError):
    """A user-supplied exclusion pattern is not a valid regular expression."""


class InvalidConfigurationError(LocalHistoryError):
    """Unknown configuration option or a value of the wrong type."""


class InvalidRevisionError(LocalHistoryError):
    """A revision ordinal is negative or beyond the available history."""


class BackendError(LocalHistoryError):
    """The version-control backend failed while answering a query."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
