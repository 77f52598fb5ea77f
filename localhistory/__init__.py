"""LocalHistory - transparent per-save version history for local files.

Every time a tracked file is written it is snapshotted into a git
repository, retrievable and revertible by generation ("N versions ago").
"""

__version__ = "1.0.0"

from .core import Revision, VersioningEngine
from .errors import (
    BackendError,
    CannotInitializeRepositoryError,
    InvalidConfigurationError,
    InvalidRevisionError,
    LocalHistoryError,
    PatternCompilationError,
    UnimplementedFeatureError,
)

__all__ = [
    "BackendError",
    "CannotInitializeRepositoryError",
    "InvalidConfigurationError",
    "InvalidRevisionError",
    "LocalHistoryError",
    "PatternCompilationError",
    "Revision",
    "UnimplementedFeatureError",
    "VersioningEngine",
]
