"""Core modules for LocalHistory."""

from .engine import VersioningEngine
from .exclusion import ExclusionFilter
from .revisions import MAX_REVISIONS, Revision, RevisionIndex
from .version_store import VersionStore

__all__ = [
    "ExclusionFilter",
    "MAX_REVISIONS",
    "Revision",
    "RevisionIndex",
    "VersionStore",
    "VersioningEngine",
]
