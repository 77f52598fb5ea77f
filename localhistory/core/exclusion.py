"""Exclusion rules for LocalHistory.

A path is skipped when it lives inside a `.git` directory, or matches the
user's path or file pattern. User patterns are resolved and compiled on
every check so that configuration changes apply immediately.
"""

from __future__ import annotations

import os
import re

from ..config.types import HistoryConfig
from ..errors import PatternCompilationError
from ..utils.log import HistoryLog
from .paths import normalize

# Exact `.git` segment only: `foo.git` and `.gitfoo` are not matched.
GIT_DIR_PATTERN = re.compile(r"^\.git$|^\.git/|/\.git$|/\.git/")


def compile_pattern(pattern: str, option: str) -> re.Pattern[str] | None:
    """Compile a user pattern, treating an empty pattern as "no pattern".

    Raises:
        PatternCompilationError: If the pattern is not a valid regex
    """
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternCompilationError(f"Invalid {option} pattern {pattern!r}: {e}") from e


class ExclusionFilter:
    """Decides whether a candidate path should be silently skipped."""

    def __init__(self, config: HistoryConfig, log: HistoryLog | None = None):
        self.config = config
        self.log = log or HistoryLog()

    def is_excluded(self, candidate: str) -> bool:
        """Check if a path should be skipped.

        Args:
            candidate: Path as supplied by the caller

        Returns:
            True if the path must not be versioned

        Raises:
            PatternCompilationError: If a configured user pattern is invalid
        """
        reason = self._match(candidate)
        if reason is None:
            return False

        self.log.info(f"Excluded {candidate} ({reason})")
        return True

    def _match(self, candidate: str) -> str | None:
        if GIT_DIR_PATTERN.search(candidate):
            return "inside a .git directory"

        path_pattern = compile_pattern(self.config.resolve_exclude_paths(), "path")
        file_pattern = compile_pattern(self.config.resolve_exclude_files(), "file")
        if path_pattern is None and file_pattern is None:
            return None

        full_path = normalize(candidate)
        if path_pattern is not None and path_pattern.search(full_path):
            return f"path pattern {path_pattern.pattern!r}"

        if file_pattern is not None and file_pattern.search(os.path.basename(full_path)):
            return f"file pattern {file_pattern.pattern!r}"

        return None
