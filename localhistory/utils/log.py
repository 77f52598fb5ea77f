"""History log for LocalHistory.

Each engine owns one HistoryLog. With a log directory configured, entries
are appended to ``<log dir>/localhistory.log``; without one every call is a
no-op. Debug lines are echoed to stderr when LOCALHISTORY_DEBUG is set.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from ..errors import InvalidConfigurationError
from .env import is_debug_mode
from .fs import ensure_dir

LOGGER_NAME = "localhistory"
LOG_FILE_NAME = "localhistory.log"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def log_debug(message: str) -> None:
    """Log debug message to stderr.

    Only outputs if LOCALHISTORY_DEBUG is set.
    """
    if is_debug_mode():
        print(f"[localhistory] {message}", file=sys.stderr)


class HistoryLog:
    """Append-only log sink for one engine instance."""

    def __init__(self, log_dir: Path | str | None = None):
        self.log_dir = Path(log_dir).expanduser() if log_dir else None
        # Not registered through getLogger; released with its engine.
        self._logger = logging.Logger(LOGGER_NAME)
        self._logger.propagate = False
        self._logger.setLevel(logging.DEBUG)

        if self.log_dir is None:
            self._logger.addHandler(logging.NullHandler())
            return

        try:
            ensure_dir(self.log_dir)
            handler = logging.FileHandler(self.log_dir / LOG_FILE_NAME, encoding="utf-8")
        except OSError as e:
            raise InvalidConfigurationError(f"Cannot open log directory {self.log_dir}: {e}") from e

        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        self._logger.addHandler(handler)

    @property
    def enabled(self) -> bool:
        return self.log_dir is not None

    @property
    def path(self) -> Path | None:
        return self.log_dir / LOG_FILE_NAME if self.log_dir else None

    def debug(self, message: str) -> None:
        log_debug(message)
        self._logger.debug(message)

    def info(self, message: str) -> None:
        log_debug(message)
        self._logger.info(message)

    def warning(self, message: str) -> None:
        log_debug(message)
        self._logger.warning(message)

    def error(self, message: str) -> None:
        log_debug(message)
        self._logger.error(message)

    def close(self) -> None:
        """Flush and detach all handlers."""
        for handler in list(self._logger.handlers):
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)
