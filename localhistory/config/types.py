"""Configuration types for LocalHistory.

Every option is either a plain value or a zero-argument resolver. Resolvers
are called again on each access so that a running engine picks up changes
(e.g. an editor variable edited at runtime) without being rebuilt.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Union

from ..errors import InvalidConfigurationError

Resolver = Callable[[], Any]
OptionValue = Union[str, "os.PathLike[str]", None, Resolver]

OPTION_NAMES = ("location", "exclude_paths", "exclude_files", "log")


def _is_plain_value(value: Any) -> bool:
    return value is None or isinstance(value, (str, os.PathLike))


def _resolve(value: OptionValue) -> str:
    """Resolve an option to a string, calling it if it is a resolver."""
    if callable(value):
        value = value()
    if value is None:
        return ""
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    return str(value)


@dataclass(frozen=True)
class HistoryConfig:
    """Options for one versioning engine."""
    location: OptionValue = None
    exclude_paths: OptionValue = None
    exclude_files: OptionValue = None
    log: str | os.PathLike[str] | None = None

    def __post_init__(self) -> None:
        for name in ("location", "exclude_paths", "exclude_files"):
            value = getattr(self, name)
            if not (_is_plain_value(value) or callable(value)):
                raise InvalidConfigurationError(
                    f"Option '{name}' must be a string, path or callable, got {type(value).__name__}"
                )
        if not _is_plain_value(self.log):
            raise InvalidConfigurationError(
                f"Option 'log' must be a directory path, got {type(self.log).__name__}"
            )

    @classmethod
    def from_dict(cls, options: Mapping[str, Any] | None) -> HistoryConfig:
        """Create HistoryConfig from an options mapping.

        Raises:
            InvalidConfigurationError: On unknown option names or bad values
        """
        if options is None:
            return cls()
        if not isinstance(options, Mapping):
            raise InvalidConfigurationError(
                f"Options must be a mapping, got {type(options).__name__}"
            )

        unknown = sorted(str(key) for key in options if key not in OPTION_NAMES)
        if unknown:
            raise InvalidConfigurationError(f"Unknown option(s): {', '.join(unknown)}")

        return cls(**dict(options))

    def resolve_location(self) -> str:
        """Current repository location as an absolute path, or "" if disabled."""
        loc = _resolve(self.location)
        if not loc.strip():
            return ""
        return os.path.abspath(os.path.expanduser(loc))

    def resolve_exclude_paths(self) -> str:
        """Current path-exclusion pattern ("" when unset)."""
        pattern = _resolve(self.exclude_paths)
        return pattern if pattern.strip() else ""

    def resolve_exclude_files(self) -> str:
        """Current file-exclusion pattern ("" when unset)."""
        pattern = _resolve(self.exclude_files)
        return pattern if pattern.strip() else ""

    def resolve_log_dir(self) -> str:
        log_dir = _resolve(self.log)
        if not log_dir.strip():
            return ""
        return os.path.abspath(os.path.expanduser(log_dir))
