"""Configuration loader for LocalHistory.

Handles loading and merging configuration from multiple sources.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..utils.env import get_env_option, get_global_config_dir
from ..utils.fs import safe_json_load
from .types import HistoryConfig, OptionValue


# Config file key -> (engine option, environment override)
_SETTINGS: dict[str, tuple[str, str]] = {
    "repositoryDir": ("location", "LOCALHISTORY_DIR"),
    "excludePathPattern": ("exclude_paths", "LOCALHISTORY_EXCLUDE_PATHS"),
    "excludeFilePattern": ("exclude_files", "LOCALHISTORY_EXCLUDE_FILES"),
    "logDir": ("log", "LOCALHISTORY_LOG_DIR"),
}


class ConfigLoader:
    """Loads LocalHistory settings from the config file and environment."""

    def __init__(self, config_dir: Path | None = None):
        """Initialize config loader.

        Args:
            config_dir: Directory holding config.json (defaults to ~/.localhistory)
        """
        self.config_dir = Path(config_dir) if config_dir else None

    @property
    def config_path(self) -> Path:
        base = self.config_dir if self.config_dir else get_global_config_dir()
        return base / "config.json"

    def load(self) -> dict[str, str]:
        """Load settings from all sources.

        Priority (highest to lowest):
        1. Environment (LOCALHISTORY_*)
        2. Global config (~/.localhistory/config.json)

        Returns:
            Mapping of config file keys to string values (unset keys omitted)
        """
        data = safe_json_load(self.config_path, {})
        if not isinstance(data, dict):
            data = {}

        merged: dict[str, str] = {}
        for key, (_option, env_name) in _SETTINGS.items():
            value = data.get(key)
            if isinstance(value, str):
                merged[key] = value

            env_value = get_env_option(env_name)
            if env_value is not None:
                merged[key] = env_value

        return merged

    def get(self, key: str) -> str:
        """Read one setting, freshly loaded from disk and environment."""
        return self.load().get(key, "")

    def resolver(self, key: str):
        """Build a resolver that re-reads `key` every time it is called."""
        if key not in _SETTINGS:
            raise KeyError(key)
        return lambda: self.get(key)

    def options(self, overrides: dict[str, Any] | None = None) -> dict[str, OptionValue]:
        """Build engine options.

        Location and exclusion patterns are live resolvers; the log directory
        is read once since the log sink is opened at construction.

        Args:
            overrides: Engine options that take precedence (e.g. CLI flags);
                None values are ignored

        Returns:
            Options suitable for HistoryConfig.from_dict
        """
        result: dict[str, OptionValue] = {}
        for key, (option, _env_name) in _SETTINGS.items():
            if option == "log":
                result[option] = self.get(key) or None
            else:
                result[option] = self.resolver(key)

        for option, value in (overrides or {}).items():
            if value is not None:
                result[option] = value

        return result

    def load_config(self, overrides: dict[str, Any] | None = None) -> HistoryConfig:
        """Build a HistoryConfig from settings plus overrides."""
        return HistoryConfig.from_dict(self.options(overrides))
