"""Utility modules for LocalHistory."""

from .fs import copy_bytes, ensure_dir, make_parents, safe_json_load, safe_stat
from .env import get_env_option, get_global_config_dir, get_home_dir, is_debug_mode
from .log import HistoryLog, log_debug
from .text import ordinalize

__all__ = [
    "copy_bytes",
    "ensure_dir",
    "make_parents",
    "safe_json_load",
    "safe_stat",
    "get_env_option",
    "get_global_config_dir",
    "get_home_dir",
    "is_debug_mode",
    "HistoryLog",
    "log_debug",
    "ordinalize",
]
