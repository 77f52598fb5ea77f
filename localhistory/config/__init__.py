"""Configuration management for LocalHistory."""

from .types import (
    OPTION_NAMES,
    HistoryConfig,
    OptionValue,
    Resolver,
)
from .loader import ConfigLoader

__all__ = [
    "OPTION_NAMES",
    "HistoryConfig",
    "OptionValue",
    "Resolver",
    "ConfigLoader",
]
