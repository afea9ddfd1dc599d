"""Configuration management for codecontext."""

from .manager import (
    DEFAULT_CONFIG,
    DEFAULT_EXCLUDE_PATTERNS,
    load_config,
    expand_pattern,
)

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_EXCLUDE_PATTERNS",
    "load_config",
    "expand_pattern",
]
