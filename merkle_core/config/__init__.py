"""
Runtime Configuration Module

Provides configuration loading and management for merkle_core.
"""

from .runtime import (
    RuntimeConfig,
    HashingConfig,
    LoggingConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "RuntimeConfig",
    "HashingConfig",
    "LoggingConfig",
    "get_default_config",
    "set_default_config",
]
