"""
Runtime Configuration

Central configuration for the digest algorithm shared by tree builders and
proof verifiers, and for library logging.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from merkle_core.crypto.hashing import DEFAULT_ALGORITHM, Hasher
from merkle_core.schemas.errors import ConfigException


@dataclass
class HashingConfig:
    """Configuration for leaf and node hashing."""
    algorithm: str = DEFAULT_ALGORITHM


@dataclass
class LoggingConfig:
    """Configuration for the merkle_core logger."""
    level: str = "WARNING"


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for merkle_core.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction

    The hashing algorithm must be pinned to the same value wherever trees
    are built and wherever their proofs are verified.
    """
    hashing: HashingConfig = field(default_factory=HashingConfig)
    log: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLE_HASH_ALGORITHM: hashlib algorithm name
        - MERKLE_LOG_LEVEL: logging level name for the merkle_core logger
        """
        overrides: dict[str, Any] = {}

        if os.getenv("MERKLE_HASH_ALGORITHM"):
            overrides.setdefault("hashing", {})["algorithm"] = os.getenv("MERKLE_HASH_ALGORITHM")
        if os.getenv("MERKLE_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("MERKLE_LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        A .env file in the working directory is read first; variables already
        set in the environment take precedence.
        """
        load_dotenv()
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise ConfigException(
                f"Config file not found: {path}",
                details={"path": str(path)},
            )

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hashing_data = data.get("hashing", {})
        logging_data = data.get("logging", {})

        try:
            hashing = HashingConfig(**hashing_data) if hashing_data else HashingConfig()
            log_config = LoggingConfig(**logging_data) if logging_data else LoggingConfig()
        except TypeError as e:
            raise ConfigException(f"Invalid configuration: {e}") from e

        return cls(
            hashing=hashing,
            log=log_config,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "hashing" in overrides:
            for key, value in overrides["hashing"].items():
                setattr(new_config.hashing, key, value)

        if "logging" in overrides:
            for key, value in overrides["logging"].items():
                setattr(new_config.log, key, value)

        return new_config

    def build_hasher(self) -> Hasher:
        """
        Create the Hasher pinned by this configuration.

        Raises:
            UnsupportedAlgorithmException: If the algorithm cannot be used
        """
        return Hasher(self.hashing.algorithm)

    def configure_logging(self) -> logging.Logger:
        """Apply the configured level to the merkle_core logger."""
        level = logging.getLevelName(self.log.level.upper())
        if not isinstance(level, int):
            raise ConfigException(
                f"Unknown log level: {self.log.level!r}",
                details={"level": self.log.level},
            )
        logger = logging.getLogger("merkle_core")
        logger.setLevel(level)
        return logger

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hashing": {
                "algorithm": self.hashing.algorithm,
            },
            "logging": {
                "level": self.log.level,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to lazy loading from env)."""
    global _default_config
    _default_config = config
