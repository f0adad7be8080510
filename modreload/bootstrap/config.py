"""
bootstrap/config.py - Configuration

Provides configuration loading from files, environment variables, and defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from pathlib import Path
import os
import json
import logging

from modreload.dependencies.toposort import SortStrategy

logger = logging.getLogger("modreload.bootstrap.config")


@dataclass
class SortConfig:
    """Ordering behavior of reload plans."""

    strategy: str = "sequential"  # "sequential" or "batched"
    include_external: bool = True  # Keep undeclared modules in plans

    @property
    def sort_strategy(self) -> SortStrategy:
        try:
            return SortStrategy(self.strategy.lower())
        except ValueError:
            raise ValueError(
                f"Unknown sort strategy: {self.strategy!r} "
                f"(expected one of: {', '.join(s.value for s in SortStrategy)})"
            ) from None

    @classmethod
    def from_env(cls) -> "SortConfig":
        return cls(
            strategy=os.getenv("MODRELOAD_SORT_STRATEGY", "sequential"),
            include_external=os.getenv("MODRELOAD_INCLUDE_EXTERNAL", "true").lower() == "true",
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("MODRELOAD_LOG_LEVEL", "INFO"),
            format=os.getenv("MODRELOAD_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            log_file=os.getenv("MODRELOAD_LOG_FILE"),
            json_logs=os.getenv("MODRELOAD_JSON_LOGS", "false").lower() == "true",
        )


@dataclass
class ModReloadConfig:
    """Root configuration."""

    sort: SortConfig = field(default_factory=SortConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "ModReloadConfig":
        """Create configuration from environment variables."""
        return cls(
            sort=SortConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "ModReloadConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        with open(path) as f:
            data = json.load(f)

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "ModReloadConfig":
        """Create config from dictionary; file values override env."""
        config = cls.from_env()

        for section in ("sort", "logging"):
            target = getattr(config, section)
            for key, value in data.get(section, {}).items():
                if hasattr(target, key):
                    setattr(target, key, value)
                else:
                    logger.warning(f"Ignoring unknown config key: {section}.{key}")

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return {
            "sort": {
                "strategy": self.sort.strategy,
                "include_external": self.sort.include_external,
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "log_file": self.logging.log_file,
                "json_logs": self.logging.json_logs,
            },
        }


# Global config instance
_config: Optional[ModReloadConfig] = None


def load_config(filepath: str = None) -> ModReloadConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file

    Returns:
        ModReloadConfig instance
    """
    global _config

    if filepath:
        _config = ModReloadConfig.from_file(filepath)
    else:
        default_paths = [
            "./modreload.json",
            "./config/modreload.json",
            os.path.expanduser("~/.modreload/config.json"),
        ]

        for path in default_paths:
            if Path(path).exists():
                logger.info(f"Loading config from: {path}")
                _config = ModReloadConfig.from_file(path)
                return _config

        _config = ModReloadConfig.from_env()

    logger.info(f"Configuration loaded: sort strategy={_config.sort.strategy}")
    return _config


def get_config() -> ModReloadConfig:
    """Get current configuration, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the loaded configuration (next get_config() reloads)."""
    global _config
    _config = None
