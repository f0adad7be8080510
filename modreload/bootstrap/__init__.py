"""
bootstrap/ - Bootstrap Layer

Configuration loading and logging setup for applications embedding modreload.
"""

from .config import (
    ModReloadConfig,
    SortConfig,
    LoggingConfig,
    load_config,
    get_config,
    reset_config,
)

from .logging_setup import (
    JSONFormatter,
    setup_logging,
    setup_logging_from_config,
)


__all__ = [
    # Config
    "ModReloadConfig",
    "SortConfig",
    "LoggingConfig",
    "load_config",
    "get_config",
    "reset_config",
    # Logging
    "JSONFormatter",
    "setup_logging",
    "setup_logging_from_config",
]
