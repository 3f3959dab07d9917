"""
bootstrap/ - Configuration and logging setup.
"""

from .config import (
    VenuePlanConfig,
    ScaleConfig,
    DocumentConfig,
    DisplayConfig,
    StorageConfig,
    LoggingConfig,
    load_config,
    get_config,
    reset_config,
)

from .logging_setup import (
    setup_logging,
    setup_logging_from_config,
)

__all__ = [
    "VenuePlanConfig",
    "ScaleConfig",
    "DocumentConfig",
    "DisplayConfig",
    "StorageConfig",
    "LoggingConfig",
    "load_config",
    "get_config",
    "reset_config",
    "setup_logging",
    "setup_logging_from_config",
]
