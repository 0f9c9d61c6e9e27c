"""Configuration loading and validation."""

from .loader import load_config
from .schema import ActionsConfig, AppConfig, FileLoggingConfig, LoggingConfig, StoreConfig

__all__ = [
    # Loader
    "load_config",
    # Root config
    "AppConfig",
    # Sections
    "StoreConfig",
    "ActionsConfig",
    "LoggingConfig",
    "FileLoggingConfig",
]
