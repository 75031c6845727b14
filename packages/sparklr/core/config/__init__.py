"""Configuration management for sparklr."""

from sparklr.core.config.loader import (
    clear_app_config_cache,
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
)
from sparklr.core.config.models import AppConfig, BakingConfig, FormatConfig, LoggingConfig

__all__ = [
    # Loaders
    "clear_app_config_cache",
    "configure_logging",
    "detect_format",
    "load_app_config",
    "load_config",
    # Models
    "AppConfig",
    "BakingConfig",
    "FormatConfig",
    "LoggingConfig",
]
