"""
Runtime Configuration Module

Provides configuration loading and management.
"""

from .runtime import (
    ENV_PREFIX,
    HashConfig,
    LoggingConfig,
    OutputConfig,
    RuntimeConfig,
    get_default_config,
    get_default_config_template,
    set_default_config,
)

__all__ = [
    "ENV_PREFIX",
    "HashConfig",
    "LoggingConfig",
    "OutputConfig",
    "RuntimeConfig",
    "get_default_config",
    "get_default_config_template",
    "set_default_config",
]
