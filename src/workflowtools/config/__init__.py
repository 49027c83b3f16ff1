"""
Configuration helpers for workflowtools.
"""

from .models import DEFAULT_CONFIG_FILENAME, ConfigError, ToolConfig, discover_config, load_config
from .settings import Secrets, get_secrets

__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "ConfigError",
    "ToolConfig",
    "discover_config",
    "load_config",
    "Secrets",
    "get_secrets",
]
