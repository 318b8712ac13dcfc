"""IgnoreParser Infrastructure Layer.

Services shared by the rule engine, the filesystem helpers and the CLI:
- Logger: Structured logging with key=value context
- ConfigManager: Layered YAML/environment configuration
"""

from .config_manager import ConfigError, ConfigManager, ConfigSource
from .logger import Logger, LogLevel, get_logger, set_global_logger

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    "get_logger",
    "set_global_logger",
    # ConfigManager exports
    "ConfigSource",
    "ConfigError",
    "ConfigManager",
]
