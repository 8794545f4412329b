"""Configuration management for the review core."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, parse_config_file, resolve_runtime_config, validate_config_file
from .models import AppConfig, LogFormat, LogLevel, LoggingConfig, ReviewConfig

__all__ = [
    # Main loader functions
    "load_config",
    "parse_config_file",
    "resolve_runtime_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "ReviewConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
