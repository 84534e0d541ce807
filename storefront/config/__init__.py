"""Configuration management for the storefront."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, parse_app_config, validate_config_file
from .models import (
    AdvancedConfig,
    AppConfig,
    AuthConfig,
    CatalogConfig,
    EmailConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    StoreBackend,
    StoreConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "parse_app_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "StoreConfig",
    "CatalogConfig",
    "AuthConfig",
    "EmailConfig",
    "LoggingConfig",
    "AdvancedConfig",
    "EnvironmentConfig",
    # Enums
    "StoreBackend",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
