"""sparkk8s test properties module."""

from .loader import (
    CONFIG_ENV_VAR,
    ENV_PREFIX,
    ConfigError,
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    clear_null_properties,
    env_var_for,
    load_properties,
)
from .schema import DeployMode, SuiteProperties

__all__ = [
    # Models
    "SuiteProperties",
    "DeployMode",
    # Loader
    "load_properties",
    "clear_null_properties",
    "env_var_for",
    "CONFIG_ENV_VAR",
    "ENV_PREFIX",
    # Exceptions
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
]
