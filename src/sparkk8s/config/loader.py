"""Test property loader for sparkk8s.

Properties come from ``SPARK_K8S_TEST_*`` environment variables layered over
an optional YAML file named by ``SPARK_K8S_TEST_CONFIG``. Build tooling that
forwards unset properties tends to pass the literal string ``"null"``; such
values are treated as unset and removed before anything reads them.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import SuiteProperties

logger = logging.getLogger(__name__)

ENV_PREFIX = "SPARK_K8S_TEST_"
CONFIG_ENV_VAR = "SPARK_K8S_TEST_CONFIG"
NULL_VALUE = "null"


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigFileNotFoundError(ConfigError):
    """Raised when the properties file is not found."""

    pass


class ConfigParseError(ConfigError):
    """Raised when the properties file cannot be parsed."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when required properties are missing or invalid."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


def env_var_for(field: str) -> str:
    """Environment variable carrying a property field."""
    return ENV_PREFIX + field.upper()


def clear_null_properties(props: MutableMapping[str, Any]) -> list[str]:
    """Remove every entry whose value is ``None`` or literally ``"null"``.

    Args:
        props: Mapping to clean in place (``os.environ`` included)

    Returns:
        Sorted list of removed keys
    """
    removed = sorted(key for key, value in props.items() if value is None or value == NULL_VALUE)
    for key in removed:
        del props[key]
    if removed:
        logger.debug("Cleared null-valued properties: %s", ", ".join(removed))
    return removed


def properties_from_env(environ: Mapping[str, str]) -> dict[str, str]:
    """Collect property fields set through ``SPARK_K8S_TEST_*`` variables."""
    data: dict[str, str] = {}
    for field in SuiteProperties.model_fields:
        value = environ.get(env_var_for(field))
        if value:
            data[field] = value
    return data


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return as dictionary.

    Scalars are kept as the strings written in the file, so a tag such as
    ``3.10`` or ``20240101`` is not turned into a number and ``null`` arrives
    as ``"null"``.

    Raises:
        ConfigFileNotFoundError: If file doesn't exist
        ConfigParseError: If YAML parsing fails or the document is not a mapping
    """
    if not path.exists():
        raise ConfigFileNotFoundError(f"Properties file not found: {path}")

    try:
        with open(path) as f:
            content = yaml.load(f, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Failed to parse YAML: {e}")  # noqa: B904

    if not content:
        return {}
    if not isinstance(content, dict):
        raise ConfigParseError(f"Expected a mapping in {path}, got {type(content).__name__}")
    return content


def load_properties(
    environ: MutableMapping[str, str] | None = None,
    path: str | Path | None = None,
) -> SuiteProperties:
    """Load and validate the suite properties.

    Args:
        environ: Environment mapping (default: ``os.environ``); null-valued
            entries are removed from it
        path: Optional YAML file; defaults to ``$SPARK_K8S_TEST_CONFIG``

    Returns:
        Validated SuiteProperties

    Raises:
        ConfigFileNotFoundError: If the properties file doesn't exist
        ConfigParseError: If the properties file cannot be parsed
        ConfigValidationError: If a required property is missing or invalid
    """
    if environ is None:
        environ = os.environ
    clear_null_properties(environ)

    data: dict[str, Any] = {}
    file_path = path or environ.get(CONFIG_ENV_VAR)
    if file_path:
        # Empty and "~" scalars are YAML spellings of null, unset like an empty env var
        data.update(
            (key, value)
            for key, value in load_yaml(Path(file_path)).items()
            if value not in ("", "~")
        )
        clear_null_properties(data)
    data.update(properties_from_env(environ))

    try:
        return SuiteProperties.model_validate(data)
    except ValidationError as e:
        errors = e.errors()
        error_messages = []
        for err in errors:
            loc = ".".join(str(x) for x in err["loc"]) or "properties"
            hint = f" ({env_var_for(loc)})" if loc in SuiteProperties.model_fields else ""
            error_messages.append(f"  - {loc}{hint}: {err['msg']}")

        raise ConfigValidationError(  # noqa: B904
            "Test properties validation failed:\n" + "\n".join(error_messages),
            errors=[dict(e) for e in errors],  # type: ignore[call-overload]
        )
