# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Configuration loading and merging.

Sources are merged in precedence order (lowest first): built-in defaults,
an optional TOML file, ``REPOFIXTURE_*`` environment variables, and explicit
overrides.
"""

from __future__ import annotations

import os
import tomllib
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from repofixture.config._models import HarnessConfig
from repofixture.exceptions import ConfigError, ConfigValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

ENV_PREFIX = "REPOFIXTURE_"


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read and parse a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed TOML content as dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the file cannot be parsed.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file {path}: {e}"
        raise ConfigError(msg) from e


def deep_merge(
    base: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    override: Mapping[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Deep merge two configuration dictionaries.

    Merges `override` into `base`, returning a new dictionary. Neither input
    is modified. Nested dictionaries are merged recursively; any other value
    in `override` replaces the base value.

    Args:
        base: Base configuration (lower precedence).
        override: Override configuration (higher precedence).

    Returns:
        Merged configuration dictionary.
    """
    result: dict[str, Any] = dict(base)  # pyright: ignore[reportExplicitAny]
    for key, override_val in override.items():
        base_val = result.get(key)
        if isinstance(base_val, dict) and isinstance(override_val, dict):
            result[key] = deep_merge(base_val, override_val)
        else:
            result[key] = override_val
    return result


def set_nested_key(
    d: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    key_path: str,
    value: Any,  # pyright: ignore[reportExplicitAny]
) -> None:
    """Set a value at a dotted key path in a nested dictionary.

    Creates intermediate dictionaries as needed.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "logging.level", "debug")
        >>> d
        {'logging': {'level': 'debug'}}
    """
    parts = key_path.split(".")
    current = d
    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
    current[parts[-1]] = value


def parse_env_vars(
    environ: Mapping[str, str] | None = None,
    *,
    prefix: str = ENV_PREFIX,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Parse environment variables into a config dictionary.

    Values are kept as strings; type coercion is left to the Pydantic models.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.
        prefix: Environment variable prefix.

    Returns:
        Dictionary of config values with nested structure.

    Environment variable naming:
        - Add prefix (REPOFIXTURE_)
        - Convert to uppercase
        - Replace dots with double underscores
        - Example: logging.level -> REPOFIXTURE_LOGGING__LEVEL
    """
    if environ is None:
        environ = os.environ

    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    for key, value in environ.items():
        if not key.startswith(prefix):
            continue
        config_key = key[len(prefix) :]
        if not config_key:
            continue
        set_nested_key(result, config_key.replace("__", ".").lower(), value)
    return result


def load_config(
    *,
    config_path: Path | None = None,
    include_env: bool = True,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> HarnessConfig:
    """Build a HarnessConfig from all configuration sources.

    Args:
        config_path: Optional TOML file. Its ``[repofixture]`` table is used
            if present, otherwise the whole document.
        include_env: Read ``REPOFIXTURE_*`` environment variables.
        environ: Mapping to read environment variables from (for tests).
        overrides: Highest-precedence values, e.g. from a pytest fixture.

    Returns:
        The validated configuration.

    Raises:
        FileNotFoundError: If config_path does not exist.
        ConfigError: If the TOML file cannot be parsed.
        ConfigValidationError: If a merged value fails validation.
    """
    data: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    source = "default"

    if config_path is not None:
        document = read_toml_file(config_path)
        section = document.get("repofixture", document)
        if isinstance(section, dict):
            data = deep_merge(data, section)
        source = str(config_path)

    if include_env:
        env_values = parse_env_vars(environ)
        if env_values:
            data = deep_merge(data, env_values)
            source = "env"

    if overrides:
        data = deep_merge(data, overrides)
        source = "overrides"

    try:
        return HarnessConfig.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        msg = f"Invalid configuration value for {key}: {first['msg']}"
        raise ConfigValidationError(
            msg,
            key=key,
            value=first.get("input"),
            expected=first["type"],
            source=source,
        ) from e
