"""Harness configuration.

Classes:
    HarnessConfig: Fixed author identity, naming, and logging settings.
    LoggingConfig: Logging section of HarnessConfig.
    LogLevel: Log level threshold values.
    LogFormat: Log output format values.

Functions:
    load_config: Merge defaults, an optional TOML file, environment
        variables, and overrides into a HarnessConfig.
"""

from repofixture.config._loader import ENV_PREFIX, load_config, parse_env_vars
from repofixture.config._models import HarnessConfig, LogFormat, LoggingConfig, LogLevel

__all__ = [
    "ENV_PREFIX",
    "HarnessConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "load_config",
    "parse_env_vars",
]
