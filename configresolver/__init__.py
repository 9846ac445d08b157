"""Layered configuration resolution for Python applications.

Merges defaults, a JSON or YAML file and environment variables into a
caller-owned pydantic model, dataclass or mapping, in that order of
increasing precedence.

Usage:
    from configresolver import ConfigFileType, resolve

    config = AppConfig()
    resolve(ConfigFileType.YAML, "config.yaml", config, {"api.port": 8000}, "app")
"""

from configresolver.exceptions import (
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigResolverError,
    InvalidConfigTypeError,
    TargetNotAddressableError,
    UnmarshalError,
)
from configresolver.resolver import ConfigResolver, ResolutionContext, resolve
from configresolver.settings import ResolverSettings
from configresolver.types import ConfigFileType

__all__ = [
    # Resolution
    "ConfigResolver",
    "ResolutionContext",
    "resolve",
    # Types
    "ConfigFileType",
    "ResolverSettings",
    # Errors
    "ConfigResolverError",
    "ConfigFileNotFoundError",
    "ConfigParseError",
    "InvalidConfigTypeError",
    "TargetNotAddressableError",
    "UnmarshalError",
]
