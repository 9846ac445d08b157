"""JSON/YAML file loading with case-insensitive deep merge support."""

import copy
import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from configresolver.exceptions import ConfigFileNotFoundError, ConfigParseError
from configresolver.types import ConfigFileType


def normalize_keys(value: Any) -> Any:
    """Return a deep copy of value with every mapping key lower-cased.

    Lists are walked so mappings nested inside sequences are normalized too.
    """
    if isinstance(value, Mapping):
        return {str(k).lower(): normalize_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [normalize_keys(v) for v in value]
    return copy.deepcopy(value)


def expand_dotted(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Expand dotted keys into nested dictionaries.

    {"db.host": "x", "db": {"port": 1}} becomes {"db": {"host": "x", "port": 1}}.
    Keys are lower-cased and values deep-copied; the input is not modified.
    """
    result: dict[str, Any] = {}
    for key, value in mapping.items():
        parts = str(key).lower().split(".")
        nested: Any = normalize_keys(value)
        for part in reversed(parts[1:]):
            nested = {part: nested}
        result = deep_merge(result, {parts[0]: nested})
    return result


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence.

    For nested dictionaries, values are merged recursively.
    For other values, override replaces base.

    Args:
        base: Base dictionary
        override: Override dictionary (takes precedence)

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def get_value(mapping: Mapping[str, Any], key_path: str, default: Any = None) -> Any:
    """Get a nested value using case-insensitive dot notation."""
    value: Any = mapping
    for key in key_path.lower().split("."):
        if not isinstance(value, Mapping):
            return default
        matches = [v for k, v in value.items() if str(k).lower() == key]
        if not matches:
            return default
        value = matches[0]
    return value


def _parse(text: str, file_type: ConfigFileType) -> Any:
    if file_type is ConfigFileType.JSON:
        return json.loads(text)
    return yaml.safe_load(text)


def load_file(
    file_path: str | os.PathLike[str],
    file_type: ConfigFileType,
) -> dict[str, Any]:
    """Load a JSON or YAML file and return its contents as a dictionary.

    Keys are lower-cased. An empty file, or a YAML document that is null,
    contributes no keys.

    Args:
        file_path: Path to the configuration file
        file_type: Grammar to parse the file with

    Returns:
        Dictionary containing the parsed data

    Raises:
        ConfigFileNotFoundError: If the file is missing or cannot be read
        ConfigParseError: If the syntax is invalid or the top level is not a mapping
    """
    path = Path(file_path)
    try:
        with path.open("r", encoding="utf-8") as f:
            text = f.read()
    except OSError as exc:
        raise ConfigFileNotFoundError(
            f"Configuration file not found: {path}", path=str(path)
        ) from exc
    except UnicodeDecodeError as exc:
        raise ConfigParseError(f"{path} is not valid UTF-8: {exc}", cause=exc) from exc

    if not text.strip():
        return {}

    try:
        data = _parse(text, file_type)
    except (ValueError, yaml.YAMLError) as exc:
        raise ConfigParseError(
            f"Invalid {file_type.value.upper()} in {path}: {exc}", cause=exc
        ) from exc

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigParseError(
            f"Top level of {path} must be a mapping, got {type(data).__name__}"
        )

    return normalize_keys(data)
