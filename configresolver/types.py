"""File type enumeration for configuration sources."""

import os
from enum import Enum

from configresolver.exceptions import InvalidConfigTypeError

_ALIASES = {
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
}


class ConfigFileType(str, Enum):
    """Grammar used to parse a configuration file.

    The value doubles as the dataclass field metadata key used to look up
    a per-grammar serialization tag.
    """

    JSON = "json"
    YAML = "yaml"

    @classmethod
    def parse(cls, value: "ConfigFileType | str") -> "ConfigFileType":
        """Coerce an enum member or a case-insensitive name to a file type.

        Raises:
            InvalidConfigTypeError: If the value names no known grammar
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = _ALIASES.get(value.strip().lower().lstrip("."))
            if name is not None:
                return cls(name)
        raise InvalidConfigTypeError(f"Invalid config file type: {value!r}")

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> "ConfigFileType":
        """Infer the file type from a path's extension."""
        _, ext = os.path.splitext(os.fspath(path))
        if not ext:
            raise InvalidConfigTypeError(
                f"Cannot infer config file type without an extension: {os.fspath(path)}"
            )
        return cls.parse(ext)
