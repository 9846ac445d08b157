"""Exception hierarchy for configuration resolution.

All errors inherit from ConfigResolverError, which carries a stable
error_code so callers can branch on the failure kind without string
matching. None of these are logged or retried inside the library.
"""


class ConfigResolverError(Exception):
    """Base exception for all resolution errors."""

    error_code: str = "CONFIG_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TargetNotAddressableError(ConfigResolverError):
    """Raised when the target cannot be populated in place."""

    error_code = "TARGET_NOT_ADDRESSABLE"


class InvalidConfigTypeError(ConfigResolverError):
    """Raised when the file type is not JSON or YAML."""

    error_code = "INVALID_CONFIG_TYPE"


class ConfigFileNotFoundError(ConfigResolverError, FileNotFoundError):
    """Raised when a file path was given but cannot be read."""

    error_code = "FILE_NOT_FOUND"

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigParseError(ConfigResolverError):
    """Raised when a file is not valid JSON/YAML or is not a mapping."""

    error_code = "PARSE_ERROR"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class UnmarshalError(ConfigResolverError):
    """Raised when resolved values do not fit the target's field types."""

    error_code = "UNMARSHAL_ERROR"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
