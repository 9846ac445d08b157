"""Library settings read from CONFIGRESOLVER_* environment variables."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ResolverSettings(BaseSettings):
    """Tunables for how sources are merged and coerced.

    These govern the resolver itself, not the caller's configuration, and
    are read fresh for each ConfigResolver so no state is shared.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONFIGRESOLVER_",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: LogLevel = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(
        default="json",
        description="Log renderer",
    )
    list_separator: str = Field(
        default=",",
        min_length=1,
        description="Separator used to split env strings into list fields",
    )
    env_key_replacement: str = Field(
        default="_",
        description="Replacement for '.' when deriving env var names",
    )
    allow_empty_env: bool = Field(
        default=False,
        description="Treat set-but-empty env vars as overrides",
    )
