"""Configuration Resolver - layered configuration resolution.

Resolves configuration by merging settings from:
1. Caller-supplied defaults
2. A JSON or YAML file
3. Environment variables

Later levels override earlier levels. Every call works on its own
ResolutionContext, so concurrent callers never see each other's defaults
or overrides.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from configresolver.env import apply_env_overrides
from configresolver.loader import deep_merge, expand_dotted, load_file
from configresolver.observability.logging import get_logger
from configresolver.settings import ResolverSettings
from configresolver.target import check_addressable, unmarshal
from configresolver.types import ConfigFileType

logger = get_logger(__name__)

PathArg = str | os.PathLike[str] | None


@dataclass
class ResolutionContext:
    """Per-call working state holding merged keys before unmarshaling."""

    file_type: ConfigFileType
    env_prefix: str = ""
    store: dict[str, Any] = field(default_factory=dict)

    def apply_defaults(self, defaults: Mapping[str, Any] | None) -> None:
        if defaults:
            self.store = deep_merge(self.store, expand_dotted(defaults))

    def apply_file(self, file_path: str | os.PathLike[str]) -> int:
        data = load_file(file_path, self.file_type)
        self.store = deep_merge(self.store, data)
        return len(data)

    def apply_env(
        self,
        environ: Mapping[str, str],
        settings: ResolverSettings,
    ) -> list[str]:
        return apply_env_overrides(
            self.store,
            environ,
            prefix=self.env_prefix,
            replacement=settings.env_key_replacement,
            allow_empty=settings.allow_empty_env,
        )


class ConfigResolver:
    """Merges defaults, a config file and env vars into a target.

    Precedence is env > file > defaults. The resolver holds only settings;
    all merge state lives in a ResolutionContext created per call.
    """

    def __init__(
        self,
        settings: ResolverSettings | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._settings = settings or ResolverSettings()
        self._environ = environ

    def resolve(
        self,
        file_type: ConfigFileType | str,
        file_path: PathArg,
        target: Any,
        defaults: Mapping[str, Any] | None = None,
        env_prefix: str = "",
    ) -> None:
        """Resolve configuration into target in place.

        Args:
            file_type: Grammar of the config file (JSON or YAML)
            file_path: Path to the config file; empty or None skips the file source
            target: Model, dataclass or mapping instance to populate
            defaults: Dotted key paths to default values
            env_prefix: Optional prefix for env var names ("app" -> "APP_KEY")

        Raises:
            TargetNotAddressableError: If target cannot be populated in place
            InvalidConfigTypeError: If file_type is not JSON or YAML
            ConfigFileNotFoundError: If file_path is set but cannot be read
            ConfigParseError: If the file is malformed or not a mapping
            UnmarshalError: If a value cannot be coerced to its field type
        """
        check_addressable(target)
        resolved_type = ConfigFileType.parse(file_type)

        ctx = ResolutionContext(file_type=resolved_type, env_prefix=env_prefix or "")
        log = logger.bind(file_type=resolved_type.value, env_prefix=ctx.env_prefix)
        log.debug("config_resolve_started", target=type(target).__name__)

        ctx.apply_defaults(defaults)

        if file_path:
            key_count = ctx.apply_file(file_path)
            log.debug("config_file_loaded", path=os.fspath(file_path), keys=key_count)
        else:
            log.debug("config_file_skipped")

        environ = os.environ if self._environ is None else self._environ
        applied = ctx.apply_env(environ, self._settings)
        if applied:
            log.debug("config_env_overrides_applied", env_vars=applied)

        unmarshal(ctx.store, target, resolved_type, self._settings.list_separator)
        log.debug("config_resolved", keys=sorted(ctx.store))


def resolve(
    file_type: ConfigFileType | str,
    file_path: PathArg,
    target: Any,
    defaults: Mapping[str, Any] | None = None,
    env_prefix: str = "",
    *,
    environ: Mapping[str, str] | None = None,
    settings: ResolverSettings | None = None,
) -> None:
    """Resolve configuration into target using a fresh ConfigResolver.

    See ConfigResolver.resolve for arguments and errors.
    """
    ConfigResolver(settings=settings, environ=environ).resolve(
        file_type, file_path, target, defaults, env_prefix
    )
