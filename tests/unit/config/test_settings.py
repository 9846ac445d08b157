"""Unit tests for ResolverSettings."""

import pytest
from pydantic import ValidationError

from configresolver.settings import ResolverSettings


class TestResolverSettings:
    """Tests for ResolverSettings model."""

    def test_default_values(self) -> None:
        """Settings has sensible defaults."""
        settings = ResolverSettings()
        assert settings.log_level == "INFO"
        assert settings.log_format == "json"
        assert settings.list_separator == ","
        assert settings.env_key_replacement == "_"
        assert settings.allow_empty_env is False

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Values can be overridden with CONFIGRESOLVER_* env vars."""
        monkeypatch.setenv("CONFIGRESOLVER_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("configresolver_list_separator", ";")
        settings = ResolverSettings()
        assert settings.log_level == "DEBUG"
        assert settings.list_separator == ";"

    def test_invalid_log_level_rejected(self) -> None:
        """Unknown log levels fail validation."""
        with pytest.raises(ValidationError):
            ResolverSettings(log_level="VERBOSE")

    def test_empty_separator_rejected(self) -> None:
        """An empty list separator fails validation."""
        with pytest.raises(ValidationError):
            ResolverSettings(list_separator="")
