"""Shared test fixtures for the configresolver test suite."""

import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the static JSON/YAML fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def write_config(test_config_dir: Path) -> Callable[[str, str], Path]:
    """Factory fixture to create config files in the test config directory.

    Usage:
        def test_something(write_config):
            path = write_config("app.yaml", "debug: true")
    """

    def _write_config(filename: str, content: str) -> Path:
        config_file = test_config_dir / filename
        config_file.write_text(content)
        return config_file

    return _write_config


class EnvOverrideContext:
    """Context manager for temporarily setting environment variables."""

    def __init__(self, overrides: dict[str, str]) -> None:
        self.overrides = overrides
        self.original_env: dict[str, str | None] = {}

    def __enter__(self) -> None:
        for key, value in self.overrides.items():
            self.original_env[key] = os.environ.get(key)
            os.environ[key] = value

    def __exit__(self, *args: Any) -> None:
        for key in self.overrides:
            original = self.original_env[key]
            if original is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = original


@pytest.fixture
def env_override() -> Generator[Callable[[dict[str, str]], EnvOverrideContext], None, None]:
    """Context manager for temporarily setting environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"INTVALUE": "789"}):
                # test code here
    """

    def _env_override(overrides: dict[str, str]) -> EnvOverrideContext:
        return EnvOverrideContext(overrides)

    yield _env_override


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Restore structlog defaults and the stdlib "configresolver" logger after each test."""
    yield
    structlog.reset_defaults()
    stdlib_logger = logging.getLogger("configresolver")
    for handler in list(stdlib_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            stdlib_logger.removeHandler(handler)
    stdlib_logger.setLevel(logging.NOTSET)
    stdlib_logger.propagate = True
