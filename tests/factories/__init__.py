"""Test factories for creating resolution targets."""

from tests.factories.targets import (
    DatabaseConfig,
    SampleConfig,
    SampleModel,
    ServiceConfig,
)

__all__ = [
    "DatabaseConfig",
    "SampleConfig",
    "SampleModel",
    "ServiceConfig",
]
