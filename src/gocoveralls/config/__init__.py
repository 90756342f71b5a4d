"""Config module exports."""

from gocoveralls.config.loader import load_config
from gocoveralls.config.models import (
    GoverallsConfig,
    LoggingConfig,
    LogOutputConfig,
    ServiceConfig,
    SourcesConfig,
    TestRunConfig,
)

__all__ = [
    "load_config",
    "GoverallsConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ServiceConfig",
    "SourcesConfig",
    "TestRunConfig",
]
