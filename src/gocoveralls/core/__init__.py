"""Core module exports."""

from gocoveralls.core.errors import (
    ConfigError,
    ErrorCode,
    GoverallsError,
    ProfileError,
    SourceError,
    TestRunError,
    UploadError,
)
from gocoveralls.core.logging import (
    bind_job_id,
    clear_job_id,
    configure_logging,
    get_logger,
)
from gocoveralls.core.progress import pluralize, spinner, status

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "GoverallsError",
    "ProfileError",
    "SourceError",
    "TestRunError",
    "UploadError",
    # Logging
    "bind_job_id",
    "clear_job_id",
    "configure_logging",
    "get_logger",
    # Progress
    "pluralize",
    "spinner",
    "status",
]
