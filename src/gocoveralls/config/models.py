"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config() (CLI flags)
2. Environment variables (GOCOVERALLS__SECTION__KEY)
3. Repo YAML (.gocoveralls.yaml)
4. Global YAML (~/.config/gocoveralls/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    GOCOVERALLS__<SECTION>__<KEY>=<VALUE>

Examples:
    GOCOVERALLS__LOGGING__LEVEL=DEBUG
    GOCOVERALLS__SERVICE__ENDPOINT=https://coveralls.example.com/api/v1/jobs
    GOCOVERALLS__SOURCES__STRICT=true
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
CoverMode = Literal["set", "count", "atomic"]

DEFAULT_ENDPOINT = "https://coveralls.io/api/v1/jobs"


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        GOCOVERALLS__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. Use -v on the command line for DEBUG.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ServiceConfig(BaseModel):
    """Coverage service (jobs API) configuration.

    Env vars:
        GOCOVERALLS__SERVICE__ENDPOINT: Jobs API URL
        GOCOVERALLS__SERVICE__REPO_TOKEN: Repository token (also COVERALLS_TOKEN via CLI)
        GOCOVERALLS__SERVICE__SERVICE_NAME: CI service name reported with the job
    """

    endpoint: str = Field(
        default=DEFAULT_ENDPOINT,
        description="Jobs API endpoint the payload is posted to.",
    )
    repo_token: str = Field(
        default="",
        description="Repository token. When empty the payload is printed instead of uploaded.",
    )
    service_name: str = Field(
        default="gocoveralls",
        description="The CI service or other environment in which the test suite was run.",
    )
    service_job_id: str | None = Field(
        default=None,
        description="Job id reported to the service. A random id is generated when unset.",
    )
    service_number: str | None = Field(
        default=None,
        description="Build number reported to the service.",
    )
    parallel: bool = Field(
        default=False,
        description="Mark the job as one of several parallel jobs of a build.",
    )
    flag_name: str | None = Field(
        default=None,
        description="Label distinguishing this job within a parallel build.",
    )
    upload_source: bool = Field(
        default=True,
        description="Send full source text. When false only the source digest is sent.",
    )
    timeout_sec: float = Field(
        default=30.0,
        description="HTTP timeout for the upload request.",
    )

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v


class SourcesConfig(BaseModel):
    """Source resolution configuration.

    Env vars:
        GOCOVERALLS__SOURCES__STRICT: Fail on unreadable source files instead of skipping
    """

    strict: bool = Field(
        default=False,
        description="Abort when a profiled source file cannot be read. "
        "Default is to skip the file with a warning.",
    )
    ignore: list[str] = Field(
        default_factory=list,
        description="Glob patterns of file names excluded from the report.",
    )
    gopath: list[str] = Field(
        default_factory=list,
        description="GOPATH entries searched for package-style file names. "
        "Defaults to the GOPATH environment variable.",
    )


class TestRunConfig(BaseModel):
    """go test invocation configuration.

    Env vars:
        GOCOVERALLS__TESTRUN__COVER_MODE: set, count or atomic
        GOCOVERALLS__TESTRUN__TIMEOUT_SEC: Test run timeout
    """

    cover_mode: CoverMode = Field(
        default="count",
        description="Value passed to go test -covermode.",
    )
    race: bool = Field(default=False, description="Pass -race to go test.")
    verbose: bool = Field(default=False, description="Pass -v to go test.")
    extra_args: list[str] = Field(
        default_factory=list,
        description="Extra arguments appended to the go test command line.",
    )
    timeout_sec: float = Field(
        default=600.0,
        description="Kill go test after this many seconds.",
    )


class GoverallsConfig(BaseModel):
    """Root configuration for gocoveralls."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    service: ServiceConfig = Field(default_factory=ServiceConfig)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    testrun: TestRunConfig = Field(default_factory=TestRunConfig)
