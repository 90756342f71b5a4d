"""gocoveralls error types with typed error codes.

Error code ranges:
- 1xxx: Profile
- 2xxx: Config
- 3xxx: Source
- 4xxx: Upload
- 5xxx: Test run
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Profile (1xxx)
    PROFILE_MALFORMED_HEADER = 1001
    PROFILE_MALFORMED_BLOCK = 1002
    PROFILE_MODE_MISMATCH = 1003
    PROFILE_READ_ERROR = 1004

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Source (3xxx)
    SOURCE_NOT_FOUND = 3001
    SOURCE_UNREADABLE = 3002

    # Upload (4xxx)
    UPLOAD_REQUEST_FAILED = 4001
    UPLOAD_BAD_RESPONSE = 4002
    UPLOAD_REJECTED = 4003

    # Test run (5xxx)
    TESTRUN_TOOL_NOT_FOUND = 5001
    TESTRUN_FAILED = 5002
    TESTRUN_TIMEOUT = 5003


@dataclass(frozen=True, slots=True)
class GoverallsError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PROFILE_MALFORMED_BLOCK')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ProfileError(GoverallsError):
    """Coverage profile could not be parsed or merged."""

    @classmethod
    def malformed_header(cls, line: str) -> "ProfileError":
        return cls(
            code=ErrorCode.PROFILE_MALFORMED_HEADER,
            message=f"Bad mode line: {line!r}",
            details={"line": line},
        )

    @classmethod
    def malformed_block(cls, line_no: int, line: str) -> "ProfileError":
        return cls(
            code=ErrorCode.PROFILE_MALFORMED_BLOCK,
            message=f"Line {line_no} doesn't match expected block format: {line!r}",
            details={"line_no": line_no, "line": line},
        )

    @classmethod
    def mode_mismatch(cls, file_name: str, expected: str, actual: str) -> "ProfileError":
        return cls(
            code=ErrorCode.PROFILE_MODE_MISMATCH,
            message=f"Cannot merge {file_name}: mode {actual!r} conflicts with {expected!r}",
            details={"file": file_name, "expected": expected, "actual": actual},
        )

    @classmethod
    def read_error(cls, path: str, reason: str) -> "ProfileError":
        return cls(
            code=ErrorCode.PROFILE_READ_ERROR,
            message=f"Failed to read coverage profile {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class ConfigError(GoverallsError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class SourceError(GoverallsError):
    """A source file named by a profile could not be located or read."""

    @classmethod
    def not_found(cls, file_name: str) -> "SourceError":
        return cls(
            code=ErrorCode.SOURCE_NOT_FOUND,
            message=f"Can't find source file for {file_name}",
            details={"file": file_name},
        )

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "SourceError":
        return cls(
            code=ErrorCode.SOURCE_UNREADABLE,
            message=f"Error reading {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class UploadError(GoverallsError):
    """Submitting a job to the coverage service failed."""

    @classmethod
    def request_failed(cls, endpoint: str, reason: str) -> "UploadError":
        return cls(
            code=ErrorCode.UPLOAD_REQUEST_FAILED,
            message=f"Request to {endpoint} failed: {reason}",
            retryable=True,
            details={"endpoint": endpoint, "reason": reason},
        )

    @classmethod
    def bad_response(cls, status_code: int, body: str) -> "UploadError":
        return cls(
            code=ErrorCode.UPLOAD_BAD_RESPONSE,
            message=f"Unexpected response (HTTP {status_code}): {body[:200]}",
            details={"status_code": status_code},
        )

    @classmethod
    def rejected(cls, message: str) -> "UploadError":
        return cls(
            code=ErrorCode.UPLOAD_REJECTED,
            message=f"Job rejected: {message}",
            details={"response_message": message},
        )


class TestRunError(GoverallsError):
    """Running the Go test suite failed."""

    __test__ = False

    @classmethod
    def tool_not_found(cls, tool: str) -> "TestRunError":
        return cls(
            code=ErrorCode.TESTRUN_TOOL_NOT_FOUND,
            message=f"Executable not found on PATH: {tool}",
            details={"tool": tool},
        )

    @classmethod
    def failed(cls, returncode: int, stderr: str) -> "TestRunError":
        tail = "\n".join(stderr.strip().splitlines()[-20:])
        return cls(
            code=ErrorCode.TESTRUN_FAILED,
            message=f"go test exited with status {returncode}",
            details={"returncode": returncode, "stderr": tail},
        )

    @classmethod
    def timeout(cls, timeout_sec: float) -> "TestRunError":
        return cls(
            code=ErrorCode.TESTRUN_TIMEOUT,
            message=f"go test did not finish within {timeout_sec}s",
            details={"timeout_sec": timeout_sec},
        )

