"""Tests for error types."""

import pytest

from gocoveralls.core.errors import (
    ConfigError,
    ErrorCode,
    GoverallsError,
    ProfileError,
    SourceError,
    TestRunError as RunError,
    UploadError,
)


class TestErrorCodes:
    """Error codes are grouped by range."""

    @pytest.mark.parametrize(
        ("prefix", "low", "high"),
        [
            ("PROFILE_", 1000, 2000),
            ("CONFIG_", 2000, 3000),
            ("SOURCE_", 3000, 4000),
            ("UPLOAD_", 4000, 5000),
            ("TESTRUN_", 5000, 6000),
        ],
    )
    def test_ranges(self, prefix: str, low: int, high: int) -> None:
        codes = [c for c in ErrorCode if c.name.startswith(prefix)]

        assert codes
        assert all(low <= c.value < high for c in codes)

    def test_codes_unique(self) -> None:
        values = [c.value for c in ErrorCode]

        assert len(values) == len(set(values))


class TestGoverallsError:
    """Tests for the base error."""

    def test_str_and_dict(self) -> None:
        err = ProfileError.malformed_block(4, "junk")

        assert str(err) == f"[1002] PROFILE_MALFORMED_BLOCK: {err.message}"
        assert err.to_dict() == {
            "code": 1002,
            "error": "PROFILE_MALFORMED_BLOCK",
            "message": err.message,
            "retryable": False,
            "details": {"line_no": 4, "line": "junk"},
        }

    def test_is_exception(self) -> None:
        with pytest.raises(GoverallsError):
            raise SourceError.not_found("a.go")

    def test_frozen(self) -> None:
        err = ConfigError.file_not_found("/x.yaml")

        with pytest.raises(AttributeError):
            err.message = "changed"  # type: ignore[misc]


class TestConstructors:
    """Classmethod constructors set codes and details."""

    @pytest.mark.parametrize(
        ("err", "code"),
        [
            (ProfileError.malformed_header("junk"), ErrorCode.PROFILE_MALFORMED_HEADER),
            (ProfileError.mode_mismatch("a.go", "set", "count"), ErrorCode.PROFILE_MODE_MISMATCH),
            (ProfileError.read_error("/p", "denied"), ErrorCode.PROFILE_READ_ERROR),
            (ConfigError.parse_error("/c", "bad"), ErrorCode.CONFIG_PARSE_ERROR),
            (ConfigError.invalid_value("a.b", 1, "bad"), ErrorCode.CONFIG_INVALID_VALUE),
            (SourceError.unreadable("/a.go", "denied"), ErrorCode.SOURCE_UNREADABLE),
            (UploadError.bad_response(500, "x"), ErrorCode.UPLOAD_BAD_RESPONSE),
            (UploadError.rejected("nope"), ErrorCode.UPLOAD_REJECTED),
            (RunError.tool_not_found("go"), ErrorCode.TESTRUN_TOOL_NOT_FOUND),
            (RunError.timeout(5.0), ErrorCode.TESTRUN_TIMEOUT),
        ],
    )
    def test_codes(self, err: GoverallsError, code: ErrorCode) -> None:
        assert err.code == code

    def test_only_request_failures_retryable(self) -> None:
        assert UploadError.request_failed("https://x", "refused").retryable is True
        assert UploadError.rejected("nope").retryable is False

    def test_bad_response_body_truncated(self) -> None:
        err = UploadError.bad_response(502, "x" * 1000)

        assert len(err.message) < 300

    def test_failed_keeps_stderr_tail(self) -> None:
        stderr = "\n".join(f"line {i}" for i in range(50))

        err = RunError.failed(1, stderr)

        assert err.details["stderr"].splitlines() == [f"line {i}" for i in range(30, 50)]
        assert err.details["returncode"] == 1
