"""Tests for the Result type and error codes."""

import inspect

import pytest

from services import error_codes
from services.result import Result


class TestResultOk:
    """Tests for successful Result creation."""

    def test_ok_without_value(self):
        """Result.ok() creates success without value."""
        result = Result.ok()
        assert result.success is True
        assert result.value is None
        assert result.error is None
        assert result.error_code is None

    def test_ok_with_value(self):
        result = Result.ok({"session_id": "abc"})
        assert result.success is True
        assert result.value["session_id"] == "abc"


class TestResultFail:
    """Tests for failed Result creation."""

    def test_fail_with_message(self):
        result = Result.fail("Something went wrong")
        assert result.success is False
        assert result.value is None
        assert result.error == "Something went wrong"
        assert result.error_code is None

    def test_fail_with_code(self):
        """Result.fail(msg, code) creates failure with code."""
        result = Result.fail("This session is full", code=error_codes.SESSION_FULL)
        assert result.error == "This session is full"
        assert result.error_code == error_codes.SESSION_FULL


class TestResultBooleanContext:
    """Tests for Result in boolean context."""

    def test_ok_is_truthy(self):
        assert bool(Result.ok(42)) is True

    def test_fail_is_falsy(self):
        assert bool(Result.fail("error")) is False


class TestRetryable:
    """Only advisor outages are worth retrying."""

    def test_advisor_unavailable_is_retryable(self):
        result = Result.fail("timed out", code=error_codes.ADVISOR_UNAVAILABLE)
        assert result.is_retryable is True

    @pytest.mark.parametrize(
        "code",
        [
            error_codes.SESSION_FULL,
            error_codes.CANCELLATION_WINDOW_CLOSED,
            error_codes.INVALID_ADVISOR_RESPONSE,
            error_codes.INVALID_ROSTER_SIZE,
        ],
    )
    def test_other_failures_are_not_retryable(self, code):
        assert Result.fail("nope", code=code).is_retryable is False

    def test_success_is_not_retryable(self):
        assert Result.ok().is_retryable is False


class TestResultUnwrap:
    """Tests for Result.unwrap() and unwrap_or()."""

    def test_unwrap_success(self):
        assert Result.ok(42).unwrap() == 42

    def test_unwrap_failure_raises(self):
        """unwrap() raises ValueError on failure."""
        result = Result.fail("Something went wrong")
        with pytest.raises(ValueError, match="Cannot unwrap failed result"):
            result.unwrap()

    def test_unwrap_or_failure(self):
        assert Result.fail("error").unwrap_or(0) == 0


class TestResultMap:
    """Tests for Result.map() chaining."""

    def test_map_chain(self):
        result = (
            Result.ok(5)
            .map(lambda x: Result.ok(x * 2))
            .map(lambda x: Result.ok(x + 1))
        )
        assert result.value == 11

    def test_map_on_failure(self):
        """map() returns original failure."""
        result = Result.fail("error", code=error_codes.NOT_ENROLLED)
        mapped = result.map(lambda x: Result.ok(x * 2))
        assert mapped is result


class TestResultImmutability:
    def test_result_is_frozen(self):
        result = Result.ok(42)
        with pytest.raises(Exception):  # FrozenInstanceError
            result.value = 100


class TestErrorCodes:
    """Tests for error code constants."""

    def test_error_codes_are_unique(self):
        codes = [
            value
            for name, value in inspect.getmembers(error_codes)
            if not name.startswith("_") and isinstance(value, str)
        ]
        assert len(codes) == len(set(codes)), "Duplicate error codes found"

    def test_enrollment_error_codes_exist(self):
        for name in (
            "SESSION_NOT_FOUND",
            "SESSION_FULL",
            "ALREADY_REGISTERED",
            "ALREADY_WAITLISTED",
            "CANCELLATION_WINDOW_CLOSED",
        ):
            assert isinstance(getattr(error_codes, name), str)

    def test_retryable_codes_are_known(self):
        assert error_codes.RETRYABLE_CODES == {error_codes.ADVISOR_UNAVAILABLE}
