"""
Result type for consistent error handling across services.

Services report every expected failure (full session, closed cancellation
window, bad advisor answer, ...) as a failed Result instead of raising, so the
UI event layer can turn it into a toast without a try/except around each call.

Usage:
    return Result.ok(session)
    return Result.fail("Session is full", code=error_codes.SESSION_FULL)

    result = enrollment_service.book(session_id, player)
    if not result:
        show_toast(result.error, retry=result.is_retryable)
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from services.error_codes import RETRYABLE_CODES

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a service operation.

    Attributes:
        success: Whether the operation succeeded
        value: The return value if successful (None if failed or void operation)
        error: Error message if failed (None if successful)
        error_code: Error code from services.error_codes for programmatic handling
    """

    success: bool
    value: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        """Create a successful result with an optional value."""
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, code: str | None = None) -> "Result[T]":
        """Create a failed result with an error message and optional error code."""
        return cls(success=False, error=error, error_code=code)

    def __bool__(self) -> bool:
        return self.success

    @property
    def is_retryable(self) -> bool:
        """True when the failure is transient (advisor down or timed out)."""
        return not self.success and self.error_code in RETRYABLE_CODES

    def unwrap(self) -> T:
        """
        Get the value, raising ValueError if the result is a failure.

        Raises:
            ValueError: If the result is a failure
        """
        if not self.success:
            raise ValueError(f"Cannot unwrap failed result: {self.error}")
        return self.value  # type: ignore

    def unwrap_or(self, default: T) -> T:
        """Get the value or a default if the result is a failure."""
        return self.value if self.success else default  # type: ignore

    def map(self, fn: Callable[[T], "Result"]) -> "Result":
        """Chain another operation onto a successful result; failures pass through."""
        if not self.success:
            return self
        return fn(self.value)
