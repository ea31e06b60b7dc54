"""
Standard error codes for service layer.

These error codes allow the UI event layer to programmatically handle
specific error conditions without parsing error message text.

Usage:
    from services.error_codes import SESSION_FULL
    from services.result import Result

    if session.is_full():
        return Result.fail("Session is full", code=SESSION_FULL)
"""

# General errors
VALIDATION_ERROR = "validation_error"

# Roster balancing errors
INVALID_ROSTER_SIZE = "invalid_roster_size"
INVALID_ADVISOR_RESPONSE = "invalid_advisor_response"
ADVISOR_UNAVAILABLE = "advisor_unavailable"

# Session enrollment errors
SESSION_NOT_FOUND = "session_not_found"
SESSION_FULL = "session_full"
ALREADY_REGISTERED = "already_registered"
ALREADY_WAITLISTED = "already_waitlisted"
CANCELLATION_WINDOW_CLOSED = "cancellation_window_closed"
NOT_ENROLLED = "not_enrolled"
NOT_WAITLISTED = "not_waitlisted"

# Announcement errors
ANNOUNCEMENT_NOT_FOUND = "announcement_not_found"

# Transient failures the caller may retry without changing any state.
RETRYABLE_CODES = frozenset({ADVISOR_UNAVAILABLE})
