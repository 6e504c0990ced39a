"""Error message constants for consistent error handling.

Client-facing strings live here so that nothing derived from a fault can sneak into
a response body by accident.
"""
from __future__ import annotations


class ErrorMessages:
    """Centralized error message constants."""

    # Body of every redacted 500 response.
    UNEXPECTED_ERROR = "An unexpected error occurred. Please try again later."

    # Written to stderr when the operator log itself is broken.
    LOGGING_FAILED = "error boundary: failed to log unhandled exception"


class ErrorCodes:
    """Log event names for programmatic filtering."""

    UNHANDLED_EXCEPTION = "http.unhandled_exception"
