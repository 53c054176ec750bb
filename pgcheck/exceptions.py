"""Custom exceptions for pgcheck.

The version-check core reports failures as values (FetchFailure, failed
CheckOutcome). These exceptions are raised only at the edges (HTTP routes,
configuration loading) and carry a structured error response format.
"""

from typing import Optional, Dict, Any


class PgCheckException(Exception):
    """Base exception for all pgcheck errors.

    Provides structured error response format with:
    - error_code: Machine-readable error identifier
    - message: Human-readable error description
    - details: Optional additional context
    """

    error_code: str = "PGCHECK_ERROR"
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Return structured error response dict."""
        response = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


# ============ Validation Errors (4xx) ============


class ValidationError(PgCheckException):
    """Input validation failed."""

    error_code = "VALIDATION_ERROR"
    status_code = 400


class RateLimitExceededError(PgCheckException):
    """Too many manual checks."""

    error_code = "RATE_LIMIT_EXCEEDED"
    status_code = 429

    def __init__(self, limit: str = "unknown"):
        super().__init__(f"Rate limit exceeded: {limit}", details={"limit": limit})


# ============ Check Errors ============


class CheckFailedError(PgCheckException):
    """A version check ran to completion but produced a failure outcome."""

    error_code = "CHECK_FAILED"
    status_code = 502

    def __init__(self, reason: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Version check failed: {reason}", details=details)
        if error_code:
            self.error_code = error_code

    @classmethod
    def from_outcome(cls, outcome) -> "CheckFailedError":
        return cls(outcome.error or "unknown", error_code=outcome.error_code, details=outcome.to_dict())


# ============ Configuration Errors ============


class ConfigurationError(PgCheckException):
    """Configuration issue."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(self, setting: str, message: str):
        super().__init__(f"Configuration error for {setting}: {message}", details={"setting": setting})


# ============ Utility Functions ============


def error_response(exception: PgCheckException) -> tuple:
    """Create Flask JSON response from exception.

    Returns:
        Tuple of (response_dict, status_code) ready for jsonify
    """
    return exception.to_dict(), exception.status_code
