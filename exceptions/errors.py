"""
Application errors.

Every error carries a machine-readable code and the HTTP status the API
answers with. Routes turn them into JSON with `to_dict()`; the report
pipeline records `code` and `message` on the failed holiday's result.
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base application error.

    Attributes:
        code: Error code (e.g., "HOLIDAY_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Extra context for logs and API clients
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()

    def to_dict(self) -> dict:
        """API error body."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """A requested record doesn't exist (404)."""

    def __init__(self, resource: str, identifier: str, code: Optional[str] = None):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} {identifier} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Stored data can't be used as-is (422)."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR", details: Optional[dict] = None):
        super().__init__(code=code, message=message, status_code=422, details=details)


class ExternalServiceError(AppError):
    """Supabase, GreenAPI or SMTP failed (503)."""

    def __init__(self, service: str, message: str, details: Optional[dict] = None):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """A Supabase query failed (500)."""

    def __init__(self, operation: str, message: str, details: Optional[dict] = None):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# HOLIDAY ERRORS
# ===================

class HolidayNotFoundError(NotFoundError):
    """Unknown holiday id."""

    def __init__(self, holiday_id: str):
        super().__init__(resource="Holiday", identifier=str(holiday_id), code="HOLIDAY_NOT_FOUND")


class InvalidHolidayWindowError(ValidationError):
    """Holiday ends before it starts."""

    def __init__(self, holiday_id: str, start_date: str, end_date: str):
        super().__init__(
            code="HOLIDAY_INVALID_WINDOW",
            message="Holiday end_date is before start_date",
            details={"id": str(holiday_id), "start_date": start_date, "end_date": end_date}
        )


# ===================
# NOTIFICATION ERRORS
# ===================

class NotificationError(ExternalServiceError):
    """Report delivery failed on one channel."""

    def __init__(self, channel: str, message: str, details: Optional[dict] = None):
        super().__init__(service=channel, message=message, details=details)
        self.channel = channel
