"""
Application exceptions.
"""

from exceptions.errors import (
    AppError,
    NotFoundError,
    ValidationError,
    ExternalServiceError,
    DatabaseError,
    HolidayNotFoundError,
    InvalidHolidayWindowError,
    NotificationError,
)

__all__ = [
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ExternalServiceError",
    "DatabaseError",
    "HolidayNotFoundError",
    "InvalidHolidayWindowError",
    "NotificationError",
]
