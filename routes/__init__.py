"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.holiday_reports import router as holiday_reports_router

__all__ = [
    "holiday_reports_router",
]
