"""
Holiday report API routes.

`GET /api/holiday-reports/run` is the endpoint a daily timer (cron) calls.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
import structlog

from models.holiday import DueHolidaysResponse
from models.product import StockLevel
from models.report import DemandSummaryResponse, HolidayRunResult, SchedulerRunResponse
from services.holiday_report_service import get_holiday_report_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/holiday-reports", tags=["Holiday Reports"])


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# SCHEDULER
# ===================

@router.get("/run", response_model=SchedulerRunResponse)
async def run_scheduler(
    notify: bool = Query(True, description="Send reports to WhatsApp / email"),
    today: Optional[date] = Query(None, description="Run date (defaults to today)"),
):
    """
    Generate reports for all holidays starting within the lookahead window.

    Each holiday is processed independently; failed holidays are listed
    with their error while the others still produce reports.
    """
    try:
        service = get_holiday_report_service()
        return service.run_scheduled(today=today, notify=notify)

    except Exception as e:
        return handle_error(e)


@router.get("/due", response_model=DueHolidaysResponse)
async def list_due_holidays(
    today: Optional[date] = Query(None, description="Reference date (defaults to today)"),
):
    """List holidays whose report is due."""
    try:
        service = get_holiday_report_service()
        today = today or date.today()
        return DueHolidaysResponse(
            today=today,
            lookahead_days=service.lookahead_days,
            holidays=service.get_due_holidays(today),
        )

    except Exception as e:
        return handle_error(e)


@router.get("/stock", response_model=list[StockLevel])
async def get_stock_levels():
    """Current stock of active fish, in kg or units."""
    try:
        service = get_holiday_report_service()
        return service.get_stock_levels()

    except Exception as e:
        return handle_error(e)


# ===================
# SINGLE HOLIDAY
# ===================

@router.get("/{holiday_id}", response_model=HolidayRunResult)
async def get_holiday_report(
    holiday_id: str,
    notify: bool = Query(False, description="Also send the report"),
):
    """
    Build the supplier report for one holiday, due or not.

    Args:
        holiday_id: Holiday id
    """
    try:
        service = get_holiday_report_service()
        return service.run_for_holiday(holiday_id, notify=notify)

    except Exception as e:
        return handle_error(e)


@router.get("/{holiday_id}/demand", response_model=DemandSummaryResponse)
async def get_holiday_demand(holiday_id: str):
    """
    Per-fish order totals for a holiday, largest first.

    Args:
        holiday_id: Holiday id
    """
    try:
        service = get_holiday_report_service()
        return service.get_demand_summary(holiday_id)

    except Exception as e:
        return handle_error(e)
