"""
Holiday report pipeline.

For every holiday due for a report:

    orders in window -> aggregate demand -> stock -> reconcile
        -> build report -> notify

Each holiday runs on its own: a failure while fetching data or sending
a notification is recorded on that holiday's result and the remaining
holidays are still processed. Nothing is retried here; the caller
decides whether to run again.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Optional
import structlog

from config import settings
from exceptions import AppError, InvalidHolidayWindowError
from models.holiday import Holiday
from models.product import StockLevel
from models.report import (
    DemandSummaryResponse,
    HolidayReport,
    HolidayRunResult,
    ReconciliationResult,
    SchedulerRunResponse,
)
from services.demand_service import aggregate_demand, summarize_demand
from services.holiday_service import get_holiday_service
from services.notification_service import get_notification_service
from services.order_service import get_order_service
from services.reconciliation_service import reconcile, stock_levels
from services.report_service import build_report
from services.schedule_service import due_holidays
from services.stock_service import get_stock_service

logger = structlog.get_logger(__name__)


class HolidayReportService:
    """
    Holiday supplier report orchestration.

    Wires the holiday, order and stock sources to the calculation
    services and hands the result to the notification service.
    """

    def __init__(self):
        self.holiday_service = get_holiday_service()
        self.order_service = get_order_service()
        self.stock_service = get_stock_service()
        self.notification_service = get_notification_service()

        # Settings
        self.lookahead_days = settings.holiday_lookahead_days
        self.holiday_orders_only = settings.holiday_orders_only
        self.max_workers = settings.holiday_report_max_workers

    # ===================
    # QUERIES
    # ===================

    def get_due_holidays(self, today: Optional[date] = None) -> list[Holiday]:
        """Holidays starting within the lookahead window."""
        today = today or date.today()
        holidays = self.holiday_service.get_all()
        return due_holidays(today, holidays, self.lookahead_days)

    def _get_orders(self, holiday: Holiday):
        if not holiday.has_valid_window:
            raise InvalidHolidayWindowError(
                holiday.id,
                holiday.start_date.isoformat(),
                holiday.end_date.isoformat()
            )
        return self.order_service.get_orders_for_window(
            holiday.start_date,
            holiday.end_date,
            holiday_orders_only=self.holiday_orders_only,
        )

    def build_holiday_report(self, holiday: Holiday) -> HolidayReport:
        """
        Compute the report for one holiday.

        Raises:
            InvalidHolidayWindowError: If the holiday ends before it starts
            DatabaseError: If orders or stock can't be read
        """
        logger.info(
            "building_holiday_report",
            holiday_id=holiday.id,
            holiday=holiday.name,
            start_date=holiday.start_date.isoformat(),
            end_date=holiday.end_date.isoformat()
        )

        orders = self._get_orders(holiday)
        demand = aggregate_demand(orders)

        if demand.is_empty:
            reconciliation = ReconciliationResult()
        else:
            stock = self.stock_service.get_stock(demand.products.keys())
            reconciliation = reconcile(demand, stock)

        return build_report(holiday, demand, reconciliation)

    def get_demand_summary(self, holiday_id: str) -> DemandSummaryResponse:
        """
        What customers ordered for a holiday, before looking at stock.

        Raises:
            HolidayNotFoundError: If holiday doesn't exist
        """
        holiday = self.holiday_service.get_by_id(holiday_id)
        demand = aggregate_demand(self._get_orders(holiday))

        return DemandSummaryResponse(
            holiday_id=holiday.id,
            holiday_name=holiday.name,
            start_date=holiday.start_date,
            end_date=holiday.end_date,
            total_orders=demand.order_count,
            rows=summarize_demand(demand),
        )

    def get_stock_levels(self) -> list[StockLevel]:
        """Current stock of active fish in native units."""
        return stock_levels(self.stock_service.get_all())

    # ===================
    # PIPELINE RUNS
    # ===================

    def process_holiday(self, holiday: Holiday, notify: bool = True) -> HolidayRunResult:
        """
        Run the full pipeline for one holiday. Never raises.

        Args:
            holiday: Holiday to process
            notify: Send the report to notification channels

        Returns:
            HolidayRunResult with the report or the failure reason
        """
        try:
            report = self.build_holiday_report(holiday)

        except AppError as e:
            logger.error(
                "holiday_report_failed",
                holiday_id=holiday.id,
                holiday=holiday.name,
                error=e.message,
                code=e.code
            )
            return HolidayRunResult(
                holiday_id=holiday.id,
                holiday_name=holiday.name,
                start_date=holiday.start_date,
                succeeded=False,
                error=e.message,
                error_code=e.code,
            )

        except Exception as e:
            logger.error(
                "holiday_report_failed",
                holiday_id=holiday.id,
                holiday=holiday.name,
                error=str(e),
                error_type=type(e).__name__
            )
            return HolidayRunResult(
                holiday_id=holiday.id,
                holiday_name=holiday.name,
                start_date=holiday.start_date,
                succeeded=False,
                error=str(e),
                error_code="INTERNAL_ERROR",
            )

        notifications = self.notification_service.dispatch(report) if notify else []

        return HolidayRunResult(
            holiday_id=holiday.id,
            holiday_name=holiday.name,
            start_date=holiday.start_date,
            succeeded=True,
            report=report,
            notifications=notifications,
        )

    def run_for_holiday(self, holiday_id: str, notify: bool = False) -> HolidayRunResult:
        """
        Run the pipeline for a specific holiday, due or not.

        Raises:
            HolidayNotFoundError: If holiday doesn't exist
        """
        holiday = self.holiday_service.get_by_id(holiday_id)
        return self.process_holiday(holiday, notify=notify)

    def run_scheduled(
        self,
        today: Optional[date] = None,
        notify: bool = True
    ) -> SchedulerRunResponse:
        """
        Process every holiday due today.

        Args:
            today: Run date (defaults to today)
            notify: Send reports to notification channels

        Returns:
            SchedulerRunResponse with one result per due holiday

        Raises:
            DatabaseError: If the holiday list can't be read
        """
        today = today or date.today()
        due = self.get_due_holidays(today)

        logger.info(
            "holiday_scheduler_run",
            today=today.isoformat(),
            lookahead_days=self.lookahead_days,
            due=len(due)
        )

        if not due:
            return SchedulerRunResponse(
                message=f"No holidays in the next {self.lookahead_days} days",
                run_date=today,
                lookahead_days=self.lookahead_days,
                processed_holidays=0,
            )

        if self.max_workers > 1 and len(due) > 1:
            with ThreadPoolExecutor(
                max_workers=self.max_workers,
                thread_name_prefix="holiday-report"
            ) as executor:
                results = list(executor.map(lambda h: self.process_holiday(h, notify), due))
        else:
            results = [self.process_holiday(h, notify) for h in due]

        failed = sum(1 for r in results if not r.succeeded)

        logger.info(
            "holiday_scheduler_complete",
            processed=len(results),
            failed=failed,
            statuses=[r.status for r in results]
        )

        return SchedulerRunResponse(
            message="Upcoming holiday check complete",
            run_date=today,
            lookahead_days=self.lookahead_days,
            processed_holidays=len(results),
            failed_holidays=failed,
            results=results,
        )


# Singleton instance
_holiday_report_service: Optional[HolidayReportService] = None


def get_holiday_report_service() -> HolidayReportService:
    """Get or create HolidayReportService instance."""
    global _holiday_report_service
    if _holiday_report_service is None:
        _holiday_report_service = HolidayReportService()
    return _holiday_report_service
