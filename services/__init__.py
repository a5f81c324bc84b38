"""
Business logic services.

Each service handles one domain area. The calculation services
(unit, demand, reconciliation, report, schedule) are pure functions;
the data services read Supabase.
"""

from services.holiday_service import HolidayService, get_holiday_service
from services.order_service import OrderService, get_order_service
from services.stock_service import StockService, get_stock_service
from services.notification_service import NotificationService, get_notification_service
from services.holiday_report_service import HolidayReportService, get_holiday_report_service

__all__ = [
    "HolidayService",
    "get_holiday_service",
    "OrderService",
    "get_order_service",
    "StockService",
    "get_stock_service",
    "NotificationService",
    "get_notification_service",
    "HolidayReportService",
    "get_holiday_report_service",
]
