"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema, FrozenSchema
from models.product import Unit, FishSize, StockRecord, StockLevel
from models.order import OrderLine, Order
from models.holiday import Holiday, DueHolidaysResponse
from models.report import (
    ReportStatus,
    ProductDemand,
    AggregatedDemand,
    DemandSummaryRow,
    DemandSummaryResponse,
    StockComparison,
    DeficitEntry,
    SufficientEntry,
    ReconciliationResult,
    NoOrdersReport,
    SufficientStockReport,
    GeneratedReport,
    HolidayReport,
    NotificationOutcome,
    HolidayRunResult,
    SchedulerRunResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "FrozenSchema",

    # Product
    "Unit",
    "FishSize",
    "StockRecord",
    "StockLevel",

    # Order
    "OrderLine",
    "Order",

    # Holiday
    "Holiday",
    "DueHolidaysResponse",

    # Report
    "ReportStatus",
    "ProductDemand",
    "AggregatedDemand",
    "DemandSummaryRow",
    "DemandSummaryResponse",
    "StockComparison",
    "DeficitEntry",
    "SufficientEntry",
    "ReconciliationResult",
    "NoOrdersReport",
    "SufficientStockReport",
    "GeneratedReport",
    "HolidayReport",
    "NotificationOutcome",
    "HolidayRunResult",
    "SchedulerRunResponse",
]
