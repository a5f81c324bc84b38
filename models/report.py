"""
Holiday demand and supplier report schemas.

The report handed to notification channels is a tagged union on
`status`: NoOrdersReport | SufficientStockReport | GeneratedReport.
Consumers dispatch on `status` and never re-derive it.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from models.base import BaseSchema, FrozenSchema
from models.product import FishSize, Unit


class ReportStatus(str, Enum):
    """Outcome of a holiday reconciliation."""
    NO_ORDERS = "no_orders"
    SUFFICIENT_STOCK = "sufficient_stock"
    REPORT_GENERATED = "report_generated"


# ===================
# DEMAND
# ===================

class ProductDemand(FrozenSchema):
    """Total demand for one fish across a holiday's orders."""

    product_name: str
    total_quantity: Decimal = Field(..., description="Sum of line quantities, native unit")
    quantity_is_unit_based: bool = Field(
        ...,
        description="True when the fish is counted in units (its native unit)"
    )
    size_tag: Optional[FishSize] = Field(
        None,
        description="Set only when every line for this fish has the same size"
    )
    order_count: int = Field(..., ge=0, description="Orders containing this fish")
    line_count: int = Field(..., ge=0, description="Order lines for this fish")


class AggregatedDemand(FrozenSchema):
    """
    Demand per fish for a set of orders.

    A fish nobody ordered is absent from `products`.
    """

    products: dict[str, ProductDemand] = Field(default_factory=dict)
    order_count: int = Field(default=0, ge=0, description="Orders considered")
    order_ids: tuple[str, ...] = Field(
        default=(),
        description="Orders that contributed at least one valid line"
    )

    @property
    def is_empty(self) -> bool:
        return not self.products


class DemandSummaryRow(BaseSchema):
    """One row of the holiday orders report."""

    product_name: str
    total_ordered: Decimal
    unit: Unit
    order_count: int


class DemandSummaryResponse(BaseSchema):
    """What customers ordered for a holiday, before looking at stock."""

    holiday_id: str
    holiday_name: str
    start_date: date
    end_date: date
    total_orders: int
    rows: list[DemandSummaryRow]


# ===================
# RECONCILIATION
# ===================

class StockComparison(FrozenSchema):
    """Demand against stock for one fish, both in native unit."""

    product_name: str
    total_demand: Decimal
    unit: Unit
    current_stock: Decimal
    deficit: Decimal = Field(..., ge=0)


class DeficitEntry(StockComparison):
    """A fish whose demand exceeds stock."""


class SufficientEntry(StockComparison):
    """A fish with enough stock (deficit is 0)."""


class ReconciliationResult(FrozenSchema):
    """Result of comparing aggregated demand against stock."""

    deficits: tuple[DeficitEntry, ...] = ()
    sufficient: tuple[SufficientEntry, ...] = ()
    excluded: tuple[str, ...] = Field(
        default=(),
        description="Demanded fish skipped because they are inactive"
    )


# ===================
# REPORT (tagged union)
# ===================

class _HolidayReportBase(FrozenSchema):
    holiday_id: str
    holiday_name: str
    start_date: date
    end_date: date
    total_orders: int = Field(..., ge=0)
    order_ids: tuple[str, ...] = ()
    sufficient: tuple[SufficientEntry, ...] = ()
    excluded: tuple[str, ...] = ()
    generated_at: datetime


class NoOrdersReport(_HolidayReportBase):
    """No qualifying orders for the holiday."""

    status: Literal["no_orders"] = "no_orders"


class SufficientStockReport(_HolidayReportBase):
    """Orders exist and stock covers all of them."""

    status: Literal["sufficient_stock"] = "sufficient_stock"


class GeneratedReport(_HolidayReportBase):
    """At least one fish is short; entries sorted by deficit, largest first."""

    status: Literal["report_generated"] = "report_generated"
    deficit_entries: tuple[DeficitEntry, ...] = Field(..., min_length=1)

    @property
    def total_deficit_items(self) -> int:
        return len(self.deficit_entries)


HolidayReport = Annotated[
    Union[NoOrdersReport, SufficientStockReport, GeneratedReport],
    Field(discriminator="status"),
]


# ===================
# PIPELINE RUNS
# ===================

class NotificationOutcome(BaseSchema):
    """Delivery result for one channel."""

    channel: str
    sent: bool = False
    skipped: bool = False
    error: Optional[str] = None


class HolidayRunResult(BaseSchema):
    """Outcome of one holiday's pipeline run."""

    holiday_id: str
    holiday_name: str
    start_date: Optional[date] = None
    succeeded: bool
    report: Optional[HolidayReport] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    notifications: list[NotificationOutcome] = Field(default_factory=list)

    @property
    def status(self) -> str:
        """Report status, or "error" when the run failed."""
        if not self.succeeded or self.report is None:
            return "error"
        return self.report.status


class SchedulerRunResponse(BaseSchema):
    """Result of a scheduled run over all due holidays."""

    message: str
    run_date: date
    lookahead_days: int
    processed_holidays: int
    failed_holidays: int = 0
    results: list[HolidayRunResult] = Field(default_factory=list)
