"""
Holiday supplier report builder.

Turns a reconciliation into the report object handed to notification
channels. The status is decided here, once:

- no_orders: no qualifying orders at all
- sufficient_stock: orders exist, nothing is short
- report_generated: at least one fish is short
"""

from datetime import datetime
from typing import Optional

import structlog

from models.holiday import Holiday
from models.report import (
    AggregatedDemand,
    DeficitEntry,
    GeneratedReport,
    HolidayReport,
    NoOrdersReport,
    ReconciliationResult,
    SufficientStockReport,
)

logger = structlog.get_logger(__name__)


def sort_deficits(entries) -> list[DeficitEntry]:
    """Largest deficit first; equal deficits by fish name."""
    return sorted(entries, key=lambda e: (-e.deficit, e.product_name))


def build_report(
    holiday: Holiday,
    demand: AggregatedDemand,
    reconciliation: ReconciliationResult,
    generated_at: Optional[datetime] = None,
) -> HolidayReport:
    """
    Build the holiday report.

    Args:
        holiday: Holiday the orders belong to
        demand: Aggregated demand (provides order count and ids)
        reconciliation: Deficit / sufficient split
        generated_at: Report timestamp (defaults to now, UTC)

    Returns:
        NoOrdersReport, SufficientStockReport or GeneratedReport
    """
    common = dict(
        holiday_id=holiday.id,
        holiday_name=holiday.name,
        start_date=holiday.start_date,
        end_date=holiday.end_date,
        total_orders=demand.order_count,
        order_ids=demand.order_ids,
        sufficient=tuple(sorted(reconciliation.sufficient, key=lambda e: e.product_name)),
        excluded=reconciliation.excluded,
        generated_at=generated_at or datetime.utcnow(),
    )

    if demand.order_count == 0:
        report = NoOrdersReport(**common)
    elif not reconciliation.deficits:
        report = SufficientStockReport(**common)
    else:
        report = GeneratedReport(
            deficit_entries=tuple(sort_deficits(reconciliation.deficits)),
            **common
        )

    logger.info(
        "holiday_report_built",
        holiday=holiday.name,
        status=report.status,
        total_orders=report.total_orders,
        deficit_items=len(reconciliation.deficits)
    )

    return report
