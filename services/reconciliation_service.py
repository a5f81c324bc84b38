"""
Inventory reconciliation — Core business logic.

Compares aggregated holiday demand with current stock, per fish, in the
fish's native unit:

- Weight-sold fish: stock kg vs demand kg, full precision.
- Unit-sold fish: stock kg is converted to whole fish with the same
  average-weight rule used everywhere else, always rounding down.

deficit = max(0, demand - stock). Fish with a deficit are reported,
fish with enough stock are listed as sufficient, inactive fish are
excluded. A fish with no stock record counts as zero stock.
"""

from decimal import Decimal
from typing import Iterable, Mapping, Optional

import structlog

from models.product import StockLevel, StockRecord
from models.report import (
    AggregatedDemand,
    DeficitEntry,
    ProductDemand,
    ReconciliationResult,
    SufficientEntry,
)
from services.unit_service import native_unit, normalize_name, stock_in_native_unit

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")


def _find_stock(
    stock: Mapping[str, StockRecord],
    product_name: str
) -> Optional[StockRecord]:
    """Look up by exact name, then ignoring case and extra spaces."""
    record = stock.get(product_name)
    if record is not None:
        return record

    wanted = normalize_name(product_name)
    for name, candidate in stock.items():
        if normalize_name(name) == wanted:
            return candidate
    return None


def compare_product(item: ProductDemand, available_weight_kg) -> SufficientEntry | DeficitEntry:
    """
    Compare one fish's demand against its stock.

    Args:
        item: Aggregated demand for the fish
        available_weight_kg: Stock on hand in kg

    Returns:
        DeficitEntry if demand exceeds stock, else SufficientEntry
    """
    available = max(ZERO, Decimal(str(available_weight_kg)))
    unit = native_unit(item.product_name)
    current_stock = stock_in_native_unit(available, item.product_name, item.size_tag)
    deficit = max(ZERO, item.total_quantity - current_stock)

    entry_cls = DeficitEntry if deficit > 0 else SufficientEntry
    return entry_cls(
        product_name=item.product_name,
        total_demand=item.total_quantity,
        unit=unit,
        current_stock=current_stock,
        deficit=deficit,
    )


def reconcile(
    demand: AggregatedDemand,
    stock: Mapping[str, StockRecord]
) -> ReconciliationResult:
    """
    Reconcile aggregated demand against a stock snapshot.

    Args:
        demand: Output of aggregate_demand()
        stock: Stock records keyed by fish name

    Returns:
        ReconciliationResult with deficits, sufficient and excluded fish
    """
    deficits: list[DeficitEntry] = []
    sufficient: list[SufficientEntry] = []
    excluded: list[str] = []

    for name, item in demand.products.items():
        record = _find_stock(stock, name)

        if record is not None and not record.active:
            excluded.append(name)
            logger.info("inactive_product_excluded", product_name=name)
            continue

        if record is None:
            logger.warning("stock_record_missing", product_name=name)
            available = ZERO
        else:
            available = record.available_weight_kg

        entry = compare_product(item, available)
        if isinstance(entry, DeficitEntry):
            deficits.append(entry)
        else:
            sufficient.append(entry)

    logger.info(
        "reconciliation_complete",
        products=len(demand.products),
        deficits=len(deficits),
        sufficient=len(sufficient),
        excluded=len(excluded)
    )

    return ReconciliationResult(
        deficits=tuple(deficits),
        sufficient=tuple(sufficient),
        excluded=tuple(excluded),
    )


def stock_levels(records: Iterable[StockRecord]) -> list[StockLevel]:
    """
    Current stock of active fish in native units, by name.

    Unit-sold fish use the default size bucket.
    """
    levels = [
        StockLevel(
            product_name=record.product_name,
            unit=native_unit(record.product_name),
            quantity=stock_in_native_unit(
                max(ZERO, record.available_weight_kg),
                record.product_name
            ),
        )
        for record in records
        if record.active
    ]
    levels.sort(key=lambda level: level.product_name)
    return levels
