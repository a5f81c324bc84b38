"""
Demand aggregation for holiday orders.

Flattens the lines of already-filtered orders and sums the requested
quantity per fish, in the fish's native unit. Lines already in that
unit are summed as recorded; the storefront's kg lines for unit-sold
fish are turned back into whole fish first.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable

import structlog

from models.order import Order
from models.product import Unit
from models.report import AggregatedDemand, DemandSummaryRow, ProductDemand
from services.unit_service import native_unit, normalize_name, ordered_in_native_unit

logger = structlog.get_logger(__name__)


def aggregate_demand(orders: Iterable[Order]) -> AggregatedDemand:
    """
    Sum order-line quantities per fish, in the fish's native unit.

    Lines with no fish name or a missing / non-positive quantity are
    skipped: orders are typed in by customers and partial data must not
    block the report. Spelling variants of one fish ("Salmon", "salmon")
    are summed together under the first spelling seen. Lines recorded in
    the other unit (kg for a unit-sold fish) are converted with the same
    average weight used for stock.

    Args:
        orders: Orders already restricted to the holiday window

    Returns:
        AggregatedDemand. Fish with no valid line are absent.
    """
    display_names: dict[str, str] = {}
    totals: dict[str, Decimal] = {}
    sizes: dict[str, set] = defaultdict(set)
    orders_by_product: dict[str, set[str]] = defaultdict(set)
    lines_by_product: dict[str, int] = defaultdict(int)

    order_ids: list[str] = []
    seen_orders: set[str] = set()
    order_count = 0
    skipped_lines = 0

    for order in orders:
        order_count += 1
        contributed = False

        for line in order.lines:
            name = line.product_name
            quantity = line.requested_quantity

            if not name or quantity is None or quantity <= 0:
                skipped_lines += 1
                logger.debug(
                    "order_line_skipped",
                    order_id=order.id,
                    product_name=name,
                    quantity=str(quantity) if quantity is not None else None
                )
                continue

            key = normalize_name(name)
            if key not in totals:
                display_names[key] = name
                totals[key] = Decimal("0")

            native = ordered_in_native_unit(
                quantity, line.quantity_is_unit_based, name, line.size_tag
            )
            if native != quantity:
                logger.debug(
                    "order_line_converted",
                    order_id=order.id,
                    product_name=name,
                    recorded=str(quantity),
                    native=str(native)
                )

            totals[key] += native
            sizes[key].add(line.size_tag)
            orders_by_product[key].add(order.id)
            lines_by_product[key] += 1
            contributed = True

        if contributed and order.id not in seen_orders:
            seen_orders.add(order.id)
            order_ids.append(order.id)

    products = {}
    for key, total in totals.items():
        name = display_names[key]
        products[name] = ProductDemand(
            product_name=name,
            total_quantity=total,
            quantity_is_unit_based=native_unit(name) == Unit.UNITS,
            size_tag=next(iter(sizes[key])) if len(sizes[key]) == 1 else None,
            order_count=len(orders_by_product[key]),
            line_count=lines_by_product[key],
        )

    logger.info(
        "demand_aggregated",
        orders=order_count,
        products=len(products),
        skipped_lines=skipped_lines
    )

    return AggregatedDemand(
        products=products,
        order_count=order_count,
        order_ids=tuple(order_ids),
    )


def summarize_demand(demand: AggregatedDemand) -> list[DemandSummaryRow]:
    """
    Holiday orders view: what was ordered, largest quantity first.

    Ties are broken by fish name.
    """
    rows = [
        DemandSummaryRow(
            product_name=item.product_name,
            total_ordered=item.total_quantity,
            unit=native_unit(item.product_name),
            order_count=item.order_count,
        )
        for item in demand.products.values()
    ]
    rows.sort(key=lambda r: (-r.total_ordered, r.product_name))
    return rows
