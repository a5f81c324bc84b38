"""
Reads customer orders for a delivery-date window.
"""

from datetime import date
from typing import Optional
import structlog

from config import get_supabase_client
from models.order import Order
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)

ORDER_COLUMNS = "id, customer_name, delivery_date, is_holiday_order, order_items"

# Supabase caps responses at 1000 rows. Pages need a total order:
# (delivery_date, id).
PAGE_SIZE = 1000


class OrderService:
    """
    Order data access.

    Orders are written by the storefront; this service only reads.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "orders"

    def get_orders_for_window(
        self,
        start_date: date,
        end_date: date,
        holiday_orders_only: bool = False,
    ) -> list[Order]:
        """
        Get orders delivered within [start_date, end_date], inclusive.

        Args:
            start_date: First delivery date
            end_date: Last delivery date
            holiday_orders_only: Only orders flagged is_holiday_order

        Returns:
            Orders with parsed lines, ordered by delivery date
        """
        logger.info(
            "getting_orders_for_window",
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
            holiday_orders_only=holiday_orders_only
        )

        rows: list[dict] = []
        offset = 0

        try:
            while True:
                query = (
                    self.db.table(self.table)
                    .select(ORDER_COLUMNS)
                    .gte("delivery_date", start_date.isoformat())
                    .lte("delivery_date", end_date.isoformat())
                )
                if holiday_orders_only:
                    query = query.eq("is_holiday_order", True)

                result = (
                    query.order("delivery_date")
                    .order("id")
                    .range(offset, offset + PAGE_SIZE - 1)
                    .execute()
                )

                batch = result.data or []
                rows.extend(batch)
                if len(batch) < PAGE_SIZE:
                    break
                offset += PAGE_SIZE

        except Exception as e:
            logger.error("get_orders_failed", error=str(e))
            raise DatabaseError("select", str(e))

        orders = [Order.from_row(row) for row in rows]

        logger.info("orders_retrieved", count=len(orders))
        return orders


# Singleton instance
_order_service: Optional[OrderService] = None


def get_order_service() -> OrderService:
    """Get or create OrderService instance."""
    global _order_service
    if _order_service is None:
        _order_service = OrderService()
    return _order_service
