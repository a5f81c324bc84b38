"""
Reads current fish stock from `fish_types`.

Stock is always stored in kg (`available_kg`).
"""

from typing import Iterable, Optional
import structlog

from config import get_supabase_client
from models.product import StockRecord
from services.unit_service import normalize_name
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)


class StockService:
    """
    Stock data access.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "fish_types"

    def get_all(self) -> list[StockRecord]:
        """
        Get stock for every fish in the catalog, active or not.

        Returns:
            List of stock records ordered by name
        """
        logger.debug("getting_stock")

        try:
            result = (
                self.db.table(self.table)
                .select("name, available_kg, is_active")
                .order("name")
                .execute()
            )

            records = [StockRecord.from_row(row) for row in result.data if row.get("name")]

            logger.info("stock_retrieved", count=len(records))
            return records

        except Exception as e:
            logger.error("get_stock_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_stock(
        self,
        product_names: Optional[Iterable[str]] = None
    ) -> dict[str, StockRecord]:
        """
        Get stock keyed by fish name.

        Args:
            product_names: Restrict to these fish (matched ignoring case);
                all fish when omitted

        Returns:
            Dict of fish name -> StockRecord. Unknown fish are absent.
        """
        records = self.get_all()

        if product_names is not None:
            wanted = {normalize_name(name) for name in product_names}
            records = [r for r in records if normalize_name(r.product_name) in wanted]

        return {record.product_name: record for record in records}


# Singleton instance
_stock_service: Optional[StockService] = None


def get_stock_service() -> StockService:
    """Get or create StockService instance."""
    global _stock_service
    if _stock_service is None:
        _stock_service = StockService()
    return _stock_service
