"""
Reads holidays from the `holidays` table.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.holiday import Holiday
from exceptions import HolidayNotFoundError, DatabaseError

logger = structlog.get_logger(__name__)

HOLIDAY_COLUMNS = "id, name, start_date, end_date, active"


class HolidayService:
    """
    Holiday data access.

    Holidays are managed from the admin screens; this service only reads.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "holidays"

    def get_all(self, active_only: bool = False) -> list[Holiday]:
        """
        Get all holidays ordered by start date.

        Args:
            active_only: Only return holidays flagged active

        Returns:
            List of holidays
        """
        logger.debug("getting_holidays", active_only=active_only)

        try:
            query = self.db.table(self.table).select(HOLIDAY_COLUMNS)
            if active_only:
                query = query.eq("active", True)
            result = query.order("start_date").execute()

            holidays = [Holiday(**row) for row in result.data]

            logger.info("holidays_retrieved", count=len(holidays))
            return holidays

        except Exception as e:
            logger.error("get_holidays_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, holiday_id: str) -> Holiday:
        """
        Get a single holiday.

        Raises:
            HolidayNotFoundError: If holiday doesn't exist
        """
        logger.debug("getting_holiday", holiday_id=holiday_id)

        try:
            result = (
                self.db.table(self.table)
                .select(HOLIDAY_COLUMNS)
                .eq("id", holiday_id)
                .limit(1)
                .execute()
            )

            if not result.data:
                raise HolidayNotFoundError(holiday_id)

            return Holiday(**result.data[0])

        except HolidayNotFoundError:
            raise
        except Exception as e:
            logger.error("get_holiday_failed", holiday_id=holiday_id, error=str(e))
            raise DatabaseError("select", str(e))


# Singleton instance
_holiday_service: Optional[HolidayService] = None


def get_holiday_service() -> HolidayService:
    """Get or create HolidayService instance."""
    global _holiday_service
    if _holiday_service is None:
        _holiday_service = HolidayService()
    return _holiday_service
