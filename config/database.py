"""
Supabase connection.

The engine only reads three tables: `holidays`, `orders` and
`fish_types`. They are written by the storefront and the admin screens.
"""

from functools import lru_cache

from supabase import create_client, Client
import structlog

from config.settings import settings
from exceptions import ExternalServiceError

logger = structlog.get_logger(__name__)

REPORT_TABLES = ("holidays", "orders", "fish_types")


@lru_cache()
def get_supabase_client() -> Client:
    """
    Shared Supabase client.

    Created on first use; call reset_connection() to build a new one.

    Raises:
        ExternalServiceError: If the client can't be created
    """
    logger.info("connecting_to_supabase", url=settings.supabase_url[:30] + "...")

    try:
        client = create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logger.error(
            "supabase_connection_failed",
            error=str(e),
            error_type=type(e).__name__
        )
        raise ExternalServiceError("supabase", f"Failed to connect to Supabase: {e}") from e

    logger.info("supabase_connected")
    return client


def check_connection() -> dict:
    """
    Row counts for the tables reports are built from.

    Returns:
        {"status": "healthy", "tables": {name: count}} or
        {"status": "unhealthy", "error": message}
    """
    try:
        client = get_supabase_client()
        counts = {
            table: client.table(table).select("id", count="exact").limit(1).execute().count
            for table in REPORT_TABLES
        }
    except Exception as e:
        logger.warning("database_check_failed", error=str(e))
        return {"status": "unhealthy", "error": str(e)}

    return {"status": "healthy", "tables": counts}


def reset_connection():
    """Drop the cached client, e.g. after rotating keys."""
    get_supabase_client.cache_clear()
    logger.info("database_connection_reset")
