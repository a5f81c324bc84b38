"""
Fish Market Holiday Reports — Main Application

Serves the holiday report endpoints. A daily cron job calls
GET /api/holiday-reports/run (or runs scripts/run_holiday_scheduler.py).

Run locally:
    uvicorn main:app --reload
"""

from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from config import settings, check_connection
from config.logging_conf import configure_logging
from routes import holiday_reports_router

configure_logging()

logger = structlog.get_logger(__name__)

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log configuration and check Supabase on startup."""
    logger.info(
        "application_starting",
        environment=settings.environment,
        lookahead_days=settings.holiday_lookahead_days,
        holiday_orders_only=settings.holiday_orders_only,
        whatsapp_configured=settings.whatsapp_configured,
        email_configured=settings.email_configured
    )

    db_status = check_connection()
    if db_status["status"] == "healthy":
        logger.info("database_connected", **db_status["tables"])
    else:
        # Reports fail per holiday until the database is back
        logger.error("database_connection_failed", error=db_status.get("error"))

    yield

    logger.info("application_shutting_down")


app = FastAPI(
    title="Fish Market Holiday Reports",
    description="Holiday demand aggregation and stock reconciliation for a fishmonger",
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url=None,
)

# Admin frontend (Vite dev server and production build preview)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:4173"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(holiday_reports_router)


@app.get("/health")
async def health_check():
    """Database state and which notification channels are configured."""
    db_status = check_connection()

    return {
        "status": "healthy" if db_status["status"] == "healthy" else "degraded",
        "timestamp": datetime.utcnow().isoformat(),
        "environment": settings.environment,
        "database": db_status,
        "notifications": {
            "whatsapp": settings.whatsapp_configured,
            "email": settings.email_configured,
        },
    }


@app.get("/")
async def root():
    """API information."""
    return {
        "name": "Fish Market Holiday Reports API",
        "version": API_VERSION,
        "lookahead_days": settings.holiday_lookahead_days,
        "endpoints": {
            "run_scheduler": "/api/holiday-reports/run",
            "due_holidays": "/api/holiday-reports/due",
            "stock": "/api/holiday-reports/stock",
            "holiday_report": "/api/holiday-reports/{holiday_id}",
            "holiday_demand": "/api/holiday-reports/{holiday_id}/demand",
        },
    }


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Anything the routes didn't convert becomes a 500 in the standard error shape."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "details": str(exc) if settings.debug else None,
                "timestamp": datetime.utcnow().isoformat(),
            }
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.api_host, port=settings.api_port, reload=settings.debug)
