"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # SUPABASE
    # ===================
    supabase_url: str = Field(
        ...,
        description="Supabase project URL"
    )
    supabase_key: str = Field(
        ...,
        description="Supabase anon/public key"
    )

    # ===================
    # WHATSAPP (GreenAPI)
    # ===================
    greenapi_instance_id: Optional[str] = Field(
        None,
        description="GreenAPI WhatsApp instance id"
    )
    greenapi_token: Optional[str] = Field(
        None,
        description="GreenAPI API token"
    )
    admin_phone: Optional[str] = Field(
        None,
        description="Admin phone number (international format, no +) for reports"
    )

    # ===================
    # EMAIL (SMTP)
    # ===================
    smtp_host: str = Field(
        default="smtp.gmail.com",
        description="SMTP server host"
    )
    smtp_port: int = Field(
        default=587,
        ge=1,
        le=65535,
        description="SMTP server port (STARTTLS)"
    )
    email_user: Optional[str] = Field(
        None,
        description="SMTP username, also used as sender address"
    )
    email_pass: Optional[str] = Field(
        None,
        description="SMTP password (Gmail app password)"
    )
    admin_email: Optional[str] = Field(
        None,
        description="Recipient of holiday supplier reports"
    )
    store_name: str = Field(
        default="דגי בקעת אונו",
        description="Store name shown in reports"
    )

    # ===================
    # HOLIDAY REPORTS
    # ===================
    holiday_lookahead_days: int = Field(
        default=7,
        ge=0,
        le=60,
        description="Days before a holiday starts during which its report is due"
    )
    holiday_orders_only: bool = Field(
        default=False,
        description="Only count orders flagged is_holiday_order"
    )
    holiday_report_max_workers: int = Field(
        default=1,
        ge=1,
        le=16,
        description="Holidays processed in parallel per run"
    )
    notify_on_all_statuses: bool = Field(
        default=False,
        description="Also notify for no_orders / sufficient_stock reports"
    )
    report_language: str = Field(
        default="he",
        pattern="^(he|en)$",
        description="Language for report messages"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def whatsapp_configured(self) -> bool:
        """Check if WhatsApp delivery is properly configured."""
        return bool(self.greenapi_instance_id and self.greenapi_token and self.admin_phone)

    @property
    def email_configured(self) -> bool:
        """Check if email delivery is properly configured."""
        return bool(self.email_user and self.email_pass and self.admin_email)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
