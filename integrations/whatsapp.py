"""
WhatsApp integration (GreenAPI) for sending holiday reports.

Sends formatted report messages to the admin's WhatsApp.
"""

from typing import Optional
import requests
import structlog

from config import settings
from exceptions import NotificationError
from integrations.report_messages import get_message, format_quantity
from models.report import HolidayReport, ReportStatus

logger = structlog.get_logger(__name__)

GREENAPI_URL = "https://api.green-api.com"


class WhatsAppError(NotificationError):
    """GreenAPI error."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(channel="whatsapp", message=message, details=details)


def get_whatsapp_config() -> tuple[Optional[str], Optional[str], Optional[str]]:
    """
    Get GreenAPI configuration from settings.

    Returns:
        tuple: (instance_id, api_token, admin_phone)
    """
    instance_id = settings.greenapi_instance_id
    api_token = settings.greenapi_token
    phone = settings.admin_phone

    if not (instance_id and api_token and phone):
        logger.warning(
            "whatsapp_not_configured",
            has_instance=bool(instance_id),
            has_token=bool(api_token),
            has_phone=bool(phone)
        )

    return instance_id, api_token, phone


def format_report_message(report: HolidayReport, lang: Optional[str] = None) -> str:
    """
    Format a holiday report as a WhatsApp message.

    Args:
        report: Report to format
        lang: Message language (defaults to settings)

    Returns:
        Formatted message string
    """
    lines = [
        get_message(
            "whatsapp_header",
            lang,
            store=settings.store_name,
            holiday=report.holiday_name,
            start_date=report.start_date.strftime("%d.%m.%Y"),
            end_date=report.end_date.strftime("%d.%m.%Y"),
            total_orders=report.total_orders,
        )
    ]

    if report.status == ReportStatus.REPORT_GENERATED:
        lines.append(get_message("whatsapp_deficits_title", lang, count=report.total_deficit_items))
        for entry in report.deficit_entries:
            lines.append(get_message(
                "whatsapp_deficit_line",
                lang,
                fish=entry.product_name,
                demand=format_quantity(entry.total_demand, entry.unit, lang),
                stock=format_quantity(entry.current_stock, entry.unit, lang),
                deficit=format_quantity(entry.deficit, entry.unit, lang),
            ))
    else:
        lines.append(get_message(
            "whatsapp_status_line",
            lang,
            status=get_message(f"status_{report.status}", lang)
        ))

    lines.append(get_message("whatsapp_footer", lang, store=settings.store_name))

    return "\n".join(lines)


def send_message(message: str, phone: Optional[str] = None) -> bool:
    """
    Send message over WhatsApp.

    Args:
        message: Message text to send
        phone: Recipient (defaults to admin phone)

    Returns:
        True if sent, False if WhatsApp isn't configured

    Raises:
        WhatsAppError: If send fails
    """
    instance_id, api_token, admin_phone = get_whatsapp_config()
    phone = phone or admin_phone

    if not instance_id or not api_token or not phone:
        logger.warning("whatsapp_not_configured_skipping_send")
        return False

    url = f"{GREENAPI_URL}/waInstance{instance_id}/sendMessage/{api_token}"

    payload = {
        "chatId": f"{phone}@c.us",
        "message": message,
    }

    try:
        logger.info("sending_whatsapp_message", phone=phone[-4:])

        response = requests.post(url, json=payload, timeout=10)
        response.raise_for_status()

        result = response.json()

        if not result.get("idMessage"):
            logger.error("whatsapp_api_error", response=result)
            raise WhatsAppError("GreenAPI did not accept the message", details={"response": result})

        logger.info("whatsapp_message_sent", message_id=result.get("idMessage"))
        return True

    except requests.exceptions.RequestException as e:
        logger.error("whatsapp_request_failed", error=str(e))
        raise WhatsAppError(f"Failed to send WhatsApp message: {str(e)}")


def send_report_to_whatsapp(report: HolidayReport) -> bool:
    """
    Send holiday report to the admin's WhatsApp.

    Raises:
        WhatsAppError: If send fails
    """
    message = format_report_message(report)
    return send_message(message)
