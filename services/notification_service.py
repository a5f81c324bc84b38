"""
Notification service — delivers holiday reports.

Each channel renders the report itself (WhatsApp text, HTML email).
A failing channel is recorded in its outcome and never affects the
report or the other channels.
"""

from typing import Callable, Optional
import structlog

from config import settings
from exceptions import NotificationError
from integrations.email_sender import send_report_email
from integrations.whatsapp import send_report_to_whatsapp
from models.report import HolidayReport, NotificationOutcome, ReportStatus

logger = structlog.get_logger(__name__)

Sender = Callable[[HolidayReport], bool]


class NotificationService:
    """
    Report sink.

    Sends reports over every configured channel. By default only
    report_generated reports are sent; set notify_on_all_statuses to
    also send "no orders" / "stock sufficient" notices.
    """

    def __init__(self, channels: Optional[dict[str, Sender]] = None):
        self.channels = channels or {
            "whatsapp": send_report_to_whatsapp,
            "email": send_report_email,
        }
        self.notify_on_all_statuses = settings.notify_on_all_statuses

    def should_notify(self, report: HolidayReport) -> bool:
        """Whether a report of this status is worth sending."""
        return self.notify_on_all_statuses or report.status == ReportStatus.REPORT_GENERATED

    def dispatch(self, report: HolidayReport) -> list[NotificationOutcome]:
        """
        Send a report over all channels.

        Args:
            report: Report to deliver

        Returns:
            One outcome per channel
        """
        if not self.should_notify(report):
            logger.info(
                "notification_not_needed",
                holiday=report.holiday_name,
                status=report.status
            )
            return [
                NotificationOutcome(channel=name, skipped=True)
                for name in self.channels
            ]

        outcomes = []
        for name, sender in self.channels.items():
            outcomes.append(self._send(name, sender, report))
        return outcomes

    def _send(self, name: str, sender: Sender, report: HolidayReport) -> NotificationOutcome:
        try:
            sent = sender(report)
            if sent:
                logger.info("report_sent", channel=name, holiday=report.holiday_name)
            return NotificationOutcome(channel=name, sent=sent, skipped=not sent)

        except NotificationError as e:
            logger.warning(
                "report_send_failed",
                channel=name,
                holiday=report.holiday_name,
                error=e.message
            )
            return NotificationOutcome(channel=name, error=e.message)

        except Exception as e:
            logger.error(
                "report_send_unexpected_error",
                channel=name,
                holiday=report.holiday_name,
                error=str(e),
                error_type=type(e).__name__
            )
            return NotificationOutcome(channel=name, error=str(e))


# Singleton instance
_notification_service: Optional[NotificationService] = None


def get_notification_service() -> NotificationService:
    """Get or create NotificationService instance."""
    global _notification_service
    if _notification_service is None:
        _notification_service = NotificationService()
    return _notification_service
