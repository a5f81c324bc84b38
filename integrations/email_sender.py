"""
Email integration (SMTP) for sending holiday reports.

Renders the report as an RTL HTML table and sends it to the admin.
"""

import smtplib
from email.message import EmailMessage
from html import escape
from typing import Optional
import structlog

from config import settings
from exceptions import NotificationError
from integrations.report_messages import get_message, format_quantity, get_lang
from models.report import HolidayReport, ReportStatus
from services.unit_service import weight_display_text

logger = structlog.get_logger(__name__)


class EmailError(NotificationError):
    """SMTP error."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(channel="email", message=message, details=details)


def render_subject(report: HolidayReport, lang: Optional[str] = None) -> str:
    """Email subject line for a report."""
    if report.status == ReportStatus.REPORT_GENERATED:
        return get_message("email_subject", lang, holiday=report.holiday_name, count=report.total_deficit_items)
    return get_message(
        "email_subject_status",
        lang,
        holiday=report.holiday_name,
        status=get_message(f"status_{report.status}", lang)
    )


def render_report_html(report: HolidayReport, lang: Optional[str] = None) -> str:
    """
    Render a report as HTML.

    Args:
        report: Report to render
        lang: Language (defaults to settings)

    Returns:
        HTML document body
    """
    lang = get_lang(lang)
    direction = "rtl" if lang == "he" else "ltr"
    align = "right" if lang == "he" else "left"
    cell = 'style="padding: 8px; border: 1px solid #ddd; text-align: center;"'

    parts = [
        f'<div style="font-family: Arial, sans-serif; direction: {direction}; text-align: {align};">',
        f'<h2 style="color: #1f2937;">{escape(get_message("email_title", lang, holiday=report.holiday_name))}</h2>',
        f'<p><strong>{get_message("email_holiday_date", lang)}:</strong> {report.start_date.strftime("%d.%m.%Y")}</p>',
        f'<p><strong>{get_message("email_generated_at", lang)}:</strong> {report.generated_at.strftime("%d.%m.%Y")}</p>',
    ]

    if report.status == ReportStatus.REPORT_GENERATED:
        parts.append(
            f'<h3 style="color: #dc2626;">'
            f'{get_message("email_deficits_title", lang, count=report.total_deficit_items)}</h3>'
        )
        header = "".join(
            f'<th style="padding: 12px; border: 1px solid #ddd;">{get_message(key, lang)}</th>'
            for key in ("email_col_fish", "email_col_weight", "email_col_demand",
                        "email_col_stock", "email_col_deficit")
        )
        rows = "".join(
            "<tr>"
            f'<td style="padding: 8px; border: 1px solid #ddd;">{escape(entry.product_name)}</td>'
            f"<td {cell}>{escape(weight_display_text(entry.product_name))}</td>"
            f"<td {cell}>{format_quantity(entry.total_demand, entry.unit, lang)}</td>"
            f"<td {cell}>{format_quantity(entry.current_stock, entry.unit, lang)}</td>"
            f'<td style="padding: 8px; border: 1px solid #ddd; text-align: center; color: #dc2626;">'
            f"{format_quantity(entry.deficit, entry.unit, lang)}</td>"
            "</tr>"
            for entry in report.deficit_entries
        )
        parts.append(
            '<table style="width: 100%; border-collapse: collapse; margin-top: 16px;">'
            f'<thead><tr style="background-color: #f3f4f6;">{header}</tr></thead>'
            f"<tbody>{rows}</tbody></table>"
        )
    else:
        parts.append(f"<p>{escape(get_message(f'status_{report.status}', lang))}</p>")

    parts.append(
        f'<p style="margin-top: 24px; color: #6b7280; font-size: 14px;">'
        f'{get_message("email_footer", lang, days=settings.holiday_lookahead_days)}</p>'
    )
    parts.append("</div>")

    return "\n".join(parts)


def send_email(subject: str, html: str, to: Optional[str] = None) -> bool:
    """
    Send an HTML email.

    Args:
        subject: Subject line
        html: HTML body
        to: Recipient (defaults to admin email)

    Returns:
        True if sent, False if email isn't configured

    Raises:
        EmailError: If send fails
    """
    to = to or settings.admin_email

    if not settings.email_user or not settings.email_pass or not to:
        logger.warning(
            "email_not_configured_skipping_send",
            has_user=bool(settings.email_user),
            has_recipient=bool(to)
        )
        return False

    message = EmailMessage()
    message["Subject"] = subject
    message["From"] = f'"{settings.store_name}" <{settings.email_user}>'
    message["To"] = to
    message.set_content(subject)
    message.add_alternative(html, subtype="html")

    try:
        logger.info("sending_email", to=to, subject=subject)

        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=15) as smtp:
            smtp.starttls()
            smtp.login(settings.email_user, settings.email_pass)
            smtp.send_message(message)

        logger.info("email_sent", to=to)
        return True

    except (smtplib.SMTPException, OSError) as e:
        logger.error("email_send_failed", error=str(e), error_type=type(e).__name__)
        raise EmailError(f"Failed to send email: {str(e)}")


def send_report_email(report: HolidayReport) -> bool:
    """
    Email a holiday report to the admin.

    Raises:
        EmailError: If send fails
    """
    return send_email(render_subject(report), render_report_html(report))
