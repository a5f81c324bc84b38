"""
Unit tests for report delivery: channel dispatch, WhatsApp text and email HTML.

Run: pytest tests/unit/test_notification_service.py -v
"""

from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
import requests

from exceptions import NotificationError
from integrations.email_sender import render_report_html, render_subject, send_email
from integrations.whatsapp import WhatsAppError, format_report_message, send_message
from models.report import ReportStatus
from services.demand_service import aggregate_demand
from services.notification_service import NotificationService
from services.reconciliation_service import reconcile
from services.report_service import build_report

from tests.factories import HolidayFactory, OrderFactory, StockFactory


def _generated_report():
    holiday = HolidayFactory.build(name="Rosh Hashana")
    demand = aggregate_demand([
        OrderFactory.build(lines=[("salmon", "12.5", False), ("sea bream", 10, True, "S")]),
    ])
    stock = StockFactory.snapshot(
        StockFactory.build("salmon", "9"),
        StockFactory.build("sea bream", "4"),
    )
    return build_report(holiday, demand, reconcile(demand, stock), generated_at=datetime(2026, 9, 14))


def _no_orders_report():
    holiday = HolidayFactory.build(name="Sukkot")
    demand = aggregate_demand([])
    return build_report(holiday, demand, reconcile(demand, {}), generated_at=datetime(2026, 9, 14))


class TestDispatch:
    """Tests for NotificationService.dispatch()"""

    def test_sends_on_every_channel(self):
        whatsapp = MagicMock(return_value=True)
        email = MagicMock(return_value=True)
        service = NotificationService({"whatsapp": whatsapp, "email": email})
        report = _generated_report()

        outcomes = service.dispatch(report)

        whatsapp.assert_called_once_with(report)
        email.assert_called_once_with(report)
        assert [o.sent for o in outcomes] == [True, True]

    def test_unconfigured_channel_is_skipped(self):
        service = NotificationService({"whatsapp": MagicMock(return_value=False)})

        outcome = service.dispatch(_generated_report())[0]

        assert outcome.sent is False
        assert outcome.skipped is True

    def test_failing_channel_does_not_stop_others(self):
        def broken(report):
            raise NotificationError("whatsapp", "GreenAPI down")

        email = MagicMock(return_value=True)
        service = NotificationService({"whatsapp": broken, "email": email})
        report = _generated_report()

        outcomes = service.dispatch(report)

        assert outcomes[0].error == "GreenAPI down"
        assert outcomes[1].sent is True
        assert report.status == ReportStatus.REPORT_GENERATED

    def test_unexpected_error_recorded(self):
        def broken(report):
            raise RuntimeError("socket closed")

        outcome = NotificationService({"email": broken}).dispatch(_generated_report())[0]

        assert outcome.error == "socket closed"
        assert outcome.sent is False

    def test_quiet_statuses_not_sent(self):
        sender = MagicMock(return_value=True)
        service = NotificationService({"whatsapp": sender})
        service.notify_on_all_statuses = False

        outcomes = service.dispatch(_no_orders_report())

        sender.assert_not_called()
        assert outcomes[0].skipped is True

    def test_notify_on_all_statuses(self):
        sender = MagicMock(return_value=True)
        service = NotificationService({"whatsapp": sender})
        service.notify_on_all_statuses = True

        service.dispatch(_no_orders_report())

        sender.assert_called_once()


class TestWhatsAppMessage:
    """Tests for format_report_message()"""

    def test_deficit_lines_in_native_units(self):
        message = format_report_message(_generated_report(), lang="en")

        assert "Rosh Hashana" in message
        assert "Short in stock (2)" in message
        assert "salmon: need 12.5 kg, in stock 9.0 kg, *short 3.5 kg*" in message
        assert "sea bream: need 10 units, in stock 8 units, *short 2 units*" in message

    def test_largest_deficit_listed_first(self):
        message = format_report_message(_generated_report(), lang="en")

        assert message.index("salmon") < message.index("sea bream")

    def test_status_line_for_no_orders(self):
        message = format_report_message(_no_orders_report(), lang="en")

        assert "No orders for this holiday" in message
        assert "short" not in message

    def test_hebrew(self):
        message = format_report_message(_generated_report(), lang="he")

        assert "דוח ספקים לחג" in message
        assert 'ק"ג' in message


class TestSendMessage:
    """Tests for send_message()"""

    @pytest.fixture
    def configured(self):
        with patch("integrations.whatsapp.get_whatsapp_config", return_value=("1101", "token", "972500000000")):
            yield

    def test_not_configured_returns_false(self):
        with patch("integrations.whatsapp.get_whatsapp_config", return_value=(None, None, None)):
            assert send_message("hi") is False

    def test_posts_to_greenapi(self, configured):
        response = MagicMock()
        response.json.return_value = {"idMessage": "abc"}

        with patch("integrations.whatsapp.requests.post", return_value=response) as post:
            assert send_message("hi") is True

        url = post.call_args.args[0]
        assert url.endswith("/waInstance1101/sendMessage/token")
        assert post.call_args.kwargs["json"] == {"chatId": "972500000000@c.us", "message": "hi"}

    def test_request_failure_raises(self, configured):
        with patch("integrations.whatsapp.requests.post", side_effect=requests.exceptions.ConnectionError("down")):
            with pytest.raises(WhatsAppError) as exc:
                send_message("hi")

        assert exc.value.channel == "whatsapp"

    def test_rejected_message_raises(self, configured):
        response = MagicMock()
        response.json.return_value = {}

        with patch("integrations.whatsapp.requests.post", return_value=response):
            with pytest.raises(WhatsAppError):
                send_message("hi")


class TestEmail:
    """Tests for the email channel"""

    def test_subject(self):
        assert render_subject(_generated_report(), lang="en") == \
            "Supplier report - Rosh Hashana (2 items short)"
        assert render_subject(_no_orders_report(), lang="en") == \
            "Supplier report - Sukkot: No orders for this holiday"

    def test_html_table(self):
        html = render_report_html(_generated_report(), lang="he")

        assert 'direction: rtl' in html
        assert "<table" in html
        assert html.count("<tr>") == 2
        assert "3.5" in html

    def test_html_status_without_table(self):
        html = render_report_html(_no_orders_report(), lang="en")

        assert "<table" not in html
        assert "No orders for this holiday" in html

    def test_not_configured_returns_false(self):
        with patch("integrations.email_sender.settings") as settings:
            settings.email_user = None
            settings.email_pass = None
            settings.admin_email = None

            assert send_email("s", "<p></p>") is False
