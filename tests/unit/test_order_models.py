"""
Unit tests for order and stock row parsing.

Run: pytest tests/unit/test_order_models.py -v
"""

from datetime import date
from decimal import Decimal

from models.holiday import Holiday
from models.order import Order, OrderLine
from models.product import FishSize, StockRecord


class TestOrderLineFromItem:
    """Tests for OrderLine.from_item()"""

    def test_order_record_shape(self):
        item = {"fish_name": "סלמון", "quantity_kg": 2.5, "unit_based": False}

        line = OrderLine.from_item(item)

        assert line.product_name == "סלמון"
        assert line.requested_quantity == Decimal("2.5")
        assert line.quantity_is_unit_based is False
        assert line.size_tag is None

    def test_cart_shape(self):
        item = {"fishName": "דניס", "quantity": 3, "unitsBased": True, "fishSize": "l"}

        line = OrderLine.from_item(item)

        assert line.product_name == "דניס"
        assert line.requested_quantity == Decimal("3")
        assert line.quantity_is_unit_based is True
        assert line.size_tag == FishSize.LARGE

    def test_bad_values_become_none(self):
        line = OrderLine.from_item({"fish_name": "", "quantity_kg": "lots", "size": "XL"})

        assert line.product_name is None
        assert line.requested_quantity is None
        assert line.size_tag is None

    def test_bool_and_nan_quantities_rejected(self):
        assert OrderLine.from_item({"fish_name": "x", "quantity_kg": True}).requested_quantity is None
        assert OrderLine.from_item({"fish_name": "x", "quantity_kg": "NaN"}).requested_quantity is None


class TestOrderFromRow:
    """Tests for Order.from_row()"""

    def test_parses_items(self):
        row = {
            "id": 42,
            "customer_name": "Dana",
            "delivery_date": "2026-09-21",
            "is_holiday_order": True,
            "order_items": [
                {"fish_name": "carp", "quantity_kg": 2, "unit_based": True},
                "garbage",
            ],
        }

        order = Order.from_row(row)

        assert order.id == "42"
        assert order.delivery_date == date(2026, 9, 21)
        assert order.is_holiday_order is True
        assert len(order.lines) == 1

    def test_missing_items(self):
        order = Order.from_row({"id": "a", "order_items": None})

        assert order.lines == ()


class TestStockRecord:
    """Tests for StockRecord.from_row()"""

    def test_from_row(self):
        record = StockRecord.from_row({"name": "salmon", "available_kg": "9.5", "is_active": True})

        assert record.product_name == "salmon"
        assert record.available_weight_kg == Decimal("9.5")
        assert record.active is True

    def test_null_stock_is_zero(self):
        record = StockRecord.from_row({"name": "carp", "available_kg": None, "is_active": True})

        assert record.available_weight_kg == Decimal("0")


class TestHoliday:
    """Tests for Holiday"""

    def test_id_coerced_and_window(self):
        holiday = Holiday(id=3, name="Pesach", start_date="2026-04-01", end_date="2026-04-08")

        assert holiday.id == "3"
        assert holiday.has_valid_window is True

    def test_inverted_window(self):
        holiday = Holiday(id=3, name="Pesach", start_date="2026-04-08", end_date="2026-04-01")

        assert holiday.has_valid_window is False
