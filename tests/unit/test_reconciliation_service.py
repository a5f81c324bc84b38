"""
Unit tests for inventory reconciliation.

Run: pytest tests/unit/test_reconciliation_service.py -v
"""

from decimal import Decimal

from models.order import Order
from models.product import Unit
from models.report import DeficitEntry, SufficientEntry
from services.demand_service import aggregate_demand
from services.reconciliation_service import reconcile, stock_levels

from tests.factories import OrderFactory, StockFactory


def _demand(*lines):
    return aggregate_demand([OrderFactory.build(lines=list(lines))])


class TestWeightSoldFish:
    """Weight-sold fish compare kg to kg."""

    def test_salmon_deficit_in_kg(self):
        demand = _demand(("salmon", "12.5", False))
        stock = StockFactory.snapshot(StockFactory.build("salmon", "9"))

        result = reconcile(demand, stock)

        assert len(result.deficits) == 1
        entry = result.deficits[0]
        assert entry.unit == Unit.KG
        assert entry.total_demand == Decimal("12.5")
        assert entry.current_stock == Decimal("9")
        assert entry.deficit == Decimal("3.5")

    def test_keeps_full_precision(self):
        demand = _demand(("salmon", "1.237", False))
        stock = StockFactory.snapshot(StockFactory.build("salmon", "0.5"))

        entry = reconcile(demand, stock).deficits[0]

        assert entry.deficit == Decimal("0.737")


class TestUnitSoldFish:
    """Unit-sold fish convert stock kg to whole fish."""

    def test_small_bream_ten_units_four_kg(self):
        # 10 units demanded, 0.5 kg each, 4 kg stock -> 8 units -> short 2
        demand = _demand(("sea bream", 10, True, "S"))
        stock = StockFactory.snapshot(StockFactory.build("sea bream", "4"))

        entry = reconcile(demand, stock).deficits[0]

        assert entry.unit == Unit.UNITS
        assert entry.current_stock == Decimal("8")
        assert entry.deficit == Decimal("2")

    def test_large_bream_scenario(self):
        # L = 0.7 kg, 14 demanded, 7 kg stock -> 10 units -> short 4
        demand = _demand(("sea bream", 14, True, "L"))
        stock = StockFactory.snapshot(StockFactory.build("sea bream", "7"))

        entry = reconcile(demand, stock).deficits[0]

        assert entry.current_stock == Decimal("10")
        assert entry.deficit == Decimal("4")

    def test_stock_rounds_down(self):
        # 4 kg carp at 1.5 kg = 2.67 -> 2 units
        demand = _demand(("carp", 3, True))
        stock = StockFactory.snapshot(StockFactory.build("carp", "4"))

        entry = reconcile(demand, stock).deficits[0]

        assert entry.current_stock == Decimal("2")
        assert entry.deficit == Decimal("1")


class TestSufficientAndMissing:
    """Sufficient, missing and inactive stock."""

    def test_sufficient_stock_is_listed_not_reported(self):
        demand = _demand(("salmon", "5", False), ("carp", 2, True))
        stock = StockFactory.snapshot(
            StockFactory.build("salmon", "20"),
            StockFactory.build("carp", "3"),
        )

        result = reconcile(demand, stock)

        assert result.deficits == ()
        assert {e.product_name for e in result.sufficient} == {"salmon", "carp"}
        assert all(isinstance(e, SufficientEntry) for e in result.sufficient)
        assert all(e.deficit == 0 for e in result.sufficient)

    def test_exactly_enough_is_sufficient(self):
        demand = _demand(("salmon", "9", False))
        stock = StockFactory.snapshot(StockFactory.build("salmon", "9"))

        result = reconcile(demand, stock)

        assert result.deficits == ()
        assert result.sufficient[0].deficit == Decimal("0")

    def test_missing_stock_is_full_deficit(self):
        demand = _demand(("trout", 5, True))

        entry = reconcile(demand, {}).deficits[0]

        assert entry.current_stock == Decimal("0")
        assert entry.deficit == Decimal("5")

    def test_inactive_fish_excluded(self):
        demand = _demand(("trout", 5, True), ("carp", 1, True))
        stock = StockFactory.snapshot(
            StockFactory.build("trout", "0", is_active=False),
            StockFactory.build("carp", "3"),
        )

        result = reconcile(demand, stock)

        assert result.excluded == ("trout",)
        assert all(e.product_name != "trout" for e in result.deficits + result.sufficient)

    def test_stock_name_matched_ignoring_case(self):
        demand = _demand(("Salmon", "3", False))
        stock = StockFactory.snapshot(StockFactory.build("salmon", "1"))

        entry = reconcile(demand, stock).deficits[0]

        assert entry.current_stock == Decimal("1")

    def test_negative_stock_treated_as_zero(self):
        demand = _demand(("salmon", "2", False))
        stock = StockFactory.snapshot(StockFactory.build("salmon", "-4"))

        entry = reconcile(demand, stock).deficits[0]

        assert entry.deficit == Decimal("2")

    def test_deficit_never_negative(self):
        demand = _demand(("salmon", "1", False), ("carp", 1, True), ("trout", 2, True))
        stock = StockFactory.snapshot(
            StockFactory.build("salmon", "100"),
            StockFactory.build("carp", "100"),
        )

        result = reconcile(demand, stock)

        for entry in result.deficits + result.sufficient:
            assert entry.deficit >= 0
        assert all(isinstance(e, DeficitEntry) and e.deficit > 0 for e in result.deficits)


class TestStockLevels:
    """Tests for stock_levels()"""

    def test_native_units_active_only(self):
        records = [
            StockFactory.build("trout", "3.1"),
            StockFactory.build("salmon", "4.25"),
            StockFactory.build("carp", "9", is_active=False),
        ]

        levels = stock_levels(records)

        assert [lvl.product_name for lvl in levels] == ["salmon", "trout"]
        assert levels[0].unit == Unit.KG
        assert levels[0].quantity == Decimal("4.25")
        assert levels[1].unit == Unit.UNITS
        assert levels[1].quantity == Decimal("5")


class TestStorefrontDemand:
    """End to end from storefront rows to the deficit."""

    def test_carp_from_kg_row(self):
        # 4.5 kg row = 3 carp; 3 kg stock = 2 carp -> short 1
        order = Order.from_row({
            "id": "o1",
            "order_items": [{"fish_name": "קרפיון", "quantity_kg": 4.5}],
        })
        stock = StockFactory.snapshot(StockFactory.build("קרפיון", "3"))

        entry = reconcile(aggregate_demand([order]), stock).deficits[0]

        assert entry.unit == Unit.UNITS
        assert entry.total_demand == Decimal("3")
        assert entry.current_stock == Decimal("2")
        assert entry.deficit == Decimal("1")

    def test_name_variants_share_one_stock_record(self):
        demand = _demand(("Salmon", "6", False), ("salmon ", "6", False))
        stock = StockFactory.snapshot(StockFactory.build("salmon", "9"))

        result = reconcile(demand, stock)

        assert result.sufficient == ()
        assert len(result.deficits) == 1
        assert result.deficits[0].deficit == Decimal("3")
