"""
Order schemas.

Orders come from the storefront with their line items stored as JSON
(`orders.order_items`). Two item shapes exist in the data: the order
record shape (fish_name, quantity_kg, unit_based) and the cart shape
(fishName, quantity, unitsBased). Both are accepted.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import Field, field_validator

from models.base import FrozenSchema
from models.product import FishSize


def _to_decimal(value: Any) -> Optional[Decimal]:
    """Parse a quantity, returning None for anything that isn't a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not result.is_finite():
        return None
    return result


def _to_size(value: Any) -> Optional[FishSize]:
    if not value:
        return None
    try:
        return FishSize(str(value).strip().upper())
    except ValueError:
        return None


def _first_present(item: dict, *keys: str) -> Any:
    for key in keys:
        if item.get(key) is not None:
            return item[key]
    return None


class OrderLine(FrozenSchema):
    """A single order line. Quantity is in the fish's native unit."""

    product_name: Optional[str] = Field(None, description="Fish name")
    requested_quantity: Optional[Decimal] = Field(
        None,
        description="kg for weight-sold fish, count for unit-sold fish"
    )
    quantity_is_unit_based: bool = Field(default=False)
    size_tag: Optional[FishSize] = Field(None, description="S / M / L")

    @field_validator("product_name")
    @classmethod
    def blank_name_is_missing(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @classmethod
    def from_item(cls, item: dict) -> "OrderLine":
        """
        Create from a raw `order_items` entry.

        Never raises on bad values: an unreadable quantity or size becomes
        None so aggregation can skip or default it.

        Args:
            item: Raw item dict in either storefront shape

        Returns:
            OrderLine
        """
        name = _first_present(item, "fish_name", "fishName")
        return cls(
            product_name=str(name) if name is not None else None,
            requested_quantity=_to_decimal(_first_present(item, "quantity_kg", "quantity")),
            quantity_is_unit_based=bool(item.get("unit_based") or item.get("unitsBased")),
            size_tag=_to_size(_first_present(item, "size", "fish_size", "fishSize")),
        )


class Order(FrozenSchema):
    """A customer order with its lines."""

    id: str
    delivery_date: Optional[date] = None
    is_holiday_order: bool = False
    customer_name: Optional[str] = None
    lines: tuple[OrderLine, ...] = ()

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, v) -> str:
        return str(v)

    @classmethod
    def from_row(cls, row: dict) -> "Order":
        """Create from an `orders` row."""
        items = row.get("order_items")
        if not isinstance(items, list):
            items = []
        return cls(
            id=row["id"],
            delivery_date=row.get("delivery_date"),
            is_holiday_order=bool(row.get("is_holiday_order")),
            customer_name=row.get("customer_name"),
            lines=tuple(
                OrderLine.from_item(item) for item in items if isinstance(item, dict)
            ),
        )
