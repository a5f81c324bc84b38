"""
Product (fish) schemas.

Stock is always stored in kg, whatever unit the fish is sold in.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from models.base import FrozenSchema


class Unit(str, Enum):
    """Native unit a fish is sold, stocked and reported in."""
    KG = "kg"
    UNITS = "units"


class FishSize(str, Enum):
    """Size buckets for fish sold by size."""
    SMALL = "S"
    MEDIUM = "M"
    LARGE = "L"


class StockRecord(FrozenSchema):
    """
    Current stock for one fish.

    Built from a `fish_types` row (name, available_kg, is_active).
    """

    product_name: str = Field(..., min_length=1, description="Catalog fish name")
    available_weight_kg: Decimal = Field(
        default=Decimal("0"),
        description="Available stock in kg"
    )
    active: bool = Field(default=True, description="Whether the fish is on sale")

    @field_validator("available_weight_kg", mode="before")
    @classmethod
    def coerce_weight(cls, v) -> Decimal:
        """Null stock means nothing on hand."""
        if v is None:
            return Decimal("0")
        return Decimal(str(v))

    @classmethod
    def from_row(cls, row: dict) -> "StockRecord":
        """Create from a `fish_types` row."""
        return cls(
            product_name=row["name"],
            available_weight_kg=row.get("available_kg"),
            active=bool(row.get("is_active", True)),
        )


class StockLevel(FrozenSchema):
    """Stock expressed in a fish's native unit."""

    product_name: str
    unit: Unit
    quantity: Decimal
    size_tag: Optional[FishSize] = None
