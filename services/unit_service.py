"""Unit rules for fish products.

Decides whether a fish is sold by weight (kg) or by unit, and for
unit-sold fish how much one fish weighs on average, so stock kept in kg
can be expressed as a number of fish.

All functions are pure lookups over the tables in config.fish. Unknown
names never fail: they are treated as unit-sold with the default average
weight.
"""

from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP
from functools import lru_cache
from typing import Iterable, Optional, Union

import structlog

from config.fish import (
    AVERAGE_WEIGHTS_KG,
    DEFAULT_AVERAGE_WEIGHT_KG,
    DEFAULT_SIZE,
    SIZE_WEIGHTS_KG,
    WEIGHT_SOLD_FISH,
)
from models.product import FishSize, Unit

logger = structlog.get_logger(__name__)

SizeTag = Union[FishSize, str, None]

def normalize_name(name) -> str:
    """Comparison key for fish names: case-folded, whitespace collapsed."""
    return " ".join(str(name).split()).casefold()


@lru_cache(maxsize=256)
def _warn_unknown_average(name_key: str):
    """Log a missing average-weight rule once per name."""
    logger.warning(
        "unknown_average_weight",
        product_name=name_key,
        default_kg=str(DEFAULT_AVERAGE_WEIGHT_KG)
    )


def _match(product_name: Optional[str], names: Iterable[str]) -> Optional[str]:
    """
    Find the rule key for a product name.

    Exact match wins; otherwise the first key that contains the name or
    is contained in it.
    """
    if not product_name:
        return None
    key = normalize_name(product_name)
    if not key:
        return None

    names = tuple(names)
    for name in names:
        if normalize_name(name) == key:
            return name
    for name in names:
        candidate = normalize_name(name)
        if candidate in key or key in candidate:
            return name
    return None


def _size_key(size_tag: SizeTag) -> str:
    """Resolve a size tag to a bucket key; unknown or missing means medium."""
    if size_tag is None:
        return DEFAULT_SIZE
    try:
        return FishSize(str(getattr(size_tag, "value", size_tag)).strip().upper()).value
    except ValueError:
        return DEFAULT_SIZE


def _explicit_average(product_name: str, size_tag: SizeTag = None) -> Optional[Decimal]:
    sized = _match(product_name, SIZE_WEIGHTS_KG)
    if sized:
        buckets = SIZE_WEIGHTS_KG[sized]
        return buckets.get(_size_key(size_tag), buckets[DEFAULT_SIZE])

    named = _match(product_name, AVERAGE_WEIGHTS_KG)
    if named:
        return AVERAGE_WEIGHTS_KG[named]
    return None


def is_by_weight(product_name: str) -> bool:
    """True if the fish is sold by weight (customer picks kg)."""
    return _match(product_name, WEIGHT_SOLD_FISH) is not None


def is_sizeable(product_name: str) -> bool:
    """True if the fish is sold in S/M/L sizes."""
    return _match(product_name, SIZE_WEIGHTS_KG) is not None


def has_known_average_weight(product_name: str) -> bool:
    """True if an explicit average-weight rule exists (not the generic default)."""
    average = _explicit_average(product_name)
    return average is not None and average > 0


def native_unit(product_name: str) -> Unit:
    """Unit in which demand, stock and deficit for this fish are expressed."""
    return Unit.KG if is_by_weight(product_name) else Unit.UNITS


def average_unit_weight_kg(product_name: str, size_tag: SizeTag = None) -> Decimal:
    """
    Average weight of one fish in kg.

    Args:
        product_name: Catalog fish name
        size_tag: S / M / L for sizeable fish; ignored otherwise

    Returns:
        Positive weight. Falls back to DEFAULT_AVERAGE_WEIGHT_KG for
        fish without a rule.
    """
    average = _explicit_average(product_name, size_tag)
    if average is not None:
        return average

    _warn_unknown_average(normalize_name(product_name or ""))
    return DEFAULT_AVERAGE_WEIGHT_KG


def units_from_weight(
    available_weight_kg,
    product_name: str,
    size_tag: SizeTag = None
) -> int:
    """
    Whole fish that can be cut from a stock weight.

    Always rounds down (a partial fish can't be sold) and never goes
    below zero.
    """
    average = average_unit_weight_kg(product_name, size_tag)
    if average <= 0:
        return 0

    units = (Decimal(str(available_weight_kg)) / average).to_integral_value(rounding=ROUND_FLOOR)
    return max(0, int(units))


def stock_in_native_unit(
    available_weight_kg,
    product_name: str,
    size_tag: SizeTag = None
) -> Decimal:
    """Convert stored kg stock to the fish's native unit."""
    if is_by_weight(product_name):
        return Decimal(str(available_weight_kg))
    return Decimal(units_from_weight(available_weight_kg, product_name, size_tag))


def ordered_in_native_unit(
    quantity: Decimal,
    quantity_is_unit_based: bool,
    product_name: str,
    size_tag: SizeTag = None
) -> Decimal:
    """
    Convert an order line's quantity to the fish's native unit.

    The storefront records unit-sold fish as average weight x count in
    kg. Such a line is turned back into whole fish with the same average
    weight used for stock: nearest whole fish, at least one. A count
    recorded for a weight-sold fish becomes count x average weight.
    """
    by_weight = is_by_weight(product_name)
    if quantity_is_unit_based != by_weight:
        return quantity

    average = average_unit_weight_kg(product_name, size_tag)
    if by_weight:
        return quantity * average

    units = (quantity / average).to_integral_value(rounding=ROUND_HALF_UP)
    return max(Decimal("1"), units)


def weight_display_text(product_name: str, size_tag: SizeTag = None) -> str:
    """Short weight hint shown next to a fish in reports."""
    if is_by_weight(product_name):
        return "לפי משקל"

    sized = _match(product_name, SIZE_WEIGHTS_KG)
    if sized:
        buckets = SIZE_WEIGHTS_KG[sized]
        if size_tag is not None:
            return f'{_size_key(size_tag)}≈{buckets[_size_key(size_tag)]} ק"ג'
        return " | ".join(f'{size}≈{weight} ק"ג' for size, weight in buckets.items())

    if has_known_average_weight(product_name):
        return f'משקל ממוצע: ~{average_unit_weight_kg(product_name)} ק"ג'

    return ""


def clear_cache():
    """Forget which unknown fish were already warned about."""
    _warn_unknown_average.cache_clear()
    logger.debug("unit_warning_cache_cleared")
