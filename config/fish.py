"""
Fish unit rules.

Static lookup tables that decide how each catalog product is sold
(by weight or by unit) and, for unit-sold fish, the average weight of
one fish. Catalog names are Hebrew; English names are kept alongside so
reports and tests can use either.

New fish or sizes are added here, not in the calculation code.
"""

from decimal import Decimal
from types import MappingProxyType

# =============================================================================
# SOLD BY WEIGHT
# =============================================================================
# Customer picks a weight; stock and demand are both in kg.

WEIGHT_SOLD_FISH = (
    "salmon", "סלמון",
    "red tuna", "טונה אדומה",
    "blue tuna", "טונה כחולה",
    "tuna", "טונה",
    "nile perch", "נסיכת נילוס",
    "princess", "נסיכה",
    "intias", "אינטיאס",
)


# =============================================================================
# AVERAGE UNIT WEIGHTS (kg per fish)
# =============================================================================
# Order matters: more specific names first ("red mullet" before "mullet"),
# since partial names match.

AVERAGE_WEIGHTS_KG = MappingProxyType({
    "carp": Decimal("1.5"),
    "קרפיון": Decimal("1.5"),
    "frida": Decimal("0.7"),
    "פרידה": Decimal("0.7"),
    "red mullet": Decimal("0.1"),
    "ברבוניה": Decimal("0.1"),
    "white grouper": Decimal("1.5"),
    "לוקוס לבן": Decimal("1.5"),
    "grouper": Decimal("1.5"),
    "לוקוס": Decimal("1.5"),
    "meagre": Decimal("1.5"),
    "מוסר ים": Decimal("1.5"),
    "מוסרים": Decimal("1.5"),
    "mullet": Decimal("1.3"),
    "בורי": Decimal("1.3"),
    "barramundi": Decimal("1.0"),
    "ברמונדי": Decimal("1.0"),
    "trout": Decimal("0.6"),
    "פורל": Decimal("0.6"),
    "tilapia": Decimal("0.9"),
    "מושט": Decimal("0.9"),
})

# Used for unit-sold fish without an explicit rule
DEFAULT_AVERAGE_WEIGHT_KG = Decimal("1.0")


# =============================================================================
# SIZE BUCKETS
# =============================================================================
# S ~400-550g, M ~550-650g, L ~650g+

SMALL = "S"
MEDIUM = "M"
LARGE = "L"

DEFAULT_SIZE = MEDIUM

_BREAM_SIZES = MappingProxyType({
    SMALL: Decimal("0.5"),
    MEDIUM: Decimal("0.6"),
    LARGE: Decimal("0.7"),
})

SIZE_WEIGHTS_KG = MappingProxyType({
    "sea bream": _BREAM_SIZES,
    "דניס": _BREAM_SIZES,
    "sea bass": _BREAM_SIZES,
    "לברק": _BREAM_SIZES,
})
