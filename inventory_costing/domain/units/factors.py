"""
Conversion factor tables.

Single source of the constants shared with the server-side deduction
procedure (the system of record). Values must match it to at least four
significant digits; change them in both places or not at all.

Tables are read-only views built once at import time.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping, Optional

from inventory_costing.domain.units.models import VolumeUnit, WeightUnit


# Volume units → milliliters
VOLUME_TO_ML: Final[Mapping[VolumeUnit, float]] = MappingProxyType(
    {
        VolumeUnit.ML: 1.0,
        VolumeUnit.L: 1000.0,
        VolumeUnit.FL_OZ: 29.5735,
        VolumeUnit.CUP: 236.588,
        VolumeUnit.TBSP: 14.7868,
        VolumeUnit.TSP: 4.92892,
        VolumeUnit.GAL: 3785.41,
        VolumeUnit.QT: 946.353,
        VolumeUnit.PINT: 473.176,
    }
)

# Weight units → grams
WEIGHT_TO_G: Final[Mapping[WeightUnit, float]] = MappingProxyType(
    {
        WeightUnit.G: 1.0,
        WeightUnit.KG: 1000.0,
        WeightUnit.LB: 453.592,
        WeightUnit.OZ: 28.3495,
    }
)

# Grams per cup, matched by case-insensitive substring of the product name.
# Order matters: first match wins.
DENSITY_G_PER_CUP: Final[Mapping[str, float]] = MappingProxyType(
    {
        "rice": 185.0,
        "flour": 120.0,
        "sugar": 200.0,
        "butter": 227.0,
    }
)

CUP_ML: Final[float] = VOLUME_TO_ML[VolumeUnit.CUP]


def to_milliliters(amount: float, unit: VolumeUnit) -> float:
    """Convert a volume amount to milliliters.

    Args:
        amount: Quantity in ``unit``
        unit: Volume unit

    Returns:
        Amount in ml

    Example:
        >>> to_milliliters(2.0, VolumeUnit.TBSP)
        29.5736
    """
    return amount * VOLUME_TO_ML[unit]


def to_grams(amount: float, unit: WeightUnit) -> float:
    """Convert a weight amount to grams."""
    return amount * WEIGHT_TO_G[unit]


def density_for(ingredient_name: Optional[str]) -> Optional[float]:
    """Look up grams per cup for an ingredient.

    Args:
        ingredient_name: Product name, e.g. "Mahatma Jasmine Rice"

    Returns:
        Grams per cup, or None when no density entry matches

    Example:
        >>> density_for("All Purpose Flour")
        120.0
        >>> density_for("Olive Oil") is None
        True
    """
    if not ingredient_name:
        return None

    name_lower = ingredient_name.lower()
    for keyword, grams_per_cup in DENSITY_G_PER_CUP.items():
        if keyword in name_lower:
            return grams_per_cup

    return None


def factor_table_snapshot() -> dict[str, dict[str, float]]:
    """Plain-dict copy of every table, keyed by canonical unit name.

    Used to cross-check the constants against the server definition.
    """
    return {
        "volume_ml": {unit.value: factor for unit, factor in VOLUME_TO_ML.items()},
        "weight_g": {unit.value: factor for unit, factor in WEIGHT_TO_G.items()},
        "density_g_per_cup": dict(DENSITY_G_PER_CUP),
    }
