"""
Unit taxonomy.

Classifies free-form unit strings into measurement categories and maps
synonyms, abbreviations and plurals to one canonical spelling.

All functions are pure and total: unknown input is a valid result,
never an error.
"""

from __future__ import annotations

import re
from typing import Final, Mapping, Optional

from inventory_costing.domain.units.models import (
    CountMeasure,
    LengthMeasure,
    ParsedUnit,
    UnitCategory,
    UnrecognizedUnit,
    VolumeMeasure,
    VolumeUnit,
    WeightMeasure,
    WeightUnit,
)


# Canonical spelling → category
CANONICAL_CATEGORIES: Final[Mapping[str, UnitCategory]] = {
    # Volume
    "ml": UnitCategory.VOLUME,
    "l": UnitCategory.VOLUME,
    "fl oz": UnitCategory.VOLUME,
    "cup": UnitCategory.VOLUME,
    "tbsp": UnitCategory.VOLUME,
    "tsp": UnitCategory.VOLUME,
    "gal": UnitCategory.VOLUME,
    "qt": UnitCategory.VOLUME,
    "pint": UnitCategory.VOLUME,
    # Weight
    "g": UnitCategory.WEIGHT,
    "kg": UnitCategory.WEIGHT,
    "lb": UnitCategory.WEIGHT,
    "oz": UnitCategory.WEIGHT,
    "mg": UnitCategory.WEIGHT,
    # Count
    "each": UnitCategory.COUNT,
    "piece": UnitCategory.COUNT,
    "unit": UnitCategory.COUNT,
    "serving": UnitCategory.COUNT,
    "bottle": UnitCategory.COUNT,
    "can": UnitCategory.COUNT,
    "box": UnitCategory.COUNT,
    "bag": UnitCategory.COUNT,
    "case": UnitCategory.COUNT,
    "container": UnitCategory.COUNT,
    "package": UnitCategory.COUNT,
    "dozen": UnitCategory.COUNT,
    "jar": UnitCategory.COUNT,
    # Length
    "inch": UnitCategory.LENGTH,
    "cm": UnitCategory.LENGTH,
    "mm": UnitCategory.LENGTH,
    "ft": UnitCategory.LENGTH,
    "meter": UnitCategory.LENGTH,
}

# Cleaned spelling → canonical spelling (exact matches only)
SYNONYMS: Final[Mapping[str, str]] = {
    # Volume
    "ml": "ml",
    "mls": "ml",
    "milliliter": "ml",
    "milliliters": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
    "l": "l",
    "lt": "l",
    "ltr": "l",
    "liter": "l",
    "liters": "l",
    "litre": "l",
    "litres": "l",
    "fl oz": "fl oz",
    "floz": "fl oz",
    "fl ounce": "fl oz",
    "fl ounces": "fl oz",
    "fluid oz": "fl oz",
    "fluid ounce": "fl oz",
    "fluid ounces": "fl oz",
    "cup": "cup",
    "cups": "cup",
    "tbsp": "tbsp",
    "tbsps": "tbsp",
    "tbs": "tbsp",
    "tbl": "tbsp",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "tsp": "tsp",
    "tsps": "tsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "gal": "gal",
    "gals": "gal",
    "gallon": "gal",
    "gallons": "gal",
    "qt": "qt",
    "qts": "qt",
    "quart": "qt",
    "quarts": "qt",
    "pint": "pint",
    "pints": "pint",
    "pt": "pint",
    "pts": "pint",
    # Weight
    "g": "g",
    "gr": "g",
    "gm": "g",
    "gms": "g",
    "gram": "g",
    "grams": "g",
    "kg": "kg",
    "kgs": "kg",
    "kilo": "kg",
    "kilos": "kg",
    "kilogram": "kg",
    "kilograms": "kg",
    "lb": "lb",
    "lbs": "lb",
    "pound": "lb",
    "pounds": "lb",
    "oz": "oz",
    "ozs": "oz",
    "ounce": "oz",
    "ounces": "oz",
    "mg": "mg",
    "milligram": "mg",
    "milligrams": "mg",
    # Count
    "each": "each",
    "ea": "each",
    "piece": "piece",
    "pieces": "piece",
    "pc": "piece",
    "pcs": "piece",
    "unit": "unit",
    "units": "unit",
    "serving": "serving",
    "servings": "serving",
    "bottle": "bottle",
    "bottles": "bottle",
    "btl": "bottle",
    "can": "can",
    "cans": "can",
    "box": "box",
    "boxes": "box",
    "bag": "bag",
    "bags": "bag",
    "case": "case",
    "cases": "case",
    "cs": "case",
    "container": "container",
    "containers": "container",
    "package": "package",
    "packages": "package",
    "pack": "package",
    "packs": "package",
    "pkg": "package",
    "dozen": "dozen",
    "doz": "dozen",
    "jar": "jar",
    "jars": "jar",
    # Length
    "inch": "inch",
    "inches": "inch",
    "in": "inch",
    "cm": "cm",
    "centimeter": "cm",
    "centimeters": "cm",
    "mm": "mm",
    "millimeter": "mm",
    "millimeters": "mm",
    "ft": "ft",
    "foot": "ft",
    "feet": "ft",
    "m": "meter",
    "meter": "meter",
    "meters": "meter",
    "metre": "meter",
    "metres": "meter",
}

# Contains-match keywords, checked in order when no exact synonym matches.
# Volume comes before weight so "fluid ounce" never reads as weight,
# and longer keywords come before their substrings.
CONTAINS_KEYWORDS: Final[tuple[tuple[str, str], ...]] = (
    ("fl oz", "fl oz"),
    ("fluid", "fl oz"),
    ("tablespoon", "tbsp"),
    ("teaspoon", "tsp"),
    ("milliliter", "ml"),
    ("millilitre", "ml"),
    ("liter", "l"),
    ("litre", "l"),
    ("gallon", "gal"),
    ("quart", "qt"),
    ("pint", "pint"),
    ("cup", "cup"),
    ("milligram", "mg"),
    ("kilogram", "kg"),
    ("gram", "g"),
    ("pound", "lb"),
    ("ounce", "oz"),
    ("each", "each"),
    ("piece", "piece"),
    ("serving", "serving"),
    ("bottle", "bottle"),
    ("container", "container"),
    ("package", "package"),
    ("dozen", "dozen"),
    ("millimeter", "mm"),
    ("centimeter", "cm"),
    ("meter", "meter"),
    ("metre", "meter"),
)

RECIPE_UNIT_SUGGESTIONS: Final[Mapping[UnitCategory, tuple[str, ...]]] = {
    UnitCategory.VOLUME: ("fl oz", "ml", "cup", "tbsp", "tsp"),
    UnitCategory.WEIGHT: ("lb", "oz", "g"),
    UnitCategory.COUNT: ("each", "piece", "serving"),
    UnitCategory.LENGTH: ("inch", "cm"),
    UnitCategory.UNKNOWN: ("each", "piece"),
}

_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION = re.compile(r"[^a-z0-9\s]+")
_VOLUME_VALUES = frozenset(u.value for u in VolumeUnit)
_WEIGHT_VALUES = frozenset(u.value for u in WeightUnit)


def _clean(unit: Optional[str]) -> str:
    """Lower-case, turn punctuation into spaces and collapse whitespace."""
    if not unit:
        return ""
    cleaned = _PUNCTUATION.sub(" ", unit.lower())
    return _WHITESPACE.sub(" ", cleaned).strip()


def _resolve(unit: Optional[str]) -> Optional[str]:
    """Canonical spelling for a unit string, or None when nothing matches."""
    key = _clean(unit)
    if not key:
        return None

    if key in SYNONYMS:
        return SYNONYMS[key]

    compact = key.replace(" ", "")
    if compact in SYNONYMS:
        return SYNONYMS[compact]

    for keyword, canonical in CONTAINS_KEYWORDS:
        if keyword in key:
            return canonical

    return None


def classify(unit: Optional[str]) -> UnitCategory:
    """Classify a unit string into a measurement category.

    Args:
        unit: Free-form unit string

    Returns:
        Category, UNKNOWN when nothing matches (including empty input)

    Example:
        >>> classify(" Fl Oz ")
        <UnitCategory.VOLUME: 'volume'>
        >>> classify("oz")
        <UnitCategory.WEIGHT: 'weight'>
        >>> classify("tablespoon")
        <UnitCategory.VOLUME: 'volume'>
        >>> classify("")
        <UnitCategory.UNKNOWN: 'unknown'>
    """
    canonical = _resolve(unit)
    if canonical is None:
        return UnitCategory.UNKNOWN
    return CANONICAL_CATEGORIES.get(canonical, UnitCategory.UNKNOWN)


def normalize(unit: str) -> str:
    """Map a unit synonym to its canonical spelling.

    Matching ignores case, whitespace and punctuation.
    Unmapped strings are returned unchanged, casing included.

    Example:
        >>> normalize(" Fluid Ounce ")
        'fl oz'
        >>> normalize("pcs")
        'piece'
        >>> normalize("Custom")
        'Custom'
    """
    key = _clean(unit)
    if key in SYNONYMS:
        return SYNONYMS[key]
    compact = key.replace(" ", "")
    if compact and compact in SYNONYMS:
        return SYNONYMS[compact]
    return unit


def match_key(unit: Optional[str]) -> str:
    """Comparison key for unit equality (normalized, case-insensitive)."""
    if not unit:
        return ""
    return normalize(unit).strip().lower()


def parse_unit(unit: Optional[str]) -> ParsedUnit:
    """Parse a unit string into its variant.

    Volume and weight variants are produced only for units present in the
    factor tables; everything else the taxonomy recognizes in those
    categories comes back as UnrecognizedUnit with a category hint.

    Example:
        >>> parse_unit("tablespoons")
        VolumeMeasure(unit=<VolumeUnit.TBSP: 'tbsp'>)
        >>> parse_unit("mg").category_hint
        <UnitCategory.WEIGHT: 'weight'>
    """
    raw = unit or ""
    canonical = _resolve(raw)
    if canonical is None:
        return UnrecognizedUnit(raw=raw)

    category = CANONICAL_CATEGORIES.get(canonical, UnitCategory.UNKNOWN)

    if category is UnitCategory.VOLUME:
        if canonical in _VOLUME_VALUES:
            return VolumeMeasure(unit=VolumeUnit(canonical))
        return UnrecognizedUnit(raw=raw, category_hint=category)

    if category is UnitCategory.WEIGHT:
        if canonical in _WEIGHT_VALUES:
            return WeightMeasure(unit=WeightUnit(canonical))
        return UnrecognizedUnit(raw=raw, category_hint=category)

    if category is UnitCategory.COUNT:
        return CountMeasure(name=canonical)

    if category is UnitCategory.LENGTH:
        return LengthMeasure(name=canonical)

    return UnrecognizedUnit(raw=raw)


def suggest_recipe_units(purchase_unit: str) -> list[str]:
    """Recipe units that make sense for a purchase unit.

    Example:
        >>> suggest_recipe_units("  LB  ")
        ['lb', 'oz', 'g']
        >>> suggest_recipe_units("bottle")
        ['each', 'piece', 'serving']
    """
    return list(RECIPE_UNIT_SUGGESTIONS[classify(purchase_unit)])
