"""
Unit domain models.

Measurement categories and the closed set of parsed unit variants.
A unit string is parsed once into one of these variants; downstream code
dispatches on the variant type instead of re-inspecting raw strings.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class UnitCategory(str, Enum):
    """
    Measurement category of a unit.

    Derived deterministically from a unit string, never stored.
    """

    VOLUME = "volume"
    WEIGHT = "weight"
    COUNT = "count"
    LENGTH = "length"
    UNKNOWN = "unknown"


class VolumeUnit(str, Enum):
    """Volume units with a server-side factor to milliliters."""

    ML = "ml"
    L = "l"
    FL_OZ = "fl oz"
    CUP = "cup"
    TBSP = "tbsp"
    TSP = "tsp"
    GAL = "gal"
    QT = "qt"
    PINT = "pint"


class WeightUnit(str, Enum):
    """Weight units with a server-side factor to grams."""

    G = "g"
    KG = "kg"
    LB = "lb"
    OZ = "oz"  # weight ounce; fluid ounce is VolumeUnit.FL_OZ


class VolumeMeasure(BaseModel):
    """
    Convertible volume unit.

    Example:
        >>> VolumeMeasure(unit=VolumeUnit.CUP).category
        <UnitCategory.VOLUME: 'volume'>
    """

    model_config = ConfigDict(frozen=True)

    unit: VolumeUnit

    @property
    def category(self) -> UnitCategory:
        return UnitCategory.VOLUME

    @property
    def canonical(self) -> str:
        return self.unit.value


class WeightMeasure(BaseModel):
    """Convertible weight unit."""

    model_config = ConfigDict(frozen=True)

    unit: WeightUnit

    @property
    def category(self) -> UnitCategory:
        return UnitCategory.WEIGHT

    @property
    def canonical(self) -> str:
        return self.unit.value


class CountMeasure(BaseModel):
    """Discrete count unit (each, piece, bottle, bag...)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Canonical count unit name")

    @property
    def category(self) -> UnitCategory:
        return UnitCategory.COUNT

    @property
    def canonical(self) -> str:
        return self.name


class LengthMeasure(BaseModel):
    """Length unit. Recognized for suggestions, never converted."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Canonical length unit name")

    @property
    def category(self) -> UnitCategory:
        return UnitCategory.LENGTH

    @property
    def canonical(self) -> str:
        return self.name


class UnrecognizedUnit(BaseModel):
    """
    Unit that cannot take part in a conversion.

    Either nothing matched (category_hint UNKNOWN), or the taxonomy knows
    the spelling but no server factor exists for it (e.g. "mg").
    """

    model_config = ConfigDict(frozen=True)

    raw: str
    category_hint: UnitCategory = UnitCategory.UNKNOWN

    @property
    def category(self) -> UnitCategory:
        return self.category_hint

    @property
    def canonical(self) -> str:
        return self.raw


ParsedUnit = Union[VolumeMeasure, WeightMeasure, CountMeasure, LengthMeasure, UnrecognizedUnit]
