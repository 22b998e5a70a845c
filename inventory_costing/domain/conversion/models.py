"""
Conversion domain models.

Inputs and outputs of the recipe-to-purchase-unit conversion engine.
Immutable value objects; warnings are structured, display text is derived.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Quantity(BaseModel):
    """
    Amount of something in a unit.

    Example:
        >>> q = Quantity(magnitude=1.5, unit="fl oz")
        >>> q.scale(10).magnitude
        15.0
    """

    model_config = ConfigDict(frozen=True)

    magnitude: float = Field(..., ge=0, description="Non-negative amount")
    unit: str = Field(..., description="Free-form unit string")

    def scale(self, factor: float) -> Quantity:
        """Return a new Quantity multiplied by factor."""
        if factor < 0:
            raise ValueError(f"Scale factor must be non-negative: {factor}")
        return Quantity(magnitude=self.magnitude * factor, unit=self.unit)

    def __str__(self) -> str:
        return f"{self.magnitude:g} {self.unit}"


class PackageSpec(BaseModel):
    """
    How a product is purchased.

    Attributes:
        purchase_unit: Unit inventory is counted in ("bottle", "bag", "kg")
        size_value: Amount one purchase unit holds (750 for a 750 ml bottle)
        size_unit: Unit of size_value ("ml")
        cost_per_purchase_unit: Price of one purchase unit

    Example:
        >>> bottle = PackageSpec(
        ...     purchase_unit="bottle",
        ...     size_value=750,
        ...     size_unit="ml",
        ...     cost_per_purchase_unit=20.0,
        ... )
        >>> bottle.has_size
        True
    """

    model_config = ConfigDict(frozen=True)

    purchase_unit: str = Field(..., description="Unit inventory is counted in")
    size_value: Optional[float] = Field(None, ge=0, description="Package size amount")
    size_unit: Optional[str] = Field(None, description="Package size unit")
    cost_per_purchase_unit: Optional[float] = Field(
        None, ge=0, description="Cost of one purchase unit"
    )

    @property
    def has_size(self) -> bool:
        """Size counts only when positive and paired with a unit."""
        return bool(
            self.size_value is not None
            and self.size_value > 0
            and self.size_unit
            and self.size_unit.strip()
        )


class ConversionStrategy(str, Enum):
    """Strategy the engine resolved for a conversion."""

    DIRECT = "direct"
    VOLUME_TO_VOLUME = "volume_to_volume"
    WEIGHT_TO_WEIGHT = "weight_to_weight"
    DENSITY_TO_WEIGHT = "density_to_weight"
    COUNT_TO_CONTAINER = "count_to_container"
    FALLBACK = "fallback"


# ═══════════════════════════════════════════════════════════
# WARNINGS
# ═══════════════════════════════════════════════════════════


class FallbackUnitsWarning(BaseModel):
    """
    Units could not be reconciled; 1:1 ratio was used.

    Example:
        >>> w = FallbackUnitsWarning(
        ...     recipe_unit="pinch", purchase_unit="bag", size_unit="kg", quantity=2
        ... )
        >>> w.message
        'Could not convert 2 pinch to bag (package unit: kg). Using 1:1 ratio.'
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["fallback_units"] = "fallback_units"
    recipe_unit: str
    purchase_unit: str
    size_unit: Optional[str] = None
    quantity: float

    @property
    def message(self) -> str:
        size = self.size_unit or "none"
        return (
            f"Could not convert {self.quantity:g} {self.recipe_unit} "
            f"to {self.purchase_unit} (package unit: {size}). Using 1:1 ratio."
        )

    def __str__(self) -> str:
        return self.message


class ProductMissingWarning(BaseModel):
    """Ingredient line referenced a product that could not be resolved."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["product_missing"] = "product_missing"
    product_id: Optional[str] = None

    @property
    def message(self) -> str:
        if self.product_id:
            return f"Product not found: {self.product_id}"
        return "Product not found"

    def __str__(self) -> str:
        return self.message


class LowStockWarning(BaseModel):
    """Projected stock after a sale falls under the low-stock threshold."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["low_stock"] = "low_stock"
    product_name: str
    remaining_stock: float
    unit: str

    @property
    def message(self) -> str:
        return (
            f"Low stock warning: {self.product_name} will have "
            f"{self.remaining_stock:.2f} {self.unit} remaining"
        )

    def __str__(self) -> str:
        return self.message


CostingWarning = Annotated[
    Union[FallbackUnitsWarning, ProductMissingWarning, LowStockWarning],
    Field(discriminator="kind"),
]


# ═══════════════════════════════════════════════════════════
# RESULT
# ═══════════════════════════════════════════════════════════


class ConversionResult(BaseModel):
    """
    Outcome of converting a recipe quantity into purchase units.

    Attributes:
        inventory_deduction: Purchase units consumed
        inventory_deduction_unit: Always the package's purchase unit
        cost_impact: inventory_deduction * cost per purchase unit
        conversion_applied: False for direct match and fallback
        conversion_path: Unit labels traversed, e.g. ("fl oz", "ml", "bottle")
        strategy: Strategy that produced the result
        warnings: Structured warnings, never dropped
    """

    model_config = ConfigDict(frozen=True)

    inventory_deduction: float
    inventory_deduction_unit: str
    cost_impact: float = 0.0
    conversion_applied: bool
    conversion_path: tuple[str, ...] = ()
    strategy: ConversionStrategy
    warnings: tuple[CostingWarning, ...] = ()

    @property
    def percentage_of_package(self) -> float:
        """Share of one purchase unit consumed, in percent."""
        return self.inventory_deduction * 100
