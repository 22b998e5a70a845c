"""
Costing domain models.

Products and recipe ingredient lines as loaded by the caller, and the
results produced by the cost and sale-impact calculators.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from inventory_costing.domain.conversion.models import (
    ConversionStrategy,
    CostingWarning,
    PackageSpec,
    Quantity,
)


class ProductInfo(BaseModel):
    """
    Inventory product with its packaging and price.

    Example:
        >>> vodka = ProductInfo(
        ...     id="vodka-123",
        ...     name="Vodka",
        ...     cost_per_unit=20.0,
        ...     purchase_unit="bottle",
        ...     size_value=750,
        ...     size_unit="ml",
        ...     current_stock=12,
        ... )
        >>> vodka.package.has_size
        True
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Product identifier")
    name: str = Field(..., description="Display name, also used for density lookup")
    cost_per_unit: Optional[float] = Field(None, ge=0, description="Cost per purchase unit")
    purchase_unit: str = Field(..., description="Unit inventory is counted in")
    size_value: Optional[float] = Field(None, ge=0, description="Amount per purchase unit")
    size_unit: Optional[str] = Field(None, description="Unit of size_value")
    current_stock: float = Field(0.0, description="On-hand stock in purchase units")

    @property
    def package(self) -> PackageSpec:
        """Packaging view consumed by the conversion engine."""
        return PackageSpec(
            purchase_unit=self.purchase_unit,
            size_value=self.size_value,
            size_unit=self.size_unit,
            cost_per_purchase_unit=self.cost_per_unit,
        )


class IngredientLine(BaseModel):
    """One recipe ingredient: quantity per portion and the product it draws on."""

    model_config = ConfigDict(frozen=True)

    product_id: str = Field(..., description="Referenced product identifier")
    quantity: float = Field(..., ge=0, description="Amount per portion")
    unit: str = Field(..., description="Recipe unit")
    product: Optional[ProductInfo] = Field(None, description="Resolved product, if loaded")


# ═══════════════════════════════════════════════════════════
# PREP COST RESULTS
# ═══════════════════════════════════════════════════════════


class IngredientCost(BaseModel):
    """Cost and inventory deduction of one ingredient line."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    product_name: str
    quantity: float
    unit: str
    cost_per_unit: float = 0.0
    inventory_deduction: float
    inventory_deduction_unit: str
    cost_impact: float = 0.0
    conversion_applied: bool = False
    warnings: tuple[CostingWarning, ...] = ()


class IngredientsCostSummary(BaseModel):
    """Cost of a whole recipe, line by line."""

    model_config = ConfigDict(frozen=True)

    total_cost: float = 0.0
    ingredients: tuple[IngredientCost, ...] = ()
    warnings: tuple[CostingWarning, ...] = ()


class RecipePortions(BaseModel):
    """
    Portions one purchase unit yields for an ingredient line.

    Attributes:
        recipe_quantity: Amount used by a single portion
        total_portions: Portions per purchase unit, 0 when the portion is empty
        cost_per_portion: Cost of one portion in currency
    """

    model_config = ConfigDict(frozen=True)

    product_id: str
    product_name: str
    recipe_quantity: Quantity
    purchase_unit: str
    total_portions: float = Field(..., ge=0)
    cost_per_portion: float = Field(0.0, ge=0)
    strategy: ConversionStrategy
    warnings: tuple[CostingWarning, ...] = ()


# ═══════════════════════════════════════════════════════════
# SALE IMPACT RESULTS
# ═══════════════════════════════════════════════════════════


class SaleImpactLine(BaseModel):
    """
    Projected effect of a sale on one product.

    Attributes:
        recipe_quantity: Recipe quantity for the whole sale
        deduction_amount: Purchase units consumed by the whole sale
        remaining_stock: current_stock - deduction_amount, may be negative
        low_stock_warning: remaining_stock fell under the threshold
    """

    model_config = ConfigDict(frozen=True)

    product_id: str
    product_name: str
    recipe_quantity: Quantity
    deduction_amount: float
    deduction_unit: str
    cost: float
    remaining_stock: float
    low_stock_warning: bool
    conversion_applied: bool
    strategy: ConversionStrategy


class SaleImpactSummary(BaseModel):
    """Projected effect of selling a menu item N times."""

    model_config = ConfigDict(frozen=True)

    quantity_sold: float = 0.0
    ingredients: tuple[SaleImpactLine, ...] = ()
    total_cost: float = 0.0
    warnings: tuple[CostingWarning, ...] = ()
