"""
Prep Cost Service.

Recipe costing shared by prep recipes and menu recipes.
Delegates unit reconciliation to the conversion engine and keeps
costs at full precision; rounding happens only for display.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

import structlog

from inventory_costing.domain.conversion.engine import convert
from inventory_costing.domain.conversion.models import (
    CostingWarning,
    ProductMissingWarning,
    Quantity,
)
from inventory_costing.domain.costing.models import (
    IngredientCost,
    IngredientLine,
    IngredientsCostSummary,
    RecipePortions,
)
from inventory_costing.domain.shared.errors import ProductNotFoundError
from inventory_costing.infrastructure.config import get_currency_decimals

logger = structlog.get_logger(__name__)


def calculate_ingredient_cost(line: IngredientLine) -> IngredientCost:
    """
    Cost of one ingredient line.

    Args:
        line: Ingredient with its resolved product

    Returns:
        IngredientCost with deduction in purchase units and cost impact

    Raises:
        ProductNotFoundError: If the line has no resolved product

    Example:
        >>> line = IngredientLine(
        ...     product_id="pasta-456",
        ...     quantity=4,
        ...     unit="oz",
        ...     product=ProductInfo(
        ...         id="pasta-456", name="Pasta", cost_per_unit=5,
        ...         purchase_unit="lb", size_value=1, size_unit="lb",
        ...     ),
        ... )
        >>> calculate_ingredient_cost(line).cost_impact
        1.25
    """
    product = line.product
    if product is None:
        raise ProductNotFoundError(line.product_id)

    # Unpriced products cost nothing; the engine is not consulted
    if not product.cost_per_unit:
        return IngredientCost(
            product_id=product.id,
            product_name=product.name,
            quantity=line.quantity,
            unit=line.unit,
            cost_per_unit=0.0,
            inventory_deduction=line.quantity,
            inventory_deduction_unit=line.unit,
            cost_impact=0.0,
            conversion_applied=False,
        )

    result = convert(line.quantity, line.unit, product.package, product.name)

    return IngredientCost(
        product_id=product.id,
        product_name=product.name,
        quantity=line.quantity,
        unit=line.unit,
        cost_per_unit=product.cost_per_unit,
        inventory_deduction=result.inventory_deduction,
        inventory_deduction_unit=result.inventory_deduction_unit,
        cost_impact=result.cost_impact,
        conversion_applied=result.conversion_applied,
        warnings=result.warnings,
    )


def calculate_ingredients_cost(lines: Iterable[IngredientLine]) -> IngredientsCostSummary:
    """
    Cost of a list of ingredient lines.

    A line without a product does not abort the batch: it is listed with
    zero cost and reported as a ProductMissingWarning. Engine warnings
    from every line are carried into the summary.
    """
    ingredients: list[IngredientCost] = []
    warnings: list[CostingWarning] = []
    total_cost = 0.0

    for line in lines:
        try:
            cost = calculate_ingredient_cost(line)
        except ProductNotFoundError as e:
            logger.warning("Ingredient product missing", product_id=e.product_id)
            warnings.append(ProductMissingWarning(product_id=e.product_id))
            ingredients.append(
                IngredientCost(
                    product_id=line.product_id,
                    product_name="Unknown",
                    quantity=line.quantity,
                    unit=line.unit,
                    inventory_deduction=0.0,
                    inventory_deduction_unit=line.unit,
                )
            )
            continue

        ingredients.append(cost)
        warnings.extend(cost.warnings)
        total_cost += cost.cost_impact

    return IngredientsCostSummary(
        total_cost=total_cost,
        ingredients=tuple(ingredients),
        warnings=tuple(warnings),
    )


def calculate_recipe_portions(line: IngredientLine) -> RecipePortions:
    """
    How many recipe portions one purchase unit holds.

    Uses the same conversion as costing, so the portion count is the
    inverse of the per-portion inventory deduction.

    Args:
        line: Ingredient with its resolved product; quantity is one portion

    Returns:
        RecipePortions. A zero-quantity portion yields 0 portions.
        Engine warnings (e.g. 1:1 fallback) are carried on the result.

    Raises:
        ProductNotFoundError: If the line has no resolved product

    Example:
        >>> line = IngredientLine(
        ...     product_id="rice-202",
        ...     quantity=1,
        ...     unit="cup",
        ...     product=ProductInfo(
        ...         id="rice-202", name="White Rice", cost_per_unit=15,
        ...         purchase_unit="bag", size_value=10, size_unit="kg",
        ...     ),
        ... )
        >>> round(calculate_recipe_portions(line).total_portions, 2)
        54.05
    """
    product = line.product
    if product is None:
        raise ProductNotFoundError(line.product_id)

    result = convert(line.quantity, line.unit, product.package, product.name)
    deduction = result.inventory_deduction
    total_portions = 1 / deduction if deduction > 0 else 0.0

    logger.debug(
        "Recipe portions calculated",
        product=product.name,
        portions=total_portions,
        strategy=result.strategy.value,
    )

    return RecipePortions(
        product_id=product.id,
        product_name=product.name,
        recipe_quantity=Quantity(magnitude=line.quantity, unit=line.unit),
        purchase_unit=result.inventory_deduction_unit,
        total_portions=total_portions,
        cost_per_portion=result.cost_impact,
        strategy=result.strategy,
        warnings=result.warnings,
    )


def round_currency(value: float, decimals: Optional[int] = None) -> float:
    """
    Round a monetary amount half-up.

    Args:
        value: Amount at full precision
        decimals: Places to keep, defaults to COST_CURRENCY_DECIMALS

    Example:
        >>> round_currency(0.555)
        0.56
        >>> round_currency(2.675)
        2.68
    """
    if decimals is None:
        decimals = get_currency_decimals()
    quantizer = Decimal("1") if decimals <= 0 else Decimal("0." + ("0" * decimals))
    return float(Decimal(str(value)).quantize(quantizer, rounding=ROUND_HALF_UP))


def format_cost_result(cost: IngredientCost, decimals: Optional[int] = None) -> str:
    """
    One-line display of an ingredient cost.

    Example:
        "Vodka: 1.5 fl oz (0.0591 bottle) = $1.18" when a conversion applied,
        "Sugar: 2 kg = $16.00" otherwise.
    """
    if decimals is None:
        decimals = get_currency_decimals()
    amount = f"${round_currency(cost.cost_impact, decimals):.{decimals}f}"
    recipe_part = f"{cost.product_name}: {cost.quantity:g} {cost.unit}"

    if cost.conversion_applied:
        deduction = f"{cost.inventory_deduction:.4f} {cost.inventory_deduction_unit}"
        return f"{recipe_part} ({deduction}) = {amount}"
    return f"{recipe_part} = {amount}"
