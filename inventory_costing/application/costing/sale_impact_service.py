"""
Sale Impact Service.

Previews what selling a menu item N times does to inventory:
purchase units consumed, cost, remaining stock and low-stock flags.

Mirrors the server-side deduction so the preview and the real
deduction agree.
"""

from __future__ import annotations

from typing import Iterable, Optional

import structlog

from inventory_costing.domain.conversion.engine import convert
from inventory_costing.domain.conversion.models import (
    CostingWarning,
    FallbackUnitsWarning,
    LowStockWarning,
    ProductMissingWarning,
    Quantity,
)
from inventory_costing.domain.costing.models import (
    IngredientLine,
    SaleImpactLine,
    SaleImpactSummary,
)
from inventory_costing.infrastructure.config import DEFAULT_LOW_STOCK_THRESHOLD

logger = structlog.get_logger(__name__)


def calculate_sale_impact(
    lines: Iterable[IngredientLine],
    quantity_sold: float,
    low_stock_threshold: float = DEFAULT_LOW_STOCK_THRESHOLD,
) -> SaleImpactSummary:
    """
    Project the inventory impact of a sale.

    The engine converts one portion; deduction and cost are then scaled
    by quantity_sold, so the result is linear in quantity_sold.

    Args:
        lines: Recipe ingredients with resolved products
        quantity_sold: Portions sold
        low_stock_threshold: Flag lines whose remaining stock falls strictly
            below this. Callers resolve INVENTORY_LOW_STOCK_THRESHOLD
            themselves (see get_low_stock_threshold)

    Returns:
        SaleImpactSummary. Lines without a product are skipped and reported
        as ProductMissingWarning. When quantity_sold is 0 nothing is deducted
        and no fallback or low-stock warnings are listed; the per-line
        low_stock_warning flag still reflects the current stock.

    Example:
        >>> vodka = ProductInfo(
        ...     id="vodka-123", name="Vodka", cost_per_unit=20.0,
        ...     purchase_unit="bottle", size_value=750, size_unit="ml",
        ...     current_stock=12,
        ... )
        >>> line = IngredientLine(
        ...     product_id="vodka-123", quantity=1.5, unit="fl oz", product=vodka,
        ... )
        >>> summary = calculate_sale_impact([line], quantity_sold=10)
        >>> round(summary.ingredients[0].remaining_stock, 2)
        11.41
    """
    if quantity_sold < 0:
        raise ValueError(f"Quantity sold must be non-negative: {quantity_sold}")

    impacts: list[SaleImpactLine] = []
    warnings: list[CostingWarning] = []
    total_cost = 0.0

    for line in lines:
        product = line.product
        if product is None:
            logger.warning("Sale impact skipped missing product", product_id=line.product_id)
            warnings.append(ProductMissingWarning(product_id=line.product_id))
            continue

        per_portion = convert(line.quantity, line.unit, product.package, product.name)

        deduction = per_portion.inventory_deduction * quantity_sold
        cost = per_portion.cost_impact * quantity_sold
        remaining = product.current_stock - deduction
        low_stock = remaining < low_stock_threshold

        recipe_quantity = Quantity(magnitude=line.quantity, unit=line.unit).scale(quantity_sold)

        for warning in per_portion.warnings if quantity_sold > 0 else ():
            if isinstance(warning, FallbackUnitsWarning):
                warning = warning.model_copy(update={"quantity": recipe_quantity.magnitude})
            warnings.append(warning)

        impacts.append(
            SaleImpactLine(
                product_id=product.id,
                product_name=product.name,
                recipe_quantity=recipe_quantity,
                deduction_amount=deduction,
                deduction_unit=per_portion.inventory_deduction_unit,
                cost=cost,
                remaining_stock=remaining,
                low_stock_warning=low_stock,
                conversion_applied=per_portion.conversion_applied,
                strategy=per_portion.strategy,
            )
        )
        total_cost += cost

        # A zero sale has no impact to warn about
        if low_stock and quantity_sold > 0:
            logger.info(
                "Low stock after sale",
                product=product.name,
                remaining_stock=remaining,
                threshold=low_stock_threshold,
            )
            warnings.append(
                LowStockWarning(
                    product_name=product.name,
                    remaining_stock=remaining,
                    unit=per_portion.inventory_deduction_unit,
                )
            )

    return SaleImpactSummary(
        quantity_sold=quantity_sold,
        ingredients=tuple(impacts),
        total_cost=total_cost,
        warnings=tuple(warnings),
    )


def generate_reference_id(
    pos_item_name: str,
    sale_date: str,
    external_order_id: Optional[str] = None,
) -> str:
    """
    Duplicate-detection key for a processed sale.

    Example:
        >>> generate_reference_id("Margarita", "2024-01-15", "ord-9")
        'ord-9_Margarita_2024-01-15'
        >>> generate_reference_id("Margarita", "2024-01-15")
        'Margarita_2024-01-15'
    """
    if external_order_id:
        return f"{external_order_id}_{pos_item_name}_{sale_date}"
    return f"{pos_item_name}_{sale_date}"
