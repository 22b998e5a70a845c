"""
Conversion engine.

Turns a recipe quantity into the number of purchase units it consumes
and the cost of that consumption.

Strategy order (first applicable wins):
1. Direct match: same normalized unit, package size ignored
2. Volume → Volume via milliliters
3. Weight → Weight via grams
4. Density bridge: volume recipe, weight package, known ingredient
5. Count bridge: count recipe, count package size
6. Fallback: 1:1 ratio with a warning

The engine never raises on unit problems; unresolved units fall back to
1:1 and carry a warning.
"""

from __future__ import annotations

from typing import Optional

import structlog

from inventory_costing.domain.conversion.models import (
    ConversionResult,
    ConversionStrategy,
    FallbackUnitsWarning,
    PackageSpec,
)
from inventory_costing.domain.units.factors import (
    CUP_ML,
    density_for,
    to_grams,
    to_milliliters,
)
from inventory_costing.domain.units.models import (
    CountMeasure,
    VolumeMeasure,
    WeightMeasure,
)
from inventory_costing.domain.units.taxonomy import match_key, parse_unit

logger = structlog.get_logger(__name__)


def convert(
    recipe_qty: float,
    recipe_unit: str,
    package: PackageSpec,
    ingredient_name: str = "",
) -> ConversionResult:
    """
    Convert a recipe quantity into purchase units.

    Args:
        recipe_qty: Amount used by one recipe portion (or by a whole sale)
        recipe_unit: Unit of recipe_qty, free-form
        package: How the product is purchased
        ingredient_name: Product name, used only for density lookup

    Returns:
        ConversionResult with deduction, cost, path and warnings

    Example:
        >>> bottle = PackageSpec(
        ...     purchase_unit="bottle", size_value=750, size_unit="ml",
        ...     cost_per_purchase_unit=20.0,
        ... )
        >>> result = convert(1.5, "fl oz", bottle)
        >>> round(result.inventory_deduction, 4)
        0.0591
        >>> result.conversion_path
        ('fl oz', 'ml', 'bottle')
    """
    purchase_unit = package.purchase_unit

    # 1. Direct match: the purchase unit is the measurement unit
    recipe_key = match_key(recipe_unit)
    if recipe_key and recipe_key == match_key(purchase_unit):
        return _result(
            recipe_qty,
            package,
            conversion_applied=False,
            path=(recipe_unit,),
            strategy=ConversionStrategy.DIRECT,
        )

    if package.has_size:
        deduction = _bridge(recipe_qty, recipe_unit, package, ingredient_name)
        if deduction is not None:
            amount, path, strategy = deduction
            return _result(
                amount,
                package,
                conversion_applied=True,
                path=path,
                strategy=strategy,
            )

    # 6. Fallback
    warning = FallbackUnitsWarning(
        recipe_unit=recipe_unit,
        purchase_unit=purchase_unit,
        size_unit=package.size_unit,
        quantity=recipe_qty,
    )
    logger.warning(
        "Unit conversion fell back to 1:1",
        recipe_unit=recipe_unit,
        purchase_unit=purchase_unit,
        size_unit=package.size_unit,
        quantity=recipe_qty,
        ingredient=ingredient_name or None,
    )
    return _result(
        recipe_qty,
        package,
        conversion_applied=False,
        path=(recipe_unit, purchase_unit),
        strategy=ConversionStrategy.FALLBACK,
        warnings=(warning,),
    )


def _bridge(
    recipe_qty: float,
    recipe_unit: str,
    package: PackageSpec,
    ingredient_name: str,
) -> Optional[tuple[float, tuple[str, ...], ConversionStrategy]]:
    """Resolve strategies 2-5. Requires a package size."""
    size_value = package.size_value or 0.0
    purchase_unit = package.purchase_unit
    recipe = parse_unit(recipe_unit)
    size = parse_unit(package.size_unit)

    # 2. Volume → Volume
    if isinstance(recipe, VolumeMeasure) and isinstance(size, VolumeMeasure):
        recipe_ml = to_milliliters(recipe_qty, recipe.unit)
        package_ml = to_milliliters(size_value, size.unit)
        return (
            recipe_ml / package_ml,
            (recipe_unit, "ml", purchase_unit),
            ConversionStrategy.VOLUME_TO_VOLUME,
        )

    # 3. Weight → Weight
    if isinstance(recipe, WeightMeasure) and isinstance(size, WeightMeasure):
        recipe_g = to_grams(recipe_qty, recipe.unit)
        package_g = to_grams(size_value, size.unit)
        return (
            recipe_g / package_g,
            (recipe_unit, "g", purchase_unit),
            ConversionStrategy.WEIGHT_TO_WEIGHT,
        )

    # 4. Density bridge
    if isinstance(recipe, VolumeMeasure) and isinstance(size, WeightMeasure):
        grams_per_cup = density_for(ingredient_name)
        if grams_per_cup is not None:
            cups = to_milliliters(recipe_qty, recipe.unit) / CUP_ML
            recipe_g = cups * grams_per_cup
            package_g = to_grams(size_value, size.unit)
            return (
                recipe_g / package_g,
                (recipe_unit, "ml", "cup", "g", purchase_unit),
                ConversionStrategy.DENSITY_TO_WEIGHT,
            )

    # 5. Count bridge
    if isinstance(recipe, CountMeasure) and isinstance(size, CountMeasure):
        return (
            recipe_qty / size_value,
            (recipe_unit, purchase_unit),
            ConversionStrategy.COUNT_TO_CONTAINER,
        )

    return None


def _result(
    deduction: float,
    package: PackageSpec,
    conversion_applied: bool,
    path: tuple[str, ...],
    strategy: ConversionStrategy,
    warnings: tuple[FallbackUnitsWarning, ...] = (),
) -> ConversionResult:
    cost = package.cost_per_purchase_unit
    return ConversionResult(
        inventory_deduction=deduction,
        inventory_deduction_unit=package.purchase_unit,
        cost_impact=deduction * cost if cost else 0.0,
        conversion_applied=conversion_applied,
        conversion_path=path,
        strategy=strategy,
        warnings=warnings,
    )
