"""
Domain exceptions.

Typed exceptions for explicit error handling.
Unit fallbacks are not errors: they are reported as warnings on the
conversion result. Only the conditions below interrupt a calculation.
"""

from __future__ import annotations

from typing import Optional


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain-specific exceptions inherit from this.
    Allows catching all domain errors with single except clause.
    """

    pass


# ═══════════════════════════════════════════════════════════
# COSTING DOMAIN EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class CostingError(DomainError):
    """Base exception for costing domain."""

    pass


class ProductNotFoundError(CostingError):
    """
    Ingredient line has no resolvable product.

    Raised when:
    - Recipe ingredient references a product that was not loaded
    - Product was deleted after the recipe was authored

    Cost is meaningless without a price, so the single-ingredient
    calculator stops here. Batch calculators demote it to a warning.

    Example:
        >>> raise ProductNotFoundError("vodka-123")
    """

    def __init__(self, product_id: Optional[str] = None) -> None:
        self.product_id = product_id
        if product_id:
            message = f"Product not found: {product_id}"
        else:
            message = "Product not found"
        super().__init__(message)


# ═══════════════════════════════════════════════════════════
# CONFIGURATION EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ConfigurationError(DomainError):
    """
    Environment configuration is invalid.

    Raised when:
    - Numeric setting cannot be parsed
    - Setting is out of its allowed range

    Example:
        >>> raise ConfigurationError(
        ...     "INVENTORY_LOW_STOCK_THRESHOLD must be a number, got 'abc'"
        ... )
    """

    pass
