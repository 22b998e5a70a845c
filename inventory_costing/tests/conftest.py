"""
Shared fixtures for inventory costing tests.

Products mirror the scenarios used to cross-check the server-side
deduction procedure.
"""

from typing import Iterator

import pytest
import structlog

from inventory_costing.domain.conversion.models import PackageSpec
from inventory_costing.domain.costing.models import IngredientLine, ProductInfo


# ═══════════════════════════════════════════════════════════
# ENVIRONMENT
# ═══════════════════════════════════════════════════════════


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from the developer's environment and logging setup."""
    for name in ("INVENTORY_LOW_STOCK_THRESHOLD", "COST_CURRENCY_DECIMALS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield
    structlog.reset_defaults()


# ═══════════════════════════════════════════════════════════
# PACKAGE FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def vodka_bottle() -> PackageSpec:
    """750 ml bottle at $20."""
    return PackageSpec(
        purchase_unit="bottle",
        size_value=750,
        size_unit="ml",
        cost_per_purchase_unit=20.0,
    )


@pytest.fixture
def rice_bag() -> PackageSpec:
    """10 kg bag at $15."""
    return PackageSpec(
        purchase_unit="bag",
        size_value=10,
        size_unit="kg",
        cost_per_purchase_unit=15.0,
    )


# ═══════════════════════════════════════════════════════════
# PRODUCT FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def vodka() -> ProductInfo:
    return ProductInfo(
        id="vodka-123",
        name="Vodka",
        cost_per_unit=20.0,
        purchase_unit="bottle",
        size_value=750,
        size_unit="ml",
        current_stock=12,
    )


@pytest.fixture
def lime() -> ProductInfo:
    return ProductInfo(
        id="lime-456",
        name="Lime",
        cost_per_unit=0.50,
        purchase_unit="each",
        size_value=1,
        size_unit="each",
        current_stock=40,
    )


@pytest.fixture
def rice() -> ProductInfo:
    return ProductInfo(
        id="rice-202",
        name="Rice",
        cost_per_unit=15.0,
        purchase_unit="bag",
        size_value=10,
        size_unit="kg",
        current_stock=10,
    )


@pytest.fixture
def vodka_line(vodka: ProductInfo) -> IngredientLine:
    """1.5 fl oz pour."""
    return IngredientLine(product_id=vodka.id, quantity=1.5, unit="fl oz", product=vodka)


@pytest.fixture
def lime_line(lime: ProductInfo) -> IngredientLine:
    """Half a lime."""
    return IngredientLine(product_id=lime.id, quantity=0.5, unit="each", product=lime)


@pytest.fixture
def rice_line(rice: ProductInfo) -> IngredientLine:
    """2 cups of rice."""
    return IngredientLine(product_id=rice.id, quantity=2, unit="cup", product=rice)


@pytest.fixture
def missing_line() -> IngredientLine:
    """Line whose product was never loaded."""
    return IngredientLine(product_id="ghost-999", quantity=1, unit="each")
