#!/usr/bin/env python3
"""
Sale impact preview.

Loads a recipe's ingredient lines from JSON and prints what selling it
N times does to inventory and cost.

Usage:
    inventory-costing-preview recipe.json --sold 10
    python -m inventory_costing.scripts.preview_sale_impact recipe.json --sold 10

Input is either a list of ingredient lines or an object with an
"ingredients" list:

    [
      {
        "product_id": "vodka-123",
        "quantity": 1.5,
        "unit": "fl oz",
        "product": {
          "id": "vodka-123",
          "name": "Vodka",
          "cost_per_unit": 20,
          "purchase_unit": "bottle",
          "size_value": 750,
          "size_unit": "ml",
          "current_stock": 12
        }
      }
    ]
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

import structlog
from dotenv import load_dotenv
from pydantic import TypeAdapter, ValidationError

from inventory_costing.application.costing.sale_impact_service import (
    calculate_sale_impact,
)
from inventory_costing.application.costing.prep_cost_service import round_currency
from inventory_costing.domain.costing.models import IngredientLine, SaleImpactSummary
from inventory_costing.domain.shared.errors import ConfigurationError
from inventory_costing.infrastructure.config import (
    get_currency_decimals,
    get_log_level,
    get_low_stock_threshold,
)
from inventory_costing.infrastructure.logging_config import configure_logging

logger = structlog.get_logger(__name__)

_LINES_ADAPTER = TypeAdapter(list[IngredientLine])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inventory-costing-preview",
        description="Preview inventory deduction and cost for a menu item sale.",
    )
    parser.add_argument("recipe", type=Path, help="JSON file with ingredient lines")
    parser.add_argument(
        "--sold",
        type=float,
        default=1.0,
        help="Portions sold (default: 1)",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Low-stock threshold in purchase units (default: INVENTORY_LOW_STOCK_THRESHOLD)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    return parser


def load_lines(path: Path) -> list[IngredientLine]:
    """Read and validate ingredient lines from a JSON file."""
    payload: Any = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("ingredients", [])
    return _LINES_ADAPTER.validate_python(payload)


def render_summary(summary: SaleImpactSummary, decimals: int) -> list[str]:
    """Human-readable report lines."""
    lines = [f"Sale impact for {summary.quantity_sold:g} sold"]

    for item in summary.ingredients:
        flag = "  LOW STOCK" if item.low_stock_warning else ""
        lines.append(
            f"  {item.product_name}: {item.recipe_quantity} -> "
            f"{item.deduction_amount:.4f} {item.deduction_unit}, "
            f"${round_currency(item.cost, decimals):.{decimals}f}, "
            f"remaining {item.remaining_stock:.2f}{flag}"
        )

    lines.append(f"Total cost: ${round_currency(summary.total_cost, decimals):.{decimals}f}")

    if summary.warnings:
        lines.append("Warnings:")
        lines.extend(f"  - {warning.message}" for warning in summary.warnings)

    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point. Returns the process exit code."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        configure_logging(args.log_level or get_log_level())
        decimals = get_currency_decimals()
        threshold = (
            get_low_stock_threshold() if args.threshold is None else args.threshold
        )
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    if args.sold < 0:
        print("--sold must be non-negative", file=sys.stderr)
        return 1

    try:
        lines = load_lines(args.recipe)
    except OSError as e:
        logger.error("Cannot read recipe file", path=str(args.recipe), error=str(e))
        return 1
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error("Invalid recipe file", path=str(args.recipe), error=str(e))
        return 1

    summary = calculate_sale_impact(lines, args.sold, threshold)

    for line in render_summary(summary, decimals):
        print(line)

    return 0


if __name__ == "__main__":
    sys.exit(main())
