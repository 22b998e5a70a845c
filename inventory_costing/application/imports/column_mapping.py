"""
Column mapping suggestions for POS sales CSV imports.

Keyword heuristics score each CSV header against the known sales fields;
sample values are checked against the unit taxonomy to spot unit columns.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

import structlog

from inventory_costing.domain.imports.models import (
    AdjustmentType,
    ColumnMapping,
    ColumnScore,
    KeywordPattern,
    MappingConfidence,
    MappingValidation,
    SummaryCheck,
    TargetField,
)
from inventory_costing.domain.units.models import UnitCategory
from inventory_costing.domain.units.taxonomy import classify

logger = structlog.get_logger(__name__)


FIELD_PATTERNS: dict[TargetField, KeywordPattern] = {
    TargetField.ITEM_NAME: KeywordPattern(
        keywords=("item", "name", "product", "menu", "dish", "modifier"),
        weight=10,
    ),
    TargetField.QUANTITY: KeywordPattern(
        keywords=("qty", "quantity", "count", "number", "amount sold"),
        aliases=("qty sold", "#"),
        weight=8,
    ),
    TargetField.UNIT_PRICE: KeywordPattern(
        keywords=(
            "unit price",
            "price",
            "default price",
            "avg price",
            "avg. price",
            "avg. item price",
        ),
        aliases=("unit_price", "item price"),
        weight=7,
    ),
    TargetField.TOTAL_PRICE: KeywordPattern(
        keywords=("total", "amount", "total price", "total amount"),
        aliases=("total_price", "total_amount"),
        weight=6,
    ),
    TargetField.GROSS_SALES: KeywordPattern(
        keywords=("gross sales", "gross", "gross revenue"),
        weight=9,
    ),
    TargetField.NET_SALES: KeywordPattern(
        keywords=("net sales", "net", "net revenue", "net sales w/o"),
        weight=9,
    ),
    TargetField.DISCOUNT: KeywordPattern(
        keywords=("discount", "discounts", "discount amount", "discount total"),
        weight=8,
    ),
    TargetField.TAX: KeywordPattern(
        keywords=("tax", "taxes", "sales tax", "tax amount"),
        weight=8,
    ),
    TargetField.TIP: KeywordPattern(
        keywords=("tip", "tips", "gratuity"),
        weight=8,
    ),
    TargetField.SERVICE_CHARGE: KeywordPattern(
        keywords=("service charge", "service", "surcharge", "auto gratuity"),
        weight=8,
    ),
    TargetField.FEE: KeywordPattern(
        keywords=("fee", "fees", "processing fee", "delivery fee"),
        weight=7,
    ),
    TargetField.SALE_DATE: KeywordPattern(
        keywords=("date", "sale date", "order date", "transaction date"),
        aliases=("sale_date", "order_date"),
        weight=9,
    ),
    TargetField.SALE_TIME: KeywordPattern(
        keywords=("time", "sale time", "order time"),
        aliases=("sale_time",),
        weight=7,
    ),
    TargetField.ORDER_ID: KeywordPattern(
        keywords=("order id", "transaction id", "check", "check number", "receipt"),
        aliases=("order_id", "transaction_id", "check #"),
        weight=8,
    ),
    TargetField.CATEGORY: KeywordPattern(
        keywords=("category", "sales category", "item category"),
        weight=6,
    ),
    TargetField.DEPARTMENT: KeywordPattern(
        keywords=("department", "dept", "revenue class"),
        weight=6,
    ),
}

ADJUSTMENT_FIELDS: dict[TargetField, AdjustmentType] = {
    TargetField.DISCOUNT: AdjustmentType.DISCOUNT,
    TargetField.TAX: AdjustmentType.TAX,
    TargetField.TIP: AdjustmentType.TIP,
    TargetField.SERVICE_CHARGE: AdjustmentType.SERVICE_CHARGE,
    TargetField.FEE: AdjustmentType.FEE,
}

PRICE_FIELDS = (
    TargetField.TOTAL_PRICE,
    TargetField.UNIT_PRICE,
    TargetField.GROSS_SALES,
    TargetField.NET_SALES,
)

SUMMARY_PREFIXES = ("total", "totals:", "subtotal", "summary", "grand total")

# Rows sampled by the post-processing passes
SAMPLE_SIZE = 5


def _confidence_for(score: int) -> MappingConfidence:
    if score >= 70:
        return MappingConfidence.HIGH
    if score >= 40:
        return MappingConfidence.MEDIUM
    if score >= 20:
        return MappingConfidence.LOW
    return MappingConfidence.NONE


def score_column(csv_column: str, target_field: TargetField) -> ColumnScore:
    """
    Score a CSV header against a target field.

    Match strength, strongest first: exact keyword (weight x 10),
    exact alias (x 9), keyword contained in header (x 7), every word of
    a keyword present in header (x 5).

    Example:
        >>> score_column("Gross Sales", TargetField.GROSS_SALES)
        ColumnScore(score=90, confidence=<MappingConfidence.HIGH: 'high'>)
    """
    pattern = FIELD_PATTERNS.get(target_field)
    if pattern is None:
        return ColumnScore()

    column = csv_column.lower().strip()
    keywords = [kw.lower() for kw in pattern.keywords]
    score = 0

    if column in keywords:
        score = pattern.weight * 10
    elif any(column == alias.lower() for alias in pattern.aliases):
        score = pattern.weight * 9
    elif any(kw in column for kw in keywords):
        score = pattern.weight * 7
    elif any(all(word in column for word in kw.split(" ")) for kw in keywords):
        score = pattern.weight * 5

    return ColumnScore(score=score, confidence=_confidence_for(score))


def _is_number(value: str) -> bool:
    try:
        float(value)
    except ValueError:
        return False
    return True


def _looks_like_unit_column(column: str, sample_rows: Sequence[Mapping[str, str]]) -> bool:
    """Most non-empty sample values are recognizable non-numeric units."""
    values = [
        (row.get(column) or "").strip() for row in sample_rows[:SAMPLE_SIZE]
    ]
    values = [v for v in values if v]
    if not values:
        return False
    units = [
        v for v in values if not _is_number(v) and classify(v) is not UnitCategory.UNKNOWN
    ]
    return len(units) * 2 > len(values)


def suggest_column_mappings(
    headers: Iterable[str],
    sample_rows: Sequence[Mapping[str, str]] = (),
) -> list[ColumnMapping]:
    """
    Suggest a target field for every CSV header.

    Non-adjustment fields are mapped at most once; adjustment fields
    (discount, tax, tip, service charge, fee) may repeat. Headers without
    a confident match are returned unmapped.

    Post-processing, in order:
    1. Unmapped columns whose samples are mostly units map to UNIT
    2. Without an item-name column, the first unmapped text column
       becomes ITEM_NAME with low confidence
    3. With both gross and net sales mapped, gross is unmapped

    Args:
        headers: CSV header row
        sample_rows: First data rows, keyed by header

    Returns:
        One ColumnMapping per header, in header order
    """
    mappings: list[ColumnMapping] = []
    mapped_fields: set[TargetField] = set()

    for csv_column in headers:
        best_field: Optional[TargetField] = None
        best = ColumnScore()

        for target_field in FIELD_PATTERNS:
            candidate = score_column(csv_column, target_field)
            if candidate.score <= 0 or candidate.score <= best.score:
                continue
            if target_field in ADJUSTMENT_FIELDS or target_field not in mapped_fields:
                best_field, best = target_field, candidate

        if best_field is None or best.confidence is MappingConfidence.NONE:
            mappings.append(ColumnMapping(csv_column=csv_column))
            continue

        mapped_fields.add(best_field)
        adjustment = ADJUSTMENT_FIELDS.get(best_field)
        mappings.append(
            ColumnMapping(
                csv_column=csv_column,
                target_field=best_field,
                confidence=best.confidence,
                is_adjustment=adjustment is not None,
                adjustment_type=adjustment,
            )
        )

    if sample_rows and TargetField.UNIT not in mapped_fields:
        for index, mapping in enumerate(mappings):
            if mapping.target_field is None and _looks_like_unit_column(
                mapping.csv_column, sample_rows
            ):
                mappings[index] = mapping.model_copy(
                    update={
                        "target_field": TargetField.UNIT,
                        "confidence": MappingConfidence.MEDIUM,
                    }
                )
                break

    if not any(m.target_field is TargetField.ITEM_NAME for m in mappings):
        for index, mapping in enumerate(mappings):
            if mapping.target_field is not None:
                continue
            samples = [row.get(mapping.csv_column) for row in sample_rows[:SAMPLE_SIZE]]
            if any(v and not _is_number(v) for v in samples):
                mappings[index] = mapping.model_copy(
                    update={
                        "target_field": TargetField.ITEM_NAME,
                        "confidence": MappingConfidence.LOW,
                    }
                )
                break

    targets = {m.target_field for m in mappings}
    if TargetField.GROSS_SALES in targets and TargetField.NET_SALES in targets:
        for index, mapping in enumerate(mappings):
            if mapping.target_field is TargetField.GROSS_SALES:
                mappings[index] = ColumnMapping(csv_column=mapping.csv_column)
                break

    logger.debug(
        "Suggested column mappings",
        mapped=sum(1 for m in mappings if m.target_field is not None),
        total=len(mappings),
    )
    return mappings


def is_summary_row(row: Mapping[str, str]) -> SummaryCheck:
    """
    Detect totals/summary rows in POS exports.

    Example:
        >>> is_summary_row({"Item": "Grand Total", "Net Sales": "1520.00"}).is_summary
        True
    """
    if not row:
        return SummaryCheck(is_summary=False)

    first_key, first_value = next(iter(row.items()))
    first_value = (first_value or "").lower().strip()
    first_key = (first_key or "").lower().strip()

    if any(first_value.startswith(prefix) for prefix in SUMMARY_PREFIXES):
        return SummaryCheck(
            is_summary=True,
            reason=f'Row starts with "{first_value}" which appears to be a summary row',
        )

    if not first_value and "item" in first_key:
        for key, value in row.items():
            key_lower = key.lower()
            if ("total" in key_lower or "sum" in key_lower) and value and _is_number(value):
                return SummaryCheck(
                    is_summary=True,
                    reason="Row has no item name but contains total amounts",
                )

    return SummaryCheck(is_summary=False)


def validate_mappings(mappings: Iterable[ColumnMapping]) -> MappingValidation:
    """Check that an item-name column and at least one price column are mapped."""
    targets = {m.target_field for m in mappings}
    errors: list[str] = []

    if TargetField.ITEM_NAME not in targets:
        errors.append("Item Name field is required")

    if not any(field in targets for field in PRICE_FIELDS):
        errors.append(
            "At least one price field is required "
            "(Total Price, Unit Price, Gross Sales, or Net Sales)"
        )

    return MappingValidation(valid=not errors, errors=tuple(errors))
