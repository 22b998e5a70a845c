"""
Unit tests for CSV column mapping suggestions.
"""

import pytest

from inventory_costing.application.imports.column_mapping import (
    is_summary_row,
    score_column,
    suggest_column_mappings,
    validate_mappings,
)
from inventory_costing.domain.imports.models import (
    AdjustmentType,
    ColumnMapping,
    MappingConfidence,
    TargetField,
)


def _by_column(mappings: list[ColumnMapping]) -> dict[str, ColumnMapping]:
    return {m.csv_column: m for m in mappings}


class TestScoreColumn:
    """Test keyword scoring."""

    def test_exact_keyword(self) -> None:
        """Should score exact keywords at weight x 10."""
        result = score_column("Gross Sales", TargetField.GROSS_SALES)
        assert result.score == 90
        assert result.confidence == MappingConfidence.HIGH

    def test_alias(self) -> None:
        """Should score exact aliases at weight x 9."""
        result = score_column(" Qty Sold ", TargetField.QUANTITY)
        assert result.score == 72
        assert result.confidence == MappingConfidence.HIGH

    def test_contains(self) -> None:
        """Should score contained keywords at weight x 7."""
        result = score_column("Total Net Sales", TargetField.NET_SALES)
        assert result.score == 63
        assert result.confidence == MappingConfidence.MEDIUM

    def test_all_words(self) -> None:
        """Should score scattered keyword words at weight x 5."""
        result = score_column("ID of Order", TargetField.ORDER_ID)
        assert result.score == 40
        assert result.confidence == MappingConfidence.MEDIUM

    def test_low_band(self) -> None:
        """Should report low confidence from 20 to 39."""
        result = score_column("Class of Revenue", TargetField.DEPARTMENT)
        assert result.score == 30
        assert result.confidence == MappingConfidence.LOW

    def test_no_match(self) -> None:
        """Should score unrelated headers at zero."""
        result = score_column("Foo", TargetField.TAX)
        assert result.score == 0
        assert result.confidence == MappingConfidence.NONE

    def test_unit_has_no_keywords(self) -> None:
        """Should only detect unit columns from sample values."""
        assert score_column("Unit", TargetField.UNIT).score == 0


class TestSuggestColumnMappings:
    """Test mapping suggestions."""

    @pytest.fixture
    def pos_export(self) -> tuple[list[str], list[dict[str, str]]]:
        headers = ["Item Name", "Qty", "Unit", "Net Sales", "Gross Sales", "Tax", "Date"]
        rows = [
            {"Item Name": "Margarita", "Qty": "2", "Unit": "each", "Net Sales": "20.00",
             "Gross Sales": "22.00", "Tax": "1.60", "Date": "2024-01-15"},
            {"Item Name": "Rice Bowl", "Qty": "1", "Unit": "lb", "Net Sales": "12.00",
             "Gross Sales": "12.00", "Tax": "0.96", "Date": "2024-01-15"},
            {"Item Name": "Lemonade", "Qty": "3", "Unit": "fl oz", "Net Sales": "9.00",
             "Gross Sales": "9.00", "Tax": "0.72", "Date": "2024-01-15"},
        ]
        return headers, rows

    def test_typical_export(self, pos_export) -> None:
        """Should map every recognizable column."""
        headers, rows = pos_export
        mappings = suggest_column_mappings(headers, rows)
        by_column = _by_column(mappings)

        assert [m.csv_column for m in mappings] == headers
        assert by_column["Item Name"].target_field == TargetField.ITEM_NAME
        assert by_column["Qty"].target_field == TargetField.QUANTITY
        assert by_column["Net Sales"].target_field == TargetField.NET_SALES
        assert by_column["Date"].target_field == TargetField.SALE_DATE

    def test_unit_column_from_samples(self, pos_export) -> None:
        """Should map a column of unit values to UNIT."""
        headers, rows = pos_export
        unit = _by_column(suggest_column_mappings(headers, rows))["Unit"]

        assert unit.target_field == TargetField.UNIT
        assert unit.confidence == MappingConfidence.MEDIUM

    def test_unit_column_needs_samples(self, pos_export) -> None:
        """Should leave the unit column unmapped without samples."""
        headers, _ = pos_export
        unit = _by_column(suggest_column_mappings(headers))["Unit"]

        assert unit.target_field is None

    def test_prefers_net_over_gross(self, pos_export) -> None:
        """Should unmap gross sales when net sales is mapped."""
        headers, rows = pos_export
        gross = _by_column(suggest_column_mappings(headers, rows))["Gross Sales"]

        assert gross.target_field is None
        assert gross.confidence == MappingConfidence.NONE

    def test_adjustments(self, pos_export) -> None:
        """Should tag adjustment columns with their type."""
        headers, rows = pos_export
        tax = _by_column(suggest_column_mappings(headers, rows))["Tax"]

        assert tax.is_adjustment is True
        assert tax.adjustment_type == AdjustmentType.TAX

    def test_adjustments_may_repeat(self) -> None:
        """Should map several columns to the same adjustment field."""
        mappings = suggest_column_mappings(["Item", "Tax", "Sales Tax"])
        by_column = _by_column(mappings)

        assert by_column["Tax"].target_field == TargetField.TAX
        assert by_column["Sales Tax"].target_field == TargetField.TAX

    def test_regular_fields_map_once(self) -> None:
        """Should not map two columns to the same regular field."""
        by_column = _by_column(suggest_column_mappings(["Item", "Price", "Unit Price"]))

        assert by_column["Price"].target_field == TargetField.UNIT_PRICE
        assert by_column["Unit Price"].target_field is None

    def test_item_name_fallback(self) -> None:
        """Should promote the first text column to item name."""
        rows = [{"Description": "Burger", "Amount": "12.50"}]
        by_column = _by_column(suggest_column_mappings(["Description", "Amount"], rows))

        assert by_column["Description"].target_field == TargetField.ITEM_NAME
        assert by_column["Description"].confidence == MappingConfidence.LOW
        assert by_column["Amount"].target_field == TargetField.TOTAL_PRICE

    def test_unmapped_column(self) -> None:
        """Should leave unrecognized columns unmapped."""
        mapping = suggest_column_mappings(["Item", "Zzz"])[1]

        assert mapping == ColumnMapping(csv_column="Zzz")


class TestIsSummaryRow:
    """Test summary row detection."""

    @pytest.mark.parametrize("label", ["Total", "Totals:", "Subtotal", "Summary", "Grand Total"])
    def test_summary_labels(self, label: str) -> None:
        """Should detect rows starting with a summary label."""
        result = is_summary_row({"Item": label, "Net Sales": "1520.00"})

        assert result.is_summary is True
        assert label.lower() in result.reason

    def test_blank_item_with_totals(self) -> None:
        """Should detect nameless rows carrying totals."""
        result = is_summary_row({"Item Name": "", "Total": "99.50"})

        assert result.is_summary is True
        assert result.reason == "Row has no item name but contains total amounts"

    def test_regular_row(self) -> None:
        """Should accept ordinary sales rows."""
        assert is_summary_row({"Item": "Burger", "Total": "5"}).is_summary is False

    def test_empty_row(self) -> None:
        """Should accept empty rows as non-summary."""
        assert is_summary_row({}).is_summary is False


class TestValidateMappings:
    """Test mapping validation."""

    def test_valid(self) -> None:
        """Should accept item name plus a price."""
        result = validate_mappings(
            [
                ColumnMapping(csv_column="Item", target_field=TargetField.ITEM_NAME),
                ColumnMapping(csv_column="Net", target_field=TargetField.NET_SALES),
            ]
        )
        assert result.valid is True
        assert result.errors == ()

    def test_missing_everything(self) -> None:
        """Should list both errors."""
        result = validate_mappings([ColumnMapping(csv_column="Zzz")])

        assert result.valid is False
        assert result.errors == (
            "Item Name field is required",
            "At least one price field is required "
            "(Total Price, Unit Price, Gross Sales, or Net Sales)",
        )
