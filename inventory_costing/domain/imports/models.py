"""
Import domain models.

Column mapping suggestions for POS sales CSV imports.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TargetField(str, Enum):
    """POS sales field a CSV column can be mapped to."""

    ITEM_NAME = "item_name"
    QUANTITY = "quantity"
    UNIT = "unit"
    UNIT_PRICE = "unit_price"
    TOTAL_PRICE = "total_price"
    GROSS_SALES = "gross_sales"
    NET_SALES = "net_sales"
    DISCOUNT = "discount"
    TAX = "tax"
    TIP = "tip"
    SERVICE_CHARGE = "service_charge"
    FEE = "fee"
    SALE_DATE = "sale_date"
    SALE_TIME = "sale_time"
    ORDER_ID = "order_id"
    CATEGORY = "category"
    DEPARTMENT = "department"


class AdjustmentType(str, Enum):
    """Kind of non-item amount carried by an adjustment column."""

    DISCOUNT = "discount"
    TAX = "tax"
    TIP = "tip"
    SERVICE_CHARGE = "service_charge"
    FEE = "fee"


class MappingConfidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


class KeywordPattern(BaseModel):
    """Header keywords that identify a target field."""

    model_config = ConfigDict(frozen=True)

    keywords: tuple[str, ...]
    aliases: tuple[str, ...] = ()
    weight: int = Field(..., gt=0, description="Relative importance of the field")


class ColumnScore(BaseModel):
    """Keyword score of one CSV column against one target field."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(0, ge=0, description="Pattern weight times match strength")
    confidence: MappingConfidence = MappingConfidence.NONE


class ColumnMapping(BaseModel):
    """
    Suggested mapping for one CSV column.

    Example:
        >>> ColumnMapping(
        ...     csv_column="Sales Tax",
        ...     target_field=TargetField.TAX,
        ...     confidence=MappingConfidence.HIGH,
        ...     is_adjustment=True,
        ...     adjustment_type=AdjustmentType.TAX,
        ... )
    """

    model_config = ConfigDict(frozen=True)

    csv_column: str
    target_field: Optional[TargetField] = None
    confidence: MappingConfidence = MappingConfidence.NONE
    is_adjustment: bool = False
    adjustment_type: Optional[AdjustmentType] = None


class SummaryCheck(BaseModel):
    """Whether a CSV row is a totals/summary row rather than a sale."""

    model_config = ConfigDict(frozen=True)

    is_summary: bool
    reason: Optional[str] = None


class MappingValidation(BaseModel):
    """Result of checking that a mapping set is importable."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: tuple[str, ...] = ()
