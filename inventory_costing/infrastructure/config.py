"""Configuration utilities for infrastructure layer."""

import os

from inventory_costing.domain.shared.errors import ConfigurationError

DEFAULT_LOW_STOCK_THRESHOLD = 1.0
DEFAULT_CURRENCY_DECIMALS = 2
DEFAULT_LOG_LEVEL = "INFO"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_low_stock_threshold() -> float:
    """
    Get the low-stock threshold in purchase units.

    A sale-impact line is flagged when its remaining stock drops strictly
    below this value.

    Returns:
        Threshold from INVENTORY_LOW_STOCK_THRESHOLD, defaults to 1.0

    Raises:
        ConfigurationError: If the value is not a non-negative number
    """
    raw = os.getenv("INVENTORY_LOW_STOCK_THRESHOLD")
    if raw is None or not raw.strip():
        return DEFAULT_LOW_STOCK_THRESHOLD

    try:
        threshold = float(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"INVENTORY_LOW_STOCK_THRESHOLD must be a number, got {raw!r}"
        ) from e

    if threshold < 0:
        raise ConfigurationError(
            f"INVENTORY_LOW_STOCK_THRESHOLD must be >= 0, got {threshold}"
        )
    return threshold


def get_currency_decimals() -> int:
    """
    Get the number of decimals used when displaying costs.

    Returns:
        Decimals from COST_CURRENCY_DECIMALS, defaults to 2
    """
    raw = os.getenv("COST_CURRENCY_DECIMALS")
    if raw is None or not raw.strip():
        return DEFAULT_CURRENCY_DECIMALS

    try:
        decimals = int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"COST_CURRENCY_DECIMALS must be an integer, got {raw!r}"
        ) from e

    if not 0 <= decimals <= 6:
        raise ConfigurationError(
            f"COST_CURRENCY_DECIMALS must be between 0 and 6, got {decimals}"
        )
    return decimals


def get_log_level() -> str:
    """
    Get the log level name.

    Returns:
        Upper-cased LOG_LEVEL, defaults to "INFO"
    """
    level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(
            f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {level!r}"
        )
    return level
