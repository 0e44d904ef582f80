"""
Display formatting for prices and spreads.

Prices span many orders of magnitude (BTC in the tens of thousands, meme
coins below a thousandth of a cent), so the number of fractional digits
depends on the magnitude band the price falls in.
"""

import math

from arbdash.config.constants import (
    CURRENCY_PREFIX,
    PRICE_BAND_GROUPED,
    PRICE_BAND_MICRO,
    PRICE_BAND_UNIT,
    SPREAD_PRECISION,
    SPREAD_TIER_HIGH,
    SPREAD_TIER_LOW,
    SPREAD_TIER_MEDIUM,
)
from arbdash.core.errors import InvalidPriceError
from arbdash.core.types import SpreadTier


def format_price(price: float) -> str:
    """
    Format a price with magnitude-dependent precision.

    Args:
        price: Non-negative finite price.

    Returns:
        Currency-prefixed display string.

    Raises:
        InvalidPriceError: If the price is negative, NaN or infinite.

    Examples:
        >>> format_price(1234.5)
        '$1,234.50'
        >>> format_price(999.999)
        '$999.9990'
        >>> format_price(0.0001)
        '$0.000100'
        >>> format_price(0.00009999)
        '$0.00009999'
    """
    if not math.isfinite(price) or price < 0:
        raise InvalidPriceError(f"Cannot format price {price!r}")

    if price >= PRICE_BAND_GROUPED:
        return f"{CURRENCY_PREFIX}{price:,.2f}"
    elif price >= PRICE_BAND_UNIT:
        return f"{CURRENCY_PREFIX}{price:.4f}"
    elif price >= PRICE_BAND_MICRO:
        return f"{CURRENCY_PREFIX}{price:.6f}"
    else:
        return f"{CURRENCY_PREFIX}{price:.8f}"


def format_spread(spread_percent: float) -> str:
    """Format a spread percentage, e.g. ``1.2`` -> ``'1.20%'``."""
    return f"{spread_percent:.{SPREAD_PRECISION}f}%"


def spread_tier(spread_percent: float) -> SpreadTier:
    """
    Classify a spread for highlighting.

    Thresholds are strict: exactly 1.0 is MEDIUM, exactly 0.3 is NONE.
    """
    if spread_percent > SPREAD_TIER_HIGH:
        return SpreadTier.HIGH
    if spread_percent > SPREAD_TIER_MEDIUM:
        return SpreadTier.MEDIUM
    if spread_percent > SPREAD_TIER_LOW:
        return SpreadTier.LOW
    return SpreadTier.NONE
