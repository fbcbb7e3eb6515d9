"""
Decimal Utilities
legal_value_score/scoring/utils.py

Provides precision-safe decimal math for scoring calculations and the
currency display helper shared by the API, email and Streamlit layers.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

CATEGORY_SCALE = 25


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def normalize_to_scale(
    raw: int,
    maximum: Optional[int],
    scale: int = CATEGORY_SCALE,
) -> int:
    """
    Normalize a raw category total onto a 0-`scale` integer scale.

    Formula: round(raw / maximum × scale)
    Returns 0 when maximum is missing, zero or negative.
    Not clamped: a maximum below the achievable raw total yields > scale.
    """
    if not maximum or maximum <= 0:
        return 0
    return round_half_up(Decimal(raw) * Decimal(scale) / Decimal(maximum))


def format_currency(amount: int, symbol: str = "€") -> str:
    """
    Render an amount in thousands with a currency symbol and "K" suffix.

    Examples:
        >>> format_currency(225000)
        '€225K'
        >>> format_currency(17500)
        '€18K'
    """
    thousands = round_half_up(Decimal(amount) / Decimal(1000))
    return f"{symbol}{thousands}K"
