"""
Currency Rounding

Output-time rounding helpers. Calculations run on unrounded floats and only
round when a result record is built.
"""

from decimal import Decimal, ROUND_HALF_UP


def to_decimal(value: float, places: int = 2) -> Decimal:
    """
    Convert a float to a Decimal rounded half-up to the given places.

    Goes through repr so the Decimal reflects the shortest float
    representation instead of its full binary expansion.

    Args:
        value: Amount to convert
        places: Decimal places to keep (0 = whole units)

    Returns:
        Quantized Decimal
    """
    exponent = Decimal(1).scaleb(-places)
    return Decimal(repr(float(value))).quantize(exponent, rounding=ROUND_HALF_UP)


def round_currency(value: float, places: int = 0) -> float:
    """Round half-up (away from zero on .5) and return a float."""
    return float(to_decimal(value, places))


def round_percent(value: float) -> float:
    """Round a percentage to two decimals."""
    return round_currency(value, 2)
