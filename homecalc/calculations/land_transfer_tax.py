"""
Land Transfer Tax Calculations

Marginal-bracket land transfer taxes for Ontario, the City of Toronto and
British Columbia, plus the first-time home buyer rebates.

Each bracket is (floor, base, rate): a price above the floor pays the base
amount plus the rate on the portion above the floor. Bases are the tax owed
at the floor, so adjacent brackets agree at every boundary.
"""

import enum
from typing import Sequence, Tuple

from homecalc.calculations.errors import InvalidTermsError
from homecalc.calculations.money import round_currency

Bracket = Tuple[float, float, float]


class Province(str, enum.Enum):
    """Provinces with land transfer tax tables."""

    ontario = "ontario"
    bc = "bc"


class City(str, enum.Enum):
    """Cities the calculator knows about."""

    toronto = "toronto"
    vancouver = "vancouver"


ONTARIO_BRACKETS: Sequence[Bracket] = (
    (0, 0, 0.005),
    (55_000, 275, 0.01),
    (250_000, 2_225, 0.015),
    (400_000, 4_475, 0.02),
    (2_000_000, 36_475, 0.025),
)

TORONTO_BRACKETS: Sequence[Bracket] = (
    (0, 0, 0.005),
    (55_000, 275, 0.01),
    (400_000, 3_725, 0.02),
    (2_000_000, 35_725, 0.025),
)

BC_BRACKETS: Sequence[Bracket] = (
    (0, 0, 0.01),
    (200_000, 2_000, 0.02),
    (2_000_000, 38_000, 0.03),
    (3_000_000, 68_000, 0.05),
)

# Additional BC tax on the portion above 3M, on top of the 5% bracket
BC_ADDITIONAL_THRESHOLD = 3_000_000
BC_ADDITIONAL_RATE = 0.02

# (maximum eligible price, maximum rebate)
FIRST_TIME_BUYER_REBATES = {
    Province.ontario: (368_000, 4_000),
    Province.bc: (500_000, 8_000),
}


def marginal_tax(price: float, brackets: Sequence[Bracket]) -> float:
    """
    Apply a marginal bracket schedule to a price.

    Args:
        price: Purchase price
        brackets: (floor, base, rate) tuples in ascending floor order

    Returns:
        Unrounded tax
    """
    if price < 0:
        raise InvalidTermsError("Price cannot be negative")

    for floor, base, rate in reversed(brackets):
        if price > floor:
            return base + (price - floor) * rate
    return 0.0


def _bc_tax(price: float) -> float:
    tax = marginal_tax(price, BC_BRACKETS)
    if price > BC_ADDITIONAL_THRESHOLD:
        tax += (price - BC_ADDITIONAL_THRESHOLD) * BC_ADDITIONAL_RATE
    return tax


def ontario_land_transfer_tax(price: float) -> float:
    """Ontario provincial land transfer tax, rounded to whole dollars."""
    return round_currency(marginal_tax(price, ONTARIO_BRACKETS))


def toronto_municipal_land_transfer_tax(price: float) -> float:
    """Toronto municipal land transfer tax, payable on top of the Ontario tax."""
    return round_currency(marginal_tax(price, TORONTO_BRACKETS))


def bc_property_transfer_tax(price: float) -> float:
    """BC property transfer tax including the additional 2% above 3,000,000."""
    return round_currency(_bc_tax(price))


def provincial_land_transfer_tax(price: float, province: Province) -> float:
    """Provincial tax for the given province."""
    if Province(province) is Province.ontario:
        return ontario_land_transfer_tax(price)
    return bc_property_transfer_tax(price)


def first_time_buyer_rebate(
    price: float, province: Province, is_first_time_buyer: bool
) -> float:
    """
    First-time home buyer rebate against the provincial tax.

    Ontario refunds up to 4,000 on homes up to 368,000; BC up to 8,000 on
    homes up to 500,000. The rebate never exceeds the provincial tax.

    Args:
        price: Purchase price
        province: Province the property is in
        is_first_time_buyer: Whether the buyer qualifies as a first-time buyer

    Returns:
        Rebate amount, 0 when not eligible
    """
    if not is_first_time_buyer:
        return 0.0

    province = Province(province)
    max_price, max_rebate = FIRST_TIME_BUYER_REBATES[province]
    if price > max_price:
        return 0.0

    return min(provincial_land_transfer_tax(price, province), float(max_rebate))
