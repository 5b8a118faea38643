"""
Rent vs Buy Comparison

Projects cumulative rent, with rent compounding once a year, against the
cumulative cost of owning (down payment plus mortgage payments).
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

from homecalc.calculations.errors import InvalidTermsError
from homecalc.calculations.money import round_currency


@dataclass(frozen=True)
class RentVsBuyYear:
    """
    Cumulative totals at the end of one year.

    net_difference is ownership cost less rent paid: positive while owning
    has cost more so far.
    """

    year: int
    cumulative_rent_paid: float
    cumulative_ownership_cost: float
    net_difference: float


@dataclass(frozen=True)
class RentVsBuyProjection:
    """Full comparison over the horizon."""

    years: Tuple[RentVsBuyYear, ...]
    total_rent_paid: float
    total_ownership_cost: float
    net_benefit_of_buying: float

    @property
    def buying_is_cheaper(self) -> bool:
        return self.net_benefit_of_buying > 0


def _validate(monthly_rent, annual_rent_increase_percent, comparison_years, down_payment, monthly_payment):
    if comparison_years <= 0:
        raise InvalidTermsError("Comparison period must be at least 1 year")
    if monthly_rent < 0:
        raise InvalidTermsError("Monthly rent cannot be negative")
    if annual_rent_increase_percent <= -100:
        raise InvalidTermsError("Annual rent increase must be greater than -100%")
    if down_payment < 0 or monthly_payment < 0:
        raise InvalidTermsError("Down payment and mortgage payment cannot be negative")


def _iter_unrounded(
    monthly_rent: float,
    annual_rent_increase_percent: float,
    comparison_years: int,
    down_payment: float,
    monthly_payment: float,
) -> Iterator[Tuple[int, float, float]]:
    cumulative_rent = 0.0
    current_monthly_rent = monthly_rent

    for year in range(1, comparison_years + 1):
        cumulative_rent += current_monthly_rent * 12
        cumulative_ownership = down_payment + monthly_payment * 12 * year
        yield year, cumulative_rent, cumulative_ownership

        current_monthly_rent *= 1 + annual_rent_increase_percent / 100


def _row(year: int, cumulative_rent: float, cumulative_ownership: float) -> RentVsBuyYear:
    return RentVsBuyYear(
        year=year,
        cumulative_rent_paid=round_currency(cumulative_rent),
        cumulative_ownership_cost=round_currency(cumulative_ownership),
        net_difference=round_currency(cumulative_ownership - cumulative_rent),
    )


def iter_rent_vs_buy_years(
    monthly_rent: float,
    annual_rent_increase_percent: float,
    comparison_years: int,
    down_payment: float,
    monthly_payment: float,
) -> Iterator[RentVsBuyYear]:
    """Lazily yield one row per year. Single-pass; inputs validated up front."""
    _validate(monthly_rent, annual_rent_increase_percent, comparison_years, down_payment, monthly_payment)

    return (
        _row(year, rent, ownership)
        for year, rent, ownership in _iter_unrounded(
            monthly_rent, annual_rent_increase_percent, comparison_years, down_payment, monthly_payment
        )
    )


def compare_rent_vs_buy(
    monthly_rent: float,
    annual_rent_increase_percent: float,
    comparison_years: int,
    down_payment: float,
    monthly_payment: float,
) -> RentVsBuyProjection:
    """
    Compare renting with buying over a number of years.

    Args:
        monthly_rent: Starting monthly rent
        annual_rent_increase_percent: Yearly rent increase as a percentage
        comparison_years: Horizon in years
        down_payment: Down payment on the purchase
        monthly_payment: Monthly mortgage payment on the purchase

    Returns:
        RentVsBuyProjection whose net_benefit_of_buying is positive when
        buying costs less than renting over the horizon
    """
    _validate(monthly_rent, annual_rent_increase_percent, comparison_years, down_payment, monthly_payment)

    years = []
    total_rent = total_ownership = 0.0
    for year, total_rent, total_ownership in _iter_unrounded(
        monthly_rent, annual_rent_increase_percent, comparison_years, down_payment, monthly_payment
    ):
        years.append(_row(year, total_rent, total_ownership))

    return RentVsBuyProjection(
        years=tuple(years),
        total_rent_paid=round_currency(total_rent),
        total_ownership_cost=round_currency(total_ownership),
        net_benefit_of_buying=round_currency(total_rent - total_ownership),
    )
