"""
Closing Cost Calculations

Combines land transfer taxes with the usual purchase fees into a closing
cost breakdown and the cash a buyer needs on closing day.
"""

from dataclasses import dataclass, fields, replace
from typing import Optional

from homecalc.calculations.errors import InvalidTermsError
from homecalc.calculations.land_transfer_tax import (
    City,
    Province,
    first_time_buyer_rebate,
    provincial_land_transfer_tax,
    toronto_municipal_land_transfer_tax,
)
from homecalc.calculations.money import round_currency

# Fixed fees; presets may override them
DEFAULT_HOME_INSPECTION = 500.0
DEFAULT_APPRAISAL = 400.0
DEFAULT_SURVEY_FEE = 1000.0

LEGAL_FEE_RATE = 0.001
LEGAL_FEE_BASE = 1500.0
TITLE_INSURANCE_RATE = 0.0005
TITLE_INSURANCE_MIN = 250.0
TITLE_INSURANCE_MAX = 1500.0

CITY_PROVINCE = {
    City.toronto: Province.ontario,
    City.vancouver: Province.bc,
}


@dataclass(frozen=True)
class ClosingCostBreakdown:
    """Closing cost line items. The rebate is the only credit."""

    land_transfer_tax: float
    municipal_tax: float
    legal_fees: float
    title_insurance: float
    home_inspection: float
    appraisal: float
    survey_fee: float
    first_time_buyer_rebate: float

    @property
    def total_charges(self) -> float:
        return (
            self.land_transfer_tax
            + self.municipal_tax
            + self.legal_fees
            + self.title_insurance
            + self.home_inspection
            + self.appraisal
            + self.survey_fee
        )

    @property
    def total(self) -> float:
        """Charges less the rebate. Not clamped: a large preset rebate can make it negative."""
        return self.total_charges - self.first_time_buyer_rebate


@dataclass(frozen=True)
class ClosingCostPreset:
    """
    Saved set of closing cost overrides.

    Any line item left as None keeps its computed value.
    """

    name: str
    tag: str = ""
    land_transfer_tax: Optional[float] = None
    municipal_tax: Optional[float] = None
    legal_fees: Optional[float] = None
    title_insurance: Optional[float] = None
    home_inspection: Optional[float] = None
    appraisal: Optional[float] = None
    survey_fee: Optional[float] = None
    first_time_buyer_rebate: Optional[float] = None

    def apply(self, breakdown: ClosingCostBreakdown) -> ClosingCostBreakdown:
        """Return the breakdown with this preset's line items substituted."""
        overrides = {
            f.name: getattr(self, f.name)
            for f in fields(ClosingCostBreakdown)
            if getattr(self, f.name) is not None
        }
        return replace(breakdown, **overrides)


def calculate_legal_fees(price: float) -> float:
    """Legal fees: 0.1% of the price (rounded) plus a flat 1,500."""
    return round_currency(price * LEGAL_FEE_RATE) + LEGAL_FEE_BASE


def calculate_title_insurance(price: float) -> float:
    """Title insurance: 0.05% of the price, between 250 and 1,500."""
    premium = min(max(price * TITLE_INSURANCE_RATE, TITLE_INSURANCE_MIN), TITLE_INSURANCE_MAX)
    return round_currency(premium)


def estimate_closing_costs(
    price: float,
    province: Province,
    city: Optional[City] = None,
    is_first_time_buyer: bool = False,
    preset: Optional[ClosingCostPreset] = None,
) -> ClosingCostBreakdown:
    """
    Estimate closing costs for a purchase.

    Ontario purchases pay the provincial tax plus the Toronto municipal tax
    when the city is Toronto. BC purchases pay the provincial tax alone.

    Args:
        price: Purchase price
        province: Province the property is in
        city: City, if known
        is_first_time_buyer: Whether the first-time buyer rebate applies
        preset: Optional overrides for individual line items

    Returns:
        Closing cost breakdown with each line item rounded to whole dollars

    Raises:
        InvalidTermsError: If the price is not positive or the city is not
            in the given province
    """
    if price <= 0:
        raise InvalidTermsError("Home price must be greater than 0")

    province = Province(province)
    if city is not None:
        city = City(city)
        if CITY_PROVINCE[city] is not province:
            raise InvalidTermsError(
                f"{city.value.title()} is not in province {province.value!r}"
            )

    municipal_tax = 0.0
    if province is Province.ontario and city is City.toronto:
        municipal_tax = toronto_municipal_land_transfer_tax(price)

    breakdown = ClosingCostBreakdown(
        land_transfer_tax=provincial_land_transfer_tax(price, province),
        municipal_tax=municipal_tax,
        legal_fees=calculate_legal_fees(price),
        title_insurance=calculate_title_insurance(price),
        home_inspection=DEFAULT_HOME_INSPECTION,
        appraisal=DEFAULT_APPRAISAL,
        survey_fee=DEFAULT_SURVEY_FEE,
        first_time_buyer_rebate=first_time_buyer_rebate(price, province, is_first_time_buyer),
    )

    if preset is not None:
        breakdown = preset.apply(breakdown)

    return breakdown


def calculate_cash_required_at_closing(
    down_payment: float, breakdown: ClosingCostBreakdown
) -> float:
    """Down payment plus total closing costs."""
    return down_payment + breakdown.total
