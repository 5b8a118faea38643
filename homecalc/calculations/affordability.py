"""
Affordability Calculations

Reverse-computes the maximum purchase price a household qualifies for under
the Canadian debt service guidelines:

- GDS (Gross Debt Service): housing payment at most 32% of gross income
- TDS (Total Debt Service): housing plus other debts at most 40%
"""

from dataclasses import dataclass

from homecalc.calculations.amortization import (
    calculate_max_loan_amount,
    calculate_monthly_payment,
)
from homecalc.calculations.errors import InvalidTermsError
from homecalc.calculations.money import round_currency, round_percent

GDS_LIMIT_PERCENT = 32.0
TDS_LIMIT_PERCENT = 40.0
AFFORDABILITY_AMORTIZATION_YEARS = 25

# B-20 minimum qualifying rate
STRESS_TEST_BUFFER_PERCENT = 2.0
STRESS_TEST_FLOOR_PERCENT = 5.25


@dataclass(frozen=True)
class AffordabilityResult:
    """Maximum price and the debt service ratios it implies."""

    max_affordable_price: float
    max_loan_amount: float
    max_monthly_payment: float
    gds_ratio_percent: float
    tds_ratio_percent: float
    is_within_guidelines: bool
    qualifying_rate_percent: float


def qualifying_rate_percent(annual_rate_percent: float) -> float:
    """Stress-test rate: contract rate plus 2%, never below 5.25%."""
    return max(annual_rate_percent + STRESS_TEST_BUFFER_PERCENT, STRESS_TEST_FLOOR_PERCENT)


def calculate_stress_test_payment(
    loan_amount: float, annual_rate_percent: float, amortization_years: int
) -> float:
    """Monthly payment at the stress-test qualifying rate."""
    return calculate_monthly_payment(
        loan_amount, qualifying_rate_percent(annual_rate_percent), amortization_years
    )


def estimate_affordability(
    annual_income: float,
    monthly_debts: float,
    down_payment: float,
    annual_rate_percent: float,
    stress_test: bool = False,
) -> AffordabilityResult:
    """
    Estimate the most expensive home a buyer qualifies for.

    The maximum housing payment is the lower of the GDS and TDS ceilings.
    That payment is converted to a loan over 25 years and the down payment
    added on top.

    Args:
        annual_income: Gross household income
        monthly_debts: Existing monthly debt payments (car, cards, loans)
        down_payment: Cash available for the down payment
        annual_rate_percent: Mortgage rate as a percentage
        stress_test: Qualify at the stress-test rate instead of the contract rate

    Returns:
        AffordabilityResult

    Raises:
        InvalidTermsError: If income is not positive, debts, down payment
            or rate are negative, or existing debts alone exceed the TDS
            ceiling
    """
    if annual_income <= 0:
        raise InvalidTermsError("Annual income must be greater than 0")
    if monthly_debts < 0:
        raise InvalidTermsError("Monthly debts cannot be negative")
    if down_payment < 0:
        raise InvalidTermsError("Down payment cannot be negative")

    rate = qualifying_rate_percent(annual_rate_percent) if stress_test else annual_rate_percent

    monthly_income = annual_income / 12
    max_gds_payment = monthly_income * GDS_LIMIT_PERCENT / 100
    max_tds_payment = monthly_income * TDS_LIMIT_PERCENT / 100 - monthly_debts
    if max_tds_payment < 0:
        raise InvalidTermsError(
            "Existing monthly debts exceed the TDS ceiling; no payment capacity remains"
        )
    max_monthly_payment = min(max_gds_payment, max_tds_payment)

    max_loan_amount = calculate_max_loan_amount(
        max_monthly_payment, rate, AFFORDABILITY_AMORTIZATION_YEARS
    )

    gds_ratio = round_percent(max_monthly_payment / monthly_income * 100)
    tds_ratio = round_percent((max_monthly_payment + monthly_debts) / monthly_income * 100)

    return AffordabilityResult(
        max_affordable_price=round_currency(max_loan_amount + down_payment),
        max_loan_amount=round_currency(max_loan_amount),
        max_monthly_payment=round_currency(max_monthly_payment),
        gds_ratio_percent=gds_ratio,
        tds_ratio_percent=tds_ratio,
        is_within_guidelines=gds_ratio <= GDS_LIMIT_PERCENT and tds_ratio <= TDS_LIMIT_PERCENT,
        qualifying_rate_percent=rate,
    )
