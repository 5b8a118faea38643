"""
CMHC mortgage default insurance.

Required when the down payment is under 20% of the price. The premium is a
percentage of the base loan, stepped by down payment percentage, and is
added to the amount borrowed.
"""

from dataclasses import dataclass

from homecalc.calculations.errors import InvalidTermsError
from homecalc.calculations.money import round_currency

# (minimum down payment %, premium rate), checked top down
PREMIUM_TIERS = (
    (20.0, 0.0),
    (15.0, 0.028),
    (10.0, 0.031),
    (0.0, 0.04),
)


@dataclass(frozen=True)
class MortgageInsurance:
    premium: float
    rate: float
    is_required: bool


@dataclass(frozen=True)
class TotalLoanAmount:
    base_loan_amount: float
    insurance_premium: float
    total_loan_amount: float


def calculate_cmhc_insurance(home_price: float, down_payment: float) -> MortgageInsurance:
    """Default insurance premium for a purchase."""
    if home_price <= 0:
        raise InvalidTermsError("Home price must be greater than 0")
    if not 0 <= down_payment <= home_price:
        raise InvalidTermsError("Down payment must be between 0 and the home price")

    down_payment_percent = down_payment / home_price * 100
    rate = next(rate for floor, rate in PREMIUM_TIERS if down_payment_percent >= floor)
    premium = (home_price - down_payment) * rate

    return MortgageInsurance(
        premium=round_currency(premium),
        rate=rate,
        is_required=rate > 0,
    )


def calculate_total_loan_amount(home_price: float, down_payment: float) -> TotalLoanAmount:
    """Base loan plus any insurance premium financed into it."""
    insurance = calculate_cmhc_insurance(home_price, down_payment)
    base_loan_amount = home_price - down_payment

    return TotalLoanAmount(
        base_loan_amount=round_currency(base_loan_amount),
        insurance_premium=insurance.premium,
        total_loan_amount=round_currency(base_loan_amount + insurance.premium),
    )
