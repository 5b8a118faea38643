"""
Rental Investment Calculations

Cash flow, cap rate, cash-on-cash return and break-even rent for a rental
property. Financing is always analysed on a 25-year amortization, whatever
term the buyer actually chose.
"""

from dataclasses import dataclass
from typing import List, Mapping

from homecalc.calculations.amortization import calculate_monthly_payment
from homecalc.calculations.errors import DivisionByZeroError, InvalidTermsError, OutOfRangeWarning
from homecalc.calculations.money import round_currency, round_percent

INVESTMENT_AMORTIZATION_YEARS = 25
MIN_HEALTHY_CAP_RATE_PERCENT = 6.0

EXPENSE_CATEGORIES = ("taxes", "insurance", "condo_fees", "maintenance", "other")


@dataclass(frozen=True)
class InvestmentMetrics:
    """Rental metrics. Money rounded to whole dollars, percentages to two decimals."""

    monthly_mortgage: float
    monthly_cash_flow: float
    cap_rate_percent: float
    cash_on_cash_roi_percent: float
    break_even_rent: float
    total_monthly_expenses: float
    annual_net_operating_income: float


def calculate_investment_metrics(
    home_price: float,
    down_payment: float,
    monthly_rent: float,
    monthly_expenses: Mapping[str, float],
    annual_rate_percent: float,
) -> InvestmentMetrics:
    """
    Analyse a property as a rental.

    Net operating income excludes debt service; cash flow includes it.

    Args:
        home_price: Purchase price
        down_payment: Cash invested up front
        monthly_rent: Expected monthly rent
        monthly_expenses: Monthly operating expenses by category
            (see EXPENSE_CATEGORIES for the usual keys)
        annual_rate_percent: Mortgage rate as a percentage

    Returns:
        InvestmentMetrics

    Raises:
        InvalidTermsError: If the price is not positive or the down payment
            is outside [0, price)
        DivisionByZeroError: If the down payment is 0 (cash-on-cash return is
            undefined)
    """
    if home_price <= 0:
        raise InvalidTermsError("Home price must be greater than 0")
    if not 0 <= down_payment < home_price:
        raise InvalidTermsError("Down payment must be at least 0 and less than the home price")
    if down_payment == 0:
        raise DivisionByZeroError("Cash-on-cash return is undefined with no down payment")

    operating_expenses = sum(monthly_expenses.values())
    monthly_mortgage = calculate_monthly_payment(
        home_price - down_payment, annual_rate_percent, INVESTMENT_AMORTIZATION_YEARS
    )

    total_monthly_expenses = operating_expenses + monthly_mortgage
    monthly_cash_flow = monthly_rent - total_monthly_expenses
    net_operating_income = (monthly_rent - operating_expenses) * 12

    cap_rate = net_operating_income / home_price * 100
    cash_on_cash_roi = monthly_cash_flow * 12 / down_payment * 100

    return InvestmentMetrics(
        monthly_mortgage=round_currency(monthly_mortgage),
        monthly_cash_flow=round_currency(monthly_cash_flow),
        cap_rate_percent=round_percent(cap_rate),
        cash_on_cash_roi_percent=round_percent(cash_on_cash_roi),
        break_even_rent=round_currency(total_monthly_expenses),
        total_monthly_expenses=round_currency(total_monthly_expenses),
        annual_net_operating_income=round_currency(net_operating_income),
    )


def flag_investment_risks(metrics: InvestmentMetrics) -> List[OutOfRangeWarning]:
    """Advisories for negative cash flow and a cap rate under 6%."""
    warnings = []
    if metrics.monthly_cash_flow < 0:
        warnings.append(
            OutOfRangeWarning(
                field="monthly_cash_flow",
                value=metrics.monthly_cash_flow,
                message="Negative cash flow: rent does not cover expenses and mortgage",
            )
        )
    if metrics.cap_rate_percent < MIN_HEALTHY_CAP_RATE_PERCENT:
        warnings.append(
            OutOfRangeWarning(
                field="cap_rate_percent",
                value=metrics.cap_rate_percent,
                message="Cap rate is below 6%, which is low for a rental property",
            )
        )
    return warnings
