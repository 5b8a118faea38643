"""
Loan Amortization Calculations

Level payment, interest/principal split and amortization schedules for a
fixed-rate mortgage. Rates are annual percentages (5.25 means 5.25%) and
payments are computed on a monthly basis.

Bi-weekly frequency is not a separate amortization basis: the bi-weekly
payment is half the monthly payment, billed 26 times a year. The schedule
is always simulated monthly.
"""

import enum
from dataclasses import dataclass
from datetime import date
from itertools import groupby
from typing import Iterator, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from homecalc.calculations.errors import InvalidTermsError
from homecalc.calculations.money import round_currency, round_percent


class PaymentFrequency(str, enum.Enum):
    """How often the borrower is billed."""

    monthly = "monthly"
    bi_weekly = "bi-weekly"


PAYMENTS_PER_YEAR = {
    PaymentFrequency.monthly: 12,
    PaymentFrequency.bi_weekly: 26,
}


@dataclass(frozen=True)
class LoanTerms:
    """Purchase and financing terms for a single property."""

    home_price: float
    down_payment: float
    annual_rate_percent: float
    amortization_years: int
    payment_frequency: PaymentFrequency = PaymentFrequency.monthly

    def __post_init__(self):
        if self.home_price <= 0:
            raise InvalidTermsError("Home price must be greater than 0")
        if not 0 < self.down_payment < self.home_price:
            raise InvalidTermsError(
                "Down payment must be greater than 0 and less than the home price"
            )
        if self.annual_rate_percent < 0:
            raise InvalidTermsError("Interest rate cannot be negative")
        if self.amortization_years <= 0:
            raise InvalidTermsError("Amortization period must be greater than 0")
        try:
            frequency = PaymentFrequency(self.payment_frequency)
        except ValueError:
            raise InvalidTermsError(
                f"Unknown payment frequency: {self.payment_frequency!r}"
            ) from None
        object.__setattr__(self, "payment_frequency", frequency)

    @property
    def loan_amount(self) -> float:
        return self.home_price - self.down_payment

    @property
    def down_payment_percent(self) -> float:
        return self.down_payment / self.home_price * 100


@dataclass(frozen=True)
class AmortizationYearRow:
    """One year of an amortization schedule, rounded to whole currency units."""

    year: int
    principal_paid: float
    interest_paid: float
    ending_balance: float
    total_paid: float
    cumulative_interest: float


@dataclass(frozen=True)
class AmortizationMonthRow:
    """One monthly payment, rounded to cents."""

    period: int
    payment_date: Optional[date]
    payment: float
    interest: float
    principal: float
    ending_balance: float


@dataclass(frozen=True)
class MortgageSummary:
    """Headline figures for a mortgage."""

    loan_amount: float
    monthly_payment: float
    periodic_payment: float
    payments_per_year: int
    total_cost: float
    total_interest: float
    down_payment_percent: float


def _validate_loan(loan_amount: float, annual_rate_percent: float, amortization_years: int):
    if loan_amount <= 0:
        raise InvalidTermsError("Loan amount must be greater than 0")
    if annual_rate_percent < 0:
        raise InvalidTermsError("Interest rate cannot be negative")
    if amortization_years <= 0:
        raise InvalidTermsError("Amortization period must be greater than 0")


def _growth_factor(monthly_rate: float, periods: int) -> float:
    """(1 + r)^n, with float overflow reported as invalid terms."""
    try:
        return (1 + monthly_rate) ** periods
    except OverflowError:
        raise InvalidTermsError(
            "Interest rate and amortization period are too large to calculate"
        ) from None


def calculate_monthly_payment(
    loan_amount: float, annual_rate_percent: float, amortization_years: int
) -> float:
    """
    Calculate the level monthly payment of a fixed-rate loan.

    Args:
        loan_amount: Amount borrowed
        annual_rate_percent: Annual interest rate as a percentage (5.25 for 5.25%)
        amortization_years: Amortization period in years

    Returns:
        Monthly payment (unrounded)

    Raises:
        InvalidTermsError: If the loan amount or term is not positive, or the
            rate is negative
    """
    _validate_loan(loan_amount, annual_rate_percent, amortization_years)

    monthly_rate = annual_rate_percent / 100 / 12
    total_payments = amortization_years * 12

    if 1 + monthly_rate == 1:  # zero, or too small to register
        return loan_amount / total_payments

    growth = _growth_factor(monthly_rate, total_payments)
    return loan_amount * monthly_rate / (1 - 1 / growth)


def calculate_periodic_payment(
    monthly_payment: float, frequency: PaymentFrequency = PaymentFrequency.monthly
) -> float:
    """Payment billed per period: the monthly payment, or half of it bi-weekly."""
    if PaymentFrequency(frequency) is PaymentFrequency.bi_weekly:
        return monthly_payment / 2
    return monthly_payment


def calculate_max_loan_amount(
    monthly_payment: float, annual_rate_percent: float, amortization_years: int = 25
) -> float:
    """
    Largest loan a given monthly payment can carry.

    Inverse of calculate_monthly_payment.
    """
    if amortization_years <= 0:
        raise InvalidTermsError("Amortization period must be greater than 0")
    if annual_rate_percent < 0:
        raise InvalidTermsError("Interest rate cannot be negative")

    monthly_rate = annual_rate_percent / 100 / 12
    total_payments = amortization_years * 12

    if 1 + monthly_rate == 1:
        return monthly_payment * total_payments

    growth = _growth_factor(monthly_rate, total_payments)
    return monthly_payment * (1 - 1 / growth) / monthly_rate


def calculate_remaining_balance(
    loan_amount: float,
    annual_rate_percent: float,
    amortization_years: int,
    payments_completed: int,
) -> float:
    """Calculate remaining loan balance after N monthly payments."""
    payment = calculate_monthly_payment(loan_amount, annual_rate_percent, amortization_years)
    monthly_rate = annual_rate_percent / 100 / 12

    if 1 + monthly_rate == 1:
        return max(0.0, loan_amount - payment * payments_completed)

    growth = _growth_factor(monthly_rate, payments_completed)
    balance = loan_amount * growth - payment * (growth - 1) / monthly_rate

    return max(0.0, balance)


def _iter_months(
    loan_amount: float, annual_rate_percent: float, amortization_years: int
) -> Iterator[Tuple[int, int, float, float, float]]:
    """
    Simulate the loan month by month.

    Yields (year, month, interest, principal, balance) on unrounded running
    values. Stops after the month in which the balance reaches zero.
    """
    payment = calculate_monthly_payment(loan_amount, annual_rate_percent, amortization_years)
    monthly_rate = annual_rate_percent / 100 / 12
    balance = loan_amount

    for year in range(1, amortization_years + 1):
        for month in range(1, 13):
            interest = balance * monthly_rate
            principal = payment - interest
            balance -= principal

            if balance <= 0:
                yield year, month, interest, principal, 0.0
                return

            yield year, month, interest, principal, balance


def iter_amortization_years(
    loan_amount: float, annual_rate_percent: float, amortization_years: int
) -> Iterator[AmortizationYearRow]:
    """
    Lazily produce the yearly amortization schedule.

    The returned iterator is single-pass. Inputs are validated immediately,
    not on first iteration.
    """
    _validate_loan(loan_amount, annual_rate_percent, amortization_years)

    def rows():
        cumulative_interest = 0.0
        months = _iter_months(loan_amount, annual_rate_percent, amortization_years)
        for year, year_months in groupby(months, key=lambda m: m[0]):
            yearly_principal = 0.0
            yearly_interest = 0.0
            for _, _, interest, principal, balance in year_months:
                yearly_interest += interest
                yearly_principal += principal
            cumulative_interest += yearly_interest

            yield AmortizationYearRow(
                year=year,
                principal_paid=round_currency(yearly_principal),
                interest_paid=round_currency(yearly_interest),
                ending_balance=round_currency(max(0.0, balance)),
                total_paid=round_currency(yearly_principal + yearly_interest),
                cumulative_interest=round_currency(cumulative_interest),
            )

    return rows()


def generate_amortization_schedule(
    loan_amount: float, annual_rate_percent: float, amortization_years: int
) -> List[AmortizationYearRow]:
    """
    Generate the yearly amortization schedule.

    Interest and principal accumulate on unrounded balances; each row is
    rounded to whole currency units. If rounding drift retires the loan
    before the last scheduled month, the schedule ends with that partial year.

    Args:
        loan_amount: Amount borrowed
        annual_rate_percent: Annual interest rate as a percentage
        amortization_years: Amortization period in years

    Returns:
        At most amortization_years rows
    """
    return list(iter_amortization_years(loan_amount, annual_rate_percent, amortization_years))


def generate_monthly_schedule(
    loan_amount: float,
    annual_rate_percent: float,
    amortization_years: int,
    start_date: Optional[date] = None,
) -> List[AmortizationMonthRow]:
    """
    Generate the month-by-month amortization schedule.

    Args:
        loan_amount: Amount borrowed
        annual_rate_percent: Annual interest rate as a percentage
        amortization_years: Amortization period in years
        start_date: Date of the first payment; rows carry no date when omitted

    Returns:
        List of monthly rows, rounded to cents
    """
    _validate_loan(loan_amount, annual_rate_percent, amortization_years)

    schedule = []
    months = _iter_months(loan_amount, annual_rate_percent, amortization_years)
    for period, (_, _, interest, principal, balance) in enumerate(months, start=1):
        payment_date = None
        if start_date is not None:
            payment_date = start_date + relativedelta(months=period - 1)

        schedule.append(
            AmortizationMonthRow(
                period=period,
                payment_date=payment_date,
                payment=round_currency(interest + principal, 2),
                interest=round_currency(interest, 2),
                principal=round_currency(principal, 2),
                ending_balance=round_currency(balance, 2),
            )
        )

    return schedule


def calculate_total_interest(schedule: List[AmortizationYearRow]) -> float:
    """Calculate total interest paid over a yearly schedule."""
    return sum(row.interest_paid for row in schedule)


def summarize_mortgage(terms: LoanTerms) -> MortgageSummary:
    """
    Headline mortgage figures for a set of loan terms.

    Total cost is every scheduled monthly payment plus the down payment;
    total interest is total cost less the home price.
    """
    monthly_payment = calculate_monthly_payment(
        terms.loan_amount, terms.annual_rate_percent, terms.amortization_years
    )
    total_cost = monthly_payment * terms.amortization_years * 12 + terms.down_payment
    total_interest = total_cost - terms.home_price

    return MortgageSummary(
        loan_amount=round_currency(terms.loan_amount, 2),
        monthly_payment=round_currency(monthly_payment, 2),
        periodic_payment=round_currency(
            calculate_periodic_payment(monthly_payment, terms.payment_frequency), 2
        ),
        payments_per_year=PAYMENTS_PER_YEAR[terms.payment_frequency],
        total_cost=round_currency(total_cost, 2),
        total_interest=round_currency(total_interest, 2),
        down_payment_percent=round_percent(terms.down_payment_percent),
    )
