"""
Mortgage input validation.

Separates hard errors (inputs the calculators must not be run with) from
advisories (valid but unusual values worth showing to the user). Canadian
minimum down payment and amortization rules are checked here rather than in
the calculators themselves.
"""

from dataclasses import dataclass, field
from typing import List

from homecalc.calculations.errors import InvalidTermsError, OutOfRangeWarning
from homecalc.calculations.land_transfer_tax import Province

MIN_PLAUSIBLE_PRICE = 25_000
MAX_PLAUSIBLE_PRICE = 10_000_000
MAX_PLAUSIBLE_RATE_PERCENT = 20.0
MIN_PLAUSIBLE_RATE_PERCENT = 1.0
MIN_AMORTIZATION_YEARS = 5
MAX_AMORTIZATION_YEARS = 30
MAX_INSURED_AMORTIZATION_YEARS = 25
INSURED_PRICE_CEILING = 1_000_000


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult:
    """Errors block calculation; warnings are advisory only."""

    errors: List[FieldError] = field(default_factory=list)
    warnings: List[OutOfRangeWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def for_field(self, name: str) -> List[str]:
        """Messages (errors first) attached to a single input."""
        return [e.message for e in self.errors if e.field == name] + [
            w.message for w in self.warnings if w.field == name
        ]

    def raise_for_errors(self):
        """Raise InvalidTermsError listing every error, if there are any."""
        if self.errors:
            raise InvalidTermsError("; ".join(e.message for e in self.errors))


def minimum_down_payment(home_price: float) -> float:
    """
    Minimum down payment under Canadian rules.

    5% up to 500,000; 5% of the first 500,000 plus 10% of the rest up to
    1,000,000; 20% above that.
    """
    if home_price <= 500_000:
        return home_price * 0.05
    if home_price <= INSURED_PRICE_CEILING:
        return 25_000 + (home_price - 500_000) * 0.10
    return home_price * 0.20


def validate_mortgage_inputs(
    home_price: float,
    down_payment: float,
    annual_rate_percent: float,
    amortization_years: int,
    province: Province,
    is_first_time_buyer: bool = False,
) -> ValidationResult:
    """
    Check mortgage inputs before running the calculators.

    Args:
        home_price: Purchase price
        down_payment: Down payment
        annual_rate_percent: Mortgage rate as a percentage
        amortization_years: Amortization period in years
        province: Province the property is in
        is_first_time_buyer: Whether the buyer is a first-time buyer

    Returns:
        ValidationResult with every problem found (does not stop at the first)
    """
    result = ValidationResult()
    province = Province(province)

    def error(name, message):
        result.errors.append(FieldError(field=name, message=message))

    def warn(name, value, message):
        result.warnings.append(OutOfRangeWarning(field=name, value=value, message=message))

    # Home price
    if home_price <= 0:
        error("home_price", "Home price must be greater than $0")
    elif home_price < MIN_PLAUSIBLE_PRICE:
        warn("home_price", home_price, "Home price seems unusually low. Please verify the amount.")
    elif home_price > MAX_PLAUSIBLE_PRICE:
        warn(
            "home_price",
            home_price,
            "Home price exceeds typical mortgage limits. Consider jumbo loan options.",
        )

    # Down payment
    down_payment_percent = None
    if down_payment <= 0:
        error("down_payment", "Down payment must be greater than $0")
    elif home_price > 0 and down_payment >= home_price:
        error("down_payment", "Down payment cannot be equal to or greater than the home price")
    elif home_price > 0:
        down_payment_percent = down_payment / home_price * 100
        required = minimum_down_payment(home_price)

        if down_payment < required:
            if home_price <= 500_000:
                message = "Minimum down payment is 5% for homes $500,000 and under"
            elif home_price <= INSURED_PRICE_CEILING:
                message = (
                    f"Minimum down payment is ${required:,.0f} "
                    "(5% on first $500K + 10% on remainder)"
                )
            else:
                message = "Minimum down payment is 20% for homes over $1,000,000"
            error("down_payment", message)

        if down_payment_percent < 20 and home_price > INSURED_PRICE_CEILING:
            error("down_payment", "Mortgage insurance is not available for homes over $1,000,000")

        if is_first_time_buyer and down_payment_percent < 5:
            warn(
                "down_payment",
                down_payment,
                "First-time buyers can qualify with as little as 5% down payment",
            )

        if down_payment_percent > 50:
            warn(
                "down_payment",
                down_payment,
                "Consider keeping some funds for closing costs and emergency reserves",
            )

    # Interest rate
    if annual_rate_percent <= 0:
        error("annual_rate_percent", "Interest rate must be greater than 0%")
    elif annual_rate_percent > MAX_PLAUSIBLE_RATE_PERCENT:
        warn(
            "annual_rate_percent",
            annual_rate_percent,
            "Interest rate seems unusually high. Please verify the rate.",
        )
    elif annual_rate_percent < MIN_PLAUSIBLE_RATE_PERCENT:
        warn(
            "annual_rate_percent",
            annual_rate_percent,
            "Interest rate seems unusually low. Please verify the rate.",
        )

    # Amortization
    if amortization_years < MIN_AMORTIZATION_YEARS:
        error("amortization_years", "Minimum amortization period is typically 5 years")
    elif amortization_years > MAX_AMORTIZATION_YEARS:
        error("amortization_years", "Maximum amortization period is 30 years for insured mortgages")
    elif (
        amortization_years > MAX_INSURED_AMORTIZATION_YEARS
        and down_payment_percent is not None
        and down_payment_percent < 20
    ):
        error(
            "amortization_years",
            "Amortization over 25 years requires minimum 20% down payment",
        )

    # Provincial notes
    if province is Province.bc and home_price > 750_000:
        warn(
            "home_price",
            home_price,
            "BC homes over $750,000 may be subject to additional property transfer tax",
        )
    if province is Province.ontario and home_price > 400_000:
        warn(
            "home_price",
            home_price,
            "Ontario homes over $400,000 may have higher land transfer tax in some municipalities",
        )

    return result
