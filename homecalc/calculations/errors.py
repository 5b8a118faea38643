"""
Calculation error taxonomy.

The engine either returns a result or raises one of these synchronously.
Advisories for implausible-but-valid inputs are returned as
OutOfRangeWarning records, never raised.
"""

from dataclasses import dataclass


class CalculationError(ValueError):
    """Base class for every error raised by the calculation engine."""


class InvalidTermsError(CalculationError):
    """Loan amount, rate, term or other input outside its valid domain."""


class DivisionByZeroError(CalculationError, ZeroDivisionError):
    """A ratio was requested against a zero base (e.g. ROI with no down payment)."""


@dataclass(frozen=True)
class OutOfRangeWarning:
    """Non-fatal advisory about a value that is valid but domain-implausible."""

    field: str
    value: float
    message: str
