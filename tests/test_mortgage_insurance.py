"""
Tests for CMHC mortgage default insurance.
"""

import pytest

from homecalc.calculations.errors import InvalidTermsError
from homecalc.calculations.mortgage_insurance import (
    calculate_cmhc_insurance,
    calculate_total_loan_amount,
)


class TestCMHCInsurance:
    """Test premium tiers by down payment percentage."""

    @pytest.mark.parametrize(
        "down,rate,premium",
        [
            (100_000, 0.0, 0),  # 20%
            (75_000, 0.028, 11_900),  # 15%
            (50_000, 0.031, 13_950),  # 10%
            (25_000, 0.04, 19_000),  # 5%
        ],
    )
    def test_tiers(self, down, rate, premium):
        insurance = calculate_cmhc_insurance(500_000, down)
        assert insurance.rate == rate
        assert insurance.premium == premium
        assert insurance.is_required == (premium > 0)

    def test_total_loan_amount(self):
        loan = calculate_total_loan_amount(500_000, 25_000)
        assert loan.base_loan_amount == 475_000
        assert loan.insurance_premium == 19_000
        assert loan.total_loan_amount == 494_000

    def test_no_premium_at_twenty_percent(self):
        loan = calculate_total_loan_amount(500_000, 100_000)
        assert loan.total_loan_amount == loan.base_loan_amount == 400_000

    @pytest.mark.parametrize("price,down", [(0, 0), (500_000, -1), (500_000, 600_000)])
    def test_invalid(self, price, down):
        with pytest.raises(InvalidTermsError):
            calculate_cmhc_insurance(price, down)
