"""
Tests for rental investment analysis.
"""

import pytest

from homecalc.calculations.errors import DivisionByZeroError, InvalidTermsError
from homecalc.calculations.investment import (
    calculate_investment_metrics,
    flag_investment_risks,
)

EXPENSES = {"taxes": 300, "insurance": 100, "condo_fees": 0, "maintenance": 100, "other": 0}


class TestInvestmentMetrics:
    """Test rental metrics."""

    def test_positive_cash_flow(self):
        metrics = calculate_investment_metrics(500_000, 100_000, 3_000, EXPENSES, 5.25)
        assert metrics.monthly_mortgage == 2_397
        assert metrics.total_monthly_expenses == 2_897
        assert metrics.break_even_rent == metrics.total_monthly_expenses
        assert metrics.monthly_cash_flow == 103
        assert metrics.annual_net_operating_income == 30_000
        assert metrics.cap_rate_percent == 6.0
        assert metrics.cash_on_cash_roi_percent == 1.24

    def test_noi_excludes_debt_service(self):
        """NOI is the same whatever the financing."""
        low = calculate_investment_metrics(500_000, 100_000, 3_000, EXPENSES, 2)
        high = calculate_investment_metrics(500_000, 100_000, 3_000, EXPENSES, 8)
        assert low.annual_net_operating_income == high.annual_net_operating_income
        assert low.cap_rate_percent == high.cap_rate_percent
        assert low.monthly_cash_flow > high.monthly_cash_flow

    def test_negative_cash_flow(self):
        metrics = calculate_investment_metrics(500_000, 100_000, 2_000, EXPENSES, 5.25)
        assert metrics.monthly_cash_flow == -897
        assert metrics.cash_on_cash_roi_percent < 0
        assert metrics.cap_rate_percent == 3.6

    def test_no_expenses(self):
        metrics = calculate_investment_metrics(400_000, 80_000, 2_500, {}, 4)
        assert metrics.annual_net_operating_income == 30_000
        assert metrics.cap_rate_percent == 7.5

    def test_zero_rate_mortgage(self):
        metrics = calculate_investment_metrics(400_000, 100_000, 2_500, {}, 0)
        assert metrics.monthly_mortgage == 1_000  # 300,000 over 300 months

    def test_zero_down_payment(self):
        """Cash-on-cash return is undefined without a down payment."""
        with pytest.raises(DivisionByZeroError):
            calculate_investment_metrics(500_000, 0, 3_000, EXPENSES, 5.25)

    def test_zero_down_payment_is_zero_division(self):
        with pytest.raises(ZeroDivisionError):
            calculate_investment_metrics(500_000, 0, 3_000, EXPENSES, 5.25)

    def test_overflowing_rate(self):
        with pytest.raises(InvalidTermsError):
            calculate_investment_metrics(500_000, 100_000, 3_000, {}, 100_000)

    @pytest.mark.parametrize("price,down", [(0, 0), (500_000, 500_000), (500_000, -1)])
    def test_invalid(self, price, down):
        with pytest.raises(InvalidTermsError):
            calculate_investment_metrics(price, down, 3_000, EXPENSES, 5.25)


class TestInvestmentRisks:
    """Test caller-side advisories."""

    def test_healthy_property(self):
        metrics = calculate_investment_metrics(500_000, 100_000, 3_000, EXPENSES, 5.25)
        assert flag_investment_risks(metrics) == []

    def test_negative_cash_flow_and_low_cap_rate(self):
        metrics = calculate_investment_metrics(500_000, 100_000, 2_000, EXPENSES, 5.25)
        fields = [w.field for w in flag_investment_risks(metrics)]
        assert fields == ["monthly_cash_flow", "cap_rate_percent"]

    def test_low_cap_rate_only(self):
        metrics = calculate_investment_metrics(500_000, 250_000, 2_500, EXPENSES, 3)
        warnings = flag_investment_risks(metrics)
        assert metrics.monthly_cash_flow > 0
        assert [w.field for w in warnings] == ["cap_rate_percent"]
        assert warnings[0].value == metrics.cap_rate_percent
