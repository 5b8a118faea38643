"""
Tests for mortgage input validation.
"""

import pytest

from homecalc.calculations.errors import InvalidTermsError
from homecalc.calculations.land_transfer_tax import Province
from homecalc.calculations.validation import minimum_down_payment, validate_mortgage_inputs


def _fields(items):
    return [item.field for item in items]


class TestMinimumDownPayment:
    """Test Canadian minimum down payment rule."""

    @pytest.mark.parametrize(
        "price,expected",
        [(400_000, 20_000), (500_000, 25_000), (750_000, 50_000), (1_000_000, 75_000), (1_500_000, 300_000)],
    )
    def test_minimum(self, price, expected):
        assert abs(minimum_down_payment(price) - expected) < 1e-6


class TestValidation:
    """Test errors and advisories on mortgage inputs."""

    def test_valid_inputs(self):
        result = validate_mortgage_inputs(500_000, 100_000, 5.25, 25, Province.ontario)
        assert result.is_valid
        assert result.errors == []
        # Ontario price over 400K carries an advisory only
        assert _fields(result.warnings) == ["home_price"]
        result.raise_for_errors()

    def test_down_payment_below_five_percent(self):
        result = validate_mortgage_inputs(400_000, 10_000, 5, 25, Province.ontario)
        assert not result.is_valid
        assert _fields(result.errors) == ["down_payment"]
        assert "5%" in result.errors[0].message

    def test_down_payment_tiered_minimum(self):
        result = validate_mortgage_inputs(750_000, 40_000, 5, 25, Province.bc)
        assert _fields(result.errors) == ["down_payment"]
        assert "$50,000" in result.errors[0].message

    def test_over_one_million_needs_twenty_percent(self):
        result = validate_mortgage_inputs(1_200_000, 200_000, 5, 25, Province.ontario)
        messages = [e.message for e in result.errors]
        assert len(messages) == 2
        assert any("20%" in m for m in messages)
        assert any("insurance" in m for m in messages)

    def test_down_payment_not_below_price(self):
        result = validate_mortgage_inputs(500_000, 500_000, 5, 25, Province.ontario)
        assert _fields(result.errors) == ["down_payment"]

    def test_non_positive_values(self):
        result = validate_mortgage_inputs(0, 0, 0, 25, Province.ontario)
        assert _fields(result.errors) == ["home_price", "down_payment", "annual_rate_percent"]

    def test_rate_advisories(self):
        high = validate_mortgage_inputs(300_000, 60_000, 25, 25, Province.bc)
        low = validate_mortgage_inputs(300_000, 60_000, 0.5, 25, Province.bc)
        assert high.is_valid and low.is_valid
        assert _fields(high.warnings) == ["annual_rate_percent"]
        assert "high" in high.warnings[0].message
        assert "low" in low.warnings[0].message

    def test_price_advisories(self):
        low = validate_mortgage_inputs(20_000, 2_000, 5, 25, Province.bc)
        assert low.is_valid
        assert low.warnings[0].field == "home_price"
        assert low.warnings[0].value == 20_000

    def test_amortization_range(self):
        short = validate_mortgage_inputs(300_000, 60_000, 5, 4, Province.bc)
        long = validate_mortgage_inputs(300_000, 60_000, 5, 35, Province.bc)
        assert _fields(short.errors) == ["amortization_years"]
        assert _fields(long.errors) == ["amortization_years"]

    def test_thirty_years_needs_twenty_percent(self):
        insured = validate_mortgage_inputs(300_000, 30_000, 5, 30, Province.bc)
        conventional = validate_mortgage_inputs(300_000, 60_000, 5, 30, Province.bc)
        assert _fields(insured.errors) == ["amortization_years"]
        assert conventional.is_valid

    def test_large_down_payment_advisory(self):
        result = validate_mortgage_inputs(300_000, 200_000, 5, 25, Province.bc)
        assert result.is_valid
        assert _fields(result.warnings) == ["down_payment"]

    def test_bc_expensive_home_advisory(self):
        result = validate_mortgage_inputs(800_000, 200_000, 5, 25, Province.bc)
        assert "additional property transfer tax" in result.for_field("home_price")[0]

    def test_raise_for_errors(self):
        result = validate_mortgage_inputs(400_000, 10_000, 0, 25, Province.ontario)
        with pytest.raises(InvalidTermsError) as exc_info:
            result.raise_for_errors()
        assert "5%" in str(exc_info.value)
        assert "Interest rate" in str(exc_info.value)

    def test_for_field_orders_errors_first(self):
        result = validate_mortgage_inputs(1_200_000, 900_000, 5, 25, Province.ontario)
        assert result.is_valid
        assert result.for_field("down_payment") == [
            "Consider keeping some funds for closing costs and emergency reserves"
        ]
