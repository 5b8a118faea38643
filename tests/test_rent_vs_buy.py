"""
Tests for rent vs buy comparison.
"""

import pytest

from homecalc.calculations.errors import InvalidTermsError
from homecalc.calculations.rent_vs_buy import compare_rent_vs_buy, iter_rent_vs_buy_years


class TestRentVsBuy:
    """Test cumulative rent vs ownership projection."""

    def test_flat_rent(self):
        """With no increase, cumulative rent is linear."""
        projection = compare_rent_vs_buy(2_000, 0, 10, 100_000, 2_500)
        for row in projection.years:
            assert row.cumulative_rent_paid == 2_000 * 12 * row.year

    def test_length(self):
        assert len(compare_rent_vs_buy(2_000, 3, 7, 100_000, 2_500).years) == 7

    def test_compounding(self):
        projection = compare_rent_vs_buy(2_000, 3, 3, 100_000, 2_500)
        assert projection.years[0].cumulative_rent_paid == 24_000
        assert projection.years[1].cumulative_rent_paid == 48_720
        assert projection.years[2].cumulative_rent_paid == 74_182  # + 25,461.60

    def test_ownership_cost(self):
        projection = compare_rent_vs_buy(2_000, 3, 5, 100_000, 2_500)
        assert projection.years[0].cumulative_ownership_cost == 130_000
        assert projection.years[4].cumulative_ownership_cost == 250_000
        assert projection.total_ownership_cost == 250_000

    def test_net_difference_sign(self):
        """Per-year difference is ownership less rent."""
        row = compare_rent_vs_buy(2_000, 0, 1, 100_000, 2_500).years[0]
        assert row.net_difference == 130_000 - 24_000

    def test_net_benefit_renting_cheaper(self):
        projection = compare_rent_vs_buy(2_000, 0, 10, 100_000, 2_500)
        assert projection.total_rent_paid == 240_000
        assert projection.net_benefit_of_buying == 240_000 - 400_000
        assert not projection.buying_is_cheaper

    def test_net_benefit_buying_cheaper(self):
        projection = compare_rent_vs_buy(4_000, 5, 25, 50_000, 2_500)
        assert projection.net_benefit_of_buying > 0
        assert projection.buying_is_cheaper

    def test_totals_match_last_row(self):
        projection = compare_rent_vs_buy(2_300, 2.5, 12, 80_000, 2_100)
        last = projection.years[-1]
        assert projection.total_rent_paid == last.cumulative_rent_paid
        assert projection.total_ownership_cost == last.cumulative_ownership_cost

    @pytest.mark.parametrize(
        "rent,increase,years,down,payment",
        [(2_000, 3, 0, 100_000, 2_500), (-1, 3, 5, 100_000, 2_500), (2_000, -100, 5, 100_000, 2_500),
         (2_000, 3, 5, -1, 2_500), (2_000, 3, 5, 100_000, -1)],
    )
    def test_invalid(self, rent, increase, years, down, payment):
        with pytest.raises(InvalidTermsError):
            compare_rent_vs_buy(rent, increase, years, down, payment)


class TestRentVsBuyIterator:
    """Test lazy yearly rows."""

    def test_validates_before_iteration(self):
        with pytest.raises(InvalidTermsError):
            iter_rent_vs_buy_years(2_000, 3, 0, 100_000, 2_500)

    def test_single_pass(self):
        rows = iter_rent_vs_buy_years(2_000, 3, 5, 100_000, 2_500)
        assert [row.year for row in rows] == [1, 2, 3, 4, 5]
        assert list(rows) == []

    def test_matches_projection(self):
        rows = tuple(iter_rent_vs_buy_years(2_000, 3, 5, 100_000, 2_500))
        assert rows == compare_rent_vs_buy(2_000, 3, 5, 100_000, 2_500).years
