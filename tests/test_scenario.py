"""
Tests for what-if scenario construction.
"""

import pytest

from networth_forecast.models.profile import InvalidInputError, ScenarioDelta
from networth_forecast.models.projection import project
from networth_forecast.models.scenario import apply_scenario


class TestApplyScenario:
    """Test apply_scenario."""

    def test_empty_deltas_leave_profile_equal(self, sample_profile):
        """Test that no deltas produce an equal profile."""
        assert apply_scenario(sample_profile, []) == sample_profile

    def test_food_cut(self, sample_profile):
        """Test a 10% food cut."""
        what_if = apply_scenario(
            sample_profile, [ScenarioDelta(category="food", change_percent=-10)]
        )
        assert what_if.monthly_expenses.food == pytest.approx(540)
        assert what_if.total_expenses == pytest.approx(2940)

    def test_base_profile_untouched(self, sample_profile):
        """Test that the baseline is not modified."""
        apply_scenario(sample_profile, [ScenarioDelta(category="food", change_percent=-50)])
        assert sample_profile.monthly_expenses.food == 600

    def test_percent_deltas_compound(self, sample_profile):
        """Test that two percentage deltas multiply rather than add."""
        what_if = apply_scenario(
            sample_profile,
            [
                ScenarioDelta(category="housing", change_percent=10),
                ScenarioDelta(category="housing", change_percent=20),
            ],
        )
        assert what_if.monthly_expenses.housing == pytest.approx(1200 * 1.1 * 1.2)
        assert what_if.monthly_expenses.housing != pytest.approx(1200 * 1.3)

    def test_order_matters(self, sample_profile):
        """Test that a percentage then an amount differs from the reverse."""
        percent = ScenarioDelta(category="food", change_percent=50)
        amount = ScenarioDelta(category="food", change_amount=100)

        first = apply_scenario(sample_profile, [percent, amount])
        second = apply_scenario(sample_profile, [amount, percent])

        assert first.monthly_expenses.food == pytest.approx(1000)
        assert second.monthly_expenses.food == pytest.approx(1050)

    def test_income_and_savings(self, sample_profile):
        """Test the non-expense categories."""
        what_if = apply_scenario(
            sample_profile,
            [
                ScenarioDelta(category="income", change_amount=500),
                ScenarioDelta(category="savings", change_percent=100),
            ],
        )
        assert what_if.monthly_income == 5000
        assert what_if.current_savings == 10000
        assert what_if.current_debt == sample_profile.current_debt

    def test_negative_result_rejected_on_projection(self, sample_profile):
        """Test that out-of-range values surface and fail projection."""
        what_if = apply_scenario(
            sample_profile, [ScenarioDelta(category="food", change_amount=-1000)]
        )
        assert what_if.monthly_expenses.food == -400

        with pytest.raises(InvalidInputError):
            project(what_if, 12, "linear", seed=1)
