"""
Tests for the month grid and inflation adjustment.
"""

import pytest

from networth_forecast.models.time_grid import InflationAdjuster, MonthGrid


class TestMonthGrid:
    """Test MonthGrid functionality."""

    def test_months(self):
        """Test that months are 1-based and contiguous."""
        grid = MonthGrid(months=3)
        assert grid.get_months() == [1, 2, 3]
        assert len(grid) == 3

    def test_requires_positive_months(self):
        """Test that an empty grid is rejected."""
        with pytest.raises(ValueError):
            MonthGrid(months=0)

    def test_calendar_month_wraps(self):
        """Test that month 13 is January again."""
        assert MonthGrid.calendar_month(1) == 1
        assert MonthGrid.calendar_month(12) == 12
        assert MonthGrid.calendar_month(13) == 1
        assert MonthGrid.calendar_month(30) == 6

    def test_calendar_month_rejects_zero(self):
        """Test that month 0 is outside the grid."""
        with pytest.raises(ValueError, match="outside the projection grid"):
            MonthGrid.calendar_month(0)

    def test_horizon_tiers(self):
        """Test the 20- and 30-year tier boundaries."""
        assert MonthGrid.horizon_tier(1) == 0
        assert MonthGrid.horizon_tier(240) == 0
        assert MonthGrid.horizon_tier(241) == 1
        assert MonthGrid.horizon_tier(360) == 1
        assert MonthGrid.horizon_tier(361) == 2

    def test_years_elapsed(self):
        """Test conversion of months to years."""
        assert MonthGrid.years_elapsed(18) == 1.5


class TestInflationAdjuster:
    """Test InflationAdjuster functionality."""

    def test_first_month_is_unadjusted(self):
        """Test that the inflation factor is exactly 1 in month 1."""
        adjuster = InflationAdjuster(annual_rate=0.03)
        assert adjuster.factor(1) == 1.0
        assert adjuster.adjust(3000, 1) == 3000

    def test_monthly_compounding(self):
        """Test compounding of the monthly rate."""
        adjuster = InflationAdjuster(annual_rate=0.12)
        assert adjuster.monthly_rate == pytest.approx(0.01)
        assert adjuster.factor(2) == pytest.approx(1.01)
        assert adjuster.factor(13) == pytest.approx(1.01**12)

    def test_zero_rate(self):
        """Test that zero inflation leaves amounts unchanged."""
        adjuster = InflationAdjuster(annual_rate=0.0)
        assert adjuster.adjust(100, 120) == 100

    def test_real_value_round_trip(self):
        """Test converting a nominal amount back to base-month dollars."""
        adjuster = InflationAdjuster(annual_rate=0.03)
        nominal = adjuster.adjust(1000, 60)
        assert adjuster.to_real_value(nominal, 60) == pytest.approx(1000)

    def test_invalid_rate(self):
        """Test rate bounds."""
        with pytest.raises(ValueError):
            InflationAdjuster(annual_rate=-0.01)
        with pytest.raises(ValueError):
            InflationAdjuster(annual_rate=1.5)
