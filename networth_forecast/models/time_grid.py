"""
Month grid and inflation utilities for household projections.

This module maps the engine's 1-based month index onto calendar months and
long-horizon tiers, and provides the monthly inflation compounding used to
grow expenses over a projection.
"""

from typing import List

from pydantic import BaseModel, Field

MONTHS_PER_YEAR = 12
TWENTY_YEAR_MARK = 240
THIRTY_YEAR_MARK = 360


class MonthGrid(BaseModel):
    """Month grid for a projection horizon.

    Month 1 of every projection is treated as January.
    """

    months: int = Field(..., ge=1, description="Number of months projected")

    def get_months(self) -> List[int]:
        """Get list of month numbers in the grid."""
        return list(range(1, self.months + 1))

    @staticmethod
    def calendar_month(month: int) -> int:
        """Calendar month (1-12) for a 1-based projection month."""
        if month < 1:
            raise ValueError(f"Month {month} is outside the projection grid")
        return (month - 1) % MONTHS_PER_YEAR + 1

    @staticmethod
    def years_elapsed(month: int) -> float:
        """Years elapsed at the end of the given month."""
        return month / MONTHS_PER_YEAR

    @staticmethod
    def horizon_tier(month: int) -> int:
        """0 within the first 20 years, 1 within 20-30 years, 2 beyond 30."""
        if month > THIRTY_YEAR_MARK:
            return 2
        if month > TWENTY_YEAR_MARK:
            return 1
        return 0

    def __len__(self) -> int:
        return self.months


class InflationAdjuster(BaseModel):
    """Compounds an annual inflation rate month by month."""

    annual_rate: float = Field(
        ..., ge=0, le=1, description="Annual inflation rate (0-1)"
    )

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate / MONTHS_PER_YEAR

    def factor(self, month: int) -> float:
        """
        Inflation factor applied to base-month amounts.

        Args:
            month: 1-based projection month

        Returns:
            (1 + monthly_rate) ** (month - 1); exactly 1.0 in month 1
        """
        if month <= 1:
            return 1.0
        return (1 + self.monthly_rate) ** (month - 1)

    def adjust(self, amount: float, month: int) -> float:
        """Inflate a base-month amount to the given month."""
        return amount * self.factor(month)

    def to_real_value(self, nominal_amount: float, month: int) -> float:
        """Convert a nominal amount in the given month to base-month dollars."""
        return nominal_amount / self.factor(month)
