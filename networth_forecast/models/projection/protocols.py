"""
Protocol interfaces for projection model variants.

The projection engine owns the monthly loop (income events, inflation,
savings, timeline points). Each model variant plugs into that loop through
an AllocationPolicy that decides how income, expenses and the month's savings
are treated.
"""

from typing import Protocol

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from ..market_data import MarketDataProvider
from .parameters import VariantParameters
from .state import SimulationState


class StepContext(BaseModel):
    """Read-only inputs for one month of a projection."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    month: int = Field(..., ge=1, description="Projection month (1-based)")
    calendar_month: int = Field(..., ge=1, le=12, description="Calendar month")
    tier: int = Field(..., ge=0, le=2, description="Long-horizon tier")
    inflated_expenses: float = Field(
        ..., description="Base expenses after inflation for this month"
    )
    parameters: VariantParameters
    market: MarketDataProvider
    market_rng: np.random.Generator
    event_rng: np.random.Generator


class AllocationPolicy(Protocol):
    """
    Economic behaviour of one model variant.

    Policies are stateless and shared between runs; everything that changes
    during a run lives in the SimulationState passed to each call.
    """

    def monthly_expenses(self, ctx: StepContext) -> float:
        """
        Expenses for the month.

        Args:
            ctx: Month inputs, including inflation-adjusted base expenses

        Returns:
            Expenses to charge this month
        """
        ...

    def monthly_income(self, state: SimulationState, ctx: StepContext) -> float:
        """
        Income for the month.

        May apply run-level changes to ``state`` (life events) before
        returning the adjusted income.
        """
        ...

    def allocate(
        self, state: SimulationState, monthly_savings: float, ctx: StepContext
    ) -> None:
        """
        Distribute the month's savings (possibly negative) across debt,
        cash, emergency fund and investments, and apply returns.
        """
        ...
