"""
Monthly projection engine.

Runs one household profile forward month by month under a chosen model
variant and returns the net-worth timeline. All randomness is drawn from
generators created per call, so concurrent projections never share state
and a fixed seed always reproduces the same timeline.
"""

import logging
from typing import List, Optional

import numpy as np

from ..market_data import MarketDataProvider, get_default_market_data_provider
from ..profile import (
    FinancialProfile,
    ModelVariant,
    TimelinePoint,
    validate_months,
    validate_profile,
    validate_variant,
)
from ..promotion_events import PromotionScheduler, events_by_month
from ..time_grid import InflationAdjuster, MonthGrid
from .parameters import VARIANT_PARAMETERS
from .policies import POLICIES
from .protocols import StepContext
from .state import SimulationState

logger = logging.getLogger(__name__)

DEFAULT_VARIANT: ModelVariant = "realistic"
STATUS_QUO_MONTHS = 12


class ProjectionEngine:
    """Projects a financial profile forward under one of the model variants."""

    def __init__(
        self,
        market_data: Optional[MarketDataProvider] = None,
        scheduler: Optional[PromotionScheduler] = None,
    ):
        self.market_data = market_data
        self.scheduler = scheduler or PromotionScheduler()

    def _market(self) -> MarketDataProvider:
        if self.market_data is None:
            self.market_data = get_default_market_data_provider()
        return self.market_data

    def project(
        self,
        profile: FinancialProfile,
        months: int,
        variant: str = DEFAULT_VARIANT,
        seed: Optional[int] = None,
    ) -> List[TimelinePoint]:
        """
        Project a profile forward.

        Args:
            profile: Household profile (re-validated before use)
            months: Number of months to project, at least 1
            variant: Model variant name
            seed: Seed for all random draws; None draws fresh entropy

        Returns:
            One timeline point per month, months 1..months in order

        Raises:
            InvalidInputError: If the profile, months or variant is invalid
        """
        profile = validate_profile(profile)
        months = validate_months(months)
        variant = validate_variant(variant)

        params = VARIANT_PARAMETERS[variant]
        policy = POLICIES[variant]
        market = self._market()

        promotion_rng, market_rng, event_rng = [
            np.random.default_rng(child)
            for child in np.random.SeedSequence(seed).spawn(3)
        ]

        logger.info(
            f"Projecting {months} months with {variant} model (seed={seed})"
        )

        events = events_by_month(self.scheduler.schedule(months, variant, promotion_rng))
        grid = MonthGrid(months=months)
        inflation = InflationAdjuster(annual_rate=params.annual_inflation)
        base_expenses = profile.total_expenses
        state = SimulationState.start(profile, params.emergency_fund_months)

        timeline: List[TimelinePoint] = []
        for month in grid.get_months():
            for event in events.get(month, []):
                bonus = state.apply_event(event)
                logger.debug(
                    f"Month {month}: {event.kind} event, income now "
                    f"{state.monthly_income:.2f}, bonus {bonus:.2f}"
                )

            ctx = StepContext(
                month=month,
                calendar_month=grid.calendar_month(month),
                tier=grid.horizon_tier(month),
                inflated_expenses=inflation.adjust(base_expenses, month),
                parameters=params,
                market=market,
                market_rng=market_rng,
                event_rng=event_rng,
            )

            expenses = policy.monthly_expenses(ctx)
            income = policy.monthly_income(state, ctx)
            monthly_savings = income - expenses

            state.record_month(expenses, monthly_savings)
            policy.allocate(state, monthly_savings, ctx)
            timeline.append(state.snapshot(month))

        final = timeline[-1]
        logger.debug(
            f"Projection finished: net worth {final.net_worth:.2f}, "
            f"debt {final.debt:.2f}"
        )
        return timeline


_default_engine: Optional[ProjectionEngine] = None


def get_default_engine() -> ProjectionEngine:
    """Shared engine backed by the bundled market data."""
    global _default_engine
    if _default_engine is None:
        _default_engine = ProjectionEngine()
    return _default_engine


def project(
    profile: FinancialProfile,
    months: int,
    variant: str = DEFAULT_VARIANT,
    seed: Optional[int] = None,
) -> List[TimelinePoint]:
    """Project a profile with the shared engine."""
    return get_default_engine().project(profile, months, variant, seed)


def project_status_quo(
    profile: FinancialProfile,
    months: int = STATUS_QUO_MONTHS,
    seed: Optional[int] = None,
) -> List[TimelinePoint]:
    """Project a profile unchanged under the default model."""
    return project(profile, months, DEFAULT_VARIANT, seed)
