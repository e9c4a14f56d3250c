"""
Allocation policies for the seven projection model variants.

Each policy follows the same order inside ``allocate``: grow existing
balances, accrue debt interest, carve the debt payment out of the month's
savings, then place what is left. Debt payments are only ever made from
positive savings and never exceed the outstanding balance.
"""

from abc import ABC, abstractmethod
from typing import Dict, Tuple

from ..market_data import TREND_WINDOW_MONTHS, classify_trend
from ..time_grid import THIRTY_YEAR_MARK, TWENTY_YEAR_MARK
from .protocols import AllocationPolicy, StepContext
from .state import SimulationState

# January to December; income pauses June to August
SEASONAL_EXPENSE_MULTIPLIERS: Tuple[float, ...] = (
    1.1, 0.9, 1.0, 1.05, 0.95, 1.0, 1.1, 1.0, 0.95, 1.0, 1.1, 1.2,
)
SEASONAL_INCOME_GAP_MONTHS = frozenset({6, 7, 8})

BULL_MARKET_ANNUAL_ADJUSTMENT = 0.02
BEAR_MARKET_ANNUAL_ADJUSTMENT = -0.01

LIFE_EVENT_MONTHLY_PROBABILITY = 0.001
WINDFALL_INCOME_MONTHS = 12
MAJOR_EXPENSE_MONTHS = 6
CAREER_CHANGE_RANGE = (0.85, 1.25)

RETIREMENT_TAPER_MONTHS = 120
RETIREMENT_INCOME_FLOOR = 0.4


class BasePolicy(ABC):
    """Defaults shared by every variant: inflated expenses, unadjusted income."""

    def monthly_expenses(self, ctx: StepContext) -> float:
        return ctx.inflated_expenses

    def monthly_income(self, state: SimulationState, ctx: StepContext) -> float:
        return state.monthly_income

    @abstractmethod
    def allocate(
        self, state: SimulationState, monthly_savings: float, ctx: StepContext
    ) -> None:
        """Place the month's savings and apply returns."""

    def _pay_debt(
        self, state: SimulationState, monthly_savings: float, ctx: StepContext
    ) -> float:
        """Pay debt from savings; returns the savings left to allocate."""
        paid = state.pay_debt(ctx.parameters.debt_paydown_fraction * monthly_savings)
        return monthly_savings - paid

    def _split(self, state: SimulationState, amount: float, invest_fraction: float) -> None:
        """Invest part of a surplus and keep the rest as cash; withdraw a deficit."""
        if amount <= 0:
            state.withdraw(-amount)
            return
        invested = amount * invest_fraction
        state.invest(invested)
        state.deposit_cash(amount - invested)


class LinearPolicy(BasePolicy):
    """Savings accumulate as cash with a fixed share going to debt."""

    def allocate(self, state, monthly_savings, ctx):
        remaining = self._pay_debt(state, monthly_savings, ctx)
        state.absorb(remaining)


class ExponentialPolicy(BasePolicy):
    """Most savings compound at a high fixed return that steps down over time."""

    def allocate(self, state, monthly_savings, ctx):
        params = ctx.parameters
        state.grow_investments(params.monthly_investment_return(ctx.tier))
        remaining = self._pay_debt(state, monthly_savings, ctx)
        self._split(state, remaining, params.investment_fraction(ctx.tier))


class SeasonalPolicy(BasePolicy):
    """Seasonal spending swings and a three-month summer income gap."""

    def monthly_expenses(self, ctx):
        return ctx.inflated_expenses * SEASONAL_EXPENSE_MULTIPLIERS[ctx.calendar_month - 1]

    def monthly_income(self, state, ctx):
        if ctx.calendar_month in SEASONAL_INCOME_GAP_MONTHS:
            return 0.0
        return state.monthly_income

    def allocate(self, state, monthly_savings, ctx):
        multiplier = SEASONAL_EXPENSE_MULTIPLIERS[ctx.calendar_month - 1]
        state.grow_cash(ctx.parameters.monthly_cash_return * multiplier)
        remaining = self._pay_debt(state, monthly_savings, ctx)
        state.absorb(remaining)


class RealisticPolicy(BasePolicy):
    """
    Market-correlated model.

    Investments earn the combined index sample for the month, nudged up in a
    bull trend and down in a bear trend. Past 20 years rare life events can
    hit; past 30 years income tapers toward retirement.
    """

    def monthly_income(self, state, ctx):
        if ctx.month > TWENTY_YEAR_MARK:
            self._roll_life_event(state, ctx)

        income = state.monthly_income
        if ctx.month > THIRTY_YEAR_MARK:
            progress = min(1.0, (ctx.month - THIRTY_YEAR_MARK) / RETIREMENT_TAPER_MONTHS)
            income *= 1 - (1 - RETIREMENT_INCOME_FLOOR) * progress
        return income

    def _roll_life_event(self, state: SimulationState, ctx: StepContext) -> None:
        rng = ctx.event_rng
        if rng.random() >= LIFE_EVENT_MONTHLY_PROBABILITY:
            return

        event = int(rng.integers(0, 3))
        if event == 0:
            # Windfall
            bonus = state.monthly_income * WINDFALL_INCOME_MONTHS
            state.deposit_cash(bonus)
            state.total_saved += bonus
        elif event == 1:
            # Major expense
            cost = ctx.inflated_expenses * MAJOR_EXPENSE_MONTHS
            state.withdraw(cost)
            state.total_spent += cost
        else:
            # Career change
            state.monthly_income *= float(rng.uniform(*CAREER_CHANGE_RANGE))

    def allocate(self, state, monthly_savings, ctx):
        params = ctx.parameters

        sample = ctx.market.sample_for(ctx.month, ctx.market_rng)
        window = state.record_return(sample.monthly_return, TREND_WINDOW_MONTHS)
        trend = classify_trend(window).trend

        investment_return = sample.monthly_return * params.market_return_scales[ctx.tier]
        if trend == "bull":
            investment_return += BULL_MARKET_ANNUAL_ADJUSTMENT / 12
        elif trend == "bear":
            investment_return += BEAR_MARKET_ANNUAL_ADJUSTMENT / 12

        state.grow_investments(investment_return)
        state.grow_cash(params.monthly_cash_return)
        state.accrue_debt_interest(params.monthly_debt_interest)

        remaining = self._pay_debt(state, monthly_savings, ctx)
        if remaining > 0:
            to_fund = min(remaining, state.emergency_fund_gap)
            state.contribute_emergency_fund(to_fund)
            remaining -= to_fund
            self._split(state, remaining, params.investment_fraction(ctx.tier))
        else:
            state.withdraw(-remaining)


class ConservativePolicy(BasePolicy):
    """Emergency fund first; debt paydown waits until the fund is full."""

    def allocate(self, state, monthly_savings, ctx):
        params = ctx.parameters
        state.grow_investments(params.monthly_investment_return(ctx.tier))

        if monthly_savings <= 0:
            state.withdraw(-monthly_savings)
            return

        if state.emergency_fund_gap > 0:
            to_fund = min(
                monthly_savings * params.emergency_fund_share, state.emergency_fund_gap
            )
            state.contribute_emergency_fund(to_fund)
            remaining = monthly_savings - to_fund
        else:
            remaining = self._pay_debt(state, monthly_savings, ctx)

        self._split(state, remaining, params.investment_fraction(ctx.tier))


class SavingsPolicy(BasePolicy):
    """Everything held as cash earning a modest rate; debt accrues interest."""

    def allocate(self, state, monthly_savings, ctx):
        params = ctx.parameters
        state.grow_cash(params.monthly_cash_return)
        state.accrue_debt_interest(params.monthly_debt_interest)
        remaining = self._pay_debt(state, monthly_savings, ctx)
        state.absorb(remaining)


class OptimisticPolicy(BasePolicy):
    """High fixed returns and aggressive debt paydown."""

    def allocate(self, state, monthly_savings, ctx):
        params = ctx.parameters
        state.grow_investments(params.monthly_investment_return(ctx.tier))
        remaining = self._pay_debt(state, monthly_savings, ctx)
        self._split(state, remaining, params.investment_fraction(ctx.tier))


POLICIES: Dict[str, AllocationPolicy] = {
    "linear": LinearPolicy(),
    "exponential": ExponentialPolicy(),
    "seasonal": SeasonalPolicy(),
    "realistic": RealisticPolicy(),
    "conservative": ConservativePolicy(),
    "savings": SavingsPolicy(),
    "optimistic": OptimisticPolicy(),
}
