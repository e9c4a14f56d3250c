"""
Per-run simulation state.

A SimulationState is created at the start of one projection call, mutated
only by that call's stepping loop, and discarded once the timeline is built.
"""

from typing import List

from pydantic import BaseModel, Field

from ..profile import FinancialProfile, TimelinePoint
from ..promotion_events import PromotionEvent


class SimulationState(BaseModel):
    """Running balances for one projection."""

    monthly_income: float = Field(..., description="Current nominal monthly income")
    cash_savings: float = Field(..., description="Cash, including the emergency fund")
    investment_portfolio: float = Field(default=0.0, description="Invested balance")
    emergency_fund: float = Field(
        default=0.0, ge=0, description="Earmarked part of cash savings"
    )
    emergency_fund_target: float = Field(default=0.0, ge=0)
    debt_balance: float = Field(default=0.0, ge=0)
    total_spent: float = Field(default=0.0)
    total_saved: float = Field(default=0.0)
    recent_returns: List[float] = Field(
        default_factory=list, description="Trailing market returns seen by this run"
    )

    @classmethod
    def start(
        cls, profile: FinancialProfile, emergency_fund_months: float = 0.0
    ) -> "SimulationState":
        """Opening balances for a profile."""
        target = profile.total_expenses * emergency_fund_months
        return cls(
            monthly_income=profile.monthly_income,
            cash_savings=profile.current_savings,
            emergency_fund=min(profile.current_savings, target),
            emergency_fund_target=target,
            debt_balance=profile.current_debt,
        )

    @property
    def emergency_fund_gap(self) -> float:
        return max(0.0, self.emergency_fund_target - self.emergency_fund)

    def apply_event(self, event: PromotionEvent) -> float:
        """Apply an income event; returns the bonus paid in dollars."""
        bonus = event.bonus_fraction * self.monthly_income * 12
        self.monthly_income *= 1 + event.salary_increase_fraction
        if bonus > 0:
            self.cash_savings += bonus
            self.total_saved += bonus
        return bonus

    def record_month(self, expenses: float, savings: float) -> None:
        self.total_spent += expenses
        self.total_saved += savings

    def deposit_cash(self, amount: float) -> None:
        self.cash_savings += amount

    def contribute_emergency_fund(self, amount: float) -> None:
        self.cash_savings += amount
        self.emergency_fund += amount

    def invest(self, amount: float) -> None:
        self.investment_portfolio += amount

    def withdraw(self, amount: float) -> None:
        """Cover a shortfall from cash, then investments.

        Whatever investments cannot cover leaves cash negative.
        """
        self.cash_savings -= amount
        if self.cash_savings < 0 and self.investment_portfolio > 0:
            moved = min(-self.cash_savings, self.investment_portfolio)
            self.investment_portfolio -= moved
            self.cash_savings += moved
        self.emergency_fund = min(self.emergency_fund, max(self.cash_savings, 0.0))

    def absorb(self, amount: float) -> None:
        """Deposit a surplus into cash or withdraw a deficit."""
        if amount >= 0:
            self.deposit_cash(amount)
        else:
            self.withdraw(-amount)

    def pay_debt(self, amount: float) -> float:
        """Reduce debt by a payment; returns the amount actually paid.

        Negative payments pay nothing and payments never exceed the balance.
        """
        paid = min(max(amount, 0.0), self.debt_balance)
        self.debt_balance = max(0.0, self.debt_balance - paid)
        return paid

    def accrue_debt_interest(self, monthly_rate: float) -> None:
        if self.debt_balance > 0:
            self.debt_balance *= 1 + monthly_rate

    def grow_cash(self, monthly_rate: float) -> None:
        if self.cash_savings > 0:
            self.cash_savings *= 1 + monthly_rate

    def grow_investments(self, monthly_rate: float) -> None:
        if self.investment_portfolio > 0:
            self.investment_portfolio = max(
                0.0, self.investment_portfolio * (1 + monthly_rate)
            )

    def record_return(self, monthly_return: float, window: int) -> List[float]:
        """Append a market return, keeping only the last ``window`` values."""
        self.recent_returns.append(monthly_return)
        del self.recent_returns[:-window]
        return self.recent_returns

    def snapshot(self, month: int) -> TimelinePoint:
        """Timeline point for the end of the given month."""
        savings = self.cash_savings + self.investment_portfolio
        debt = self.debt_balance
        return TimelinePoint(
            month=month,
            net_worth=savings - debt,
            savings=savings,
            debt=debt,
            total_spent=self.total_spent,
            total_saved=self.total_saved,
        )
