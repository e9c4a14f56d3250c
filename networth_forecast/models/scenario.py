"""
What-if scenario construction.

Applies a list of category deltas to a baseline profile, producing an
independent profile for the what-if projection.
"""

from typing import Sequence

from .profile import EXPENSE_CATEGORIES, FinancialProfile, ScenarioDelta


def _apply_change(value: float, delta: ScenarioDelta) -> float:
    if delta.change_percent is not None:
        return value * (1 + delta.change_percent / 100)
    return value + delta.change_amount


def apply_scenario(
    base: FinancialProfile, deltas: Sequence[ScenarioDelta]
) -> FinancialProfile:
    """
    Apply scenario deltas to a profile in list order.

    Deltas to the same category compound: two -10% food deltas leave food at
    81% of its starting value. The ``income`` category targets monthly income
    and ``savings`` targets current savings.

    The result is not re-validated, so a delta that drives a value negative
    surfaces in the returned profile and is rejected when it is projected.

    Args:
        base: Baseline profile (left untouched)
        deltas: Changes to apply, in order

    Returns:
        A new profile with all deltas applied
    """
    income = base.monthly_income
    savings = base.current_savings
    expenses = base.monthly_expenses.model_dump()

    for delta in deltas:
        if delta.category == "income":
            income = _apply_change(income, delta)
        elif delta.category == "savings":
            savings = _apply_change(savings, delta)
        elif delta.category in EXPENSE_CATEGORIES:
            expenses[delta.category] = _apply_change(expenses[delta.category], delta)

    return base.model_copy(
        update={
            "monthly_income": income,
            "current_savings": savings,
            "monthly_expenses": base.monthly_expenses.model_copy(update=expenses),
        }
    )
