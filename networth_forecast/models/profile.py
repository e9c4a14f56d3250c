"""
Pydantic models for household financial profiles and projection output.

This module defines the immutable value objects that flow through the
projection engine: the profile a caller supplies, the scenario deltas used to
build a what-if profile, and the monthly timeline points the engine emits.
"""

import numbers
from typing import List, Literal, Optional, Tuple, get_args

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel

ModelVariant = Literal[
    "linear",
    "exponential",
    "seasonal",
    "realistic",
    "conservative",
    "savings",
    "optimistic",
]

MODEL_VARIANTS: Tuple[str, ...] = get_args(ModelVariant)

ExpenseCategory = Literal[
    "housing", "food", "transportation", "entertainment", "utilities", "other"
]

EXPENSE_CATEGORIES: Tuple[str, ...] = get_args(ExpenseCategory)


class InvalidInputError(ValueError):
    """Raised when a projection request is rejected before simulation."""


class _ValueModel(BaseModel):
    """Frozen base model accepting both snake_case and camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
        extra="forbid",
    )


class MonthlyExpenses(_ValueModel):
    """Monthly spending by category."""

    housing: float = Field(default=0, ge=0, description="Rent or mortgage")
    food: float = Field(default=0, ge=0, description="Groceries and dining")
    transportation: float = Field(default=0, ge=0, description="Car, fuel, transit")
    entertainment: float = Field(default=0, ge=0, description="Leisure spending")
    utilities: float = Field(default=0, ge=0, description="Power, water, internet")
    other: float = Field(default=0, ge=0, description="Everything else")

    @property
    def total(self) -> float:
        """Sum of all expense categories."""
        return sum(getattr(self, name) for name in EXPENSE_CATEGORIES)


class FinancialProfile(_ValueModel):
    """A household's monthly cash flow and balance sheet."""

    monthly_income: float = Field(..., gt=0, description="Net monthly income")
    monthly_expenses: MonthlyExpenses = Field(
        ..., description="Monthly spending by category"
    )
    current_savings: float = Field(..., ge=0, description="Cash on hand today")
    current_debt: float = Field(..., ge=0, description="Outstanding debt today")
    savings_goal: Optional[float] = Field(
        default=None, description="Optional savings target"
    )

    @property
    def total_expenses(self) -> float:
        return self.monthly_expenses.total

    @property
    def monthly_surplus(self) -> float:
        """Income left over after base expenses (may be negative)."""
        return self.monthly_income - self.total_expenses


class ScenarioDelta(_ValueModel):
    """A single what-if adjustment to one profile category."""

    # Clients send display metadata (id, description) alongside the change
    model_config = ConfigDict(extra="ignore")

    category: Literal[
        "housing",
        "food",
        "transportation",
        "entertainment",
        "utilities",
        "other",
        "income",
        "savings",
    ] = Field(..., description="Expense category, or income/savings")
    change_percent: Optional[float] = Field(
        default=None, description="Multiplicative change in percent"
    )
    change_amount: Optional[float] = Field(
        default=None, description="Additive change in dollars"
    )

    @model_validator(mode="after")
    def validate_single_change(self):
        if (self.change_percent is None) == (self.change_amount is None):
            raise ValueError(
                "Exactly one of change_percent or change_amount must be set"
            )
        return self


class TimelinePoint(_ValueModel):
    """Snapshot of a household's finances at the end of one month."""

    month: int = Field(..., ge=1, description="Month number (1-based)")
    net_worth: float = Field(..., description="Savings minus debt")
    savings: float = Field(..., description="Cash plus investments")
    debt: float = Field(..., ge=0, description="Outstanding debt")
    total_spent: float = Field(..., description="Cumulative expenses")
    total_saved: float = Field(..., description="Cumulative monthly savings")

    @model_validator(mode="after")
    def validate_net_worth(self):
        if self.net_worth != self.savings - self.debt:
            raise ValueError("net_worth must equal savings - debt")
        return self


def validate_profile(profile: FinancialProfile) -> FinancialProfile:
    """Re-validate a profile that may have been built without validation.

    Profiles produced by the scenario applier skip validation so that
    out-of-range values surface here rather than inside the applier.
    """
    try:
        return FinancialProfile.model_validate(profile.model_dump())
    except ValidationError as e:
        raise InvalidInputError(f"Invalid financial profile: {e}") from e


def validate_variant(variant: str) -> ModelVariant:
    """Return the variant unchanged if it names a known model."""
    if variant not in MODEL_VARIANTS:
        raise InvalidInputError(
            f"Unknown model variant {variant!r}; expected one of {list(MODEL_VARIANTS)}"
        )
    return variant  # type: ignore[return-value]


def validate_months(months: int) -> int:
    """Return months as a plain int if it is a positive integer of any integral type."""
    if isinstance(months, bool) or not isinstance(months, numbers.Integral):
        raise InvalidInputError(f"months must be an integer, got {months!r}")
    if months < 1:
        raise InvalidInputError(f"months must be >= 1, got {months}")
    return int(months)


def timeline_to_dicts(timeline: List[TimelinePoint]) -> List[dict]:
    """Serialize a timeline using the camelCase wire names."""
    return [point.model_dump(by_alias=True) for point in timeline]
