"""
Income growth events for household projections.

This module schedules the promotions, bonuses and job changes that raise a
household's income over a projection. A schedule is generated once per run,
before stepping begins, from an injected random generator: events start near a
base interval and repeat with bounded jitter until the horizon is exhausted.
"""

from typing import Dict, List, Literal

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .profile import ModelVariant

EventKind = Literal["promotion", "bonus", "job_change"]

BASE_INTERVAL_MONTHS = 24
INTERVAL_JITTER_MONTHS = 6


class PromotionEvent(BaseModel):
    """A scheduled change to household income."""

    model_config = ConfigDict(frozen=True)

    month: int = Field(..., ge=1, description="Month the event takes effect")
    salary_increase_fraction: float = Field(
        ..., ge=0, description="Permanent income raise (0.05 = 5%)"
    )
    bonus_fraction: float = Field(
        ..., ge=0, description="One-time bonus as a fraction of annual income"
    )
    kind: EventKind = Field(..., description="Type of income event")


class PromotionPolicy(BaseModel):
    """Raise, bonus and event-kind probabilities for one model variant."""

    model_config = ConfigDict(frozen=True)

    raise_fraction: float = Field(..., ge=0, le=1, description="Raise on promotion")
    bonus_fraction: float = Field(..., ge=0, le=1, description="Bonus on bonus events")
    job_change_raise_fraction: float = Field(
        default=0.0, ge=0, le=1, description="Raise on a job change"
    )
    kind_probabilities: Dict[EventKind, float] = Field(
        ..., description="Probability of each event kind"
    )

    @model_validator(mode="after")
    def validate_probabilities(self):
        total = sum(self.kind_probabilities.values())
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Event kind probabilities must sum to 1.0, got {total}")
        if any(p < 0 for p in self.kind_probabilities.values()):
            raise ValueError("Event kind probabilities must be non-negative")
        return self

    def build_event(self, month: int, kind: EventKind) -> PromotionEvent:
        if kind == "promotion":
            return PromotionEvent(
                month=month,
                salary_increase_fraction=self.raise_fraction,
                bonus_fraction=0.0,
                kind=kind,
            )
        if kind == "bonus":
            return PromotionEvent(
                month=month,
                salary_increase_fraction=0.0,
                bonus_fraction=self.bonus_fraction,
                kind=kind,
            )
        return PromotionEvent(
            month=month,
            salary_increase_fraction=self.job_change_raise_fraction,
            bonus_fraction=0.0,
            kind=kind,
        )


PROMOTION_POLICIES: Dict[str, PromotionPolicy] = {
    "linear": PromotionPolicy(
        raise_fraction=0.03,
        bonus_fraction=0.05,
        kind_probabilities={"promotion": 0.7, "bonus": 0.3},
    ),
    "exponential": PromotionPolicy(
        raise_fraction=0.05,
        bonus_fraction=0.10,
        kind_probabilities={"promotion": 0.6, "bonus": 0.4},
    ),
    "seasonal": PromotionPolicy(
        raise_fraction=0.02,
        bonus_fraction=0.03,
        kind_probabilities={"promotion": 0.5, "bonus": 0.5},
    ),
    "realistic": PromotionPolicy(
        raise_fraction=0.04,
        bonus_fraction=0.08,
        job_change_raise_fraction=0.10,
        kind_probabilities={"promotion": 0.6, "bonus": 0.3, "job_change": 0.1},
    ),
    "conservative": PromotionPolicy(
        raise_fraction=0.02,
        bonus_fraction=0.02,
        kind_probabilities={"promotion": 0.8, "bonus": 0.2},
    ),
    # Minimal raises and never a bonus
    "savings": PromotionPolicy(
        raise_fraction=0.01,
        bonus_fraction=0.0,
        kind_probabilities={"promotion": 1.0},
    ),
    "optimistic": PromotionPolicy(
        raise_fraction=0.08,
        bonus_fraction=0.15,
        job_change_raise_fraction=0.20,
        kind_probabilities={"promotion": 0.5, "bonus": 0.3, "job_change": 0.2},
    ),
}


class PromotionScheduler:
    """Generates the income event schedule for one projection run."""

    def __init__(
        self,
        base_interval: int = BASE_INTERVAL_MONTHS,
        jitter: int = INTERVAL_JITTER_MONTHS,
    ):
        if base_interval <= jitter:
            raise ValueError("base_interval must exceed jitter")
        self.base_interval = base_interval
        self.jitter = jitter

    def schedule(
        self, months: int, variant: ModelVariant, rng: np.random.Generator
    ) -> List[PromotionEvent]:
        """
        Generate income events for the full horizon.

        Each gap is ``base_interval`` plus an integer jitter drawn uniformly
        from ``[-jitter, +jitter]``; each event's kind is drawn from the
        variant's policy. Two draws are made per event, so equal seeds give
        equal schedules regardless of the profile being projected.

        Args:
            months: Projection horizon
            variant: Model variant selecting the policy
            rng: Random generator owned by the calling run

        Returns:
            Events in month order, all within ``1..months``
        """
        policy = PROMOTION_POLICIES[variant]
        kinds = list(policy.kind_probabilities.keys())
        probabilities = list(policy.kind_probabilities.values())

        events: List[PromotionEvent] = []
        month = 0
        while True:
            month += self.base_interval + int(
                rng.integers(-self.jitter, self.jitter, endpoint=True)
            )
            if month > months:
                break
            kind = kinds[int(rng.choice(len(kinds), p=probabilities))]
            events.append(policy.build_event(month, kind))

        return events


def events_by_month(events: List[PromotionEvent]) -> Dict[int, List[PromotionEvent]]:
    """Index a schedule by month for lookup while stepping."""
    indexed: Dict[int, List[PromotionEvent]] = {}
    for event in events:
        indexed.setdefault(event.month, []).append(event)
    return indexed
