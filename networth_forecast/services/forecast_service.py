"""
Forecast service for coordinating status-quo and what-if projections.

The service turns a raw request payload into validated value objects, runs
the status-quo projection and (when scenario changes are given) the what-if
projection with the same seed, and derives avatar states and insights from
the two timelines.
"""

import logging
from typing import Any, Dict, List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from networth_forecast.models.insights import (
    AvatarState,
    Insight,
    classify_point,
    compare,
    long_term_milestones,
)
from networth_forecast.models.profile import (
    FinancialProfile,
    InvalidInputError,
    ScenarioDelta,
    TimelinePoint,
    validate_variant,
)
from networth_forecast.models.projection import DEFAULT_VARIANT, ProjectionEngine
from networth_forecast.models.projection.engine import get_default_engine
from networth_forecast.models.scenario import apply_scenario

logger = logging.getLogger(__name__)

SEED_BITS = 32


class ForecastResult(BaseModel):
    """Outcome of one forecast request."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    status_quo: List[TimelinePoint]
    what_if: Optional[List[TimelinePoint]] = None
    avatar_state: AvatarState
    what_if_avatar_state: Optional[AvatarState] = None
    insights: List[Insight] = Field(default_factory=list)
    model: str
    months: int
    seed: int


def new_seed() -> int:
    """Draw a fresh seed from OS entropy."""
    return int(np.random.SeedSequence().entropy % (2**SEED_BITS))


def parse_profile(financial_data: Dict[str, Any]) -> FinancialProfile:
    try:
        return FinancialProfile.model_validate(financial_data)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid financial data: {e}") from e


def parse_scenario_changes(changes: Optional[List[Dict[str, Any]]]) -> List[ScenarioDelta]:
    if not changes:
        return []
    if not isinstance(changes, list):
        raise InvalidInputError("scenarioChanges must be a list")
    try:
        return [ScenarioDelta.model_validate(change) for change in changes]
    except ValidationError as e:
        raise InvalidInputError(f"Invalid scenario change: {e}") from e


class ForecastService:
    """Service for running forecast requests."""

    def __init__(self, engine: Optional[ProjectionEngine] = None) -> None:
        self.engine = engine or get_default_engine()
        self.logger = logging.getLogger(__name__)

    def run_forecast(
        self,
        financial_data: Dict[str, Any],
        scenario_changes: Optional[List[Dict[str, Any]]] = None,
        months: int = 12,
        model: str = DEFAULT_VARIANT,
        seed: Optional[int] = None,
    ) -> ForecastResult:
        """Run status-quo and what-if projections for one request.

        Args:
            financial_data: Profile payload (camelCase or snake_case keys)
            scenario_changes: Optional list of scenario delta payloads
            months: Projection horizon
            model: Model variant name
            seed: Seed shared by both runs; a fresh one is drawn if None

        Returns:
            ForecastResult with both timelines and derived views

        Raises:
            InvalidInputError: If any input is rejected
        """
        model = validate_variant(model)
        profile = parse_profile(financial_data)
        deltas = parse_scenario_changes(scenario_changes)
        if seed is None:
            seed = new_seed()

        self.logger.info(
            f"Running forecast: model={model} months={months} "
            f"changes={len(deltas)} seed={seed}"
        )

        status_quo = self.engine.project(profile, months, model, seed)

        what_if = None
        what_if_avatar = None
        insights: List[Insight] = []
        if deltas:
            what_if = self.engine.project(
                apply_scenario(profile, deltas), months, model, seed
            )
            what_if_avatar = classify_point(what_if[-1])
            insights.extend(compare(status_quo, what_if))

        insights.extend(long_term_milestones(status_quo))

        return ForecastResult(
            status_quo=status_quo,
            what_if=what_if,
            avatar_state=classify_point(status_quo[-1]),
            what_if_avatar_state=what_if_avatar,
            insights=insights,
            model=model,
            months=months,
            seed=seed,
        )
