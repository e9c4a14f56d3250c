"""Monthly projection engine and its per-variant economics."""

from .engine import (
    DEFAULT_VARIANT,
    ProjectionEngine,
    get_default_engine,
    project,
    project_status_quo,
)
from .parameters import VARIANT_PARAMETERS, VariantParameters
from .policies import POLICIES
from .protocols import AllocationPolicy, StepContext
from .state import SimulationState

__all__ = [
    "DEFAULT_VARIANT",
    "ProjectionEngine",
    "get_default_engine",
    "project",
    "project_status_quo",
    "VARIANT_PARAMETERS",
    "VariantParameters",
    "POLICIES",
    "AllocationPolicy",
    "StepContext",
    "SimulationState",
]
