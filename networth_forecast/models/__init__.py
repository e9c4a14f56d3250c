"""Data models and projection engine for household net-worth forecasts."""

from .profile import (
    EXPENSE_CATEGORIES,
    MODEL_VARIANTS,
    FinancialProfile,
    InvalidInputError,
    ModelVariant,
    MonthlyExpenses,
    ScenarioDelta,
    TimelinePoint,
    timeline_to_dicts,
    validate_months,
    validate_profile,
    validate_variant,
)
from .scenario import apply_scenario
from .insights import (
    AvatarState,
    Insight,
    classify,
    classify_point,
    compare,
    long_term_milestones,
)
from .market_data import (
    MarketDataProvider,
    MarketSample,
    MarketTrend,
    classify_trend,
    create_default_market_data_provider,
    get_default_market_data_provider,
)
from .promotion_events import PromotionEvent, PromotionScheduler
from .projection import (
    DEFAULT_VARIANT,
    ProjectionEngine,
    project,
    project_status_quo,
)

__all__ = [
    "EXPENSE_CATEGORIES",
    "MODEL_VARIANTS",
    "FinancialProfile",
    "InvalidInputError",
    "ModelVariant",
    "MonthlyExpenses",
    "ScenarioDelta",
    "TimelinePoint",
    "timeline_to_dicts",
    "validate_months",
    "validate_profile",
    "validate_variant",
    "apply_scenario",
    "AvatarState",
    "Insight",
    "classify",
    "classify_point",
    "compare",
    "long_term_milestones",
    "MarketDataProvider",
    "MarketSample",
    "MarketTrend",
    "classify_trend",
    "create_default_market_data_provider",
    "get_default_market_data_provider",
    "PromotionEvent",
    "PromotionScheduler",
    "DEFAULT_VARIANT",
    "ProjectionEngine",
    "project",
    "project_status_quo",
]
