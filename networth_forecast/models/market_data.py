"""
Market data provider for market-correlated projections.

This module supplies one (return, volatility, recession) sample per projection
month for a blended equity index. Months covered by the bundled historical
closes replay the real monthly returns; later months are extrapolated from a
repeating 7-year market cycle (recovery, boom, bust, plateau) with bounded
uniform jitter drawn from a caller-supplied random generator.

Months are 1-based. Passing a month < 1 is a caller error and is rejected at
the request boundary, not here.
"""

from typing import List, Literal, Optional, Sequence, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .historical_data import IndexDataSet, load_bundled_dataset

CYCLE_LENGTH_MONTHS = 84
TREND_WINDOW_MONTHS = 6


class MarketSample(BaseModel):
    """One month of index behaviour."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    month: int = Field(..., description="Projection month (1-based)")
    monthly_return: float = Field(
        ..., alias="return", description="Monthly fractional return"
    )
    volatility: float = Field(..., ge=0, description="Volatility band")
    recession: bool = Field(default=False, description="Recession flag")


class CyclePhase(BaseModel):
    """A sub-period of the extrapolated market cycle."""

    model_config = ConfigDict(frozen=True)

    name: Literal["recovery", "boom", "bust", "plateau"]
    start: int = Field(..., ge=0, description="First cycle month (inclusive)")
    end: int = Field(..., gt=0, description="Last cycle month (exclusive)")
    annual_return: float = Field(..., ge=-1, le=2, description="Annual base return")
    annual_volatility: float = Field(..., ge=0, le=2, description="Annual volatility")
    recession: bool = Field(default=False)

    @property
    def monthly_return(self) -> float:
        return self.annual_return / 12

    @property
    def volatility_band(self) -> float:
        """Half-width of the uniform jitter band applied to each month."""
        return self.annual_volatility


class IndexCycleModel(BaseModel):
    """Repeating market cycle used beyond the historical window."""

    model_config = ConfigDict(frozen=True)

    phases: List[CyclePhase] = Field(..., min_length=1)
    cycle_length: int = Field(default=CYCLE_LENGTH_MONTHS, gt=0)

    @field_validator("phases")
    @classmethod
    def validate_phases(cls, v: List[CyclePhase]) -> List[CyclePhase]:
        """Phases must tile the cycle without gaps or overlaps."""
        v = sorted(v, key=lambda p: p.start)
        if v[0].start != 0:
            raise ValueError("First cycle phase must start at month 0")
        for prev, curr in zip(v, v[1:]):
            if curr.start != prev.end:
                raise ValueError(
                    f"Cycle phase {curr.name} must start where {prev.name} ends"
                )
        return v

    def phase_for(self, month: int) -> CyclePhase:
        """Cycle phase covering the given 1-based projection month."""
        position = (month - 1) % self.cycle_length
        for phase in self.phases:
            if phase.start <= position < phase.end:
                return phase
        # Positions past the last phase belong to it
        return self.phases[-1]


SP500_CYCLE = IndexCycleModel(
    phases=[
        CyclePhase(name="recovery", start=0, end=12, annual_return=0.12, annual_volatility=0.20),
        CyclePhase(name="boom", start=12, end=36, annual_return=0.15, annual_volatility=0.12),
        CyclePhase(name="bust", start=36, end=48, annual_return=-0.05, annual_volatility=0.25, recession=True),
        CyclePhase(name="plateau", start=48, end=84, annual_return=0.08, annual_volatility=0.15),
    ]
)

NASDAQ_CYCLE = IndexCycleModel(
    phases=[
        CyclePhase(name="recovery", start=0, end=12, annual_return=0.15, annual_volatility=0.25),
        CyclePhase(name="boom", start=12, end=36, annual_return=0.18, annual_volatility=0.15),
        CyclePhase(name="bust", start=36, end=48, annual_return=-0.08, annual_volatility=0.30, recession=True),
        CyclePhase(name="plateau", start=48, end=84, annual_return=0.10, annual_volatility=0.20),
    ]
)


class IndexMarketData:
    """Monthly samples for a single index."""

    def __init__(self, dataset: IndexDataSet, cycle_model: IndexCycleModel):
        """Initialize from a historical dataset and its extrapolation cycle.

        Args:
            dataset: Chronological monthly closes
            cycle_model: Cycle used for months past the dataset
        """
        self.dataset = dataset
        self.cycle_model = cycle_model
        self.historical_samples = self._calculate_historical_samples()

    @property
    def name(self) -> str:
        return self.dataset.index.name

    @property
    def historical_months(self) -> int:
        """Number of leading projection months served from real data."""
        return len(self.historical_samples)

    def _calculate_historical_samples(self) -> List[MarketSample]:
        # Volatility falls back to the plateau band until enough history exists
        fallback_volatility = self.cycle_model.phases[-1].volatility_band
        returns = self.dataset.get_returns()
        samples = []

        for i, monthly_return in enumerate(returns):
            recent = returns[max(0, i - 3) : i]
            volatility = float(np.std(recent)) if len(recent) >= 2 else 0.0
            if volatility == 0.0:
                volatility = fallback_volatility

            previous = returns[max(0, i - 2) : i]
            recession = monthly_return < -0.05 and all(r < 0 for r in previous)

            samples.append(
                MarketSample(
                    month=i + 1,
                    monthly_return=monthly_return,
                    volatility=volatility,
                    recession=recession,
                )
            )

        return samples

    def sample_for(self, month: int, rng: np.random.Generator) -> MarketSample:
        """
        Get the sample for a projection month.

        Historical months are deterministic lookups and consume no randomness;
        extrapolated months draw exactly one uniform value from ``rng``.

        Args:
            month: 1-based projection month
            rng: Random generator for extrapolation jitter

        Returns:
            MarketSample for the month
        """
        if month <= self.historical_months:
            return self.historical_samples[month - 1]

        phase = self.cycle_model.phase_for(month)
        band = phase.volatility_band
        jitter = float(rng.uniform(-band, band))

        return MarketSample(
            month=month,
            monthly_return=phase.monthly_return + jitter,
            volatility=band,
            recession=phase.recession,
        )


class MarketTrend(BaseModel):
    """Direction of the market over a window of monthly returns."""

    model_config = ConfigDict(frozen=True)

    trend: Literal["bull", "bear", "sideways"]
    strength: float = Field(..., ge=0, description="Absolute average return")
    confidence: float = Field(..., ge=0, le=1)


def classify_trend(returns: Sequence[float]) -> MarketTrend:
    """
    Classify a window of monthly returns as a bull, bear or sideways market.

    Args:
        returns: Monthly fractional returns, most recent last

    Returns:
        MarketTrend for the window (sideways when the window is empty)
    """
    if len(returns) == 0:
        return MarketTrend(trend="sideways", strength=0.0, confidence=0.5)

    avg_return = float(np.mean(returns))
    positive_months = sum(1 for r in returns if r > 0)
    strength = abs(avg_return)

    if avg_return > 0.02 and positive_months >= 4:
        return MarketTrend(trend="bull", strength=strength, confidence=0.8)
    if avg_return < -0.02 and positive_months <= 2:
        return MarketTrend(trend="bear", strength=strength, confidence=0.8)
    return MarketTrend(trend="sideways", strength=strength, confidence=0.6)


class MarketDataProvider:
    """
    Blended index samples for the realistic projection model.

    The combined sample weights the primary index (S&P 500 by default) and the
    secondary index (NASDAQ) 60/40 for return and volatility, and flags a
    recession when either index is in one.
    """

    def __init__(
        self,
        primary: IndexMarketData,
        secondary: IndexMarketData,
        primary_weight: float = 0.6,
    ):
        if not 0 <= primary_weight <= 1:
            raise ValueError("primary_weight must be between 0 and 1")
        self.primary = primary
        self.secondary = secondary
        self.primary_weight = primary_weight

    @property
    def historical_months(self) -> int:
        """Months for which both indexes have real data."""
        return min(self.primary.historical_months, self.secondary.historical_months)

    def sample_components(
        self, month: int, rng: np.random.Generator
    ) -> Tuple[MarketSample, MarketSample, MarketSample]:
        """Get (primary, secondary, combined) samples for a month."""
        primary = self.primary.sample_for(month, rng)
        secondary = self.secondary.sample_for(month, rng)

        w = self.primary_weight
        combined = MarketSample(
            month=month,
            monthly_return=primary.monthly_return * w
            + secondary.monthly_return * (1 - w),
            volatility=primary.volatility * w + secondary.volatility * (1 - w),
            recession=primary.recession or secondary.recession,
        )
        return primary, secondary, combined

    def sample_for(self, month: int, rng: np.random.Generator) -> MarketSample:
        """Get the combined index sample for a month."""
        return self.sample_components(month, rng)[2]

    def historical_trend(self, window: int = TREND_WINDOW_MONTHS) -> MarketTrend:
        """Trend of the last ``window`` months of real primary-index data."""
        returns = [s.monthly_return for s in self.primary.historical_samples]
        return classify_trend(returns[-window:])


_default_provider: Optional[MarketDataProvider] = None


def create_default_market_data_provider() -> MarketDataProvider:
    """Create a provider over the bundled S&P 500 and NASDAQ datasets."""
    return MarketDataProvider(
        primary=IndexMarketData(load_bundled_dataset("sp500"), SP500_CYCLE),
        secondary=IndexMarketData(load_bundled_dataset("nasdaq"), NASDAQ_CYCLE),
    )


def get_default_market_data_provider() -> MarketDataProvider:
    """Get or create the shared provider; it holds only read-only data."""
    global _default_provider
    if _default_provider is None:
        _default_provider = create_default_market_data_provider()
    return _default_provider
