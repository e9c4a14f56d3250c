"""
Economic assumptions for each projection model variant.

Every variant runs through the same monthly stepping loop; the parameters
below (inflation, allocation fractions, return rates, debt policy) are the
only thing that distinguishes one economic outlook from another. Rates are
annual and converted to monthly rates by dividing by 12.

Fractions and returns that change over long horizons are given per horizon
tier: (first 20 years, years 20-30, beyond 30 years).
"""

from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

TierValues = Tuple[float, float, float]


class VariantParameters(BaseModel):
    """Parameter set for one model variant."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    annual_inflation: float = Field(
        ..., ge=0, le=1, description="Annual expense inflation"
    )
    debt_paydown_fraction: float = Field(
        ..., ge=0, le=1, description="Share of monthly savings paid toward debt"
    )
    debt_annual_interest: float = Field(
        default=0.0, ge=0, le=1, description="Annual interest accrued on debt"
    )
    cash_annual_return: float = Field(
        default=0.0, ge=0, le=1, description="Annual return on cash savings"
    )
    investment_fractions: TierValues = Field(
        default=(0.0, 0.0, 0.0),
        description="Share of allocatable savings invested, by horizon tier",
    )
    investment_annual_returns: TierValues = Field(
        default=(0.0, 0.0, 0.0),
        description="Fixed annual investment return, by horizon tier",
    )
    market_return_scales: TierValues = Field(
        default=(1.0, 1.0, 1.0),
        description="Multiplier on market-sample returns, by horizon tier",
    )
    emergency_fund_months: float = Field(
        default=0.0, ge=0, le=60, description="Emergency fund target in months of expenses"
    )
    emergency_fund_share: float = Field(
        default=1.0, ge=0, le=1, description="Max share of savings routed to the emergency fund"
    )

    @field_validator("investment_fractions")
    @classmethod
    def validate_fractions(cls, v: TierValues) -> TierValues:
        if not all(0 <= f <= 1 for f in v):
            raise ValueError("Investment fractions must be between 0 and 1")
        return v

    @property
    def monthly_debt_interest(self) -> float:
        return self.debt_annual_interest / 12

    @property
    def monthly_cash_return(self) -> float:
        return self.cash_annual_return / 12

    def investment_fraction(self, tier: int) -> float:
        return self.investment_fractions[tier]

    def monthly_investment_return(self, tier: int) -> float:
        return self.investment_annual_returns[tier] / 12


VARIANT_PARAMETERS: Dict[str, VariantParameters] = {
    "linear": VariantParameters(
        annual_inflation=0.0,
        debt_paydown_fraction=0.30,
    ),
    "exponential": VariantParameters(
        annual_inflation=0.025,
        debt_paydown_fraction=0.50,
        investment_fractions=(0.80, 0.70, 0.60),
        investment_annual_returns=(0.12, 0.10, 0.08),
    ),
    "seasonal": VariantParameters(
        annual_inflation=0.025,
        debt_paydown_fraction=0.25,
        cash_annual_return=0.03,
    ),
    "realistic": VariantParameters(
        annual_inflation=0.03,
        debt_paydown_fraction=0.30,
        debt_annual_interest=0.05,
        cash_annual_return=0.02,
        investment_fractions=(0.50, 0.50, 0.50),
        market_return_scales=(1.0, 0.8, 0.6),
        emergency_fund_months=6,
    ),
    "conservative": VariantParameters(
        annual_inflation=0.025,
        debt_paydown_fraction=0.40,
        investment_fractions=(1.0, 1.0, 1.0),
        investment_annual_returns=(0.025, 0.025, 0.025),
        emergency_fund_months=6,
        emergency_fund_share=0.80,
    ),
    "savings": VariantParameters(
        annual_inflation=0.025,
        debt_paydown_fraction=0.30,
        debt_annual_interest=0.05,
        cash_annual_return=0.02,
    ),
    "optimistic": VariantParameters(
        annual_inflation=0.02,
        debt_paydown_fraction=0.60,
        investment_fractions=(0.80, 0.80, 0.80),
        investment_annual_returns=(0.15, 0.15, 0.15),
    ),
}
