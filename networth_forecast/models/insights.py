"""
Derived views over projection timelines.

Avatar classification of a single timeline point, comparison insights
between a status-quo and a what-if timeline, and milestones for long
projections. Every ratio is guarded so no NaN or infinity is ever reported:
the growth insight drops its ratio and the milestone ratios are omitted when
their denominator is not positive.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .profile import TimelinePoint
from .time_grid import TWENTY_YEAR_MARK

AvatarState = Literal["wealthy", "thriving", "stable", "struggling"]

InsightKind = Literal[
    "net_worth_increase",
    "net_worth_decrease",
    "extra_savings",
    "debt_free",
    "faster_growth",
    "total_growth_percent",
    "ten_x",
    "millionaire",
    "multi_millionaire",
    "debt_free_milestone",
    "savings_heavy",
]

WEALTHY_NET_WORTH = 50_000
THRIVING_NET_WORTH = 10_000
THRIVING_DEBT_RATIO = 0.2

EXTRA_SAVINGS_THRESHOLD = 5_000
FASTER_GROWTH_RATIO = 1.5

MILLIONAIRE_NET_WORTH = 1_000_000
MULTI_MILLIONAIRE_NET_WORTH = 10_000_000
TEN_X_MULTIPLIER = 10
SAVINGS_HEAVY_RATIO = 0.8


class Insight(BaseModel):
    """A single derived observation about one or two timelines."""

    model_config = ConfigDict(frozen=True)

    kind: InsightKind
    value: Optional[float] = Field(
        default=None, description="Supporting figure, if the insight has one"
    )


def classify(net_worth: float, debt: float) -> AvatarState:
    """Classify financial health from net worth and outstanding debt."""
    if net_worth > WEALTHY_NET_WORTH and debt == 0:
        return "wealthy"
    if net_worth > THRIVING_NET_WORTH and debt < net_worth * THRIVING_DEBT_RATIO:
        return "thriving"
    if net_worth > 0 and debt < net_worth:
        return "stable"
    return "struggling"


def classify_point(point: TimelinePoint) -> AvatarState:
    return classify(point.net_worth, point.debt)


def _monthly_growth(timeline: List[TimelinePoint]) -> float:
    return (timeline[-1].net_worth - timeline[0].net_worth) / len(timeline)


def compare(
    status_quo: List[TimelinePoint], what_if: List[TimelinePoint]
) -> List[Insight]:
    """
    Compare the final points of a status-quo and a what-if timeline.

    Args:
        status_quo: Timeline of the unchanged profile
        what_if: Timeline of the adjusted profile

    Returns:
        Insights in a fixed order; empty if either timeline is empty
    """
    if not status_quo or not what_if:
        return []

    sq_final = status_quo[-1]
    wi_final = what_if[-1]
    insights: List[Insight] = []

    net_worth_diff = wi_final.net_worth - sq_final.net_worth
    if net_worth_diff > 0:
        insights.append(Insight(kind="net_worth_increase", value=net_worth_diff))
    elif net_worth_diff < 0:
        insights.append(Insight(kind="net_worth_decrease", value=-net_worth_diff))

    savings_diff = wi_final.savings - sq_final.savings
    if savings_diff > EXTRA_SAVINGS_THRESHOLD:
        insights.append(Insight(kind="extra_savings", value=savings_diff))

    if wi_final.debt == 0 and sq_final.debt > 0:
        insights.append(Insight(kind="debt_free"))

    sq_growth = _monthly_growth(status_quo)
    wi_growth = _monthly_growth(what_if)
    if wi_growth > sq_growth * FASTER_GROWTH_RATIO:
        # The ratio is only reported against positive status-quo growth
        ratio = wi_growth / sq_growth if sq_growth > 0 else None
        insights.append(Insight(kind="faster_growth", value=ratio))

    return insights


def long_term_milestones(timeline: List[TimelinePoint]) -> List[Insight]:
    """
    Milestones reached by the end of a projection.

    Growth percentage is only reported for projections of 20 years or more.
    Growth percentage and the 10x multiplier are omitted when the first
    month's net worth is not positive.
    """
    if not timeline:
        return []

    initial = timeline[0].net_worth
    final = timeline[-1]
    insights: List[Insight] = []

    if len(timeline) >= TWENTY_YEAR_MARK and initial > 0:
        insights.append(
            Insight(
                kind="total_growth_percent",
                value=(final.net_worth / initial - 1) * 100,
            )
        )

    if initial > 0 and final.net_worth > initial * TEN_X_MULTIPLIER:
        insights.append(Insight(kind="ten_x", value=final.net_worth / initial))

    if final.net_worth > MILLIONAIRE_NET_WORTH:
        insights.append(Insight(kind="millionaire", value=final.net_worth))

    if final.net_worth > MULTI_MILLIONAIRE_NET_WORTH:
        insights.append(Insight(kind="multi_millionaire", value=final.net_worth))

    if final.debt == 0 and any(point.debt > 0 for point in timeline):
        insights.append(Insight(kind="debt_free_milestone"))

    if final.savings > final.net_worth * SAVINGS_HEAVY_RATIO:
        insights.append(Insight(kind="savings_heavy", value=final.savings))

    return insights

