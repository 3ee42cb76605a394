"""Week-over-week deltas, trend classification and engagement ratios."""

import enum
from dataclasses import dataclass

from .aggregation import AggregateResult


class Trend(str, enum.Enum):
    IMPROVED = "improved"
    DECLINED = "declined"
    UNCHANGED_ACTIVE = "unchanged_active"
    FIRST_TIME = "first_time"
    RESUMED = "resumed"
    LAPSED = "lapsed"


@dataclass(frozen=True)
class ComparisonResult:
    count_delta: int
    duration_delta: int
    trend: Trend


@dataclass(frozen=True)
class EngagementRates:
    """Ratios in [0, inf), not percentages. Always finite."""

    weekly_active_rate: float
    growth_rate: float


def compare(current: AggregateResult, previous: AggregateResult) -> ComparisonResult:
    """Compare this week's aggregate against last week's.

    Trend rules, first match wins:
    1. Nothing either week -> FIRST_TIME
    2. Nothing this week -> LAPSED
    3. Nothing last week -> RESUMED
    4. Either delta positive -> IMPROVED (mixed signals count as improvement)
    5. Either delta negative -> DECLINED
    6. Otherwise -> UNCHANGED_ACTIVE
    """
    count_delta = current.count - previous.count
    duration_delta = current.total_duration - previous.total_duration

    if current.count == 0 and previous.count == 0:
        trend = Trend.FIRST_TIME
    elif current.count == 0:
        trend = Trend.LAPSED
    elif previous.count == 0:
        trend = Trend.RESUMED
    elif count_delta > 0 or duration_delta > 0:
        trend = Trend.IMPROVED
    elif count_delta < 0 or duration_delta < 0:
        trend = Trend.DECLINED
    else:
        trend = Trend.UNCHANGED_ACTIVE

    return ComparisonResult(
        count_delta=count_delta, duration_delta=duration_delta, trend=trend
    )


def engagement_rates(
    total_users: int, active_this_week: int, active_last_week: int
) -> EngagementRates:
    """Weekly active share and week-over-week growth of active users.

    Both come back as 0 when their denominator is 0.
    """
    active_rate = active_this_week / total_users if total_users > 0 else 0.0
    growth = (
        (active_this_week - active_last_week) / active_last_week
        if active_last_week > 0
        else 0.0
    )
    return EngagementRates(weekly_active_rate=active_rate, growth_rate=growth)
