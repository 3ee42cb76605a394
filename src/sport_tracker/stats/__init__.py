"""Weekly aggregation, ranking and week-over-week comparison.

Every caller (personal stats, leaderboard, admin report, weekly digest) goes
through these functions, so week boundaries and ranking rules live in one place.
"""

from .aggregation import AggregateResult, UserAggregate, aggregate, aggregate_users, most_frequent
from .comparison import ComparisonResult, EngagementRates, Trend, compare, engagement_rates
from .leaderboard import LeaderboardResult, RankedEntry, rank
from .week import WeekWindow, current_week, previous_week

__all__ = [
    "AggregateResult",
    "ComparisonResult",
    "EngagementRates",
    "LeaderboardResult",
    "RankedEntry",
    "Trend",
    "UserAggregate",
    "WeekWindow",
    "aggregate",
    "aggregate_users",
    "compare",
    "current_week",
    "engagement_rates",
    "most_frequent",
    "previous_week",
    "rank",
]
