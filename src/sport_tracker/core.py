"""Application service shared by the Telegram bot, the weekly digest and the CLI."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional

from .database.connection import DatabaseManager
from .database.models import Language, User, Workout, WorkoutType, _now_local
from .database.repository import user_repo, workout_repo
from .schemas import WorkoutInput
from .stats import (
    AggregateResult,
    ComparisonResult,
    EngagementRates,
    LeaderboardResult,
    UserAggregate,
    WeekWindow,
    aggregate,
    aggregate_users,
    compare,
    current_week,
    engagement_rates,
    most_frequent,
    previous_week,
    rank,
)

logger = logging.getLogger(__name__)

DEFAULT_LEADERBOARD_SIZE = 5
NEW_USER_LOOKBACK = timedelta(days=7)


@dataclass(frozen=True)
class PersonalWeekReport:
    window: WeekWindow
    current: AggregateResult
    previous: AggregateResult
    comparison: ComparisonResult


@dataclass(frozen=True)
class LeaderboardReport:
    window: WeekWindow
    result: LeaderboardResult
    focus_user_id: Optional[int] = None


@dataclass(frozen=True)
class WeeklyDigest:
    window: WeekWindow
    current: AggregateResult
    previous: AggregateResult
    comparison: ComparisonResult
    rank: Optional[int]
    total_ranked: int


@dataclass(frozen=True)
class AdminReport:
    total_users: int
    total_workouts: int
    active_this_week: int
    active_last_week: int
    new_users_7d: int
    avg_workouts_per_user: float
    avg_duration: float
    most_popular_type: Optional[WorkoutType]
    rates: EngagementRates

    def as_dict(self) -> dict:
        return {
            "totalUsers": self.total_users,
            "totalWorkouts": self.total_workouts,
            "activeUsersThisWeek": self.active_this_week,
            "activeUsersLastWeek": self.active_last_week,
            "recentRegistrations": self.new_users_7d,
            "averageWorkoutsPerUser": round(self.avg_workouts_per_user, 1),
            "averageDurationPerWorkout": round(self.avg_duration, 1),
            "mostPopularWorkoutType": (
                self.most_popular_type.value if self.most_popular_type else None
            ),
            "weeklyActiveRate": self.rates.weekly_active_rate,
            "growthRate": self.rates.growth_rate,
        }


class TrackerService:
    """Reads and writes through the repositories and runs the weekly stats.

    Every statistic is derived from the same week windows and the same
    aggregation/ranking functions, whichever surface asks for it.
    """

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def initialize(self) -> None:
        await self._db.initialize()

    async def close(self) -> None:
        await self._db.close()

    # ------------------------------------------------------------------
    # Users & workouts
    # ------------------------------------------------------------------

    async def register_user(self, telegram_id: int, name: str | None) -> User:
        async with self._db.get_session() as session:
            return await user_repo.get_or_create(session, telegram_id, name)

    async def set_language(self, user_id: int, language: Language) -> Optional[User]:
        async with self._db.get_session() as session:
            return await user_repo.set_language(session, user_id, language)

    async def find_user(self, telegram_id: int) -> Optional[User]:
        async with self._db.get_session() as session:
            return await user_repo.get_by_telegram_id(session, telegram_id)

    async def list_users(self) -> List[User]:
        async with self._db.get_session() as session:
            return await user_repo.get_all(session)

    async def log_workout(
        self, user_id: int, data: WorkoutInput, *, now: datetime | None = None
    ) -> Workout:
        async with self._db.get_session() as session:
            workout = await workout_repo.create(
                session,
                obj_in={
                    "user_id": user_id,
                    "type": data.type,
                    "duration": data.duration_minutes,
                    "created_at": now or _now_local(),
                },
            )
        logger.info(
            "User %s logged %s for %d min", user_id, data.type.value, data.duration_minutes
        )
        return workout

    async def history(self, user_id: int, *, limit: int = 5) -> List[Workout]:
        async with self._db.get_session() as session:
            return await workout_repo.get_recent_for_user(session, user_id, limit=limit)

    # ------------------------------------------------------------------
    # Weekly stats
    # ------------------------------------------------------------------

    async def _user_weeks(
        self, user_id: int, now: datetime
    ) -> tuple[WeekWindow, AggregateResult, AggregateResult]:
        this_week = current_week(now)
        last_week = previous_week(now)
        async with self._db.get_session() as session:
            current_records = await workout_repo.find_for_user(
                session, user_id, this_week.start, this_week.end
            )
            previous_records = await workout_repo.find_for_user(
                session, user_id, last_week.start, last_week.end
            )
        return (
            this_week,
            aggregate(current_records, this_week),
            aggregate(previous_records, last_week),
        )

    async def personal_stats(
        self, user_id: int, *, now: datetime | None = None
    ) -> PersonalWeekReport:
        window, current, previous = await self._user_weeks(user_id, now or _now_local())
        return PersonalWeekReport(
            window=window,
            current=current,
            previous=previous,
            comparison=compare(current, previous),
        )

    async def weekly_population(
        self, *, now: datetime | None = None
    ) -> List[UserAggregate]:
        """Current-week aggregates for every registered user."""
        window = current_week(now or _now_local())
        async with self._db.get_session() as session:
            population = await workout_repo.find_users_with_workouts(
                session, window.start, window.end
            )
        return aggregate_users(population, window)

    async def leaderboard(
        self,
        user_id: int | None,
        *,
        now: datetime | None = None,
        top_n: int = DEFAULT_LEADERBOARD_SIZE,
    ) -> LeaderboardReport:
        now = now or _now_local()
        population = await self.weekly_population(now=now)
        return LeaderboardReport(
            window=current_week(now),
            result=rank(population, top_n, focus_user_id=user_id),
            focus_user_id=user_id,
        )

    async def weekly_digest(
        self,
        user_id: int,
        *,
        now: datetime | None = None,
        population: List[UserAggregate] | None = None,
        top_n: int = DEFAULT_LEADERBOARD_SIZE,
    ) -> WeeklyDigest:
        """Summary for one user. Pass `population` to reuse one ranking across users."""
        now = now or _now_local()
        if population is None:
            population = await self.weekly_population(now=now)
        window, current, previous = await self._user_weeks(user_id, now)
        standing = rank(population, top_n, focus_user_id=user_id)
        entry = standing.entry_for(user_id)
        return WeeklyDigest(
            window=window,
            current=current,
            previous=previous,
            comparison=compare(current, previous),
            rank=entry.rank if entry else None,
            total_ranked=standing.total_ranked,
        )

    async def admin_report(self, *, now: datetime | None = None) -> AdminReport:
        now = now or _now_local()
        this_week = current_week(now)
        last_week = previous_week(now)
        async with self._db.get_session() as session:
            total_users = await user_repo.count(session)
            total_workouts = await workout_repo.count(session)
            active_this_week = await workout_repo.count_users_with_workouts_in_range(
                session, this_week.start, this_week.end
            )
            active_last_week = await workout_repo.count_users_with_workouts_in_range(
                session, last_week.start, last_week.end
            )
            new_users = await user_repo.count_created_since(session, now - NEW_USER_LOOKBACK)
            avg_duration = await workout_repo.average_duration(session)
            type_counts = await workout_repo.count_by_type(session)

        return AdminReport(
            total_users=total_users,
            total_workouts=total_workouts,
            active_this_week=active_this_week,
            active_last_week=active_last_week,
            new_users_7d=new_users,
            avg_workouts_per_user=total_workouts / total_users if total_users > 0 else 0.0,
            avg_duration=avg_duration,
            most_popular_type=most_frequent(type_counts),
            rates=engagement_rates(total_users, active_this_week, active_last_week),
        )
