"""Reduce workout records to per-window totals."""

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from ..database.models import WorkoutType
from .week import WeekWindow


@dataclass(frozen=True)
class AggregateResult:
    """Count, duration and category mix of the records inside one window."""

    count: int = 0
    total_duration: int = 0
    average_duration: float = 0.0
    most_frequent_type: Optional[WorkoutType] = None


@dataclass(frozen=True)
class UserAggregate:
    user_id: int
    display_name: Optional[str]
    workout_count: int
    total_duration: int


def most_frequent(counts: Mapping[WorkoutType, int]) -> Optional[WorkoutType]:
    """Return the category with the highest count.

    Ties go to whichever category is declared first in WorkoutType, never to
    the order the counts were collected in.
    """
    best: Optional[WorkoutType] = None
    best_count = 0
    for wtype in WorkoutType:
        count = counts.get(wtype, 0)
        if count > best_count:
            best, best_count = wtype, count
    return best


def aggregate(records: Iterable, window: WeekWindow) -> AggregateResult:
    """Aggregate records whose created_at falls inside `window`.

    Records only need `type`, `duration` and `created_at` attributes. Input is
    assumed well-formed; empty input yields a zero-valued result.
    """
    count = 0
    total = 0
    types: Counter = Counter()
    for record in records:
        if not window.contains(record.created_at):
            continue
        count += 1
        total += record.duration
        types[record.type] += 1

    if count == 0:
        return AggregateResult()

    return AggregateResult(
        count=count,
        total_duration=total,
        average_duration=total / count,
        most_frequent_type=most_frequent(types),
    )


def aggregate_users(
    population: Iterable[tuple], window: WeekWindow
) -> list[UserAggregate]:
    """Build one UserAggregate per (user, records) pair.

    Users with nothing in the window are kept with zero totals; ranking
    decides what to drop.
    """
    aggregates: list[UserAggregate] = []
    for user, records in population:
        result = aggregate(records, window)
        aggregates.append(
            UserAggregate(
                user_id=user.id,
                display_name=user.name,
                workout_count=result.count,
                total_duration=result.total_duration,
            )
        )
    return aggregates
