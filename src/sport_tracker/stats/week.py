"""Monday-to-Sunday week windows on the host's local calendar."""

from dataclasses import dataclass
from datetime import datetime, time, timedelta

# Both bounds are inclusive; the last instant of a week is one millisecond
# before the next Monday's midnight.
WEEK_SPAN = timedelta(days=7) - timedelta(milliseconds=1)


@dataclass(frozen=True)
class WeekWindow:
    """Closed interval [start, end] of naive local datetimes."""

    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end

    def shifted(self, days: int) -> "WeekWindow":
        delta = timedelta(days=days)
        return WeekWindow(start=self.start + delta, end=self.end + delta)


def current_week(reference: datetime) -> WeekWindow:
    """Week containing `reference`: Monday 00:00:00.000 through Sunday 23:59:59.999."""
    # isoweekday: Monday=1 ... Sunday=7, so Sunday steps back six days
    monday = reference.date() - timedelta(days=reference.isoweekday() - 1)
    start = datetime.combine(monday, time.min, tzinfo=reference.tzinfo)
    return WeekWindow(start=start, end=start + WEEK_SPAN)


def previous_week(reference: datetime) -> WeekWindow:
    return current_week(reference).shifted(-7)
