"""Rank users by weekly workout minutes."""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .aggregation import UserAggregate


@dataclass(frozen=True)
class RankedEntry:
    rank: int
    aggregate: UserAggregate


@dataclass(frozen=True)
class LeaderboardResult:
    """Top-N slice of the ranking plus the focus user's standing.

    `focus_entry` is set only when the focus user is ranked but falls outside
    `top`. `focus_unranked` is True when a focus user was requested and had
    no minutes in the window.
    """

    top: list[RankedEntry] = field(default_factory=list)
    focus_entry: Optional[RankedEntry] = None
    focus_unranked: bool = False
    total_ranked: int = 0

    def entry_for(self, user_id: int) -> Optional[RankedEntry]:
        for entry in self.top:
            if entry.aggregate.user_id == user_id:
                return entry
        if self.focus_entry and self.focus_entry.aggregate.user_id == user_id:
            return self.focus_entry
        return None


def _sort_key(agg: UserAggregate) -> tuple:
    return (-agg.total_duration, agg.user_id)


def rank(
    aggregates: Iterable[UserAggregate],
    top_n: int,
    focus_user_id: Optional[int] = None,
) -> LeaderboardResult:
    """Order users by total minutes, descending, with ascending user_id on ties.

    Users with zero minutes are dropped before ranking. Ranks are 1-based
    positions in the ordering, so tied users never share a rank.
    """
    ranked = sorted((a for a in aggregates if a.total_duration > 0), key=_sort_key)
    entries = [RankedEntry(rank=i, aggregate=a) for i, a in enumerate(ranked, start=1)]
    top = entries[: max(top_n, 0)]

    focus_entry = None
    focus_unranked = False
    if focus_user_id is not None:
        found = next((e for e in entries if e.aggregate.user_id == focus_user_id), None)
        if found is None:
            focus_unranked = True
        elif found.rank > len(top):
            focus_entry = found

    return LeaderboardResult(
        top=top,
        focus_entry=focus_entry,
        focus_unranked=focus_unranked,
        total_ranked=len(entries),
    )
