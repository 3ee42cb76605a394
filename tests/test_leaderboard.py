"""Tests for weekly leaderboard ranking."""

from sport_tracker.stats import UserAggregate, rank


def _agg(user_id, minutes, count=1, name=None):
    return UserAggregate(
        user_id=user_id,
        display_name=name or f"user{user_id}",
        workout_count=count,
        total_duration=minutes,
    )


def _ranks(result):
    return [(e.rank, e.aggregate.user_id, e.aggregate.total_duration) for e in result.top]


def test_two_user_scenario():
    """A: Mon 45 + Wed 30 = 75 min, B: Tue 100 min."""
    a = _agg(1, 75, count=2, name="A")
    b = _agg(2, 100, count=1, name="B")
    result = rank([a, b], top_n=5)
    assert _ranks(result) == [(1, 2, 100), (2, 1, 75)]
    assert result.focus_entry is None
    assert result.focus_unranked is False
    assert result.total_ranked == 2


def test_zero_duration_users_are_dropped():
    result = rank([_agg(1, 0, count=0), _agg(2, 30)], top_n=5)
    assert _ranks(result) == [(1, 2, 30)]
    assert result.total_ranked == 1


def test_ties_broken_by_ascending_user_id():
    result = rank([_agg(9, 60), _agg(3, 60), _agg(5, 90)], top_n=5)
    assert _ranks(result) == [(1, 5, 90), (2, 3, 60), (3, 9, 60)]


def test_order_independent_of_input_order():
    aggs = [_agg(i, minutes) for i, minutes in [(1, 10), (2, 50), (3, 50), (4, 20)]]
    assert _ranks(rank(aggs, top_n=5)) == _ranks(rank(list(reversed(aggs)), top_n=5))


def test_top_is_sorted_and_truncated():
    aggs = [_agg(i, i * 10) for i in range(1, 9)]
    result = rank(aggs, top_n=3)
    assert [e.rank for e in result.top] == [1, 2, 3]
    durations = [e.aggregate.total_duration for e in result.top]
    assert durations == sorted(durations, reverse=True)
    assert result.total_ranked == 8


def test_focus_inside_top():
    result = rank([_agg(1, 100), _agg(2, 50)], top_n=5, focus_user_id=2)
    assert result.focus_entry is None
    assert result.focus_unranked is False
    assert result.entry_for(2).rank == 2


def test_focus_with_max_duration_ranks_first():
    result = rank([_agg(1, 10), _agg(2, 500), _agg(3, 40)], top_n=5, focus_user_id=2)
    assert result.entry_for(2).rank == 1


def test_focus_outside_top_gets_exact_rank():
    aggs = [_agg(i, 100 - i) for i in range(1, 8)]
    result = rank(aggs, top_n=5, focus_user_id=7)
    assert len(result.top) == 5
    assert result.focus_entry is not None
    assert result.focus_entry.rank == 7
    assert result.focus_entry.aggregate.user_id == 7


def test_focus_outside_top_with_tie_uses_same_rule():
    aggs = [_agg(1, 90), _agg(2, 80), _agg(3, 30), _agg(4, 30)]
    result = rank(aggs, top_n=2, focus_user_id=4)
    assert result.focus_entry.rank == 4


def test_focus_with_zero_minutes_is_unranked():
    result = rank([_agg(1, 30), _agg(2, 0, count=0)], top_n=5, focus_user_id=2)
    assert result.focus_unranked is True
    assert result.focus_entry is None
    assert result.entry_for(2) is None


def test_empty_input():
    result = rank([], top_n=5, focus_user_id=1)
    assert result.top == []
    assert result.focus_unranked is True
    assert result.total_ranked == 0


def test_empty_input_without_focus():
    result = rank([], top_n=5)
    assert result.focus_unranked is False
