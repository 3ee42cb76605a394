"""Tests for the async repositories against SQLite."""

from datetime import datetime

import pytest

from sport_tracker.database.models import Language, WorkoutType
from sport_tracker.database.repository import user_repo, workout_repo

MONDAY = datetime(2026, 2, 16)


async def _workout(session, user_id, wtype, minutes, when):
    return await workout_repo.create(
        session,
        obj_in={"user_id": user_id, "type": wtype, "duration": minutes, "created_at": when},
    )


@pytest.mark.asyncio
async def test_health_check(db):
    assert await db.health_check() is True


@pytest.mark.asyncio
async def test_get_or_create_registers_once(db):
    async with db.get_session() as session:
        first = await user_repo.get_or_create(session, 1001, "ann")
    async with db.get_session() as session:
        again = await user_repo.get_or_create(session, 1001, "ann")
        assert again.id == first.id
        assert again.language == Language.EN
        assert await user_repo.count(session) == 1


@pytest.mark.asyncio
async def test_get_or_create_refreshes_name(db):
    async with db.get_session() as session:
        await user_repo.get_or_create(session, 1001, "ann")
    async with db.get_session() as session:
        user = await user_repo.get_or_create(session, 1001, "annie")
        assert user.name == "annie"
        # a missing name does not wipe the stored one
        user = await user_repo.get_or_create(session, 1001, None)
        assert user.name == "annie"


@pytest.mark.asyncio
async def test_set_language(db):
    async with db.get_session() as session:
        user = await user_repo.get_or_create(session, 1001, "ann")
    async with db.get_session() as session:
        updated = await user_repo.set_language(session, user.id, Language.RU)
        assert updated.language == Language.RU
        assert await user_repo.set_language(session, 9999, Language.RU) is None


@pytest.mark.asyncio
async def test_find_for_user_range_is_inclusive(db):
    end = datetime(2026, 2, 22, 23, 59, 59, 999000)
    async with db.get_session() as session:
        user = await user_repo.get_or_create(session, 1001, "ann")
        other = await user_repo.get_or_create(session, 1002, "bo")
        await _workout(session, user.id, WorkoutType.GYM, 30, MONDAY)
        await _workout(session, user.id, WorkoutType.GYM, 40, end)
        await _workout(session, user.id, WorkoutType.GYM, 50, datetime(2026, 2, 23))
        await _workout(session, user.id, WorkoutType.GYM, 60, datetime(2026, 2, 15, 23, 0))
        await _workout(session, other.id, WorkoutType.GYM, 70, MONDAY)

    async with db.get_session() as session:
        found = await workout_repo.find_for_user(session, user.id, MONDAY, end)
    assert [w.duration for w in found] == [30, 40]


@pytest.mark.asyncio
async def test_recent_newest_first(db):
    async with db.get_session() as session:
        user = await user_repo.get_or_create(session, 1001, "ann")
        for day in range(1, 8):
            await _workout(session, user.id, WorkoutType.RUNNING, day * 10, datetime(2026, 2, day))

    async with db.get_session() as session:
        recent = await workout_repo.get_recent_for_user(session, user.id, limit=5)
    assert [w.duration for w in recent] == [70, 60, 50, 40, 30]


@pytest.mark.asyncio
async def test_users_with_workouts_includes_idle_users(db):
    end = datetime(2026, 2, 22, 23, 59, 59, 999000)
    async with db.get_session() as session:
        ann = await user_repo.get_or_create(session, 1001, "ann")
        bo = await user_repo.get_or_create(session, 1002, "bo")
        await _workout(session, ann.id, WorkoutType.GYM, 30, MONDAY)
        await _workout(session, ann.id, WorkoutType.YOGA, 45, datetime(2026, 2, 18))
        await _workout(session, bo.id, WorkoutType.GYM, 30, datetime(2026, 2, 9))

    async with db.get_session() as session:
        pairs = await workout_repo.find_users_with_workouts(session, MONDAY, end)
        active = await workout_repo.count_users_with_workouts_in_range(session, MONDAY, end)

    assert [(user.name, [w.duration for w in workouts]) for user, workouts in pairs] == [
        ("ann", [30, 45]),
        ("bo", []),
    ]
    assert active == 1


@pytest.mark.asyncio
async def test_global_aggregates(db):
    async with db.get_session() as session:
        assert await workout_repo.average_duration(session) == 0.0
        assert await workout_repo.count_by_type(session) == {}

        user = await user_repo.get_or_create(session, 1001, "ann")
        await _workout(session, user.id, WorkoutType.GYM, 30, MONDAY)
        await _workout(session, user.id, WorkoutType.GYM, 60, MONDAY)
        await _workout(session, user.id, WorkoutType.TENNIS, 45, MONDAY)

    async with db.get_session() as session:
        assert await workout_repo.average_duration(session) == pytest.approx(45.0)
        assert await workout_repo.count_by_type(session) == {
            WorkoutType.GYM: 2,
            WorkoutType.TENNIS: 1,
        }
        assert await workout_repo.count(session) == 3
