"""Tests for the weekly summary broadcast."""

from datetime import datetime

import pytest
from telegram.error import Forbidden, NetworkError

from sport_tracker.core import TrackerService
from sport_tracker.database.models import Language, WorkoutType
from sport_tracker.digest import _deliver, broadcast_weekly_digest
from sport_tracker.schemas import WorkoutInput

NOW = datetime(2026, 2, 18, 12, 0)


class FakeBot:
    def __init__(self, blocked=()):
        self.blocked = set(blocked)
        self.sent: list[dict] = []

    async def send_message(self, chat_id, text, reply_markup=None):
        if chat_id in self.blocked:
            raise Forbidden("Forbidden: bot was blocked by the user")
        self.sent.append({"chat_id": chat_id, "text": text, "reply_markup": reply_markup})


@pytest.mark.asyncio
async def test_broadcast_continues_past_failures(service: TrackerService):
    ann = await service.register_user(1001, "ann")
    await service.register_user(1002, "bo")
    cy = await service.register_user(1003, "cy")
    await service.set_language(cy.id, Language.RU)
    await service.log_workout(ann.id, WorkoutInput(type=WorkoutType.GYM, duration_minutes=45), now=NOW)

    bot = FakeBot(blocked={1002})
    outcome = await broadcast_weekly_digest(service, bot, delay_seconds=0, now=NOW)

    assert outcome.total == 3
    assert outcome.sent == 2
    assert outcome.failed == 1
    assert [m["chat_id"] for m in bot.sent] == [1001, 1003]

    ann_text = bot.sent[0]["text"]
    assert ann_text.startswith("📊 Weekly Summary Report")
    assert "🏆 Leaderboard Position: 1/1" in ann_text

    # cy never trained: first summary, in Russian
    assert bot.sent[1]["text"].startswith("📊 Итоги недели")
    assert "Добро пожаловать" in bot.sent[1]["text"]


@pytest.mark.asyncio
async def test_broadcast_with_no_users(service: TrackerService):
    bot = FakeBot()
    outcome = await broadcast_weekly_digest(service, bot, delay_seconds=0, now=NOW)
    assert (outcome.total, outcome.sent, outcome.failed) == (0, 0, 0)
    assert bot.sent == []


class FlakyBot:
    """Fails the first `failures` sends with a network error."""

    def __init__(self, failures):
        self.failures = failures
        self.calls = 0

    async def send_message(self, chat_id, text, reply_markup=None):
        self.calls += 1
        if self.calls <= self.failures:
            raise NetworkError("Connection reset")


@pytest.fixture
def no_retry_wait(monkeypatch):
    async def _sleep(_seconds):
        return None

    monkeypatch.setattr(_deliver.retry, "sleep", _sleep)


@pytest.mark.asyncio
async def test_network_error_is_retried(service: TrackerService, no_retry_wait):
    await service.register_user(1001, "ann")
    bot = FlakyBot(failures=1)

    outcome = await broadcast_weekly_digest(service, bot, delay_seconds=0, now=NOW)

    assert bot.calls == 2
    assert (outcome.sent, outcome.failed) == (1, 0)


@pytest.mark.asyncio
async def test_network_error_gives_up_after_three_attempts(service: TrackerService, no_retry_wait):
    await service.register_user(1001, "ann")
    bot = FlakyBot(failures=3)

    outcome = await broadcast_weekly_digest(service, bot, delay_seconds=0, now=NOW)

    assert bot.calls == 3
    assert (outcome.sent, outcome.failed) == (0, 1)
