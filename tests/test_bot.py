"""Handler tests for the Telegram bot using lightweight fake updates."""

from types import SimpleNamespace

import pytest

from sport_tracker.bot import SportTrackerBot
from sport_tracker.config import TelegramConfig
from sport_tracker.core import TrackerService
from sport_tracker.database.models import Language, WorkoutType
from sport_tracker.state import InMemoryStateStore

ADMIN_ID = 500
USER_ID = 600


class FakeMessage:
    def __init__(self, text=None):
        self.text = text
        self.replies: list[tuple[str, object]] = []

    async def reply_text(self, text, reply_markup=None):
        self.replies.append((text, reply_markup))


class FakeQuery:
    def __init__(self, data):
        self.data = data
        self.answered = False
        self.edits: list[tuple[str, object]] = []

    async def answer(self):
        self.answered = True

    async def edit_message_text(self, text, reply_markup=None):
        self.edits.append((text, reply_markup))


def make_update(telegram_id=USER_ID, *, text=None, data=None, username="ann"):
    message = FakeMessage(text)
    return SimpleNamespace(
        effective_user=SimpleNamespace(
            id=telegram_id, username=username, first_name=None, last_name=None
        ),
        effective_message=message,
        message=message if text is not None else None,
        callback_query=FakeQuery(data) if data is not None else None,
    )


@pytest.fixture
def bot(service: TrackerService):
    return SportTrackerBot(
        service,
        InMemoryStateStore(ttl_seconds=60),
        TelegramConfig(token="test", admin_user_ids=[ADMIN_ID]),
    )


@pytest.mark.asyncio
async def test_start_registers_user(bot: SportTrackerBot, service: TrackerService):
    update = make_update()
    await bot._on_start(update, None)

    users = await service.list_users()
    assert [(u.telegram_id, u.name) for u in users] == [(USER_ID, "ann")]
    text, markup = update.effective_message.replies[0]
    assert text.startswith("🏃‍♂️ Welcome to Sport Tracker Bot!")
    assert markup.inline_keyboard[0][0].callback_data == "add_workout"


@pytest.mark.asyncio
async def test_wizard_with_preset_duration(bot: SportTrackerBot, service: TrackerService):
    update = make_update(data="workout_type_TENNIS")
    await bot._on_workout_type(update, None)
    assert update.callback_query.answered
    assert "Tennis workout selected" in update.callback_query.edits[0][0]

    update = make_update(data="duration_60")
    await bot._on_duration(update, None)
    text, _ = update.callback_query.edits[0]
    assert text.startswith("✅ Workout logged successfully!")
    assert "⏱️ Duration: 60 minutes" in text

    user = (await service.list_users())[0]
    history = await service.history(user.id)
    assert [(w.type, w.duration) for w in history] == [(WorkoutType.TENNIS, 60)]


@pytest.mark.asyncio
async def test_wizard_with_custom_duration(bot: SportTrackerBot, service: TrackerService):
    await bot._on_workout_type(make_update(data="workout_type_YOGA"), None)
    await bot._on_custom_duration(make_update(data="duration_custom"), None)

    update = make_update(text="abc")
    await bot._on_text(update, None)
    assert "valid duration" in update.effective_message.replies[0][0]

    update = make_update(text="75")
    await bot._on_text(update, None)
    assert update.effective_message.replies[0][0].startswith("✅ Workout logged successfully!")

    # wizard is finished: further text is ignored
    update = make_update(text="80")
    await bot._on_text(update, None)
    assert update.effective_message.replies == []

    user = (await service.list_users())[0]
    assert [w.duration for w in await service.history(user.id)] == [75]


@pytest.mark.asyncio
async def test_duration_without_selected_type(bot: SportTrackerBot, service: TrackerService):
    update = make_update(data="duration_30")
    await bot._on_duration(update, None)
    assert "try adding your workout again" in update.callback_query.edits[0][0]

    user = (await service.list_users())[0]
    assert await service.history(user.id) == []


@pytest.mark.asyncio
async def test_admin_requires_allow_list(bot: SportTrackerBot):
    update = make_update(USER_ID)
    await bot._on_admin(update, None)
    assert update.effective_message.replies[0][0] == "❌ Access denied. Admin privileges required."

    update = make_update(ADMIN_ID, username="boss")
    await bot._on_admin(update, None)
    assert update.effective_message.replies[0][0].startswith("📊 Bot Statistics Report")


@pytest.mark.asyncio
async def test_language_selection(bot: SportTrackerBot, service: TrackerService):
    update = make_update(data="language_ru")
    await bot._on_language_selected(update, None)
    assert update.callback_query.edits[0][0] == "✅ Язык изменён!"

    users = await service.list_users()
    assert users[0].language == Language.RU


@pytest.mark.asyncio
async def test_leaderboard_empty_week(bot: SportTrackerBot):
    update = make_update(data="leaderboard")
    await bot._on_leaderboard(update, None)
    text, markup = update.effective_message.replies[0]
    assert "No workouts recorded this week yet" in text
    assert markup.inline_keyboard[0][0].callback_data == "add_workout"


@pytest.mark.asyncio
async def test_error_reply_uses_user_language(bot: SportTrackerBot, service: TrackerService):
    user = await service.register_user(USER_ID, "ann")
    await service.set_language(user.id, Language.RU)

    update = make_update()
    await bot._on_error(update, SimpleNamespace(error=RuntimeError("boom")))
    assert update.effective_message.replies[0][0] == "❌ Что-то пошло не так. Попробуйте ещё раз."


@pytest.mark.asyncio
async def test_error_reply_defaults_to_english(bot: SportTrackerBot):
    update = make_update(telegram_id=777)
    await bot._on_error(update, SimpleNamespace(error=RuntimeError("boom")))
    assert update.effective_message.replies[0][0] == "❌ Something went wrong. Please try again."


@pytest.mark.asyncio
async def test_error_reply_survives_failed_lookup(bot: SportTrackerBot, service: TrackerService, monkeypatch):
    async def _broken(_telegram_id):
        raise RuntimeError("database down")

    monkeypatch.setattr(service, "find_user", _broken)
    update = make_update()
    await bot._on_error(update, SimpleNamespace(error=RuntimeError("boom")))
    assert update.effective_message.replies[0][0] == "❌ Something went wrong. Please try again."
