"""Weekly summary broadcast to every registered user."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime

from telegram.error import NetworkError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from . import presentation
from .core import TrackerService
from .database.models import _now_local

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DigestOutcome:
    total: int
    sent: int
    failed: int


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type(NetworkError),
    reraise=True,
)
async def _deliver(bot, chat_id: int, text: str, markup) -> None:
    await bot.send_message(chat_id=chat_id, text=text, reply_markup=markup)


async def broadcast_weekly_digest(
    service: TrackerService,
    bot,
    *,
    delay_seconds: float = 0.1,
    leaderboard_size: int = 5,
    now: datetime | None = None,
) -> DigestOutcome:
    """Send each user their weekly summary.

    The ranking is computed once for the whole broadcast. A failure for one
    user is logged and counted; the loop always moves on to the next user.
    """
    now = now or _now_local()
    users = await service.list_users()
    population = await service.weekly_population(now=now)
    logger.info("Sending weekly summaries to %d users", len(users))

    sent = 0
    failed = 0
    for user in users:
        try:
            digest = await service.weekly_digest(
                user.id, now=now, population=population, top_n=leaderboard_size
            )
            text = presentation.render_weekly_digest(user.language, digest)
            await _deliver(bot, user.telegram_id, text, presentation.main_menu_keyboard(user.language))
            sent += 1
        except Exception:
            logger.exception("Error sending weekly summary to user %s", user.telegram_id)
            failed += 1

        if delay_seconds > 0:
            await asyncio.sleep(delay_seconds)

    logger.info("Weekly summary completed: %d sent, %d failed", sent, failed)
    return DigestOutcome(total=len(users), sent=sent, failed=failed)
