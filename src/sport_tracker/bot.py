"""Telegram bot interface for Sport Tracker."""

import logging
import re

from pydantic import ValidationError
from telegram import InlineKeyboardMarkup, Update
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from . import presentation
from .config import TelegramConfig
from .core import TrackerService
from .database.models import Language, User, WorkoutType
from .locales import t
from .schemas import WorkoutInput, parse_custom_duration
from .state import StateStore, WizardState

logger = logging.getLogger(__name__)

WORKOUT_TYPE_PATTERN = re.compile(r"^workout_type_([A-Z]+)$")
DURATION_PATTERN = re.compile(r"^duration_(\d+)$")
LANGUAGE_PATTERN = re.compile(r"^language_([a-z]{2})$")


class SportTrackerBot:
    """Telegram front end: commands, the add-workout wizard and stats views."""

    def __init__(
        self,
        service: TrackerService,
        state_store: StateStore,
        config: TelegramConfig,
        *,
        leaderboard_size: int = 5,
    ) -> None:
        self._service = service
        self._state = state_store
        self._config = config
        self._leaderboard_size = leaderboard_size
        self._admins: set[int] = set(config.admin_user_ids)

    def is_admin(self, telegram_id: int) -> bool:
        return telegram_id in self._admins

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _resolve_user(self, update: Update) -> User | None:
        """Register the sender on first contact and return their record."""
        tg_user = update.effective_user
        if tg_user is None:
            return None
        name = tg_user.username or tg_user.first_name or tg_user.last_name or None
        return await self._service.register_user(tg_user.id, name)

    @staticmethod
    async def _reply(
        update: Update, text: str, markup: InlineKeyboardMarkup | None = None
    ) -> None:
        await update.effective_message.reply_text(text, reply_markup=markup)

    @staticmethod
    async def _edit(
        update: Update, text: str, markup: InlineKeyboardMarkup | None = None
    ) -> None:
        await update.callback_query.edit_message_text(text, reply_markup=markup)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def _on_start(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        user = await self._resolve_user(update)
        if user is None:
            return
        await self._reply(update, t(user.language, "welcome"), presentation.main_menu_keyboard(user.language))

    async def _on_help(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        user = await self._resolve_user(update)
        if user is None:
            return
        await self._reply(update, t(user.language, "help"), presentation.main_menu_keyboard(user.language))

    async def _on_language(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        user = await self._resolve_user(update)
        if user is None:
            return
        await self._reply(
            update, t(user.language, "language.select"), presentation.language_keyboard(user.language)
        )

    async def _on_stats(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        if update.callback_query:
            await update.callback_query.answer()
        user = await self._resolve_user(update)
        if user is None:
            return
        lang = user.language
        try:
            report = await self._service.personal_stats(user.id)
        except Exception:
            logger.exception("Error fetching weekly stats for user %s", user.id)
            await self._reply(update, t(lang, "stats.error"), presentation.add_workout_keyboard(lang))
            return
        await self._reply(
            update, presentation.render_weekly_stats(lang, report), presentation.stats_keyboard(lang)
        )

    async def _on_history(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        if update.callback_query:
            await update.callback_query.answer()
        user = await self._resolve_user(update)
        if user is None:
            return
        lang = user.language
        try:
            workouts = await self._service.history(user.id)
        except Exception:
            logger.exception("Error fetching history for user %s", user.id)
            await self._reply(update, t(lang, "history.error"))
            return
        markup = presentation.main_menu_keyboard(lang) if workouts else presentation.add_workout_keyboard(lang)
        await self._reply(update, presentation.render_history(lang, workouts), markup)

    async def _on_leaderboard(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        if update.callback_query:
            await update.callback_query.answer()
        user = await self._resolve_user(update)
        if user is None:
            return
        lang = user.language
        try:
            report = await self._service.leaderboard(user.id, top_n=self._leaderboard_size)
        except Exception:
            logger.exception("Error fetching leaderboard for user %s", user.id)
            await self._reply(update, t(lang, "leaderboard.error"), presentation.add_workout_keyboard(lang))
            return
        markup = (
            presentation.leaderboard_keyboard(lang)
            if report.result.top
            else presentation.add_workout_keyboard(lang)
        )
        await self._reply(update, presentation.render_leaderboard(lang, report), markup)

    async def _on_admin(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        user = await self._resolve_user(update)
        if user is None:
            return
        lang = user.language
        if not self.is_admin(user.telegram_id):
            logger.warning("Non-admin %s attempted /admin", user.telegram_id)
            await self._reply(update, t(lang, "admin.access_denied"))
            return
        try:
            report = await self._service.admin_report()
        except Exception:
            logger.exception("Error fetching admin stats")
            await self._reply(update, t(lang, "admin.error"))
            return
        await self._reply(update, presentation.render_admin_report(lang, report))

    # ------------------------------------------------------------------
    # Add-workout wizard
    # ------------------------------------------------------------------

    async def _on_add_workout(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        await update.callback_query.answer()
        user = await self._resolve_user(update)
        if user is None:
            return
        self._state.clear(user.telegram_id)
        await self._edit(
            update, t(user.language, "workout.choose_type"), presentation.workout_type_keyboard(user.language)
        )

    async def _on_workout_type(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        await query.answer()
        user = await self._resolve_user(update)
        if user is None:
            return
        lang = user.language

        match = WORKOUT_TYPE_PATTERN.match(query.data or "")
        try:
            wtype = WorkoutType(match.group(1)) if match else None
        except ValueError:
            wtype = None
        if wtype is None:
            await self._edit(update, t(lang, "workout.session_error"), presentation.retry_keyboard(lang))
            return

        self._state.set(user.telegram_id, WizardState(selected_type=wtype))
        await self._edit(
            update, presentation.render_workout_selected(lang, wtype), presentation.duration_keyboard(lang)
        )

    async def _on_duration(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        await query.answer()
        user = await self._resolve_user(update)
        if user is None:
            return
        match = DURATION_PATTERN.match(query.data or "")
        minutes = int(match.group(1)) if match else 0
        await self._finish_workout(update, user, minutes, edit=True)

    async def _on_custom_duration(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        await update.callback_query.answer()
        user = await self._resolve_user(update)
        if user is None:
            return
        state = self._state.get(user.telegram_id)
        state.awaiting_custom_duration = True
        self._state.set(user.telegram_id, state)
        await self._edit(
            update, t(user.language, "workout.custom_prompt"), presentation.cancel_keyboard(user.language)
        )

    async def _on_text(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        if not update.message or not update.message.text:
            return
        user = await self._resolve_user(update)
        if user is None:
            return
        state = self._state.get(user.telegram_id)
        if not state.awaiting_custom_duration:
            return

        try:
            minutes = parse_custom_duration(update.message.text)
        except ValueError:
            await self._reply(update, t(user.language, "workout.invalid_duration"))
            return
        await self._finish_workout(update, user, minutes, edit=False)

    async def _finish_workout(self, update: Update, user: User, minutes: int, *, edit: bool) -> None:
        lang = user.language
        send = self._edit if edit else self._reply
        state = self._state.get(user.telegram_id)
        if state.selected_type is None:
            await send(update, t(lang, "workout.session_error"))
            return

        try:
            data = WorkoutInput(type=state.selected_type, duration_minutes=minutes)
        except ValidationError:
            await send(update, t(lang, "workout.invalid_duration"))
            return

        try:
            workout = await self._service.log_workout(user.id, data)
        except Exception:
            logger.exception("Error logging workout for user %s", user.id)
            await send(update, t(lang, "workout.error"), presentation.retry_keyboard(lang))
            return

        self._state.clear(user.telegram_id)
        await send(update, presentation.render_workout_logged(lang, workout), presentation.after_log_keyboard(lang))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    async def _on_home(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        await update.callback_query.answer()
        user = await self._resolve_user(update)
        if user is None:
            return
        await self._edit(update, t(user.language, "welcome"), presentation.main_menu_keyboard(user.language))

    async def _on_language_selected(self, update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        await query.answer()
        user = await self._resolve_user(update)
        if user is None:
            return
        match = LANGUAGE_PATTERN.match(query.data or "")
        try:
            language = Language(match.group(1)) if match else user.language
        except ValueError:
            language = user.language

        updated = await self._service.set_language(user.id, language)
        lang = updated.language if updated else language
        await self._edit(update, t(lang, "language.changed"), presentation.main_menu_keyboard(lang))

    async def _on_error(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        logger.error("Unhandled error while processing update", exc_info=context.error)
        message = getattr(update, "effective_message", None)
        if message is None:
            return

        lang = Language.EN
        tg_user = getattr(update, "effective_user", None)
        if tg_user is not None:
            try:
                user = await self._service.find_user(tg_user.id)
            except Exception:
                logger.warning("Could not load language for user %s", tg_user.id, exc_info=True)
                user = None
            if user is not None:
                lang = user.language
        await message.reply_text(t(lang, "errors.generic"))

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    async def _post_init(self, app: Application) -> None:
        await self._service.initialize()
        logger.info("Sport Tracker bot initialized (DB ready)")

    async def _post_shutdown(self, app: Application) -> None:
        await self._service.close()
        logger.info("Sport Tracker bot shut down")

    def build_application(self) -> Application:
        app = (
            Application.builder()
            .token(self._config.token)
            .post_init(self._post_init)
            .post_shutdown(self._post_shutdown)
            .build()
        )
        self.register_handlers(app)
        return app

    def register_handlers(self, app: Application) -> None:
        app.add_handler(CommandHandler("start", self._on_start))
        app.add_handler(CommandHandler("help", self._on_help))
        app.add_handler(CommandHandler("stats", self._on_stats))
        app.add_handler(CommandHandler("history", self._on_history))
        app.add_handler(CommandHandler("leaderboard", self._on_leaderboard))
        app.add_handler(CommandHandler("admin", self._on_admin))
        app.add_handler(CommandHandler("language", self._on_language))

        app.add_handler(CallbackQueryHandler(self._on_add_workout, pattern="^add_workout$"))
        app.add_handler(CallbackQueryHandler(self._on_workout_type, pattern=WORKOUT_TYPE_PATTERN))
        app.add_handler(CallbackQueryHandler(self._on_custom_duration, pattern="^duration_custom$"))
        app.add_handler(CallbackQueryHandler(self._on_duration, pattern=DURATION_PATTERN))
        app.add_handler(CallbackQueryHandler(self._on_stats, pattern="^my_stats$"))
        app.add_handler(CallbackQueryHandler(self._on_history, pattern="^view_history$"))
        app.add_handler(CallbackQueryHandler(self._on_leaderboard, pattern="^leaderboard$"))
        app.add_handler(CallbackQueryHandler(self._on_home, pattern="^home$"))
        app.add_handler(CallbackQueryHandler(self._on_language_selected, pattern=LANGUAGE_PATTERN))

        app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, self._on_text))
        app.add_error_handler(self._on_error)

    def run(self) -> None:
        app = self.build_application()
        logger.info("Starting Sport Tracker bot (polling)...")
        app.run_polling()
