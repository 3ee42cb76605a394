"""UI strings for each supported language, looked up by dotted key."""

from .database.models import Language

EN: dict = {
    "welcome": (
        "🏃‍♂️ Welcome to Sport Tracker Bot!\n\n"
        "Track your workouts easily with inline buttons. Here's what you can do:\n\n"
        "📊 /stats - View your workout statistics\n"
        "📋 /history - View recent workouts\n"
        "❓ /help - Show this help message\n\n"
        'Let\'s get started! Use the "Add Workout" button below to record your first workout.'
    ),
    "help": (
        "🏃‍♂️ Sport Tracker Bot Commands:\n\n"
        "📊 /stats - View your workout statistics\n"
        "📋 /history - View recent workouts\n"
        "🏆 /leaderboard - View weekly leaderboard\n"
        "👨‍💼 /admin - Admin statistics (admin only)\n"
        "🌐 /language - Change language\n"
        "❓ /help - Show this help message\n\n"
        "The bot will guide you through logging workouts using easy-to-use buttons!"
    ),
    "date_format": "{d:%b} {d.day}",
    "workout": {
        "choose_type": "🏃‍♂️ Choose your workout type:",
        "type_selected": "{emoji} {name} workout selected!\n\nHow long was your workout?",
        "custom_prompt": "⏱️ Please enter the duration in minutes (e.g., 75):",
        "logged": (
            "✅ Workout logged successfully!\n\n"
            "{emoji} {name}\n"
            "⏱️ Duration: {duration} minutes\n"
            "📅 Date: {date}\n\n"
            "Great job! Check your progress below:"
        ),
        "error": "❌ Error logging workout. Please try again.",
        "invalid_duration": "❌ Please enter a valid duration between 1 and 1440 minutes.",
        "session_error": "❌ Error: Please try adding your workout again.",
    },
    "types": {
        "GYM": "Gym",
        "TENNIS": "Tennis",
        "RUNNING": "Running",
        "FOOTBALL": "Football",
        "BASKETBALL": "Basketball",
        "YOGA": "Yoga",
        "SWIMMING": "Swimming",
        "CYCLING": "Cycling",
        "OTHER": "Other",
    },
    "stats": {
        "title": "📈 Weekly Workout Statistics",
        "this_week": "🏃‍♂️ This Week:",
        "workouts": "   • Workouts: {count}",
        "duration": "   • Duration: {minutes} minutes",
        "average": "   • Avg Duration: {minutes:.1f} min",
        "favorite": "   • Favorite: {name}",
        "vs_last_week": "📊 vs Last Week:",
        "count_delta": "   • Workouts: {delta} ({previous} → {current})",
        "duration_delta": "   • Duration: {delta} min ({previous} → {current} min)",
        "no_workouts": "🏃‍♂️ This Week: No workouts yet",
        "no_workouts_delta": "📊 vs Last Week: {count_delta} workouts, {duration_delta} minutes",
        "error": "❌ Error fetching statistics. Please try again.",
    },
    "motivation": {
        "improved": "🎉 Great job! You're improving! 💪",
        "declined": "💪 Keep up the consistency!",
        "unchanged_active": "💪 Keep up the consistency!",
        "first_time": "🚀 Ready to start your fitness journey?",
        "resumed": "🚀 Great start! Consistency is key!",
        "lapsed": "💪 Time to get back on track!",
        "top3": "🏆 You're in the top 3! Incredible performance!",
        "top5": "🥇 Great job! You're in the top 5!",
        "keep_going": "💪 Keep pushing! Every workout counts!",
    },
    "history": {
        "title": "📋 Recent Workouts:",
        "item": "{index}. {emoji} {name} - {duration}min ({date})",
        "empty": "📋 No workouts found. Use the button below to record your first workout!",
        "error": "❌ Error fetching workout history. Please try again.",
    },
    "leaderboard": {
        "title": "🏆 Weekly Leaderboard",
        "empty": "No workouts recorded this week yet! Be the first to log a workout! 💪",
        "item": "{medal} {name} — {minutes} min ({sessions})",
        "you": "You",
        "anonymous": "Anonymous",
        "session_one": "{count} session",
        "session_many": "{count} sessions",
        "error": "❌ Error fetching leaderboard. Please try again.",
    },
    "digest": {
        "title": "📊 Weekly Summary Report",
        "this_week": "🏃‍♂️ This Week:",
        "workouts": "   • Workouts: {count}",
        "total_time": "   • Total Time: {minutes} minutes",
        "progress": "📈 Progress from Last Week:",
        "more_workouts": "📈 +{count} more workouts",
        "fewer_workouts": "📉 {count} fewer workouts",
        "same_workouts": "📊 Same number of workouts",
        "more_minutes": "⏱️ +{minutes} more minutes",
        "fewer_minutes": "⏱️ {minutes} fewer minutes",
        "same_minutes": "⏱️ Same total time",
        "position": "🏆 Leaderboard Position: {rank}/{total}",
        "not_ranked": "🏆 Leaderboard Position: Not ranked",
        "welcome": (
            "Welcome to Sport Tracker Bot! 🎉\n\n"
            "This is your first weekly summary. Start logging your workouts to see "
            "your progress and compete on the leaderboard!\n\n"
            "💪 Ready to begin your fitness journey?"
        ),
    },
    "admin": {
        "access_denied": "❌ Access denied. Admin privileges required.",
        "title": "📊 Bot Statistics Report",
        "users": "👥 Users:",
        "total_registered": "   • Total Registered: {value}",
        "active_this_week": "   • Active This Week: {value}",
        "active_last_week": "   • Active Last Week: {value}",
        "new_users": "   • New Users (7 days): {value}",
        "workouts": "🏃‍♂️ Workouts:",
        "total_workouts": "   • Total Workouts: {value}",
        "avg_per_user": "   • Avg per User: {value:.1f}",
        "avg_duration": "   • Avg Duration: {value:.1f} min",
        "most_popular": "   • Most Popular: {value}",
        "none": "None",
        "engagement": "📈 Engagement:",
        "weekly_active_rate": "   • Weekly Active Rate: {value:.1f}%",
        "growth_rate": "   • Growth Rate: {value:.1f}%",
        "error": "❌ Error fetching admin statistics. Please try again.",
    },
    "buttons": {
        "add_workout": "➕ Add Workout",
        "my_stats": "📈 My Stats",
        "leaderboard": "🏆 Leaderboard",
        "history": "📋 View History",
        "home": "🏠 Home",
        "view_stats": "📈 View Stats",
        "add_another": "➕ Add Another Workout",
        "try_again": "➕ Try Again",
        "cancel": "❌ Cancel",
        "custom": "Custom",
        "minutes": "{minutes} min",
    },
    "language": {
        "select": "Please select your language:",
        "changed": "✅ Language changed successfully!",
        "en": "🇺🇸 English",
        "ru": "🇷🇺 Русский",
    },
    "errors": {
        "generic": "❌ Something went wrong. Please try again.",
    },
}

RU: dict = {
    "welcome": (
        "🏃‍♂️ Добро пожаловать в Sport Tracker Bot!\n\n"
        "Записывайте тренировки с помощью кнопок. Что можно сделать:\n\n"
        "📊 /stats - Статистика тренировок\n"
        "📋 /history - Последние тренировки\n"
        "❓ /help - Помощь\n\n"
        "Нажмите «Добавить тренировку», чтобы записать первую тренировку."
    ),
    "help": (
        "🏃‍♂️ Команды Sport Tracker Bot:\n\n"
        "📊 /stats - Статистика тренировок\n"
        "📋 /history - Последние тренировки\n"
        "🏆 /leaderboard - Рейтинг недели\n"
        "👨‍💼 /admin - Статистика бота (только для админов)\n"
        "🌐 /language - Сменить язык\n"
        "❓ /help - Помощь\n\n"
        "Бот проведёт вас через запись тренировки с помощью кнопок!"
    ),
    "date_format": "{d:%d}.{d:%m}",
    "workout": {
        "choose_type": "🏃‍♂️ Выберите тип тренировки:",
        "type_selected": "{emoji} {name}: тип выбран!\n\nСколько длилась тренировка?",
        "custom_prompt": "⏱️ Введите длительность в минутах (например, 75):",
        "logged": (
            "✅ Тренировка записана!\n\n"
            "{emoji} {name}\n"
            "⏱️ Длительность: {duration} мин\n"
            "📅 Дата: {date}\n\n"
            "Отлично! Посмотрите свой прогресс:"
        ),
        "error": "❌ Не удалось записать тренировку. Попробуйте ещё раз.",
        "invalid_duration": "❌ Введите длительность от 1 до 1440 минут.",
        "session_error": "❌ Ошибка: начните добавление тренировки заново.",
    },
    "types": {
        "GYM": "Зал",
        "TENNIS": "Теннис",
        "RUNNING": "Бег",
        "FOOTBALL": "Футбол",
        "BASKETBALL": "Баскетбол",
        "YOGA": "Йога",
        "SWIMMING": "Плавание",
        "CYCLING": "Велосипед",
        "OTHER": "Другое",
    },
    "stats": {
        "title": "📈 Статистика за неделю",
        "this_week": "🏃‍♂️ Эта неделя:",
        "workouts": "   • Тренировок: {count}",
        "duration": "   • Время: {minutes} мин",
        "average": "   • Средняя длительность: {minutes:.1f} мин",
        "favorite": "   • Любимый тип: {name}",
        "vs_last_week": "📊 По сравнению с прошлой неделей:",
        "count_delta": "   • Тренировок: {delta} ({previous} → {current})",
        "duration_delta": "   • Время: {delta} мин ({previous} → {current} мин)",
        "no_workouts": "🏃‍♂️ Эта неделя: пока нет тренировок",
        "no_workouts_delta": "📊 По сравнению с прошлой неделей: {count_delta} тренировок, {duration_delta} мин",
        "error": "❌ Не удалось получить статистику. Попробуйте ещё раз.",
    },
    "motivation": {
        "improved": "🎉 Отлично! Вы прогрессируете! 💪",
        "declined": "💪 Сохраняйте регулярность!",
        "unchanged_active": "💪 Сохраняйте регулярность!",
        "first_time": "🚀 Готовы начать путь к форме?",
        "resumed": "🚀 Отличное начало! Главное — регулярность!",
        "lapsed": "💪 Пора вернуться к тренировкам!",
        "top3": "🏆 Вы в тройке лучших! Потрясающе!",
        "top5": "🥇 Отлично! Вы в пятёрке лучших!",
        "keep_going": "💪 Не сдавайтесь! Каждая тренировка важна!",
    },
    "history": {
        "title": "📋 Последние тренировки:",
        "item": "{index}. {emoji} {name} - {duration} мин ({date})",
        "empty": "📋 Тренировок пока нет. Нажмите кнопку ниже, чтобы записать первую!",
        "error": "❌ Не удалось получить историю. Попробуйте ещё раз.",
    },
    "leaderboard": {
        "title": "🏆 Рейтинг недели",
        "empty": "На этой неделе ещё нет тренировок! Станьте первым! 💪",
        "item": "{medal} {name} — {minutes} мин ({sessions})",
        "you": "Вы",
        "anonymous": "Аноним",
        "session_one": "{count} трен.",
        "session_many": "{count} трен.",
        "error": "❌ Не удалось получить рейтинг. Попробуйте ещё раз.",
    },
    "digest": {
        "title": "📊 Итоги недели",
        "this_week": "🏃‍♂️ Эта неделя:",
        "workouts": "   • Тренировок: {count}",
        "total_time": "   • Общее время: {minutes} мин",
        "progress": "📈 Прогресс по сравнению с прошлой неделей:",
        "more_workouts": "📈 +{count} тренировок",
        "fewer_workouts": "📉 {count} тренировок",
        "same_workouts": "📊 Столько же тренировок",
        "more_minutes": "⏱️ +{minutes} мин",
        "fewer_minutes": "⏱️ {minutes} мин",
        "same_minutes": "⏱️ Столько же времени",
        "position": "🏆 Место в рейтинге: {rank}/{total}",
        "not_ranked": "🏆 Место в рейтинге: нет",
        "welcome": (
            "Добро пожаловать в Sport Tracker Bot! 🎉\n\n"
            "Это ваши первые итоги недели. Записывайте тренировки, чтобы видеть "
            "прогресс и соревноваться в рейтинге!\n\n"
            "💪 Готовы начать?"
        ),
    },
    "admin": {
        "access_denied": "❌ Доступ запрещён. Нужны права администратора.",
        "title": "📊 Статистика бота",
        "users": "👥 Пользователи:",
        "total_registered": "   • Всего: {value}",
        "active_this_week": "   • Активны на этой неделе: {value}",
        "active_last_week": "   • Активны на прошлой неделе: {value}",
        "new_users": "   • Новые (7 дней): {value}",
        "workouts": "🏃‍♂️ Тренировки:",
        "total_workouts": "   • Всего тренировок: {value}",
        "avg_per_user": "   • В среднем на пользователя: {value:.1f}",
        "avg_duration": "   • Средняя длительность: {value:.1f} мин",
        "most_popular": "   • Самый популярный тип: {value}",
        "none": "Нет",
        "engagement": "📈 Вовлечённость:",
        "weekly_active_rate": "   • Доля активных за неделю: {value:.1f}%",
        "growth_rate": "   • Рост: {value:.1f}%",
        "error": "❌ Не удалось получить статистику бота. Попробуйте ещё раз.",
    },
    "buttons": {
        "add_workout": "➕ Добавить тренировку",
        "my_stats": "📈 Моя статистика",
        "leaderboard": "🏆 Рейтинг",
        "history": "📋 История",
        "home": "🏠 Главная",
        "view_stats": "📈 Статистика",
        "add_another": "➕ Добавить ещё",
        "try_again": "➕ Попробовать снова",
        "cancel": "❌ Отмена",
        "custom": "Другое время",
        "minutes": "{minutes} мин",
    },
    "language": {
        "select": "Выберите язык:",
        "changed": "✅ Язык изменён!",
        "en": "🇺🇸 English",
        "ru": "🇷🇺 Русский",
    },
    "errors": {
        "generic": "❌ Что-то пошло не так. Попробуйте ещё раз.",
    },
}

LOCALES: dict[Language, dict] = {
    Language.EN: EN,
    Language.RU: RU,
}


def t(language: Language | str | None, key: str, **kwargs) -> str:
    """Look up `key` (e.g. "stats.title") for `language` and format it.

    Unknown languages fall back to English; unknown keys come back unchanged.
    """
    try:
        lang = Language(language) if language is not None else Language.EN
    except ValueError:
        lang = Language.EN

    value = LOCALES.get(lang, EN)
    for part in key.split("."):
        if not isinstance(value, dict) or part not in value:
            return key
        value = value[part]

    if not isinstance(value, str):
        return key
    return value.format(**kwargs) if kwargs else value
