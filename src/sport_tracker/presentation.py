"""Turns service results into localized Telegram text and inline keyboards."""

from datetime import datetime
from typing import Sequence

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from .core import AdminReport, LeaderboardReport, PersonalWeekReport, WeeklyDigest
from .database.models import Language, Workout, WorkoutType
from .locales import t
from .stats import RankedEntry, Trend, WeekWindow

WORKOUT_EMOJI: dict[WorkoutType, str] = {
    WorkoutType.GYM: "💪",
    WorkoutType.TENNIS: "🎾",
    WorkoutType.RUNNING: "🏃‍♂️",
    WorkoutType.FOOTBALL: "⚽",
    WorkoutType.BASKETBALL: "🏀",
    WorkoutType.YOGA: "🧘‍♀️",
    WorkoutType.SWIMMING: "🏊‍♂️",
    WorkoutType.CYCLING: "🚴‍♂️",
    WorkoutType.OTHER: "🏃‍♂️",
}

MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}
DURATION_PRESETS = (30, 45, 60, 90)


def _signed(value: int) -> str:
    return f"+{value}" if value > 0 else str(value)


def _type_label(lang: Language, wtype: WorkoutType) -> str:
    return t(lang, f"types.{wtype.value}")


def format_date(lang: Language, value: datetime) -> str:
    return t(lang, "date_format", d=value)


def format_week_range(lang: Language, window: WeekWindow) -> str:
    return f"📅 {format_date(lang, window.start)} - {format_date(lang, window.end)}"


# ----------------------------------------------------------------------
# Keyboards
# ----------------------------------------------------------------------


def _button(lang: Language, key: str, data: str) -> InlineKeyboardButton:
    return InlineKeyboardButton(t(lang, f"buttons.{key}"), callback_data=data)


def main_menu_keyboard(lang: Language) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [_button(lang, "add_workout", "add_workout")],
        [_button(lang, "my_stats", "my_stats")],
        [_button(lang, "leaderboard", "leaderboard")],
    ])


def add_workout_keyboard(lang: Language) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([[_button(lang, "add_workout", "add_workout")]])


def retry_keyboard(lang: Language) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([[_button(lang, "try_again", "add_workout")]])


def workout_type_keyboard(lang: Language) -> InlineKeyboardMarkup:
    buttons = [
        InlineKeyboardButton(
            f"{WORKOUT_EMOJI[wtype]} {_type_label(lang, wtype)}",
            callback_data=f"workout_type_{wtype.value}",
        )
        for wtype in WorkoutType
    ]
    return InlineKeyboardMarkup([buttons[i:i + 3] for i in range(0, len(buttons), 3)])


def duration_keyboard(lang: Language) -> InlineKeyboardMarkup:
    presets = [
        InlineKeyboardButton(
            t(lang, "buttons.minutes", minutes=minutes), callback_data=f"duration_{minutes}"
        )
        for minutes in DURATION_PRESETS
    ]
    return InlineKeyboardMarkup([
        presets[0:2],
        presets[2:4],
        [_button(lang, "custom", "duration_custom")],
    ])


def cancel_keyboard(lang: Language) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([[_button(lang, "cancel", "add_workout")]])


def after_log_keyboard(lang: Language) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [_button(lang, "view_stats", "my_stats")],
        [_button(lang, "add_another", "add_workout")],
        [_button(lang, "home", "home")],
    ])


def stats_keyboard(lang: Language) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [_button(lang, "add_workout", "add_workout")],
        [_button(lang, "history", "view_history")],
        [_button(lang, "leaderboard", "leaderboard")],
    ])


def leaderboard_keyboard(lang: Language) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [_button(lang, "add_workout", "add_workout")],
        [_button(lang, "my_stats", "my_stats")],
    ])


def language_keyboard(lang: Language) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([[
        InlineKeyboardButton(t(lang, f"language.{code.value}"), callback_data=f"language_{code.value}")
        for code in Language
    ]])


# ----------------------------------------------------------------------
# Messages
# ----------------------------------------------------------------------


def render_workout_selected(lang: Language, wtype: WorkoutType) -> str:
    return t(
        lang, "workout.type_selected", emoji=WORKOUT_EMOJI[wtype], name=_type_label(lang, wtype)
    )


def render_workout_logged(lang: Language, workout: Workout) -> str:
    return t(
        lang,
        "workout.logged",
        emoji=WORKOUT_EMOJI[workout.type],
        name=_type_label(lang, workout.type),
        duration=workout.duration,
        date=format_date(lang, workout.created_at),
    )


def render_weekly_stats(lang: Language, report: PersonalWeekReport) -> str:
    current, previous, cmp = report.current, report.previous, report.comparison
    header = [t(lang, "stats.title"), format_week_range(lang, report.window), ""]

    if current.count == 0:
        lines = header + [
            t(lang, "stats.no_workouts"),
            t(
                lang,
                "stats.no_workouts_delta",
                count_delta=_signed(cmp.count_delta),
                duration_delta=_signed(cmp.duration_delta),
            ),
            "",
            t(lang, f"motivation.{cmp.trend.value}"),
        ]
        return "\n".join(lines)

    lines = header + [
        t(lang, "stats.this_week"),
        t(lang, "stats.workouts", count=current.count),
        t(lang, "stats.duration", minutes=current.total_duration),
        t(lang, "stats.average", minutes=current.average_duration),
    ]
    if current.most_frequent_type is not None:
        lines.append(t(lang, "stats.favorite", name=_type_label(lang, current.most_frequent_type)))
    lines += [
        "",
        t(lang, "stats.vs_last_week"),
        t(
            lang,
            "stats.count_delta",
            delta=_signed(cmp.count_delta),
            previous=previous.count,
            current=current.count,
        ),
        t(
            lang,
            "stats.duration_delta",
            delta=_signed(cmp.duration_delta),
            previous=previous.total_duration,
            current=current.total_duration,
        ),
        "",
        t(lang, f"motivation.{cmp.trend.value}"),
    ]
    return "\n".join(lines)


def render_history(lang: Language, workouts: Sequence[Workout]) -> str:
    if not workouts:
        return t(lang, "history.empty")
    lines = [t(lang, "history.title"), ""]
    for index, workout in enumerate(workouts, start=1):
        lines.append(
            t(
                lang,
                "history.item",
                index=index,
                emoji=WORKOUT_EMOJI[workout.type],
                name=_type_label(lang, workout.type),
                duration=workout.duration,
                date=format_date(lang, workout.created_at),
            )
        )
    return "\n".join(lines)


def _sessions(lang: Language, count: int) -> str:
    key = "leaderboard.session_one" if count == 1 else "leaderboard.session_many"
    return t(lang, key, count=count)


def _leaderboard_line(lang: Language, entry: RankedEntry, focus_user_id: int | None) -> str:
    agg = entry.aggregate
    if agg.user_id == focus_user_id:
        name = t(lang, "leaderboard.you")
    else:
        name = agg.display_name or t(lang, "leaderboard.anonymous")
    return t(
        lang,
        "leaderboard.item",
        medal=MEDALS.get(entry.rank, f"{entry.rank}."),
        name=name,
        minutes=agg.total_duration,
        sessions=_sessions(lang, agg.workout_count),
    )


def render_leaderboard(lang: Language, report: LeaderboardReport) -> str:
    lines = [t(lang, "leaderboard.title"), format_week_range(lang, report.window), ""]
    result = report.result
    if not result.top:
        lines.append(t(lang, "leaderboard.empty"))
        return "\n".join(lines)

    for entry in result.top:
        lines.append(_leaderboard_line(lang, entry, report.focus_user_id))
    if result.focus_entry is not None:
        lines += ["", "...", _leaderboard_line(lang, result.focus_entry, report.focus_user_id)]
    return "\n".join(lines)


def _digest_motivation(lang: Language, digest: WeeklyDigest) -> str:
    trend = digest.comparison.trend
    if trend in (Trend.IMPROVED, Trend.RESUMED, Trend.LAPSED, Trend.FIRST_TIME):
        return t(lang, f"motivation.{trend.value}")
    if digest.rank is not None and digest.rank <= 3:
        return t(lang, "motivation.top3")
    if digest.rank is not None and digest.rank <= 5:
        return t(lang, "motivation.top5")
    return t(lang, "motivation.keep_going")


def _digest_progress(lang: Language, digest: WeeklyDigest) -> list[str]:
    cmp, current = digest.comparison, digest.current
    if cmp.trend == Trend.LAPSED:
        return [t(lang, "motivation.lapsed")]

    lines: list[str] = []
    if cmp.count_delta > 0:
        lines.append(t(lang, "digest.more_workouts", count=cmp.count_delta))
    elif cmp.count_delta < 0:
        lines.append(t(lang, "digest.fewer_workouts", count=cmp.count_delta))
    elif current.count > 0:
        lines.append(t(lang, "digest.same_workouts"))

    if cmp.duration_delta > 0:
        lines.append(t(lang, "digest.more_minutes", minutes=cmp.duration_delta))
    elif cmp.duration_delta < 0:
        lines.append(t(lang, "digest.fewer_minutes", minutes=cmp.duration_delta))
    elif current.total_duration > 0:
        lines.append(t(lang, "digest.same_minutes"))
    return lines


def render_weekly_digest(lang: Language, digest: WeeklyDigest) -> str:
    header = [t(lang, "digest.title"), format_week_range(lang, digest.window), ""]
    if digest.comparison.trend == Trend.FIRST_TIME:
        return "\n".join(header + [t(lang, "digest.welcome")])

    if digest.rank is not None:
        position = t(lang, "digest.position", rank=digest.rank, total=digest.total_ranked)
    else:
        position = t(lang, "digest.not_ranked")

    lines = header + [
        t(lang, "digest.this_week"),
        t(lang, "digest.workouts", count=digest.current.count),
        t(lang, "digest.total_time", minutes=digest.current.total_duration),
        "",
        t(lang, "digest.progress"),
        *_digest_progress(lang, digest),
        "",
        position,
        "",
        _digest_motivation(lang, digest),
    ]
    return "\n".join(lines)


def render_admin_report(lang: Language, report: AdminReport) -> str:
    if report.most_popular_type is not None:
        most_popular = _type_label(lang, report.most_popular_type)
    else:
        most_popular = t(lang, "admin.none")

    lines = [
        t(lang, "admin.title"),
        "",
        t(lang, "admin.users"),
        t(lang, "admin.total_registered", value=report.total_users),
        t(lang, "admin.active_this_week", value=report.active_this_week),
        t(lang, "admin.active_last_week", value=report.active_last_week),
        t(lang, "admin.new_users", value=report.new_users_7d),
        "",
        t(lang, "admin.workouts"),
        t(lang, "admin.total_workouts", value=report.total_workouts),
        t(lang, "admin.avg_per_user", value=report.avg_workouts_per_user),
        t(lang, "admin.avg_duration", value=report.avg_duration),
        t(lang, "admin.most_popular", value=most_popular),
        "",
        t(lang, "admin.engagement"),
        t(lang, "admin.weekly_active_rate", value=report.rates.weekly_active_rate * 100),
        t(lang, "admin.growth_rate", value=report.rates.growth_rate * 100),
    ]
    return "\n".join(lines)
