from habitlog.crud.habits import (
    create_habit,
    delete_habit,
    get_owned_habit,
    is_scheduled_on,
    list_habits,
    update_habit,
)
from habitlog.crud.intervals import add_interval, delete_interval, list_intervals
from habitlog.crud.logs import delete_log, get_daily_summary, get_habit_logs, get_log, get_logs_by_date, upsert_log
from habitlog.crud.stats import get_habit_stats, get_user_stats
from habitlog.crud.totals import logs_with_entries, recompute_log_totals
from habitlog.crud.streaks import Streak, compute_streak, walk_streak
from habitlog.crud.user import authenticate, create_user, get_user, get_user_by_email

__all__ = [
    "create_habit",
    "update_habit",
    "delete_habit",
    "get_owned_habit",
    "list_habits",
    "is_scheduled_on",
    "upsert_log",
    "delete_log",
    "get_log",
    "get_logs_by_date",
    "get_habit_logs",
    "get_daily_summary",
    "add_interval",
    "delete_interval",
    "list_intervals",
    "recompute_log_totals",
    "logs_with_entries",
    "Streak",
    "walk_streak",
    "compute_streak",
    "get_user_stats",
    "get_habit_stats",
    "create_user",
    "get_user",
    "get_user_by_email",
    "authenticate",
]
