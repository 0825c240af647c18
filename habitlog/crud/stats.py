from datetime import date, timedelta
from typing import Any, Optional

from sqlalchemy import Integer, and_, func, select
from sqlalchemy.orm import Session

from habitlog.config import settings
from habitlog.crud.habits import get_owned_habit, list_habits
from habitlog.crud.streaks import compute_streak
from habitlog.models import DailyLog


def _percent(done: int, total: int) -> int:
    return round(done * 100 / total) if total else 0


def _completion_counts(db: Session, *conditions) -> tuple[int, int]:
    total, done = db.execute(
        select(func.count(DailyLog.id), func.coalesce(func.sum(DailyLog.completed.cast(Integer)), 0)).where(
            and_(*conditions)
        )
    ).one()
    return int(total or 0), int(done or 0)


def get_user_stats(db: Session, user_id: int, today: Optional[date] = None) -> dict[str, Any]:
    today = today or date.today()
    habits = list_habits(db, user_id, active=True)
    active_ids = [h.id for h in habits]

    total_days = db.scalar(
        select(func.count(func.distinct(DailyLog.log_date))).where(DailyLog.user_id == user_id)
    ) or 0
    total_logs = db.scalar(select(func.count(DailyLog.id)).where(DailyLog.user_id == user_id)) or 0
    total_minutes = db.scalar(
        select(func.coalesce(func.sum(DailyLog.duration), 0)).where(DailyLog.user_id == user_id)
    ) or 0

    today_completed = 0
    if active_ids:
        today_completed = db.scalar(
            select(func.count(DailyLog.id)).where(
                DailyLog.habit_id.in_(active_ids),
                DailyLog.log_date == today,
                DailyLog.completed.is_(True),
            )
        ) or 0

    window_start = today - timedelta(days=settings.STATS_WINDOW_DAYS)
    window_total, window_done = _completion_counts(
        db, DailyLog.user_id == user_id, DailyLog.log_date >= window_start
    )

    streaks = []
    for habit in habits:
        streak = compute_streak(db, habit.id, today)
        streaks.append(
            {
                "habitId": habit.id,
                "habitName": habit.name,
                "habitIcon": habit.icon,
                "currentStreak": streak.current,
                "longestStreak": streak.longest,
            }
        )
    streaks.sort(key=lambda item: item["currentStreak"], reverse=True)

    return {
        "totalHabits": len(habits),
        "totalDays": int(total_days),
        "todayCompleted": int(today_completed),
        "todayTotal": len(habits),
        "streaks": streaks,
        "totalLogs": int(total_logs),
        "completionRate": _percent(window_done, window_total),
        "totalMinutes": int(total_minutes),
        "totalHours": round(int(total_minutes) / 60),
    }


def get_habit_stats(db: Session, user_id: int, habit_id: int, today: Optional[date] = None) -> dict[str, Any]:
    today = today or date.today()
    habit = get_owned_habit(db, user_id, habit_id)

    total_completions = db.scalar(
        select(func.count(DailyLog.id)).where(DailyLog.habit_id == habit.id, DailyLog.completed.is_(True))
    ) or 0
    streak = compute_streak(db, habit.id, today)

    window_start = today - timedelta(days=settings.STATS_WINDOW_DAYS)
    window_total, window_done = _completion_counts(
        db, DailyLog.habit_id == habit.id, DailyLog.log_date >= window_start
    )

    recent_start = today - timedelta(days=settings.RECENT_LOG_DAYS)
    recent = db.execute(
        select(DailyLog.log_date, DailyLog.completed, DailyLog.duration)
        .where(DailyLog.habit_id == habit.id, DailyLog.log_date >= recent_start)
        .order_by(DailyLog.log_date.desc())
    ).all()

    return {
        "habitName": habit.name,
        "totalCompletions": int(total_completions),
        "currentStreak": streak.current,
        "longestStreak": streak.longest,
        "completionRate": _percent(window_done, window_total),
        "recentLogs": [
            {"date": log_date.isoformat(), "completed": bool(completed), "duration": duration}
            for log_date, completed, duration in recent
        ],
    }
