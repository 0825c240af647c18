from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from habitlog.models import DailyLog, Habit, TimeInterval


def recompute_log_totals(db: Session, log: DailyLog, habit: Habit) -> tuple[int, bool]:
    """Rewrite ``log.duration``/``log.completed`` from its stored time entries."""
    db.flush()
    total = db.scalar(
        select(func.coalesce(func.sum(TimeInterval.duration_minutes), 0)).where(TimeInterval.habit_log_id == log.id)
    )
    total = int(total or 0)
    is_completed = total >= (habit.target_duration or 0)
    log.duration = total
    log.completed = is_completed
    log.updated_at = datetime.utcnow()
    return total, is_completed


def logs_with_entries(db: Session, habit_id: int) -> list[DailyLog]:
    return list(
        db.scalars(
            select(DailyLog)
            .where(DailyLog.habit_id == habit_id, DailyLog.id.in_(select(TimeInterval.habit_log_id)))
            .order_by(DailyLog.log_date)
        )
    )
