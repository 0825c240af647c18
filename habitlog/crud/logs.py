"""Daily log reconciliation.

One row per (habit, date) is kept in ``habit_logs``; the unique constraint
``uq_daily_log_habit_date`` backs that up when two writers race. Writes here
apply partial changes on top of the existing row, so fields the caller did
not send are never reset.
"""

import logging
from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from habitlog.crud.habits import get_owned_habit, is_scheduled_on, list_habits
from habitlog.dates import DateLike, normalize_date
from habitlog.errors import ConflictError, InvalidInputError, NotFoundError
from habitlog.models import DailyLog, Habit, TimeInterval

logger = logging.getLogger(__name__)

LOG_FIELDS = ("completed", "duration", "notes")


def get_log(db: Session, habit_id: int, log_date: date) -> Optional[DailyLog]:
    return db.scalar(select(DailyLog).where(DailyLog.habit_id == habit_id, DailyLog.log_date == log_date))


def _interval_count(db: Session, log_id: int) -> int:
    return db.scalar(select(func.count()).select_from(TimeInterval).where(TimeInterval.habit_log_id == log_id)) or 0


def _guard_derived_fields(db: Session, log: Optional[DailyLog], changes: dict[str, Any]) -> None:
    # Any log with time entries has its totals owned by those entries.
    if log is None:
        return
    if ("duration" in changes or "completed" in changes) and _interval_count(db, log.id):
        raise InvalidInputError("Duration and completion are derived from time entries for this log")


def _apply_changes(habit: Habit, log: DailyLog, changes: dict[str, Any]) -> None:
    for key in LOG_FIELDS:
        if key in changes:
            value = changes[key]
            if key == "completed":
                value = bool(value)
            elif key == "duration":
                value = int(value or 0)
            setattr(log, key, value)
    if habit.is_duration and "duration" in changes and "completed" not in changes:
        log.completed = log.duration >= (habit.target_duration or 0)
    log.updated_at = datetime.utcnow()


def upsert_log(
    db: Session, user_id: int, habit_id: int, log_date: DateLike, changes: dict[str, Any]
) -> tuple[DailyLog, bool]:
    """Create or partially update the log for (habit, date).

    Returns ``(log, created)``. A concurrent insert for the same key is
    retried once as an update; if the row still cannot be read back a
    ``ConflictError`` is raised.
    """
    habit = get_owned_habit(db, user_id, habit_id)
    day = normalize_date(log_date)
    changes = {k: v for k, v in changes.items() if k in LOG_FIELDS}

    log = get_log(db, habit.id, day)
    _guard_derived_fields(db, log, changes)

    if log is not None:
        _apply_changes(habit, log, changes)
        db.commit()
        db.refresh(log)
        logger.info("log updated habit=%s date=%s fields=%s", habit.id, day, sorted(changes))
        return log, False

    log = DailyLog(user_id=user_id, habit_id=habit.id, log_date=day, completed=False, duration=0, notes=None)
    _apply_changes(habit, log, changes)
    db.add(log)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("duplicate log insert habit=%s date=%s, retrying as update", habit_id, day)
        habit = get_owned_habit(db, user_id, habit_id)
        log = get_log(db, habit.id, day)
        if log is None:
            raise ConflictError("Log for this habit and date is being written concurrently")
        _guard_derived_fields(db, log, changes)
        _apply_changes(habit, log, changes)
        db.commit()
        db.refresh(log)
        return log, False

    db.refresh(log)
    logger.info("log created habit=%s date=%s", habit.id, day)
    return log, True


def delete_log(db: Session, user_id: int, habit_id: int, log_date: DateLike) -> None:
    day = normalize_date(log_date)
    log = db.scalar(
        select(DailyLog).where(
            DailyLog.user_id == user_id, DailyLog.habit_id == habit_id, DailyLog.log_date == day
        )
    )
    if not log:
        raise NotFoundError("Log not found")
    db.delete(log)
    db.commit()
    logger.info("log deleted habit=%s date=%s", habit_id, day)


def get_logs_by_date(db: Session, user_id: int, log_date: DateLike) -> list[DailyLog]:
    day = normalize_date(log_date)
    return list(
        db.scalars(
            select(DailyLog).where(DailyLog.user_id == user_id, DailyLog.log_date == day).order_by(DailyLog.id)
        )
    )


def get_habit_logs(
    db: Session,
    user_id: int,
    habit_id: int,
    start_date: Optional[DateLike] = None,
    limit: int = 30,
) -> list[DailyLog]:
    habit = get_owned_habit(db, user_id, habit_id)
    query = select(DailyLog).where(DailyLog.habit_id == habit.id)
    if start_date is not None:
        query = query.where(DailyLog.log_date >= normalize_date(start_date))
    limit = max(1, min(limit, 366))
    return list(db.scalars(query.order_by(DailyLog.log_date.desc()).limit(limit)))


def get_daily_summary(db: Session, user_id: int, log_date: DateLike) -> dict[str, Any]:
    day = normalize_date(log_date)
    habits = list_habits(db, user_id, active=True)
    logs = get_logs_by_date(db, user_id, day)
    log_map = {log.habit_id: log for log in logs}

    return {
        "date": day,
        "habits": [
            {"habit": habit, "scheduled": is_scheduled_on(habit, day), "log": log_map.get(habit.id)}
            for habit in habits
        ],
    }
