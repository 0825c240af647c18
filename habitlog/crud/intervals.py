"""Time-entry sub-ledger for duration habits.

A log's ``duration``/``completed`` pair is a cache over its time entries:
every add or delete recomputes both from the stored sum inside the same
transaction, and the session is committed once at the end.
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from habitlog.crud.habits import get_owned_habit
from habitlog.crud.logs import get_log
from habitlog.crud.totals import recompute_log_totals
from habitlog.dates import DateLike, format_clock, minutes_between, normalize_date, parse_clock
from habitlog.errors import ConflictError, InvalidInputError, NotFoundError
from habitlog.models import DailyLog, Habit, TimeInterval

logger = logging.getLogger(__name__)


def _get_or_create_log(db: Session, user_id: int, habit: Habit, day) -> DailyLog:
    log = get_log(db, habit.id, day)
    if log is not None:
        return log

    log = DailyLog(user_id=user_id, habit_id=habit.id, log_date=day, completed=False, duration=0)
    db.add(log)
    try:
        db.flush()
    except IntegrityError:
        # Nothing else has been written yet, so rolling back loses no work.
        db.rollback()
        logger.warning("duplicate log insert habit=%s date=%s, re-reading", habit.id, day)
        log = get_log(db, habit.id, day)
        if log is None:
            raise ConflictError("Log for this habit and date is being written concurrently")
    return log


def add_interval(
    db: Session, user_id: int, habit_id: int, log_date: DateLike, start_time: str, end_time: str
) -> dict[str, Any]:
    habit = get_owned_habit(db, user_id, habit_id)
    if not habit.is_duration:
        raise InvalidInputError("Time entries can only be added to duration habits")

    day = normalize_date(log_date)
    start = parse_clock(start_time)
    end = parse_clock(end_time)
    duration_minutes = minutes_between(start, end)
    if duration_minutes <= 0:
        raise InvalidInputError("End time must be after start time")

    try:
        log = _get_or_create_log(db, user_id, habit, day)
        habit = db.get(Habit, habit_id)
        entry = TimeInterval(
            habit_log_id=log.id,
            start_time=format_clock(start),
            end_time=format_clock(end),
            duration_minutes=duration_minutes,
        )
        db.add(entry)
        total, is_completed = recompute_log_totals(db, log, habit)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    db.refresh(entry)
    logger.info(
        "time entry added habit=%s date=%s minutes=%s total=%s completed=%s",
        habit_id,
        day,
        duration_minutes,
        total,
        is_completed,
    )
    return {"entry": entry, "totalDuration": total, "isCompleted": is_completed}


def delete_interval(db: Session, user_id: int, entry_id: int) -> dict[str, Any]:
    row = db.execute(
        select(TimeInterval, DailyLog)
        .join(DailyLog, TimeInterval.habit_log_id == DailyLog.id)
        .where(TimeInterval.id == entry_id, DailyLog.user_id == user_id)
    ).first()
    if not row:
        raise NotFoundError("Time entry not found")
    entry, log = row
    habit = db.get(Habit, log.habit_id)

    try:
        db.delete(entry)
        total, is_completed = recompute_log_totals(db, log, habit)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info("time entry deleted id=%s log=%s total=%s completed=%s", entry_id, log.id, total, is_completed)
    return {"message": "Time entry deleted successfully", "totalDuration": total, "isCompleted": is_completed}


def list_intervals(db: Session, user_id: int, log_id: int) -> list[TimeInterval]:
    log = db.scalar(select(DailyLog).where(DailyLog.id == log_id, DailyLog.user_id == user_id))
    if not log:
        raise NotFoundError("Log not found")
    return list(
        db.scalars(
            select(TimeInterval)
            .where(TimeInterval.habit_log_id == log.id)
            .order_by(TimeInterval.start_time.asc(), TimeInterval.id.asc())
        )
    )
