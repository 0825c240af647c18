import logging
from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from habitlog.crud.totals import logs_with_entries, recompute_log_totals
from habitlog.dates import weekday_key
from habitlog.errors import InvalidInputError, NotFoundError
from habitlog.models import TRACKING_DURATION, Habit

logger = logging.getLogger(__name__)

_UPDATABLE = (
    "name",
    "description",
    "tracking_type",
    "target_duration",
    "target_days",
    "category",
    "color",
    "icon",
    "active",
)
_REQUIRED = ("name", "tracking_type", "color", "active")


def is_scheduled_on(habit: Habit, day: date) -> bool:
    days = habit.target_days
    if not days:
        return True
    return weekday_key(day) in days


def get_owned_habit(db: Session, user_id: int, habit_id: int) -> Habit:
    habit = db.scalar(select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id))
    if not habit:
        raise NotFoundError("Habit not found")
    return habit


def list_habits(db: Session, user_id: int, active: Optional[bool] = None) -> list[Habit]:
    query = select(Habit).where(Habit.user_id == user_id).order_by(Habit.created_at.asc(), Habit.id.asc())
    if active is not None:
        query = query.where(Habit.active.is_(active))
    return list(db.scalars(query))


def _check_target(habit: Habit) -> None:
    if habit.tracking_type == TRACKING_DURATION and (habit.target_duration is None or habit.target_duration < 1):
        raise InvalidInputError("Target duration must be at least 1 minute")


def create_habit(db: Session, user_id: int, data: dict[str, Any]) -> Habit:
    habit = Habit(user_id=user_id)
    for key in _UPDATABLE:
        if key in data:
            setattr(habit, key, data[key])
    _check_target(habit)
    db.add(habit)
    db.commit()
    db.refresh(habit)
    logger.info("habit created id=%s user=%s type=%s", habit.id, user_id, habit.tracking_type)
    return habit


def update_habit(db: Session, user_id: int, habit_id: int, changes: dict[str, Any]) -> Habit:
    """Apply a partial update.

    Logs backed by time entries keep ``duration >= target`` in sync: a new
    target recomputes them in the same commit, and the tracking type cannot
    change while any exist.
    """
    habit = get_owned_habit(db, user_id, habit_id)
    for key in _REQUIRED:
        if key in changes and changes[key] is None:
            raise InvalidInputError(f"{key} cannot be empty")

    timed_logs = logs_with_entries(db, habit.id)
    if timed_logs and changes.get("tracking_type", habit.tracking_type) != habit.tracking_type:
        raise InvalidInputError("Tracking type cannot change while time entries exist")

    old_target = habit.target_duration
    for key in _UPDATABLE:
        if key in changes:
            setattr(habit, key, changes[key])
    try:
        _check_target(habit)
    except InvalidInputError:
        db.rollback()
        raise
    habit.updated_at = datetime.utcnow()
    db.add(habit)

    if timed_logs and habit.target_duration != old_target:
        for log in timed_logs:
            recompute_log_totals(db, log, habit)
        logger.info("habit target changed id=%s logs recomputed=%s", habit.id, len(timed_logs))

    db.commit()
    db.refresh(habit)
    return habit


def delete_habit(db: Session, user_id: int, habit_id: int) -> None:
    habit = get_owned_habit(db, user_id, habit_id)
    db.delete(habit)
    db.commit()
    logger.info("habit deleted id=%s user=%s", habit_id, user_id)
