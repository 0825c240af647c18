from datetime import date, timedelta
from typing import Iterable, NamedTuple, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from habitlog.models import DailyLog


class Streak(NamedTuple):
    current: int
    longest: int


def walk_streak(entries: Iterable[tuple[date, bool]], today: date) -> Streak:
    """Derive (current, longest) from ``(date, completed)`` pairs, newest first.

    Single backward walk from ``today``. ``current`` is frozen the first time
    the walk hits an incomplete day or a gap; a frozen run of zero counts as
    still unset, so a today (or yesterday) without a log does not end the
    current streak by itself. A gap starts a new run without touching
    ``longest``, so a lone completion behind a gap gives ``(1, 0)``.
    """
    current = 0
    longest = 0
    temp = 0
    expected = today
    seen = False

    for log_date, completed in entries:
        seen = True
        if log_date == expected:
            if completed:
                temp += 1
                longest = max(longest, temp)
            else:
                if not current:
                    current = temp
                temp = 0
            expected = expected - timedelta(days=1)
        elif log_date < expected:
            if not current:
                current = temp
            temp = 1 if completed else 0
            expected = log_date - timedelta(days=1)
        # log dated after ``expected`` (future entries): skipped

    if not seen:
        return Streak(0, 0)
    if not current:
        current = temp
    return Streak(current, longest)


def compute_streak(db: Session, habit_id: int, today: Optional[date] = None) -> Streak:
    rows = db.execute(
        select(DailyLog.log_date, DailyLog.completed)
        .where(DailyLog.habit_id == habit_id)
        .order_by(DailyLog.log_date.desc())
    ).all()
    return walk_streak(((d, bool(c)) for d, c in rows), today or date.today())
