from typing import Any, Optional

from habitlog.models import DailyLog, Habit, TimeInterval
from habitlog.schemas import DailyLogOut, HabitOut, TimeEntryOut


def habit_dict(habit: Habit) -> dict[str, Any]:
    return HabitOut.model_validate(habit).model_dump()


def log_dict(log: Optional[DailyLog]) -> Optional[dict[str, Any]]:
    if log is None:
        return None
    return DailyLogOut.model_validate(log).model_dump()


def entry_dict(entry: TimeInterval) -> dict[str, Any]:
    return TimeEntryOut.model_validate(entry).model_dump()
