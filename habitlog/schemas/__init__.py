from habitlog.schemas.habit import HabitCreateIn, HabitOut, HabitUpdateIn
from habitlog.schemas.log import DailyLogOut, LogUpsertIn
from habitlog.schemas.time_entry import TimeEntryIn, TimeEntryOut
from habitlog.schemas.user import LoginIn, RegisterIn, UserOut

__all__ = [
    "HabitCreateIn",
    "HabitUpdateIn",
    "HabitOut",
    "LogUpsertIn",
    "DailyLogOut",
    "TimeEntryIn",
    "TimeEntryOut",
    "RegisterIn",
    "LoginIn",
    "UserOut",
]
