from habitlog.models.base import Base
from habitlog.models.daily_log import DailyLog
from habitlog.models.habit import TRACKING_COMPLETION, TRACKING_DURATION, TRACKING_TYPES, Habit
from habitlog.models.time_interval import TimeInterval
from habitlog.models.user import User

__all__ = [
    "Base",
    "User",
    "Habit",
    "DailyLog",
    "TimeInterval",
    "TRACKING_COMPLETION",
    "TRACKING_DURATION",
    "TRACKING_TYPES",
]
