from datetime import timedelta

import pytest

from habitlog.crud import add_interval, get_habit_stats, get_user_stats
from habitlog.errors import NotFoundError
from tests.conftest import TODAY


def _ago(n):
    return TODAY - timedelta(days=n)


class TestUserStats:
    def test_empty_user(self, db, user):
        stats = get_user_stats(db, user.id, today=TODAY)
        assert stats["totalHabits"] == 0
        assert stats["totalDays"] == 0
        assert stats["todayCompleted"] == 0
        assert stats["todayTotal"] == 0
        assert stats["streaks"] == []
        assert stats["completionRate"] == 0

    def test_streaks_sorted_by_current(self, db, user, make_habit, log_day):
        short = make_habit(name="Stretch", icon="🧘")
        long = make_habit(name="Walk", icon="🚶")
        for n in range(3):
            log_day(short, _ago(n))
        for n in range(7):
            log_day(long, _ago(n))

        stats = get_user_stats(db, user.id, today=TODAY)

        assert [s["currentStreak"] for s in stats["streaks"]] == [7, 3]
        assert stats["streaks"][0] == {
            "habitId": long.id,
            "habitName": "Walk",
            "habitIcon": "🚶",
            "currentStreak": 7,
            "longestStreak": 7,
        }
        assert stats["totalHabits"] == 2
        assert stats["totalDays"] == 7
        assert stats["totalLogs"] == 10
        assert stats["todayCompleted"] == 2
        assert stats["todayTotal"] == 2

    def test_inactive_habits_are_ignored(self, db, user, make_habit, log_day):
        active = make_habit(name="Active")
        paused = make_habit(name="Paused", active=False)
        log_day(active, TODAY, completed=False)
        log_day(paused, TODAY)

        stats = get_user_stats(db, user.id, today=TODAY)

        assert stats["totalHabits"] == 1
        assert stats["todayTotal"] == 1
        assert stats["todayCompleted"] == 0
        assert [s["habitName"] for s in stats["streaks"]] == ["Active"]

    def test_today_counts_ignore_weekday_schedule(self, db, user, make_habit, log_day):
        weekend_only = make_habit(name="Long run", target_days=["sat", "sun"])
        log_day(weekend_only, TODAY)

        stats = get_user_stats(db, user.id, today=TODAY)
        assert (stats["todayCompleted"], stats["todayTotal"]) == (1, 1)

    def test_minutes_and_window_rate(self, db, user, make_habit, log_day):
        piano = make_habit(name="Piano", tracking_type="duration", target_duration=60)
        add_interval(db, user.id, piano.id, TODAY, "08:00", "09:00")
        add_interval(db, user.id, piano.id, _ago(1), "08:00", "08:30")
        habit = make_habit(name="Floss")
        log_day(habit, _ago(2))
        log_day(habit, _ago(45))

        stats = get_user_stats(db, user.id, today=TODAY)

        assert stats["totalMinutes"] == 90
        assert stats["totalHours"] == 2
        # window: today, -1 (incomplete), -2; the -45 log is outside
        assert stats["completionRate"] == 67


class TestHabitStats:
    def test_summary(self, db, user, make_habit, log_day):
        habit = make_habit(name="Journal")
        log_day(habit, TODAY)
        log_day(habit, _ago(1))
        log_day(habit, _ago(2), completed=False)
        log_day(habit, _ago(3))
        log_day(habit, _ago(40))

        stats = get_habit_stats(db, user.id, habit.id, today=TODAY)

        assert stats["habitName"] == "Journal"
        assert stats["totalCompletions"] == 4
        assert stats["currentStreak"] == 2
        assert stats["longestStreak"] == 2
        assert stats["completionRate"] == 75
        assert [r["date"] for r in stats["recentLogs"]] == [
            "2026-10-19",
            "2026-10-18",
            "2026-10-17",
            "2026-10-16",
        ]
        assert stats["recentLogs"][2] == {"date": "2026-10-17", "completed": False, "duration": 0}

    def test_recent_logs_window(self, db, user, make_habit, log_day):
        habit = make_habit()
        for n in (0, 7, 8):
            log_day(habit, _ago(n))

        stats = get_habit_stats(db, user.id, habit.id, today=TODAY)
        assert [r["date"] for r in stats["recentLogs"]] == ["2026-10-19", "2026-10-12"]

    def test_no_logs(self, db, user, make_habit):
        stats = get_habit_stats(db, user.id, make_habit().id, today=TODAY)
        assert stats["completionRate"] == 0
        assert (stats["currentStreak"], stats["longestStreak"]) == (0, 0)
        assert stats["recentLogs"] == []

    def test_foreign_habit(self, db, other_user, make_habit):
        with pytest.raises(NotFoundError):
            get_habit_stats(db, other_user.id, make_habit().id, today=TODAY)
