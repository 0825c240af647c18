from datetime import date

import pytest
from sqlalchemy import func, select

import habitlog.crud.logs as logs_module
from habitlog.crud import (
    add_interval,
    delete_log,
    get_daily_summary,
    get_habit_logs,
    get_logs_by_date,
    upsert_log,
)
from habitlog.errors import ConflictError, InvalidInputError, NotFoundError
from habitlog.models import DailyLog, TimeInterval
from tests.conftest import TODAY


def _log_count(db, habit_id):
    return db.scalar(select(func.count()).select_from(DailyLog).where(DailyLog.habit_id == habit_id))


class TestUpsertLog:
    def test_insert_uses_defaults(self, db, user, make_habit):
        habit = make_habit()
        log, created = upsert_log(db, user.id, habit.id, "2026-10-19", {})
        assert created is True
        assert log.log_date == date(2026, 10, 19)
        assert log.completed is False
        assert log.duration == 0
        assert log.notes is None

    def test_partial_update_leaves_other_fields(self, db, user, make_habit):
        habit = make_habit()
        upsert_log(db, user.id, habit.id, TODAY, {"completed": True, "duration": 15, "notes": "morning"})
        log, created = upsert_log(db, user.id, habit.id, TODAY, {"notes": "evening"})

        assert created is False
        assert log.completed is True
        assert log.duration == 15
        assert log.notes == "evening"

    def test_explicit_null_notes_clears(self, db, user, make_habit):
        habit = make_habit()
        upsert_log(db, user.id, habit.id, TODAY, {"notes": "x"})
        log, _ = upsert_log(db, user.id, habit.id, TODAY, {"notes": None})
        assert log.notes is None

    def test_idempotent(self, db, user, make_habit):
        habit = make_habit()
        first, _ = upsert_log(db, user.id, habit.id, TODAY, {"completed": True})
        snapshot = (first.id, first.completed, first.duration, first.notes)
        second, created = upsert_log(db, user.id, habit.id, TODAY, {"completed": True})

        assert created is False
        assert (second.id, second.completed, second.duration, second.notes) == snapshot
        assert _log_count(db, habit.id) == 1

    def test_one_row_per_day_across_date_spellings(self, db, user, make_habit):
        habit = make_habit()
        upsert_log(db, user.id, habit.id, "2026-10-19", {"completed": True})
        upsert_log(db, user.id, habit.id, "2026-10-19T22:10:00", {"notes": "late"})
        upsert_log(db, user.id, habit.id, date(2026, 10, 19), {"duration": 5})
        upsert_log(db, user.id, habit.id, "2026-10-18", {})

        assert _log_count(db, habit.id) == 2

    def test_foreign_habit_not_found(self, db, other_user, make_habit):
        habit = make_habit()
        with pytest.raises(NotFoundError):
            upsert_log(db, other_user.id, habit.id, TODAY, {"completed": True})
        assert _log_count(db, habit.id) == 0

    def test_duration_habit_derives_completed_from_direct_duration(self, db, user, make_habit):
        habit = make_habit(tracking_type="duration", target_duration=20)
        log, _ = upsert_log(db, user.id, habit.id, TODAY, {"duration": 25})
        assert log.completed is True
        log, _ = upsert_log(db, user.id, habit.id, TODAY, {"duration": 10})
        assert log.completed is False

    def test_duration_cache_cannot_be_set_once_entries_exist(self, db, user, make_habit):
        habit = make_habit(tracking_type="duration", target_duration=30)
        add_interval(db, user.id, habit.id, TODAY, "08:00", "08:20")

        with pytest.raises(InvalidInputError):
            upsert_log(db, user.id, habit.id, TODAY, {"duration": 90})
        with pytest.raises(InvalidInputError):
            upsert_log(db, user.id, habit.id, TODAY, {"completed": True})

        log, _ = upsert_log(db, user.id, habit.id, TODAY, {"notes": "good session"})
        assert log.duration == 20
        assert log.completed is False
        assert log.notes == "good session"


class TestUpsertRace:
    def test_duplicate_insert_is_retried_as_update(self, db, user, make_habit, monkeypatch):
        habit = make_habit()
        upsert_log(db, user.id, habit.id, TODAY, {"notes": "first writer"})

        real_get_log = logs_module.get_log
        calls = {"n": 0}

        def stale_first_read(session, habit_id, log_date):
            calls["n"] += 1
            if calls["n"] == 1:
                return None
            return real_get_log(session, habit_id, log_date)

        monkeypatch.setattr(logs_module, "get_log", stale_first_read)
        log, created = upsert_log(db, user.id, habit.id, TODAY, {"completed": True})

        assert created is False
        assert log.completed is True
        assert log.notes == "first writer"
        assert _log_count(db, habit.id) == 1

    def test_unresolvable_duplicate_raises_conflict(self, db, user, make_habit, monkeypatch):
        habit = make_habit()
        upsert_log(db, user.id, habit.id, TODAY, {})
        monkeypatch.setattr(logs_module, "get_log", lambda session, habit_id, log_date: None)

        with pytest.raises(ConflictError):
            upsert_log(db, user.id, habit.id, TODAY, {"completed": True})


class TestDeleteLog:
    def test_delete(self, db, user, make_habit):
        habit = make_habit()
        upsert_log(db, user.id, habit.id, TODAY, {"completed": True})
        delete_log(db, user.id, habit.id, "2026-10-19")
        assert _log_count(db, habit.id) == 0

    def test_missing_log(self, db, user, make_habit):
        habit = make_habit()
        with pytest.raises(NotFoundError):
            delete_log(db, user.id, habit.id, TODAY)

    def test_other_users_log(self, db, user, other_user, make_habit):
        habit = make_habit()
        upsert_log(db, user.id, habit.id, TODAY, {"completed": True})
        with pytest.raises(NotFoundError):
            delete_log(db, other_user.id, habit.id, TODAY)
        assert _log_count(db, habit.id) == 1

    def test_delete_cascades_to_time_entries(self, db, user, make_habit):
        habit = make_habit(tracking_type="duration", target_duration=30)
        add_interval(db, user.id, habit.id, TODAY, "08:00", "08:30")
        delete_log(db, user.id, habit.id, TODAY)
        assert db.scalar(select(func.count()).select_from(TimeInterval)) == 0


class TestLogReads:
    def test_logs_by_date(self, db, user, make_habit):
        a = make_habit(name="A")
        b = make_habit(name="B")
        upsert_log(db, user.id, a.id, TODAY, {"completed": True})
        upsert_log(db, user.id, b.id, TODAY, {})
        upsert_log(db, user.id, b.id, "2026-10-18", {})

        assert {log.habit_id for log in get_logs_by_date(db, user.id, TODAY)} == {a.id, b.id}

    def test_habit_logs_newest_first_with_bounds(self, db, user, make_habit):
        habit = make_habit()
        for day in ("2026-10-10", "2026-10-15", "2026-10-19", "2026-10-12"):
            upsert_log(db, user.id, habit.id, day, {"completed": True})

        logs = get_habit_logs(db, user.id, habit.id, start_date="2026-10-12", limit=2)
        assert [log.log_date.isoformat() for log in logs] == ["2026-10-19", "2026-10-15"]

    def test_daily_summary(self, db, user, make_habit):
        daily = make_habit(name="Daily")
        weekend = make_habit(name="Weekend", target_days=["sat", "sun"])
        make_habit(name="Paused", active=False)
        upsert_log(db, user.id, daily.id, TODAY, {"completed": True})

        summary = get_daily_summary(db, user.id, "2026-10-19")

        assert summary["date"] == TODAY
        assert [item["habit"].name for item in summary["habits"]] == ["Daily", "Weekend"]
        by_name = {item["habit"].name: item for item in summary["habits"]}
        assert by_name["Daily"]["log"].completed is True
        assert by_name["Daily"]["scheduled"] is True
        assert by_name["Weekend"]["log"] is None
        assert by_name["Weekend"]["scheduled"] is False
        assert weekend.id == by_name["Weekend"]["habit"].id

    def test_reads_do_not_create_logs(self, db, user, make_habit):
        habit = make_habit()
        get_daily_summary(db, user.id, TODAY)
        get_logs_by_date(db, user.id, TODAY)
        assert _log_count(db, habit.id) == 0
