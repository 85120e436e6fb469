from datetime import timedelta

import pytest

from fitmatch.exceptions import StorageError
from fitmatch.models.enums import GoalChoice


class TestProfiles:

    def test_create_with_defaults(self, storage):
        profile = storage.create_profile("u1", nickname="Minho", email=None)

        assert profile.nickname == "Minho"
        assert profile.email is None
        assert profile.height == 170
        assert profile.goal_type == GoalChoice.BULK
        assert not profile.onboarding_completed
        assert storage.get_profile("u1") == profile

    def test_missing_profile(self, storage):
        assert storage.get_profile("nobody") is None

    def test_update_merges_and_bumps_timestamp(self, storage):
        created = storage.create_profile("u1")
        updated = storage.update_profile("u1", target_weight=70, nickname=None)

        assert updated.target_weight == 70
        assert updated.height == created.height
        assert updated.updated_at >= created.updated_at
        assert updated.created_at == created.created_at

    def test_update_cannot_change_identity(self, storage):
        storage.create_profile("u1")
        assert storage.update_profile("u1", user_id="u2").user_id == "u1"

    def test_update_missing_profile(self, storage):
        with pytest.raises(StorageError):
            storage.update_profile("nobody", target_weight=70)

    def test_complete_onboarding(self, storage):
        created = storage.create_profile("u1")
        profile = storage.complete_onboarding("u1", current_weight=58, start_weight=58, goal_type="cut")

        assert profile.onboarding_completed
        assert profile.goal_type == GoalChoice.CUT
        assert profile.start_weight == 58
        assert profile.start_date >= created.start_date

    def test_update_weight(self, storage):
        storage.create_profile("u1")
        assert storage.update_weight("u1", 61.5).current_weight == 61.5

    def test_reads_are_copies(self, storage):
        storage.create_profile("u1")
        profile = storage.get_profile("u1")
        profile.nickname = "changed"
        assert storage.get_profile("u1").nickname is None


class TestDailyLogs:

    def test_get_or_create(self, storage, today):
        log = storage.get_or_create_daily_log("u1", today)
        assert log.completed_meals == []
        assert storage.get_or_create_daily_log("u1", today) == log

    def test_save_and_reload(self, storage, today):
        log = storage.get_or_create_daily_log("u1", today).toggle_meal("breakfast")
        storage.save_daily_log(log)
        assert storage.get_or_create_daily_log("u1", today).completed_meals == ["breakfast"]

    def test_list_range_oldest_first(self, storage, today):
        for days_ago in (0, 3, 9):
            storage.get_or_create_daily_log("u1", today - timedelta(days=days_ago))
        storage.get_or_create_daily_log("u2", today)

        logs = storage.list_daily_logs("u1", start=today - timedelta(days=7), end=today)
        assert [log.date for log in logs] == [today - timedelta(days=3), today]
        assert len(storage.list_daily_logs("u1")) == 3


class TestWorkoutRecords:

    def test_pr_flagging(self, storage, today):
        first = storage.add_workout_record("u1", "Squat", 1, 60, 8, day=today)
        heavier = storage.add_workout_record("u1", "Squat", 2, 70, 5, day=today)
        lighter = storage.add_workout_record("u1", "Squat", 3, 65, 5, day=today)

        assert first.is_pr
        assert heavier.is_pr
        assert not lighter.is_pr
        assert first.record_id == f"u1_{today.isoformat()}_Squat_1"

    def test_records_per_exercise(self, storage, today):
        storage.add_workout_record("u1", "Squat", 1, 60, 8, day=today)
        assert storage.add_workout_record("u1", "Bench press", 1, 40, 8, day=today).is_pr
        storage.add_workout_record("u2", "Squat", 1, 100, 5, day=today)

        assert len(storage.list_workout_records("u1")) == 2
        assert [r.exercise_name for r in storage.list_workout_records("u1", "Squat")] == ["Squat"]

    def test_relogged_set_is_checked_against_other_sets(self, storage, today):
        storage.add_workout_record("u1", "Squat", 1, 45, 8, day=today)
        storage.add_workout_record("u1", "Squat", 2, 60, 8, day=today)

        corrected = storage.add_workout_record("u1", "Squat", 2, 50, 8, day=today)

        assert corrected.is_pr
        assert [r.weight for r in storage.list_workout_records("u1", "Squat")] == [45, 50]
