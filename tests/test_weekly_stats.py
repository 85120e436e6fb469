from datetime import timedelta

import pytest

from fitmatch.engine.weekly_stats import (
    compute_weekly_stats,
    recent_logs,
    report_grade,
    report_recommendations,
    report_score,
)
from fitmatch.models.daily_log import DailyLog, WeeklyStats


@pytest.fixture
def make_log(today):
    def _make(days_ago, meals=0, exercises=0, weight=None):
        return DailyLog(
            user_id="u1",
            date=today - timedelta(days=days_ago),
            completed_meals=["breakfast", "lunch", "snack", "dinner", "supplement"][:meals],
            completed_exercises=[f"Exercise {i}" for i in range(exercises)],
            weight_measured=weight,
        )

    return _make


class TestComputeWeeklyStats:

    def test_aggregates(self, make_log):
        logs = [make_log(0, meals=5, exercises=2, weight=60.6), make_log(1, meals=3), make_log(2, exercises=1, weight=60.0)]
        stats = compute_weekly_stats(logs, target_days=3)

        assert stats.total_workouts == 2
        assert stats.total_meals == 8
        assert stats.avg_diet_score == pytest.approx(8 / 3)
        assert stats.weight_change == pytest.approx(0.6)
        assert stats.completion_rate == pytest.approx(200 / 3)

    def test_completion_rate_capped(self, make_log):
        logs = [make_log(i, exercises=1) for i in range(6)]
        assert compute_weekly_stats(logs, target_days=3).completion_rate == 100

    def test_target_defaults_to_five(self, make_log):
        logs = [make_log(i, exercises=1) for i in range(2)]
        assert compute_weekly_stats(logs).completion_rate == pytest.approx(40)

    def test_single_weight_means_no_change(self, make_log):
        assert compute_weekly_stats([make_log(0, weight=61.0), make_log(1)]).weight_change == 0

    def test_empty_window(self):
        stats = compute_weekly_stats([])
        assert stats.avg_diet_score == 0
        assert stats.completion_rate == 0
        assert stats.logs == []

    def test_recent_logs_window_and_order(self, make_log, today):
        logs = [make_log(3), make_log(10), make_log(0), make_log(7)]
        window = recent_logs(logs, today)
        assert [log.date for log in window] == [today, today - timedelta(days=3), today - timedelta(days=7)]


class TestReport:

    def test_perfect_week(self, make_log):
        stats = compute_weekly_stats([make_log(i, meals=5, exercises=1) for i in range(5)], target_days=5)
        assert report_score(stats) == 100

    def test_empty_week(self):
        assert report_score(WeeklyStats()) == 0

    def test_weighted_components(self):
        stats = WeeklyStats(completion_rate=50, avg_diet_score=2.5, logs=[])
        assert report_score(stats) == 40

    @pytest.mark.parametrize(
        "score,grade",
        [(100, "S"), (90, "S"), (89, "A"), (80, "A"), (79, "B"), (70, "B"), (60, "C"), (50, "D"), (49, "F"), (0, "F")],
    )
    def test_grades(self, score, grade):
        assert report_grade(score) == grade

    def test_bulk_notes(self, make_profile):
        stats = WeeklyStats(total_workouts=4, completion_rate=100, avg_diet_score=4.5, weight_change=0.2)
        notes = report_recommendations(stats, make_profile())
        assert len(notes) == 3
        assert notes[-1].startswith("✨")

    def test_no_workouts_note(self, make_profile):
        stats = WeeklyStats(total_workouts=0, completion_rate=0, avg_diet_score=3.5)
        notes = report_recommendations(stats, make_profile(goal_type="maintain"))
        assert notes[-1].startswith("🏋️")
