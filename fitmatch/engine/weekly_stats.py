"""Weekly aggregates over daily logs and the report card built on them."""

from datetime import date, timedelta
from typing import Iterable, List, Optional

from fitmatch.models.daily_log import DailyLog, WeeklyStats
from fitmatch.models.enums import GoalChoice
from fitmatch.models.user_profile import UserProfile

WINDOW_DAYS = 7
DEFAULT_TARGET_DAYS = 5

# (minimum score, grade, emoji), checked top-down
GRADES = (
    (90, "S", "🏆"),
    (80, "A", "🌟"),
    (70, "B", "💪"),
    (60, "C", "👍"),
    (50, "D", "🔄"),
)
FAILING_GRADE = ("F", "😢")


def window_start(today: Optional[date] = None) -> date:
    today = today or date.today()
    return today - timedelta(days=WINDOW_DAYS)


def recent_logs(logs: Iterable[DailyLog], today: Optional[date] = None) -> List[DailyLog]:
    """Logs dated within the last week, newest first."""
    start = window_start(today)
    return sorted((log for log in logs if log.date >= start), key=lambda log: log.date, reverse=True)


def compute_weekly_stats(logs: Iterable[DailyLog], target_days: Optional[int] = None) -> WeeklyStats:
    """
    Aggregate a window of daily logs.

    Args:
        logs: Logs in the window, any order
        target_days: Planned workouts per week; 5 when unknown

    Returns:
        WeeklyStats with completion rate capped at 100
    """
    logs = list(logs)
    total_workouts = sum(1 for log in logs if log.completed_exercises)
    total_meals = sum(len(log.completed_meals) for log in logs)
    avg_diet_score = sum(log.diet_score for log in logs) / len(logs) if logs else 0.0

    weighed = sorted(
        (log for log in logs if log.weight_measured is not None), key=lambda log: log.date
    )
    weight_change = 0.0
    if len(weighed) >= 2:
        weight_change = weighed[-1].weight_measured - weighed[0].weight_measured

    target = target_days or DEFAULT_TARGET_DAYS
    completion_rate = min(total_workouts / target * 100, 100.0)

    return WeeklyStats(
        total_workouts=total_workouts,
        total_meals=total_meals,
        avg_diet_score=avg_diet_score,
        weight_change=weight_change,
        completion_rate=completion_rate,
        logs=logs,
    )


def report_score(stats: WeeklyStats) -> int:
    """Weekly score out of 100: workouts 40, diet 40, logging consistency 20."""
    workout_score = stats.completion_rate / 100 * 40
    diet_score = stats.avg_diet_score / 5 * 40
    consistency_score = min(len(stats.logs), 5) / 5 * 20
    return int(workout_score + diet_score + consistency_score + 0.5)


def report_grade(score: int) -> str:
    for minimum, grade, _ in GRADES:
        if score >= minimum:
            return grade
    return FAILING_GRADE[0]


def grade_emoji(grade: str) -> str:
    for _, label, emoji in GRADES:
        if label == grade:
            return emoji
    return FAILING_GRADE[1]


def report_recommendations(stats: WeeklyStats, profile: UserProfile) -> List[str]:
    """Short coaching notes shown on the weekly report card."""
    notes = []

    if stats.completion_rate < 50:
        notes.append("💪 Build up your workout count little by little. Consistency matters!")
    elif stats.completion_rate >= 80:
        notes.append("🔥 Great work! Keep this up and reaching your goal is only a matter of time!")

    if stats.avg_diet_score < 3:
        notes.append("🍽️ Don't skip meals. Snacks and supplements matter most.")
    elif stats.avg_diet_score >= 4:
        notes.append("🥗 Your diet is on point! Most of muscle growth happens in the kitchen.")

    if profile.goal_type == GoalChoice.BULK:
        if stats.weight_change > 0.5:
            notes.append("⚖️ Your weight is rising fast. Watch out for fat gain.")
        elif stats.weight_change < 0:
            notes.append("📈 Eat a bit more. Aim for a 0.3-0.5kg gain per week.")
        else:
            notes.append("✨ You're gaining at an ideal pace!")
    elif profile.goal_type == GoalChoice.CUT:
        if stats.weight_change < -1:
            notes.append("⚠️ You're losing weight too quickly. Watch out for muscle loss.")
        elif stats.weight_change > 0:
            notes.append("📉 Trim your intake slightly or move a little more.")

    if stats.total_workouts == 0:
        notes.append("🏋️ Start a workout this week. Going light is fine!")

    return notes
