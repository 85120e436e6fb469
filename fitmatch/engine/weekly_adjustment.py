"""Next-week routine and meal tweaks from a week of adherence data."""

from typing import List, Optional

from fitmatch.models.enums import GoalChoice
from fitmatch.models.matched_program import WeeklyRecommendation
from fitmatch.models.user_profile import UserProfile

LOW_COMPLETION_RATE = 50
HIGH_COMPLETION_RATE = 90
LOW_DIET_SCORE = 3
HIGH_DIET_SCORE = 4
FAST_BULK_GAIN_KG = 0.7

WORKOUT_CONSISTENCY = "workout consistency"
DIET_MANAGEMENT = "diet management"
NO_FOCUS = "maintain"

AFFIRMATION = "Great week! Keep going at the same pace 💪"


def recommend_weekly_adjustment(
    profile: Optional[UserProfile],
    completion_rate: float,
    avg_diet_score: float,
    weight_change: float,
) -> WeeklyRecommendation:
    """
    Evaluate every adjustment rule independently against last week's numbers.

    Args:
        profile: User profile; without one the bulk goal is assumed
        completion_rate: Workout completion rate in percent, 0-100
        avg_diet_score: Average completed meals per day, 0-5
        weight_change: Net weight change over the week in kg

    Returns:
        WeeklyRecommendation naming the focus areas and suggested changes
    """
    goal = profile.goal_type if profile else GoalChoice.BULK
    focus_areas: List[str] = []
    exercise_adjustments: List[str] = []
    meal_adjustments: List[str] = []

    if completion_rate < LOW_COMPLETION_RATE:
        focus_areas.append(WORKOUT_CONSISTENCY)
        exercise_adjustments.append("Try cutting your weekly sessions by one or two")
        exercise_adjustments.append("Switch to shorter, more intense workouts")
    elif completion_rate >= HIGH_COMPLETION_RATE:
        exercise_adjustments.append("Progressively add weight in 2.5kg increments")
        exercise_adjustments.append("Consider adding a new exercise")

    if avg_diet_score < LOW_DIET_SCORE:
        focus_areas.append(DIET_MANAGEMENT)
        meal_adjustments.append("Prepare your snacks ahead of time")
        meal_adjustments.append("Build a habit of taking your supplement")
    elif avg_diet_score >= HIGH_DIET_SCORE:
        meal_adjustments.append("Excellent! Keep your diet exactly as it is")

    if goal == GoalChoice.BULK:
        if weight_change < 0:
            meal_adjustments.append("Increase your intake by 200kcal")
            meal_adjustments.append("Add a snack between meals")
        elif weight_change > FAST_BULK_GAIN_KG:
            meal_adjustments.append("You're gaining fast. Watch out for excess fat gain")
    elif goal == GoalChoice.CUT:
        if weight_change > 0:
            meal_adjustments.append("Audit your calorie intake")
            exercise_adjustments.append("Add 10 minutes of cardio")

    if focus_areas:
        joined = ", ".join(focus_areas)
        overall_advice = f'This week, focus on "{joined}"!'
    else:
        joined = NO_FOCUS
        overall_advice = AFFIRMATION

    return WeeklyRecommendation(
        focus_area=joined,
        exercise_adjustments=exercise_adjustments,
        meal_adjustments=meal_adjustments,
        overall_advice=overall_advice,
    )
