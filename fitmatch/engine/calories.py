"""Daily calorie targets from BMR, activity level and goal."""

import math
from datetime import date
from typing import Optional, Union

from fitmatch.engine.formulas import bmr as mifflin_st_jeor
from fitmatch.models.enums import Gender, GoalType, Lifestyle
from fitmatch.models.matched_program import CalorieCalculation
from fitmatch.models.user_profile import UserProfile

BASE_MULTIPLIERS = {
    Lifestyle.ACTIVE: 1.55,
    Lifestyle.STUDENT: 1.4,
    Lifestyle.OFFICE: 1.35,
}

# (minimum workout days per week, multiplier bonus), checked top-down
FREQUENCY_BONUSES = (
    (6, 0.15),
    (4, 0.10),
    (2, 0.05),
)

GOAL_SURPLUS = {
    GoalType.BULK_UP: 500,
    GoalType.DIET: -500,
    GoalType.MAINTENANCE: 0,
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def activity_multiplier(workout_days_per_week: int, lifestyle: Union[Lifestyle, str]) -> float:
    """Lifestyle base multiplier plus a bonus for training frequency."""
    base = BASE_MULTIPLIERS[Lifestyle(lifestyle)]
    for min_days, bonus in FREQUENCY_BONUSES:
        if workout_days_per_week >= min_days:
            return base + bonus
    return base


def calculate_calories(
    weight: float,
    height: float,
    age: float,
    gender: Optional[Union[Gender, str]],
    activity_multiplier: float,
    goal: GoalType,
) -> CalorieCalculation:
    """BMR, TDEE and goal-adjusted target calories.

    Args:
        weight: Body weight in kg
        height: Height in cm
        age: Age in years
        gender: 'male' or 'female'; None uses the male formula
        activity_multiplier: TDEE multiplier, see ``activity_multiplier()``
        goal: Goal category that decides the surplus or deficit

    Returns:
        CalorieCalculation with the target rounded to whole kcal
    """
    basal = mifflin_st_jeor(weight, height, age, gender)
    tdee = basal * activity_multiplier
    surplus = GOAL_SURPLUS[goal]

    return CalorieCalculation(
        bmr=basal,
        tdee=tdee,
        target_calories=_round_half_up(tdee + surplus),
        surplus=surplus,
    )


def calories_for_profile(profile: UserProfile, goal: GoalType, today: Optional[date] = None) -> CalorieCalculation:
    multiplier = activity_multiplier(profile.workout_days_per_week, profile.lifestyle)
    return calculate_calories(
        profile.current_weight,
        profile.height,
        profile.age(today),
        profile.gender,
        multiplier,
        goal,
    )
