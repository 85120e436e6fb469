"""Derived, never-persisted results of the personalization engine."""

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from .enums import DayOfWeek, GoalType
from .program import DailyMeal, DietPlan, ExerciseItem, WorkoutProgram


class CalorieCalculation(BaseModel):
    bmr: float = Field(..., description="Basal metabolic rate, kcal/day")
    tdee: float = Field(..., description="Total daily energy expenditure, kcal/day")
    target_calories: int = Field(..., description="Daily intake goal, kcal")
    surplus: int = Field(..., description="Goal adjustment applied to TDEE, kcal")


class MatchedProgram(BaseModel):
    """Best-fit workout and diet for a profile.

    ``workout`` or ``diet`` is None when the catalog has nothing for that
    category; callers render a generic default plan in that case.
    """

    workout: Optional[WorkoutProgram] = None
    diet: Optional[DietPlan] = None
    calorie_info: CalorieCalculation
    goal_type: GoalType
    match_score: int = Field(0, ge=0, le=100)
    recommendations: List[str] = Field(default_factory=list)


class WeeklyRecommendation(BaseModel):
    focus_area: str
    exercise_adjustments: List[str] = Field(default_factory=list)
    meal_adjustments: List[str] = Field(default_factory=list)
    overall_advice: str


class RoutineInfo(BaseModel):
    """Weekly schedule derived from the requested training frequency."""

    workout_days: Tuple[DayOfWeek, ...]
    rest_days: Tuple[DayOfWeek, ...]
    routine_type: str
    rest_time_guide: str


class PersonalizedDailyRoutine(BaseModel):
    day: DayOfWeek
    part: str
    is_workout_day: bool
    exercises: List[ExerciseItem] = Field(default_factory=list)


class PersonalizedMealPlan(BaseModel):
    menu: DailyMeal
    daily_calorie_target: int
    adjusted_for_lactose: bool = False
