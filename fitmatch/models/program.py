"""Catalog records: workout programs and diet plans."""

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field

from .enums import DayOfWeek, ExperienceLevel, GoalType, MealSlot


class ExerciseItem(BaseModel):
    """Single exercise inside a daily workout."""

    name: str = Field(..., description="Exercise name")
    sets: int = Field(..., ge=1, description="Number of sets")
    reps: str = Field(..., description="Reps or duration, e.g. '8-10', 'MAX' or '20 min'")
    reference_id: Optional[str] = Field(None, description="Exercise library slug")
    note: Optional[str] = Field(None, description="Coaching cue")

    class Config:
        frozen = True


class DailyWorkout(BaseModel):
    """Body-part focus and ordered exercises for one weekday."""

    part: str = Field(..., description="Body-part label, e.g. 'Full Body A' or 'Push'")
    exercises: Tuple[ExerciseItem, ...] = Field(default_factory=tuple)

    class Config:
        frozen = True


class WorkoutProgram(BaseModel):
    """Predefined weekly routine tagged for matching."""

    program_id: str
    target_goal: GoalType
    frequency: int = Field(..., ge=1, le=7, description="Workouts per week")
    level: ExperienceLevel
    has_gym_access: bool
    description: str = ""
    routines: Dict[DayOfWeek, DailyWorkout] = Field(default_factory=dict)

    @property
    def workout_days(self) -> Tuple[DayOfWeek, ...]:
        return tuple(self.routines)

    class Config:
        frozen = True


class MealItem(BaseModel):
    name: str
    detail: str = ""
    calories: int = Field(0, ge=0)
    icon: str = ""

    class Config:
        frozen = True


class DailyMeal(BaseModel):
    """Menu template with five fixed slots."""

    breakfast: MealItem
    lunch: MealItem
    snack: MealItem
    dinner: MealItem
    supplement: MealItem

    def slot(self, slot: MealSlot) -> MealItem:
        return getattr(self, slot.value)

    class Config:
        frozen = True


class DietPlan(BaseModel):
    """Predefined daily menu tagged for matching."""

    plan_id: str
    target_calories: int = Field(..., gt=0)
    target_goal: GoalType
    tags: Tuple[str, ...] = Field(default_factory=tuple)
    lactose_free: bool = False
    vegetarian: bool = False
    description: str = ""
    menu_guide: DailyMeal

    class Config:
        frozen = True
