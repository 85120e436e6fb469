"""Daily adherence log data models."""

from datetime import date as date_type
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field

from .enums import MealSlot


def daily_log_id(user_id: str, day: date_type) -> str:
    """Document key of a user's log for one calendar date."""
    return f"{user_id}_{day.isoformat()}"


def _toggled(items: List[str], item: str) -> List[str]:
    if item in items:
        return [existing for existing in items if existing != item]
    return [*items, item]


class DailyLog(BaseModel):
    """Meals and exercises checked off by a user on one date."""

    user_id: str = Field(..., description="Owner of the log")
    date: date_type = Field(..., description="Calendar date (YYYY-MM-DD)")
    completed_meals: List[str] = Field(
        default_factory=list, description="Completed meal slot ids, e.g. ['breakfast', 'lunch']"
    )
    completed_exercises: List[str] = Field(
        default_factory=list, description="Names of exercises checked off"
    )
    weight_measured: Optional[float] = Field(None, description="Weight measured that day in kg")
    workout_part: str = Field(default="", description="Body-part label of the day's workout")
    condition_note: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @computed_field
    @property
    def diet_score(self) -> int:
        """Number of completed meals, 0 to 5."""
        return len(self.completed_meals)

    @property
    def log_id(self) -> str:
        return daily_log_id(self.user_id, self.date)

    def toggle_meal(self, slot: MealSlot) -> "DailyLog":
        """Return a copy with ``slot`` added to or removed from completed meals."""
        return self.model_copy(
            update={
                "completed_meals": _toggled(self.completed_meals, MealSlot(slot).value),
                "updated_at": datetime.now(),
            }
        )

    def toggle_exercise(self, exercise_name: str) -> "DailyLog":
        """Return a copy with ``exercise_name`` added to or removed from completed exercises."""
        return self.model_copy(
            update={
                "completed_exercises": _toggled(self.completed_exercises, exercise_name),
                "updated_at": datetime.now(),
            }
        )

    def with_weight(self, weight: float) -> "DailyLog":
        return self.model_copy(update={"weight_measured": weight, "updated_at": datetime.now()})

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "uid-123",
                "date": "2025-12-26",
                "completed_meals": ["breakfast", "lunch", "snack"],
                "completed_exercises": ["Squat", "Bench press"],
                "weight_measured": 60.4,
                "workout_part": "Full Body A",
            }
        }


class WeeklyStats(BaseModel):
    """Aggregates over a window of daily logs."""

    total_workouts: int = Field(0, description="Days with at least one completed exercise")
    total_meals: int = Field(0, description="Completed meals across the window")
    avg_diet_score: float = 0.0
    weight_change: float = Field(0.0, description="Last minus first measured weight in kg")
    completion_rate: float = Field(0.0, ge=0, le=100, description="Workout days vs weekly target, %")
    logs: List[DailyLog] = Field(default_factory=list)
