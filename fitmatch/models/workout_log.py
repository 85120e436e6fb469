"""Per-set workout record data model."""

from datetime import date as date_type
from datetime import datetime

from pydantic import BaseModel, Field


class WorkoutRecord(BaseModel):
    """One logged set of an exercise, flagged when it is a personal record."""

    record_id: str = Field(..., description="'{user}_{date}_{exercise}_{set}'")
    user_id: str
    date: date_type
    exercise_name: str
    set_number: int = Field(..., ge=1)
    weight: float = Field(..., ge=0, description="Load in kg (0 for bodyweight)")
    reps: int = Field(..., ge=0)
    is_pr: bool = Field(False, description="Heaviest weight logged for this exercise so far")
    created_at: datetime = Field(default_factory=datetime.now)

    class Config:
        json_schema_extra = {
            "example": {
                "record_id": "uid-123_2025-12-26_Bench press_1",
                "user_id": "uid-123",
                "date": "2025-12-26",
                "exercise_name": "Bench press",
                "set_number": 1,
                "weight": 50.0,
                "reps": 8,
                "is_pr": True,
            }
        }
