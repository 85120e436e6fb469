"""User profile data model."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .enums import ExperienceLevel, Gender, GoalChoice, Lifestyle, WorkoutTime

DEFAULT_AGE = 25


class UserProfile(BaseModel):
    """Anthropometrics, goal settings and lifestyle of a single user."""

    user_id: str = Field(..., description="Identity reference from the auth provider")
    nickname: Optional[str] = Field(None, description="Display name")
    email: Optional[str] = Field(None, description="Account email")

    height: float = Field(170, description="Height in cm")
    current_weight: float = Field(60, description="Latest measured weight in kg")
    target_weight: float = Field(65, description="Goal weight in kg")
    start_weight: float = Field(60, description="Weight at onboarding in kg")
    gender: Optional[Gender] = Field(None, description="Used to pick the BMR formula")
    birth_year: Optional[int] = Field(None, description="Used to derive age")

    goal_type: GoalChoice = Field(GoalChoice.BULK, description="bulk, cut or maintain")
    experience_level: ExperienceLevel = Field(ExperienceLevel.BEGINNER)
    workout_days_per_week: int = Field(
        3, description="Requested weekly frequency; unmatched values fall back to the nearest program"
    )

    lactose_intolerance: bool = False
    vegetarian: bool = False
    allergies: List[str] = Field(default_factory=list)

    lifestyle: Lifestyle = Field(Lifestyle.OFFICE, description="office, active or student")
    preferred_workout_time: WorkoutTime = Field(WorkoutTime.EVENING)
    has_gym_access: bool = True

    onboarding_completed: bool = False
    start_date: datetime = Field(default_factory=datetime.now)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    def update(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.now()

    def age(self, today: Optional[date] = None) -> int:
        """Age in years from the birth year, or 25 when unknown."""
        if not self.birth_year:
            return DEFAULT_AGE
        today = today or date.today()
        return today.year - self.birth_year

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "uid-123",
                "nickname": "Minho",
                "height": 170,
                "current_weight": 60,
                "target_weight": 65,
                "start_weight": 60,
                "gender": "male",
                "birth_year": 2000,
                "goal_type": "bulk",
                "experience_level": "beginner",
                "workout_days_per_week": 3,
                "lactose_intolerance": True,
                "lifestyle": "office",
                "has_gym_access": True,
            }
        }
