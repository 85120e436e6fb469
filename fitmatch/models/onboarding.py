"""Onboarding questionnaire answers."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .enums import ExperienceLevel, Gender, GoalChoice, Lifestyle, WorkoutTime


class OnboardingAnswers(BaseModel):
    """Questionnaire input, bounded the way the onboarding form bounds it."""

    nickname: Optional[str] = Field(None, max_length=30)
    gender: Gender = Gender.MALE
    birth_year: int = Field(1995, ge=1950, le=2010)
    height: float = Field(170, ge=100, le=250, description="cm")
    current_weight: float = Field(60, ge=30, le=250, description="kg")
    target_weight: float = Field(65, ge=30, le=250, description="kg")
    goal_type: GoalChoice = GoalChoice.BULK
    experience_level: ExperienceLevel = ExperienceLevel.BEGINNER
    workout_days_per_week: int = Field(3, ge=2, le=7)
    lactose_intolerance: bool = False
    vegetarian: bool = False
    allergies: List[str] = Field(default_factory=list)
    lifestyle: Lifestyle = Lifestyle.OFFICE
    preferred_workout_time: WorkoutTime = WorkoutTime.EVENING
    has_gym_access: bool = True

    def to_profile_fields(self) -> Dict[str, Any]:
        """Profile update for ``complete_onboarding``; the start weight is today's weight."""
        fields = self.model_dump()
        fields["start_weight"] = self.current_weight
        return fields
