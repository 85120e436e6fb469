"""Closed vocabularies shared by profiles, catalog records and logs."""

from enum import Enum


class GoalType(str, Enum):
    """Goal category used for catalog matching."""

    BULK_UP = "BULK_UP"
    DIET = "DIET"
    MAINTENANCE = "MAINTENANCE"


class GoalChoice(str, Enum):
    """Goal the user picks during onboarding."""

    BULK = "bulk"
    CUT = "cut"
    MAINTAIN = "maintain"


class ExperienceLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class Lifestyle(str, Enum):
    OFFICE = "office"
    ACTIVE = "active"
    STUDENT = "student"


class WorkoutTime(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class DayOfWeek(str, Enum):
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"

    @classmethod
    def from_weekday(cls, weekday: int) -> "DayOfWeek":
        """Map ``date.weekday()`` (Monday == 0) to a day code."""
        return list(cls)[weekday]


class MealSlot(str, Enum):
    """The five fixed meal slots of a daily menu."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    SNACK = "snack"
    DINNER = "dinner"
    SUPPLEMENT = "supplement"
