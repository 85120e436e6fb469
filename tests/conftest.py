from datetime import date

import pytest

from fitmatch.catalog.repository import CatalogRepository, load_default_catalog
from fitmatch.memory.in_memory import InMemoryStorage
from fitmatch.models.enums import DayOfWeek, ExperienceLevel, GoalType, MealSlot
from fitmatch.models.program import DailyMeal, DailyWorkout, DietPlan, ExerciseItem, MealItem, WorkoutProgram
from fitmatch.models.user_profile import UserProfile

TODAY = date(2025, 6, 1)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def make_profile():
    """Factory for profiles; defaults describe a 25-year-old male bulking 3x/week at the gym."""

    def _make(**overrides):
        fields = {
            "user_id": "u1",
            "height": 170,
            "current_weight": 60,
            "target_weight": 65,
            "start_weight": 60,
            "gender": "male",
            "birth_year": TODAY.year - 25,
            "goal_type": "bulk",
            "workout_days_per_week": 3,
            "lifestyle": "office",
        }
        fields.update(overrides)
        return UserProfile(**fields)

    return _make


@pytest.fixture
def make_program():
    def _make(program_id, goal=GoalType.BULK_UP, frequency=3, level=ExperienceLevel.BEGINNER, gym=True, routines=None):
        if routines is None:
            routines = {
                DayOfWeek.MON: DailyWorkout(
                    part="Full Body",
                    exercises=(ExerciseItem(name="Squat", sets=4, reps="8-10"),),
                )
            }
        return WorkoutProgram(
            program_id=program_id,
            target_goal=goal,
            frequency=frequency,
            level=level,
            has_gym_access=gym,
            routines=routines,
        )

    return _make


@pytest.fixture
def make_diet():
    def _make(plan_id, goal=GoalType.BULK_UP, calories=2500, lactose_free=False, vegetarian=False):
        meal = MealItem(name="Meal", detail="Rice + chicken", calories=calories // 5)
        menu = DailyMeal(**{slot.value: meal for slot in MealSlot})
        return DietPlan(
            plan_id=plan_id,
            target_calories=calories,
            target_goal=goal,
            lactose_free=lactose_free,
            vegetarian=vegetarian,
            menu_guide=menu,
        )

    return _make


@pytest.fixture
def catalog():
    return load_default_catalog()


@pytest.fixture
def empty_catalog():
    return CatalogRepository()


@pytest.fixture
def storage():
    return InMemoryStorage()
