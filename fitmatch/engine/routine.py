"""Turn a matched program into today's personalized workout and menu."""

import logging
from typing import Optional, Tuple

from fitmatch.engine.formulas import detect_lactose
from fitmatch.models.enums import DayOfWeek, ExperienceLevel, GoalChoice
from fitmatch.models.matched_program import PersonalizedDailyRoutine, PersonalizedMealPlan, RoutineInfo
from fitmatch.models.program import DailyMeal, DietPlan, ExerciseItem, WorkoutProgram
from fitmatch.models.user_profile import UserProfile

logger = logging.getLogger(__name__)

D = DayOfWeek
WORKOUT_PATTERNS = {
    2: (D.TUE, D.THU),
    3: (D.MON, D.WED, D.FRI),
    4: (D.MON, D.TUE, D.THU, D.FRI),
    5: (D.MON, D.TUE, D.WED, D.THU, D.FRI),
    6: (D.MON, D.TUE, D.WED, D.THU, D.FRI, D.SAT),
    7: tuple(DayOfWeek),
}
DEFAULT_PATTERN_DAYS = 5

LEVEL_SET_MULTIPLIERS = {
    ExperienceLevel.BEGINNER: 0.75,
    ExperienceLevel.INTERMEDIATE: 1.0,
    ExperienceLevel.ADVANCED: 1.25,
}
MIN_SETS = 2

REST_TIME_GUIDE = {
    GoalChoice.BULK: "2-3 min (hypertrophy)",
    GoalChoice.CUT: "30 s-1 min (keep heart rate up)",
    GoalChoice.MAINTAIN: "1-2 min (balanced rest)",
}

REST_DAY_PART = "Rest & Recovery"
REST_DAY_EXERCISES = (
    ExerciseItem(name="Stretching", sets=1, reps="15 min", note="Focus on muscle recovery"),
    ExerciseItem(name="Light walk", sets=1, reps="20 min", note="Active recovery"),
)

LACTOSE_FREE_SUPPLEMENT = "Whey protein isolate + water (isolate keeps lactose minimal)"
MILK_SUBSTITUTE = "soy/almond milk"


def workout_pattern(days_per_week: Optional[int]) -> Tuple[DayOfWeek, ...]:
    """Weekdays to train on; unsupported frequencies use the 5-day pattern."""
    return WORKOUT_PATTERNS.get(days_per_week or DEFAULT_PATTERN_DAYS, WORKOUT_PATTERNS[DEFAULT_PATTERN_DAYS])


def routine_type(days_per_week: int) -> str:
    if days_per_week <= 2:
        return "Upper/lower split"
    if days_per_week <= 3:
        return "Full body or upper/lower"
    if days_per_week <= 4:
        return "Upper/lower split"
    return "3-way split (Push-Pull-Legs)"


def routine_info(profile: Optional[UserProfile]) -> RoutineInfo:
    days = profile.workout_days_per_week if profile else DEFAULT_PATTERN_DAYS
    goal = profile.goal_type if profile else GoalChoice.BULK
    pattern = workout_pattern(days)

    return RoutineInfo(
        workout_days=pattern,
        rest_days=tuple(day for day in DayOfWeek if day not in pattern),
        routine_type=routine_type(days or DEFAULT_PATTERN_DAYS),
        rest_time_guide=REST_TIME_GUIDE[goal],
    )


def adjusted_sets(sets: int, level: ExperienceLevel) -> int:
    return max(MIN_SETS, int(sets * LEVEL_SET_MULTIPLIERS[level] + 0.5))


def daily_routine(
    program: Optional[WorkoutProgram], profile: Optional[UserProfile], day: DayOfWeek
) -> PersonalizedDailyRoutine:
    """
    Workout for one weekday with sets scaled to the user's experience level.

    The user's own weekly pattern decides whether ``day`` is a training
    day. When the program has no session on that exact weekday, the
    program's sessions are assigned to the pattern's training days in order.

    Args:
        program: Matched workout program, or None when nothing matched
        profile: User profile; None uses the defaults
        day: Weekday to build

    Returns:
        PersonalizedDailyRoutine; rest days carry the recovery routine
    """
    info = routine_info(profile)
    if day not in info.workout_days or program is None or not program.routines:
        return PersonalizedDailyRoutine(
            day=day, part=REST_DAY_PART, is_workout_day=False, exercises=list(REST_DAY_EXERCISES)
        )

    session = program.routines.get(day)
    if session is None:
        sessions = list(program.routines.values())
        session = sessions[info.workout_days.index(day) % len(sessions)]

    level = profile.experience_level if profile else ExperienceLevel.BEGINNER
    exercises = [
        exercise.model_copy(update={"sets": adjusted_sets(exercise.sets, level)})
        for exercise in session.exercises
    ]
    return PersonalizedDailyRoutine(day=day, part=session.part, is_workout_day=True, exercises=exercises)


def daily_meal_plan(diet: DietPlan, profile: Optional[UserProfile], daily_calorie_target: int) -> PersonalizedMealPlan:
    """Diet plan menu with dairy swapped out for lactose-intolerant users."""
    lactose_intolerant = bool(profile and profile.lactose_intolerance)
    menu = diet.menu_guide

    if lactose_intolerant and not diet.lactose_free:
        menu = _without_lactose(menu)
        logger.debug(f"Adjusted {diet.plan_id} menu for lactose intolerance")

    return PersonalizedMealPlan(
        menu=menu,
        daily_calorie_target=daily_calorie_target,
        adjusted_for_lactose=lactose_intolerant,
    )


def _without_lactose(menu: DailyMeal) -> DailyMeal:
    breakfast = menu.breakfast
    if detect_lactose(breakfast.detail):
        breakfast = breakfast.model_copy(
            update={"detail": breakfast.detail.replace("milk", MILK_SUBSTITUTE)}
        )
    supplement = menu.supplement.model_copy(update={"detail": LACTOSE_FREE_SUPPLEMENT})
    return menu.model_copy(update={"breakfast": breakfast, "supplement": supplement})
