import pytest

from fitmatch.engine.routine import (
    LACTOSE_FREE_SUPPLEMENT,
    REST_DAY_PART,
    adjusted_sets,
    daily_meal_plan,
    daily_routine,
    routine_info,
    workout_pattern,
)
from fitmatch.models.enums import DayOfWeek, ExperienceLevel


class TestRoutineInfo:

    def test_patterns(self):
        assert workout_pattern(3) == (DayOfWeek.MON, DayOfWeek.WED, DayOfWeek.FRI)
        assert workout_pattern(2) == (DayOfWeek.TUE, DayOfWeek.THU)
        assert len(workout_pattern(7)) == 7

    def test_unsupported_frequency_uses_five_days(self):
        assert workout_pattern(1) == workout_pattern(5)
        assert workout_pattern(None) == workout_pattern(5)

    def test_rest_days_complement_workout_days(self, make_profile):
        info = routine_info(make_profile(workout_days_per_week=4))
        assert set(info.workout_days) | set(info.rest_days) == set(DayOfWeek)
        assert info.rest_days == (DayOfWeek.WED, DayOfWeek.SAT, DayOfWeek.SUN)
        assert info.routine_type == "Upper/lower split"

    def test_rest_guide_follows_goal(self, make_profile):
        assert "hypertrophy" in routine_info(make_profile()).rest_time_guide
        assert "heart rate" in routine_info(make_profile(goal_type="cut")).rest_time_guide

    def test_without_profile(self):
        info = routine_info(None)
        assert len(info.workout_days) == 5
        assert info.routine_type == "3-way split (Push-Pull-Legs)"


class TestAdjustedSets:

    @pytest.mark.parametrize(
        "sets,level,expected",
        [
            (4, ExperienceLevel.BEGINNER, 3),
            (3, ExperienceLevel.BEGINNER, 2),
            (2, ExperienceLevel.BEGINNER, 2),
            (4, ExperienceLevel.INTERMEDIATE, 4),
            (4, ExperienceLevel.ADVANCED, 5),
            (5, ExperienceLevel.ADVANCED, 6),
        ],
    )
    def test_scaling(self, sets, level, expected):
        assert adjusted_sets(sets, level) == expected

    def test_never_below_two(self):
        assert adjusted_sets(1, ExperienceLevel.BEGINNER) == 2


class TestDailyRoutine:

    def test_program_day_scaled_for_beginner(self, catalog, make_profile):
        program = catalog.get_workout_program("BULK_UP_3_GYM_BEGINNER")
        routine = daily_routine(program, make_profile(), DayOfWeek.MON)

        assert routine.is_workout_day
        assert routine.part == "Full Body A"
        assert routine.exercises[0].name == "Squat"
        assert routine.exercises[0].sets == 3
        assert routine.exercises[0].reps == "8-10"

    def test_rest_day(self, catalog, make_profile):
        program = catalog.get_workout_program("BULK_UP_3_GYM_BEGINNER")
        routine = daily_routine(program, make_profile(), DayOfWeek.TUE)

        assert not routine.is_workout_day
        assert routine.part == REST_DAY_PART
        assert [e.name for e in routine.exercises] == ["Stretching", "Light walk"]

    def test_sessions_cycle_over_users_pattern(self, catalog, make_profile):
        program = catalog.get_workout_program("BULK_UP_3_GYM_BEGINNER")
        profile = make_profile(workout_days_per_week=5)

        assert daily_routine(program, profile, DayOfWeek.TUE).part == "Full Body B"
        assert daily_routine(program, profile, DayOfWeek.THU).part == "Full Body A"

    def test_catalog_program_untouched(self, catalog, make_profile):
        program = catalog.get_workout_program("BULK_UP_3_GYM_BEGINNER")
        daily_routine(program, make_profile(), DayOfWeek.MON)
        assert program.routines[DayOfWeek.MON].exercises[0].sets == 4

    def test_no_program_means_rest(self, make_profile):
        assert not daily_routine(None, make_profile(), DayOfWeek.MON).is_workout_day


class TestDailyMealPlan:

    def test_lactose_swap(self, catalog, make_profile):
        diet = catalog.get_diet_plan("BULK_UP_3000_STANDARD")
        plan = daily_meal_plan(diet, make_profile(lactose_intolerance=True), 2798)

        assert plan.adjusted_for_lactose
        assert "300ml soy/almond milk" in plan.menu.breakfast.detail
        assert plan.menu.supplement.detail == LACTOSE_FREE_SUPPLEMENT
        assert plan.daily_calorie_target == 2798
        assert "300ml milk" in diet.menu_guide.breakfast.detail

    def test_lactose_free_plan_kept(self, catalog, make_profile):
        diet = catalog.get_diet_plan("BULK_UP_3000_LACTO_FREE")
        plan = daily_meal_plan(diet, make_profile(lactose_intolerance=True), 2798)
        assert plan.menu == diet.menu_guide
        assert plan.adjusted_for_lactose

    def test_menu_unchanged_without_intolerance(self, catalog, make_profile):
        diet = catalog.get_diet_plan("BULK_UP_3000_STANDARD")
        plan = daily_meal_plan(diet, make_profile(), 2798)
        assert plan.menu == diet.menu_guide
        assert not plan.adjusted_for_lactose
