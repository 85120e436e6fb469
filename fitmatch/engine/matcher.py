"""Pick the best-fitting workout program and diet plan for a user."""

import logging
from datetime import date
from typing import List, Optional

from fitmatch.catalog.repository import CatalogRepository
from fitmatch.engine.calories import calories_for_profile
from fitmatch.engine.formulas import bmi as body_mass_index
from fitmatch.engine.goal_classifier import classify_goal
from fitmatch.engine.recommendations import generate_recommendations
from fitmatch.models.enums import GoalType
from fitmatch.models.matched_program import MatchedProgram
from fitmatch.models.program import DietPlan, WorkoutProgram
from fitmatch.models.user_profile import UserProfile

logger = logging.getLogger(__name__)

FREQUENCY_MATCH_POINTS = 30
GYM_MATCH_POINTS = 20
LEVEL_MATCH_POINTS = 15
GOAL_MATCH_POINTS = 15
LACTOSE_MATCH_POINTS = 10
VEGETARIAN_MATCH_POINTS = 10


class ProgramMatcher:
    """Deterministic matcher over an injected catalog."""

    def __init__(self, catalog: CatalogRepository) -> None:
        self.catalog = catalog

    def match(self, profile: UserProfile, today: Optional[date] = None) -> MatchedProgram:
        """
        Classify the user's goal, compute calories and select programs.

        Args:
            profile: User profile to match
            today: Reference date for deriving age (defaults to today)

        Returns:
            MatchedProgram; workout or diet is None when no candidate exists
        """
        bmi = body_mass_index(profile.current_weight, profile.height)
        goal = classify_goal(bmi, profile.goal_type)
        calorie_info = calories_for_profile(profile, goal, today)

        workout = self.find_workout_program(
            goal, profile.workout_days_per_week, profile.has_gym_access
        )
        diet = self.find_diet_plan(
            goal, calorie_info.target_calories, profile.lactose_intolerance, profile.vegetarian
        )

        logger.info(
            f"Matched user {profile.user_id}: goal={goal.value}, "
            f"workout={workout.program_id if workout else None}, "
            f"diet={diet.plan_id if diet else None}, target={calorie_info.target_calories}kcal"
        )

        return MatchedProgram(
            workout=workout,
            diet=diet,
            calorie_info=calorie_info,
            goal_type=goal,
            match_score=match_score(workout, diet, profile),
            recommendations=generate_recommendations(profile, goal, bmi),
        )

    def find_workout_program(
        self, goal: GoalType, frequency: int, has_gym_access: bool
    ) -> Optional[WorkoutProgram]:
        candidates = self.catalog.workouts_for_goal(goal)
        if not candidates:
            candidates = self.catalog.workouts_for_goal(GoalType.MAINTENANCE)

        for program in candidates:
            if program.frequency == frequency and program.has_gym_access == has_gym_access:
                return program

        gym_matches = [p for p in candidates if p.has_gym_access == has_gym_access]
        if gym_matches:
            return _nearest(gym_matches, lambda p: abs(p.frequency - frequency))

        # Experience level is only scored, never filtered on.
        return candidates[0] if candidates else None

    def find_diet_plan(
        self, goal: GoalType, target_calories: int, lactose_intolerance: bool, vegetarian: bool
    ) -> Optional[DietPlan]:
        candidates = self.catalog.diets_for_goal(goal)
        if not candidates:
            candidates = self.catalog.diets_for_goal(GoalType.MAINTENANCE)

        if vegetarian:
            candidates = [p for p in candidates if p.vegetarian] or candidates
        if lactose_intolerance:
            candidates = [p for p in candidates if p.lactose_free] or candidates

        if not candidates:
            return None
        return _nearest(candidates, lambda p: abs(p.target_calories - target_calories))


def _nearest(candidates: List, distance):
    # Strict comparison keeps the earliest candidate on ties.
    best = candidates[0]
    for candidate in candidates[1:]:
        if distance(candidate) < distance(best):
            best = candidate
    return best


def match_score(
    workout: Optional[WorkoutProgram], diet: Optional[DietPlan], profile: UserProfile
) -> int:
    """Additive fit score in [0, 100]."""
    score = 0

    if workout is not None:
        if workout.frequency == profile.workout_days_per_week:
            score += FREQUENCY_MATCH_POINTS
        if workout.has_gym_access == profile.has_gym_access:
            score += GYM_MATCH_POINTS
        if workout.level == profile.experience_level:
            score += LEVEL_MATCH_POINTS
        score += GOAL_MATCH_POINTS

    if diet is not None:
        if diet.lactose_free == profile.lactose_intolerance:
            score += LACTOSE_MATCH_POINTS
        if diet.vegetarian == profile.vegetarian:
            score += VEGETARIAN_MATCH_POINTS

    return score
