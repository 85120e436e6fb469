"""Read-only catalog of workout programs and diet plans."""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from pydantic import TypeAdapter, ValidationError

from fitmatch.exceptions import CatalogError
from fitmatch.models.enums import GoalType
from fitmatch.models.program import DietPlan, WorkoutProgram

logger = logging.getLogger(__name__)

WORKOUT_PROGRAMS_FILE = "workout_programs.json"
DIET_PLANS_FILE = "diet_plans.json"
DATA_DIR = Path(__file__).parent / "data"

_workout_adapter = TypeAdapter(List[WorkoutProgram])
_diet_adapter = TypeAdapter(List[DietPlan])


class CatalogRepository:
    """Immutable, ordered collection of catalog records.

    Catalog order matters: the matcher breaks ties by taking the first
    record in this order.
    """

    def __init__(
        self,
        workout_programs: Iterable[WorkoutProgram] = (),
        diet_plans: Iterable[DietPlan] = (),
    ) -> None:
        self._workout_programs: Tuple[WorkoutProgram, ...] = tuple(workout_programs)
        self._diet_plans: Tuple[DietPlan, ...] = tuple(diet_plans)

    @property
    def workout_programs(self) -> Tuple[WorkoutProgram, ...]:
        return self._workout_programs

    @property
    def diet_plans(self) -> Tuple[DietPlan, ...]:
        return self._diet_plans

    def workouts_for_goal(self, goal: GoalType) -> List[WorkoutProgram]:
        return [p for p in self._workout_programs if p.target_goal == goal]

    def diets_for_goal(self, goal: GoalType) -> List[DietPlan]:
        return [p for p in self._diet_plans if p.target_goal == goal]

    def get_workout_program(self, program_id: str) -> Optional[WorkoutProgram]:
        for program in self._workout_programs:
            if program.program_id == program_id:
                return program
        return None

    def get_diet_plan(self, plan_id: str) -> Optional[DietPlan]:
        for plan in self._diet_plans:
            if plan.plan_id == plan_id:
                return plan
        return None

    @classmethod
    def from_directory(cls, directory: Path) -> "CatalogRepository":
        """
        Load a catalog from a directory holding the two JSON data files.

        Args:
            directory: Folder with workout_programs.json and diet_plans.json

        Returns:
            CatalogRepository with validated records

        Raises:
            CatalogError: If a file is missing or does not validate
        """
        directory = Path(directory)
        try:
            workout_text = (directory / WORKOUT_PROGRAMS_FILE).read_text(encoding="utf-8")
            diet_text = (directory / DIET_PLANS_FILE).read_text(encoding="utf-8")
        except OSError as e:
            raise CatalogError(f"Cannot read catalog files in {directory}: {e}") from e
        return cls._from_json(workout_text, diet_text, source=str(directory))

    @classmethod
    def _from_json(cls, workout_text: str, diet_text: str, source: str) -> "CatalogRepository":
        try:
            workouts = _workout_adapter.validate_python(json.loads(workout_text))
            diets = _diet_adapter.validate_python(json.loads(diet_text))
        except (json.JSONDecodeError, ValidationError) as e:
            raise CatalogError(f"Invalid catalog data in {source}: {e}") from e

        logger.info(
            f"Loaded catalog from {source}: {len(workouts)} workout programs, {len(diets)} diet plans"
        )
        return cls(workouts, diets)


@lru_cache(maxsize=1)
def load_default_catalog() -> CatalogRepository:
    """Catalog bundled with the package, loaded once per process."""
    return CatalogRepository.from_directory(DATA_DIR)
