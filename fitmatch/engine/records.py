"""Personal-record bookkeeping for logged sets."""

from datetime import date
from typing import Iterable, Optional

from fitmatch.engine.formulas import estimate_one_rep_max
from fitmatch.models.workout_log import WorkoutRecord


def workout_record_id(user_id: str, day: date, exercise_name: str, set_number: int) -> str:
    return f"{user_id}_{day.isoformat()}_{exercise_name}_{set_number}"


def is_personal_record(weight: float, previous: Iterable[WorkoutRecord]) -> bool:
    """
    A set is a PR when it is the first one logged for the exercise or when
    its weight beats every earlier set. Reps are not considered.
    """
    previous_weights = [record.weight for record in previous]
    if not previous_weights:
        return True
    return weight > max(previous_weights)


def best_one_rep_max(records: Iterable[WorkoutRecord]) -> Optional[float]:
    """Highest estimated 1RM across the given sets, None when there are none."""
    estimates = [estimate_one_rep_max(r.weight, r.reps) for r in records if r.reps > 0]
    return max(estimates) if estimates else None


def last_record(records: Iterable[WorkoutRecord]) -> Optional[WorkoutRecord]:
    records = list(records)
    if not records:
        return None
    return max(records, key=lambda r: r.created_at)
