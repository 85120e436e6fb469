"""Storage interface shared by every persistence backend."""

import logging
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, List, Optional

from fitmatch.engine.records import is_personal_record, workout_record_id
from fitmatch.exceptions import StorageError
from fitmatch.models.daily_log import DailyLog
from fitmatch.models.user_profile import UserProfile
from fitmatch.models.workout_log import WorkoutRecord

logger = logging.getLogger(__name__)

# Set by the backend on create/update, never by callers.
_MANAGED_FIELDS = {"user_id", "created_at", "updated_at", "start_date"}


def _clean(fields: dict) -> dict:
    """Drop unset values and backend-managed fields from a partial update."""
    return {k: v for k, v in fields.items() if v is not None and k not in _MANAGED_FIELDS}


class BaseStorage(ABC):
    """
    Profile, daily-log and workout-record persistence.

    Backends implement the ``_read_*``/``_write_*`` primitives; merge
    semantics, defaults and personal-record checks live here so every
    backend behaves the same.
    """

    # --- primitives -------------------------------------------------------

    @abstractmethod
    def _read_profile(self, user_id: str) -> Optional[UserProfile]:
        ...

    @abstractmethod
    def _write_profile(self, profile: UserProfile) -> None:
        ...

    @abstractmethod
    def _read_daily_log(self, user_id: str, day: date) -> Optional[DailyLog]:
        ...

    @abstractmethod
    def _write_daily_log(self, log: DailyLog) -> None:
        ...

    @abstractmethod
    def _read_daily_logs(self, user_id: str) -> List[DailyLog]:
        ...

    @abstractmethod
    def _write_workout_record(self, record: WorkoutRecord) -> None:
        ...

    @abstractmethod
    def _read_workout_records(self, user_id: str) -> List[WorkoutRecord]:
        ...

    # --- profiles ---------------------------------------------------------

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        return self._read_profile(user_id)

    def create_profile(self, user_id: str, **fields: Any) -> UserProfile:
        """
        Create a profile from the defaults merged with ``fields``.

        Args:
            user_id: Identity reference of the new user
            **fields: Profile attributes overriding the defaults; None values are ignored

        Returns:
            The stored profile
        """
        now = datetime.now()
        profile = UserProfile(
            user_id=user_id, **_clean(fields), start_date=now, created_at=now, updated_at=now
        )
        self._write_profile(profile)
        logger.info(f"Created profile for user {user_id}")
        return profile

    def update_profile(self, user_id: str, **fields: Any) -> UserProfile:
        """
        Merge ``fields`` into an existing profile and bump ``updated_at``.

        Raises:
            StorageError: If the profile does not exist
        """
        profile = self._require_profile(user_id)
        data = profile.model_dump()
        data.update(_clean(fields))
        data["updated_at"] = datetime.now()
        updated = UserProfile.model_validate(data)
        self._write_profile(updated)
        logger.info(f"Updated profile for user {user_id}: {sorted(_clean(fields))}")
        return updated

    def complete_onboarding(self, user_id: str, **fields: Any) -> UserProfile:
        """Store the questionnaire answers and restart the progress clock."""
        profile = self._require_profile(user_id)
        data = profile.model_dump()
        data.update(_clean(fields))
        now = datetime.now()
        data.update(onboarding_completed=True, start_date=now, updated_at=now)
        updated = UserProfile.model_validate(data)
        self._write_profile(updated)
        logger.info(f"User {user_id} completed onboarding")
        return updated

    def update_weight(self, user_id: str, weight: float) -> UserProfile:
        return self.update_profile(user_id, current_weight=weight)

    def _require_profile(self, user_id: str) -> UserProfile:
        profile = self._read_profile(user_id)
        if profile is None:
            raise StorageError(f"No profile for user {user_id}")
        return profile

    # --- daily logs -------------------------------------------------------

    def get_or_create_daily_log(self, user_id: str, day: Optional[date] = None) -> DailyLog:
        """Return the user's log for ``day`` (today by default), creating an empty one."""
        day = day or date.today()
        log = self._read_daily_log(user_id, day)
        if log is not None:
            return log

        log = DailyLog(user_id=user_id, date=day)
        self._write_daily_log(log)
        logger.debug(f"Created daily log {log.log_id}")
        return log

    def save_daily_log(self, log: DailyLog) -> DailyLog:
        self._write_daily_log(log)
        return log

    def list_daily_logs(
        self, user_id: str, start: Optional[date] = None, end: Optional[date] = None
    ) -> List[DailyLog]:
        """Logs with ``start <= date <= end``, oldest first."""
        logs = [
            log
            for log in self._read_daily_logs(user_id)
            if (start is None or log.date >= start) and (end is None or log.date <= end)
        ]
        return sorted(logs, key=lambda log: log.date)

    # --- workout records --------------------------------------------------

    def add_workout_record(
        self,
        user_id: str,
        exercise_name: str,
        set_number: int,
        weight: float,
        reps: int,
        day: Optional[date] = None,
    ) -> WorkoutRecord:
        """
        Store one set, flagging it as a PR against earlier sets of the exercise.

        Logging the same set number again on the same day replaces that set,
        so the replaced version is left out of the PR check.
        """
        day = day or date.today()
        record_id = workout_record_id(user_id, day, exercise_name, set_number)
        previous = [r for r in self.list_workout_records(user_id, exercise_name) if r.record_id != record_id]
        record = WorkoutRecord(
            record_id=record_id,
            user_id=user_id,
            date=day,
            exercise_name=exercise_name,
            set_number=set_number,
            weight=weight,
            reps=reps,
            is_pr=is_personal_record(weight, previous),
        )
        self._write_workout_record(record)
        if record.is_pr:
            logger.info(f"New PR for {user_id}: {exercise_name} {weight}kg x {reps}")
        return record

    def list_workout_records(self, user_id: str, exercise_name: Optional[str] = None) -> List[WorkoutRecord]:
        records = self._read_workout_records(user_id)
        if exercise_name is not None:
            records = [r for r in records if r.exercise_name == exercise_name]
        return sorted(records, key=lambda r: r.created_at)
