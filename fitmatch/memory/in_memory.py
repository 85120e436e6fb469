"""Process-local storage backend."""

from datetime import date
from typing import Dict, List, Optional, Tuple

from fitmatch.memory.base import BaseStorage
from fitmatch.models.daily_log import DailyLog
from fitmatch.models.user_profile import UserProfile
from fitmatch.models.workout_log import WorkoutRecord


class InMemoryStorage(BaseStorage):
    """Dict-backed storage; copies on every read and write so callers never share state."""

    def __init__(self) -> None:
        self.profiles: Dict[str, UserProfile] = {}
        self.daily_logs: Dict[Tuple[str, date], DailyLog] = {}
        self.workout_records: Dict[str, WorkoutRecord] = {}

    def _read_profile(self, user_id: str) -> Optional[UserProfile]:
        profile = self.profiles.get(user_id)
        return profile.model_copy(deep=True) if profile else None

    def _write_profile(self, profile: UserProfile) -> None:
        self.profiles[profile.user_id] = profile.model_copy(deep=True)

    def _read_daily_log(self, user_id: str, day: date) -> Optional[DailyLog]:
        log = self.daily_logs.get((user_id, day))
        return log.model_copy(deep=True) if log else None

    def _write_daily_log(self, log: DailyLog) -> None:
        self.daily_logs[(log.user_id, log.date)] = log.model_copy(deep=True)

    def _read_daily_logs(self, user_id: str) -> List[DailyLog]:
        return [log.model_copy(deep=True) for (owner, _), log in self.daily_logs.items() if owner == user_id]

    def _write_workout_record(self, record: WorkoutRecord) -> None:
        self.workout_records[record.record_id] = record.model_copy(deep=True)

    def _read_workout_records(self, user_id: str) -> List[WorkoutRecord]:
        return [r.model_copy(deep=True) for r in self.workout_records.values() if r.user_id == user_id]
