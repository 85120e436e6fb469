"""Local-first editing of today's log with best-effort persistence."""

import logging
from datetime import date
from typing import Optional

from fitmatch.exceptions import StorageError
from fitmatch.memory.base import BaseStorage
from fitmatch.models.daily_log import DailyLog
from fitmatch.models.enums import MealSlot

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Couldn't save your changes. Please try again."


class ReconciliationPolicy:
    """Decides which log the session keeps after a failed save."""

    def reconcile(self, previous: DailyLog, attempted: DailyLog, error: StorageError) -> DailyLog:
        raise NotImplementedError


class KeepLocalPolicy(ReconciliationPolicy):
    """Keep the optimistic change; the next successful save carries it."""

    def reconcile(self, previous: DailyLog, attempted: DailyLog, error: StorageError) -> DailyLog:
        return attempted


class RevertPolicy(ReconciliationPolicy):
    """Roll back to the last state known to be saved."""

    def reconcile(self, previous: DailyLog, attempted: DailyLog, error: StorageError) -> DailyLog:
        return previous


class DailyLogSession:
    """
    Holds one user's log for one date and applies edits to it immediately.

    Every edit updates the local log first, then tries to save it. A save
    failure never propagates: it is logged, ``last_error`` is set to a
    user-facing message, and the policy picks the log to keep.
    """

    def __init__(
        self,
        storage: BaseStorage,
        user_id: str,
        day: Optional[date] = None,
        policy: Optional[ReconciliationPolicy] = None,
    ) -> None:
        self.storage = storage
        self.user_id = user_id
        self.day = day or date.today()
        self.policy = policy or KeepLocalPolicy()
        self.last_error: Optional[str] = None
        self.log = self._load()

    def _load(self) -> DailyLog:
        try:
            return self.storage.get_or_create_daily_log(self.user_id, self.day)
        except StorageError as e:
            logger.error(f"Failed to load daily log for {self.user_id} on {self.day}: {e}", exc_info=True)
            self.last_error = SAVE_FAILED_MESSAGE
            return DailyLog(user_id=self.user_id, date=self.day)

    def _commit(self, attempted: DailyLog) -> DailyLog:
        previous = self.log
        self.log = attempted
        try:
            self.storage.save_daily_log(attempted)
            self.last_error = None
        except StorageError as e:
            logger.error(f"Failed to save daily log {attempted.log_id}: {e}", exc_info=True)
            self.last_error = SAVE_FAILED_MESSAGE
            self.log = self.policy.reconcile(previous, attempted, e)
        return self.log

    def toggle_meal(self, slot: MealSlot) -> DailyLog:
        return self._commit(self.log.toggle_meal(slot))

    def toggle_exercise(self, exercise_name: str) -> DailyLog:
        return self._commit(self.log.toggle_exercise(exercise_name))

    def set_workout_part(self, part: str) -> DailyLog:
        if self.log.workout_part == part:
            return self.log
        return self._commit(self.log.model_copy(update={"workout_part": part}))

    def log_weight(self, weight: float) -> DailyLog:
        """Record today's weight and copy it onto the profile's current weight."""
        log = self._commit(self.log.with_weight(weight))
        if self.last_error is None:
            try:
                self.storage.update_weight(self.user_id, weight)
            except StorageError as e:
                logger.error(f"Failed to update current weight for {self.user_id}: {e}", exc_info=True)
                self.last_error = SAVE_FAILED_MESSAGE
        return log
