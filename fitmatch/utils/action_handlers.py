"""Apply AI-proposed actions the user has confirmed."""

import logging
from typing import Any, Dict, Union

from pydantic import BaseModel, Field

from fitmatch.engine.goal_classifier import GOAL_BY_CHOICE, goal_label
from fitmatch.exceptions import InvalidActionError, StorageError
from fitmatch.memory.base import BaseStorage
from fitmatch.models.actions import (
    AddRestDayAction,
    IncreaseProteinAction,
    NoAction,
    ProposedAction,
    SuggestRoutineChangeAction,
    UpdateGoalTypeAction,
    UpdateTargetWeightAction,
    UpdateWorkoutDaysAction,
    validate_action,
)
from fitmatch.models.enums import GoalChoice

logger = logging.getLogger(__name__)

STORAGE_FAILED_MESSAGE = "Couldn't save the change. Please try again later."


class ActionResult(BaseModel):
    success: bool
    message: str
    updated: bool = Field(False, description="True when the profile was changed")
    data: Dict[str, Any] = Field(default_factory=dict, description="Profile fields written")


def _profile_update(action: ProposedAction) -> Dict[str, Any]:
    if isinstance(action, UpdateTargetWeightAction):
        return {"target_weight": float(action.data.target_weight)}
    if isinstance(action, UpdateWorkoutDaysAction):
        return {"workout_days_per_week": action.data.workout_days_per_week}
    if isinstance(action, UpdateGoalTypeAction):
        return {"goal_type": GoalChoice(action.data.goal_type)}
    return {}


def _result_message(action: ProposedAction) -> str:
    if isinstance(action, UpdateTargetWeightAction):
        return f"Your target weight is now {action.data.target_weight:g}kg! 💪"
    if isinstance(action, UpdateWorkoutDaysAction):
        return f"You'll now work out {action.data.workout_days_per_week} times a week! 🏋️"
    if isinstance(action, UpdateGoalTypeAction):
        label = goal_label(GOAL_BY_CHOICE[GoalChoice(action.data.goal_type)])
        return f"Your goal is now {label}!"
    if isinstance(action, AddRestDayAction):
        return f"Remember how important rest is! 😴 {action.data.reason}".strip()
    if isinstance(action, IncreaseProteinAction):
        return f"Try getting more protein! 🥩 {action.data.amount}".strip()
    if isinstance(action, SuggestRoutineChangeAction):
        return f"Give the new routine a try! 🔄 {action.data.suggestion}".strip()
    if isinstance(action, NoAction):
        return "No changes needed."
    raise InvalidActionError(f"Unhandled action {type(action).__name__}")


def apply_action(
    storage: BaseStorage, user_id: str, action: Union[ProposedAction, Dict[str, Any]]
) -> ActionResult:
    """
    Validate and apply one action.

    Only the three update_* types write to the profile; the others just
    produce a reminder message.

    Args:
        storage: Storage backend holding the profile
        user_id: Owner of the profile
        action: Typed action or the raw dict proposed by the model

    Returns:
        ActionResult; failures carry a user-facing message and change nothing
    """
    if isinstance(action, dict):
        try:
            action = validate_action(action)
        except InvalidActionError as e:
            logger.warning(f"Rejected {e.action_type} action for {user_id}: {e}")
            return ActionResult(success=False, message=str(e))

    message = _result_message(action)
    update = _profile_update(action)
    if not update:
        return ActionResult(success=True, message=message)

    try:
        storage.update_profile(user_id, **update)
    except StorageError as e:
        logger.error(f"Failed to apply {action.type} for {user_id}: {e}", exc_info=True)
        return ActionResult(success=False, message=STORAGE_FAILED_MESSAGE)

    logger.info(f"Applied {action.type} for {user_id}: {update}")
    data = {k: v.value if isinstance(v, GoalChoice) else v for k, v in update.items()}
    return ActionResult(success=True, message=message, updated=True, data=data)
