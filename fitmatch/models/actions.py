"""Profile changes the AI trainer may propose.

Each action type is its own model carrying a strongly-typed payload, and the
union is discriminated on ``type``. Payload values are validated strictly: a
string where a number is expected, or an out-of-range value, is rejected
rather than coerced or clamped.
"""

from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt, TypeAdapter, ValidationError, field_validator

from fitmatch.exceptions import InvalidActionError

ACTION_TYPES = (
    "update_target_weight",
    "update_workout_days",
    "update_goal_type",
    "add_rest_day",
    "increase_protein",
    "suggest_routine_change",
    "none",
)

INVALID_PAYLOAD_MESSAGES = {
    "update_target_weight": "A valid target weight is required.",
    "update_workout_days": "A valid number of workout days is required (1-7).",
    "update_goal_type": "A valid goal type is required (bulk, cut or maintain).",
}
UNKNOWN_ACTION_MESSAGE = "Unknown action type."
MALFORMED_ACTION_MESSAGE = "The proposed action could not be read."


class ActionBase(BaseModel):
    label: str = ""
    description: str = ""
    confirm_message: str = Field("", alias="confirmMessage")

    class Config:
        populate_by_name = True


class TargetWeightData(BaseModel):
    target_weight: Union[StrictInt, StrictFloat] = Field(..., alias="targetWeight")

    @field_validator("target_weight")
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("target weight must be positive")
        return value

    class Config:
        populate_by_name = True


class WorkoutDaysData(BaseModel):
    workout_days_per_week: StrictInt = Field(..., alias="workoutDaysPerWeek", ge=1, le=7)

    class Config:
        populate_by_name = True


class GoalTypeData(BaseModel):
    goal_type: Literal["bulk", "cut", "maintain"] = Field(..., alias="goalType")

    class Config:
        populate_by_name = True


class RestDayData(BaseModel):
    reason: str = ""


class ProteinData(BaseModel):
    amount: str = ""


class RoutineChangeData(BaseModel):
    suggestion: str = ""


class UpdateTargetWeightAction(ActionBase):
    type: Literal["update_target_weight"]
    data: TargetWeightData


class UpdateWorkoutDaysAction(ActionBase):
    type: Literal["update_workout_days"]
    data: WorkoutDaysData


class UpdateGoalTypeAction(ActionBase):
    type: Literal["update_goal_type"]
    data: GoalTypeData


class AddRestDayAction(ActionBase):
    type: Literal["add_rest_day"]
    data: RestDayData = Field(default_factory=RestDayData)


class IncreaseProteinAction(ActionBase):
    type: Literal["increase_protein"]
    data: ProteinData = Field(default_factory=ProteinData)


class SuggestRoutineChangeAction(ActionBase):
    type: Literal["suggest_routine_change"]
    data: RoutineChangeData = Field(default_factory=RoutineChangeData)


class NoAction(ActionBase):
    type: Literal["none"]
    data: Dict[str, Any] = Field(default_factory=dict)


ProposedAction = Annotated[
    Union[
        UpdateTargetWeightAction,
        UpdateWorkoutDaysAction,
        UpdateGoalTypeAction,
        AddRestDayAction,
        IncreaseProteinAction,
        SuggestRoutineChangeAction,
        NoAction,
    ],
    Field(discriminator="type"),
]

_action_adapter: TypeAdapter = TypeAdapter(ProposedAction)


def validate_action(raw: Any) -> ProposedAction:
    """Validate a raw action dict into its typed model.

    Raises:
        InvalidActionError: with a user-facing message when the type is
            unknown or the payload does not match the type's shape.
    """
    if not isinstance(raw, dict):
        raise InvalidActionError(MALFORMED_ACTION_MESSAGE)

    action_type = raw.get("type")
    if action_type not in ACTION_TYPES:
        raise InvalidActionError(UNKNOWN_ACTION_MESSAGE, action_type=str(action_type))

    try:
        return _action_adapter.validate_python(raw)
    except ValidationError as e:
        message = INVALID_PAYLOAD_MESSAGES.get(action_type, MALFORMED_ACTION_MESSAGE)
        raise InvalidActionError(message, action_type=action_type) from e
