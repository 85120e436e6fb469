from unittest.mock import MagicMock

import pytest

from fitmatch.exceptions import InvalidActionError, StorageError
from fitmatch.memory.base import BaseStorage
from fitmatch.models.actions import (
    INVALID_PAYLOAD_MESSAGES,
    UNKNOWN_ACTION_MESSAGE,
    AddRestDayAction,
    UpdateTargetWeightAction,
    validate_action,
)
from fitmatch.models.enums import GoalChoice
from fitmatch.utils.action_handlers import STORAGE_FAILED_MESSAGE, apply_action


class TestValidateAction:

    def test_target_weight(self):
        action = validate_action(
            {"type": "update_target_weight", "label": "Target", "data": {"targetWeight": 68}, "confirmMessage": "OK?"}
        )
        assert isinstance(action, UpdateTargetWeightAction)
        assert action.data.target_weight == 68
        assert action.confirm_message == "OK?"

    def test_informational_action_without_data(self):
        assert isinstance(validate_action({"type": "add_rest_day"}), AddRestDayAction)

    def test_unknown_type(self):
        with pytest.raises(InvalidActionError) as exc_info:
            validate_action({"type": "delete_account", "data": {}})
        assert str(exc_info.value) == UNKNOWN_ACTION_MESSAGE
        assert exc_info.value.action_type == "delete_account"

    @pytest.mark.parametrize(
        "action_type,data",
        [
            ("update_target_weight", {"targetWeight": "70"}),
            ("update_target_weight", {"targetWeight": -5}),
            ("update_target_weight", {}),
            ("update_workout_days", {"workoutDaysPerWeek": 8}),
            ("update_workout_days", {"workoutDaysPerWeek": 0}),
            ("update_workout_days", {"workoutDaysPerWeek": 4.5}),
            ("update_goal_type", {"goalType": "shred"}),
        ],
    )
    def test_invalid_payloads_are_not_coerced(self, action_type, data):
        with pytest.raises(InvalidActionError) as exc_info:
            validate_action({"type": action_type, "data": data})
        assert str(exc_info.value) == INVALID_PAYLOAD_MESSAGES[action_type]

    def test_non_dict(self):
        with pytest.raises(InvalidActionError):
            validate_action(["update_target_weight"])


class TestApplyAction:

    @pytest.fixture
    def profile_storage(self, storage):
        storage.create_profile("u1")
        return storage

    def test_update_target_weight(self, profile_storage):
        result = apply_action(profile_storage, "u1", {"type": "update_target_weight", "data": {"targetWeight": 68.5}})

        assert result.success and result.updated
        assert result.data == {"target_weight": 68.5}
        assert result.message == "Your target weight is now 68.5kg! 💪"
        assert profile_storage.get_profile("u1").target_weight == 68.5

    def test_update_workout_days(self, profile_storage):
        result = apply_action(profile_storage, "u1", {"type": "update_workout_days", "data": {"workoutDaysPerWeek": 4}})
        assert result.data == {"workout_days_per_week": 4}
        assert profile_storage.get_profile("u1").workout_days_per_week == 4

    def test_update_goal_type(self, profile_storage):
        result = apply_action(profile_storage, "u1", {"type": "update_goal_type", "data": {"goalType": "cut"}})

        assert result.data == {"goal_type": "cut"}
        assert result.message == "Your goal is now Diet 🔥!"
        assert profile_storage.get_profile("u1").goal_type == GoalChoice.CUT

    def test_invalid_action_changes_nothing(self, profile_storage):
        result = apply_action(profile_storage, "u1", {"type": "update_workout_days", "data": {"workoutDaysPerWeek": 9}})

        assert not result.success
        assert result.message == INVALID_PAYLOAD_MESSAGES["update_workout_days"]
        assert profile_storage.get_profile("u1").workout_days_per_week == 3

    @pytest.mark.parametrize("action_type", ["add_rest_day", "increase_protein", "suggest_routine_change", "none"])
    def test_informational_actions_do_not_write(self, action_type):
        storage = MagicMock(spec=BaseStorage)
        result = apply_action(storage, "u1", {"type": action_type})

        assert result.success
        assert not result.updated
        storage.update_profile.assert_not_called()

    def test_reminder_message_includes_detail(self):
        storage = MagicMock(spec=BaseStorage)
        result = apply_action(storage, "u1", {"type": "increase_protein", "data": {"amount": "+30g a day"}})
        assert result.message == "Try getting more protein! 🥩 +30g a day"

    def test_storage_failure(self):
        storage = MagicMock(spec=BaseStorage)
        storage.update_profile.side_effect = StorageError("offline")

        result = apply_action(storage, "u1", {"type": "update_target_weight", "data": {"targetWeight": 70}})

        assert not result.success
        assert result.message == STORAGE_FAILED_MESSAGE
