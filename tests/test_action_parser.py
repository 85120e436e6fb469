from fitmatch.models.actions import UpdateGoalTypeAction, UpdateTargetWeightAction
from fitmatch.utils.action_parser import parse_reply


class TestParseReply:

    def test_plain_reply(self):
        assert parse_reply("  Keep it up! 💪 ") == ("Keep it up! 💪", [])

    def test_actions_block(self):
        text = (
            "Sounds good, let's aim for 68kg.\n"
            '<actions>[{"type": "update_target_weight", "data": {"targetWeight": 68}}]</actions>'
        )
        reply, actions = parse_reply(text)

        assert reply == "Sounds good, let's aim for 68kg."
        assert len(actions) == 1
        assert isinstance(actions[0], UpdateTargetWeightAction)

    def test_single_object_block(self):
        _, actions = parse_reply('Done <actions>{"type": "update_goal_type", "data": {"goalType": "maintain"}}</actions>')
        assert isinstance(actions[0], UpdateGoalTypeAction)

    def test_invalid_items_are_dropped(self):
        text = (
            "Ok\n<actions>["
            '{"type": "update_workout_days", "data": {"workoutDaysPerWeek": 12}},'
            '{"type": "format_disk"},'
            '{"type": "add_rest_day", "data": {"reason": "sore legs"}}'
            "]</actions>"
        )
        reply, actions = parse_reply(text)

        assert reply == "Ok"
        assert [a.type for a in actions] == ["add_rest_day"]

    def test_unparseable_block_is_removed(self):
        reply, actions = parse_reply("Ok <actions>not json</actions>")
        assert reply == "Ok"
        assert actions == []

    def test_fenced_json_actions(self):
        text = 'Here you go\n```json\n[{"type": "increase_protein", "data": {"amount": "20g"}}]\n```'
        reply, actions = parse_reply(text)

        assert reply == "Here you go"
        assert actions[0].type == "increase_protein"

    def test_fenced_json_without_types_stays_in_reply(self):
        text = 'Example macros:\n```json\n{"protein": 150, "carbs": 300}\n```'
        reply, actions = parse_reply(text)

        assert reply == text.strip()
        assert actions == []
