from fitmatch.utils.prompts import QUICK_REPLIES, SYSTEM_PROMPT, get_initial_greeting, get_quick_replies


class TestPrompts:

    def test_system_prompt_lists_every_action(self):
        for action_type in ("update_target_weight", "update_workout_days", "update_goal_type", "add_rest_day"):
            assert action_type in SYSTEM_PROMPT
        assert "<actions>" in SYSTEM_PROMPT

    def test_quick_replies(self):
        assert get_quick_replies("diet") == QUICK_REPLIES["diet"]
        assert get_quick_replies("unknown") == QUICK_REPLIES["general"]

    def test_greeting_for_bulk(self, make_profile):
        greeting = get_initial_greeting(make_profile(nickname="Minho", current_weight=61.5))

        assert greeting.startswith("Hi Minho! 💪")
        assert "3.5kg left to gain for your bulk-up goal!" in greeting

    def test_greeting_for_cut(self, make_profile):
        greeting = get_initial_greeting(make_profile(goal_type="cut", current_weight=80, target_weight=72))
        assert "8.0kg left to lose for your diet goal!" in greeting

    def test_greeting_at_goal(self, make_profile):
        greeting = get_initial_greeting(make_profile(current_weight=65))
        assert greeting.endswith("Ask me anything about workouts, diet or your goal!")

    def test_anonymous_greeting(self):
        assert get_initial_greeting(None).startswith("Hi there!")
