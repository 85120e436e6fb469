from datetime import timedelta

from fitmatch.models.daily_log import DailyLog
from fitmatch.utils.context_builder import build_system_prompt, format_log_context, format_profile_context
from fitmatch.utils.prompts import SYSTEM_PROMPT


class TestContextBuilder:

    def test_profile_context(self, make_profile):
        text = format_profile_context(make_profile(nickname="Minho", lactose_intolerance=True, allergies=["peanuts"]))

        assert text.startswith("USER PROFILE:")
        assert "- Nickname: Minho" in text
        assert "- Target weight: 65kg" in text
        assert "- Goal: Bulk up (gain weight)" in text
        assert "- Lactose intolerance: yes" in text
        assert "- Allergies: peanuts" in text

    def test_log_context_newest_first_and_capped(self, today):
        logs = [
            DailyLog(user_id="u1", date=today - timedelta(days=i), completed_meals=["breakfast"] * (i % 2))
            for i in range(10)
        ]
        lines = format_log_context(logs).splitlines()

        assert lines[0] == "LAST 7 DAYS:"
        assert len(lines) == 8
        assert lines[1] == f"- {today.isoformat()}: meals 0/5, exercises 0 done"
        assert lines[2].endswith("meals 1/5, exercises 0 done")

    def test_no_logs(self):
        assert format_log_context([]) == ""

    def test_system_prompt_sections(self, make_profile, today):
        prompt = build_system_prompt(make_profile(), [DailyLog(user_id="u1", date=today)])

        assert prompt.startswith(SYSTEM_PROMPT.rstrip())
        assert "USER PROFILE:" in prompt
        assert "LAST 7 DAYS:" in prompt

    def test_anonymous_prompt(self):
        assert build_system_prompt(None) == SYSTEM_PROMPT.rstrip()
