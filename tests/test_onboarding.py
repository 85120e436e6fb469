import pytest
from pydantic import ValidationError

from fitmatch.engine.matcher import ProgramMatcher
from fitmatch.models.enums import GoalType
from fitmatch.models.onboarding import OnboardingAnswers


class TestOnboarding:

    def test_profile_fields(self):
        fields = OnboardingAnswers(nickname="Minho", current_weight=58.5, target_weight=65).to_profile_fields()

        assert fields["start_weight"] == 58.5
        assert fields["current_weight"] == 58.5
        assert fields["nickname"] == "Minho"

    @pytest.mark.parametrize(
        "field,value",
        [("height", 90), ("current_weight", 300), ("workout_days_per_week", 1), ("birth_year", 2015)],
    )
    def test_out_of_range_answers(self, field, value):
        with pytest.raises(ValidationError):
            OnboardingAnswers(**{field: value})

    def test_onboarding_to_match(self, storage, catalog, today):
        answers = OnboardingAnswers(birth_year=today.year - 25, workout_days_per_week=3)
        storage.create_profile("local-user")
        profile = storage.complete_onboarding("local-user", **answers.to_profile_fields())

        matched = ProgramMatcher(catalog).match(profile, today=today)

        assert profile.onboarding_completed
        assert matched.goal_type == GoalType.BULK_UP
        assert matched.workout.program_id == "BULK_UP_3_GYM_BEGINNER"
