"""Human-readable guidance for a freshly matched program."""

from typing import List

from fitmatch.models.enums import GoalType
from fitmatch.models.user_profile import UserProfile

GOAL_TIPS = {
    GoalType.BULK_UP: (
        "💪 Get protein in with every meal to support weight gain",
        "🍚 Don't be afraid of carbohydrates",
    ),
    GoalType.DIET: (
        "🥗 Eat your vegetables first to feel full sooner",
        "💧 Staying well hydrated matters",
    ),
    GoalType.MAINTENANCE: (
        "⚖️ Keep a balanced diet and a regular workout schedule",
        "📏 Weigh yourself weekly to catch drift early",
    ),
}

VERY_LOW_BMI = 17
OBESE_BMI = 30
HIGH_FREQUENCY_DAYS = 5

LOW_BMI_WARNING = "⚠️ Your BMI is very low. Consider consulting a doctor"
HIGH_BMI_WARNING = "⚠️ Your BMI is in the obese range. Consider consulting a professional"
LACTOSE_TIP = "🥛 Choose a whey protein isolate (WPI) supplement"
RECOVERY_TIP = "😴 Enough sleep (7-8 hours) is essential for recovery"


def generate_recommendations(profile: UserProfile, goal: GoalType, bmi: float) -> List[str]:
    """
    Build advice strings in presentation order.

    Goal tips come first, then a BMI safety warning, then dietary-flag
    and training-frequency tips.
    """
    recommendations = list(GOAL_TIPS[goal])

    if goal == GoalType.BULK_UP and bmi < VERY_LOW_BMI:
        recommendations.append(LOW_BMI_WARNING)
    elif goal == GoalType.DIET and bmi > OBESE_BMI:
        recommendations.append(HIGH_BMI_WARNING)

    if profile.lactose_intolerance:
        recommendations.append(LACTOSE_TIP)

    if profile.workout_days_per_week >= HIGH_FREQUENCY_DAYS:
        recommendations.append(RECOVERY_TIP)

    return recommendations
