"""Map an explicit user choice or a BMI value onto a goal category."""

from typing import Optional, Union

from fitmatch.models.enums import GoalChoice, GoalType

# Asian-population cutoffs, not the WHO 25/30 ones.
UNDERWEIGHT_BMI = 18.5
OVERWEIGHT_BMI = 23.0

GOAL_BY_CHOICE = {
    GoalChoice.BULK: GoalType.BULK_UP,
    GoalChoice.CUT: GoalType.DIET,
    GoalChoice.MAINTAIN: GoalType.MAINTENANCE,
}

CHOICE_BY_GOAL = {goal: choice for choice, goal in GOAL_BY_CHOICE.items()}

GOAL_LABELS = {
    GoalType.BULK_UP: "Bulk up 💪",
    GoalType.DIET: "Diet 🔥",
    GoalType.MAINTENANCE: "Maintain ⚖️",
}


def classify_goal(bmi: float, explicit_goal: Optional[Union[GoalChoice, str]] = None) -> GoalType:
    """Return the goal category for a user.

    An explicit choice always wins regardless of BMI. Without one, BMI below
    18.5 means bulking, above 23.0 means dieting, anything else maintenance.
    """
    if explicit_goal:
        return GOAL_BY_CHOICE[GoalChoice(explicit_goal)]

    if bmi < UNDERWEIGHT_BMI:
        return GoalType.BULK_UP
    if bmi > OVERWEIGHT_BMI:
        return GoalType.DIET
    return GoalType.MAINTENANCE


def goal_choice_for(goal: GoalType) -> GoalChoice:
    return CHOICE_BY_GOAL[goal]


def goal_label(goal: GoalType) -> str:
    return GOAL_LABELS[goal]
