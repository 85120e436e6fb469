"""System prompt, quick replies and greetings for the AI trainer."""

from typing import Dict, List, Optional

from fitmatch.models.enums import GoalChoice
from fitmatch.models.user_profile import UserProfile

SYSTEM_PROMPT = """You are the personal AI trainer of the FitMatch app. Talk in a friendly, motivating way.

ROLE:
- Give expert advice on workouts and diet
- Guide the user toward their personal weight goal
- Motivate and encourage
- Reply in the language the user writes in

COMMUNICATION STYLE:
- Friendly and encouraging tone
- Use emoji where it helps
- Give concrete, actionable advice
- Keep answers short (around 200 characters), go into detail only when asked

IMPORTANT:
- Avoid medical advice; suggest a professional for serious health issues
- Always respect the user's restrictions (lactose intolerance, vegetarian diet, etc.)
- Never recommend excessive training or extreme diets
- Emphasize gradual progress

PROPOSING CHANGES:
When the user agrees to change their plan, append exactly one block at the very end of your reply:
<actions>[{"type": "...", "label": "...", "description": "...", "data": {...}, "confirmMessage": "..."}]</actions>
Allowed types and data:
- update_target_weight: {"targetWeight": <number in kg>}
- update_workout_days: {"workoutDaysPerWeek": <integer 1-7>}
- update_goal_type: {"goalType": "bulk" | "cut" | "maintain"}
- add_rest_day: {"reason": "<text>"}
- increase_protein: {"amount": "<text>"}
- suggest_routine_change: {"suggestion": "<text>"}
Never write the block otherwise. The user confirms every change before it is applied.
"""

GOAL_DESCRIPTIONS = {
    GoalChoice.BULK: "Bulk up (gain weight)",
    GoalChoice.CUT: "Diet (lose weight)",
    GoalChoice.MAINTAIN: "Maintain weight",
}

EXPERIENCE_DESCRIPTIONS = {
    "beginner": "Beginner (under 6 months)",
    "intermediate": "Intermediate (6 months to 2 years)",
    "advanced": "Advanced (over 2 years)",
}

LIFESTYLE_DESCRIPTIONS = {
    "office": "Office worker",
    "student": "Student",
    "active": "Active",
}

QUICK_REPLIES: Dict[str, List[str]] = {
    "greeting": [
        "What should I train today?",
        "What should I eat today?",
        "My weight isn't going up 😢",
        "Motivate me!",
    ],
    "workout": [
        "How much should I increase the weight?",
        "I'm sore, can I still work out?",
        "Should I add more sets?",
        "When should I do cardio?",
    ],
    "diet": [
        "Recommend a protein supplement",
        "Is a late-night snack OK?",
        "Recommend bulking snacks",
        "What do I do at a work dinner?",
    ],
    "general": [
        "Am I doing well this week?",
        "How far am I from my goal?",
        "Plan next week for me",
        "I'm in a slump 😞",
    ],
}


def get_quick_replies(context: str) -> List[str]:
    """Suggested user messages for a chat context; unknown contexts get the general set."""
    return QUICK_REPLIES.get(context, QUICK_REPLIES["general"])


def get_initial_greeting(profile: Optional[UserProfile]) -> str:
    nickname = (profile.nickname if profile else None) or "there"
    intro = f"Hi {nickname}! 💪 I'm your AI trainer."

    remaining = abs(profile.target_weight - profile.current_weight) if profile else 0
    if remaining <= 0:
        return f"{intro}\n\nAsk me anything about workouts, diet or your goal!"

    goal_text = {GoalChoice.BULK: "bulk-up", GoalChoice.CUT: "diet"}.get(profile.goal_type, "health")
    direction = "to lose" if profile.goal_type == GoalChoice.CUT else "to gain"
    return (
        f"{intro}\n\n{remaining:.1f}kg left {direction} for your {goal_text} goal! "
        "Let's crush it today! 🔥\n\nAsk me anything!"
    )
