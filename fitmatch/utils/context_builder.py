"""Build the chat system prompt from the user's profile and recent logs."""

from typing import Iterable, Optional

from fitmatch.models.daily_log import DailyLog
from fitmatch.models.user_profile import UserProfile
from fitmatch.utils.prompts import (
    EXPERIENCE_DESCRIPTIONS,
    GOAL_DESCRIPTIONS,
    LIFESTYLE_DESCRIPTIONS,
    SYSTEM_PROMPT,
)

MAX_LOG_LINES = 7


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def format_profile_context(profile: UserProfile) -> str:
    lines = [
        "USER PROFILE:",
        f"- Nickname: {profile.nickname or 'Member'}",
        f"- Height: {profile.height:g}cm",
        f"- Current weight: {profile.current_weight:g}kg",
        f"- Target weight: {profile.target_weight:g}kg",
        f"- Goal: {GOAL_DESCRIPTIONS.get(profile.goal_type, profile.goal_type.value)}",
        f"- Experience: {EXPERIENCE_DESCRIPTIONS.get(profile.experience_level.value, profile.experience_level.value)}",
        f"- Workouts per week: {profile.workout_days_per_week}",
        f"- Lactose intolerance: {_yes_no(profile.lactose_intolerance)}",
        f"- Vegetarian: {_yes_no(profile.vegetarian)}",
        f"- Gym access: {'yes' if profile.has_gym_access else 'no (home training)'}",
        f"- Lifestyle: {LIFESTYLE_DESCRIPTIONS.get(profile.lifestyle.value, profile.lifestyle.value)}",
    ]
    if profile.allergies:
        lines.append(f"- Allergies: {', '.join(profile.allergies)}")
    return "\n".join(lines)


def format_log_context(logs: Iterable[DailyLog]) -> str:
    """One line per log, newest first, at most seven lines."""
    recent = sorted(logs, key=lambda log: log.date, reverse=True)[:MAX_LOG_LINES]
    if not recent:
        return ""

    lines = ["LAST 7 DAYS:"]
    for log in recent:
        lines.append(
            f"- {log.date.isoformat()}: meals {log.diet_score}/5, "
            f"exercises {len(log.completed_exercises)} done"
        )
    return "\n".join(lines)


def build_system_prompt(profile: Optional[UserProfile], recent_logs: Iterable[DailyLog] = ()) -> str:
    """
    Persona text followed by the user context sections that are available.

    Args:
        profile: User profile, or None for an anonymous chat
        recent_logs: Daily logs to summarize

    Returns:
        Complete system prompt
    """
    sections = [SYSTEM_PROMPT.rstrip()]
    if profile is not None:
        sections.append(format_profile_context(profile))

    log_context = format_log_context(recent_logs)
    if log_context:
        sections.append(log_context)

    return "\n\n".join(sections)
