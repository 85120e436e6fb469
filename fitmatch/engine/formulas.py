"""Pure numeric helpers: BMI, BMR, 1RM, progress and display formatting.

No bounds checking is done here. Callers validate inputs upstream
(onboarding form bounds); degenerate input gives a meaningless but
non-crashing result wherever possible.
"""

from typing import Iterable, Optional, Union

from fitmatch.models.enums import Gender, MealSlot
from fitmatch.models.program import DailyMeal

LACTOSE_KEYWORDS = (
    "milk", "latte", "cream", "cheese", "yogurt", "yoghurt", "ice cream", "whey concentrate",
)

LACTOSE_FREE_ALTERNATIVES = (
    "Soy milk",
    "Almond milk",
    "Lactose-free milk",
    "Oat milk",
    "Whey protein isolate (WPI)",
)


def bmi(weight_kg: float, height_cm: float) -> float:
    """Body mass index: weight / height_m^2."""
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def bmr(weight_kg: float, height_cm: float, age_years: float, gender: Optional[Union[Gender, str]]) -> float:
    """Basal metabolic rate using Mifflin-St Jeor.

    Any gender other than female uses the male constant.
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    if gender == Gender.FEMALE:
        return base - 161
    return base + 5


def estimate_one_rep_max(weight: float, reps: int) -> float:
    """Estimate a one-rep max with the Brzycki formula.

    Above 12 reps the formula is unreliable, so a flat 1.25x approximation
    is returned instead.
    """
    if reps == 1:
        return weight
    if reps > 12:
        return weight * 1.25
    return weight / (1.0278 - 0.0278 * reps)


def progress_percent(current: float, start: float, target: float) -> float:
    """Share of the way from start to target weight, clamped to [0, 100]."""
    if start == target:
        return 0.0
    progress = (current - start) / (target - start) * 100
    return max(0.0, min(100.0, progress))


def format_weight_change(current: float, start: float) -> str:
    """Signed delta with one decimal, e.g. '+1.5kg' or '-0.3kg'."""
    change = current - start
    sign = "+" if change >= 0 else ""
    return f"{sign}{change:.1f}kg"


def format_calories(calories: float) -> str:
    return f"{round(calories):,}kcal"


def total_calories(menu: DailyMeal) -> int:
    """Sum of the calories of all five meal slots."""
    return sum(menu.slot(slot).calories for slot in MealSlot)


def detect_lactose(text: str, keywords: Iterable[str] = LACTOSE_KEYWORDS) -> bool:
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)
