"""Adherence scoring of actual nutrition against daily goals."""

from __future__ import annotations

from typing import Iterable, Optional

from fitplan.nutrition.models import NutritionGoals, NutritionProgress
from fitplan.nutrition.vector import NutritionVector


def _deviation(actual: float, goal: float) -> float:
    """Relative deviation |actual - goal| / goal.

    A zero goal counts as met only when actual is also zero; any intake
    against a zero goal is a full (100%) deviation.
    """
    if goal == 0:
        return 0.0 if actual == 0 else 1.0
    return abs(actual - goal) / goal


def adherence(actual: NutritionVector, goals: Optional[NutritionGoals]) -> float:
    """Score how closely actual intake matches goals, from 0 to 100.

    The score is (1 - mean deviation) * 100 over calories, protein, carbs
    and fat, clamped to [0, 100]. Without goals every intake is adherent.

    Args:
        actual: Summed nutrition for the day
        goals: The user's nutrition goals, or None

    Returns:
        Adherence score in [0, 100]
    """
    if goals is None:
        return 100.0

    deviations = [
        _deviation(actual.calories, goals.daily_calories),
        _deviation(actual.protein, goals.macros.protein),
        _deviation(actual.carbs, goals.macros.carbs),
        _deviation(actual.fat, goals.macros.fat),
    ]
    average_deviation = sum(deviations) / len(deviations)
    return max(0.0, min(100.0, (1 - average_deviation) * 100))


def goals_as_vector(goals: NutritionGoals) -> NutritionVector:
    """Express goals as a planned nutrition vector (macros only)."""
    return NutritionVector(
        calories=goals.daily_calories,
        protein=goals.macros.protein,
        carbs=goals.macros.carbs,
        fat=goals.macros.fat,
    )


def _round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def average_progress(records: Iterable[NutritionProgress]) -> Optional[dict]:
    """Average actual intake and adherence across daily progress records.

    Returns:
        Dict of integer averages (calories, protein, carbs, fat,
        water_intake_ml, adherence_rate, days) or None for an empty range
    """
    records = list(records)
    if not records:
        return None

    count = len(records)
    return {
        "calories": _round_half_up(sum(r.actual.calories for r in records) / count),
        "protein": _round_half_up(sum(r.actual.protein for r in records) / count),
        "carbs": _round_half_up(sum(r.actual.carbs for r in records) / count),
        "fat": _round_half_up(sum(r.actual.fat for r in records) / count),
        "water_intake_ml": _round_half_up(
            sum(r.water_actual_ml for r in records) / count
        ),
        "adherence_rate": _round_half_up(
            sum(r.adherence_rate for r in records) / count
        ),
        "days": count,
    }
