"""Nutrition vectors, goals, logs and adherence scoring.

Dietary filtering lives in fitplan.nutrition.filters and meal logging in
fitplan.nutrition.logbook; import them directly.
"""

from __future__ import annotations

from fitplan.nutrition.adherence import adherence, average_progress
from fitplan.nutrition.models import (
    DietaryRestriction,
    LoggedMeal,
    Macros,
    MealType,
    NutritionGoals,
    NutritionLog,
    NutritionProgress,
)
from fitplan.nutrition.vector import NutritionVector, scale, sum_vectors

__all__ = [
    "DietaryRestriction",
    "LoggedMeal",
    "Macros",
    "MealType",
    "NutritionGoals",
    "NutritionLog",
    "NutritionProgress",
    "NutritionVector",
    "adherence",
    "average_progress",
    "scale",
    "sum_vectors",
]
