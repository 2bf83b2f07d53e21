"""Immutable catalog entries for exercises and recipes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fitplan.nutrition.models import MealType
from fitplan.nutrition.vector import NutritionVector


@dataclass(frozen=True)
class ExerciseTemplate:
    """A catalog exercise.

    Attributes:
        exercise_id: Stable identifier (slug)
        name: Display name
        muscle_groups: Muscle groups worked
        equipment: Equipment required
        difficulty: "beginner", "intermediate" or "advanced"
        instructions: Ordered instruction steps
        tips: Ordered form tips
        duration_minutes: Estimated duration
        calories_per_minute: Estimated burn rate
        sets: Prescribed sets, or None to use the plan default
        reps: Prescribed reps, or None to use the plan default
    """

    exercise_id: str
    name: str
    muscle_groups: frozenset[str]
    equipment: frozenset[str]
    difficulty: str
    instructions: tuple[str, ...]
    tips: tuple[str, ...]
    duration_minutes: int
    calories_per_minute: float
    sets: Optional[int] = None
    reps: Optional[int] = None

    @property
    def estimated_calories(self) -> float:
        return self.duration_minutes * self.calories_per_minute


@dataclass(frozen=True)
class RecipeTemplate:
    """A catalog recipe with per-serving nutrition.

    Attributes:
        recipe_id: Stable identifier (slug)
        name: Display name
        meal_type: Which meal slot the recipe fills
        ingredients: Ordered free-text ingredient strings
        nutrition: Nutrition per serving
        preparation_minutes: Preparation time
        difficulty: "easy", "medium" or "hard"
    """

    recipe_id: str
    name: str
    meal_type: MealType
    ingredients: tuple[str, ...]
    nutrition: NutritionVector
    preparation_minutes: int
    difficulty: str = "easy"
