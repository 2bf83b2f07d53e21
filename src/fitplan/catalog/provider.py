"""Read-only catalog access for the plan generators.

Generators depend on the CatalogProvider interface rather than the
module-level tables, so tests can inject a small custom catalog.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Mapping, Optional

from fitplan.catalog.exercises import EXERCISE_CATALOG
from fitplan.catalog.models import ExerciseTemplate, RecipeTemplate
from fitplan.catalog.recipes import RECIPE_CATALOG
from fitplan.nutrition.models import MealType
from fitplan.profiles.models import FitnessGoal, FitnessLevel

logger = logging.getLogger(__name__)

FALLBACK_GOAL = FitnessGoal.GENERAL
FALLBACK_LEVEL = FitnessLevel.BEGINNER


class CatalogProvider(ABC):
    """Immutable source of exercise and recipe templates."""

    @abstractmethod
    def exercises_for(
        self, goal: FitnessGoal, level: FitnessLevel
    ) -> list[ExerciseTemplate]:
        """Exercises for a goal and level (empty if the pair has none)."""

    @abstractmethod
    def recipes_for(self, meal_type: MealType) -> list[RecipeTemplate]:
        """All recipes for a meal type."""

    def recipe(self, recipe_id: str) -> Optional[RecipeTemplate]:
        """Look up a recipe by id across every meal type."""
        for meal_type in MealType:
            for template in self.recipes_for(meal_type):
                if template.recipe_id == recipe_id:
                    return template
        return None

    def workout_for(
        self, goal: FitnessGoal, level: FitnessLevel
    ) -> list[ExerciseTemplate]:
        """Exercises for a goal and level, falling back to general / beginner."""
        exercises = self.exercises_for(goal, level)
        if exercises:
            return exercises
        logger.warning(
            "No catalog entries for %s/%s; falling back to %s/%s",
            goal.value,
            level.value,
            FALLBACK_GOAL.value,
            FALLBACK_LEVEL.value,
        )
        return self.exercises_for(FALLBACK_GOAL, FALLBACK_LEVEL)


class StaticCatalog(CatalogProvider):
    """CatalogProvider over in-memory tables (the built-in catalog by default)."""

    def __init__(
        self,
        exercises: Optional[
            Mapping[FitnessGoal, Mapping[FitnessLevel, tuple[ExerciseTemplate, ...]]]
        ] = None,
        recipes: Optional[Mapping[MealType, tuple[RecipeTemplate, ...]]] = None,
    ):
        self._exercises = EXERCISE_CATALOG if exercises is None else exercises
        self._recipes = RECIPE_CATALOG if recipes is None else recipes

    def exercises_for(
        self, goal: FitnessGoal, level: FitnessLevel
    ) -> list[ExerciseTemplate]:
        return list(self._exercises.get(goal, {}).get(level, ()))

    def recipes_for(self, meal_type: MealType) -> list[RecipeTemplate]:
        return list(self._recipes.get(meal_type, ()))


_default_catalog: Optional[StaticCatalog] = None


def get_catalog() -> StaticCatalog:
    """Return the shared built-in catalog."""
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = StaticCatalog()
    return _default_catalog
