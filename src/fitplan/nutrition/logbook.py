"""Daily nutrition log: meals eaten, water drunk, and the progress record.

Each change recomputes the log's total from the already-scaled meals,
rewrites the ``nutritionProgress/{user}_{day}`` record with a fresh
adherence score, and updates the user's progress rollup.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from fitplan.catalog.provider import CatalogProvider, get_catalog
from fitplan.db.schema import NUTRITION_GOALS, NUTRITION_LOGS, NUTRITION_PROGRESS
from fitplan.db.store import DocumentStore, day_key
from fitplan.errors import IndexOutOfRangeError, NotFoundError, PersistenceError
from fitplan.nutrition.adherence import adherence, average_progress, goals_as_vector
from fitplan.nutrition.models import (
    LoggedMeal,
    MealType,
    NutritionGoals,
    NutritionLog,
    NutritionProgress,
)
from fitplan.nutrition.vector import ZERO, NutritionVector, scale, sum_vectors
from fitplan.tracking.progress import ProgressTracker

logger = logging.getLogger(__name__)


class NutritionLogBook:
    """Records meals and water for a user's day."""

    def __init__(
        self,
        store: DocumentStore,
        catalog: Optional[CatalogProvider] = None,
        progress: Optional[ProgressTracker] = None,
    ):
        self.store = store
        self.catalog = catalog or get_catalog()
        self.progress = progress or ProgressTracker(store)

    # =========================================================================
    # Lookups
    # =========================================================================

    def get_goals(self, user_id: str) -> Optional[NutritionGoals]:
        data = self.store.get(NUTRITION_GOALS, user_id)
        return NutritionGoals.from_dict(data) if data else None

    def save_goals(self, goals: NutritionGoals) -> None:
        """Create or replace a user's nutrition goals."""
        self.store.set(NUTRITION_GOALS, goals.user_id, goals.to_dict())
        logger.info(
            "Saved nutrition goals for %s: %s kcal", goals.user_id, goals.daily_calories
        )

    def get_log(self, user_id: str, day: date) -> Optional[NutritionLog]:
        """Return the log for a day, or None if nothing was logged."""
        key = day_key(user_id, day.isoformat())
        data = self.store.get(NUTRITION_LOGS, key)
        if data is None:
            return None
        return NutritionLog.from_dict(data, log_id=key)

    def get_or_create_log(self, user_id: str, day: date) -> NutritionLog:
        """Return the day's log, creating an empty one under ``{user}_{day}``.

        Raises:
            PersistenceError: If the log cannot be read back after creation
        """
        log = self.get_log(user_id, day)
        if log is not None:
            return log

        key = day_key(user_id, day.isoformat())
        empty = NutritionLog(log_id=key, user_id=user_id, date=day)
        if self.store.create_if_absent(NUTRITION_LOGS, key, empty.to_dict()):
            logger.debug("Created nutrition log %s", key)
        else:
            logger.debug("Nutrition log %s created concurrently", key)

        log = self.get_log(user_id, day)
        if log is None:
            raise PersistenceError(f"Nutrition log {key} missing after create")
        return log

    # =========================================================================
    # Meals and water
    # =========================================================================

    def log_meal(
        self,
        user_id: str,
        day: date,
        meal_type: MealType,
        recipe_id: Optional[str] = None,
        name: Optional[str] = None,
        nutrition: Optional[NutritionVector] = None,
        servings: float = 1,
        logged_at: Optional[datetime] = None,
    ) -> NutritionLog:
        """Add a meal to the day's log.

        Either a catalog ``recipe_id`` or a per-serving ``nutrition`` vector
        must be given. The stored nutrition is scaled by ``servings``.

        Raises:
            NotFoundError: If recipe_id is not in the catalog
            ValueError: If neither recipe_id nor nutrition is given, or
                servings is not positive
        """
        if servings <= 0:
            raise ValueError(f"servings must be > 0, got {servings}")

        if recipe_id is not None:
            recipe = self.catalog.recipe(recipe_id)
            if recipe is None:
                raise NotFoundError(f"Unknown recipe: {recipe_id}")
            per_serving = recipe.nutrition
            name = name or recipe.name
        elif nutrition is not None:
            per_serving = nutrition
        else:
            raise ValueError("log_meal needs a recipe_id or a nutrition vector")

        meal = LoggedMeal(
            name=name or meal_type.value.capitalize(),
            servings=servings,
            nutrition=scale(per_serving, servings),
            logged_at=logged_at or datetime.now(timezone.utc),
            recipe_id=recipe_id,
        )

        log = self.get_or_create_log(user_id, day)
        log.meals[meal_type].append(meal)
        self._save(log, meals_delta=1)
        logger.info(
            "Logged %s for %s on %s (%.0f kcal)",
            meal.name,
            user_id,
            day,
            meal.nutrition.calories,
        )
        return log

    def remove_meal(
        self, user_id: str, day: date, meal_type: MealType, index: int
    ) -> NutritionLog:
        """Remove one logged meal by its position within the meal type.

        Raises:
            NotFoundError: If nothing was logged that day
            IndexOutOfRangeError: If index is outside the meal list
        """
        log = self.get_log(user_id, day)
        if log is None:
            raise NotFoundError(f"No nutrition log for {user_id} on {day}")
        meals = log.meals[meal_type]
        if not 0 <= index < len(meals):
            raise IndexOutOfRangeError(
                f"Meal index {index} out of range for {len(meals)} {meal_type.value} entries"
            )
        removed = meals.pop(index)
        self._save(log, meals_delta=-1)
        logger.info("Removed %s from %s on %s", removed.name, user_id, day)
        return log

    def update_water(self, user_id: str, day: date, water_ml: float) -> NutritionLog:
        """Set the day's total water intake in ml."""
        if water_ml < 0:
            raise ValueError(f"water_ml must be >= 0, got {water_ml}")
        log = self.get_or_create_log(user_id, day)
        log.water_intake_ml = water_ml
        self._save(log, meals_delta=0)
        return log

    def add_water(self, user_id: str, day: date, amount_ml: float) -> NutritionLog:
        """Add a drink to the day's water intake."""
        log = self.get_or_create_log(user_id, day)
        return self.update_water(user_id, day, log.water_intake_ml + amount_ml)

    def _save(self, log: NutritionLog, meals_delta: int) -> None:
        log.total_nutrition = sum_vectors(
            meal.nutrition for meals in log.meals.values() for meal in meals
        )
        self.store.set(NUTRITION_LOGS, log.log_id, log.to_dict())

        goals = self.get_goals(log.user_id)
        record = self.write_progress(log, goals)
        self.progress.record_nutrition(
            log.user_id,
            log.date,
            meals_logged_delta=meals_delta,
            current_calories=log.total_nutrition.calories,
            calorie_goal=goals.daily_calories if goals else None,
        )
        logger.debug(
            "Adherence for %s on %s: %.1f", log.user_id, log.date, record.adherence_rate
        )

    # =========================================================================
    # Progress
    # =========================================================================

    def write_progress(
        self, log: NutritionLog, goals: Optional[NutritionGoals]
    ) -> NutritionProgress:
        """Overwrite the day's planned-vs-actual record for a log."""
        record = NutritionProgress(
            user_id=log.user_id,
            date=log.date,
            planned=goals_as_vector(goals) if goals else ZERO,
            actual=log.total_nutrition,
            water_planned_ml=goals.water_intake_ml if goals else 0,
            water_actual_ml=log.water_intake_ml,
            adherence_rate=adherence(log.total_nutrition, goals),
        )
        self.store.set(
            NUTRITION_PROGRESS,
            day_key(log.user_id, log.date.isoformat()),
            record.to_dict(),
        )
        return record

    def get_progress(self, user_id: str, day: date) -> Optional[NutritionProgress]:
        data = self.store.get(NUTRITION_PROGRESS, day_key(user_id, day.isoformat()))
        return NutritionProgress.from_dict(data) if data else None

    def progress_range(
        self, user_id: str, start: date, end: date
    ) -> list[NutritionProgress]:
        """Progress records with start <= date <= end, oldest first."""
        docs = self.store.query(
            NUTRITION_PROGRESS,
            filters=[
                ("user_id", "==", user_id),
                ("date", ">=", start.isoformat()),
                ("date", "<=", end.isoformat()),
            ],
            order_by=("date", "asc"),
        )
        return [NutritionProgress.from_dict(d) for d in docs]

    def summary(self, user_id: str, end: date, days: int = 7) -> Optional[dict]:
        """Rounded averages over the ``days`` days ending at ``end``."""
        start = end - timedelta(days=days - 1)
        return average_progress(self.progress_range(user_id, start, end))
