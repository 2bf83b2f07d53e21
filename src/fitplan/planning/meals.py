"""Daily meal plan generation.

Selects one breakfast, lunch and dinner plus a configured number of snacks
from the recipe catalog, after filtering by the user's dietary
restrictions, excluded ingredients and fitness goal.
"""

from __future__ import annotations

import logging
import random
from datetime import date, datetime, timezone
from typing import Optional

from fitplan.catalog.models import RecipeTemplate
from fitplan.catalog.provider import CatalogProvider, get_catalog
from fitplan.config.settings import MealPlanConfig
from fitplan.db.schema import DAILY_MEAL_PLANS, NUTRITION_GOALS
from fitplan.db.store import DocumentStore, day_key
from fitplan.errors import (
    NoCandidatesError,
    NotFoundError,
    PersistenceError,
    PreconditionError,
)
from fitplan.nutrition.filters import filter_recipes
from fitplan.nutrition.models import MealType, NutritionGoals
from fitplan.nutrition.vector import sum_vectors
from fitplan.planning.models import DailyMealPlan, PlannedMeal
from fitplan.profiles.models import UserGoalProfile
from fitplan.profiles.queries import ProfileQueries

logger = logging.getLogger(__name__)


class MealPlanGenerator:
    """Creates daily meal plans and records the "completed today" action."""

    def __init__(
        self,
        store: DocumentStore,
        catalog: Optional[CatalogProvider] = None,
        config: Optional[MealPlanConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.catalog = catalog or get_catalog()
        self.config = config or MealPlanConfig()
        self.rng = rng or random.Random()

    def get_plan(self, user_id: str, today: date) -> Optional[DailyMealPlan]:
        """Return the stored plan for the day, or None."""
        data = self.store.get(DAILY_MEAL_PLANS, day_key(user_id, today.isoformat()))
        if data is None:
            return None
        return DailyMealPlan.from_dict(data)

    def _load_inputs(self, user_id: str) -> tuple[NutritionGoals, UserGoalProfile]:
        goals_data = self.store.get(NUTRITION_GOALS, user_id)
        if goals_data is None:
            raise PreconditionError(f"No nutrition goals set for user {user_id}")
        profile = ProfileQueries.get_profile(self.store, user_id)
        if profile is None:
            raise PreconditionError(f"No goal profile for user {user_id}")
        return NutritionGoals.from_dict(goals_data), profile

    def candidates(
        self,
        meal_type: MealType,
        goals: NutritionGoals,
        profile: UserGoalProfile,
    ) -> list[RecipeTemplate]:
        """Recipes eligible for a meal slot under the empty-candidate policy.

        Raises:
            NoCandidatesError: If nothing remains (after widening, when the
                policy is "widen")
        """
        recipes = self.catalog.recipes_for(meal_type)
        matches = filter_recipes(
            recipes,
            goals.dietary_restrictions,
            profile.primary_goal,
            goals.excluded_ingredients,
        )
        if not matches and self.config.empty_candidates == "widen":
            logger.warning(
                "No %s recipes for goal %s; dropping goal filter",
                meal_type.value,
                profile.primary_goal.value,
            )
            matches = filter_recipes(
                recipes,
                goals.dietary_restrictions,
                profile.primary_goal,
                goals.excluded_ingredients,
                apply_goal=False,
            )
        if not matches:
            raise NoCandidatesError(
                meal_type.value,
                sorted(r.value for r in goals.dietary_restrictions),
                profile.primary_goal.value,
            )
        return matches

    def build_plan(self, user_id: str, today: date) -> DailyMealPlan:
        """Select recipes for every slot (without persisting)."""
        goals, profile = self._load_inputs(user_id)

        chosen: dict[MealType, RecipeTemplate] = {}
        for meal_type in (MealType.BREAKFAST, MealType.LUNCH, MealType.DINNER):
            chosen[meal_type] = self.rng.choice(
                self.candidates(meal_type, goals, profile)
            )

        snacks: list[RecipeTemplate] = []
        if self.config.snack_count > 0:
            snack_pool = self.candidates(MealType.SNACK, goals, profile)
            count = min(self.config.snack_count, len(snack_pool))
            snacks = self.rng.sample(snack_pool, count)

        selected = list(chosen.values()) + snacks
        return DailyMealPlan(
            user_id=user_id,
            date=today,
            breakfast=PlannedMeal.from_recipe(chosen[MealType.BREAKFAST]),
            lunch=PlannedMeal.from_recipe(chosen[MealType.LUNCH]),
            dinner=PlannedMeal.from_recipe(chosen[MealType.DINNER]),
            snacks=[PlannedMeal.from_recipe(s) for s in snacks],
            total_nutrition=sum_vectors(r.nutrition for r in selected),
            completed=False,
            created_at=datetime.now(timezone.utc),
        )

    def get_or_create_daily_meal_plan(
        self, user_id: str, today: date
    ) -> DailyMealPlan:
        """Return today's meal plan, generating and persisting it on first call.

        Raises:
            PreconditionError: If nutrition goals or the goal profile are missing
            NoCandidatesError: If a slot has no eligible recipe
            PersistenceError: If the plan cannot be read back after creation
        """
        existing = self.get_plan(user_id, today)
        if existing is not None:
            logger.debug("Meal plan for %s on %s already exists", user_id, today)
            return existing

        key = day_key(user_id, today.isoformat())
        plan = self.build_plan(user_id, today)
        if self.store.create_if_absent(DAILY_MEAL_PLANS, key, plan.to_dict()):
            logger.info(
                "Created meal plan for %s on %s (%.0f kcal)",
                user_id,
                today,
                plan.total_nutrition.calories,
            )
        else:
            logger.info("Meal plan for %s on %s created concurrently", user_id, today)

        stored = self.get_plan(user_id, today)
        if stored is None:
            raise PersistenceError(f"Meal plan {key} missing after create")
        return stored

    def mark_meal_plan_complete(self, user_id: str, today: date) -> DailyMealPlan:
        """Flag the day's meal plan as completed.

        Raises:
            NotFoundError: If no plan exists for the day
        """
        key = day_key(user_id, today.isoformat())
        if self.store.get(DAILY_MEAL_PLANS, key) is None:
            raise NotFoundError(f"No meal plan for {user_id} on {today}")
        updated = self.store.update(DAILY_MEAL_PLANS, key, {"completed": True})
        logger.info("User %s completed meal plan for %s", user_id, today)
        return DailyMealPlan.from_dict(updated)
