"""Tests for daily meal plan generation."""

from __future__ import annotations

import random

import pytest

from fitplan.catalog.exercises import EXERCISE_CATALOG
from fitplan.catalog.models import RecipeTemplate
from fitplan.catalog.provider import StaticCatalog
from fitplan.catalog.recipes import BREAKFASTS, DINNERS, LUNCHES, SNACKS
from fitplan.config.settings import MealPlanConfig
from fitplan.db.schema import DAILY_MEAL_PLANS
from fitplan.errors import NoCandidatesError, NotFoundError, PreconditionError
from fitplan.nutrition.filters import filter_recipes
from fitplan.nutrition.models import MealType
from fitplan.nutrition.vector import NutritionVector
from fitplan.planning.meals import MealPlanGenerator
from fitplan.profiles.models import FitnessGoal, FitnessLevel


@pytest.fixture
def generator(store):
    return MealPlanGenerator(store, rng=random.Random(7))


def recipe(recipe_id, meal_type, ingredients, calories, protein, fat) -> RecipeTemplate:
    return RecipeTemplate(
        recipe_id=recipe_id,
        name=recipe_id.replace("-", " ").title(),
        meal_type=meal_type,
        ingredients=tuple(ingredients),
        nutrition=NutritionVector(calories=calories, protein=protein, fat=fat),
        preparation_minutes=10,
    )


def tiny_catalog(breakfasts) -> StaticCatalog:
    """Catalog with custom breakfasts and one easy option for every other slot."""
    return StaticCatalog(
        exercises=EXERCISE_CATALOG,
        recipes={
            MealType.BREAKFAST: tuple(breakfasts),
            MealType.LUNCH: (recipe("rice-bowl", MealType.LUNCH, ["rice"], 400, 35, 10),),
            MealType.DINNER: (recipe("bean-stew", MealType.DINNER, ["beans"], 450, 32, 8),),
            MealType.SNACK: (recipe("apple", MealType.SNACK, ["apple"], 90, 31, 0),),
        },
    )


class TestPreconditions:
    def test_requires_goals(self, generator, make_profile, today) -> None:
        make_profile("u1", FitnessGoal.GENERAL, FitnessLevel.BEGINNER)
        with pytest.raises(PreconditionError):
            generator.get_or_create_daily_meal_plan("u1", today)

    def test_requires_profile(self, generator, make_goals, today) -> None:
        make_goals("u1")
        with pytest.raises(PreconditionError):
            generator.get_or_create_daily_meal_plan("u1", today)

    def test_nothing_written_on_failure(self, store, generator, make_profile, today) -> None:
        make_profile("u1", FitnessGoal.GENERAL, FitnessLevel.BEGINNER)
        with pytest.raises(PreconditionError):
            generator.get_or_create_daily_meal_plan("u1", today)
        assert store.query(DAILY_MEAL_PLANS) == []


class TestGeneration:
    def test_vegan_muscle_gain_has_single_choices(
        self, generator, make_profile, make_goals, today
    ) -> None:
        make_profile("u1", FitnessGoal.MUSCLE_GAIN, FitnessLevel.BEGINNER)
        make_goals("u1", restrictions=["vegan"])

        plan = generator.get_or_create_daily_meal_plan("u1", today)

        assert plan.breakfast.recipe_id == "pea-protein-smoothie-bowl"
        assert plan.lunch.recipe_id == "tempeh-power-bowl"
        assert plan.dinner.recipe_id == "tempeh-lentil-bolognese"
        assert [s.recipe_id for s in plan.snacks] == ["pea-protein-shake"]
        assert plan.total_nutrition.calories == pytest.approx(430 + 590 + 510 + 260)
        assert plan.total_nutrition.protein == pytest.approx(34 + 38 + 36 + 31)
        assert not plan.completed

    def test_choices_satisfy_filters(self, generator, make_profile, make_goals, today) -> None:
        make_profile("u1", FitnessGoal.WEIGHT_LOSS, FitnessLevel.BEGINNER)
        goals = make_goals("u1", restrictions=["vegetarian"], excluded=["tofu"])

        plan = generator.get_or_create_daily_meal_plan("u1", today)

        for slot, catalog in (
            (plan.breakfast, BREAKFASTS),
            (plan.lunch, LUNCHES),
            (plan.dinner, DINNERS),
        ):
            allowed = filter_recipes(
                catalog,
                goals.dietary_restrictions,
                FitnessGoal.WEIGHT_LOSS,
                goals.excluded_ingredients,
            )
            assert slot.recipe_id in {r.recipe_id for r in allowed}
            assert "tofu" not in slot.recipe_id

    def test_idempotent(self, store, generator, make_profile, make_goals, today) -> None:
        make_profile("u1", FitnessGoal.GENERAL, FitnessLevel.BEGINNER)
        make_goals("u1")
        first = generator.get_or_create_daily_meal_plan("u1", today)
        second = MealPlanGenerator(store, rng=random.Random(99)).get_or_create_daily_meal_plan(
            "u1", today
        )
        assert first == second
        assert len(store.query(DAILY_MEAL_PLANS)) == 1

    def test_seeded_rng_is_reproducible(
        self, store, make_profile, make_goals, today
    ) -> None:
        for user in ("a", "b"):
            make_profile(user, FitnessGoal.GENERAL, FitnessLevel.BEGINNER)
            make_goals(user)
        plan_a = MealPlanGenerator(store, rng=random.Random(3)).get_or_create_daily_meal_plan(
            "a", today
        )
        plan_b = MealPlanGenerator(store, rng=random.Random(3)).get_or_create_daily_meal_plan(
            "b", today
        )
        assert [m.recipe_id for m in plan_a.meals] == [m.recipe_id for m in plan_b.meals]

    def test_snack_count(self, store, make_profile, make_goals, today) -> None:
        make_profile("u1", FitnessGoal.GENERAL, FitnessLevel.BEGINNER)
        make_goals("u1")
        generator = MealPlanGenerator(
            store, config=MealPlanConfig(snack_count=3), rng=random.Random(1)
        )
        plan = generator.get_or_create_daily_meal_plan("u1", today)
        snack_ids = [s.recipe_id for s in plan.snacks]
        assert len(snack_ids) == 3
        assert len(set(snack_ids)) == 3
        assert set(snack_ids) <= {r.recipe_id for r in SNACKS}

    def test_no_snacks(self, store, make_profile, make_goals, today) -> None:
        make_profile("u1", FitnessGoal.GENERAL, FitnessLevel.BEGINNER)
        make_goals("u1")
        generator = MealPlanGenerator(store, config=MealPlanConfig(snack_count=0))
        plan = generator.get_or_create_daily_meal_plan("u1", today)
        assert plan.snacks == []
        assert len(plan.meals) == 3


class TestEmptyCandidates:
    def test_error_policy(self, store, make_profile, make_goals, today) -> None:
        catalog = tiny_catalog([recipe("big-breakfast", MealType.BREAKFAST, ["oats"], 900, 40, 30)])
        make_profile("u1", FitnessGoal.WEIGHT_LOSS, FitnessLevel.BEGINNER)
        make_goals("u1")
        generator = MealPlanGenerator(store, catalog=catalog)

        with pytest.raises(NoCandidatesError) as exc_info:
            generator.get_or_create_daily_meal_plan("u1", today)
        assert exc_info.value.meal_type == "breakfast"
        assert exc_info.value.goal == "weightLoss"

    def test_widen_drops_goal(self, store, make_profile, make_goals, today) -> None:
        catalog = tiny_catalog([recipe("big-breakfast", MealType.BREAKFAST, ["oats"], 900, 40, 30)])
        make_profile("u1", FitnessGoal.WEIGHT_LOSS, FitnessLevel.BEGINNER)
        make_goals("u1")
        generator = MealPlanGenerator(
            store, catalog=catalog, config=MealPlanConfig(empty_candidates="widen")
        )

        plan = generator.get_or_create_daily_meal_plan("u1", today)
        assert plan.breakfast.recipe_id == "big-breakfast"

    def test_widen_never_drops_restrictions(
        self, store, make_profile, make_goals, today
    ) -> None:
        catalog = tiny_catalog([recipe("bacon-eggs", MealType.BREAKFAST, ["bacon", "eggs"], 300, 20, 15)])
        make_profile("u1", FitnessGoal.GENERAL, FitnessLevel.BEGINNER)
        make_goals("u1", restrictions=["vegetarian"])
        generator = MealPlanGenerator(
            store, catalog=catalog, config=MealPlanConfig(empty_candidates="widen")
        )

        with pytest.raises(NoCandidatesError) as exc_info:
            generator.get_or_create_daily_meal_plan("u1", today)
        assert exc_info.value.restrictions == ["vegetarian"]


class TestMarkComplete:
    def test_marks_plan(self, store, generator, make_profile, make_goals, today) -> None:
        make_profile("u1", FitnessGoal.GENERAL, FitnessLevel.BEGINNER)
        make_goals("u1")
        generator.get_or_create_daily_meal_plan("u1", today)

        plan = generator.mark_meal_plan_complete("u1", today)

        assert plan.completed
        assert generator.get_or_create_daily_meal_plan("u1", today).completed

    def test_missing_plan(self, generator, today) -> None:
        with pytest.raises(NotFoundError):
            generator.mark_meal_plan_complete("u1", today)
