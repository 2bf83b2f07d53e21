"""Dietary restriction and goal predicates for catalog recipes.

Restrictions are matched as case-insensitive substrings of the free-text
ingredient strings, so "cheese" in "feta cheese" disqualifies a recipe
for dairyFree. Substring matching has known false positives (coconut milk
counts as dairy, peanut butter as butter); the keyword lists are kept
deliberately literal.

Usage:
    from fitplan.nutrition.filters import filter_recipes
    candidates = filter_recipes(recipes, {DietaryRestriction.VEGAN}, FitnessGoal.WEIGHT_LOSS)
"""

from __future__ import annotations

from typing import Iterable

from fitplan.catalog.models import RecipeTemplate
from fitplan.nutrition.models import DietaryRestriction
from fitplan.profiles.models import FitnessGoal

# Common exclusion keyword sets for reuse
MEAT_KEYWORDS = [
    "meat", "beef", "pork", "chicken", "turkey", "lamb", "veal", "bacon",
    "ham", "sausage", "steak", "gelatin",
]

FISH_KEYWORDS = [
    "fish", "salmon", "tuna", "cod", "tilapia", "anchovy", "sardine",
    "shrimp", "crab", "lobster",
]

DAIRY_KEYWORDS = [
    "dairy", "milk", "cheese", "yogurt", "butter", "cream", "whey",
    "casein", "ghee",
]

EGG_KEYWORDS = ["egg"]

GLUTEN_KEYWORDS = [
    "wheat", "barley", "rye", "bread", "pasta", "flour", "couscous", "seitan",
]

NUT_KEYWORDS = [
    "almond", "walnut", "cashew", "pecan", "pistachio", "hazelnut",
    "peanut", "macadamia",
]

PORK_KEYWORDS = ["pork", "bacon", "ham", "lard", "gelatin"]

SHELLFISH_KEYWORDS = [
    "shrimp", "crab", "lobster", "clam", "mussel", "oyster", "scallop",
]

RESTRICTION_KEYWORDS: dict[DietaryRestriction, list[str]] = {
    DietaryRestriction.VEGETARIAN: MEAT_KEYWORDS + FISH_KEYWORDS,
    DietaryRestriction.VEGAN: (
        MEAT_KEYWORDS + FISH_KEYWORDS + DAIRY_KEYWORDS + EGG_KEYWORDS + ["honey"]
    ),
    DietaryRestriction.GLUTEN_FREE: GLUTEN_KEYWORDS,
    DietaryRestriction.DAIRY_FREE: DAIRY_KEYWORDS,
    DietaryRestriction.NUT_FREE: NUT_KEYWORDS,
    DietaryRestriction.HALAL: PORK_KEYWORDS + ["wine"],
    DietaryRestriction.KOSHER: PORK_KEYWORDS + SHELLFISH_KEYWORDS,
    DietaryRestriction.NONE: [],
}

# Goal thresholds (per serving)
WEIGHT_LOSS_MAX_CALORIES = 500
WEIGHT_LOSS_MAX_FAT = 20
MUSCLE_GAIN_MIN_PROTEIN = 30


def _contains_any(ingredients: Iterable[str], keywords: Iterable[str]) -> bool:
    lowered = [ingredient.lower() for ingredient in ingredients]
    return any(
        keyword.lower() in ingredient for ingredient in lowered for keyword in keywords
    )


def violates_restriction(
    recipe: RecipeTemplate, restriction: DietaryRestriction
) -> bool:
    """True if any ingredient contains a keyword disqualified by restriction."""
    return _contains_any(recipe.ingredients, RESTRICTION_KEYWORDS[restriction])


def passes_restrictions(
    recipe: RecipeTemplate, restrictions: Iterable[DietaryRestriction]
) -> bool:
    """True if the recipe satisfies every active restriction."""
    return not any(violates_restriction(recipe, r) for r in restrictions)


def passes_exclusions(
    recipe: RecipeTemplate, excluded_ingredients: Iterable[str]
) -> bool:
    """True if no ingredient contains any user-excluded ingredient."""
    excluded = [e for e in excluded_ingredients if e.strip()]
    return not _contains_any(recipe.ingredients, excluded)


def passes_goal(recipe: RecipeTemplate, goal: FitnessGoal) -> bool:
    """Goal-specific per-serving constraint.

    weightLoss: calories < 500 and fat < 20 g
    muscleGain: protein > 30 g
    other goals: no constraint
    """
    nutrition = recipe.nutrition
    if goal == FitnessGoal.WEIGHT_LOSS:
        return (
            nutrition.calories < WEIGHT_LOSS_MAX_CALORIES
            and nutrition.fat < WEIGHT_LOSS_MAX_FAT
        )
    if goal == FitnessGoal.MUSCLE_GAIN:
        return nutrition.protein > MUSCLE_GAIN_MIN_PROTEIN
    return True


def filter_recipes(
    recipes: Iterable[RecipeTemplate],
    restrictions: Iterable[DietaryRestriction],
    goal: FitnessGoal,
    excluded_ingredients: Iterable[str] = (),
    apply_goal: bool = True,
) -> list[RecipeTemplate]:
    """Keep recipes passing restrictions, exclusions and (optionally) the goal.

    Args:
        recipes: Catalog slice to filter
        restrictions: Active dietary restrictions (conjunctive)
        goal: User's primary fitness goal
        excluded_ingredients: Free-text ingredients the user never wants
        apply_goal: Set False to skip the goal predicate

    Returns:
        Matching recipes in catalog order.
    """
    restrictions = list(restrictions)
    excluded = list(excluded_ingredients)
    return [
        recipe
        for recipe in recipes
        if passes_restrictions(recipe, restrictions)
        and passes_exclusions(recipe, excluded)
        and (not apply_goal or passes_goal(recipe, goal))
    ]
