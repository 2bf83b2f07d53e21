"""Built-in recipe catalog grouped by meal type.

Nutrition values are per serving. Ingredient strings are free text; the
dietary filter matches restriction keywords against them as substrings.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from fitplan.catalog.models import RecipeTemplate
from fitplan.nutrition.models import MealType
from fitplan.nutrition.vector import NutritionVector


def _recipe(
    recipe_id: str,
    name: str,
    meal_type: MealType,
    ingredients: list[str],
    nutrition: tuple[float, ...],
    serving_size: float,
    preparation_minutes: int,
    difficulty: str = "easy",
) -> RecipeTemplate:
    """Create a recipe from a compact nutrition tuple.

    nutrition is (calories, protein, carbs, fat, fiber, sugar, sodium,
    cholesterol, saturated_fat) for one serving.
    """
    calories, protein, carbs, fat, fiber, sugar, sodium, cholesterol, sat_fat = nutrition
    return RecipeTemplate(
        recipe_id=recipe_id,
        name=name,
        meal_type=meal_type,
        ingredients=tuple(ingredients),
        nutrition=NutritionVector(
            calories=calories,
            protein=protein,
            carbs=carbs,
            fat=fat,
            fiber=fiber,
            sugar=sugar,
            sodium=sodium,
            cholesterol=cholesterol,
            saturated_fat=sat_fat,
            serving_size=serving_size,
            servings=1,
        ),
        preparation_minutes=preparation_minutes,
        difficulty=difficulty,
    )


# =============================================================================
# Breakfast
# =============================================================================

_B = MealType.BREAKFAST

BREAKFASTS = (
    _recipe(
        "greek-yogurt-parfait", "Greek Yogurt Parfait", _B,
        ["greek yogurt", "mixed berries", "granola", "honey"],
        (320, 20, 45, 7, 4, 28, 90, 10, 2.5), 250, 5,
    ),
    _recipe(
        "spinach-egg-white-omelette", "Spinach Egg White Omelette", _B,
        ["egg whites", "spinach", "cherry tomatoes", "feta cheese"],
        (210, 24, 8, 9, 2, 4, 480, 20, 4), 220, 10,
    ),
    _recipe(
        "protein-oatmeal", "Protein Oatmeal", _B,
        ["rolled oats", "whey protein", "milk", "banana", "almonds"],
        (520, 38, 62, 14, 8, 20, 180, 25, 3), 350, 10,
    ),
    _recipe(
        "tofu-scramble", "Tofu Scramble", _B,
        ["firm tofu", "bell pepper", "spinach", "turmeric", "olive oil"],
        (280, 22, 10, 17, 4, 3, 320, 0, 2.5), 280, 15,
    ),
    _recipe(
        "avocado-toast", "Avocado Toast", _B,
        ["whole grain bread", "avocado", "lemon juice", "chili flakes"],
        (350, 9, 38, 19, 11, 4, 390, 0, 2.8), 200, 5,
    ),
    _recipe(
        "steak-and-eggs", "Steak and Eggs", _B,
        ["sirloin steak", "eggs", "sweet potato", "olive oil"],
        (610, 48, 32, 30, 4, 7, 420, 420, 10), 400, 25, "medium",
    ),
    _recipe(
        "pea-protein-smoothie-bowl", "Pea Protein Smoothie Bowl", _B,
        ["pea protein powder", "frozen berries", "chia seeds", "oat drink", "banana"],
        (430, 34, 52, 9, 12, 24, 260, 0, 1), 400, 5,
    ),
)

# =============================================================================
# Lunch
# =============================================================================

_LU = MealType.LUNCH

LUNCHES = (
    _recipe(
        "grilled-chicken-salad", "Grilled Chicken Salad", _LU,
        ["chicken breast", "mixed greens", "cucumber", "cherry tomatoes", "balsamic vinaigrette"],
        (380, 42, 14, 16, 4, 8, 540, 110, 3), 350, 20,
    ),
    _recipe(
        "quinoa-buddha-bowl", "Quinoa Buddha Bowl", _LU,
        ["quinoa", "chickpeas", "roasted sweet potato", "kale", "tahini"],
        (480, 17, 66, 16, 13, 9, 380, 0, 2), 420, 30, "medium",
    ),
    _recipe(
        "turkey-club-wrap", "Turkey Club Wrap", _LU,
        ["flour tortilla", "turkey breast", "bacon", "lettuce", "tomato", "mayonnaise"],
        (560, 36, 42, 24, 3, 4, 1350, 85, 7), 300, 10,
    ),
    _recipe(
        "red-lentil-soup", "Red Lentil Soup", _LU,
        ["red lentils", "carrots", "celery", "onion", "vegetable broth", "cumin"],
        (340, 18, 52, 5, 14, 8, 620, 0, 0.7), 450, 35,
    ),
    _recipe(
        "tuna-pasta-salad", "Tuna Pasta Salad", _LU,
        ["whole wheat pasta", "tuna", "red onion", "greek yogurt", "celery"],
        (450, 35, 48, 8, 6, 6, 520, 45, 2), 350, 20,
    ),
    _recipe(
        "tempeh-power-bowl", "Tempeh Power Bowl", _LU,
        ["tempeh", "brown rice", "edamame", "broccoli", "tamari"],
        (590, 38, 58, 20, 11, 5, 710, 0, 3.5), 450, 25, "medium",
    ),
)

# =============================================================================
# Dinner
# =============================================================================

_D = MealType.DINNER

DINNERS = (
    _recipe(
        "baked-salmon-asparagus", "Baked Salmon with Asparagus", _D,
        ["salmon fillet", "asparagus", "lemon", "garlic", "olive oil"],
        (460, 39, 10, 28, 4, 3, 310, 95, 5), 350, 25,
    ),
    _recipe(
        "tofu-vegetable-stir-fry", "Tofu Vegetable Stir-Fry", _D,
        ["firm tofu", "broccoli", "snap peas", "carrots", "brown rice", "tamari"],
        (420, 21, 52, 13, 7, 8, 690, 0, 2), 420, 25,
    ),
    _recipe(
        "lean-beef-chili", "Lean Beef Chili", _D,
        ["lean ground beef", "kidney beans", "tomatoes", "onion", "chili powder"],
        (480, 38, 36, 16, 12, 9, 740, 90, 6), 400, 40, "medium",
    ),
    _recipe(
        "chickpea-curry", "Chickpea Curry", _D,
        ["chickpeas", "coconut milk", "spinach", "tomatoes", "basmati rice", "curry powder"],
        (520, 16, 68, 20, 12, 10, 560, 0, 12), 450, 35, "medium",
    ),
    _recipe(
        "black-bean-tacos", "Black Bean Tacos", _D,
        ["corn tortillas", "black beans", "salsa", "avocado", "lime", "cilantro"],
        (410, 15, 58, 13, 16, 5, 480, 0, 2), 350, 15,
    ),
    _recipe(
        "chicken-pasta-primavera", "Chicken Pasta Primavera", _D,
        ["penne pasta", "chicken breast", "zucchini", "parmesan cheese", "olive oil"],
        (650, 45, 70, 18, 6, 7, 620, 105, 5), 450, 30, "medium",
    ),
    _recipe(
        "tempeh-lentil-bolognese", "Tempeh Lentil Bolognese", _D,
        ["tempeh", "red lentils", "zucchini noodles", "tomato sauce", "garlic"],
        (510, 36, 48, 17, 15, 12, 590, 0, 3), 450, 35, "medium",
    ),
)

# =============================================================================
# Snacks
# =============================================================================

_S = MealType.SNACK

SNACKS = (
    _recipe(
        "apple-peanut-butter", "Apple with Peanut Butter", _S,
        ["apple", "peanut butter"],
        (270, 7, 30, 16, 5, 19, 150, 0, 3), 200, 2,
    ),
    _recipe(
        "hummus-veggies", "Hummus and Veggies", _S,
        ["hummus", "carrot sticks", "cucumber", "bell pepper"],
        (180, 6, 20, 9, 6, 6, 300, 0, 1.2), 200, 5,
    ),
    _recipe(
        "cottage-cheese-pineapple", "Cottage Cheese with Pineapple", _S,
        ["cottage cheese", "pineapple"],
        (200, 24, 18, 3, 1, 15, 460, 15, 1.5), 230, 2,
    ),
    _recipe(
        "whey-protein-shake", "Whey Protein Shake", _S,
        ["whey protein", "milk", "banana"],
        (340, 36, 38, 5, 3, 26, 230, 30, 2.5), 450, 3,
    ),
    _recipe(
        "pea-protein-shake", "Pea Protein Shake", _S,
        ["pea protein powder", "oat drink", "frozen berries"],
        (260, 31, 24, 6, 5, 12, 390, 0, 0.5), 450, 3,
    ),
    _recipe(
        "trail-mix", "Trail Mix", _S,
        ["almonds", "walnuts", "dark chocolate", "raisins"],
        (310, 8, 26, 21, 4, 17, 10, 0, 4), 60, 1,
    ),
)


RECIPE_CATALOG: Mapping[MealType, tuple[RecipeTemplate, ...]] = MappingProxyType({
    MealType.BREAKFAST: BREAKFASTS,
    MealType.LUNCH: LUNCHES,
    MealType.DINNER: DINNERS,
    MealType.SNACK: SNACKS,
})
