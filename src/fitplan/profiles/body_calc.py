"""Body composition calculator for calorie and macro targets.

Calculates a daily calorie target from onboarding answers and splits it
into macronutrient grams.

Uses the Harris-Benedict equation for BMR, branched on gender. When the
profile lacks weight, height or age a flat default is used instead.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from fitplan.db.schema import NUTRITION_GOALS
from fitplan.db.store import DocumentStore
from fitplan.nutrition.models import Macros, NutritionGoals
from fitplan.profiles.models import FitnessGoal, PersonalInfo, UserGoalProfile

logger = logging.getLogger(__name__)

# Flat targets when biometrics are missing
DEFAULT_CALORIES_WEIGHT_LOSS = 1800
DEFAULT_CALORIES_OTHER = 2200

# Activity multipliers by weekly workout count (upper bound inclusive)
ACTIVITY_MULTIPLIERS = (
    (2, 1.2),
    (4, 1.375),
)
MAX_ACTIVITY_MULTIPLIER = 1.55

GOAL_ADJUSTMENTS = {
    FitnessGoal.WEIGHT_LOSS: 0.85,
    FitnessGoal.MUSCLE_GAIN: 1.15,
}

# kcal per gram
PROTEIN_KCAL_PER_GRAM = 4
CARBS_KCAL_PER_GRAM = 4
FAT_KCAL_PER_GRAM = 9

DEFAULT_WATER_INTAKE_ML = 2000


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def calculate_bmr(info: PersonalInfo) -> float:
    """Calculate Basal Metabolic Rate using the Harris-Benedict equation.

    Args:
        info: Personal info with weight_kg, height_cm and age set

    Returns:
        BMR in calories per day
    """
    if not info.has_biometrics:
        raise ValueError("BMR requires weight_kg, height_cm and age")

    if info.gender == "male":
        return (
            88.362
            + 13.397 * info.weight_kg
            + 4.799 * info.height_cm
            - 5.677 * info.age
        )
    return (
        447.593
        + 9.247 * info.weight_kg
        + 3.098 * info.height_cm
        - 4.330 * info.age
    )


def activity_multiplier(weekly_workouts: int) -> float:
    """Map weekly workout count to an activity multiplier."""
    for max_workouts, multiplier in ACTIVITY_MULTIPLIERS:
        if weekly_workouts <= max_workouts:
            return multiplier
    return MAX_ACTIVITY_MULTIPLIER


def calorie_target(profile: UserGoalProfile) -> int:
    """Calculate the daily calorie target for a profile.

    BMR x activity multiplier x goal adjustment when biometrics are known;
    otherwise 1800 for weight loss and 2200 for every other goal, with no
    further adjustment.

    Returns:
        Daily calories rounded to the nearest integer
    """
    if not profile.personal_info.has_biometrics:
        if profile.primary_goal == FitnessGoal.WEIGHT_LOSS:
            return DEFAULT_CALORIES_WEIGHT_LOSS
        return DEFAULT_CALORIES_OTHER

    bmr = calculate_bmr(profile.personal_info)
    calories = bmr * activity_multiplier(profile.weekly_workouts)
    calories *= GOAL_ADJUSTMENTS.get(profile.primary_goal, 1.0)
    return round_half_up(calories)


@dataclass
class MacroSplit:
    """Macronutrient grams derived from a calorie target."""

    calories: int
    protein: int
    carbs: int
    fat: int

    def to_macros(self) -> Macros:
        return Macros(protein=self.protein, carbs=self.carbs, fat=self.fat)


def macro_split(calories: float, goal: FitnessGoal) -> MacroSplit:
    """Split calories into protein, carbs and fat grams.

    Protein takes 30% of calories for muscle gain (25% otherwise), carbs
    40% for weight loss (50% otherwise), fat always 25%.
    """
    protein_share = 0.30 if goal == FitnessGoal.MUSCLE_GAIN else 0.25
    carbs_share = 0.40 if goal == FitnessGoal.WEIGHT_LOSS else 0.50
    fat_share = 0.25

    return MacroSplit(
        calories=round_half_up(calories),
        protein=round_half_up(calories * protein_share / PROTEIN_KCAL_PER_GRAM),
        carbs=round_half_up(calories * carbs_share / CARBS_KCAL_PER_GRAM),
        fat=round_half_up(calories * fat_share / FAT_KCAL_PER_GRAM),
    )


def default_nutrition_goals(
    profile: UserGoalProfile, water_intake_ml: float = DEFAULT_WATER_INTAKE_ML
) -> NutritionGoals:
    """Build the first NutritionGoals record for a user from their profile."""
    calories = calorie_target(profile)
    split = macro_split(calories, profile.primary_goal)
    return NutritionGoals(
        user_id=profile.user_id,
        daily_calories=calories,
        macros=split.to_macros(),
        water_intake_ml=water_intake_ml,
    )


def ensure_nutrition_goals(
    store: DocumentStore,
    profile: UserGoalProfile,
    water_intake_ml: float = DEFAULT_WATER_INTAKE_ML,
) -> NutritionGoals:
    """Return the user's goals, creating defaults only if none exist.

    Existing goals are user-owned and never overwritten here.
    """
    goals = default_nutrition_goals(profile, water_intake_ml)
    if store.create_if_absent(NUTRITION_GOALS, profile.user_id, goals.to_dict()):
        logger.info(
            "Created default nutrition goals for %s: %s kcal",
            profile.user_id,
            goals.daily_calories,
        )
        return goals
    return NutritionGoals.from_dict(store.get(NUTRITION_GOALS, profile.user_id))
