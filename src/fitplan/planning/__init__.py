"""Per-user, per-day workout and meal plan generation."""

from __future__ import annotations

from fitplan.planning.meals import MealPlanGenerator
from fitplan.planning.models import (
    DailyExercise,
    DailyMealPlan,
    DailyWorkoutPlan,
    PlannedMeal,
)
from fitplan.planning.workouts import ExerciseCompletion, WorkoutPlanGenerator

__all__ = [
    "DailyExercise",
    "DailyMealPlan",
    "DailyWorkoutPlan",
    "ExerciseCompletion",
    "MealPlanGenerator",
    "PlannedMeal",
    "WorkoutPlanGenerator",
]
