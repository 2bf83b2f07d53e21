"""Data models for per-user, per-day workout and meal plans.

A plan is generated once per (user, day) and afterwards only mutated by
completion actions. Both plans serialize to plain dicts for the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from fitplan.catalog.models import ExerciseTemplate, RecipeTemplate
from fitplan.nutrition.vector import ZERO, NutritionVector

DEFAULT_SETS = 3
DEFAULT_REPS = 12


@dataclass
class DailyExercise:
    """An exercise template snapshotted into a day's plan."""

    exercise_id: str
    name: str
    muscle_groups: list[str]
    equipment: list[str]
    difficulty: str
    instructions: list[str]
    tips: list[str]
    duration_minutes: int
    calories_per_minute: float
    sets: int = DEFAULT_SETS
    reps: int = DEFAULT_REPS
    completed: bool = False

    @classmethod
    def from_template(cls, template: ExerciseTemplate) -> "DailyExercise":
        """Snapshot a catalog template; sets/reps default to 3 x 12."""
        return cls(
            exercise_id=template.exercise_id,
            name=template.name,
            muscle_groups=sorted(template.muscle_groups),
            equipment=sorted(template.equipment),
            difficulty=template.difficulty,
            instructions=list(template.instructions),
            tips=list(template.tips),
            duration_minutes=template.duration_minutes,
            calories_per_minute=template.calories_per_minute,
            sets=template.sets if template.sets is not None else DEFAULT_SETS,
            reps=template.reps if template.reps is not None else DEFAULT_REPS,
        )

    def to_dict(self) -> dict:
        return {
            "exercise_id": self.exercise_id,
            "name": self.name,
            "muscle_groups": list(self.muscle_groups),
            "equipment": list(self.equipment),
            "difficulty": self.difficulty,
            "instructions": list(self.instructions),
            "tips": list(self.tips),
            "duration_minutes": self.duration_minutes,
            "calories_per_minute": self.calories_per_minute,
            "sets": self.sets,
            "reps": self.reps,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DailyExercise":
        return cls(
            exercise_id=data["exercise_id"],
            name=data["name"],
            muscle_groups=list(data.get("muscle_groups", [])),
            equipment=list(data.get("equipment", [])),
            difficulty=data.get("difficulty", "beginner"),
            instructions=list(data.get("instructions", [])),
            tips=list(data.get("tips", [])),
            duration_minutes=data.get("duration_minutes", 0),
            calories_per_minute=data.get("calories_per_minute", 0),
            sets=data.get("sets", DEFAULT_SETS),
            reps=data.get("reps", DEFAULT_REPS),
            completed=bool(data.get("completed", False)),
        )


@dataclass
class DailyWorkoutPlan:
    """One user's workout for one calendar day.

    ``completed`` is true iff every exercise is completed.
    """

    user_id: str
    date: date
    exercises: list[DailyExercise]
    completed: bool = False
    created_at: Optional[datetime] = None

    def refresh_completed(self) -> bool:
        """Recompute the plan-level flag from the exercises and return it."""
        self.completed = all(e.completed for e in self.exercises)
        return self.completed

    @property
    def total_minutes(self) -> int:
        return sum(e.duration_minutes for e in self.exercises)

    @property
    def estimated_calories(self) -> float:
        return sum(e.duration_minutes * e.calories_per_minute for e in self.exercises)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "exercises": [e.to_dict() for e in self.exercises],
            "completed": self.completed,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DailyWorkoutPlan":
        return cls(
            user_id=data["user_id"],
            date=date.fromisoformat(data["date"]),
            exercises=[DailyExercise.from_dict(e) for e in data.get("exercises", [])],
            completed=bool(data.get("completed", False)),
            created_at=(
                datetime.fromisoformat(data["created_at"])
                if data.get("created_at")
                else None
            ),
        )


@dataclass
class PlannedMeal:
    """Reference to the catalog recipe chosen for a meal slot."""

    recipe_id: str
    name: str
    servings: float = 1
    completed: bool = False

    @classmethod
    def from_recipe(cls, recipe: RecipeTemplate) -> "PlannedMeal":
        return cls(recipe_id=recipe.recipe_id, name=recipe.name)

    def to_dict(self) -> dict:
        return {
            "recipe_id": self.recipe_id,
            "name": self.name,
            "servings": self.servings,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PlannedMeal":
        return cls(
            recipe_id=data["recipe_id"],
            name=data["name"],
            servings=data.get("servings", 1),
            completed=bool(data.get("completed", False)),
        )


@dataclass
class DailyMealPlan:
    """One user's meals for one calendar day.

    ``completed`` is set only by the explicit "completed today" action.
    """

    user_id: str
    date: date
    breakfast: PlannedMeal
    lunch: PlannedMeal
    dinner: PlannedMeal
    snacks: list[PlannedMeal] = field(default_factory=list)
    total_nutrition: NutritionVector = ZERO
    completed: bool = False
    created_at: Optional[datetime] = None

    @property
    def meals(self) -> list[PlannedMeal]:
        """All planned meals in serving order."""
        return [self.breakfast, self.lunch, self.dinner, *self.snacks]

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "breakfast": self.breakfast.to_dict(),
            "lunch": self.lunch.to_dict(),
            "dinner": self.dinner.to_dict(),
            "snacks": [s.to_dict() for s in self.snacks],
            "total_nutrition": self.total_nutrition.to_dict(),
            "completed": self.completed,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DailyMealPlan":
        return cls(
            user_id=data["user_id"],
            date=date.fromisoformat(data["date"]),
            breakfast=PlannedMeal.from_dict(data["breakfast"]),
            lunch=PlannedMeal.from_dict(data["lunch"]),
            dinner=PlannedMeal.from_dict(data["dinner"]),
            snacks=[PlannedMeal.from_dict(s) for s in data.get("snacks", [])],
            total_nutrition=NutritionVector.from_dict(data.get("total_nutrition", {})),
            completed=bool(data.get("completed", False)),
            created_at=(
                datetime.fromisoformat(data["created_at"])
                if data.get("created_at")
                else None
            ),
        )
