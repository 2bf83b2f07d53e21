"""Data models for nutrition goals, logs and daily progress."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional

from fitplan.nutrition.vector import ZERO, NutritionVector


class MealType(Enum):
    """Meal slots of a day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class DietaryRestriction(Enum):
    """Dietary restrictions a user can select in their nutrition goals."""

    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    GLUTEN_FREE = "glutenFree"
    DAIRY_FREE = "dairyFree"
    NUT_FREE = "nutFree"
    HALAL = "halal"
    KOSHER = "kosher"
    NONE = "none"


@dataclass
class Macros:
    """Daily macronutrient targets in grams."""

    protein: float
    carbs: float
    fat: float


@dataclass
class NutritionGoals:
    """User-owned daily nutrition targets and dietary constraints."""

    user_id: str
    daily_calories: float
    macros: Macros
    water_intake_ml: float = 2000
    dietary_restrictions: set[DietaryRestriction] = field(default_factory=set)
    excluded_ingredients: set[str] = field(default_factory=set)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "daily_calories": self.daily_calories,
            "macros": {
                "protein": self.macros.protein,
                "carbs": self.macros.carbs,
                "fat": self.macros.fat,
            },
            "water_intake_ml": self.water_intake_ml,
            "dietary_restrictions": sorted(r.value for r in self.dietary_restrictions),
            "excluded_ingredients": sorted(self.excluded_ingredients),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NutritionGoals":
        macros = data["macros"]
        return cls(
            user_id=data["user_id"],
            daily_calories=data["daily_calories"],
            macros=Macros(
                protein=macros["protein"], carbs=macros["carbs"], fat=macros["fat"]
            ),
            water_intake_ml=data.get("water_intake_ml", 2000),
            dietary_restrictions={
                DietaryRestriction(r) for r in data.get("dietary_restrictions", [])
            },
            excluded_ingredients=set(data.get("excluded_ingredients", [])),
        )


@dataclass
class LoggedMeal:
    """A meal actually eaten; nutrition is already scaled by servings."""

    name: str
    servings: float
    nutrition: NutritionVector
    logged_at: datetime
    recipe_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "servings": self.servings,
            "nutrition": self.nutrition.to_dict(),
            "logged_at": self.logged_at.isoformat(),
            "recipe_id": self.recipe_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LoggedMeal":
        return cls(
            name=data["name"],
            servings=data["servings"],
            nutrition=NutritionVector.from_dict(data["nutrition"]),
            logged_at=datetime.fromisoformat(data["logged_at"]),
            recipe_id=data.get("recipe_id"),
        )


def _empty_meals() -> dict[MealType, list[LoggedMeal]]:
    return {meal_type: [] for meal_type in MealType}


@dataclass
class NutritionLog:
    """Everything a user ate and drank on one day."""

    log_id: Optional[str]
    user_id: str
    date: date
    meals: dict[MealType, list[LoggedMeal]] = field(default_factory=_empty_meals)
    total_nutrition: NutritionVector = ZERO
    water_intake_ml: float = 0

    @property
    def meal_count(self) -> int:
        return sum(len(logged) for logged in self.meals.values())

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "meals": {
                meal_type.value: [m.to_dict() for m in self.meals.get(meal_type, [])]
                for meal_type in MealType
            },
            "total_nutrition": self.total_nutrition.to_dict(),
            "water_intake_ml": self.water_intake_ml,
        }

    @classmethod
    def from_dict(cls, data: dict, log_id: Optional[str] = None) -> "NutritionLog":
        meals_data = data.get("meals", {})
        return cls(
            log_id=log_id or data.get("id"),
            user_id=data["user_id"],
            date=date.fromisoformat(data["date"]),
            meals={
                meal_type: [
                    LoggedMeal.from_dict(m) for m in meals_data.get(meal_type.value, [])
                ]
                for meal_type in MealType
            },
            total_nutrition=NutritionVector.from_dict(data.get("total_nutrition", {})),
            water_intake_ml=data.get("water_intake_ml", 0),
        )


@dataclass
class NutritionProgress:
    """Planned vs actual nutrition for one day, with its adherence score."""

    user_id: str
    date: date
    planned: NutritionVector
    actual: NutritionVector
    water_planned_ml: float
    water_actual_ml: float
    adherence_rate: float

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "planned": self.planned.to_dict(),
            "actual": self.actual.to_dict(),
            "water_planned_ml": self.water_planned_ml,
            "water_actual_ml": self.water_actual_ml,
            "adherence_rate": self.adherence_rate,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NutritionProgress":
        return cls(
            user_id=data["user_id"],
            date=date.fromisoformat(data["date"]),
            planned=NutritionVector.from_dict(data["planned"]),
            actual=NutritionVector.from_dict(data["actual"]),
            water_planned_ml=data["water_planned_ml"],
            water_actual_ml=data["water_actual_ml"],
            adherence_rate=data["adherence_rate"],
        )
