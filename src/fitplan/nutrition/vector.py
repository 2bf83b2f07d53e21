"""Nutrition vectors and the two aggregation primitives, scale and sum."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Iterable

# Fields that scale with quantity and add across meals
NUTRIENT_FIELDS = (
    "calories",
    "protein",
    "carbs",
    "fat",
    "fiber",
    "sugar",
    "sodium",
    "cholesterol",
    "saturated_fat",
)


@dataclass(frozen=True)
class NutritionVector:
    """Nutrient amounts for one serving or one logged quantity.

    Units follow food labels: calories in kcal, sodium and cholesterol
    in mg, everything else in grams. serving_size (grams) and servings
    are metadata and are never summed.
    """

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0
    sodium: float = 0.0
    cholesterol: float = 0.0
    saturated_fat: float = 0.0
    serving_size: float = 0.0
    servings: float = 0.0

    def __post_init__(self) -> None:
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise ValueError(f"{f.name} must be >= 0, got {getattr(self, f.name)}")

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "NutritionVector":
        known = {f.name for f in fields(cls)}
        return cls(**{k: float(v) for k, v in data.items() if k in known})


ZERO = NutritionVector()


def scale(vector: NutritionVector, multiplier: float) -> NutritionVector:
    """Multiply every nutrient by multiplier.

    serving_size and servings pass through unscaled.

    Raises:
        ValueError: If multiplier is negative
    """
    if multiplier < 0:
        raise ValueError(f"multiplier must be >= 0, got {multiplier}")
    return replace(
        vector,
        **{name: getattr(vector, name) * multiplier for name in NUTRIENT_FIELDS},
    )


def sum_vectors(vectors: Iterable[NutritionVector]) -> NutritionVector:
    """Add nutrient fields across vectors.

    The metadata fields are left at zero in the result; sum_vectors([])
    is the zero vector.
    """
    totals = dict.fromkeys(NUTRIENT_FIELDS, 0.0)
    for vector in vectors:
        for name in NUTRIENT_FIELDS:
            totals[name] += getattr(vector, name)
    return NutritionVector(**totals)
