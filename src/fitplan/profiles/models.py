"""User goal profile models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class FitnessGoal(Enum):
    """Primary fitness goal chosen during onboarding."""

    WEIGHT_LOSS = "weightLoss"
    MUSCLE_GAIN = "muscleGain"
    ENDURANCE = "endurance"
    FLEXIBILITY = "flexibility"
    STRENGTH = "strength"
    GENERAL = "general"


class FitnessLevel(Enum):
    """Self-reported training experience."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


VALID_GENDERS = ("male", "female", "other", "preferNotToSay")


@dataclass
class PersonalInfo:
    """Biometric answers from onboarding. Every field is optional."""

    gender: Optional[str] = None
    age: Optional[int] = None
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    target_weight_kg: Optional[float] = None

    def __post_init__(self) -> None:
        if self.gender is not None and self.gender not in VALID_GENDERS:
            raise ValueError(
                f"gender must be one of {VALID_GENDERS}, got '{self.gender}'"
            )

    @property
    def has_biometrics(self) -> bool:
        """True when weight, height and age are all known."""
        return (
            self.weight_kg is not None
            and self.height_cm is not None
            and self.age is not None
        )


@dataclass
class UserGoalProfile:
    """Goal, level and training frequency driving plan generation."""

    user_id: str
    primary_goal: FitnessGoal = FitnessGoal.GENERAL
    fitness_level: FitnessLevel = FitnessLevel.BEGINNER
    weekly_workouts: int = 3
    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.weekly_workouts < 0:
            raise ValueError(
                f"weekly_workouts must be >= 0, got {self.weekly_workouts}"
            )

    def to_dict(self) -> dict:
        info = self.personal_info
        return {
            "user_id": self.user_id,
            "primary_goal": self.primary_goal.value,
            "fitness_level": self.fitness_level.value,
            "weekly_workouts": self.weekly_workouts,
            "personal_info": {
                "gender": info.gender,
                "age": info.age,
                "height_cm": info.height_cm,
                "weight_kg": info.weight_kg,
                "target_weight_kg": info.target_weight_kg,
            },
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserGoalProfile":
        info = data.get("personal_info") or {}
        return cls(
            user_id=data["user_id"],
            primary_goal=FitnessGoal(data.get("primary_goal", "general")),
            fitness_level=FitnessLevel(data.get("fitness_level", "beginner")),
            weekly_workouts=int(data.get("weekly_workouts", 3)),
            personal_info=PersonalInfo(
                gender=info.get("gender"),
                age=info.get("age"),
                height_cm=info.get("height_cm"),
                weight_kg=info.get("weight_kg"),
                target_weight_kg=info.get("target_weight_kg"),
            ),
            created_at=(
                datetime.fromisoformat(data["created_at"])
                if data.get("created_at")
                else None
            ),
        )
