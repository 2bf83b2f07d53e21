"""User goal profiles and calorie targets."""

from __future__ import annotations

from fitplan.profiles.models import (
    FitnessGoal,
    FitnessLevel,
    PersonalInfo,
    UserGoalProfile,
)
from fitplan.profiles.queries import ProfileQueries

__all__ = [
    "FitnessGoal",
    "FitnessLevel",
    "PersonalInfo",
    "ProfileQueries",
    "UserGoalProfile",
]
