"""Pytest fixtures for fitplan tests."""

from __future__ import annotations

import tempfile
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from fitplan.db.connection import DatabaseConnection
from fitplan.db.store import SQLiteDocumentStore
from fitplan.nutrition.models import DietaryRestriction, Macros, NutritionGoals
from fitplan.profiles.models import FitnessGoal, FitnessLevel, UserGoalProfile
from fitplan.profiles.queries import ProfileQueries


@pytest.fixture
def temp_db():
    """Create a temporary database with schema."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    db = DatabaseConnection(db_path)
    db.initialize_schema()

    yield db

    # Cleanup
    db_path.unlink(missing_ok=True)


@pytest.fixture
def store(temp_db):
    """Document store over the temporary database."""
    return SQLiteDocumentStore(temp_db)


@pytest.fixture
def today() -> date:
    return date(2026, 10, 18)


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def no_sleep():
    """Sleep replacement that records requested delays."""
    delays: list[float] = []

    def sleep(seconds: float) -> None:
        delays.append(seconds)

    sleep.delays = delays
    return sleep


@pytest.fixture
def make_profile(store):
    """Factory that saves a goal profile."""

    def make(user_id: str, goal: FitnessGoal, level: FitnessLevel, **kwargs):
        profile = UserGoalProfile(
            user_id=user_id, primary_goal=goal, fitness_level=level, **kwargs
        )
        ProfileQueries.save_profile(store, profile)
        return profile

    return make


@pytest.fixture
def make_goals(store):
    """Factory that saves nutrition goals (2000 kcal, 150/200/70 g by default)."""

    def make(user_id: str, restrictions=(), excluded=(), **kwargs):
        goals = NutritionGoals(
            user_id=user_id,
            daily_calories=kwargs.pop("daily_calories", 2000),
            macros=kwargs.pop("macros", Macros(protein=150, carbs=200, fat=70)),
            dietary_restrictions={DietaryRestriction(r) for r in restrictions},
            excluded_ingredients=set(excluded),
            **kwargs,
        )
        store.set("nutritionGoals", user_id, goals.to_dict())
        return goals

    return make
