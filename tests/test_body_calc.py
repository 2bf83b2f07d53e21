"""Tests for calorie targets and macro splits."""

from __future__ import annotations

import pytest

from fitplan.db.schema import NUTRITION_GOALS
from fitplan.profiles.body_calc import (
    activity_multiplier,
    calculate_bmr,
    calorie_target,
    default_nutrition_goals,
    ensure_nutrition_goals,
    macro_split,
)
from fitplan.profiles.models import FitnessGoal, PersonalInfo, UserGoalProfile


def profile(goal=FitnessGoal.GENERAL, workouts=3, **info) -> UserGoalProfile:
    return UserGoalProfile(
        user_id="u1",
        primary_goal=goal,
        weekly_workouts=workouts,
        personal_info=PersonalInfo(**info),
    )


class TestCalculateBMR:
    def test_male(self) -> None:
        info = PersonalInfo(gender="male", age=30, height_cm=180, weight_kg=80)
        assert calculate_bmr(info) == pytest.approx(1853.632)

    def test_non_male_uses_female_equation(self) -> None:
        info = PersonalInfo(gender="other", age=25, height_cm=165, weight_kg=60)
        assert calculate_bmr(info) == pytest.approx(1405.333)

    def test_requires_biometrics(self) -> None:
        with pytest.raises(ValueError):
            calculate_bmr(PersonalInfo(age=30))


class TestActivityMultiplier:
    @pytest.mark.parametrize(
        "workouts,expected",
        [(0, 1.2), (2, 1.2), (3, 1.375), (4, 1.375), (5, 1.55), (7, 1.55)],
    )
    def test_thresholds(self, workouts, expected) -> None:
        assert activity_multiplier(workouts) == expected


class TestCalorieTarget:
    def test_muscle_gain_male(self) -> None:
        p = profile(FitnessGoal.MUSCLE_GAIN, 3, gender="male", age=30, height_cm=180, weight_kg=80)
        # 1853.632 * 1.375 * 1.15 = 2931.06
        assert calorie_target(p) == 2931

    def test_weight_loss_female(self) -> None:
        p = profile(FitnessGoal.WEIGHT_LOSS, 5, gender="female", age=25, height_cm=165, weight_kg=60)
        # 1405.333 * 1.55 * 0.85 = 1851.53
        assert calorie_target(p) == 1852

    def test_defaults_without_biometrics(self) -> None:
        assert calorie_target(profile(FitnessGoal.WEIGHT_LOSS, workouts=7)) == 1800
        assert calorie_target(profile(FitnessGoal.MUSCLE_GAIN)) == 2200
        assert calorie_target(profile(FitnessGoal.GENERAL, weight_kg=70)) == 2200


class TestMacroSplit:
    def test_general(self) -> None:
        split = macro_split(2000, FitnessGoal.GENERAL)
        assert (split.protein, split.carbs, split.fat) == (125, 250, 56)

    def test_muscle_gain_more_protein(self) -> None:
        assert macro_split(2000, FitnessGoal.MUSCLE_GAIN).protein == 150

    def test_weight_loss_fewer_carbs(self) -> None:
        assert macro_split(2000, FitnessGoal.WEIGHT_LOSS).carbs == 200


class TestNutritionGoalDefaults:
    def test_default_goals(self) -> None:
        goals = default_nutrition_goals(profile(FitnessGoal.WEIGHT_LOSS))
        assert goals.daily_calories == 1800
        assert goals.macros.carbs == 180
        assert goals.water_intake_ml == 2000
        assert goals.dietary_restrictions == set()

    def test_ensure_does_not_overwrite(self, store) -> None:
        p = profile(FitnessGoal.GENERAL)
        first = ensure_nutrition_goals(store, p)
        assert store.get(NUTRITION_GOALS, "u1")["daily_calories"] == first.daily_calories

        store.update(NUTRITION_GOALS, "u1", {"daily_calories": 2500})
        again = ensure_nutrition_goals(store, p)
        assert again.daily_calories == 2500
