"""Daily workout plan generation and exercise completion.

One plan exists per (user, day) under ``dailyWorkouts/{user}_{YYYY-MM-DD}``.
Creation uses the store's atomic create-if-absent so concurrent callers
converge on a single stored plan; every caller returns what was stored.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, Optional

from fitplan.catalog.provider import CatalogProvider, get_catalog
from fitplan.config.settings import RetryConfig
from fitplan.db.schema import DAILY_WORKOUTS
from fitplan.db.store import DocumentStore, day_key
from fitplan.errors import IndexOutOfRangeError, PersistenceError
from fitplan.planning.models import DailyExercise, DailyWorkoutPlan
from fitplan.profiles.queries import ProfileQueries
from fitplan.retry import wait_for_document
from fitplan.tracking.progress import ProgressTracker

logger = logging.getLogger(__name__)


@dataclass
class ExerciseCompletion:
    """Plan state after marking an exercise complete."""

    exercises: list[DailyExercise]
    completed: bool


class WorkoutPlanGenerator:
    """Creates and updates daily workout plans."""

    def __init__(
        self,
        store: DocumentStore,
        catalog: Optional[CatalogProvider] = None,
        retry: Optional[RetryConfig] = None,
        progress: Optional[ProgressTracker] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.store = store
        self.catalog = catalog or get_catalog()
        self.retry = retry or RetryConfig()
        self.progress = progress or ProgressTracker(store)
        self._sleep = sleep

    def get_plan(self, user_id: str, today: date) -> Optional[DailyWorkoutPlan]:
        """Return the stored plan for the day, or None."""
        data = self.store.get(DAILY_WORKOUTS, day_key(user_id, today.isoformat()))
        if data is None:
            return None
        return DailyWorkoutPlan.from_dict(data)

    def build_plan(self, user_id: str, today: date) -> DailyWorkoutPlan:
        """Build (without persisting) a plan from the user's profile.

        A missing profile is replaced by a persisted general / beginner
        default.
        """
        profile, _ = ProfileQueries.get_or_create_profile(self.store, user_id)
        templates = self.catalog.workout_for(profile.primary_goal, profile.fitness_level)
        return DailyWorkoutPlan(
            user_id=user_id,
            date=today,
            exercises=[DailyExercise.from_template(t) for t in templates],
            completed=False,
            created_at=datetime.now(timezone.utc),
        )

    def get_or_create_daily_workout(
        self, user_id: str, today: date
    ) -> DailyWorkoutPlan:
        """Return today's plan, generating and persisting it on first call.

        Raises:
            PersistenceError: If the plan cannot be read back after creation
        """
        existing = self.get_plan(user_id, today)
        if existing is not None:
            logger.debug("Workout plan for %s on %s already exists", user_id, today)
            return existing

        key = day_key(user_id, today.isoformat())
        plan = self.build_plan(user_id, today)
        if self.store.create_if_absent(DAILY_WORKOUTS, key, plan.to_dict()):
            logger.info(
                "Created workout plan for %s on %s with %d exercises",
                user_id,
                today,
                len(plan.exercises),
            )
        else:
            logger.info("Workout plan for %s on %s created concurrently", user_id, today)

        stored = self.get_plan(user_id, today)
        if stored is None:
            raise PersistenceError(f"Workout plan {key} missing after create")
        return stored

    def mark_exercise_complete(
        self, user_id: str, today: date, index: int
    ) -> ExerciseCompletion:
        """Mark one exercise done and recompute plan completion.

        Completion is monotonic: the flag is merged into the stored plan
        inside one store transaction, so flags set by other callers are
        never reset.

        Raises:
            NotYetVisibleError: If no plan appears within the configured attempts
            IndexOutOfRangeError: If index is outside the exercise list
            PersistenceError: If a completed flag did not stick on read-back
        """
        key = day_key(user_id, today.isoformat())
        wait_for_document(self.store, DAILY_WORKOUTS, key, self.retry, sleep=self._sleep)

        before: list[bool] = []

        def merge(data: dict) -> dict:
            plan = DailyWorkoutPlan.from_dict(data)
            if not 0 <= index < len(plan.exercises):
                raise IndexOutOfRangeError(
                    f"Exercise index {index} out of range for {len(plan.exercises)} exercises"
                )
            before.append(plan.completed)
            plan.exercises[index].completed = True
            plan.refresh_completed()
            data["exercises"] = [e.to_dict() for e in plan.exercises]
            data["completed"] = plan.completed
            return data

        merged = DailyWorkoutPlan.from_dict(self.store.transform(DAILY_WORKOUTS, key, merge))
        was_completed = before[-1]

        stored = self.get_plan(user_id, today)
        if stored is None or len(stored.exercises) != len(merged.exercises):
            raise PersistenceError(f"Completion of exercise {index} in {key} did not persist")
        lost = [
            i
            for i, (want, got) in enumerate(zip(merged.exercises, stored.exercises))
            if want.completed and not got.completed
        ]
        if lost or (merged.completed and not stored.completed):
            raise PersistenceError(
                f"Completion of exercises {lost or [index]} in {key} did not persist"
            )

        logger.info(
            "User %s completed exercise %d (%s) on %s",
            user_id,
            index,
            stored.exercises[index].name,
            today,
        )

        if stored.completed and not was_completed:
            profile = ProfileQueries.get_profile(self.store, user_id)
            self.progress.record_workout_completed(
                user_id,
                today,
                weekly_goal=profile.weekly_workouts if profile else None,
            )

        return ExerciseCompletion(exercises=stored.exercises, completed=stored.completed)
