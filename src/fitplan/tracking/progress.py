"""Per-user progress rollups, per-day activity flags and workout logs."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from fitplan import clock
from fitplan.db.schema import (
    DAILY_ACTIVITY,
    DAILY_WORKOUTS,
    EXERCISE_PROGRESS,
    PROGRESS,
    WORKOUT_LOGS,
)
from fitplan.db.store import DocumentStore, day_key
from fitplan.tracking.models import (
    ACTIVITY_AREAS,
    DailyActivity,
    ExerciseProgress,
    ProgressRollup,
    WorkoutLog,
    WorkoutSet,
)
from fitplan.tracking.streaks import day_streak

logger = logging.getLogger(__name__)


def exercise_progress_key(user_id: str, exercise_id: str) -> str:
    return f"{user_id}_{exercise_id}"


class ProgressTracker:
    """Maintains the ``progress`` rollup and ``dailyActivity`` documents."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def get_rollup(self, user_id: str) -> ProgressRollup:
        """Return the user's rollup, creating an all-zero one if missing."""
        rollup = ProgressRollup(user_id=user_id)
        if not self.store.create_if_absent(PROGRESS, user_id, rollup.to_dict()):
            rollup = ProgressRollup.from_dict(self.store.get(PROGRESS, user_id))
        return rollup

    def workout_streak(self, user_id: str, day: date) -> int:
        """Consecutive days ending at ``day`` with a completed workout plan."""
        plans = self.store.query(
            DAILY_WORKOUTS,
            filters=[("user_id", "==", user_id), ("completed", "==", True)],
        )
        return day_streak((date.fromisoformat(p["date"]) for p in plans), day)

    def record_workout_completed(
        self, user_id: str, day: date, weekly_goal: Optional[int] = None
    ) -> ProgressRollup:
        """Count a newly completed workout plan and refresh the streak."""
        rollup = self.get_rollup(user_id)
        changes = {
            "workouts.completed": rollup.workouts.completed + 1,
            "workouts.streak": self.workout_streak(user_id, day),
        }
        if weekly_goal is not None:
            changes["workouts.goal"] = weekly_goal
        updated = ProgressRollup.from_dict(self.store.update(PROGRESS, user_id, changes))
        logger.info(
            "User %s completed workout %d (streak %d)",
            user_id,
            updated.workouts.completed,
            updated.workouts.streak,
        )
        self.mark_active(user_id, day, "exercise")
        return updated

    def record_nutrition(
        self,
        user_id: str,
        day: date,
        meals_logged_delta: int,
        current_calories: float,
        calorie_goal: Optional[float] = None,
    ) -> ProgressRollup:
        """Apply a meal log change to the nutrition counters."""
        rollup = self.get_rollup(user_id)
        changes = {
            "nutrition.meals_logged": max(
                0, rollup.nutrition.meals_logged + meals_logged_delta
            ),
            "nutrition.current_calories": current_calories,
        }
        if calorie_goal is not None:
            changes["nutrition.calorie_goal"] = calorie_goal
        updated = ProgressRollup.from_dict(self.store.update(PROGRESS, user_id, changes))
        self.mark_active(user_id, day, "nutrition")
        return updated

    def record_mental(
        self,
        user_id: str,
        mood_score: float,
        journal_streak: int,
        breathing_minutes: int,
    ) -> ProgressRollup:
        """Mirror the latest mental health snapshot into the rollup."""
        self.get_rollup(user_id)
        return ProgressRollup.from_dict(
            self.store.update(
                PROGRESS,
                user_id,
                {
                    "mental.mood_score": mood_score,
                    "mental.journal_streak": journal_streak,
                    "mental.breathing_minutes": breathing_minutes,
                },
            )
        )

    def get_activity(self, user_id: str, day: date) -> DailyActivity:
        """Activity flags for a day (all False if nothing was recorded)."""
        data = self.store.get(DAILY_ACTIVITY, day_key(user_id, day.isoformat()))
        if data is None:
            return DailyActivity(user_id=user_id, date=day)
        return DailyActivity.from_dict(data)

    def mark_active(self, user_id: str, day: date, area: str) -> DailyActivity:
        """Set one area's flag for the day.

        Raises:
            ValueError: If area is not exercise, nutrition or mental
        """
        if area not in ACTIVITY_AREAS:
            raise ValueError(f"area must be one of {ACTIVITY_AREAS}, got '{area}'")

        activity = self.get_activity(user_id, day)
        setattr(activity, area, True)
        self.store.set(
            DAILY_ACTIVITY, day_key(user_id, day.isoformat()), activity.to_dict()
        )
        return activity

    # =========================================================================
    # Workout logs
    # =========================================================================

    def log_workout(
        self,
        user_id: str,
        exercise_id: str,
        duration_minutes: float,
        sets: Optional[list[WorkoutSet]] = None,
        notes: Optional[str] = None,
        rating: Optional[int] = None,
        at: Optional[datetime] = None,
    ) -> WorkoutLog:
        """Store a performed session and fold it into the exercise totals.

        Raises:
            ValueError: If duration is negative or rating is outside 1-5
        """
        log = WorkoutLog(
            user_id=user_id,
            exercise_id=exercise_id,
            date=at or clock.utc_now(),
            duration_minutes=duration_minutes,
            sets=list(sets or []),
            notes=notes,
            rating=rating,
        )
        log.log_id = self.store.add(WORKOUT_LOGS, log.to_dict())
        progress = self.update_exercise_progress(log)
        logger.info(
            "User %s logged %s for %s min (session %d)",
            user_id,
            exercise_id,
            duration_minutes,
            progress.total_sessions,
        )
        self.mark_active(user_id, log.date.date(), "exercise")
        return log

    def update_exercise_progress(self, log: WorkoutLog) -> ExerciseProgress:
        """Add one session to the ``{user}_{exercise}`` totals atomically."""
        key = exercise_progress_key(log.user_id, log.exercise_id)
        self.store.create_if_absent(
            EXERCISE_PROGRESS,
            key,
            ExerciseProgress(user_id=log.user_id, exercise_id=log.exercise_id).to_dict(),
        )

        def add_session(data: dict) -> dict:
            progress = ExerciseProgress.from_dict(data)
            progress.add_session(log)
            return progress.to_dict()

        return ExerciseProgress.from_dict(
            self.store.transform(EXERCISE_PROGRESS, key, add_session)
        )

    def get_workout_logs(
        self, user_id: str, exercise_id: Optional[str] = None
    ) -> list[WorkoutLog]:
        """A user's workout logs, newest first, optionally for one exercise."""
        filters = [("user_id", "==", user_id)]
        if exercise_id is not None:
            filters.append(("exercise_id", "==", exercise_id))
        docs = self.store.query(WORKOUT_LOGS, filters=filters, order_by=("date", "desc"))
        return [WorkoutLog.from_dict(d) for d in docs]

    def get_exercise_progress(
        self, user_id: str, exercise_id: str
    ) -> Optional[ExerciseProgress]:
        data = self.store.get(EXERCISE_PROGRESS, exercise_progress_key(user_id, exercise_id))
        return ExerciseProgress.from_dict(data) if data else None

    def all_exercise_progress(self, user_id: str) -> list[ExerciseProgress]:
        """Totals for every exercise the user has logged, most recent first."""
        docs = self.store.query(
            EXERCISE_PROGRESS,
            filters=[("user_id", "==", user_id)],
            order_by=("last_performed", "desc"),
        )
        return [ExerciseProgress.from_dict(d) for d in docs]
