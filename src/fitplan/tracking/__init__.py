"""Progress tracking: rollup counters, daily activity, streaks and workout logs."""

from __future__ import annotations

from fitplan.tracking.models import (
    DailyActivity,
    ExerciseProgress,
    ProgressRollup,
    WorkoutLog,
    WorkoutSet,
)
from fitplan.tracking.progress import ProgressTracker
from fitplan.tracking.streaks import day_streak

__all__ = [
    "DailyActivity",
    "ExerciseProgress",
    "ProgressRollup",
    "ProgressTracker",
    "WorkoutLog",
    "WorkoutSet",
    "day_streak",
]
