"""Data models for progress rollups, daily activity flags and workout logs."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Optional

from fitplan.clock import to_utc

ACTIVITY_AREAS = ("exercise", "nutrition", "mental")


@dataclass
class WorkoutCounters:
    completed: int = 0
    goal: int = 0
    streak: int = 0


@dataclass
class NutritionCounters:
    meals_logged: int = 0
    calorie_goal: float = 0
    current_calories: float = 0


@dataclass
class MentalCounters:
    mood_score: float = 0
    journal_streak: int = 0
    breathing_minutes: int = 0


@dataclass
class ProgressRollup:
    """Running per-user counters shown on the dashboard."""

    user_id: str
    workouts: WorkoutCounters = field(default_factory=WorkoutCounters)
    nutrition: NutritionCounters = field(default_factory=NutritionCounters)
    mental: MentalCounters = field(default_factory=MentalCounters)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ProgressRollup":
        return cls(
            user_id=data["user_id"],
            workouts=WorkoutCounters(**data.get("workouts", {})),
            nutrition=NutritionCounters(**data.get("nutrition", {})),
            mental=MentalCounters(**data.get("mental", {})),
        )


@dataclass
class DailyActivity:
    """Which areas a user was active in on one day."""

    user_id: str
    date: date
    exercise: bool = False
    nutrition: bool = False
    mental: bool = False

    @property
    def completed(self) -> bool:
        return self.exercise and self.nutrition and self.mental

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "exercise": self.exercise,
            "nutrition": self.nutrition,
            "mental": self.mental,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DailyActivity":
        return cls(
            user_id=data["user_id"],
            date=date.fromisoformat(data["date"]),
            exercise=bool(data.get("exercise", False)),
            nutrition=bool(data.get("nutrition", False)),
            mental=bool(data.get("mental", False)),
        )


# =============================================================================
# Workout logs
# =============================================================================


@dataclass
class WorkoutSet:
    """One set of a logged exercise; fields that do not apply stay None."""

    reps: Optional[int] = None
    weight: Optional[float] = None  # kg
    duration_seconds: Optional[float] = None
    distance: Optional[float] = None  # metres
    rest_seconds: Optional[float] = None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutSet":
        return cls(**{k: data.get(k) for k in cls.__dataclass_fields__})


@dataclass
class WorkoutLog:
    """A performed exercise session, independent of the daily plan."""

    user_id: str
    exercise_id: str
    date: datetime
    duration_minutes: float
    sets: list[WorkoutSet] = field(default_factory=list)
    notes: Optional[str] = None
    rating: Optional[int] = None
    log_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.duration_minutes < 0:
            raise ValueError(f"duration_minutes must be >= 0, got {self.duration_minutes}")
        if self.rating is not None and not 1 <= self.rating <= 5:
            raise ValueError(f"rating must be between 1 and 5, got {self.rating}")
        self.date = to_utc(self.date)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "exercise_id": self.exercise_id,
            "date": self.date.isoformat(),
            "duration_minutes": self.duration_minutes,
            "sets": [s.to_dict() for s in self.sets],
            "notes": self.notes,
            "rating": self.rating,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutLog":
        return cls(
            user_id=data["user_id"],
            exercise_id=data["exercise_id"],
            date=datetime.fromisoformat(data["date"]),
            duration_minutes=data.get("duration_minutes", 0),
            sets=[WorkoutSet.from_dict(s) for s in data.get("sets", [])],
            notes=data.get("notes"),
            rating=data.get("rating"),
            log_id=data.get("id"),
        )


@dataclass
class PersonalBests:
    max_weight: Optional[float] = None
    max_reps: Optional[int] = None
    max_duration_seconds: Optional[float] = None
    max_distance: Optional[float] = None

    def include(self, workout_set: WorkoutSet) -> None:
        self.max_weight = _larger(self.max_weight, workout_set.weight)
        self.max_reps = _larger(self.max_reps, workout_set.reps)
        self.max_duration_seconds = _larger(
            self.max_duration_seconds, workout_set.duration_seconds
        )
        self.max_distance = _larger(self.max_distance, workout_set.distance)


def _larger(current, candidate):
    if candidate is None:
        return current
    if current is None:
        return candidate
    return max(current, candidate)


@dataclass
class ExerciseProgress:
    """Running totals for one exercise, stored as ``{user}_{exercise}``."""

    user_id: str
    exercise_id: str
    total_sessions: int = 0
    total_duration: float = 0  # minutes
    last_performed: Optional[datetime] = None
    personal_bests: PersonalBests = field(default_factory=PersonalBests)

    def add_session(self, log: WorkoutLog) -> None:
        """Fold one workout log into the totals."""
        self.total_sessions += 1
        self.total_duration += log.duration_minutes
        if self.last_performed is None or log.date > self.last_performed:
            self.last_performed = log.date
        for workout_set in log.sets:
            self.personal_bests.include(workout_set)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "exercise_id": self.exercise_id,
            "total_sessions": self.total_sessions,
            "total_duration": self.total_duration,
            "last_performed": (
                self.last_performed.isoformat() if self.last_performed else None
            ),
            "personal_bests": asdict(self.personal_bests),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseProgress":
        last = data.get("last_performed")
        return cls(
            user_id=data["user_id"],
            exercise_id=data["exercise_id"],
            total_sessions=data.get("total_sessions", 0),
            total_duration=data.get("total_duration", 0),
            last_performed=to_utc(datetime.fromisoformat(last)) if last else None,
            personal_bests=PersonalBests(**data.get("personal_bests", {})),
        )
