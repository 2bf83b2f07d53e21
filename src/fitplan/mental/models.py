"""Data models for journals, mood check-ins, breathing and motivations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Iterable, Optional

from fitplan.clock import to_utc

MOOD_MIN = 1
MOOD_MAX = 5
NEUTRAL_MOOD = 3

MOOD_TAGS = (
    "happy",
    "excited",
    "peaceful",
    "content",
    "neutral",
    "anxious",
    "stressed",
    "sad",
    "angry",
    "frustrated",
    "tired",
    "energetic",
    "motivated",
    "unmotivated",
    "other",
)

# Labels for the quick daily check-in, best first
MOOD_LABELS = ("great", "good", "okay", "bad", "terrible")

MOTIVATION_TYPES = (
    "health",
    "fitness",
    "mental",
    "personal",
    "family",
    "career",
    "other",
)


class MoodTrend(Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


def validate_mood(mood: Optional[int], name: str = "mood") -> None:
    if mood is None:
        return
    if not MOOD_MIN <= mood <= MOOD_MAX:
        raise ValueError(f"{name} must be between {MOOD_MIN} and {MOOD_MAX}, got {mood}")


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """Validate mood tags and drop duplicates, keeping first occurrence order."""
    result: list[str] = []
    for tag in tags:
        if tag not in MOOD_TAGS:
            raise ValueError(f"Unknown mood tag '{tag}'")
        if tag not in result:
            result.append(tag)
    return result


# =============================================================================
# Journal
# =============================================================================


@dataclass
class JournalEntry:
    """A dated free-text journal entry with a 1-5 mood rating."""

    user_id: str
    date: datetime
    content: str
    mood: int = NEUTRAL_MOOD
    mood_tags: list[str] = field(default_factory=list)
    is_private: bool = True
    entry_id: Optional[str] = None

    def __post_init__(self) -> None:
        validate_mood(self.mood)
        self.mood_tags = normalize_tags(self.mood_tags)
        self.date = to_utc(self.date)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "content": self.content,
            "mood": self.mood,
            "mood_tags": list(self.mood_tags),
            "is_private": self.is_private,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "JournalEntry":
        return cls(
            user_id=data["user_id"],
            date=datetime.fromisoformat(data["date"]),
            content=data.get("content", ""),
            mood=data.get("mood", NEUTRAL_MOOD),
            mood_tags=list(data.get("mood_tags", [])),
            is_private=data.get("is_private", True),
            entry_id=data.get("id"),
        )


@dataclass
class MoodEntry:
    """Quick daily mood check-in; at most one per user per UTC day."""

    user_id: str
    date: datetime
    mood: str
    completed_breathing: bool = False
    journal_entry: Optional[str] = None
    entry_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.mood not in MOOD_LABELS:
            raise ValueError(f"Unknown mood '{self.mood}', expected one of {MOOD_LABELS}")
        self.date = to_utc(self.date)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "mood": self.mood,
            "completed_breathing": self.completed_breathing,
            "journal_entry": self.journal_entry,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MoodEntry":
        return cls(
            user_id=data["user_id"],
            date=datetime.fromisoformat(data["date"]),
            mood=data["mood"],
            completed_breathing=bool(data.get("completed_breathing", False)),
            journal_entry=data.get("journal_entry"),
            entry_id=data.get("id"),
        )


# =============================================================================
# Breathing
# =============================================================================


@dataclass(frozen=True)
class BreathingPattern:
    """Phase lengths (seconds) of one breathing cycle."""

    name: str
    inhale_seconds: int
    hold_inhale_seconds: int
    exhale_seconds: int
    hold_exhale_seconds: int
    repetitions: int
    description: str = ""

    @property
    def cycle_seconds(self) -> int:
        return (
            self.inhale_seconds
            + self.hold_inhale_seconds
            + self.exhale_seconds
            + self.hold_exhale_seconds
        )

    def completed_repetitions(self, duration_seconds: float) -> int:
        """Whole cycles that fit into a session of the given length."""
        if self.cycle_seconds <= 0:
            return 0
        return int(duration_seconds // self.cycle_seconds)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "inhale_seconds": self.inhale_seconds,
            "hold_inhale_seconds": self.hold_inhale_seconds,
            "exhale_seconds": self.exhale_seconds,
            "hold_exhale_seconds": self.hold_exhale_seconds,
            "repetitions": self.repetitions,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BreathingPattern":
        return cls(
            name=data["name"],
            inhale_seconds=data["inhale_seconds"],
            hold_inhale_seconds=data["hold_inhale_seconds"],
            exhale_seconds=data["exhale_seconds"],
            hold_exhale_seconds=data["hold_exhale_seconds"],
            repetitions=data["repetitions"],
            description=data.get("description", ""),
        )


BOX_BREATHING = BreathingPattern(
    name="Box Breathing",
    inhale_seconds=4,
    hold_inhale_seconds=4,
    exhale_seconds=4,
    hold_exhale_seconds=4,
    repetitions=4,
    description="A simple breathing technique to reduce stress",
)

RELAXING_BREATH = BreathingPattern(
    name="4-7-8 Breathing",
    inhale_seconds=4,
    hold_inhale_seconds=7,
    exhale_seconds=8,
    hold_exhale_seconds=0,
    repetitions=4,
    description="Long exhale to calm the nervous system before sleep",
)

DEEP_BREATHING = BreathingPattern(
    name="Deep Breathing",
    inhale_seconds=5,
    hold_inhale_seconds=0,
    exhale_seconds=5,
    hold_exhale_seconds=0,
    repetitions=6,
    description="Slow, even breaths at six per minute",
)

BREATHING_PATTERNS = {
    "box": BOX_BREATHING,
    "478": RELAXING_BREATH,
    "deep": DEEP_BREATHING,
}


@dataclass
class BreathingSession:
    user_id: str
    date: datetime
    pattern: BreathingPattern
    completed_repetitions: int
    duration_seconds: float
    mood_before: Optional[int] = None
    mood_after: Optional[int] = None
    notes: Optional[str] = None
    session_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.duration_seconds < 0:
            raise ValueError(f"duration_seconds must be >= 0, got {self.duration_seconds}")
        validate_mood(self.mood_before, "mood_before")
        validate_mood(self.mood_after, "mood_after")
        self.date = to_utc(self.date)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "pattern": self.pattern.to_dict(),
            "completed_repetitions": self.completed_repetitions,
            "duration_seconds": self.duration_seconds,
            "mood_before": self.mood_before,
            "mood_after": self.mood_after,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BreathingSession":
        return cls(
            user_id=data["user_id"],
            date=datetime.fromisoformat(data["date"]),
            pattern=BreathingPattern.from_dict(data["pattern"]),
            completed_repetitions=data.get("completed_repetitions", 0),
            duration_seconds=data.get("duration_seconds", 0),
            mood_before=data.get("mood_before"),
            mood_after=data.get("mood_after"),
            notes=data.get("notes"),
            session_id=data.get("id"),
        )


# =============================================================================
# Motivations and stats
# =============================================================================


@dataclass
class Motivation:
    user_id: str
    type: str
    title: str
    description: str = ""
    is_active: bool = True
    motivation_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.type not in MOTIVATION_TYPES:
            raise ValueError(f"Unknown motivation type '{self.type}'")

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Motivation":
        return cls(
            user_id=data["user_id"],
            type=data["type"],
            title=data["title"],
            description=data.get("description", ""),
            is_active=bool(data.get("is_active", True)),
            motivation_id=data.get("id"),
        )


@dataclass
class MentalHealthStats:
    """Snapshot derived from journal, breathing and motivation records.

    Always recomputable from those records; stored only as a cache.
    """

    user_id: str
    date: date
    average_mood: float
    mood_trend: MoodTrend
    common_mood_tags: list[str]
    journal_streak: int
    breathing_minutes: int
    active_motivations: int

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "average_mood": self.average_mood,
            "mood_trend": self.mood_trend.value,
            "common_mood_tags": list(self.common_mood_tags),
            "journal_streak": self.journal_streak,
            "breathing_minutes": self.breathing_minutes,
            "active_motivations": self.active_motivations,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MentalHealthStats":
        return cls(
            user_id=data["user_id"],
            date=date.fromisoformat(data["date"]),
            average_mood=data["average_mood"],
            mood_trend=MoodTrend(data["mood_trend"]),
            common_mood_tags=list(data.get("common_mood_tags", [])),
            journal_streak=data.get("journal_streak", 0),
            breathing_minutes=data.get("breathing_minutes", 0),
            active_motivations=data.get("active_motivations", 0),
        )
