"""Journal, mood, breathing and motivation records plus derived mental health stats."""

from __future__ import annotations

from fitplan.mental.models import (
    BOX_BREATHING,
    BREATHING_PATTERNS,
    BreathingPattern,
    BreathingSession,
    MOOD_LABELS,
    JournalEntry,
    MentalHealthStats,
    MoodEntry,
    MoodTrend,
    Motivation,
)
from fitplan.mental.records import MentalRecords
from fitplan.mental.stats import MentalHealthStatsEngine, compute_stats

__all__ = [
    "BOX_BREATHING",
    "BREATHING_PATTERNS",
    "BreathingPattern",
    "BreathingSession",
    "MOOD_LABELS",
    "JournalEntry",
    "MentalHealthStats",
    "MentalHealthStatsEngine",
    "MentalRecords",
    "MoodEntry",
    "MoodTrend",
    "Motivation",
    "compute_stats",
]
