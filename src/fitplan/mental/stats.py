"""Mental health statistics over a window of journal and breathing records.

The pure functions take already-windowed records; MentalHealthStatsEngine
loads the windows from the store and writes the snapshot.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Iterable, Optional

from fitplan.config.settings import MentalConfig
from fitplan.db.schema import (
    BREATHING_SESSIONS,
    JOURNAL_ENTRIES,
    MENTAL_HEALTH_STATS,
    MOTIVATIONS,
)
from fitplan.db.store import DocumentStore, day_key
from fitplan.mental.models import (
    NEUTRAL_MOOD,
    BreathingSession,
    JournalEntry,
    MentalHealthStats,
    MoodTrend,
    Motivation,
    to_utc,
)
from fitplan.tracking.progress import ProgressTracker
from fitplan.tracking.streaks import day_streak

logger = logging.getLogger(__name__)

TREND_THRESHOLD = 0.2
MAX_COMMON_TAGS = 3


def average_mood(entries: Iterable[JournalEntry]) -> float:
    """Mean mood rounded to one decimal; neutral (3) when there are no entries."""
    moods = [e.mood for e in entries]
    if not moods:
        return float(NEUTRAL_MOOD)
    return math.floor(sum(moods) / len(moods) * 10 + 0.5) / 10


def mood_trend(entries: Iterable[JournalEntry]) -> MoodTrend:
    """Classify the mean change between consecutive moods.

    Entries are ordered by date first. Mean delta above 0.2 is improving,
    below -0.2 declining; anything else, or fewer than two entries, is
    stable.
    """
    ordered = sorted(entries, key=lambda e: e.date)
    if len(ordered) < 2:
        return MoodTrend.STABLE

    deltas = [b.mood - a.mood for a, b in zip(ordered, ordered[1:])]
    mean_delta = sum(deltas) / len(deltas)
    if mean_delta > TREND_THRESHOLD:
        return MoodTrend.IMPROVING
    if mean_delta < -TREND_THRESHOLD:
        return MoodTrend.DECLINING
    return MoodTrend.STABLE


def common_mood_tags(
    entries: Iterable[JournalEntry], limit: int = MAX_COMMON_TAGS
) -> list[str]:
    """Most frequent tags, ties broken by the order tags were first seen.

    Callers pass entries newest first, so among equally common tags the
    most recently used one wins.
    """
    counts: dict[str, int] = {}
    for entry in entries:
        for tag in entry.mood_tags:
            counts[tag] = counts.get(tag, 0) + 1
    # sorted() is stable, so equal counts keep insertion order
    ranked = sorted(counts, key=lambda tag: -counts[tag])
    return ranked[:limit]


def journal_streak(entries: Iterable[JournalEntry], as_of: datetime) -> int:
    return day_streak((e.date for e in entries), as_of)


def breathing_minutes(sessions: Iterable[BreathingSession]) -> int:
    """Total session time in whole minutes (half a minute rounds up)."""
    total_seconds = sum(s.duration_seconds for s in sessions)
    return math.floor(total_seconds / 60 + 0.5)


def compute_stats(
    user_id: str,
    as_of: datetime,
    entries: list[JournalEntry],
    sessions: list[BreathingSession],
    active_motivations: int,
) -> MentalHealthStats:
    """Build a snapshot from records that are already inside their windows."""
    ordered = sorted(entries, key=lambda e: e.date)
    newest_first = list(reversed(ordered))
    return MentalHealthStats(
        user_id=user_id,
        date=as_of.date(),
        average_mood=average_mood(ordered),
        mood_trend=mood_trend(ordered),
        common_mood_tags=common_mood_tags(newest_first),
        journal_streak=journal_streak(ordered, as_of),
        breathing_minutes=breathing_minutes(sessions),
        active_motivations=active_motivations,
    )


class MentalHealthStatsEngine:
    """Loads windows of mental health records and stores the derived snapshot."""

    def __init__(
        self,
        store: DocumentStore,
        config: Optional[MentalConfig] = None,
        progress: Optional[ProgressTracker] = None,
    ):
        self.store = store
        self.config = config or MentalConfig()
        self.progress = progress or ProgressTracker(store)

    def journal_window(self, user_id: str, as_of: datetime) -> list[JournalEntry]:
        """Entries dated within the journal window ending at as_of, oldest first."""
        end = to_utc(as_of)
        start = end - timedelta(days=self.config.journal_window_days)
        entries = [
            JournalEntry.from_dict(d)
            for d in self.store.query(JOURNAL_ENTRIES, filters=[("user_id", "==", user_id)])
        ]
        return sorted(
            (e for e in entries if start <= e.date <= end), key=lambda e: e.date
        )

    def breathing_window(self, user_id: str, as_of: datetime) -> list[BreathingSession]:
        end = to_utc(as_of)
        start = end - timedelta(hours=self.config.breathing_window_hours)
        sessions = [
            BreathingSession.from_dict(d)
            for d in self.store.query(
                BREATHING_SESSIONS, filters=[("user_id", "==", user_id)]
            )
        ]
        return [s for s in sessions if start <= s.date <= end]

    def active_motivations(self, user_id: str) -> list[Motivation]:
        docs = self.store.query(
            MOTIVATIONS,
            filters=[("user_id", "==", user_id), ("is_active", "==", True)],
        )
        return [Motivation.from_dict(d) for d in docs]

    def compute(self, user_id: str, as_of: datetime) -> MentalHealthStats:
        """Derive the snapshot as of a timestamp without storing it."""
        as_of = to_utc(as_of)
        return compute_stats(
            user_id,
            as_of,
            self.journal_window(user_id, as_of),
            self.breathing_window(user_id, as_of),
            len(self.active_motivations(user_id)),
        )

    def refresh(self, user_id: str, as_of: datetime) -> MentalHealthStats:
        """Recompute, overwrite the day's snapshot and mirror it into the rollup."""
        stats = self.compute(user_id, as_of)
        self.store.set(
            MENTAL_HEALTH_STATS,
            day_key(user_id, stats.date.isoformat()),
            stats.to_dict(),
        )
        self.progress.record_mental(
            user_id,
            mood_score=stats.average_mood,
            journal_streak=stats.journal_streak,
            breathing_minutes=stats.breathing_minutes,
        )
        logger.debug(
            "Mental stats for %s on %s: mood %.1f (%s), streak %d",
            user_id,
            stats.date,
            stats.average_mood,
            stats.mood_trend.value,
            stats.journal_streak,
        )
        return stats

    def get_stats(self, user_id: str, day) -> Optional[MentalHealthStats]:
        """Stored snapshot for a day, or None."""
        data = self.store.get(MENTAL_HEALTH_STATS, day_key(user_id, day.isoformat()))
        return MentalHealthStats.from_dict(data) if data else None
