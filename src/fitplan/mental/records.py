"""Journal, breathing and motivation record keeping.

Every change marks the user's ``mental`` activity for the day. Journal,
breathing and motivation changes also refresh the stats snapshot, which
mirrors mood, streak and breathing minutes into the progress rollup. Mood
check-ins are kept one per UTC day under ``moodEntries/{user}_{YYYY-MM-DD}``.
"""

from __future__ import annotations

import logging
from datetime import datetime, time, timedelta, timezone
from typing import Callable, Iterable, Optional

from fitplan import clock as utc_clock
from fitplan.db.schema import (
    BREATHING_SESSIONS,
    JOURNAL_ENTRIES,
    MOOD_ENTRIES,
    MOTIVATIONS,
)
from fitplan.db.store import DocumentStore, day_key
from fitplan.errors import NotFoundError, PersistenceError
from fitplan.mental.models import (
    BOX_BREATHING,
    NEUTRAL_MOOD,
    BreathingPattern,
    BreathingSession,
    JournalEntry,
    MoodEntry,
    Motivation,
)
from fitplan.mental.stats import MentalHealthStatsEngine
from fitplan.tracking.progress import ProgressTracker

logger = logging.getLogger(__name__)

# Journal fields a user may edit; the entry date is fixed at creation
EDITABLE_JOURNAL_FIELDS = ("content", "mood", "mood_tags", "is_private")

DEFAULT_MOOD_HISTORY_DAYS = 7


class MentalRecords:
    """Create, edit and delete a user's mental health records."""

    def __init__(
        self,
        store: DocumentStore,
        stats: Optional[MentalHealthStatsEngine] = None,
        progress: Optional[ProgressTracker] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.progress = progress or ProgressTracker(store)
        self.stats = stats or MentalHealthStatsEngine(store, progress=self.progress)
        self._clock = clock or utc_clock.utc_now

    def _touch(self, user_id: str) -> None:
        now = self._clock()
        self.progress.mark_active(user_id, now.date(), "mental")
        self.stats.refresh(user_id, now)

    # =========================================================================
    # Journal
    # =========================================================================

    def get_journal_entry(self, entry_id: str) -> Optional[JournalEntry]:
        data = self.store.get(JOURNAL_ENTRIES, entry_id)
        if data is None:
            return None
        entry = JournalEntry.from_dict(data)
        entry.entry_id = entry_id
        return entry

    def add_journal_entry(
        self,
        user_id: str,
        content: str,
        mood: int = NEUTRAL_MOOD,
        mood_tags: Optional[list[str]] = None,
        is_private: bool = True,
        at: Optional[datetime] = None,
    ) -> JournalEntry:
        """Write a journal entry, dated now unless ``at`` is given.

        Raises:
            ValueError: If mood is outside 1-5 or a tag is unknown
        """
        entry = JournalEntry(
            user_id=user_id,
            date=at or self._clock(),
            content=content,
            mood=mood,
            mood_tags=list(mood_tags or []),
            is_private=is_private,
        )
        entry.entry_id = self.store.add(JOURNAL_ENTRIES, entry.to_dict())
        logger.info("User %s added journal entry %s (mood %d)", user_id, entry.entry_id, mood)
        self._touch(user_id)
        return entry

    def update_journal_entry(self, entry_id: str, **changes) -> JournalEntry:
        """Edit content, mood, tags or privacy of an existing entry.

        Raises:
            NotFoundError: If the entry does not exist
            ValueError: If a change targets a field other than content,
                mood, mood_tags or is_private (the date cannot change)
        """
        unknown = set(changes) - set(EDITABLE_JOURNAL_FIELDS)
        if unknown:
            raise ValueError(f"Journal fields cannot be changed: {sorted(unknown)}")

        entry = self.get_journal_entry(entry_id)
        if entry is None:
            raise NotFoundError(f"Journal entry {entry_id} not found")

        # Rebuild through the dataclass so mood and tags are validated
        updated = JournalEntry(
            user_id=entry.user_id,
            date=entry.date,
            content=changes.get("content", entry.content),
            mood=changes.get("mood", entry.mood),
            mood_tags=list(changes.get("mood_tags", entry.mood_tags)),
            is_private=changes.get("is_private", entry.is_private),
            entry_id=entry_id,
        )
        self.store.set(JOURNAL_ENTRIES, entry_id, updated.to_dict())
        self._touch(updated.user_id)
        return updated

    def delete_journal_entry(self, entry_id: str) -> None:
        """Raises NotFoundError if the entry does not exist."""
        entry = self.get_journal_entry(entry_id)
        if entry is None:
            raise NotFoundError(f"Journal entry {entry_id} not found")
        self.store.delete(JOURNAL_ENTRIES, entry_id)
        logger.info("User %s deleted journal entry %s", entry.user_id, entry_id)
        self._touch(entry.user_id)

    def search_journal_entries(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        mood: Optional[int] = None,
        mood_tags: Optional[Iterable[str]] = None,
        search_term: Optional[str] = None,
    ) -> list[JournalEntry]:
        """Find a user's journal entries, newest first.

        Args:
            user_id: Owner of the entries
            start: Earliest entry date (inclusive)
            end: Latest entry date (inclusive)
            mood: Exact mood level
            mood_tags: Keep entries carrying any of these tags
            search_term: Case-insensitive substring of the content
        """
        filters = [("user_id", "==", user_id)]
        if mood is not None:
            filters.append(("mood", "==", mood))
        entries = [
            JournalEntry.from_dict(d)
            for d in self.store.query(JOURNAL_ENTRIES, filters=filters)
        ]

        if start is not None:
            entries = [e for e in entries if e.date >= utc_clock.to_utc(start)]
        if end is not None:
            entries = [e for e in entries if e.date <= utc_clock.to_utc(end)]
        if mood_tags:
            wanted = set(mood_tags)
            entries = [e for e in entries if wanted.intersection(e.mood_tags)]
        if search_term:
            needle = search_term.lower()
            entries = [e for e in entries if needle in e.content.lower()]

        return sorted(entries, key=lambda e: e.date, reverse=True)

    # =========================================================================
    # Breathing
    # =========================================================================

    def log_breathing_session(
        self,
        user_id: str,
        duration_seconds: float,
        pattern: BreathingPattern = BOX_BREATHING,
        mood_before: Optional[int] = None,
        mood_after: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> BreathingSession:
        """Record a finished breathing exercise.

        Completed repetitions are the whole pattern cycles that fit into
        the duration (16 seconds per cycle for box breathing).
        """
        session = BreathingSession(
            user_id=user_id,
            date=self._clock(),
            pattern=pattern,
            completed_repetitions=pattern.completed_repetitions(duration_seconds),
            duration_seconds=duration_seconds,
            mood_before=mood_before,
            mood_after=mood_after,
            notes=notes,
        )
        session.session_id = self.store.add(BREATHING_SESSIONS, session.to_dict())
        logger.info(
            "User %s logged %s for %ss (%d reps)",
            user_id,
            pattern.name,
            duration_seconds,
            session.completed_repetitions,
        )
        self._touch(user_id)
        return session

    # =========================================================================
    # Mood check-ins
    # =========================================================================

    def get_mood_entry(self, entry_id: str) -> Optional[MoodEntry]:
        data = self.store.get(MOOD_ENTRIES, entry_id)
        if data is None:
            return None
        entry = MoodEntry.from_dict(data)
        entry.entry_id = entry_id
        return entry

    def log_mood(
        self, user_id: str, mood: str, journal_entry: Optional[str] = None
    ) -> MoodEntry:
        """Record today's mood check-in.

        A second check-in on the same UTC day replaces the mood (and note,
        when given) but keeps the breathing flag.

        Raises:
            ValueError: If mood is not one of great, good, okay, bad, terrible
        """
        now = self._clock()
        key = day_key(user_id, now.date().isoformat())
        entry = MoodEntry(user_id=user_id, date=now, mood=mood, journal_entry=journal_entry)

        if self.store.create_if_absent(MOOD_ENTRIES, key, entry.to_dict()):
            logger.info("User %s checked in feeling %s", user_id, mood)
        else:
            changes = {"mood": mood}
            if journal_entry is not None:
                changes["journal_entry"] = journal_entry
            self.store.update(MOOD_ENTRIES, key, changes)
            logger.info("User %s changed today's mood to %s", user_id, mood)

        self.progress.mark_active(user_id, now.date(), "mental")
        stored = self.get_mood_entry(key)
        if stored is None:
            raise PersistenceError(f"Mood entry {key} missing after write")
        return stored

    def get_todays_mood_entry(self, user_id: str) -> Optional[MoodEntry]:
        return self.get_mood_entry(day_key(user_id, self._clock().date().isoformat()))

    def mark_breathing_complete(self, entry_id: str) -> MoodEntry:
        """Flag that the breathing exercise for a check-in was done.

        Raises:
            NotFoundError: If the mood entry does not exist
        """
        updated = MoodEntry.from_dict(
            self.store.update(MOOD_ENTRIES, entry_id, {"completed_breathing": True})
        )
        updated.entry_id = entry_id
        return updated

    def get_mood_history(
        self, user_id: str, days: int = DEFAULT_MOOD_HISTORY_DAYS
    ) -> list[MoodEntry]:
        """Check-ins from the start of the UTC day ``days`` ago onward, newest first."""
        first_day = self._clock().date() - timedelta(days=days)
        since = datetime.combine(first_day, time.min, tzinfo=timezone.utc)
        entries = [
            MoodEntry.from_dict(d)
            for d in self.store.query(MOOD_ENTRIES, filters=[("user_id", "==", user_id)])
        ]
        return sorted(
            (e for e in entries if e.date >= since), key=lambda e: e.date, reverse=True
        )

    # =========================================================================
    # Motivations
    # =========================================================================

    def add_motivation(
        self,
        user_id: str,
        type: str,
        title: str,
        description: str = "",
        is_active: bool = True,
    ) -> Motivation:
        motivation = Motivation(
            user_id=user_id,
            type=type,
            title=title,
            description=description,
            is_active=is_active,
        )
        motivation.motivation_id = self.store.add(MOTIVATIONS, motivation.to_dict())
        self._touch(user_id)
        return motivation

    def set_motivation_active(self, motivation_id: str, is_active: bool) -> Motivation:
        """Toggle whether a motivation counts as active.

        Raises:
            NotFoundError: If the motivation does not exist
        """
        data = self.store.get(MOTIVATIONS, motivation_id)
        if data is None:
            raise NotFoundError(f"Motivation {motivation_id} not found")
        updated = self.store.update(MOTIVATIONS, motivation_id, {"is_active": is_active})
        motivation = Motivation.from_dict(updated)
        motivation.motivation_id = motivation_id
        self._touch(motivation.user_id)
        return motivation
