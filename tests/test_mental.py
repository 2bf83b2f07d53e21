"""Tests for mental health records and derived stats."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from fitplan.db.schema import MOOD_ENTRIES
from fitplan.errors import NotFoundError
from fitplan.mental.models import (
    BOX_BREATHING,
    DEEP_BREATHING,
    RELAXING_BREATH,
    BreathingSession,
    JournalEntry,
    MoodTrend,
    to_utc,
)
from fitplan.mental.records import MentalRecords
from fitplan.mental.stats import (
    MentalHealthStatsEngine,
    average_mood,
    breathing_minutes,
    common_mood_tags,
    compute_stats,
    journal_streak,
    mood_trend,
)
from fitplan.tracking.progress import ProgressTracker

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def entry(mood: int, days_ago: float = 0, tags=()) -> JournalEntry:
    return JournalEntry(
        user_id="u1",
        date=NOW - timedelta(days=days_ago),
        content="note",
        mood=mood,
        mood_tags=list(tags),
    )


def session(seconds: float) -> BreathingSession:
    return BreathingSession(
        user_id="u1",
        date=NOW,
        pattern=BOX_BREATHING,
        completed_repetitions=BOX_BREATHING.completed_repetitions(seconds),
        duration_seconds=seconds,
    )


@pytest.fixture
def records(store, now):
    return MentalRecords(store, clock=lambda: now)


# =============================================================================
# Pure stats functions
# =============================================================================


class TestAverageMood:
    def test_no_entries_is_neutral(self) -> None:
        assert average_mood([]) == 3.0

    def test_rounds_to_one_decimal(self) -> None:
        assert average_mood([entry(1), entry(2), entry(2)]) == 1.7

    def test_half_rounds_up(self) -> None:
        assert average_mood([entry(3)] * 3 + [entry(4)]) == 3.3


class TestMoodTrend:
    def test_improving(self) -> None:
        moods = [3, 3, 3, 3, 5]
        entries = [entry(m, days_ago=len(moods) - i) for i, m in enumerate(moods)]
        assert mood_trend(entries) == MoodTrend.IMPROVING

    def test_declining(self) -> None:
        moods = [5, 5, 5, 5, 3]
        entries = [entry(m, days_ago=len(moods) - i) for i, m in enumerate(moods)]
        assert mood_trend(entries) == MoodTrend.DECLINING

    def test_flat_is_stable(self) -> None:
        assert mood_trend([entry(2, 2), entry(2, 1), entry(2, 0)]) == MoodTrend.STABLE

    def test_single_entry_is_stable(self) -> None:
        assert mood_trend([entry(5)]) == MoodTrend.STABLE
        assert mood_trend([]) == MoodTrend.STABLE

    def test_orders_by_date(self) -> None:
        # Newest first in the input; chronologically the mood rises
        entries = [entry(5, days_ago=0), entry(1, days_ago=1)]
        assert mood_trend(entries) == MoodTrend.IMPROVING

    def test_small_change_is_stable(self) -> None:
        entries = [entry(3, 5), entry(3, 4), entry(3, 3), entry(3, 2), entry(3, 1), entry(4, 0)]
        assert mood_trend(entries) == MoodTrend.STABLE


class TestCommonTags:
    def test_top_three_ties_by_first_seen(self) -> None:
        entries = [
            entry(3, tags=["happy", "tired"]),
            entry(3, tags=["tired", "stressed"]),
            entry(3, tags=["happy"]),
            entry(3, tags=["stressed", "sad"]),
        ]
        assert common_mood_tags(entries) == ["happy", "tired", "stressed"]

    def test_most_frequent_first(self) -> None:
        entries = [entry(3, tags=["sad"]), entry(3, tags=["content", "sad"])]
        assert common_mood_tags(entries) == ["sad", "content"]

    def test_no_tags(self) -> None:
        assert common_mood_tags([entry(3)]) == []

    def test_snapshot_prefers_recent_tags_on_ties(self) -> None:
        entries = [
            entry(3, days_ago=3, tags=["happy"]),
            entry(3, days_ago=2, tags=["sad"]),
            entry(3, days_ago=1, tags=["tired"]),
            entry(3, days_ago=0, tags=["anxious"]),
        ]
        stats = compute_stats("u1", NOW, entries, [], 0)
        assert stats.common_mood_tags == ["anxious", "tired", "sad"]

    def test_snapshot_ranks_count_before_recency(self) -> None:
        entries = [
            entry(3, days_ago=2, tags=["sad"]),
            entry(3, days_ago=1, tags=["sad"]),
            entry(3, days_ago=0, tags=["happy"]),
        ]
        stats = compute_stats("u1", NOW, list(reversed(entries)), [], 0)
        assert stats.common_mood_tags == ["sad", "happy"]


class TestJournalStreak:
    def test_consecutive_days(self) -> None:
        entries = [entry(3, 0), entry(3, 1), entry(3, 2), entry(3, 4)]
        assert journal_streak(entries, NOW) == 3

    def test_several_entries_one_day(self) -> None:
        entries = [entry(3, 0), entry(4, 0.1), entry(3, 1)]
        assert journal_streak(entries, NOW) == 2

    def test_no_entry_today(self) -> None:
        assert journal_streak([entry(3, 1), entry(3, 2)], NOW) == 0


class TestBreathingMinutes:
    def test_rounds_half_minute_up(self) -> None:
        assert breathing_minutes([session(90), session(60)]) == 3

    def test_rounds_down_below_half(self) -> None:
        assert breathing_minutes([session(89)]) == 1

    def test_empty(self) -> None:
        assert breathing_minutes([]) == 0


class TestBreathingPatterns:
    def test_box_cycle(self) -> None:
        assert BOX_BREATHING.cycle_seconds == 16
        assert BOX_BREATHING.completed_repetitions(30) == 1
        assert BOX_BREATHING.completed_repetitions(64) == 4
        assert BOX_BREATHING.completed_repetitions(15) == 0

    def test_other_patterns(self) -> None:
        assert RELAXING_BREATH.completed_repetitions(60) == 3
        assert DEEP_BREATHING.completed_repetitions(60) == 6


class TestModels:
    def test_mood_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            entry(6)
        with pytest.raises(ValueError):
            entry(0)

    def test_unknown_tag(self) -> None:
        with pytest.raises(ValueError):
            entry(3, tags=["grumpy"])

    def test_duplicate_tags_collapse(self) -> None:
        assert entry(3, tags=["sad", "tired", "sad"]).mood_tags == ["sad", "tired"]

    def test_naive_timestamps_are_utc(self) -> None:
        assert to_utc(datetime(2026, 10, 18, 8, 0)) == datetime(
            2026, 10, 18, 8, 0, tzinfo=timezone.utc
        )


# =============================================================================
# Records and the stored snapshot
# =============================================================================


class TestJournalRecords:
    def test_add_refreshes_stats(self, store, records, now, today) -> None:
        records.add_journal_entry(
            "u1", "Long run", mood=4, mood_tags=["energetic"], at=now - timedelta(hours=1)
        )
        records.add_journal_entry("u1", "Rest", mood=5, mood_tags=["peaceful"])

        stats = MentalHealthStatsEngine(store).get_stats("u1", today)
        assert stats.average_mood == 4.5
        assert stats.journal_streak == 1
        assert stats.common_mood_tags == ["peaceful", "energetic"]

    def test_old_entries_outside_window(self, store, records, now, today) -> None:
        records.add_journal_entry("u1", "Bad month", mood=1, at=now - timedelta(days=31))
        records.add_journal_entry("u1", "Better now", mood=5)

        stats = MentalHealthStatsEngine(store).get_stats("u1", today)
        assert stats.average_mood == 5.0
        assert stats.mood_trend == MoodTrend.STABLE

    def test_rollup_mirrors_snapshot(self, store, records, now) -> None:
        records.add_journal_entry("u1", "Yesterday", mood=2, at=now - timedelta(days=1))
        records.add_journal_entry("u1", "Today", mood=4)

        rollup = ProgressTracker(store).get_rollup("u1")
        assert rollup.mental.mood_score == 3.0
        assert rollup.mental.journal_streak == 2

    def test_marks_mental_activity(self, store, records, today) -> None:
        records.add_journal_entry("u1", "Hello")
        activity = ProgressTracker(store).get_activity("u1", today)
        assert activity.mental
        assert not activity.exercise

    def test_update(self, records) -> None:
        created = records.add_journal_entry("u1", "Draft", mood=2)
        updated = records.update_journal_entry(
            created.entry_id, content="Final", mood=4, mood_tags=["content"]
        )
        assert updated.content == "Final"
        assert updated.date == created.date

        stored = records.get_journal_entry(created.entry_id)
        assert stored.mood == 4
        assert stored.mood_tags == ["content"]

    def test_date_cannot_change(self, records, now) -> None:
        created = records.add_journal_entry("u1", "Draft")
        with pytest.raises(ValueError):
            records.update_journal_entry(created.entry_id, date=now - timedelta(days=3))

    def test_update_validates_mood(self, records) -> None:
        created = records.add_journal_entry("u1", "Draft")
        with pytest.raises(ValueError):
            records.update_journal_entry(created.entry_id, mood=9)

    def test_update_missing(self, records) -> None:
        with pytest.raises(NotFoundError):
            records.update_journal_entry("missing", content="x")

    def test_delete_recomputes(self, store, records, today) -> None:
        records.add_journal_entry("u1", "Great", mood=5)
        low = records.add_journal_entry("u1", "Awful", mood=1)
        assert MentalHealthStatsEngine(store).get_stats("u1", today).average_mood == 3.0

        records.delete_journal_entry(low.entry_id)

        assert records.get_journal_entry(low.entry_id) is None
        assert MentalHealthStatsEngine(store).get_stats("u1", today).average_mood == 5.0

    def test_delete_missing(self, records) -> None:
        with pytest.raises(NotFoundError):
            records.delete_journal_entry("missing")


class TestBreathingRecords:
    def test_repetitions_from_duration(self, records) -> None:
        assert records.log_breathing_session("u1", 30).completed_repetitions == 1
        assert records.log_breathing_session("u1", 64).completed_repetitions == 4

    def test_minutes_use_last_day_only(self, store, now, today) -> None:
        earlier = MentalRecords(store, clock=lambda: now - timedelta(hours=25))
        earlier.log_breathing_session("u1", 600)

        current = MentalRecords(store, clock=lambda: now)
        current.log_breathing_session("u1", 150, pattern=DEEP_BREATHING, mood_before=2, mood_after=4)

        stats = MentalHealthStatsEngine(store).get_stats("u1", today)
        assert stats.breathing_minutes == 3
        assert ProgressTracker(store).get_rollup("u1").mental.breathing_minutes == 3

    def test_mood_bounds(self, records) -> None:
        with pytest.raises(ValueError):
            records.log_breathing_session("u1", 60, mood_before=7)


class TestJournalSearch:
    @pytest.fixture
    def journal(self, store, now):
        def add(content, mood, days_ago, tags=()):
            at = now - timedelta(days=days_ago)
            MentalRecords(store, clock=lambda: at).add_journal_entry(
                "u1", content, mood=mood, mood_tags=list(tags), at=at
            )

        add("Morning run felt easy", 4, 3, ["energetic"])
        add("Work deadline", 2, 2, ["stressed", "tired"])
        add("Slept badly, skipped the RUN", 2, 1, ["tired"])
        add("Rest day", 3, 0, ["peaceful"])
        MentalRecords(store, clock=lambda: now).add_journal_entry("u2", "Other user run", mood=2)

    def test_all_newest_first(self, records, journal) -> None:
        results = records.search_journal_entries("u1")
        assert [e.content for e in results] == [
            "Rest day",
            "Slept badly, skipped the RUN",
            "Work deadline",
            "Morning run felt easy",
        ]

    def test_by_mood(self, records, journal) -> None:
        results = records.search_journal_entries("u1", mood=2)
        assert [e.content for e in results] == ["Slept badly, skipped the RUN", "Work deadline"]

    def test_by_any_tag(self, records, journal) -> None:
        results = records.search_journal_entries("u1", mood_tags=["energetic", "stressed"])
        assert [e.content for e in results] == ["Work deadline", "Morning run felt easy"]

    def test_search_term_ignores_case(self, records, journal) -> None:
        results = records.search_journal_entries("u1", search_term="run")
        assert [e.content for e in results] == [
            "Slept badly, skipped the RUN",
            "Morning run felt easy",
        ]

    def test_filters_combine(self, records, journal, now) -> None:
        results = records.search_journal_entries(
            "u1", start=now - timedelta(days=2), mood_tags=["tired"], search_term="run"
        )
        assert [e.content for e in results] == ["Slept badly, skipped the RUN"]

    def test_no_match(self, records, journal) -> None:
        assert records.search_journal_entries("u1", search_term="swim") == []


class TestMoodCheckIns:
    def test_log_and_fetch_today(self, records, now) -> None:
        entry = records.log_mood("u1", "good")

        assert entry.entry_id == "u1_2026-10-18"
        assert entry.date == now
        assert not entry.completed_breathing
        assert records.get_todays_mood_entry("u1") == entry

    def test_nothing_logged_today(self, store, records, now) -> None:
        MentalRecords(store, clock=lambda: now - timedelta(days=1)).log_mood("u1", "okay")
        assert records.get_todays_mood_entry("u1") is None

    def test_one_entry_per_day(self, store, records) -> None:
        first = records.log_mood("u1", "bad", journal_entry="Rough morning")
        records.mark_breathing_complete(first.entry_id)

        second = records.log_mood("u1", "great")

        assert second.entry_id == first.entry_id
        assert second.mood == "great"
        assert second.journal_entry == "Rough morning"
        assert second.completed_breathing
        assert len(store.query(MOOD_ENTRIES)) == 1

    def test_marks_mental_activity(self, store, records, today) -> None:
        records.log_mood("u1", "good")
        assert ProgressTracker(store).get_activity("u1", today).mental

    def test_unknown_mood(self, records) -> None:
        with pytest.raises(ValueError):
            records.log_mood("u1", "meh")

    def test_mark_breathing_complete(self, records) -> None:
        entry = records.log_mood("u1", "okay")
        updated = records.mark_breathing_complete(entry.entry_id)
        assert updated.completed_breathing
        assert records.get_mood_entry(entry.entry_id).completed_breathing

    def test_mark_breathing_missing(self, records) -> None:
        with pytest.raises(NotFoundError):
            records.mark_breathing_complete("u1_2000-01-01")

    def test_history_window(self, store, records, now) -> None:
        for days_ago, mood in [(9, "terrible"), (7, "bad"), (3, "okay"), (0, "great")]:
            at = now - timedelta(days=days_ago)
            MentalRecords(store, clock=lambda at=at: at).log_mood("u1", mood)
        MentalRecords(store, clock=lambda: now).log_mood("u2", "good")

        assert [e.mood for e in records.get_mood_history("u1")] == ["great", "okay", "bad"]
        assert [e.mood for e in records.get_mood_history("u1", days=3)] == ["great", "okay"]


class TestMotivations:
    def test_active_count(self, store, records, now) -> None:
        records.add_motivation("u1", "fitness", "Run a 10k")
        keep_fit = records.add_motivation("u1", "health", "Lower blood pressure")
        records.add_motivation("u2", "career", "Less stress at work")

        records.set_motivation_active(keep_fit.motivation_id, False)

        stats = MentalHealthStatsEngine(store).compute("u1", now)
        assert stats.active_motivations == 1

    def test_stored_snapshot_counts_new_motivation(self, store, records, today) -> None:
        records.add_journal_entry("u1", "Started training", mood=4)
        engine = MentalHealthStatsEngine(store)
        assert engine.get_stats("u1", today).active_motivations == 0

        records.add_motivation("u1", "fitness", "Run")

        assert engine.get_stats("u1", today).active_motivations == 1

    def test_stored_snapshot_follows_deactivation(self, store, records, today) -> None:
        run = records.add_motivation("u1", "fitness", "Run")
        engine = MentalHealthStatsEngine(store)
        assert engine.get_stats("u1", today).active_motivations == 1

        records.set_motivation_active(run.motivation_id, False)

        assert engine.get_stats("u1", today).active_motivations == 0

    def test_unknown_type(self, records) -> None:
        with pytest.raises(ValueError):
            records.add_motivation("u1", "money", "Win the lottery")

    def test_toggle_missing(self, records) -> None:
        with pytest.raises(NotFoundError):
            records.set_motivation_active("missing", True)
