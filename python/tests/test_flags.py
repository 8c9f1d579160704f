"""
Tests for flag stores, SessionFlags and visit milestones.

Last Grunted: 10/19/2026
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from terminal_engine import (
    FlagStoreReadError,
    InMemoryFlagStore,
    JsonFileFlagStore,
    SessionFlags,
    VisitStats,
    VisitTracker,
)
from terminal_engine.flags import SHUTDOWN_KEY, VISITS_KEY
from terminal_engine.visits import milestone_messages

from tests.mock_data import ManualScheduler


# =============================================================================
# Store Tests
# =============================================================================


class TestJsonFileFlagStore:
    """Tests for the JSON-file-backed store."""

    def test_missing_file_is_empty(self, tmp_path: Path):
        store = JsonFileFlagStore(tmp_path / "flags.json")
        assert store.get(SHUTDOWN_KEY) is None

    def test_set_persists_across_instances(self, tmp_path: Path):
        path = tmp_path / "state" / "flags.json"
        JsonFileFlagStore(path).set(SHUTDOWN_KEY, "true")

        reopened = JsonFileFlagStore(path)
        assert reopened.get(SHUTDOWN_KEY) == "true"
        assert json.loads(path.read_text(encoding="utf-8")) == {SHUTDOWN_KEY: "true"}

    def test_delete_persists(self, tmp_path: Path):
        path = tmp_path / "flags.json"
        store = JsonFileFlagStore(path)
        store.set(SHUTDOWN_KEY, "true")
        store.delete(SHUTDOWN_KEY)

        assert JsonFileFlagStore(path).get(SHUTDOWN_KEY) is None

    def test_invalid_json_raises(self, tmp_path: Path):
        path = tmp_path / "flags.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(FlagStoreReadError):
            JsonFileFlagStore(path)

    def test_non_object_raises(self, tmp_path: Path):
        path = tmp_path / "flags.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(FlagStoreReadError):
            JsonFileFlagStore(path)


class TestSessionFlags:
    """Tests for typed flag access."""

    def test_shutdown_flag_round_trip(self):
        store = InMemoryFlagStore()
        flags = SessionFlags(store)

        assert not flags.is_shutdown
        flags.mark_shutdown()
        assert flags.is_shutdown
        assert store.as_dict()[SHUTDOWN_KEY] == "true"
        flags.clear_shutdown()
        assert not flags.is_shutdown

    def test_only_true_string_counts(self):
        flags = SessionFlags(InMemoryFlagStore({SHUTDOWN_KEY: "yes"}))
        assert not flags.is_shutdown

    def test_corrupt_visits_reset(self, caplog: pytest.LogCaptureFixture):
        flags = SessionFlags(InMemoryFlagStore({VISITS_KEY: "garbage"}))
        with caplog.at_level(logging.WARNING):
            stats = flags.load_visits()
        assert stats.count == 0
        assert "Discarding unreadable visit record" in caplog.text


# =============================================================================
# Visit Tests
# =============================================================================


class TestMilestones:
    """Tests for milestone_messages thresholds."""

    def test_first_visit_earns_nothing(self):
        assert milestone_messages(VisitStats(count=1, days=["2026-10-19"])) == []

    def test_third_visit(self):
        messages = milestone_messages(VisitStats(count=3, days=["2026-10-19"]))
        assert len(messages) == 1
        assert messages[0].startswith("Visit #3")

    def test_visit_five_on_third_day_fires_both_plus_stats(self):
        stats = VisitStats(count=5, days=["2026-10-17", "2026-10-18", "2026-10-19"])
        messages = milestone_messages(stats)
        assert messages[0].startswith("Visit #5")
        assert messages[1].startswith("Day #3")
        assert messages[2] == "Your persistence stats: 5 visits • 3 unique days"

    def test_fifteen_in_one_day(self):
        messages = milestone_messages(VisitStats(count=15, days=["2026-10-19"]))
        assert messages == [
            "Visit #15 (in one day?!): Either our page is REALLY good, or you're debugging something."
        ]

    def test_persistent_legend(self):
        stats = VisitStats(count=21, days=["2026-10-18", "2026-10-19"])
        messages = milestone_messages(stats)
        assert len(messages) == 1
        assert "Persistent Legend" in messages[0]
        assert "21 visits across 2 days" in messages[0]

    def test_days_deduplicated(self):
        assert VisitStats(count=2, days=["a", "a", "b"]).unique_days == 2


class TestVisitTracker:
    """Tests for VisitTracker persistence and announcements."""

    def test_record_visit_persists(self):
        store = InMemoryFlagStore()
        tracker = VisitTracker(SessionFlags(store), ManualScheduler())

        stats = tracker.record_visit(today="2026-10-19")

        assert stats.count == 1
        assert VisitStats.model_validate_json(store.get(VISITS_KEY)).days == ["2026-10-19"]

    def test_same_day_not_added_twice(self):
        store = InMemoryFlagStore()
        tracker = VisitTracker(SessionFlags(store), ManualScheduler())
        tracker.record_visit(today="2026-10-19")
        stats = tracker.record_visit(today="2026-10-19")
        assert stats.count == 2
        assert stats.unique_days == 1

    def test_announcement_after_delay(self):
        store = InMemoryFlagStore({VISITS_KEY: VisitStats(count=2, days=["2026-10-19"]).model_dump_json()})
        scheduler = ManualScheduler()
        tracker = VisitTracker(SessionFlags(store), scheduler, announce_delay=1.5)

        tracker.record_visit(today="2026-10-19")
        assert tracker.announced == []
        scheduler.advance(1.5)
        assert tracker.announced[0].startswith("Visit #3")

    def test_teardown_drops_announcement(self):
        store = InMemoryFlagStore({VISITS_KEY: VisitStats(count=2, days=["d"]).model_dump_json()})
        scheduler = ManualScheduler()
        tracker = VisitTracker(SessionFlags(store), scheduler)

        tracker.record_visit(today="d")
        tracker.teardown()
        scheduler.advance(5.0)
        assert tracker.announced == []
