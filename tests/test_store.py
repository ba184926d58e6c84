"""Property-based tests for the database store.

**Feature: hour-tracker**
"""

import sqlite3
import tempfile
from datetime import date, datetime
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from hourtracker.db.store import DataStore
from hourtracker.models import Entry, PersonalEvent, UnavailabilityMarker

DAY = "2024-01-15"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        yield DataStore(db_path)


@st.composite
def entry_strategy(draw):
    """Generate random valid entries."""
    category = draw(st.sampled_from(["clinical", "supervision", "continuing-education"]))
    is_ce = category == "continuing-education"
    return Entry(
        category=category,
        subtype=draw(st.sampled_from(["individual", "family", "group", "webinar"])),
        hours=draw(st.floats(min_value=0.25, max_value=16)),
        notes=draw(st.text(alphabet=st.characters(blacklist_categories=("Cs", "Cc")), max_size=50)),
        reviewed_audio=draw(st.booleans()),
        reviewed_video=draw(st.booleans()),
        occurred_at=draw(st.datetimes(min_value=datetime(2020, 1, 1), max_value=datetime(2030, 1, 1)))
        .isoformat(),
        ce_category=draw(st.sampled_from(["general", "mft-specific"])) if is_ce else None,
        delivery_format=draw(st.sampled_from(["in-person", "online-non-interactive"]))
        if is_ce else None,
    )


def session(hours: float = 1.0, notes: str = "") -> Entry:
    return Entry(category="clinical", subtype="individual", hours=hours, notes=notes,
                 occurred_at="2024-01-15T09:00:00")


class TestDatabaseSchemaCompleteness:
    """
    **Feature: hour-tracker, Property 14: Database Schema Completeness**

    *For any* fresh database, all required tables (hour_entries,
    unavailability, settings) should exist.
    """

    def test_schema_completeness(self, temp_db: DataStore):
        tables = temp_db.get_tables()
        for table in DataStore.REQUIRED_TABLES:
            assert table in tables, f"Required table '{table}' is missing"

    def test_reopen_keeps_data(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "nested" / "test.db"
            DataStore(db_path).add_entry(DAY, session())
            assert DataStore(db_path).get_stats()["hour_entries"] == 1


class TestEntryPersistence:
    """
    **Feature: hour-tracker, Property 15: Entry Round Trip**

    *For any* entry saved to a day, reading the day back yields an equal
    entry in insertion order.
    """

    @given(st.lists(entry_strategy(), min_size=1, max_size=5))
    @settings(max_examples=50)
    def test_entries_round_trip(self, entries: list[Entry]):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")
            for entry in entries:
                store.add_entry(DAY, entry)

            assert store.get_day_entries(DAY) == entries
            assert store.get_entries() == {DAY: entries}

    def test_update_by_position(self, temp_db: DataStore):
        temp_db.add_entry(DAY, session(1.0, "first"))
        temp_db.add_entry(DAY, session(2.0, "second"))

        temp_db.update_entry(DAY, 1, session(3.0, "changed"))

        day = temp_db.get_day_entries(DAY)
        assert [e.notes for e in day] == ["first", "changed"]
        assert day[1].hours == 3.0

    def test_delete_by_position(self, temp_db: DataStore):
        for notes in ["a", "b", "c"]:
            temp_db.add_entry(DAY, session(notes=notes))

        temp_db.delete_entry(DAY, 1)

        assert [e.notes for e in temp_db.get_day_entries(DAY)] == ["a", "c"]

    def test_missing_index_raises(self, temp_db: DataStore):
        temp_db.add_entry(DAY, session())
        with pytest.raises(IndexError):
            temp_db.update_entry(DAY, 1, session())
        with pytest.raises(IndexError):
            temp_db.delete_entry("2024-01-16", 0)

    def test_from_day_filter(self, temp_db: DataStore):
        temp_db.add_entry("2024-01-10", session())
        temp_db.add_entry("2024-01-20", session())
        assert list(temp_db.get_entries(from_day=date(2024, 1, 15))) == ["2024-01-20"]


class TestMarkerPersistence:
    """Unavailability markers are unique per day."""

    def test_add_and_remove(self, temp_db: DataStore):
        temp_db.add_marker(UnavailabilityMarker(day_key=DAY, reason="OoO", notes="Conference"))

        markers = temp_db.get_markers()
        assert markers[DAY].reason == "OoO"
        assert markers[DAY].notes == "Conference"

        temp_db.remove_marker(DAY)
        assert temp_db.get_markers() == {}

    def test_one_marker_per_day(self, temp_db: DataStore):
        temp_db.add_marker(UnavailabilityMarker(day_key=DAY))
        with pytest.raises(sqlite3.IntegrityError):
            temp_db.add_marker(UnavailabilityMarker(day_key=DAY, reason="Sick"))

    def test_remove_missing_marker_is_noop(self, temp_db: DataStore):
        temp_db.remove_marker(DAY)
        assert temp_db.get_markers() == {}


class TestSettings:
    """Training start date storage."""

    def test_training_start_date(self, temp_db: DataStore):
        assert temp_db.get_training_start_date() is None
        temp_db.set_training_start_date(date(2023, 7, 15))
        assert temp_db.get_training_start_date() == "2023-07-15"

    def test_settings_overwrite(self, temp_db: DataStore):
        temp_db.set_setting("theme", "dark")
        temp_db.set_setting("theme", "light")
        assert temp_db.get_setting("theme") == "light"
        assert temp_db.get_stats()["settings"] == 1


class TestPersonalEvents:
    """
    **Feature: hour-tracker, Property 20: Personal Event Round Trip**

    *For any* saved personal event, reading it back yields the same event
    with its store ID; deactivated events are no longer listed.
    """

    @given(
        st.text(alphabet=st.characters(blacklist_categories=("Cs", "Cc")), min_size=1, max_size=40),
        st.dates(min_value=date(2000, 1, 1), max_value=date(2099, 12, 31)),
        st.sampled_from(["none", "daily", "weekly", "monthly", "yearly"]),
        st.integers(min_value=1, max_value=6),
    )
    @settings(max_examples=30)
    def test_round_trip(self, title: str, event_date: date, recurrence: str, interval: int):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")
            event = PersonalEvent(title=title, event_date=event_date, event_type="reminder",
                                  recurrence_type=recurrence, recurrence_interval=interval)
            event_id = store.add_event(event)

            assert store.get_events() == [event.model_copy(update={"id": event_id})]

    def test_ordered_by_date(self, temp_db: DataStore):
        temp_db.add_event(PersonalEvent(title="Later", event_date=date(2024, 5, 1)))
        temp_db.add_event(PersonalEvent(title="Sooner", event_date=date(2024, 2, 1)))
        assert [event.title for event in temp_db.get_events()] == ["Sooner", "Later"]

    def test_deactivate(self, temp_db: DataStore):
        event_id = temp_db.add_event(PersonalEvent(title="Board exam", event_date=date(2024, 5, 1)))
        assert temp_db.deactivate_event(event_id)
        assert temp_db.get_events() == []
        assert not temp_db.deactivate_event(event_id)
        assert temp_db.get_stats()["personal_events"] == 1
