"""SQLite data store for hourtracker."""

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from hourtracker.models import (
    DayKeyedEntries,
    Entry,
    MarkerMap,
    PersonalEvent,
    UnavailabilityMarker,
)

logger = logging.getLogger(__name__)


class DataStore:
    """SQLite-based data store for hour entries, unavailability markers and events.

    Entries keep their insertion order within a day; an entry's position in
    the day's list is its index for update and delete.
    """

    REQUIRED_TABLES = [
        "hour_entries",
        "unavailability",
        "personal_events",
        "settings",
    ]

    TRAINING_START_KEY = "training_start_date"

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            # Hour entries table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS hour_entries (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    day_key TEXT NOT NULL,
                    category TEXT NOT NULL,
                    subtype TEXT NOT NULL,
                    hours REAL NOT NULL,
                    notes TEXT NOT NULL DEFAULT '',
                    reviewed_audio INTEGER NOT NULL DEFAULT 0,
                    reviewed_video INTEGER NOT NULL DEFAULT 0,
                    occurred_at TEXT NOT NULL,
                    ce_category TEXT,
                    delivery_format TEXT,
                    updated_at TEXT
                )
            """)
            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_hour_entries_day ON hour_entries(day_key)"
            )

            # Unavailability table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS unavailability (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    day_key TEXT NOT NULL UNIQUE,
                    reason TEXT NOT NULL,
                    notes TEXT,
                    created_at TEXT NOT NULL
                )
            """)

            # Personal events table (deleted events are deactivated)
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS personal_events (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    description TEXT,
                    event_date TEXT NOT NULL,
                    event_type TEXT NOT NULL DEFAULT 'custom',
                    color TEXT NOT NULL,
                    recurrence_type TEXT NOT NULL DEFAULT 'none',
                    recurrence_interval INTEGER NOT NULL DEFAULT 1,
                    is_active INTEGER NOT NULL DEFAULT 1,
                    created_at TEXT NOT NULL,
                    updated_at TEXT
                )
            """)

            # Settings table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Entries ====================

    @staticmethod
    def _entry_from_row(row: sqlite3.Row) -> Entry:
        return Entry(
            category=row["category"],
            subtype=row["subtype"],
            hours=row["hours"],
            notes=row["notes"],
            reviewed_audio=bool(row["reviewed_audio"]),
            reviewed_video=bool(row["reviewed_video"]),
            occurred_at=row["occurred_at"],
            ce_category=row["ce_category"],
            delivery_format=row["delivery_format"],
        )

    def _entry_ids(self, cursor: sqlite3.Cursor, day_key: str) -> list[int]:
        cursor.execute(
            "SELECT id FROM hour_entries WHERE day_key = ? ORDER BY id",
            (day_key,),
        )
        return [row["id"] for row in cursor.fetchall()]

    def add_entry(self, day_key: str, entry: Entry) -> int:
        """Append an entry to a day.

        Args:
            day_key: Day in YYYY-MM-DD format.
            entry: Entry to save.

        Returns:
            The ID of the saved entry.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO hour_entries
                (day_key, category, subtype, hours, notes, reviewed_audio,
                 reviewed_video, occurred_at, ce_category, delivery_format)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    day_key,
                    entry.category,
                    entry.subtype,
                    entry.hours,
                    entry.notes,
                    1 if entry.reviewed_audio else 0,
                    1 if entry.reviewed_video else 0,
                    entry.occurred_at,
                    entry.ce_category,
                    entry.delivery_format,
                ),
            )
            conn.commit()
            return cursor.lastrowid or 0
        finally:
            conn.close()

    def update_entry(self, day_key: str, index: int, entry: Entry) -> None:
        """Replace the entry at a position within a day.

        Args:
            day_key: Day in YYYY-MM-DD format.
            index: Position of the entry within the day.
            entry: Replacement entry.

        Raises:
            IndexError: If the day has no entry at that position.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            ids = self._entry_ids(cursor, day_key)
            if not 0 <= index < len(ids):
                raise IndexError(f"No entry {index} on {day_key}")
            cursor.execute(
                """
                UPDATE hour_entries
                SET category = ?, subtype = ?, hours = ?, notes = ?,
                    reviewed_audio = ?, reviewed_video = ?, occurred_at = ?,
                    ce_category = ?, delivery_format = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    entry.category,
                    entry.subtype,
                    entry.hours,
                    entry.notes,
                    1 if entry.reviewed_audio else 0,
                    1 if entry.reviewed_video else 0,
                    entry.occurred_at,
                    entry.ce_category,
                    entry.delivery_format,
                    datetime.now().isoformat(),
                    ids[index],
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def delete_entry(self, day_key: str, index: int) -> None:
        """Delete the entry at a position within a day.

        Raises:
            IndexError: If the day has no entry at that position.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            ids = self._entry_ids(cursor, day_key)
            if not 0 <= index < len(ids):
                raise IndexError(f"No entry {index} on {day_key}")
            cursor.execute("DELETE FROM hour_entries WHERE id = ?", (ids[index],))
            conn.commit()
        finally:
            conn.close()

    def get_entries(self, from_day: Optional[date] = None) -> DayKeyedEntries:
        """Get entries keyed by day.

        Args:
            from_day: Optional start date filter.

        Returns:
            Mapping of day key to that day's entries in insertion order.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if from_day:
                cursor.execute(
                    """
                    SELECT * FROM hour_entries
                    WHERE day_key >= ?
                    ORDER BY day_key, id
                    """,
                    (from_day.isoformat(),),
                )
            else:
                cursor.execute("SELECT * FROM hour_entries ORDER BY day_key, id")

            entries: DayKeyedEntries = {}
            for row in cursor.fetchall():
                entries.setdefault(row["day_key"], []).append(self._entry_from_row(row))
            return entries
        finally:
            conn.close()

    def get_day_entries(self, day_key: str) -> list[Entry]:
        """Get the entries of a single day in insertion order."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT * FROM hour_entries WHERE day_key = ? ORDER BY id",
                (day_key,),
            )
            return [self._entry_from_row(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Unavailability ====================

    def add_marker(self, marker: UnavailabilityMarker) -> None:
        """Save an unavailability marker.

        Raises:
            sqlite3.IntegrityError: If the day already has a marker.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO unavailability (day_key, reason, notes, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (marker.day_key, marker.reason, marker.notes, datetime.now().isoformat()),
            )
            conn.commit()
        finally:
            conn.close()

    def remove_marker(self, day_key: str) -> None:
        """Remove a day's unavailability marker, if any."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM unavailability WHERE day_key = ?", (day_key,))
            conn.commit()
        finally:
            conn.close()

    def get_markers(self) -> MarkerMap:
        """Get all unavailability markers keyed by day."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT day_key, reason, notes FROM unavailability ORDER BY day_key"
            )
            return {
                row["day_key"]: UnavailabilityMarker(
                    day_key=row["day_key"],
                    reason=row["reason"],
                    notes=row["notes"],
                )
                for row in cursor.fetchall()
            }
        finally:
            conn.close()

    # ==================== Personal Events ====================

    def add_event(self, event: PersonalEvent) -> int:
        """Save a personal event.

        Returns:
            The ID of the saved event.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO personal_events
                (title, description, event_date, event_type, color,
                 recurrence_type, recurrence_interval, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    event.title,
                    event.description,
                    event.event_date.isoformat(),
                    event.event_type,
                    event.color,
                    event.recurrence_type,
                    event.recurrence_interval,
                    datetime.now().isoformat(),
                ),
            )
            conn.commit()
            event_id = cursor.lastrowid or 0
            logger.info(f"Added personal event {event_id}: {event.title}")
            return event_id
        finally:
            conn.close()

    def get_events(self) -> list[PersonalEvent]:
        """Get active personal events ordered by first occurrence."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT * FROM personal_events
                WHERE is_active = 1
                ORDER BY event_date, id
                """
            )
            return [
                PersonalEvent(
                    id=row["id"],
                    title=row["title"],
                    description=row["description"],
                    event_date=row["event_date"],
                    event_type=row["event_type"],
                    color=row["color"],
                    recurrence_type=row["recurrence_type"],
                    recurrence_interval=row["recurrence_interval"],
                )
                for row in cursor.fetchall()
            ]
        finally:
            conn.close()

    def deactivate_event(self, event_id: int) -> bool:
        """Deactivate a personal event.

        Returns:
            True if an active event was deactivated, False if none matched.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE personal_events SET is_active = 0, updated_at = ?
                WHERE id = ? AND is_active = 1
                """,
                (datetime.now().isoformat(), event_id),
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    # ==================== Settings ====================

    def set_setting(self, key: str, value: Optional[str]) -> None:
        """Save a setting value."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()

    def get_setting(self, key: str) -> Optional[str]:
        """Get a setting value, or None if unset."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM settings WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def get_training_start_date(self) -> Optional[str]:
        """Get the stored training start date (YYYY-MM-DD)."""
        return self.get_setting(self.TRAINING_START_KEY)

    def set_training_start_date(self, start: date) -> None:
        """Store the training start date."""
        self.set_setting(self.TRAINING_START_KEY, start.isoformat())
        logger.info(f"Training start date set to {start.isoformat()}")

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
