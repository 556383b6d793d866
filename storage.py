from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from pathlib import Path
from typing import Iterable, Protocol

from errors import CorruptStoreError, ValidationError
from models import Config, Entry, EntryDraft
from utils import compute_hours, parse_date, parse_time

logger = logging.getLogger(__name__)

ENTRIES_KEY = "work-hours-entries"
THEME_KEY = "work-hours-theme"

_ENTRY_FIELDS = {
    "id": str,
    "date": str,
    "start": str,
    "end": str,
    "location": str,
}


def _get_db_path() -> Path:
    """Get database path from environment variable or default location."""
    return Config().db_path


DB_PATH = _get_db_path()


class Backend(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class SqliteBackend:
    """Key/value substrate backed by a single sqlite table."""

    def __init__(self, path: Path | None = None):
        self.path = path or DB_PATH
        self.init_db()

    def get_connection(self) -> sqlite3.Connection:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self):
        """Create the kv table if it doesn't exist."""
        conn = self.get_connection()
        conn.execute("""
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)
        conn.commit()
        conn.close()

    def get(self, key: str) -> str | None:
        conn = self.get_connection()
        row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        conn.close()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        conn = self.get_connection()
        conn.execute("INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)", (key, value))
        conn.commit()
        conn.close()


def _item_to_entry(item: object) -> Entry:
    if not isinstance(item, dict):
        raise CorruptStoreError(f"Expected an object, got {type(item).__name__}")
    for name, kind in _ENTRY_FIELDS.items():
        if not isinstance(item.get(name), kind):
            raise CorruptStoreError(f"Entry field {name!r} is missing or not a {kind.__name__}")
    hours = item.get("hours")
    # bool is an int subclass
    if isinstance(hours, bool) or not isinstance(hours, (int, float)):
        raise CorruptStoreError("Entry field 'hours' is missing or not a number")
    if hours <= 0:
        raise CorruptStoreError(f"Entry {item['id']!r} has non-positive hours")
    if parse_date(item["date"]) != item["date"]:
        raise CorruptStoreError(f"Entry {item['id']!r} has a malformed date {item['date']!r}")
    for name in ("start", "end"):
        if parse_time(item[name]) != item[name]:
            raise CorruptStoreError(f"Entry {item['id']!r} has a malformed {name} time {item[name]!r}")
    return Entry(
        id=item["id"],
        date=item["date"],
        start=item["start"],
        end=item["end"],
        location=item["location"],
        hours=float(hours),
    )


def decode_entries(raw: str) -> tuple[Entry, ...]:
    """Decode a serialised entries block. Raises CorruptStoreError."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CorruptStoreError(f"Stored entries are not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise CorruptStoreError("Stored entries are not a list")
    return tuple(_item_to_entry(item) for item in data)


def encode_entries(entries: Iterable[Entry]) -> str:
    return json.dumps([e.to_dict() for e in entries], ensure_ascii=False)


def replace_by_date(entries: Iterable[Entry], entry: Entry) -> tuple[Entry, ...]:
    """Drop any entry sharing the new entry's date, then append it."""
    return tuple(e for e in entries if e.date != entry.date) + (entry,)


def new_id() -> str:
    return str(uuid.uuid4())


class EntryStore:
    """Whole-collection read/write of entries under a single key."""

    def __init__(self, backend: Backend | None = None):
        self.backend = backend if backend is not None else SqliteBackend()

    def load(self) -> tuple[Entry, ...]:
        """Load all entries. Raises CorruptStoreError if the stored block is unreadable."""
        raw = self.backend.get(ENTRIES_KEY)
        if raw is None:
            return ()
        return decode_entries(raw)

    def save(self, entries: Iterable[Entry]) -> tuple[Entry, ...]:
        """Replace the stored collection wholesale."""
        snapshot = tuple(entries)
        self.backend.set(ENTRIES_KEY, encode_entries(snapshot))
        logger.debug("Saved %d entries", len(snapshot))
        return snapshot

    def upsert(self, entries: Iterable[Entry], draft: EntryDraft) -> tuple[Entry, ...]:
        """Save a shift, replacing any existing entry on the same date.

        Raises ValidationError without writing if the end time is not after
        the start time.
        """
        hours = compute_hours(draft.start, draft.end)
        if hours <= 0:
            raise ValidationError("End time must be after start time")

        entry = Entry(
            id=new_id(),
            date=draft.date,
            start=draft.start,
            end=draft.end,
            location=draft.location.strip(),
            hours=hours,
        )
        snapshot = self.save(replace_by_date(entries, entry))
        logger.info("Saved %.2fh on %s", entry.hours, entry.date)
        return snapshot

    @staticmethod
    def find(entries: Iterable[Entry], entry_id: str) -> Entry | None:
        for entry in entries:
            if entry.id == entry_id:
                return entry
        return None

    def get_theme(self) -> str | None:
        return self.backend.get(THEME_KEY)

    def save_theme(self, theme: str) -> None:
        self.backend.set(THEME_KEY, theme)
