"""Shared fixtures for tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Point the default database somewhere disposable before importing storage
_test_db_fd, _test_db_path = tempfile.mkstemp(suffix=".db")
os.environ["WORK_HOURS_DB"] = _test_db_path


class MemoryBackend:
    """Dict-backed stand-in for the sqlite key/value substrate."""

    def __init__(self, data: dict[str, str] | None = None):
        self.data = dict(data or {})
        self.writes = 0

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.writes += 1
        self.data[key] = value


@pytest.fixture(scope="session", autouse=True)
def cleanup_test_db() -> Generator[Path, None, None]:
    yield Path(_test_db_path)

    os.close(_test_db_fd)
    if os.path.exists(_test_db_path):
        os.unlink(_test_db_path)


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(backend):
    """An EntryStore over an in-memory backend."""
    from storage import EntryStore

    return EntryStore(backend)


@pytest.fixture
def make_entry():
    """Factory for Entry objects with sensible defaults."""
    from models import Entry

    counter = {"n": 0}

    def _make(date: str, hours: float = 8.0, start: str = "09:00", end: str = "17:00", location: str = "Office"):
        counter["n"] += 1
        return Entry(
            id=f"entry-{counter['n']}",
            date=date,
            start=start,
            end=end,
            location=location,
            hours=hours,
        )

    return _make


@pytest.fixture
def sample_entries(make_entry):
    """Entries spread across February, March and April 2024, out of order."""
    return (
        make_entry("2024-03-15", hours=7.5, location="Tel Aviv"),
        make_entry("2024-02-28", hours=6.0, location="Haifa"),
        make_entry("2024-03-01", hours=8.0, location="Office"),
        make_entry("2024-04-02", hours=4.0, location=""),
        make_entry("2024-03-31", hours=9.0, location="Office"),
    )
