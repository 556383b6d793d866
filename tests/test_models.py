"""Tests for models.py - Entry, summaries and Config dataclasses."""

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from models import Config, Entry, EntryDraft, MonthSummary


class TestEntry:
    """Tests for Entry dataclass."""

    def test_to_dict(self):
        """Test to_dict contains every stored field."""
        entry = Entry(id="a", date="2024-03-05", start="09:00", end="10:30", location="Lab", hours=1.5)
        assert entry.to_dict() == {
            "id": "a",
            "date": "2024-03-05",
            "start": "09:00",
            "end": "10:30",
            "location": "Lab",
            "hours": 1.5,
        }

    def test_immutable(self):
        """Test entries cannot be changed after creation."""
        entry = Entry(id="a", date="2024-03-05", start="09:00", end="17:00", location="", hours=8.0)
        with pytest.raises(FrozenInstanceError):
            entry.hours = 2.0  # type: ignore[misc]


class TestEntryDraft:
    """Tests for EntryDraft dataclass."""

    def test_location_defaults_empty(self):
        """Test location is optional on a draft."""
        draft = EntryDraft(date="2024-03-05", start="09:00", end="17:00")
        assert draft.location == ""


class TestMonthSummary:
    """Tests for MonthSummary dataclass."""

    def test_default_values(self):
        """Test an empty summary is all zeros."""
        summary = MonthSummary()
        assert summary.total == 0
        assert summary.count == 0
        assert summary.average == 0


class TestConfig:
    """Tests for Config dataclass."""

    def test_env_overrides(self, monkeypatch, tmp_path):
        """Test config paths come from environment variables."""
        monkeypatch.setenv("WORK_HOURS_DB", str(tmp_path / "hours.db"))
        monkeypatch.setenv("WORK_HOURS_EXPORT_DIR", str(tmp_path / "out"))
        monkeypatch.setenv("WORK_HOURS_LOG", str(tmp_path / "hours.log"))
        monkeypatch.setenv("WORK_HOURS_LOG_LEVEL", "debug")

        config = Config()

        assert config.db_path == tmp_path / "hours.db"
        assert config.export_dir == tmp_path / "out"
        assert config.log_path == tmp_path / "hours.log"
        assert config.log_level == "DEBUG"

    def test_defaults(self, monkeypatch):
        """Test default config values without environment overrides."""
        for name in ("WORK_HOURS_DB", "WORK_HOURS_EXPORT_DIR", "WORK_HOURS_LOG", "WORK_HOURS_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        config = Config()

        assert config.db_path.name == "work_hours.db"
        assert config.export_dir == Path.cwd()
        assert config.log_level == "INFO"
