from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Entry:
    id: str
    date: str
    start: str
    end: str
    location: str
    hours: float

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "start": self.start,
            "end": self.end,
            "location": self.location,
            "hours": self.hours,
        }


@dataclass
class EntryDraft:
    """Form input for a shift, before validation and hour calculation."""
    date: str
    start: str
    end: str
    location: str = ""


@dataclass(frozen=True)
class MonthSummary:
    total: float = 0.0
    count: int = 0
    average: float = 0.0


@dataclass(frozen=True)
class TodayStatus:
    date: str
    total_hours: float


def _env_path(name: str, default: Path) -> Path:
    if env_path := os.environ.get(name):
        return Path(env_path)
    return default


@dataclass
class Config:
    db_path: Path = field(
        default_factory=lambda: _env_path("WORK_HOURS_DB", Path(__file__).parent / "data" / "work_hours.db")
    )
    export_dir: Path = field(default_factory=lambda: _env_path("WORK_HOURS_EXPORT_DIR", Path.cwd()))
    log_path: Path = field(
        default_factory=lambda: _env_path("WORK_HOURS_LOG", Path(__file__).parent / "data" / "work_hours.log")
    )
    log_level: str = field(default_factory=lambda: os.environ.get("WORK_HOURS_LOG_LEVEL", "INFO").upper())
