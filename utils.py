"""Time arithmetic and date helpers for work hours."""

from __future__ import annotations

import locale
import logging
from datetime import date

logger = logging.getLogger(__name__)


def _to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def compute_hours(start: str, end: str) -> float:
    """Hours between two HH:MM wall-clock times, or 0 if end is not after start."""
    diff = _to_minutes(end) - _to_minutes(start)
    return diff / 60 if diff > 0 else 0


def parse_time(val: str) -> str | None:
    """Normalise user input like '9:5' to 'HH:MM'. Returns None if invalid."""
    val = val.strip()
    if not val:
        return None
    try:
        parts = val.split(":")
        if len(parts) != 2:
            return None
        hour, minute = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not (0 <= hour < 24 and 0 <= minute < 60):
        return None
    return f"{hour:02d}:{minute:02d}"


def parse_date(val: str) -> str | None:
    """Validate a YYYY-MM-DD string, returning it in canonical form."""
    try:
        return date.fromisoformat(val.strip()).isoformat()
    except ValueError:
        return None


def today() -> str:
    return date.today().isoformat()


def current_month() -> str:
    return date.today().isoformat()[:7]


def shift_month(year_month: str, delta: int) -> str:
    """Step a YYYY-MM string forwards or backwards by delta months."""
    year, month = (int(part) for part in year_month.split("-"))
    index = year * 12 + (month - 1) + delta
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def format_display_date(iso: str) -> str:
    """Render an ISO date as 'day month weekday' in the active locale."""
    try:
        d = date.fromisoformat(iso)
        return d.strftime("%d %B %A")
    except (ValueError, UnicodeError):
        return iso


def format_month(year_month: str) -> str:
    try:
        return date.fromisoformat(f"{year_month}-01").strftime("%B %Y")
    except ValueError:
        return year_month


def init_locale() -> None:
    """Switch to the user's locale so collation and month names follow it."""
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error as exc:
        logger.warning("Could not set locale from environment, using C collation: %s", exc)
