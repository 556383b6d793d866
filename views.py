"""Derived views over the entry collection.

Everything here is a pure function of an entries snapshot, except
``ClearMonthWorkflow.confirm_clear`` which writes through the store it is
given. The app re-runs these after every save so what is on screen always
reflects the persisted collection.
"""

from __future__ import annotations

import locale
import logging
from enum import Enum
from typing import Iterable, Sequence

from errors import NothingToClearError, WorkflowStateError
from models import Entry, MonthSummary, TodayStatus
from utils import current_month, shift_month

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5
EMPTY_RECENT_MESSAGE = "No entries yet. Add your first shift."
EMPTY_MONTH_MESSAGE = "No entries for this month."


# --- Recent view ---


def recent_entries(entries: Iterable[Entry], limit: int = RECENT_LIMIT) -> tuple[Entry, ...]:
    """The most recent entries, newest first.

    An empty tuple is the empty-state marker; callers show
    EMPTY_RECENT_MESSAGE in its place.
    """
    ordered = sorted(entries, key=lambda e: e.date, reverse=True)
    return tuple(ordered[:limit])


def location_suggestions(entries: Iterable[Entry]) -> list[str]:
    """Distinct non-empty locations, sorted case-insensitively for the current locale."""
    locations = {e.location.strip() for e in entries if e.location and e.location.strip()}
    return sorted(locations, key=lambda s: (locale.strxfrm(s.casefold()), s))


def today_status(entries: Iterable[Entry], today: str) -> TodayStatus | None:
    """Hours recorded on ``today``, or None when nothing is recorded."""
    matching = [e for e in entries if e.date == today]
    if not matching:
        return None
    return TodayStatus(date=today, total_hours=sum(e.hours for e in matching))


# --- Month view ---


def filter_by_month(entries: Iterable[Entry], year_month: str) -> tuple[Entry, ...]:
    """Entries whose date starts with ``year_month``, oldest first.

    Prefix matching relies on dates being stored as zero-padded ISO strings.
    """
    return tuple(sorted((e for e in entries if e.date.startswith(year_month)), key=lambda e: e.date))


def aggregate(filtered: Sequence[Entry]) -> MonthSummary:
    total = sum(e.hours for e in filtered)
    count = len(filtered)
    return MonthSummary(total=total, count=count, average=total / count if count else 0)


class MonthView:
    """Selected month plus the entries and totals currently shown for it."""

    def __init__(self, year_month: str | None = None):
        self.year_month = year_month or current_month()
        self.filtered: tuple[Entry, ...] = ()
        self.summary = MonthSummary()

    def refresh(self, entries: Iterable[Entry]) -> tuple[Entry, ...]:
        self.filtered = filter_by_month(entries, self.year_month)
        self.summary = aggregate(self.filtered)
        return self.filtered

    def select(self, year_month: str, entries: Iterable[Entry]) -> tuple[Entry, ...]:
        self.year_month = year_month
        return self.refresh(entries)

    def step(self, delta: int, entries: Iterable[Entry]) -> tuple[Entry, ...]:
        return self.select(shift_month(self.year_month, delta), entries)


# --- Clear month ---


class ClearState(Enum):
    IDLE = "idle"
    CONFIRM_PENDING = "confirm_pending"


class ClearMonthWorkflow:
    """Two-step bulk delete: request, then confirm or cancel."""

    def __init__(self):
        self.state = ClearState.IDLE

    @property
    def pending(self) -> bool:
        return self.state is ClearState.CONFIRM_PENDING

    def request_clear(self, filtered: Sequence[Entry]) -> None:
        if not filtered:
            raise NothingToClearError("No entries to clear for this month")
        self.state = ClearState.CONFIRM_PENDING

    def cancel_clear(self) -> None:
        self.state = ClearState.IDLE

    def confirm_clear(self, store, entries: Iterable[Entry], year_month: str) -> tuple[Entry, ...]:
        """Remove every entry in ``year_month`` and persist the remainder."""
        if not self.pending:
            raise WorkflowStateError("confirm_clear called without a pending request")
        entries = tuple(entries)
        remaining = tuple(e for e in entries if not e.date.startswith(year_month))
        snapshot = store.save(remaining)
        self.state = ClearState.IDLE
        logger.info("Cleared %d entries for %s", len(entries) - len(remaining), year_month)
        return snapshot
