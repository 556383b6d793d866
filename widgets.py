"""Custom widgets for the work hours application."""

from __future__ import annotations

from textual.widgets import Static
from rich.text import Text

from models import MonthSummary, TodayStatus
from utils import format_display_date, format_month


class TodayStatusLine(Static):
    """Shows hours saved for today, hidden when nothing is recorded."""

    def update_display(self, status: TodayStatus | None):
        if status is None:
            self.add_class("hidden")
            self.update("")
            return

        self.remove_class("hidden")
        text = Text()
        text.append(f"{status.total_hours:.2f} hours", style="bold")
        text.append(f" saved for {format_display_date(status.date)}")
        self.update(text)


class MonthHeader(Static):
    """Shows the selected month with navigation arrows."""

    def __init__(self, year_month: str = "", **kwargs):
        super().__init__(**kwargs)
        self.year_month = year_month

    def update_display(self, year_month: str):
        self.year_month = year_month
        text = Text()
        text.append(f"MONTH: {format_month(year_month)}", style="bold")
        text.append("   ◄ ► to change month", style="dim")
        self.update(text)

    def on_click(self, event) -> None:
        """Clicking the left half goes back a month, the right half forward."""
        if event.x < self.size.width // 2:
            self.app.action_prev_month()  # type: ignore[attr-defined]
        else:
            self.app.action_next_month()  # type: ignore[attr-defined]


class MonthSummaryPanel(Static):
    """Shows total, count and average hours for the filtered month."""

    def update_display(self, summary: MonthSummary):
        text = Text()
        # Entries line is dimmed when the month is empty
        text.append(f"  Total    {summary.total:>8.2f}h\n")
        text.append(f"  Entries  {summary.count:>8d}\n", style="dim" if summary.count == 0 else "")
        text.append(f"  Average  {summary.average:>8.2f}h")
        self.update(text)
