#!/usr/bin/env python3
"""Work hours TUI application."""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.css.query import NoMatches
from textual.widgets import Static, Footer, DataTable
from rich.text import Text

from errors import CorruptStoreError, NothingToClearError, NothingToExportError, ValidationError
from export import export_filename, write_csv, write_xlsx
from models import Config, Entry, EntryDraft
from screens import ConfirmScreen, EntryFormScreen
from storage import EntryStore, SqliteBackend
from utils import format_display_date, format_month, init_locale, today
from views import (
    EMPTY_MONTH_MESSAGE,
    EMPTY_RECENT_MESSAGE,
    ClearMonthWorkflow,
    MonthView,
    location_suggestions,
    recent_entries,
    today_status,
)
from widgets import MonthHeader, MonthSummaryPanel, TodayStatusLine

logger = logging.getLogger(__name__)

EMPTY_ROW_KEY = "__empty__"


class WorkHoursDataTable(DataTable):
    """DataTable that hands left/right to the app for month navigation."""

    def on_key(self, event) -> None:
        if getattr(self.app, "view_mode", None) != "month":
            return

        if event.key == "left":
            self.app.action_prev_month()  # type: ignore[attr-defined]
            event.prevent_default()
            event.stop()
        elif event.key == "right":
            self.app.action_next_month()  # type: ignore[attr-defined]
            event.prevent_default()
            event.stop()


class WorkHoursApp(App):
    """Record daily shifts and review monthly totals."""

    CSS = """
    Screen {
        background: $surface;
    }

    #today-header, #month-header {
        height: auto;
        background: $primary;
        color: $text;
        padding: 0 1;
        text-style: bold;
    }

    #today-status {
        height: auto;
        padding: 1 2 0 2;
        color: $success;
    }

    #recent-table, #month-table {
        height: 1fr;
        margin: 1 2;
    }

    #month-summary {
        height: auto;
        padding: 1 2;
        color: $text;
    }

    .hidden {
        display: none;
    }

    DataTable {
        height: 100%;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("t", "today_view", "Today"),
        Binding("m", "month_view", "Month"),
        Binding("a", "add_entry", "Add"),
        Binding("x", "export_csv", "CSV"),
        Binding("X", "export_xlsx", "Excel"),
        Binding("p", "print_month", "Print"),
        Binding("c", "clear_month", "Clear"),
        Binding("d", "toggle_theme", "Theme"),
    ]

    def __init__(self, store: EntryStore | None = None, config: Config | None = None):
        super().__init__()
        self.config = config or Config()
        self.store = store or EntryStore(SqliteBackend(self.config.db_path))

        # View mode: "today" or "month"
        self.view_mode = "today"

        self.load_error: str | None = None
        self.entries: tuple[Entry, ...] = self._load_entries()

        self.month_view = MonthView()
        self.month_view.refresh(self.entries)
        self.clear_workflow = ClearMonthWorkflow()

    def _load_entries(self) -> tuple[Entry, ...]:
        """Load entries, falling back to an empty collection if storage is corrupt."""
        try:
            return self.store.load()
        except CorruptStoreError as exc:
            logger.error("Stored entries are unreadable, continuing with none: %s", exc)
            self.load_error = str(exc)
            return ()

    def compose(self) -> ComposeResult:
        # Today view widgets
        yield Static(id="today-header")
        yield TodayStatusLine(id="today-status", classes="hidden")
        yield Container(WorkHoursDataTable(id="recent-table"), id="recent-table-container")
        # Month view widgets (hidden by default)
        yield MonthHeader(id="month-header", classes="hidden")
        yield Container(WorkHoursDataTable(id="month-table"), id="month-table-container", classes="hidden")
        yield MonthSummaryPanel(id="month-summary", classes="hidden")
        yield Footer()

    def on_mount(self):
        self._setup_recent_table()
        self._setup_month_table()

        saved_theme = self.store.get_theme()
        if saved_theme and saved_theme in self.available_themes:
            self.theme = saved_theme

        if self.load_error:
            self.notify("Saved entries could not be read and were ignored", severity="error", timeout=10)

        self._refresh_display()
        self.query_one("#recent-table", DataTable).focus()

    def _setup_recent_table(self):
        table = self.query_one("#recent-table", DataTable)
        table.cursor_type = "row"
        table.add_column("Date", width=28)
        table.add_column("Shift", width=15)
        table.add_column("Location", width=24)
        table.add_column("Hours", width=8)

    def _setup_month_table(self):
        table = self.query_one("#month-table", DataTable)
        table.cursor_type = "row"
        table.add_column("Date", width=28)
        table.add_column("Start", width=7)
        table.add_column("End", width=7)
        table.add_column("Hours", width=8)
        table.add_column("Location", width=24)

    # --- Rendering ---

    def _refresh_display(self):
        self._refresh_today_display()
        self._refresh_month_display()

    def _refresh_today_display(self):
        """Refresh the status line and recent entries list."""
        try:
            header = self.query_one("#today-header", Static)
            status_line = self.query_one("#today-status", TodayStatusLine)
            table = self.query_one("#recent-table", DataTable)
        except NoMatches:
            return

        today_str = today()
        header.update(Text(f"TODAY: {format_display_date(today_str)}", style="bold"))
        # Status line only shows in today view
        status = today_status(self.entries, today_str) if self.view_mode == "today" else None
        status_line.update_display(status)

        table.clear()
        recent = recent_entries(self.entries)
        if not recent:
            table.add_row(Text(EMPTY_RECENT_MESSAGE, style="dim"), "", "", "", key=EMPTY_ROW_KEY)
            return

        for entry in recent:
            table.add_row(
                format_display_date(entry.date),
                f"{entry.start} → {entry.end}",
                entry.location or Text("-", style="dim"),
                f"{entry.hours:.2f}",
                key=entry.id,
            )

    def _refresh_month_display(self):
        """Refresh the month table and totals from the current month view."""
        try:
            header = self.query_one("#month-header", MonthHeader)
            table = self.query_one("#month-table", DataTable)
            summary = self.query_one("#month-summary", MonthSummaryPanel)
        except NoMatches:
            return

        header.update_display(self.month_view.year_month)
        summary.update_display(self.month_view.summary)

        table.clear()
        if not self.month_view.filtered:
            table.add_row(Text(EMPTY_MONTH_MESSAGE, style="dim"), "", "", "", "", key=EMPTY_ROW_KEY)
            return

        for entry in self.month_view.filtered:
            table.add_row(
                format_display_date(entry.date),
                entry.start,
                entry.end,
                f"{entry.hours:.2f}",
                entry.location or Text("-", style="dim"),
                key=entry.id,
            )

    def _set_view_mode(self, mode: str):
        """Switch between view modes and toggle widget visibility."""
        self.view_mode = mode

        today_widgets = ["#today-header", "#recent-table-container"]
        month_widgets = ["#month-header", "#month-table-container", "#month-summary"]

        for widget_id in today_widgets:
            widget = self.query_one(widget_id)
            if mode == "today":
                widget.remove_class("hidden")
            else:
                widget.add_class("hidden")

        for widget_id in month_widgets:
            widget = self.query_one(widget_id)
            if mode == "month":
                widget.remove_class("hidden")
            else:
                widget.add_class("hidden")

        self.refresh_bindings()
        self._refresh_display()

        if mode == "today":
            self.query_one("#recent-table", DataTable).focus()
        else:
            self.query_one("#month-table", DataTable).focus()

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Check if an action is available based on current view mode."""
        if action == "today_view":
            return self.view_mode != "today"
        elif action == "month_view":
            return self.view_mode != "month"
        elif action in ("export_csv", "export_xlsx", "print_month", "clear_month"):
            return True if self.view_mode == "month" else None
        return True

    # --- Actions ---

    def action_today_view(self):
        self._set_view_mode("today")

    def action_month_view(self):
        self._set_view_mode("month")

    def action_prev_month(self):
        self.month_view.step(-1, self.entries)
        self._refresh_month_display()

    def action_next_month(self):
        self.month_view.step(1, self.entries)
        self._refresh_month_display()

    def action_add_entry(self):
        self.push_screen(
            EntryFormScreen(today(), suggestions=location_suggestions(self.entries)),
            self._on_entry_submitted,
        )

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Open the form pre-filled from the selected entry."""
        key = event.row_key.value if event.row_key else None
        if not key or key == EMPTY_ROW_KEY:
            return
        entry = self.store.find(self.entries, str(key))
        if entry is None:
            return
        self.push_screen(
            EntryFormScreen(entry.date, entry=entry, suggestions=location_suggestions(self.entries)),
            self._on_entry_submitted,
        )

    def _on_entry_submitted(self, draft: EntryDraft | None) -> None:
        """Save the submitted shift, replacing any entry on the same date."""
        if draft is None:
            return
        try:
            self.entries = self.store.upsert(self.entries, draft)
        except ValidationError as exc:
            self.notify(str(exc), severity="error")
            return

        self.month_view.refresh(self.entries)
        self._refresh_display()
        status = today_status(self.entries, draft.date)
        hours = status.total_hours if status else 0
        self.notify(f"Saved {hours:.2f} hours for {draft.date}")

    def action_export_csv(self):
        try:
            path = write_csv(self.month_view.filtered, self.month_view.year_month, self.config.export_dir)
        except NothingToExportError as exc:
            self.notify(str(exc), severity="warning")
            return
        self.notify(f"Exported {path.name}")

    def action_export_xlsx(self):
        try:
            path = write_xlsx(self.month_view.filtered, self.month_view.year_month, self.config.export_dir)
        except NothingToExportError as exc:
            self.notify(str(exc), severity="warning")
            return
        self.notify(f"Exported {path.name}")

    def action_print_month(self):
        """Save a printable snapshot of the month view."""
        if not self.month_view.filtered:
            self.notify("No entries to export for this month", severity="warning")
            return
        self.config.export_dir.mkdir(parents=True, exist_ok=True)
        path = self.save_screenshot(
            filename=export_filename(self.month_view.year_month, "svg"),
            path=str(self.config.export_dir),
        )
        logger.info("Saved month snapshot to %s", path)
        self.notify(f"Saved snapshot to {path}")

    def action_clear_month(self):
        """Ask for confirmation before clearing the selected month."""
        try:
            self.clear_workflow.request_clear(self.month_view.filtered)
        except NothingToClearError as exc:
            self.notify(str(exc), severity="warning")
            return

        count = len(self.month_view.filtered)
        self.push_screen(
            ConfirmScreen(
                f"Clear all {count} entries for {format_month(self.month_view.year_month)}?",
                "This cannot be undone.",
            ),
            self._on_clear_confirmed,
        )

    def _on_clear_confirmed(self, confirmed: bool | None) -> None:
        if not confirmed:
            self.clear_workflow.cancel_clear()
            return

        year_month = self.month_view.year_month
        self.entries = self.clear_workflow.confirm_clear(self.store, self.entries, year_month)
        self.month_view.refresh(self.entries)
        self._refresh_display()
        self.notify(f"Cleared {format_month(year_month)}")

    def action_toggle_theme(self):
        self.theme = "textual-light" if self.theme == "textual-dark" else "textual-dark"
        self.store.save_theme(self.theme)


def main():
    import sys

    config = Config()

    if len(sys.argv) > 1 and sys.argv[1] == "--db-info":
        from datetime import datetime
        db_path = config.db_path
        print(f"Database: {db_path}")
        if db_path.exists():
            mtime = datetime.fromtimestamp(db_path.stat().st_mtime)
            size = db_path.stat().st_size
            print(f"Modified: {mtime.strftime('%Y-%m-%d %H:%M:%S')}")
            print(f"Size: {size:,} bytes")
        else:
            print("Status: Does not exist (will be created on first run)")
        print(f"Exports: {config.export_dir}")
        return

    config.log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=config.log_path,
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_locale()

    app = WorkHoursApp(config=config)
    app.run()


if __name__ == "__main__":
    main()
