"""Modal screens for the work hours application."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Grid, Horizontal, Vertical
from textual.suggester import SuggestFromList
from textual.widgets import Button, Input, Label, Static
from textual.screen import ModalScreen

from models import Entry, EntryDraft
from utils import compute_hours, parse_date, parse_time


class ConfirmScreen(ModalScreen[bool]):
    """Ask before a destructive action. Dismisses with True only on an explicit yes."""

    DEFAULT_CSS = """
    ConfirmScreen {
        align: center middle;
        background: $background 60%;
    }

    #prompt-box {
        width: 56;
        height: auto;
        padding: 1 3;
        background: $panel;
        border: round $error;
    }

    #prompt-detail {
        margin: 1 0;
    }

    #prompt-actions {
        height: auto;
        align-horizontal: right;
    }

    #prompt-actions Button {
        min-width: 10;
        margin-left: 2;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("y", "confirm", "Yes"),
        Binding("n", "cancel", "No"),
    ]

    def __init__(self, message: str, detail: str = ""):
        super().__init__()
        self.message = message
        self.detail = detail

    def compose(self) -> ComposeResult:
        with Vertical(id="prompt-box"):
            yield Static(Text(self.message, style="bold"), id="prompt-message")
            if self.detail:
                yield Static(Text(self.detail, style="italic dim"), id="prompt-detail")
            with Horizontal(id="prompt-actions"):
                yield Button("No [n]", id="no")
                yield Button("Yes [y]", variant="error", id="yes")

    def on_mount(self) -> None:
        self.query_one("#no", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "yes")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class EntryFormScreen(ModalScreen[EntryDraft | None]):
    """Modal form for recording a shift."""

    DEFAULT_CSS = """
    EntryFormScreen {
        align: center middle;
    }

    #shift-form {
        width: 64;
        height: auto;
        padding: 0 2 1 2;
        background: $panel;
        border: round $accent;
        border-title-align: center;
    }

    #shift-times {
        grid-size: 3 2;
        grid-rows: 1 3;
        grid-columns: 1fr;
        grid-gutter: 0 1;
        height: 4;
        margin-top: 1;
    }

    .caption {
        color: $text-muted;
    }

    #location-caption {
        margin-top: 1;
    }

    #form-actions {
        height: auto;
        margin-top: 1;
        align-horizontal: right;
    }

    #form-actions Button {
        min-width: 10;
        margin-left: 2;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    # Enter moves through the inputs in this order, then saves
    FIELD_ORDER = ["entry-date", "start-time", "end-time", "location"]

    def __init__(self, date: str, entry: Entry | None = None, suggestions: list[str] | None = None):
        super().__init__()
        self.date = entry.date if entry else date
        self.entry = entry
        self.suggestions = suggestions or []

    def compose(self) -> ComposeResult:
        with Vertical(id="shift-form"):
            with Grid(id="shift-times"):
                yield Label("Date", classes="caption")
                yield Label("Start", classes="caption")
                yield Label("End", classes="caption")
                yield Input(value=self.date, placeholder="YYYY-MM-DD", id="entry-date")
                yield Input(value=self.entry.start if self.entry else "", placeholder="HH:MM", id="start-time")
                yield Input(value=self.entry.end if self.entry else "", placeholder="HH:MM", id="end-time")

            yield Label("Location (optional)", classes="caption", id="location-caption")
            yield Input(
                value=self.entry.location if self.entry else "",
                id="location",
                suggester=SuggestFromList(self.suggestions, case_sensitive=False),
            )

            with Horizontal(id="form-actions"):
                yield Button("Cancel", id="cancel")
                yield Button("Save", variant="primary", id="save")

    def on_mount(self) -> None:
        self.query_one("#shift-form").border_title = "Edit shift" if self.entry else "New shift"
        self.query_one("#start-time", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter advances through FIELD_ORDER and saves from the location field."""
        current_id = event.input.id
        if current_id in self.FIELD_ORDER:
            current_idx = self.FIELD_ORDER.index(current_id)
            if current_idx < len(self.FIELD_ORDER) - 1:
                next_id = self.FIELD_ORDER[current_idx + 1]
                self.query_one(f"#{next_id}", Input).focus()
            else:
                self._save_entry()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "cancel":
            self.dismiss(None)
        elif event.button.id == "save":
            self._save_entry()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def build_draft(self, date_val: str, start_val: str, end_val: str, location: str) -> EntryDraft | str:
        """Validate raw field values. Returns a draft, or an error message.

        An error keeps the form open with what the user typed.
        """
        entry_date = parse_date(date_val)
        if not entry_date:
            return "Date must be YYYY-MM-DD"
        start = parse_time(start_val)
        end = parse_time(end_val)
        if not start or not end:
            return "Start and end must be HH:MM"
        if compute_hours(start, end) <= 0:
            return "End time must be after start time"
        return EntryDraft(date=entry_date, start=start, end=end, location=location.strip())

    def _save_entry(self) -> None:
        result = self.build_draft(
            self.query_one("#entry-date", Input).value,
            self.query_one("#start-time", Input).value,
            self.query_one("#end-time", Input).value,
            self.query_one("#location", Input).value,
        )
        if isinstance(result, str):
            self.app.notify(result, severity="error")
            return
        self.dismiss(result)
