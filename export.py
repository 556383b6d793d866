"""Export the filtered month to spreadsheet-compatible files."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Sequence

from openpyxl import Workbook
from openpyxl.styles import Font

from errors import NothingToExportError
from models import Entry
from views import aggregate

logger = logging.getLogger(__name__)

BOM = "\ufeff"
HEADERS = ["date", "start", "end", "hours", "location"]


def _rows(filtered: Sequence[Entry]) -> list[list[str]]:
    return [[e.date, e.start, e.end, f"{e.hours:.2f}", e.location] for e in filtered]


def export_filename(year_month: str, ext: str) -> str:
    return f"work-hours-{year_month}.{ext}"


def to_delimited_table(filtered: Sequence[Entry]) -> str:
    """Render entries as a quoted CSV table with a leading BOM.

    Every cell is quoted and internal quotes are doubled. Rows are joined by
    '\\n' with no trailing newline.
    """
    if not filtered:
        raise NothingToExportError("No entries to export for this month")

    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(HEADERS)
    writer.writerows(_rows(filtered))
    return BOM + buf.getvalue()[:-1]


def write_csv(filtered: Sequence[Entry], year_month: str, directory: Path) -> Path:
    """Write the month's CSV into ``directory`` and return its path."""
    text = to_delimited_table(filtered)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(year_month, "csv")
    path.write_text(text, encoding="utf-8")
    logger.info("Exported %d entries to %s", len(filtered), path)
    return path


def write_xlsx(filtered: Sequence[Entry], year_month: str, directory: Path) -> Path:
    """Write the month as an Excel workbook with a totals row."""
    if not filtered:
        raise NothingToExportError("No entries to export for this month")

    wb = Workbook()
    ws = wb.active
    ws.title = year_month

    ws.append(HEADERS)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for e in filtered:
        ws.append([e.date, e.start, e.end, round(e.hours, 2), e.location])

    summary = aggregate(filtered)
    ws.append([])
    ws.append(["total", None, None, round(summary.total, 2), f"{summary.count} entries"])
    ws.append(["average", None, None, round(summary.average, 2), None])
    for row in ws.iter_rows(min_row=ws.max_row - 1, max_row=ws.max_row):
        row[0].font = Font(bold=True)

    for col in ("A", "E"):
        ws.column_dimensions[col].width = 20

    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(year_month, "xlsx")
    wb.save(path)
    logger.info("Exported %d entries to %s", len(filtered), path)
    return path
