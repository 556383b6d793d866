"""Tests for export.py - CSV and Excel export."""

import pytest
from openpyxl import load_workbook

from errors import NothingToExportError
from export import BOM, export_filename, to_delimited_table, write_csv, write_xlsx


class TestToDelimitedTable:
    """Tests for to_delimited_table function."""

    def test_header_and_rows(self, make_entry):
        entries = [make_entry("2024-03-01", hours=8, location="Office")]
        text = to_delimited_table(entries)
        lines = text[len(BOM):].split("\n")
        assert lines == [
            '"date","start","end","hours","location"',
            '"2024-03-01","09:00","17:00","8.00","Office"',
        ]

    def test_starts_with_bom(self, make_entry):
        assert to_delimited_table([make_entry("2024-03-01")]).startswith("\ufeff")

    def test_escapes_quotes(self, make_entry):
        """Test internal quotes are doubled and the cell is outer-quoted."""
        entries = [make_entry("2024-03-01", hours=8, location='Tel Aviv "Office"')]
        text = to_delimited_table(entries)
        assert text.endswith('"Tel Aviv ""Office"""')

    def test_comma_in_location(self, make_entry):
        entries = [make_entry("2024-03-01", location="Office, floor 2")]
        assert '"Office, floor 2"' in to_delimited_table(entries)

    def test_two_decimals(self, make_entry):
        entries = [make_entry("2024-03-01", hours=1 / 3)]
        assert '"0.33"' in to_delimited_table(entries)

    def test_keeps_given_order(self, make_entry):
        entries = [make_entry("2024-03-01"), make_entry("2024-03-02"), make_entry("2024-03-03")]
        lines = to_delimited_table(entries).split("\n")[1:]
        assert [line.split(",")[0] for line in lines] == ['"2024-03-01"', '"2024-03-02"', '"2024-03-03"']

    def test_no_trailing_newline(self, make_entry):
        assert not to_delimited_table([make_entry("2024-03-01")]).endswith("\n")

    def test_empty_raises(self):
        """Test an empty month is refused rather than exported header-only."""
        with pytest.raises(NothingToExportError):
            to_delimited_table([])


class TestExportFilename:
    def test_csv(self):
        assert export_filename("2024-03", "csv") == "work-hours-2024-03.csv"


class TestWriteCsv:
    """Tests for write_csv function."""

    def test_writes_file(self, make_entry, tmp_path):
        entries = [make_entry("2024-03-01", location="תל אביב")]
        path = write_csv(entries, "2024-03", tmp_path)

        assert path == tmp_path / "work-hours-2024-03.csv"
        content = path.read_text(encoding="utf-8")
        assert content == to_delimited_table(entries)
        assert "תל אביב" in content

    def test_creates_directory(self, make_entry, tmp_path):
        path = write_csv([make_entry("2024-03-01")], "2024-03", tmp_path / "exports")
        assert path.exists()

    def test_empty_writes_nothing(self, tmp_path):
        with pytest.raises(NothingToExportError):
            write_csv([], "2024-03", tmp_path)
        assert list(tmp_path.iterdir()) == []


class TestWriteXlsx:
    """Tests for write_xlsx function."""

    def test_writes_workbook(self, make_entry, tmp_path):
        entries = [
            make_entry("2024-03-01", hours=8, location="Office"),
            make_entry("2024-03-02", hours=4, location="Home"),
        ]
        path = write_xlsx(entries, "2024-03", tmp_path)

        assert path.name == "work-hours-2024-03.xlsx"
        ws = load_workbook(path).active
        assert ws.title == "2024-03"
        assert [c.value for c in ws[1]] == ["date", "start", "end", "hours", "location"]
        assert [c.value for c in ws[2]] == ["2024-03-01", "09:00", "17:00", 8, "Office"]
        assert ws.cell(row=5, column=1).value == "total"
        assert ws.cell(row=5, column=4).value == 12
        assert ws.cell(row=6, column=4).value == 6

    def test_empty_writes_nothing(self, tmp_path):
        with pytest.raises(NothingToExportError):
            write_xlsx([], "2024-03", tmp_path)
        assert list(tmp_path.iterdir()) == []
