"""
Tests for the cross-file table of contents (--separate-toc layout).
"""

import logging

from openpyxl import Workbook
from openpyxl.cell.cell import Cell

from sql2excel.domain.models import TocEntry
from sql2excel.infrastructure.excel.toc import (
    EXTERNAL_TITLE,
    OPEN_FILE_LINK_TEXT,
    OPEN_FILE_PLAIN_TEXT,
    TOC_SHEET_NAME,
    USAGE_LINES,
    USAGE_TITLE,
    create_external_table_of_contents,
)


class TestExternalTableOfContents:
    """Test cases for create_external_table_of_contents."""

    def setup_method(self):
        self.wb = Workbook()
        self.wb.remove(self.wb.active)

    def _create(self, entries, target="output/report.xlsx"):
        return create_external_table_of_contents(self.wb, entries, target)

    def test_title_and_target_file(self, sample_entries):
        ws = self._create(sample_entries)

        assert ws.title == TOC_SHEET_NAME
        assert ws["A1"].value == EXTERNAL_TITLE
        assert ws["A1"].font.size == 16
        assert "A1:D1" in [str(r) for r in ws.merged_cells.ranges]
        assert ws["B3"].value == "report.xlsx"

    def test_header_row(self, sample_entries):
        ws = self._create(sample_entries)

        assert [ws.cell(row=5, column=c).value for c in range(1, 6)] == [
            "No",
            "Sheet Name",
            "Records",
            "Description",
            "File Link",
        ]
        assert ws["A5"].fill.start_color.rgb.endswith("D9E2F3")
        assert ws["E5"].font.bold is True

    def test_entry_rows(self, sample_entries):
        ws = self._create(sample_entries)

        assert ws["A6"].value == 1
        assert ws["B6"].value == "Sales Report"
        assert ws["C6"].value == 120
        assert ws["C6"].number_format == "#,##0"
        assert ws["D6"].value == "Sales Report 시트의 데이터를 확인하세요"
        assert ws["D6"].font.italic is True

        link = ws["E6"]
        assert link.value == OPEN_FILE_LINK_TEXT
        assert link.hyperlink.target == "output/report.xlsx"

        assert ws["C7"].value == 0
        assert ws["C7"].font.color.rgb.endswith("999999")
        assert ws["A8"].value == 3

    def test_column_widths(self, sample_entries):
        ws = self._create(sample_entries)

        widths = [ws.column_dimensions[c].width for c in "ABCDE"]
        assert widths == [6, 20, 10, 30, 15]

    def test_usage_footer_after_two_blank_rows(self, sample_entries):
        ws = self._create(sample_entries)

        # Last entry on row 8, rows 9-10 blank
        assert ws["A9"].value is None
        assert ws["A10"].value is None
        assert ws["A11"].value == USAGE_TITLE
        assert [ws.cell(row=r, column=1).value for r in range(12, 15)] == list(USAGE_LINES)

    def test_no_entries(self):
        ws = self._create([])

        assert ws["A5"].value == "No"
        assert ws["A6"].value is None
        assert ws["A8"].value == USAGE_TITLE

    def test_illegal_characters_stripped_from_name(self):
        ws = self._create([TocEntry(tab_name="X", display_name="Bad\x02Name", record_count=1)])

        assert ws["B6"].value == "BadName"
        assert ws["D6"].value.startswith("BadName")


class TestFileLinkFallback:
    """The file link degrades to gray plain text when it cannot be created."""

    def setup_method(self):
        self.wb = Workbook()
        self.wb.remove(self.wb.active)

    @staticmethod
    def _break_hyperlinks(monkeypatch):
        def set_hyperlink(cell, value):
            if value is not None:
                raise ValueError("hyperlink rejected")
            cell._hyperlink = None

        monkeypatch.setattr(
            Cell, "hyperlink", property(lambda cell: cell._hyperlink, set_hyperlink)
        )

    def test_single_entry_plain_text_and_one_warning(self, monkeypatch, caplog):
        self._break_hyperlinks(monkeypatch)
        entry = TocEntry(tab_name="Sales", display_name="Sales", record_count=5)

        with caplog.at_level(logging.WARNING, logger="sql2excel.infrastructure.excel.toc"):
            ws = create_external_table_of_contents(self.wb, [entry], "report.xlsx")

        link = ws["E6"]
        assert link.value == OPEN_FILE_PLAIN_TEXT
        assert link.hyperlink is None
        assert link.font.color.rgb.endswith("666666")
        assert link.font.underline is None

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "Sales" in warnings[0].getMessage()

    def test_remaining_rows_still_built(self, monkeypatch, caplog, sample_entries):
        self._break_hyperlinks(monkeypatch)

        with caplog.at_level(logging.WARNING, logger="sql2excel.infrastructure.excel.toc"):
            ws = create_external_table_of_contents(self.wb, sample_entries, "report.xlsx")

        assert [ws.cell(row=r, column=1).value for r in range(6, 9)] == [1, 2, 3]
        assert [ws.cell(row=r, column=5).value for r in range(6, 9)] == [OPEN_FILE_PLAIN_TEXT] * 3
        assert ws["C8"].value == sample_entries[2].record_count
        assert ws["A11"].value == USAGE_TITLE

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == len(sample_entries)
