"""
Report Writer.

Collects query results into styled sheets of a single workbook and
finishes it with a table of contents.

Usage Example:
    from sql2excel.infrastructure.excel import ReportWriter

    writer = ReportWriter()
    writer.add_sheet("Sales Report", result_set, sheet_style)
    writer.add_sheet("Customers", other_result, sheet_style)

    # Index sheet first, inside the same file
    writer.save("output/report.xlsx")

    # Or: data in report.xlsx, index in report_목차.xlsx
    writer.save("output/report.xlsx", separate_toc=True)

Design Decisions:
    - Sheets keep the order they were added; the index follows that order
    - Tab names are sanitized (Excel forbids []:*?/\\ and >31 chars) and
      made unique; the original name is kept as the display name
    - Empty result sets still get a sheet (no header row) and an index
      entry with 0 records
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from sql2excel.domain.models import ResultSet, SheetStyle, TocEntry
from sql2excel.infrastructure.excel.sheet_styler import apply_sheet_style
from sql2excel.infrastructure.excel.toc import (
    TOC_SHEET_NAME,
    create_external_table_of_contents,
    create_table_of_contents,
)

__all__ = ["ReportWriter", "make_tab_name", "toc_path_for"]

logger = logging.getLogger(__name__)

MAX_TAB_NAME_LENGTH = 31
INVALID_TAB_CHARS = re.compile(r"[\[\]:*?/\\]")


def make_tab_name(name: str, existing: list[str] | set[str]) -> str:
    """
    Turn a display name into a valid, unique worksheet title.

    Invalid characters become "_", the result is cut to 31 characters and
    a numeric suffix is added when the title is already taken
    (case-insensitive, as Excel compares titles).
    """
    base = INVALID_TAB_CHARS.sub("_", name).strip("'").strip() or "Sheet"
    base = base[:MAX_TAB_NAME_LENGTH]

    taken = {t.lower() for t in existing}
    candidate = base
    counter = 2
    while candidate.lower() in taken:
        suffix = f"_{counter}"
        candidate = base[: MAX_TAB_NAME_LENGTH - len(suffix)] + suffix
        counter += 1
    return candidate


def toc_path_for(path: Path) -> Path:
    """Sibling path used for the index workbook in split mode."""
    return path.with_name(f"{path.stem}_{TOC_SHEET_NAME}{path.suffix}")


class ReportWriter:
    """
    Builds a styled multi-sheet workbook from query results.

    Attributes:
        wb: The openpyxl Workbook instance
        entries: Table-of-contents entries, in sheet order
    """

    def __init__(self) -> None:
        self.wb = Workbook()
        # Drop the default "Sheet"; every tab is created explicitly
        self.wb.remove(self.wb.active)
        self.entries: list[TocEntry] = []
        logger.debug("ReportWriter initialized with empty workbook")

    @property
    def total_rows(self) -> int:
        return sum(e.record_count or 0 for e in self.entries)

    def add_sheet(
        self,
        display_name: str,
        result: ResultSet,
        style: SheetStyle | None = None,
    ) -> Worksheet:
        """
        Add one sheet holding ``result``.

        Args:
            display_name: Sheet label shown in the index
            result: Rows to write (columns taken from the first row)
            style: Header/body styling for this sheet

        Returns:
            The populated worksheet
        """
        reserved = [*self.wb.sheetnames, TOC_SHEET_NAME]
        tab_name = make_tab_name(display_name, reserved)
        if tab_name != display_name:
            logger.info("Sheet '%s' written as tab '%s'", display_name, tab_name)

        ws = self.wb.create_sheet(title=tab_name)
        apply_sheet_style(ws, result.rows, style)

        self.entries.append(
            TocEntry(
                tab_name=tab_name,
                display_name=display_name,
                record_count=len(result.rows),
            )
        )
        logger.info("Sheet '%s': %d rows", display_name, len(result.rows))
        return ws

    def save(self, path: Path | str, separate_toc: bool = False) -> list[Path]:
        """
        Add the table of contents and save.

        Args:
            path: Output workbook path (parents are created)
            separate_toc: Write the index into its own sibling workbook
                          whose links open ``path``

        Returns:
            Written files, data workbook first

        Raises:
            PermissionError: If the file is open in another program
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        if not self.entries:
            # openpyxl refuses to save a workbook without sheets
            logger.warning("No sheets were added; writing an empty index only")

        if not separate_toc:
            toc = create_table_of_contents(self.wb, self.entries)
            self.wb.move_sheet(toc, offset=-(len(self.wb.sheetnames) - 1))
            for ws in self.wb.worksheets:
                ws.sheet_view.tabSelected = False
            self.wb.active = 0
            toc.sheet_view.tabSelected = True
            self.wb.save(path)
            logger.info(
                "Report saved: %s (%d sheets, %d rows)",
                path,
                len(self.entries),
                self.total_rows,
            )
            return [path]

        written = []
        if self.entries:
            self.wb.save(path)
            written.append(path)
            logger.info(
                "Report saved: %s (%d sheets, %d rows)",
                path,
                len(self.entries),
                self.total_rows,
            )

        toc_wb = Workbook()
        toc_wb.remove(toc_wb.active)
        # Links resolve from the index file's folder, which is also the data file's
        create_external_table_of_contents(toc_wb, self.entries, path.name)
        toc_path = toc_path_for(path)
        toc_wb.save(toc_path)
        written.append(toc_path)
        logger.info("Table of contents saved: %s", toc_path)
        return written
