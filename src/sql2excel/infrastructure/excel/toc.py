"""
Table of Contents Sheet Module.

Builds the navigation sheet ("목차") listing every generated sheet
with its record count and a link to it.

Two layouts:
    In-workbook  - links jump to cell A1 of each sheet in the same file
    Cross-file   - the index lives in its own file and links open the
                   data workbook (used with --separate-toc)

Link creation degrades gracefully. For in-workbook links the writer
tries, in order:
    1. HYPERLINK() formula
    2. Hyperlink object on the cell
    3. Plain text (one warning logged)
A link failure only affects its own cell; the index is always built.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Sequence

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE, Cell
from openpyxl.worksheet.hyperlink import Hyperlink
from openpyxl.worksheet.worksheet import Worksheet

from sql2excel.domain.models import TocEntry
from sql2excel.infrastructure.excel_styles import (
    Alignments,
    ColumnDef,
    Colors,
    Fills,
    Fonts,
    THOUSANDS_FORMAT,
    record_count_font,
    set_column_widths,
    style_row,
)

__all__ = [
    "TOC_SHEET_NAME",
    "create_table_of_contents",
    "populate_table_of_contents",
    "create_external_table_of_contents",
    "escape_sheet_name",
    "escape_display_text",
    "build_hyperlink_formula",
]

logger = logging.getLogger(__name__)


TOC_SHEET_NAME = "목차"

# Excel rejects string arguments longer than this inside a formula
FORMULA_STRING_LIMIT = 255

TOC_COLUMNS = [
    ColumnDef("No", width=6),
    ColumnDef("Sheet Name", width=25),
    ColumnDef("Records", width=12),
]

EXTERNAL_TOC_COLUMNS = [
    ColumnDef("No", width=6),
    ColumnDef("Sheet Name", width=20),
    ColumnDef("Records", width=10),
    ColumnDef("Description", width=30),
    ColumnDef("File Link", width=15),
]

EXTERNAL_TITLE = "📊 Excel 시트 목차"
EXTERNAL_FILE_LABEL = "📁 대상 파일:"
OPEN_FILE_LINK_TEXT = "📂 파일 열기"
OPEN_FILE_PLAIN_TEXT = "파일 열기"
USAGE_TITLE = "💡 사용법"
USAGE_LINES = (
    '   1. "파일 열기" 링크를 클릭하여 메인 엑셀 파일을 엽니다',
    "   2. 메인 파일에서 원하는 시트 탭을 클릭합니다",
    "   3. 각 시트는 위 목록의 순서대로 배치되어 있습니다",
)


# ============================================================================
# Link Text Helpers
# ============================================================================


def escape_sheet_name(tab_name: str) -> str:
    """Double single quotes so the name fits inside '...' in a reference."""
    return tab_name.replace("'", "''")


def escape_display_text(display_name: str) -> str:
    """Double double quotes so the text fits inside "..." in a formula."""
    return display_name.replace('"', '""')


def _internal_location(tab_name: str) -> str:
    return f"'{escape_sheet_name(tab_name)}'!A1"


def build_hyperlink_formula(tab_name: str, display_name: str) -> str:
    """
    Build a HYPERLINK() formula pointing at A1 of ``tab_name``.

    Raises:
        ValueError: If an argument exceeds Excel's formula string limit
    """
    target = f"#{_internal_location(tab_name)}"
    text = escape_display_text(display_name)
    if len(target) > FORMULA_STRING_LIMIT or len(text) > FORMULA_STRING_LIMIT:
        raise ValueError(
            f"HYPERLINK argument exceeds {FORMULA_STRING_LIMIT} characters"
        )
    return f'=HYPERLINK("{target}","{text}")'


# ============================================================================
# Link Strategies
# ============================================================================

LinkStrategy = Callable[[Cell, TocEntry], None]


def link_by_formula(cell: Cell, entry: TocEntry) -> None:
    """Tier 1: HYPERLINK() formula rendered as clickable text."""
    cell.value = build_hyperlink_formula(entry.tab_name, entry.display_name)
    cell.font = Fonts.LINK


def link_by_hyperlink(cell: Cell, entry: TocEntry) -> None:
    """Tier 2: plain value plus a cell hyperlink to the sheet location."""
    cell.value = entry.display_name
    cell.hyperlink = Hyperlink(
        ref=cell.coordinate,
        location=_internal_location(entry.tab_name),
        display=entry.display_name,
    )
    cell.font = Fonts.LINK


def link_as_text(cell: Cell, entry: TocEntry) -> None:
    """Final tier: display name only, link color without underline."""
    cell.value = ILLEGAL_CHARACTERS_RE.sub("", entry.display_name)
    cell.font = Fonts.LINK_PLAIN


# Tried in order; the first one that does not raise wins
INTERNAL_LINK_STRATEGIES: tuple[LinkStrategy, ...] = (
    link_by_formula,
    link_by_hyperlink,
)


def _reset_cell(cell: Cell) -> None:
    cell.hyperlink = None
    cell.value = None


def write_sheet_link(cell: Cell, entry: TocEntry) -> None:
    """
    Write a navigable cell for ``entry``, degrading on failure.

    Each strategy runs in its own failure boundary; a failed attempt is
    cleared before the next one. Only the final plain-text fallback logs.
    """
    for strategy in INTERNAL_LINK_STRATEGIES:
        try:
            strategy(cell, entry)
            return
        except Exception as e:
            logger.debug(
                "Link strategy %s failed for '%s': %s",
                strategy.__name__,
                entry.display_name,
                e,
            )
            _reset_cell(cell)

    link_as_text(cell, entry)
    logger.warning("Hyperlink creation failed for sheet: %s", entry.display_name)


def _write_record_count(cell: Cell, count: int | None) -> None:
    cell.value = count or 0
    cell.number_format = THOUSANDS_FORMAT
    cell.alignment = Alignments.RIGHT
    cell.font = record_count_font(count)


# ============================================================================
# In-Workbook Table of Contents
# ============================================================================


def _clear_sheet(ws: Worksheet) -> None:
    """Remove every row (values, styles, links, merges) from the sheet."""
    for merged in list(ws.merged_cells.ranges):
        ws.unmerge_cells(str(merged))
    if ws.max_row:
        ws.delete_rows(1, ws.max_row)


def populate_table_of_contents(ws: Worksheet, entries: Sequence[TocEntry]) -> None:
    """
    (Re)write the table of contents into an existing sheet.

    Existing content is cleared first, so calling this repeatedly with the
    same entries produces the same sheet.

    Args:
        ws: The index worksheet
        entries: Sheets in navigation order
    """
    _clear_sheet(ws)

    for col_idx, col_def in enumerate(TOC_COLUMNS, start=1):
        ws.cell(row=1, column=col_idx, value=col_def.name)

    for idx, entry in enumerate(entries, start=1):
        row = idx + 1
        ws.cell(row=row, column=1, value=idx)
        write_sheet_link(ws.cell(row=row, column=2), entry)
        _write_record_count(ws.cell(row=row, column=3), entry.record_count)

    set_column_widths(ws, TOC_COLUMNS)
    style_row(ws, 1, len(TOC_COLUMNS), font=Fonts.HEADER, fill=Fills.TOC_HEADER)

    ws.sheet_state = "visible"
    ws.sheet_properties.tabColor = Colors.TOC_TAB

    logger.debug("Table of contents populated with %d entries", len(entries))


def create_table_of_contents(wb: Workbook, entries: Sequence[TocEntry]) -> Worksheet:
    """
    Create the table of contents sheet and fill it.

    Args:
        wb: Workbook whose data sheets are already populated
        entries: Sheets in navigation order

    Returns:
        The new index worksheet (appended as the last sheet)
    """
    ws = wb.create_sheet(title=TOC_SHEET_NAME)
    populate_table_of_contents(ws, entries)
    return ws


# ============================================================================
# Cross-File Table of Contents
# ============================================================================


def _write_file_link(cell: Cell, target_file_name: str, display_name: str) -> None:
    try:
        cell.value = OPEN_FILE_LINK_TEXT
        cell.hyperlink = target_file_name
        cell.font = Fonts.LINK
    except Exception as e:
        _reset_cell(cell)
        cell.value = OPEN_FILE_PLAIN_TEXT
        cell.font = Fonts.NOTE
        logger.warning(
            "File link creation failed for sheet: %s (%s)", display_name, e
        )


def create_external_table_of_contents(
    wb: Workbook,
    entries: Sequence[TocEntry],
    target_file_name: str,
) -> Worksheet:
    """
    Create a table of contents that links to a separate data workbook.

    Layout:
        Row 1   - title banner (merged A:D)
        Row 3   - target file name
        Row 5   - column headers
        Row 6+  - one row per entry
        Footer  - usage instructions

    Args:
        wb: Workbook that will hold only the index
        entries: Sheets in navigation order
        target_file_name: Data workbook the links open, relative to the
                          folder the index is saved in

    Returns:
        The new index worksheet
    """
    ws = wb.create_sheet(title=TOC_SHEET_NAME)

    title = ws.cell(row=1, column=1, value=EXTERNAL_TITLE)
    title.font = Fonts.TITLE
    ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=4)

    ws.cell(row=3, column=1, value=EXTERNAL_FILE_LABEL).font = Fonts.HEADER
    ws.cell(row=3, column=2, value=Path(target_file_name).name).font = Fonts.LINK_PLAIN

    header_row = 5
    for col_idx, col_def in enumerate(EXTERNAL_TOC_COLUMNS, start=1):
        ws.cell(row=header_row, column=col_idx, value=col_def.name)
    style_row(
        ws,
        header_row,
        len(EXTERNAL_TOC_COLUMNS),
        font=Fonts.HEADER,
        fill=Fills.EXTERNAL_HEADER,
    )

    row = header_row
    for idx, entry in enumerate(entries, start=1):
        row = header_row + idx
        ws.cell(row=row, column=1, value=idx)

        name_cell = ws.cell(row=row, column=2)
        name_cell.value = ILLEGAL_CHARACTERS_RE.sub("", entry.display_name)
        name_cell.font = Fonts.SHEET_NAME

        _write_record_count(ws.cell(row=row, column=3), entry.record_count)

        desc_cell = ws.cell(row=row, column=4)
        desc_cell.value = f"{name_cell.value} 시트의 데이터를 확인하세요"
        desc_cell.font = Fonts.DESCRIPTION

        _write_file_link(ws.cell(row=row, column=5), target_file_name, entry.display_name)

    set_column_widths(ws, EXTERNAL_TOC_COLUMNS)

    # Two blank rows, then the usage block
    row += 3
    ws.cell(row=row, column=1, value=USAGE_TITLE).font = Fonts.USAGE_TITLE
    for line in USAGE_LINES:
        row += 1
        ws.cell(row=row, column=1, value=line).font = Fonts.NOTE

    logger.debug(
        "External table of contents created with %d entries -> %s",
        len(entries),
        target_file_name,
    )
    return ws
