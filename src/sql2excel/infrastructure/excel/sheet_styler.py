"""
Sheet Styler.

Writes a result set into a worksheet and applies the configured
header/body styles and column widths.

Layout:
    Row 1       - column names (header style)
    Row 2..N+1  - data rows (body style)
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE, Cell
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from sql2excel.domain.models import SheetStyle, StyleDescriptor
from sql2excel.infrastructure.excel.column_sizer import calculate_column_widths
from sql2excel.infrastructure.excel.style_parser import apply_cell_style

__all__ = [
    "write_cell_value",
    "apply_header_style",
    "apply_body_style",
    "apply_sheet_style",
]

logger = logging.getLogger(__name__)


def write_cell_value(cell: Cell, value: Any) -> None:
    """
    Store a query value as data, never as a formula.

    Control characters the file format cannot hold are removed, and text
    starting with "=" is kept as a string cell.
    """
    if isinstance(value, str):
        value = ILLEGAL_CHARACTERS_RE.sub("", value)
    cell.value = value
    if isinstance(value, str) and value.startswith("="):
        cell.data_type = "s"


def apply_header_style(
    ws: Worksheet | None,
    columns: Sequence[str] | None,
    header_style: StyleDescriptor | None,
) -> None:
    """Apply ``header_style`` to every cell of row 1."""
    if header_style is None or ws is None or not columns:
        return

    for col_idx in range(1, len(columns) + 1):
        apply_cell_style(ws.cell(row=1, column=col_idx), header_style)


def apply_body_style(
    ws: Worksheet | None,
    columns: Sequence[str] | None,
    data_row_count: int,
    body_style: StyleDescriptor | None,
) -> None:
    """Apply ``body_style`` to every cell of the data rows (row 2 onward)."""
    if body_style is None or ws is None or not columns or data_row_count <= 0:
        return

    for row_idx in range(2, data_row_count + 2):
        for col_idx in range(1, len(columns) + 1):
            apply_cell_style(ws.cell(row=row_idx, column=col_idx), body_style)


def apply_sheet_style(
    ws: Worksheet | None,
    rows: Sequence[Mapping[str, Any]] | None,
    sheet_style: SheetStyle | None,
) -> None:
    """
    Populate a sheet with rows and apply styling.

    Columns come from the first row's keys; later rows missing a key get
    an empty cell. Does nothing when there is no sheet or no rows. The row
    mappings are only read, never modified.

    Args:
        ws: Target worksheet (expected empty)
        rows: Row mappings keyed by column name
        sheet_style: Header/body styles and optional width policy
    """
    if ws is None or not rows:
        return

    sheet_style = sheet_style or SheetStyle()
    columns = list(rows[0].keys())

    header = sheet_style.header
    if header is not None and header.colwidths is not None:
        widths = calculate_column_widths(columns, rows, header.colwidths)
        for col_idx, width in enumerate(widths, start=1):
            ws.column_dimensions[get_column_letter(col_idx)].width = width

    for col_idx, name in enumerate(columns, start=1):
        write_cell_value(ws.cell(row=1, column=col_idx), name)

    for row_idx, row in enumerate(rows, start=2):
        for col_idx, name in enumerate(columns, start=1):
            write_cell_value(ws.cell(row=row_idx, column=col_idx), row.get(name))

    apply_header_style(ws, columns, header)
    apply_body_style(ws, columns, len(rows), sheet_style.body)

    logger.debug(
        "Styled sheet '%s': %d columns, %d rows", ws.title, len(columns), len(rows)
    )
