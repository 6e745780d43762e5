"""
Excel Report Package.

Turns query results into styled workbooks with a navigable index sheet.

Usage:
    from sql2excel.infrastructure.excel import ReportWriter

    writer = ReportWriter()
    writer.add_sheet("Orders", result_set, sheet_style)
    writer.save("report.xlsx")

Modules:
    style_parser.py  - Style descriptors -> openpyxl Font/Fill/Alignment/Border
    column_sizer.py  - Content-based column widths
    sheet_styler.py  - Writes rows and applies header/body styles
    toc.py           - Table of contents (in-workbook and cross-file)
    writer.py        - ReportWriter composing the above
"""

from sql2excel.infrastructure.excel.column_sizer import calculate_column_widths
from sql2excel.infrastructure.excel.sheet_styler import (
    apply_body_style,
    apply_header_style,
    apply_sheet_style,
)
from sql2excel.infrastructure.excel.style_parser import (
    apply_cell_style,
    parse_alignment,
    parse_border,
    parse_fill,
    parse_font,
)
from sql2excel.infrastructure.excel.toc import (
    TOC_SHEET_NAME,
    create_external_table_of_contents,
    create_table_of_contents,
    populate_table_of_contents,
)
from sql2excel.infrastructure.excel.writer import ReportWriter

__all__ = [
    "ReportWriter",
    "TOC_SHEET_NAME",
    "apply_body_style",
    "apply_cell_style",
    "apply_header_style",
    "apply_sheet_style",
    "calculate_column_widths",
    "create_external_table_of_contents",
    "create_table_of_contents",
    "parse_alignment",
    "parse_border",
    "parse_fill",
    "parse_font",
    "populate_table_of_contents",
]
