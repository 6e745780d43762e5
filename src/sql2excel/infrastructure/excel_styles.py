"""
Excel styling configuration and utilities.

Provides the fixed styling used by generated navigation sheets:
- Color palette
- Font definitions
- Fill and alignment presets
- Column definitions and layout helpers

User-configurable sheet styling lives in excel/style_parser.py; the
presets here are not configurable.
"""

from __future__ import annotations

from dataclasses import dataclass

from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet


# ============================================================================
# Color Palette
# ============================================================================


class Colors:
    """Report color palette (hex codes without #)."""

    LINK = "0563C1"  # Standard hyperlink blue
    ACCENT = "2F5597"  # Populated record counts, titles
    MUTED = "999999"  # Zero record counts
    NOTE = "666666"  # Descriptions, usage text

    TOC_HEADER_BG = "E7E6E6"  # Light gray
    EXTERNAL_HEADER_BG = "D9E2F3"  # Light blue
    TOC_TAB = "FF4472C4"  # Blue tab so the index is easy to spot


# ============================================================================
# Fonts
# ============================================================================


class Fonts:
    """Font definitions for navigation sheets."""

    HEADER = Font(bold=True)
    TITLE = Font(size=16, bold=True, color=Colors.ACCENT)
    LINK = Font(color=Colors.LINK, underline="single")
    LINK_PLAIN = Font(color=Colors.LINK)
    SHEET_NAME = Font(bold=True, color=Colors.ACCENT)
    COUNT = Font(color=Colors.ACCENT)
    COUNT_ZERO = Font(color=Colors.MUTED)
    DESCRIPTION = Font(italic=True, color=Colors.NOTE)
    NOTE = Font(color=Colors.NOTE)
    USAGE_TITLE = Font(bold=True, color=Colors.ACCENT)


# ============================================================================
# Fills (Backgrounds)
# ============================================================================


class Fills:
    """Background fill patterns."""

    TOC_HEADER = PatternFill(
        start_color=Colors.TOC_HEADER_BG,
        end_color=Colors.TOC_HEADER_BG,
        fill_type="solid",
    )
    EXTERNAL_HEADER = PatternFill(
        start_color=Colors.EXTERNAL_HEADER_BG,
        end_color=Colors.EXTERNAL_HEADER_BG,
        fill_type="solid",
    )


# ============================================================================
# Alignments / Number formats
# ============================================================================


class Alignments:
    """Text alignment definitions."""

    RIGHT = Alignment(horizontal="right")


THOUSANDS_FORMAT = "#,##0"


# ============================================================================
# Column Definition
# ============================================================================


@dataclass(frozen=True)
class ColumnDef:
    """
    Column definition for a fixed-layout sheet.

    Attributes:
        name: Column header text
        width: Column width in characters
    """

    name: str
    width: int = 12


# ============================================================================
# Helper Functions
# ============================================================================


def set_column_widths(ws: Worksheet, columns: list[ColumnDef]) -> None:
    """Apply the widths of ``columns`` to the sheet, left to right."""
    for col_idx, col_def in enumerate(columns, start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = col_def.width


def style_row(
    ws: Worksheet,
    row: int,
    num_cols: int,
    font: Font | None = None,
    fill: PatternFill | None = None,
) -> None:
    """
    Apply a font and/or fill to the first ``num_cols`` cells of a row.

    Args:
        ws: Worksheet
        row: Row number (1-indexed)
        num_cols: Number of columns to style
        font: Font to apply (None leaves the font alone)
        fill: Fill to apply (None leaves the fill alone)
    """
    for col in range(1, num_cols + 1):
        cell = ws.cell(row=row, column=col)
        if font is not None:
            cell.font = font
        if fill is not None:
            cell.fill = fill


def record_count_font(count: int | None) -> Font:
    """Accent color for populated sheets, muted for empty ones."""
    return Fonts.COUNT if (count or 0) > 0 else Fonts.COUNT_ZERO
