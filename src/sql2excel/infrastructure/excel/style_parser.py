"""
Style Parser.

Converts declarative style descriptors (from query definition files)
into openpyxl style objects. Each aspect has one fixed transform:

    FontSpec       -> openpyxl.styles.Font
    FillSpec       -> openpyxl.styles.PatternFill (solid only)
    AlignmentSpec  -> openpyxl.styles.Alignment
    BorderSpec     -> openpyxl.styles.Border

Every parser returns None for an absent fragment so callers can
leave the cell's existing formatting untouched.
"""

from __future__ import annotations

from openpyxl.cell.cell import Cell
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from sql2excel.domain.models import (
    AlignmentSpec,
    BorderSide,
    BorderSpec,
    FillSpec,
    FontSpec,
    StyleDescriptor,
)

__all__ = [
    "parse_border",
    "parse_font",
    "parse_fill",
    "parse_alignment",
    "apply_cell_style",
]


def _parse_side(side: BorderSide | None) -> Side:
    if side is None:
        return Side()
    return Side(style=side.style, color=side.color or None)


def parse_border(border: BorderSpec | None) -> Border | None:
    """
    Convert a border descriptor.

    ``all`` is applied to top/left/right/bottom and overrides any
    individually specified side. Sides without a descriptor get no border.
    """
    if border is None:
        return None

    if border.all is not None:
        side = _parse_side(border.all)
        return Border(top=side, left=side, right=side, bottom=side)

    return Border(
        top=_parse_side(border.top),
        left=_parse_side(border.left),
        right=_parse_side(border.right),
        bottom=_parse_side(border.bottom),
    )


def parse_font(font: FontSpec | None) -> Font | None:
    """
    Convert a font descriptor.

    ``bold`` accepts True or the string "true" only. ``size`` is coerced to
    a number; a non-numeric size raises ValueError.
    """
    if font is None:
        return None

    return Font(
        name=font.name,
        size=float(font.size) if font.size else None,
        color=font.color or None,
        bold=font.bold is True or font.bold == "true",
    )


def parse_fill(fill: FillSpec | None) -> PatternFill | None:
    """Convert a fill descriptor into a solid fill (None without a color)."""
    if fill is None or not fill.color:
        return None

    return PatternFill(
        start_color=fill.color, end_color=fill.color, fill_type="solid"
    )


def parse_alignment(alignment: AlignmentSpec | None) -> Alignment | None:
    """
    Pass alignment values through; openpyxl validates them.

    The vertical value "middle" (used by older definition files) is
    accepted as an alias of "center".
    """
    if alignment is None:
        return None

    vertical = alignment.vertical
    if vertical == "middle":
        vertical = "center"

    # openpyxl rejects indent=None
    extra = {"indent": alignment.indent} if alignment.indent is not None else {}

    return Alignment(
        horizontal=alignment.horizontal,
        vertical=vertical,
        wrap_text=alignment.wrap_text,
        shrink_to_fit=alignment.shrink_to_fit,
        text_rotation=alignment.text_rotation,
        **extra,
    )


def apply_cell_style(cell: Cell | None, style: StyleDescriptor | None) -> None:
    """
    Apply a style descriptor to a single cell.

    Only the aspects present in ``style`` (and parsing to a value) are
    assigned; everything else on the cell is left as it was.
    """
    if cell is None or style is None:
        return

    font = parse_font(style.font)
    if font is not None:
        cell.font = font

    fill = parse_fill(style.fill)
    if fill is not None:
        cell.fill = fill

    alignment = parse_alignment(style.alignment)
    if alignment is not None:
        cell.alignment = alignment

    border = parse_border(style.border)
    if border is not None:
        cell.border = border
