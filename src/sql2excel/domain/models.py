"""
Domain models for SQL2Excel.

This module contains the value types that flow through report generation:
- Style descriptors (font, fill, alignment, border) read from query definitions
- Column width policies
- Table-of-contents entries
- Tabular query results

These models are pure data structures with no I/O dependencies.
Style descriptors are frozen: once handed to the styler they never change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence


def _get(data: Mapping[str, Any], *keys: str) -> Any:
    """Return the first present key (camelCase and snake_case spellings)."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _as_bool(value: Any) -> Any:
    if isinstance(value, str):
        return value.lower() == "true"
    return value


# ============================================================================
# Style Descriptors
# ============================================================================

@dataclass(frozen=True)
class FontSpec:
    """
    Declarative font settings.

    Attributes:
        name: Font family name
        size: Point size (numeric or numeric string)
        color: Hex color code (RRGGBB or AARRGGBB)
        bold: True or "true" means bold, anything else means regular
    """
    name: str | None = None
    size: int | float | str | None = None
    color: str | None = None
    bold: bool | str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> FontSpec | None:
        if not data:
            return None
        return cls(
            name=data.get("name"),
            size=data.get("size"),
            color=data.get("color"),
            bold=data.get("bold"),
        )


@dataclass(frozen=True)
class FillSpec:
    """Solid background fill."""
    color: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> FillSpec | None:
        if not data:
            return None
        return cls(color=data.get("color"))


@dataclass(frozen=True)
class AlignmentSpec:
    """Cell alignment, passed to the spreadsheet library as given."""
    horizontal: str | None = None
    vertical: str | None = None
    wrap_text: bool | None = None
    shrink_to_fit: bool | None = None
    indent: float | str | None = None
    text_rotation: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> AlignmentSpec | None:
        if not data:
            return None
        rotation = _get(data, "textRotation", "text_rotation")
        # XML attributes arrive as strings
        if isinstance(rotation, str):
            rotation = int(rotation)
        return cls(
            horizontal=data.get("horizontal"),
            vertical=data.get("vertical"),
            wrap_text=_as_bool(_get(data, "wrapText", "wrap_text")),
            shrink_to_fit=_as_bool(_get(data, "shrinkToFit", "shrink_to_fit")),
            indent=data.get("indent"),
            text_rotation=rotation,
        )


@dataclass(frozen=True)
class BorderSide:
    """One edge of a cell border."""
    style: str | None = None
    color: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> BorderSide | None:
        if not data:
            return None
        return cls(style=data.get("style"), color=data.get("color"))


@dataclass(frozen=True)
class BorderSpec:
    """
    Cell border settings.

    ``all`` applies to every edge and wins over the per-side entries.
    """
    all: BorderSide | None = None
    top: BorderSide | None = None
    left: BorderSide | None = None
    right: BorderSide | None = None
    bottom: BorderSide | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> BorderSpec | None:
        if not data:
            return None
        return cls(
            all=BorderSide.from_dict(data.get("all")),
            top=BorderSide.from_dict(data.get("top")),
            left=BorderSide.from_dict(data.get("left")),
            right=BorderSide.from_dict(data.get("right")),
            bottom=BorderSide.from_dict(data.get("bottom")),
        )


@dataclass(frozen=True)
class StyleDescriptor:
    """Bundle of font/fill/alignment/border applied to a range of cells."""
    font: FontSpec | None = None
    fill: FillSpec | None = None
    alignment: AlignmentSpec | None = None
    border: BorderSpec | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> StyleDescriptor | None:
        if not data:
            return None
        return cls(
            font=FontSpec.from_dict(data.get("font")),
            fill=FillSpec.from_dict(data.get("fill")),
            alignment=AlignmentSpec.from_dict(data.get("alignment")),
            border=BorderSpec.from_dict(data.get("border")),
        )


# ============================================================================
# Layout
# ============================================================================

@dataclass(frozen=True)
class ColumnWidthPolicy:
    """
    Bounds for auto-computed column widths (in characters).

    Raises:
        ValueError: If min is negative or max is below min
    """
    min: int = 10
    max: int = 30

    def __post_init__(self) -> None:
        if self.min < 0:
            raise ValueError(f"Column width min must be >= 0, got {self.min}")
        if self.max < self.min:
            raise ValueError(
                f"Column width max ({self.max}) must be >= min ({self.min})"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ColumnWidthPolicy | None:
        """Build a policy; missing or zero bounds fall back to 10 / 30."""
        if not data:
            return None
        min_width = data.get("min")
        max_width = data.get("max")
        return cls(
            min=int(float(min_width)) if min_width else 10,
            max=int(float(max_width)) if max_width else 30,
        )


@dataclass(frozen=True)
class HeaderStyle(StyleDescriptor):
    """Header row style plus the optional column width policy."""
    colwidths: ColumnWidthPolicy | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> HeaderStyle | None:
        if not data:
            return None
        return cls(
            font=FontSpec.from_dict(data.get("font")),
            fill=FillSpec.from_dict(data.get("fill")),
            alignment=AlignmentSpec.from_dict(data.get("alignment")),
            border=BorderSpec.from_dict(data.get("border")),
            colwidths=ColumnWidthPolicy.from_dict(
                _get(data, "colwidths", "colWidths", "col_widths")
            ),
        )


@dataclass(frozen=True)
class SheetStyle:
    """Per-sheet styling: header (with widths) and body."""
    header: HeaderStyle | None = None
    body: StyleDescriptor | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> SheetStyle:
        data = data or {}
        return cls(
            header=HeaderStyle.from_dict(data.get("header")),
            body=StyleDescriptor.from_dict(data.get("body")),
        )


# ============================================================================
# Report Contents
# ============================================================================

@dataclass(frozen=True)
class TocEntry:
    """
    One row of the table-of-contents sheet.

    Attributes:
        tab_name: Actual worksheet title (link target)
        display_name: Human label (link text)
        record_count: Number of data rows on the sheet
    """
    tab_name: str
    display_name: str
    record_count: int | None = 0


@dataclass
class ResultSet:
    """Rows returned by one query, with column order preserved."""
    columns: list[str] = field(default_factory=list)
    rows: list[dict[str, Any]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    @classmethod
    def from_rows(cls, rows: Sequence[Mapping[str, Any]]) -> ResultSet:
        """Build a result set whose columns come from the first row."""
        rows = [dict(r) for r in rows]
        columns = list(rows[0].keys()) if rows else []
        return cls(columns=columns, rows=rows)
