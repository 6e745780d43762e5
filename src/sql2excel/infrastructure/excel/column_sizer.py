"""
Column width calculation for data sheets.

Widths are character-count approximations, the same unit openpyxl
uses for ``column_dimensions[...].width``.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from sql2excel.domain.models import ColumnWidthPolicy

DEFAULT_POLICY = ColumnWidthPolicy()


def calculate_column_widths(
    columns: Sequence[str],
    rows: Sequence[Mapping[str, Any]],
    policy: ColumnWidthPolicy = DEFAULT_POLICY,
) -> list[int]:
    """
    Compute one width per column from header and cell content lengths.

    Starts from the header label length, scans every row (None or a missing
    key counts as an empty string) and clamps the longest length seen to
    ``[policy.min, policy.max]``.

    Args:
        columns: Column names in display order
        rows: Row mappings keyed by column name
        policy: Width bounds

    Returns:
        Widths in column order
    """
    widths = []
    for col in columns:
        max_len = len(col)
        for row in rows:
            value = row.get(col)
            length = len(str(value)) if value is not None else 0
            if length > max_len:
                max_len = length
        widths.append(max(policy.min, min(policy.max, max_len)))
    return widths
