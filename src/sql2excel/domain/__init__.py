"""
Domain layer package.

Pure data structures for report styling, table-of-contents entries,
query results and query definitions.
"""

from sql2excel.domain.models import (
    AlignmentSpec,
    BorderSide,
    BorderSpec,
    ColumnWidthPolicy,
    FillSpec,
    FontSpec,
    HeaderStyle,
    ResultSet,
    SheetStyle,
    StyleDescriptor,
    TocEntry,
)
from sql2excel.domain.definitions import (
    QueryDefinition,
    SheetDefinition,
    substitute_variables,
)

__all__ = [
    "AlignmentSpec",
    "BorderSide",
    "BorderSpec",
    "ColumnWidthPolicy",
    "FillSpec",
    "FontSpec",
    "HeaderStyle",
    "ResultSet",
    "SheetStyle",
    "StyleDescriptor",
    "TocEntry",
    "QueryDefinition",
    "SheetDefinition",
    "substitute_variables",
]
