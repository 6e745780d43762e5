"""
Query definition models.

A query definition describes one report: which database to query,
which sheets to produce, the variables substituted into each query,
and the sheet styling.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from sql2excel.domain.models import SheetStyle

logger = logging.getLogger(__name__)

VARIABLE_PATTERN = re.compile(r"\$\{(\w+)\}")


def substitute_variables(text: str, variables: dict[str, str]) -> str:
    """
    Replace ``${name}`` references with their values.

    Unknown references are left untouched and logged.
    """
    def _replace(match: re.Match) -> str:
        name = match.group(1)
        if name in variables:
            return str(variables[name])
        logger.warning("Unresolved variable in query: ${%s}", name)
        return match.group(0)

    return VARIABLE_PATTERN.sub(_replace, text)


@dataclass
class SheetDefinition:
    """One output sheet and the query that fills it."""
    name: str
    query: str
    use: bool = True
    db: str | None = None


@dataclass
class QueryDefinition:
    """
    A complete report definition.

    Attributes:
        db: Default database id (key in dbinfo.json)
        output: Output workbook path (may contain ${vars})
        separate_toc: Write the table of contents to its own file
        style: Header/body style shared by all sheets
        variables: Values for ${name} substitution
        sheets: Sheets in output order
    """
    db: str | None = None
    output: str = "output/report.xlsx"
    separate_toc: bool = False
    style: SheetStyle = field(default_factory=SheetStyle)
    variables: dict[str, str] = field(default_factory=dict)
    sheets: list[SheetDefinition] = field(default_factory=list)

    @property
    def enabled_sheets(self) -> list[SheetDefinition]:
        return [s for s in self.sheets if s.use]

    def with_variables(self, overrides: dict[str, str]) -> QueryDefinition:
        """Return a copy whose variables are updated with ``overrides``."""
        merged = {**self.variables, **overrides}
        return QueryDefinition(
            db=self.db,
            output=self.output,
            separate_toc=self.separate_toc,
            style=self.style,
            variables=merged,
            sheets=list(self.sheets),
        )

    def resolve_query(self, sheet: SheetDefinition) -> str:
        return substitute_variables(sheet.query, self.variables)

    def resolve_output(self) -> str:
        return substitute_variables(self.output, self.variables)
