"""
Export service - orchestrates one report run.

Workflow:
    1. Load the query definition (JSON/XML) and apply variable overrides
    2. Run each enabled sheet's query against its database
    3. Write every result set as a styled sheet, in definition order
    4. Build the table of contents and save the workbook(s)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Protocol

from sql2excel.domain.definitions import QueryDefinition
from sql2excel.domain.models import ResultSet, TocEntry
from sql2excel.infrastructure.config_loader import ConfigLoader, DatabaseConfig
from sql2excel.infrastructure.excel import ReportWriter

if TYPE_CHECKING:
    from sql2excel.infrastructure.sql_server import SqlConnector

logger = logging.getLogger(__name__)


class QueryRunner(Protocol):
    """Anything that can turn SQL into a ResultSet."""

    def execute_query(self, query: str) -> ResultSet: ...


ConnectorFactory = Callable[[DatabaseConfig], QueryRunner]


class ExportError(RuntimeError):
    """A sheet's query could not be executed."""

    def __init__(self, sheet_name: str, cause: Exception):
        super().__init__(f"Query for sheet '{sheet_name}' failed: {cause}")
        self.sheet_name = sheet_name
        self.cause = cause


def default_connector_factory(config: DatabaseConfig) -> SqlConnector:
    """Create a pyodbc-backed connector (imported lazily)."""
    from sql2excel.infrastructure.sql_server import SqlConnector

    return SqlConnector(config)


@dataclass
class ExportResult:
    """Outcome of an export run."""
    paths: list[Path] = field(default_factory=list)
    entries: list[TocEntry] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return sum(e.record_count or 0 for e in self.entries)


class ExportService:
    """
    Runs query definitions and writes the resulting report.

    Usage:
        service = ExportService(config_dir=Path("config"))
        result = service.export(
            "queries/sales.json",
            variables={"startDate": "2024-01-01"},
        )
    """

    def __init__(
        self,
        config_dir: Path | str = "config",
        connector_factory: ConnectorFactory | None = None,
    ) -> None:
        """
        Initialize export service.

        Args:
            config_dir: Directory containing dbinfo.json
            connector_factory: Builds a query runner for a database
                               (defaults to the ODBC connector)
        """
        self.config_loader = ConfigLoader(config_dir)
        self.connector_factory = connector_factory or default_connector_factory
        self._connectors: dict[str, QueryRunner] = {}
        self._databases: dict[str, DatabaseConfig] | None = None

    def _get_connector(self, db_id: str) -> QueryRunner:
        """Get or create the connector for a db id."""
        if db_id not in self._connectors:
            if self._databases is None:
                self._databases = self.config_loader.load_databases()
            if db_id not in self._databases:
                known = ", ".join(sorted(self._databases)) or "(none)"
                raise ValueError(
                    f"Unknown database id: {db_id}\n"
                    f"Hint: Configured ids are: {known}"
                )
            self._connectors[db_id] = self.connector_factory(self._databases[db_id])
        return self._connectors[db_id]

    def load_definition(
        self,
        definition_path: Path | str,
        variables: dict[str, str] | None = None,
    ) -> QueryDefinition:
        """Load a definition and apply command-line variable overrides."""
        definition = self.config_loader.load_query_definition(definition_path)
        if variables:
            definition = definition.with_variables(variables)
        return definition

    def run_definition(
        self,
        definition: QueryDefinition,
        output: Path | str | None = None,
        separate_toc: bool | None = None,
    ) -> ExportResult:
        """
        Execute every enabled sheet and save the report.

        Args:
            definition: Loaded query definition
            output: Output path override (defaults to the definition's)
            separate_toc: Override the definition's separateToc flag

        Returns:
            ExportResult with written paths and index entries

        Raises:
            ExportError: If a sheet's query fails
            ValueError: If a sheet has no database configured
        """
        writer = ReportWriter()

        for sheet in definition.sheets:
            if not sheet.use:
                logger.info("Skipping disabled sheet: %s", sheet.name)
                continue

            db_id = sheet.db or definition.db
            if not db_id:
                raise ValueError(
                    f"No database for sheet '{sheet.name}'\n"
                    f"Hint: Set excel.db or the sheet's db attribute."
                )

            query = definition.resolve_query(sheet)
            logger.info("Running query for sheet '%s' on '%s'", sheet.name, db_id)
            logger.debug("SQL: %s", query)

            connector = self._get_connector(db_id)
            try:
                result = connector.execute_query(query)
            except Exception as e:
                logger.error("Query for sheet '%s' failed: %s", sheet.name, e)
                raise ExportError(sheet.name, e) from e

            writer.add_sheet(sheet.name, result, definition.style)

        output_path = Path(output) if output else Path(definition.resolve_output())
        if separate_toc is None:
            separate_toc = definition.separate_toc

        paths = writer.save(output_path, separate_toc=separate_toc)
        return ExportResult(paths=paths, entries=list(writer.entries))

    def export(
        self,
        definition_path: Path | str,
        variables: dict[str, str] | None = None,
        output: Path | str | None = None,
        separate_toc: bool | None = None,
    ) -> ExportResult:
        """Load ``definition_path`` and run it. See run_definition()."""
        definition = self.load_definition(definition_path, variables)
        return self.run_definition(definition, output=output, separate_toc=separate_toc)
