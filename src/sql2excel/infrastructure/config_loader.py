"""
Configuration loader module.

Handles loading and validation of:
- dbinfo.json: database connection settings, keyed by db id
- Query definition files (.json or .xml): sheets, queries, variables
  and Excel styling for one report
"""

from __future__ import annotations

import json
import logging
import sys
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sql2excel.domain.definitions import QueryDefinition, SheetDefinition
from sql2excel.domain.models import SheetStyle

logger = logging.getLogger(__name__)


# ============================================================================
# Database Connection Settings
# ============================================================================


class DatabaseOptions(BaseModel):
    """Driver options for one connection."""
    model_config = ConfigDict(populate_by_name=True)

    encrypt: bool = False
    trust_server_certificate: bool = Field(True, alias="trustServerCertificate")


class DatabaseConfig(BaseModel):
    """One entry of dbinfo.json."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    server: str
    port: int | None = None
    database: str = "master"
    user: str | None = None
    password: str | None = None
    driver: str | None = None
    connect_timeout: int = Field(30, alias="connectTimeout")
    options: DatabaseOptions = Field(default_factory=DatabaseOptions)

    @property
    def auth(self) -> str:
        """'sql' when a user is configured, otherwise 'integrated'."""
        return "sql" if self.user else "integrated"

    @property
    def server_instance(self) -> str:
        """Server string for the connection (``host,port`` form when a port is set)."""
        if self.port:
            return f"{self.server},{self.port}"
        return self.server


def _is_true(value: Any, default: bool = False) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


# ============================================================================
# XML Query Definitions
# ============================================================================


def _style_block_from_xml(element: ET.Element | None) -> dict[str, Any] | None:
    """<header>/<body> element -> style mapping (same shape as JSON)."""
    if element is None:
        return None
    block: dict[str, Any] = {}
    for child in element:
        if child.tag == "border":
            block["border"] = {side.tag: dict(side.attrib) for side in child}
        else:
            block[child.tag] = dict(child.attrib)
    return block


def _xml_to_dict(root: ET.Element) -> dict[str, Any]:
    """Convert an XML query definition to the JSON layout."""
    data: dict[str, Any] = {"excel": {}, "vars": {}, "sheets": []}

    excel = root.find("excel")
    if excel is not None:
        data["excel"] = dict(excel.attrib)
        for part in ("header", "body"):
            block = _style_block_from_xml(excel.find(part))
            if block is not None:
                data["excel"][part] = block

    for var in root.iter("var"):
        name = var.get("name")
        if name:
            data["vars"][name] = (var.text or "").strip()

    for sheet in root.iter("sheet"):
        data["sheets"].append(
            {
                "name": sheet.get("name"),
                "use": sheet.get("use"),
                "db": sheet.get("db"),
                "query": (sheet.text or "").strip(),
            }
        )
    return data


# ============================================================================
# Loader
# ============================================================================


class ConfigLoader:
    """
    Load and validate configuration files.

    Provides typed access to database settings and query definitions.
    """

    def __init__(self, config_dir: str | Path = "config"):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing dbinfo.json. A relative path is
                        anchored to the executable's folder when frozen.
        """
        if getattr(sys, "frozen", False) and not Path(config_dir).is_absolute():
            self.config_dir = Path(sys.executable).parent / config_dir
        else:
            self.config_dir = Path(config_dir)

        logger.debug("ConfigLoader initialized with directory: %s", self.config_dir)

    def _read_text(self, filepath: Path) -> str:
        """
        Read a configuration file with clear error messages.

        Raises:
            FileNotFoundError: If the file doesn't exist
            PermissionError: If the file cannot be read
            ValueError: If the file is empty
        """
        if not filepath.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {filepath}\n"
                f"Hint: Check the path or copy one of the sample files."
            )

        try:
            content = filepath.read_text(encoding="utf-8-sig")
        except PermissionError as e:
            raise PermissionError(
                f"Cannot read config file (permission denied): {filepath}\n"
                f"Hint: Check file permissions or if another process has it locked."
            ) from e

        if not content.strip():
            raise ValueError(
                f"Configuration file is empty: {filepath}\n"
                f"Hint: Add valid content or copy from the sample files."
            )
        return content

    def _load_json_file(self, filepath: Path) -> dict:
        content = self._read_text(filepath)
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(
                f"Invalid JSON in config file: {filepath}\n"
                f"Error at line {e.lineno}, column {e.colno}: {e.msg}\n"
                f"Hint: Validate JSON syntax. Note: .json files cannot have comments."
            ) from e

    def _load_xml_file(self, filepath: Path) -> dict:
        content = self._read_text(filepath)
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            line, column = e.position
            raise ValueError(
                f"Invalid XML in query file: {filepath}\n"
                f"Error at line {line}, column {column}\n"
                f"Hint: Wrap queries containing < or & in <![CDATA[ ... ]]>."
            ) from e
        return _xml_to_dict(root)

    # ------------------------------------------------------------------
    # Databases
    # ------------------------------------------------------------------

    def load_databases(self, filename: str = "dbinfo.json") -> dict[str, DatabaseConfig]:
        """
        Load database connection settings.

        Returns:
            Mapping of db id to DatabaseConfig

        Raises:
            FileNotFoundError: If dbinfo.json doesn't exist
            ValueError: If an entry is invalid
        """
        filepath = self.config_dir / filename
        logger.info("Loading database settings from: %s", filepath)

        data = self._load_json_file(filepath)
        databases = {}
        for db_id, item in (data.get("dbs") or {}).items():
            try:
                databases[db_id] = DatabaseConfig.model_validate({**item, "id": db_id})
            except ValidationError as e:
                raise ValueError(
                    f"Invalid database entry '{db_id}' in {filepath}\n{e}"
                ) from e
            logger.debug("Loaded database: %s (%s)", db_id, databases[db_id].server_instance)

        logger.info("Loaded %d database settings", len(databases))
        return databases

    def get_database(self, db_id: str, filename: str = "dbinfo.json") -> DatabaseConfig:
        """
        Look up one database by id.

        Raises:
            ValueError: If the id is not configured
        """
        databases = self.load_databases(filename)
        if db_id not in databases:
            known = ", ".join(sorted(databases)) or "(none)"
            raise ValueError(
                f"Unknown database id: {db_id}\n"
                f"Hint: Configured ids are: {known}"
            )
        return databases[db_id]

    # ------------------------------------------------------------------
    # Query Definitions
    # ------------------------------------------------------------------

    def load_query_definition(self, path: str | Path) -> QueryDefinition:
        """
        Load a query definition from a .json or .xml file.

        Args:
            path: Definition file path (not relative to config_dir)

        Returns:
            QueryDefinition with sheets in file order

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is malformed or a sheet lacks name/query
        """
        filepath = Path(path)
        logger.info("Loading query definition from: %s", filepath)

        if filepath.suffix.lower() == ".xml":
            data = self._load_xml_file(filepath)
        else:
            data = self._load_json_file(filepath)

        definition = self._build_definition(data, filepath)
        logger.info(
            "Loaded %d sheets (%d enabled), %d variables",
            len(definition.sheets),
            len(definition.enabled_sheets),
            len(definition.variables),
        )
        return definition

    def _build_definition(self, data: dict, filepath: Path) -> QueryDefinition:
        excel = data.get("excel") or {}

        sheets = []
        for index, item in enumerate(data.get("sheets") or [], start=1):
            name = item.get("name")
            query = item.get("query")
            if not name or not query:
                raise ValueError(
                    f"Sheet #{index} in {filepath} needs both 'name' and 'query'\n"
                    f"Hint: Every sheet entry must name its tab and its SQL."
                )
            sheets.append(
                SheetDefinition(
                    name=name,
                    query=query,
                    use=_is_true(item.get("use"), default=True),
                    db=item.get("db") or None,
                )
            )

        return QueryDefinition(
            db=excel.get("db"),
            output=excel.get("output") or "output/report.xlsx",
            separate_toc=_is_true(excel.get("separateToc")),
            style=SheetStyle.from_dict(excel),
            variables={k: str(v) for k, v in (data.get("vars") or {}).items()},
            sheets=sheets,
        )
