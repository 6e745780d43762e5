"""
SQL Server connection and query execution module.

Handles:
- ODBC driver detection and fallback
- Connection string building
- Query execution into ordered result sets
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

import pyodbc

from sql2excel.domain.models import ResultSet
from sql2excel.infrastructure.config_loader import DatabaseConfig

logger = logging.getLogger(__name__)

# Newest first
PREFERRED_DRIVERS = (
    "ODBC Driver 18 for SQL Server",
    "ODBC Driver 17 for SQL Server",
    "ODBC Driver 13 for SQL Server",
    "ODBC Driver 11 for SQL Server",
)

FALLBACK_DRIVERS = (
    "SQL Server Native Client 11.0",
    "SQL Server Native Client 10.0",
    "SQL Server",
)

# Values openpyxl writes natively; anything else is written as text
CELL_TYPES = (str, int, float, bool, Decimal, datetime, date, time)


def to_cell_value(value: Any) -> Any:
    """Convert a driver value into something a worksheet cell accepts."""
    if value is None or isinstance(value, CELL_TYPES):
        return value
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex().upper()
    return str(value)


class SqlConnector:
    """
    SQL Server connection manager for one configured database.

    Each query opens its own connection; reports run a handful of
    queries sequentially.
    """

    def __init__(self, config: DatabaseConfig):
        """
        Initialize SQL connector.

        Args:
            config: Connection settings from dbinfo.json
        """
        self.config = config
        self._connection_string: str | None = None

        logger.info(
            "SqlConnector initialized for %s/%s (auth=%s)",
            config.server_instance,
            config.database,
            config.auth,
        )

    def _detect_odbc_driver(self) -> str:
        """
        Detect best available ODBC driver.

        Raises:
            RuntimeError: If no suitable driver found
        """
        if self.config.driver:
            return self.config.driver

        drivers = pyodbc.drivers()
        logger.debug("Available ODBC drivers: %s", drivers)

        for driver in PREFERRED_DRIVERS:
            if driver in drivers:
                logger.info("Using ODBC driver: %s", driver)
                return driver

        for driver in FALLBACK_DRIVERS:
            if driver in drivers:
                logger.warning("Using fallback ODBC driver: %s", driver)
                return driver

        raise RuntimeError(
            "No SQL Server ODBC driver found. Please install ODBC Driver 17 or 18."
        )

    def build_connection_string(self) -> str:
        """
        Build ODBC connection string.

        Raises:
            ValueError: If SQL authentication is configured without a password
        """
        if self._connection_string:
            return self._connection_string

        config = self.config
        driver = self._detect_odbc_driver()

        parts = [
            f"DRIVER={{{driver}}}",
            f"SERVER={config.server_instance}",
            f"DATABASE={config.database}",
            f"Encrypt={'yes' if config.options.encrypt else 'no'}",
            f"TrustServerCertificate={'yes' if config.options.trust_server_certificate else 'no'}",
        ]

        if config.auth == "integrated":
            parts.append("Trusted_Connection=yes")
        else:
            if not config.password:
                raise ValueError(
                    f"Password required for SQL authentication (db '{config.id}')"
                )
            parts.append(f"UID={config.user}")
            parts.append(f"PWD={config.password}")

        self._connection_string = ";".join(parts)
        logger.debug("Connection string built (credentials masked)")
        return self._connection_string

    def _connect(self) -> pyodbc.Connection:
        return pyodbc.connect(
            self.build_connection_string(), timeout=self.config.connect_timeout
        )

    def test_connection(self) -> bool:
        """
        Test database connectivity.

        Returns:
            True if connection successful, False otherwise
        """
        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT 1")
                cursor.fetchone()
            logger.info("Connection test successful: %s", self.config.server_instance)
            return True
        except pyodbc.Error as e:
            logger.error(
                "Connection test failed for %s: %s", self.config.server_instance, e
            )
            return False

    def execute_query(self, query: str) -> ResultSet:
        """
        Execute a query and return its rows with column order preserved.

        Args:
            query: SQL query string

        Returns:
            ResultSet (empty when the statement returns no rows)

        Raises:
            pyodbc.Error: If connection or query execution fails
        """
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(query)

            columns = [column[0] for column in cursor.description] if cursor.description else []
            rows = cursor.fetchall() if columns else []

            result = ResultSet(
                columns=columns,
                rows=[
                    {column: to_cell_value(row[i]) for i, column in enumerate(columns)}
                    for row in rows
                ],
            )

        logger.debug("Query returned %d rows, %d columns", len(result.rows), len(columns))
        return result
