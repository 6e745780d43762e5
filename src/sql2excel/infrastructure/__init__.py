"""
Infrastructure layer package.

Contains all I/O and external system integrations:
- Configuration file loading (dbinfo.json, query definitions)
- Logging setup
- Excel report generation (excel/)
- SQL Server connectivity (sql_server.py, imported on demand because
  pyodbc needs the system ODBC library)
"""

from sql2excel.infrastructure.config_loader import (
    ConfigLoader,
    DatabaseConfig,
    DatabaseOptions,
)
from sql2excel.infrastructure.logging_config import setup_logging

__all__ = [
    # Config
    "ConfigLoader",
    "DatabaseConfig",
    "DatabaseOptions",
    # Logging
    "setup_logging",
]
