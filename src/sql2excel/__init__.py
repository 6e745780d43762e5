"""
SQL2Excel - SQL Server query results to styled Excel reports.

Runs the queries listed in a JSON/XML query definition and writes one
styled sheet per query plus a table of contents sheet linking to them.

Usage:
    # CLI (recommended)
    python main.py export queries/sales.json --var startDate=2024-01-01

    # Programmatic
    from sql2excel.application.export_service import ExportService

    service = ExportService(config_dir="config")
    result = service.export("queries/sales.json")
"""

__version__ = "1.0.0"
__author__ = "SQL2Excel Team"

from sql2excel.application.export_service import ExportService

__all__ = ["ExportService", "__version__"]
