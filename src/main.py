"""
SQL2Excel - SQL Server query results to styled Excel reports.

Entry point for running from source and for the PyInstaller build.
"""

import sys

from sql2excel.interface.cli import main


if __name__ == "__main__":
    sys.exit(main())
