"""
Application layer package.

Use cases built on the infrastructure layer:
- export_service.py  - query definition -> Excel report
- release_service.py - distributable release bundle
"""

from sql2excel.application.export_service import (
    ExportError,
    ExportResult,
    ExportService,
)
from sql2excel.application.release_service import (
    ReleaseBuilder,
    ReleaseError,
    ReleaseResult,
)

__all__ = [
    "ExportError",
    "ExportResult",
    "ExportService",
    "ReleaseBuilder",
    "ReleaseError",
    "ReleaseResult",
]
