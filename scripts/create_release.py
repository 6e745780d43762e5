#!/usr/bin/env python
"""
Release Packager

Builds the executable and assembles release/sql2excel-v<version>-win-x64
plus its zip archive.

Usage:
    python scripts/create_release.py [--version 1.0.0] [--skip-build]
"""
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from sql2excel.interface.release_cli import app  # noqa: E402


if __name__ == "__main__":
    app()
