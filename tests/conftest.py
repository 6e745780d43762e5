"""
Shared test fixtures.

Provides sample index entries, result sets, style descriptors and an
on-disk config directory with dbinfo.json.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parents[1] / "src"))

from sql2excel.domain.models import ResultSet, SheetStyle, TocEntry  # noqa: E402


@pytest.fixture
def sample_entries() -> list[TocEntry]:
    return [
        TocEntry(tab_name="Sales", display_name="Sales Report", record_count=120),
        TocEntry(tab_name="Customers", display_name="Customers", record_count=0),
        TocEntry(tab_name="Orders", display_name="Orders", record_count=1500),
    ]


@pytest.fixture
def sample_result() -> ResultSet:
    return ResultSet.from_rows(
        [
            {"ID": 1, "Name": "Alexandrina", "City": "Seoul"},
            {"ID": 2, "Name": "Bo", "City": None},
        ]
    )


@pytest.fixture
def sample_style() -> SheetStyle:
    """Header/body style in the shape used by query definition files."""
    return SheetStyle.from_dict(
        {
            "header": {
                "font": {"name": "Arial", "size": 12, "color": "FFFFFF", "bold": True},
                "fill": {"color": "4472C4"},
                "alignment": {"horizontal": "center", "vertical": "middle"},
                "border": {"all": {"style": "thin", "color": "000000"}},
                "colwidths": {"min": 5, "max": 20},
            },
            "body": {
                "font": {"name": "Calibri", "size": "10"},
                "border": {"bottom": {"style": "hair", "color": "CCCCCC"}},
            },
        }
    )


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Config directory holding a dbinfo.json with two databases."""
    directory = tmp_path / "config"
    directory.mkdir()
    dbinfo = {
        "dbs": {
            "sampleDB": {
                "server": "localhost",
                "port": 1433,
                "database": "SampleDB",
                "user": "sa",
                "password": "secret",
                "options": {"encrypt": False, "trustServerCertificate": True},
            },
            "erpDB": {
                "server": "erp-sql01",
                "database": "ERP",
            },
        }
    }
    (directory / "dbinfo.json").write_text(json.dumps(dbinfo), encoding="utf-8")
    return directory


class FakeConnector:
    """Query runner returning canned results keyed by SQL text."""

    def __init__(self, config, results: dict[str, ResultSet]):
        self.config = config
        self.results = results
        self.queries: list[str] = []

    def execute_query(self, query: str) -> ResultSet:
        self.queries.append(query)
        if query not in self.results:
            raise RuntimeError(f"Unexpected query: {query}")
        return self.results[query]


@pytest.fixture
def fake_connectors():
    """Connector factory plus the connectors it created, keyed by db id."""
    created: dict[str, FakeConnector] = {}
    results: dict[str, ResultSet] = {}

    def factory(config):
        connector = FakeConnector(config, results)
        created[config.id] = connector
        return connector

    factory.created = created
    factory.results = results
    return factory
