"""
Tests for the config loader: dbinfo.json and query definition files.
"""

import json
from pathlib import Path

import pytest

from sql2excel.infrastructure.config_loader import ConfigLoader, DatabaseConfig


SAMPLE_JSON = {
    "excel": {
        "db": "sampleDB",
        "output": "output/sales_${year}.xlsx",
        "separateToc": "true",
        "header": {
            "font": {"name": "Arial", "size": 12, "bold": True},
            "fill": {"color": "4472C4"},
            "colwidths": {"min": 8, "max": 40},
        },
        "body": {"alignment": {"horizontal": "left", "wrapText": True}},
    },
    "vars": {"year": 2024, "region": "Seoul"},
    "sheets": [
        {"name": "Orders", "query": "SELECT * FROM Orders WHERE Year = ${year}"},
        {"name": "Skipped", "use": False, "query": "SELECT 1"},
        {"name": "ERP", "db": "erpDB", "use": "true", "query": "SELECT * FROM Items"},
    ],
}

SAMPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<queries>
  <excel db="sampleDB" output="output/report.xlsx" separateToc="false">
    <header>
      <font name="Malgun Gothic" size="11" color="FFFFFF" bold="true"/>
      <fill color="4472C4"/>
      <alignment horizontal="center" vertical="middle"/>
      <border>
        <all style="thin" color="000000"/>
      </border>
      <colwidths min="10" max="50"/>
    </header>
    <body>
      <font name="Malgun Gothic" size="10"/>
    </body>
  </excel>
  <vars>
    <var name="startDate">2024-01-01</var>
  </vars>
  <sheet name="Customers" use="true">
    <![CDATA[SELECT * FROM Customers WHERE Created >= '${startDate}' AND Id < 10]]>
  </sheet>
  <sheet name="Disabled" use="false">SELECT 1</sheet>
</queries>
"""


class TestLoadDatabases:
    """Test cases for dbinfo.json loading."""

    def test_load_databases(self, config_dir):
        databases = ConfigLoader(config_dir).load_databases()

        assert set(databases) == {"sampleDB", "erpDB"}
        sample = databases["sampleDB"]
        assert isinstance(sample, DatabaseConfig)
        assert sample.id == "sampleDB"
        assert sample.server_instance == "localhost,1433"
        assert sample.auth == "sql"
        assert sample.options.trust_server_certificate is True
        assert databases["erpDB"].auth == "integrated"
        assert databases["erpDB"].server_instance == "erp-sql01"

    def test_get_database_unknown_id(self, config_dir):
        with pytest.raises(ValueError, match="Configured ids are: erpDB, sampleDB"):
            ConfigLoader(config_dir).get_database("missing")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Hint:"):
            ConfigLoader(tmp_path).load_databases()

    def test_empty_file(self, tmp_path):
        (tmp_path / "dbinfo.json").write_text("   ", encoding="utf-8")
        with pytest.raises(ValueError, match="empty"):
            ConfigLoader(tmp_path).load_databases()

    def test_invalid_json(self, tmp_path):
        (tmp_path / "dbinfo.json").write_text("{'dbs': }", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            ConfigLoader(tmp_path).load_databases()

    def test_invalid_entry(self, tmp_path):
        (tmp_path / "dbinfo.json").write_text(
            json.dumps({"dbs": {"bad": {"database": "NoServer"}}}), encoding="utf-8"
        )
        with pytest.raises(ValueError, match="Invalid database entry 'bad'"):
            ConfigLoader(tmp_path).load_databases()


class TestLoadQueryDefinition:
    """Test cases for JSON and XML query definitions."""

    def test_json_definition(self, tmp_path):
        path = tmp_path / "sales.json"
        path.write_text(json.dumps(SAMPLE_JSON), encoding="utf-8")

        definition = ConfigLoader(tmp_path).load_query_definition(path)

        assert definition.db == "sampleDB"
        assert definition.separate_toc is True
        assert definition.variables == {"year": "2024", "region": "Seoul"}
        assert [s.name for s in definition.sheets] == ["Orders", "Skipped", "ERP"]
        assert [s.name for s in definition.enabled_sheets] == ["Orders", "ERP"]
        assert definition.sheets[2].db == "erpDB"
        assert definition.resolve_query(definition.sheets[0]).endswith("Year = 2024")
        assert definition.resolve_output() == "output/sales_2024.xlsx"

        header = definition.style.header
        assert header.font.name == "Arial"
        assert header.colwidths.min == 8
        assert header.colwidths.max == 40
        assert definition.style.body.alignment.wrap_text is True

    def test_xml_definition(self, tmp_path):
        path = tmp_path / "report.xml"
        path.write_text(SAMPLE_XML, encoding="utf-8")

        definition = ConfigLoader(tmp_path).load_query_definition(path)

        assert definition.db == "sampleDB"
        assert definition.separate_toc is False
        assert definition.variables == {"startDate": "2024-01-01"}
        assert [s.use for s in definition.sheets] == [True, False]

        query = definition.resolve_query(definition.sheets[0])
        assert query == "SELECT * FROM Customers WHERE Created >= '2024-01-01' AND Id < 10"

        header = definition.style.header
        assert header.font.bold == "true"
        assert header.border.all.style == "thin"
        assert header.colwidths.max == 50
        assert definition.style.body.font.size == "10"

    def test_sheet_without_query(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"sheets": [{"name": "NoQuery"}]}), encoding="utf-8")

        with pytest.raises(ValueError, match="needs both 'name' and 'query'"):
            ConfigLoader(tmp_path).load_query_definition(path)

    def test_malformed_xml(self, tmp_path):
        path = tmp_path / "bad.xml"
        path.write_text("<queries><sheet>", encoding="utf-8")

        with pytest.raises(ValueError, match="CDATA"):
            ConfigLoader(tmp_path).load_query_definition(path)

    def test_defaults(self, tmp_path):
        path = tmp_path / "minimal.json"
        path.write_text(
            json.dumps({"sheets": [{"name": "One", "query": "SELECT 1"}]}),
            encoding="utf-8",
        )

        definition = ConfigLoader(tmp_path).load_query_definition(path)

        assert definition.db is None
        assert definition.output == "output/report.xlsx"
        assert definition.separate_toc is False
        assert definition.style.header is None
        assert definition.sheets[0].use is True


def test_frozen_executable_anchors_config_dir(monkeypatch, tmp_path):
    import sys

    monkeypatch.setattr(sys, "frozen", True, raising=False)
    monkeypatch.setattr(sys, "executable", str(tmp_path / "sql2excel.exe"))

    loader = ConfigLoader("config")

    assert loader.config_dir == Path(tmp_path) / "config"
