"""
Tests for the release packager (the build command is mocked).
"""

import logging
import subprocess
import zipfile

import pytest

from sql2excel.application import release_service
from sql2excel.application.release_service import ReleaseBuilder, ReleaseError


@pytest.fixture
def project(tmp_path):
    """Project tree with an executable, dbinfo, one README and samples."""
    root = tmp_path / "project"
    (root / "dist").mkdir(parents=True)
    (root / "dist" / "sql2excel-v1.2.3.exe").write_bytes(b"MZ")
    (root / "config").mkdir()
    (root / "config" / "dbinfo.json").write_text('{"dbs": {}}', encoding="utf-8")
    (root / "README.md").write_text("# SQL2Excel", encoding="utf-8")
    (root / "queries").mkdir()
    (root / "queries" / "sample.xml").write_text("<queries/>", encoding="utf-8")
    return root


@pytest.fixture
def build_ok(monkeypatch):
    calls = []

    def fake_run(cmd, cwd=None, check=False):
        calls.append((cmd, cwd))
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr(release_service.subprocess, "run", fake_run)
    return calls


class TestReleaseBuilder:
    """Test cases for ReleaseBuilder."""

    def test_release_layout(self, project, build_ok):
        result = ReleaseBuilder(project_root=project, version="1.2.3").run()

        release_dir = project / "release" / "sql2excel-v1.2.3-win-x64"
        assert result.release_dir == release_dir
        for sub in ("config", "queries", "templates", "user_manual"):
            assert (release_dir / sub).is_dir()

        assert (release_dir / "sql2excel-v1.2.3.exe").read_bytes() == b"MZ"
        assert (release_dir / "config" / "dbinfo.json").exists()
        assert (release_dir / "README.md").exists()
        assert (release_dir / "queries" / "sample.xml").exists()
        assert len(build_ok) == 1
        assert build_ok[0][1] == project

    def test_launchers(self, project, build_ok):
        ReleaseBuilder(project_root=project, version="1.2.3").run()
        release_dir = project / "release" / "sql2excel-v1.2.3-win-x64"

        english = (release_dir / "run.bat").read_bytes()
        korean = (release_dir / "실행하기.bat").read_bytes()

        assert b"sql2excel-v1.2.3.exe --lang=en" in english
        assert b"sql2excel-v1.2.3.exe --lang=kr" in korean
        assert b"\r\n" in english
        assert english.startswith(b"@echo off")

    def test_release_info(self, project, build_ok):
        ReleaseBuilder(project_root=project, version="1.2.3").run()
        info = (
            project / "release" / "sql2excel-v1.2.3-win-x64" / "RELEASE_INFO.txt"
        ).read_text(encoding="utf-8")

        assert "SQL2Excel v1.2.3 Release Package" in info
        assert "- run.bat (Launcher script - English)" in info
        assert "Run run.bat or 실행하기.bat" in info

    def test_missing_files_warn_and_continue(self, project, build_ok, caplog):
        with caplog.at_level(logging.WARNING, logger=release_service.__name__):
            result = ReleaseBuilder(project_root=project, version="1.2.3").run()

        assert "LICENSE" in result.missing_files
        assert "README_KR.md" in result.missing_files
        assert len(result.missing_files) == 6
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 6
        assert result.zip_path is not None

    def test_zip_contains_release_folder(self, project, build_ok):
        result = ReleaseBuilder(project_root=project, version="1.2.3").run()

        assert result.zip_path == project / "release" / "sql2excel-v1.2.3-win-x64.zip"
        with zipfile.ZipFile(result.zip_path) as archive:
            names = archive.namelist()
        assert "sql2excel-v1.2.3-win-x64/run.bat" in names
        assert result.file_count == len([n for n in names if not n.endswith("/")])

    def test_previous_release_removed(self, project, build_ok):
        stale = project / "release" / "old.txt"
        stale.parent.mkdir()
        stale.write_text("stale", encoding="utf-8")

        ReleaseBuilder(project_root=project, version="1.2.3").run()

        assert not stale.exists()

    def test_build_failure_is_fatal(self, project, monkeypatch):
        monkeypatch.setattr(
            release_service.subprocess,
            "run",
            lambda cmd, cwd=None, check=False: subprocess.CompletedProcess(cmd, 2),
        )

        with pytest.raises(ReleaseError, match="exit code 2"):
            ReleaseBuilder(project_root=project, version="1.2.3").run()

        assert not (project / "release" / "sql2excel-v1.2.3-win-x64.zip").exists()

    def test_build_command_not_found(self, project):
        builder = ReleaseBuilder(
            project_root=project,
            version="1.2.3",
            build_command=["definitely-not-a-real-build-tool-xyz"],
        )

        with pytest.raises(ReleaseError, match="could not be started"):
            builder.run()

    def test_skip_build(self, project, monkeypatch):
        def fail_run(*args, **kwargs):
            raise AssertionError("build should be skipped")

        monkeypatch.setattr(release_service.subprocess, "run", fail_run)

        result = ReleaseBuilder(project_root=project, version="1.2.3").run(skip_build=True)

        assert (result.release_dir / "sql2excel-v1.2.3.exe").exists()

    def test_zip_failure_keeps_directory(self, project, build_ok, monkeypatch, caplog):
        def broken_archive(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(release_service.shutil, "make_archive", broken_archive)

        with caplog.at_level(logging.ERROR, logger=release_service.__name__):
            result = ReleaseBuilder(project_root=project, version="1.2.3").run()

        assert result.zip_path is None
        assert result.release_dir.is_dir()
        assert "ZIP creation failed" in caplog.text
