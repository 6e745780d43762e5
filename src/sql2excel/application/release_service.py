"""
Release packaging service.

Builds the distributable Windows bundle:

    release/
      sql2excel-v<version>-win-x64/
        sql2excel-v<version>.exe
        run.bat, 실행하기.bat
        RELEASE_INFO.txt, README.md, README_KR.md, LICENSE
        config/dbinfo.json
        queries/     (sample query definitions)
        templates/   (style templates)
        user_manual/ (manuals, changelogs)
      sql2excel-v<version>-win-x64.zip

A failed build is fatal. Missing documentation files are reported and
skipped. A failed zip keeps the release directory.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from sql2excel import __version__

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates" / "release"


class ReleaseError(RuntimeError):
    """A release step that must not be skipped failed."""


@dataclass(frozen=True)
class Launcher:
    """A .bat file starting the executable in one language."""
    filename: str
    lang: str
    label: str


LAUNCHERS = (
    Launcher("run.bat", "en", "English"),
    Launcher("실행하기.bat", "kr", "Korean"),
)

RELEASE_SUBDIRS = ("config", "queries", "templates", "user_manual")


@dataclass
class ReleaseResult:
    """Outcome of a release run."""
    release_dir: Path
    zip_path: Path | None
    file_count: int
    missing_files: list[str] = field(default_factory=list)


class ReleaseBuilder:
    """
    Assembles the release directory and archive.

    Usage:
        builder = ReleaseBuilder(project_root=Path("."))
        result = builder.run()
    """

    def __init__(
        self,
        project_root: Path | str = ".",
        version: str = __version__,
        platform_tag: str = "win-x64",
        build_command: list[str] | None = None,
    ) -> None:
        """
        Args:
            project_root: Repository root (holds dist/, config/, docs)
            version: Version embedded in file names
            platform_tag: Suffix for the release directory and zip
            build_command: Command producing dist/<exe>; defaults to a
                           one-file PyInstaller build of src/main.py
        """
        self.project_root = Path(project_root)
        self.version = version
        self.platform_tag = platform_tag
        self.build_command = build_command or [
            sys.executable,
            "-m",
            "PyInstaller",
            "--onefile",
            "--name",
            f"sql2excel-v{version}",
            "--distpath",
            "dist",
            "src/main.py",
        ]

        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(default=False),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    # ------------------------------------------------------------------
    # Names and paths
    # ------------------------------------------------------------------

    @property
    def exe_name(self) -> str:
        return f"sql2excel-v{self.version}.exe"

    @property
    def release_root(self) -> Path:
        return self.project_root / "release"

    @property
    def release_dir(self) -> Path:
        return self.release_root / f"sql2excel-v{self.version}-{self.platform_tag}"

    @property
    def zip_path(self) -> Path:
        return self.release_root / f"{self.release_dir.name}.zip"

    def files_to_copy(self) -> list[tuple[str, str]]:
        """(source relative to project root, destination relative to release dir)."""
        return [
            (f"dist/{self.exe_name}", self.exe_name),
            ("config/dbinfo.json", "config/dbinfo.json"),
            ("README.md", "README.md"),
            ("README_KR.md", "README_KR.md"),
            ("USER_MANUAL.md", "user_manual/USER_MANUAL.md"),
            ("USER_MANUAL_KR.md", "user_manual/USER_MANUAL_KR.md"),
            ("CHANGELOG.md", "user_manual/CHANGELOG.md"),
            ("CHANGELOG_KR.md", "user_manual/CHANGELOG_KR.md"),
            ("LICENSE", "LICENSE"),
        ]

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def prepare_directories(self) -> None:
        """Remove any previous release and create the directory skeleton."""
        if self.release_root.exists():
            logger.info("Cleaning existing release directory: %s", self.release_root)
            shutil.rmtree(self.release_root)

        for sub in RELEASE_SUBDIRS:
            (self.release_dir / sub).mkdir(parents=True, exist_ok=True)
        logger.info("Release directory: %s", self.release_dir)

    def build(self) -> None:
        """
        Run the build command in the project root.

        Raises:
            ReleaseError: If the command cannot be started or exits non-zero
        """
        logger.info("Building executable: %s", " ".join(self.build_command))
        try:
            completed = subprocess.run(
                self.build_command, cwd=self.project_root, check=False
            )
        except OSError as e:
            raise ReleaseError(f"Build command could not be started: {e}") from e

        if completed.returncode != 0:
            raise ReleaseError(f"Build failed with exit code {completed.returncode}")

    def copy_files(self) -> list[str]:
        """
        Copy the fixed file list.

        Returns:
            Source paths that were missing (each one logged as a warning)
        """
        missing = []
        for src, dest in self.files_to_copy():
            src_path = self.project_root / src
            dest_path = self.release_dir / dest
            if not src_path.is_file():
                logger.warning("File not found, skipped: %s", src)
                missing.append(src)
                continue
            dest_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src_path, dest_path)
            logger.info("Copied %s", dest_path.name)
        return missing

    def write_launchers(self) -> None:
        """Render one .bat launcher per language."""
        template = self.env.get_template("run.bat.j2")
        for launcher in LAUNCHERS:
            content = template.render(exe_name=self.exe_name, lang=launcher.lang)
            path = self.release_dir / launcher.filename
            path.write_text(content, encoding="utf-8", newline="\r\n")
            logger.info("Created %s (%s)", launcher.filename, launcher.label)

    def copy_directory(self, name: str) -> None:
        """Copy a project directory tree into the release (skipped if absent)."""
        src = self.project_root / name
        if not src.is_dir():
            logger.debug("Directory not found, skipped: %s", src)
            return
        shutil.copytree(src, self.release_dir / name, dirs_exist_ok=True)
        logger.info("Copied directory %s/", name)

    def write_release_info(self, build_date: datetime | None = None) -> Path:
        """Render RELEASE_INFO.txt."""
        template = self.env.get_template("RELEASE_INFO.txt.j2")
        content = template.render(
            version=self.version,
            exe_name=self.exe_name,
            launchers=LAUNCHERS,
            build_date=(build_date or datetime.now()).strftime("%Y-%m-%d %H:%M:%S"),
        )
        path = self.release_dir / "RELEASE_INFO.txt"
        path.write_text(content, encoding="utf-8")
        return path

    def count_files(self) -> int:
        return sum(1 for p in self.release_dir.rglob("*") if p.is_file())

    def create_zip(self) -> Path | None:
        """
        Archive the release directory (top folder included).

        Returns:
            The zip path, or None when archiving failed
        """
        try:
            archive = shutil.make_archive(
                str(self.zip_path.with_suffix("")),
                "zip",
                root_dir=self.release_root,
                base_dir=self.release_dir.name,
            )
        except OSError as e:
            logger.error("ZIP creation failed: %s", e)
            return None
        logger.info("ZIP created: %s", archive)
        return Path(archive)

    # ------------------------------------------------------------------
    # Orchestration
    # ------------------------------------------------------------------

    def run(self, skip_build: bool = False) -> ReleaseResult:
        """
        Run all release steps.

        Args:
            skip_build: Reuse an existing dist/ executable

        Raises:
            ReleaseError: If the build step fails
        """
        logger.info("Creating SQL2Excel release v%s", self.version)
        self.prepare_directories()

        if not skip_build:
            self.build()

        missing = self.copy_files()
        self.write_launchers()
        for name in ("queries", "templates"):
            self.copy_directory(name)
        self.write_release_info()

        file_count = self.count_files()
        logger.info("%d files in release directory", file_count)

        zip_path = self.create_zip()
        return ReleaseResult(
            release_dir=self.release_dir,
            zip_path=zip_path,
            file_count=file_count,
            missing_files=missing,
        )
