"""
Release command - packages the Windows distribution bundle.

Usage:
    python scripts/create_release.py --version 1.0.0
"""

import logging
from pathlib import Path

import typer
from rich.console import Console

from sql2excel import __version__
from sql2excel.application.release_service import ReleaseBuilder, ReleaseError
from sql2excel.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)

console = Console()

app = typer.Typer(
    name="sql2excel-release",
    help="Build the SQL2Excel release directory and zip archive.",
    add_completion=False,
)


@app.command()
def create_release(
    version: str = typer.Option(__version__, "--version", help="Release version"),
    project_root: Path = typer.Option(
        Path("."), "--project-root", help="Repository root"
    ),
    skip_build: bool = typer.Option(
        False, "--skip-build", help="Reuse the executable already in dist/"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """
    Create release/sql2excel-v<version>-win-x64 and its zip archive.

    Builds the executable, copies configuration, documentation and samples,
    writes the .bat launchers and RELEASE_INFO.txt, then zips the folder.
    """
    setup_logging(logging.DEBUG if verbose else logging.INFO)

    builder = ReleaseBuilder(project_root=project_root, version=version)
    try:
        result = builder.run(skip_build=skip_build)
    except ReleaseError as e:
        logger.error("Release failed: %s", e)
        console.print(f"[red]❌ Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[bold green]✅ Release v{version} created[/bold green]")
    console.print(f"   📁 {result.release_dir} ({result.file_count} files)")
    if result.zip_path:
        console.print(f"   📦 {result.zip_path}")
    else:
        console.print("   [yellow]⚠️  ZIP archive was not created[/yellow]")
    if result.missing_files:
        console.print(
            f"   [yellow]⚠️  {len(result.missing_files)} files missing: "
            f"{', '.join(result.missing_files)}[/yellow]"
        )


if __name__ == "__main__":
    app()
