"""
Rich-formatted CLI help display.

Provides colorful help output for the SQL2Excel CLI.
"""

import sys
from pathlib import Path

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from sql2excel import __version__

console = Console()


def _get_exe_name() -> str:
    """Get executable name - handles PyInstaller frozen mode."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).name
    return "python main.py"


EXE_NAME = _get_exe_name()

# Main help texts per launcher language
TEXTS = {
    "en": {
        "tagline": " - SQL Server to Excel Reports",
        "commands": "📋 COMMANDS",
        "export": "Run a query definition and write the report",
        "validate": "Check a query definition without querying",
        "list-dbs": "Show databases from dbinfo.json",
        "quick_start": "QUICK START:",
        "examples": [
            ("Export a report:", "export queries/sample.json"),
            ("Override a variable:", "export queries/sample.json --var year=2024"),
            ("Index in its own file:", "export queries/sample.xml --separate-toc"),
            ("Check a definition:", "validate queries/sample.json"),
        ],
        "more": "for command-specific options.",
    },
    "kr": {
        "tagline": " - SQL Server 조회 결과를 엑셀로",
        "commands": "📋 명령어",
        "export": "쿼리 정의를 실행하고 보고서를 생성",
        "validate": "DB 조회 없이 쿼리 정의를 검사",
        "list-dbs": "dbinfo.json 의 DB 목록 표시",
        "quick_start": "빠른 시작:",
        "examples": [
            ("보고서 생성:", "export queries/sample.json"),
            ("변수 덮어쓰기:", "export queries/sample.json --var year=2024"),
            ("목차를 별도 파일로:", "export queries/sample.xml --separate-toc"),
            ("정의 파일 검사:", "validate queries/sample.json"),
        ],
        "more": "로 명령별 옵션을 확인하세요.",
    },
}


def print_main_help(lang: str = "en") -> None:
    """Print the main CLI help with rich formatting."""
    texts = TEXTS.get(lang, TEXTS["en"])

    banner = Text()
    banner.append("╔══════════════════════════════════════════════════╗\n", style="bold cyan")
    banner.append("║  ", style="bold cyan")
    banner.append(f"📊 SQL2Excel v{__version__}", style="bold white")
    banner.append(texts["tagline"], style="bold cyan")
    banner.append("\n╚══════════════════════════════════════════════════╝", style="bold cyan")
    console.print(banner)
    console.print()

    console.print("[bold yellow]USAGE:[/bold yellow]")
    console.print(
        f"  {EXE_NAME} [dim][-v] [--config-dir DIR][/dim] "
        f"[bright_cyan]<command>[/bright_cyan] [dim][options][/dim]\n"
    )

    commands = Table(
        show_header=True,
        header_style="bold magenta",
        box=box.SIMPLE,
        padding=(0, 2),
    )
    commands.add_column("Command", style="bright_cyan", width=10)
    commands.add_column("Description", style="white")
    commands.add_column("Key Options", style="dim")

    commands.add_row("export", texts["export"], "--output, --var, --separate-toc")
    commands.add_row("validate", texts["validate"], "--var")
    commands.add_row("list-dbs", texts["list-dbs"], "-")

    console.print(
        Panel(
            commands,
            title=f"[bold green]{texts['commands']}[/bold green]",
            border_style="green",
        )
    )

    console.print(f"\n[bold yellow]{texts['quick_start']}[/bold yellow]")
    for label, cmd in texts["examples"]:
        console.print(f"  [dim]{label}[/dim]")
        console.print(f"    [bright_green]{EXE_NAME} {cmd}[/bright_green]")

    console.print(
        f"\n[bright_cyan]{EXE_NAME} <command> --help[/bright_cyan] [dim]{texts['more']}[/dim]\n"
    )


def print_export_help() -> None:
    """Print help for the export command."""
    console.print("\n[bold cyan]📤 EXPORT COMMAND[/bold cyan]")
    console.print("[dim]Run every enabled sheet query and write the workbook.[/dim]\n")

    table = Table(show_header=True, header_style="bold", box=box.ROUNDED)
    table.add_column("Option", style="bright_cyan", width=22)
    table.add_column("Description", style="white")
    table.add_column("Default", style="dim", width=20)

    table.add_row("<definition>", "Query definition (.json or .xml)", "-")
    table.add_row("--output <path>", "Output workbook path", "excel.output")
    table.add_row("--var <name=value>", "Override a ${name} variable (repeatable)", "-")
    table.add_row("--separate-toc", "Write the index to <name>_목차.xlsx", "excel.separateToc")

    console.print(table)

    console.print("\n[bold yellow]EXAMPLES:[/bold yellow]")
    console.print(f"  [green]{EXE_NAME} export queries/sales.json[/green]")
    console.print(
        f"  [green]{EXE_NAME} export queries/sales.json --var startDate=2024-01-01 "
        f"--output output/sales.xlsx[/green]"
    )
    console.print()


def print_validate_help() -> None:
    """Print help for the validate command."""
    console.print("\n[bold cyan]✅ VALIDATE COMMAND[/bold cyan]")
    console.print(
        "[dim]Load a query definition and list its sheets and variables.[/dim]\n"
    )

    table = Table(show_header=True, header_style="bold", box=box.ROUNDED)
    table.add_column("Option", style="bright_cyan", width=22)
    table.add_column("Description", style="white")

    table.add_row("<definition>", "Query definition (.json or .xml)")
    table.add_row("--var <name=value>", "Override a ${name} variable (repeatable)")

    console.print(table)
    console.print(f"\n  [green]{EXE_NAME} validate queries/sales.xml[/green]\n")
