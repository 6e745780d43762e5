"""
SQL2Excel CLI entry point.

Main entry point for the application CLI.
"""

import argparse
import logging
import sys
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table

from sql2excel.application.export_service import ExportError, ExportResult, ExportService
from sql2excel.infrastructure.config_loader import ConfigLoader
from sql2excel.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)

# Default paths
DEFAULT_CONFIG_DIR = Path("config")

LANGUAGES = ("en", "kr")

console = Console()


def parse_variable(text: str) -> tuple[str, str]:
    """Parse a ``name=value`` command-line variable."""
    name, sep, value = text.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(
            f"Invalid variable '{text}' (expected name=value)"
        )
    return name.strip(), value


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sql2excel",
        description="SQL2Excel - SQL Server query results to Excel reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global args
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=DEFAULT_CONFIG_DIR,
        help="Directory containing dbinfo.json",
    )
    parser.add_argument(
        "--lang", choices=LANGUAGES, default="en", help="Help language"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Command: EXPORT
    parser_export = subparsers.add_parser("export", help="Write an Excel report")
    parser_export.add_argument("definition", type=Path, help="Query definition file")
    parser_export.add_argument("--output", "-o", type=Path, help="Output workbook path")
    parser_export.add_argument(
        "--var",
        dest="variables",
        action="append",
        type=parse_variable,
        default=[],
        metavar="NAME=VALUE",
        help="Override a query variable (repeatable)",
    )
    parser_export.add_argument(
        "--separate-toc",
        action="store_true",
        default=None,
        help="Write the table of contents to its own workbook",
    )

    # Command: VALIDATE
    parser_validate = subparsers.add_parser(
        "validate", help="Check a query definition"
    )
    parser_validate.add_argument("definition", type=Path, help="Query definition file")
    parser_validate.add_argument(
        "--var",
        dest="variables",
        action="append",
        type=parse_variable,
        default=[],
        metavar="NAME=VALUE",
        help="Override a query variable (repeatable)",
    )

    # Command: LIST-DBS
    subparsers.add_parser("list-dbs", help="List configured databases")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for SQL2Excel CLI."""
    argv = sys.argv[1:] if argv is None else argv

    # Intercept --help / -h for rich formatted help
    if argv and argv[0] in ("-h", "--help") and len(argv) == 1:
        from sql2excel.interface.cli_help import print_main_help

        print_main_help()
        return 0

    # Command-specific help
    if len(argv) >= 2 and argv[1] in ("-h", "--help"):
        from sql2excel.interface import cli_help

        help_map = {
            "export": cli_help.print_export_help,
            "validate": cli_help.print_validate_help,
        }
        if argv[0] in help_map:
            help_map[argv[0]]()
            return 0

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        from sql2excel.interface.cli_help import print_main_help

        print_main_help(args.lang)
        return 0

    # Setup logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_logging(log_level, args.log_file)

    try:
        if args.command == "export":
            return run_export(args)
        elif args.command == "validate":
            return validate_definition(args)
        elif args.command == "list-dbs":
            return list_databases(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    except (FileNotFoundError, PermissionError, ValueError) as e:
        logger.error("%s", e)
        return 1
    except ExportError as e:
        logger.error("Export failed: %s", e)
        return 1


def run_export(args: argparse.Namespace) -> int:
    """
    Run a query definition and write the report.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 = success)
    """
    service = ExportService(config_dir=args.config_dir)
    result = service.export(
        args.definition,
        variables=dict(args.variables),
        output=args.output,
        separate_toc=args.separate_toc,
    )
    print_export_summary(result)
    return 0


def print_export_summary(result: ExportResult) -> None:
    """Print the per-sheet summary table."""
    table = Table(
        title="📊 Export Summary",
        show_header=True,
        header_style="bold magenta",
        box=box.ROUNDED,
    )
    table.add_column("No", justify="right", style="dim")
    table.add_column("Sheet", style="bright_cyan")
    table.add_column("Tab", style="white")
    table.add_column("Records", justify="right", style="green")

    for index, entry in enumerate(result.entries, start=1):
        table.add_row(
            str(index),
            entry.display_name,
            entry.tab_name,
            f"{entry.record_count or 0:,}",
        )

    console.print(table)
    console.print(
        f"[bold green]✅ {len(result.entries)} sheets, "
        f"{result.total_rows:,} rows[/bold green]"
    )
    for path in result.paths:
        console.print(f"   📁 {path}")


def validate_definition(args: argparse.Namespace) -> int:
    """
    Load a query definition and show what an export would run.

    Returns:
        Exit code (0 = valid)
    """
    logger.info("Validating query definition: %s", args.definition)

    service = ExportService(config_dir=args.config_dir)
    definition = service.load_definition(args.definition, dict(args.variables))

    table = Table(show_header=True, header_style="bold", box=box.SIMPLE)
    table.add_column("Sheet", style="bright_cyan")
    table.add_column("DB", style="white")
    table.add_column("Use", style="white")

    for sheet in definition.sheets:
        table.add_row(
            sheet.name,
            sheet.db or definition.db or "[red](none)[/red]",
            "✅" if sheet.use else "⏭️",
        )

    console.print(table)
    if definition.variables:
        console.print("[bold]Variables:[/bold]")
        for name, value in definition.variables.items():
            console.print(f"   {name} = {value}")
    console.print(f"[dim]Output:[/dim] {definition.resolve_output()}")
    console.print(
        f"[bold green]✅ Definition valid: "
        f"{len(definition.enabled_sheets)}/{len(definition.sheets)} sheets enabled[/bold green]"
    )
    return 0


def list_databases(args: argparse.Namespace) -> int:
    """Print the databases configured in dbinfo.json."""
    loader = ConfigLoader(args.config_dir)
    databases = loader.load_databases()

    table = Table(show_header=True, header_style="bold", box=box.SIMPLE)
    table.add_column("ID", style="bright_cyan")
    table.add_column("Server", style="white")
    table.add_column("Database", style="white")
    table.add_column("Auth", style="dim")

    for db_id, config in databases.items():
        table.add_row(db_id, config.server_instance, config.database, config.auth)

    console.print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
