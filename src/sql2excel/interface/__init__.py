"""
Interface layer package.

Command-line entry points:
- cli.py         - argparse main (export, validate, list-dbs)
- cli_help.py    - rich-formatted help screens
- release_cli.py - typer release packaging command
"""
