"""Command-line entry point — analyze a roster CSV and print the findings."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from orgaudit import hierarchy
from orgaudit.config import load_analysis_config
from orgaudit.errors import OrgAuditError
from orgaudit.hierarchy.report import export_frame, render
from orgaudit.utils.io import write_output
from orgaudit.utils.types import OutputFormat

DEFAULT_CSV_PATH = "employees.csv"

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _print_validation(path: str, result: dict) -> int:
    table = Table(title=f"Roster validation: {escape(path)}")
    table.add_column("Check")
    table.add_column("Valid")
    table.add_column("Details")

    match result:
        case {"status": "ok", "rows": rows}:
            table.add_row("roster", "[green]✓[/green]", f"{rows} employees")
            console.print(table)
            return 0
        case {"status": "error", "message": msg, "errors": []}:
            table.add_row("roster", "[red]✗[/red]", escape(msg))
        case {"status": "error", "message": msg, "errors": errors}:
            for error in errors:
                table.add_row(escape(msg), "[red]✗[/red]", escape(error))
        case _:
            table.add_row("roster", "[red]✗[/red]", "Unknown validation result")

    console.print(table)
    return 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Check manager salaries and reporting line depth in an employee roster"
    )
    parser.add_argument("csv_path", nargs="?", default=DEFAULT_CSV_PATH, help="Roster CSV file")
    parser.add_argument("--config", type=Path, help="Policy settings (.toml or .yaml)")
    parser.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.TEXT.value,
        help="Output format",
    )
    parser.add_argument("--output", type=Path, help="Also export findings to a .csv or .json file")
    parser.add_argument("--validate", action="store_true", help="Only validate the roster")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress")
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    if args.validate:
        return _print_validation(args.csv_path, hierarchy.validate(args.csv_path))

    if args.format == OutputFormat.TEXT:
        console.print(f"Reading employee data from: {escape(args.csv_path)}")

    try:
        config = load_analysis_config(args.config)
        report = hierarchy.run(args.csv_path, config)
    except FileNotFoundError as exc:
        err_console.print(f"[red]Error reading CSV file: {escape(str(exc))}[/red]")
        err_console.print(f"Please ensure the file exists and is accessible at: {escape(args.csv_path)}")
        return 1
    except OrgAuditError as exc:
        err_console.print(f"[red]Data validation error: {escape(str(exc))}[/red]")
        err_console.print("Please check the CSV file for incorrect format or invalid data.")
        return 1

    if args.format == OutputFormat.TEXT:
        console.print(f"Successfully loaded {len(report.model)} employees.\n")
    print(render(report, args.format))

    if args.output:
        try:
            write_output(export_frame(report), args.output)
        except ValueError as exc:
            err_console.print(f"[red]{escape(str(exc))}[/red]")
            return 1
        except OSError as exc:
            err_console.print(f"[red]Could not write findings: {escape(str(exc))}[/red]")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
