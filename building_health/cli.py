#!/usr/bin/env python3
"""
Command line interface for the NYC building lookup.

Usage:
    python main.py serve [--host HOST] [--port PORT]
    python main.py lookup <bbl> [-o report.json]
    python main.py datasets

Examples:
    python main.py serve --port 8000
    python main.py lookup 1000010001
    python main.py lookup "1-00001-0001" -o data/report.json --csv
"""

import argparse
import asyncio
from dataclasses import replace
from pathlib import Path

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from building_health.aggregator import BuildingAggregator
from building_health.config import AggregatorSettings, list_datasets
from building_health.errors import BuildingHealthError
from building_health.server import run_server
from building_health.storage import ReportExporter
from building_health.utils.logging import get_logger, setup_logging

# Rich console for summaries
console = Console()

logger = get_logger()

SEVERITY_STYLES = {"critical": "bold red", "warning": "yellow", "info": "cyan"}
STATUS_STYLES = {"ok": "green", "empty": "dim", "skipped": "dim", "error": "red"}


def print_report(report: dict) -> None:
    """Print a building report summary."""
    building = report.get("building") or {}
    score = report["score"]

    console.rule(f"[bold cyan]{building.get('address', 'Unknown address')}, {building.get('borough', '')}")
    console.print(
        f"Score [bold]{score['overall']}[/bold]  Grade [bold]{score['grade']}[/bold]  ({score['label']})"
    )

    categories = Table(title="Category Scores")
    categories.add_column("Category")
    categories.add_column("Score", justify="right")
    categories.add_column("Detail")
    for category in report["categoryScores"]:
        categories.add_row(category["name"], str(category["score"]), category["detail"])
    console.print(categories)

    if report["redFlags"]:
        console.rule("[bold red]Red Flags")
        for flag in report["redFlags"]:
            style = SEVERITY_STYLES.get(flag["severity"], "")
            console.print(f"[{style}]{flag['severity'].upper():8}[/{style}] {flag['title']}: {flag['description']}")

    sources = Table(title="Data Sources")
    sources.add_column("Dataset")
    sources.add_column("Status")
    sources.add_column("Rows", justify="right")
    sources.add_column("Error")
    for source in report["sources"].values():
        style = STATUS_STYLES.get(source["status"], "")
        sources.add_row(
            source["dataset"],
            f"[{style}]{source['status']}[/{style}]",
            str(source["count"]),
            source["error"],
        )
    console.print(sources)


def print_error(error: BuildingHealthError) -> None:
    console.print(f"[red]Error ({error.error_code}):[/red] {error}")


def print_datasets() -> None:
    table = Table(title="NYC Open Data Sources")
    table.add_column("Key")
    table.add_column("Dataset ID")
    table.add_column("Name")
    table.add_column("Agency")
    table.add_column("Core", justify="center")
    for entry in list_datasets():
        table.add_row(entry["key"], entry["dataset_id"], entry["name"], entry["agency"], "yes" if entry["core"] else "")
    console.print(table)


async def run_lookup(settings: AggregatorSettings, raw_bbl: str) -> dict:
    """Run one aggregation with a spinner."""
    aggregator = BuildingAggregator(settings)
    with Progress(SpinnerColumn(), TextColumn("[bold blue]{task.description}"), console=console, transient=True) as progress:
        progress.add_task(f"Looking up {raw_bbl}...", total=None)
        return await aggregator.build_report(raw_bbl)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Look up NYC buildings across NYC Open Data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py serve --port 8000
  python main.py lookup 1000010001
  python main.py datasets
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging (debug level)")
    parser.add_argument("--log-dir", type=Path, help="Also write logs to building_health.log in this directory")
    commands = parser.add_subparsers(dest="command")

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", help="Bind address (default: BHX_HOST or 0.0.0.0)")
    serve.add_argument("--port", type=int, help="Port (default: BHX_PORT or 8000)")

    lookup = commands.add_parser("lookup", help="Look up one building and print a summary")
    lookup.add_argument("bbl", help="Borough-block-lot, e.g. 1000010001")
    lookup.add_argument("-o", "--output", type=Path, help="Write the full report to this JSON file")
    lookup.add_argument("--csv", action="store_true", help="Also write source status CSV next to the report")

    commands.add_parser("datasets", help="List the NYC Open Data sources")

    args = parser.parse_args(argv)
    setup_logging(args.log_dir, verbose=args.verbose)

    if args.command == "datasets":
        print_datasets()
        return 0

    if args.command not in ("serve", "lookup"):
        parser.print_help()
        return 0

    try:
        settings = AggregatorSettings.from_env()
    except BuildingHealthError as e:
        print_error(e)
        return 1

    if args.command == "serve":
        overrides = {k: v for k, v in (("host", args.host), ("port", args.port)) if v}
        run_server(replace(settings, **overrides))
        return 0

    try:
        report = asyncio.run(run_lookup(settings, args.bbl))
    except BuildingHealthError as e:
        print_error(e)
        return 1

    print_report(report)

    if args.output:
        exporter = ReportExporter(args.output.parent)
        exporter.export_report(report, args.output)
        if args.csv:
            exporter.export_sources_csv(report, args.output.with_name(args.output.stem + "_sources.csv"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
