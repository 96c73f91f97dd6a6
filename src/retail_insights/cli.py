"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from retail_insights import __version__
from retail_insights.config import get_settings
from retail_insights.exceptions import RetailInsightsError
from retail_insights.flows.analyze import analyze_all
from retail_insights.service import analysis_config


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="retail-insights",
        description="Correlate daily retail sales with weekday, weather and local events",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'analyze' command - run the correlation flow
    analyze_parser = subparsers.add_parser("analyze", help="Run a correlation analysis")
    analyze_parser.add_argument("--start", required=True, help="First date (YYYY-MM-DD)")
    analyze_parser.add_argument("--end", required=True, help="Last date, inclusive (YYYY-MM-DD)")
    analyze_parser.add_argument("--store", default=None, help="Restrict to one store id")
    analyze_parser.add_argument("--department", default=None, help="Restrict to a department")
    analyze_parser.add_argument("--category", default=None, help="Restrict to a product category")
    analyze_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON",
    )

    # 'info' command
    subparsers.add_parser("info", help="Show application info")

    # 'config' command - supported factors and limits
    subparsers.add_parser("config", help="Show analysis factors, SLA and limits")

    return parser


def cmd_analyze(args: argparse.Namespace) -> int:
    """Handle the 'analyze' command."""
    try:
        outcome = analyze_all(
            start_date=args.start,
            end_date=args.end,
            store_id=args.store,
            department=args.department,
            category=args.category,
        )
    except (RetailInsightsError, TimeoutError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(outcome["result"], indent=2, ensure_ascii=False))
        return 0

    summary = outcome["result"]["summary"]
    print(f"Analyzed days: {summary['totalAnalyzedDays']}")
    print(f"Average daily sales: {summary['averageDailySales']:,.0f}")
    for label, key in (
        ("Strongest positive", "strongestPositive"),
        ("Strongest negative", "strongestNegative"),
    ):
        factor = summary[key]
        if factor:
            print(f"{label}: {factor['factor']} ({factor['correlation']:+.3f})")
    sla = "within SLA" if outcome["within_sla"] else "SLA exceeded"
    print(f"Processing time: {outcome['processing_ms']:.0f}ms ({sla})")
    print(f"Saved: {outcome['output']}")
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Data source: {settings.data_source}")
    print(f"Data directory: {settings.data_dir}")
    print(f"Debug: {settings.debug}")
    return 0


def cmd_config(_args: argparse.Namespace) -> int:
    """Handle the 'config' command."""
    print(json.dumps(analysis_config(get_settings()), indent=2))
    return 0


def configure_logging(debug: bool) -> None:
    settings = get_settings()
    level = logging.DEBUG if debug or settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.debug)

    commands = {
        "analyze": cmd_analyze,
        "info": cmd_info,
        "config": cmd_config,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
