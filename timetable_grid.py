#!/usr/bin/env python3
"""Weekly timetable grid layout tool.

Pipeline that reads a schedule (JSON document or HTML timetable), places
its events on the weekly grid with overlapping events side by side, and
writes the layout as JSON or the schedule as an iCalendar (.ics) file.
"""

import argparse
import logging
import sys
from datetime import date, datetime
from typing import Any, Optional

from scraper import Schedule, TableScraper, load_schedule
from timetable import layout, read_config_file
from transformer import BaseTransformer, ICalTransformer, JsonTransformer

logger = logging.getLogger(__name__)


def parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format."""
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: '{date_str}'. Expected YYYY-MM-DD."
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Lay out a weekly schedule on a timetable grid.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  timetable-grid schedule.json
  timetable-grid schedule.json --start-hour 7 --end-hour 22 -o layout.json
  timetable-grid timetable.html --html --format ics --start-date 2026-02-23 --end-date 2026-06-30
        """
    )

    parser.add_argument("input", help="Schedule file (JSON document, or HTML with --html)")
    parser.add_argument(
        "--html",
        action="store_true",
        help="Read the input as an HTML timetable table"
    )
    parser.add_argument("--config", help="JSON file with grid configs (snake_case or camelCase keys)")
    parser.add_argument("--start-hour", type=int, help="First hour shown on the grid")
    parser.add_argument("--end-hour", type=int, help="Last hour shown on the grid")
    parser.add_argument("--cell-width", type=float, help="Width of a day column in pixels")
    parser.add_argument("--cell-height", type=float, help="Height of an hour row in pixels")
    parser.add_argument("--days", type=int, dest="num_of_days", help="Number of day columns")
    parser.add_argument(
        "-f", "--format",
        choices=("json", "ics"),
        default="json",
        help="Output format (default: json)"
    )
    parser.add_argument(
        "--start-date",
        type=parse_date,
        help="First day of the calendar period for ics output (format: YYYY-MM-DD)"
    )
    parser.add_argument(
        "--end-date",
        type=parse_date,
        help="Last day of the calendar period for ics output (format: YYYY-MM-DD)"
    )
    parser.add_argument("--timezone", default="UTC", help="Timezone of event times for ics output")
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output file path (default: print JSON to stdout, schedule.ics for ics)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


def collect_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Merge the config file with config flags given on the command line."""
    overrides: dict[str, Any] = read_config_file(args.config) if args.config else {}
    flags = {
        "start_hour": args.start_hour,
        "end_hour": args.end_hour,
        "cell_width": args.cell_width,
        "cell_height": args.cell_height,
        "num_of_days": args.num_of_days,
    }
    overrides.update({key: value for key, value in flags.items() if value is not None})
    return overrides


def read_schedule(args: argparse.Namespace) -> Schedule:
    overrides = collect_overrides(args)
    if args.html:
        return TableScraper.from_file(args.input).parse_schedule(overrides)
    return load_schedule(args.input, overrides)


def make_transformer(args: argparse.Namespace) -> BaseTransformer:
    if args.format == "ics":
        if not args.start_date or not args.end_date:
            raise ValueError("--start-date and --end-date are required for ics output")
        return ICalTransformer(args.start_date, args.end_date, args.timezone)
    return JsonTransformer()


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the layout pipeline."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    output_path = args.output
    if args.format == "ics" and output_path is None:
        output_path = "schedule.ics"
    if args.format == "ics" and not output_path.lower().endswith(".ics"):
        output_path = f"{output_path}.ics"

    try:
        transformer = make_transformer(args)
        schedule = read_schedule(args)
        logger.info("Read %d events from %s", len(schedule.events), args.input)

        if not schedule.events:
            print("Warning: No events found. The output will be empty.", file=sys.stderr)

        laid_out = layout(schedule.events, schedule.configs)
        transformer.transform(laid_out, schedule.configs)

        if output_path is None and isinstance(transformer, JsonTransformer):
            print(transformer.dumps())
        else:
            transformer.save(output_path)
            print(f"Layout saved to: {output_path}", file=sys.stderr)

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return 130
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
