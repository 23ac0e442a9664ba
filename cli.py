#!/usr/bin/env python3
"""
CLI interface for almanac.

Usage:
    almanac search-events --query barber
    almanac search-events --calendar primary --time-min 2026-01-01T00:00:00Z

This provides the same functionality as the MCP tool but via command line,
making it accessible to agents that don't support MCP.
"""

import argparse
import json
import sys

from logging_config import configure_logging
from models import SearchEventsError
from tools import do_search_events
from validation import EVENT_TYPES, ORDER_BY_VALUES


def cmd_search_events(args: argparse.Namespace) -> int:
    """Search events across calendars."""
    calendars = args.calendar or ["all"]
    # A single --calendar is a single-calendar search (page tokens allowed)
    calendar_id: str | list[str] = calendars[0] if len(calendars) == 1 else calendars

    result = do_search_events(
        calendar_id=calendar_id,
        time_min=args.time_min,
        time_max=args.time_max,
        query=args.query,
        max_results=args.max_results,
        event_types=args.event_type,
        order_by=args.order_by,
        page_token=args.page_token,
        fields=args.field,
        single_events=not args.no_expand,
    )

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    elif isinstance(result, SearchEventsError):
        print(f"Error ({result.kind}): {result.message}", file=sys.stderr)
    else:
        print(result.text)

    return 1 if isinstance(result, SearchEventsError) else 0


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Google Calendar event search CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    almanac search-events --query barber
    almanac search-events --calendar primary --calendar team@group.calendar.google.com
    almanac search-events --calendar primary --max-results 10 --json
    almanac search-events --time-min 2026-02-01T00:00:00Z --time-max 2026-03-01T00:00:00Z
""",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    subparsers = parser.add_subparsers(dest="command", required=True)

    search_p = subparsers.add_parser("search-events", help="Search events across calendars")
    search_p.add_argument(
        "--calendar",
        action="append",
        help="Calendar ID to search (repeatable; default: all calendars)",
    )
    search_p.add_argument("--query", help="Substring to match in title, description, location, attendees")
    search_p.add_argument("--time-min", help="Start of range (RFC3339 with timezone)")
    search_p.add_argument("--time-max", help="End of range (RFC3339 with timezone)")
    search_p.add_argument(
        "--max-results",
        type=int,
        default=None,
        help="Maximum events in total (1-250, default: 50)",
    )
    search_p.add_argument(
        "--event-type",
        action="append",
        choices=sorted(EVENT_TYPES),
        help="Restrict to event type (repeatable)",
    )
    search_p.add_argument("--order-by", choices=sorted(ORDER_BY_VALUES))
    search_p.add_argument("--page-token", help="Continuation token (single calendar only)")
    search_p.add_argument("--field", action="append", help="Field to include in JSON items (repeatable)")
    search_p.add_argument(
        "--no-expand",
        action="store_true",
        help="Return recurring events as one series instead of instances",
    )
    search_p.add_argument("--json", action="store_true", help="Print the full structured result")
    search_p.set_defaults(func=cmd_search_events)

    args = parser.parse_args()
    configure_logging(args.log_level)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
