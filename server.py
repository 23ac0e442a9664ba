#!/usr/bin/env python3
"""
Google Calendar Search MCP Server

Read-only, token-efficient event search across all of a user's calendars.

Tools:
- search_events: Federated search with local substring matching

Documentation is provided via MCP Resources, not a tool.

Architecture:
- extractors/: Pure functions (no MCP, no API calls)
- adapters/: Thin Google API wrappers
- tools/: Tool implementations (business logic)
- server.py: Thin MCP wrappers (this file)
"""

import os
import signal
from typing import Any

from mcp.server.fastmcp import FastMCP

from logging_config import configure_logging
from tools import do_search_events

# Initialize MCP server
mcp = FastMCP("Google Calendar Search")


# ============================================================================
# TOOLS (thin wrappers)
# ============================================================================

@mcp.tool()
def search_events(
    calendar_id: str | list[str] = "all",
    time_min: str | None = None,
    time_max: str | None = None,
    query: str | None = None,
    max_results: int = 50,
    event_types: list[str] | None = None,
    order_by: str | None = None,
    page_token: str | None = None,
    fields: list[str] | None = None,
    single_events: bool = True,
) -> dict[str, Any]:
    """
    Search and filter events across all calendars.

    Args:
        calendar_id: Calendar ID(s) to search. "all" (default) searches every
            calendar you can read, or pass a single ID or a list of IDs.
        time_min: Start of time range (RFC3339 with timezone, e.g.
            2025-12-06T19:00:00Z or 2025-12-06T19:00:00+01:00)
        time_max: End of time range (RFC3339 with timezone)
        query: Text search (substring match on title, description, location,
            attendee emails and names; "barber" finds "Barbershop")
        max_results: Max events to return, total across all calendars (1-250)
        event_types: Filter by event type: default, birthday, focusTime,
            outOfOffice, workingLocation
        order_by: 'startTime' or 'updated'
        page_token: Token for pagination (only works with a single calendar)
        fields: Fields to include per item. Default: id, summary, start, end,
            location, htmlLink, status, attendees, calendarId, calendarName
        single_events: Expand recurring events into instances (default True)

    Returns:
        text: Human-readable summary of matching events
        items: Matching events reduced to the requested fields
        calendars_searched: Names of calendars searched successfully
        calendars_failed: Names of calendars that could not be searched
        has_more: More matching events exist beyond max_results
        next_page_token: Present only for single-calendar searches without a query
    """
    return do_search_events(
        calendar_id=calendar_id,
        time_min=time_min,
        time_max=time_max,
        query=query,
        max_results=max_results,
        event_types=event_types,
        order_by=order_by,
        page_token=page_token,
        fields=fields,
        single_events=single_events,
    ).to_dict()


# ============================================================================
# RESOURCES
# ============================================================================

@mcp.resource("almanac://docs/search_events")
def docs_search_events() -> str:
    """Detailed documentation for the search_events tool."""
    return """# search_events

Search events across one, several, or all of your Google calendars.

## How matching works

Google's own `q` parameter only matches whole words ("barber" misses
"Barbershop"). search_events never sends it. Instead it fetches extra events
from each calendar and keeps those whose title, description, location, or
attendee email/name contains your query (case-insensitive).

Because filtering happens after fetching, a very selective query over a very
busy calendar can still miss matches. Narrow `time_min`/`time_max` if you
expect more.

## Pagination

| Calendars | Query | Result |
|-----------|-------|--------|
| one | none | `next_page_token` when Google has more |
| one | set | no token; `has_more` when results were cut |
| several | any | no token; `has_more` when results were cut |

When `has_more` is true without a token, increase `max_results` or narrow the
time range.

## Failures

A calendar that can't be searched (no access, deleted, network) is listed in
`calendars_failed`; results from the others are still returned.

## Response Shape

```json
{
  "text": "Found 2 event(s): ...",
  "items": [{"id": "...", "summary": "...", "calendarId": "...", "calendarName": "..."}],
  "calendars_searched": ["Primary", "Team"],
  "calendars_failed": [],
  "has_more": false
}
```

Use each item's `calendarId` when calling update_event or delete_event.
"""


# ============================================================================
# SERVER ENTRY POINT
# ============================================================================

def _shutdown_handler(signum: int, frame: object) -> None:
    """Handle termination signals by exiting immediately.

    os._exit() is required because sys.exit() raises SystemExit,
    which asyncio's event loop catches and ignores.
    """
    os._exit(0)


def main() -> None:
    configure_logging()
    signal.signal(signal.SIGTERM, _shutdown_handler)
    signal.signal(signal.SIGINT, _shutdown_handler)
    mcp.run()


if __name__ == "__main__":
    main()
