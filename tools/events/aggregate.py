"""
Merge, filter, sort and cap per-calendar results into one list.
"""

from datetime import datetime, timezone

from filters import filter_events
from models import AggregatedResult, CalendarEvent, SearchRequest, SourceResult


def event_start_timestamp(event: CalendarEvent) -> float:
    """
    Sort key: start as POSIX seconds.

    All-day dates count as UTC midnight. Events with no start (or one we
    can't parse) get 0 so they sort first.
    """
    value = event.start.value if event.start else None
    if not value:
        return 0.0
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def continuation_token_for(
    results: list[SourceResult],
    events: list[CalendarEvent],
    has_query: bool,
) -> str | None:
    """
    Decide whether to surface a page token.

    | calendars | events shown | text query | token surfaced |
    |-----------|--------------|------------|----------------|
    | 1         | yes          | no         | source token   |
    | 1         | yes          | yes        | none           |
    | 1         | none         | any        | none           |
    | >1        | any          | any        | none           |

    With a query, the next upstream page may hold no matches at all, so a
    token would promise results that aren't there. Across several
    calendars there is no single cursor to hand back.
    """
    if len(results) != 1 or not events or has_query:
        return None
    return results[0].next_page_token


def aggregate(results: list[SourceResult], request: SearchRequest) -> AggregatedResult:
    """
    Combine per-calendar results.

    1. Flatten in calendar order (each calendar keeps its own order)
    2. Substring-filter when there's a query
    3. Stable sort by start when recurring events are expanded and the
       order is startTime (explicit or default); 'updated' order is left
       as each calendar returned it
    4. Cap at max_results, remembering whether anything was cut
    """
    merged = [event for result in results for event in result.events]

    if request.has_query:
        merged = filter_events(merged, request.query)

    if request.sorts_by_start:
        merged.sort(key=event_start_timestamp)

    has_more = len(merged) > request.max_results
    events = merged[:request.max_results]

    return AggregatedResult(
        events=events,
        has_more=has_more,
        next_page_token=continuation_token_for(results, events, request.has_query),
        calendars_searched=[r.source.display_name for r in results if not r.failed],
        calendars_failed=[r.source.display_name for r in results if r.failed],
        source_count=len(results),
    )
