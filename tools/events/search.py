"""
search_events tool implementation.

Searches one, several, or all of the user's calendars in parallel,
substring-filters locally, and returns a merged, capped list as both
agent-facing text and projected items.
"""

from adapters.calendar import list_calendars
from adapters.services import get_credentials
from extractors.events import extract_events_content, project_event
from logging_config import logger
from models import (
    ALL_CALENDARS,
    AggregateFailure,
    AlmanacError,
    SearchEventsError,
    SearchEventsResult,
)
from policy import FetchPolicy, get_fetch_policy
from tools.events.aggregate import aggregate
from tools.events.fetcher import fetch_all_sources
from tools.events.planner import plan_fetch_size
from tools.events.sources import check_single_source_pagination, resolve_sources
from validation import build_search_request


def do_search_events(
    calendar_id: str | list[str] | None = ALL_CALENDARS,
    time_min: str | None = None,
    time_max: str | None = None,
    query: str | None = None,
    max_results: int | None = None,
    event_types: list[str] | None = None,
    order_by: str | None = None,
    page_token: str | None = None,
    fields: list[str] | None = None,
    single_events: bool = True,
    access_token: str | None = None,
    policy: FetchPolicy | None = None,
) -> SearchEventsResult | SearchEventsError:
    """
    Search events across calendars.

    Args:
        calendar_id: "all" (default), a calendar ID, or a list of IDs.
        time_min: Start of range, RFC3339 with offset.
        time_max: End of range, RFC3339 with offset.
        query: Case-insensitive substring matched against title,
            description, location, attendee emails and names.
        max_results: Max events returned in total (1-250, default 50).
        event_types: Restrict to these event types.
        order_by: 'startTime' or 'updated'.
        page_token: Continuation token; single calendar only.
        fields: Fields to include per item (default: DEFAULT_FIELDS).
        single_events: Expand recurring events into instances.
        access_token: Bearer token; falls back to env/token file.
        policy: Over-fetch policy; defaults to config/search_policy.json.

    Returns:
        SearchEventsResult, or SearchEventsError for auth/validation
        failures and unexpected errors. Individual calendar failures are
        reported inside a successful result.
    """
    policy = policy or get_fetch_policy()

    # Everything here can fail the whole request, and must do so before
    # any events are fetched
    try:
        request = build_search_request(
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
        )
        credentials = get_credentials(access_token)
        sources = resolve_sources(
            request.calendar_id,
            lambda: list_calendars(credentials),
            readable_roles=policy.readable_access_roles,
        )
        check_single_source_pagination(sources, request.page_token)
    except AlmanacError as e:
        logger.info(f"search_events rejected ({e.kind.value}): {e.message}")
        return SearchEventsError.from_exception(e)

    fetch_size = plan_fetch_size(
        request.max_results,
        request.has_query,
        source_count=len(sources),
        policy=policy,
    )

    try:
        results = fetch_all_sources(sources, request, fetch_size, credentials)
        aggregated = aggregate(results, request)
        items = [project_event(event, request.fields) for event in aggregated.events]
        text = extract_events_content(aggregated, attendee_limit=policy.attendee_preview_limit)
    except Exception as e:
        logger.exception("search_events failed while merging results")
        return SearchEventsError.from_exception(AggregateFailure(f"Failed to search events: {e}"))

    logger.info(
        f"search_events: {len(sources)} calendar(s), fetch_size={fetch_size}, "
        f"{len(aggregated.events)} event(s) returned, "
        f"{len(aggregated.calendars_failed)} failed"
    )

    return SearchEventsResult(
        text=text,
        items=items,
        calendars_searched=aggregated.calendars_searched,
        calendars_failed=aggregated.calendars_failed,
        has_more=aggregated.has_more,
        next_page_token=aggregated.next_page_token,
    )
