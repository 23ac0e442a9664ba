"""
Parallel per-calendar event listing.

One events.list call per calendar, all in flight at once. A calendar that
fails (auth, not found, network, timeout) becomes a failed SourceResult;
the others are unaffected.
"""

from concurrent.futures import Future, ThreadPoolExecutor

from google.oauth2.credentials import Credentials

from adapters.calendar import list_events
from logging_config import logger
from models import (
    AlmanacError,
    CalendarSource,
    SearchRequest,
    SourceFetchError,
    SourceResult,
)
from tools.events.planner import resolve_order_by


def _fetch_source(
    source: CalendarSource,
    request: SearchRequest,
    fetch_size: int,
    credentials: Credentials,
) -> SourceResult:
    """
    List one calendar. Runs on a worker thread.

    Raises:
        SourceFetchError: On any failure, tagged with the calendar
    """
    try:
        page = list_events(
            source,
            credentials=credentials,
            max_results=fetch_size,
            time_min=request.time_min,
            time_max=request.time_max,
            single_events=request.single_events,
            order_by=resolve_order_by(request.order_by, request.single_events),
            event_types=request.event_types,
            page_token=request.page_token,
        )
    except AlmanacError as e:
        raise SourceFetchError(source, e.message, cause_kind=e.kind) from e
    except Exception as e:
        raise SourceFetchError(source, str(e) or type(e).__name__) from e

    return SourceResult(
        source=source,
        events=page.events,
        next_page_token=page.next_page_token,
    )


def fetch_all_sources(
    sources: list[CalendarSource],
    request: SearchRequest,
    fetch_size: int,
    credentials: Credentials,
) -> list[SourceResult]:
    """
    List every calendar concurrently and wait for all of them.

    Returns:
        One SourceResult per calendar, in the same order as sources.
        Failed calendars carry an error and no events.
    """
    if not sources:
        return []

    futures: list[tuple[CalendarSource, Future[SourceResult]]] = []
    with ThreadPoolExecutor(max_workers=len(sources)) as executor:
        for source in sources:
            futures.append((source, executor.submit(_fetch_source, source, request, fetch_size, credentials)))

    # Collect results (errors are independent: one failing doesn't block the others)
    results: list[SourceResult] = []
    for source, future in futures:
        try:
            results.append(future.result())
        except SourceFetchError as e:
            logger.warning(f"Failed to search calendar {source.id}: {e.message}")
            results.append(SourceResult.from_failure(e))
    return results
