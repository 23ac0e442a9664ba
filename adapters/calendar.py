"""
Calendar adapter: Google Calendar API v3 wrapper.

Two capabilities consumed by search_events:
- list_calendars: every calendar on the user's calendar list
- list_events: one bounded page of events from one calendar

Events are tagged with the calendar they came from so results from
several calendars can be merged downstream.
"""

from typing import Any

from google.oauth2.credentials import Credentials

from adapters.services import build_calendar_service
from logging_config import log_api_call, log_api_result
from models import (
    CalendarAttendee,
    CalendarEvent,
    CalendarPage,
    CalendarSource,
    EventPerson,
    EventTime,
)
from retry import with_retry

# calendarList.list page size (API maximum)
CALENDAR_LIST_PAGE_SIZE = 250

# events.list hard maximum per request
EVENTS_PAGE_MAX = 250


def _parse_attendee(data: dict[str, Any]) -> CalendarAttendee:
    """Parse an attendee from Calendar API response."""
    return CalendarAttendee(
        email=data.get("email", ""),
        display_name=data.get("displayName"),
        response_status=data.get("responseStatus", "needsAction"),
        is_self=data.get("self", False),
        is_organizer=data.get("organizer", False),
        is_resource=data.get("resource", False),
        optional=data.get("optional", False),
    )


def _parse_person(data: dict[str, Any] | None) -> EventPerson | None:
    """Parse an organizer/creator block. None if absent."""
    if not data:
        return None
    return EventPerson(
        email=data.get("email"),
        display_name=data.get("displayName"),
        is_self=data.get("self", False),
    )


def _parse_time(data: dict[str, Any] | None) -> EventTime | None:
    """Parse start/end. Either dateTime (timed) or date (all-day)."""
    if not data:
        return None
    return EventTime(
        date_time=data.get("dateTime"),
        date=data.get("date"),
        time_zone=data.get("timeZone"),
    )


def _parse_event(data: dict[str, Any], source: CalendarSource) -> CalendarEvent:
    """Parse a calendar event from Calendar API response."""
    return CalendarEvent(
        event_id=data.get("id", ""),
        calendar_id=source.id,
        calendar_name=source.display_name,
        summary=data.get("summary"),
        description=data.get("description"),
        start=_parse_time(data.get("start")),
        end=_parse_time(data.get("end")),
        location=data.get("location"),
        attendees=tuple(_parse_attendee(a) for a in data.get("attendees", [])),
        organizer=_parse_person(data.get("organizer")),
        creator=_parse_person(data.get("creator")),
        html_link=data.get("htmlLink"),
        hangout_link=data.get("hangoutLink"),
        conference_data=data.get("conferenceData"),
        status=data.get("status"),
        event_type=data.get("eventType"),
        visibility=data.get("visibility"),
        color_id=data.get("colorId"),
        recurring_event_id=data.get("recurringEventId"),
        recurrence=tuple(data.get("recurrence", [])),
    )


def _parse_calendar(data: dict[str, Any]) -> CalendarSource:
    """Parse a calendarList entry. User's rename (summaryOverride) wins."""
    calendar_id = data.get("id", "")
    return CalendarSource(
        id=calendar_id,
        display_name=data.get("summaryOverride") or data.get("summary") or calendar_id,
        access_role=data.get("accessRole", "reader"),
    )


@with_retry(max_attempts=3, delay_ms=1000)
def list_calendars(credentials: Credentials) -> list[CalendarSource]:
    """
    List every calendar on the user's calendar list, in list order.

    Follows nextPageToken until exhausted. No access-role filtering here.
    """
    service = build_calendar_service(credentials)
    calendars: list[CalendarSource] = []
    page_token: str | None = None

    while True:
        kwargs: dict[str, Any] = {"maxResults": CALENDAR_LIST_PAGE_SIZE}
        if page_token:
            kwargs["pageToken"] = page_token
        log_api_call("calendar", "calendarList.list", pageToken=page_token)
        response = service.calendarList().list(**kwargs).execute()

        calendars.extend(_parse_calendar(item) for item in response.get("items", []))
        page_token = response.get("nextPageToken")
        if not page_token:
            break

    log_api_result("calendar", "calendarList.list", len(calendars))
    return calendars


# Single attempt: a failed calendar stays failed for this request.
# The decorator only normalizes errors into AlmanacError.
@with_retry(max_attempts=1)
def list_events(
    source: CalendarSource,
    *,
    credentials: Credentials,
    max_results: int,
    time_min: str | None = None,
    time_max: str | None = None,
    single_events: bool = True,
    order_by: str | None = None,
    event_types: list[str] | None = None,
    page_token: str | None = None,
) -> CalendarPage:
    """
    List one page of events from a single calendar.

    Never sends the API's `q` parameter: it only matches whole words,
    so text filtering happens client-side instead.

    Args:
        source: Calendar to list; its id and name are stamped on each event.
        credentials: Credentials used to build a dedicated service.
        max_results: Page size (capped at 250).
        time_min: Lower bound (exclusive) for event end time, RFC3339.
        time_max: Upper bound (exclusive) for event start time, RFC3339.
        single_events: Expand recurring events into instances.
        order_by: 'startTime' (requires single_events) or 'updated'.
        event_types: Restrict to these event types.
        page_token: Continuation token from a previous page.

    Returns:
        CalendarPage with parsed events and the API's nextPageToken.
    """
    service = build_calendar_service(credentials)

    kwargs: dict[str, Any] = {
        "calendarId": source.id,
        "maxResults": min(max_results, EVENTS_PAGE_MAX),
        "singleEvents": single_events,
    }
    if time_min:
        kwargs["timeMin"] = time_min
    if time_max:
        kwargs["timeMax"] = time_max
    if order_by:
        kwargs["orderBy"] = order_by
    if event_types:
        kwargs["eventTypes"] = event_types
    if page_token:
        kwargs["pageToken"] = page_token

    log_api_call("calendar", "events.list", **kwargs)
    response = service.events().list(**kwargs).execute()

    events = [_parse_event(item, source) for item in response.get("items", [])]
    log_api_result("calendar", "events.list", len(events))

    return CalendarPage(
        events=events,
        next_page_token=response.get("nextPageToken"),
    )
