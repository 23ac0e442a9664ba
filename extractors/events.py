"""
Events Extractor: Pure functions for presenting search results.

Receives CalendarEvent / AggregatedResult dataclasses and returns:
- a projection of each event onto caller-selected API field names
- a compact text rendering for the calling agent

No API calls, no MCP awareness.
"""

from typing import Any, Callable

from models import AggregatedResult, CalendarEvent


# One getter per name in models.EVENT_FIELD_NAMES, in the same order.
# A getter returning None means "absent on this event" and is left out.
EVENT_FIELDS: dict[str, Callable[[CalendarEvent], Any]] = {
    "id": lambda e: e.event_id or None,
    "summary": lambda e: e.summary,
    "description": lambda e: e.description,
    "start": lambda e: e.start.to_dict() if e.start else None,
    "end": lambda e: e.end.to_dict() if e.end else None,
    "location": lambda e: e.location,
    "attendees": lambda e: [a.to_dict() for a in e.attendees] if e.attendees else None,
    "organizer": lambda e: e.organizer.to_dict() if e.organizer else None,
    "creator": lambda e: e.creator.to_dict() if e.creator else None,
    "htmlLink": lambda e: e.html_link,
    "hangoutLink": lambda e: e.hangout_link,
    "conferenceData": lambda e: e.conference_data,
    "status": lambda e: e.status,
    "eventType": lambda e: e.event_type,
    "visibility": lambda e: e.visibility,
    "colorId": lambda e: e.color_id,
    "recurringEventId": lambda e: e.recurring_event_id,
    "recurrence": lambda e: list(e.recurrence) if e.recurrence else None,
    "calendarId": lambda e: e.calendar_id,
    "calendarName": lambda e: e.calendar_name,
}

DEFAULT_FIELDS: tuple[str, ...] = (
    "id",
    "summary",
    "start",
    "end",
    "location",
    "htmlLink",
    "status",
    "attendees",
    "calendarId",
    "calendarName",
)

# Self attendee responseStatus → what the agent sees
_RESPONSE_LABELS = {
    "accepted": "you: accepted",
    "declined": "you: declined",
    "tentative": "you: maybe",
    "needsAction": "you: not responded",
}

UPDATE_NOTE = "Note: Use the calendarId from results when calling 'update_event' or 'delete_event'."


def project_event(event: CalendarEvent, fields: list[str] | tuple[str, ...] | None = None) -> dict[str, Any]:
    """
    Reduce an event to the requested fields, in the requested order.

    Fields the event doesn't carry are omitted rather than nulled.
    Names outside EVENT_FIELDS are skipped (validation rejects them earlier).
    """
    projected: dict[str, Any] = {}
    for name in fields or DEFAULT_FIELDS:
        getter = EVENT_FIELDS.get(name)
        if getter is None:
            continue
        value = getter(event)
        if value is not None:
            projected[name] = value
    return projected


def _conference_link(event: CalendarEvent) -> str | None:
    """Video link from conferenceData, falling back to legacy hangoutLink."""
    conference = event.conference_data or {}
    for entry_point in conference.get("entryPoints", []):
        if entry_point.get("entryPointType") == "video" and entry_point.get("uri"):
            return entry_point["uri"]
    return event.hangout_link


def _status_label(event: CalendarEvent) -> str:
    """The user's own response, else a cancellation marker, else nothing."""
    attendee = event.self_attendee
    if attendee is not None and attendee.response_status:
        label = _RESPONSE_LABELS.get(attendee.response_status, attendee.response_status)
        return f" [{label}]"
    if event.status == "cancelled":
        return " [cancelled]"
    return ""


def format_event_lines(
    event: CalendarEvent,
    show_calendar: bool = False,
    attendee_limit: int = 5,
) -> list[str]:
    """
    Render one event as a bullet plus indented detail lines.

    Format:
        - [Title](link) @ 2026-02-23T10:00:00Z (Calendar) [you: accepted]
          location: Room 4
          attendees: a@example.com, b@example.com +2 more
          meet: https://meet.google.com/abc-defg-hij
    """
    title = event.summary or "(no title)"
    start = (event.start.value if event.start else None) or "no date"
    calendar = f" ({event.calendar_name})" if show_calendar and event.calendar_name else ""
    heading = f"[{title}]({event.html_link})" if event.html_link else title

    lines = [f"- {heading} @ {start}{calendar}{_status_label(event)}"]

    if event.location:
        lines.append(f"  location: {event.location}")
    if event.attendees:
        shown = ", ".join(a.email for a in event.attendees[:attendee_limit])
        overflow = len(event.attendees) - attendee_limit
        more = f" +{overflow} more" if overflow > 0 else ""
        lines.append(f"  attendees: {shown}{more}")
    link = _conference_link(event)
    if link:
        lines.append(f"  meet: {link}")

    return lines


def extract_events_content(result: AggregatedResult, attendee_limit: int = 5) -> str:
    """
    Convert aggregated search results to agent-facing text.

    The header names the calendars searched when there were several, and
    always names calendars that failed. Calendar names are shown per event
    only for multi-calendar searches.
    """
    lines: list[str] = []
    multi = result.source_count > 1

    if multi and result.calendars_searched:
        lines.append(
            f"Searched {len(result.calendars_searched)} calendar(s): "
            f"{', '.join(result.calendars_searched)}"
        )
    if result.calendars_failed:
        lines.append(f"(Failed to search: {', '.join(result.calendars_failed)})")
    if lines:
        lines.append("")

    if not result.events:
        lines.append("No events found matching the criteria.")
    else:
        more = " (more available)" if result.has_more else ""
        lines.append(f"Found {len(result.events)} event(s){more}:")
        lines.append("")
        for event in result.events:
            lines.extend(format_event_lines(event, show_calendar=multi, attendee_limit=attendee_limit))

    if result.events and result.next_page_token:
        lines.append("")
        lines.append(
            f'More results available. Pass page_token: "{result.next_page_token}" to fetch next page.'
        )
    elif result.events and result.has_more:
        lines.append("")
        lines.append("More results available. Increase max_results or narrow your time range.")

    lines.append("")
    lines.append(UPDATE_NOTE)
    return "\n".join(lines)
