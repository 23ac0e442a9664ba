"""
Client-side text filtering for calendar events.

The Calendar API's `q` parameter only matches whole words, so "barber"
never finds "Barbershop appointment". We fetch unfiltered pages instead
and keep events where the query appears as a case-insensitive substring
of any searchable field.
"""

from collections.abc import Iterable, Iterator

from models import CalendarEvent


def searchable_text(event: CalendarEvent) -> Iterator[str]:
    """
    Yield the text fields a query is matched against.

    Title, description, location, then every attendee's email and
    display name. Missing fields are skipped.
    """
    for value in (event.summary, event.description, event.location):
        if value:
            yield value
    for attendee in event.attendees:
        if attendee.email:
            yield attendee.email
        if attendee.display_name:
            yield attendee.display_name


def matches_query(event: CalendarEvent, query: str) -> bool:
    """
    Check whether the query is a substring of any searchable field.

    Case-folded on both sides. No tokenizing, no scoring: in or out.
    """
    needle = query.casefold()
    return any(needle in text.casefold() for text in searchable_text(event))


def filter_events(events: Iterable[CalendarEvent], query: str | None) -> list[CalendarEvent]:
    """
    Keep events matching the query, preserving order.

    An empty or missing query keeps everything.
    """
    if not query:
        return list(events)
    return [event for event in events if matches_query(event, query)]
