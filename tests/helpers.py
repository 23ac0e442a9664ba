"""
Shared test helpers for almanac.

Centralizes mock wiring patterns and model builders that repeat across
test files.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any
from unittest.mock import MagicMock, seal

from models import (
    CalendarAttendee,
    CalendarEvent,
    CalendarPage,
    CalendarSource,
    EventTime,
)


def mock_api_chain(
    mock_service: MagicMock,
    chain: str,
    response: Any = None,
    *,
    side_effect: Any = None,
) -> MagicMock:
    """Set up a mock Google API response for a chained call.

    Navigates the MagicMock attribute chain and sets return_value (or side_effect)
    on the final method. Returns the final mock method for adding assertions.

    Args:
        mock_service: The mocked service object (from @patch)
        chain: Dot-separated chain. Each part except the last is treated as
               a callable method (traversed via .return_value).
               Examples: "events.list.execute", "calendarList.list.execute"
        response: The return value for the final method
        side_effect: Alternative to response; sets side_effect instead

    Examples:
        mock_api_chain(service, "events.list.execute", {"items": []})
        # equivalent to: service.events().list().execute.return_value = {"items": []}
    """
    parts = chain.split(".")
    obj = mock_service
    for part in parts[:-1]:
        obj = getattr(obj, part).return_value
    final = getattr(obj, parts[-1])
    if side_effect is not None:
        final.side_effect = side_effect
    elif response is not None:
        final.return_value = response
    return final


def seal_service(mock_service: MagicMock) -> None:
    """Seal a mock service after all mock_api_chain() calls.

    Prevents MagicMock from silently creating new attributes when
    production code renames an API method.
    """
    seal(mock_service)


def make_source(
    calendar_id: str = "primary",
    display_name: str | None = None,
    access_role: str = "owner",
) -> CalendarSource:
    return CalendarSource(
        id=calendar_id,
        display_name=display_name or calendar_id,
        access_role=access_role,
    )


def make_event(
    event_id: str = "evt1",
    *,
    summary: str | None = "Test Event",
    start: str | None = "2026-02-23T10:00:00Z",
    end: str | None = "2026-02-23T11:00:00Z",
    calendar_id: str = "primary",
    calendar_name: str = "Primary",
    all_day: bool = False,
    **kwargs: Any,
) -> CalendarEvent:
    """Build a CalendarEvent; start/end strings become dateTime (or date if all_day)."""

    def _time(value: str | None) -> EventTime | None:
        if value is None:
            return None
        return EventTime(date=value) if all_day else EventTime(date_time=value)

    return CalendarEvent(
        event_id=event_id,
        calendar_id=calendar_id,
        calendar_name=calendar_name,
        summary=summary,
        start=_time(start),
        end=_time(end),
        **kwargs,
    )


def attendee(email: str, **kwargs: Any) -> CalendarAttendee:
    return CalendarAttendee(email=email, **kwargs)


@dataclass
class FakeCalendarBackend:
    """In-memory stand-in for adapters.calendar.list_events.

    Each calendar holds an ordered list of events. A call returns the first
    max_results of them (after page_token offset), plus a token when more
    remain, mimicking events.list paging. Calendars in `failures` raise.

    Usage:
        backend = FakeCalendarBackend({"a": [...], "b": [...]})
        with patch("tools.events.fetcher.list_events", side_effect=backend.list_events):
            ...
        backend.calls  # kwargs of every call, in completion order
    """

    events: dict[str, list[CalendarEvent]] = field(default_factory=dict)
    failures: dict[str, Exception] = field(default_factory=dict)
    tokens: dict[str, str] = field(default_factory=dict)
    calls: list[dict[str, Any]] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def list_events(self, source: CalendarSource, **kwargs: Any) -> CalendarPage:
        with self._lock:
            self.calls.append({"calendar_id": source.id, **kwargs})
        if source.id in self.failures:
            raise self.failures[source.id]

        all_events = self.events.get(source.id, [])
        offset = int(kwargs.get("page_token") or 0)
        max_results = kwargs["max_results"]
        page = all_events[offset:offset + max_results]
        if source.id in self.tokens:
            token = self.tokens[source.id]
        elif offset + max_results < len(all_events):
            token = str(offset + max_results)
        else:
            token = None
        return CalendarPage(events=page, next_page_token=token)

    def calls_for(self, calendar_id: str) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["calendar_id"] == calendar_id]
