"""
Type definitions for almanac.

Dataclasses defining the contracts between layers:
- Adapters produce these structures from Calendar API responses
- Extractors consume these structures and return content strings/dicts
- Tools wire everything together

These types make the adapter→extractor contract explicit and IDE-checkable.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ============================================================================
# ERROR TYPES
# ============================================================================

class ErrorKind(Enum):
    """Categories of errors for consistent handling."""
    AUTH_EXPIRED = "auth_expired"        # Token rejected or refresh failed
    AUTH_REQUIRED = "auth_required"      # No credential available at all
    NOT_FOUND = "not_found"              # Calendar doesn't exist
    PERMISSION_DENIED = "permission_denied"  # No access to calendar
    RATE_LIMITED = "rate_limited"        # Hit API quota
    NETWORK_ERROR = "network_error"      # Connection failed
    TIMEOUT = "timeout"                  # Request timed out
    INVALID_INPUT = "invalid_input"      # Bad parameters
    SOURCE_FAILED = "source_failed"      # One calendar couldn't be searched
    AGGREGATE_FAILED = "aggregate_failed"  # Merge/format blew up
    UNKNOWN = "unknown"                  # Unexpected error


class AlmanacError(Exception):
    """
    Structured error for consistent handling across layers.

    Adapters raise these on API failures.
    Tools catch and format for MCP response.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for MCP response."""
        return {
            "error": True,
            "kind": self.kind.value,
            "message": self.message,
            "retryable": self.retryable,
            **self.details,
        }


class AuthenticationRequired(AlmanacError):
    """No usable credential. Fatal before any calendar is contacted."""

    def __init__(self, message: str = "Authentication required. Please authenticate with Google Calendar."):
        super().__init__(ErrorKind.AUTH_REQUIRED, message)


class ValidationError(AlmanacError):
    """Bad request parameters. Fatal before any calendar is contacted."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(ErrorKind.INVALID_INPUT, message, details=details)


class SourceFetchError(AlmanacError):
    """
    A single calendar failed to list its events.

    Raised inside a fetch worker and converted to a failed SourceResult
    at the join. Never reaches the caller.
    """

    def __init__(
        self,
        source: "CalendarSource",
        message: str,
        cause_kind: ErrorKind = ErrorKind.UNKNOWN,
    ):
        super().__init__(
            ErrorKind.SOURCE_FAILED,
            message,
            details={"calendar_id": source.id, "cause": cause_kind.value},
        )
        self.source = source
        self.cause_kind = cause_kind


class AggregateFailure(AlmanacError):
    """Unexpected error while merging or formatting results."""

    def __init__(self, message: str):
        super().__init__(ErrorKind.AGGREGATE_FAILED, message)


# ============================================================================
# CALENDAR TYPES
# ============================================================================

@dataclass(frozen=True)
class CalendarSource:
    """A calendar that can be searched (one entry of the calendar list)."""
    id: str
    display_name: str
    access_role: str = "reader"  # owner, writer, reader, freeBusyReader


@dataclass(frozen=True)
class EventTime:
    """Start or end of an event: an instant (dateTime) or an all-day date."""
    date_time: str | None = None  # RFC3339 with offset
    date: str | None = None  # YYYY-MM-DD for all-day events
    time_zone: str | None = None

    @property
    def value(self) -> str | None:
        """The display value: dateTime if set, else date."""
        return self.date_time or self.date

    def to_dict(self) -> dict[str, str]:
        result: dict[str, str] = {}
        if self.date_time:
            result["dateTime"] = self.date_time
        if self.date:
            result["date"] = self.date
        if self.time_zone:
            result["timeZone"] = self.time_zone
        return result


@dataclass(frozen=True)
class CalendarAttendee:
    """An attendee of a calendar event."""
    email: str
    display_name: str | None = None
    response_status: str = "needsAction"  # needsAction, declined, tentative, accepted
    is_self: bool = False
    is_organizer: bool = False
    is_resource: bool = False  # Room/equipment booking
    optional: bool = False

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "email": self.email,
            "responseStatus": self.response_status,
        }
        if self.display_name:
            result["displayName"] = self.display_name
        if self.is_self:
            result["self"] = True
        if self.is_organizer:
            result["organizer"] = True
        if self.is_resource:
            result["resource"] = True
        if self.optional:
            result["optional"] = True
        return result


@dataclass(frozen=True)
class EventPerson:
    """Organizer or creator of an event."""
    email: str | None = None
    display_name: str | None = None
    is_self: bool = False

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.email:
            result["email"] = self.email
        if self.display_name:
            result["displayName"] = self.display_name
        if self.is_self:
            result["self"] = True
        return result


@dataclass(frozen=True)
class CalendarEvent:
    """
    A calendar event tagged with the calendar it came from.

    Built once per fetch by the adapter and never mutated afterwards.
    Optional fields are None when the API omitted them, so projections
    can tell "absent" from "empty".
    """
    event_id: str
    calendar_id: str
    calendar_name: str
    summary: str | None = None
    description: str | None = None
    start: EventTime | None = None
    end: EventTime | None = None
    location: str | None = None
    attendees: tuple[CalendarAttendee, ...] = ()
    organizer: EventPerson | None = None
    creator: EventPerson | None = None
    html_link: str | None = None
    hangout_link: str | None = None
    conference_data: dict[str, Any] | None = field(default=None, hash=False, compare=False)
    status: str | None = None  # confirmed, tentative, cancelled
    event_type: str | None = None  # default, birthday, focusTime, ...
    visibility: str | None = None
    color_id: str | None = None
    recurring_event_id: str | None = None
    recurrence: tuple[str, ...] = ()

    @property
    def self_attendee(self) -> CalendarAttendee | None:
        """The attendee entry flagged as the authenticated user, if any."""
        for attendee in self.attendees:
            if attendee.is_self:
                return attendee
        return None


@dataclass
class CalendarPage:
    """One page of events from a single calendar."""
    events: list[CalendarEvent]
    next_page_token: str | None = None


# ============================================================================
# SEARCH TYPES
# ============================================================================

# Selector value meaning "every calendar the user can read"
ALL_CALENDARS = "all"

# Field names a caller may request per item, keyed by Calendar API name.
# extractors.events maps each one to a getter.
EVENT_FIELD_NAMES: tuple[str, ...] = (
    "id",
    "summary",
    "description",
    "start",
    "end",
    "location",
    "attendees",
    "organizer",
    "creator",
    "htmlLink",
    "hangoutLink",
    "conferenceData",
    "status",
    "eventType",
    "visibility",
    "colorId",
    "recurringEventId",
    "recurrence",
    "calendarId",
    "calendarName",
)


@dataclass
class SearchRequest:
    """
    Validated search_events request.

    Built by validation.build_search_request(); construct directly only
    in tests.
    """
    calendar_id: str | list[str] = ALL_CALENDARS
    time_min: str | None = None
    time_max: str | None = None
    query: str | None = None
    max_results: int = 50
    event_types: list[str] | None = None
    order_by: str | None = None
    page_token: str | None = None
    fields: list[str] | None = None
    single_events: bool = True

    @property
    def has_query(self) -> bool:
        return bool(self.query)

    @property
    def sorts_by_start(self) -> bool:
        """Whether merged results are re-sorted by start time."""
        return self.single_events and self.order_by in (None, "startTime")


@dataclass
class SourceResult:
    """
    Outcome of searching one calendar: events or an error, never both.
    """
    source: CalendarSource
    events: list[CalendarEvent] = field(default_factory=list)
    next_page_token: str | None = None
    error: str | None = None
    error_kind: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def from_failure(cls, failure: SourceFetchError) -> "SourceResult":
        return cls(
            source=failure.source,
            error=failure.message,
            error_kind=failure.cause_kind.value,
        )


@dataclass
class AggregatedResult:
    """Merged, ordered and capped events across all searched calendars."""
    events: list[CalendarEvent]
    has_more: bool = False
    next_page_token: str | None = None  # Only ever set for a single calendar
    calendars_searched: list[str] = field(default_factory=list)
    calendars_failed: list[str] = field(default_factory=list)
    source_count: int = 0  # Calendars resolved, successful or not


# ============================================================================
# TOOL RESPONSE TYPES
# ============================================================================

@dataclass
class SearchEventsResult:
    """Successful search_events result: rendered text plus structured items."""
    text: str
    items: list[dict[str, Any]]
    calendars_searched: list[str]
    calendars_failed: list[str] = field(default_factory=list)
    has_more: bool = False
    next_page_token: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "text": self.text,
            "items": self.items,
            "calendars_searched": self.calendars_searched,
            "calendars_failed": self.calendars_failed,
            "has_more": self.has_more,
        }
        if self.next_page_token:
            result["next_page_token"] = self.next_page_token
        return result


@dataclass
class SearchEventsError:
    """search_events error result. Carries no partial payload."""
    error: bool = True
    kind: str = "unknown"
    message: str = ""

    @classmethod
    def from_exception(cls, exc: AlmanacError) -> "SearchEventsError":
        return cls(kind=exc.kind.value, message=exc.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "kind": self.kind, "message": self.message}
