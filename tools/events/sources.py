"""
Calendar selection: which calendars a search_events request covers.
"""

from collections.abc import Callable, Collection

from models import ALL_CALENDARS, CalendarSource, ValidationError

PRIMARY_CALENDAR_ID = "primary"
PRIMARY_DISPLAY_NAME = "Primary"

DEFAULT_READABLE_ROLES = frozenset({"owner", "writer", "reader"})


def describe_calendar(calendar_id: str) -> CalendarSource:
    """
    Descriptor for an explicitly named calendar.

    We don't look the calendar up, so the ID doubles as its display name
    (except the user's primary calendar, which gets a readable label).
    """
    display_name = PRIMARY_DISPLAY_NAME if calendar_id == PRIMARY_CALENDAR_ID else calendar_id
    return CalendarSource(id=calendar_id, display_name=display_name, access_role="reader")


def resolve_sources(
    calendar_id: str | list[str],
    list_calendars: Callable[[], list[CalendarSource]],
    readable_roles: Collection[str] = DEFAULT_READABLE_ROLES,
) -> list[CalendarSource]:
    """
    Turn a calendar selector into the ordered calendars to search.

    Args:
        calendar_id: "all", a single calendar ID, or a list of IDs.
        list_calendars: Enumerates the user's calendar list. Only called
            for "all".
        readable_roles: Access roles that can list events. freeBusyReader
            calendars are excluded by default.

    Returns:
        Calendars in calendar-list order ("all") or input order (explicit IDs).
    """
    if calendar_id == ALL_CALENDARS:
        return [cal for cal in list_calendars() if cal.access_role in readable_roles]
    if isinstance(calendar_id, str):
        return [describe_calendar(calendar_id)]
    return [describe_calendar(cid) for cid in calendar_id]


def check_single_source_pagination(sources: list[CalendarSource], page_token: str | None) -> None:
    """
    Page tokens belong to one calendar's listing and can't be merged.

    Raises:
        ValidationError: If a page_token is given and not exactly one calendar resolved
    """
    if page_token and len(sources) != 1:
        raise ValidationError(
            "Pagination (page_token) only works when searching a single calendar. "
            "Specify a calendar_id to use pagination.",
            details={"calendars_resolved": len(sources)},
        )
