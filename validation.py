"""
Input validation for search_events.

Each check raises ValueError with a caller-facing message.
build_search_request() runs them all and converts the first failure
into ValidationError, before any credential or network work happens.
"""

from datetime import datetime
from typing import Any

from models import ALL_CALENDARS, EVENT_FIELD_NAMES, SearchRequest, ValidationError
from policy import get_fetch_policy

# =============================================================================
# ALLOWED VALUES
# =============================================================================

EVENT_TYPES = frozenset({
    "default",
    "birthday",
    "focusTime",
    "outOfOffice",
    "workingLocation",
})

ORDER_BY_VALUES = frozenset({"startTime", "updated"})

MIN_MAX_RESULTS = 1


# =============================================================================
# FIELD CHECKS
# =============================================================================

def validate_calendar_selector(calendar_id: Any) -> str | list[str]:
    """
    Normalize the calendar selector.

    Accepts "all", a single ID, or a list of IDs. Lists keep their order
    with repeated IDs collapsed to the first occurrence.
    """
    if calendar_id is None:
        return ALL_CALENDARS

    if isinstance(calendar_id, str):
        calendar_id = calendar_id.strip()
        if not calendar_id:
            raise ValueError("calendar_id must not be empty")
        return calendar_id

    if isinstance(calendar_id, (list, tuple)):
        ids: list[str] = []
        for item in calendar_id:
            if not isinstance(item, str) or not item.strip():
                raise ValueError(f"Invalid calendar ID in list: {item!r}")
            item = item.strip()
            if item == ALL_CALENDARS:
                raise ValueError('"all" cannot be combined with explicit calendar IDs')
            if item not in ids:
                ids.append(item)
        if not ids:
            raise ValueError("calendar_id list must contain at least one calendar ID")
        return ids

    raise ValueError(f"calendar_id must be 'all', an ID, or a list of IDs, got {type(calendar_id).__name__}")


def validate_max_results(max_results: Any) -> int:
    """max_results must be an integer within 1..API maximum."""
    upper = get_fetch_policy().api_max_results
    if isinstance(max_results, bool) or not isinstance(max_results, int):
        raise ValueError(f"max_results must be an integer, got {max_results!r}")
    if not MIN_MAX_RESULTS <= max_results <= upper:
        raise ValueError(f"max_results must be between {MIN_MAX_RESULTS} and {upper}, got {max_results}")
    return max_results


def parse_rfc3339(value: str, param_name: str) -> datetime:
    """
    Parse an RFC3339 timestamp that carries a timezone.

    The Calendar API rejects naive timestamps; rejecting them here gives
    a clearer message.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        raise ValueError(
            f"{param_name} is not a valid RFC3339 timestamp: {value!r} "
            "(expected e.g. 2025-12-06T19:00:00Z or 2025-12-06T19:00:00+01:00)"
        ) from None
    if parsed.tzinfo is None:
        raise ValueError(
            f"{param_name} must include a timezone offset: {value!r} "
            "(e.g. 2025-12-06T19:00:00Z)"
        )
    return parsed


def validate_time_range(time_min: str | None, time_max: str | None) -> None:
    """Both bounds optional; when both are given, time_min must precede time_max."""
    start = parse_rfc3339(time_min, "time_min") if time_min else None
    end = parse_rfc3339(time_max, "time_max") if time_max else None
    if start is not None and end is not None and start >= end:
        raise ValueError(f"time_min ({time_min}) must be earlier than time_max ({time_max})")


def validate_event_types(event_types: list[str] | None) -> list[str] | None:
    if not event_types:
        return None
    invalid = [t for t in event_types if t not in EVENT_TYPES]
    if invalid:
        raise ValueError(f"Unknown event type(s): {invalid}. Supported: {sorted(EVENT_TYPES)}")
    # Keep order, drop repeats
    return list(dict.fromkeys(event_types))


def validate_order_by(order_by: str | None, single_events: bool) -> str | None:
    if order_by is None:
        return None
    if order_by not in ORDER_BY_VALUES:
        raise ValueError(f"Unknown order_by: {order_by!r}. Supported: {sorted(ORDER_BY_VALUES)}")
    if order_by == "startTime" and not single_events:
        raise ValueError("order_by='startTime' requires single_events=True (recurring events expanded)")
    return order_by


def validate_fields(fields: list[str] | None) -> list[str] | None:
    if not fields:
        return None
    unknown = [f for f in fields if f not in EVENT_FIELD_NAMES]
    if unknown:
        raise ValueError(f"Unknown field(s): {unknown}. Supported: {list(EVENT_FIELD_NAMES)}")
    return list(dict.fromkeys(fields))


# =============================================================================
# REQUEST
# =============================================================================

def build_search_request(
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
) -> SearchRequest:
    """
    Validate raw tool arguments into a SearchRequest.

    Raises:
        ValidationError: On the first invalid parameter
    """
    if max_results is None:
        max_results = get_fetch_policy().default_max_results

    try:
        selector = validate_calendar_selector(calendar_id)
        validated_max = validate_max_results(max_results)
        validate_time_range(time_min, time_max)
        validated_types = validate_event_types(event_types)
        validated_order = validate_order_by(order_by, single_events)
        validated_fields = validate_fields(fields)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    # Any non-empty query filters, whitespace included; only "" means no query
    return SearchRequest(
        calendar_id=selector,
        time_min=time_min.strip() if time_min else None,
        time_max=time_max.strip() if time_max else None,
        query=query or None,
        max_results=validated_max,
        event_types=validated_types,
        order_by=validated_order,
        page_token=page_token or None,
        fields=validated_fields,
        single_events=single_events,
    )
