"""
Tests for search_events input validation.
"""

import pytest

from models import ErrorKind, SearchRequest, ValidationError
from validation import (
    build_search_request,
    parse_rfc3339,
    validate_calendar_selector,
    validate_event_types,
    validate_fields,
    validate_max_results,
    validate_order_by,
    validate_time_range,
)


class TestCalendarSelector:

    def test_default_is_all(self) -> None:
        assert validate_calendar_selector(None) == "all"
        assert validate_calendar_selector("all") == "all"

    def test_single_id_stripped(self) -> None:
        assert validate_calendar_selector("  primary ") == "primary"

    def test_list_keeps_order_and_drops_repeats(self) -> None:
        assert validate_calendar_selector(["b", "a", "b"]) == ["b", "a"]

    @pytest.mark.parametrize("bad", ["", "   ", [], ["a", ""], ["all", "a"], 42])
    def test_rejects(self, bad) -> None:
        with pytest.raises(ValueError):
            validate_calendar_selector(bad)


class TestMaxResults:

    @pytest.mark.parametrize("value", [1, 50, 250])
    def test_accepts_range(self, value: int) -> None:
        assert validate_max_results(value) == value

    @pytest.mark.parametrize("value", [0, 251, -1, "10", True, 2.5])
    def test_rejects(self, value) -> None:
        with pytest.raises(ValueError):
            validate_max_results(value)


class TestTimeRange:

    def test_accepts_z_and_offsets(self) -> None:
        assert parse_rfc3339("2025-12-06T19:00:00Z", "time_min").tzinfo is not None
        assert parse_rfc3339("2025-12-06T19:00:00+01:00", "time_min").tzinfo is not None

    def test_rejects_naive(self) -> None:
        with pytest.raises(ValueError, match="timezone"):
            parse_rfc3339("2025-12-06T19:00:00", "time_min")

    def test_rejects_garbage(self) -> None:
        with pytest.raises(ValueError, match="RFC3339"):
            parse_rfc3339("next tuesday", "time_max")

    def test_min_must_precede_max(self) -> None:
        with pytest.raises(ValueError, match="earlier"):
            validate_time_range("2026-02-02T00:00:00Z", "2026-02-01T00:00:00Z")

    def test_open_ended_ok(self) -> None:
        validate_time_range("2026-02-01T00:00:00Z", None)
        validate_time_range(None, None)


class TestEnums:

    def test_event_types(self) -> None:
        assert validate_event_types(["focusTime", "default", "focusTime"]) == ["focusTime", "default"]
        assert validate_event_types(None) is None
        with pytest.raises(ValueError, match="meeting"):
            validate_event_types(["meeting"])

    def test_order_by(self) -> None:
        assert validate_order_by("updated", single_events=False) == "updated"
        assert validate_order_by(None, single_events=True) is None
        with pytest.raises(ValueError):
            validate_order_by("title", single_events=True)

    def test_start_time_order_needs_expansion(self) -> None:
        with pytest.raises(ValueError, match="single_events"):
            validate_order_by("startTime", single_events=False)

    def test_fields(self) -> None:
        assert validate_fields(["summary", "id", "summary"]) == ["summary", "id"]
        assert validate_fields([]) is None
        with pytest.raises(ValueError, match="bogus"):
            validate_fields(["summary", "bogus"])


class TestBuildSearchRequest:

    def test_defaults(self) -> None:
        request = build_search_request()
        assert request == SearchRequest(calendar_id="all", max_results=50, single_events=True)

    def test_empty_query_is_no_query(self) -> None:
        assert build_search_request(query="").query is None

    def test_whitespace_query_still_filters(self) -> None:
        request = build_search_request(query=" ")
        assert request.query == " "
        assert request.has_query

    def test_query_kept_verbatim(self) -> None:
        assert build_search_request(query="Barber").query == "Barber"

    def test_wraps_value_errors(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            build_search_request(max_results=0)
        assert exc_info.value.kind == ErrorKind.INVALID_INPUT
        assert "max_results" in exc_info.value.message
