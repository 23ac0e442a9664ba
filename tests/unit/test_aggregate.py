"""
Tests for merging per-calendar results.
"""

import pytest

from models import SearchRequest, SourceResult
from tests.helpers import make_event, make_source
from tools.events.aggregate import aggregate, continuation_token_for, event_start_timestamp


def _result(calendar_id: str, events: list, token: str | None = None) -> SourceResult:
    return SourceResult(source=make_source(calendar_id, calendar_id.title()), events=events, next_page_token=token)


def _failed(calendar_id: str) -> SourceResult:
    return SourceResult(source=make_source(calendar_id, calendar_id.title()), error="boom", error_kind="not_found")


class TestEventStartTimestamp:

    def test_offsets_normalized(self) -> None:
        utc = make_event(start="2026-02-23T09:00:00Z")
        paris = make_event(start="2026-02-23T10:00:00+01:00")
        assert event_start_timestamp(utc) == event_start_timestamp(paris)

    def test_all_day_is_utc_midnight(self) -> None:
        all_day = make_event(start="2026-02-23", all_day=True)
        midnight = make_event(start="2026-02-23T00:00:00Z")
        assert event_start_timestamp(all_day) == event_start_timestamp(midnight)

    def test_missing_or_garbage_start_is_zero(self) -> None:
        assert event_start_timestamp(make_event(start=None)) == 0.0
        assert event_start_timestamp(make_event(start="soonish")) == 0.0


class TestContinuationToken:

    def test_single_calendar_no_query(self) -> None:
        results = [_result("a", [make_event()], token="next")]
        assert continuation_token_for(results, [make_event()], has_query=False) == "next"

    def test_suppressed_with_query(self) -> None:
        results = [_result("a", [make_event()], token="next")]
        assert continuation_token_for(results, [make_event()], has_query=True) is None

    def test_suppressed_when_nothing_shown(self) -> None:
        results = [_result("a", [], token="next")]
        assert continuation_token_for(results, [], has_query=False) is None

    def test_suppressed_for_several_calendars(self) -> None:
        results = [_result("a", [make_event()], token="next"), _result("b", [])]
        assert continuation_token_for(results, [make_event()], has_query=False) is None


class TestAggregate:

    def test_sorted_by_start_across_calendars(self) -> None:
        results = [
            _result("a", [
                make_event("a1", start="2026-02-23T12:00:00Z"),
                make_event("a2", start="2026-02-25T09:00:00Z"),
            ]),
            _result("b", [
                make_event("b1", start="2026-02-23T08:00:00Z"),
                make_event("b2", start="2026-02-24", all_day=True),
            ]),
        ]
        merged = aggregate(results, SearchRequest(max_results=10))
        assert [e.event_id for e in merged.events] == ["b1", "a1", "b2", "a2"]
        starts = [event_start_timestamp(e) for e in merged.events]
        assert starts == sorted(starts)

    def test_missing_start_sorts_first(self) -> None:
        results = [_result("a", [
            make_event("timed", start="2026-02-23T12:00:00Z"),
            make_event("undated", start=None),
        ])]
        merged = aggregate(results, SearchRequest(max_results=10))
        assert [e.event_id for e in merged.events] == ["undated", "timed"]

    def test_sort_is_stable_for_ties(self) -> None:
        same = "2026-02-23T09:00:00Z"
        results = [
            _result("a", [make_event("a1", start=same)]),
            _result("b", [make_event("b1", start=same)]),
        ]
        merged = aggregate(results, SearchRequest(max_results=10))
        assert [e.event_id for e in merged.events] == ["a1", "b1"]

    def test_updated_order_is_not_resorted(self) -> None:
        results = [_result("a", [
            make_event("late", start="2026-03-01T00:00:00Z"),
            make_event("early", start="2026-01-01T00:00:00Z"),
        ])]
        merged = aggregate(results, SearchRequest(max_results=10, order_by="updated"))
        assert [e.event_id for e in merged.events] == ["late", "early"]

    def test_series_mode_is_not_resorted(self) -> None:
        results = [_result("a", [
            make_event("late", start="2026-03-01T00:00:00Z"),
            make_event("early", start="2026-01-01T00:00:00Z"),
        ])]
        merged = aggregate(results, SearchRequest(max_results=10, single_events=False))
        assert [e.event_id for e in merged.events] == ["late", "early"]

    @pytest.mark.parametrize("available,max_results,has_more", [
        (3, 5, False),
        (5, 5, False),
        (6, 5, True),
    ])
    def test_cap_and_has_more(self, available: int, max_results: int, has_more: bool) -> None:
        events = [make_event(f"e{i}", start=f"2026-02-{10 + i:02d}T09:00:00Z") for i in range(available)]
        merged = aggregate([_result("a", events)], SearchRequest(max_results=max_results))
        assert len(merged.events) == min(available, max_results)
        assert merged.has_more is has_more

    def test_query_filters_before_cap(self) -> None:
        events = [make_event(f"noise{i}", summary="Standup", start=f"2026-02-{10 + i:02d}T09:00:00Z") for i in range(8)]
        events.append(make_event("hit", summary="Barbershop appointment", start="2026-02-28T09:00:00Z"))
        merged = aggregate([_result("a", events)], SearchRequest(query="barber", max_results=1))
        assert [e.event_id for e in merged.events] == ["hit"]
        assert merged.has_more is False

    def test_failed_calendars_reported_separately(self) -> None:
        results = [_result("a", [make_event("a1")]), _failed("b"), _result("c", [])]
        merged = aggregate(results, SearchRequest())
        assert merged.calendars_searched == ["A", "C"]
        assert merged.calendars_failed == ["B"]
        assert merged.source_count == 3

    def test_token_passthrough_single_calendar(self) -> None:
        merged = aggregate([_result("a", [make_event()], token="page-2")], SearchRequest(calendar_id="a"))
        assert merged.next_page_token == "page-2"

    def test_token_dropped_with_query(self) -> None:
        results = [_result("a", [make_event(summary="Barber")], token="page-2")]
        merged = aggregate(results, SearchRequest(calendar_id="a", query="barber"))
        assert merged.events
        assert merged.next_page_token is None
