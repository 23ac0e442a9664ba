"""
search_events tool package.

Pipeline: resolve calendars → plan fetch size → list calendars in
parallel → merge, filter, sort, cap → project and render.

Re-exports the public symbols so `from tools.events import X` works.
"""

from .aggregate import aggregate, continuation_token_for, event_start_timestamp
from .fetcher import fetch_all_sources
from .planner import plan_fetch_size, resolve_order_by
from .search import do_search_events
from .sources import (
    PRIMARY_CALENDAR_ID,
    check_single_source_pagination,
    describe_calendar,
    resolve_sources,
)

__all__ = [
    "aggregate",
    "continuation_token_for",
    "event_start_timestamp",
    "fetch_all_sources",
    "plan_fetch_size",
    "resolve_order_by",
    "do_search_events",
    "PRIMARY_CALENDAR_ID",
    "check_single_source_pagination",
    "describe_calendar",
    "resolve_sources",
]
