"""
Fetch planning: how many raw events to request from each calendar.

Filtering happens after retrieval, so we over-fetch: asking for exactly
max_results would drop matches sitting just past the unfiltered page.
"""

from policy import FetchPolicy, get_fetch_policy


def plan_fetch_size(
    max_results: int,
    has_query: bool,
    source_count: int = 1,
    policy: FetchPolicy | None = None,
) -> int:
    """
    Per-calendar maxResults for events.list.

    With a text query: max_results x 10, at least 100. Without: x 2, at
    least 10. Always clamped to the API maximum (250).

    source_count is accepted so the policy can diverge for single vs.
    multi-calendar searches; today both get the same size.
    """
    policy = policy or get_fetch_policy()
    if has_query:
        multiplier, floor = policy.query_fetch_multiplier, policy.query_fetch_floor
    else:
        multiplier, floor = policy.plain_fetch_multiplier, policy.plain_fetch_floor
    return min(max(max_results * multiplier, floor), policy.api_max_results)


def resolve_order_by(order_by: str | None, single_events: bool) -> str | None:
    """
    Ordering hint sent to the API.

    Expanded recurring events default to startTime so each calendar's
    page is the earliest events in range, which is what the merge sorts on.
    """
    if single_events:
        return order_by or "startTime"
    return order_by
