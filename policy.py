"""
Search policy configuration.

Loads tuning knobs from config/search_policy.json (single source of truth).
The over-fetch multipliers and floors are hand-tuned heuristics: a very
selective query against a very busy calendar can still miss matches that
fall beyond the fetched page.
"""

import json
from dataclasses import dataclass, fields
from functools import lru_cache
from pathlib import Path
from typing import Any

POLICY_PATH = Path(__file__).parent / "config" / "search_policy.json"


@dataclass(frozen=True)
class FetchPolicy:
    """How much to fetch per calendar and how to present results."""
    query_fetch_multiplier: int = 10
    query_fetch_floor: int = 100
    plain_fetch_multiplier: int = 2
    plain_fetch_floor: int = 10
    api_max_results: int = 250
    default_max_results: int = 50
    readable_access_roles: frozenset[str] = frozenset({"owner", "writer", "reader"})
    attendee_preview_limit: int = 5


def _policy_from_dict(raw: dict[str, Any]) -> FetchPolicy:
    known = {f.name for f in fields(FetchPolicy)}
    unknown = set(raw) - known
    if unknown:
        raise ValueError(f"Unknown search policy keys: {sorted(unknown)}")
    values = dict(raw)
    if "readable_access_roles" in values:
        values["readable_access_roles"] = frozenset(values["readable_access_roles"])
    return FetchPolicy(**values)


@lru_cache(maxsize=1)
def get_fetch_policy() -> FetchPolicy:
    """
    Load the search policy from JSON.

    Cached - config doesn't change during runtime.
    """
    raw: dict[str, Any] = json.loads(POLICY_PATH.read_text())
    return _policy_from_dict(raw)
