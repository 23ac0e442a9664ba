"""
Shared pytest fixtures for almanac tests.

Fixtures are loaded from the fixtures/ directory at project root.

Adapter mocking infrastructure is also provided here for testing
adapters without hitting real Google APIs.
"""

import json
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

from oauth_config import ACCESS_TOKEN_ENV
from policy import get_fetch_policy

# Project root for fixture loading
PROJECT_ROOT = Path(__file__).parent.parent
FIXTURES_DIR = PROJECT_ROOT / "fixtures"


def load_fixture(category: str, name: str) -> dict:
    """
    Load a JSON fixture by category and name.

    Example:
        load_fixture("calendar", "calendar_list")  # fixtures/calendar/calendar_list.json
    """
    fixture_path = FIXTURES_DIR / category / f"{name}.json"
    with open(fixture_path) as f:
        return json.load(f)


@pytest.fixture(autouse=True)
def _isolate_environment(
    request: pytest.FixtureRequest,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Keep a developer's real token out of unit tests and reset cached policy."""
    if request.node.get_closest_marker("integration") is None:
        monkeypatch.delenv(ACCESS_TOKEN_ENV, raising=False)
    get_fetch_policy.cache_clear()
    yield
    get_fetch_policy.cache_clear()


# ============================================================================
# Calendar API Fixtures
# ============================================================================

@pytest.fixture
def calendar_list_response() -> dict:
    """calendarList.list response: owner, writer, reader and freeBusyReader calendars."""
    return load_fixture("calendar", "calendar_list")


@pytest.fixture
def primary_events_response() -> dict:
    """events.list response with timed, all-day, recurring and cancelled events."""
    return load_fixture("calendar", "events_primary")


# ============================================================================
# Service Mocks
# ============================================================================

@pytest.fixture
def mock_calendar_service() -> MagicMock:
    """A bare MagicMock standing in for a Calendar v3 Resource."""
    return MagicMock()


@pytest.fixture
def patch_calendar_service(mock_calendar_service: MagicMock) -> Generator[MagicMock, None, None]:
    """
    Patch build_calendar_service in the calendar adapter.

    Usage:
        def test_something(patch_calendar_service):
            mock_api_chain(patch_calendar_service, "events.list.execute", {...})
    """
    with patch("adapters.calendar.build_calendar_service", return_value=mock_calendar_service):
        yield mock_calendar_service


@pytest.fixture
def fake_credentials() -> MagicMock:
    """Opaque credentials object; adapters only pass it through."""
    return MagicMock(name="credentials")
