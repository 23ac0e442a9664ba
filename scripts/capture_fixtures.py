#!/usr/bin/env python3
"""
Capture real Calendar API responses as test fixtures.

Usage:
    uv run python scripts/capture_fixtures.py              # Capture only
    uv run python scripts/capture_fixtures.py --sanitize   # Capture + scrub PII

Writes fixtures/calendar/calendar_list.json and events_primary.json.
Review sanitized output by hand before committing.
"""

import argparse
import json
import re
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from adapters.services import build_calendar_service, get_credentials

FIXTURES_DIR = PROJECT_ROOT / "fixtures" / "calendar"

EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(\.[\w-]+)+")

# Calendar IDs that look like emails but aren't personal
KEEP_EMAIL_SUFFIXES = ("group.v.calendar.google.com",)


def _scrub_email(match: re.Match) -> str:
    email = match.group(0)
    if email.endswith(KEEP_EMAIL_SUFFIXES):
        return email
    return "person@example.com"


def sanitize(value):
    """Replace personal emails in every string value, recursively."""
    if isinstance(value, dict):
        return {k: sanitize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [sanitize(v) for v in value]
    if isinstance(value, str):
        return EMAIL_RE.sub(_scrub_email, value)
    return value


def save(name: str, data: dict, scrub: bool) -> None:
    if scrub:
        data = sanitize(data)
    output_path = FIXTURES_DIR / f"{name}.json"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)
    print(f"  Saved: {output_path}")


def capture_calendar_list(service, scrub: bool) -> dict:
    print("Fetching calendarList...")
    response = service.calendarList().list(maxResults=250).execute()
    print(f"  Calendars: {len(response.get('items', []))}")
    save("calendar_list", response, scrub)
    return response


def capture_events(service, time_min: str, max_results: int, scrub: bool) -> dict:
    print(f"Fetching primary events from {time_min}...")
    response = service.events().list(
        calendarId="primary",
        timeMin=time_min,
        maxResults=max_results,
        singleEvents=True,
        orderBy="startTime",
    ).execute()
    print(f"  Events: {len(response.get('items', []))}")
    save("events_primary", response, scrub)
    return response


def main():
    parser = argparse.ArgumentParser(description="Capture real Calendar API responses as fixtures")
    parser.add_argument(
        "--sanitize", "-s",
        action="store_true",
        help="Replace personal email addresses after capture",
    )
    parser.add_argument("--time-min", default="2026-01-01T00:00:00Z")
    parser.add_argument("--max-results", type=int, default=10)
    args = parser.parse_args()

    service = build_calendar_service(get_credentials())
    capture_calendar_list(service, args.sanitize)
    capture_events(service, args.time_min, args.max_results, args.sanitize)
    print("\n=== Done ===")


if __name__ == "__main__":
    main()
