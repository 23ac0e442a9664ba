"""
Extractors: Pure functions for presenting calendar data.

No MCP awareness, no Google API calls. Just transform input → output.
Easily testable with plain dataclasses.
"""

from .events import (
    DEFAULT_FIELDS,
    EVENT_FIELDS,
    extract_events_content,
    format_event_lines,
    project_event,
)

__all__ = [
    "DEFAULT_FIELDS",
    "EVENT_FIELDS",
    "extract_events_content",
    "format_event_lines",
    "project_event",
]
