"""
Tools: MCP tool implementations.

Each tool has its own module or package with the implementation logic.
server.py and cli.py provide thin wrappers that call into these.

Tools:
- search_events: Federated event search across Google calendars
"""

from .events import do_search_events

__all__ = ["do_search_events"]
