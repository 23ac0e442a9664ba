"""
Adapters: Thin Google Calendar API wrappers.

Build services, call the API, parse responses into models dataclasses.
No business logic and no imports from tools/.
"""
