"""Services module for EventRecur CLI - event generation on top of recurrence rules."""

from .event_service import (
    DEFAULT_PREVIEW_LIMIT,
    EventWriter,
    build_event_payloads,
    preview_rule,
    schedule_events,
)

__all__ = [
    "DEFAULT_PREVIEW_LIMIT",
    "EventWriter",
    "build_event_payloads",
    "preview_rule",
    "schedule_events",
]
