"""EventRecur domain models.

Pydantic models for recurrence rules and the event rows generated from them.
"""

from .event import EventPayload, EventTemplate, RecurrencePreview
from .recurrence import (
    LAST_POSITION,
    DayIntervalRule,
    MonthlyByDayRule,
    MonthlyByPositionRule,
    RecurrenceKind,
    RecurrenceRule,
    RecurrenceRuleError,
    RuleDefaults,
    UnknownRecurrenceKindError,
    WeeklyRule,
    build_rule,
    parse_kind,
)

__all__ = [
    # Rule models
    "RecurrenceKind",
    "RecurrenceRule",
    "WeeklyRule",
    "DayIntervalRule",
    "MonthlyByPositionRule",
    "MonthlyByDayRule",
    "RuleDefaults",
    "LAST_POSITION",
    "build_rule",
    "parse_kind",
    # Errors
    "RecurrenceRuleError",
    "UnknownRecurrenceKindError",
    # Event models
    "EventTemplate",
    "EventPayload",
    "RecurrencePreview",
]
