"""Turns recurrence rules into previews and concrete event rows."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from eventrecur_cli.models.event import EventPayload, EventTemplate, RecurrencePreview
from eventrecur_cli.models.recurrence import RecurrenceRule
from eventrecur_cli.utils.recurrence import generate_dates, iter_dates
from eventrecur_cli.utils.recurrence_labels import DEFAULT_LANGUAGE, describe_rule

logger = logging.getLogger("eventrecur_cli.events")

DEFAULT_PREVIEW_LIMIT = 6


class EventWriter(Protocol):
    """Batch insert of event rows, provided by the caller's storage layer."""

    def insert_events(self, payloads: Sequence[EventPayload]) -> None: ...


def preview_rule(
    rule: RecurrenceRule,
    limit: int = DEFAULT_PREVIEW_LIMIT,
    language: str | None = DEFAULT_LANGUAGE,
) -> RecurrencePreview:
    """Return the summary and the first *limit* occurrences of *rule*."""
    limit = max(limit, 0)
    dates = []
    total = 0
    for day in iter_dates(rule):
        if total < limit:
            dates.append(day)
        total += 1

    return RecurrencePreview(
        summary=describe_rule(rule, language),
        dates=dates,
        total=total,
        truncated=total > limit,
    )


def build_event_payloads(
    rule: RecurrenceRule,
    template: EventTemplate,
    rule_id: str | None = None,
) -> list[EventPayload]:
    """Create one event row per occurrence, at the template's time of day."""
    return [
        EventPayload(
            title=template.title,
            event_at=template.at(day),
            description=template.description,
            event_type=template.event_type,
            group_id=template.group_id,
            recurring_rule_id=rule_id,
        )
        for day in generate_dates(rule)
    ]


def schedule_events(
    rule: RecurrenceRule,
    template: EventTemplate,
    writer: EventWriter,
    rule_id: str | None = None,
) -> int:
    """Generate the events for *rule* and hand them to *writer* in one batch.

    Returns:
        Number of events written (0 when the rule produced no dates)
    """
    payloads = build_event_payloads(rule, template, rule_id=rule_id)
    if not payloads:
        logger.warning(
            "rule %s produced no events for '%s'", rule_id or rule.kind, template.title
        )
        return 0

    writer.insert_events(payloads)
    logger.info(
        "scheduled %d events for '%s' (%s..%s)",
        len(payloads),
        template.title,
        payloads[0].event_at.date(),
        payloads[-1].event_at.date(),
    )
    return len(payloads)
