"""Recurring-event date generation.

Weekdays are numbered 0 = Sunday ... 6 = Saturday throughout, matching the
values stored on recurring-event rules.
"""

from __future__ import annotations

import calendar
import logging
from collections.abc import Callable, Iterator
from datetime import date, timedelta

from eventrecur_cli.models.recurrence import (
    LAST_POSITION,
    DayIntervalRule,
    MonthlyByDayRule,
    MonthlyByPositionRule,
    RecurrenceRule,
    UnknownRecurrenceKindError,
    WeeklyRule,
)

logger = logging.getLogger("eventrecur_cli.recurrence")

DAYS_PER_WEEK = 7


def weekday_of(day: date) -> int:
    """Return the weekday of *day* with 0 = Sunday."""
    return (day.weekday() + 1) % 7


def effective_end_date(start: date, end: date | None) -> date:
    """Return *end*, or the last day of *start*'s year when no end is given."""
    if end is not None:
        return end
    return date(start.year, 12, 31)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def iter_months(start: date, end: date) -> Iterator[tuple[int, int]]:
    """Yield (year, month) for every month overlapping [start, end]."""
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        yield year, month
        month += 1
        if month > 12:
            year, month = year + 1, 1


def nth_weekday_of_month(
    year: int, month: int, weekday: int, position: int
) -> date | None:
    """Return the Nth occurrence of *weekday* in a month.

    Args:
        year: Calendar year
        month: Calendar month (1-12)
        weekday: 0 = Sunday ... 6 = Saturday
        position: 1..4 for the Nth occurrence, 5 for the last one

    Returns:
        The matching date, or None if the month has fewer occurrences
    """
    first = date(year, month, 1)
    offset = (weekday - weekday_of(first)) % 7
    matching = [
        first + timedelta(days=d) for d in range(offset, days_in_month(year, month), 7)
    ]

    if position == LAST_POSITION:
        return matching[-1] if matching else None

    index = position - 1
    return matching[index] if 0 <= index < len(matching) else None


def _stepped(first: date, end: date, days: int) -> Iterator[date]:
    # Stop before a step would pass *end*, so dates near date.max never overflow
    current = first
    while True:
        yield current
        if (end - current).days < days:
            return
        current += timedelta(days=days)


def _weekly_dates(rule: WeeklyRule, start: date, end: date) -> Iterator[date]:
    offset = (rule.weekday - weekday_of(start) + 7) % 7
    if (end - start).days < offset:
        return iter(())
    return _stepped(start + timedelta(days=offset), end, DAYS_PER_WEEK)


def _interval_dates(rule: DayIntervalRule, start: date, end: date) -> Iterator[date]:
    # Never step by less than a day, even for a rule built without validation
    return _stepped(start, end, max(rule.interval_days, 1))


def _monthly_position_dates(
    rule: MonthlyByPositionRule, start: date, end: date
) -> Iterator[date]:
    for year, month in iter_months(start, end):
        target = nth_weekday_of_month(year, month, rule.weekday, rule.month_position)
        if target is not None and start <= target <= end:
            yield target


def _monthly_day_dates(rule: MonthlyByDayRule, start: date, end: date) -> Iterator[date]:
    for year, month in iter_months(start, end):
        target = date(year, month, min(rule.day_of_month, days_in_month(year, month)))
        if start <= target <= end:
            yield target


_GENERATORS: dict[type, Callable[..., Iterator[date]]] = {
    WeeklyRule: _weekly_dates,
    DayIntervalRule: _interval_dates,
    MonthlyByPositionRule: _monthly_position_dates,
    MonthlyByDayRule: _monthly_day_dates,
}


def iter_dates(rule: RecurrenceRule) -> Iterator[date]:
    """Return a lazy iterator over the occurrences of *rule*.

    Raises:
        UnknownRecurrenceKindError: If *rule* is not one of the rule variants
    """
    generator = _GENERATORS.get(type(rule))
    if generator is None:
        raise UnknownRecurrenceKindError(
            f"Unsupported recurrence rule: {type(rule).__name__}"
        )

    start = rule.start_date
    end = effective_end_date(start, rule.end_date)
    if start > end:
        return iter(())
    return generator(rule, start, end)


def generate_dates(rule: RecurrenceRule) -> list[date]:
    """Generate every occurrence of *rule* in ascending order.

    The window is [start_date, end_date], both inclusive; without an end date
    it runs to the end of the start date's year. A window whose start falls
    after its end yields an empty list.
    """
    dates = list(iter_dates(rule))
    logger.debug(
        "generated %d dates for %s rule (%s..%s)",
        len(dates),
        rule.kind,
        rule.start_date,
        rule.effective_end_date,
    )
    return dates
