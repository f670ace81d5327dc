"""Human-readable labels and summaries for recurrence rules."""

from __future__ import annotations

from types import MappingProxyType

from eventrecur_cli.models.recurrence import (
    DayIntervalRule,
    MonthlyByDayRule,
    MonthlyByPositionRule,
    RecurrenceKind,
    RecurrenceRule,
    UnknownRecurrenceKindError,
    WeeklyRule,
)

DEFAULT_LANGUAGE = "en"

# Indexed by weekday number, 0 = Sunday
WEEKDAY_NAMES = MappingProxyType(
    {
        "en": ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"),
        "pt": ("Domingo", "Segunda", "Terça", "Quarta", "Quinta", "Sexta", "Sábado"),
    }
)

WEEKDAY_ABBREVIATIONS = MappingProxyType(
    {
        "en": ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"),
        "pt": ("dom", "seg", "ter", "qua", "qui", "sex", "sáb"),
    }
)

# Indexed by position number; 0 is unused, 5 means "last"
POSITION_NAMES = MappingProxyType(
    {
        "en": ("", "1st", "2nd", "3rd", "4th", "last"),
        "pt": ("", "1ª", "2ª", "3ª", "4ª", "Última"),
    }
)

KIND_LABELS = MappingProxyType(
    {
        "en": MappingProxyType(
            {
                RecurrenceKind.WEEKLY: "Weekly (e.g. every Friday)",
                RecurrenceKind.DAY_INTERVAL: "Every N days",
                RecurrenceKind.MONTHLY_BY_POSITION: "Monthly by position (e.g. 1st Friday)",
                RecurrenceKind.MONTHLY_BY_DAY: "Monthly by day (e.g. every 15th)",
            }
        ),
        "pt": MappingProxyType(
            {
                RecurrenceKind.WEEKLY: "Semanal (ex: toda sexta)",
                RecurrenceKind.DAY_INTERVAL: "A cada X dias",
                RecurrenceKind.MONTHLY_BY_POSITION: "Mensal por posição (ex: 1ª sexta)",
                RecurrenceKind.MONTHLY_BY_DAY: "Mensal por dia (ex: todo dia 15)",
            }
        ),
    }
)

_TEMPLATES = MappingProxyType(
    {
        "en": MappingProxyType(
            {
                RecurrenceKind.WEEKLY: "Every {weekday}",
                RecurrenceKind.DAY_INTERVAL: "Every {interval} days",
                RecurrenceKind.MONTHLY_BY_POSITION: "Every {position} {weekday} of the month",
                RecurrenceKind.MONTHLY_BY_DAY: "Every day {day} of the month",
            }
        ),
        "pt": MappingProxyType(
            {
                RecurrenceKind.WEEKLY: "Toda {weekday}",
                RecurrenceKind.DAY_INTERVAL: "A cada {interval} dias",
                RecurrenceKind.MONTHLY_BY_POSITION: "Toda {position} {weekday} do mês",
                RecurrenceKind.MONTHLY_BY_DAY: "Todo dia {day} do mês",
            }
        ),
    }
)


def resolve_language(language: str | None) -> str:
    """Return a supported language code, falling back to English."""
    if not language:
        return DEFAULT_LANGUAGE
    code = language.lower().split("-")[0].split("_")[0]
    return code if code in WEEKDAY_NAMES else DEFAULT_LANGUAGE


def _lookup(table, index: int, language: str | None) -> str:
    names = table[resolve_language(language)]
    if 0 <= index < len(names):
        return names[index]
    return ""


def get_weekday_name(day: int, language: str | None = DEFAULT_LANGUAGE) -> str:
    """Weekday name for 0 = Sunday ... 6 = Saturday; empty when out of range."""
    return _lookup(WEEKDAY_NAMES, day, language)


def get_weekday_abbreviation(day: int, language: str | None = DEFAULT_LANGUAGE) -> str:
    return _lookup(WEEKDAY_ABBREVIATIONS, day, language)


def get_position_name(position: int, language: str | None = DEFAULT_LANGUAGE) -> str:
    """Position name for 1..4 and 5 = last; empty when out of range."""
    if position < 1:
        return ""
    return _lookup(POSITION_NAMES, position, language)


def get_kind_label(kind: RecurrenceKind | str, language: str | None = DEFAULT_LANGUAGE) -> str:
    return KIND_LABELS[resolve_language(language)][RecurrenceKind(kind)]


def describe_rule(rule: RecurrenceRule, language: str | None = DEFAULT_LANGUAGE) -> str:
    """Describe *rule* in one sentence.

    Examples:
        "Every Friday", "Every 10 days", "Every last Sunday of the month",
        "Every day 15 of the month"

    Raises:
        UnknownRecurrenceKindError: If *rule* is not one of the rule variants
    """
    lang = resolve_language(language)
    templates = _TEMPLATES[lang]

    if isinstance(rule, WeeklyRule):
        return templates[RecurrenceKind.WEEKLY].format(
            weekday=get_weekday_name(rule.weekday, lang)
        )
    if isinstance(rule, DayIntervalRule):
        return templates[RecurrenceKind.DAY_INTERVAL].format(interval=rule.interval_days)
    if isinstance(rule, MonthlyByPositionRule):
        return templates[RecurrenceKind.MONTHLY_BY_POSITION].format(
            position=get_position_name(rule.month_position, lang),
            weekday=get_weekday_name(rule.weekday, lang),
        )
    if isinstance(rule, MonthlyByDayRule):
        return templates[RecurrenceKind.MONTHLY_BY_DAY].format(day=rule.day_of_month)

    raise UnknownRecurrenceKindError(f"Unsupported recurrence rule: {type(rule).__name__}")
