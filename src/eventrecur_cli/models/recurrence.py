"""Recurrence rule models.

A rule is one of four frozen variants discriminated by ``kind``. Each variant
carries only the fields its pattern uses; anything else in the input is
ignored when the rule is built.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

# Position value meaning "last occurrence of the weekday in the month"
LAST_POSITION = 5


class RecurrenceRuleError(ValueError):
    """Raised when a recurrence rule cannot be built from its input."""


class UnknownRecurrenceKindError(RecurrenceRuleError):
    """Raised for a missing or unsupported recurrence kind."""


class RecurrenceKind(str, Enum):
    """Supported recurrence patterns."""

    WEEKLY = "WEEKLY"
    DAY_INTERVAL = "DAY_INTERVAL"
    MONTHLY_BY_POSITION = "MONTHLY_BY_POSITION"
    MONTHLY_BY_DAY = "MONTHLY_BY_DAY"


class RuleDefaults(BaseModel):
    """Values used for kind-specific fields left blank by the caller.

    Attributes:
        weekday: Day of the week, 0 = Sunday ... 6 = Saturday
        interval_days: Days between occurrences for interval rules
        month_position: 1st..4th occurrence in the month, 5 = last
        day_of_month: Calendar day for monthly-by-day rules
    """

    weekday: int = Field(default=5, ge=0, le=6)
    interval_days: int = Field(default=7, ge=1)
    month_position: int = Field(default=1, ge=1, le=LAST_POSITION)
    day_of_month: int = Field(default=1, ge=1, le=31)


class _RuleBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    start_date: date
    end_date: date | None = None

    @property
    def effective_end_date(self) -> date:
        """Explicit end date, or the last day of the start date's year."""
        if self.end_date is not None:
            return self.end_date
        return date(self.start_date.year, 12, 31)

    def starting_from(self, day: date):
        """Return a copy of this rule that starts on *day*, keeping its end date."""
        return self.model_copy(update={"start_date": day})


class WeeklyRule(_RuleBase):
    """Every week on a fixed weekday (e.g. every Friday)."""

    kind: Literal["WEEKLY"] = "WEEKLY"
    weekday: int = Field(default=5, ge=0, le=6)


class DayIntervalRule(_RuleBase):
    """Every N days counted from the start date."""

    kind: Literal["DAY_INTERVAL"] = "DAY_INTERVAL"
    interval_days: int = Field(default=7, ge=1)


class MonthlyByPositionRule(_RuleBase):
    """The Nth (or last) occurrence of a weekday in each month."""

    kind: Literal["MONTHLY_BY_POSITION"] = "MONTHLY_BY_POSITION"
    month_position: int = Field(default=1, ge=1, le=LAST_POSITION)
    weekday: int = Field(default=5, ge=0, le=6)


class MonthlyByDayRule(_RuleBase):
    """A fixed calendar day of each month, clamped to the month length."""

    kind: Literal["MONTHLY_BY_DAY"] = "MONTHLY_BY_DAY"
    day_of_month: int = Field(default=1, ge=1, le=31)


RecurrenceRule = Annotated[
    Union[WeeklyRule, DayIntervalRule, MonthlyByPositionRule, MonthlyByDayRule],
    Field(discriminator="kind"),
]

_RULE_ADAPTER: TypeAdapter = TypeAdapter(RecurrenceRule)

# Column names used by the stored recurring-event rows
_LEGACY_FIELDS = MappingProxyType(
    {
        "tipo_recorrencia": "kind",
        "dia_semana": "weekday",
        "intervalo_dias": "interval_days",
        "posicao_no_mes": "month_position",
        "dia_do_mes": "day_of_month",
        "data_inicio": "start_date",
        "data_fim": "end_date",
    }
)

_LEGACY_KINDS = MappingProxyType(
    {
        "SEMANAL": RecurrenceKind.WEEKLY,
        "INTERVALO_DIAS": RecurrenceKind.DAY_INTERVAL,
        "MENSAL_POSICAO": RecurrenceKind.MONTHLY_BY_POSITION,
        "MENSAL_DIA": RecurrenceKind.MONTHLY_BY_DAY,
    }
)

_KIND_FIELDS = MappingProxyType(
    {
        RecurrenceKind.WEEKLY: ("weekday",),
        RecurrenceKind.DAY_INTERVAL: ("interval_days",),
        RecurrenceKind.MONTHLY_BY_POSITION: ("month_position", "weekday"),
        RecurrenceKind.MONTHLY_BY_DAY: ("day_of_month",),
    }
)


def parse_kind(raw: Any) -> RecurrenceKind:
    """Resolve a kind name (either vocabulary, any case) to a RecurrenceKind.

    Raises:
        UnknownRecurrenceKindError: If *raw* is empty or not a known kind
    """
    if isinstance(raw, RecurrenceKind):
        return raw
    if raw is None or not str(raw).strip():
        raise UnknownRecurrenceKindError("Recurrence kind is required")

    name = str(raw).strip().upper().replace("-", "_")
    if name in _LEGACY_KINDS:
        return _LEGACY_KINDS[name]
    try:
        return RecurrenceKind(name)
    except ValueError as e:
        valid = ", ".join(k.value for k in RecurrenceKind)
        raise UnknownRecurrenceKindError(
            f"Unknown recurrence kind '{raw}'. Valid kinds: {valid}"
        ) from e


def build_rule(
    data: Mapping[str, Any], defaults: RuleDefaults | None = None
) -> RecurrenceRule:
    """Build a validated rule from form-shaped input.

    Blank fields (``None`` or ``""``) are treated as missing and filled from
    *defaults*. Fields that do not belong to the chosen kind are dropped.

    Args:
        data: Mapping with ``kind``, ``start_date`` and optional fields, in
            either the English or the stored-row vocabulary
        defaults: Values for missing kind-specific fields

    Returns:
        One of the four rule variants

    Raises:
        UnknownRecurrenceKindError: If the kind is missing or unknown
        RecurrenceRuleError: If a field is out of range or a date is malformed
    """
    defaults = defaults or RuleDefaults()

    values: dict[str, Any] = {}
    for key, value in data.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        values[_LEGACY_FIELDS.get(key, key)] = value

    kind = parse_kind(values.get("kind"))
    values["kind"] = kind.value
    for field in _KIND_FIELDS[kind]:
        values.setdefault(field, getattr(defaults, field))

    try:
        return _RULE_ADAPTER.validate_python(values)
    except ValidationError as e:
        raise RecurrenceRuleError(_describe_validation_error(e)) from e


def _describe_validation_error(error: ValidationError) -> str:
    messages = []
    for err in error.errors():
        loc = [str(part) for part in err["loc"] if str(part) not in _KIND_NAMES]
        field = ".".join(loc) or "rule"
        messages.append(f"{field}: {err['msg']}")
    return "Invalid recurrence rule - " + "; ".join(messages)


_KIND_NAMES = frozenset(k.value for k in RecurrenceKind)
