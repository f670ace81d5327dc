"""Tests for recurrence rule models and the rule builder."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from eventrecur_cli.models.recurrence import (
    DayIntervalRule,
    MonthlyByDayRule,
    MonthlyByPositionRule,
    RecurrenceKind,
    RecurrenceRuleError,
    RuleDefaults,
    UnknownRecurrenceKindError,
    WeeklyRule,
    build_rule,
    parse_kind,
)


class TestRuleVariants:
    def test_rules_are_frozen(self):
        rule = WeeklyRule(weekday=5, start_date=date(2024, 1, 1))
        with pytest.raises(ValidationError):
            rule.weekday = 3

    def test_effective_end_date_defaults_to_year_end(self):
        rule = WeeklyRule(start_date=date(2024, 3, 10))
        assert rule.effective_end_date == date(2024, 12, 31)

    def test_effective_end_date_uses_explicit_end(self):
        rule = WeeklyRule(start_date=date(2024, 3, 10), end_date=date(2025, 1, 5))
        assert rule.effective_end_date == date(2025, 1, 5)

    def test_starting_from_keeps_end_and_fields(self):
        rule = MonthlyByDayRule(
            day_of_month=15, start_date=date(2024, 1, 1), end_date=date(2024, 6, 30)
        )
        moved = rule.starting_from(date(2024, 4, 2))
        assert moved.start_date == date(2024, 4, 2)
        assert moved.end_date == date(2024, 6, 30)
        assert moved.day_of_month == 15
        assert rule.start_date == date(2024, 1, 1)

    def test_kind_compares_to_enum(self):
        assert DayIntervalRule(start_date=date(2024, 1, 1)).kind == RecurrenceKind.DAY_INTERVAL


class TestParseKind:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("WEEKLY", RecurrenceKind.WEEKLY),
            ("weekly", RecurrenceKind.WEEKLY),
            ("day-interval", RecurrenceKind.DAY_INTERVAL),
            ("SEMANAL", RecurrenceKind.WEEKLY),
            ("INTERVALO_DIAS", RecurrenceKind.DAY_INTERVAL),
            ("MENSAL_POSICAO", RecurrenceKind.MONTHLY_BY_POSITION),
            ("mensal_dia", RecurrenceKind.MONTHLY_BY_DAY),
            (RecurrenceKind.MONTHLY_BY_DAY, RecurrenceKind.MONTHLY_BY_DAY),
        ],
    )
    def test_known_kinds(self, raw, expected):
        assert parse_kind(raw) is expected

    @pytest.mark.parametrize("raw", [None, "", "  ", "YEARLY", "daily"])
    def test_unknown_kinds_raise(self, raw):
        with pytest.raises(UnknownRecurrenceKindError):
            parse_kind(raw)


class TestBuildRule:
    def test_builds_weekly_from_strings(self):
        rule = build_rule(
            {"kind": "WEEKLY", "weekday": 5, "start_date": "2024-01-01", "end_date": "2024-01-31"}
        )
        assert isinstance(rule, WeeklyRule)
        assert rule.weekday == 5
        assert rule.start_date == date(2024, 1, 1)
        assert rule.end_date == date(2024, 1, 31)

    def test_fills_defaults(self):
        assert build_rule({"kind": "WEEKLY", "start_date": "2024-01-01"}).weekday == 5
        assert build_rule({"kind": "DAY_INTERVAL", "start_date": "2024-01-01"}).interval_days == 7
        rule = build_rule({"kind": "MONTHLY_BY_POSITION", "start_date": "2024-01-01"})
        assert (rule.month_position, rule.weekday) == (1, 5)
        assert build_rule({"kind": "MONTHLY_BY_DAY", "start_date": "2024-01-01"}).day_of_month == 1

    def test_custom_defaults(self):
        defaults = RuleDefaults(weekday=0, interval_days=14)
        assert build_rule({"kind": "WEEKLY", "start_date": "2024-01-01"}, defaults).weekday == 0
        rule = build_rule({"kind": "DAY_INTERVAL", "start_date": "2024-01-01"}, defaults)
        assert rule.interval_days == 14

    def test_blank_values_are_missing(self):
        rule = build_rule(
            {"kind": "WEEKLY", "weekday": None, "start_date": "2024-01-01", "end_date": ""}
        )
        assert rule.weekday == 5
        assert rule.end_date is None

    def test_sunday_zero_is_not_treated_as_blank(self):
        rule = build_rule({"kind": "WEEKLY", "weekday": 0, "start_date": "2024-01-01"})
        assert rule.weekday == 0

    def test_fields_of_other_kinds_are_ignored(self):
        rule = build_rule(
            {
                "kind": "MONTHLY_BY_DAY",
                "day_of_month": 10,
                "weekday": 3,
                "interval_days": -4,
                "start_date": "2024-01-01",
            }
        )
        assert isinstance(rule, MonthlyByDayRule)
        assert not hasattr(rule, "weekday")
        assert not hasattr(rule, "interval_days")

    def test_accepts_stored_row_vocabulary(self):
        rule = build_rule(
            {
                "tipo_recorrencia": "MENSAL_POSICAO",
                "dia_semana": 0,
                "posicao_no_mes": 5,
                "intervalo_dias": None,
                "dia_do_mes": None,
                "data_inicio": "2024-02-01",
                "data_fim": None,
            }
        )
        assert isinstance(rule, MonthlyByPositionRule)
        assert (rule.month_position, rule.weekday) == (5, 0)
        assert rule.start_date == date(2024, 2, 1)

    def test_accepts_date_objects(self):
        rule = build_rule({"kind": "DAY_INTERVAL", "start_date": date(2024, 1, 1)})
        assert isinstance(rule, DayIntervalRule)

    @pytest.mark.parametrize("interval", [0, -1, -30])
    def test_non_positive_interval_rejected(self, interval):
        with pytest.raises(RecurrenceRuleError, match="interval_days"):
            build_rule({"kind": "DAY_INTERVAL", "interval_days": interval, "start_date": "2024-01-01"})

    @pytest.mark.parametrize("position", [0, 6, -1])
    def test_position_out_of_range_rejected(self, position):
        with pytest.raises(RecurrenceRuleError, match="month_position"):
            build_rule(
                {"kind": "MONTHLY_BY_POSITION", "month_position": position, "start_date": "2024-01-01"}
            )

    @pytest.mark.parametrize("weekday", [7, -1])
    def test_weekday_out_of_range_rejected(self, weekday):
        with pytest.raises(RecurrenceRuleError, match="weekday"):
            build_rule({"kind": "WEEKLY", "weekday": weekday, "start_date": "2024-01-01"})

    @pytest.mark.parametrize("day", [0, 32])
    def test_day_of_month_out_of_range_rejected(self, day):
        with pytest.raises(RecurrenceRuleError, match="day_of_month"):
            build_rule({"kind": "MONTHLY_BY_DAY", "day_of_month": day, "start_date": "2024-01-01"})

    def test_day_31_is_accepted(self):
        rule = build_rule({"kind": "MONTHLY_BY_DAY", "day_of_month": 31, "start_date": "2024-04-01"})
        assert rule.day_of_month == 31

    def test_malformed_date_rejected(self):
        with pytest.raises(RecurrenceRuleError, match="start_date"):
            build_rule({"kind": "WEEKLY", "start_date": "2024-13-45"})

    def test_missing_start_date_rejected(self):
        with pytest.raises(RecurrenceRuleError, match="start_date"):
            build_rule({"kind": "WEEKLY"})

    def test_missing_kind_raises_unknown_kind(self):
        with pytest.raises(UnknownRecurrenceKindError):
            build_rule({"start_date": "2024-01-01"})

    def test_unknown_kind_raises(self):
        with pytest.raises(UnknownRecurrenceKindError, match="YEARLY"):
            build_rule({"kind": "YEARLY", "start_date": "2024-01-01"})

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            build_rule({"kind": "WEEKLY", "weekday": 9, "start_date": "2024-01-01"})
