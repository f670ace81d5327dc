"""Commands 'dates', 'describe', 'preview', 'events' and 'kinds' of eventrecur-cli."""

import json
from datetime import date
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from eventrecur_cli.config import ConfigManager, get_config_manager
from eventrecur_cli.models.event import EventTemplate
from eventrecur_cli.models.recurrence import (
    LAST_POSITION,
    RecurrenceKind,
    RecurrenceRule,
    build_rule,
)
from eventrecur_cli.services.event_service import build_event_payloads, preview_rule
from eventrecur_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from eventrecur_cli.utils.recurrence import generate_dates, weekday_of
from eventrecur_cli.utils.recurrence_labels import (
    WEEKDAY_NAMES,
    describe_rule,
    get_kind_label,
    get_weekday_name,
)
from eventrecur_cli.utils.ui.console import get_console
from eventrecur_cli.utils.ui.formatters import (
    format_output,
    format_preview,
    format_warning,
)

from .decorators import AppError, command_wrapper

console = get_console()

KIND_OPTION = typer.Option(
    None,
    "--kind",
    "-k",
    help="WEEKLY, DAY_INTERVAL, MONTHLY_BY_POSITION or MONTHLY_BY_DAY (default: WEEKLY)",
)
WEEKDAY_OPTION = typer.Option(
    None, "--weekday", "-w", help="Weekday number (0=Sunday) or name, e.g. 5 or friday"
)
INTERVAL_OPTION = typer.Option(None, "--interval", "-i", help="Days between events")
POSITION_OPTION = typer.Option(
    None, "--position", "-p", help="Occurrence in the month: 1-4 or 'last'"
)
DAY_OPTION = typer.Option(None, "--day", "-d", help="Day of the month (1-31)")
START_OPTION = typer.Option(None, "--start", "-s", help="Start date YYYY-MM-DD (default: today)")
END_OPTION = typer.Option(
    None, "--end", "-e", help="End date YYYY-MM-DD (default: end of the start year)"
)
FILE_OPTION = typer.Option(
    None, "--from-file", "-f", help="JSON or YAML file describing the rule"
)
LANG_OPTION = typer.Option(None, "--lang", "-l", help="Label language: en or pt")
OUTPUT_OPTION = typer.Option(
    None, "--output", "-o", help="Output format: table, json, json-pretty, yaml, quiet"
)
PROFILE_OPTION = typer.Option("default", "--profile", help="Profile name")

_LAST_NAMES = ("last", "ultima", "última", str(LAST_POSITION))


def parse_weekday(value: str) -> int:
    """Resolve a weekday number or an English/Portuguese (abbreviated) name."""
    text = value.strip().lower()
    if text.lstrip("-").isdigit():
        return int(text)
    for names in WEEKDAY_NAMES.values():
        for index, name in enumerate(names):
            if text in (name.lower(), name.lower()[:3]):
                return index
    raise AppError(f"Unknown weekday '{value}'", exit_code=ERROR_INVALID_ARGS)


def parse_position(value: str) -> int:
    """Resolve a position: 1-4 (ordinal suffixes allowed) or 'last'."""
    text = value.strip().lower()
    if text in _LAST_NAMES:
        return LAST_POSITION
    digits = text.rstrip("stndrdhª")
    if digits.lstrip("-").isdigit():
        return int(digits)
    raise AppError(f"Unknown position '{value}'", exit_code=ERROR_INVALID_ARGS)


def read_rule_file(path: Path) -> dict[str, Any]:
    """Load a rule mapping from a JSON or YAML file."""
    if not path.exists():
        raise AppError(f"Rule file not found: {path}", exit_code=ERROR_NOT_FOUND)

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise AppError(
            f"Could not parse rule file {path}: {e}", exit_code=ERROR_INVALID_ARGS
        ) from e

    if not isinstance(data, dict):
        raise AppError(
            f"Rule file {path} must contain a mapping", exit_code=ERROR_INVALID_ARGS
        )
    return data


def load_rule(
    config_manager: ConfigManager,
    kind: Optional[str] = None,
    weekday: Optional[str] = None,
    interval: Optional[int] = None,
    position: Optional[str] = None,
    day: Optional[int] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
    from_file: Optional[Path] = None,
) -> RecurrenceRule:
    """Build a rule from a rule file and/or command-line options.

    Options given on the command line take precedence over the file.
    """
    data: dict[str, Any] = read_rule_file(from_file) if from_file is not None else {}

    overrides = {
        "kind": kind,
        "weekday": parse_weekday(weekday) if weekday is not None else None,
        "interval_days": interval,
        "month_position": parse_position(position) if position is not None else None,
        "day_of_month": day,
        "start_date": start,
        "end_date": end,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})

    if not _has_any(data, "kind", "tipo_recorrencia"):
        data["kind"] = RecurrenceKind.WEEKLY.value
    if not _has_any(data, "start_date", "data_inicio"):
        data["start_date"] = date.today().isoformat()

    return build_rule(data, defaults=config_manager.config.rules)


def _has_any(data: dict[str, Any], *keys: str) -> bool:
    return any(data.get(k) not in (None, "") for k in keys)


def _resolve(config_manager: ConfigManager, lang: Optional[str], output: Optional[str]):
    config = config_manager.config
    return lang or config.ui.language, output or config.output.format


@command_wrapper
def dates(
    kind: Optional[str] = KIND_OPTION,
    weekday: Optional[str] = WEEKDAY_OPTION,
    interval: Optional[int] = INTERVAL_OPTION,
    position: Optional[str] = POSITION_OPTION,
    day: Optional[int] = DAY_OPTION,
    start: Optional[str] = START_OPTION,
    end: Optional[str] = END_OPTION,
    from_file: Optional[Path] = FILE_OPTION,
    lang: Optional[str] = LANG_OPTION,
    output: Optional[str] = OUTPUT_OPTION,
    profile: str = PROFILE_OPTION,
) -> None:
    """List every date a recurrence rule generates."""
    config_manager = get_config_manager(profile)
    language, output_format = _resolve(config_manager, lang, output)
    rule = load_rule(
        config_manager, kind, weekday, interval, position, day, start, end, from_file
    )

    occurrences = [
        {"date": d.isoformat(), "weekday": get_weekday_name(weekday_of(d), language)}
        for d in generate_dates(rule)
    ]
    if not occurrences and output_format == "table":
        format_warning("No occurrences in this period")
        return
    format_output(occurrences, output_format)


@command_wrapper
def describe(
    kind: Optional[str] = KIND_OPTION,
    weekday: Optional[str] = WEEKDAY_OPTION,
    interval: Optional[int] = INTERVAL_OPTION,
    position: Optional[str] = POSITION_OPTION,
    day: Optional[int] = DAY_OPTION,
    start: Optional[str] = START_OPTION,
    end: Optional[str] = END_OPTION,
    from_file: Optional[Path] = FILE_OPTION,
    lang: Optional[str] = LANG_OPTION,
    output: Optional[str] = OUTPUT_OPTION,
    profile: str = PROFILE_OPTION,
) -> None:
    """Describe a recurrence rule in one sentence."""
    config_manager = get_config_manager(profile)
    language, output_format = _resolve(config_manager, lang, output)
    rule = load_rule(
        config_manager, kind, weekday, interval, position, day, start, end, from_file
    )

    summary = describe_rule(rule, language)
    if output_format == "table":
        console.print(summary)
        return
    format_output(
        {"summary": summary, "rule": rule.model_dump(mode="json")}, output_format
    )


@command_wrapper
def preview(
    kind: Optional[str] = KIND_OPTION,
    weekday: Optional[str] = WEEKDAY_OPTION,
    interval: Optional[int] = INTERVAL_OPTION,
    position: Optional[str] = POSITION_OPTION,
    day: Optional[int] = DAY_OPTION,
    start: Optional[str] = START_OPTION,
    end: Optional[str] = END_OPTION,
    from_file: Optional[Path] = FILE_OPTION,
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", min=1, help="Number of dates to show"
    ),
    lang: Optional[str] = LANG_OPTION,
    output: Optional[str] = OUTPUT_OPTION,
    profile: str = PROFILE_OPTION,
) -> None:
    """Show a rule summary and its first few dates."""
    config_manager = get_config_manager(profile)
    language, output_format = _resolve(config_manager, lang, output)
    rule = load_rule(
        config_manager, kind, weekday, interval, position, day, start, end, from_file
    )

    result = preview_rule(
        rule, limit=limit or config_manager.config.preview.limit, language=language
    )
    if output_format == "table":
        format_preview(result, language)
        return
    format_output(result.model_dump(mode="json"), output_format)


@command_wrapper
def events(
    title: str = typer.Option(..., "--title", "-t", help="Event title"),
    event_time: Optional[str] = typer.Option(
        None, "--time", help="Time of day HH:MM (default from config)"
    ),
    description: Optional[str] = typer.Option(None, "--description", help="Event description"),
    event_type: Optional[str] = typer.Option(None, "--type", help="Event type name"),
    group_id: Optional[str] = typer.Option(None, "--group", help="Owning group id"),
    rule_id: Optional[str] = typer.Option(None, "--rule-id", help="Recurring rule id"),
    kind: Optional[str] = KIND_OPTION,
    weekday: Optional[str] = WEEKDAY_OPTION,
    interval: Optional[int] = INTERVAL_OPTION,
    position: Optional[str] = POSITION_OPTION,
    day: Optional[int] = DAY_OPTION,
    start: Optional[str] = START_OPTION,
    end: Optional[str] = END_OPTION,
    from_file: Optional[Path] = FILE_OPTION,
    output: Optional[str] = OUTPUT_OPTION,
    profile: str = PROFILE_OPTION,
) -> None:
    """Print one event row per generated date, ready for a batch insert."""
    config_manager = get_config_manager(profile)
    output_format = output or config_manager.config.output.format
    rule = load_rule(
        config_manager, kind, weekday, interval, position, day, start, end, from_file
    )

    try:
        template = EventTemplate(
            title=title,
            event_time=event_time or config_manager.config.events.time,
            description=description,
            event_type=event_type,
            group_id=group_id,
        )
    except ValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        raise AppError(f"Invalid event: {messages}", exit_code=ERROR_INVALID_ARGS) from e

    payloads = [p.model_dump(mode="json") for p in build_event_payloads(rule, template, rule_id)]
    if not payloads and output_format == "table":
        format_warning("No events were generated with this rule")
        return
    format_output(payloads, output_format)


@command_wrapper
def kinds(
    lang: Optional[str] = LANG_OPTION,
    output: Optional[str] = OUTPUT_OPTION,
    profile: str = PROFILE_OPTION,
) -> None:
    """List the supported recurrence kinds."""
    config_manager = get_config_manager(profile)
    language, output_format = _resolve(config_manager, lang, output)
    rows = [
        {"kind": k.value, "label": get_kind_label(k, language)} for k in RecurrenceKind
    ]
    format_output(rows, output_format)
