"""Output formatters for different formats."""

import json
from datetime import date
from typing import Any

import yaml
from rich.table import Table

from eventrecur_cli.models.event import RecurrencePreview
from eventrecur_cli.utils.recurrence import weekday_of
from eventrecur_cli.utils.recurrence_labels import get_weekday_abbreviation
from eventrecur_cli.utils.ui.console import get_console


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "json-pretty":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    elif output_format == "quiet":
        format_quiet(data)
    else:
        format_table(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    console = get_console()
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    console = get_console()
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    # Columns come from the first item
    columns = list(items[0].keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*[_format_value(item.get(col, "")) for col in columns])

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _format_value(value))

    get_console().print(table)


def format_quiet(data: Any) -> None:
    """Format output in quiet mode (one date or id per line)."""
    if isinstance(data, list):
        for item in data:
            if isinstance(item, dict):
                value = item.get("date") or item.get("event_at") or item.get("id")
                if value is not None:
                    print(value)
            else:
                print(item)
    elif isinstance(data, dict):
        if "dates" in data:
            format_quiet(data["dates"])
        elif "summary" in data:
            print(data["summary"])
        elif "id" in data:
            print(data["id"])


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_console().print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    get_console().print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_occurrence(day: date, language: str = "en", today: date | None = None) -> str:
    """Format an occurrence compactly: DD/MM (Ddd), with the year when it differs."""
    today = today or date.today()
    day_str = day.strftime("%d/%m") if day.year == today.year else day.strftime("%d/%m/%Y")
    return f"{day_str} ({get_weekday_abbreviation(weekday_of(day), language)})"


def format_preview(preview: RecurrencePreview, language: str = "en") -> None:
    """Print a rule summary followed by its first occurrences."""
    console = get_console()
    console.print(f"[bold]{preview.summary}[/bold]")

    if not preview.dates:
        console.print("[yellow]No occurrences in this period[/yellow]")
        return

    count = f"{len(preview.dates)}+" if preview.truncated else str(len(preview.dates))
    console.print(f"[dim]Upcoming ({count} of {preview.total}):[/dim]")
    badges = "  ".join(f"[cyan]{format_occurrence(d, language)}[/cyan]" for d in preview.dates)
    if preview.truncated:
        badges += "  [dim]...[/dim]"
    console.print(badges)
