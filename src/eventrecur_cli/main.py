"""Main entry point for EventRecur CLI."""

import typer

from eventrecur_cli import __version__
from eventrecur_cli.commands import config_command, rules_command
from eventrecur_cli.utils.typer_helpers import SuggestingGroup
from eventrecur_cli.utils.ui.console import get_console

# Create main app with custom group class
app = typer.Typer(
    name="eventrecur",
    cls=SuggestingGroup,
    help="Generate and preview the dates of recurring ministry events",
    no_args_is_help=True,
)

console = get_console()


# Add subcommands
app.add_typer(config_command.app, name="config", help="Configuration management")

# Add top-level rule commands
app.command("dates")(rules_command.dates)
app.command("describe")(rules_command.describe)
app.command("preview")(rules_command.preview)
app.command("events")(rules_command.events)
app.command("kinds")(rules_command.kinds)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]EventRecur CLI[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    main()
