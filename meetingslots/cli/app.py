"""
Main CLI application using Typer.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Annotated, List, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.calendar_file import CalendarFileClient
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import ConfigurationError, SlotFinderError
from ..domain.models import format_minutes
from ..services.meeting_scheduler import MeetingSchedulerService, SchedulingResult

app = typer.Typer(
    name="meetingslots",
    help="Find free meeting slots in a day of calendar events",
    add_completion=False
)

console = Console()

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the configuration file.

    An explicitly given file must exist; without one, a missing default
    config falls back to built-in defaults.
    """
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    config_path = get_default_config_path()
    if config_path.exists():
        return AppConfig.load_from_yaml(config_path)

    logger.debug("No config file at %s, using defaults", config_path)
    return AppConfig()


def _parse_day(value: Optional[str], tz: str) -> date:
    """Parse a YYYY-MM-DD option, defaulting to today."""
    if not value:
        return pendulum.now(tz).date()

    try:
        return pendulum.from_format(value, "YYYY-MM-DD", tz=tz).date()
    except ValueError as e:
        raise ConfigurationError(f"Invalid date '{value}', expected YYYY-MM-DD: {e}") from e


def _render_result(result: SchedulingResult, day: date) -> None:
    request = result.request

    if request.optional_attendees and not result.optional_attendees_honored:
        console.print(
            "[yellow]⚠ Optional attendees dropped: no slot fits everybody.[/yellow]"
        )

    if not result.slots:
        console.print(
            "[yellow]⚠ No free slots found.[/yellow]\n"
            "Try a shorter duration or fewer participants."
        )
        return

    table = Table(
        title=f"Free slots on {day.isoformat()}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Start", style="bold green")
    table.add_column("End", style="bold green")
    table.add_column("Length", justify="right", style="dim")

    for slot in result.slots:
        table.add_row(
            format_minutes(slot.start),
            format_minutes(slot.end),
            f"{slot.duration} min"
        )

    console.print(f"[bold green]✓ {len(result.slots)} free slot(s) found:[/bold green]")
    console.print(table)


@app.command()
def find(
    participants: Annotated[Optional[List[str]], typer.Argument(help="Required participants (aliases or emails).")] = None,
    optional: Annotated[Optional[List[str]], typer.Option("--optional", "-o", help="Optional participant; repeat for more.")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Meeting duration in minutes")] = None,
    day: Annotated[Optional[str], typer.Option("--date", help="Day to schedule on (YYYY-MM-DD). Defaults to today.")] = None,
    calendar: Annotated[Optional[Path], typer.Option("--calendar", help="Calendar file (JSON or YAML).")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Find free meeting slots for a day.

    Examples:

        meetingslots find alice bob --duration 60 --calendar events.yaml

        meetingslots find alice -o carol --date 2024-11-25
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file)
        tz = config.timezone

        calendar_path = calendar or config.calendar_file
        if calendar_path is None:
            raise ConfigurationError(
                "No calendar file given. Use --calendar or set calendar_file in the config."
            )

        schedule_day = _parse_day(day, tz)
        min_duration = duration if duration is not None else config.defaults.duration_minutes

        required_emails = config.resolve_participants(participants or [])
        optional_emails = config.resolve_participants(optional or [])

        console.print(f"   Required: {', '.join(required_emails) or '-'}")
        console.print(f"   Optional: {', '.join(optional_emails) or '-'}")
        console.print(f"   Duration: {min_duration} min")
        console.print()

        service = MeetingSchedulerService(event_source=CalendarFileClient(calendar_path))
        result = service.find_slots(
            day=schedule_day,
            timezone=tz,
            required=required_emails,
            optional=optional_emails,
            duration=min_duration,
        )

    except (SlotFinderError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    _render_result(result, schedule_day)


@app.command()
def list_colleagues(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    List all configured colleagues.
    """
    try:
        config = _load_config(config_file)
    except (SlotFinderError, FileNotFoundError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not config.colleagues:
        console.print("[yellow]No colleagues defined in the config file.[/yellow]")
        return

    table = Table(
        title="Configured colleagues",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Name (alias)", style="bold yellow")
    table.add_column("Email", style="dim")

    for colleague in config.colleagues:
        table.add_row(colleague.name, colleague.email)

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"[bold cyan]meetingslots[/bold cyan] version [bold]{__version__}[/bold]")


if __name__ == "__main__":
    app()
