"""Command-line interface for the schedule converter."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer

from .config import get_settings
from .schedule import EventRecord, parse_schedule
from .calendar import (
    build_calendar_link,
    day_badge,
    event_count_text,
    export_file,
    format_time_range,
    month_badge,
)
from .gcal import CalendarError, GoogleCalendarClient, parse_attendee_list

app = typer.Typer(
    name="schedconvert",
    help="Convert Thai schedule listings into Google Calendar links and ICS files",
    no_args_is_help=True,
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _read_input(text: Optional[str], file: Optional[Path], stdin: bool) -> str:
    if stdin:
        return sys.stdin.read()
    if file is not None:
        return file.read_text(encoding="utf-8")
    if text:
        return text

    typer.echo("Error: Provide text as argument, --file or --stdin", err=True)
    raise typer.Exit(1)


def _parse_or_exit(raw: str) -> list[EventRecord]:
    events = parse_schedule(raw)
    if not events:
        typer.echo("No events found in input", err=True)
        raise typer.Exit(1)
    return events


@app.command()
def convert(
    text: Optional[str] = typer.Argument(None, help="Schedule text to convert"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read schedule from a file"),
    stdin: bool = typer.Option(False, "--stdin", help="Read from stdin"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Parse a schedule and print each event with its Google Calendar link."""
    setup_logging(verbose)
    settings = get_settings()

    events = _parse_or_exit(_read_input(text, file, stdin))

    typer.echo(event_count_text(events))
    for event in events:
        typer.echo("")
        typer.echo(f"[{day_badge(event)} {month_badge(event)}] {event.title}")
        typer.echo(f"  Time: {format_time_range(event)}")
        if event.location:
            typer.echo(f"  Location: {event.location}")
        for note in event.notes:
            typer.echo(f"  - {note}")
        typer.echo(f"  {build_calendar_link(event, tz=settings.timezone)}")


@app.command()
def export(
    text: Optional[str] = typer.Argument(None, help="Schedule text to convert"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read schedule from a file"),
    stdin: bool = typer.Option(False, "--stdin", help="Read from stdin"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="ICS file to write (default from config)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Write the parsed schedule to an ICS file."""
    setup_logging(verbose)
    settings = get_settings()

    events = _parse_or_exit(_read_input(text, file, stdin))
    path = export_file(events, output or settings.ics_filename, tz=settings.timezone)
    typer.echo(f"Exported {len(events)} event(s) to {path}")


@app.command()
def push(
    text: Optional[str] = typer.Argument(None, help="Schedule text to convert"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read schedule from a file"),
    stdin: bool = typer.Option(False, "--stdin", help="Read from stdin"),
    attendee: Optional[List[str]] = typer.Option(
        None, "--attendee", "-a", help="Attendee email (repeatable, default from config)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Create the parsed events in Google Calendar."""
    setup_logging(verbose)
    logger = logging.getLogger(__name__)
    settings = get_settings()

    events = _parse_or_exit(_read_input(text, file, stdin))
    attendees = parse_attendee_list(",".join(attendee) if attendee else settings.shared_emails)

    client = GoogleCalendarClient(
        credentials_file=settings.google_credentials_file,
        token_file=settings.google_token_file,
        timezone=settings.timezone,
        request_interval=settings.create_request_interval,
    )

    try:
        client.sign_in()
        result = client.create_events(events, attendees)
    except (CalendarError, FileNotFoundError) as e:
        logger.error(f"Google Calendar error: {e}")
        typer.echo(f"❌ Failed to add events to calendar: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✅ Successfully added {result.success} event(s) to your Google Calendar")
    if result.failed:
        typer.echo(f"{result.failed} event(s) failed")
    if attendees:
        typer.echo(f"Shared with {len(attendees)} attendee(s)")

    if result.failed:
        raise typer.Exit(1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="API host (default from config)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="API port (default from config)"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
) -> None:
    """Start the API server (requires FastAPI)."""
    try:
        import uvicorn
        from .api import create_app
    except ImportError:
        typer.echo("Error: Install API dependencies: pip install 'schedconvert[api]'", err=True)
        raise typer.Exit(1)

    settings = get_settings()
    app = create_app()
    uvicorn.run(app, host=host or settings.api_host, port=port or settings.api_port, reload=reload)


@app.command()
def config(
    validate: bool = typer.Option(False, "--validate", help="Validate configuration"),
    show: bool = typer.Option(False, "--show", help="Show current config (masks secrets)"),
) -> None:
    """Check or display configuration."""
    try:
        settings = get_settings()

        if validate:
            if not Path(settings.google_credentials_file).exists():
                typer.echo(
                    f"⚠️  {settings.google_credentials_file} not found; "
                    "'push' will not be able to sign in"
                )
            typer.echo("✅ Configuration is valid")

        if show:
            typer.echo("\nCurrent Configuration:")
            typer.echo(f"  Timezone: {settings.timezone}")
            typer.echo(f"  ICS Filename: {settings.ics_filename}")
            typer.echo(f"  Credentials File: {settings.google_credentials_file}")
            typer.echo(f"  Token File: {settings.google_token_file}")
            typer.echo(f"  Request Interval: {settings.create_request_interval}s")
            typer.echo(f"  Shared Emails: {settings.shared_emails or '(not set)'}")
            typer.echo(f"  API Key: {'✓ set' if settings.api_key else '✗ not set'}")

    except Exception as e:
        typer.echo(f"❌ Configuration error: {e}", err=True)
        raise typer.Exit(1)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
