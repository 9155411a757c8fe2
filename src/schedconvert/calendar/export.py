"""Google Calendar link and ICS document generation."""

from __future__ import annotations

import logging
import urllib.parse
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from ..schedule.dates import format_date_time_stamp
from ..schedule.models import EventRecord

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Asia/Bangkok"
GOOGLE_CALENDAR_URL = "https://www.google.com/calendar/render"
PRODUCT_ID = "-//ScheduleConverterPro//TH"
UID_DOMAIN = "schedulepro"
NOTES_HEADER = "หมายเหตุ:"


def format_notes(notes: Sequence[str]) -> str:
    """Render notes as a header line plus one "- note" line each."""
    if not notes:
        return ""
    return "\n".join([NOTES_HEADER, *(f"- {note}" for note in notes)])


def format_date_pair(record: EventRecord) -> str:
    """The start/end pair used by the Google "dates" parameter."""
    return f"{format_date_time_stamp(record.start)}/{format_date_time_stamp(record.end)}"


def build_calendar_link(record: EventRecord, tz: str = DEFAULT_TIMEZONE) -> str:
    """
    Generate a Google Calendar event template link.

    Location and details are left out entirely when empty.

    Args:
        record: Event to link.
        tz: Zone the wall-clock times are expressed in.

    Returns:
        Google Calendar URL.
    """
    params = [
        ("action", "TEMPLATE"),
        ("text", record.title),
        ("dates", format_date_pair(record)),
    ]
    if record.location:
        params.append(("location", record.location))

    details = format_notes(record.notes)
    if details:
        params.append(("details", details))

    params.extend([("ctz", tz), ("sf", "true"), ("output", "xml")])

    query_string = urllib.parse.urlencode(params)
    return f"{GOOGLE_CALENDAR_URL}?{query_string}"


def _vevent_lines(record: EventRecord, tz: str, stamp: str) -> list[str]:
    lines = [
        "BEGIN:VEVENT",
        f"UID:{record.id}@{UID_DOMAIN}",
        f"DTSTAMP:{stamp}Z",
        f"DTSTART;TZID={tz}:{format_date_time_stamp(record.start)}",
        f"DTEND;TZID={tz}:{format_date_time_stamp(record.end)}",
        f"SUMMARY:{record.title}",
    ]
    if record.location:
        lines.append(f"LOCATION:{record.location}")

    description = format_notes(record.notes).replace("\n", "\\n")
    if description:
        lines.append(f"DESCRIPTION:{description}")

    lines.append("END:VEVENT")
    return lines


def build_calendar_document(
    records: Sequence[EventRecord],
    tz: str = DEFAULT_TIMEZONE,
    now: datetime | None = None,
) -> str:
    """
    Build an ICS calendar with one VEVENT per record, in input order.

    Args:
        records: Events to include.
        tz: TZID attached to DTSTART/DTEND.
        now: Render instant for DTSTAMP (defaults to the current UTC time).

    Returns:
        CRLF-joined iCalendar text.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    stamp = format_date_time_stamp(now)

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODUCT_ID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
    ]
    for record in records:
        lines.extend(_vevent_lines(record, tz, stamp))
    lines.append("END:VCALENDAR")

    return "\r\n".join(lines)


def export_file(
    records: Sequence[EventRecord],
    filename: str | Path = "schedule.ics",
    tz: str = DEFAULT_TIMEZONE,
) -> Path:
    """
    Write the ICS document for records to disk.

    Raises:
        ValueError: If there are no records to export.
    """
    if not records:
        raise ValueError("No events to export")

    path = Path(filename)
    path.write_bytes(build_calendar_document(records, tz=tz).encode("utf-8"))
    logger.info(f"Wrote {len(records)} event(s) to {path}")
    return path
