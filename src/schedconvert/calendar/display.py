"""Display strings for event cards."""

from __future__ import annotations

from typing import Sequence

from ..schedule.dates import month_name_en
from ..schedule.models import EventRecord


def format_time_range(record: EventRecord) -> str:
    return f"{record.start:%H:%M} - {record.end:%H:%M}"


def month_badge(record: EventRecord) -> str:
    return month_name_en(record.start.month - 1)


def day_badge(record: EventRecord) -> str:
    return str(record.start.day)


def event_count_text(records: Sequence[EventRecord]) -> str:
    return f"{len(records)} items"
