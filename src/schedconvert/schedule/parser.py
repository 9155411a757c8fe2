"""Parse Thai schedule listings into event records."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from .dates import convert_thai_year, thai_month_index
from .models import EventRecord, make_id

logger = logging.getLogger(__name__)

BLOCK_SPLIT = re.compile(r"_{3,}")
DATE_PARTS = re.compile(r"([0-9]{1,2})\s+(\S+)\s+([0-9]{2,4})")


@dataclass(frozen=True)
class FieldMatcher:
    """A named pattern whose first group is the captured field value."""

    name: str
    pattern: re.Pattern[str]

    def first(self, text: str) -> re.Match[str] | None:
        return self.pattern.search(text)

    def capture(self, text: str) -> str | None:
        """Return the trimmed first capture, or None when absent."""
        match = self.first(text)
        return match.group(1).strip() if match else None

    def capture_all(self, text: str) -> list[str]:
        return [m.group(1).strip() for m in self.pattern.finditer(text)]


TITLE = FieldMatcher("title", re.compile(r"⭕\s*(.+)"))
DATE = FieldMatcher("date", re.compile(r"วัน\s*:\s*([^\n]+)"))
TIME = FieldMatcher(
    "time",
    re.compile(r"เวลา\s*([0-9]{1,2}:[0-9]{2})\s*-\s*([0-9]{1,2}:[0-9]{2})"),
)
LOCATION = FieldMatcher("location", re.compile(r"@\s*(.+)"))
NOTE = FieldMatcher("note", re.compile(r"🔴\s*(.+)"))


def split_blocks(text: str) -> list[str]:
    """Split raw text on underscore separator lines, dropping empty blocks."""
    blocks = (block.strip() for block in BLOCK_SPLIT.split(text))
    return [block for block in blocks if block]


def _parse_clock(value: str) -> tuple[int, int]:
    hour, minute = value.split(":")
    return int(hour), int(minute)


def _parse_date_line(date_line: str) -> tuple[int, int, int] | None:
    """Decompose a date line into (year, month, day), or None."""
    parts = DATE_PARTS.search(date_line)
    if not parts:
        return None

    month_index = thai_month_index(parts.group(2))
    if month_index is None:
        return None

    return convert_thai_year(parts.group(3)), month_index + 1, int(parts.group(1))


@dataclass
class ScheduleParser:
    """
    Best-effort extractor for underscore-delimited schedule blocks.

    Blocks missing a title, date or time range are dropped without error.
    """

    id_factory: Callable[[], str] = make_id

    def parse(self, text: str) -> list[EventRecord]:
        """
        Parse every block of a schedule listing.

        Args:
            text: Raw listing, blocks separated by runs of 3+ underscores.

        Returns:
            Records in source block order.
        """
        blocks = split_blocks(text)
        events = []

        for index, block in enumerate(blocks, 1):
            record = self.parse_block(block)
            if record is None:
                logger.debug(f"Skipped block {index}/{len(blocks)}: {block[:40]!r}")
                continue
            events.append(record)

        logger.info(f"Parsed {len(events)} event(s) from {len(blocks)} block(s)")
        return events

    def parse_block(self, block: str) -> EventRecord | None:
        """Parse one trimmed block, returning None if it does not fit the grammar."""
        title = TITLE.capture(block)
        date_line = DATE.capture(block)
        time_match = TIME.first(block)

        if title is None or date_line is None or time_match is None:
            return None

        date_parts = _parse_date_line(date_line)
        if date_parts is None:
            return None

        year, month, day = date_parts
        start_hour, start_minute = _parse_clock(time_match.group(1))
        end_hour, end_minute = _parse_clock(time_match.group(2))

        try:
            day_start = datetime(year, month, day)
        except ValueError:
            # e.g. 31 ก.พ.
            return None

        # clock values past 23:59 roll over into the next day
        start = day_start + timedelta(hours=start_hour, minutes=start_minute)
        end = day_start + timedelta(hours=end_hour, minutes=end_minute)

        return EventRecord(
            id=self.id_factory(),
            title=title,
            start=start,
            end=end,
            location=LOCATION.capture(block) or "",
            notes=tuple(NOTE.capture_all(block)),
            original_text=block,
        )


def parse_schedule(text: str) -> list[EventRecord]:
    """Parse a schedule listing with the default parser."""
    return ScheduleParser().parse(text)
