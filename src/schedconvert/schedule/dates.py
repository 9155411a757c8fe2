"""Thai calendar helpers and timestamp formatting."""

from __future__ import annotations

from datetime import datetime

THAI_MONTHS: dict[str, int] = {
    "ม.ค.": 0,
    "ก.พ.": 1,
    "มี.ค.": 2,
    "เม.ย.": 3,
    "พ.ค.": 4,
    "มิ.ย.": 5,
    "ก.ค.": 6,
    "ส.ค.": 7,
    "ก.ย.": 8,
    "ต.ค.": 9,
    "พ.ย.": 10,
    "ธ.ค.": 11,
}

SHORT_MONTH_NAMES_EN = [
    "JAN",
    "FEB",
    "MAR",
    "APR",
    "MAY",
    "JUN",
    "JUL",
    "AUG",
    "SEP",
    "OCT",
    "NOV",
    "DEC",
]

BUDDHIST_ERA_OFFSET = 543
SHORT_YEAR_BASE = 2500


def thai_month_index(token: str) -> int | None:
    """Map a Thai month abbreviation to a zero-based month index."""
    return THAI_MONTHS.get(token)


def convert_thai_year(year_fragment: str) -> int:
    """
    Convert a Buddhist-Era year fragment to a Gregorian year.

    Two-digit fragments are short BE years ("68" is 2568).

    Args:
        year_fragment: Digits of the BE year, e.g. "68" or "2568".

    Returns:
        Gregorian year.
    """
    year = int(year_fragment, 10)
    if year < 100:
        year += SHORT_YEAR_BASE
    return year - BUDDHIST_ERA_OFFSET


def format_date_time_stamp(value: datetime) -> str:
    """Format as YYYYMMDDTHHMMSS with the seconds forced to 00."""
    # strftime("%Y") does not zero-pad years below 1000 on every platform
    return (
        f"{value.year:04d}{value.month:02d}{value.day:02d}"
        f"T{value.hour:02d}{value.minute:02d}00"
    )


def month_name_en(month_index: int) -> str:
    """Short English month name for a zero-based index, or "" if out of range."""
    if 0 <= month_index < len(SHORT_MONTH_NAMES_EN):
        return SHORT_MONTH_NAMES_EN[month_index]
    return ""
