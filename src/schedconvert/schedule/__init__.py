"""Schedule text parsing module."""

from .models import EventRecord
from .parser import ScheduleParser, parse_schedule
from .dates import convert_thai_year, format_date_time_stamp

__all__ = [
    "EventRecord",
    "ScheduleParser",
    "parse_schedule",
    "convert_thai_year",
    "format_date_time_stamp",
]
