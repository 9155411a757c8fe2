"""Calendar export module."""

from .display import day_badge, event_count_text, format_time_range, month_badge
from .export import (
    build_calendar_document,
    build_calendar_link,
    export_file,
    format_notes,
)

__all__ = [
    "build_calendar_document",
    "build_calendar_link",
    "export_file",
    "format_notes",
    "format_time_range",
    "month_badge",
    "day_badge",
    "event_count_text",
]
