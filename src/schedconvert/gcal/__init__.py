"""Google Calendar API integration module."""

from .client import (
    CalendarError,
    CreateResult,
    GoogleCalendarClient,
    NotSignedInError,
    parse_attendee_list,
)

__all__ = [
    "CalendarError",
    "CreateResult",
    "GoogleCalendarClient",
    "NotSignedInError",
    "parse_attendee_list",
]
