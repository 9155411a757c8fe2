"""Google Calendar API client wrapper."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Sequence

import requests
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_random_exponential

from ..calendar.export import DEFAULT_TIMEZONE, format_notes
from ..schedule.models import EventRecord
from ..utils.rate_limiter import RateLimiter

if TYPE_CHECKING:
    from googleapiclient._apis.calendar.v3 import CalendarResource

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/calendar.events",
    "https://www.googleapis.com/auth/userinfo.email",
    "openid",
]
REVOKE_URL = "https://oauth2.googleapis.com/revoke"
TRANSIENT_STATUSES = {429, 500, 502, 503, 504}


class CalendarError(Exception):
    """Raised when the calendar service rejects a request."""


class NotSignedInError(CalendarError):
    """Raised when an operation needs a signed-in session."""


@dataclass
class CreateResult:
    """Outcome of a batch of create-event calls."""

    success: int = 0
    failed: int = 0


def normalize_attendees(emails: Iterable[str]) -> list[str]:
    """
    Clean an attendee list.

    Trims each address, drops blanks and anything without "@",
    and removes duplicates keeping the first occurrence.
    """
    result: list[str] = []
    for email in emails:
        email = email.strip()
        if email and "@" in email and email not in result:
            result.append(email)
    return result


def parse_attendee_list(raw: str) -> list[str]:
    """Parse a comma separated attendee list."""
    return normalize_attendees(raw.split(","))


def build_event_body(
    record: EventRecord,
    attendees: Sequence[str] | None = None,
    tz: str = DEFAULT_TIMEZONE,
) -> dict:
    """Build a Calendar API event resource for a record."""
    body: dict = {
        "summary": record.title,
        "start": {"dateTime": record.start.isoformat(), "timeZone": tz},
        "end": {"dateTime": record.end.isoformat(), "timeZone": tz},
    }
    if record.location:
        body["location"] = record.location

    description = format_notes(record.notes)
    if description:
        body["description"] = description

    emails = [email.strip() for email in attendees or [] if email.strip()]
    if emails:
        body["attendees"] = [{"email": email} for email in emails]

    return body


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, HttpError) and exc.resp.status in TRANSIENT_STATUSES


@dataclass
class GoogleCalendarClient:
    """
    Google Calendar API session for creating events.

    The session starts signed out; call sign_in() to run the OAuth flow
    and sign_out() to revoke it.
    """

    credentials_file: str = "credentials.json"
    token_file: str = "calendar-token.json"
    timezone: str = DEFAULT_TIMEZONE
    calendar_id: str = "primary"
    request_interval: float = 0.2
    _creds: Credentials | None = field(default=None, init=False)
    _service: CalendarResource | None = field(default=None, init=False)
    _user_email: str | None = field(default=None, init=False)
    _rate_limiter: RateLimiter | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        """Initialize the request pacing."""
        self._rate_limiter = RateLimiter(min_interval=self.request_interval)

    @property
    def is_signed_in(self) -> bool:
        return self._service is not None

    @property
    def user_email(self) -> str | None:
        return self._user_email

    def sign_in(self) -> None:
        """Authenticate with the Calendar API using OAuth 2.0."""
        self._creds = self._load_credentials()
        self._service = build("calendar", "v3", credentials=self._creds, cache_discovery=False)
        self._user_email = self._fetch_user_email()
        logger.info(f"Signed in to Google Calendar as {self._user_email or 'unknown user'}")

    def _load_credentials(self) -> Credentials:
        creds = None

        if os.path.exists(self.token_file):
            creds = Credentials.from_authorized_user_file(self.token_file, SCOPES)

        if creds and not creds.valid and creds.expired and creds.refresh_token:
            creds.refresh(Request())
            Path(self.token_file).write_text(creds.to_json())

        if not creds or not creds.valid:
            if not os.path.exists(self.credentials_file):
                raise FileNotFoundError(
                    f"Missing {self.credentials_file}. "
                    "Download from Google Cloud Console."
                )

            flow = InstalledAppFlow.from_client_secrets_file(
                self.credentials_file, SCOPES
            )
            creds = flow.run_local_server(port=0)

            # Save credentials for future runs
            Path(self.token_file).write_text(creds.to_json())
            logger.info(f"Saved credentials to {self.token_file}")

        return creds

    def _fetch_user_email(self) -> str | None:
        try:
            info = (
                build("oauth2", "v2", credentials=self._creds, cache_discovery=False)
                .userinfo()
                .get()
                .execute()
            )
        except HttpError as e:
            logger.warning(f"Could not fetch user info: {e}")
            return None
        return info.get("email")

    def sign_out(self) -> None:
        """Revoke the token and end the session."""
        if self._creds is not None and self._creds.token:
            try:
                requests.post(
                    REVOKE_URL,
                    params={"token": self._creds.token},
                    headers={"content-type": "application/x-www-form-urlencoded"},
                    timeout=10,
                )
            except requests.RequestException as e:
                logger.warning(f"Token revocation failed: {e}")

        token_path = Path(self.token_file)
        if token_path.exists():
            token_path.unlink()

        self._creds = None
        self._service = None
        self._user_email = None
        self._rate_limiter.reset()
        logger.info("Signed out of Google Calendar")

    @retry(
        wait=wait_random_exponential(min=1, max=30),
        stop=stop_after_attempt(3),
        retry=retry_if_exception(_is_transient),
        reraise=True,
    )
    def _insert_event(self, body: dict) -> dict:
        return (
            self._service.events()
            .insert(calendarId=self.calendar_id, body=body)
            .execute()
        )

    def create_event(
        self, record: EventRecord, attendees: Sequence[str] | None = None
    ) -> str:
        """
        Create one calendar event.

        Args:
            record: Event to create.
            attendees: Optional attendee email addresses.

        Returns:
            ID of the created event.

        Raises:
            NotSignedInError: If sign_in() has not been called.
            CalendarError: If the API rejects the event.
        """
        if not self.is_signed_in:
            raise NotSignedInError("Not signed in to Google Calendar")

        body = build_event_body(record, attendees, tz=self.timezone)
        try:
            created = self._insert_event(body)
        except HttpError as e:
            raise CalendarError(f"Failed to create event '{record.title}': {e}") from e

        logger.debug(f"Created event {created.get('id')} for {record.title!r}")
        return created.get("id", "")

    def create_events(
        self, records: Sequence[EventRecord], attendees: Sequence[str] | None = None
    ) -> CreateResult:
        """
        Create events one by one, pacing requests.

        A failed event is counted and logged; the remaining events are
        still attempted.
        """
        if not self.is_signed_in:
            raise NotSignedInError("Not signed in to Google Calendar")

        result = CreateResult()
        for record in records:
            self._rate_limiter.acquire()
            try:
                self.create_event(record, attendees)
            except CalendarError as e:
                result.failed += 1
                logger.error(f"Failed to create event: {record.title}: {e}")
            else:
                result.success += 1

        logger.info(f"Created {result.success} event(s), {result.failed} failed")
        return result
