"""FastAPI endpoints for the schedule converter."""

from __future__ import annotations

import urllib.parse
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, HTTPException, Depends, Security
from fastapi.responses import Response
from fastapi.security import APIKeyHeader
from pydantic import BaseModel

from . import __version__
from .config import get_settings, Settings
from .schedule import parse_schedule
from .calendar import (
    build_calendar_document,
    build_calendar_link,
    day_badge,
    format_notes,
    format_time_range,
    month_badge,
)


# Pydantic models for API
class ScheduleRequest(BaseModel):
    """Request body carrying raw schedule text."""

    text: str
    filename: Optional[str] = None


class EventResponse(BaseModel):
    """Event in API response."""

    id: str
    title: str
    start: datetime
    end: datetime
    location: str
    notes: list[str]
    details: str
    time_range: str
    month: str
    day: str
    calendar_link: str


class ParseResponse(BaseModel):
    """Response for schedule parsing."""

    events: list[EventResponse]
    count: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


# API key authentication
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def get_api_key(
    api_key: str | None = Security(api_key_header),
    settings: Settings = Depends(get_settings),
) -> str | None:
    """Validate API key if configured."""
    if settings.api_key and api_key != settings.api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")
    return api_key


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and an RFC 6266 UTF-8 filename."""
    safe = filename.isascii() and filename.isprintable() and '"' not in filename
    fallback = filename if safe else "schedule.ics"
    quoted = urllib.parse.quote(filename, safe="")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quoted}"


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="SchedConvert API",
        description="Thai schedule listings to Google Calendar links and ICS files",
        version=__version__,
    )

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=__version__)

    @app.post("/api/parse", response_model=ParseResponse)
    async def parse(
        request: ScheduleRequest,
        _: str | None = Depends(get_api_key),
        settings: Settings = Depends(get_settings),
    ) -> ParseResponse:
        """Parse schedule text into events with calendar links."""
        events = parse_schedule(request.text)
        event_responses = [
            EventResponse(
                id=e.id,
                title=e.title,
                start=e.start,
                end=e.end,
                location=e.location,
                notes=list(e.notes),
                details=format_notes(e.notes),
                time_range=format_time_range(e),
                month=month_badge(e),
                day=day_badge(e),
                calendar_link=build_calendar_link(e, tz=settings.timezone),
            )
            for e in events
        ]

        return ParseResponse(events=event_responses, count=len(event_responses))

    @app.post("/api/ics")
    async def ics(
        request: ScheduleRequest,
        _: str | None = Depends(get_api_key),
        settings: Settings = Depends(get_settings),
    ) -> Response:
        """Parse schedule text and return it as an ICS attachment."""
        events = parse_schedule(request.text)
        if not events:
            raise HTTPException(status_code=400, detail="No events found in text")

        filename = request.filename or settings.ics_filename
        return Response(
            content=build_calendar_document(events, tz=settings.timezone).encode("utf-8"),
            media_type="text/calendar; charset=utf-8",
            headers={"Content-Disposition": content_disposition(filename)},
        )

    return app


# For direct uvicorn usage
app = create_app()
