"""Event records produced by the schedule parser."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime


def make_id() -> str:
    """Generate a unique record id."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class EventRecord:
    """One event extracted from a schedule block."""

    title: str
    start: datetime  # wall-clock, schedule author's zone
    end: datetime
    location: str = ""
    notes: tuple[str, ...] = ()
    original_text: str = ""
    id: str = field(default_factory=make_id)
