from __future__ import annotations

from datetime import datetime

import pytest

from schedconvert.schedule import EventRecord

SAMPLE_BLOCK = "⭕ Test\nวัน : อา. 9 พ.ย. 68\nเวลา 19:00 - 21:00 น.\n@ Venue\n🔴 Bring ID"


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_BLOCK


@pytest.fixture
def record() -> EventRecord:
    return EventRecord(
        id="abc-123",
        title="Test",
        start=datetime(2025, 11, 9, 19, 0),
        end=datetime(2025, 11, 9, 21, 0),
        location="Venue",
        notes=("Bring ID", "Arrive early"),
        original_text=SAMPLE_BLOCK,
    )


@pytest.fixture
def bare_record() -> EventRecord:
    return EventRecord(
        id="bare-1",
        title="Bare",
        start=datetime(2025, 1, 5, 9, 0),
        end=datetime(2025, 1, 5, 9, 0),
    )
