from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from schedconvert.api import create_app
from schedconvert.config import Settings, get_settings


@pytest.fixture
def client():
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, api_key=None)
    return TestClient(app)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_parse_returns_events(client, sample_text):
    response = client.post("/api/parse", json={"text": sample_text})

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 1
    event = data["events"][0]
    assert event["title"] == "Test"
    assert event["notes"] == ["Bring ID"]
    assert event["time_range"] == "19:00 - 21:00"
    assert event["month"] == "NOV"
    assert event["day"] == "9"
    assert event["start"] == "2025-11-09T19:00:00"
    assert "dates=20251109T190000%2F20251109T210000" in event["calendar_link"]


def test_parse_empty_text_returns_no_events(client):
    response = client.post("/api/parse", json={"text": ""})

    assert response.json() == {"events": [], "count": 0}


def test_ics_download(client, sample_text):
    response = client.post("/api/ics", json={"text": sample_text})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/calendar")
    assert 'filename="schedule.ics"' in response.headers["content-disposition"]
    assert "BEGIN:VEVENT" in response.text


def test_ics_without_events_is_rejected(client):
    response = client.post("/api/ics", json={"text": "no events here"})

    assert response.status_code == 400


def test_api_key_is_enforced(sample_text):
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, api_key="secret")
    client = TestClient(app)

    assert client.post("/api/parse", json={"text": sample_text}).status_code == 401
    response = client.post(
        "/api/parse", json={"text": sample_text}, headers={"X-API-Key": "secret"}
    )
    assert response.status_code == 200


def test_ics_download_with_thai_filename(client, sample_text):
    response = client.post("/api/ics", json={"text": sample_text, "filename": "ตาราง.ics"})

    assert response.status_code == 200
    disposition = response.headers["content-disposition"]
    assert 'filename="schedule.ics"' in disposition
    assert "filename*=UTF-8''%E0%B8%95%E0%B8%B2%E0%B8%A3%E0%B8%B2%E0%B8%87.ics" in disposition
