from __future__ import annotations

import pytest
from typer.testing import CliRunner

from schedconvert import cli
from schedconvert.config import Settings
from schedconvert.gcal import CreateResult

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path):
    monkeypatch.setattr(cli, "setup_logging", lambda verbose=False: None)
    monkeypatch.setattr(
        cli,
        "get_settings",
        lambda: Settings(_env_file=None, ics_filename=str(tmp_path / "schedule.ics"), shared_emails="team@example.com"),
    )


def test_convert_prints_events_and_links(sample_text):
    result = runner.invoke(cli.app, ["convert", sample_text])

    assert result.exit_code == 0
    assert "1 items" in result.output
    assert "[9 NOV] Test" in result.output
    assert "Time: 19:00 - 21:00" in result.output
    assert "Location: Venue" in result.output
    assert "https://www.google.com/calendar/render?action=TEMPLATE" in result.output


def test_convert_reads_file(tmp_path, sample_text):
    source = tmp_path / "schedule.txt"
    source.write_text(sample_text, encoding="utf-8")

    result = runner.invoke(cli.app, ["convert", "--file", str(source)])

    assert result.exit_code == 0
    assert "[9 NOV] Test" in result.output


def test_convert_without_events_fails():
    result = runner.invoke(cli.app, ["convert", "nothing to see"])

    assert result.exit_code == 1


def test_export_writes_ics(tmp_path, sample_text):
    output = tmp_path / "out.ics"

    result = runner.invoke(cli.app, ["export", sample_text, "--output", str(output)])

    assert result.exit_code == 0
    content = output.read_text(encoding="utf-8")
    assert content.startswith("BEGIN:VCALENDAR\r\n")
    assert "SUMMARY:Test" in content


def test_export_defaults_to_configured_filename(tmp_path, sample_text):
    result = runner.invoke(cli.app, ["export", sample_text])

    assert result.exit_code == 0
    assert (tmp_path / "schedule.ics").exists()


def test_push_reports_counts(monkeypatch, sample_text):
    calls = {}

    class FakeClient:
        def __init__(self, **kwargs) -> None:
            calls["init"] = kwargs

        def sign_in(self) -> None:
            calls["signed_in"] = True

        def create_events(self, records, attendees):
            calls["titles"] = [r.title for r in records]
            calls["attendees"] = attendees
            return CreateResult(success=len(records), failed=0)

    monkeypatch.setattr(cli, "GoogleCalendarClient", FakeClient)

    result = runner.invoke(cli.app, ["push", sample_text])

    assert result.exit_code == 0
    assert "Successfully added 1 event(s)" in result.output
    assert "Shared with 1 attendee(s)" in result.output
    assert calls["titles"] == ["Test"]
    assert calls["attendees"] == ["team@example.com"]
    assert calls["init"]["timezone"] == "Asia/Bangkok"


def test_push_sign_in_failure_exits(monkeypatch, sample_text):
    class FailingClient:
        def __init__(self, **kwargs) -> None:
            pass

        def sign_in(self) -> None:
            raise FileNotFoundError("Missing credentials.json")

    monkeypatch.setattr(cli, "GoogleCalendarClient", FailingClient)

    result = runner.invoke(cli.app, ["push", sample_text, "-a", "x@example.com"])

    assert result.exit_code == 1


def test_config_show():
    result = runner.invoke(cli.app, ["config", "--show"])

    assert result.exit_code == 0
    assert "Timezone: Asia/Bangkok" in result.output
