"""
Unit tests for pipeline event logging (Tier 2).

Tests log_pipeline_event and get_recent_events in pressroom.utils.event_logging.
The autouse isolated_event_log fixture points the log at a temporary file.
"""

import json
from pathlib import Path

import pytest

from pressroom.utils import event_logging
from pressroom.utils.event_logging import get_recent_events, log_pipeline_event


@pytest.mark.unit
class TestPipelineEvents:
    """Tests for JSON Lines event logging."""

    def test_event_written_as_json_line(self, isolated_event_log):
        """Test that one event produces one JSON object per line."""
        log_pipeline_event("render_started", "acme", "publishing")

        lines = isolated_event_log.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 1
        event = json.loads(lines[0])
        assert event["event_type"] == "render_started"
        assert event["subject_id"] == "acme"
        assert event["source"] == "publishing"
        assert "timestamp" in event

    def test_extra_fields_serialized(self):
        """Test that non-JSON types such as paths are stringified."""
        log_pipeline_event("render_completed", "acme", "publishing", path=Path("/tmp/a.pdf"))

        (event,) = get_recent_events()
        assert event["path"] == "/tmp/a.pdf"

    def test_filters_and_limit(self):
        """Test subject and type filters and the n limit."""
        for subject_id in ("acme", "globex", "acme", "acme"):
            log_pipeline_event("render_started", subject_id, "publishing")
        log_pipeline_event("render_failed", "acme", "publishing", error="boom")

        assert len(get_recent_events(subject_id="acme")) == 4
        assert len(get_recent_events(n=2, subject_id="acme")) == 2
        (failed,) = get_recent_events(event_type="render_failed")
        assert failed["error"] == "boom"
        assert get_recent_events(n=1)[0]["event_type"] == "render_failed"

    def test_malformed_lines_skipped(self, isolated_event_log):
        """Test that a corrupt line does not hide valid events."""
        log_pipeline_event("render_started", "acme", "publishing")
        with open(isolated_event_log, "a", encoding="utf-8") as f:
            f.write("{not json\n")
        log_pipeline_event("render_completed", "acme", "publishing")

        assert [e["event_type"] for e in get_recent_events()] == [
            "render_started",
            "render_completed",
        ]

    def test_missing_log_returns_empty(self):
        """Test reading before any event is written."""
        assert get_recent_events() == []

    def test_unwritable_log_does_not_raise(self, tmp_path, monkeypatch):
        """Test that an event log under a regular file is skipped with a warning."""
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("file", encoding="utf-8")
        monkeypatch.setattr(event_logging, "PIPELINE_EVENTS_FILE", blocker / "events.log")

        log_pipeline_event("render_started", "acme", "publishing")

        assert get_recent_events() == []
