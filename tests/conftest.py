"""
Shared fixtures: fast render settings, engine fakes and isolated event logs.
"""

import pytest

from pressroom.config import RenderSettings, RenderTimeouts
from pressroom.utils import event_logging
from tests.fakes import FakeLauncher, RecordingWaiter


@pytest.fixture
def fast_settings():
    return RenderSettings(
        timeouts=RenderTimeouts(
            page_load=1,
            images=0.5,
            fonts=0.5,
            style_probe=0.5,
            cdn_detection=0.5,
            precompiled_settle=0.2,
            cdn_settle=0.3,
            final_settle=0.1,
            scroll_delay=0.01,
        ),
        browser_args=["--no-sandbox"],
    )


@pytest.fixture
def waiter():
    return RecordingWaiter()


@pytest.fixture
def launcher():
    return FakeLauncher()


@pytest.fixture(autouse=True)
def isolated_event_log(tmp_path, monkeypatch):
    """Send pipeline events to a per-test file."""
    events_file = tmp_path / "logs" / "render_pipeline_events.log"
    monkeypatch.setattr(event_logging, "PIPELINE_EVENTS_FILE", events_file)
    return events_file


@pytest.fixture
def generated_files(tmp_path):
    """Factory writing {tmp}/generated-files/{subject}/index.html."""
    root = tmp_path / "generated-files"
    root.mkdir()

    def make(subject_id, html="<html><head></head><body><h1>Portfolio</h1></body></html>"):
        subject_dir = root / subject_id
        subject_dir.mkdir(parents=True, exist_ok=True)
        (subject_dir / "index.html").write_text(html, encoding="utf-8")
        return subject_dir / "index.html"

    make.root = root
    return make
