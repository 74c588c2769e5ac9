"""
Pipeline event logging utilities for PRESSROOM (Tier 2 logging).

Provides uniform interfaces for logging render pipeline events to
render_pipeline_events.log in JSON Lines format.

For detailed within-context logging (Tier 1), use pressroom.utils.logger instead.

Usage:
    from pressroom.utils.event_logging import log_pipeline_event, get_recent_events

    log_pipeline_event(
        event_type="render_completed",
        subject_id="acme",
        source="publishing",
        size_bytes=48213,
    )

    events = get_recent_events(5, subject_id="acme")
"""

import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from pressroom.config import LOGS_PATH
from pressroom.utils.timestamp import now_exact

load_dotenv()
PIPELINE_EVENTS_FILE = Path(
    os.getenv("PIPELINE_EVENTS_FILE", LOGS_PATH / "render_pipeline_events.log")
)


def log_pipeline_event(event_type: str, subject_id: str, source: str, **extra_fields) -> None:
    """
    Log an event to the master pipeline event log.

    Events are appended one JSON object per line, which keeps the log
    streamable and easy to filter by event_type, subject_id, or source.

    Args:
        event_type: Type of event (e.g., "render_started", "render_failed")
        subject_id: Subject identifier
        source: Event source (e.g., "publishing", "cli")
        **extra_fields: Additional event-specific fields (must be JSON serializable)

    Write failures are logged as warnings, never raised.
    """
    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "subject_id": subject_id,
        "source": source,
        **extra_fields,
    }

    try:
        PIPELINE_EVENTS_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(PIPELINE_EVENTS_FILE, "a", encoding="utf-8") as f:
            f.write(json.dumps(event, default=str) + "\n")
    except OSError as e:
        logger.warning(f"Cannot write pipeline event {event_type} for {subject_id}: {e}")


def get_recent_events(
    n: int = 10, subject_id: Optional[str] = None, event_type: Optional[str] = None
) -> list[dict]:
    """
    Get the last n events from the pipeline log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        subject_id: Filter to only events for this subject (optional)
        event_type: Filter to only events of this type (optional)

    Returns:
        List of event dicts (most recent last)
    """
    if not PIPELINE_EVENTS_FILE.exists():
        return []

    events = []
    with open(PIPELINE_EVENTS_FILE, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if subject_id:
        events = [e for e in events if e.get("subject_id") == subject_id]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events
