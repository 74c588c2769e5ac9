#!/usr/bin/env python3
"""
View recent pipeline events from render_pipeline_events.log.

Provides filtered access to the event log with options to filter by
subject and event type.
"""

import json
from typing import Optional

import typer

from pressroom.utils import event_logging
from pressroom.utils.event_logging import get_recent_events
from pressroom.utils.timestamp import format_timestamp

EVENT_COLORS = {
    "render_completed": typer.colors.GREEN,
    "render_failed": typer.colors.RED,
    "validation_failed": typer.colors.RED,
    "render_started": typer.colors.BLUE,
    "artifacts_pruned": typer.colors.YELLOW,
}

app = typer.Typer(
    add_completion=False,
    help="View recent pipeline events",
)


@app.command()
def main(
    n: int = typer.Option(10, "--num", "-n", help="Number of recent events to show"),
    subject: Optional[str] = typer.Option(
        None, "--subject", "-s", help="Filter to events for this subject"
    ),
    event_type: Optional[str] = typer.Option(
        None, "--event-type", "-e", help="Filter to events of this type"
    ),
    compact: bool = typer.Option(
        False, "--compact", "-c", help="Print one event per line (no pretty formatting)"
    ),
):
    """
    Show the last n events from the pipeline log.

    Examples:\n

        $ python scripts/tail_log.py                      # Last 10 events

        $ python scripts/tail_log.py --num 20             # Last 20 events

        $ python scripts/tail_log.py -e render_failed     # Last 10 failures

        $ python scripts/tail_log.py -n 5 -s acme         # Last 5 events for a subject

        $ python scripts/tail_log.py -n 20 --compact      # Compact output (one line per event)
    """
    events = get_recent_events(n=n, subject_id=subject, event_type=event_type)

    if not events:
        typer.secho(
            f"No events found in {event_logging.PIPELINE_EVENTS_FILE}",
            fg=typer.colors.YELLOW,
            err=True,
        )
        raise typer.Exit(code=1)

    if not compact:
        filters = []
        if subject:
            filters.append(f"subject={subject}")
        if event_type:
            filters.append(f"type={event_type}")

        if filters:
            typer.secho(
                f"\nShowing last {len(events)} event(s) [{', '.join(filters)}]:",
                fg=typer.colors.BLUE,
            )
        else:
            typer.secho(f"\nShowing last {len(events)} event(s):", fg=typer.colors.BLUE)

        typer.echo("")

    for event in events:
        if compact:
            typer.echo(json.dumps(event))
        else:
            typer.echo(json.dumps(event, indent=2))
            typer.echo("")


@app.command()
def history(
    subject_id: str = typer.Argument(..., help="Subject to show"),
    n: int = typer.Option(None, "--num", "-n", help="Maximum number of events (default: all)"),
    relative: bool = typer.Option(
        False, "--relative", "-r", help="Show relative timestamps (e.g., '2h ago')"
    ),
):
    """
    Show a one-line-per-event timeline for a subject, oldest first.

    Examples:\n

        $ python scripts/tail_log.py history acme

        $ python scripts/tail_log.py history acme -n 5 --relative
    """
    events = get_recent_events(n=n if n else 9999, subject_id=subject_id)

    if not events:
        typer.secho(f"No events found for {subject_id}", fg=typer.colors.YELLOW)
        return

    typer.secho(f"\nEvent history for {subject_id}\n", fg=typer.colors.BLUE, bold=True)

    for event in events:
        when = format_timestamp(event.get("timestamp", ""), relative=relative)
        kind = event.get("event_type", "?")
        detail = event.get("filename") or event.get("error") or ""
        if event.get("issues"):
            detail = "; ".join(event["issues"])

        typer.secho(f"  {when}  ", nl=False)
        typer.secho(f"{kind:<18}", fg=EVENT_COLORS.get(kind), nl=False)
        typer.echo(f" {detail}")

    typer.echo("")


if __name__ == "__main__":
    app()
