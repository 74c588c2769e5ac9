#!/usr/bin/env python3
"""
PDF Rendering and Publishing CLI

Renders generated subject sites to versioned PDF artifacts using the
publishing context.

Commands:
    render      - Validate, render and save one subject
    render-html - Render a raw HTML file to a PDF path (no artifact store)
    validate    - Pre-flight check of a subject's entry file
    status      - Show a subject's latest artifact and version history
    batch       - Publish many subjects with bounded concurrency
    prune       - Delete artifacts older than N days

Examples:\n

    render_pdf.py render acme                           # Render and save

    render_pdf.py render acme --landscape --debug       # Landscape, keep a screenshot

    render_pdf.py render acme --set timeouts.cdn_settle=3

    render_pdf.py batch acme globex initech -c 2        # Two renders at a time

    render_pdf.py status acme                           # Latest artifact
"""

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from typing_extensions import Annotated

from pressroom.config import LOGS_PATH, PROJECT_ROOT, load_render_settings
from pressroom.contexts.publishing import (
    ArtifactStore,
    publish_subject,
    run_batch,
    validate_subject,
)
from pressroom.contexts.publishing.logger import setup_publishing_logger
from pressroom.contexts.rendering import Orientation, PageMargins, PDFRenderer, RenderOptions
from pressroom.contexts.rendering.logger import setup_rendering_logger
from pressroom.utils.timestamp import now


def display_path(path: Path) -> str:
    """Return path relative to PROJECT_ROOT for cleaner display."""
    try:
        return str(Path(path).relative_to(PROJECT_ROOT))
    except ValueError:
        return str(path)


def build_options(page_format: str, landscape: bool, margin: str, debug: bool) -> RenderOptions:
    return RenderOptions(
        page_format=page_format,
        orientation=Orientation.LANDSCAPE if landscape else Orientation.PORTRAIT,
        margins=PageMargins.uniform(margin),
        debug=debug,
    )


def build_renderer(overrides: Optional[List[str]]) -> PDFRenderer:
    try:
        settings = load_render_settings(overrides=overrides)
    except ValueError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return PDFRenderer(settings=settings)


app = typer.Typer(
    help="Render generated sites to versioned PDF artifacts",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


PageFormat = Annotated[str, typer.Option("--format", "-f", help="Paper format (A4, Letter, ...)")]
Landscape = Annotated[bool, typer.Option("--landscape", "-l", help="Landscape orientation")]
Margin = Annotated[str, typer.Option("--margin", "-m", help="Uniform page margin (CSS length)")]
Debug = Annotated[bool, typer.Option("--debug", "-d", help="Save a full-page debug screenshot")]
Overrides = Annotated[
    Optional[List[str]],
    typer.Option("--set", "-s", help="Render setting override (e.g., timeouts.final_settle=1)"),
]


@app.command("render")
def render_command(
    subject_id: Annotated[str, typer.Argument(help="Subject identifier (generated site name)")],
    page_format: PageFormat = "A4",
    landscape: Landscape = False,
    margin: Margin = "0.5in",
    debug: Debug = False,
    overrides: Overrides = None,
):
    """
    Validate, render and save one subject.

    Examples:\n

        $ render_pdf.py render acme

        $ render_pdf.py render acme --format Letter --margin 12mm
    """
    setup_publishing_logger(LOGS_PATH / f"render_{now()}", {"Subject": subject_id})
    renderer = build_renderer(overrides)
    options = build_options(page_format, landscape, margin, debug)

    result = asyncio.run(publish_subject(subject_id, options, renderer=renderer))

    if not result.success:
        typer.secho(f"\n✗ {subject_id}: {result.error}", fg=typer.colors.RED, err=True)
        for issue in result.issues:
            typer.secho(f"  - {issue}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\n✓ {subject_id}: {display_path(result.artifact.path)}", fg=typer.colors.GREEN)
    typer.echo(
        f"  {result.render.size_bytes / 1024:.2f} KB, "
        f"{result.render.page_count or '?'} page(s), "
        f"{result.render.style_method}, {result.render.duration_seconds:.2f}s"
    )
    for warning in result.render.warnings:
        typer.secho(f"  ⚠ {warning}", fg=typer.colors.YELLOW)


@app.command("render-html")
def render_html_command(
    html_file: Annotated[
        Path, typer.Argument(help="HTML file to render", exists=True, dir_okay=False)
    ],
    output: Annotated[Path, typer.Option("--output", "-o", help="Destination PDF path")],
    page_format: PageFormat = "A4",
    landscape: Landscape = False,
    margin: Margin = "0.5in",
    debug: Debug = False,
    overrides: Overrides = None,
):
    """
    Render a raw HTML file to a PDF path, bypassing the artifact store.

    Examples:\n

        $ render_pdf.py render-html page.html -o page.pdf
    """
    if output.exists():
        typer.secho(f"✗ Output file already exists: {output}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    setup_rendering_logger(LOGS_PATH / f"render_html_{now()}")
    renderer = build_renderer(overrides)
    options = build_options(page_format, landscape, margin, debug)

    html = html_file.read_text(encoding="utf-8")
    result = asyncio.run(renderer.render(html, options))

    if not result.success:
        typer.secho(f"\n✗ {result.error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result.buffer)
    typer.secho(
        f"\n✓ Wrote {display_path(output)} ({result.size_bytes / 1024:.2f} KB)",
        fg=typer.colors.GREEN,
    )


@app.command("validate")
def validate_command(
    subject_id: Annotated[str, typer.Argument(help="Subject identifier")],
):
    """Check that a subject's entry file exists and is non-empty."""
    report = validate_subject(subject_id)

    if report.is_valid:
        typer.secho(f"✓ {subject_id} is ready to render", fg=typer.colors.GREEN)
        return

    typer.secho(f"✗ {subject_id} has {len(report.issues)} issue(s):", fg=typer.colors.RED)
    for issue in report.issues:
        typer.echo(f"  - {issue}")
    raise typer.Exit(code=1)


@app.command("status")
def status_command(
    subject_id: Annotated[str, typer.Argument(help="Subject identifier")],
):
    """Show a subject's latest artifact and version history."""
    record = ArtifactStore().status(subject_id)

    if not record.exists:
        message = f"No artifacts for {subject_id}"
        if record.error:
            message += f" ({record.error})"
        typer.secho(message, fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)

    typer.secho(f"\n{subject_id}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"  Latest:   {display_path(record.path)}")
    typer.echo(f"  Size:     {record.size_bytes / 1024:.2f} KB")
    typer.echo(f"  Modified: {record.modified_at:%Y-%m-%d %H:%M:%S}")
    typer.echo(f"  Versions: {record.total_versions}")
    for filename in record.all_versions:
        typer.echo(f"    {filename}")


@app.command("batch")
def batch_command(
    subject_ids: Annotated[List[str], typer.Argument(help="Subjects to publish, in order")],
    concurrency: Annotated[
        int, typer.Option("--concurrency", "-c", help="Renders per chunk", min=1)
    ] = 2,
    page_format: PageFormat = "A4",
    landscape: Landscape = False,
    margin: Margin = "0.5in",
    overrides: Overrides = None,
):
    """
    Publish many subjects, a chunk of --concurrency at a time.

    Examples:\n

        $ render_pdf.py batch acme globex initech

        $ render_pdf.py batch acme globex -c 1
    """
    setup_publishing_logger(
        LOGS_PATH / f"batch_{now()}",
        {"Subjects": ", ".join(subject_ids), "Concurrency": concurrency},
    )
    renderer = build_renderer(overrides)
    options = build_options(page_format, landscape, margin, debug=False)

    batch = asyncio.run(run_batch(subject_ids, options, concurrency=concurrency, renderer=renderer))

    typer.echo("")
    for result in batch:
        if result.success:
            typer.secho(
                f"✓ {result.subject_id}: {result.artifact.filename}", fg=typer.colors.GREEN
            )
        else:
            typer.secho(f"✗ {result.subject_id}: {result.error}", fg=typer.colors.RED)

    summary = batch.summary()
    typer.echo(
        f"\n{summary['successful']}/{summary['total']} succeeded "
        f"in {summary['duration_seconds']:.2f}s"
    )
    if summary["failed"]:
        raise typer.Exit(code=1)


@app.command("prune")
def prune_command(
    days: Annotated[
        float, typer.Option("--days", help="Delete artifacts older than this many days", min=0)
    ] = 7,
):
    """Delete artifacts whose modification time is older than --days."""
    deleted = ArtifactStore().prune(days)
    typer.secho(f"✓ Deleted {len(deleted)} artifact(s)", fg=typer.colors.GREEN)
    for filename in deleted:
        typer.echo(f"  {filename}")


if __name__ == "__main__":
    app()
