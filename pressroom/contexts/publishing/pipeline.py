"""
Publishing pipeline.

Runs the per-subject chain validate -> render -> save, and fans it out over
many subjects in chunks of bounded size. Failures are converted to
PublishResults at the job boundary, so one subject never aborts another.
"""

import asyncio
import time
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterable, List, Optional

from pressroom.config import is_production
from pressroom.contexts.publishing.artifact_store import ArtifactRecord, ArtifactStore
from pressroom.contexts.publishing.exceptions import ArtifactIOError
from pressroom.contexts.publishing.logger import (
    _log_error,
    _log_info,
    _log_success,
    log_batch_summary,
    log_chunk_summary,
)
from pressroom.contexts.publishing.validator import subject_entry_path, validate_subject
from pressroom.contexts.rendering import (
    PDFRenderer,
    RenderFailure,
    RenderJob,
    RenderOptions,
    RenderResult,
)
from pressroom.contexts.rendering.exceptions import cause_chain
from pressroom.utils.event_logging import log_pipeline_event

EVENT_SOURCE = "publishing"
DEFAULT_CONCURRENCY = 2


@dataclass
class PublishResult:
    """
    Outcome of publishing one subject.

    Attributes:
        subject_id: Subject that was processed
        render: RenderResult of a successful render
        artifact: ArtifactRecord after the save
        issues: Validation issues (validation failures only)
        error: Human-readable failure message
        error_chain: Cause messages, outermost first (empty in production)
    """

    subject_id: str
    render: Optional[RenderResult] = None
    artifact: Optional[ArtifactRecord] = None
    issues: List[str] = field(default_factory=list)
    error: Optional[str] = None
    error_chain: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.error is None and self.artifact is not None


@dataclass
class BatchResult:
    """
    Ordered results of a batch, one per input subject.

    Attributes:
        results: PublishResults in input order
        duration_seconds: Wall time of the whole batch
    """

    results: List[PublishResult] = field(default_factory=list)
    duration_seconds: float = 0.0

    def __iter__(self):
        return iter(self.results)

    def __len__(self):
        return len(self.results)

    def __getitem__(self, index):
        return self.results[index]

    @property
    def successful(self) -> List[PublishResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> List[PublishResult]:
        return [r for r in self.results if not r.success]

    def summary(self) -> dict:
        return {
            "total": len(self.results),
            "successful": len(self.successful),
            "failed": len(self.failed),
            "failed_subjects": [r.subject_id for r in self.failed],
            "duration_seconds": self.duration_seconds,
        }


async def _record_event(event_type: str, subject_id: str, **fields) -> None:
    """Append a pipeline event off the event loop."""
    await asyncio.to_thread(log_pipeline_event, event_type, subject_id, EVENT_SOURCE, **fields)


async def _failure_result(subject_id: str, error: Exception, stage: str) -> PublishResult:
    """Convert a per-job exception into a PublishResult and record it."""
    _log_error(f"{subject_id}: {error}")
    await _record_event("render_failed", subject_id, stage=stage, error=str(error))
    return PublishResult(
        subject_id=subject_id,
        error=str(error),
        error_chain=[] if is_production() else cause_chain(error),
    )


async def publish_subject(
    subject_id: str,
    options: RenderOptions = None,
    *,
    renderer: PDFRenderer = None,
    store: ArtifactStore = None,
    generated_files_dir: Path = None,
) -> PublishResult:
    """
    Validate, render and persist one subject.

    Never raises for per-job failures: validation issues, render failures and
    artifact write errors are all returned as an unsuccessful PublishResult.

    Args:
        subject_id: Subject identifier
        options: Render options (debug screenshots are labelled with the subject by default)
        renderer: PDFRenderer to use (defaults to a new one)
        store: ArtifactStore to save into (defaults to ARTIFACTS_PATH)
        generated_files_dir: Root of generated sites (defaults to GENERATED_FILES_PATH)

    Returns:
        PublishResult with the render and artifact on success
    """
    renderer = renderer or PDFRenderer()
    store = store or ArtifactStore()
    options = options or RenderOptions()
    if options.debug_label is None:
        options = replace(options, debug_label=subject_id)

    report = await asyncio.to_thread(validate_subject, subject_id, generated_files_dir)
    if not report.is_valid:
        await _record_event("validation_failed", subject_id, issues=report.issues)
        return PublishResult(
            subject_id=subject_id,
            issues=report.issues,
            error=f"Validation failed: {'; '.join(report.issues)}",
        )

    await _record_event("render_started", subject_id)

    entry_file = subject_entry_path(subject_id, generated_files_dir)
    try:
        html = await asyncio.to_thread(entry_file.read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return await _failure_result(subject_id, e, stage="read")

    job = RenderJob(subject_id=subject_id, html_source=html, options=options)
    try:
        render = await renderer.render(
            job.html_source, job.options, subject_id=job.subject_id, raise_on_failure=True
        )
    except RenderFailure as e:
        return await _failure_result(subject_id, e, stage=e.stage or "render")

    try:
        artifact = await asyncio.to_thread(store.save, job.subject_id, render.buffer)
    except ArtifactIOError as e:
        return await _failure_result(subject_id, e, stage="save")

    _log_success(f"{subject_id}: published {artifact.filename}")

    await _record_event(
        "render_completed",
        subject_id,
        filename=artifact.filename,
        size_bytes=render.size_bytes,
        page_count=render.page_count,
        style_method=render.style_method,
        duration_seconds=render.duration_seconds,
        warnings=render.warnings,
    )
    return PublishResult(subject_id=subject_id, render=render, artifact=artifact)


def chunked(items: List[str], size: int) -> List[List[str]]:
    """Split items into consecutive chunks of at most `size`."""
    return [items[i : i + size] for i in range(0, len(items), size)]


async def run_batch(
    subject_ids: Iterable[str],
    options: RenderOptions = None,
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
    renderer: PDFRenderer = None,
    store: ArtifactStore = None,
    generated_files_dir: Path = None,
) -> BatchResult:
    """
    Publish many subjects with bounded concurrency.

    Subjects are processed in consecutive chunks of `concurrency`. Every job
    in a chunk runs concurrently, and the next chunk starts only after all of
    them have settled. Results keep input order.

    Args:
        subject_ids: Subjects to publish
        options: Render options shared by every job
        concurrency: Chunk size (default: 2)
        renderer: PDFRenderer shared by every job (each render owns its own browser)
        store: ArtifactStore shared by every job
        generated_files_dir: Root of generated sites

    Returns:
        BatchResult with one PublishResult per subject

    Raises:
        ValueError: If concurrency is less than 1

    Example:
        >>> batch = asyncio.run(run_batch(["acme", "globex", "initech"], concurrency=2))
        >>> batch.summary()["successful"]
        3
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {concurrency}")

    subject_ids = list(subject_ids)
    renderer = renderer or PDFRenderer()
    store = store or ArtifactStore()
    chunks = chunked(subject_ids, concurrency)
    start_time = time.perf_counter()

    _log_info(f"Publishing {len(subject_ids)} subject(s) in {len(chunks)} chunk(s)")

    results = []
    for index, chunk in enumerate(chunks, 1):
        outcomes = await asyncio.gather(
            *(
                publish_subject(
                    subject_id,
                    options,
                    renderer=renderer,
                    store=store,
                    generated_files_dir=generated_files_dir,
                )
                for subject_id in chunk
            ),
            return_exceptions=True,
        )

        chunk_results = []
        for subject_id, outcome in zip(chunk, outcomes):
            if isinstance(outcome, PublishResult):
                chunk_results.append(outcome)
            elif isinstance(outcome, Exception):
                chunk_results.append(
                    await _failure_result(subject_id, outcome, stage="unexpected")
                )
            else:
                raise outcome

        log_chunk_summary(index, len(chunks), chunk_results)
        results.extend(chunk_results)

    batch = BatchResult(
        results=results, duration_seconds=round(time.perf_counter() - start_time, 2)
    )
    log_batch_summary(batch.summary())
    return batch
