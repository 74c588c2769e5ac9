"""
Publishing Context

Responsibilities:
- Pre-flight validation of generated subjects
- Versioned artifact storage and lookup
- Per-subject publish chain and bounded-concurrency batches

Owns: Subject directories (read-only), artifact directory, pipeline events
Never: Drives the browser directly or rewrites HTML
"""

from pressroom.contexts.publishing.artifact_store import (
    ArtifactRecord,
    ArtifactStore,
    download_filename,
)
from pressroom.contexts.publishing.exceptions import ArtifactIOError
from pressroom.contexts.publishing.pipeline import (
    BatchResult,
    PublishResult,
    publish_subject,
    run_batch,
)
from pressroom.contexts.publishing.validator import ValidationReport, validate_subject

__all__ = [
    "ArtifactIOError",
    "ArtifactRecord",
    "ArtifactStore",
    "BatchResult",
    "PublishResult",
    "ValidationReport",
    "download_filename",
    "publish_subject",
    "run_batch",
    "validate_subject",
]
