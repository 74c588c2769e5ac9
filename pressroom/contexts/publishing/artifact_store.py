"""
Versioned PDF artifact storage.

Artifacts live in a single directory, one file per successful render:

    {artifacts_dir}/{subject_id}-portfolio-{YYYY-MM-DDTHH-MM-SS-ffffff}.pdf

Timestamps are UTC and zero padded, so lexicographic order of filenames is
chronological order. Writes never replace an existing file; "latest" is the
last filename in sorted order. Bytes are staged in a hidden .tmp file and
hard linked into place, so a versioned name only ever holds a complete PDF.
"""

import os
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, List, Optional

from pressroom.config import ARTIFACTS_PATH
from pressroom.contexts.publishing.exceptions import ArtifactIOError
from pressroom.contexts.publishing.logger import _log_debug, _log_info, _log_warning
from pressroom.utils.event_logging import log_pipeline_event
from pressroom.utils.timestamp import utc_now

ARTIFACT_SUFFIX = ".pdf"
ARTIFACT_INFIX = "-portfolio-"
FILENAME_TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S-%f"

_DOWNLOAD_NAME_UNSAFE = re.compile(r"[^a-z0-9.-]")


@dataclass
class ArtifactRecord:
    """
    Metadata of a subject's latest artifact.

    Attributes:
        subject_id: Subject the artifacts belong to
        exists: Whether any artifact was found
        filename: Latest artifact filename
        path: Latest artifact path
        size_bytes: Latest artifact size
        created_at: Creation time (birth time where the OS reports it, else ctime)
        modified_at: Last modification time
        total_versions: Number of artifacts for the subject
        all_versions: Artifact filenames, most recent first
        error: Listing error, when the directory could not be read
    """

    subject_id: str
    exists: bool
    filename: Optional[str] = None
    path: Optional[Path] = None
    size_bytes: Optional[int] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    total_versions: int = 0
    all_versions: List[str] = field(default_factory=list)
    error: Optional[str] = None


def artifact_prefix(subject_id: str) -> str:
    return f"{subject_id}{ARTIFACT_INFIX}"


def artifact_filename(subject_id: str, when: datetime) -> str:
    """Versioned filename for an artifact written at `when`."""
    stamp = when.strftime(FILENAME_TIMESTAMP_FORMAT)
    return f"{artifact_prefix(subject_id)}{stamp}{ARTIFACT_SUFFIX}"


def download_filename(subject_id: str) -> str:
    """
    Attachment filename for HTTP layers building a Content-Disposition header.

    Lowercases the subject and replaces anything outside [a-z0-9.-] with '_'.

    Example:
        >>> download_filename("Acme Labs")
        'acme_labs-portfolio.pdf'
    """
    safe = _DOWNLOAD_NAME_UNSAFE.sub("_", (subject_id or "").lower()) or "subject"
    return f"{safe}-portfolio{ARTIFACT_SUFFIX}"


def staging_path(path: Path) -> Path:
    """Hidden sibling that a partial write lands in; never matches a version name."""
    return path.with_name(f".{path.name}.tmp")


def _record(
    subject_id: str, path: Path, stats: os.stat_result, versions: List[str]
) -> ArtifactRecord:
    created = getattr(stats, "st_birthtime", stats.st_ctime)
    return ArtifactRecord(
        subject_id=subject_id,
        exists=True,
        filename=path.name,
        path=path,
        size_bytes=stats.st_size,
        created_at=datetime.fromtimestamp(created),
        modified_at=datetime.fromtimestamp(stats.st_mtime),
        total_versions=len(versions),
        all_versions=versions,
    )


class ArtifactStore:
    """Writes and looks up versioned PDF artifacts."""

    def __init__(self, artifacts_dir: Path = None, clock: Callable[[], datetime] = utc_now):
        """
        Args:
            artifacts_dir: Artifact directory (defaults to ARTIFACTS_PATH)
            clock: Returns the current time; injectable for tests
        """
        self.artifacts_dir = Path(artifacts_dir) if artifacts_dir is not None else ARTIFACTS_PATH
        self.clock = clock

    def save(self, subject_id: str, buffer: bytes) -> ArtifactRecord:
        """
        Persist a PDF buffer as a new artifact version.

        Args:
            subject_id: Subject the artifact belongs to
            buffer: Complete PDF bytes

        Returns:
            ArtifactRecord describing the file just written

        Raises:
            ArtifactIOError: If the directory cannot be created, the file
                already exists, or the write fails
        """
        try:
            self.artifacts_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArtifactIOError(
                f"Cannot create artifact directory: {e}", self.artifacts_dir, e
            ) from e

        path = self.artifacts_dir / artifact_filename(subject_id, self.clock())
        staging = staging_path(path)

        try:
            with open(staging, "xb") as f:
                f.write(buffer)
                f.flush()
                # the hard link shares this inode, so these stats describe the artifact
                stats = os.fstat(f.fileno())
        except FileExistsError as e:
            raise ArtifactIOError("Artifact already exists", path, e) from e
        except OSError as e:
            staging.unlink(missing_ok=True)
            raise ArtifactIOError(f"Cannot write artifact: {e}", path, e) from e

        try:
            # link fails if the name is taken, so an existing version is never replaced
            os.link(staging, path)
        except FileExistsError as e:
            raise ArtifactIOError("Artifact already exists", path, e) from e
        except OSError as e:
            raise ArtifactIOError(f"Cannot write artifact: {e}", path, e) from e
        finally:
            staging.unlink(missing_ok=True)

        _log_info(f"Saved artifact: {path.name} ({len(buffer) / 1024:.2f} KB)")

        try:
            versions = self.list_versions(subject_id)
        except OSError as e:
            _log_warning(f"Cannot list artifacts for {subject_id}: {e}")
            versions = [path.name]
        return _record(subject_id, path, stats, versions)

    def list_versions(self, subject_id: str) -> List[str]:
        """Artifact filenames for a subject, most recent first."""
        if not self.artifacts_dir.is_dir():
            return []

        prefix = artifact_prefix(subject_id)
        names = [
            p.name
            for p in self.artifacts_dir.iterdir()
            if p.is_file() and p.name.startswith(prefix) and p.name.endswith(ARTIFACT_SUFFIX)
        ]
        return sorted(names, reverse=True)

    def status(self, subject_id: str) -> ArtifactRecord:
        """
        Look up a subject's latest artifact and its version history.

        Never creates or deletes files. Listing errors are reported in the
        record rather than raised.
        """
        try:
            versions = self.list_versions(subject_id)
            if not versions:
                return ArtifactRecord(subject_id=subject_id, exists=False)

            latest = self.artifacts_dir / versions[0]
            stats = latest.stat()
        except OSError as e:
            _log_warning(f"Cannot read artifacts for {subject_id}: {e}")
            return ArtifactRecord(subject_id=subject_id, exists=False, error=str(e))

        return _record(subject_id, latest, stats, versions)

    def prune(self, max_age_days: float = 7) -> List[str]:
        """
        Delete artifacts whose modification time is older than max_age_days.

        Explicit maintenance only; never called by save() or status().

        Returns:
            Deleted filenames, sorted
        """
        if not self.artifacts_dir.is_dir():
            return []

        cutoff = (self.clock() - timedelta(days=max_age_days)).timestamp()
        deleted = []
        for path in sorted(self.artifacts_dir.glob(f"*{ARTIFACT_SUFFIX}")):
            if path.is_file() and path.stat().st_mtime < cutoff:
                path.unlink()
                deleted.append(path.name)
                _log_debug(f"Deleted old artifact: {path.name}")

        _log_info(f"Pruned {len(deleted)} artifact(s) older than {max_age_days:g} day(s)")
        log_pipeline_event(
            event_type="artifacts_pruned",
            subject_id="*",
            source="publishing",
            max_age_days=max_age_days,
            deleted=deleted,
        )
        return deleted
