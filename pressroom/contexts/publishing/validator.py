"""
Pre-flight validation of render subjects.

Checks that a subject's generated entry file is present and usable before any
browser is launched. Every check appends an issue instead of stopping early,
so callers see all problems at once.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from pressroom.config import ENTRY_FILENAME, GENERATED_FILES_PATH
from pressroom.contexts.publishing.logger import log_validation_report


@dataclass
class ValidationReport:
    """
    Result of pre-flight validation.

    Attributes:
        is_valid: Whether the subject can be rendered
        issues: Human-readable problems, empty when valid
    """

    is_valid: bool
    issues: List[str] = field(default_factory=list)


def is_safe_subject_id(subject_id: str) -> bool:
    """Whether a subject id stays inside the generated-files directory."""
    if not subject_id or subject_id.strip() in ("", "."):
        return False
    return not any(part in subject_id for part in ("/", "\\", ".."))


def subject_entry_path(subject_id: str, generated_files_dir: Path = None) -> Path:
    """Path of a subject's entry file under the generated-files convention."""
    root = Path(generated_files_dir) if generated_files_dir is not None else GENERATED_FILES_PATH
    return root / subject_id / ENTRY_FILENAME


def validate_subject(subject_id: str, generated_files_dir: Path = None) -> ValidationReport:
    """
    Validate that a subject is ready to render.

    Args:
        subject_id: Subject identifier (e.g., a published site's subdomain)
        generated_files_dir: Root of generated sites (defaults to GENERATED_FILES_PATH)

    Returns:
        ValidationReport listing every issue found

    Example:
        >>> report = validate_subject("acme")
        >>> if not report.is_valid:
        ...     print("\\n".join(report.issues))
    """
    issues = []

    if not subject_id or not subject_id.strip():
        issues.append("Subject id is required")
    elif not is_safe_subject_id(subject_id):
        issues.append(f"Subject id contains path components: {subject_id!r}")

    # Filesystem checks only make sense for an id that names a single directory
    if is_safe_subject_id(subject_id):
        entry_file = subject_entry_path(subject_id, generated_files_dir)
        subject_dir = entry_file.parent

        if not subject_dir.is_dir():
            issues.append(f"Subject directory not found: {subject_dir}")

        if not entry_file.is_file():
            issues.append(f"HTML file not found: {entry_file}")
        else:
            try:
                if entry_file.stat().st_size == 0:
                    issues.append(f"HTML file is empty: {entry_file}")
            except OSError as e:
                issues.append(f"Cannot read HTML file: {e}")

    report = ValidationReport(is_valid=not issues, issues=issues)
    log_validation_report(subject_id or "<empty>", report)
    return report
