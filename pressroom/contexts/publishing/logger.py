"""
Publishing context logger.

Provides logging interface for publishing context with automatic [publish] prefix.
All publishing modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from pressroom.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[publish]"


def setup_publishing_logger(log_dir: Path, extra_provenance: dict = None) -> Path:
    """
    Setup logger for publishing context.

    Args:
        log_dir: Directory for this publishing session
        extra_provenance: Additional provenance lines (e.g., subjects, concurrency)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="publish",
        log_dir=log_dir,
        extra_provenance=extra_provenance,
    )


# Wrapper functions with automatic [publish] prefix


def _log_info(message: str) -> None:
    """Log info message with [publish] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [publish] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [publish] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [publish] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [publish] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level publishing-specific logging helpers


def log_validation_report(subject_id: str, report) -> None:
    """Log ValidationReport issues, one per line."""
    if report.is_valid:
        _log_debug(f"{subject_id}: validation passed")
        return

    _log_warning(f"{subject_id}: validation failed with {len(report.issues)} issue(s)")
    for issue in report.issues:
        _log_warning(f"  - {issue}")


def log_chunk_summary(index: int, total: int, results) -> None:
    """Log successful/failed counts for one batch chunk."""
    succeeded = sum(1 for r in results if r.success)
    _log_info(f"Chunk {index}/{total}: {succeeded} succeeded, {len(results) - succeeded} failed")


def log_batch_summary(summary: dict) -> None:
    """
    Log final batch summary.

    Args:
        summary: Output of BatchResult.summary()
    """
    _log_info("=" * 60)
    _log_info(
        f"Batch complete: {summary['successful']}/{summary['total']} succeeded "
        f"in {summary['duration_seconds']:.2f}s"
    )
    if summary["failed_subjects"]:
        _log_error(f"Failed subjects: {', '.join(summary['failed_subjects'])}")
    _log_info("=" * 60)
