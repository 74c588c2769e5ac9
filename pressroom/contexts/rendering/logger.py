"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from pressroom.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, engine: str = "chromium") -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session
        engine: Browser engine name recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Browser engine": engine},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(label: str, method: str, html_size: int) -> None:
    """Log start of a render with context."""
    _log_info(f"Starting render: {label}")
    _log_debug(f"  Style method: {method}")
    _log_debug(f"  HTML: {html_size / 1024:.2f} KB")


def log_render_result(label: str, result) -> None:
    """
    Log render result with diagnostics.

    Args:
        label: Render identifier (subject id or debug label)
        result: RenderResult from PDFRenderer.render()
    """
    if result.success:
        _log_success(
            f"{label}: PDF generated in {result.duration_seconds:.2f}s "
            f"({result.size_bytes / 1024:.2f} KB, {result.style_method})"
        )
        if result.page_count is not None:
            _log_debug(f"  Pages: {result.page_count}")
    else:
        _log_error(f"{label}: render failed after {result.duration_seconds:.2f}s")
        _log_error(f"  {result.error}")
        for cause in result.error_chain[1:]:
            _log_debug(f"  caused by: {cause}")

    if result.warnings:
        _log_warning(f"{label}: {len(result.warnings)} readiness warnings")
        for i, warning in enumerate(result.warnings, 1):
            _log_debug(f"  Warning {i}: {warning}")
