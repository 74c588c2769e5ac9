"""
Styling context logger.

Provides logging interface for styling context with automatic [style] prefix.
All styling modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[style]"


def _log_info(message: str) -> None:
    """Log info message with [style] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [style] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [style] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_optimization_result(method: str, original_size: int, optimized_size: int) -> None:
    """Log a completed HTML rewrite."""
    _log_info(f"HTML optimized for print ({method})")
    _log_debug(f"  Size: {original_size} -> {optimized_size} characters")
