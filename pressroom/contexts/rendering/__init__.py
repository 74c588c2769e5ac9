"""
Rendering Context

Responsibilities:
- Owns one headless browser session per render, end to end
- Waits for images, fonts, styles and lazy content before snapshotting
- Emits PDF byte buffers and optional debug screenshots
- Converts engine errors into structured results or RenderFailure

Owns: Browser lifecycle, readiness heuristics, PDF emission
Never: Reads subject directories or writes artifacts
"""

from pressroom.contexts.rendering.browser import ChromiumLauncher
from pressroom.contexts.rendering.data_structures import (
    Orientation,
    PageMargins,
    RenderJob,
    RenderOptions,
    RenderResult,
)
from pressroom.contexts.rendering.exceptions import RenderFailure, RenderTimeoutError
from pressroom.contexts.rendering.readiness import ReadinessReport, RenderReadinessController
from pressroom.contexts.rendering.renderer import PDFRenderer
from pressroom.contexts.rendering.waits import Waiter

__all__ = [
    "ChromiumLauncher",
    "Orientation",
    "PageMargins",
    "PDFRenderer",
    "ReadinessReport",
    "RenderFailure",
    "RenderJob",
    "RenderOptions",
    "RenderReadinessController",
    "RenderResult",
    "RenderTimeoutError",
    "Waiter",
]
