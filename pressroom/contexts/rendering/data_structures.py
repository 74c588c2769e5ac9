"""
Render job data structures.

RenderOptions describe the requested page geometry; RenderResult carries either
a PDF byte buffer or a structured error, never both.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from pressroom.utils.timestamp import utc_now


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


@dataclass(frozen=True)
class PageMargins:
    """Page margins as CSS lengths (e.g., '0.5in', '12mm')."""

    top: str = "0.5in"
    right: str = "0.5in"
    bottom: str = "0.5in"
    left: str = "0.5in"

    @classmethod
    def uniform(cls, value: str) -> "PageMargins":
        return cls(top=value, right=value, bottom=value, left=value)

    def as_dict(self) -> Dict[str, str]:
        return {"top": self.top, "right": self.right, "bottom": self.bottom, "left": self.left}


@dataclass(frozen=True)
class RenderOptions:
    """
    Caller-facing render options.

    Attributes:
        page_format: Paper format name understood by the engine (e.g., 'A4', 'Letter')
        orientation: Portrait or landscape
        margins: Page margins
        debug: Capture a full-page screenshot before emitting the PDF
        debug_label: Screenshot filename prefix (defaults to 'debug')
    """

    page_format: str = "A4"
    orientation: Orientation = Orientation.PORTRAIT
    margins: PageMargins = field(default_factory=PageMargins)
    debug: bool = False
    debug_label: Optional[str] = None

    def pdf_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for the engine's PDF call. Backgrounds are always printed."""
        return {
            "format": self.page_format,
            "landscape": self.orientation is Orientation.LANDSCAPE,
            "margin": self.margins.as_dict(),
            "print_background": True,
            "prefer_css_page_size": False,
            "display_header_footer": False,
            "scale": 1,
        }


@dataclass(frozen=True)
class RenderJob:
    """One subject's render request. Immutable once created."""

    subject_id: str
    html_source: str
    options: RenderOptions = field(default_factory=RenderOptions)


@dataclass
class RenderResult:
    """
    Result of a render.

    Attributes:
        success: Whether a PDF was emitted
        buffer: PDF bytes (success only)
        size_bytes: Length of buffer (success only)
        duration_seconds: Wall time of the render attempt
        style_method: 'precompiled' or 'cdn-fallback', when resolution ran
        error: Human-readable failure message (failure only)
        error_chain: Cause messages, outermost first (empty in production)
        warnings: Degraded readiness steps and non-fatal debug failures
        page_count: Pages in the emitted PDF (None if unreadable)
        screenshot_path: Debug screenshot, when one was captured
        timestamp: ISO 8601 UTC completion time
    """

    success: bool
    buffer: Optional[bytes] = None
    size_bytes: Optional[int] = None
    duration_seconds: Optional[float] = None
    style_method: Optional[str] = None
    error: Optional[str] = None
    error_chain: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    page_count: Optional[int] = None
    screenshot_path: Optional[Path] = None
    timestamp: str = field(default_factory=lambda: utc_now().isoformat())

    def __post_init__(self):
        if self.success and (self.buffer is None or self.error is not None):
            raise ValueError("Successful RenderResult requires a buffer and no error")
        if not self.success and (self.error is None or self.buffer is not None):
            raise ValueError("Failed RenderResult requires an error and no buffer")
