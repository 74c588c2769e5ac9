"""PDF inspection helpers for rendered artifacts."""

import io
from pathlib import Path
from typing import Optional, Union

from PyPDF2 import PdfReader


def page_count(pdf: Union[Path, bytes]) -> Optional[int]:
    """Get page count from a PDF path or byte buffer, or None if unreadable."""
    source = io.BytesIO(pdf) if isinstance(pdf, (bytes, bytearray)) else str(pdf)
    try:
        reader = PdfReader(source)
        return len(reader.pages)
    except Exception:
        return None


def looks_like_pdf(buffer: bytes) -> bool:
    """Cheap signature check for the %PDF- header."""
    return buffer[:5] == b"%PDF-"
