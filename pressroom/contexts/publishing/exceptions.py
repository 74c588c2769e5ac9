"""Custom exceptions for the publishing context."""

from pathlib import Path
from typing import Optional


class ArtifactIOError(Exception):
    """
    Exception raised when an artifact cannot be written.

    Covers directory creation failures, write failures, and writes that
    would replace an existing artifact.

    Attributes:
        message: Error description
        path: Artifact path involved, when known
        original_error: The underlying OS error, if any
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.path = path
        self.original_error = original_error

        full_message = message
        if path is not None:
            full_message = f"{message} ({path})"

        super().__init__(full_message)
