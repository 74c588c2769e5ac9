"""Custom exceptions for the rendering context."""

from typing import List, Optional


class RenderTimeoutError(Exception):
    """
    Exception raised when a readiness wait expires.

    Never escapes the readiness controller: it is recorded as a warning and
    the render proceeds with best-effort content.

    Attributes:
        step: Readiness step that timed out (e.g., 'fonts')
        timeout_s: Budget that was exceeded, in seconds
    """

    def __init__(self, step: str, timeout_s: float):
        self.step = step
        self.timeout_s = timeout_s
        super().__init__(f"Readiness step '{step}' timed out after {timeout_s:g}s")


class RenderFailure(Exception):
    """
    Exception raised when a render cannot produce a PDF.

    Attributes:
        message: Error description
        stage: Pipeline stage that failed (e.g., 'launch', 'load', 'pdf')
        subject_id: Subject being rendered, when known
        original_error: The underlying engine or I/O error
    """

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        subject_id: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.stage = stage
        self.subject_id = subject_id
        self.original_error = original_error

        parts = [message]
        if stage:
            parts.append(f"(stage: {stage})")
        if subject_id:
            parts.append(f"[subject: {subject_id}]")

        super().__init__(" ".join(parts))


def cause_chain(error: BaseException) -> List[str]:
    """
    List the messages of an exception and its causes, outermost first.

    Follows __cause__ and then __context__, stopping at cycles.
    """
    chain = []
    seen = set()
    current = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        chain.append(f"{type(current).__name__}: {current}")
        current = current.__cause__ or current.__context__
    return chain
