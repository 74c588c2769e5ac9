"""
Stylesheet resolution.

Chooses between the precompiled utility-CSS build output and the CDN fallback.
A missing stylesheet is the normal fallback path, not an error.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple

from pressroom.config import COMPILED_STYLESHEET_PATH
from pressroom.contexts.styling.logger import _log_debug, _log_info, _log_warning


class StyleMethod(str, Enum):
    """How utility classes get resolved for a render."""

    PRECOMPILED = "precompiled"
    CDN_FALLBACK = "cdn-fallback"


@dataclass(frozen=True)
class ResolvedStyle:
    """
    Outcome of stylesheet resolution.

    Attributes:
        css: Compiled stylesheet contents (None for the CDN fallback)
        method: Which strategy the optimizer and readiness checks should use
    """

    css: Optional[str]
    method: StyleMethod

    @property
    def is_precompiled(self) -> bool:
        return self.method is StyleMethod.PRECOMPILED


class StylesheetCache:
    """
    Process-wide cache of stylesheet contents, invalidated by modification time.

    Entries are keyed by resolved path and hold (mtime_ns, contents). A changed
    mtime forces a re-read on the next lookup.
    """

    def __init__(self):
        self._cache: Dict[Path, Tuple[int, str]] = {}

    def read(self, path: Path) -> str:
        """
        Return stylesheet contents, reading from disk only when the file changed.

        Raises:
            OSError: If the file cannot be stat'ed or read
            UnicodeDecodeError: If the file is not valid UTF-8
        """
        key = path.resolve()
        mtime_ns = key.stat().st_mtime_ns

        cached = self._cache.get(key)
        if cached is not None and cached[0] == mtime_ns:
            return cached[1]

        css = key.read_text(encoding="utf-8")
        self._cache[key] = (mtime_ns, css)
        return css

    def invalidate(self, path: Path = None) -> None:
        """Drop one entry, or every entry when no path is given."""
        if path is None:
            self._cache.clear()
        else:
            self._cache.pop(path.resolve(), None)

    def is_cached(self, path: Path) -> bool:
        return path.resolve() in self._cache


class StyleResolver:
    """Resolve the style strategy for a render. Never raises."""

    def __init__(self, stylesheet_path: Path = None, cache: StylesheetCache = None):
        """
        Args:
            stylesheet_path: Precompiled stylesheet location. Defaults to
                           COMPILED_STYLESHEET_PATH from environment
            cache: Shared cache (a private one is created if omitted)
        """
        if stylesheet_path is None:
            stylesheet_path = COMPILED_STYLESHEET_PATH

        self.stylesheet_path = Path(stylesheet_path)
        self.cache = cache or StylesheetCache()

    def resolve(self) -> ResolvedStyle:
        """
        Load the precompiled stylesheet if present, else select the CDN fallback.

        Returns:
            ResolvedStyle with css and method
        """
        if not self.stylesheet_path.is_file():
            _log_debug(f"No precompiled stylesheet at {self.stylesheet_path}")
            _log_info("Using utility-CSS CDN fallback")
            return ResolvedStyle(css=None, method=StyleMethod.CDN_FALLBACK)

        try:
            css = self.cache.read(self.stylesheet_path)
        except (OSError, UnicodeDecodeError) as e:
            _log_warning(f"Could not load compiled stylesheet, using CDN fallback: {e}")
            return ResolvedStyle(css=None, method=StyleMethod.CDN_FALLBACK)

        _log_info(f"Loaded precompiled stylesheet ({len(css)} characters)")
        return ResolvedStyle(css=css, method=StyleMethod.PRECOMPILED)
