"""
Styling Context

Responsibilities:
- Resolves the stylesheet strategy (precompiled build output or CDN fallback)
- Rewrites generated HTML for print: style injection, print overrides,
  removal of interfering scripts

Owns: Stylesheet lookup and caching, HTML rewriting
Never: Launches a browser or touches artifacts
"""

from pressroom.contexts.styling.optimizer import HTMLOptimizer, PrintStyleOptions
from pressroom.contexts.styling.stylesheet import (
    ResolvedStyle,
    StyleMethod,
    StyleResolver,
    StylesheetCache,
)

__all__ = [
    "HTMLOptimizer",
    "PrintStyleOptions",
    "ResolvedStyle",
    "StyleMethod",
    "StyleResolver",
    "StylesheetCache",
]
