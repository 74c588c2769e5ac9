"""
HTML Optimizer

Rewrites a generated page for deterministic print rendering:
applies the resolved style strategy, injects print overrides, and strips
scripts that interfere with snapshotting.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from pressroom.contexts.styling.html_patterns import DOCUMENT, INTERFERING_SCRIPTS, UTILITY_CSS
from pressroom.contexts.styling.logger import _log_debug, log_optimization_result
from pressroom.contexts.styling.stylesheet import ResolvedStyle, StyleMethod

TEMPLATES_PATH = Path(__file__).parent / "templates"
PRINT_STYLES_TEMPLATE = "print_styles.css.jinja"

COMPILED_STYLE_ID = "compiled-utility-css"
PRINT_STYLE_ID = "print-optimizations"


@dataclass
class PrintStyleOptions:
    """
    Parameters of the injected print stylesheet.

    Attributes:
        orphans: Minimum lines of a paragraph/list item left at a page bottom
        widows: Minimum lines of a paragraph/list item carried to a page top
        unbreakable_selectors: Elements never split across pages
        backdrop_blurs: Backdrop-blur utility suffix -> blur radius to pin
    """

    orphans: int = 3
    widows: int = 3
    unbreakable_selectors: List[str] = field(
        default_factory=lambda: ["section", "img", ".masonry-grid > *"]
    )
    backdrop_blurs: Dict[str, str] = field(
        default_factory=lambda: {"sm": "4px", "md": "12px", "lg": "16px", "xl": "24px"}
    )


class HTMLOptimizer:
    """
    Applies a ResolvedStyle and print overrides to generated HTML.

    The print stylesheet is a Jinja2 template rendered once per optimizer.
    """

    def __init__(
        self,
        cdn_script_url: str = "https://cdn.tailwindcss.com",
        print_options: PrintStyleOptions = None,
        templates_path: Path = TEMPLATES_PATH,
    ):
        self.cdn_script_url = cdn_script_url
        self.print_options = print_options or PrintStyleOptions()

        self.env = Environment(
            loader=FileSystemLoader(str(templates_path)),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._print_css = None

    @property
    def print_css(self) -> str:
        """Rendered print stylesheet (cached after first use)."""
        if self._print_css is None:
            template = self.env.get_template(PRINT_STYLES_TEMPLATE)
            self._print_css = template.render(
                orphans=self.print_options.orphans,
                widows=self.print_options.widows,
                unbreakable_selectors=self.print_options.unbreakable_selectors,
                backdrop_blurs=self.print_options.backdrop_blurs,
            )
        return self._print_css

    def optimize(self, html: str, style: ResolvedStyle) -> str:
        """
        Rewrite HTML for PDF rendering.

        Args:
            html: Generated page
            style: Outcome of StyleResolver.resolve()

        Returns:
            HTML with a single head carrying the style strategy and print overrides
        """
        optimized = strip_interfering_scripts(html)
        optimized = ensure_head(optimized)

        if style.method is StyleMethod.PRECOMPILED:
            optimized = UTILITY_CSS.CDN_SCRIPT.sub("", optimized)
            optimized = inject_before_head_close(
                optimized, f'<style id="{COMPILED_STYLE_ID}">\n{style.css}\n</style>\n'
            )
        elif UTILITY_CSS.CDN_HOST not in optimized:
            _log_debug("Injecting utility-CSS CDN script")
            optimized = inject_before_head_close(
                optimized, f'<script src="{self.cdn_script_url}"></script>\n'
            )

        optimized = inject_before_head_close(
            optimized, f'<style id="{PRINT_STYLE_ID}">\n{self.print_css}</style>\n'
        )

        log_optimization_result(style.method.value, len(html), len(optimized))
        return optimized


def strip_interfering_scripts(html: str) -> str:
    """Remove analytics and smooth-scroll script blocks."""
    html = INTERFERING_SCRIPTS.ANALYTICS.sub("", html)
    html = INTERFERING_SCRIPTS.SMOOTH_SCROLL_COMMENT.sub("", html)
    return INTERFERING_SCRIPTS.SMOOTH_SCROLL_BEHAVIOR.sub("", html)


def ensure_head(html: str) -> str:
    """
    Guarantee a closing head tag exists.

    Inserts an empty head after <html>, before <body>, or at the start of a
    fragment, in that order of preference.
    """
    if DOCUMENT.HEAD_CLOSE.search(html):
        return html

    head_open = DOCUMENT.HEAD_OPEN.search(html)
    if head_open:
        # Unclosed head: close it right before the body
        body_open = DOCUMENT.BODY_OPEN.search(html, head_open.end())
        position = body_open.start() if body_open else len(html)
        return html[:position] + "</head>\n" + html[position:]

    html_open = DOCUMENT.HTML_OPEN.search(html)
    if html_open:
        position = html_open.end()
    else:
        body_open = DOCUMENT.BODY_OPEN.search(html)
        position = body_open.start() if body_open else 0

    return html[:position] + "<head>\n</head>\n" + html[position:]


def inject_before_head_close(html: str, snippet: str) -> str:
    """Insert snippet immediately before the first closing head tag."""
    match = DOCUMENT.HEAD_CLOSE.search(html)
    if match is None:
        return html
    return html[: match.start()] + snippet + html[match.start():]
