"""
HTML Pattern Constants

Centralized regular expressions used when rewriting generated pages for print.
Organized into frozen dataclasses by category for immutability and clear grouping.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class DocumentPatterns:
    """
    Document structure patterns.

    Used to locate injection points and repair pages without a head element.
    """

    HEAD_CLOSE: re.Pattern = re.compile(r"</head\s*>", re.IGNORECASE)
    HEAD_OPEN: re.Pattern = re.compile(r"<head(?:\s[^>]*)?>", re.IGNORECASE)
    HTML_OPEN: re.Pattern = re.compile(r"<html(?:\s[^>]*)?>", re.IGNORECASE)
    BODY_OPEN: re.Pattern = re.compile(r"<body(?:\s[^>]*)?>", re.IGNORECASE)


@dataclass(frozen=True)
class UtilityCSSPatterns:
    """
    Utility-CSS framework script patterns.

    The CDN build registers itself under tailwindcss.com.
    """

    CDN_SCRIPT: re.Pattern = re.compile(
        r"<script[^>]*tailwindcss[^>]*>\s*</script>\s*", re.IGNORECASE
    )
    CDN_HOST: str = "tailwindcss.com"


@dataclass(frozen=True)
class InterferingScriptPatterns:
    """
    Script blocks that make rendering non-deterministic.

    Analytics tags fire network requests that delay network idle; smooth-scroll
    handlers animate the programmatic scroll used to trigger lazy content.
    """

    ANALYTICS: re.Pattern = re.compile(
        r"<script[^>]*(?:analytics|googletagmanager|gtag)[^>]*>[\s\S]*?</script>\s*",
        re.IGNORECASE,
    )
    SMOOTH_SCROLL_COMMENT: re.Pattern = re.compile(
        r"<script[^>]*>\s*//\s*Smooth scroll[\s\S]*?</script>\s*", re.IGNORECASE
    )
    # Inline scripts requesting behavior: 'smooth'; tempered so a match never spans scripts
    SMOOTH_SCROLL_BEHAVIOR: re.Pattern = re.compile(
        r"<script(?![^>]*\bsrc=)[^>]*>(?:(?!</script>)[\s\S])*?"
        r"behavior\s*:\s*['\"]smooth['\"](?:(?!</script>)[\s\S])*</script>\s*",
        re.IGNORECASE,
    )


DOCUMENT = DocumentPatterns()
UTILITY_CSS = UtilityCSSPatterns()
INTERFERING_SCRIPTS = InterferingScriptPatterns()
