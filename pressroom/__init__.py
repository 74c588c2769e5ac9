"""
PRESSROOM - Portfolio Rendering Engine for Snapshot-Stable Output

Converts generated portfolio HTML into versioned PDF artifacts using a headless
browser, compensating for non-deterministic asset loading with readiness checks.

Architecture:
- Styling Context: Stylesheet resolution and print-oriented HTML rewriting
- Rendering Context: Headless browser lifecycle, readiness checks, PDF emission
- Publishing Context: Pre-flight validation, artifact storage, batch orchestration
"""

__version__ = "0.1.0"
