"""
Shared utilities for PRESSROOM.

Common functionality used across contexts:
- Logger setup with provenance
- Pipeline event log
- Timestamps
- PDF inspection
"""

from pressroom.utils.timestamp import format_timestamp, now, now_exact, utc_now

__all__ = ["format_timestamp", "now", "now_exact", "utc_now"]
