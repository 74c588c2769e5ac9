"""Timestamp formatting utilities."""

from datetime import datetime, timezone


def now() -> str:
    """Compact local timestamp for directory names (e.g., 20261015_142233)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_exact() -> str:
    """ISO 8601 local timestamp with microseconds."""
    return datetime.now().isoformat()


def utc_now() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def format_timestamp(iso_timestamp: str, relative: bool = False) -> str:
    """
    Format ISO 8601 timestamp to readable format.

    Args:
        iso_timestamp: ISO 8601 formatted timestamp string
        relative: If True, show relative time (e.g., "2h ago")
                 If False, show absolute time (e.g., "2026-10-15 18:45:40")

    Returns:
        Human-readable timestamp, or the input unchanged if it cannot be parsed
    """
    try:
        dt = datetime.fromisoformat(iso_timestamp)
    except (ValueError, TypeError):
        return iso_timestamp

    if not relative:
        return dt.strftime("%Y-%m-%d %H:%M:%S")
    return _format_relative_time(dt)


def _format_relative_time(dt: datetime) -> str:
    """Format datetime as compact relative time (e.g., "30s ago", "2h ago", "5d ago")."""
    current = datetime.now(dt.tzinfo) if dt.tzinfo else datetime.now()
    diff = current - dt

    if diff.total_seconds() < 0:
        diff = -diff
        suffix = "from now"
    else:
        suffix = "ago"

    seconds = int(diff.total_seconds())
    minutes = seconds // 60
    hours = minutes // 60

    if seconds < 60:
        return f"{seconds}s {suffix}"
    elif minutes < 60:
        return f"{minutes}m {suffix}"
    elif hours < 24:
        return f"{hours}h {suffix}"
    else:
        return f"{diff.days}d {suffix}"
