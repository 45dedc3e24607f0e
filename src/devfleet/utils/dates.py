"""Relative time formatting."""

from __future__ import annotations

from datetime import datetime, timezone

# (upper bound in seconds, singular text, unit seconds for plural) in order
_THRESHOLDS: list[tuple[float, str, float | None]] = [
    (45, "a few seconds", None),
    (90, "a minute", None),
    (45 * 60, "{n} minutes", 60),
    (90 * 60, "an hour", None),
    (22 * 3600, "{n} hours", 3600),
    (36 * 3600, "a day", None),
    (26 * 86400, "{n} days", 86400),
    (45 * 86400, "a month", None),
    (320 * 86400, "{n} months", 30 * 86400),
    (548 * 86400, "a year", None),
]


def parse_datetime(value: str | datetime) -> datetime:
    """Parse an ISO-8601 timestamp as returned by the API."""
    if isinstance(value, datetime):
        result = value
    else:
        result = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if result.tzinfo is None:
        result = result.replace(tzinfo=timezone.utc)
    return result


def humanize_seconds(seconds: float) -> str:
    """
    >>> humanize_seconds(3 * 3600)
    '3 hours'
    """
    seconds = abs(seconds)
    for bound, text, unit in _THRESHOLDS:
        if seconds < bound:
            if unit is None:
                return text
            return text.format(n=max(2, round(seconds / unit)))
    return f"{max(2, round(seconds / (365 * 86400)))} years"


def time_since(
    value: str | datetime,
    suffix: bool = True,
    now: datetime | None = None,
) -> str:
    """
    Describe how long ago value was.

    Args:
        value: Timestamp (ISO string or datetime)
        suffix: Append "ago" ("in ..." for future timestamps)
        now: Reference time, defaults to the current UTC time

    Returns:
        Text such as "2 hours ago", or "2 hours" without suffix
    """
    moment = parse_datetime(value)
    reference = now or datetime.now(timezone.utc)
    delta = (reference - moment).total_seconds()
    text = humanize_seconds(delta)
    if not suffix:
        return text
    if delta < 0:
        return f"in {text}"
    return f"{text} ago"


__all__ = ["parse_datetime", "humanize_seconds", "time_since"]
