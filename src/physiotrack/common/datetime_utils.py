from __future__ import annotations

import calendar
from datetime import datetime, timezone


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """Format an aware datetime as an ISO-8601 UTC instant, e.g. 2026-03-01T09:30:00.000Z."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 instant (accepts a trailing 'Z')."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def month_label(year: int, month: int) -> str:
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month!r}")
    return calendar.month_name[month]
