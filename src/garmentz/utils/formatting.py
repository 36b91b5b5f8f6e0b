# Rev 0.2.4
"""Display helpers shared by view-models and widgets."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def parse_ts(s: str | None) -> datetime | None:
    if not s:
        return None
    try:
        dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        return None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def localized_date(s: str | None) -> str:
    """M/D/YYYY in local time, the way the dashboard has always shown order dates."""
    dt = parse_ts(s)
    if dt is None:
        return ""
    local = dt.astimezone()
    return f"{local.month}/{local.day}/{local.year}"


def relative_time(then: datetime, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    secs = int((now - then).total_seconds())
    if secs < 60:
        return "Just now"
    mins = secs // 60
    if mins < 60:
        return f"{mins} minute{'s' if mins != 1 else ''} ago"
    hours = mins // 60
    if hours < 24:
        return f"{hours} hour{'s' if hours != 1 else ''} ago"
    days = hours // 24
    return f"{days} day{'s' if days != 1 else ''} ago"


def humanize(value: str | None) -> str:
    # in_progress -> In progress
    if not value:
        return "—"
    return value.replace("_", " ").capitalize()
