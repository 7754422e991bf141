"""Timestamp helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

DISPLAY_FORMAT = "%d/%m/%Y, %I:%M:%S %p"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime, tz_name: str = "Asia/Kolkata") -> str:
    """Render a timestamp for display, e.g. ``15/07/2024, 05:30:00 PM``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(ZoneInfo(tz_name)).strftime(DISPLAY_FORMAT)
