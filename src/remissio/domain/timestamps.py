"""
domain.timestamps - ISO-8601 helpers shared by the shims and services.

Stored timestamps look like JavaScript's Date.toISOString():
UTC, millisecond precision, "Z" suffix (2024-05-01T08:30:00.000Z).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

# Sort key for records whose timestamp is missing or unparseable.
EPOCH_MIN = datetime.min.replace(tzinfo=timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string into an aware UTC datetime, or None.

    Date-only strings parse as midnight UTC; naive values are taken as UTC.
    """
    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def day_of(value: Any) -> Optional[str]:
    """UTC calendar day (YYYY-MM-DD) of a stored timestamp."""
    parsed = parse_timestamp(value)
    return parsed.date().isoformat() if parsed else None
