"""ISO timestamp parsing shared by ranking and display code."""

from __future__ import annotations

from datetime import UTC, datetime


def parse_iso_datetime(iso_str: str) -> datetime | None:
    """Parse common ISO datetime formats and normalize to UTC."""
    value = iso_str.strip()
    if not value:
        return None

    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    if " " in value and "T" not in value:
        value = value.replace(" ", "T")

    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        try:
            dt = datetime.fromisoformat(value[:19])
        except ValueError:
            return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
