"""Week boundary utilities for the weekly tribe competition."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone


def get_week_iso(d: date) -> str:
    """Get ISO week string e.g. '2026-W09'. Uses %G-W%V (ISO year + ISO week)."""
    return d.strftime("%G-W%V")


def get_monday(d: datetime | date) -> date:
    """Get the Monday of the ISO week containing d."""
    d = d.date() if isinstance(d, datetime) else d
    return d - timedelta(days=d.weekday())


def get_week_dates(d: datetime | date | None = None) -> tuple[date, date]:
    """Get (Monday, Sunday) of the ISO week containing d (default: today, UTC)."""
    if d is None:
        d = datetime.now(timezone.utc)
    monday = get_monday(d)
    return monday, monday + timedelta(days=6)

