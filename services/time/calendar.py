from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from typing import List, Optional

from zoneinfo import ZoneInfo


def resolve_zone(name: Optional[str]) -> Optional[tzinfo]:
    """Return a ZoneInfo for *name*, or None to mean the host's local zone."""
    if not name:
        return None
    return ZoneInfo(name)


def local_now(zone: Optional[tzinfo] = None) -> datetime:
    if zone is None:
        return datetime.now().astimezone()
    return datetime.now(zone)


def local_midnight(day: date, zone: Optional[tzinfo] = None) -> datetime:
    """Aware datetime for 00:00 local time on *day*."""
    naive = datetime.combine(day, time(0, 0))
    if zone is None:
        return naive.astimezone()
    return naive.replace(tzinfo=zone)


def following_days(
    base: datetime, count: int = 7, zone: Optional[tzinfo] = None
) -> List[datetime]:
    """Local midnights of the *count* calendar days after *base*'s local date.

    Days are added to the calendar date, not as elapsed 24h spans, so a DST
    change between two entries shifts the instant but never the date.
    """
    if zone is not None and base.tzinfo is not None:
        base = base.astimezone(zone)
    start = base.date()
    return [local_midnight(start + timedelta(days=i), zone) for i in range(1, count + 1)]


def format_timestamp(dt: datetime) -> str:
    """e.g. ``10/19/2026, 2:05:33 PM``"""
    hour = dt.hour % 12 or 12
    return f"{dt.month}/{dt.day}/{dt.year}, {hour}:{dt:%M}:{dt:%S} {dt:%p}"


def format_long_date(dt: datetime) -> str:
    """e.g. ``Mon, Oct 19, 2026``"""
    return f"{dt:%a}, {dt:%b} {dt.day}, {dt.year}"


def format_short_date(dt: datetime) -> str:
    return f"{dt:%a}, {dt:%b} {dt.day}"


def format_percent(fraction: float) -> str:
    return f"{fraction * 100:.1f}%"


def format_age(days: float) -> str:
    return f"{days:.1f} days"
