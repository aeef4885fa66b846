from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from math import cos, floor, pi

UNIX_EPOCH_JD = 2440587.5
REFERENCE_NEW_MOON_JD = 2451550.1  # 2000-01-06 14:24 UTC
SYNODIC_MONTH_DAYS = 29.530588853
SECONDS_PER_DAY = 86400.0

PHASE_NAMES = (
    "New Moon",
    "Waxing Crescent",
    "First Quarter",
    "Waxing Gibbous",
    "Full Moon",
    "Waning Gibbous",
    "Last Quarter",
    "Waning Crescent",
)

# Upper (exclusive) bound of each named bucket after the leading New Moon.
_PHASE_BOUNDS = (
    (0.22, "Waxing Crescent"),
    (0.28, "First Quarter"),
    (0.47, "Waxing Gibbous"),
    (0.53, "Full Moon"),
    (0.72, "Waning Gibbous"),
    (0.78, "Last Quarter"),
)


@dataclass(frozen=True)
class PhaseReading:
    phase_fraction: float
    age_days: float
    illuminated_fraction: float


def _utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def julian_day(dt: datetime) -> float:
    """Continuous Julian Day for *dt* (naive values are taken as UTC)."""
    return _utc(dt).timestamp() / SECONDS_PER_DAY + UNIX_EPOCH_JD


def _frac(value: float) -> float:
    p = value - floor(value)
    # tiny negative cycles can round up to exactly 1.0
    if p >= 1.0:
        return 0.0
    return p


def compute_phase(dt: datetime) -> PhaseReading:
    cycles = (julian_day(dt) - REFERENCE_NEW_MOON_JD) / SYNODIC_MONTH_DAYS
    p = _frac(cycles)
    illum = 0.5 * (1 - cos(2 * pi * p))
    return PhaseReading(
        phase_fraction=p,
        age_days=p * SYNODIC_MONTH_DAYS,
        illuminated_fraction=min(max(illum, 0.0), 1.0),
    )


def classify_phase(p: float) -> str:
    if p < 0.03 or p > 0.97:
        return "New Moon"
    for bound, name in _PHASE_BOUNDS:
        if p < bound:
            return name
    return "Waning Crescent"

