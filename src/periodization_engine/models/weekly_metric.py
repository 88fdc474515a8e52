"""Weekly training summaries consumed by the phase detector."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class HRZoneDistribution:
    """Percentage of training time spent in each of the five HR zones.

    Percentages need not sum exactly to 100.
    """

    zone1: float
    zone2: float
    zone3: float
    zone4: float
    zone5: float

    @property
    def low(self) -> float:
        """Aerobic share: Z1 + Z2."""
        return self.zone1 + self.zone2

    @property
    def moderate(self) -> float:
        return self.zone3

    @property
    def high(self) -> float:
        """High-intensity share: Z4 + Z5."""
        return self.zone4 + self.zone5

    def as_tuple(self) -> tuple[float, float, float, float, float]:
        return (self.zone1, self.zone2, self.zone3, self.zone4, self.zone5)


@dataclass(frozen=True)
class ActivityRef:
    """Lightweight reference to one activity inside a week."""

    activity_id: int
    activity_type: str
    date: date
    duration: float  # seconds
    distance: float = 0.0  # meters
    elevation_gain: float = 0.0  # meters
    tss: float = 0.0
    avg_hr: float | None = None
    hr_zone_seconds: tuple[float, float, float, float, float] | None = None


@dataclass(frozen=True)
class WeeklyMetric:
    """One calendar week of aggregated training load.

    Produced by the weekly aggregator (or supplied by the caller) in
    ascending ``week_start`` order. CTL/ATL/TSB are the 42/7-day EWMA
    values for the week.
    """

    week_start: date
    week_end: date
    total_duration: float  # seconds
    total_distance: float  # meters
    avg_weekly_tss: float
    avg_ctl: float
    avg_atl: float
    avg_tsb: float
    total_elevation: float = 0.0  # meters
    activity_count: int = 0
    hr_zone_distribution: HRZoneDistribution | None = None
    activities: tuple[ActivityRef, ...] = ()

    @property
    def volume_hours(self) -> float:
        return self.total_duration / 3600.0

    @property
    def distance_km(self) -> float:
        return self.total_distance / 1000.0
