"""Form (TSB) zone classification with fitness-adaptive thresholds.

Fitter athletes tolerate deeper negative TSB and reach race readiness at a
lower positive TSB, so the zone boundaries are scaled by a factor chosen
from the athlete's CTL:

    CTL < 40   -> 0.8
    CTL <= 80  -> 1.0
    CTL > 80   -> 1.2

Negative-side boundaries are multiplied by the factor. Positive-side
boundaries use the inverse factor when the factor exceeds 1.

Reference:
    Coggan & Allen (2010). Training and Racing with a Power Meter, ch. 12.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from periodization_engine.models.enums import (
    FORM_FATIGUED_MAX,
    FORM_HIGH_FITNESS_CTL,
    FORM_HIGH_FITNESS_FACTOR,
    FORM_LOW_FITNESS_CTL,
    FORM_LOW_FITNESS_FACTOR,
    FORM_MAINTENANCE_MAX,
    FORM_OPTIMAL_RACE_MAX,
    FORM_OVERREACHED_MAX,
    FORM_PRODUCTIVE_MAX,
    FormZone,
)

_ZONE_TEXT: dict[FormZone, tuple[str, str]] = {
    FormZone.OVERREACHED: (
        "Overreached",
        "Excessive fatigue - high injury and illness risk",
    ),
    FormZone.FATIGUED: (
        "Fatigued",
        "Significant fatigue - recovery needed soon",
    ),
    FormZone.PRODUCTIVE_TRAINING: (
        "Productive Training",
        "Productive training stress - fitness gains occurring",
    ),
    FormZone.MAINTENANCE: (
        "Maintenance",
        "Neutral maintenance zone - balanced training",
    ),
    FormZone.OPTIMAL_RACE: (
        "Optimal Race",
        "Peak race readiness - optimal form for performance",
    ),
    FormZone.FRESH: (
        "Fresh",
        "Very fresh - recovered but risk of detraining if prolonged",
    ),
}


@dataclass(frozen=True)
class FormZoneThresholds:
    """Upper TSB boundary of each zone; ``fresh`` is everything above the last."""

    overreached_max: float = FORM_OVERREACHED_MAX
    fatigued_max: float = FORM_FATIGUED_MAX
    productive_max: float = FORM_PRODUCTIVE_MAX
    maintenance_max: float = FORM_MAINTENANCE_MAX
    optimal_race_max: float = FORM_OPTIMAL_RACE_MAX
    low_fitness_factor: float = FORM_LOW_FITNESS_FACTOR
    moderate_fitness_factor: float = 1.0
    high_fitness_factor: float = FORM_HIGH_FITNESS_FACTOR


@dataclass(frozen=True)
class FormZoneInfo:
    """A classified zone with its CTL-adjusted TSB range [tsb_min, tsb_max)."""

    zone: FormZone
    label: str
    description: str
    tsb_min: float
    tsb_max: float


class FormZoneClassifier:
    """Buckets a TSB/CTL pair into a form zone."""

    def __init__(self, thresholds: FormZoneThresholds | None = None) -> None:
        self.thresholds = thresholds or FormZoneThresholds()

    def ctl_adjustment_factor(self, ctl: float) -> float:
        t = self.thresholds
        if ctl < FORM_LOW_FITNESS_CTL:
            return t.low_fitness_factor
        if ctl <= FORM_HIGH_FITNESS_CTL:
            return t.moderate_fitness_factor
        return t.high_fitness_factor

    def zone_ranges(self, ctl: float = 0.0) -> dict[FormZone, tuple[float, float]]:
        """CTL-adjusted [min, max) TSB range of every zone."""
        t = self.thresholds
        factor = self.ctl_adjustment_factor(ctl)
        positive = 1.0 / factor if factor > 1 else factor
        return {
            FormZone.OVERREACHED: (-math.inf, t.overreached_max * factor),
            FormZone.FATIGUED: (t.overreached_max * factor, t.fatigued_max * factor),
            FormZone.PRODUCTIVE_TRAINING: (t.fatigued_max * factor, t.productive_max * factor),
            FormZone.MAINTENANCE: (t.productive_max * factor, t.maintenance_max * positive),
            FormZone.OPTIMAL_RACE: (t.maintenance_max * positive, t.optimal_race_max * positive),
            FormZone.FRESH: (t.optimal_race_max * positive, math.inf),
        }

    def determine_zone(self, tsb: float, ctl: float = 0.0) -> FormZone:
        """Zone for a TSB value; the first matching range wins, FRESH otherwise."""
        ranges = self.zone_ranges(ctl)
        if tsb < ranges[FormZone.OVERREACHED][1]:
            return FormZone.OVERREACHED
        for zone in (
            FormZone.FATIGUED,
            FormZone.PRODUCTIVE_TRAINING,
            FormZone.MAINTENANCE,
            FormZone.OPTIMAL_RACE,
        ):
            low, high = ranges[zone]
            if low <= tsb < high:
                return zone
        return FormZone.FRESH

    def classify(self, tsb: float, ctl: float = 0.0) -> FormZoneInfo:
        """Classify a TSB value given the athlete's CTL.

        Args:
            tsb: Training stress balance.
            ctl: Chronic training load, used to scale the thresholds.

        Returns:
            FormZoneInfo with the zone and its adjusted TSB range.
        """
        zone = self.determine_zone(tsb, ctl)
        low, high = self.zone_ranges(ctl)[zone]
        label, description = _ZONE_TEXT[zone]
        return FormZoneInfo(zone=zone, label=label, description=description, tsb_min=low, tsb_max=high)

    def is_overreached(self, tsb: float) -> bool:
        """Unadjusted check against the overreached boundary."""
        return tsb < self.thresholds.overreached_max

    def is_optimal_for_race(self, tsb: float, ctl: float = 0.0) -> bool:
        return self.determine_zone(tsb, ctl) == FormZone.OPTIMAL_RACE
