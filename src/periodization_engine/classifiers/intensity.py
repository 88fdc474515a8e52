"""Intensity classifier: HR-zone distribution of the week.

Polarised, mostly-aerobic weeks read as base; a large Z4-5 share reads as
peak; a mix with meaningful Z4-5 reads as build; a Z3-heavy controlled
week reads as taper. Weeks without HR-zone data get a low-confidence
transition vote.

Reference:
    Seiler & Kjerland (2006). Quantifying training intensity distribution
    in elite endurance athletes. Scand J Med Sci Sports 16(1):49-56.
"""

from __future__ import annotations

from collections.abc import Sequence

from periodization_engine.classifiers.base import CascadeRule, PhaseClassifier
from periodization_engine.models.config import DetectionConfig
from periodization_engine.models.enums import TrainingPhase
from periodization_engine.models.phase import PhaseVote
from periodization_engine.models.weekly_metric import HRZoneDistribution, WeeklyMetric

NO_DATA_CONFIDENCE = 30

CASCADE: tuple[CascadeRule[HRZoneDistribution], ...] = (
    CascadeRule(
        "high_intensity_emphasis",
        TrainingPhase.PEAK,
        lambda z: z.high > 25 or z.zone5 > 8,
        lambda z: 75,
        lambda z: f"High intensity emphasis ({z.high:.0f}% Z4-5)",
    ),
    CascadeRule(
        "aerobic_emphasis",
        TrainingPhase.BASE,
        lambda z: z.low >= 80 and z.high < 10,
        lambda z: 75,
        lambda z: f"High aerobic emphasis ({z.low:.0f}% Z1-2)",
    ),
    CascadeRule(
        "very_easy_emphasis",
        TrainingPhase.RECOVERY,
        lambda z: z.zone1 >= 70 and z.high < 5,
        lambda z: 75,
        lambda z: f"Very easy emphasis ({z.zone1:.0f}% Z1)",
    ),
    CascadeRule(
        "balanced_intensity",
        TrainingPhase.BUILD,
        lambda z: z.low >= 50 and 10 <= z.high <= 25,
        lambda z: 70,
        lambda z: f"Balanced intensity ({z.low:.0f}% Z1-2, {z.high:.0f}% Z4-5)",
    ),
    CascadeRule(
        "controlled_moderate_intensity",
        TrainingPhase.TAPER,
        lambda z: z.moderate > 30 and 8 <= z.high <= 20,
        lambda z: 65,
        lambda z: f"Moderate controlled intensity ({z.moderate:.0f}% Z3)",
    ),
    CascadeRule(
        "mixed_intensity",
        TrainingPhase.BUILD,
        lambda z: True,
        lambda z: 50,
        lambda z: "Mixed intensity distribution",
    ),
)


class IntensityClassifier(PhaseClassifier):
    """Labels a week from its heart-rate zone distribution."""

    classifier_id = "intensity"
    version = "1.0.0"
    vote_order = 1

    def classify(
        self, weeks: Sequence[WeeklyMetric], index: int, config: DetectionConfig
    ) -> PhaseVote:
        zones = weeks[index].hr_zone_distribution
        if zones is None:
            return self.vote(
                TrainingPhase.TRANSITION, NO_DATA_CONFIDENCE, "No HR zone data available"
            )
        return self.decide(CASCADE, zones)
