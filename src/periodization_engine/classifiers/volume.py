"""Volume classifier: weekly hours crossed with a short-term volume trend.

Low volume suggests recovery, rising moderate volume suggests build, very
high rising volume suggests base accumulation and falling volume suggests
taper or peak.

Reference:
    Bompa & Haff (2009). Periodization, ch. 5: volume/intensity
    relationships across the macrocycle.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from periodization_engine.classifiers.base import CascadeRule, PhaseClassifier
from periodization_engine.math.trends import lookback_percent_trend
from periodization_engine.models.config import DetectionConfig, VolumeThresholds
from periodization_engine.models.enums import (
    VOLUME_TREND_THRESHOLD_PCT,
    TrainingPhase,
    TrendDirection,
)
from periodization_engine.models.phase import PhaseVote
from periodization_engine.models.weekly_metric import WeeklyMetric

BASE_CONFIDENCE = 60
TREND_CONFIDENCE = 70

_UP = TrendDirection.INCREASING
_DOWN = TrendDirection.DECREASING
_FLAT = TrendDirection.STABLE


@dataclass(frozen=True)
class VolumeSignal:
    hours: float
    trend: TrendDirection
    base_confidence: int
    thresholds: VolumeThresholds

    @property
    def below_low(self) -> bool:
        return self.hours < self.thresholds.low

    @property
    def low_to_medium(self) -> bool:
        return self.thresholds.low <= self.hours < self.thresholds.medium

    @property
    def medium_to_high(self) -> bool:
        return self.thresholds.medium <= self.hours < self.thresholds.high


def _h(s: VolumeSignal) -> str:
    return f"{s.hours:.1f}h"


CASCADE: tuple[CascadeRule[VolumeSignal], ...] = (
    CascadeRule(
        "very_low_volume",
        TrainingPhase.RECOVERY,
        lambda s: s.below_low,
        lambda s: s.base_confidence + 10,
        lambda s: f"Very low volume ({_h(s)}), {s.trend.label} trend",
    ),
    CascadeRule(
        "medium_volume_falling",
        TrainingPhase.TAPER,
        lambda s: s.low_to_medium and s.trend == _DOWN,
        lambda s: s.base_confidence + 5,
        lambda s: f"Medium volume ({_h(s)}) with decreasing trend",
    ),
    CascadeRule(
        "medium_volume_rising",
        TrainingPhase.BUILD,
        lambda s: s.low_to_medium and s.trend == _UP,
        lambda s: s.base_confidence,
        lambda s: f"Medium volume ({_h(s)}) with increasing trend",
    ),
    CascadeRule(
        "medium_volume_steady",
        TrainingPhase.PEAK,
        lambda s: s.low_to_medium,
        lambda s: s.base_confidence,
        lambda s: f"Medium volume ({_h(s)}), stable",
    ),
    CascadeRule(
        "medium_high_volume_rising",
        TrainingPhase.BUILD,
        lambda s: s.medium_to_high and s.trend == _UP,
        lambda s: s.base_confidence + 5,
        lambda s: f"Medium-high volume ({_h(s)}) building",
    ),
    CascadeRule(
        "medium_high_volume_falling",
        TrainingPhase.PEAK,
        lambda s: s.medium_to_high and s.trend == _DOWN,
        lambda s: s.base_confidence,
        lambda s: f"Medium-high volume ({_h(s)}), tapering",
    ),
    CascadeRule(
        "medium_high_volume_steady",
        TrainingPhase.BUILD,
        lambda s: s.medium_to_high,
        lambda s: s.base_confidence,
        lambda s: f"Medium-high volume ({_h(s)}), maintaining",
    ),
    CascadeRule(
        "very_high_volume_rising",
        TrainingPhase.BASE,
        lambda s: s.trend == _UP,
        lambda s: s.base_confidence + 10,
        lambda s: f"Very high volume ({_h(s)}), building base",
    ),
    CascadeRule(
        "very_high_volume",
        TrainingPhase.BUILD,
        lambda s: True,
        lambda s: s.base_confidence,
        lambda s: f"Very high volume ({_h(s)}), {s.trend.label}",
    ),
)


class VolumeClassifier(PhaseClassifier):
    """Labels a week from its training hours and the recent volume trend."""

    classifier_id = "volume"
    version = "1.0.0"
    vote_order = 0

    def classify(
        self, weeks: Sequence[WeeklyMetric], index: int, config: DetectionConfig
    ) -> PhaseVote:
        hours = [w.volume_hours for w in weeks[: index + 1]]
        trend, _ = lookback_percent_trend(
            hours, index, config.trend_window_weeks, VOLUME_TREND_THRESHOLD_PCT
        )
        signal = VolumeSignal(
            hours=hours[index],
            trend=trend,
            base_confidence=BASE_CONFIDENCE if trend == _FLAT else TREND_CONFIDENCE,
            thresholds=config.volume_thresholds,
        )
        return self.decide(CASCADE, signal)
