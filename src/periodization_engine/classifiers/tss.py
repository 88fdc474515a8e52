"""TSS classifier: weekly training stress against fitness (CTL) and form (TSB).

Reference:
    Coggan & Allen (2010). Training and Racing with a Power Meter,
    Performance Management Chart: rising CTL with moderately negative TSB
    marks productive loading, rising TSB on flat CTL marks a taper.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from periodization_engine.classifiers.base import CascadeRule, PhaseClassifier
from periodization_engine.math.trends import lookback_delta_trend
from periodization_engine.models.config import DetectionConfig, TSSThresholds
from periodization_engine.models.enums import CTL_TREND_THRESHOLD, TrainingPhase, TrendDirection
from periodization_engine.models.phase import PhaseVote
from periodization_engine.models.weekly_metric import WeeklyMetric

BASE_CONFIDENCE = 65
TREND_CONFIDENCE = 70
DEFAULT_CONFIDENCE = 55


@dataclass(frozen=True)
class StressSignal:
    tss: float
    ctl: float
    tsb: float
    ctl_trend: TrendDirection
    early: bool  # fewer than two weeks of look-back
    base_confidence: int
    thresholds: TSSThresholds

    @property
    def ctl_rising_or_early(self) -> bool:
        return self.ctl_trend == TrendDirection.INCREASING or self.early

    @property
    def ctl_arrow(self) -> str:
        return "↑" if self.ctl_trend == TrendDirection.INCREASING else ""


CASCADE: tuple[CascadeRule[StressSignal], ...] = (
    CascadeRule(
        "very_low_load",
        TrainingPhase.RECOVERY,
        lambda s: s.tss < s.thresholds.low,
        lambda s: s.base_confidence + 10,
        lambda s: f"Recovery needed (TSS {s.tss:.0f}, very low load)",
    ),
    CascadeRule(
        "form_out_of_range",
        TrainingPhase.RECOVERY,
        lambda s: s.tsb >= 25 or s.tsb < -30,
        lambda s: s.base_confidence + 5,
        lambda s: f"Recovery needed (TSB {s.tsb:.1f})",
    ),
    CascadeRule(
        "freshening",
        TrainingPhase.TAPER,
        lambda s: (
            s.tss < s.thresholds.medium
            and s.ctl_trend != TrendDirection.INCREASING
            and 5 < s.tsb < 25
        ),
        lambda s: s.base_confidence + 10,
        lambda s: f"Freshening up (TSB {s.tsb:.1f}↑)",
    ),
    CascadeRule(
        "building_fitness",
        TrainingPhase.BASE,
        lambda s: s.tss < s.thresholds.medium and s.ctl_rising_or_early and -15 <= s.tsb <= 10,
        lambda s: s.base_confidence + 10,
        lambda s: f"Building fitness (CTL {s.ctl:.1f}{s.ctl_arrow}, TSB {s.tsb:.1f})",
    ),
    CascadeRule(
        "intensifying",
        TrainingPhase.BUILD,
        lambda s: s.tss >= s.thresholds.medium and s.ctl_rising_or_early and -30 <= s.tsb < 5,
        lambda s: s.base_confidence + 10,
        lambda s: f"Intensifying training (CTL {s.ctl:.1f}{s.ctl_arrow}, TSB {s.tsb:.1f})",
    ),
    CascadeRule(
        "peak_load",
        TrainingPhase.PEAK,
        lambda s: (
            s.tss >= s.thresholds.high
            and s.ctl_trend == TrendDirection.STABLE
            and -20 < s.tsb < 10
        ),
        lambda s: s.base_confidence + 10,
        lambda s: f"Peak load (CTL {s.ctl:.1f}, TSS {s.tss:.0f})",
    ),
    CascadeRule(
        "active_training",
        TrainingPhase.BUILD,
        lambda s: True,
        lambda s: DEFAULT_CONFIDENCE,
        lambda s: f"Active training (CTL {s.ctl:.1f}, TSB {s.tsb:.1f})",
    ),
)


class TSSClassifier(PhaseClassifier):
    """Labels a week from its TSS, CTL trend and TSB."""

    classifier_id = "tss"
    version = "1.0.0"
    vote_order = 2

    def classify(
        self, weeks: Sequence[WeeklyMetric], index: int, config: DetectionConfig
    ) -> PhaseVote:
        week = weeks[index]
        ctl_values = [w.avg_ctl for w in weeks[: index + 1]]
        ctl_trend, has_lookback = lookback_delta_trend(
            ctl_values, index, config.trend_window_weeks, CTL_TREND_THRESHOLD
        )
        signal = StressSignal(
            tss=week.avg_weekly_tss,
            ctl=week.avg_ctl,
            tsb=week.avg_tsb,
            ctl_trend=ctl_trend,
            early=not has_lookback,
            base_confidence=(
                BASE_CONFIDENCE if ctl_trend == TrendDirection.STABLE else TREND_CONFIDENCE
            ),
            thresholds=config.tss_thresholds,
        )
        return self.decide(CASCADE, signal)
