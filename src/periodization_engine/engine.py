"""PeriodizationEngine: the orchestrator that detects, scores and summarizes."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import date

from periodization_engine.aggregation.weekly import aggregate_weekly_metrics
from periodization_engine.detector import PhaseDetector
from periodization_engine.exceptions import InvalidInputError
from periodization_engine.math.stats import mean
from periodization_engine.models.analysis import (
    AnalysisPeriod,
    AnalysisSummary,
    PeriodizationAnalysis,
)
from periodization_engine.models.config import DetectionConfig, ScoringConfig
from periodization_engine.models.effectiveness import EffectivenessAnalysis
from periodization_engine.models.enums import MIN_ANALYSIS_WEEKS, TrainingPhase
from periodization_engine.models.personal_record import PersonalRecord
from periodization_engine.models.phase import DetectedPhase
from periodization_engine.models.weekly_metric import ActivityRef, WeeklyMetric
from periodization_engine.scoring.effectiveness import calculate_effectiveness
from periodization_engine.training_warnings import detect_warnings

logger = logging.getLogger(__name__)

# (activities per week above, label), checked in order
_DATA_QUALITY_BANDS: tuple[tuple[float, str], ...] = (
    (3.0, "excellent"),
    (2.0, "good"),
    (1.0, "fair"),
)
_INSUFFICIENT_DATA = "insufficient"


def data_quality(activity_count: int, total_weeks: int) -> str:
    """Label how densely the period is covered by activities."""
    for per_week, label in _DATA_QUALITY_BANDS:
        if activity_count > total_weeks * per_week:
            return label
    return _INSUFFICIENT_DATA


def primary_phase(phases: Sequence[DetectedPhase]) -> TrainingPhase | None:
    """Phase type with the most weeks; the first one seen wins ties."""
    durations: dict[TrainingPhase, int] = {}
    for phase in phases:
        durations[phase.phase] = durations.get(phase.phase, 0) + phase.duration_weeks
    best, best_weeks = None, 0
    for phase, weeks in durations.items():
        if weeks > best_weeks:
            best, best_weeks = phase, weeks
    return best


class PeriodizationEngine:
    """Detects training phases, scores them and reports risks.

    Usage:
        engine = PeriodizationEngine()
        phases = engine.detect_phases(weeks)
        effectiveness = engine.score(phases, weeks)
        analysis = engine.analyze(weeks, personal_records)
    """

    def __init__(
        self,
        detector: PhaseDetector | None = None,
        detection_config: DetectionConfig | None = None,
        scoring_config: ScoringConfig | None = None,
        min_analysis_weeks: int = MIN_ANALYSIS_WEEKS,
    ) -> None:
        self.detector = detector or PhaseDetector()
        self.detection_config = detection_config or DetectionConfig()
        self.scoring_config = scoring_config or ScoringConfig()
        self.min_analysis_weeks = min_analysis_weeks

    def detect_phases(
        self,
        weeks: Sequence[WeeklyMetric],
        personal_records: Sequence[PersonalRecord] | None = None,
    ) -> tuple[DetectedPhase, ...]:
        return self.detector.detect(weeks, personal_records, self.detection_config)

    def score(
        self,
        phases: Sequence[DetectedPhase],
        weeks: Sequence[WeeklyMetric],
        personal_records: Sequence[PersonalRecord] | None = None,
    ) -> EffectivenessAnalysis:
        return calculate_effectiveness(phases, weeks, personal_records, self.scoring_config)

    def analyze(
        self,
        weeks: Sequence[WeeklyMetric],
        personal_records: Sequence[PersonalRecord] | None = None,
    ) -> PeriodizationAnalysis:
        """Full analysis: phases, effectiveness, warnings and a summary.

        Args:
            weeks: Weekly metrics in ascending ``week_start`` order.
            personal_records: Optional PRs over the same period.

        Returns:
            A PeriodizationAnalysis.

        Raises:
            InvalidInputError: If fewer than ``min_analysis_weeks`` weeks
                are supplied.
        """
        if len(weeks) < self.min_analysis_weeks:
            raise InvalidInputError(
                f"Periodization analysis needs at least {self.min_analysis_weeks} weeks "
                f"of data, got {len(weeks)}"
            )
        records = tuple(personal_records or ())

        phases = self.detect_phases(weeks, records)
        effectiveness = self.score(phases, weeks, records)
        warnings = detect_warnings(weeks, phases, effectiveness)
        logger.info(
            "Effectiveness %d (%s) with %d warnings",
            effectiveness.overall_score,
            effectiveness.grade,
            len(warnings),
        )

        activity_count = sum(w.activity_count for w in weeks)
        period = AnalysisPeriod(
            start_date=weeks[0].week_start,
            end_date=weeks[-1].week_end,
            total_weeks=len(weeks),
            data_quality=data_quality(activity_count, len(weeks)),
        )
        summary = AnalysisSummary(
            total_activities=activity_count,
            total_volume=sum(w.volume_hours for w in weeks),
            total_distance=sum(w.distance_km for w in weeks),
            avg_weekly_tss=mean([w.avg_weekly_tss for w in weeks]),
            fitness_gain=weeks[-1].avg_ctl - weeks[0].avg_ctl,
            total_prs=len(records),
            primary_phase=primary_phase(phases),
        )
        return PeriodizationAnalysis(
            period=period,
            phases=phases,
            effectiveness=effectiveness,
            warnings=warnings,
            summary=summary,
        )

    def analyze_daily(
        self,
        daily_tss: Mapping[date, float],
        activities: Sequence[ActivityRef] = (),
        personal_records: Sequence[PersonalRecord] | None = None,
    ) -> PeriodizationAnalysis:
        """Aggregate daily data into weeks, then run ``analyze``."""
        weeks = aggregate_weekly_metrics(daily_tss, activities)
        return self.analyze(weeks, personal_records)
