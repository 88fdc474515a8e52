"""Phase enrichment: build a DetectedPhase from its weeks.

Aggregates are recomputed over exactly the weeks a segment covers, so a
segment that absorbed neighbours reports statistics over the union.
Optional blocks (PRs, HR-zone profile, form metrics) are attached only when
the underlying data exists.
"""

from __future__ import annotations

from collections.abc import Sequence

from periodization_engine.math.form_zones import FormZoneClassifier
from periodization_engine.math.stats import mean
from periodization_engine.math.trends import half_split_delta_trend, half_split_percent_trend
from periodization_engine.models.enums import (
    DAYS_PER_WEEK,
    OVERREACHING_TSB,
    SEGMENT_TSB_TREND,
    SEGMENT_TSS_TREND_PCT,
    SEGMENT_VOLUME_TREND_PCT,
    FormZone,
)
from periodization_engine.models.personal_record import PersonalRecord
from periodization_engine.models.phase import (
    DetectedPhase,
    FormMetrics,
    FormZoneDistribution,
    HRZoneProfile,
    PerformanceMetrics,
    PRDetail,
    WeekConsensus,
)
from periodization_engine.models.weekly_metric import WeeklyMetric
from periodization_engine.segmentation.confidence import segment_confidence
from periodization_engine.segmentation.segmenter import PhaseSegment

DOMINANT_ZONE_COUNT = 2


def performance_metrics(
    phase_weeks: Sequence[WeeklyMetric], personal_records: Sequence[PersonalRecord]
) -> PerformanceMetrics | None:
    """PRs dated inside the phase (inclusive), or None if there are none."""
    start = phase_weeks[0].week_start
    end = phase_weeks[-1].week_end
    in_phase = [pr for pr in personal_records if start <= pr.date <= end]
    if not in_phase:
        return None
    details = tuple(
        PRDetail(
            category_id=pr.category.category_id,
            category_name=pr.category.name,
            activity_id=pr.activity_id,
            date=pr.date,
        )
        for pr in in_phase
    )
    return PerformanceMetrics(prs_achieved=len(in_phase), pr_details=details)


def hr_zone_profile(phase_weeks: Sequence[WeeklyMetric]) -> HRZoneProfile | None:
    """Average zone distribution over the weeks that have one."""
    distributions = [
        w.hr_zone_distribution.as_tuple()
        for w in phase_weeks
        if w.hr_zone_distribution is not None
    ]
    if not distributions:
        return None
    averages = [mean([d[zone] for d in distributions]) for zone in range(5)]
    # sorted() is stable, so equal shares keep the lower zone first.
    ranked = sorted(range(5), key=lambda zone: averages[zone], reverse=True)
    return HRZoneProfile(
        zone1=averages[0],
        zone2=averages[1],
        zone3=averages[2],
        zone4=averages[3],
        zone5=averages[4],
        dominant_zones=tuple(zone + 1 for zone in ranked[:DOMINANT_ZONE_COUNT]),
    )


def form_metrics(
    phase_weeks: Sequence[WeeklyMetric], classifier: FormZoneClassifier
) -> FormMetrics:
    """TSB statistics and form-zone histogram for a phase."""
    tsb_values = [w.avg_tsb for w in phase_weeks]
    counts = {zone: 0 for zone in FormZone}
    for week in phase_weeks:
        counts[classifier.classify(week.avg_tsb, week.avg_ctl).zone] += 1

    total = len(phase_weeks)
    distribution = FormZoneDistribution(
        **{zone.label: counts[zone] / total * 100.0 for zone in FormZone}
    )

    dominant, dominant_count = FormZone.MAINTENANCE, 0
    for zone in FormZone:
        if counts[zone] > dominant_count:
            dominant, dominant_count = zone, counts[zone]

    overreaching_weeks = sum(1 for tsb in tsb_values if tsb < OVERREACHING_TSB)
    return FormMetrics(
        avg_tsb=mean(tsb_values),
        min_tsb=min(tsb_values),
        max_tsb=max(tsb_values),
        tsb_trend=half_split_delta_trend(tsb_values, SEGMENT_TSB_TREND),
        zone_distribution=distribution,
        dominant_zone=dominant,
        overreaching_days=overreaching_weeks * DAYS_PER_WEEK,
    )


class PhaseEnricher:
    """Materializes segments into DetectedPhase records."""

    def __init__(self, form_classifier: FormZoneClassifier | None = None) -> None:
        self.form_classifier = form_classifier or FormZoneClassifier()

    def build_phase(
        self,
        weeks: Sequence[WeeklyMetric],
        segment: PhaseSegment,
        consensus: Sequence[WeekConsensus],
        personal_records: Sequence[PersonalRecord] | None = None,
        include_form_metrics: bool = True,
    ) -> DetectedPhase:
        """Aggregate the segment's weeks into a DetectedPhase.

        Args:
            weeks: The full weekly series.
            segment: Week-index range and label of the phase.
            consensus: Per-week consensus (votes) for the full series.
            personal_records: Optional PRs to count inside the phase.
            include_form_metrics: Attach TSB form statistics.

        Returns:
            The enriched, immutable DetectedPhase.
        """
        phase_weeks = weeks[segment.start : segment.stop]
        hours = [w.volume_hours for w in phase_weeks]
        tss = [w.avg_weekly_tss for w in phase_weeks]
        volume_trend, volume_change = half_split_percent_trend(hours, SEGMENT_VOLUME_TREND_PCT)
        tss_trend, _ = half_split_percent_trend(tss, SEGMENT_TSS_TREND_PCT)
        confidence, factors = segment_confidence(consensus, segment)

        return DetectedPhase(
            phase=segment.phase,
            start_date=phase_weeks[0].week_start,
            end_date=phase_weeks[-1].week_end,
            duration_weeks=segment.length,
            avg_weekly_volume=mean(hours),
            avg_weekly_distance=mean([w.distance_km for w in phase_weeks]),
            volume_trend=volume_trend,
            volume_change=volume_change,
            avg_weekly_tss=mean(tss),
            tss_trend=tss_trend,
            avg_ctl=mean([w.avg_ctl for w in phase_weeks]),
            ctl_gain=phase_weeks[-1].avg_ctl - phase_weeks[0].avg_ctl,
            avg_atl=mean([w.avg_atl for w in phase_weeks]),
            avg_tsb=mean([w.avg_tsb for w in phase_weeks]),
            confidence=confidence,
            confidence_factors=factors,
            performance_metrics=(
                performance_metrics(phase_weeks, personal_records) if personal_records else None
            ),
            hr_zone_profile=hr_zone_profile(phase_weeks),
            form_metrics=(
                form_metrics(phase_weeks, self.form_classifier) if include_form_metrics else None
            ),
        )
