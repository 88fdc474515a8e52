"""Training warnings: risks spotted in the weekly series and detected phases.

Each detector returns its warnings in scan order; ``detect_warnings``
concatenates them (volume, fatigue, recovery, monotony, structure, form)
and stable-sorts by severity, critical first.

References:
    - Gabbett (2016): weekly load spikes above ~15 % raise injury risk
    - Meeusen et al. (2013): overreaching and overtraining consensus
    - Foster (1998): training monotony
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from periodization_engine.math.stats import mean, round_half_up
from periodization_engine.math.trends import percent_change
from periodization_engine.models.analysis import TrainingWarning
from periodization_engine.models.effectiveness import EffectivenessAnalysis
from periodization_engine.models.enums import (
    BUILD_END_FATIGUE_TSB,
    BUILD_START_FATIGUE_TSB,
    CHRONIC_FATIGUE_CRITICAL_WEEKS,
    CHRONIC_FATIGUE_WARNING_WEEKS,
    DAYS_PER_WEEK,
    DETRAINING_TSB,
    DETRAINING_WEEKS,
    EXTENDED_FRESH_MIN_WEEKS,
    EXTENDED_FRESH_PCT,
    FAILED_TAPER_TSB_DROP,
    MAX_PEAK_WEEKS,
    MIN_TAPER_TSB_RISE,
    MONOTONY_CV_PCT,
    MONOTONY_MIN_HOURS,
    MONOTONY_WEEKS,
    NO_RECOVERY_CRITICAL_WEEKS,
    OVERREACHING_TSB,
    POOR_BALANCE_SCORE,
    PROLONGED_OVERREACHING_DAYS,
    RECOVERY_INTERVAL_MIN_WEEKS,
    RECOVERY_INTERVAL_WARNING_WEEKS,
    SEVERE_OVERREACHING_DAYS,
    TSS_LOW,
    VOLUME_SPIKE_CRITICAL_PCT,
    VOLUME_SPIKE_WARNING_PCT,
    TrainingPhase,
    WarningSeverity,
    WarningType,
)
from periodization_engine.models.phase import DetectedPhase
from periodization_engine.models.weekly_metric import WeeklyMetric

MIN_MONOTONY_HISTORY = 4
EXPECTED_TAPER_TSB_RISE = 10


# ---------------------------------------------------------------------------
# Volume
# ---------------------------------------------------------------------------


def detect_volume_warnings(weeks: Sequence[WeeklyMetric]) -> list[TrainingWarning]:
    """Week-over-week volume spikes: > 25 % critical, > 15 % warning."""
    warnings: list[TrainingWarning] = []
    for prev, curr in zip(weeks, weeks[1:]):
        increase = percent_change(curr.volume_hours, prev.volume_hours)
        if increase is None or increase <= VOLUME_SPIKE_WARNING_PCT:
            continue
        metrics = {
            "increase": increase,
            "previousVolume": prev.volume_hours,
            "currentVolume": curr.volume_hours,
        }
        description = (
            f"Training volume increased by {round_half_up(increase)}% "
            f"in week of {curr.week_start.isoformat()}"
        )
        if increase > VOLUME_SPIKE_CRITICAL_PCT:
            warnings.append(
                TrainingWarning(
                    type=WarningType.RAPID_VOLUME_INCREASE,
                    severity=WarningSeverity.CRITICAL,
                    title="Rapid Volume Increase Detected",
                    description=description,
                    detected_at=curr.week_start,
                    metrics=metrics,
                    recommendations=(
                        "Reduce volume to previous level",
                        "Increase gradually (max 10% per week)",
                        "Monitor for injury signs",
                        "Consider extra recovery day",
                    ),
                )
            )
        else:
            warnings.append(
                TrainingWarning(
                    type=WarningType.RAPID_VOLUME_INCREASE,
                    severity=WarningSeverity.WARNING,
                    title="High Volume Increase",
                    description=description,
                    detected_at=curr.week_start,
                    metrics=metrics,
                    recommendations=(
                        "Monitor recovery closely",
                        "Avoid further rapid increases",
                        "Ensure adequate sleep and nutrition",
                    ),
                )
            )
    return warnings


# ---------------------------------------------------------------------------
# Fatigue
# ---------------------------------------------------------------------------


def _negative_tsb_warning(run: Sequence[WeeklyMetric]) -> TrainingWarning | None:
    weeks = len(run)
    if weeks >= CHRONIC_FATIGUE_CRITICAL_WEEKS:
        return TrainingWarning(
            type=WarningType.CHRONIC_FATIGUE,
            severity=WarningSeverity.CRITICAL,
            title="Chronic Fatigue Detected",
            description=f"TSB negative for {weeks} consecutive weeks",
            detected_at=run[0].week_start,
            metrics={"consecutiveWeeks": weeks},
            recommendations=(
                "Schedule immediate recovery week",
                "Reduce training load by 40-50%",
                "Monitor for overtraining symptoms",
                "Consider medical consultation if symptoms persist",
            ),
        )
    if weeks >= CHRONIC_FATIGUE_WARNING_WEEKS:
        return TrainingWarning(
            type=WarningType.CHRONIC_FATIGUE,
            severity=WarningSeverity.WARNING,
            title="Extended Negative TSB",
            description=f"TSB negative for {weeks} weeks",
            detected_at=run[0].week_start,
            metrics={"consecutiveWeeks": weeks},
            recommendations=(
                "Plan recovery week soon",
                "Reduce intensity this week",
                "Prioritize sleep",
            ),
        )
    return None


def detect_fatigue_warnings(weeks: Sequence[WeeklyMetric]) -> list[TrainingWarning]:
    """Long runs of negative TSB and any overreaching weeks (TSB < -30).

    A run still open at the end of the series is evaluated too.
    """
    warnings: list[TrainingWarning] = []
    run: list[WeeklyMetric] = []
    for week in weeks:
        if week.avg_tsb < 0:
            run.append(week)
            continue
        warning = _negative_tsb_warning(run)
        if warning is not None:
            warnings.append(warning)
        run = []
    warning = _negative_tsb_warning(run)
    if warning is not None:
        warnings.append(warning)

    overreaching = [w for w in weeks if w.avg_tsb < OVERREACHING_TSB]
    if overreaching:
        warnings.append(
            TrainingWarning(
                type=WarningType.OVERREACHING,
                severity=WarningSeverity.CRITICAL,
                title="Overreaching Episodes Detected",
                description=f"{len(overreaching)} weeks with TSB < -30 detected",
                detected_at=overreaching[0].week_start,
                metrics={
                    "overreachingWeeks": len(overreaching),
                    "minTSB": min(w.avg_tsb for w in overreaching),
                },
                recommendations=(
                    "Immediate recovery required",
                    "Reduce training load significantly",
                    "Monitor resting heart rate",
                    "Watch for illness/injury signs",
                    "Consider medical evaluation",
                ),
            )
        )
    return warnings


# ---------------------------------------------------------------------------
# Recovery
# ---------------------------------------------------------------------------


def detect_recovery_warnings(
    weeks: Sequence[WeeklyMetric], phases: Sequence[DetectedPhase]
) -> list[TrainingWarning]:
    """Missing or infrequent recovery phases, and possible detraining."""
    warnings: list[TrainingWarning] = []
    recovery_count = sum(1 for p in phases if p.phase == TrainingPhase.RECOVERY)
    total = len(weeks)

    if total >= NO_RECOVERY_CRITICAL_WEEKS and recovery_count == 0:
        warnings.append(
            TrainingWarning(
                type=WarningType.INSUFFICIENT_RECOVERY,
                severity=WarningSeverity.CRITICAL,
                title="No Recovery Weeks Detected",
                description=f"{total} weeks of training without recovery phase",
                recommendations=(
                    "Schedule recovery week immediately",
                    "Reduce volume by 40-60%",
                    "Focus on easy aerobic work",
                    "Incorporate recovery weeks every 3-4 weeks",
                ),
            )
        )
    elif total >= RECOVERY_INTERVAL_MIN_WEEKS:
        interval = total / (recovery_count or 1)
        if interval > RECOVERY_INTERVAL_WARNING_WEEKS:
            warnings.append(
                TrainingWarning(
                    type=WarningType.INSUFFICIENT_RECOVERY,
                    severity=WarningSeverity.WARNING,
                    title="Infrequent Recovery Periods",
                    description=f"Average {interval:.1f} weeks between recovery phases",
                    metrics={"avgInterval": interval, "recoveryWeeks": recovery_count},
                    recommendations=(
                        "Increase recovery frequency to every 3-4 weeks",
                        "Monitor fatigue levels closely",
                        "Consider scheduling recovery week soon",
                    ),
                )
            )

    recent = weeks[-DETRAINING_WEEKS:]
    if recent:
        avg_tsb = mean([w.avg_tsb for w in recent])
        avg_tss = mean([w.avg_weekly_tss for w in recent])
        if avg_tsb > DETRAINING_TSB and avg_tss < TSS_LOW:
            warnings.append(
                TrainingWarning(
                    type=WarningType.DETRAINING,
                    severity=WarningSeverity.WARNING,
                    title="Possible Detraining",
                    description="Extended period of low training load",
                    detected_at=recent[0].week_start,
                    metrics={"avgTSB": avg_tsb, "avgTSS": avg_tss},
                    recommendations=(
                        "Consider resuming training if recovered",
                        "Start with base-building phase",
                        "Progressive volume increase",
                    ),
                )
            )
    return warnings


# ---------------------------------------------------------------------------
# Monotony
# ---------------------------------------------------------------------------


def detect_monotony_warnings(weeks: Sequence[WeeklyMetric]) -> list[TrainingWarning]:
    """Low week-to-week volume variation (CV < 10 %) over the last 8 weeks."""
    if len(weeks) < MIN_MONOTONY_HISTORY:
        return []
    volumes = np.array([w.volume_hours for w in weeks[-MONOTONY_WEEKS:]], dtype=np.float64)
    avg_volume = float(np.mean(volumes))
    if avg_volume <= 0:
        return []
    cv = float(np.std(volumes)) / avg_volume * 100.0
    if cv >= MONOTONY_CV_PCT or avg_volume <= MONOTONY_MIN_HOURS:
        return []
    return [
        TrainingWarning(
            type=WarningType.MONOTONOUS_TRAINING,
            severity=WarningSeverity.INFO,
            title="Low Training Variability",
            description="Training volume very consistent with little variation",
            metrics={"coefficientOfVariation": cv, "avgVolume": avg_volume},
            recommendations=(
                "Incorporate varied training loads",
                "Include recovery weeks",
                "Add intensity variation",
                "Consider periodization approach",
            ),
        )
    ]


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------


def detect_structure_warnings(
    phases: Sequence[DetectedPhase], effectiveness: EffectivenessAnalysis
) -> list[TrainingWarning]:
    warnings: list[TrainingWarning] = []
    present = {p.phase for p in phases}

    if present & {TrainingPhase.BUILD, TrainingPhase.PEAK} and TrainingPhase.BASE not in present:
        warnings.append(
            TrainingWarning(
                type=WarningType.MISSING_BASE_PHASE,
                severity=WarningSeverity.WARNING,
                title="Missing Base Phase",
                description="High-intensity training without adequate aerobic foundation",
                recommendations=(
                    "Consider adding base-building phase",
                    "Focus on aerobic development",
                    "Build volume before intensity",
                ),
            )
        )

    if phases:
        latest = phases[-1]
        if latest.phase == TrainingPhase.PEAK and latest.duration_weeks > MAX_PEAK_WEEKS:
            warnings.append(
                TrainingWarning(
                    type=WarningType.INADEQUATE_TAPER,
                    severity=WarningSeverity.WARNING,
                    title="Extended Peak Phase",
                    description=(
                        f"Peak phase duration ({latest.duration_weeks} weeks) "
                        "exceeds recommended 2-4 weeks"
                    ),
                    detected_at=latest.start_date,
                    recommendations=(
                        "Consider taper or recovery phase",
                        "High-intensity work should be limited",
                        "Risk of burnout increases",
                    ),
                )
            )

    balance = effectiveness.phase_balance
    if balance.balance_score < POOR_BALANCE_SCORE:
        warnings.append(
            TrainingWarning(
                type=WarningType.POOR_PHASE_BALANCE,
                severity=WarningSeverity.INFO,
                title="Suboptimal Phase Distribution",
                description="Training phase distribution not aligned with periodization principles",
                metrics={
                    "balanceScore": balance.balance_score,
                    "baseRatio": balance.base_ratio,
                    "buildRatio": balance.build_ratio,
                },
                recommendations=balance.recommendations,
            )
        )
    return warnings


# ---------------------------------------------------------------------------
# Form (TSB)
# ---------------------------------------------------------------------------


def _prolonged_overreaching(phases: Sequence[DetectedPhase]) -> list[TrainingWarning]:
    warnings: list[TrainingWarning] = []
    for phase in phases:
        form = phase.form_metrics
        if form is None or form.overreaching_days < PROLONGED_OVERREACHING_DAYS:
            continue
        severe = form.overreaching_days >= SEVERE_OVERREACHING_DAYS
        warnings.append(
            TrainingWarning(
                type=WarningType.OVERREACHING,
                severity=WarningSeverity.CRITICAL if severe else WarningSeverity.WARNING,
                title="Prolonged Overreaching Detected",
                description=(
                    f"{form.overreaching_days} days of overreaching (TSB < -30) in "
                    f"{phase.phase.label} phase ({phase.start_date.isoformat()} to "
                    f"{phase.end_date.isoformat()})"
                ),
                detected_at=phase.start_date,
                metrics={
                    "overreachingDays": form.overreaching_days,
                    "avgTSB": form.avg_tsb,
                    "minTSB": form.min_tsb,
                },
                recommendations=(
                    "Immediate recovery period recommended",
                    "Reduce training volume by 50-60%",
                    "Focus on easy aerobic activities only",
                    "Monitor for overtraining symptoms",
                    "Consider medical evaluation if symptoms persist",
                ),
            )
        )
    return warnings


def _extended_fresh(phases: Sequence[DetectedPhase]) -> list[TrainingWarning]:
    warnings: list[TrainingWarning] = []
    for phase in phases:
        form = phase.form_metrics
        if form is None:
            continue
        fresh = form.zone_distribution.fresh
        if not (
            fresh > EXTENDED_FRESH_PCT
            and form.avg_tsb > DETRAINING_TSB
            and phase.duration_weeks >= EXTENDED_FRESH_MIN_WEEKS
        ):
            continue
        days = phase.duration_weeks * DAYS_PER_WEEK
        warnings.append(
            TrainingWarning(
                type=WarningType.DETRAINING,
                severity=WarningSeverity.WARNING,
                title="Extended Fresh Period - Detraining Risk",
                description=(
                    f"TSB remained very high (>{form.avg_tsb:.1f}) for {days} days "
                    f"during {phase.phase.label} phase"
                ),
                detected_at=phase.start_date,
                metrics={
                    "avgTSB": form.avg_tsb,
                    "daysInFreshZone": round_half_up(fresh / 100.0 * days),
                    "phaseWeeks": phase.duration_weeks,
                },
                recommendations=(
                    "Resume training if fully recovered",
                    "Gradually increase training load",
                    "Start with base-building activities",
                    "Monitor fitness metrics for detraining signs",
                ),
            )
        )
    return warnings


def _build_without_recovery(phases: Sequence[DetectedPhase]) -> list[TrainingWarning]:
    warnings: list[TrainingWarning] = []
    for phase, following in zip(phases, phases[1:]):
        if phase.form_metrics is None or following.form_metrics is None:
            continue
        if phase.phase != TrainingPhase.BUILD or following.phase != TrainingPhase.BUILD:
            continue
        # Minimum TSB stands in for the state at the end of the first block.
        end_tsb = phase.form_metrics.min_tsb
        start_tsb = following.form_metrics.avg_tsb
        if end_tsb < BUILD_END_FATIGUE_TSB and start_tsb < BUILD_START_FATIGUE_TSB:
            warnings.append(
                TrainingWarning(
                    type=WarningType.INSUFFICIENT_RECOVERY,
                    severity=WarningSeverity.WARNING,
                    title="Insufficient Recovery Between Build Phases",
                    description=(
                        "Build phase transitioned to another build without adequate "
                        f"recovery (TSB remained at {start_tsb:.1f})"
                    ),
                    detected_at=following.start_date,
                    metrics={
                        "previousPhaseTSB": end_tsb,
                        "currentPhaseTSB": start_tsb,
                        "tsbRecovery": start_tsb - end_tsb,
                    },
                    recommendations=(
                        "Schedule recovery week between consecutive build phases",
                        "Allow TSB to return to positive range (>5)",
                        "Reduce volume by 40-50% for recovery",
                        "Monitor cumulative fatigue carefully",
                    ),
                )
            )
    return warnings


def _poor_taper(phases: Sequence[DetectedPhase]) -> list[TrainingWarning]:
    warnings: list[TrainingWarning] = []
    for prev, curr in zip(phases, phases[1:]):
        if prev.form_metrics is None or curr.form_metrics is None:
            continue
        if prev.phase not in (TrainingPhase.BUILD, TrainingPhase.BASE):
            continue
        if curr.phase not in (TrainingPhase.PEAK, TrainingPhase.TAPER):
            continue
        change = curr.form_metrics.avg_tsb - prev.form_metrics.avg_tsb
        if change >= MIN_TAPER_TSB_RISE:
            continue
        movement = "decreased" if change < 0 else "increased minimally"
        warnings.append(
            TrainingWarning(
                type=WarningType.INADEQUATE_TAPER,
                severity=(
                    WarningSeverity.CRITICAL
                    if change < FAILED_TAPER_TSB_DROP
                    else WarningSeverity.WARNING
                ),
                title="Poor Taper Execution",
                description=f"TSB {movement} during taper to {curr.phase.label} phase",
                detected_at=curr.start_date,
                metrics={
                    "previousTSB": prev.form_metrics.avg_tsb,
                    "currentTSB": curr.form_metrics.avg_tsb,
                    "tsbChange": change,
                    "expectedIncrease": EXPECTED_TAPER_TSB_RISE,
                },
                recommendations=(
                    "Reduce training volume by 40-60%",
                    "Maintain intensity but reduce duration",
                    "Target TSB range of 10-20 for peak performance",
                    "Ensure adequate rest before key events",
                ),
            )
        )
    return warnings


def detect_form_warnings(phases: Sequence[DetectedPhase]) -> list[TrainingWarning]:
    """Form-based warnings; empty when no phase carries form metrics."""
    if not any(p.form_metrics is not None for p in phases):
        return []
    return [
        *_prolonged_overreaching(phases),
        *_extended_fresh(phases),
        *_build_without_recovery(phases),
        *_poor_taper(phases),
    ]


def detect_warnings(
    weeks: Sequence[WeeklyMetric],
    phases: Sequence[DetectedPhase],
    effectiveness: EffectivenessAnalysis,
) -> tuple[TrainingWarning, ...]:
    """All warnings, critical first, otherwise in detection order.

    Args:
        weeks: Weekly series in ascending order.
        phases: Phases detected from ``weeks``.
        effectiveness: Effectiveness report for ``phases``.

    Returns:
        Warnings sorted by severity (stable).
    """
    warnings = [
        *detect_volume_warnings(weeks),
        *detect_fatigue_warnings(weeks),
        *detect_recovery_warnings(weeks, phases),
        *detect_monotony_warnings(weeks),
        *detect_structure_warnings(phases, effectiveness),
        *detect_form_warnings(phases),
    ]
    return tuple(sorted(warnings, key=lambda w: w.severity))
