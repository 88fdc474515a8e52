"""Form-management sub-score: how well TSB was steered through the phases.

Only computed when at least one phase carries form metrics. Four parts:

* TSB balance: each phase's average TSB against an optimal value for its
  type (productive stress in build, freshness in taper and recovery).
* Overreaching management: overreaching belongs in build phases, not in
  base, recovery or transition.
* Taper effectiveness: TSB should rise from a build/base phase into the
  following peak/taper phase.
* Recovery timing: long build/peak blocks that drove TSB below -25 should
  be followed by recovery or taper.
"""

from __future__ import annotations

from collections.abc import Sequence

from periodization_engine.math.stats import clamp_score, round_half_up
from periodization_engine.models.config import ScoringConfig
from periodization_engine.models.effectiveness import FormManagementMetrics, FormManagementScore
from periodization_engine.models.enums import TrainingPhase
from periodization_engine.models.phase import DetectedPhase

# (deviation above, penalty), checked in order
TSB_DEVIATION_PENALTIES: tuple[tuple[float, int], ...] = ((15.0, 15), (10.0, 10), (5.0, 5))

OVERREACHING_OUT_OF_PLACE = frozenset(
    {TrainingPhase.BASE, TrainingPhase.RECOVERY, TrainingPhase.TRANSITION}
)
OUT_OF_PLACE_PENALTY = 20
BUILD_OVERREACHING_LIMIT_DAYS = 14
EXCESSIVE_BUILD_OVERREACHING_PENALTY = 10

TAPER_SOURCES = frozenset({TrainingPhase.BUILD, TrainingPhase.BASE})
TAPER_TARGETS = frozenset({TrainingPhase.PEAK, TrainingPhase.TAPER})
DEFAULT_TAPER_SCORE = 75

LOADING_PHASES = frozenset({TrainingPhase.BUILD, TrainingPhase.PEAK})
UNLOADING_PHASES = frozenset({TrainingPhase.RECOVERY, TrainingPhase.TAPER})
LONG_LOADING_WEEKS = 6
DEEP_FATIGUE_TSB = -25.0
RECOVERY_TIMING_START = 80
RECOVERY_GAP_PENALTY = 15

TSB_BALANCE_WEIGHT = 0.30
OVERREACHING_WEIGHT = 0.25
TAPER_WEIGHT = 0.25
RECOVERY_TIMING_WEIGHT = 0.20


def taper_score(tsb_increase: float) -> int:
    """Score the TSB change from a loading phase into a peak/taper phase."""
    if tsb_increase > 10:
        return 95
    if tsb_increase > 5:
        return 85
    if tsb_increase < -5:
        return 40
    return 60


def _tsb_balance(
    phases: Sequence[DetectedPhase], config: ScoringConfig
) -> tuple[int, float]:
    score = 100
    deviations: list[float] = []
    for phase in phases:
        deviation = abs(phase.form_metrics.avg_tsb - config.optimal_tsb.get(phase.phase, 0.0))
        deviations.append(deviation)
        for limit, penalty in TSB_DEVIATION_PENALTIES:
            if deviation > limit:
                score -= penalty
                break
    avg_deviation = sum(deviations) / len(deviations) if deviations else 0.0
    return clamp_score(score), avg_deviation


def _overreaching_management(phases: Sequence[DetectedPhase]) -> tuple[int, int]:
    score = 100
    inappropriate = 0
    for phase in phases:
        days = phase.form_metrics.overreaching_days
        if days <= 0:
            continue
        if phase.phase in OVERREACHING_OUT_OF_PLACE:
            inappropriate += 1
            score -= OUT_OF_PLACE_PENALTY
        elif phase.phase == TrainingPhase.BUILD and days > BUILD_OVERREACHING_LIMIT_DAYS:
            score -= EXCESSIVE_BUILD_OVERREACHING_PENALTY
    return clamp_score(score), inappropriate


def _taper_effectiveness(phases: Sequence[DetectedPhase]) -> tuple[int, float]:
    # The last qualifying transition wins.
    score, quality = DEFAULT_TAPER_SCORE, 0.0
    for prev, curr in zip(phases, phases[1:]):
        if prev.phase not in TAPER_SOURCES or curr.phase not in TAPER_TARGETS:
            continue
        if prev.form_metrics is None or curr.form_metrics is None:
            continue
        quality = curr.form_metrics.avg_tsb - prev.form_metrics.avg_tsb
        score = taper_score(quality)
    return score, quality


def _recovery_timing(phases: Sequence[DetectedPhase]) -> tuple[int, int]:
    score = RECOVERY_TIMING_START
    gaps = 0
    for phase, following in zip(phases, phases[1:]):
        if (
            phase.phase in LOADING_PHASES
            and phase.duration_weeks >= LONG_LOADING_WEEKS
            and following.phase not in UNLOADING_PHASES
            and phase.form_metrics is not None
            and phase.form_metrics.min_tsb < DEEP_FATIGUE_TSB
        ):
            gaps += 1
            score -= RECOVERY_GAP_PENALTY
    return clamp_score(score), gaps


def calculate_form_management_score(
    phases: Sequence[DetectedPhase], config: ScoringConfig | None = None
) -> FormManagementScore | None:
    """Score TSB management, or None when no phase has form metrics.

    Args:
        phases: Detected phases in order.
        config: Scoring options (optimal TSB per phase).

    Returns:
        FormManagementScore, or None without form data.
    """
    config = config or ScoringConfig()
    with_form = [p for p in phases if p.form_metrics is not None]
    if not with_form:
        return None

    balance, avg_deviation = _tsb_balance(with_form, config)
    overreaching, inappropriate = _overreaching_management(with_form)
    taper, taper_quality = _taper_effectiveness(phases)
    timing, gaps = _recovery_timing(phases)

    overall = round_half_up(
        balance * TSB_BALANCE_WEIGHT
        + overreaching * OVERREACHING_WEIGHT
        + taper * TAPER_WEIGHT
        + timing * RECOVERY_TIMING_WEIGHT
    )

    recommendations: list[str] = []
    if avg_deviation > 10:
        recommendations.append(
            "Adjust training load to achieve more appropriate TSB ranges for each phase"
        )
    if inappropriate > 0:
        recommendations.append("Avoid overreaching during base and recovery phases")
    if taper < 70:
        recommendations.append(
            "Improve taper execution by reducing volume 40-60% before peak events"
        )
    if gaps > 0:
        recommendations.append(
            "Schedule recovery weeks after extended build phases (especially when TSB < -25)"
        )

    return FormManagementScore(
        overall=overall,
        tsb_balance_score=balance,
        overreaching_management_score=overreaching,
        taper_effectiveness_score=taper,
        recovery_timing_score=timing,
        metrics=FormManagementMetrics(
            avg_tsb_deviation=avg_deviation,
            inappropriate_overreaching=inappropriate,
            taper_quality=taper_quality,
            recovery_gaps=gaps,
        ),
        recommendations=tuple(recommendations),
    )
