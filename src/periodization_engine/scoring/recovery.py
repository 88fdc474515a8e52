"""Recovery sub-score: TSB management across the whole series."""

from __future__ import annotations

from collections.abc import Sequence

from periodization_engine.math.stats import clamp_score, mean
from periodization_engine.models.effectiveness import (
    RecoveryManagement,
    RecoveryScore,
    TSBManagement,
)
from periodization_engine.models.enums import (
    ADEQUATE_RECOVERY_TSB,
    OVERREACHING_TSB,
    TrainingPhase,
)
from periodization_engine.models.phase import DetectedPhase
from periodization_engine.models.weekly_metric import WeeklyMetric

TSB_SCORE_START = 70
BALANCED_TSB_LOW = -10.0
BALANCED_TSB_HIGH = 10.0
MAX_OVERREACHING_SHARE = 0.1
MIN_ADEQUATE_RECOVERY_SHARE = 0.2
MAX_RECOVERY_INTERVAL_WEEKS = 5.0


def _tsb_management(weeks: Sequence[WeeklyMetric]) -> TSBManagement:
    tsb = [w.avg_tsb for w in weeks]
    total = len(weeks)
    if not tsb:
        return TSBManagement(
            avg_tsb=0.0,
            tsb_min=0.0,
            tsb_max=0.0,
            overreaching_episodes=0,
            adequate_recovery_periods=0,
            score=0,
        )

    avg_tsb = mean(tsb)
    overreaching = sum(1 for v in tsb if v < OVERREACHING_TSB)
    adequate = sum(1 for v in tsb if v > ADEQUATE_RECOVERY_TSB)

    score = TSB_SCORE_START
    if BALANCED_TSB_LOW <= avg_tsb <= BALANCED_TSB_HIGH:
        score += 10
    if overreaching == 0:
        score += 10
    elif overreaching > total * MAX_OVERREACHING_SHARE:
        score -= 20
    if adequate >= total * MIN_ADEQUATE_RECOVERY_SHARE:
        score += 10

    return TSBManagement(
        avg_tsb=avg_tsb,
        tsb_min=min(tsb),
        tsb_max=max(tsb),
        overreaching_episodes=overreaching,
        adequate_recovery_periods=adequate,
        score=clamp_score(score),
    )


def analyze_recovery_management(
    weeks: Sequence[WeeklyMetric], phases: Sequence[DetectedPhase]
) -> RecoveryManagement:
    recovery_phases = [p for p in phases if p.phase == TrainingPhase.RECOVERY]
    total = len(weeks)
    interval = total / len(recovery_phases) if len(recovery_phases) > 1 else float(total)
    tsb = _tsb_management(weeks)

    recommendations: list[str] = []
    if tsb.overreaching_episodes > 0:
        recommendations.append("Reduce frequency of overreaching episodes")
    if interval > MAX_RECOVERY_INTERVAL_WEEKS:
        recommendations.append("Incorporate more frequent recovery weeks")
    if tsb.adequate_recovery_periods < total * MIN_ADEQUATE_RECOVERY_SHARE:
        recommendations.append("Allow more time for recovery (TSB > 15)")

    return RecoveryManagement(
        recovery_weeks_count=len(recovery_phases),
        avg_recovery_week_interval=interval,
        is_adequate=(
            interval <= MAX_RECOVERY_INTERVAL_WEEKS
            and tsb.overreaching_episodes < total * MAX_OVERREACHING_SHARE
        ),
        tsb_management=tsb,
        recommendations=tuple(recommendations),
    )


def calculate_recovery_score(
    weeks: Sequence[WeeklyMetric], phases: Sequence[DetectedPhase]
) -> RecoveryScore:
    """The recovery score is the TSB-management score.

    Start at 70; +10 for an average TSB in [-10, 10]; +10 with no
    overreaching week (TSB < -30), or -20 when overreaching weeks exceed
    10 % of the series; +10 when at least 20 % of weeks are fresh
    (TSB > 15). Empty input scores 0.
    """
    management = analyze_recovery_management(weeks, phases)
    return RecoveryScore(overall=management.tsb_management.score, management=management)
