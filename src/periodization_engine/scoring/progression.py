"""Progression sub-score: weekly volume ramp, CTL gain and recovery frequency.

Weekly volume increases above 15 % are flagged as rapid (Gabbett 2016,
acute:chronic workload guidance). CTL gain is scored by how many weeks it
took to gain one point; about 1.25-2 points per week is optimal
(Coggan & Allen 2010).
"""

from __future__ import annotations

from collections.abc import Sequence

from periodization_engine.math.stats import clamp_score, mean, round_half_up
from periodization_engine.math.trends import fit_linear_trend, percent_change
from periodization_engine.models.config import (
    CTL_LOSS_SCORE,
    CTL_MAINTENANCE_SCORE,
    CTL_SLOW_GAIN_SCORE,
    ScoringConfig,
)
from periodization_engine.models.effectiveness import (
    ProgressionScore,
    RapidIncrease,
    TrendFit,
    VolumeProgression,
)
from periodization_engine.models.enums import (
    MIN_WEEKS_FOR_RECOVERY_CHECK,
    RAPID_VOLUME_INCREASE_PCT,
    WEEKS_PER_EXPECTED_RECOVERY,
    TrainingPhase,
)
from periodization_engine.models.phase import DetectedPhase
from periodization_engine.models.weekly_metric import WeeklyMetric

VOLUME_SCORE_START = 70
PROGRESSIVE_BONUS = 20
SAFE_RANGE_BONUS = 10
RAPID_INCREASE_PENALTY = 5
RARE_RAPID_SHARE = 0.1

INSUFFICIENT_DATA_RECOVERY_SCORE = 80
LOW_RECOVERY_RATIO = 0.5
HIGH_RECOVERY_RATIO = 2.0
LOW_RECOVERY_SCORE = 60
HIGH_RECOVERY_SCORE = 70
APPROPRIATE_RECOVERY_SCORE = 90

VOLUME_WEIGHT = 0.40
CTL_WEIGHT = 0.40
RECOVERY_FREQUENCY_WEIGHT = 0.20


def analyze_volume_progression(weeks: Sequence[WeeklyMetric]) -> VolumeProgression:
    """Week-over-week volume changes, rapid increases and a linear trend fit."""
    increases: list[float] = []
    rapid: list[RapidIncrease] = []
    for prev, curr in zip(weeks, weeks[1:]):
        change = percent_change(curr.volume_hours, prev.volume_hours)
        if change is None:
            continue
        increases.append(change)
        if change > RAPID_VOLUME_INCREASE_PCT:
            rapid.append(
                RapidIncrease(
                    week_start=curr.week_start,
                    increase=change,
                    previous_week=prev.volume_hours,
                    current_week=curr.volume_hours,
                )
            )

    avg_increase = mean(increases)
    within_safe_range = not rapid or len(rapid) < len(weeks) * RARE_RAPID_SHARE
    progressive = 0 < avg_increase < RAPID_VOLUME_INCREASE_PCT

    score = VOLUME_SCORE_START
    if progressive:
        score += PROGRESSIVE_BONUS
    if within_safe_range:
        score += SAFE_RANGE_BONUS
    score -= len(rapid) * RAPID_INCREASE_PENALTY

    slope, intercept, r_squared = fit_linear_trend([w.volume_hours for w in weeks])
    return VolumeProgression(
        is_progressive=progressive,
        avg_weekly_increase=avg_increase,
        is_within_safe_range=within_safe_range,
        rapid_increases=tuple(rapid),
        progression_score=clamp_score(score),
        volume_trend=TrendFit(
            slope=slope,
            intercept=intercept,
            r_squared=r_squared,
            interpretation="Progressive increase" if progressive else "Non-progressive",
        ),
    )


def calculate_ctl_gain(weeks: Sequence[WeeklyMetric]) -> float:
    if not weeks:
        return 0.0
    return weeks[-1].avg_ctl - weeks[0].avg_ctl


def score_ctl_gain(ctl_gain: float, weeks: int, config: ScoringConfig | None = None) -> int:
    """Banded score on weeks per CTL point gained."""
    config = config or ScoringConfig()
    if ctl_gain < 0:
        return CTL_LOSS_SCORE
    if ctl_gain == 0 or weeks == 0:
        return CTL_MAINTENANCE_SCORE
    weeks_per_point = weeks / ctl_gain
    for band in config.ctl_gain_bands:
        if band.matches(weeks_per_point):
            return band.score
    return CTL_SLOW_GAIN_SCORE


def score_recovery_frequency(phases: Sequence[DetectedPhase]) -> int:
    """Compare recovery-phase weeks to one expected recovery week in four."""
    total_weeks = sum(p.duration_weeks for p in phases)
    if total_weeks < MIN_WEEKS_FOR_RECOVERY_CHECK:
        return INSUFFICIENT_DATA_RECOVERY_SCORE
    expected = total_weeks / WEEKS_PER_EXPECTED_RECOVERY
    actual = sum(p.duration_weeks for p in phases if p.phase == TrainingPhase.RECOVERY)
    ratio = actual / expected
    if ratio < LOW_RECOVERY_RATIO:
        return LOW_RECOVERY_SCORE
    if ratio > HIGH_RECOVERY_RATIO:
        return HIGH_RECOVERY_SCORE
    return APPROPRIATE_RECOVERY_SCORE


def calculate_progression_score(
    weeks: Sequence[WeeklyMetric],
    phases: Sequence[DetectedPhase],
    config: ScoringConfig | None = None,
) -> ProgressionScore:
    volume = analyze_volume_progression(weeks)
    ctl_gain = calculate_ctl_gain(weeks)
    ctl_score = score_ctl_gain(ctl_gain, len(weeks), config)
    recovery_score = score_recovery_frequency(phases)
    overall = round_half_up(
        volume.progression_score * VOLUME_WEIGHT
        + ctl_score * CTL_WEIGHT
        + recovery_score * RECOVERY_FREQUENCY_WEIGHT
    )
    return ProgressionScore(
        overall=overall,
        volume_progression=volume,
        ctl_gain=ctl_gain,
        ctl_gain_score=ctl_score,
        recovery_weeks_score=recovery_score,
    )
