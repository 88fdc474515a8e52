"""Performance sub-score: PRs by phase and fitness gained."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from periodization_engine.math.stats import clamp_score
from periodization_engine.models.effectiveness import PerformanceCorrelation, PerformanceScore
from periodization_engine.models.enums import TrainingPhase
from periodization_engine.models.personal_record import PersonalRecord
from periodization_engine.models.phase import DetectedPhase
from periodization_engine.models.weekly_metric import WeeklyMetric
from periodization_engine.scoring.progression import calculate_ctl_gain

# Fixed scan order for the PR tally; decides ties for the peak phase.
PR_TALLY_ORDER: tuple[TrainingPhase, ...] = (
    TrainingPhase.BASE,
    TrainingPhase.BUILD,
    TrainingPhase.PEAK,
    TrainingPhase.RECOVERY,
    TrainingPhase.TRANSITION,
    TrainingPhase.TAPER,
)

PERFORMANCE_START = 60
ANY_PR_BONUS = 20
FITNESS_GAIN_BONUS = 10
SIGNIFICANT_FITNESS_GAIN = 10.0
MULTI_PHASE_BONUS = 10
MULTI_PHASE_MIN = 2


def _phase_for(day: date, phases: Sequence[DetectedPhase]) -> DetectedPhase | None:
    for phase in phases:
        if phase.contains(day):
            return phase
    return None


def analyze_performance_correlation(
    phases: Sequence[DetectedPhase],
    personal_records: Sequence[PersonalRecord],
    weeks: Sequence[WeeklyMetric],
) -> PerformanceCorrelation:
    prs_by_phase = {phase: 0 for phase in PR_TALLY_ORDER}
    for pr in personal_records:
        owner = _phase_for(pr.date, phases)
        if owner is not None:
            prs_by_phase[owner.phase] += 1

    fitness_gain = calculate_ctl_gain(weeks)
    peak_fitness = max((w.avg_ctl for w in weeks), default=0.0)

    peak_phase, peak_count = TrainingPhase.BASE, 0
    for phase, count in prs_by_phase.items():
        if count > peak_count:
            peak_phase, peak_count = phase, count
    effective = tuple(phase for phase, count in prs_by_phase.items() if count > 0)

    score = PERFORMANCE_START
    if personal_records:
        score += ANY_PR_BONUS
    if fitness_gain > SIGNIFICANT_FITNESS_GAIN:
        score += FITNESS_GAIN_BONUS
    if len(effective) >= MULTI_PHASE_MIN:
        score += MULTI_PHASE_BONUS

    return PerformanceCorrelation(
        total_prs=len(personal_records),
        prs_by_phase=prs_by_phase,
        fitness_gain=fitness_gain,
        peak_fitness=peak_fitness,
        performance_score=clamp_score(score),
        peak_performance_phase=peak_phase,
        effective_phases=effective,
    )


def calculate_performance_score(
    phases: Sequence[DetectedPhase],
    personal_records: Sequence[PersonalRecord],
    weeks: Sequence[WeeklyMetric],
) -> PerformanceScore:
    """Start at 60; +20 for any PR, +10 for CTL gain > 10, +10 for PRs in two or more phases."""
    correlation = analyze_performance_correlation(phases, personal_records, weeks)
    return PerformanceScore(overall=correlation.performance_score, correlation=correlation)
