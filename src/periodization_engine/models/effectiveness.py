"""Effectiveness report: sub-score breakdowns and the overall analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from periodization_engine.models.enums import TrainingPhase


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PhaseBalanceComponent:
    score: int
    has_base_phase: bool
    has_build_phase: bool
    base_too_brief: bool
    build_too_brief: bool


@dataclass(frozen=True)
class PhaseTransitions:
    score: int
    transition_count: int
    smooth_transitions: int
    abrupt_transitions: int
    logical_sequence: bool


@dataclass(frozen=True)
class PhaseLengths:
    score: int
    appropriate_lengths: int
    too_short_phases: int
    too_long_phases: int


@dataclass(frozen=True)
class StructureScore:
    """Structure = 0.40 x balance + 0.30 x transitions + 0.30 x lengths."""

    overall: int
    phase_balance: PhaseBalanceComponent
    phase_transitions: PhaseTransitions
    phase_lengths: PhaseLengths


# ---------------------------------------------------------------------------
# Progression
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RapidIncrease:
    """A week whose volume rose more than the safe weekly ceiling."""

    week_start: date
    increase: float  # percent
    previous_week: float  # hours
    current_week: float  # hours


@dataclass(frozen=True)
class TrendFit:
    """Least-squares line through weekly volume (hours vs week index)."""

    slope: float
    intercept: float
    r_squared: float
    interpretation: str


@dataclass(frozen=True)
class VolumeProgression:
    is_progressive: bool
    avg_weekly_increase: float
    is_within_safe_range: bool
    rapid_increases: tuple[RapidIncrease, ...]
    progression_score: int
    volume_trend: TrendFit


@dataclass(frozen=True)
class ProgressionScore:
    """Progression = 0.40 x volume + 0.40 x CTL gain + 0.20 x recovery frequency."""

    overall: int
    volume_progression: VolumeProgression
    ctl_gain: float
    ctl_gain_score: int
    recovery_weeks_score: int


# ---------------------------------------------------------------------------
# Recovery
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TSBManagement:
    avg_tsb: float
    tsb_min: float
    tsb_max: float
    overreaching_episodes: int
    adequate_recovery_periods: int
    score: int


@dataclass(frozen=True)
class RecoveryManagement:
    recovery_weeks_count: int
    avg_recovery_week_interval: float
    is_adequate: bool
    tsb_management: TSBManagement
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class RecoveryScore:
    overall: int
    management: RecoveryManagement


# ---------------------------------------------------------------------------
# Performance
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PerformanceCorrelation:
    total_prs: int
    prs_by_phase: dict[TrainingPhase, int]
    fitness_gain: float
    peak_fitness: float
    performance_score: int
    peak_performance_phase: TrainingPhase
    effective_phases: tuple[TrainingPhase, ...]


@dataclass(frozen=True)
class PerformanceScore:
    overall: int
    correlation: PerformanceCorrelation


# ---------------------------------------------------------------------------
# Form management
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FormManagementMetrics:
    avg_tsb_deviation: float
    inappropriate_overreaching: int
    taper_quality: float
    recovery_gaps: int


@dataclass(frozen=True)
class FormManagementScore:
    """Form = 0.30 x TSB balance + 0.25 x overreaching + 0.25 x taper + 0.20 x timing."""

    overall: int
    tsb_balance_score: int
    overreaching_management_score: int
    taper_effectiveness_score: int
    recovery_timing_score: int
    metrics: FormManagementMetrics
    recommendations: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Phase balance and overall report
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PhaseBalance:
    """Share of weeks (percent) spent in each phase."""

    total_weeks: int
    base_ratio: float
    build_ratio: float
    peak_ratio: float
    recovery_ratio: float
    transition_ratio: float
    taper_ratio: float
    balance_score: int
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class EffectivenessAnalysis:
    """Graded effectiveness report for a detected phase sequence.

    ``form_management_score`` is None when no phase carries form metrics;
    the overall score then uses the four-component weighting.
    """

    overall_score: int
    grade: str
    structure_score: StructureScore
    progression_score: ProgressionScore
    recovery_score: RecoveryScore
    performance_score: PerformanceScore
    phase_balance: PhaseBalance
    form_management_score: FormManagementScore | None = None
    strengths: tuple[str, ...] = field(default_factory=tuple)
    weaknesses: tuple[str, ...] = field(default_factory=tuple)
    critical_issues: tuple[str, ...] = field(default_factory=tuple)
