"""Overall effectiveness: weighted sub-scores, letter grade and findings."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from periodization_engine.math.stats import round_half_up
from periodization_engine.models.config import ScoringConfig
from periodization_engine.models.effectiveness import (
    EffectivenessAnalysis,
    FormManagementScore,
    PerformanceScore,
    ProgressionScore,
    RecoveryScore,
    StructureScore,
)
from periodization_engine.models.enums import (
    FAILING_GRADE,
    FORM_MANAGEMENT_WEIGHT,
    GRADE_BANDS,
    PERFORMANCE_WEIGHT,
    PERFORMANCE_WEIGHT_NO_FORM,
    PROGRESSION_WEIGHT,
    PROGRESSION_WEIGHT_NO_FORM,
    RECOVERY_WEIGHT,
    RECOVERY_WEIGHT_NO_FORM,
    STRUCTURE_WEIGHT,
    STRUCTURE_WEIGHT_NO_FORM,
)
from periodization_engine.models.personal_record import PersonalRecord
from periodization_engine.models.phase import DetectedPhase
from periodization_engine.models.weekly_metric import WeeklyMetric
from periodization_engine.scoring.balance import calculate_phase_balance
from periodization_engine.scoring.form_management import calculate_form_management_score
from periodization_engine.scoring.performance import calculate_performance_score
from periodization_engine.scoring.progression import calculate_progression_score
from periodization_engine.scoring.recovery import calculate_recovery_score
from periodization_engine.scoring.structure import calculate_structure_score

STRONG_SCORE = 80
WEAK_SCORE = 60
STRONG_PR_COUNT = 5
MAX_INAPPROPRIATE_OVERREACHING = 2
INEFFECTIVE_TAPER_SCORE = 50


@dataclass(frozen=True)
class Findings:
    strengths: tuple[str, ...]
    weaknesses: tuple[str, ...]
    critical_issues: tuple[str, ...]


def get_grade(score: float) -> str:
    """Letter grade for a 0-100 score."""
    for minimum, grade in GRADE_BANDS:
        if score >= minimum:
            return grade
    return FAILING_GRADE


def overall_score(
    structure: StructureScore,
    progression: ProgressionScore,
    recovery: RecoveryScore,
    performance: PerformanceScore,
    form: FormManagementScore | None,
) -> int:
    """Weighted overall score; the form component is dropped when absent."""
    if form is not None:
        return round_half_up(
            structure.overall * STRUCTURE_WEIGHT
            + progression.overall * PROGRESSION_WEIGHT
            + recovery.overall * RECOVERY_WEIGHT
            + performance.overall * PERFORMANCE_WEIGHT
            + form.overall * FORM_MANAGEMENT_WEIGHT
        )
    return round_half_up(
        structure.overall * STRUCTURE_WEIGHT_NO_FORM
        + progression.overall * PROGRESSION_WEIGHT_NO_FORM
        + recovery.overall * RECOVERY_WEIGHT_NO_FORM
        + performance.overall * PERFORMANCE_WEIGHT_NO_FORM
    )


def identify_findings(
    structure: StructureScore,
    progression: ProgressionScore,
    recovery: RecoveryScore,
    performance: PerformanceScore,
    form: FormManagementScore | None,
) -> Findings:
    """Threshold-triggered strengths, weaknesses and critical issues.

    Checks are independent and run in a fixed order: structure,
    progression, recovery, performance, form.
    """
    strengths: list[str] = []
    weaknesses: list[str] = []
    critical: list[str] = []

    if structure.overall >= STRONG_SCORE:
        strengths.append("Well-structured training phases")
    elif structure.overall < WEAK_SCORE:
        weaknesses.append("Poor phase structure and transitions")

    volume = progression.volume_progression
    if volume.is_progressive:
        strengths.append("Progressive volume increase")
    if volume.rapid_increases:
        critical.append(f"{len(volume.rapid_increases)} rapid volume increases detected")

    if recovery.management.is_adequate:
        strengths.append("Adequate recovery frequency")
    else:
        weaknesses.append("Insufficient recovery periods")
    if recovery.management.tsb_management.overreaching_episodes > 0:
        critical.append("Overreaching episodes detected")

    if performance.correlation.total_prs > STRONG_PR_COUNT:
        strengths.append("Strong performance gains")

    if form is not None:
        if form.overall >= STRONG_SCORE:
            strengths.append("Excellent form management")
        elif form.overall < WEAK_SCORE:
            weaknesses.append("Poor form management practices")
        if form.metrics.inappropriate_overreaching > MAX_INAPPROPRIATE_OVERREACHING:
            critical.append("Overreaching in inappropriate phases detected")
        if form.taper_effectiveness_score < INEFFECTIVE_TAPER_SCORE:
            weaknesses.append("Ineffective taper execution")

    return Findings(tuple(strengths), tuple(weaknesses), tuple(critical))


def calculate_effectiveness(
    phases: Sequence[DetectedPhase],
    weeks: Sequence[WeeklyMetric],
    personal_records: Sequence[PersonalRecord] | None = None,
    config: ScoringConfig | None = None,
) -> EffectivenessAnalysis:
    """Score a detected phase sequence.

    Total for any input: empty phases or weeks give documented neutral or
    worst-case sub-scores rather than raising.

    Args:
        phases: Detected phases in order.
        weeks: The weekly series the phases were detected from.
        personal_records: PRs over the same period.
        config: Scoring options, including the optional target model.

    Returns:
        EffectivenessAnalysis with every sub-score, grade and findings.
    """
    config = config or ScoringConfig()
    records = personal_records or ()

    structure = calculate_structure_score(phases, config)
    progression = calculate_progression_score(weeks, phases, config)
    recovery = calculate_recovery_score(weeks, phases)
    performance = calculate_performance_score(phases, records, weeks)
    form = calculate_form_management_score(phases, config)

    score = overall_score(structure, progression, recovery, performance, form)
    findings = identify_findings(structure, progression, recovery, performance, form)

    return EffectivenessAnalysis(
        overall_score=score,
        grade=get_grade(score),
        structure_score=structure,
        progression_score=progression,
        recovery_score=recovery,
        performance_score=performance,
        phase_balance=calculate_phase_balance(phases),
        form_management_score=form,
        strengths=findings.strengths,
        weaknesses=findings.weaknesses,
        critical_issues=findings.critical_issues,
    )
