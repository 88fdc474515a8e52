"""Phase balance: share of weeks spent in each phase."""

from __future__ import annotations

from collections.abc import Sequence

from periodization_engine.math.stats import clamp_score
from periodization_engine.models.effectiveness import PhaseBalance
from periodization_engine.models.enums import TrainingPhase
from periodization_engine.models.phase import DetectedPhase

BALANCE_START = 70

# (phase, low %, high %, bonus) for ratios inside the target band
BALANCE_BANDS: tuple[tuple[TrainingPhase, float, float, int], ...] = (
    (TrainingPhase.BASE, 30.0, 50.0, 15),
    (TrainingPhase.BUILD, 20.0, 40.0, 10),
    (TrainingPhase.RECOVERY, 10.0, 25.0, 5),
)

# (phase, minimum %, advice) when a ratio falls short
SHORTFALL_ADVICE: tuple[tuple[TrainingPhase, float, str], ...] = (
    (TrainingPhase.BASE, 30.0, "Increase base phase duration for better foundation"),
    (TrainingPhase.BUILD, 20.0, "Add more build phase training for fitness gains"),
    (TrainingPhase.RECOVERY, 10.0, "Incorporate more recovery weeks"),
)


def calculate_phase_balance(phases: Sequence[DetectedPhase]) -> PhaseBalance:
    """Ratios (percent of total weeks), a balance score and recommendations.

    With no weeks every ratio is 0.
    """
    total = sum(p.duration_weeks for p in phases)
    weeks = {phase: 0 for phase in TrainingPhase}
    for p in phases:
        weeks[p.phase] += p.duration_weeks
    ratios = {phase: (count / total * 100.0 if total else 0.0) for phase, count in weeks.items()}

    score = BALANCE_START
    for phase, low, high, bonus in BALANCE_BANDS:
        if low <= ratios[phase] <= high:
            score += bonus

    recommendations = tuple(
        advice for phase, minimum, advice in SHORTFALL_ADVICE if ratios[phase] < minimum
    )
    return PhaseBalance(
        total_weeks=total,
        base_ratio=ratios[TrainingPhase.BASE],
        build_ratio=ratios[TrainingPhase.BUILD],
        peak_ratio=ratios[TrainingPhase.PEAK],
        recovery_ratio=ratios[TrainingPhase.RECOVERY],
        transition_ratio=ratios[TrainingPhase.TRANSITION],
        taper_ratio=ratios[TrainingPhase.TAPER],
        balance_score=clamp_score(score),
        recommendations=recommendations,
    )
