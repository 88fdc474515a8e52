"""Structure sub-score: phase balance, transitions and phase lengths."""

from __future__ import annotations

from collections.abc import Sequence

from periodization_engine.math.stats import clamp_score, round_half_up
from periodization_engine.models.config import ScoringConfig
from periodization_engine.models.effectiveness import (
    PhaseBalanceComponent,
    PhaseLengths,
    PhaseTransitions,
    StructureScore,
)
from periodization_engine.models.enums import TrainingPhase
from periodization_engine.models.phase import DetectedPhase
from periodization_engine.segmentation.transitions import is_logical_transition

BALANCE_START = 70
HAS_BASE_BONUS = 15
HAS_BUILD_BONUS = 15
BRIEF_BASE_PENALTY = 20
BRIEF_BUILD_PENALTY = 15

BALANCE_WEIGHT = 0.40
TRANSITIONS_WEIGHT = 0.30
LENGTHS_WEIGHT = 0.30


def _phase_balance(phases: Sequence[DetectedPhase], config: ScoringConfig) -> PhaseBalanceComponent:
    base = [p for p in phases if p.phase == TrainingPhase.BASE]
    build = [p for p in phases if p.phase == TrainingPhase.BUILD]
    min_base = config.min_base_phase_weeks()
    min_build = config.min_build_phase_weeks()
    base_too_brief = bool(base) and all(p.duration_weeks < min_base for p in base)
    build_too_brief = bool(build) and all(p.duration_weeks < min_build for p in build)

    score = BALANCE_START
    if base:
        score += HAS_BASE_BONUS
    if build:
        score += HAS_BUILD_BONUS
    if base_too_brief:
        score -= BRIEF_BASE_PENALTY
    if build_too_brief:
        score -= BRIEF_BUILD_PENALTY

    return PhaseBalanceComponent(
        score=clamp_score(score),
        has_base_phase=bool(base),
        has_build_phase=bool(build),
        base_too_brief=base_too_brief,
        build_too_brief=build_too_brief,
    )


def _phase_transitions(
    phases: Sequence[DetectedPhase], config: ScoringConfig
) -> PhaseTransitions:
    smooth = sum(
        1
        for prev, curr in zip(phases, phases[1:])
        if is_logical_transition(prev.phase, curr.phase, config.transitions)
    )
    count = max(0, len(phases) - 1)
    abrupt = count - smooth
    score = 100 if len(phases) <= 1 else round_half_up(smooth / count * 100)
    return PhaseTransitions(
        score=score,
        transition_count=count,
        smooth_transitions=smooth,
        abrupt_transitions=abrupt,
        logical_sequence=abrupt == 0,
    )


def _phase_lengths(phases: Sequence[DetectedPhase], config: ScoringConfig) -> PhaseLengths:
    appropriate = too_short = too_long = 0
    for phase in phases:
        low, high = config.phase_length_bounds(phase.phase)
        if phase.duration_weeks < low:
            too_short += 1
        elif phase.duration_weeks > high:
            too_long += 1
        else:
            appropriate += 1
    score = 0 if not phases else round_half_up(appropriate / len(phases) * 100)
    return PhaseLengths(
        score=score,
        appropriate_lengths=appropriate,
        too_short_phases=too_short,
        too_long_phases=too_long,
    )


def calculate_structure_score(
    phases: Sequence[DetectedPhase], config: ScoringConfig | None = None
) -> StructureScore:
    """Score how well the phase sequence is organised.

    Args:
        phases: Detected phases in order.
        config: Scoring options; the target model (if any) sets the minimum
            base/build weeks and the per-phase length bounds.

    Returns:
        StructureScore with its three components.
    """
    config = config or ScoringConfig()
    balance = _phase_balance(phases, config)
    transitions = _phase_transitions(phases, config)
    lengths = _phase_lengths(phases, config)
    overall = round_half_up(
        balance.score * BALANCE_WEIGHT
        + transitions.score * TRANSITIONS_WEIGHT
        + lengths.score * LENGTHS_WEIGHT
    )
    return StructureScore(
        overall=overall,
        phase_balance=balance,
        phase_transitions=transitions,
        phase_lengths=lengths,
    )
