"""Transition validation: merge adjacent segments until every boundary is legal."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from periodization_engine.models.config import TransitionTable
from periodization_engine.models.enums import TrainingPhase
from periodization_engine.segmentation.segmenter import PhaseSegment, merge


def is_logical_transition(
    previous: TrainingPhase, following: TrainingPhase, table: TransitionTable
) -> bool:
    """True if ``previous -> following`` appears in the adjacency table."""
    return following in table.get(previous, frozenset())


def _merge_pass(
    segments: Sequence[PhaseSegment],
    confidence_of: Callable[[PhaseSegment], int],
    min_phase_weeks: int,
    table: TransitionTable,
) -> tuple[tuple[PhaseSegment, ...], bool]:
    """One left-to-right pass. Returns the new segments and whether anything merged."""
    result: list[PhaseSegment] = []
    current = segments[0]
    merged_any = False
    for following in segments[1:]:
        legal = is_logical_transition(current.phase, following.phase, table)
        if legal and current.length >= min_phase_weeks:
            result.append(current)
            current = following
            continue
        # The more confident segment names the union; ties keep the earlier one.
        if confidence_of(current) >= confidence_of(following):
            phase = current.phase
        else:
            phase = following.phase
        current = merge(current, following, phase)
        merged_any = True
    result.append(current)
    return tuple(result), merged_any


def validate_transitions(
    segments: Sequence[PhaseSegment],
    confidence_of: Callable[[PhaseSegment], int],
    min_phase_weeks: int,
    table: TransitionTable,
) -> tuple[PhaseSegment, ...]:
    """Merge illegal or too-short neighbours until a pass changes nothing.

    Args:
        segments: Ordered, contiguous segments from the segmenter.
        confidence_of: Confidence of a segment, recomputed for merged ones.
        min_phase_weeks: Segments shorter than this merge with their successor.
        table: Legal phase-to-phase transitions.

    Returns:
        Segments in which every adjacent pair is a legal transition.
    """
    current = tuple(segments)
    while len(current) > 1:
        current, merged_any = _merge_pass(current, confidence_of, min_phase_weeks, table)
        if not merged_any:
            break
    return current
