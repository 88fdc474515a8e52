"""Tests for merging illegal or too-short neighbouring segments."""

from __future__ import annotations

from periodization_engine.models.enums import VALID_TRANSITIONS, TrainingPhase
from periodization_engine.segmentation.segmenter import PhaseSegment
from periodization_engine.segmentation.transitions import (
    is_logical_transition,
    validate_transitions,
)

BASE = TrainingPhase.BASE
BUILD = TrainingPhase.BUILD
PEAK = TrainingPhase.PEAK
TAPER = TrainingPhase.TAPER
RECOVERY = TrainingPhase.RECOVERY

CONFIDENCE = {BASE: 60, BUILD: 65, PEAK: 70, TAPER: 50, RECOVERY: 40}


def _by_phase(segment: PhaseSegment) -> int:
    return CONFIDENCE[segment.phase]


class TestLogicalTransitions:
    def test_legal_pairs(self) -> None:
        assert is_logical_transition(BASE, BUILD, VALID_TRANSITIONS)
        assert is_logical_transition(BUILD, BUILD, VALID_TRANSITIONS)
        assert is_logical_transition(TAPER, PEAK, VALID_TRANSITIONS)

    def test_illegal_pairs(self) -> None:
        assert not is_logical_transition(BASE, PEAK, VALID_TRANSITIONS)
        assert not is_logical_transition(PEAK, BUILD, VALID_TRANSITIONS)
        assert not is_logical_transition(TrainingPhase.TRANSITION, PEAK, VALID_TRANSITIONS)


class TestValidateTransitions:
    def test_legal_sequence_is_unchanged(self) -> None:
        segments = (PhaseSegment(BASE, 0, 4), PhaseSegment(BUILD, 4, 8), PhaseSegment(TAPER, 8, 10))
        assert validate_transitions(segments, _by_phase, 2, VALID_TRANSITIONS) == segments

    def test_more_confident_segment_names_the_union(self) -> None:
        segments = (PhaseSegment(BASE, 0, 3), PhaseSegment(PEAK, 3, 6))
        assert validate_transitions(segments, _by_phase, 2, VALID_TRANSITIONS) == (
            PhaseSegment(PEAK, 0, 6),
        )

    def test_tie_keeps_earlier_label(self) -> None:
        segments = (PhaseSegment(BASE, 0, 3), PhaseSegment(PEAK, 3, 6))
        result = validate_transitions(segments, lambda s: 50, 2, VALID_TRANSITIONS)
        assert result == (PhaseSegment(BASE, 0, 6),)

    def test_short_segment_merges_with_successor(self) -> None:
        segments = (PhaseSegment(BASE, 0, 2), PhaseSegment(BUILD, 2, 6))
        result = validate_transitions(segments, _by_phase, 3, VALID_TRANSITIONS)
        assert result == (PhaseSegment(BUILD, 0, 6),)

    def test_repeats_until_no_merge(self) -> None:
        # recovery -> peak merges into peak, which makes base -> peak illegal
        segments = (
            PhaseSegment(BASE, 0, 2),
            PhaseSegment(RECOVERY, 2, 4),
            PhaseSegment(PEAK, 4, 6),
        )
        result = validate_transitions(segments, _by_phase, 2, VALID_TRANSITIONS)
        assert result == (PhaseSegment(PEAK, 0, 6),)

    def test_single_and_empty(self) -> None:
        assert validate_transitions((), _by_phase, 2, VALID_TRANSITIONS) == ()
        single = (PhaseSegment(PEAK, 0, 1),)
        assert validate_transitions(single, _by_phase, 2, VALID_TRANSITIONS) == single

    def test_every_boundary_is_legal_afterwards(self) -> None:
        phases = [TAPER, BASE, PEAK, BUILD, RECOVERY, PEAK, BASE]
        segments = tuple(PhaseSegment(p, 2 * i, 2 * i + 2) for i, p in enumerate(phases))
        result = validate_transitions(segments, _by_phase, 2, VALID_TRANSITIONS)
        for prev, curr in zip(result, result[1:]):
            assert is_logical_transition(prev.phase, curr.phase, VALID_TRANSITIONS)
        assert result[0].start == 0
        assert result[-1].stop == 2 * len(phases)
