"""Consensus segmentation: runs of weeks, minimum lengths, legal transitions."""

from periodization_engine.segmentation.confidence import segment_confidence
from periodization_engine.segmentation.segmenter import PhaseSegment, segment_labels
from periodization_engine.segmentation.transitions import (
    is_logical_transition,
    validate_transitions,
)

__all__ = [
    "PhaseSegment",
    "is_logical_transition",
    "segment_confidence",
    "segment_labels",
    "validate_transitions",
]
