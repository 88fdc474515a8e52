"""Segment confidence from the votes at the segment's first week."""

from __future__ import annotations

from collections.abc import Sequence

from periodization_engine.math.stats import round_half_up
from periodization_engine.models.enums import (
    FULL_CONFIDENCE_WEEKS,
    SEGMENT_INTENSITY_WEIGHT,
    SEGMENT_TSS_WEIGHT,
    SEGMENT_VOLUME_WEIGHT,
)
from periodization_engine.models.phase import ConfidenceFactors, WeekConsensus
from periodization_engine.segmentation.segmenter import PhaseSegment


def _vote_confidence(consensus: WeekConsensus, classifier_id: str) -> int:
    vote = consensus.vote_from(classifier_id)
    return vote.confidence if vote is not None else 0


def segment_confidence(
    consensus: Sequence[WeekConsensus], segment: PhaseSegment
) -> tuple[int, ConfidenceFactors]:
    """Confidence of a segment and its breakdown.

    confidence = round(0.30 x volume + 0.40 x intensity + 0.30 x tss)
    scaled by min(1, weeks / 4), using the votes cast for the first week.
    """
    first = consensus[segment.start]
    volume = _vote_confidence(first, "volume")
    intensity = _vote_confidence(first, "intensity")
    tss = _vote_confidence(first, "tss")
    duration_factor = min(1.0, segment.length / FULL_CONFIDENCE_WEEKS)
    weighted = (
        volume * SEGMENT_VOLUME_WEIGHT
        + intensity * SEGMENT_INTENSITY_WEIGHT
        + tss * SEGMENT_TSS_WEIGHT
    )
    factors = ConfidenceFactors(
        volume=volume,
        intensity=intensity,
        tss=tss,
        duration=round_half_up(duration_factor * 100),
    )
    return round_half_up(weighted * duration_factor), factors
