"""PhaseDetector: labels a weekly series with contiguous training phases."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from periodization_engine.consensus.resolver import ConsensusResolver
from periodization_engine.enrichment import PhaseEnricher
from periodization_engine.models.config import DetectionConfig
from periodization_engine.models.personal_record import PersonalRecord
from periodization_engine.models.phase import DetectedPhase, WeekConsensus
from periodization_engine.models.weekly_metric import WeeklyMetric
from periodization_engine.registry import ClassifierRegistry
from periodization_engine.segmentation.confidence import segment_confidence
from periodization_engine.segmentation.segmenter import PhaseSegment, segment_labels
from periodization_engine.segmentation.transitions import validate_transitions

logger = logging.getLogger(__name__)


class PhaseDetector:
    """Runs classifiers, consensus, segmentation and enrichment.

    Usage:
        detector = PhaseDetector()
        phases = detector.detect(weeks, personal_records)
    """

    def __init__(
        self,
        registry: ClassifierRegistry | None = None,
        resolver: ConsensusResolver | None = None,
        enricher: PhaseEnricher | None = None,
    ) -> None:
        self.registry = registry or ClassifierRegistry()
        self.resolver = resolver or ConsensusResolver()
        self.enricher = enricher or PhaseEnricher()

        # Auto-discover classifiers if using default registry
        if registry is None:
            self.registry.discover_classifiers()

    def weekly_consensus(
        self, weeks: Sequence[WeeklyMetric], config: DetectionConfig
    ) -> tuple[WeekConsensus, ...]:
        """Consensus label for every week, in week order."""
        classifiers = self.registry.get_all_classifiers()
        ballots = [classifier.classify_all(weeks, config) for classifier in classifiers]
        return tuple(
            self.resolver.resolve([votes[i] for votes in ballots], config.confidence_weights)
            for i in range(len(weeks))
        )

    def segments(
        self,
        consensus: Sequence[WeekConsensus],
        config: DetectionConfig,
    ) -> tuple[PhaseSegment, ...]:
        """Segment the consensus labels and make every transition legal."""
        raw = segment_labels([c.phase for c in consensus], config.min_phase_weeks)

        def confidence_of(segment: PhaseSegment) -> int:
            return segment_confidence(consensus, segment)[0]

        validated = validate_transitions(
            raw, confidence_of, config.min_phase_weeks, config.transitions
        )
        if len(validated) != len(raw):
            logger.debug("Transition validation merged %d segments into %d", len(raw), len(validated))
        return validated

    def detect(
        self,
        weeks: Sequence[WeeklyMetric],
        personal_records: Sequence[PersonalRecord] | None = None,
        config: DetectionConfig | None = None,
    ) -> tuple[DetectedPhase, ...]:
        """Detect the training phases of a weekly series.

        Args:
            weeks: Weekly metrics in ascending ``week_start`` order.
            personal_records: Optional PRs attached to the phase they fall in.
            config: Detection options; defaults when omitted.

        Returns:
            Phases that partition the weeks in order, or an empty tuple when
            there are fewer weeks than ``min_phase_weeks``.
        """
        config = config or DetectionConfig()
        if len(weeks) < config.min_phase_weeks:
            logger.info(
                "Only %d weeks supplied, need %d to detect phases",
                len(weeks),
                config.min_phase_weeks,
            )
            return ()

        for previous, current in zip(weeks, weeks[1:]):
            if current.week_start <= previous.week_start:
                logger.warning(
                    "Weeks are not in ascending order (%s follows %s)",
                    current.week_start,
                    previous.week_start,
                )
                break

        consensus = self.weekly_consensus(weeks, config)
        segments = self.segments(consensus, config)
        phases = tuple(
            self.enricher.build_phase(
                weeks,
                segment,
                consensus,
                personal_records,
                config.include_form_metrics,
            )
            for segment in segments
        )
        logger.info(
            "Detected %d phases over %d weeks: %s",
            len(phases),
            len(weeks),
            ", ".join(f"{p.phase.label}({p.duration_weeks})" for p in phases),
        )
        return phases
