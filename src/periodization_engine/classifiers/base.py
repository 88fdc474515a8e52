"""Abstract base class for per-week phase classifiers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from periodization_engine.math.stats import clamp, round_half_up
from periodization_engine.models.config import DetectionConfig
from periodization_engine.models.enums import TrainingPhase
from periodization_engine.models.phase import PhaseVote
from periodization_engine.models.weekly_metric import WeeklyMetric

S = TypeVar("S")


@dataclass(frozen=True)
class CascadeRule(Generic[S]):
    """One branch of a classifier's decision cascade.

    Branches are tried in order and the first whose ``applies`` predicate
    holds decides the vote, so the order of a cascade is part of its
    meaning.
    """

    name: str
    phase: TrainingPhase
    applies: Callable[[S], bool]
    confidence: Callable[[S], float]
    reasoning: Callable[[S], str]


def run_cascade(cascade: Sequence[CascadeRule[S]], signal: S) -> CascadeRule[S]:
    """Return the first rule of the cascade that applies to ``signal``.

    Raises:
        LookupError: If no rule applies. Every cascade ends with a
            catch-all rule, so this only happens for a malformed cascade.
    """
    for rule in cascade:
        if rule.applies(signal):
            return rule
    raise LookupError("classifier cascade has no catch-all rule")


class PhaseClassifier(ABC):
    """Base class for the signal classifiers.

    A classifier labels one week at a time using that week and a bounded
    look-back of earlier weeks; it never reads later weeks. Classifiers
    are discovered automatically by the ClassifierRegistry and consulted
    by the PhaseDetector in ``vote_order``.

    Subclasses must define:
        classifier_id: key into the confidence weights ("volume", ...)
        version: semantic version string
        vote_order: position in the consensus scan (lower first)
        classify(): the labelling logic
    """

    classifier_id: str
    version: str
    vote_order: int

    @abstractmethod
    def classify(
        self, weeks: Sequence[WeeklyMetric], index: int, config: DetectionConfig
    ) -> PhaseVote:
        """Vote on the phase of ``weeks[index]``.

        Only ``weeks[: index + 1]`` may be consulted.
        """
        ...

    def classify_all(
        self, weeks: Sequence[WeeklyMetric], config: DetectionConfig
    ) -> tuple[PhaseVote, ...]:
        """Vote on every week in order."""
        return tuple(self.classify(weeks, i, config) for i in range(len(weeks)))

    def decide(self, cascade: Sequence[CascadeRule[S]], signal: S) -> PhaseVote:
        """Run a cascade and turn the winning branch into a vote."""
        rule = run_cascade(cascade, signal)
        return self.vote(rule.phase, rule.confidence(signal), rule.reasoning(signal))

    def vote(self, phase: TrainingPhase, confidence: float, reasoning: str) -> PhaseVote:
        return PhaseVote(
            phase=phase,
            confidence=round_half_up(clamp(confidence)),
            reasoning=reasoning,
            classifier_id=self.classifier_id,
        )
