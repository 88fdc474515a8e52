"""Voting strategies for combining per-classifier phase votes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from periodization_engine.models.enums import TrainingPhase
from periodization_engine.models.phase import PhaseVote


class VotingStrategy(ABC):
    """Base class for consensus voting strategies."""

    @abstractmethod
    def resolve(
        self, ballots: Sequence[tuple[PhaseVote, float]]
    ) -> tuple[TrainingPhase, float, str]:
        """Pick a phase from weighted votes.

        Args:
            ballots: (vote, weight) pairs in classifier vote order.

        Returns:
            The winning phase, its score and a human-readable explanation.
        """
        ...


class WeightedVote(VotingStrategy):
    """Strategy: highest summed ``confidence x weight`` wins.

    Scores are accumulated per phase in the order phases are first seen
    while scanning the ballots (volume, then intensity, then TSS). A tie
    goes to the phase seen first. When every score is zero the week is
    labelled TRANSITION.
    """

    def resolve(
        self, ballots: Sequence[tuple[PhaseVote, float]]
    ) -> tuple[TrainingPhase, float, str]:
        scores: dict[TrainingPhase, float] = {}
        for vote, weight in ballots:
            scores[vote.phase] = scores.get(vote.phase, 0.0) + vote.confidence * weight

        winner = TrainingPhase.TRANSITION
        best = 0.0
        for phase, score in scores.items():
            if score > best:
                winner, best = phase, score

        if best == 0.0:
            return winner, best, "No weighted support for any phase; defaulting to transition."
        tally = ", ".join(f"{phase.label}={score:.1f}" for phase, score in scores.items())
        return winner, best, f"{winner.label} wins weighted vote ({tally})"
