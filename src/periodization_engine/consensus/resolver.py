"""Consensus resolver: turns one week's classifier votes into a single label."""

from __future__ import annotations

from collections.abc import Sequence

from periodization_engine.consensus.strategies import VotingStrategy, WeightedVote
from periodization_engine.models.config import ConfidenceWeights
from periodization_engine.models.phase import PhaseVote, WeekConsensus


class ConsensusResolver:
    """Resolves the votes cast for one week.

    Uses a pluggable strategy pattern. Default is WeightedVote with the
    configured per-classifier weights.
    """

    def __init__(self, strategy: VotingStrategy | None = None) -> None:
        self.strategy = strategy or WeightedVote()

    def resolve(self, votes: Sequence[PhaseVote], weights: ConfidenceWeights) -> WeekConsensus:
        """Weight each vote by its classifier and pick the winning phase.

        Votes must be given in classifier vote order; the order decides ties.
        """
        ballots = [(vote, weights.weight_for(vote.classifier_id)) for vote in votes]
        phase, score, notes = self.strategy.resolve(ballots)
        return WeekConsensus(phase=phase, score=score, votes=tuple(votes), notes=notes)
