"""Consensus voting across classifiers."""

from periodization_engine.consensus.resolver import ConsensusResolver
from periodization_engine.consensus.strategies import VotingStrategy, WeightedVote

__all__ = ["ConsensusResolver", "VotingStrategy", "WeightedVote"]
