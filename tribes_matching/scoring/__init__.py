"""Compatibility scoring module."""

from .compatibility import (
    MatchingAlgorithm,
    ScoringConfig,
    CompatibilityScore,
    ScoreBreakdown,
    RankedProfile,
    calculate_compatibility,
    rank_users,
    create_algorithm_from_config
)
from .similarity import jaccard_similarity, trait_similarity
from .reasons import generate_reasons

__all__ = [
    "MatchingAlgorithm",
    "ScoringConfig",
    "CompatibilityScore",
    "ScoreBreakdown",
    "RankedProfile",
    "calculate_compatibility",
    "rank_users",
    "create_algorithm_from_config",
    "jaccard_similarity",
    "trait_similarity",
    "generate_reasons"
]
