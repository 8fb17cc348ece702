"""
Tribes Compatibility Scorer

This package scores how well two dating-app profiles match and ranks
candidate profiles for a user.

Key Design Decisions:
- Six weighted dimensions (hobbies, passions, languages, personality,
  lifestyle, dietary) plus fixed-weight age and distance
- Importance weights come from the first profile only
- Missing optional data degrades to neutral scores instead of failing
- Scoring is pure and deterministic; every call is independent
"""

from .profiles import Profile, load_profiles
from .scoring import (
    MatchingAlgorithm,
    ScoringConfig,
    CompatibilityScore,
    RankedProfile,
    calculate_compatibility,
    rank_users
)

__version__ = "1.0.0"

__all__ = [
    "Profile",
    "load_profiles",
    "MatchingAlgorithm",
    "ScoringConfig",
    "CompatibilityScore",
    "RankedProfile",
    "calculate_compatibility",
    "rank_users"
]
