"""
Compatibility scoring between two profiles.

This module combines the per-dimension similarities into a single
weighted score with an explanatory breakdown, and ranks candidate
profiles against a reference profile.

Scoring Formula:
    overall = min(1, hobbies * w.hobbies + passions * w.passions
                     + languages * w.languages + personality * w.personality
                     + lifestyle * w.lifestyle + dietary * w.dietary
                     + age * 0.1 + distance * 0.05)

Key Design Decisions:
- Importance weights come from the first profile only (whose session it is)
- Age and distance carry fixed weights on top of the six configurable
  ones, so the weighted sum can reach 1.15 before clamping
- Only a ceiling clamp is applied
- Scoring is pure; a MatchingAlgorithm holds nothing but its config
"""

import logging
from dataclasses import dataclass, asdict, field
from typing import Dict, Any, List, Optional, Sequence
import json

from joblib import Parallel, delayed

from ..profiles.schema import (
    Profile,
    ImportanceWeights,
    WEIGHTED_DIMENSIONS,
    validate_profile,
)
from .reasons import generate_reasons
from .similarity import (
    jaccard_similarity,
    personality_similarity,
    lifestyle_similarity,
    dietary_similarity,
    age_compatibility,
    distance_compatibility,
    DEFAULT_MAX_DISTANCE,
)

logger = logging.getLogger(__name__)

AGE_WEIGHT = 0.1
DISTANCE_WEIGHT = 0.05

BREAKDOWN_DIMENSIONS = WEIGHTED_DIMENSIONS + ("age", "distance")


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-dimension scores, each in [0, 1]."""
    hobbies: float
    passions: float
    languages: float
    personality: float
    lifestyle: float
    dietary: float
    age: float
    distance: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class CompatibilityScore:
    """
    Result of comparing two profiles.

    Attributes:
        overall: Weighted score in [0, 1]
        breakdown: Per-dimension scores
        reasons: Ordered, non-empty list of explanations
    """
    overall: float
    breakdown: ScoreBreakdown
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "overall": self.overall,
            "breakdown": self.breakdown.to_dict(),
            "reasons": list(self.reasons)
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CompatibilityScore":
        """Create from dictionary."""
        return cls(
            overall=d["overall"],
            breakdown=ScoreBreakdown(**d["breakdown"]),
            reasons=list(d["reasons"])
        )


@dataclass(frozen=True)
class RankedProfile:
    """A candidate profile with its compatibility against the ranking user."""
    profile: Profile
    compatibility: CompatibilityScore

    def to_dict(self) -> Dict[str, Any]:
        """Profile fields plus a 'compatibility' entry."""
        result = self.profile.to_dict()
        result["compatibility"] = self.compatibility.to_dict()
        return result


@dataclass
class ScoringConfig:
    """
    Configuration for compatibility scoring.

    Attributes:
        default_weights: Importance weights used when the first profile
            carries none
        default_max_distance: Max distance assumed for a profile without one
    """
    default_weights: ImportanceWeights = field(default_factory=ImportanceWeights)
    default_max_distance: float = DEFAULT_MAX_DISTANCE

    def validate(self) -> List[str]:
        """Return a list of issues (empty if valid)."""
        issues = []
        for dim, value in self.default_weights.to_dict().items():
            if not 0 <= value <= 1:
                issues.append(f"default weight {dim} must be in [0, 1], got {value}")
        total = self.default_weights.total()
        if abs(total - 1.0) > 0.01:
            issues.append(f"Default weights don't sum to 1: {total:.4f}")
        if self.default_max_distance < 0:
            issues.append(f"default_max_distance must be non-negative, got {self.default_max_distance}")
        return issues

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "default_weights": self.default_weights.to_dict(),
            "default_max_distance": self.default_max_distance
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ScoringConfig":
        """Create from dictionary."""
        max_distance = d.get("default_max_distance")
        return cls(
            default_weights=ImportanceWeights.from_dict(d.get("default_weights") or {}),
            default_max_distance=float(max_distance if max_distance is not None else DEFAULT_MAX_DISTANCE)
        )

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ScoringConfig":
        """Create from main config dictionary."""
        return cls.from_dict(config.get("scoring", {}) or {})

    def save(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved scoring config to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "ScoringConfig":
        """Load configuration from JSON file."""
        with open(filepath, "r") as f:
            d = json.load(f)
        return cls.from_dict(d)


class MatchingAlgorithm:
    """
    Compatibility scorer for pairs of profiles.

    Compares two profiles across six weighted dimensions (hobbies,
    passions, languages, personality, lifestyle, dietary) plus age and
    distance, and ranks candidate lists by the resulting overall score.

    Attributes:
        config: ScoringConfig with fallback weights and max distance
        strict: If True, profiles failing validate_profile are rejected
            before scoring instead of being scored as-is
    """

    def __init__(self, config: Optional[ScoringConfig] = None, strict: bool = False):
        """
        Initialize the scorer.

        Args:
            config: ScoringConfig instance (defaults when None)
            strict: Reject out-of-range profiles with ValueError
        """
        self.config = config or ScoringConfig()
        self.strict = strict
        for issue in self.config.validate():
            logger.warning(f"Scoring config issue: {issue}")

    def _check(self, profile: Profile) -> None:
        issues = validate_profile(profile)
        if issues:
            raise ValueError("; ".join(issues))

    def weights_for(self, user1: Profile) -> ImportanceWeights:
        """Importance weights applied when user1 is the first profile."""
        prefs = user1.preferences
        if prefs is not None and prefs.importance_weights is not None:
            return prefs.importance_weights
        return self.config.default_weights

    def compute_breakdown(self, user1: Profile, user2: Profile) -> ScoreBreakdown:
        """
        Compute all eight per-dimension scores.

        Args:
            user1: First profile
            user2: Second profile (its distance is the pairwise distance)

        Returns:
            ScoreBreakdown instance
        """
        return ScoreBreakdown(
            hobbies=jaccard_similarity(user1.hobbies, user2.hobbies),
            passions=jaccard_similarity(user1.passions, user2.passions),
            languages=jaccard_similarity(user1.languages, user2.languages),
            personality=personality_similarity(user1.personality, user2.personality),
            lifestyle=lifestyle_similarity(user1.lifestyle, user2.lifestyle),
            dietary=dietary_similarity(user1.dietary_preference, user2.dietary_preference),
            age=age_compatibility(user1, user2),
            distance=distance_compatibility(user1, user2, self.config.default_max_distance)
        )

    def calculate_compatibility(self, user1: Profile, user2: Profile) -> CompatibilityScore:
        """
        Compute the compatibility of user2 from user1's point of view.

        Args:
            user1: First profile; supplies the importance weights
            user2: Second profile; supplies the pairwise distance

        Returns:
            CompatibilityScore with overall score, breakdown and reasons

        Raises:
            ValueError: Only in strict mode, for out-of-range profiles
        """
        if self.strict:
            self._check(user1)
            self._check(user2)

        breakdown = self.compute_breakdown(user1, user2)
        weights = self.weights_for(user1)

        weighted_score = (
            breakdown.hobbies * weights.hobbies +
            breakdown.passions * weights.passions +
            breakdown.languages * weights.languages +
            breakdown.personality * weights.personality +
            breakdown.lifestyle * weights.lifestyle +
            breakdown.dietary * weights.dietary +
            breakdown.age * AGE_WEIGHT +
            breakdown.distance * DISTANCE_WEIGHT
        )

        overall = min(1.0, weighted_score)
        reasons = generate_reasons(breakdown.to_dict())

        logger.debug(f"Compatibility {user1.id} -> {user2.id}: overall={overall:.4f}, "
                     f"reasons={len(reasons)}")

        return CompatibilityScore(overall=overall, breakdown=breakdown, reasons=reasons)

    def rank_users(
        self,
        current_user: Profile,
        candidates: Sequence[Profile],
        n_jobs: int = 1,
        exclude_self: bool = False
    ) -> List[RankedProfile]:
        """
        Rank candidates by descending compatibility with current_user.

        The sort is stable, so candidates with equal scores keep their
        input order. No deduplication or pagination is applied.

        Args:
            current_user: Profile whose matches are being ranked
            candidates: Candidate profiles
            n_jobs: Number of joblib workers (1 scores sequentially)
            exclude_self: Drop candidates sharing current_user's id

        Returns:
            List of RankedProfile, best match first
        """
        if exclude_self:
            candidates = [c for c in candidates if c.id != current_user.id]
        else:
            candidates = list(candidates)

        if n_jobs == 1 or len(candidates) < 2:
            scores = [self.calculate_compatibility(current_user, c) for c in candidates]
        else:
            scores = Parallel(n_jobs=n_jobs)(
                delayed(self.calculate_compatibility)(current_user, c) for c in candidates
            )

        ranked = [
            RankedProfile(profile=candidate, compatibility=score)
            for candidate, score in zip(candidates, scores)
        ]
        ranked = sorted(ranked, key=lambda r: r.compatibility.overall, reverse=True)

        logger.info(f"Ranked {len(ranked)} candidates for {current_user.id}")
        return ranked


_default_algorithm = MatchingAlgorithm()


def calculate_compatibility(user1: Profile, user2: Profile) -> CompatibilityScore:
    """Score a pair with the default MatchingAlgorithm."""
    return _default_algorithm.calculate_compatibility(user1, user2)


def rank_users(current_user: Profile, candidates: Sequence[Profile]) -> List[RankedProfile]:
    """Rank candidates with the default MatchingAlgorithm."""
    return _default_algorithm.rank_users(current_user, candidates)


def create_algorithm_from_config(config: Dict[str, Any], strict: bool = False) -> MatchingAlgorithm:
    """
    Factory function to create a MatchingAlgorithm from config.

    Args:
        config: Main configuration dictionary
        strict: Reject out-of-range profiles

    Returns:
        Configured MatchingAlgorithm instance
    """
    return MatchingAlgorithm(ScoringConfig.from_config(config), strict=strict)
