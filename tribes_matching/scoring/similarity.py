"""
Per-dimension similarity functions for compatibility scoring.

Each function compares one aspect of two profiles and returns a score in
[0, 1]. Missing optional data maps to a neutral value rather than an error.

Dimension Types:
- Label sets (hobbies, passions, languages): Jaccard index
- Trait blocks (personality, lifestyle): 1 - mean absolute difference / 9
- Dietary preference: exact match (1.0) or partial credit (0.3)
- Age: preference-range gate, then tiered absolute difference
- Distance: preference gate on the effective max, then tiered distance
"""

import logging
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from ..profiles.schema import (
    Profile,
    PersonalityTraits,
    LifestyleTraits,
    TRAIT_MIN,
    TRAIT_MAX,
)

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 0.5
DIETARY_MATCH_SCORE = 1.0
DIETARY_MISMATCH_SCORE = 0.3
DEFAULT_MAX_DISTANCE = 100.0

AGE_OUT_OF_RANGE_SCORE = 0.2
# (max age difference in years, score), checked in order
AGE_TIERS: Tuple[Tuple[float, float], ...] = (
    (2, 1.0),
    (5, 0.8),
    (10, 0.6),
)
AGE_FALLBACK_SCORE = 0.4

DISTANCE_OUT_OF_RANGE_SCORE = 0.1
# (max distance, score), checked in order
DISTANCE_TIERS: Tuple[Tuple[float, float], ...] = (
    (5, 1.0),
    (15, 0.8),
    (30, 0.6),
    (50, 0.4),
)
DISTANCE_FALLBACK_SCORE = 0.2

MAX_TRAIT_DIFFERENCE = TRAIT_MAX - TRAIT_MIN


def jaccard_similarity(labels_a: Iterable[str], labels_b: Iterable[str]) -> float:
    """
    Jaccard index of two label collections, treated as sets.

    Two empty collections agree vacuously (1.0); exactly one empty
    collection shares nothing (0.0).

    Args:
        labels_a: First label collection
        labels_b: Second label collection

    Returns:
        |A & B| / |A | B| in [0, 1]
    """
    set_a = set(labels_a)
    set_b = set(labels_b)

    if not set_a and not set_b:
        return 1.0
    if not set_a or not set_b:
        return 0.0

    return len(set_a & set_b) / len(set_a | set_b)


def trait_similarity(traits_a: Sequence[float], traits_b: Sequence[float]) -> float:
    """
    Similarity of two equal-length trait vectors on the 1-10 scale.

    Formula:
        1 - sum(|a_i - b_i|) / (n * 9)

    Args:
        traits_a: First trait vector
        traits_b: Second trait vector

    Returns:
        Similarity, 1.0 for identical vectors
    """
    a = np.asarray(traits_a, dtype=float)
    b = np.asarray(traits_b, dtype=float)
    if a.shape != b.shape:
        raise ValueError(f"Trait vectors must have same length: {a.shape} vs {b.shape}")

    total_difference = float(np.sum(np.abs(a - b)))
    max_difference = len(a) * MAX_TRAIT_DIFFERENCE
    return 1 - total_difference / max_difference


def personality_similarity(
    p1: Optional[PersonalityTraits],
    p2: Optional[PersonalityTraits]
) -> float:
    """Personality similarity; neutral when either block is missing."""
    if p1 is None or p2 is None:
        return NEUTRAL_SCORE
    return trait_similarity(p1.to_vector(), p2.to_vector())


def lifestyle_similarity(
    l1: Optional[LifestyleTraits],
    l2: Optional[LifestyleTraits]
) -> float:
    """Lifestyle similarity; neutral when either block is missing."""
    if l1 is None or l2 is None:
        return NEUTRAL_SCORE
    return trait_similarity(l1.to_vector(), l2.to_vector())


def dietary_similarity(diet_a: str, diet_b: str) -> float:
    # Mismatch still earns partial credit.
    return DIETARY_MATCH_SCORE if diet_a == diet_b else DIETARY_MISMATCH_SCORE


def _age_in_range(age: float, age_range: Optional[Tuple[float, float]]) -> bool:
    if age_range is None:
        return True
    return age_range[0] <= age <= age_range[1]


def _age_range_of(profile: Profile) -> Optional[Tuple[float, float]]:
    if profile.preferences is None:
        return None
    return profile.preferences.age_range


def age_compatibility(user1: Profile, user2: Profile) -> float:
    """
    Age compatibility of two profiles.

    If either person falls outside the other's preferred age range, the
    score is 0.2 regardless of how close the ages are. Otherwise the
    score steps down with the absolute age difference.

    Args:
        user1: First profile
        user2: Second profile

    Returns:
        One of 1.0, 0.8, 0.6, 0.4 or 0.2
    """
    user1_in_range = _age_in_range(user1.age, _age_range_of(user2))
    user2_in_range = _age_in_range(user2.age, _age_range_of(user1))

    if not user1_in_range or not user2_in_range:
        logger.debug(f"Age gate closed for {user1.id} / {user2.id}")
        return AGE_OUT_OF_RANGE_SCORE

    age_diff = abs(user1.age - user2.age)
    for max_diff, score in AGE_TIERS:
        if age_diff <= max_diff:
            return score
    return AGE_FALLBACK_SCORE


def effective_max_distance(
    user1: Profile,
    user2: Profile,
    default_max_distance: float = DEFAULT_MAX_DISTANCE
) -> float:
    """Smaller of the two preferred maximum distances (default when unset)."""
    limits = []
    for profile in (user1, user2):
        prefs = profile.preferences
        if prefs is not None and prefs.max_distance is not None:
            limits.append(prefs.max_distance)
        else:
            limits.append(default_max_distance)
    return min(limits)


def distance_compatibility(
    user1: Profile,
    user2: Profile,
    default_max_distance: float = DEFAULT_MAX_DISTANCE
) -> float:
    """
    Distance compatibility of two profiles.

    The pairwise distance is always read from user2. Beyond the effective
    max distance the score is 0.1; otherwise it steps down with distance.

    Args:
        user1: First profile (viewer)
        user2: Second profile, carrying the pairwise distance
        default_max_distance: Max distance used when a profile has none

    Returns:
        One of 1.0, 0.8, 0.6, 0.4, 0.2 or 0.1
    """
    distance = user2.distance if user2.distance is not None else 0
    max_distance = effective_max_distance(user1, user2, default_max_distance)

    if distance > max_distance:
        logger.debug(f"Distance gate closed for {user1.id} / {user2.id}: "
                     f"{distance} > {max_distance}")
        return DISTANCE_OUT_OF_RANGE_SCORE

    for max_tier_distance, score in DISTANCE_TIERS:
        if distance <= max_tier_distance:
            return score
    return DISTANCE_FALLBACK_SCORE
