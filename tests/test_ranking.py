"""Tests for candidate ranking."""

import pytest

from tribes_matching import rank_users
from tribes_matching.profiles import Profile
from tribes_matching.scoring import MatchingAlgorithm, RankedProfile


@pytest.fixture
def current_user():
    return Profile(
        id="me", age=28,
        hobbies=["Hiking", "Photography"], passions=["Travel"],
        languages=["English"], dietary_preference="Vegetarian"
    )


@pytest.fixture
def candidates(current_user):
    stranger_a = Profile(
        id="stranger-a", age=50, hobbies=["Golf"], passions=["Cars"],
        languages=["German"], dietary_preference="Omnivore", distance=90
    )
    match = Profile(
        id="match", age=29, hobbies=["Photography", "Hiking"], passions=["Travel"],
        languages=["English"], dietary_preference="Vegetarian", distance=1
    )
    stranger_b = Profile(
        id="stranger-b", age=55, hobbies=["Knitting"], passions=["Opera"],
        languages=["Italian"], dietary_preference="Pescatarian", distance=80
    )
    return [stranger_a, match, stranger_b]


def test_all_matching_candidate_ranked_first(current_user, candidates):
    ranked = rank_users(current_user, candidates)
    assert ranked[0].profile.id == "match"
    assert len(ranked) == 3


def test_scores_non_increasing(current_user, candidates):
    ranked = MatchingAlgorithm().rank_users(current_user, candidates)
    overalls = [r.compatibility.overall for r in ranked]
    assert all(a >= b for a, b in zip(overalls, overalls[1:]))


def test_ties_keep_input_order(current_user):
    twins = [
        Profile(id=f"twin-{i}", age=28, hobbies=["Chess"], dietary_preference="Vegan")
        for i in range(5)
    ]
    ranked = rank_users(current_user, twins)
    assert [r.profile.id for r in ranked] == [p.id for p in twins]


def test_attaches_compatibility(current_user, candidates):
    algorithm = MatchingAlgorithm()
    ranked = algorithm.rank_users(current_user, candidates)
    for item in ranked:
        assert isinstance(item, RankedProfile)
        assert item.compatibility == algorithm.calculate_compatibility(current_user, item.profile)


def test_no_deduplication(current_user, candidates):
    ranked = rank_users(current_user, candidates + candidates)
    assert len(ranked) == 6


def test_self_kept_unless_excluded(current_user, candidates):
    algorithm = MatchingAlgorithm()
    pool = candidates + [current_user]
    assert len(algorithm.rank_users(current_user, pool)) == 4
    ranked = algorithm.rank_users(current_user, pool, exclude_self=True)
    assert "me" not in [r.profile.id for r in ranked]


def test_empty_candidates(current_user):
    assert rank_users(current_user, []) == []


def test_parallel_matches_sequential(current_user, candidates):
    algorithm = MatchingAlgorithm()
    pool = candidates * 4
    sequential = algorithm.rank_users(current_user, pool)
    parallel = algorithm.rank_users(current_user, pool, n_jobs=2)
    assert [r.profile.id for r in parallel] == [r.profile.id for r in sequential]
    assert [r.compatibility for r in parallel] == [r.compatibility for r in sequential]


def test_ranked_profile_to_dict(current_user, candidates):
    item = rank_users(current_user, candidates)[0]
    data = item.to_dict()
    assert data["id"] == "match"
    assert data["dietaryPreference"] == "Vegetarian"
    assert data["compatibility"]["overall"] == item.compatibility.overall
