"""Shared fixtures for compatibility scorer tests."""

from pathlib import Path

import pytest

from tribes_matching.profiles import (
    Profile,
    PersonalityTraits,
    LifestyleTraits,
    ImportanceWeights,
)
from tribes_matching.scoring import MatchingAlgorithm

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def algorithm():
    return MatchingAlgorithm()


@pytest.fixture
def make_profile():
    """Factory for profiles with sensible defaults."""
    def _make(profile_id="p", age=25, **kwargs):
        kwargs.setdefault("hobbies", ["Hiking", "Art"])
        kwargs.setdefault("passions", ["Travel", "Music"])
        kwargs.setdefault("languages", ["English"])
        kwargs.setdefault("dietary_preference", "Vegetarian")
        return Profile(id=profile_id, age=age, **kwargs)
    return _make


@pytest.fixture
def personality():
    return PersonalityTraits(
        extroversion=6, openness=8, conscientiousness=5, agreeableness=7, neuroticism=3
    )


@pytest.fixture
def lifestyle():
    return LifestyleTraits(
        fitness_level=7, social_level=5, adventure_level=8, creativity_level=6
    )


@pytest.fixture
def custom_weights():
    return ImportanceWeights(
        hobbies=0.5, passions=0.1, languages=0.1, personality=0.1, lifestyle=0.1, dietary=0.1
    )


@pytest.fixture
def sample_profiles_path():
    return PROJECT_ROOT / "data" / "sample_profiles.json"


@pytest.fixture
def config_path():
    return PROJECT_ROOT / "configs" / "config.yaml"

