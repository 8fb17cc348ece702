"""Profile schema and loading."""

from .schema import (
    Profile,
    PersonalityTraits,
    LifestyleTraits,
    MatchPreferences,
    ImportanceWeights,
    validate_profile
)
from .loaders import load_profiles, profiles_from_dataframe, find_profile

__all__ = [
    "Profile",
    "PersonalityTraits",
    "LifestyleTraits",
    "MatchPreferences",
    "ImportanceWeights",
    "validate_profile",
    "load_profiles",
    "profiles_from_dataframe",
    "find_profile"
]
