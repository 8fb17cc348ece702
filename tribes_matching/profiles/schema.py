"""
Profile schema for compatibility scoring.

Defines the data structures describing one person being compared. The
scorer only reads these records; they are supplied per call by whatever
feeds discovery (a database row, a fixture file, a feed response).

Wire format uses the app's camelCase field names (dietaryPreference,
fitnessLevel, ageRange, maxDistance, importanceWeights). from_dict also
accepts the snake_case attribute names.

Optional blocks (personality, lifestyle, preferences) may be absent;
scoring degrades to neutral values rather than failing.
"""

import math
from dataclasses import dataclass
from typing import Optional, Dict, Any, List, Tuple

TRAIT_MIN = 1
TRAIT_MAX = 10

PERSONALITY_TRAITS = (
    "extroversion",
    "openness",
    "conscientiousness",
    "agreeableness",
    "neuroticism",
)

LIFESTYLE_TRAITS = (
    "fitness_level",
    "social_level",
    "adventure_level",
    "creativity_level",
)

WEIGHTED_DIMENSIONS = (
    "hobbies",
    "passions",
    "languages",
    "personality",
    "lifestyle",
    "dietary",
)

# snake_case attribute -> camelCase wire name
_WIRE_NAMES = {
    "dietary_preference": "dietaryPreference",
    "fitness_level": "fitnessLevel",
    "social_level": "socialLevel",
    "adventure_level": "adventureLevel",
    "creativity_level": "creativityLevel",
    "age_range": "ageRange",
    "max_distance": "maxDistance",
    "importance_weights": "importanceWeights",
}


def _get(data: Dict[str, Any], name: str, default: Any = None) -> Any:
    """Read a field by camelCase wire name, falling back to snake_case."""
    wire = _WIRE_NAMES.get(name, name)
    if wire in data:
        return data[wire]
    return data.get(name, default)


def _as_labels(value: Any, name: str) -> Tuple[str, ...]:
    """Normalize a label collection to a tuple of strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        raise ValueError(f"{name} must be a list of labels, got a string: {value!r}")
    try:
        return tuple(str(v) for v in value)
    except TypeError:
        raise ValueError(f"{name} must be a list of labels, got {type(value).__name__}")


@dataclass(frozen=True)
class PersonalityTraits:
    """
    Big Five personality block, each trait on a 1-10 scale.

    Attributes:
        extroversion: Outgoing vs reserved
        openness: Curious vs conventional
        conscientiousness: Organized vs spontaneous
        agreeableness: Cooperative vs competitive
        neuroticism: Sensitive vs calm
    """
    extroversion: float
    openness: float
    conscientiousness: float
    agreeableness: float
    neuroticism: float

    def to_vector(self) -> List[float]:
        """Return traits in canonical order."""
        return [float(getattr(self, t)) for t in PERSONALITY_TRAITS]

    def to_dict(self) -> Dict[str, float]:
        return {t: getattr(self, t) for t in PERSONALITY_TRAITS}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersonalityTraits":
        missing = [t for t in PERSONALITY_TRAITS if _get(data, t) is None]
        if missing:
            raise ValueError(f"personality is missing traits: {missing}")
        return cls(**{t: _get(data, t) for t in PERSONALITY_TRAITS})


@dataclass(frozen=True)
class LifestyleTraits:
    """Lifestyle block, each level on a 1-10 scale."""
    fitness_level: float
    social_level: float
    adventure_level: float
    creativity_level: float

    def to_vector(self) -> List[float]:
        """Return levels in canonical order."""
        return [float(getattr(self, t)) for t in LIFESTYLE_TRAITS]

    def to_dict(self) -> Dict[str, float]:
        return {_WIRE_NAMES[t]: getattr(self, t) for t in LIFESTYLE_TRAITS}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LifestyleTraits":
        missing = [_WIRE_NAMES[t] for t in LIFESTYLE_TRAITS if _get(data, t) is None]
        if missing:
            raise ValueError(f"lifestyle is missing levels: {missing}")
        return cls(**{t: _get(data, t) for t in LIFESTYLE_TRAITS})


@dataclass(frozen=True)
class ImportanceWeights:
    """
    Per-dimension importance weights, each in [0, 1].

    The defaults sum to 1.0. Age and distance are not listed here: they
    carry fixed weights inside the scorer.
    """
    hobbies: float = 0.2
    passions: float = 0.25
    languages: float = 0.1
    personality: float = 0.2
    lifestyle: float = 0.15
    dietary: float = 0.1

    def total(self) -> float:
        return sum(getattr(self, d) for d in WEIGHTED_DIMENSIONS)

    def to_dict(self) -> Dict[str, float]:
        return {d: getattr(self, d) for d in WEIGHTED_DIMENSIONS}

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        fallback: Optional["ImportanceWeights"] = None
    ) -> "ImportanceWeights":
        """
        Create from dictionary.

        Dimensions missing from data are taken from fallback (or the
        defaults), so a partial weights block still yields a full set.
        """
        base = fallback or cls()
        unknown = set(data) - set(WEIGHTED_DIMENSIONS)
        if unknown:
            raise ValueError(f"Unknown importance weight dimensions: {sorted(unknown)}")
        values = {}
        for d in WEIGHTED_DIMENSIONS:
            value = data.get(d, getattr(base, d))
            if value is None:
                raise ValueError(f"importance weight {d} must be a number, got None")
            values[d] = float(value)
        return cls(**values)


@dataclass(frozen=True)
class MatchPreferences:
    """
    What a person is looking for.

    Attributes:
        age_range: Inclusive (min, max) acceptable partner age
        max_distance: Maximum acceptable distance (km)
        importance_weights: How much each dimension matters to this person
    """
    age_range: Optional[Tuple[float, float]] = None
    max_distance: Optional[float] = None
    importance_weights: Optional[ImportanceWeights] = None

    def __post_init__(self):
        """Coerce a list age range and a dict weights block."""
        if isinstance(self.age_range, list):
            object.__setattr__(self, "age_range", tuple(self.age_range))
        if isinstance(self.importance_weights, dict):
            object.__setattr__(
                self, "importance_weights", ImportanceWeights.from_dict(self.importance_weights)
            )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.age_range is not None:
            result["ageRange"] = list(self.age_range)
        if self.max_distance is not None:
            result["maxDistance"] = self.max_distance
        if self.importance_weights is not None:
            result["importanceWeights"] = self.importance_weights.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchPreferences":
        age_range = _get(data, "age_range")
        if age_range is not None:
            if isinstance(age_range, dict):
                age_range = (age_range.get("min"), age_range.get("max"))
            if not isinstance(age_range, (list, tuple)) or len(age_range) != 2:
                raise ValueError(f"ageRange must be a [min, max] pair, got {age_range!r}")
            if age_range[0] is None or age_range[1] is None:
                raise ValueError(f"ageRange needs both bounds, got {list(age_range)}")
            age_range = (age_range[0], age_range[1])

        weights = _get(data, "importance_weights")
        if weights is not None and not isinstance(weights, ImportanceWeights):
            weights = ImportanceWeights.from_dict(weights)

        return cls(
            age_range=age_range,
            max_distance=_get(data, "max_distance"),
            importance_weights=weights
        )


@dataclass(frozen=True)
class Profile:
    """
    One person being compared.

    Attributes:
        id: Opaque unique identifier
        age: Age in years (positive)
        hobbies: Hobby labels (compared as a set)
        passions: Passion labels (compared as a set)
        languages: Spoken languages (compared as a set)
        dietary_preference: Dietary label, exact-match comparison
        personality: Optional Big Five block
        lifestyle: Optional lifestyle block
        distance: Distance to the viewing user; read from the second
            profile of a comparison, treated as 0 when absent
        preferences: Optional partner preferences
        name: Display name (not scored)
        bio: Free-text bio (not scored)
    """
    id: str
    age: int
    hobbies: Tuple[str, ...] = ()
    passions: Tuple[str, ...] = ()
    languages: Tuple[str, ...] = ()
    dietary_preference: str = ""
    personality: Optional[PersonalityTraits] = None
    lifestyle: Optional[LifestyleTraits] = None
    distance: Optional[float] = None
    preferences: Optional[MatchPreferences] = None
    name: Optional[str] = None
    bio: Optional[str] = None

    def __post_init__(self):
        """Coerce label collections and nested dicts."""
        for attr in ("hobbies", "passions", "languages"):
            object.__setattr__(self, attr, _as_labels(getattr(self, attr), attr))
        if isinstance(self.personality, dict):
            object.__setattr__(self, "personality", PersonalityTraits.from_dict(self.personality))
        if isinstance(self.lifestyle, dict):
            object.__setattr__(self, "lifestyle", LifestyleTraits.from_dict(self.lifestyle))
        if isinstance(self.preferences, dict):
            object.__setattr__(self, "preferences", MatchPreferences.from_dict(self.preferences))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary with camelCase field names."""
        result: Dict[str, Any] = {
            "id": self.id,
            "age": self.age,
            "hobbies": list(self.hobbies),
            "passions": list(self.passions),
            "languages": list(self.languages),
            "dietaryPreference": self.dietary_preference,
        }
        if self.personality is not None:
            result["personality"] = self.personality.to_dict()
        if self.lifestyle is not None:
            result["lifestyle"] = self.lifestyle.to_dict()
        if self.distance is not None:
            result["distance"] = self.distance
        if self.preferences is not None:
            result["preferences"] = self.preferences.to_dict()
        if self.name is not None:
            result["name"] = self.name
        if self.bio is not None:
            result["bio"] = self.bio
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        """
        Create from dictionary.

        Raises:
            ValueError: If id or age is missing, or a block is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Profile must be a mapping, got {type(data).__name__}")
        if data.get("id") is None:
            raise ValueError("Profile is missing required field: id")
        if data.get("age") is None:
            raise ValueError(f"Profile {data['id']} is missing required field: age")

        personality = data.get("personality")
        lifestyle = data.get("lifestyle")
        preferences = data.get("preferences")

        return cls(
            id=str(data["id"]),
            age=data["age"],
            hobbies=data.get("hobbies"),
            passions=data.get("passions"),
            languages=data.get("languages"),
            dietary_preference=_get(data, "dietary_preference", "") or "",
            personality=PersonalityTraits.from_dict(personality) if personality else None,
            lifestyle=LifestyleTraits.from_dict(lifestyle) if lifestyle else None,
            distance=data.get("distance"),
            preferences=MatchPreferences.from_dict(preferences) if preferences else None,
            name=data.get("name"),
            bio=data.get("bio")
        )


def validate_profile(profile: Profile) -> List[str]:
    """
    Check a profile for values outside the documented ranges.

    Scoring never depends on this check; it exists so callers can log or
    reject suspicious records.

    Args:
        profile: Profile to check

    Returns:
        List of issue messages (empty if valid)
    """
    issues = []
    prefix = f"Profile {profile.id}"

    if not isinstance(profile.age, (int, float)) or profile.age <= 0:
        issues.append(f"{prefix}: age must be positive, got {profile.age!r}")

    for block_name, block, traits in (
        ("personality", profile.personality, PERSONALITY_TRAITS),
        ("lifestyle", profile.lifestyle, LIFESTYLE_TRAITS),
    ):
        if block is None:
            continue
        for trait in traits:
            value = getattr(block, trait)
            if not isinstance(value, (int, float)) or not TRAIT_MIN <= value <= TRAIT_MAX:
                issues.append(
                    f"{prefix}: {block_name}.{trait} must be in "
                    f"[{TRAIT_MIN}, {TRAIT_MAX}], got {value!r}"
                )

    if profile.distance is not None:
        if not isinstance(profile.distance, (int, float)) or math.isnan(profile.distance):
            issues.append(f"{prefix}: distance must be a number, got {profile.distance!r}")
        elif profile.distance < 0:
            issues.append(f"{prefix}: distance must be non-negative, got {profile.distance}")

    prefs = profile.preferences
    if prefs is not None:
        if prefs.age_range is not None:
            low, high = prefs.age_range
            if low is None or high is None or low > high:
                issues.append(f"{prefix}: ageRange must satisfy min <= max, got {list(prefs.age_range)}")
        if prefs.max_distance is not None and prefs.max_distance < 0:
            issues.append(f"{prefix}: maxDistance must be non-negative, got {prefs.max_distance}")
        if prefs.importance_weights is not None:
            for dim, value in prefs.importance_weights.to_dict().items():
                if not 0 <= value <= 1:
                    issues.append(f"{prefix}: importanceWeights.{dim} must be in [0, 1], got {value}")

    return issues

