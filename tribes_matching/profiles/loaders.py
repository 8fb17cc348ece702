"""
Profile loading functions.

This module reads profile records from JSON or CSV files. No scoring is
done here - that's handled by the scoring module.

CSV Layout:
- One row per profile
- Label columns (hobbies, passions, languages) hold ';'-separated labels
- Nested blocks are flattened with dotted column names, e.g.
  personality.openness, lifestyle.fitnessLevel, preferences.maxDistance,
  preferences.ageRange.min, preferences.importanceWeights.hobbies
- Empty cells mean "not provided"
"""

import json
import logging
import math
from pathlib import Path
from typing import Dict, List, Any, Sequence

import numpy as np
import pandas as pd

from .schema import Profile

logger = logging.getLogger(__name__)

LABEL_COLUMNS = ("hobbies", "passions", "languages")
LABEL_SEPARATOR = ";"


def load_profiles(filepath: str) -> List[Profile]:
    """
    Load profiles from a JSON or CSV file.

    JSON files hold either a list of profile objects or an object with a
    "profiles" list.

    Args:
        filepath: Path to the profiles file

    Returns:
        List of Profile instances, in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or its format is unsupported
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Profiles file not found: {filepath}")

    suffix = path.suffix.lower()
    logger.info(f"Loading profiles from {filepath}")

    if suffix == ".json":
        profiles = _load_profiles_json(path)
    elif suffix == ".csv":
        df = pd.read_csv(path)
        if df.empty:
            raise ValueError(f"Profiles file is empty: {filepath}")
        profiles = profiles_from_dataframe(df)
    else:
        raise ValueError(f"Unsupported profiles file format: {suffix or filepath}")

    if not profiles:
        raise ValueError(f"Profiles file is empty: {filepath}")

    logger.info(f"Loaded {len(profiles)} profiles")
    return profiles


def _load_profiles_json(path: Path) -> List[Profile]:
    with open(path, "r") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("profiles")
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of profiles in {path}")

    return [Profile.from_dict(item) for item in data]


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _split_labels(value: Any) -> List[str]:
    if _is_missing(value):
        return []
    return [label.strip() for label in str(value).split(LABEL_SEPARATOR) if label.strip()]


def _unflatten(row: Dict[str, Any]) -> Dict[str, Any]:
    """Turn dotted keys into nested dictionaries, skipping empty cells."""
    nested: Dict[str, Any] = {}
    for key, value in row.items():
        if _is_missing(value):
            continue
        parts = str(key).split(".")
        target = nested
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = _coerce_number(value)
    return nested


def _coerce_number(value: Any) -> Any:
    """Return plain Python numbers; integral floats become int (pandas widens int columns with gaps)."""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def profiles_from_dataframe(df: pd.DataFrame) -> List[Profile]:
    """
    Build profiles from a DataFrame laid out as described in the module docs.

    Args:
        df: One row per profile

    Returns:
        List of Profile instances, in row order

    Raises:
        ValueError: If a row lacks id or age, or a block is incomplete
    """
    profiles = []
    for row in df.to_dict(orient="records"):
        record = _unflatten(row)
        for column in LABEL_COLUMNS:
            record[column] = _split_labels(row.get(column))
        profiles.append(Profile.from_dict(record))
    return profiles


def find_profile(profiles: Sequence[Profile], profile_id: str) -> Profile:
    """
    Look up a profile by id.

    Raises:
        KeyError: If no profile has that id
    """
    for profile in profiles:
        if profile.id == profile_id:
            return profile
    raise KeyError(f"No profile with id {profile_id!r}")

