"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates the values the scorer and command-line runner read.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

from ..profiles.schema import WEIGHTED_DIMENSIONS

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_OUTPUT_FORMATS = ("json", "csv")


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If the file is empty
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    log_level = get_config_value(config, "global.log_level", "INFO")
    if str(log_level).upper() not in VALID_LOG_LEVELS:
        issues.append(f"Unknown global.log_level: {log_level}")

    # Default weights must cover known dimensions and sum to 1
    weights = get_config_value(config, "scoring.default_weights")
    if weights is not None:
        if not isinstance(weights, dict):
            issues.append("scoring.default_weights must be a mapping")
        else:
            unknown = sorted(set(weights) - set(WEIGHTED_DIMENSIONS))
            if unknown:
                issues.append(f"Unknown dimensions in scoring.default_weights: {unknown}")
            for dim, value in weights.items():
                if not isinstance(value, (int, float)) or not 0 <= value <= 1:
                    issues.append(f"scoring.default_weights.{dim} must be in [0, 1], got {value}")
            missing = [d for d in WEIGHTED_DIMENSIONS if d not in weights]
            if not missing and not unknown:
                total = sum(weights.values())
                if abs(total - 1.0) > 0.01:
                    issues.append(f"Default weights don't sum to 1: {total}")

    max_distance = get_config_value(config, "scoring.default_max_distance")
    if max_distance is not None and (not isinstance(max_distance, (int, float)) or max_distance < 0):
        issues.append(f"scoring.default_max_distance must be a non-negative number, got {max_distance}")

    n_jobs = get_config_value(config, "ranking.n_jobs", 1)
    if not isinstance(n_jobs, int) or n_jobs == 0:
        issues.append(f"ranking.n_jobs must be a non-zero integer, got {n_jobs}")

    top_k = get_config_value(config, "ranking.top_k")
    if top_k is not None and (not isinstance(top_k, int) or top_k < 1):
        issues.append(f"ranking.top_k must be a positive integer, got {top_k}")

    output_format = get_config_value(config, "output.format", "json")
    if output_format not in VALID_OUTPUT_FORMATS:
        issues.append(f"output.format must be one of {list(VALID_OUTPUT_FORMATS)}, got {output_format}")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "scoring.default_weights.hobbies")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
