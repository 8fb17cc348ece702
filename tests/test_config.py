"""Tests for configuration loading and validation."""

import json

import pytest

from tribes_matching.configs import load_config, validate_config, get_config_value
from tribes_matching.profiles import ImportanceWeights
from tribes_matching.scoring import ScoringConfig, create_algorithm_from_config


def test_shipped_config_is_valid(config_path):
    config = load_config(str(config_path))
    assert validate_config(config) == []
    assert ScoringConfig.from_config(config) == ScoringConfig()


def test_missing_config_file():
    with pytest.raises(FileNotFoundError):
        load_config("nope.yaml")


def test_empty_config_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    with pytest.raises(ValueError, match="empty"):
        load_config(str(path))


def test_validate_reports_problems():
    config = {
        "global": {"log_level": "LOUD"},
        "scoring": {
            "default_weights": {"hobbies": 0.9, "passions": 0.9, "languages": 0.1,
                                "personality": 0.1, "lifestyle": 0.1, "dietary": 1.5},
            "default_max_distance": -5,
        },
        "ranking": {"n_jobs": 0, "top_k": 0},
        "output": {"format": "xml"},
    }
    issues = validate_config(config)
    assert any("log_level" in i for i in issues)
    assert any("dietary" in i for i in issues)
    assert any("don't sum to 1" in i for i in issues)
    assert any("default_max_distance" in i for i in issues)
    assert any("n_jobs" in i for i in issues)
    assert any("top_k" in i for i in issues)
    assert any("output.format" in i for i in issues)


def test_validate_unknown_weight_dimension():
    issues = validate_config({"scoring": {"default_weights": {"age": 0.1}}})
    assert issues == ["Unknown dimensions in scoring.default_weights: ['age']"]


def test_get_config_value():
    config = {"scoring": {"default_weights": {"hobbies": 0.3}}}
    assert get_config_value(config, "scoring.default_weights.hobbies") == 0.3
    assert get_config_value(config, "scoring.missing", "fallback") == "fallback"
    assert get_config_value(config, "scoring.default_weights.hobbies.deeper") is None


def test_scoring_config_from_partial_config():
    config = {"scoring": {"default_weights": {"hobbies": 0.4, "passions": 0.05}}}
    scoring = ScoringConfig.from_config(config)
    assert scoring.default_weights.hobbies == 0.4
    assert scoring.default_weights.languages == ImportanceWeights().languages
    assert scoring.default_max_distance == 100


def test_scoring_config_from_empty_sections():
    scoring = ScoringConfig.from_config(
        {"scoring": {"default_weights": None, "default_max_distance": None}}
    )
    assert scoring == ScoringConfig()
    algorithm = create_algorithm_from_config({"scoring": {"default_weights": None}})
    assert algorithm.config.default_weights == ImportanceWeights()


def test_scoring_config_validate():
    bad = ScoringConfig(default_weights=ImportanceWeights(hobbies=0.9), default_max_distance=-1)
    issues = bad.validate()
    assert any("don't sum to 1" in i for i in issues)
    assert any("default_max_distance" in i for i in issues)
    assert ScoringConfig().validate() == []


def test_scoring_config_save_load(tmp_path):
    path = tmp_path / "scoring.json"
    original = ScoringConfig(default_max_distance=42)
    original.save(str(path))
    assert json.loads(path.read_text())["default_max_distance"] == 42
    assert ScoringConfig.load(str(path)) == original


def test_create_algorithm_from_config():
    algorithm = create_algorithm_from_config({"scoring": {"default_max_distance": 10}}, strict=True)
    assert algorithm.config.default_max_distance == 10
    assert algorithm.strict
