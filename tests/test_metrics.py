"""Tests for evaluation and display helpers."""

import json

import pytest

from tribes_matching.profiles import Profile, MatchPreferences, ImportanceWeights
from tribes_matching.scoring import MatchingAlgorithm, CompatibilityScore, ScoreBreakdown
from tribes_matching.evaluation import (
    score_percentage,
    score_label,
    score_tier,
    top_reasons,
    format_score,
    ranking_to_dataframe,
    compute_score_distribution_stats,
    ranking_agreement,
    create_ranking_report,
)


def _score(overall, reasons=("You share many hobbies",)):
    breakdown = ScoreBreakdown(1, 1, 1, 0.5, 0.5, 1, 1, 1)
    return CompatibilityScore(overall=overall, breakdown=breakdown, reasons=list(reasons))


@pytest.fixture
def pool():
    return [
        Profile(id="a", age=30, name="Ann", hobbies=["Chess", "Art"], passions=["Music"],
                languages=["English"], dietary_preference="Vegan", distance=3),
        Profile(id="b", age=45, name="Ben", hobbies=["Golf"], passions=["Cars"],
                languages=["German"], dietary_preference="Omnivore", distance=70),
        Profile(id="c", age=31, name="Cat", hobbies=["Chess"], passions=["Music"],
                languages=["English"], dietary_preference="Omnivore", distance=20),
    ]


@pytest.fixture
def viewer():
    return Profile(id="me", age=30, hobbies=["Chess", "Art"], passions=["Music"],
                   languages=["English"], dietary_preference="Vegan")


@pytest.mark.parametrize("value,expected", [(0.9751, 98), (0.125, 13), (0.0, 0), (1.0, 100), (0.494, 49)])
def test_score_percentage(value, expected):
    assert score_percentage(value) == expected


@pytest.mark.parametrize("value,expected", [
    (0.95, "Excellent"), (0.9, "Excellent"), (0.85, "Great"), (0.7, "Good"),
    (0.65, "Fair"), (0.59, "Low"),
])
def test_score_label(value, expected):
    assert score_label(value) == expected


@pytest.mark.parametrize("value,expected", [(0.8, "high"), (0.79, "medium"), (0.6, "medium"), (0.2, "low")])
def test_score_tier(value, expected):
    assert score_tier(value) == expected


def test_top_reasons_and_format():
    score = _score(0.9, ["one", "two", "three"])
    assert top_reasons(score) == ["one", "two"]
    assert top_reasons(score, limit=5) == ["one", "two", "three"]
    assert format_score(score) == "90% Match (Excellent): one; two"


def test_ranking_to_dataframe(viewer, pool):
    ranked = MatchingAlgorithm().rank_users(viewer, pool)
    df = ranking_to_dataframe(ranked)

    assert list(df["rank"]) == [1, 2, 3]
    assert list(df["id"]) == [r.profile.id for r in ranked]
    assert df.loc[0, "id"] == "a"
    assert df.loc[0, "name"] == "Ann"
    assert df.loc[0, "hobbies"] == 1.0
    assert "reasons" in df.columns
    assert df["overall"].is_monotonic_decreasing


def test_ranking_to_dataframe_empty():
    df = ranking_to_dataframe([])
    assert df.empty
    assert "distance" in df.columns


def test_distribution_stats():
    stats = compute_score_distribution_stats([0.2, 0.4, 0.6, 0.8])
    assert stats.mean == pytest.approx(0.5)
    assert stats.min == 0.2
    assert stats.max == 0.8
    assert stats.quantiles["p50"] == pytest.approx(0.5)
    assert set(stats.to_dict()["quantiles"]) == {"p10", "p25", "p50", "p75", "p90"}


def test_distribution_stats_empty():
    with pytest.raises(ValueError):
        compute_score_distribution_stats([])


def test_ranking_agreement_identical(viewer, pool):
    ranked = MatchingAlgorithm().rank_users(viewer, pool)
    agreement = ranking_agreement(ranked, ranked, top_k=2)
    assert agreement.n_common == 3
    assert agreement.spearman == pytest.approx(1.0)
    assert agreement.top_k_jaccard == 1.0


def test_ranking_agreement_reversed(viewer, pool):
    ranked = MatchingAlgorithm().rank_users(viewer, pool)
    agreement = ranking_agreement(ranked, list(reversed(ranked)), top_k=1)
    assert agreement.spearman == pytest.approx(-1.0)
    assert agreement.top_k_jaccard == 0.0


def test_ranking_agreement_under_different_weights(viewer, pool):
    algorithm = MatchingAlgorithm()
    diet_first = ImportanceWeights(hobbies=0, passions=0, languages=0,
                                   personality=0, lifestyle=0, dietary=1)
    picky = Profile(id="me", age=30, hobbies=["Chess", "Art"], passions=["Music"],
                    languages=["English"], dietary_preference="Vegan",
                    preferences=MatchPreferences(importance_weights=diet_first))

    agreement = ranking_agreement(
        algorithm.rank_users(viewer, pool),
        algorithm.rank_users(picky, pool)
    )
    assert agreement.n_common == 3
    assert -1.0 <= agreement.spearman <= 1.0


def test_ranking_report(viewer, pool, tmp_path):
    ranked = MatchingAlgorithm().rank_users(viewer, pool)
    report = create_ranking_report("me", ranked)

    assert report.n_candidates == 3
    assert sum(report.label_counts.values()) == 3
    counts = list(report.reason_counts.values())
    assert counts == sorted(counts, reverse=True)
    assert "Ranking Report: me" in report.summary()

    path = tmp_path / "report.json"
    report.save(str(path))
    saved = json.loads(path.read_text())
    assert saved["user_id"] == "me"
    assert "distribution_stats" in saved


def test_ranking_report_empty():
    report = create_ranking_report("me", [])
    assert report.distribution_stats is None
    assert "distribution_stats" not in report.to_dict()
