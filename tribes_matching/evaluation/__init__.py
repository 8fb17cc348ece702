"""Evaluation and display helpers for compatibility scores."""

from .metrics import (
    score_percentage,
    score_label,
    score_tier,
    top_reasons,
    format_score,
    ranking_to_dataframe,
    compute_score_distribution_stats,
    ranking_agreement,
    RankingReport,
    create_ranking_report
)

__all__ = [
    "score_percentage",
    "score_label",
    "score_tier",
    "top_reasons",
    "format_score",
    "ranking_to_dataframe",
    "compute_score_distribution_stats",
    "ranking_agreement",
    "RankingReport",
    "create_ranking_report"
]
