"""
Reporting helpers for compatibility scores and rankings.

Covers:
1. Display helpers (percentage, label, tier, top reasons) matching the
   app's match card
2. Ranking tables as pandas DataFrames
3. Score distribution analysis over a ranking
4. Agreement between two rankings of the same candidates (e.g. the same
   pool ranked under different importance weights)
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Sequence
import json

import numpy as np
import pandas as pd
from scipy.stats import spearmanr

from ..scoring.compatibility import (
    CompatibilityScore,
    RankedProfile,
    BREAKDOWN_DIMENSIONS,
)

logger = logging.getLogger(__name__)

# (minimum score, label), checked in order
SCORE_LABELS = (
    (0.9, "Excellent"),
    (0.8, "Great"),
    (0.7, "Good"),
    (0.6, "Fair"),
)
LOWEST_LABEL = "Low"

# (minimum score, tier), checked in order
SCORE_TIERS = (
    (0.8, "high"),
    (0.6, "medium"),
)
LOWEST_TIER = "low"


def score_percentage(value: float) -> int:
    """Score as a whole percentage, halves rounded up."""
    return int(math.floor(value * 100 + 0.5))


def score_label(value: float) -> str:
    for minimum, label in SCORE_LABELS:
        if value >= minimum:
            return label
    return LOWEST_LABEL


def score_tier(value: float) -> str:
    for minimum, tier in SCORE_TIERS:
        if value >= minimum:
            return tier
    return LOWEST_TIER


def top_reasons(score: CompatibilityScore, limit: int = 2) -> List[str]:
    """First `limit` reasons, the ones shown on a match card."""
    return list(score.reasons[:limit])


def format_score(score: CompatibilityScore) -> str:
    """One-line summary, e.g. '90% Match (Excellent): You share many hobbies'."""
    value = score.overall
    reasons = "; ".join(top_reasons(score))
    return f"{score_percentage(value)}% Match ({score_label(value)}): {reasons}"


def ranking_to_dataframe(ranked: Sequence[RankedProfile]) -> pd.DataFrame:
    """
    Tabulate a ranking, one row per candidate.

    Args:
        ranked: Output of MatchingAlgorithm.rank_users

    Returns:
        DataFrame with rank, id, name, overall, percentage, label, the
        eight breakdown columns and the joined reasons
    """
    columns = (["rank", "id", "name", "overall", "percentage", "label"]
               + list(BREAKDOWN_DIMENSIONS) + ["reasons"])
    rows = []
    for rank, item in enumerate(ranked, start=1):
        score = item.compatibility
        row = {
            "rank": rank,
            "id": item.profile.id,
            "name": item.profile.name,
            "overall": score.overall,
            "percentage": score_percentage(score.overall),
            "label": score_label(score.overall),
        }
        row.update(score.breakdown.to_dict())
        row["reasons"] = "; ".join(score.reasons)
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 0.2, "p50": 0.5, "p90": 0.8}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class RankingAgreement:
    """How closely two rankings of the same candidates agree."""
    n_common: int
    spearman: float
    top_k: int
    top_k_jaccard: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_common": int(self.n_common),
            "spearman": float(self.spearman),
            "top_k": int(self.top_k),
            "top_k_jaccard": float(self.top_k_jaccard)
        }


@dataclass
class RankingReport:
    """
    Summary of one ranking run.

    Contains the score distribution, how many candidates fall in each
    label, and the most common reasons.
    """
    user_id: str
    n_candidates: int
    distribution_stats: Optional[ScoreDistributionStats]
    label_counts: Dict[str, int] = field(default_factory=dict)
    reason_counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "user_id": self.user_id,
            "n_candidates": self.n_candidates,
            "label_counts": dict(self.label_counts),
            "reason_counts": dict(self.reason_counts)
        }
        if self.distribution_stats:
            result["distribution_stats"] = self.distribution_stats.to_dict()
        return result

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved ranking report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        lines = [
            f"Ranking Report: {self.user_id}",
            "=" * 50,
            f"Candidates: {self.n_candidates}",
        ]

        if self.distribution_stats:
            lines.extend([
                "",
                "Score Distribution:",
                f"  Mean: {self.distribution_stats.mean:.4f}",
                f"  Std:  {self.distribution_stats.std:.4f}",
                f"  Min:  {self.distribution_stats.min:.4f}",
                f"  Max:  {self.distribution_stats.max:.4f}",
            ])
            for q_name, q_value in self.distribution_stats.quantiles.items():
                lines.append(f"  {q_name}: {q_value:.4f}")

        if self.label_counts:
            lines.extend(["", "Labels:"])
            for label, count in self.label_counts.items():
                lines.append(f"  {label}: {count}")

        if self.reason_counts:
            lines.extend(["", "Reasons:"])
            for reason, count in self.reason_counts.items():
                lines.append(f"  {reason}: {count}")

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: Sequence[float],
    quantiles: Sequence[float] = (0.1, 0.25, 0.5, 0.75, 0.9)
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for scores.

    Args:
        scores: Overall compatibility scores
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance

    Raises:
        ValueError: If scores is empty
    """
    values = np.asarray(scores, dtype=float)
    if values.size == 0:
        raise ValueError("Cannot compute distribution stats for an empty score list")

    quantile_dict = {
        f"p{int(q * 100)}": float(np.percentile(values, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        mean=float(np.mean(values)),
        std=float(np.std(values)),
        min=float(np.min(values)),
        max=float(np.max(values)),
        quantiles=quantile_dict
    )


def ranking_agreement(
    ranking_a: Sequence[RankedProfile],
    ranking_b: Sequence[RankedProfile],
    top_k: int = 5
) -> RankingAgreement:
    """
    Compare two rankings over the candidates they share.

    Args:
        ranking_a: First ranking
        ranking_b: Second ranking
        top_k: Number of leading candidates for the Jaccard overlap

    Returns:
        RankingAgreement with Spearman correlation of positions (over
        common ids) and Jaccard overlap of the two top-k id sets
    """
    positions_a = {item.profile.id: i for i, item in enumerate(ranking_a)}
    positions_b = {item.profile.id: i for i, item in enumerate(ranking_b)}
    common = [pid for pid in positions_a if pid in positions_b]

    if len(common) > 1:
        correlation, _ = spearmanr(
            [positions_a[pid] for pid in common],
            [positions_b[pid] for pid in common]
        )
        correlation = float(correlation)
    else:
        logger.warning("Need at least 2 common candidates for rank correlation")
        correlation = 1.0

    top_a = {item.profile.id for item in ranking_a[:top_k]}
    top_b = {item.profile.id for item in ranking_b[:top_k]}
    union = len(top_a | top_b)
    jaccard = len(top_a & top_b) / union if union > 0 else 1.0

    return RankingAgreement(
        n_common=len(common),
        spearman=correlation,
        top_k=top_k,
        top_k_jaccard=jaccard
    )


def create_ranking_report(user_id: str, ranked: Sequence[RankedProfile]) -> RankingReport:
    """
    Create a ranking report.

    Args:
        user_id: Id of the user the ranking was computed for
        ranked: Output of MatchingAlgorithm.rank_users

    Returns:
        RankingReport instance
    """
    scores = [item.compatibility.overall for item in ranked]
    stats = compute_score_distribution_stats(scores) if scores else None

    label_counts: Dict[str, int] = {}
    reason_counts: Dict[str, int] = {}
    for item in ranked:
        label = score_label(item.compatibility.overall)
        label_counts[label] = label_counts.get(label, 0) + 1
        for reason in item.compatibility.reasons:
            reason_counts[reason] = reason_counts.get(reason, 0) + 1

    reason_counts = dict(sorted(reason_counts.items(), key=lambda kv: kv[1], reverse=True))

    return RankingReport(
        user_id=user_id,
        n_candidates=len(ranked),
        distribution_stats=stats,
        label_counts=label_counts,
        reason_counts=reason_counts
    )
