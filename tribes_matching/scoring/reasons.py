"""Human-readable reasons explaining a compatibility breakdown."""

from typing import Dict, List, Tuple

# (dimension, threshold, reason). A reason fires when the score is
# strictly above its threshold; a threshold of None means "exactly 1".
# Order is the output order.
REASON_RULES: Tuple[Tuple[str, object, str], ...] = (
    ("hobbies", 0.7, "You share many hobbies"),
    ("passions", 0.7, "You have similar passions"),
    ("languages", 0.5, "You speak common languages"),
    ("personality", 0.8, "Your personalities complement each other"),
    ("lifestyle", 0.8, "You have similar lifestyles"),
    ("dietary", None, "You have the same dietary preferences"),
    ("age", 0.8, "You're in similar age ranges"),
    ("distance", 0.8, "You're close by"),
)

FALLBACK_REASON = "You might have interesting differences to explore"


def _fires(score: float, threshold) -> bool:
    if threshold is None:
        return score == 1
    return score > threshold


def generate_reasons(breakdown: Dict[str, float]) -> List[str]:
    """
    Build the list of reasons for a breakdown.

    Every qualifying reason is included, in fixed order (not sorted by
    score). When nothing qualifies, the single fallback reason is returned.

    Args:
        breakdown: Per-dimension scores

    Returns:
        Non-empty list of reason strings
    """
    reasons = [
        reason
        for dimension, threshold, reason in REASON_RULES
        if _fires(breakdown[dimension], threshold)
    ]

    if not reasons:
        reasons.append(FALLBACK_REASON)

    return reasons
