"""
Command-line runner for the compatibility scorer.

Usage:
    python -m tribes_matching.run --profiles data/sample_profiles.json --user-id user-1
    python -m tribes_matching.run --profiles data/sample_profiles.json \
        --user-id user-1 --candidate-id test-1

With --candidate-id the pair is scored and the score printed as JSON.
Otherwise every other profile in the file is ranked against the user:
1. Load configuration and profiles
2. Validate profiles (issues are logged, not fatal)
3. Rank candidates
4. Log a ranking report
5. Print or write the ranking (JSON or CSV)
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Any, List, Optional, TYPE_CHECKING

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from .scoring import RankedProfile

DEFAULT_CONFIG_PATH = "configs/config.yaml"


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def _load_run_config(config_path: Optional[str]) -> Dict[str, Any]:
    from .configs import load_config, validate_config

    if config_path is None:
        if not Path(DEFAULT_CONFIG_PATH).exists():
            logger.info("No configuration file found, using defaults")
            return {}
        config_path = DEFAULT_CONFIG_PATH

    config = load_config(config_path)
    for issue in validate_config(config):
        logger.warning(f"Config issue: {issue}")
    return config


def score_pair(
    profiles_path: str,
    user_id: str,
    candidate_id: str,
    config: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Score one pair of profiles from a profiles file.

    Args:
        profiles_path: Path to a JSON or CSV profiles file
        user_id: Id of the first profile (supplies importance weights)
        candidate_id: Id of the second profile (supplies the distance)
        config: Configuration dictionary

    Returns:
        Score dictionary with an added 'summary' line
    """
    from .profiles import load_profiles, find_profile, validate_profile
    from .scoring import create_algorithm_from_config
    from .evaluation import format_score

    profiles = load_profiles(profiles_path)
    user = find_profile(profiles, user_id)
    candidate = find_profile(profiles, candidate_id)

    for profile in (user, candidate):
        for issue in validate_profile(profile):
            logger.warning(f"Profile issue: {issue}")

    algorithm = create_algorithm_from_config(config)
    score = algorithm.calculate_compatibility(user, candidate)

    result = score.to_dict()
    result["summary"] = format_score(score)
    logger.info(f"{user_id} -> {candidate_id}: {result['summary']}")
    return result


def rank_candidates(
    profiles_path: str,
    user_id: str,
    config: Dict[str, Any],
    top_k: Optional[int] = None,
    n_jobs: Optional[int] = None
) -> List["RankedProfile"]:
    """
    Rank every profile in a file against one user.

    Args:
        profiles_path: Path to a JSON or CSV profiles file
        user_id: Id of the user whose matches are ranked
        config: Configuration dictionary
        top_k: Keep only the best top_k (overrides ranking.top_k)
        n_jobs: Worker count (overrides ranking.n_jobs)

    Returns:
        RankedProfile list, best match first
    """
    from .configs import get_config_value
    from .profiles import load_profiles, find_profile, validate_profile
    from .scoring import create_algorithm_from_config
    from .evaluation import create_ranking_report

    profiles = load_profiles(profiles_path)
    user = find_profile(profiles, user_id)

    for profile in profiles:
        for issue in validate_profile(profile):
            logger.warning(f"Profile issue: {issue}")

    algorithm = create_algorithm_from_config(config)
    ranked = algorithm.rank_users(
        user,
        profiles,
        n_jobs=n_jobs if n_jobs is not None else get_config_value(config, "ranking.n_jobs", 1),
        exclude_self=get_config_value(config, "ranking.exclude_self", True)
    )

    report = create_ranking_report(user_id, ranked)
    logger.info("\n" + report.summary())

    limit = top_k if top_k is not None else get_config_value(config, "ranking.top_k")
    if limit is not None:
        ranked = ranked[:limit]

    return ranked


def _write_ranking(ranked: List["RankedProfile"], output: Optional[str], output_format: str) -> None:
    """Print or write the ranking as JSON or CSV."""
    from .evaluation import ranking_to_dataframe

    if output_format == "csv":
        df = ranking_to_dataframe(ranked)
        if output:
            df.to_csv(output, index=False)
            logger.info(f"Saved ranking to {output}")
        else:
            print(df.to_csv(index=False), end="")
        return

    text = json.dumps([item.to_dict() for item in ranked], indent=2)
    if output:
        with open(output, "w") as f:
            f.write(text)
        logger.info(f"Saved ranking to {output}")
    else:
        print(text)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the scorer."""
    parser = argparse.ArgumentParser(
        description="Score or rank dating profiles by compatibility"
    )
    parser.add_argument(
        "--profiles",
        type=str,
        required=True,
        help="Path to a JSON or CSV profiles file"
    )
    parser.add_argument(
        "--user-id",
        type=str,
        required=True,
        help="Id of the user to score or rank for"
    )
    parser.add_argument(
        "--candidate-id",
        type=str,
        default=None,
        help="Score only this candidate instead of ranking all profiles"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH} if present)"
    )
    parser.add_argument(
        "--top-k",
        type=int,
        default=None,
        help="Keep only the best K candidates (overrides config)"
    )
    parser.add_argument(
        "--n-jobs",
        type=int,
        default=None,
        help="Parallel workers for ranking (overrides config)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the result to this file instead of stdout"
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "csv"],
        default=None,
        help="Ranking output format (overrides config)"
    )

    args = parser.parse_args(argv)

    from .configs import get_config_value

    try:
        config = _load_run_config(args.config)
        setup_logging(get_config_value(config, "global.log_level") or "INFO")

        if args.candidate_id is not None:
            result = score_pair(args.profiles, args.user_id, args.candidate_id, config)
            text = json.dumps(result, indent=2)
            if args.output:
                with open(args.output, "w") as f:
                    f.write(text)
                logger.info(f"Saved score to {args.output}")
            else:
                print(text)
            return 0

        ranked = rank_candidates(
            args.profiles, args.user_id, config,
            top_k=args.top_k, n_jobs=args.n_jobs
        )
        output_format = args.format or get_config_value(config, "output.format") or "json"
        _write_ranking(ranked, args.output, output_format)
        return 0
    except Exception as e:
        logger.exception(f"Scoring failed with error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
