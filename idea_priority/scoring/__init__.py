"""
Scoring module.

Normalizes votes, decays stale opportunity signals and blends both into a
priority score.
"""

from idea_priority.scoring.scorer import (
    MAX_SCORE,
    round_half_up,
    normalize_votes,
    max_votes_of,
    clamp_weight,
    is_stale,
    effective_opportunity_score,
    combine_priority,
    score_idea,
)

__all__ = [
    "MAX_SCORE",
    "round_half_up",
    "normalize_votes",
    "max_votes_of",
    "clamp_weight",
    "is_stale",
    "effective_opportunity_score",
    "combine_priority",
    "score_idea",
]
