"""
Priority scoring logic for Idea Priority.

Provides pure, side-effect-free functions to:
1. Normalize a vote count against the busiest idea in a comparison set
2. Decay opportunity scores whose analysis has gone stale
3. Blend vote and opportunity scores with a creator's priority weight

All functions are deterministic and do not touch any store. Arithmetic is
done in Decimal and rounded half-up, so 70.5 becomes 71 (the builtin round()
would give 70).
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from idea_priority.config import (
    MIN_PRIORITY_WEIGHT,
    MAX_PRIORITY_WEIGHT,
    STALE_AFTER_HOURS,
    STALE_DECAY_FACTOR,
)
from idea_priority.models.idea import Idea
from idea_priority.models.priority import PriorityScore
from idea_priority.models.signal import OpportunitySignal


# Upper bound of every 0-100 score
MAX_SCORE: int = 100


def round_half_up(value) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# =============================================================================
# Vote Normalization
# =============================================================================

def normalize_votes(votes: int, max_votes: int) -> int:
    """
    Map a vote count to 0-100 relative to the comparison set's maximum.

    Formula:
        vote_score = round(votes / max_votes * 100)

    A max_votes of 0 yields 0 instead of dividing by zero. Callers floor
    max_votes at 1. The result is capped at 100, which only matters when
    the idea itself is outside the comparison set (see get_priority_for_idea).

    Args:
        votes: Vote count of the idea (>= 0).
        max_votes: Highest vote count in the comparison set.

    Returns:
        Vote score (0 to 100).
    """
    if max_votes == 0:
        return 0
    score = round_half_up(Decimal(votes) / Decimal(max_votes) * MAX_SCORE)
    return min(score, MAX_SCORE)


def max_votes_of(ideas) -> int:
    """Highest vote count among ideas, floored at 1."""
    return max([idea.votes for idea in ideas] + [1])


# =============================================================================
# Priority Weight
# =============================================================================

def clamp_weight(weight: int) -> int:
    """Clamp a priority weight into [MIN_PRIORITY_WEIGHT, MAX_PRIORITY_WEIGHT]."""
    return max(MIN_PRIORITY_WEIGHT, min(MAX_PRIORITY_WEIGHT, int(weight)))


# =============================================================================
# Staleness Decay
# =============================================================================

def is_stale(now: datetime, updated_at: Optional[datetime]) -> bool:
    """
    Check whether an opportunity signal is older than STALE_AFTER_HOURS.

    A signal with no timestamp is never stale. Naive timestamps are read
    as UTC when compared against an aware "now".

    Args:
        now: Current time.
        updated_at: When the signal was last refreshed.

    Returns:
        True if the signal is strictly older than the threshold.
    """
    if updated_at is None:
        return False

    if now.tzinfo is not None and updated_at.tzinfo is None:
        updated_at = updated_at.replace(tzinfo=timezone.utc)
    elif now.tzinfo is None and updated_at.tzinfo is not None:
        now = now.replace(tzinfo=timezone.utc)

    return (now - updated_at) > timedelta(hours=STALE_AFTER_HOURS)


def effective_opportunity_score(
    opportunity_score: Optional[int],
    stale: bool,
) -> Optional[int]:
    """
    Apply staleness decay to an opportunity score.

    Returns None when there is no score, round(score * STALE_DECAY_FACTOR)
    when stale, and the score unchanged otherwise.
    """
    if opportunity_score is None:
        return None
    if not stale:
        return opportunity_score
    return round_half_up(Decimal(opportunity_score) * Decimal(str(STALE_DECAY_FACTOR)))


# =============================================================================
# Priority Blend
# =============================================================================

def combine_priority(
    vote_score: int,
    effective_opportunity: Optional[int],
    weight: int,
) -> int:
    """
    Blend vote and opportunity scores into one priority score.

    Formula:
        w = weight / 100
        priority = round(w * vote_score + (1 - w) * effective_opportunity)

    Without an opportunity score the vote score is returned unchanged, so
    ideas rank purely by votes until the analysis has run. Inputs are
    already rounded integers; rounding happens once more here.

    Args:
        vote_score: Normalized vote score (0-100).
        effective_opportunity: Decayed opportunity score (0-100) or None.
        weight: Creator priority weight (percent given to votes).

    Returns:
        Priority score (0 to 100).
    """
    if effective_opportunity is None:
        return vote_score

    w = Decimal(weight) / 100
    blended = w * vote_score + (1 - w) * effective_opportunity
    return round_half_up(blended)


def score_idea(
    idea: Idea,
    signal: Optional[OpportunitySignal],
    max_votes: int,
    weight: int,
    now: datetime,
) -> PriorityScore:
    """
    Run the full normalize -> decay -> blend pipeline for one idea.

    This is a pure function shared by the batch and single-idea lookups.

    Args:
        idea: The idea to score.
        signal: Its opportunity signal, or None.
        max_votes: Comparison-set maximum (already floored at 1).
        weight: Creator priority weight.
        now: Current time for the staleness check.

    Returns:
        PriorityScore breakdown.
    """
    vote_score = normalize_votes(idea.votes, max_votes)

    opportunity_score = signal.opportunity_score if signal else None
    stale = is_stale(now, signal.updated_at) if signal else False
    effective = effective_opportunity_score(opportunity_score, stale)

    return PriorityScore(
        idea_id=idea.id,
        vote_score=vote_score,
        opportunity_score=opportunity_score,
        effective_opportunity_score=effective,
        priority_score=combine_priority(vote_score, effective, weight),
        has_external_signal=opportunity_score is not None,
        is_stale=stale,
    )
