"""
Priority ranking service.

Orchestrates the priority pipeline for a creator's ideas:

    Ideas (+ max votes) → Weight → Signals (one batch query) → Score → Sort

Operations:
- get_priority_weight / set_priority_weight: the creator's blend weight
- get_ranked_ideas: every idea with a given status, highest priority first
- get_priority_for_idea: the breakdown for one idea (owner-checked)

Each call works from its own, non-transactional snapshot of reads. Store
errors propagate to the caller unchanged; this service does not retry.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from idea_priority.config import DEFAULT_PRIORITY_WEIGHT
from idea_priority.models.idea import IdeaStatus
from idea_priority.models.priority import PriorityScore, RankedIdea
from idea_priority.scoring.scorer import clamp_weight, max_votes_of, score_idea
from idea_priority.storage.base import IdeaRepository, SignalRepository, WeightRepository

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PriorityService:
    """
    Ranks a creator's ideas by blending votes with opportunity signals.

    Repositories are injected so the arithmetic can be exercised without a
    live store.

    Args:
        ideas: Idea store.
        weights: Creator weight store.
        signals: Opportunity signal store.
        clock: Callable returning the current time (for testing).
    """

    def __init__(
        self,
        ideas: IdeaRepository,
        weights: WeightRepository,
        signals: SignalRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.ideas = ideas
        self.weights = weights
        self.signals = signals
        self.clock = clock

    # =========================================================================
    # Priority Weight
    # =========================================================================

    def get_priority_weight(self, creator_id: int) -> int:
        """
        Return the creator's priority weight.

        Falls back to DEFAULT_PRIORITY_WEIGHT when none is stored. Stored
        values written outside this service are clamped on the way out.
        """
        weight = self.weights.get_weight(creator_id)
        if weight is None:
            return DEFAULT_PRIORITY_WEIGHT
        return clamp_weight(weight)

    def set_priority_weight(self, creator_id: int, weight: int) -> None:
        """Clamp the weight into range and persist it. Never rejects input."""
        clamped = clamp_weight(weight)
        if clamped != weight:
            logger.debug("Clamped priority weight %s -> %s for creator %s", weight, clamped, creator_id)
        self.weights.set_weight(creator_id, clamped)

    # =========================================================================
    # Ranking
    # =========================================================================

    def get_ranked_ideas(
        self,
        creator_id: int,
        status: str = IdeaStatus.APPROVED,
    ) -> List[RankedIdea]:
        """
        Rank a creator's ideas with the given status.

        Votes are normalized within the fetched set. Returns an empty list,
        without further queries, when the creator has no matching ideas.
        Ties keep the store's order (votes descending).

        Args:
            creator_id: Creator whose ideas to rank.
            status: Status filter ("approved" or "completed").

        Returns:
            RankedIdea list sorted by priority score, highest first.
        """
        ideas = self.ideas.list_ideas(creator_id, status)
        if not ideas:
            return []

        max_votes = max_votes_of(ideas)
        weight = self.get_priority_weight(creator_id)
        signals = self.signals.get_signals({idea.id for idea in ideas})
        now = self.clock()

        results = []
        for idea in ideas:
            signal = signals.get(idea.id)
            priority = score_idea(idea, signal, max_votes, weight, now)
            results.append(RankedIdea(idea=idea, priority=priority, signal=signal))

        results.sort(key=lambda r: r.priority.priority_score, reverse=True)

        logger.debug(
            "Ranked %d %s ideas for creator %s (weight=%d, signals=%d)",
            len(results), status, creator_id, weight, len(signals),
        )
        return results

    def get_priority_for_idea(self, idea_id: int, creator_id: int) -> Optional[PriorityScore]:
        """
        Compute the priority breakdown for a single idea.

        Returns None when the idea does not exist or belongs to another
        creator. Votes are normalized against the creator's approved ideas
        whatever the idea's own status.

        Args:
            idea_id: Idea to score.
            creator_id: Creator expected to own it.

        Returns:
            PriorityScore, or None if not found.
        """
        idea = self.ideas.get_idea(idea_id, creator_id)
        if idea is None:
            return None

        # Approved ideas are the baseline even for completed ones
        siblings = self.ideas.list_ideas(creator_id, IdeaStatus.APPROVED)
        max_votes = max_votes_of(siblings)

        signal = self.signals.get_signal(idea_id)
        weight = self.get_priority_weight(creator_id)

        return score_idea(idea, signal, max_votes, weight, self.clock())
