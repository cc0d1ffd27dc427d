"""
Derived priority records.

These are computed on every read and never persisted.
"""

from dataclasses import dataclass, asdict
from typing import Optional

from idea_priority.models.idea import Idea
from idea_priority.models.signal import OpportunitySignal


@dataclass
class PriorityScore:
    """
    Priority breakdown for a single idea.

    Attributes:
        idea_id: The scored idea.
        vote_score: Votes normalized against the comparison set (0-100).
        opportunity_score: Raw opportunity score, None without a signal.
        effective_opportunity_score: Opportunity score after staleness decay.
        priority_score: Final blended ranking value (0-100).
        has_external_signal: Whether an opportunity score was available.
        is_stale: Whether the signal is older than the staleness threshold.
    """

    idea_id: int
    vote_score: int
    opportunity_score: Optional[int]
    effective_opportunity_score: Optional[int]
    priority_score: int
    has_external_signal: bool
    is_stale: bool

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class RankedIdea:
    """An idea together with its priority breakdown and signal (if any)."""

    idea: Idea
    priority: PriorityScore
    signal: Optional[OpportunitySignal] = None

    def to_dict(self) -> dict:
        return {
            "idea": self.idea.to_dict(),
            "priority": self.priority.to_dict(),
            "signal": self.signal.to_dict() if self.signal else None,
        }

    def __str__(self) -> str:
        return f"[{self.priority.priority_score:3d}] {self.idea}"
