"""
Data models module.

Defines ideas, opportunity signals and derived priority records.
"""

from idea_priority.models.idea import Idea, IdeaStatus, RANKABLE_STATUSES, parse_timestamp
from idea_priority.models.signal import OpportunitySignal
from idea_priority.models.priority import PriorityScore, RankedIdea

__all__ = [
    "Idea",
    "IdeaStatus",
    "RANKABLE_STATUSES",
    "parse_timestamp",
    "OpportunitySignal",
    "PriorityScore",
    "RankedIdea",
]
