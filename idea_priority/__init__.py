"""
Idea Priority - ranks fan-suggested ideas for a creator.

Blends community votes with an externally computed opportunity signal
(demand vs. competition for the idea's topic) into one priority score.
"""

from idea_priority.ranking import PriorityService
from idea_priority.models import Idea, OpportunitySignal, PriorityScore, RankedIdea

__version__ = "1.0.0"

__all__ = [
    "PriorityService",
    "Idea",
    "OpportunitySignal",
    "PriorityScore",
    "RankedIdea",
]
