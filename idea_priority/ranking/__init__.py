"""
Ranking module.

Assembles ranked idea lists and single-idea priority lookups.
"""

from idea_priority.ranking.service import PriorityService, utc_now

__all__ = [
    "PriorityService",
    "utc_now",
]
