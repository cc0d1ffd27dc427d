"""
Pytest Configuration and Fixtures

Shared fixtures for all tests:
- A fixed "now" so staleness checks are deterministic
- In-memory repositories and a PriorityService wired to them
"""

import pytest
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from idea_priority.models.idea import Idea, IdeaStatus
from idea_priority.models.signal import OpportunitySignal
from idea_priority.ranking.service import PriorityService
from idea_priority.storage.memory import (
    InMemoryIdeaRepository,
    InMemorySignalRepository,
    InMemoryWeightRepository,
)


NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)

CREATOR_ID = 1
OTHER_CREATOR_ID = 2


def make_idea(id: int, votes: int, status: str = IdeaStatus.APPROVED,
              creator_id: int = CREATOR_ID) -> Idea:
    """Build an idea with a readable title."""
    return Idea(id=id, creator_id=creator_id, votes=votes, status=status, title=f"Idea {id}")


def make_signal(idea_id: int, score, hours_old: float = 1.0) -> OpportunitySignal:
    """Build a signal last refreshed hours_old hours before NOW."""
    return OpportunitySignal(
        idea_id=idea_id,
        opportunity_score=score,
        updated_at=NOW - timedelta(hours=hours_old),
    )


@pytest.fixture
def now():
    """Fixed current time."""
    return NOW


@pytest.fixture
def idea_repo():
    return InMemoryIdeaRepository()


@pytest.fixture
def weight_repo():
    return InMemoryWeightRepository()


@pytest.fixture
def signal_repo():
    return InMemorySignalRepository()


@pytest.fixture
def service(idea_repo, weight_repo, signal_repo):
    """PriorityService over empty in-memory stores with a frozen clock."""
    return PriorityService(idea_repo, weight_repo, signal_repo, clock=lambda: NOW)
