"""
In-memory repositories for testing and development.

Use these when Airtable is not configured. Data is stored in memory and
lost when the process ends. Every read is counted in ``calls`` so callers
can check how many queries an operation issued.
"""

from collections import Counter
from typing import Dict, Iterable, List, Optional

from idea_priority.models.idea import Idea
from idea_priority.models.signal import OpportunitySignal
from idea_priority.storage.base import IdeaRepository, SignalRepository, WeightRepository


class InMemoryIdeaRepository(IdeaRepository):
    """Ideas kept in a dict keyed by idea id."""

    def __init__(self, ideas: Iterable[Idea] = ()):
        self._ideas: Dict[int, Idea] = {}
        self.calls: Counter = Counter()
        self.add(*ideas)

    @property
    def name(self) -> str:
        return "memory"

    def add(self, *ideas: Idea) -> None:
        for idea in ideas:
            self._ideas[idea.id] = idea

    def list_ideas(self, creator_id: int, status: str) -> List[Idea]:
        self.calls["list_ideas"] += 1
        matching = [
            idea for idea in self._ideas.values()
            if idea.creator_id == creator_id and idea.status == status
        ]
        return sorted(matching, key=lambda x: x.votes, reverse=True)

    def get_idea(self, idea_id: int, creator_id: int) -> Optional[Idea]:
        self.calls["get_idea"] += 1
        idea = self._ideas.get(idea_id)
        if idea is None or idea.creator_id != creator_id:
            return None
        return idea

    def clear(self) -> None:
        self._ideas.clear()
        self.calls.clear()


class InMemoryWeightRepository(WeightRepository):
    """Creator weights kept in a dict; raw values are stored as given."""

    def __init__(self, weights: Optional[Dict[int, Optional[int]]] = None):
        self._weights: Dict[int, Optional[int]] = dict(weights or {})
        self.calls: Counter = Counter()

    @property
    def name(self) -> str:
        return "memory"

    def get_weight(self, creator_id: int) -> Optional[int]:
        self.calls["get_weight"] += 1
        return self._weights.get(creator_id)

    def set_weight(self, creator_id: int, weight: int) -> None:
        self.calls["set_weight"] += 1
        self._weights[creator_id] = weight


class InMemorySignalRepository(SignalRepository):
    """Opportunity signals kept in a dict keyed by idea id."""

    def __init__(self, signals: Iterable[OpportunitySignal] = ()):
        self._signals: Dict[int, OpportunitySignal] = {s.idea_id: s for s in signals}
        self.calls: Counter = Counter()

    @property
    def name(self) -> str:
        return "memory"

    def add(self, *signals: OpportunitySignal) -> None:
        for signal in signals:
            self._signals[signal.idea_id] = signal

    def get_signal(self, idea_id: int) -> Optional[OpportunitySignal]:
        self.calls["get_signal"] += 1
        return self._signals.get(idea_id)

    def get_signals(self, idea_ids: Iterable[int]) -> Dict[int, OpportunitySignal]:
        ids = set(idea_ids)
        if not ids:
            return {}
        self.calls["get_signals"] += 1
        return {i: self._signals[i] for i in ids if i in self._signals}
