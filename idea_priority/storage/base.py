"""
Base storage abstractions for Idea Priority.

Defines the repository interfaces the priority service reads through. Each
store (ideas, creator weights, opportunity signals) gets its own interface
so backends can be swapped independently (Airtable, in-memory, SQL, ...).

Implementations must let backing-store failures propagate: "not found" is
a None/empty return, never an exception, and a failed request is never
turned into an empty result.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from idea_priority.models.idea import Idea
from idea_priority.models.signal import OpportunitySignal


class _Repository(ABC):
    """Common naming behavior for repositories."""

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the name of this backend.

        Used for logging and debugging.
        """
        pass

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class IdeaRepository(_Repository):
    """Read access to creators' ideas."""

    @abstractmethod
    def list_ideas(self, creator_id: int, status: str) -> List[Idea]:
        """
        List a creator's ideas with the given status.

        Args:
            creator_id: Owning creator.
            status: Lifecycle status to filter on.

        Returns:
            Ideas sorted by votes descending (empty list if none).
        """
        pass

    @abstractmethod
    def get_idea(self, idea_id: int, creator_id: int) -> Optional[Idea]:
        """
        Fetch one idea owned by a creator.

        Returns None if the idea does not exist or belongs to someone else.
        """
        pass


class WeightRepository(_Repository):
    """Read/write access to the per-creator priority weight."""

    @abstractmethod
    def get_weight(self, creator_id: int) -> Optional[int]:
        """Return the stored weight, or None when absent."""
        pass

    @abstractmethod
    def set_weight(self, creator_id: int, weight: int) -> None:
        """Persist a weight (the caller clamps it first)."""
        pass


class SignalRepository(_Repository):
    """Read access to externally computed opportunity signals."""

    @abstractmethod
    def get_signal(self, idea_id: int) -> Optional[OpportunitySignal]:
        """Return the signal for one idea, or None."""
        pass

    @abstractmethod
    def get_signals(self, idea_ids: Iterable[int]) -> Dict[int, OpportunitySignal]:
        """
        Return signals for a set of ideas in a single query.

        Ideas without a signal are absent from the mapping. An empty id set
        returns an empty mapping without querying.

        Args:
            idea_ids: Ideas to look up.

        Returns:
            Mapping of idea id -> OpportunitySignal.
        """
        pass
