"""
Storage module.

Repository interfaces for ideas, creator weights and opportunity signals,
with Airtable and in-memory backends.
"""

from typing import Tuple

from idea_priority.config import AIRTABLE_API_KEY
from idea_priority.storage.base import IdeaRepository, WeightRepository, SignalRepository
from idea_priority.storage.airtable import (
    AirtableClient,
    AirtableIdeaRepository,
    AirtableWeightRepository,
    AirtableSignalRepository,
)
from idea_priority.storage.memory import (
    InMemoryIdeaRepository,
    InMemoryWeightRepository,
    InMemorySignalRepository,
)


def create_repositories() -> Tuple[IdeaRepository, WeightRepository, SignalRepository]:
    """Airtable repositories when an API key is configured, in-memory otherwise."""
    if AIRTABLE_API_KEY:
        client = AirtableClient()
        return (
            AirtableIdeaRepository(client),
            AirtableWeightRepository(client),
            AirtableSignalRepository(client),
        )
    return (
        InMemoryIdeaRepository(),
        InMemoryWeightRepository(),
        InMemorySignalRepository(),
    )


__all__ = [
    "IdeaRepository",
    "WeightRepository",
    "SignalRepository",
    "AirtableClient",
    "AirtableIdeaRepository",
    "AirtableWeightRepository",
    "AirtableSignalRepository",
    "InMemoryIdeaRepository",
    "InMemoryWeightRepository",
    "InMemorySignalRepository",
    "create_repositories",
]
