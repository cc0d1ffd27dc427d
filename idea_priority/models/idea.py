"""
Idea data model for Idea Priority.

Defines the Idea dataclass representing a single fan-suggested content idea
owned by a creator, as read from the idea store.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Optional


class IdeaStatus:
    """Lifecycle states an idea can be in."""

    PENDING = "pending"
    APPROVED = "approved"
    COMPLETED = "completed"
    REJECTED = "rejected"


# Statuses that can be ranked by priority
RANKABLE_STATUSES: tuple[str, ...] = (IdeaStatus.APPROVED, IdeaStatus.COMPLETED)


def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse an ISO timestamp (or pass a datetime through).

    A trailing "Z" is accepted as UTC. Returns None for empty values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass
class Idea:
    """
    A fan-suggested idea on a creator's board.

    Attributes:
        id: Idea identifier in the idea store.
        creator_id: Identifier of the owning creator.
        votes: Community vote count (non-negative).
        status: Lifecycle status (see IdeaStatus).
        title: Idea title, for display.
        description: Idea description, for display.
        niche: Optional content niche/topic.
        created_at: When the idea was suggested.
    """

    id: int
    creator_id: int
    votes: int = 0
    status: str = IdeaStatus.APPROVED
    title: str = ""
    description: str = ""
    niche: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Validate field values.

        Raises:
            ValueError: If validation fails.
        """
        errors = []

        if self.votes is None or self.votes < 0:
            errors.append(f"votes must be a non-negative integer, got {self.votes}")

        if not self.status or not self.status.strip():
            errors.append("status is required and cannot be empty")

        if errors:
            raise ValueError(f"Idea validation failed: {'; '.join(errors)}")

    def to_dict(self) -> dict:
        """Convert to a plain dictionary with ISO timestamps."""
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Idea":
        """Create an Idea from a dictionary (e.g., from storage)."""
        data = data.copy()
        if data.get("created_at") is not None:
            data["created_at"] = parse_timestamp(data["created_at"])
        else:
            data.pop("created_at", None)
        return cls(**data)

    def __str__(self) -> str:
        return f"#{self.id} {self.title or '(untitled)'} ({self.votes} votes, {self.status})"
