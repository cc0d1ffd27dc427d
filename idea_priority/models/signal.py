"""
Opportunity signal model.

An opportunity signal is the output of the external topic analysis
(demand vs. competition on the content platform) for one idea. It is
produced and refreshed elsewhere; this package only reads it.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Optional

from idea_priority.models.idea import parse_timestamp


@dataclass
class OpportunitySignal:
    """
    Externally computed opportunity data for an idea.

    Attributes:
        idea_id: The idea this signal belongs to.
        opportunity_score: 0-100 score, or None until the analysis has run.
        updated_at: When the analysis last refreshed this signal.
        demand_score: 0-100 demand component, if reported.
        demand_label: "low" / "medium" / "high".
        competition_score: 0-100 competition component, if reported.
        competition_label: "low" / "medium" / "high".
        opportunity_label: "weak" / "good" / "strong".
        composite_label: "audience-led" / "market-led" / "balanced" / "low-priority".
    """

    idea_id: int
    opportunity_score: Optional[int] = None
    updated_at: Optional[datetime] = None
    demand_score: Optional[int] = None
    demand_label: Optional[str] = None
    competition_score: Optional[int] = None
    competition_label: Optional[str] = None
    opportunity_label: Optional[str] = None
    composite_label: Optional[str] = None

    @property
    def has_score(self) -> bool:
        return self.opportunity_score is not None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "OpportunitySignal":
        data = data.copy()
        data["updated_at"] = parse_timestamp(data.get("updated_at"))
        return cls(**data)
