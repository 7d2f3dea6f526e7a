"""Data models for the awards engine."""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class AwardRecord:
    """A single award and the teams currently qualifying for it."""

    id: str
    citation: str
    team_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        """Serialize to the ``{id, citation, team_ids}`` API shape."""
        return {
            "id": self.id,
            "citation": self.citation,
            "team_ids": list(self.team_ids),
        }


class AwardNotFoundError(Exception):
    """Raised when a requested award id is not among the computed awards."""

    def __init__(self, award_id: str):
        self.award_id = award_id
        super().__init__(f"Object with ID '{award_id}' not found")
