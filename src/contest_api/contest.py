"""Contest metadata relevant to awards and API access."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional


def _parse_time(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class Contest:
    """Contest settings as exported alongside the scoreboard."""

    contest_id: str
    name: str
    enabled: bool = True
    public: bool = True
    activate_time: Optional[datetime] = None
    deactivate_time: Optional[datetime] = None
    additional_bronze_medals: Optional[int] = None  # None means not configured

    @classmethod
    def from_dict(cls, data: Dict) -> "Contest":
        """Factory method from the ``contest.json`` structure."""
        bronze = data.get("additional_bronze_medals")
        return cls(
            contest_id=str(data["contest_id"]),
            name=data.get("name", str(data["contest_id"])),
            enabled=bool(data.get("enabled", True)),
            public=bool(data.get("public", True)),
            activate_time=_parse_time(data.get("activate_time")),
            deactivate_time=_parse_time(data.get("deactivate_time")),
            additional_bronze_medals=int(bronze) if bronze is not None else None,
        )

    def is_active(self, now: Optional[datetime] = None) -> bool:
        """Whether the contest is currently visible to the public."""
        if not (self.enabled and self.public):
            return False
        now = now or datetime.now(timezone.utc)
        if self.activate_time is not None and now < self.activate_time:
            return False
        if self.deactivate_time is not None and now >= self.deactivate_time:
            return False
        return True

    def get_additional_bronze_medals(self) -> int:
        """Configured extra bronze medals, 0 when unset."""
        return self.additional_bronze_medals or 0
