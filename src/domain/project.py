"""Domain entity for hosted projects."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict


@dataclass(frozen=True)
class ProjectRecord:
    """Immutable project snapshot owned by the signed-in user."""

    id: str
    repo: str
    owner: str
    name: str
    last_update: datetime

    @classmethod
    def from_api(cls, node: Dict[str, Any]) -> "ProjectRecord":
        return cls(
            id=str(node["id"]),
            repo=node["repo"],
            owner=str(node["owner"]),
            name=node["name"],
            last_update=parse_timestamp(node["last_update"]),
        )

    def website_url(self, root_domain: str) -> str:
        """Public URL the project is served under."""
        return f"https://{self.name}.{root_domain}"


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO 8601 timestamp as sent by the API.

    Accepts a trailing ``Z``, minute precision and surrounding whitespace.
    Naive values are treated as UTC.
    """
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
