"""Domain entities for source repositories and repository pages."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


class RecordInvariantError(ValueError):
    """Raised when a repository payload violates the deployment invariant."""
    pass


@dataclass(frozen=True)
class RepositoryRecord:
    """Immutable repository snapshot as returned by the API."""

    id: int
    name: str
    full_name: str
    deployed: bool
    domain: Optional[str] = None
    branch: Optional[str] = None

    def __post_init__(self):
        # domain/branch travel together and only exist on deployed repositories
        if self.deployed:
            if (self.domain is None) != (self.branch is None):
                raise RecordInvariantError(
                    f"Deployed repository {self.full_name!r} must carry both domain and branch or neither"
                )
        elif self.domain is not None or self.branch is not None:
            raise RecordInvariantError(
                f"Undeployed repository {self.full_name!r} must not carry domain or branch"
            )

    @classmethod
    def from_api(cls, node: Dict[str, Any]) -> "RepositoryRecord":
        """
        Build a record from an API payload.

        Args:
            node: Decoded JSON object for a single repository

        Returns:
            Validated repository record

        Raises:
            RecordInvariantError: If required fields are missing or the
                deployed/domain/branch invariant does not hold
        """
        try:
            repo_id = int(node["id"])
            name = node["name"]
            full_name = node["full_name"]
        except (KeyError, TypeError, ValueError) as e:
            raise RecordInvariantError(f"Malformed repository payload: {e!r}") from e

        return cls(
            id=repo_id,
            name=name,
            full_name=full_name,
            deployed=bool(node.get("deployed", False)),
            domain=node.get("domain"),
            branch=node.get("branch"),
        )

    @property
    def owner(self) -> str:
        return self.full_name.split("/", 1)[0]


@dataclass(frozen=True)
class Page:
    """One slice of the remote repository collection, kept in API order."""

    index: int
    items: Tuple[RepositoryRecord, ...]

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items
