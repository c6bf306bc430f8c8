"""Capabilities the synchronization components are built on."""

from typing import List, Optional, Protocol

from src.domain.repository import RepositoryRecord


class PageSource(Protocol):
    async def fetch_page(self, page_index: int, page_size: int) -> List[RepositoryRecord]:
        """Return the items of one page; an empty list means the collection is exhausted."""
        ...


class QuerySource(Protocol):
    async def search(self, term: str) -> List[RepositoryRecord]: ...


class NotificationSink(Protocol):
    """Where user-facing outcome messages go."""

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class MutationEndpoint(Protocol):
    async def create_project(self, domain: str, github_name: str) -> None: ...

    async def deploy_repository(self, domain: str, branch: str, github_id: int) -> None: ...
