"""Application service backing the project dashboard."""

import logging
import os
from typing import List, Optional

from src.application.mutation_gateway import MutationGateway, MutationOutcome
from src.application.paginated_fetcher import PaginatedFetcher
from src.application.ports import NotificationSink
from src.application.search_pipeline import ErrorCallback, ResultCallback, SearchPipeline
from src.domain.mutation import CreateProject, DeployRepository
from src.domain.project import ProjectRecord
from src.domain.repository import RepositoryRecord
from src.infrastructure.api_client import DoubleBlindApiClient

logger = logging.getLogger(__name__)


class DashboardService:
    """Loads dashboard data and submits user actions through one API client."""

    DEFAULT_ROOT_DOMAIN = "science.tanneberger.me"

    def __init__(
        self,
        api_client: DoubleBlindApiClient,
        notifications: NotificationSink,
        root_domain: Optional[str] = None,
    ):
        """
        Initialize dashboard service.

        Args:
            api_client: Client used as page source, query source and write endpoint
            notifications: Sink receiving user-facing outcome messages
            root_domain: Domain projects are served under. If None, uses
                DOUBLEBLIND_ROOT_DOMAIN env var.
        """
        if root_domain is None:
            root_domain = os.getenv("DOUBLEBLIND_ROOT_DOMAIN", self.DEFAULT_ROOT_DOMAIN)

        self.api_client = api_client
        self.root_domain = root_domain
        self.fetcher = PaginatedFetcher(api_client)
        self.gateway = MutationGateway(api_client, notifications)

    async def list_projects(self) -> List[ProjectRecord]:
        projects = await self.api_client.list_projects()
        logger.info(f"Loaded {len(projects)} projects")
        return projects

    def project_url(self, project: ProjectRecord) -> str:
        return project.website_url(self.root_domain)

    async def fetch_repositories(self, page_size: Optional[int] = None) -> List[RepositoryRecord]:
        """Fetch every repository of the user across all pages."""
        if page_size is None:
            return await self.fetcher.fetch_all()
        return await self.fetcher.fetch_all(page_size)

    async def list_linked_repositories(self) -> List[RepositoryRecord]:
        repositories = await self.api_client.list_linked_repositories()
        logger.info(f"Loaded {len(repositories)} linked repositories")
        return repositories

    def search_pipeline(
        self,
        on_result: ResultCallback,
        on_error: ErrorCallback,
        debounce_seconds: Optional[float] = None,
    ) -> SearchPipeline:
        """Create a live search bound to the repository search endpoint."""
        return SearchPipeline(
            self.api_client,
            on_result=on_result,
            on_error=on_error,
            debounce_seconds=debounce_seconds,
        )

    async def create_project(self, name: str, repo_identifier: str) -> MutationOutcome:
        """
        Validate and submit a new project.

        Raises:
            ValidationFailure: If the input is invalid; nothing is sent and
                no notification is produced
        """
        request = CreateProject(name=name, repo_identifier=repo_identifier)
        request.validate()
        return await self.gateway.submit(request)

    async def deploy_repository(self, domain: str, branch: str, repository_id: int) -> MutationOutcome:
        """
        Validate and submit a deployment.

        Raises:
            ValidationFailure: If domain or branch is empty
        """
        request = DeployRepository(domain=domain, branch=branch, repository_id=repository_id)
        request.validate()
        return await self.gateway.submit(request)
