import asyncio
from datetime import datetime, timezone

import pytest

from src.application.dashboard_service import DashboardService
from src.domain.mutation import ValidationFailure
from src.domain.project import ProjectRecord
from src.domain.repository import RepositoryRecord
from src.infrastructure.notifications import RecordingNotificationSink


def make_repo(i: int) -> RepositoryRecord:
    return RepositoryRecord(id=i, name=f"repo-{i}", full_name=f"owner/repo-{i}", deployed=False)


class StubApiClient:
    def __init__(self, repositories: list[RepositoryRecord]) -> None:
        self.repositories = repositories
        self.page_requests: list[tuple[int, int]] = []
        self.writes: list[str] = []

    async def fetch_page(self, page_index: int, page_size: int) -> list[RepositoryRecord]:
        self.page_requests.append((page_index, page_size))
        start = page_index * page_size
        return self.repositories[start : start + page_size]

    async def search(self, term: str) -> list[RepositoryRecord]:
        return [repo for repo in self.repositories if term in repo.name]

    async def list_projects(self) -> list[ProjectRecord]:
        return [
            ProjectRecord(
                id="UUID-1",
                repo="https://github.com/owner/repo-1",
                owner="UID-1",
                name="science",
                last_update=datetime(2023, 10, 24, 20, 21, tzinfo=timezone.utc),
            )
        ]

    async def list_linked_repositories(self) -> list[RepositoryRecord]:
        return self.repositories[:1]

    async def create_project(self, domain: str, github_name: str) -> None:
        self.writes.append(f"create {domain} {github_name}")

    async def deploy_repository(self, domain: str, branch: str, github_id: int) -> None:
        self.writes.append(f"deploy {domain} {branch} {github_id}")


@pytest.mark.asyncio
async def test_fetch_repositories_uses_default_page_size() -> None:
    api = StubApiClient([make_repo(i) for i in range(150)])
    dashboard = DashboardService(api, RecordingNotificationSink(), root_domain="example.org")

    repositories = await dashboard.fetch_repositories()

    assert len(repositories) == 150
    assert api.page_requests == [(0, 100), (1, 100), (2, 100)]


@pytest.mark.asyncio
async def test_project_url_uses_root_domain() -> None:
    api = StubApiClient([])
    dashboard = DashboardService(api, RecordingNotificationSink(), root_domain="example.org")

    projects = await dashboard.list_projects()

    assert dashboard.project_url(projects[0]) == "https://science.example.org"


def test_root_domain_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOUBLEBLIND_ROOT_DOMAIN", "env.example.org")
    dashboard = DashboardService(StubApiClient([]), RecordingNotificationSink())
    assert dashboard.root_domain == "env.example.org"


@pytest.mark.asyncio
async def test_invalid_project_never_reaches_the_network() -> None:
    api = StubApiClient([])
    sink = RecordingNotificationSink()
    dashboard = DashboardService(api, sink, root_domain="example.org")

    with pytest.raises(ValidationFailure):
        await dashboard.create_project(name="abc", repo_identifier="owner/repo")

    assert api.writes == []
    assert sink.notifications == []


@pytest.mark.asyncio
async def test_invalid_deployment_never_reaches_the_network() -> None:
    api = StubApiClient([])
    sink = RecordingNotificationSink()
    dashboard = DashboardService(api, sink, root_domain="example.org")

    with pytest.raises(ValidationFailure):
        await dashboard.deploy_repository(domain="", branch="main", repository_id=1)

    assert api.writes == []
    assert sink.notifications == []


@pytest.mark.asyncio
async def test_valid_actions_are_submitted() -> None:
    api = StubApiClient([])
    sink = RecordingNotificationSink()
    dashboard = DashboardService(api, sink, root_domain="example.org")

    created = await dashboard.create_project(name="science", repo_identifier="owner/repo")
    deployed = await dashboard.deploy_repository(domain="bingo", branch="main", repository_id=7)

    assert created.success and deployed.success
    assert api.writes == ["create science owner/repo", "deploy bingo main 7"]
    assert [kind for kind, _ in sink.notifications] == ["success", "success"]


@pytest.mark.asyncio
async def test_search_pipeline_is_bound_to_the_client() -> None:
    api = StubApiClient([make_repo(1), make_repo(22)])
    received: list[list[RepositoryRecord]] = []
    dashboard = DashboardService(api, RecordingNotificationSink(), root_domain="example.org")

    errors: list[Exception] = []
    async with dashboard.search_pipeline(received.append, errors.append, debounce_seconds=0.01) as pipeline:
        pipeline.push("22")
        for _ in range(200):
            if received:
                break
            await asyncio.sleep(0.01)

    assert received == [[make_repo(22)]]
    assert errors == []
