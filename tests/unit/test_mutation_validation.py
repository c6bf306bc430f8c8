import pytest

from src.domain.mutation import CreateProject, DeployRepository, ValidationFailure


def test_valid_create_project_passes() -> None:
    CreateProject(name="science", repo_identifier="tanneberger/bahn.bingo").validate()


@pytest.mark.parametrize("name", ["", "short"])
def test_create_project_rejects_short_names(name: str) -> None:
    with pytest.raises(ValidationFailure) as excinfo:
        CreateProject(name=name, repo_identifier="owner/repo").validate()
    assert len(excinfo.value.problems) == 1


@pytest.mark.parametrize("identifier", ["", "repo", "owner/", "/repo", "a/b/c", "owner repo/x"])
def test_create_project_rejects_malformed_repository(identifier: str) -> None:
    with pytest.raises(ValidationFailure):
        CreateProject(name="science", repo_identifier=identifier).validate()


def test_create_project_reports_all_problems() -> None:
    with pytest.raises(ValidationFailure) as excinfo:
        CreateProject(name="abc", repo_identifier="nope").validate()
    assert len(excinfo.value.problems) == 2


def test_deploy_requires_domain_and_branch() -> None:
    DeployRepository(domain="bingo", branch="main", repository_id=4).validate()
    with pytest.raises(ValidationFailure) as excinfo:
        DeployRepository(domain=" ", branch="", repository_id=4).validate()
    assert excinfo.value.problems == ["Domain must not be empty", "Branch must not be empty"]
