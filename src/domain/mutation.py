"""Write operations a user can submit from the dashboard."""

import re
from dataclasses import dataclass
from typing import List, Union

REPO_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")
MIN_PROJECT_NAME_LENGTH = 6


class ValidationFailure(ValueError):
    """Raised before submission when a request is not fit to be sent."""

    def __init__(self, problems: List[str]):
        super().__init__("; ".join(problems))
        self.problems = problems


@dataclass(frozen=True)
class CreateProject:
    """Register a new project backed by a repository."""

    name: str
    repo_identifier: str

    kind = "create_project"
    success_message = "Successfully Created Project"
    failure_message = "Failed to Create Project"

    def validate(self) -> None:
        problems = []
        if not self.name:
            problems.append("Project name must not be empty")
        elif len(self.name) < MIN_PROJECT_NAME_LENGTH:
            problems.append(
                f"Project name must be at least {MIN_PROJECT_NAME_LENGTH} characters"
            )
        if not REPO_IDENTIFIER_PATTERN.match(self.repo_identifier or ""):
            problems.append("Repository must look like <owner>/<repo>")
        if problems:
            raise ValidationFailure(problems)


@dataclass(frozen=True)
class DeployRepository:
    """Deploy a linked repository under a domain from a branch."""

    domain: str
    branch: str
    repository_id: int

    kind = "deploy_repository"
    success_message = "Successfully Deployed Repository"
    failure_message = "Failed to Deploy Repository"

    def validate(self) -> None:
        problems = []
        if not (self.domain or "").strip():
            problems.append("Domain must not be empty")
        if not (self.branch or "").strip():
            problems.append("Branch must not be empty")
        if problems:
            raise ValidationFailure(problems)


MutationRequest = Union[CreateProject, DeployRepository]
