"""Submits write operations and reports their outcome to the user."""

import logging
from dataclasses import dataclass

from src.application.ports import MutationEndpoint, NotificationSink
from src.domain.mutation import CreateProject, DeployRepository, MutationRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MutationOutcome:
    success: bool
    message: str


class MutationGateway:
    """Single-attempt submission of create/deploy requests.

    Concurrent identical submissions are not deduplicated; each call is an
    independent remote request.
    """

    def __init__(self, api_client: MutationEndpoint, notifications: NotificationSink):
        self.api_client = api_client
        self.notifications = notifications

    async def submit(self, request: MutationRequest) -> MutationOutcome:
        """
        Send one write request and notify the user of the result.

        Validation is the caller's job and must happen before this call.

        Args:
            request: CreateProject or DeployRepository

        Returns:
            Outcome carrying the message that was shown to the user

        Raises:
            TypeError: If the request is not a known mutation
        """
        if not isinstance(request, (CreateProject, DeployRepository)):
            raise TypeError(f"Unsupported mutation request: {type(request).__name__}")

        logger.info(f"Submitting {request.kind}")
        try:
            if isinstance(request, CreateProject):
                await self.api_client.create_project(
                    domain=request.name,
                    github_name=request.repo_identifier,
                )
            else:
                await self.api_client.deploy_repository(
                    domain=request.domain,
                    branch=request.branch,
                    github_id=request.repository_id,
                )
        except Exception as e:
            # detail stays in the log, the user gets the fixed message
            logger.error(f"{request.kind} failed: {e}", exc_info=True)
            self.notifications.error(request.failure_message)
            return MutationOutcome(success=False, message=request.failure_message)

        logger.info(f"{request.kind} succeeded")
        self.notifications.success(request.success_message)
        return MutationOutcome(success=True, message=request.success_message)
