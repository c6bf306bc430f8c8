#!/usr/bin/env python3
"""Script to create a project or deploy a repository.

Set PROJECT_NAME and PROJECT_REPOSITORY to create a project, or
DEPLOY_DOMAIN, DEPLOY_BRANCH and DEPLOY_REPOSITORY_ID to deploy.
"""

import asyncio
import logging
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from src.domain.mutation import ValidationFailure
from src.infrastructure.api_client import DoubleBlindApiClient
from src.infrastructure.notifications import LoggingNotificationSink
from src.application.dashboard_service import DashboardService

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


async def submit():
    with DoubleBlindApiClient() as api_client:
        dashboard = DashboardService(api_client, LoggingNotificationSink())

        if os.getenv("DEPLOY_REPOSITORY_ID"):
            return await dashboard.deploy_repository(
                domain=os.getenv("DEPLOY_DOMAIN", ""),
                branch=os.getenv("DEPLOY_BRANCH", ""),
                repository_id=int(os.getenv("DEPLOY_REPOSITORY_ID")),
            )

        return await dashboard.create_project(
            name=os.getenv("PROJECT_NAME", ""),
            repo_identifier=os.getenv("PROJECT_REPOSITORY", ""),
        )


def main():
    try:
        outcome = asyncio.run(submit())
        return 0 if outcome.success else 1

    except ValidationFailure as e:
        for problem in e.problems:
            logger.error(f"Invalid input: {problem}")
        return 2
    except Exception as e:
        logger.error(f"Submission failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
