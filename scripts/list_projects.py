#!/usr/bin/env python3
"""Script to list own projects and linked GitHub repositories."""

import asyncio
import logging
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from src.infrastructure.api_client import DoubleBlindApiClient
from src.infrastructure.notifications import LoggingNotificationSink
from src.application.dashboard_service import DashboardService

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


async def show():
    with DoubleBlindApiClient() as api_client:
        dashboard = DashboardService(api_client, LoggingNotificationSink())
        projects = await dashboard.list_projects()
        linked = await dashboard.list_linked_repositories()

    for project in projects:
        logger.info(
            f"{project.name} <- {project.repo} "
            f"(updated {project.last_update.isoformat()}) {dashboard.project_url(project)}"
        )
    for repo in linked:
        logger.info(f"linked: {repo.full_name} (id {repo.id})")


def main():
    try:
        asyncio.run(show())
        return 0
    except Exception as e:
        logger.error(f"Listing projects failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
