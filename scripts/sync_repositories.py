#!/usr/bin/env python3
"""Script to fetch every repository of the signed-in user."""

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


async def sync(page_size: int) -> int:
    with DoubleBlindApiClient() as api_client:
        dashboard = DashboardService(api_client, LoggingNotificationSink())
        repositories = await dashboard.fetch_repositories(page_size=page_size)

    for repo in repositories:
        status = f"deployed at {repo.domain} ({repo.branch})" if repo.deployed else "not deployed"
        logger.info(f"{repo.id} {repo.full_name}: {status}")

    logger.info(f"Fetched {len(repositories)} repositories")
    return len(repositories)


def main():
    """Fetch all repositories page by page."""
    try:
        page_size = int(os.getenv("PAGE_SIZE", "100"))
        asyncio.run(sync(page_size))
        return 0

    except Exception as e:
        logger.error(f"Repository sync failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
