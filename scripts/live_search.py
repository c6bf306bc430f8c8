#!/usr/bin/env python3
"""Script feeding stdin lines into the live repository search.

Each line is treated as the current content of the search box. An empty
line clears the box back to "no query".
"""

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


def show_results(results):
    names = ", ".join(repo.full_name for repo in results) or "(no results)"
    logger.info(f"{len(results)} results: {names}")


def show_error(error):
    logger.error(f"Search failed: {error}")


async def run():
    loop = asyncio.get_running_loop()

    with DoubleBlindApiClient() as api_client:
        dashboard = DashboardService(api_client, LoggingNotificationSink())
        async with dashboard.search_pipeline(show_results, show_error) as pipeline:
            while True:
                line = await loop.run_in_executor(None, sys.stdin.readline)
                if not line:
                    break
                text = line.rstrip("\n")
                pipeline.push(text if text else None)

            # let the last keystroke settle before tearing down
            await asyncio.sleep(pipeline.debounce_seconds + 1)


def main():
    try:
        asyncio.run(run())
        return 0
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        logger.error(f"Live search failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
