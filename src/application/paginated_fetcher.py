"""Drains a paged remote collection into one ordered list."""

import logging
from typing import List

from src.application.ports import PageSource
from src.domain.repository import Page, RepositoryRecord

logger = logging.getLogger(__name__)


class PaginationError(Exception):
    """Raised when any page of an enumeration fails; no partial data is kept."""

    def __init__(self, page_index: int, message: str):
        super().__init__(message)
        self.page_index = page_index


class PaginatedFetcher:
    """Fetches every page of a PageSource, strictly one page after another."""

    DEFAULT_PAGE_SIZE = 100

    def __init__(self, page_source: PageSource):
        """
        Initialize the fetcher.

        Args:
            page_source: Capability returning the items of a single page
        """
        self.page_source = page_source

    async def fetch_all(self, page_size: int = DEFAULT_PAGE_SIZE) -> List[RepositoryRecord]:
        """
        Enumerate the whole collection.

        Pages are requested from index 0 upwards, page k+1 only after page k
        resolved. Enumeration stops at the first page with zero items; a short
        but non-empty page does not end it.

        Args:
            page_size: Number of items requested per page

        Returns:
            All items, in page order then in-page order

        Raises:
            ValueError: If page_size is smaller than 1
            PaginationError: If any page request fails
        """
        if page_size < 1:
            raise ValueError(f"page_size must be a positive integer, got {page_size}")

        logger.info(f"Starting paginated fetch with page size {page_size}")

        aggregate: List[RepositoryRecord] = []
        page_index = 0

        while True:
            try:
                items = await self.page_source.fetch_page(page_index, page_size)
            except Exception as e:
                logger.error(f"Page {page_index} failed, discarding {len(aggregate)} fetched items: {e}")
                raise PaginationError(page_index, f"Fetching page {page_index} failed: {e}") from e

            page = Page(index=page_index, items=tuple(items))
            if page.is_empty:
                break

            aggregate.extend(page.items)
            logger.debug(f"Page {page.index}: {len(page)} items ({len(aggregate)} total)")
            page_index += 1

        logger.info(f"Paginated fetch completed: {len(aggregate)} items in {page_index + 1} requests")
        return aggregate
