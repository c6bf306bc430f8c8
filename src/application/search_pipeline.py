"""Live search: debounced, latest-wins query execution."""

import asyncio
import logging
from typing import Callable, List, Optional, Set

from src.application.ports import QuerySource
from src.domain.repository import RepositoryRecord

logger = logging.getLogger(__name__)

ResultCallback = Callable[[List[RepositoryRecord]], None]
ErrorCallback = Callable[[Exception], None]


class SearchPipeline:
    """Turns a stream of query updates into a stream of authoritative results.

    Every ``push`` restarts the debounce timer; only the value present when
    the timer elapses is searched. Each debounced decision bumps the
    generation token, and results (or failures) carrying an older token are
    dropped silently. The superseded request task is also cancelled.

    ``None`` means "no query yet": it emits an empty list without calling the
    query source. The empty string is an ordinary query.

    Must be used from within a running event loop. Call ``aclose`` (or use
    ``async with``) to release the timer and cancel outstanding requests.
    """

    DEBOUNCE_SECONDS = 0.2

    def __init__(
        self,
        query_source: QuerySource,
        on_result: ResultCallback,
        on_error: ErrorCallback,
        debounce_seconds: Optional[float] = None,
    ):
        self.query_source = query_source
        self.on_result = on_result
        self.on_error = on_error
        self.debounce_seconds = (
            debounce_seconds if debounce_seconds is not None else self.DEBOUNCE_SECONDS
        )
        self.latest: Optional[List[RepositoryRecord]] = None

        self._generation = 0
        self._timer: Optional[asyncio.TimerHandle] = None
        self._inflight: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, query: Optional[str]) -> None:
        """Record a query update (one per keystroke or programmatic change)."""
        if self._closed:
            raise RuntimeError("SearchPipeline is closed")

        loop = asyncio.get_running_loop()
        if self._timer is not None:
            self._timer.cancel()
        self._timer = loop.call_later(self.debounce_seconds, self._decide, query)

    def _decide(self, query: Optional[str]) -> None:
        self._timer = None
        self._generation += 1
        generation = self._generation

        if self._inflight is not None and not self._inflight.done():
            logger.debug(f"Superseding in-flight search (generation {generation - 1})")
            self._inflight.cancel()
        self._inflight = None

        if query is None:
            self._emit(generation, [])
            return

        logger.debug(f"Searching {query!r} (generation {generation})")
        task = asyncio.get_running_loop().create_task(self._run(generation, query))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        task.add_done_callback(self._report_task_failure)
        self._inflight = task

    async def _run(self, generation: int, query: str) -> None:
        try:
            results = await self.query_source.search(query)
        except Exception as e:
            if generation != self._generation:
                logger.debug(f"Dropping failure of stale search {query!r}: {e}")
                return
            logger.warning(f"Search for {query!r} failed: {e}")
            self.on_error(e)
            return

        self._emit(generation, list(results))

    def _report_task_failure(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Search subscriber failed: {error}", exc_info=error)

    def _emit(self, generation: int, results: List[RepositoryRecord]) -> None:
        if generation != self._generation:
            logger.debug(f"Dropping stale result of generation {generation}")
            return
        self.latest = results
        self.on_result(results)

    async def aclose(self) -> None:
        """Cancel the pending timer and every outstanding request."""
        if self._closed:
            return
        self._closed = True

        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        # anything still resolving is stale from here on
        self._generation += 1
        self._inflight = None

        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.debug(f"Search pipeline closed ({len(tasks)} requests cancelled)")
