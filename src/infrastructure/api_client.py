"""DoubleBlind REST API client with session cookie authentication and retry logic."""

import asyncio
import logging
import os
import time
from typing import Any, Dict, List, Optional

import requests

from src.domain.project import ProjectRecord
from src.domain.repository import RepositoryRecord

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for failures talking to the API."""
    pass


class TransportError(ApiError):
    """Raised when the request never produced a response (network, timeout)."""
    pass


class RemoteRejection(ApiError):
    """Raised when the API answered with a non-success status or an unusable body."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DoubleBlindApiClient:
    """Client for the DoubleBlind backend.

    All calls are blocking ``requests`` calls executed on a worker thread so
    that coroutines awaiting them never block the event loop. The shared
    ``requests.Session`` is not thread-safe, so await one call at a time per
    client.
    """

    DEFAULT_BASE_URL = "https://api.science.tanneberger.me"
    SESSION_COOKIE_NAME = "id"
    MAX_RETRIES = 3
    RETRY_DELAY_SECONDS = 1
    REQUEST_TIMEOUT_SECONDS = 30

    def __init__(
        self,
        base_url: Optional[str] = None,
        session_cookie: Optional[str] = None,
        session: Optional[requests.Session] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: API root. If None, uses DOUBLEBLIND_API_URL env var.
            session_cookie: Session cookie value obtained from the login flow.
                If None, uses DOUBLEBLIND_SESSION_COOKIE env var.
            session: Preconfigured requests session (mainly for tests)
            max_retries: Attempts for idempotent requests on transport failure
            retry_delay: Initial backoff delay in seconds
        """
        if base_url is None:
            base_url = os.getenv("DOUBLEBLIND_API_URL", self.DEFAULT_BASE_URL)
        if session_cookie is None:
            session_cookie = os.getenv("DOUBLEBLIND_SESSION_COOKIE")

        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries if max_retries is not None else self.MAX_RETRIES
        self.retry_delay = retry_delay if retry_delay is not None else self.RETRY_DELAY_SECONDS

        self.session = session if session is not None else requests.Session()
        self.session.headers.update({"Accept": "application/json"})

        if session_cookie:
            self.session.cookies.set(self.SESSION_COOKIE_NAME, session_cookie)
        else:
            logger.warning("No session cookie configured. Requests will be unauthenticated.")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.session.close()

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
        expect_body: bool = True,
    ) -> Any:
        """
        Execute a request, retrying transport failures on GET requests.

        Args:
            method: HTTP method
            path: Path below the base URL
            params: Query string parameters
            payload: JSON body
            expect_body: Whether a JSON body must be decoded

        Returns:
            Decoded JSON body, or None when no body is expected

        Raises:
            TransportError: If no response could be obtained
            RemoteRejection: If the API answered with an error status or bad JSON
        """
        url = f"{self.base_url}{path}"
        # writes are attempted exactly once
        attempts = self.max_retries if method == "GET" else 1
        attempts = max(attempts, 1)

        for attempt in range(attempts):
            try:
                response = self.session.request(
                    method,
                    url,
                    params=params,
                    json=payload,
                    timeout=self.REQUEST_TIMEOUT_SECONDS,
                )
            except requests.exceptions.RequestException as e:
                if attempt < attempts - 1:
                    delay = self.retry_delay * (2 ** attempt)
                    logger.warning(
                        f"{method} {path} failed (attempt {attempt + 1}/{attempts}): {e}. "
                        f"Retrying in {delay}s..."
                    )
                    time.sleep(delay)
                    continue
                raise TransportError(f"{method} {path} failed: {e}") from e

            if not response.ok:
                raise RemoteRejection(
                    f"{method} {path} rejected with status {response.status_code}",
                    status_code=response.status_code,
                    body=response.text,
                )

            if not expect_body:
                return None

            try:
                return response.json()
            except ValueError as e:
                raise RemoteRejection(
                    f"{method} {path} returned invalid JSON",
                    status_code=response.status_code,
                    body=response.text,
                ) from e

        raise TransportError(f"{method} {path} failed: max retries exceeded")

    async def _call(self, method: str, path: str, **kwargs) -> Any:
        return await asyncio.to_thread(self._request, method, path, **kwargs)

    async def list_projects(self) -> List[ProjectRecord]:
        """Fetch the projects owned by the signed-in user."""
        data = await self._call("GET", "/project/")
        if not isinstance(data, list):
            raise RemoteRejection("GET /project/ did not return a list")
        return [ProjectRecord.from_api(node) for node in data]

    async def get_repositories_page(self, page: int, per_page: int) -> List[RepositoryRecord]:
        """
        Fetch one page of the user's repositories.

        Args:
            page: Zero-based page index
            per_page: Page size

        Returns:
            Repositories of that page in API order (empty once exhausted)
        """
        data = await self._call(
            "GET", "/repositories/", params={"page": page, "per_page": per_page}
        )
        # paged form is a bare array
        if not isinstance(data, list):
            raise RemoteRejection("GET /repositories/ (paged) did not return a list")
        return [RepositoryRecord.from_api(node) for node in data]

    async def search_repositories(self, term: str) -> List[RepositoryRecord]:
        """Search repositories by name; the search form wraps results in ``items``."""
        data = await self._call("GET", "/repositories/", params={"search": term})
        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise RemoteRejection("GET /repositories/ (search) did not return {items: [...]}")
        return [RepositoryRecord.from_api(node) for node in data["items"]]

    async def list_linked_repositories(self) -> List[RepositoryRecord]:
        """Fetch repositories linked through the GitHub app installation."""
        data = await self._call("GET", "/v1/github/repos")
        if not isinstance(data, list):
            raise RemoteRejection("GET /v1/github/repos did not return a list")
        return [RepositoryRecord.from_api(node) for node in data]

    async def create_project(self, domain: str, github_name: str) -> None:
        await self._call(
            "POST",
            "/project/",
            payload={"domain": domain, "github_name": github_name},
            expect_body=False,
        )

    async def deploy_repository(self, domain: str, branch: str, github_id: int) -> None:
        await self._call(
            "POST",
            "/v1/github/deploy",
            payload={"domain": domain, "branch": branch, "github_id": github_id},
            expect_body=False,
        )

    # PageSource / QuerySource capabilities

    async def fetch_page(self, page_index: int, page_size: int) -> List[RepositoryRecord]:
        return await self.get_repositories_page(page_index, page_size)

    async def search(self, term: str) -> List[RepositoryRecord]:
        return await self.search_repositories(term)
