"""
HTTP client for the remote submission store.

The remote store is a best-effort service: submissions are POSTed without
waiting on or interpreting the response, and listings are fetched with a GET
that must return a JSON array. Every way a fetch can go wrong is reported as
a single ``RemoteStoreUnavailable`` so callers can fall back to local data.
"""

from typing import Any, Dict, List, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from ..config import get_settings
from ..exceptions import RemoteStoreUnavailable
from ..models.submission import SubmissionRecord, parse_submissions

PUBLISHED_PARAMS = {"published": "true"}


class RemoteStoreClient:
    """
    Async HTTP client for the remote submission store.

    An empty endpoint turns the matching accessor into a no-op: ``submit``
    returns immediately and the fetches raise ``RemoteStoreUnavailable``.
    """

    def __init__(
        self,
        submit_endpoint: Optional[str] = None,
        fetch_endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the remote store client.

        Args:
            submit_endpoint: URL receiving submission POSTs
            fetch_endpoint: URL returning the submission list (defaults to the submit endpoint)
            timeout: Request timeout in seconds; None keeps the HTTP client default
            http_client: Pre-built client, e.g. one using a mock transport in tests
        """
        settings = get_settings()
        if submit_endpoint is None:
            submit_endpoint = settings.submit_endpoint
        if fetch_endpoint is None:
            fetch_endpoint = settings.fetch_endpoint or submit_endpoint
        if timeout is None:
            timeout = settings.request_timeout

        self.submit_endpoint = submit_endpoint.strip()
        self.fetch_endpoint = fetch_endpoint.strip()
        self.timeout = timeout

        self._client = http_client
        self._owns_client = http_client is None

        logger.debug(
            f"Initialized RemoteStoreClient with submit_endpoint: {self.submit_endpoint or '<unset>'}, "
            f"fetch_endpoint: {self.fetch_endpoint or '<unset>'}"
        )

    @property
    def submit_configured(self) -> bool:
        return bool(self.submit_endpoint)

    @property
    def fetch_configured(self) -> bool:
        return bool(self.fetch_endpoint)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            kwargs: Dict[str, Any] = {"follow_redirects": True}
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._client = httpx.AsyncClient(**kwargs)
        return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RemoteStoreClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def submit(self, record: SubmissionRecord) -> None:
        """
        Deliver one record to the remote store.

        Failures are logged and dropped: the record is already persisted
        locally, and nothing is retried.
        """
        if not self.submit_configured:
            logger.debug("No submit endpoint configured, skipping remote write")
            return

        try:
            response = await self._get_client().post(self.submit_endpoint, json=record.to_wire())
            response.raise_for_status()
            logger.info(f"Delivered submission {record.timestamp} to remote store")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Error sending submission {record.timestamp} to remote store: {str(e)}")

    async def fetch_all(self) -> List[SubmissionRecord]:
        """
        Retrieve every submission, published or not (admin view).

        Raises:
            RemoteStoreUnavailable: If the list cannot be obtained
        """
        return await self._fetch()

    async def fetch_published(self) -> List[SubmissionRecord]:
        """
        Retrieve submissions marked for display (archive view).

        The server is asked to filter, but callers must not rely on it.

        Raises:
            RemoteStoreUnavailable: If the list cannot be obtained
        """
        return await self._fetch(params=PUBLISHED_PARAMS)

    async def _fetch(self, params: Optional[Dict[str, str]] = None) -> List[SubmissionRecord]:
        if not self.fetch_configured:
            raise RemoteStoreUnavailable("No fetch endpoint configured")

        try:
            response = await self._get_client().get(self.fetch_endpoint, params=params)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            raise RemoteStoreUnavailable(f"Failed to fetch submissions: {str(e)}") from e

        if not isinstance(data, list):
            raise RemoteStoreUnavailable(
                f"Expected a JSON array of submissions, got {type(data).__name__}"
            )

        try:
            records = parse_submissions(data)
        except ValidationError as e:
            raise RemoteStoreUnavailable(f"Failed to parse submissions response: {str(e)}") from e

        logger.debug(f"Fetched {len(records)} submissions from remote store")
        return records
