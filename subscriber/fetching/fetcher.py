"""
Document fetching layer: HTTP retrieval plus HTML parsing.

Provides:
- FetchError: raised for any transport failure or error status
- Fetcher: the protocol the synchronizer depends on
- DocumentFetcher: httpx-backed implementation returning parsed documents

Requests are not retried. A failed fetch ends the synchronization pass
for that record.
"""

import logging
import time
from typing import Any, Protocol

import httpx
from bs4 import BeautifulSoup

from subscriber.config.settings import get_settings
from subscriber.observability.metrics import get_metrics

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a document cannot be retrieved."""

    def __init__(
        self,
        url: str,
        message: str,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class Fetcher(Protocol):
    """Anything that resolves a URL to a parsed document."""

    async def fetch(self, url: str) -> BeautifulSoup:
        ...


def parse_document(html: str) -> BeautifulSoup:
    """Parse an HTML string into a queryable document."""
    return BeautifulSoup(html, "html.parser")


class DocumentFetcher:
    """
    Async document fetcher.

    Example:
        async with DocumentFetcher() as fetcher:
            document = await fetcher.fetch("https://example.com/artist/foo")
            galleries = document.select("div.gallery")
    """

    def __init__(
        self,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ):
        """
        Initialize document fetcher.

        Args:
            timeout: Request timeout in seconds (default from settings)
            headers: Extra request headers
        """
        settings = get_settings()
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.headers = {"User-Agent": settings.http_user_agent}
        if headers:
            self.headers.update(headers)
        self._client: httpx.AsyncClient | None = None
        self._metrics = get_metrics()

    async def __aenter__(self) -> "DocumentFetcher":
        """Enter async context manager, create client."""
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            headers=self.headers,
            follow_redirects=True,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager, close client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch(self, url: str) -> BeautifulSoup:
        """
        Fetch a URL and parse the body as HTML.

        Args:
            url: Document URL

        Returns:
            Parsed document

        Raises:
            FetchError: On transport errors or HTTP status >= 400
        """
        if not self._client:
            raise RuntimeError("DocumentFetcher must be used as async context manager")

        start = time.monotonic()
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            self._metrics.record_fetch("error")
            logger.warning(f"Fetch failed for {url}: {type(e).__name__}: {e}")
            raise FetchError(url, f"Request to {url} failed: {e}") from e

        if response.status_code >= 400:
            self._metrics.record_fetch("error")
            logger.warning(f"Fetch failed for {url}: HTTP {response.status_code}")
            raise FetchError(
                url,
                f"Request to {url} failed with status {response.status_code}",
                status_code=response.status_code,
            )

        document = parse_document(response.text)
        self._metrics.record_fetch("ok", latency=time.monotonic() - start)
        return document
