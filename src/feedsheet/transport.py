"""Transport layer for fetching feed documents.

Defines the Transport protocol and implementations:
- HttpxTransport: Production transport issuing HTTPS requests
- LocalFileTransport: Test transport reading from local golden files
"""

from __future__ import annotations

import ssl
import urllib.parse
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path  # noqa: TC003 - used at runtime

import certifi
import httpx

from feedsheet.exceptions import TransportError

FEED_URL = "https://spreadsheets.google.com/feeds/"
DEFAULT_TIMEOUT = 60


@dataclass(frozen=True)
class FeedResponse:
    """Status and raw body of a feed request."""

    status_code: int
    body: str
    reason: str = ""


@dataclass(frozen=True)
class FeedRequest:
    """A request served by a transport, kept for inspection in tests."""

    url: str
    headers: dict[str, str] = field(default_factory=dict)


class Transport(ABC):
    """Abstract base class for feed transport.

    Implementations issue a single GET per call. They never retry and never
    interpret the status code; that is the fetcher's job.
    """

    @abstractmethod
    async def fetch(self, url: str, headers: dict[str, str]) -> FeedResponse | None:
        """Fetch a feed document.

        Args:
            url: Fully built feed URL, including the query string
            headers: Request headers (the authorization header, if any)

        Returns:
            FeedResponse, or None if no response was produced

        Raises:
            TransportError: If the request could not be completed
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        ...


class HttpxTransport(Transport):
    """Production transport that fetches feeds over HTTPS.

    Handles SSL and HTTP communication.
    """

    def __init__(self, timeout: int = DEFAULT_TIMEOUT) -> None:
        """Initialize the transport.

        Args:
            timeout: Request timeout in seconds
        """
        self._timeout = timeout
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        self._client = httpx.AsyncClient(timeout=timeout, verify=ssl_context)

    async def fetch(self, url: str, headers: dict[str, str]) -> FeedResponse | None:
        """Issue a GET request for the feed URL."""
        try:
            response = await self._client.get(url, headers=headers)
        except httpx.RequestError as e:
            raise TransportError(f"Network error: {e}") from e
        return FeedResponse(
            status_code=response.status_code,
            body=response.text,
            reason=response.reason_phrase,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()


class LocalFileTransport(Transport):
    """Test transport that reads from local golden files.

    Expected directory structure:
        golden_dir/
            <key>/
                worksheets.xml
                <worksheet>/
                    list.xml
                    cells.xml

    Feeds requested with ``alt=json`` are read from ``.json`` files instead.
    Missing files, and URLs outside ``base_url``, are served as 404.
    """

    def __init__(self, golden_dir: Path, base_url: str = FEED_URL) -> None:
        """Initialize the transport.

        Args:
            golden_dir: Directory containing golden feed files
            base_url: Feed root the client builds URLs from
        """
        self._golden_dir = golden_dir
        self._base_segments = _path_segments(urllib.parse.urlsplit(base_url).path)
        self.requests: list[FeedRequest] = []

    async def fetch(self, url: str, headers: dict[str, str]) -> FeedResponse | None:
        """Read the feed file matching the URL."""
        self.requests.append(FeedRequest(url=url, headers=dict(headers)))

        path = self._resolve(url)
        if path is None or not path.exists():
            return FeedResponse(status_code=404, body="", reason="Not Found")
        return FeedResponse(
            status_code=200, body=path.read_text(encoding="utf-8"), reason="OK"
        )

    def _resolve(self, url: str) -> Path | None:
        """Map a feed URL to a golden file path."""
        parsed = urllib.parse.urlsplit(url)
        query = urllib.parse.parse_qs(parsed.query)
        ext = "json" if query.get("alt") == ["json"] else "xml"

        segments = _path_segments(parsed.path)
        prefix_len = len(self._base_segments)
        if segments[:prefix_len] != self._base_segments:
            return None
        # Drop the base path and the trailing visibility/projection
        segments = segments[prefix_len:-2]
        if not segments:
            return None
        resource, *rest = segments
        if resource == "worksheets" and len(rest) == 1:
            return self._golden_dir / rest[0] / f"worksheets.{ext}"
        if resource in ("list", "cells") and len(rest) == 2:
            return self._golden_dir / rest[0] / rest[1] / f"{resource}.{ext}"
        return None

    async def close(self) -> None:
        """No-op for local file transport."""
        pass


def _path_segments(path: str) -> list[str]:
    return [s for s in path.split("/") if s]
