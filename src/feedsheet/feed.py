"""Feed fetching: URL construction, auth selection and response checks."""

from __future__ import annotations

import http
import json
import urllib.parse
from typing import Any

from loguru import logger

from feedsheet.exceptions import AuthError, HttpError, MissingResponseError
from feedsheet.transport import FEED_URL, FeedResponse, Transport
from feedsheet.xml_tree import parse_feed


FEED_FORMATS = ("atom", "json")


def build_feed_url(
    base_url: str,
    segments: list[str],
    auth: str | None,
    query: dict[str, Any] | None = None,
) -> str:
    """Build a feed URL.

    Visibility and projection are always the last two path segments:
    ``private/full`` with an auth token, ``public/values`` without.
    """
    if auth:
        visibility, projection = "private", "full"
    else:
        visibility, projection = "public", "values"

    url = base_url + "/".join([*segments, visibility, projection])
    if query:
        url += "?" + urllib.parse.urlencode(query)
    return url


def auth_headers(auth: str | None) -> dict[str, str]:
    if not auth:
        return {}
    return {"Authorization": f"GoogleLogin auth={auth}"}


def check_response(response: FeedResponse | None) -> FeedResponse:
    """Raise the matching error for a missing or failed response."""
    if response is None:
        raise MissingResponseError()
    if response.status_code == 401:
        raise AuthError()
    if response.status_code >= 400:
        raise HttpError(response.status_code, _reason(response))
    return response


def _reason(response: FeedResponse) -> str:
    if response.reason:
        return response.reason
    try:
        return http.HTTPStatus(response.status_code).phrase
    except ValueError:
        return "Unknown"


class FeedFetcher:
    """Fetches a feed and returns its parsed root node.

    Transport errors and parser errors propagate unchanged. There are no
    retries.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        base_url: str = FEED_URL,
        alt: str = "atom",
    ) -> None:
        """Initialize the fetcher.

        Args:
            transport: Transport used to issue requests
            base_url: Feed root, ending with a slash
            alt: "atom" for XML feeds, "json" for the JSON feed dialect
        """
        if alt not in FEED_FORMATS:
            raise ValueError(f"Unsupported feed format: {alt!r}")
        self._transport = transport
        self._base_url = base_url
        self._alt = alt

    async def fetch(
        self,
        segments: list[str],
        auth: str | None = None,
        query: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Fetch the feed at the given path segments."""
        query = dict(query or {})
        if self._alt == "json":
            query["alt"] = "json"

        url = build_feed_url(self._base_url, segments, auth, query)
        logger.debug("Fetching feed {}", url)

        response = check_response(await self._transport.fetch(url, auth_headers(auth)))
        logger.debug("Feed {} returned {} bytes", url, len(response.body))

        if self._alt == "json":
            document: dict[str, Any] = json.loads(response.body)
            return document.get("feed", {})
        return parse_feed(response.body)
