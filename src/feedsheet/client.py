"""FeedClient - Main API for feedsheet.

Provides the `spreadsheet`, `rows` and `cells` operations.
"""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any

from feedsheet.exceptions import PreconditionError
from feedsheet.feed import FEED_URL, FeedFetcher
from feedsheet.models import Cells, Row, Spreadsheet, build_row, feed_entries
from feedsheet.transport import Transport


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


@dataclass(frozen=True)
class RowQuery:
    """Query options for the list (rows) feed.

    Unset or falsy options are not sent.
    """

    start: int | None = None
    num: int | None = None
    orderby: str | None = None
    reverse: bool | None = None
    sq: str | None = None

    def to_params(self) -> dict[str, Any]:
        params = {
            "start-index": self.start,
            "max-results": self.num,
            "orderby": self.orderby,
            "reverse": self.reverse,
            "sq": self.sq,
        }
        return {k: _query_value(v) for k, v in params.items() if v}


@dataclass(frozen=True)
class CellQuery:
    """Query options for the cells feed.

    Unset or falsy options are not sent.
    """

    range: str | None = None
    max_row: int | None = None
    min_row: int | None = None
    max_col: int | None = None
    min_col: int | None = None

    def to_params(self) -> dict[str, Any]:
        params = {
            "range": self.range,
            "max-row": self.max_row,
            "min-row": self.min_row,
            "max-col": self.max_col,
            "min-col": self.min_col,
        }
        return {k: v for k, v in params.items() if v}


class FeedClient:
    """Client for the spreadsheet feeds.

    The operations check their arguments immediately and return an awaitable;
    a missing key or worksheet raises PreconditionError before any request.

    Example:
        >>> from feedsheet.transport import HttpxTransport
        >>> client = FeedClient(HttpxTransport())
        >>> spreadsheet = await client.spreadsheet("0AlmAnd...")
        >>> rows = await spreadsheet.worksheets[0].rows(RowQuery(num=10))
    """

    def __init__(
        self,
        transport: Transport,
        *,
        base_url: str = FEED_URL,
        alt: str = "atom",
    ) -> None:
        """Initialize the client.

        Args:
            transport: Transport implementation for fetching feeds
            base_url: Feed root URL
            alt: "atom" for XML feeds, "json" for the JSON feed dialect
        """
        self._fetcher = FeedFetcher(transport, base_url=base_url, alt=alt)

    def spreadsheet(self, key: str, auth: str | None = None) -> Awaitable[Spreadsheet]:
        """Fetch spreadsheet metadata and its worksheet list."""
        _require(key, "Spreadsheet key not provided.")
        return self._spreadsheet(key, auth)

    def rows(
        self,
        key: str,
        worksheet: str,
        *,
        auth: str | None = None,
        query: RowQuery | None = None,
    ) -> Awaitable[list[Row]]:
        """Fetch the rows of a worksheet, in feed order."""
        _require(key, "Spreadsheet key not provided.")
        _require(worksheet, "Worksheet not specified.")
        return self._rows(key, worksheet, auth, query or RowQuery())

    def cells(
        self,
        key: str,
        worksheet: str,
        *,
        auth: str | None = None,
        query: CellQuery | None = None,
    ) -> Awaitable[Cells]:
        """Fetch the cells of a worksheet as a sparse grid."""
        _require(key, "Spreadsheet key not provided.")
        _require(worksheet, "Worksheet not specified.")
        return self._cells(key, worksheet, auth, query or CellQuery())

    async def _spreadsheet(self, key: str, auth: str | None) -> Spreadsheet:
        feed = await self._fetcher.fetch(["worksheets", key], auth)
        return Spreadsheet.from_feed(key, auth, feed, client=self)

    async def _rows(
        self, key: str, worksheet: str, auth: str | None, query: RowQuery
    ) -> list[Row]:
        feed = await self._fetcher.fetch(["list", key, worksheet], auth, query.to_params())
        return [build_row(entry) for entry in feed_entries(feed)]

    async def _cells(
        self, key: str, worksheet: str, auth: str | None, query: CellQuery
    ) -> Cells:
        feed = await self._fetcher.fetch(["cells", key, worksheet], auth, query.to_params())
        if not feed_entries(feed):
            return Cells()
        return Cells.from_feed(feed)


def _require(value: str | None, message: str) -> None:
    if not value:
        raise PreconditionError(message)
