"""Domain objects built from parsed feeds.

Each builder works on the single feed root of one response and returns
objects that are not modified afterwards.
"""

from __future__ import annotations

from collections.abc import Awaitable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from feedsheet.normalize import (
    DROP,
    TEXT_KEY,
    force_list,
    normalize_field,
    text_of,
)
from feedsheet.xml_tree import ATTR_KEY, CHAR_KEY

if TYPE_CHECKING:
    from feedsheet.client import CellQuery, FeedClient, RowQuery

Row = dict[str, Any]


def build_row(entry: dict[str, Any]) -> Row:
    """Convert one list feed entry into a flat record keyed by column name."""
    row: Row = {}
    for key, value in entry.items():
        name, normalized = normalize_field(key, value)
        if normalized is DROP:
            continue
        row[name] = normalized
    return row


def feed_entries(feed: dict[str, Any]) -> list[Any]:
    """Return the feed's entries as a list, empty when the feed has none."""
    entry = feed.get("entry")
    if entry is None:
        return []
    return force_list(entry)


def _first_author(feed: dict[str, Any]) -> dict[str, Any]:
    """Return the feed's first author node, or {} when there is none."""
    authors = force_list(feed.get("author", {}))
    if authors and isinstance(authors[0], dict):
        return authors[0]
    return {}


def _extension(entry: dict[str, Any], name: str) -> Any:
    """Read a ``gs`` extension element in either feed dialect."""
    node = entry.get(f"gs:{name}", entry.get(f"gs${name}"))
    return text_of(node)


@dataclass(frozen=True)
class Cell:
    row: str
    col: str
    value: str


@dataclass(frozen=True)
class Cells:
    """Sparse cell grid: ``cells[row][col] -> Cell``.

    Row and column keys are the 1-based strings from the feed. Cells that the
    feed does not list are absent.
    """

    cells: dict[str, dict[str, Cell]] = field(default_factory=dict)

    @classmethod
    def from_feed(cls, feed: dict[str, Any]) -> Cells:
        grid: dict[str, dict[str, Cell]] = {}
        for entry in feed_entries(feed):
            node = entry.get("gs:cell", entry.get("gs$cell"))
            attrs = node.get(ATTR_KEY, node)
            row = attrs["row"]
            col = attrs["col"]
            value = node.get(CHAR_KEY, node.get(TEXT_KEY)) or ""
            # Last write wins if the feed repeats a coordinate
            grid.setdefault(row, {})[col] = Cell(row=row, col=col, value=value)
        return cls(cells=grid)

    def get(self, row: int | str, col: int | str) -> Cell | None:
        """Return the cell at (row, col), or None if the feed did not list it."""
        return self.cells.get(str(row), {}).get(str(col))

    def __iter__(self) -> Iterator[Cell]:
        for columns in self.cells.values():
            yield from columns.values()

    def __len__(self) -> int:
        return sum(len(columns) for columns in self.cells.values())


@dataclass(frozen=True)
class Author:
    name: str | None
    email: str | None


@dataclass(frozen=True)
class Worksheet:
    """One worksheet of a spreadsheet.

    Holds the spreadsheet key and auth token as values so row and cell
    queries can be issued without the owning Spreadsheet.
    """

    id: str
    title: str
    row_count: str | None
    col_count: str | None
    spreadsheet_key: str
    auth: str | None = field(default=None, repr=False)
    _client: FeedClient | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_entry(
        cls,
        entry: dict[str, Any],
        *,
        spreadsheet_key: str,
        auth: str | None = None,
        client: FeedClient | None = None,
    ) -> Worksheet:
        identifier = text_of(entry["id"])
        return cls(
            id=identifier[identifier.rfind("/") + 1 :],
            title=text_of(entry.get("title")),
            row_count=_extension(entry, "rowCount"),
            col_count=_extension(entry, "colCount"),
            spreadsheet_key=spreadsheet_key,
            auth=auth,
            _client=client,
        )

    def rows(self, query: RowQuery | None = None) -> Awaitable[list[Row]]:
        """Fetch this worksheet's rows."""
        return self._require_client().rows(
            self.spreadsheet_key, self.id, auth=self.auth, query=query
        )

    def cells(self, query: CellQuery | None = None) -> Awaitable[Cells]:
        """Fetch this worksheet's cells."""
        return self._require_client().cells(
            self.spreadsheet_key, self.id, auth=self.auth, query=query
        )

    def _require_client(self) -> FeedClient:
        if self._client is None:
            raise RuntimeError(
                f"Worksheet '{self.id}' is not bound to a client. "
                "Load it through FeedClient.spreadsheet()."
            )
        return self._client


@dataclass(frozen=True)
class Spreadsheet:
    """Spreadsheet metadata and its worksheets, in feed order."""

    key: str
    title: str
    updated: str | None
    author: Author
    worksheets: list[Worksheet] = field(default_factory=list)
    auth: str | None = field(default=None, repr=False)

    @classmethod
    def from_feed(
        cls,
        key: str,
        auth: str | None,
        feed: dict[str, Any],
        client: FeedClient | None = None,
    ) -> Spreadsheet:
        author = _first_author(feed)
        return cls(
            key=key,
            auth=auth,
            title=text_of(feed.get("title")),
            updated=text_of(feed.get("updated")),
            author=Author(
                name=text_of(author.get("name")),
                email=text_of(author.get("email")),
            ),
            worksheets=[
                Worksheet.from_entry(
                    entry, spreadsheet_key=key, auth=auth, client=client
                )
                for entry in feed_entries(feed)
            ],
        )

    def worksheet(self, title_or_id: str) -> Worksheet | None:
        """Find a worksheet by title, falling back to id."""
        for worksheet in self.worksheets:
            if worksheet.title == title_or_id:
                return worksheet
        for worksheet in self.worksheets:
            if worksheet.id == title_or_id:
                return worksheet
        return None
