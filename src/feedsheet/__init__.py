"""feedsheet - Read client for the legacy spreadsheet feeds.

Fetches spreadsheet metadata, worksheet lists, rows and cells, and turns the
feed documents into plain Python objects.
"""

__version__ = "0.1.0"

from feedsheet.client import CellQuery, FeedClient, RowQuery
from feedsheet.exceptions import (
    AuthError,
    FeedError,
    HttpError,
    MissingResponseError,
    PreconditionError,
    TransportError,
)
from feedsheet.models import Author, Cell, Cells, Row, Spreadsheet, Worksheet
from feedsheet.transport import (
    FeedResponse,
    HttpxTransport,
    LocalFileTransport,
    Transport,
)

__all__ = [
    "AuthError",
    "Author",
    "Cell",
    "CellQuery",
    "Cells",
    "FeedClient",
    "FeedError",
    "FeedResponse",
    "HttpError",
    "HttpxTransport",
    "LocalFileTransport",
    "MissingResponseError",
    "PreconditionError",
    "Row",
    "RowQuery",
    "Spreadsheet",
    "Transport",
    "TransportError",
    "Worksheet",
    "__version__",
]
