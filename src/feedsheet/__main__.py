"""CLI entry point for feedsheet.

Usage:
    python -m feedsheet worksheets <key_or_url>
    python -m feedsheet rows <key_or_url> <worksheet> [--start N] [--num N]
    python -m feedsheet cells <key_or_url> <worksheet> [--range A1:C10]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import re
import sys
from pathlib import Path
from typing import Any

from loguru import logger

from feedsheet.client import CellQuery, FeedClient, RowQuery
from feedsheet.config import get_settings
from feedsheet.exceptions import FeedError
from feedsheet.logging import configure_logging
from feedsheet.transport import HttpxTransport, LocalFileTransport, Transport


def parse_spreadsheet_key(key_or_url: str) -> str:
    """Extract the spreadsheet key from a URL or return it as-is."""
    # https://docs.google.com/spreadsheets/d/KEY/edit...
    match = re.search(r"/spreadsheets/d/([a-zA-Z0-9_-]+)", key_or_url)
    if match:
        return match.group(1)
    # https://docs.google.com/spreadsheet/ccc?key=KEY
    match = re.search(r"[?&]key=([a-zA-Z0-9_-]+)", key_or_url)
    if match:
        return match.group(1)
    return key_or_url


def _make_transport(args: argparse.Namespace) -> Transport:
    if args.golden:
        return LocalFileTransport(Path(args.golden), base_url=get_settings().feed_url)
    return HttpxTransport(timeout=get_settings().timeout)


def _make_client(args: argparse.Namespace, transport: Transport) -> FeedClient:
    settings = get_settings()
    alt = "json" if args.json_feed else settings.alt
    return FeedClient(transport, base_url=settings.feed_url, alt=alt)


def _auth(args: argparse.Namespace) -> str | None:
    return args.auth or get_settings().auth or None


async def cmd_worksheets(args: argparse.Namespace, client: FeedClient) -> Any:
    """List the worksheets of a spreadsheet."""
    spreadsheet = await client.spreadsheet(parse_spreadsheet_key(args.spreadsheet), _auth(args))
    return {
        "key": spreadsheet.key,
        "title": spreadsheet.title,
        "updated": spreadsheet.updated,
        "author": {"name": spreadsheet.author.name, "email": spreadsheet.author.email},
        "worksheets": [
            {
                "id": ws.id,
                "title": ws.title,
                "rowCount": ws.row_count,
                "colCount": ws.col_count,
            }
            for ws in spreadsheet.worksheets
        ],
    }


async def cmd_rows(args: argparse.Namespace, client: FeedClient) -> Any:
    """Print the rows of a worksheet."""
    query = RowQuery(
        start=args.start,
        num=args.num,
        orderby=args.orderby,
        reverse=args.reverse,
        sq=args.sq,
    )
    return await client.rows(
        parse_spreadsheet_key(args.spreadsheet),
        args.worksheet,
        auth=_auth(args),
        query=query,
    )


async def cmd_cells(args: argparse.Namespace, client: FeedClient) -> Any:
    """Print the cells of a worksheet as {row: {col: value}}."""
    query = CellQuery(
        range=args.range,
        max_row=args.max_row,
        min_row=args.min_row,
        max_col=args.max_col,
        min_col=args.min_col,
    )
    cells = await client.cells(
        parse_spreadsheet_key(args.spreadsheet),
        args.worksheet,
        auth=_auth(args),
        query=query,
    )
    return {
        row: {col: cell.value for col, cell in columns.items()}
        for row, columns in cells.cells.items()
    }


async def run(args: argparse.Namespace) -> int:
    transport = _make_transport(args)
    client = _make_client(args, transport)
    try:
        result = await args.func(args, client)
    except FeedError as e:
        logger.debug("Command {} failed: {!r}", args.command, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await transport.close()

    print(json.dumps(result, indent=2, default=str))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feedsheet",
        description="Read spreadsheets through the legacy spreadsheet feeds",
    )
    parser.add_argument(
        "--auth",
        default=None,
        help="GoogleLogin auth token (defaults to FEEDSHEET_AUTH)",
    )
    parser.add_argument(
        "--golden",
        default=None,
        help="Read feeds from a local golden directory instead of the network",
    )
    parser.add_argument(
        "--json-feed",
        action="store_true",
        help="Request the JSON feed format instead of Atom XML",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log feed requests to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # worksheets subcommand
    ws_parser = subparsers.add_parser("worksheets", help="Show spreadsheet metadata")
    ws_parser.add_argument("spreadsheet", help="Spreadsheet key or URL")
    ws_parser.set_defaults(func=cmd_worksheets)

    # rows subcommand
    rows_parser = subparsers.add_parser("rows", help="Print worksheet rows")
    rows_parser.add_argument("spreadsheet", help="Spreadsheet key or URL")
    rows_parser.add_argument("worksheet", help="Worksheet id")
    rows_parser.add_argument("--start", type=int, default=None, help="1-based start index")
    rows_parser.add_argument("--num", type=int, default=None, help="Maximum number of rows")
    rows_parser.add_argument("--orderby", default=None, help="Column to order by")
    rows_parser.add_argument("--reverse", action="store_true", help="Reverse the order")
    rows_parser.add_argument("--sq", default=None, help="Structured query")
    rows_parser.set_defaults(func=cmd_rows)

    # cells subcommand
    cells_parser = subparsers.add_parser("cells", help="Print worksheet cells")
    cells_parser.add_argument("spreadsheet", help="Spreadsheet key or URL")
    cells_parser.add_argument("worksheet", help="Worksheet id")
    cells_parser.add_argument("--range", default=None, help="A1 range, e.g. A1:C10")
    cells_parser.add_argument("--min-row", type=int, default=None)
    cells_parser.add_argument("--max-row", type=int, default=None)
    cells_parser.add_argument("--min-col", type=int, default=None)
    cells_parser.add_argument("--max-col", type=int, default=None)
    cells_parser.set_defaults(func=cmd_cells)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else get_settings().log_level)
    result: int = asyncio.run(run(args))
    return result


if __name__ == "__main__":
    sys.exit(main())
