"""Shared test fixtures for feedsheet."""

from __future__ import annotations

from pathlib import Path

import pytest

from feedsheet.client import FeedClient
from feedsheet.transport import LocalFileTransport

GOLDEN_DIR = Path(__file__).parent / "golden"


@pytest.fixture
def golden_dir() -> Path:
    return GOLDEN_DIR


@pytest.fixture
def local_transport() -> LocalFileTransport:
    return LocalFileTransport(GOLDEN_DIR)


@pytest.fixture
def client(local_transport: LocalFileTransport) -> FeedClient:
    return FeedClient(local_transport)


@pytest.fixture
def json_client(local_transport: LocalFileTransport) -> FeedClient:
    return FeedClient(local_transport, alt="json")
