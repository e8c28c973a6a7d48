"""Shared fixtures for the pdf_harvester test-suite.

The HTTP layer is replaced by a small in-memory stand-in for
``aiohttp.ClientSession``; no real connections are made.
"""

from __future__ import annotations

from typing import Dict, List, Optional

import aiohttp
import pytest

from pdf_harvester.utils.config import HarvestConfig


PDF_BYTES = b"%PDF-1.4\n%fake document\n"


class FakeResponse:
    """Minimal async context manager mimicking ``aiohttp.ClientResponse``."""

    def __init__(
        self,
        status: int = 200,
        body: bytes = PDF_BYTES,
        content_type: Optional[str] = "application/pdf",
        error: Optional[BaseException] = None,
    ) -> None:
        self.status = status
        self._body = body
        self.headers = {"Content-Type": content_type} if content_type else {}
        self._error = error

    async def read(self) -> bytes:
        return self._body

    async def __aenter__(self) -> "FakeResponse":
        if self._error is not None:
            raise self._error
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return False


class FakeSession:
    """Records every GET and answers from a URL -> response table (404 otherwise)."""

    def __init__(self, responses: Optional[Dict[str, FakeResponse]] = None) -> None:
        self.responses = responses or {}
        self.requested: List[str] = []
        self.closed = False

    def get(self, url: str, **kwargs) -> FakeResponse:
        self.requested.append(url)
        return self.responses.get(url, FakeResponse(status=404, body=b"", content_type="text/html"))

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self.closed = True
        return False


def connection_error() -> FakeResponse:
    return FakeResponse(error=aiohttp.ClientConnectionError("connection refused"))


@pytest.fixture()
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def config(tmp_path) -> HarvestConfig:
    """Configuration with every local path inside a temp directory."""
    return HarvestConfig(
        listing_url="https://www.duragloss.com/sds-sheets/",
        base_url="https://www.duragloss.com",
        snapshot_path=str(tmp_path / "listing.html"),
        ledger_path=str(tmp_path / "pdf_links.txt"),
        output_dir=str(tmp_path / "PDFs"),
    )
