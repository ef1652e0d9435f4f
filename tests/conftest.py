from typing import Any, Callable, Generator
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from coreason_dataref.models import DataRef, DataRefType


@pytest.fixture
def mock_upload() -> AsyncMock:
    """Upload function that reports its own, unrelated hash."""
    return AsyncMock(return_value=DataRef(value="blob-address", type=DataRefType.hash, hash="remote-hash"))


@pytest.fixture
def mock_string_upload() -> AsyncMock:
    return AsyncMock(return_value=DataRef(value="https://store/blob", type=DataRefType.url, hash="remote-hash"))


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def clean_env() -> Generator[Any, None, None]:
    with patch.dict("os.environ", {}, clear=True):
        yield
