from typing import Callable
from unittest.mock import AsyncMock

import httpx
import pytest

from coreason_dataref.config import DataRefConfig
from coreason_dataref.exceptions import UnresolvableReferenceError
from coreason_dataref.models import DataMode, DataRef, DataRefType
from coreason_dataref.resolver import DataRefResolver, DataRefResolverAsync


def serve_text(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, content=b"remote text")


@pytest.mark.asyncio
async def test_resolver_closes_internal_client() -> None:
    resolver = DataRefResolverAsync()
    async with resolver:
        assert not resolver._client.is_closed
    assert resolver._client.is_closed


@pytest.mark.asyncio
async def test_resolver_keeps_injected_client(make_client: Callable[..., httpx.AsyncClient]) -> None:
    client = make_client(serve_text)
    async with DataRefResolverAsync(client=client):
        pass
    assert not client.is_closed
    await client.aclose()


@pytest.mark.asyncio
async def test_offload_uses_configured_threshold(mock_upload: AsyncMock) -> None:
    config = DataRefConfig(max_inline_length=5, _env_file=None)
    async with DataRefResolverAsync(upload=mock_upload, config=config) as resolver:
        result = await resolver.offload({"a": DataRef.from_text("123456"), "b": DataRef.from_text("12345")})
    assert result is not None
    assert result["a"].type == DataRefType.hash
    assert result["b"].value == "12345"
    mock_upload.assert_awaited_once_with(b"123456", name="a")


@pytest.mark.asyncio
async def test_offload_requires_upload() -> None:
    async with DataRefResolverAsync() as resolver:
        with pytest.raises(ValueError):
            await resolver.offload({})


@pytest.mark.asyncio
async def test_to_data_ref_uses_config_ignore_hash(mock_string_upload: AsyncMock) -> None:
    config = DataRefConfig(ignore_hash=True, _env_file=None)
    async with DataRefResolverAsync(config=config) as resolver:
        ref = await resolver.to_data_ref("aGk=", mock_string_upload)
        assert ref.hash is None
        ref = await resolver.to_data_ref("aGk=", mock_string_upload, ignore_hash=False)
        assert ref.hash is not None


@pytest.mark.asyncio
async def test_to_blob_exchanges_hash_refs(make_client: Callable[..., httpx.AsyncClient]) -> None:
    download = AsyncMock(return_value=DataRef.from_url("https://store.example.com/blob"))
    async with make_client(serve_text) as client:
        async with DataRefResolverAsync(download=download, client=client) as resolver:
            blob = await resolver.to_blob(DataRef.from_hash("abc"))
            text = await resolver.materialize(DataRef.from_hash("abc"), DataMode.utf8)
    assert blob.data == b"remote text"
    assert text == "remote text"
    assert download.await_count == 2


@pytest.mark.asyncio
async def test_to_blob_hash_without_download() -> None:
    async with DataRefResolverAsync() as resolver:
        with pytest.raises(UnresolvableReferenceError):
            await resolver.to_blob(DataRef.from_hash("abc"))


@pytest.mark.asyncio
async def test_to_blob_download_returning_hash_fails() -> None:
    download = AsyncMock(return_value=DataRef.from_hash("still-a-hash"))
    async with DataRefResolverAsync(download=download) as resolver:
        with pytest.raises(UnresolvableReferenceError):
            await resolver.to_blob(DataRef.from_hash("abc"))


def test_sync_facade(mock_upload: AsyncMock) -> None:
    resolver = DataRefResolver(upload=mock_upload, config=DataRefConfig(_env_file=None))

    result = resolver.offload({"big": DataRef.from_text("x" * 250)})
    assert result is not None
    assert result["big"].value == "blob-address"

    assert resolver.to_blob(DataRef.from_text("hi")).data == b"hi"
    assert resolver.materialize(DataRef.from_bytes(b"hi"), DataMode.utf8) == "hi"


def test_sync_facade_to_data_ref(mock_string_upload: AsyncMock) -> None:
    resolver = DataRefResolver(config=DataRefConfig(_env_file=None))
    ref = resolver.to_data_ref("A" * 300, mock_string_upload)
    assert ref.value == "https://store/blob"
    mock_string_upload.assert_awaited_once_with("A" * 300)
