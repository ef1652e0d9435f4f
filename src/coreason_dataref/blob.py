# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_dataref

"""Conversion of DataRefs into the bytes they reference."""

from typing import Any

import httpx
from loguru import logger

from coreason_dataref.codec import decode_base64, encode_base64, encode_utf8, to_json_text
from coreason_dataref.exceptions import TransportError, UnresolvableReferenceError
from coreason_dataref.models import DATA_MODE_DEFAULT, Blob, DataMode, DataRef, DataRefType


async def fetch_blob_from_url(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> bytes:
    """Downloads the full body at a URL.

    Args:
        url: The location of the blob.
        client: Optional httpx.AsyncClient for connection pooling. It is not closed.
        timeout: Request timeout in seconds. When None the client decides, and a
            client created here applies no timeout.

    Returns:
        bytes: The raw response body.

    Raises:
        TransportError: On a network error or a non-success status.
    """
    logger.info(f"Fetching blob from {url}")
    owns_client = client is None
    http = client or httpx.AsyncClient(timeout=None)
    try:
        response = await http.get(
            url,
            follow_redirects=True,
            headers={"Content-Type": "application/octet-stream"},
            timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.error(f"Fetching {url} failed with status {e.response.status_code}")
        raise TransportError(
            f"GET {url} returned {e.response.status_code}", url=url, status_code=e.response.status_code
        ) from e
    except httpx.HTTPError as e:
        logger.error(f"Fetching {url} failed: {e}")
        raise TransportError(f"GET {url} failed: {e}", url=url) from e
    finally:
        if owns_client:
            await http.aclose()

    return response.content


async def data_ref_to_blob(
    ref: DataRef,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> Blob:
    """Decodes a DataRef into a Blob of its bytes.

    Args:
        ref: The reference to decode.
        client: Optional httpx.AsyncClient used for url references.
        timeout: Request timeout in seconds for url references.

    Returns:
        Blob: The fully decoded content.

    Raises:
        UnresolvableReferenceError: For hash references, which only the remote store can resolve.
        TransportError: If a url reference cannot be fetched.
        DecodeError: If an inline value is malformed.
    """
    match ref.effective_type:
        case DataRefType.hash:
            raise UnresolvableReferenceError(ref.value)
        case DataRefType.json:
            return Blob(data=encode_utf8(to_json_text(ref.value)), content_type="application/json")
        case DataRefType.utf8:
            return Blob(data=encode_utf8(ref.value), content_type="text/plain; charset=utf-8")
        case DataRefType.url:
            return Blob(data=await fetch_blob_from_url(ref.value, client=client, timeout=timeout))
        case DataRefType.base64:
            return Blob(data=decode_base64(ref.value))


async def materialize(
    ref: DataRef,
    mode: DataMode = DATA_MODE_DEFAULT,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> Any:
    """Returns the referenced data in the form a consumer asked for.

    ``dataref`` returns the reference itself, ``base64`` the base64 text of its
    bytes, ``utf8`` the bytes decoded as text and ``json`` the parsed value.
    """
    if mode == DataMode.dataref:
        return ref
    blob = await data_ref_to_blob(ref, client=client, timeout=timeout)
    if mode == DataMode.utf8:
        return blob.text()
    if mode == DataMode.json:
        return blob.as_json()
    return encode_base64(blob.data)
